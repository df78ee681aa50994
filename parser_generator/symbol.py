from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class SymbolKind(Enum):
    TERMINAL = auto()
    NONTERMINAL = auto()
    EMPTY = auto()


@dataclass(frozen=True)
class Symbol:
    """A grammar symbol, tagged with its kind.

    Terminals and non-terminals share one type so that they can be mixed freely
    in right-hand sides and set entries. The empty string ε only shows up in
    First sets, and is represented by `EPSILON`.
    """

    name: str
    kind: SymbolKind

    @classmethod
    def terminal(cls, name: str) -> Symbol:
        return cls(name, SymbolKind.TERMINAL)

    @classmethod
    def nonterminal(cls, name: str) -> Symbol:
        return cls(name, SymbolKind.NONTERMINAL)

    @property
    def is_terminal(self) -> bool:
        return self.kind is SymbolKind.TERMINAL

    @property
    def is_nonterminal(self) -> bool:
        return self.kind is SymbolKind.NONTERMINAL

    @property
    def is_empty(self) -> bool:
        return self.kind is SymbolKind.EMPTY

    def __str__(self) -> str:
        return self.name


EPSILON = Symbol("ε", SymbolKind.EMPTY)
END_MARKER = Symbol.terminal("#")


def names(symbols) -> set[str]:
    return {symbol.name for symbol in symbols}
