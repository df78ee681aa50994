from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, FrozenSet, Tuple

if TYPE_CHECKING:
    from parser_generator.analysis import GrammarAnalysis
    from parser_generator.grammar import Production
    from parser_generator.symbol import Symbol


# Python exceptions to differentiate the stage in which grammar errors are thrown
class GrammarException(Exception):
    pass


class MalformedGrammar(GrammarException):
    pass


@dataclass(frozen=True)
class Conflict:
    nonterminal: Symbol
    productions: Tuple[Production, Production]
    terminals: FrozenSet[Symbol]

    def __str__(self) -> str:
        first, second = self.productions
        overlap = ", ".join(sorted(repr(terminal.name) for terminal in self.terminals))
        return (
            f"{first} and {second} both select on {overlap} "
            f"for non-terminal {self.nonterminal.name!r}."
        )


class GrammarNotLL1(GrammarException):
    def __init__(self, conflicts: Tuple[Conflict, ...], analysis: GrammarAnalysis):
        self.conflicts = tuple(conflicts)
        # Keep the analysis, so the First/Follow/Select tables can still be reported
        self.analysis = analysis
        super().__init__(
            "Grammar is not LL(1):\n" + "\n".join(f"  {c}" for c in self.conflicts)
        )


class SyntaxErrorKind(Enum):
    UNEXPECTED_TOKEN = "unexpected token"
    NO_PRODUCTION = "no applicable production"
    TRAILING_INPUT = "input after end-marker"


class ParseSyntaxError(GrammarException):
    def __init__(
        self,
        kind: SyntaxErrorKind,
        position: int,
        token,
        terminal: str,
        expected: FrozenSet[str],
        nonterminal: str = None,
    ):
        self.kind = kind
        # Index of the offending token, equal to the number of tokens for the implicit end-marker
        self.position = position
        # The offending token, None for the implicit end-marker
        self.token = token
        self.terminal = terminal
        self.expected = frozenset(expected)
        self.nonterminal = nonterminal
        super().__init__(
            f"{kind.value} {terminal!r} at position {position}, "
            f"expected one of {sorted(self.expected)}"
        )
