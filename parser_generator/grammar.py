from __future__ import annotations

from dataclasses import dataclass, field
from functools import cached_property
from os.path import abspath
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Tuple

from parser_generator.errors import MalformedGrammar
from parser_generator.symbol import END_MARKER, Symbol
from parser_generator.type_vars import Classifier, Factory


@dataclass(frozen=True)
class Production:
    lhs: Symbol
    rhs: Tuple[Symbol, ...]
    index: int = field(default=0, compare=False)

    @property
    def is_empty(self) -> bool:
        return not self.rhs

    def __str__(self) -> str:
        rhs = " ".join(symbol.name for symbol in self.rhs) if self.rhs else "ε"
        return f"{self.lhs.name} -> {rhs}"


@dataclass(frozen=True)
class Grammar:
    """An immutable context-free grammar with a distinguished start symbol.

    Productions keep the order in which they were declared. That order carries no
    meaning for the analysis, but makes tables and diagnostics deterministic.

    Args:
        start (Symbol): The start non-terminal.
        productions (Iterable[Production]): All productions, in declaration order.

    Raises:
        MalformedGrammar: If a non-terminal is used but never defined, if a non-terminal
            declares the same alternative twice (e.g. two ε alternatives), or if the start
            symbol has no productions.
    """

    start: Symbol
    productions: Tuple[Production, ...]

    def __post_init__(self) -> None:
        # Normalise the indices so they always follow declaration order
        productions = tuple(
            Production(production.lhs, tuple(production.rhs), index)
            for index, production in enumerate(self.productions)
        )
        object.__setattr__(self, "productions", productions)
        self._validate()

    @classmethod
    def from_string(
        cls,
        grammar_str: str,
        start: Optional[str] = None,
        terminal_mapping: Optional[Dict[str, str]] = None,
    ) -> Grammar:
        from parser_generator.generator import GrammarGenerator

        return GrammarGenerator(
            grammar_str=grammar_str,
            start=start,
            terminal_mapping=terminal_mapping or {},
        ).get_grammar()

    @classmethod
    def from_file(
        cls,
        grammar_file: str,
        start: Optional[str] = None,
        terminal_mapping: Optional[Dict[str, str]] = None,
    ) -> Grammar:
        from parser_generator.generator import GrammarGenerator

        return GrammarGenerator(
            grammar_file=abspath(grammar_file),
            start=start,
            terminal_mapping=terminal_mapping or {},
        ).get_grammar()

    def _validate(self) -> None:
        if not self.productions:
            raise MalformedGrammar("A grammar needs at least one production.")

        if not self.start.is_nonterminal:
            raise MalformedGrammar(
                f"The start symbol {self.start.name!r} must be a non-terminal."
            )

        defined = set()
        for production in self.productions:
            if not production.lhs.is_nonterminal:
                raise MalformedGrammar(
                    f"The left hand side of {str(production)!r} must be a non-terminal."
                )
            if any(symbol.is_empty for symbol in production.rhs):
                raise MalformedGrammar(
                    f"ε may only be used as a complete alternative, not inside {str(production)!r}."
                )
            defined.add(production.lhs)

        if self.start not in defined:
            raise MalformedGrammar(
                f"The start symbol {self.start.name!r} has no productions."
            )

        for production in self.productions:
            for symbol in production.rhs:
                if symbol.is_nonterminal and symbol not in defined:
                    raise MalformedGrammar(
                        f"Undefined non-terminal {symbol.name!r} used in {str(production)!r}."
                    )

        # The same alternative twice (most commonly two ε alternatives) is ambiguous
        seen = set()
        for production in self.productions:
            if production in seen:
                if production.is_empty:
                    raise MalformedGrammar(
                        f"Non-terminal {production.lhs.name!r} declares more than one ε alternative."
                    )
                raise MalformedGrammar(
                    f"Non-terminal {production.lhs.name!r} declares {str(production)!r} more than once."
                )
            seen.add(production)

    @cached_property
    def nonterminals(self) -> Tuple[Symbol, ...]:
        return tuple(dict.fromkeys(production.lhs for production in self.productions))

    @cached_property
    def terminals(self) -> Tuple[Symbol, ...]:
        terminals = dict.fromkeys(
            symbol
            for production in self.productions
            for symbol in production.rhs
            if symbol.is_terminal and symbol != END_MARKER
        )
        return (*terminals, END_MARKER)

    @cached_property
    def alternatives(self) -> Mapping[Symbol, Tuple[Production, ...]]:
        grouped = {nt: [] for nt in self.nonterminals}
        for production in self.productions:
            grouped[production.lhs].append(production)
        return MappingProxyType({nt: tuple(prods) for nt, prods in grouped.items()})

    def productions_of(self, nonterminal: Symbol | str) -> Tuple[Production, ...]:
        if isinstance(nonterminal, str):
            nonterminal = Symbol.nonterminal(nonterminal)
        try:
            return self.alternatives[nonterminal]
        except KeyError:
            raise KeyError(f"Unknown non-terminal {nonterminal.name!r}") from None

    def production(self, text: str) -> Production:
        """Look up a production by its printed form, e.g. `"S -> Var D"` or `"S -> ε"`."""
        for production in self.productions:
            if str(production) == text:
                return production
        raise KeyError(f"Unknown production {text!r}")

    # Derived artifacts, computed once per grammar
    @cached_property
    def analysis(self):
        from parser_generator.analysis import GrammarAnalysis

        return GrammarAnalysis(self)

    @cached_property
    def table(self):
        from parser_generator.table import ParseTable

        return ParseTable.build(self.analysis)

    def parser(
        self,
        classify: Optional[Classifier] = None,
        non_terminal_factory_mapping: Optional[Dict[str, Factory]] = None,
        non_terminal_default_factory: Optional[Factory] = None,
    ):
        from parser_generator.parser import GrammarParser

        return GrammarParser(
            self.table,
            classify=classify,
            non_terminal_factory_mapping=non_terminal_factory_mapping or {},
            non_terminal_default_factory=non_terminal_default_factory,
        )

    def __str__(self) -> str:
        return "\n".join(str(production) for production in self.productions)


def productions_from(
    rules: Iterable[Tuple[str, Iterable[Symbol]]]
) -> Tuple[Production, ...]:
    return tuple(
        Production(Symbol.nonterminal(lhs), tuple(rhs), index)
        for index, (lhs, rhs) in enumerate(rules)
    )
