from __future__ import annotations

import logging
from functools import cached_property
from itertools import combinations
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, Iterator, Mapping, Optional, Set

from parser_generator.errors import Conflict
from parser_generator.grammar import Grammar, Production
from parser_generator.symbol import END_MARKER, EPSILON, Symbol

logger = logging.getLogger(__name__)

SymbolSet = FrozenSet[Symbol]


def _iteration_bound(grammar: Grammar) -> int:
    # Every round that changes something adds at least one element to some set
    return len(grammar.nonterminals) * (len(grammar.terminals) + 1) + 1


def compute_nullable(grammar: Grammar) -> SymbolSet:
    """Compute the non-terminals that derive the empty string.

    A non-terminal is nullable if one of its productions has a right hand side that is
    empty, or that consists solely of nullable non-terminals.
    """
    nullable: Set[Symbol] = set()
    changed = True
    rounds = 0
    while changed:
        changed = False
        rounds += 1
        for production in grammar.productions:
            if production.lhs in nullable:
                continue
            if all(symbol in nullable for symbol in production.rhs):
                nullable.add(production.lhs)
                changed = True
    logger.debug("Nullable set stable after %d rounds", rounds)
    return frozenset(nullable)


def first_of_sequence(
    symbols: Iterable[Symbol], first: Mapping[Symbol, SymbolSet]
) -> SymbolSet:
    """First set of a string of symbols, containing ε iff every symbol can vanish."""
    result: Set[Symbol] = set()
    for symbol in symbols:
        symbol_first = first[symbol] if symbol.is_nonterminal else {symbol}
        result |= symbol_first - {EPSILON}
        if EPSILON not in symbol_first:
            return frozenset(result)
    result.add(EPSILON)
    return frozenset(result)


def compute_first(
    grammar: Grammar,
    nullable: SymbolSet,
    seed: Optional[Mapping[Symbol, SymbolSet]] = None,
) -> Mapping[Symbol, SymbolSet]:
    """Compute First sets for every terminal and non-terminal.

    Args:
        grammar (Grammar): The grammar to analyse.
        nullable (SymbolSet): Result of `compute_nullable(grammar)`.
        seed (Optional[Mapping[Symbol, SymbolSet]]): First sets to continue from.
            Starting from an earlier result must reproduce that result.

    Returns:
        Mapping[Symbol, SymbolSet]: Read-only mapping from symbol to its First set.
    """
    first: Dict[Symbol, Set[Symbol]] = {
        terminal: {terminal} for terminal in grammar.terminals
    }
    for nonterminal in grammar.nonterminals:
        first[nonterminal] = set(seed[nonterminal]) if seed else set()

    bound = _iteration_bound(grammar)
    changed = True
    rounds = 0
    while changed:
        changed = False
        rounds += 1
        if rounds > bound:
            raise RuntimeError(f"First sets did not converge within {bound} rounds.")

        for production in grammar.productions:
            target = first[production.lhs]
            before = len(target)
            for symbol in production.rhs:
                target |= first[symbol] - {EPSILON}
                if symbol not in nullable:
                    break
            else:
                # The whole right hand side may vanish
                target.add(EPSILON)
            if len(target) != before:
                changed = True

    logger.debug("First sets stable after %d rounds", rounds)
    return MappingProxyType({symbol: frozenset(s) for symbol, s in first.items()})


def compute_follow(
    grammar: Grammar, first: Mapping[Symbol, SymbolSet]
) -> Mapping[Symbol, SymbolSet]:
    """Compute Follow sets for every non-terminal, seeded with Follow(start) = {#}."""
    follow: Dict[Symbol, Set[Symbol]] = {nt: set() for nt in grammar.nonterminals}
    follow[grammar.start].add(END_MARKER)

    bound = _iteration_bound(grammar)
    changed = True
    rounds = 0
    while changed:
        changed = False
        rounds += 1
        if rounds > bound:
            raise RuntimeError(f"Follow sets did not converge within {bound} rounds.")

        for production in grammar.productions:
            for k, symbol in enumerate(production.rhs):
                if not symbol.is_nonterminal:
                    continue
                target = follow[symbol]
                before = len(target)

                remainder = first_of_sequence(production.rhs[k + 1 :], first)
                target |= remainder - {EPSILON}
                if EPSILON in remainder:
                    target |= follow[production.lhs]

                if len(target) != before:
                    changed = True

    logger.debug("Follow sets stable after %d rounds", rounds)
    return MappingProxyType({nt: frozenset(s) for nt, s in follow.items()})


def compute_select(
    grammar: Grammar,
    first: Mapping[Symbol, SymbolSet],
    follow: Mapping[Symbol, SymbolSet],
) -> Mapping[Production, SymbolSet]:
    select = {}
    for production in grammar.productions:
        production_first = first_of_sequence(production.rhs, first)
        lookahead = production_first - {EPSILON}
        if EPSILON in production_first:
            lookahead |= follow[production.lhs]
        select[production] = frozenset(lookahead)
    return MappingProxyType(select)


class GrammarAnalysis:
    """Nullable, First, Follow and Select sets of a grammar.

    Each set is computed on first access and cached, as the grammar can not change.
    """

    def __init__(self, grammar: Grammar) -> None:
        self.grammar = grammar

    @cached_property
    def nullable(self) -> SymbolSet:
        return compute_nullable(self.grammar)

    @cached_property
    def first(self) -> Mapping[Symbol, SymbolSet]:
        return compute_first(self.grammar, self.nullable)

    @cached_property
    def follow(self) -> Mapping[Symbol, SymbolSet]:
        return compute_follow(self.grammar, self.first)

    @cached_property
    def select(self) -> Mapping[Production, SymbolSet]:
        return compute_select(self.grammar, self.first, self.follow)

    def first_of(self, symbols: Iterable[Symbol]) -> SymbolSet:
        return first_of_sequence(symbols, self.first)

    def conflicts(self) -> Iterator[Conflict]:
        """Yield every pair of alternatives whose Select sets overlap."""
        for nonterminal, productions in self.grammar.alternatives.items():
            for left, right in combinations(productions, 2):
                overlap = self.select[left] & self.select[right]
                if overlap:
                    yield Conflict(nonterminal, (left, right), frozenset(overlap))

    @property
    def is_ll1(self) -> bool:
        return next(self.conflicts(), None) is None
