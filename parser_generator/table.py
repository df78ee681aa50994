from __future__ import annotations

import logging
from types import MappingProxyType
from typing import FrozenSet, Mapping, Optional, Tuple

from parser_generator.analysis import GrammarAnalysis
from parser_generator.errors import GrammarNotLL1
from parser_generator.grammar import Grammar, Production
from parser_generator.symbol import Symbol

logger = logging.getLogger(__name__)


class ParseTable:
    """Immutable LL(1) parsing table, mapping (non-terminal, lookahead) to a production.

    Use `ParseTable.build(analysis)`, which refuses grammars that are not LL(1).
    """

    def __init__(
        self,
        analysis: GrammarAnalysis,
        entries: Mapping[Tuple[Symbol, Symbol], Production],
    ) -> None:
        self.analysis = analysis
        self.entries = MappingProxyType(dict(entries))

    @property
    def grammar(self) -> Grammar:
        return self.analysis.grammar

    @classmethod
    def build(cls, analysis: GrammarAnalysis) -> ParseTable:
        conflicts = tuple(analysis.conflicts())
        if conflicts:
            for conflict in conflicts:
                logger.warning("LL(1) conflict: %s", conflict)
            raise GrammarNotLL1(conflicts, analysis)

        entries = {}
        for production, lookahead in analysis.select.items():
            for terminal in lookahead:
                entries[(production.lhs, terminal)] = production

        logger.debug("Built LL(1) table with %d entries", len(entries))
        return cls(analysis, entries)

    def get(self, nonterminal: Symbol, terminal: Symbol) -> Optional[Production]:
        return self.entries.get((nonterminal, terminal))

    def expected(self, nonterminal: Symbol) -> FrozenSet[Symbol]:
        """The lookahead terminals for which `nonterminal` has an entry."""
        return frozenset(
            terminal for (nt, terminal) in self.entries if nt == nonterminal
        )

    def __len__(self) -> int:
        return len(self.entries)
