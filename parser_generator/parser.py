from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from parser_generator.errors import ParseSyntaxError, SyntaxErrorKind
from parser_generator.grammar import Production
from parser_generator.symbol import END_MARKER, Symbol
from parser_generator.table import ParseTable
from parser_generator.type_vars import NT, Classifier, Factory, L, N

logger = logging.getLogger(__name__)


@dataclass
class ParseNode:
    symbol: str
    children: List = field(default_factory=list)


@dataclass
class ParseResult:
    # The tokens consumed by terminal matches, in input order
    tokens: List[L]
    # The productions of the leftmost derivation, in the order they were applied
    derivation: Tuple[Production, ...]
    tree: N = field(repr=False, default=None)


@dataclass
class GrammarParser:
    """Deterministic table-driven parser for an LL(1) grammar.

    The parser itself holds no state between calls to `parse`, so one instance can be
    shared freely.
    """

    table: ParseTable
    classify: Optional[Classifier] = None
    non_terminal_factory_mapping: Dict[NT, Factory] = field(default_factory=dict)
    non_terminal_default_factory: Optional[Factory] = None

    def __post_init__(self):
        if self.classify is None:
            self.classify = str

    def terminal_of(self, tokens: Sequence[L], i: int) -> Symbol:
        # Past the last token we see the implicit end-marker
        if i < len(tokens):
            return Symbol.terminal(self.classify(tokens[i]))
        return END_MARKER

    def parse(self, tokens: Sequence[L]) -> ParseResult:
        """Parse `tokens`, optionally terminated by an end-marker token.

        Args:
            tokens (Sequence[L]): The already classified input tokens.

        Raises:
            ParseSyntaxError: On the first token that can not be matched or expanded.

        Returns:
            ParseResult: The matched tokens, the leftmost derivation and the built tree.
        """
        stack: List[Symbol] = [END_MARKER, self.table.grammar.start]
        matched: List[L] = []
        derivation: List[Production] = []
        i = 0

        while stack:
            top = stack.pop()
            lookahead = self.terminal_of(tokens, i)
            token = tokens[i] if i < len(tokens) else None
            logger.debug("Stack top %s, lookahead %s at %d", top, lookahead, i)

            if top.is_terminal:
                if top != lookahead:
                    raise ParseSyntaxError(
                        SyntaxErrorKind.UNEXPECTED_TOKEN,
                        i,
                        token,
                        lookahead.name,
                        {top.name},
                    )
                # The implicit end-marker is not a token that can be consumed
                if token is not None:
                    matched.append(token)
                    i += 1
                continue

            production = self.table.get(top, lookahead)
            if production is None:
                raise ParseSyntaxError(
                    SyntaxErrorKind.NO_PRODUCTION,
                    i,
                    token,
                    lookahead.name,
                    {terminal.name for terminal in self.table.expected(top)},
                    nonterminal=top.name,
                )
            derivation.append(production)
            stack.extend(reversed(production.rhs))

        if i < len(tokens):
            raise ParseSyntaxError(
                SyntaxErrorKind.TRAILING_INPUT,
                i,
                tokens[i],
                self.terminal_of(tokens, i).name,
                {END_MARKER.name},
            )

        leaves = iter(
            token for token in matched if self.classify(token) != END_MARKER.name
        )
        tree = self.build(iter(derivation), leaves)
        return ParseResult(matched, tuple(derivation), tree)

    def build(self, derivation: Iterator[Production], leaves: Iterator[L]) -> N | L:
        """Replay the leftmost derivation to build a tree, applying the node factories.

        Each frame on the stack is a production whose children are still being collected.
        Once all children are present the node is built and handed to the frame below,
        so deep right-recursive lists do not hit the recursion limit.
        """
        stack: List[Tuple[Production, List]] = [(next(derivation), [])]
        while True:
            production, children = stack[-1]
            if len(children) < len(production.rhs):
                child = production.rhs[len(children)]
                if child.is_terminal:
                    children.append(next(leaves))
                else:
                    stack.append((next(derivation), []))
                continue

            stack.pop()
            node = self.make_node(production.lhs, children)
            if not stack:
                return node
            stack[-1][1].append(node)

    def make_node(self, symbol: Symbol, children: List) -> N:
        factory = self.non_terminal_factory_mapping.get(
            symbol.name, self.non_terminal_default_factory
        )
        if factory is None:
            return ParseNode(symbol.name, children)
        return factory(children)
