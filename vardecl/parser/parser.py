import logging
from typing import List

from parser_generator.errors import ParseSyntaxError, SyntaxErrorKind
from parser_generator.parser import GrammarParser
from vardecl.error.communicator import Communicator
from vardecl.grammar import load_grammar, terminal_mapping, type_mapping
from vardecl.token import Token
from vardecl.tree.tree import DeclBlockNode
from vardecl.util import end_of_program

from vardecl.error.parser_error import (  # isort:skip
    ParseError,
    ParserException,
    TrailingInputError,
)
from vardecl.parser.factory import (  # isort:skip
    DeclBlockFactory,
    DeclLineFactory,
    ListFactory,
)

logger = logging.getLogger(__name__)


def classify(token: Token) -> str:
    # Reserved words are no terminal of the grammar, so no production accepts them
    return terminal_mapping.get(token.type, token.type.value)


class Parser:
    def __init__(self, program: str) -> None:
        self.og_program = program

    def parse(self, tokens: List[Token]) -> DeclBlockNode:
        """Given a list of Tokens from the scanner, apply the declaration grammar
        to produce an Abstract Syntax Tree.

        Args:
            tokens (List[Token]): A list of tokens, produced by `Scanner(program).scan()`

        Returns:
            DeclBlockNode: The root of the AST.
        """
        # Get mappings of non-terminals to functions to generate nodes
        non_terminal_factory_mapping = {
            "S": DeclBlockFactory().build,
            "D": ListFactory().build,
            "D'": ListFactory().build,
            "D1": DeclLineFactory().build,
            "I": ListFactory().build,
            "I'": ListFactory().build,
        }
        parser = GrammarParser(
            load_grammar().table,
            classify=classify,
            non_terminal_factory_mapping=non_terminal_factory_mapping,
        )

        try:
            result = parser.parse(tokens)
        except ParseSyntaxError as error:
            logger.debug("Rejected: %s", error)
            self.report(error)
            Communicator.communicate(ParserException)

        logger.debug("Accepted %d tokens", len(result.tokens))
        return result.tree

    def report(self, error: ParseSyntaxError) -> None:
        """Convert an error from the table-driven parser into a readable ParseError."""
        got = error.token
        if got is not None:
            span = got.span
        else:
            span = end_of_program(self.og_program)

        if error.kind is SyntaxErrorKind.TRAILING_INPUT:
            TrailingInputError(self.og_program, span, got)
            return

        expected = [type_mapping[terminal] for terminal in sorted(error.expected)]
        ParseError(self.og_program, span, error.nonterminal, expected, got)
