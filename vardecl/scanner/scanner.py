import re
from typing import List

from vardecl.error.communicator import Communicator
from vardecl.token import Token
from vardecl.util import Span

from vardecl.error.scanner_error import (  # isort:skip
    DanglingMultiLineCommentError,
    ScannerException,
    UnexpectedCharacterError,
)


class Scanner:
    def __init__(self, program: str) -> None:
        self.og_program = program
        self.preprocessed = None

        # Keywords are case insensitive, identifiers keep their spelling.
        # Reserved words of the statement language may not be used as identifiers
        self.pattern = re.compile(
            r"""
                (?P<COMMENT_OPEN>\/\*)|
                (?P<COMMENT_CLOSE>\*\/)|
                (?P<COMMA>\,)|
                (?P<COLON>\:)|
                (?P<SEMICOLON>\;)|
                (?P<END>\#)|
                (?P<VAR>(?i:\bvar\b))|
                (?P<TYPE>(?i:\b(?:integer|longint|bool|real)\b))|
                (?P<KEYWORD>(?i:\b(?:if|then|else|while|do|begin|end|and|or)\b))|
                (?P<ID>\b[a-zA-Z][a-zA-Z0-9]*\b)|
                (?P<SPACE>[\ \r\t\f\v\n])|
                (?P<ERROR>.)
            """,
            flags=re.X,
        )
        self.comment_pattern = re.compile(r"//[^\n]*|/\*.*?\*/", flags=re.S)

    def scan(self) -> List[Token]:
        """Extract the list of tokens from the program passed to `Scanner(program)`.

        Alternatively, Scanner errors may be raised if relevant, i.e. on illegal characters.

        Returns:
            List[Token]: A list of Token instances
        """
        # Remove comments first
        self.preprocessed = self.remove_comments(self.og_program)
        lines = self.preprocessed.splitlines()

        # Extract the tokens from the lines line by line
        tokens = [
            token
            for line_no, line in enumerate(lines, start=1)
            for token in self.scan_line(line, line_no)
        ]

        # Raise all errors, if any, that may have accumulated during `scan_line`.
        Communicator.communicate(ScannerException)
        return tokens

    def scan_line(self, line: str, line_no: int) -> List[Token]:
        tokens = []
        for match in self.pattern.finditer(line):
            span = Span(line_no, match.span())
            match match.lastgroup:
                case "SPACE":
                    continue
                case "ERROR":
                    UnexpectedCharacterError(self.og_program, span)
                    continue
                case ("COMMENT_OPEN" | "COMMENT_CLOSE"):
                    DanglingMultiLineCommentError(self.og_program, span)
                    continue

            tokens.append(Token(match[0], match.lastgroup, span))
        return tokens

    def remove_comments(self, program: str) -> str:
        """Replace all commented out code in the program with spaces.

        Line comments run from `//` up to the end of the line, block comments from `/*`
        up to the first `*/`. Whichever opens first wins, so `//` within a block comment
        and `/*` within a line comment have no effect. A block comment that is never
        closed is left in place, for `scan_line` to report.

        Newlines are kept and everything else becomes a space, to preserve the location
        information of the uncommented code.

        Args:
            program (str): The input program as a string.

        Returns:
            str: The program with comments replaced by spaces.
        """
        return self.comment_pattern.sub(
            lambda match: re.sub("[^\r\n]", " ", match[0]), program
        )
