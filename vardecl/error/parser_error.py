from dataclasses import dataclass
from typing import List, Optional

from vardecl.error.error import CompilerError, CompilerException
from vardecl.token import Token
from vardecl.type import Type


class ParserException(CompilerException):
    pass


@dataclass
class ParseError(CompilerError):
    nt: Optional[str]
    expected: List[Type]
    got: Optional[Token]

    def __str__(self) -> str:
        after = f"Expected {self.expected_str}"
        if self.got:
            after += f", but got {self.got.text!r} instead"
        else:
            after += ", but reached the end of the input"
        after += f" on {self.span.lines_str} column {self.span.start_col + 1}."

        before = "Unexpected token"
        if self.got is None:
            before = "Unexpected end of input"
        if self.nt:
            before += f" while parsing {self.str_nt}"
        before += f" on {self.span.lines_str}."

        return self.create_error(before, after, class_name="SyntaxError")

    @property
    def expected_str(self) -> str:
        options = [tok_type.article_str() for tok_type in self.expected]
        if len(options) == 1:
            return options[0]
        return ", ".join(options[:-1]) + " or " + options[-1]


@dataclass
class TrailingInputError(CompilerError):
    got: Token

    def __str__(self) -> str:
        return self.create_error(
            f"Unexpected {self.got.text!r} after the end of the declaration block on {self.span.lines_str}.",
            class_name="SyntaxError",
        )
