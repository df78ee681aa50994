from dataclasses import dataclass

from vardecl.error.error import CompilerError, CompilerException
from vardecl.token import Token


class AnalysisException(CompilerException):
    pass


@dataclass
class DuplicateIdentifierError(CompilerError):
    identifier: Token
    original: Token

    def __str__(self) -> str:
        return self.create_error(
            f"Duplicate identifier {self.identifier.text!r} on {self.span.lines_str}.",
            f"It was already declared as {self.original.text!r} on {self.original.span.lines_str}.",
            class_name="DeclarationError",
        )
