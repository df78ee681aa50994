from dataclasses import dataclass

from vardecl.error.communicator import Communicator, ErrorRaiser
from vardecl.util import Span


# Python exceptions to differentiate the stage in which errors are thrown
class CompilerException(Exception):
    pass


@dataclass
class CompilerError:
    program: str
    span: Span

    # Creating an error registers it, it is raised later by `Communicator.communicate`
    def __post_init__(self) -> None:
        ErrorRaiser.ERRORS.append(self)

    def create_error(self, before: str = "", after: str = "", class_name="CompilerError"):
        return Communicator.create_message(
            self.program, self.span, class_name, before, after
        )

    # The source text within the span of the error
    @property
    def error_chars(self) -> str:
        error_line = self.program.splitlines()[self.span.start_ln - 1]
        return error_line[self.span.start_col : self.span.end_col]

    @property
    def str_nt(self) -> str:
        match self.nt:
            case "S":
                return "a declaration block"
            case "D" | "D'":
                return "a list of declarations"
            case "D1":
                return "a declaration"
            case "I" | "I'":
                return "an identifier list"
        raise ValueError(f"No description of non-terminal {self.nt!r}.")
