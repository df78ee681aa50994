from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass
class Span:
    """Location of a token or node: the 1-based line(s) and the 0-based column range.

    A single line number is widened to a (start, end) pair, so `Span(2, (4, 5))`
    covers columns 4 up to 5 on line 2.
    """

    ln: int | Tuple[int, int]
    col: Tuple[int, int]

    def __post_init__(self) -> None:
        if isinstance(self.ln, int):
            self.ln = (self.ln, self.ln)

    @property
    def start_ln(self) -> int:
        return self.ln[0]

    @property
    def end_ln(self) -> int:
        return self.ln[1]

    @property
    def start_col(self) -> int:
        return self.col[0]

    @property
    def end_col(self) -> int:
        return self.col[1]

    @property
    def multiline(self) -> bool:
        return self.start_ln != self.end_ln

    @property
    def lines_str(self) -> str:
        if self.multiline:
            return f"lines [{self.start_ln}-{self.end_ln}]"
        return f"line [{self.start_ln}]"

    @classmethod
    def default(cls) -> Span:
        return cls(-1, (0, -1))

    def __and__(self, other: Span) -> Span:
        # The smallest span covering both, compared as (line, column) positions
        start = min((self.start_ln, self.start_col), (other.start_ln, other.start_col))
        end = max((self.end_ln, self.end_col), (other.end_ln, other.end_col))
        return Span((start[0], end[0]), (start[1], end[1]))


def end_of_program(program: str) -> Span:
    """A zero-width span just after the last character of the program."""
    lines = program.splitlines() or [""]
    return Span(len(lines), (len(lines[-1]), len(lines[-1])))


class Colors:
    RED = "\033[31m"
    ENDC = "\033[m"
    GREEN = "\033[32m"
