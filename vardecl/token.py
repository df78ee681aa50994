from __future__ import annotations

from dataclasses import dataclass, field

from vardecl.type import Type
from vardecl.util import Span


@dataclass
class Token:
    """A classified piece of source text. Tokens compare by text and type, not by position."""

    text: str
    type: Type = field(repr=False)
    span: Span = field(repr=False, default_factory=Span.default, compare=False)

    def __post_init__(self) -> None:
        # The scanner passes the name of the matched regex group
        if isinstance(self.type, str):
            self.type = Type[self.type]

    def __hash__(self) -> int:
        return hash((self.text, self.type))

    def __str__(self) -> str:
        return self.text
