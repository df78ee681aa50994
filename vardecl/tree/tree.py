from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List

from vardecl.token import Token
from vardecl.util import Span


@dataclass
class Node:
    span: Span = field(repr=False, kw_only=True, compare=False, default=None)

    def __str__(self) -> str:
        from vardecl.tree.printer import Printer

        printer = Printer()
        return printer.print(self)


@dataclass
class DeclLineNode(Node):
    ids: List[Token]
    type: Token


@dataclass
class DeclBlockNode(Node):
    lines: List[DeclLineNode]

    @property
    def identifiers(self) -> Iterator[Token]:
        for line in self.lines:
            yield from line.ids
