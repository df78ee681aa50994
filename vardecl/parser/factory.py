from dataclasses import dataclass, field
from typing import List

from vardecl.token import Token
from vardecl.tree.tree import DeclBlockNode, DeclLineNode, Node
from vardecl.type import Type
from vardecl.util import Span


@dataclass
class NodeFactory:
    """Turns the children of one expanded non-terminal into a node.

    `build` is passed as the factory of a non-terminal to the LL(1) parser, which calls
    it with the already built children of the applied production.
    """

    children: List[Node | Token] = field(kw_only=True, default_factory=list)

    @property
    def span(self) -> Span:
        if not self.children:
            return Span(0, (0, 0))
        return self.children[0].span & self.children[-1].span

    def build(self, children):
        self.children = children


class DeclBlockFactory(NodeFactory):
    # S ::= 'Var' D | ε
    def build(self, children):
        super().build(children)
        match children:
            case []:
                return DeclBlockNode([], span=self.span)
            case [Token(type=Type.VAR) as var, lines]:
                return DeclBlockNode(lines, span=var.span & lines[-1].span)
        raise ValueError(f"Can not build a declaration block from {children!r}.")


class DeclLineFactory(NodeFactory):
    # D1 ::= I ':' 't' ';'
    def build(self, children):
        super().build(children)
        match children:
            case [ids, Token(type=Type.COLON), Token(type=Type.TYPE) as _type, semicolon]:
                return DeclLineNode(ids, _type, span=ids[0].span & semicolon.span)
        raise ValueError(f"Can not build a declaration from {children!r}.")


class ListFactory(NodeFactory):
    """Flatten right-recursive list productions, dropping separators.

    D ::= D1 D', D' ::= D1 D' | ε, I ::= 'i' I' and I' ::= ',' 'i' I' | ε all become a
    plain list of the listed nodes or tokens.
    """

    def build(self, children):
        super().build(children)
        match children:
            case []:
                return []
            case [Token(type=Type.COMMA), item, rest]:
                return [item, *rest]
            case [item, rest]:
                return [item, *rest]
        raise ValueError(f"Can not build a list from {children!r}.")
