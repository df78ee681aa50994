from functools import lru_cache

from parser_generator.grammar import Grammar
from vardecl.type import Type

# The variable declaration block, e.g.
#   var a, b : integer;
#       c : real;
GRAMMAR = r"""
S   ::= 'Var' D
      | ε
D   ::= D1 D'
D'  ::= D1 D'
      | ε
D1  ::= I ':' 't' ';'
I   ::= 'i' I'
I'  ::= ',' 'i' I'
      | ε
"""

START_NON_TERMINAL = "S"

# Mapping of token types onto the terminals of the grammar
terminal_mapping = {
    Type.VAR: "Var",
    Type.TYPE: "t",
    Type.ID: "i",
    Type.COMMA: ",",
    Type.COLON: ":",
    Type.SEMICOLON: ";",
    Type.END: "#",
}

# And back, to describe expected terminals in error messages
type_mapping = {terminal: tok_type for tok_type, terminal in terminal_mapping.items()}


@lru_cache(maxsize=None)
def load_grammar() -> Grammar:
    return Grammar.from_string(GRAMMAR, start=START_NON_TERMINAL)
