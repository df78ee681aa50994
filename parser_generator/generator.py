import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from parser_generator.errors import MalformedGrammar
from parser_generator.grammar import Grammar, productions_from
from parser_generator.symbol import Symbol
from parser_generator.type_vars import NT, T

logger = logging.getLogger(__name__)


def open_file(filename: str) -> str:
    with open(filename, "r", encoding="utf8") as f:
        return f.read()


@dataclass
class GrammarGenerator:
    """Convert grammar text into a `Grammar`.

    The grammar text consists of rules of the form `Name ::= alternative | alternative`,
    which may span several lines. Quoted symbols are terminals, unquoted names are
    non-terminals, and `ε` (or an empty alternative) is the empty right hand side.
    """

    grammar_str: str = None
    grammar_file: str = None
    start: Optional[NT] = None
    terminal_mapping: Dict[T, T] = field(repr=False, default_factory=dict)

    def __post_init__(self) -> None:
        if not self.grammar_file and self.grammar_str is None:
            raise MalformedGrammar("Must provide either grammar_str or grammar_file.")

        # If there is a grammar file provided:
        if self.grammar_file:
            self.grammar_str = open_file(self.grammar_file)

        self.symbol_pattern = re.compile(
            r"""
                (?P<TERMINAL>'(?:[^'\\\n]|\\.)+')|
                (?P<OR>\|)|
                (?P<EMPTY>ε)|
                (?P<NON_TERMINAL>\w+'*)|
                (?P<SPACE>\s+)|
                (?P<ERROR>.)
            """,
            flags=re.X,
        )

        # Convert string to structured data
        self.grammar = self._grammar_from_string()

    # Getter method
    def get_grammar(self) -> Grammar:
        return self.grammar

    # Splits self.grammar_str into (non terminal, production text) pairs
    def _parse_non_terminals(self) -> List[Tuple[str, str]]:
        # Match Non Terminals as the left hand side of '::='
        pattern = re.compile(r"(?P<Non_Terminal>\w+'*)\s*::=")
        matches = list(pattern.finditer(self.grammar_str))
        if not matches:
            raise MalformedGrammar("No rules of the form 'Name ::= ...' were found.")

        leading = self.grammar_str[: matches[0].start()]
        if leading.strip():
            raise MalformedGrammar(
                f"Unexpected text {leading.strip()!r} before the first rule."
            )

        rules = []
        for match, next_match in zip(matches, matches[1:] + [None]):
            end = next_match.start() if next_match else len(self.grammar_str)
            rules.append((match["Non_Terminal"], self.grammar_str[match.end() : end]))
        return rules

    def _apply_terminal_mapping(self, terminal: str) -> str:
        # Remove the quotes, and unescape any escaped characters
        terminal = re.sub(r"\\(.)", r"\1", terminal[1:-1])
        return self.terminal_mapping.get(terminal, terminal)

    # Converts the text of a production into its alternatives
    def _parse_alternatives(self, non_terminal: str, production: str) -> List[List]:
        alternatives = [[]]
        for match in self.symbol_pattern.finditer(production):
            match match.lastgroup:
                case "TERMINAL":
                    symbol = Symbol.terminal(self._apply_terminal_mapping(match[0]))
                    self._add_symbol(alternatives[-1], symbol, non_terminal)
                case "NON_TERMINAL":
                    symbol = Symbol.nonterminal(match[0])
                    self._add_symbol(alternatives[-1], symbol, non_terminal)
                case "EMPTY":
                    self._add_symbol(alternatives[-1], None, non_terminal)
                case "OR":
                    alternatives.append([])
                case "ERROR":
                    raise MalformedGrammar(
                        f"Unexpected character {match[0]!r} in the rule for {non_terminal!r}."
                    )

        # Drop the ε marker, leaving an empty right hand side
        return [
            [symbol for symbol in alternative if symbol is not None]
            for alternative in alternatives
        ]

    @staticmethod
    def _add_symbol(alternative: List, symbol: Optional[Symbol], non_terminal: str) -> None:
        # ε, marked by None, can not be combined with any other symbol
        if alternative and (symbol is None or None in alternative):
            raise MalformedGrammar(
                f"ε must be a complete alternative in the rule for {non_terminal!r}."
            )
        alternative.append(symbol)

    def _grammar_from_string(self) -> Grammar:
        rules = []
        for non_terminal, production in self._parse_non_terminals():
            for alternative in self._parse_alternatives(non_terminal, production):
                rules.append((non_terminal, alternative))

        # Unless specified otherwise, the first rule defines the start symbol
        start = self.start or rules[0][0]
        grammar = Grammar(Symbol.nonterminal(start), productions_from(rules))
        logger.debug(
            "Read grammar with %d productions over %d non-terminals",
            len(grammar.productions),
            len(grammar.nonterminals),
        )
        return grammar
