from typing import Dict, Iterable, List

from parser_generator.analysis import GrammarAnalysis
from parser_generator.errors import GrammarNotLL1, ParseSyntaxError
from parser_generator.symbol import EPSILON, Symbol


def _ordered(analysis: GrammarAnalysis, symbols: Iterable[Symbol]) -> List[str]:
    # Terminals in declaration order, the end-marker after them and ε last
    order = {terminal: i for i, terminal in enumerate(analysis.grammar.terminals)}
    order[EPSILON] = len(order)
    return [symbol.name for symbol in sorted(symbols, key=lambda s: order[s])]


def format_set(analysis: GrammarAnalysis, symbols: Iterable[Symbol]) -> str:
    return "{" + ", ".join(_ordered(analysis, symbols)) + "}"


def format_sets(analysis: GrammarAnalysis) -> str:
    """Render the First, Follow and Select tables of a grammar, in declaration order."""
    grammar = analysis.grammar
    width = max(len(nt.name) for nt in grammar.nonterminals)

    nullable = [nt.name for nt in grammar.nonterminals if nt in analysis.nullable]
    lines = ["Nullable: " + ", ".join(nullable), "", "First:"]
    for nt in grammar.nonterminals:
        lines.append(f"  {nt.name:<{width}} {format_set(analysis, analysis.first[nt])}")
    lines.append("")
    lines.append("Follow:")
    for nt in grammar.nonterminals:
        lines.append(f"  {nt.name:<{width}} {format_set(analysis, analysis.follow[nt])}")
    lines.append("")
    lines.append("Select:")
    production_width = max(len(str(p)) for p in grammar.productions)
    for production in grammar.productions:
        lines.append(
            f"  {str(production):<{production_width}} "
            f"{format_set(analysis, analysis.select[production])}"
        )
    return "\n".join(lines)


def format_conflicts(error: GrammarNotLL1) -> str:
    lines = [f"Grammar is not LL(1), found {len(error.conflicts)} conflict(s):"]
    for conflict in error.conflicts:
        first, second = conflict.productions
        lines.append(
            f"  {first}  and  {second}  overlap on "
            f"{format_set(error.analysis, conflict.terminals)}"
        )
    return "\n".join(lines)


def format_syntax_error(error: ParseSyntaxError) -> str:
    expected = ", ".join(sorted(repr(terminal) for terminal in error.expected))
    message = (
        f"SyntaxError: {error.kind.value} {error.terminal!r} at position "
        f"{error.position}, expected {{{expected}}}"
    )
    if error.nonterminal:
        message += f" while expanding {error.nonterminal!r}"
    return message


def analysis_to_dict(analysis: GrammarAnalysis) -> Dict:
    grammar = analysis.grammar
    return {
        "start": grammar.start.name,
        "nullable": [nt.name for nt in grammar.nonterminals if nt in analysis.nullable],
        "first": {
            nt.name: _ordered(analysis, analysis.first[nt]) for nt in grammar.nonterminals
        },
        "follow": {
            nt.name: _ordered(analysis, analysis.follow[nt])
            for nt in grammar.nonterminals
        },
        "select": {
            str(production): _ordered(analysis, analysis.select[production])
            for production in grammar.productions
        },
        "ll1": analysis.is_ll1,
    }
