import argparse
import json
import logging
import os
import sys
from argparse import ArgumentParser, Namespace
from contextlib import redirect_stderr, redirect_stdout

from parser_generator.errors import GrammarNotLL1, MalformedGrammar, ParseSyntaxError
from parser_generator.grammar import Grammar
from parser_generator.report import (
    analysis_to_dict,
    format_conflicts,
    format_sets,
    format_syntax_error,
)
from vardecl import check
from vardecl.error.error import CompilerException
from vardecl.grammar import load_grammar
from vardecl.util import Colors

# Exit Codes
SUCCESS = 0
REJECTED = 1
USAGE_ERROR = 2


def main(*args: str, stdout=sys.stdout, stderr=sys.stderr) -> int:
    parser = create_parsers()

    with redirect_stdout(stdout):
        with redirect_stderr(stderr):
            args = parser.parse_args(args or sys.argv[1:])

    if not args.command:
        parser.print_usage(file=stderr)
        print(
            "vardecl: error: You have to choose one of the commands "
            + "`sets`, `check`, or `parse`",
            file=stderr,
        )
        return USAGE_ERROR

    level_mapping = {
        "ERROR": logging.ERROR,
        "WARNING": logging.WARNING,
        "INFO": logging.INFO,
        "DEBUG": logging.DEBUG,
    }
    logging.basicConfig(stream=stderr, level=level_mapping[args.log_level])

    try:
        return args.func(stdout, stderr, args)
    except MalformedGrammar as error:
        print(f"MalformedGrammar: {error}", file=stderr)
        return REJECTED


def read_grammar(args: Namespace) -> Grammar:
    if args.grammar:
        return Grammar.from_file(args.grammar, start=args.start)
    return load_grammar()


def sets(stdout, stderr, args: Namespace) -> int:
    analysis = read_grammar(args).analysis
    if args.json:
        output = json.dumps(analysis_to_dict(analysis), indent=2, ensure_ascii=False)
        print(output, file=stdout)
    else:
        print(format_sets(analysis), file=stdout)
    return SUCCESS


def check_grammar(stdout, stderr, args: Namespace) -> int:
    grammar = read_grammar(args)
    # The tables are reported either way, for diagnostic purposes
    print(format_sets(grammar.analysis), file=stdout)
    print(file=stdout)
    try:
        table = grammar.table
    except GrammarNotLL1 as error:
        print(format_conflicts(error), file=stdout)
        return REJECTED
    print(f"Grammar is LL(1), its parse table has {len(table)} entries.", file=stdout)
    return SUCCESS


def parse(stdout, stderr, args: Namespace) -> int:
    if not os.path.isfile(args.input_file):
        print(f"File does not exist: {args.input_file}", file=stdout)
        return SUCCESS

    with open(args.input_file, "r", encoding="utf8") as f:
        content = f.read()

    if args.tokens:
        output = parse_tokens(stderr, args, content)
    else:
        output = parse_program(stderr, content)

    if output is None:
        return REJECTED

    print(f"{Colors.GREEN}accepted{Colors.ENDC}", file=stdout)
    if args.output_file:
        write_to_output(args.output_file, output)
    return SUCCESS


def parse_tokens(stderr, args: Namespace, content: str):
    tokens = content.split()
    try:
        result = read_grammar(args).parser().parse(tokens)
    except GrammarNotLL1 as error:
        print(format_conflicts(error), file=stderr)
        return None
    except ParseSyntaxError as error:
        print(format_syntax_error(error), file=stderr)
        return None
    return {"tokens": result.tokens}


def parse_program(stderr, content: str):
    try:
        tokens, _, symbols = check(content)
    except CompilerException as error:
        print(str(error).strip(), file=stderr)
        return None
    return {
        "tokens": [
            {
                "text": token.text,
                "type": token.type.name,
                "line": token.span.start_ln,
                "column": token.span.start_col + 1,
            }
            for token in tokens
        ],
        "declarations": symbols,
    }


def write_to_output(output_file: str, output) -> None:
    directory = os.path.dirname(os.path.abspath(output_file))
    os.makedirs(directory, exist_ok=True)
    with open(output_file, "w", encoding="utf8") as f:
        json.dump(output, f, indent=2, ensure_ascii=False)


def create_parsers() -> ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vardecl",
        description="""
Compute the First, Follow and Select sets of an LL(1) grammar, validate it, and
check variable declaration blocks against it.""",
    )

    subparsers = parser.add_subparsers(title="Commands", dest="command", required=False)

    create_sets_parser(subparsers)
    create_check_parser(subparsers)
    create_parse_parser(subparsers)

    return parser


def create_sets_parser(subparsers):
    parser = subparsers.add_parser(
        "sets",
        help="print the Nullable, First, Follow and Select sets",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.set_defaults(func=sets)
    grammar_arg(parser)
    parser.add_argument(
        "--json", action="store_true", help="print the sets as a JSON object"
    )
    log_level_arg(parser)


def create_check_parser(subparsers):
    parser = subparsers.add_parser(
        "check",
        help="check whether the grammar is LL(1), reporting conflicting productions",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.set_defaults(func=check_grammar)
    grammar_arg(parser)
    log_level_arg(parser)


def create_parse_parser(subparsers):
    parser = subparsers.add_parser(
        "parse",
        help="accept or reject a declaration block",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.set_defaults(func=parse)
    parser.add_argument("input_file", help="the declaration block to check")
    parser.add_argument(
        "-o",
        "--output-file",
        help="write the tokens (and declarations) as JSON to this file",
    )
    parser.add_argument(
        "--tokens",
        action="store_true",
        help="""
the input file holds whitespace separated terminal names, e.g. `Var i : t ; #`, which
are parsed against the grammar directly""",
    )
    grammar_arg(parser)
    log_level_arg(parser)


def grammar_arg(parser):
    parser.add_argument(
        "-g",
        "--grammar",
        help="grammar file with rules of the form `A ::= 'a' B | ε`, "
        "instead of the declaration block grammar",
    )
    parser.add_argument(
        "-s",
        "--start",
        help="start non-terminal of the grammar file, defaults to the first rule",
    )


def log_level_arg(parser):
    parser.add_argument(
        "-l",
        "--log-level",
        choices=["ERROR", "WARNING", "INFO", "DEBUG"],
        default="WARNING",
        help="set the logging level",
    )
