import sys

import pytest

from tests.test_util import data_file, open_file
from vardecl import DeclarationAnalyzer, Parser, Scanner, Token, Type, check
from vardecl.error.analysis_error import AnalysisException
from vardecl.error.parser_error import ParserException
from vardecl.tree.tree import DeclBlockNode, DeclLineNode


def parse(program: str) -> DeclBlockNode:
    tokens = Scanner(program).scan()
    return Parser(program).parse(tokens)


def test_parser(valid_file: str):
    # Ensure that we can scan and parse this program without Exceptions
    program: str = open_file(valid_file)

    scanner = Scanner(program)
    tokens = scanner.scan()

    parser = Parser(program)
    tree = parser.parse(tokens)
    assert isinstance(tree, DeclBlockNode)


def test_tree(multiple_program: str):
    tree = parse(multiple_program)
    assert tree == DeclBlockNode(
        [
            DeclLineNode(
                [Token("a", Type.ID), Token("b", Type.ID), Token("c", Type.ID)],
                Token("integer", Type.TYPE),
            ),
            DeclLineNode([Token("x", Type.ID)], Token("real", Type.TYPE)),
            DeclLineNode([Token("flag", Type.ID)], Token("bool", Type.TYPE)),
        ]
    )
    assert [_id.text for _id in tree.identifiers] == ["a", "b", "c", "x", "flag"]
    # The block spans from `var` up to the last semicolon
    assert tree.span.ln == (1, 3)
    assert tree.lines[1].span.col == (4, 13)


def test_print(valid_file: str):
    # Ensure that
    # 1. the pretty print results in the same AST as the original program
    # 2. the pretty print gives the same tokens as for the original program
    program: str = open_file(valid_file)
    original_tree = parse(program)

    program_pprint = str(original_tree)
    pprint_tree = parse(program_pprint)

    assert original_tree == pprint_tree
    assert str(original_tree) == str(pprint_tree)


def test_print_layout(multiple_program: str):
    assert str(parse(multiple_program)) == (
        "var a, b, c : integer;\n    x : real;\n    flag : bool;"
    )


def test_empty():
    tree = parse("")
    assert tree == DeclBlockNode([])
    assert str(tree) == ""


def test_end_marker_only():
    assert parse("#") == DeclBlockNode([])


def test_parser_error(parser_error: str):
    program: str = open_file(parser_error)

    scanner = Scanner(program)
    tokens = scanner.scan()

    parser = Parser(program)
    with pytest.raises(ParserException) as excinfo:
        parser.parse(tokens)

    assert "SyntaxError" in str(excinfo.value)


def test_missing_semicolon():
    program = open_file(data_file("parserError", "ParseError_missing_semicolon.decl"))
    with pytest.raises(ParserException) as excinfo:
        parse(program)
    message = str(excinfo.value)
    assert "Unexpected end of input on line [1]." in message
    assert "Expected a ';', but reached the end of the input" in message


def test_missing_identifier():
    program = open_file(data_file("parserError", "ParseError_missing_identifier.decl"))
    with pytest.raises(ParserException) as excinfo:
        parse(program)
    message = str(excinfo.value)
    assert "while parsing a list of declarations" in message
    assert "Expected an identifier, but got ':' instead on line [1] column 5." in message


def test_missing_comma():
    program = open_file(data_file("parserError", "ParseError_missing_comma.decl"))
    with pytest.raises(ParserException) as excinfo:
        parse(program)
    message = str(excinfo.value)
    assert "while parsing an identifier list" in message
    assert "Expected a ',' or a ':', but got 'b' instead" in message


def test_missing_var():
    program = open_file(data_file("parserError", "ParseError_missing_var.decl"))
    with pytest.raises(ParserException) as excinfo:
        parse(program)
    message = str(excinfo.value)
    assert "while parsing a declaration block" in message
    assert "Expected an end of input or a 'var'" in message


def test_missing_type():
    program = open_file(data_file("parserError", "ParseError_missing_type.decl"))
    with pytest.raises(ParserException) as excinfo:
        parse(program)
    assert "Expected a type, but got ';' instead" in str(excinfo.value)


def test_trailing_input():
    program = open_file(data_file("parserError", "ParseError_trailing_input.decl"))
    with pytest.raises(ParserException) as excinfo:
        parse(program)
    assert "Unexpected 'b' after the end of the declaration block" in str(excinfo.value)


def test_analyze(multiple_program: str):
    tree = parse(multiple_program)
    symbols = DeclarationAnalyzer(multiple_program).analyze(tree)
    assert symbols == {
        "a": "integer",
        "b": "integer",
        "c": "integer",
        "x": "real",
        "flag": "bool",
    }


def test_check_is_case_insensitive():
    program = open_file(data_file("valid", "mixed_case.decl"))
    tokens, tree, symbols = check(program)
    assert tokens[0] == Token("VAR", Type.VAR)
    assert len(tree.lines) == 2
    assert symbols == {"total": "real", "index": "integer", "i2": "integer"}


def test_DuplicateIdentifierError_1():
    program = open_file(data_file("analysisError", "DuplicateIdentifierError_1.decl"))
    with pytest.raises(AnalysisException) as excinfo:
        check(program)
    message = str(excinfo.value)
    assert "DeclarationError" in message and "-> 2. " in message
    assert "Duplicate identifier 'A' on line [2]." in message
    assert "It was already declared as 'a' on line [1]." in message


def test_many_identifiers():
    names = [f"a{n}" for n in range(5000)]
    program = "var " + ", ".join(names) + " : integer;"
    _, tree, symbols = check(program)
    assert [_id.text for _id in tree.identifiers] == names
    assert len(symbols) == 5000


def test_many_declarations():
    program = "var " + "\n    ".join(f"a{n} : real;" for n in range(5000))
    _, tree, symbols = check(program)
    assert len(tree.lines) == 5000
    assert tree.lines[-1].ids == [Token("a4999", Type.ID)]
    assert symbols["a0"] == "real"


def test_reserved_word():
    program = open_file(data_file("parserError", "ParseError_reserved_word.decl"))
    with pytest.raises(ParserException) as excinfo:
        parse(program)
    message = str(excinfo.value)
    assert "-> 2. " in message
    assert "Expected an end of input or an identifier, but got 'begin' instead" in message


@pytest.mark.parametrize(
    "word", ["if", "then", "else", "while", "do", "begin", "end", "and", "or", "BEGIN"]
)
def test_reserved_words_are_no_identifiers(word: str):
    with pytest.raises(ParserException) as excinfo:
        check(f"var {word} : integer;")
    assert f"Expected an identifier, but got {word!r} instead" in str(excinfo.value)


def test_rejection_keeps_tracebacks(monkeypatch):
    monkeypatch.delattr("sys.tracebacklimit", raising=False)
    with pytest.raises(ParserException):
        check("var : integer;")
    assert not hasattr(sys, "tracebacklimit")
