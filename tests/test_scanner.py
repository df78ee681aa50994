import pytest

from tests.test_util import data_file, open_file
from vardecl import Scanner, Token, Type
from vardecl.error.scanner_error import ScannerException


def test_scan(multiple_program: str):
    scanner = Scanner(multiple_program)
    tokens = scanner.scan()

    expected = [
        Token("var", Type.VAR),
        Token("a", Type.ID),
        Token(",", Type.COMMA),
        Token("b", Type.ID),
        Token(",", Type.COMMA),
        Token("c", Type.ID),
        Token(":", Type.COLON),
        Token("integer", Type.TYPE),
        Token(";", Type.SEMICOLON),
    ]

    assert tokens[:9] == expected
    assert len(tokens) == 17


def test_spans(multiple_program: str):
    tokens = Scanner(multiple_program).scan()
    x = tokens[9]
    assert x == Token("x", Type.ID)
    assert (x.span.start_ln, x.span.start_col, x.span.end_col) == (2, 4, 5)


def test_empty():
    scanner = Scanner("")
    tokens = scanner.scan()
    assert tokens == []


@pytest.mark.parametrize(
    "text,tok_type",
    [
        ("var", Type.VAR),
        ("VAR", Type.VAR),
        ("Var", Type.VAR),
        ("integer", Type.TYPE),
        ("LongInt", Type.TYPE),
        ("BOOL", Type.TYPE),
        ("real", Type.TYPE),
        ("variable", Type.ID),
        ("reals", Type.ID),
        ("i2", Type.ID),
        ("#", Type.END),
        ("begin", Type.KEYWORD),
        ("END", Type.KEYWORD),
        ("Or", Type.KEYWORD),
        ("ending", Type.ID),
        ("doit", Type.ID),
    ],
)
def test_classification(text: str, tok_type: Type):
    assert Scanner(text).scan() == [Token(text, tok_type)]


def test_keywords_need_word_boundaries():
    tokens = Scanner("var var1 : integer;").scan()
    assert [token.type for token in tokens[:2]] == [Type.VAR, Type.ID]


def test_remove_comments():
    program: str = open_file(data_file("valid", "comments.decl"))
    scanner = Scanner(program)

    modified = scanner.remove_comments(scanner.og_program)
    # Ensure that the number of lines remains the same
    assert len(program.splitlines()) == len(modified.splitlines())
    # Ensure that the columns of the remaining tokens do not move
    assert len(modified) == len(program)
    assert "/*" not in modified and "//" not in modified

    remodified = scanner.remove_comments(modified)
    # Ensure that reusing `remove_comments` makes no further changes
    assert modified == remodified


def test_scan_comments():
    program: str = open_file(data_file("valid", "comments.decl"))
    tokens = Scanner(program).scan()
    assert [token.text for token in tokens] == [
        "var",
        "count",
        ":",
        "longint",
        ";",
        "step",
        ",",
        "limit",
        ":",
        "integer",
        ";",
    ]
    assert tokens[0].span.start_ln == 2


def test_scan_file(valid_file: str):
    program: str = open_file(valid_file)
    scanner = Scanner(program)

    tokens = scanner.scan()
    # Ensure that we get a non-empty list of tokens,
    # unless the program itself is empty or just whitespace.
    assert len(tokens) > 1 or not program.strip()


def test_UnexpectedCharacterError_1():
    program: str = open_file(
        data_file("scannerError", "UnexpectedCharacterError_1.decl")
    )
    scanner = Scanner(program)

    with pytest.raises(ScannerException) as excinfo:
        scanner.scan()
    message = str(excinfo.value)
    assert "ScannerError" in message and "-> 2. " in message
    assert "Unexpected character '='" in message
    # Consecutive unexpected characters are reported at once
    assert "Unexpected characters '12'" in message


def test_DanglingMultiLineCommentError_1():
    program: str = open_file(
        data_file("scannerError", "DanglingMultiLineCommentError_1.decl")
    )
    scanner = Scanner(program)

    with pytest.raises(ScannerException) as excinfo:
        scanner.scan()
    assert "dangling multiline comment" in str(excinfo.value)
    assert "-> 1. " in str(excinfo.value)


def test_closing_comment_without_opening():
    with pytest.raises(ScannerException) as excinfo:
        Scanner("var a : real; */").scan()
    assert "dangling multiline comment" in str(excinfo.value)
