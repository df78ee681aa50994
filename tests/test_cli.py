import io
import json
from typing import Tuple

from tests.test_util import data_file
from vardecl import cli
from vardecl.cli import REJECTED, SUCCESS, USAGE_ERROR


def run_vardecl(*args) -> Tuple[str, str, int]:
    stdout, stderr = io.StringIO(), io.StringIO()
    try:
        code = cli.main(*[str(arg) for arg in args], stdout=stdout, stderr=stderr)
    except SystemExit as sys_exit:
        code = sys_exit.code

    return stdout.getvalue().strip(), stderr.getvalue().strip(), code


def test_sets():
    stdout, stderr, code = run_vardecl("sets")
    assert code == SUCCESS
    assert not stderr
    assert stdout.startswith("Nullable: S, D', I'")
    assert "Follow:" in stdout
    assert "S -> ε" in stdout


def test_sets_json():
    stdout, _, code = run_vardecl("sets", "--json")
    assert code == SUCCESS
    output = json.loads(stdout)
    assert output["first"]["S"] == ["Var", "ε"]
    assert output["select"]["D' -> ε"] == ["#"]
    assert output["ll1"] is True


def test_sets_grammar_file():
    stdout, _, code = run_vardecl(
        "sets", "-g", data_file("grammars", "expression.bnf"), "--json"
    )
    assert code == SUCCESS
    assert json.loads(stdout)["start"] == "E"


def test_check():
    stdout, _, code = run_vardecl("check")
    assert code == SUCCESS
    assert "Grammar is LL(1), its parse table has 9 entries." in stdout


def test_check_not_ll1():
    stdout, _, code = run_vardecl("check", "--grammar", data_file("grammars", "dangling.bnf"))
    assert code == REJECTED
    # The sets are still reported
    assert "Select:" in stdout
    assert "found 1 conflict(s)" in stdout


def test_malformed_grammar():
    _, stderr, code = run_vardecl(
        "check", "-g", data_file("grammars", "expression.bnf"), "-s", "X"
    )
    assert code == REJECTED
    assert stderr.startswith("MalformedGrammar:")


def test_parse():
    stdout, stderr, code = run_vardecl("parse", data_file("valid", "multiple.decl"))
    assert code == SUCCESS
    assert "accepted" in stdout
    assert not stderr


def test_parse_output_file(tmp_path):
    output_file = tmp_path / "out" / "multiple.json"
    _, _, code = run_vardecl(
        "parse", data_file("valid", "multiple.decl"), "-o", output_file
    )
    assert code == SUCCESS

    output = json.loads(output_file.read_text(encoding="utf8"))
    assert output["tokens"][0] == {"text": "var", "type": "VAR", "line": 1, "column": 1}
    assert output["declarations"]["flag"] == "bool"


def test_parse_rejected():
    stdout, stderr, code = run_vardecl(
        "parse", data_file("parserError", "ParseError_missing_identifier.decl")
    )
    assert code == REJECTED
    assert "accepted" not in stdout
    assert "SyntaxError" in stderr


def test_parse_tokens(tmp_path):
    output_file = tmp_path / "tokens.json"
    stdout, _, code = run_vardecl(
        "parse", "--tokens", data_file("tokens", "scenario_b.tokens"), "-o", output_file
    )
    assert code == SUCCESS
    assert "accepted" in stdout
    assert json.loads(output_file.read_text(encoding="utf8")) == {
        "tokens": ["Var", "i", ",", "i", ":", "t", ";", "i", ":", "t", ";", "#"]
    }


def test_parse_tokens_rejected():
    _, stderr, code = run_vardecl(
        "parse", "--tokens", data_file("tokens", "scenario_d.tokens")
    )
    assert code == REJECTED
    assert stderr == (
        "SyntaxError: unexpected token '#' at position 4, expected {';'}"
    )


def test_parse_missing_file(tmp_path):
    missing = tmp_path / "missing.decl"
    stdout, _, code = run_vardecl("parse", missing)
    assert code == SUCCESS
    assert stdout == f"File does not exist: {missing}"


def test_unknown_command():
    _, stderr, code = run_vardecl("generate")
    assert code == USAGE_ERROR
    assert "invalid choice" in stderr
