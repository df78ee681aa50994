import os
import sys
from glob import glob
from typing import List

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from parser_generator.analysis import GrammarAnalysis  # noqa: E402
from parser_generator.grammar import Grammar  # noqa: E402
from parser_generator.parser import GrammarParser  # noqa: E402
from parser_generator.table import ParseTable  # noqa: E402
from tests.test_util import data_file, open_file  # noqa: E402
from vardecl.error.communicator import ErrorRaiser  # noqa: E402
from vardecl.grammar import GRAMMAR, load_grammar  # noqa: E402


@pytest.fixture(autouse=True)
def clear_errors():
    # Errors are collected globally, make sure a failing test does not leak them
    ErrorRaiser.ERRORS.clear()
    yield
    ErrorRaiser.ERRORS.clear()


@pytest.fixture(scope="session")
def grammar() -> Grammar:
    return load_grammar()


@pytest.fixture(scope="session")
def fresh_grammar() -> Grammar:
    # Not shared with the cached grammar, to observe a cold analysis
    return Grammar.from_string(GRAMMAR)


@pytest.fixture(scope="session")
def analysis(grammar: Grammar) -> GrammarAnalysis:
    return grammar.analysis


@pytest.fixture(scope="session")
def table(grammar: Grammar) -> ParseTable:
    return grammar.table


@pytest.fixture(scope="session")
def ll1_parser(grammar: Grammar) -> GrammarParser:
    return grammar.parser()


@pytest.fixture(scope="session")
def multiple_program() -> str:
    return open_file(data_file("valid", "multiple.decl"))


def valid_files() -> List[str]:
    return sorted(glob(data_file("valid", "*.decl")))


def parserError_files() -> List[str]:
    return sorted(glob(data_file("parserError", "ParseError_*.decl")))


@pytest.fixture(scope="session", params=valid_files())
def valid_file(request) -> str:
    return request.param


@pytest.fixture(scope="session", params=parserError_files())
def parser_error(request) -> str:
    return request.param
