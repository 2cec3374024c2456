"""
Pytest fixtures for the literal lexer tests.
"""

import os
import sys

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'src')))

from literal_lexer.tokens import PatternRule, TokenCategory
from literal_lexer.utils.automaton_cache import clear_automaton_cache

K = TokenCategory.KEYWORD
I = TokenCategory.IDENTIFIER
C = TokenCategory.CONSTANT
D = TokenCategory.DELIMITER
O = TokenCategory.OPERATOR


@pytest.fixture(autouse=True)
def fresh_automaton_cache():
    """Every test starts with an empty automaton cache."""
    clear_automaton_cache()
    yield
    clear_automaton_cache()


@pytest.fixture
def keyword_rules():
    """Keywords sharing prefixes, plus a delimiter."""
    return [
        PatternRule(K, "if"),
        PatternRule(K, "int"),
        PatternRule(K, "in"),
        PatternRule(K, "else"),
        PatternRule(D, ";"),
    ]


@pytest.fixture
def c_like_rules():
    """A small C-like grammar."""
    return [
        PatternRule(K, "int"),
        PatternRule(K, "return"),
        PatternRule(I, "main"),
        PatternRule(I, "x"),
        PatternRule(C, "0"),
        PatternRule(C, "42"),
        PatternRule(D, "("),
        PatternRule(D, ")"),
        PatternRule(D, "{"),
        PatternRule(D, "}"),
        PatternRule(D, ";"),
        PatternRule(O, "="),
        PatternRule(O, "=="),
        PatternRule(O, "+"),
    ]


@pytest.fixture
def grammar_text():
    return (
        "KEYWORD -> int\n"
        "KEYWORD -> return\n"
        "IDENTIFIER -> main\n"
        "IDENTIFIER -> x\n"
        "CONSTANT -> 42\n"
        "DELIMITER -> (\n"
        "DELIMITER -> )\n"
        "DELIMITER -> ;\n"
        "OPERATOR -> =\n"
        "OPERATOR -> ==\n"
    )


@pytest.fixture
def grammar_file(tmp_path, grammar_text):
    path = tmp_path / "grammar.txt"
    path.write_text(grammar_text, encoding="utf-8")
    return str(path)


@pytest.fixture
def source_file(tmp_path):
    path = tmp_path / "source.txt"
    path.write_text("int main ( )\nx = 42 ;\nreturn x == 42 ;\n", encoding="utf-8")
    return str(path)
