"""
Tests for lexer configuration and tie-break policies.
"""

import dataclasses

import pytest

from literal_lexer.config import LexerConfig
from literal_lexer.errors import ConfigurationError
from literal_lexer.policies import (
    AcceptLabel, first_declared_rule, get_tie_break_policy, lowest_category_ordinal,
)
from literal_lexer.tokens import TokenCategory

K = TokenCategory.KEYWORD
I = TokenCategory.IDENTIFIER


class TestTokenCategory:

    def test_ordinals_follow_declaration_order(self):
        assert [c.ordinal for c in TokenCategory] == list(range(6))
        assert TokenCategory.KEYWORD.ordinal == 0
        assert TokenCategory.UNKNOWN.ordinal == 5

    def test_from_name(self):
        assert TokenCategory.from_name("CONSTANT") is TokenCategory.CONSTANT
        assert TokenCategory.from_name("constant") is TokenCategory.UNKNOWN
        assert str(TokenCategory.DELIMITER) == "DELIMITER"


class TestTieBreakPolicies:

    def test_lowest_category_ordinal(self):
        labels = [AcceptLabel(I, 0), AcceptLabel(K, 1)]
        assert lowest_category_ordinal(labels) == AcceptLabel(K, 1)

    def test_first_declared_rule(self):
        labels = [AcceptLabel(I, 0), AcceptLabel(K, 1)]
        assert first_declared_rule(labels) == AcceptLabel(I, 0)

    def test_same_category_prefers_earlier_rule(self):
        labels = [AcceptLabel(K, 4), AcceptLabel(K, 2)]
        assert lowest_category_ordinal(labels) == AcceptLabel(K, 2)

    def test_lookup(self):
        assert get_tie_break_policy("first_declared") is first_declared_rule
        with pytest.raises(ConfigurationError):
            get_tie_break_policy("longest")


class TestLexerConfig:

    def test_defaults(self):
        config = LexerConfig()
        assert config.tie_break == "category_ordinal"
        assert config.whitespace == " \t"
        assert config.get_tie_break_policy() is lowest_category_ordinal

    def test_invalid_policy(self):
        with pytest.raises(ConfigurationError):
            LexerConfig(tie_break="random")

    def test_newline_cannot_be_whitespace(self):
        with pytest.raises(ConfigurationError):
            LexerConfig(whitespace=" \n")

    def test_invalid_cache_size(self):
        with pytest.raises(ConfigurationError):
            LexerConfig(cache_size_limit=0)

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("LITERAL_LEXER_TIE_BREAK", "first_declared")
        monkeypatch.setenv("LITERAL_LEXER_ENABLE_CACHING", "false")
        monkeypatch.setenv("LITERAL_LEXER_CACHE_SIZE", "8")
        config = LexerConfig.from_env()
        assert config.tie_break == "first_declared"
        assert config.enable_caching is False
        assert config.cache_size_limit == 8

    def test_from_env_rejects_bad_cache_size(self, monkeypatch):
        monkeypatch.setenv("LITERAL_LEXER_CACHE_SIZE", "many")
        with pytest.raises(ConfigurationError):
            LexerConfig.from_env()

    def test_fields(self):
        names = [f.name for f in dataclasses.fields(LexerConfig)]
        assert names == ["tie_break", "whitespace", "dump_automaton", "enable_caching", "cache_size_limit"]
