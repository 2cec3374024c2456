import os
from dataclasses import dataclass
from typing import Any, Dict

from literal_lexer.errors import ConfigurationError
from literal_lexer.policies import DEFAULT_TIE_BREAK, TIE_BREAK_POLICIES, TieBreakPolicy, get_tie_break_policy

_TRUE_VALUES = ('1', 'true', 'yes', 'on')


@dataclass
class LexerConfig:
    """Configuration for automaton construction and scanning"""
    tie_break: str = DEFAULT_TIE_BREAK
    whitespace: str = " \t"
    dump_automaton: bool = False
    enable_caching: bool = True
    cache_size_limit: int = 128

    def __post_init__(self):
        if self.tie_break not in TIE_BREAK_POLICIES:
            available = ", ".join(sorted(TIE_BREAK_POLICIES))
            raise ConfigurationError(f"Unknown tie-break policy '{self.tie_break}' (available: {available})")
        if "\n" in self.whitespace or "\r" in self.whitespace:
            raise ConfigurationError("Line terminators cannot be configured as whitespace")
        if self.cache_size_limit < 1:
            raise ConfigurationError(f"cache_size_limit must be positive, got {self.cache_size_limit}")

    def get_tie_break_policy(self) -> TieBreakPolicy:
        return get_tie_break_policy(self.tie_break)

    @classmethod
    def from_env(cls) -> "LexerConfig":
        """Build a configuration from ``LITERAL_LEXER_*`` environment variables."""
        kwargs: Dict[str, Any] = {}
        if 'LITERAL_LEXER_TIE_BREAK' in os.environ:
            kwargs['tie_break'] = os.environ['LITERAL_LEXER_TIE_BREAK']
        if 'LITERAL_LEXER_WHITESPACE' in os.environ:
            kwargs['whitespace'] = os.environ['LITERAL_LEXER_WHITESPACE']
        if 'LITERAL_LEXER_ENABLE_CACHING' in os.environ:
            kwargs['enable_caching'] = os.environ['LITERAL_LEXER_ENABLE_CACHING'].lower() in _TRUE_VALUES
        if 'LITERAL_LEXER_CACHE_SIZE' in os.environ:
            try:
                kwargs['cache_size_limit'] = int(os.environ['LITERAL_LEXER_CACHE_SIZE'])
            except ValueError as e:
                raise ConfigurationError(f"Invalid LITERAL_LEXER_CACHE_SIZE: {e}") from e
        return cls(**kwargs)
