"""
Shared data types for the literal lexer.

Token categories, grammar rules and emitted tokens. All of them are
immutable values: rules are read once by the grammar loader, tokens are
produced by the scanner and handed straight to the output consumer.
"""

from enum import Enum
from dataclasses import dataclass
from typing import Dict


class TokenCategory(Enum):
    """Enum representing the categories a token can be recognized as.

    Declaration order is significant: it defines the category ordinal used
    by the default tie-break policy (KEYWORD lowest, UNKNOWN the sentinel).
    """
    KEYWORD = "KEYWORD"
    IDENTIFIER = "IDENTIFIER"
    CONSTANT = "CONSTANT"
    DELIMITER = "DELIMITER"
    OPERATOR = "OPERATOR"
    UNKNOWN = "UNKNOWN"

    @property
    def ordinal(self) -> int:
        return _ORDINALS[self]

    @classmethod
    def from_name(cls, name: str) -> "TokenCategory":
        """Map a grammar spelling to a category; unknown spellings map to UNKNOWN."""
        try:
            category = cls(name)
        except ValueError:
            return cls.UNKNOWN
        return category

    def __str__(self) -> str:
        return self.value


_ORDINALS: Dict[TokenCategory, int] = {
    category: index for index, category in enumerate(TokenCategory)
}


@dataclass(frozen=True)
class PatternRule:
    """A grammar rule: recognize ``pattern`` verbatim as ``category``."""
    category: TokenCategory
    pattern: str

    def __post_init__(self):
        if not isinstance(self.category, TokenCategory):
            raise TypeError(f"Rule category must be a TokenCategory, got {type(self.category)}")
        if not isinstance(self.pattern, str) or not self.pattern:
            raise ValueError(f"Rule pattern must be a non-empty string, got {self.pattern!r}")

    def __str__(self) -> str:
        return f"{self.category.value} -> {self.pattern}"


@dataclass(frozen=True)
class Token:
    """Represents a recognized token: source line (1-based), category and lexeme."""
    line: int
    category: TokenCategory
    lexeme: str

    def __post_init__(self):
        if self.line < 1:
            raise ValueError(f"Token line number must be >= 1, got {self.line}")

    def as_record(self):
        """Return the ``(line, category name, lexeme)`` result record."""
        return (self.line, self.category.value, self.lexeme)

    def __str__(self) -> str:
        return f"({self.line}, {self.category.value}, {self.lexeme!r})"
