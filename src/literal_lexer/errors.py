# src/literal_lexer/errors.py

from dataclasses import dataclass
from typing import List


class LexerError(Exception):
    """Base exception for all literal lexer errors"""
    pass


class GrammarSourceError(LexerError):
    """Grammar source could not be read"""
    def __init__(self, path: str, reason: str = "", operation: str = "open"):
        self.path = path
        self.reason = reason
        self.operation = operation
        message = f"Cannot {operation} grammar file: {path}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class SourceTextError(LexerError):
    """Source text could not be read"""
    def __init__(self, path: str, reason: str = "", operation: str = "open"):
        self.path = path
        self.reason = reason
        self.operation = operation
        message = f"Cannot {operation} source file: {path}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class ConfigurationError(LexerError):
    """Invalid lexer configuration"""
    pass


@dataclass(frozen=True)
class LexicalError:
    """An unrecognized character at a scan position. Recoverable: the scanner skips it."""
    line: int
    column: int
    character: str

    @property
    def message(self) -> str:
        return f"unrecognized character {self.character!r}"

    def __str__(self) -> str:
        return f"Lexical error at line {self.line}, column {self.column}: {self.message}"


class ErrorHandler:
    """
    Centralized collection of lexical errors produced while scanning.

    Lexical errors are recoverable, so the scanner reports them here and
    keeps going; callers decide afterwards what to do with them.
    """
    def __init__(self):
        self.errors: List[LexicalError] = []

    def add_error(self, error: LexicalError) -> None:
        """Add a lexical error"""
        self.errors.append(error)

    def has_errors(self) -> bool:
        return len(self.errors) > 0

    def get_errors(self) -> List[LexicalError]:
        return self.errors

    def get_formatted_errors(self) -> List[str]:
        return [str(error) for error in self.errors]
