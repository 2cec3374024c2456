"""
literal_lexer: longest-match tokenizer built from literal pattern rules.

Grammar rules (category -> exact string) are compiled into a prefix-sharing
automaton, determinized by subset construction, minimized by partition
refinement, and the resulting DFA drives a greedy longest-match scanner.
"""

from .config import LexerConfig
from .errors import (
    ConfigurationError, ErrorHandler, GrammarSourceError, LexerError, LexicalError, SourceTextError,
)
from .grammar import load_rules, parse_rule, parse_rules, read_source
from .matcher import DFA, DFABuilder, DFAMinimizer, NFA, NFABuilder
from .pipeline import build_automaton, compile_rules, tokenize, tokenize_lines, tokenize_to_dataframe
from .policies import AcceptLabel, first_declared_rule, get_tie_break_policy, lowest_category_ordinal
from .scanner import Scanner
from .tokens import PatternRule, Token, TokenCategory

__version__ = "0.1.0"

__all__ = [
    'LexerConfig',
    'ConfigurationError',
    'ErrorHandler',
    'GrammarSourceError',
    'LexerError',
    'LexicalError',
    'SourceTextError',
    'load_rules',
    'parse_rule',
    'parse_rules',
    'read_source',
    'DFA',
    'DFABuilder',
    'DFAMinimizer',
    'NFA',
    'NFABuilder',
    'build_automaton',
    'compile_rules',
    'tokenize',
    'tokenize_lines',
    'tokenize_to_dataframe',
    'AcceptLabel',
    'first_declared_rule',
    'get_tie_break_policy',
    'lowest_category_ordinal',
    'Scanner',
    'PatternRule',
    'Token',
    'TokenCategory',
]
