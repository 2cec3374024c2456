"""
Compilation pipeline: rules -> NFA -> DFA -> minimized DFA -> tokens.

Each stage runs to completion and hands an immutable value to the next;
there is no shared "current automaton".
"""

from typing import Iterable, List, Optional, Sequence

import pandas as pd

from literal_lexer.config import LexerConfig
from literal_lexer.errors import ErrorHandler
from literal_lexer.matcher.automata import NFABuilder
from literal_lexer.matcher.dfa import DFA, DFABuilder
from literal_lexer.matcher.minimizer import DFAMinimizer
from literal_lexer.output import tokens_to_dataframe
from literal_lexer.scanner import Scanner
from literal_lexer.tokens import PatternRule, Token
from literal_lexer.utils.automaton_cache import get_automaton_cache, get_cache_key
from literal_lexer.utils.logging_config import get_logger, PerformanceTimer

logger = get_logger(__name__)


def build_automaton(rules: Sequence[PatternRule], config: Optional[LexerConfig] = None) -> DFA:
    """Run builder, determinization and minimization without consulting the cache."""
    config = config or LexerConfig()
    tie_break = config.get_tie_break_policy()

    with PerformanceTimer("pattern automaton construction"):
        nfa = NFABuilder(tie_break).build(rules)
    dfa = DFABuilder(nfa, tie_break).build()
    return DFAMinimizer(dfa).minimize()


def compile_rules(rules: Sequence[PatternRule], config: Optional[LexerConfig] = None) -> DFA:
    """
    Compile grammar rules into a minimized DFA.

    Args:
        rules: Grammar rules in declaration order
        config: Lexer configuration; defaults to LexerConfig()

    Returns:
        DFA: Minimized automaton, shared with the cache when caching is enabled
    """
    config = config or LexerConfig()
    rules = tuple(rules)

    if not config.enable_caching:
        return build_automaton(rules, config)

    cache = get_automaton_cache()
    if cache.max_size != config.cache_size_limit:
        cache.resize(config.cache_size_limit)

    key = get_cache_key(rules, config.tie_break)
    cached = cache.get(key)
    if cached is not None:
        logger.debug(f"Automaton cache hit for {len(rules)} rules")
        return cached

    dfa = build_automaton(rules, config)
    cache.put(key, dfa)
    return dfa


def tokenize_lines(rules: Sequence[PatternRule], lines: Iterable[str],
                   config: Optional[LexerConfig] = None,
                   error_handler: Optional[ErrorHandler] = None) -> List[Token]:
    """Compile ``rules`` and scan ``lines``; lexical errors go to ``error_handler``."""
    config = config or LexerConfig()
    dfa = compile_rules(rules, config)
    scanner = Scanner(dfa, whitespace=config.whitespace, error_handler=error_handler)
    with PerformanceTimer("scan"):
        return list(scanner.scan(lines))


def tokenize(rules: Sequence[PatternRule], text: str,
             config: Optional[LexerConfig] = None,
             error_handler: Optional[ErrorHandler] = None) -> List[Token]:
    return tokenize_lines(rules, text.split("\n"), config, error_handler)


def tokenize_to_dataframe(rules: Sequence[PatternRule], text: str,
                          config: Optional[LexerConfig] = None,
                          error_handler: Optional[ErrorHandler] = None) -> pd.DataFrame:
    """Tokenize ``text`` and return the result stream as a DataFrame."""
    return tokens_to_dataframe(tokenize(rules, text, config, error_handler))
