"""
Rendering of the token stream and of the automaton's transition table.
"""

from typing import Iterable, List

import pandas as pd

from literal_lexer.matcher.dfa import DFA
from literal_lexer.tokens import Token

TOKEN_COLUMNS = ['line', 'category', 'lexeme']


def tokens_to_dataframe(tokens: Iterable[Token]) -> pd.DataFrame:
    """Result stream as a DataFrame with columns ``line``, ``category``, ``lexeme``."""
    records = [token.as_record() for token in tokens]
    df = pd.DataFrame.from_records(records, columns=TOKEN_COLUMNS)
    return df.astype({'line': 'int64', 'category': 'object', 'lexeme': 'object'})


def format_token_table(tokens: Iterable[Token]) -> str:
    """Tab-separated token table with a header row."""
    lines = ["\t".join(TOKEN_COLUMNS)]
    for line, category, lexeme in (token.as_record() for token in tokens):
        lines.append(f"{line}\t{category}\t{lexeme}")
    return "\n".join(lines)


def format_transition_table(dfa: DFA) -> str:
    """Human-readable dump of every state, its accepting category and its transitions."""
    lines: List[str] = ["===== Minimized DFA transition table ====="]
    for state in dfa.states:
        header = f"state {state.state_id}"
        if state.is_accept:
            header += f" [accept, {state.category.value}]"
        lines.append(header + " :")
        for symbol, target in sorted(state.transitions.items()):
            lines.append(f"   {symbol!r} -> {target}")
    lines.append(f"start state: {dfa.start}")
    lines.append("=" * 42)
    return "\n".join(lines)
