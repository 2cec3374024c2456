"""
Tie-break policies for competing accepting labels.

When two rules make the same automaton state accepting (identical literal
patterns, or subset states that merge several accepting NFA states) a
policy picks the surviving label. Policies are plain callables taking an
iterable of AcceptLabel and returning one of them.
"""

from dataclasses import dataclass
from typing import Callable, Dict, Iterable

from literal_lexer.errors import ConfigurationError
from literal_lexer.tokens import TokenCategory


@dataclass(frozen=True)
class AcceptLabel:
    """
    Accepting label carried by an automaton state.

    Attributes:
        category: Category recognized when the scan stops in this state
        rule_index: 0-based declaration position of the contributing rule
    """
    category: TokenCategory
    rule_index: int = 0


TieBreakPolicy = Callable[[Iterable[AcceptLabel]], AcceptLabel]


def lowest_category_ordinal(labels: Iterable[AcceptLabel]) -> AcceptLabel:
    """Prefer the category with the lowest ordinal (KEYWORD beats IDENTIFIER)."""
    return min(labels, key=lambda label: (label.category.ordinal, label.rule_index))


def first_declared_rule(labels: Iterable[AcceptLabel]) -> AcceptLabel:
    """Prefer the label of the rule declared first in the grammar."""
    return min(labels, key=lambda label: (label.rule_index, label.category.ordinal))


DEFAULT_TIE_BREAK = "category_ordinal"

TIE_BREAK_POLICIES: Dict[str, TieBreakPolicy] = {
    "category_ordinal": lowest_category_ordinal,
    "first_declared": first_declared_rule,
}


def get_tie_break_policy(name: str) -> TieBreakPolicy:
    """
    Look up a tie-break policy by name.

    Raises:
        ConfigurationError: If no policy is registered under ``name``
    """
    try:
        return TIE_BREAK_POLICIES[name]
    except KeyError:
        available = ", ".join(sorted(TIE_BREAK_POLICIES))
        raise ConfigurationError(
            f"Unknown tie-break policy '{name}' (available: {available})"
        ) from None
