"""Property-based tests for automaton invariants using Hypothesis.

These tests verify that construction, determinization and minimization
preserve the categorized language regardless of the grammar.
"""

from hypothesis import given, settings
from hypothesis import strategies as st

from literal_lexer.errors import ErrorHandler
from literal_lexer.matcher.automata import NFABuilder
from literal_lexer.matcher.dfa import DFABuilder
from literal_lexer.matcher.minimizer import minimize
from literal_lexer.scanner import Scanner
from literal_lexer.tokens import PatternRule, TokenCategory

ALPHABET = "ab=;"

rules_strategy = st.lists(
    st.builds(
        PatternRule,
        st.sampled_from(list(TokenCategory)),
        st.text(alphabet=ALPHABET, min_size=1, max_size=4),
    ),
    max_size=8,
)
input_strategy = st.text(alphabet=ALPHABET + "x", max_size=8)


def expected_category(rules, text):
    """Category a literal grammar assigns to ``text`` under the ordinal tie-break."""
    matches = [rule.category for rule in rules if rule.pattern == text]
    return min(matches, key=lambda c: c.ordinal) if matches else None


class TestConstructionInvariants:

    @given(rules_strategy, input_strategy)
    @settings(max_examples=200)
    def test_dfa_recognizes_exactly_the_patterns(self, rules, text):
        dfa = DFABuilder(NFABuilder().build(rules)).build()
        assert dfa.run(text) == expected_category(rules, text)

    @given(rules_strategy, st.lists(input_strategy, max_size=10))
    @settings(max_examples=200)
    def test_minimization_preserves_language(self, rules, texts):
        dfa = DFABuilder(NFABuilder().build(rules)).build()
        minimized = minimize(dfa)
        assert len(minimized) <= len(dfa)
        for text in texts:
            assert minimized.run(text) == dfa.run(text)
        for rule in rules:
            assert minimized.run(rule.pattern) == dfa.run(rule.pattern)

    @given(rules_strategy)
    @settings(max_examples=100)
    def test_minimization_is_idempotent(self, rules):
        once = minimize(DFABuilder(NFABuilder().build(rules)).build())
        assert len(minimize(once)) == len(once)

    @given(rules_strategy)
    @settings(max_examples=100)
    def test_rebuild_is_isomorphic(self, rules):
        first = minimize(DFABuilder(NFABuilder().build(rules)).build())
        second = minimize(DFABuilder(NFABuilder().build(rules)).build())
        assert [(dict(s.transitions), s.category) for s in first.states] == \
            [(dict(s.transitions), s.category) for s in second.states]


class TestScannerInvariants:

    @given(rules_strategy, st.lists(input_strategy, max_size=5))
    @settings(max_examples=200)
    def test_tokens_and_errors_cover_every_character(self, rules, lines):
        """Each non-whitespace character is consumed by a token or reported exactly once."""
        handler = ErrorHandler()
        dfa = minimize(DFABuilder(NFABuilder().build(rules)).build())
        tokens = list(Scanner(dfa, error_handler=handler).scan(lines))

        consumed = sum(len(token.lexeme) for token in tokens) + len(handler.get_errors())
        assert consumed == sum(len(line) for line in lines)
        for token in tokens:
            assert 1 <= token.line <= len(lines)
            assert token.lexeme in lines[token.line - 1]
            assert expected_category(rules, token.lexeme) is token.category

    @given(rules_strategy, input_strategy)
    @settings(max_examples=200)
    def test_minimized_and_unminimized_scans_agree(self, rules, text):
        dfa = DFABuilder(NFABuilder().build(rules)).build()
        assert Scanner(dfa).tokenize(text) == Scanner(minimize(dfa)).tokenize(text)
