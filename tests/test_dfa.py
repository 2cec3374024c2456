"""
Tests for subset construction (determinization) and the DFA value type.
"""

import dataclasses

import pytest

from literal_lexer.matcher.automata import NFA, NFABuilder, NFAState
from literal_lexer.matcher.dfa import DFA, DFABuilder, DFAState, FAIL_STATE
from literal_lexer.policies import AcceptLabel, first_declared_rule
from literal_lexer.tokens import PatternRule, TokenCategory

K = TokenCategory.KEYWORD
I = TokenCategory.IDENTIFIER
O = TokenCategory.OPERATOR


def branching_nfa():
    """a(b|c) with different categories on each branch, built with real nondeterminism."""
    states = [NFAState(i) for i in range(5)]
    states[0].add_transition("a", 1)
    states[0].add_transition("a", 3)
    states[1].add_transition("b", 2)
    states[3].add_transition("c", 4)
    states[2].label = AcceptLabel(K, 0)
    states[4].label = AcceptLabel(I, 1)
    return NFA(states)


class TestDFABuilder:

    def test_trie_input_visits_one_set_per_state(self, c_like_rules):
        nfa = NFABuilder().build(c_like_rules)
        dfa = DFABuilder(nfa).build()
        assert len(dfa) == len(nfa)
        assert dfa.metadata['nfa_state_count'] == len(nfa)
        assert dfa.metadata['dfa_state_count'] == len(dfa)
        assert dfa.metadata['iterations'] == len(nfa)

    def test_start_state_is_zero(self, keyword_rules):
        dfa = DFABuilder(NFABuilder().build(keyword_rules)).build()
        assert dfa.start == 0
        assert dfa.states[0].nfa_states == frozenset({0})

    def test_transitions_are_functions(self, c_like_rules):
        dfa = DFABuilder(NFABuilder().build(c_like_rules)).build()
        for state in dfa.states:
            for target in state.transitions.values():
                assert isinstance(target, int)

    def test_accepts_same_strings_as_patterns(self, c_like_rules):
        dfa = DFABuilder(NFABuilder().build(c_like_rules)).build()
        for rule in c_like_rules:
            assert dfa.run(rule.pattern) is rule.category
        assert dfa.run("ret") is None
        assert dfa.run("intx") is None

    def test_genuine_nondeterminism(self):
        dfa = DFABuilder(branching_nfa()).build()
        assert len(dfa) == 4
        assert dfa.states[1].nfa_states == frozenset({1, 3})
        assert dfa.run("ab") is K
        assert dfa.run("ac") is I
        assert dfa.run("a") is None

    def test_epsilon_edges_are_closed_over(self):
        states = [NFAState(i) for i in range(3)]
        states[0].add_epsilon(1)
        states[1].add_transition("x", 2)
        states[2].label = AcceptLabel(O, 0)
        dfa = DFABuilder(NFA(states)).build()
        assert dfa.states[0].nfa_states == frozenset({0, 1})
        assert dfa.run("x") is O

    def test_accepting_start_through_epsilon(self):
        states = [NFAState(0), NFAState(1)]
        states[0].add_epsilon(1)
        states[1].label = AcceptLabel(K, 0)
        dfa = DFABuilder(NFA(states)).build()
        assert dfa.states[0].category is K

    def test_subset_label_uses_tie_break(self):
        states = [NFAState(i) for i in range(3)]
        states[0].add_transition("a", 1)
        states[0].add_transition("a", 2)
        states[1].label = AcceptLabel(I, 0)
        states[2].label = AcceptLabel(K, 1)
        nfa = NFA(states)

        assert DFABuilder(nfa).build().run("a") is K
        assert DFABuilder(nfa, first_declared_rule).build().run("a") is I


class TestDFAValue:

    def test_dfa_is_frozen(self, keyword_rules):
        dfa = DFABuilder(NFABuilder().build(keyword_rules)).build()
        with pytest.raises(dataclasses.FrozenInstanceError):
            dfa.start = 1
        with pytest.raises(TypeError):
            dfa.states[0].transitions["z"] = 1
        with pytest.raises(TypeError):
            dfa.metadata["x"] = 1
        assert isinstance(dfa.states, tuple)

    def test_missing_transition_is_fail_state(self):
        dfa = DFA(states=(DFAState(0),))
        assert dfa.step(0, "a") == FAIL_STATE
        assert dfa.run("a") is None
        assert dfa.run("") is None

    def test_rejects_dangling_targets(self):
        with pytest.raises(ValueError):
            DFA(states=(DFAState(0, {"a": 2}),))

    def test_rejects_empty(self):
        with pytest.raises(ValueError):
            DFA(states=())

    def test_reachable_and_live_states(self):
        dfa = DFA(states=(
            DFAState(0, {"a": 1, "b": 2}),
            DFAState(1, label=AcceptLabel(K)),
            DFAState(2, {"c": 2}),
            DFAState(3, {"a": 1}),
        ))
        assert dfa.get_reachable_states() == {0, 1, 2}
        assert dfa.get_live_states() == {0, 1, 3}

    def test_debug_info(self, keyword_rules):
        dfa = DFABuilder(NFABuilder().build(keyword_rules)).build()
        info = dfa.get_debug_info()
        assert info['state_count'] == len(dfa)
        assert info['transition_count'] == len(dfa) - 1
        assert info['metadata']['alphabet_size'] == len(dfa.alphabet())

    def test_states_and_automaton_are_hashable(self, keyword_rules):
        first = DFABuilder(NFABuilder().build(keyword_rules)).build()
        second = DFABuilder(NFABuilder().build(keyword_rules)).build()
        assert hash(first.states[0]) == hash(second.states[0])
        assert len({first.states[0], second.states[0]}) == 1
        assert hash(first) == hash(second)
        assert {first: "compiled"}[first] == "compiled"
