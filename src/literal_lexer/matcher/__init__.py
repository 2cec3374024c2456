# src/literal_lexer/matcher/__init__.py

from .automata import NFA, NFABuilder, NFAState, NondeterministicAutomaton, epsilon_closure
from .dfa import DFA, DFABuilder, DFAState, FAIL_STATE
from .minimizer import DFAMinimizer, minimize

__all__ = [
    'NFA',
    'NFABuilder',
    'NFAState',
    'NondeterministicAutomaton',
    'epsilon_closure',
    'DFA',
    'DFABuilder',
    'DFAState',
    'FAIL_STATE',
    'DFAMinimizer',
    'minimize',
]
