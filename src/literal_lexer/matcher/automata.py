"""
Nondeterministic automaton model and the literal pattern builder.

This module implements the possibly-nondeterministic automaton that the
determinization stage consumes. Transitions map a symbol to a *set* of
successor states and states may carry epsilon edges, so grammars with
alternation or repetition can be compiled into the same model later.

Features:
- NondeterministicAutomaton protocol, the interface DFABuilder depends on
- NFAState / NFA with set-valued transitions and epsilon edges
- NFABuilder: prefix-sharing (trie) construction from literal rules
- Configurable tie-break policy for states accepted by several rules
"""

from typing import (
    Dict, FrozenSet, Iterable, Iterator, List, Optional, Protocol, Sequence, Set, Tuple
)

from literal_lexer.policies import AcceptLabel, TieBreakPolicy, lowest_category_ordinal
from literal_lexer.tokens import PatternRule
from literal_lexer.utils.logging_config import get_logger

# Module logger
logger = get_logger(__name__)

# Type aliases for better readability
StateIndex = int
Symbol = str


class NondeterministicAutomaton(Protocol):
    """
    Interface of an automaton whose transitions map (state, symbol) to a set of states.

    State ids are contiguous integers from 0 to ``len(automaton) - 1``.
    """

    start: StateIndex

    def __len__(self) -> int: ...

    def alphabet(self) -> Tuple[Symbol, ...]: ...

    def successors(self, state: StateIndex, symbol: Symbol) -> FrozenSet[StateIndex]: ...

    def epsilon_targets(self, state: StateIndex) -> FrozenSet[StateIndex]: ...

    def label_of(self, state: StateIndex) -> Optional[AcceptLabel]: ...


class NFAState:
    """
    State of a nondeterministic automaton.

    Attributes:
        state_id: Unique identifier, equal to the state's index in the NFA
        transitions: Symbol -> set of successor state ids
        epsilon: Successor state ids reachable without consuming input
        label: Accepting label, or None for a non-accepting state
    """

    def __init__(self, state_id: int):
        if state_id < 0:
            raise ValueError(f"State id must be non-negative, got {state_id}")
        self.state_id = state_id
        self.transitions: Dict[Symbol, Set[StateIndex]] = {}
        self.epsilon: Set[StateIndex] = set()
        self.label: Optional[AcceptLabel] = None

    @property
    def is_accept(self) -> bool:
        return self.label is not None

    def add_transition(self, symbol: Symbol, target: StateIndex) -> None:
        """Add ``target`` to the successor set of ``symbol``."""
        if not isinstance(symbol, str) or len(symbol) != 1:
            raise ValueError(f"Transition symbol must be a single character, got {symbol!r}")
        if target < 0:
            raise ValueError(f"Target state index must be non-negative, got {target}")
        self.transitions.setdefault(symbol, set()).add(target)

    def add_epsilon(self, target: StateIndex) -> None:
        if target < 0:
            raise ValueError(f"Epsilon target must be non-negative, got {target}")
        self.epsilon.add(target)

    def __repr__(self) -> str:
        edges = {symbol: sorted(targets) for symbol, targets in sorted(self.transitions.items())}
        return f"NFAState(id={self.state_id}, label={self.label}, transitions={edges})"


class NFA:
    """
    Nondeterministic finite automaton with a single start state (id 0).

    Implements the NondeterministicAutomaton protocol. Acceptance is carried
    per state as an AcceptLabel rather than by a single accept state, since
    every pattern terminus is accepting with its own category.
    """

    def __init__(self, states: List[NFAState], start: StateIndex = 0):
        if not states:
            raise ValueError("NFA must have at least one state")
        if start != 0:
            raise ValueError(f"Start state must have id 0, got {start}")
        self.states = states
        self.start = start
        self.validate()

    def __len__(self) -> int:
        return len(self.states)

    def __iter__(self) -> Iterator[NFAState]:
        return iter(self.states)

    def validate(self) -> None:
        """
        Check that state ids are contiguous and every edge targets an existing state.

        Raises:
            ValueError: If the structure is inconsistent
        """
        count = len(self.states)
        for index, state in enumerate(self.states):
            if state.state_id != index:
                raise ValueError(f"State at index {index} has id {state.state_id}")
            for symbol, targets in state.transitions.items():
                for target in targets:
                    if target >= count:
                        raise ValueError(
                            f"State {index} has transition on {symbol!r} to missing state {target}")
            for target in state.epsilon:
                if target >= count:
                    raise ValueError(f"State {index} has epsilon edge to missing state {target}")

    def alphabet(self) -> Tuple[Symbol, ...]:
        """All input symbols observed anywhere in the automaton, sorted."""
        return tuple(sorted({symbol for state in self.states for symbol in state.transitions}))

    def successors(self, state: StateIndex, symbol: Symbol) -> FrozenSet[StateIndex]:
        return frozenset(self.states[state].transitions.get(symbol, ()))

    def epsilon_targets(self, state: StateIndex) -> FrozenSet[StateIndex]:
        return frozenset(self.states[state].epsilon)

    def label_of(self, state: StateIndex) -> Optional[AcceptLabel]:
        return self.states[state].label

    def epsilon_closure(self, state_indices: Iterable[StateIndex]) -> FrozenSet[StateIndex]:
        """Compute the set of states reachable from ``state_indices`` through epsilon edges."""
        return epsilon_closure(self, state_indices)

    def accepting_states(self) -> List[StateIndex]:
        return [state.state_id for state in self.states if state.is_accept]

    def get_debug_info(self) -> Dict[str, object]:
        return {
            'state_count': len(self.states),
            'transition_count': sum(len(t) for s in self.states for t in s.transitions.values()),
            'epsilon_count': sum(len(s.epsilon) for s in self.states),
            'accepting_states': self.accepting_states(),
            'alphabet': ''.join(self.alphabet()),
        }


def epsilon_closure(automaton: NondeterministicAutomaton,
                    state_indices: Iterable[StateIndex]) -> FrozenSet[StateIndex]:
    """Epsilon closure over any NondeterministicAutomaton."""
    closure = set(state_indices)
    stack = list(closure)
    while stack:
        state = stack.pop()
        for target in automaton.epsilon_targets(state):
            if target not in closure:
                closure.add(target)
                stack.append(target)
    return frozenset(closure)


class NFABuilder:
    """
    Builds a prefix-sharing automaton (a trie with accepting labels) from literal rules.

    Each pattern is walked from the shared start state; an existing edge for
    the current character is followed, otherwise a new state is allocated.
    The terminus of the pattern becomes accepting; when it already is, the
    tie-break policy decides which label survives.
    """

    def __init__(self, tie_break: Optional[TieBreakPolicy] = None):
        self.tie_break = tie_break or lowest_category_ordinal
        self.states: List[NFAState] = []

    def new_state(self) -> StateIndex:
        state_id = len(self.states)
        self.states.append(NFAState(state_id))
        return state_id

    def build(self, rules: Sequence[PatternRule]) -> NFA:
        """
        Build an NFA recognizing every rule's pattern.

        Args:
            rules: Ordered grammar rules; the position of a rule is its declaration index

        Returns:
            NFA: Automaton whose start state has id 0
        """
        self.states = []
        start = self.new_state()

        for rule_index, rule in enumerate(rules):
            current = start
            for char in rule.pattern:
                targets = self.states[current].transitions.get(char)
                if targets:
                    # Trie construction never branches: exactly one successor.
                    current = next(iter(targets))
                else:
                    target = self.new_state()
                    self.states[current].add_transition(char, target)
                    current = target
            self._mark_accepting(current, AcceptLabel(rule.category, rule_index))

        nfa = NFA(self.states, start=start)
        logger.debug(f"Built pattern automaton from {len(rules)} rules: {len(nfa)} states")
        return nfa

    def _mark_accepting(self, state_id: StateIndex, label: AcceptLabel) -> None:
        state = self.states[state_id]
        if state.label is None:
            state.label = label
            return
        resolved = self.tie_break([state.label, label])
        if resolved != state.label:
            logger.debug(f"State {state_id}: label {state.label} replaced by {resolved}")
        state.label = resolved
