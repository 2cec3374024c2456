"""
Deterministic automaton model and subset construction.

This module implements the Deterministic Finite Automaton handed to the
scanner, and DFABuilder, which converts any NondeterministicAutomaton into
an equivalent DFA by tracking reachable sets of source states.

Features:
- Immutable DFAState / DFA values (read-only transition mappings)
- Generic subset construction with epsilon closure
- Accepting labels resolved across subset members by a tie-break policy
- Construction statistics recorded in DFA.metadata
"""

from collections import deque
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Deque, Dict, FrozenSet, List, Mapping, Optional, Set, Tuple

from literal_lexer.matcher.automata import NondeterministicAutomaton, epsilon_closure
from literal_lexer.policies import AcceptLabel, TieBreakPolicy, lowest_category_ordinal
from literal_lexer.tokens import TokenCategory
from literal_lexer.utils.logging_config import get_logger, PerformanceTimer

# Module logger
logger = get_logger(__name__)

# Constants
FAIL_STATE = -1


@dataclass(frozen=True)
class DFAState:
    """
    Deterministic state.

    Attributes:
        state_id: Unique identifier, equal to the state's index in the DFA
        transitions: Symbol -> single successor state id (read-only)
        label: Accepting label, or None for a non-accepting state
        nfa_states: Source states this state was derived from
    """
    state_id: int
    transitions: Mapping[str, int] = field(default_factory=dict)
    label: Optional[AcceptLabel] = None
    nfa_states: FrozenSet[int] = frozenset()

    def __post_init__(self):
        if self.state_id < 0:
            raise ValueError(f"State id must be non-negative, got {self.state_id}")
        object.__setattr__(self, 'transitions', MappingProxyType(dict(self.transitions)))
        object.__setattr__(self, 'nfa_states', frozenset(self.nfa_states))

    def __hash__(self) -> int:
        # transitions is a mappingproxy, which is unhashable
        return hash((self.state_id, frozenset(self.transitions.items()), self.label, self.nfa_states))

    @property
    def is_accept(self) -> bool:
        return self.label is not None

    @property
    def category(self) -> Optional[TokenCategory]:
        return self.label.category if self.label is not None else None

    def next_state(self, symbol: str) -> int:
        """Successor on ``symbol``, or FAIL_STATE when there is no transition."""
        return self.transitions.get(symbol, FAIL_STATE)


@dataclass(frozen=True)
class DFA:
    """
    Immutable deterministic finite automaton. The start state always has id 0.

    Attributes:
        states: States indexed by id
        metadata: Construction statistics (read-only)
    """
    states: Tuple[DFAState, ...]
    metadata: Mapping[str, Any] = field(default_factory=dict)
    start: int = 0

    def __post_init__(self):
        states = tuple(self.states)
        if not states:
            raise ValueError("DFA must have at least one state")
        if self.start != 0:
            raise ValueError(f"Start state must have id 0, got {self.start}")
        for index, state in enumerate(states):
            if state.state_id != index:
                raise ValueError(f"State at index {index} has id {state.state_id}")
            for symbol, target in state.transitions.items():
                if not 0 <= target < len(states):
                    raise ValueError(f"State {index} has transition on {symbol!r} to missing state {target}")
        object.__setattr__(self, 'states', states)
        object.__setattr__(self, 'metadata', MappingProxyType(dict(self.metadata)))

    def __hash__(self) -> int:
        # metadata only records build statistics
        return hash((self.states, self.start))

    def __len__(self) -> int:
        return len(self.states)

    def alphabet(self) -> Tuple[str, ...]:
        """All input symbols observed anywhere in the automaton, sorted."""
        return tuple(sorted({symbol for state in self.states for symbol in state.transitions}))

    def step(self, state: int, symbol: str) -> int:
        return self.states[state].next_state(symbol)

    def run(self, text: str) -> Optional[TokenCategory]:
        """Category the automaton assigns to the whole of ``text``, or None if rejected."""
        state = self.start
        for symbol in text:
            state = self.step(state, symbol)
            if state == FAIL_STATE:
                return None
        return self.states[state].category

    def find_accepting_states(self) -> List[int]:
        return [state.state_id for state in self.states if state.is_accept]

    def get_reachable_states(self, from_state: Optional[int] = None) -> Set[int]:
        """States reachable from ``from_state`` (default: the start state)."""
        origin = self.start if from_state is None else from_state
        reachable = {origin}
        queue = deque([origin])
        while queue:
            current = queue.popleft()
            for target in self.states[current].transitions.values():
                if target not in reachable:
                    reachable.add(target)
                    queue.append(target)
        return reachable

    def get_live_states(self) -> Set[int]:
        """States from which some accepting state can be reached."""
        predecessors: Dict[int, Set[int]] = {state.state_id: set() for state in self.states}
        for state in self.states:
            for target in state.transitions.values():
                predecessors[target].add(state.state_id)

        live = set(self.find_accepting_states())
        queue = deque(live)
        while queue:
            current = queue.popleft()
            for source in predecessors[current]:
                if source not in live:
                    live.add(source)
                    queue.append(source)
        return live

    def transition_count(self) -> int:
        return sum(len(state.transitions) for state in self.states)

    def get_debug_info(self) -> Dict[str, Any]:
        return {
            'state_count': len(self.states),
            'transition_count': self.transition_count(),
            'accepting_states': self.find_accepting_states(),
            'alphabet': ''.join(self.alphabet()),
            'metadata': dict(self.metadata),
        }


class DFABuilder:
    """
    Subset construction over a NondeterministicAutomaton.

    A worklist of source-state sets starts with the epsilon closure of the
    start state. For every popped set and every symbol of the source
    alphabet, the union of successors (closed under epsilon) becomes a
    deterministic state, allocated on first sight and reused afterwards.
    """

    def __init__(self, nfa: NondeterministicAutomaton, tie_break: Optional[TieBreakPolicy] = None):
        if len(nfa) == 0:
            raise ValueError("Source automaton must have at least one state")
        self.nfa = nfa
        self.tie_break = tie_break or lowest_category_ordinal
        self.build_stats = {
            'nfa_state_count': len(nfa),
            'dfa_state_count': 0,
            'iterations': 0,
            'alphabet_size': 0,
        }

    def build(self) -> DFA:
        """
        Build the deterministic automaton.

        Returns:
            DFA: Equivalent automaton; state 0 corresponds to the start closure
        """
        with PerformanceTimer("subset construction"):
            symbols = self.nfa.alphabet()
            initial = epsilon_closure(self.nfa, [self.nfa.start])

            state_map: Dict[FrozenSet[int], int] = {initial: 0}
            subsets: List[FrozenSet[int]] = [initial]
            transitions: List[Dict[str, int]] = [{}]
            queue: Deque[FrozenSet[int]] = deque([initial])
            iterations = 0

            while queue:
                current = queue.popleft()
                current_id = state_map[current]
                iterations += 1

                for symbol in symbols:
                    moved = set()
                    for nfa_state in current:
                        moved.update(self.nfa.successors(nfa_state, symbol))
                    if not moved:
                        continue
                    target = epsilon_closure(self.nfa, moved)

                    target_id = state_map.get(target)
                    if target_id is None:
                        target_id = len(subsets)
                        state_map[target] = target_id
                        subsets.append(target)
                        transitions.append({})
                        queue.append(target)
                    transitions[current_id][symbol] = target_id

            states = tuple(
                DFAState(
                    state_id=index,
                    transitions=transitions[index],
                    label=self._resolve_label(subset),
                    nfa_states=subset,
                )
                for index, subset in enumerate(subsets)
            )

            self.build_stats.update({
                'dfa_state_count': len(states),
                'iterations': iterations,
                'alphabet_size': len(symbols),
            })

        logger.info(f"DFA construction completed: {len(self.nfa)} NFA states -> "
                    f"{len(states)} DFA states, {iterations} iterations")
        return DFA(states=states, metadata=dict(self.build_stats))

    def _resolve_label(self, subset: FrozenSet[int]) -> Optional[AcceptLabel]:
        """Label of a subset state: the tie-break winner among accepting members."""
        labels = [label for label in (self.nfa.label_of(s) for s in sorted(subset)) if label is not None]
        if not labels:
            return None
        return self.tie_break(labels)
