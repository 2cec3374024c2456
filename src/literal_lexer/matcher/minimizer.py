"""
DFA minimization by iterative partition refinement.

States are first grouped by accepting category (plus one group of
non-accepting states). Each round computes, for every state, the tuple of
group indices its transitions lead to over the whole alphabet, and splits
groups whose members disagree. The fixpoint partition yields the smallest
DFA assigning every input the same category as the original.
"""

from collections import defaultdict
from typing import Dict, List, Optional, Tuple

import numpy as np

from literal_lexer.matcher.dfa import DFA, DFAState, FAIL_STATE
from literal_lexer.tokens import TokenCategory
from literal_lexer.utils.logging_config import get_logger, PerformanceTimer

logger = get_logger(__name__)


class DFAMinimizer:
    """Partition-refinement minimizer producing a new, minimal DFA."""

    def __init__(self, dfa: DFA):
        self.dfa = dfa
        self.rounds = 0

    def minimize(self) -> DFA:
        with PerformanceTimer("DFA minimization"):
            kept = self._useful_states()
            symbols = self.dfa.alphabet()
            table = self._transition_matrix(kept, symbols)

            partitions = self._compute_initial_partitions(kept)
            partitions = self._refine(partitions, table)
            minimized = self._apply_partition_merging(partitions, kept, symbols, table)

        logger.info(f"DFA minimization completed in {self.rounds} rounds: "
                    f"{len(self.dfa)} -> {len(minimized)} states")
        return minimized

    def _useful_states(self) -> List[int]:
        """Reachable states that can still reach acceptance; the start state is always kept."""
        reachable = self.dfa.get_reachable_states()
        live = self.dfa.get_live_states()
        useful = sorted(s for s in reachable if s in live or s == self.dfa.start)
        removed = len(self.dfa) - len(useful)
        if removed:
            logger.debug(f"Removing {removed} unreachable or dead states")
        return useful

    def _transition_matrix(self, kept: List[int], symbols: Tuple[str, ...]) -> np.ndarray:
        """
        Dense ``len(kept) x len(symbols)`` matrix of successor positions in ``kept``.

        Missing transitions, and transitions into removed states, hold FAIL_STATE.
        """
        position = {state_id: index for index, state_id in enumerate(kept)}
        column = {symbol: index for index, symbol in enumerate(symbols)}
        table = np.full((len(kept), len(symbols)), FAIL_STATE, dtype=np.int64)
        for row, state_id in enumerate(kept):
            for symbol, target in self.dfa.states[state_id].transitions.items():
                if target in position:
                    table[row, column[symbol]] = position[target]
        return table

    def _compute_initial_partitions(self, kept: List[int]) -> List[List[int]]:
        """One group per accepting category plus one for non-accepting states (rows of ``kept``)."""
        groups: Dict[Optional[TokenCategory], List[int]] = defaultdict(list)
        for row, state_id in enumerate(kept):
            groups[self.dfa.states[state_id].category].append(row)

        def group_order(category: Optional[TokenCategory]) -> int:
            return -1 if category is None else category.ordinal

        return [groups[category] for category in sorted(groups, key=group_order)]

    def _refine(self, partitions: List[List[int]], table: np.ndarray) -> List[List[int]]:
        """Split groups by transition signature until a round splits nothing."""
        self.rounds = 0
        while True:
            self.rounds += 1
            block_of = np.empty(table.shape[0] + 1, dtype=np.int64)
            for index, group in enumerate(partitions):
                block_of[group] = index
            # FAIL_STATE (-1) indexes the trailing sentinel slot.
            block_of[-1] = FAIL_STATE
            signatures = block_of[table]

            new_partitions: List[List[int]] = []
            for group in partitions:
                if len(group) == 1:
                    new_partitions.append(group)
                    continue
                split: Dict[Tuple[int, ...], List[int]] = {}
                for row in group:
                    split.setdefault(tuple(signatures[row].tolist()), []).append(row)
                new_partitions.extend(split.values())

            if len(new_partitions) == len(partitions):
                return partitions
            partitions = new_partitions

    def _apply_partition_merging(self, partitions: List[List[int]], kept: List[int],
                                 symbols: Tuple[str, ...], table: np.ndarray) -> DFA:
        """Build the output DFA: one state per group, the start group first."""
        start_row = kept.index(self.dfa.start)
        ordered = sorted(partitions, key=lambda group: (start_row not in group, min(group)))

        new_id = {}
        for index, group in enumerate(ordered):
            for row in group:
                new_id[row] = index

        states = []
        for index, group in enumerate(ordered):
            representative = min(group)
            original = self.dfa.states[kept[representative]]
            transitions = {
                symbol: new_id[int(target)]
                for symbol, target in zip(symbols, table[representative])
                if target != FAIL_STATE
            }
            merged_sources = frozenset().union(*(self.dfa.states[kept[row]].nfa_states for row in group))
            states.append(DFAState(
                state_id=index,
                transitions=transitions,
                label=original.label,
                nfa_states=merged_sources,
            ))

        metadata = dict(self.dfa.metadata)
        metadata.update({
            'original_state_count': len(self.dfa),
            'minimized_state_count': len(states),
            'refinement_rounds': self.rounds,
        })
        return DFA(states=tuple(states), metadata=metadata)


def minimize(dfa: DFA) -> DFA:
    """Return the minimal DFA equivalent to ``dfa``."""
    return DFAMinimizer(dfa).minimize()
