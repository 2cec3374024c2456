"""
LRU cache of compiled automata.

Compiling a grammar (build, determinize, minimize) is deterministic, so
the minimized DFA for a given rule list and tie-break policy can be reused
across scans. Entries are evicted least-recently-used first.
"""

import hashlib
import threading
import time
from collections import OrderedDict
from typing import Any, Dict, Optional, Sequence

from literal_lexer.matcher.dfa import DFA
from literal_lexer.tokens import PatternRule

DEFAULT_CACHE_SIZE = 128


class AutomatonCache:
    """
    Thread-safe LRU cache mapping a grammar key to its minimized DFA.
    """
    def __init__(self, max_size: int = DEFAULT_CACHE_SIZE):
        self.cache: "OrderedDict[str, DFA]" = OrderedDict()
        self.max_size = max_size
        self.lock = threading.RLock()
        self.stats = {
            'hits': 0,
            'misses': 0,
            'evictions': 0,
            'last_reset': time.time()
        }

    def get(self, key: str) -> Optional[DFA]:
        with self.lock:
            if key in self.cache:
                self.cache.move_to_end(key)
                self.stats['hits'] += 1
                return self.cache[key]
            self.stats['misses'] += 1
            return None

    def put(self, key: str, dfa: DFA) -> None:
        with self.lock:
            self.cache[key] = dfa
            self.cache.move_to_end(key)
            while len(self.cache) > self.max_size:
                self.cache.popitem(last=False)
                self.stats['evictions'] += 1

    def resize(self, new_size: int) -> None:
        """Resize the cache, removing oldest entries if necessary."""
        with self.lock:
            self.max_size = new_size
            while len(self.cache) > new_size:
                self.cache.popitem(last=False)
                self.stats['evictions'] += 1

    def clear(self) -> None:
        """Clear the cache and reset statistics."""
        with self.lock:
            self.cache.clear()
            self.stats.update({'hits': 0, 'misses': 0, 'evictions': 0, 'last_reset': time.time()})

    def __len__(self) -> int:
        return len(self.cache)

    def get_stats(self) -> Dict[str, Any]:
        """Get a copy of current cache statistics."""
        with self.lock:
            stats_copy = self.stats.copy()
            total_lookups = stats_copy['hits'] + stats_copy['misses']
            stats_copy['cache_efficiency'] = (stats_copy['hits'] / total_lookups * 100) if total_lookups else 0.0
            stats_copy['size'] = len(self.cache)
            stats_copy['max_size'] = self.max_size
            return stats_copy


def get_cache_key(rules: Sequence[PatternRule], tie_break: str) -> str:
    """
    Generate a consistent cache key for a rule list.

    Args:
        rules: Grammar rules in declaration order
        tie_break: Name of the tie-break policy used to compile them

    Returns:
        A hash string to use as a cache key
    """
    digest = hashlib.sha256()
    digest.update(tie_break.encode("utf-8"))
    for rule in rules:
        # Length prefix keeps ("a", "bc") distinct from ("ab", "c").
        pattern = rule.pattern.encode("utf-8")
        digest.update(b"\0" + rule.category.value.encode("utf-8") + b"\0")
        digest.update(str(len(pattern)).encode("ascii") + b":" + pattern)
    return digest.hexdigest()


# Global cache instance
_AUTOMATON_CACHE = AutomatonCache()


def get_automaton_cache() -> AutomatonCache:
    return _AUTOMATON_CACHE


def clear_automaton_cache() -> None:
    _AUTOMATON_CACHE.clear()


def get_cache_stats() -> Dict[str, Any]:
    return _AUTOMATON_CACHE.get_stats()
