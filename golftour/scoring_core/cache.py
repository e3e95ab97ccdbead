"""
Memoization of pairwise tiebreak comparisons.

A full-table re-sort compares the same pairs over and over; the cache keeps
their results for the lifetime of one ranking pass. Keys hold player IDs and
the course ID list, not scores, so a cache must be cleared whenever scores or
the course order change.
"""

import logging
from collections import OrderedDict
from typing import Callable, Sequence, Tuple

from golftour.scoring_core.scoring import DEFAULT_CACHE_SIZE
from golftour.scoring_core.structure import AggregatedPlayer, Course
from golftour.scoring_core.tiebreaks import compare_players

logger = logging.getLogger(__name__)

Comparator = Callable[[AggregatedPlayer, AggregatedPlayer, Sequence[Course]], int]
CacheKey = Tuple[str, str, Tuple[str, ...]]


class ComparatorCache:
    """Bounded cache of comparator results with insertion-order eviction."""

    def __init__(
        self,
        max_size: int = DEFAULT_CACHE_SIZE,
        comparator: Comparator = compare_players,
    ):
        self.max_size = max_size
        self.comparator = comparator
        self._entries: "OrderedDict[CacheKey, int]" = OrderedDict()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: CacheKey) -> bool:
        return key in self._entries

    def clear(self) -> None:
        if self._entries:
            logger.debug(
                "Clearing comparator cache: %d entries, %d hits, %d misses",
                len(self._entries),
                self.hits,
                self.misses,
            )
        self._entries.clear()
        self.hits = 0
        self.misses = 0

    def _store(self, key: CacheKey, result: int) -> None:
        if self.max_size <= 0:
            return
        if key not in self._entries and len(self._entries) >= self.max_size:
            self._entries.popitem(last=False)
        self._entries[key] = result

    def compare(
        self,
        a: AggregatedPlayer,
        b: AggregatedPlayer,
        courses_reversed: Sequence[Course],
    ) -> int:
        """Compare two players, reusing a cached result for the pair if there is one."""
        course_ids = tuple(course.course_id for course in courses_reversed)
        key = (a.player_id, b.player_id, course_ids)

        if key in self._entries:
            self.hits += 1
            return self._entries[key]

        reverse_key = (b.player_id, a.player_id, course_ids)
        if reverse_key in self._entries:
            self.hits += 1
            result = -self._entries[reverse_key]
            self._store(key, result)
            return result

        self.misses += 1
        result = self.comparator(a, b, courses_reversed)
        self._store(key, result)
        return result

    __call__ = compare
