"""
Configurable scoring rules for stroke-play tournaments.

This module defines the constants the engine works with: how many holes a
course has, which stroke value marks a forfeited hole, and how large the
comparator cache may grow.
"""

from dataclasses import dataclass


HOLES_PER_COURSE = 9
FORFEIT_SCORE = 0
DEFAULT_CACHE_SIZE = 10000
UNASSIGNED_GROUP = "Unassigned"


@dataclass(frozen=True)
class ScoringRules:
    """Defines how hole scores are interpreted and how rankings are computed."""

    holes_per_course: int = HOLES_PER_COURSE
    forfeit_score: int = FORFEIT_SCORE

    # Ranking session
    cache_size: int = DEFAULT_CACHE_SIZE
    unassigned_group: str = UNASSIGNED_GROUP

    @property
    def holes(self) -> range:
        """Hole numbers of a course, 1-based."""
        return range(1, self.holes_per_course + 1)

    @property
    def holes_reversed(self) -> range:
        """Hole numbers walked from the last hole back to the first."""
        return range(self.holes_per_course, 0, -1)

    def is_forfeit(self, score: int) -> bool:
        return score == self.forfeit_score


STANDARD_RULES = ScoringRules()

# Ranking without memoized comparisons; useful to check the cache changes nothing
UNCACHED_RULES = ScoringRules(cache_size=0)
