"""
Fluent assertion interface for testing leaderboards.

This module provides a clean, fluent way to assert standings for testing
purposes. Players are selected by display name ("first / second" for teams).
It works with the pure Python scoring_core structures.
"""

from typing import Dict, List, Optional, Sequence
from dataclasses import dataclass

from golftour.scoring_core.engine import Leaderboard
from golftour.scoring_core.structure import AggregatedPlayer, SuddenDeathResult


# Use the built-in AssertionError for proper test framework integration


@dataclass
class LeaderboardAssertion:
    """Fluent interface for asserting a whole leaderboard."""

    leaderboard: Leaderboard

    def group(self, name: str) -> "GroupAssertion":
        """Select a group for assertions."""
        if name not in self.leaderboard.groups:
            raise AssertionError(f"Group '{name}' not found in leaderboard")
        return GroupAssertion(self.leaderboard, name)

    def progress(self, group: str, expected: int) -> "LeaderboardAssertion":
        actual = self.leaderboard.progress.get(group)
        if actual != expected:
            raise AssertionError(
                f"Group '{group}' expected progress {expected}%, got {actual}"
            )
        return self

    def failed_groups(self, *expected: str) -> "LeaderboardAssertion":
        if sorted(self.leaderboard.failed_groups) != sorted(expected):
            raise AssertionError(
                f"Expected failed groups {sorted(expected)}, "
                f"got {sorted(self.leaderboard.failed_groups)}"
            )
        return self

    def sudden_death(self, team: bool = False) -> "SuddenDeathAssertion":
        results = (
            self.leaderboard.team_sudden_death
            if team
            else self.leaderboard.individual_sudden_death
        )
        return SuddenDeathAssertion(results)


@dataclass
class GroupAssertion:
    """Assertions for one group of a leaderboard."""

    leaderboard: Leaderboard
    group_name: str

    @property
    def players(self) -> List[AggregatedPlayer]:
        return self.leaderboard.groups[self.group_name]

    def _find(self, name: str) -> AggregatedPlayer:
        for player in self.players:
            if player.player.display_name == name:
                return player
        raise AssertionError(f"Player '{name}' not found in group '{self.group_name}'")

    def player(self, name: str) -> "PlayerAssertion":
        """Select a player by display name."""
        return PlayerAssertion(self, self._find(name))

    def order(self, names: Sequence[str]) -> "GroupAssertion":
        """Assert the exact display order of the group."""
        actual = [p.player.display_name for p in self.players]
        if actual != list(names):
            raise AssertionError(
                f"Group '{self.group_name}' expected order {list(names)}, got {actual}"
            )
        return self

    def ranks(self, expected: Dict[str, Optional[int]]) -> "GroupAssertion":
        """Assert the rank of several players at once."""
        for name, rank in expected.items():
            self.player(name).rank(rank)
        return self

    def size(self, expected: int) -> "GroupAssertion":
        if len(self.players) != expected:
            raise AssertionError(
                f"Group '{self.group_name}' expected {expected} players, "
                f"got {len(self.players)}"
            )
        return self


@dataclass
class PlayerAssertion:
    """Fluent interface for asserting one player's standing."""

    group: GroupAssertion
    subject: AggregatedPlayer

    @property
    def _name(self) -> str:
        return self.subject.player.display_name

    def _check(self, what: str, expected, actual) -> "PlayerAssertion":
        if expected != actual:
            raise AssertionError(
                f"{self._name} expected {what} {expected}, got {actual}"
            )
        return self

    def rank(self, expected: Optional[int]) -> "PlayerAssertion":
        return self._check("rank", expected, self.subject.rank)

    def unranked(self) -> "PlayerAssertion":
        return self.rank(None)

    def total(self, expected: int) -> "PlayerAssertion":
        return self._check("total", expected, self.subject.total)

    def plus_minus(self, expected: Optional[int]) -> "PlayerAssertion":
        return self._check("plus/minus", expected, self.subject.plus_minus)

    def course_total(self, course_id: str, expected: int) -> "PlayerAssertion":
        return self._check(
            f"{course_id} total", expected, self.subject.course_total(course_id)
        )

    def forfeited(self, expected: bool = True) -> "PlayerAssertion":
        return self._check("forfeited", expected, self.subject.has_forfeited)

    def has_score(self, expected: bool = True) -> "PlayerAssertion":
        return self._check("has_any_score", expected, self.subject.has_any_score)

    def status(self, expected: str) -> "PlayerAssertion":
        return self._check("status", expected, self.subject.status)

    def player(self, name: str) -> "PlayerAssertion":
        """Switch to another player of the same group."""
        return self.group.player(name)


@dataclass
class SuddenDeathAssertion:
    """Assertions for sudden-death standings."""

    results: List[SuddenDeathResult]

    def order(self, names: Sequence[str]) -> "SuddenDeathAssertion":
        actual = [r.name for r in self.results]
        if actual != list(names):
            raise AssertionError(
                f"Sudden death expected order {list(names)}, got {actual}"
            )
        return self

    def rank(self, name: str, expected: int) -> "SuddenDeathAssertion":
        for result in self.results:
            if result.name == name:
                if result.rank != expected:
                    raise AssertionError(
                        f"{name} expected sudden death rank {expected}, "
                        f"got {result.rank}"
                    )
                return self
        raise AssertionError(f"Player '{name}' not found in sudden death")


def assert_leaderboard(leaderboard: Leaderboard) -> LeaderboardAssertion:
    """Create a fluent assertion interface for a leaderboard.

    Example:
        assert_leaderboard(board).group("Men").player("Kim").rank(1).plus_minus(-2)
    """
    return LeaderboardAssertion(leaderboard)
