"""
Simulated tournaments for rehearsing the leaderboard before an event.

The simulator registers a roster of fake players (Faker), assigns them to
groups and jo (playing parties of four), and enters random hole scores around
par. The result is the raw record dict the scoring backend would hold, ready
for snapshot_from_raw or for writing to a JSON file.
"""

import logging
import random
from typing import Any, Dict, List, Optional, Sequence

from faker import Faker

from golftour.scoring_core.builder import SnapshotBuilder
from golftour.scoring_core.scoring import HOLES_PER_COURSE

logger = logging.getLogger(__name__)

PLAYERS_PER_JO = 4

SIMULATED_COURSES = {
    "A": (4, 4, 3, 5, 4, 4, 3, 4, 5),
    "B": (4, 3, 5, 4, 4, 3, 4, 5, 4),
    "C": (5, 4, 4, 3, 4, 4, 5, 3, 4),
    "D": (4, 5, 3, 4, 4, 5, 4, 3, 4),
}

# group name -> (player type, courses in playing order)
SIMULATED_GROUPS = {
    "Men": ("individual", ("A", "B")),
    "Women": ("individual", ("C", "D")),
    "Pairs": ("team", ("A", "B", "C", "D")),
}


def simulate_hole_score(par: Optional[int], rng: random.Random) -> int:
    """A stroke count within two of par, never below 1 or above 9.

    Args:
        par: Par of the hole; holes without a par are played as par 4
        rng: Random source
    """
    par = par or 4
    return max(1, min(9, par + rng.randint(-2, 2)))


class TournamentSimulator:
    """Generate a random tournament snapshot."""

    def __init__(self, seed: Optional[int] = None, locale: str = "en_US"):
        self.rng = random.Random(seed)
        self.fake = Faker(locale)
        if seed is not None:
            self.fake.seed_instance(seed)

    def _unique_name(self) -> str:
        return self.fake.unique.name()

    def _build_field(
        self, builder: SnapshotBuilder, individuals: int, teams: int
    ) -> Dict[str, List[str]]:
        """Register players and teams; returns group name -> player names."""
        roster: Dict[str, List[str]] = {name: [] for name in SIMULATED_GROUPS}
        individual_groups = [
            name for name, (kind, _) in SIMULATED_GROUPS.items() if kind != "team"
        ]
        team_groups = [
            name for name, (kind, _) in SIMULATED_GROUPS.items() if kind == "team"
        ]

        for index in range(individuals):
            group = individual_groups[index % len(individual_groups)]
            name = self._unique_name()
            jo = len(roster[group]) // PLAYERS_PER_JO + 1
            builder.player(name, group, jo=jo, affiliation=self.fake.company())
            roster[group].append(name)

        for index in range(teams):
            group = team_groups[index % len(team_groups)]
            first, second = self._unique_name(), self._unique_name()
            jo = len(roster[group]) // PLAYERS_PER_JO + 1
            club = self.fake.company()
            builder.team(first, second, group, jo=jo, affiliations=(club, club))
            roster[group].append(f"{first} / {second}")

        return roster

    def _enter_scores(
        self,
        builder: SnapshotBuilder,
        name: str,
        course_ids: Sequence[str],
        forfeit_rate: float,
        completion: float,
    ) -> int:
        """Enter one player's scores; returns the number of cells entered."""
        forfeit_hole = None
        if self.rng.random() < forfeit_rate:
            forfeit_hole = (
                self.rng.choice(course_ids),
                self.rng.randint(1, HOLES_PER_COURSE),
            )

        entered = 0
        for course_id in course_ids:
            pars = SIMULATED_COURSES[course_id]
            for hole in range(1, HOLES_PER_COURSE + 1):
                if (course_id, hole) == forfeit_hole:
                    builder.hole(name, course_id, hole, 0)
                    entered += 1
                    continue
                if self.rng.random() >= completion:
                    continue
                builder.hole(
                    name, course_id, hole, simulate_hole_score(pars[hole - 1], self.rng)
                )
                entered += 1
        return entered

    def generate(
        self,
        individuals: int = 48,
        teams: int = 16,
        forfeit_rate: float = 0.02,
        completion: float = 1.0,
    ) -> Dict[str, Any]:
        """
        Generate a tournament.

        Args:
            individuals: Number of individual players, split over the groups
            teams: Number of two-person teams
            forfeit_rate: Probability that a player posts a zero on one hole
            completion: Probability that any given hole has been scored yet

        Returns:
            The raw record dict
        """
        if not 0 <= forfeit_rate <= 1 or not 0 <= completion <= 1:
            raise ValueError("forfeit_rate and completion must be between 0 and 1")

        builder = SnapshotBuilder()
        for course_id, pars in SIMULATED_COURSES.items():
            builder.course(course_id, pars, name=f"{course_id} Course")
        for group_name, (kind, course_ids) in SIMULATED_GROUPS.items():
            builder.group(group_name, course_ids, type=kind)

        roster = self._build_field(builder, individuals, teams)

        entered = 0
        for group_name, names in roster.items():
            course_ids = SIMULATED_GROUPS[group_name][1]
            for name in names:
                entered += self._enter_scores(
                    builder, name, course_ids, forfeit_rate, completion
                )

        logger.info(
            "Simulated %d individuals and %d teams with %d hole scores",
            individuals,
            teams,
            entered,
        )
        return builder.to_raw()
