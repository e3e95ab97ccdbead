"""
Full leaderboard computation.

A RankingSession runs the whole pipeline over one TournamentSnapshot:
aggregate every player, group them, rank each group, apply playoff inputs,
and compute progress and sudden-death standings. The session owns the
comparator cache; the cache is cleared at the start of every pass, since its
keys do not embed scores.

Groups are processed in isolation: if one group's data makes the pass fail,
that group comes back empty and is reported in failed_groups while every
other group is ranked as usual.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from golftour.scoring_core.aggregation import aggregate_player, resolve_assigned_courses
from golftour.scoring_core.cache import ComparatorCache
from golftour.scoring_core.playoff import apply_playoffs
from golftour.scoring_core.progress import calculate_progress
from golftour.scoring_core.ranking import rank_group
from golftour.scoring_core.scoring import ScoringRules, STANDARD_RULES
from golftour.scoring_core.structure import (
    AggregatedPlayer,
    Player,
    SuddenDeathResult,
    TournamentSnapshot,
)
from golftour.scoring_core.sudden_death import process_sudden_death
from golftour.scoring_core.tiebreaks import backcount_courses, compare_players

logger = logging.getLogger(__name__)


@dataclass
class Leaderboard:
    """Result of one ranking pass."""

    # group name -> players after playoff resolution
    groups: Dict[str, List[AggregatedPlayer]] = field(default_factory=dict)
    # group name -> players as ranked by strokes alone
    base_groups: Dict[str, List[AggregatedPlayer]] = field(default_factory=dict)
    progress: Dict[str, int] = field(default_factory=dict)
    individual_sudden_death: List[SuddenDeathResult] = field(default_factory=list)
    team_sudden_death: List[SuddenDeathResult] = field(default_factory=list)
    failed_groups: List[str] = field(default_factory=list)

    def group(self, group_name: str) -> List[AggregatedPlayer]:
        return self.groups.get(group_name, [])

    def find(self, player_id: str) -> Optional[AggregatedPlayer]:
        for players in self.groups.values():
            for player in players:
                if player.player_id == player_id:
                    return player
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "groups": {
                name: [player.to_dict() for player in players]
                for name, players in self.groups.items()
            },
            "progress": dict(self.progress),
            "individual_sudden_death": [
                r.to_dict() for r in self.individual_sudden_death
            ],
            "team_sudden_death": [r.to_dict() for r in self.team_sudden_death],
            "failed_groups": list(self.failed_groups),
        }


class RankingSession:
    """Runs ranking passes and owns the comparator cache shared by them."""

    def __init__(self, rules: ScoringRules = STANDARD_RULES):
        self.rules = rules
        self.cache = ComparatorCache(
            max_size=rules.cache_size,
            comparator=lambda a, b, courses: compare_players(a, b, courses, rules),
        )

    def group_players(self, snapshot: TournamentSnapshot) -> Dict[str, List[Player]]:
        """Players by group name, both sorted so output never depends on input order."""
        grouped: Dict[str, List[Player]] = {}
        for player in sorted(snapshot.players.values(), key=lambda p: p.player_id):
            grouped.setdefault(player.group or self.rules.unassigned_group, []).append(
                player
            )
        return {name: grouped[name] for name in sorted(grouped)}

    def rank_group(
        self, snapshot: TournamentSnapshot, group_name: str, players: List[Player]
    ) -> List[AggregatedPlayer]:
        """Aggregate and rank the players of one group by strokes."""
        aggregated = [
            aggregate_player(
                player,
                snapshot.scores,
                snapshot.courses,
                snapshot.groups,
                snapshot.forfeit_types,
                self.rules,
            )
            for player in players
        ]
        courses = resolve_assigned_courses(
            snapshot.groups.get(group_name), snapshot.courses
        )
        return rank_group(aggregated, backcount_courses(courses), self.cache)

    def compute(self, snapshot: TournamentSnapshot) -> Leaderboard:
        """Compute the complete leaderboard for a snapshot."""
        self.cache.clear()
        leaderboard = Leaderboard()

        if not snapshot.players or not snapshot.courses:
            logger.info(
                "Nothing to rank: %d players, %d courses",
                len(snapshot.players),
                len(snapshot.courses),
            )
            return leaderboard

        for group_name, players in self.group_players(snapshot).items():
            try:
                base = self.rank_group(snapshot, group_name, players)
                settings = snapshot.playoff.for_type(players[0].player_type)
                final = apply_playoffs(group_name, base, settings, self.rules)
            except Exception:
                logger.exception("Failed to rank group %s", group_name)
                leaderboard.failed_groups.append(group_name)
                base, final = [], []
            leaderboard.base_groups[group_name] = base
            leaderboard.groups[group_name] = final

        leaderboard.progress = calculate_progress(
            leaderboard.base_groups, snapshot.scores, self.rules
        )
        leaderboard.individual_sudden_death = process_sudden_death(
            snapshot.individual_sudden_death, snapshot.players
        )
        leaderboard.team_sudden_death = process_sudden_death(
            snapshot.team_sudden_death, snapshot.players
        )

        logger.debug(
            "Ranked %d groups (%d failed); comparator cache %d hits, %d misses",
            len(leaderboard.groups),
            len(leaderboard.failed_groups),
            self.cache.hits,
            self.cache.misses,
        )
        return leaderboard


def compute_leaderboard(
    snapshot: TournamentSnapshot,
    session: Optional[RankingSession] = None,
    rules: ScoringRules = STANDARD_RULES,
) -> Leaderboard:
    """Compute a leaderboard, creating a one-off session if none is given."""
    session = session or RankingSession(rules)
    return session.compute(snapshot)
