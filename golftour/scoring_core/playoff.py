"""
Playoff resolution on top of the base ranking.

Two externally triggered outcomes can change a group's ranking after the
stroke-based ranks are assigned:

- Nearest-to-pin (NTP): a judged contest that forces given ranks onto named
  players.
- Back-count among leaders: when several players share rank 1 and the
  tournament director asks for it, the rank-1 cluster is separated by the
  back-count rule.

Neither step mutates its input. Both are idempotent.
"""

import logging
import math
from functools import cmp_to_key
from typing import Dict, List, Sequence, Tuple

from golftour.scoring_core.ranking import plus_minus_key
from golftour.scoring_core.scoring import ScoringRules, STANDARD_RULES
from golftour.scoring_core.structure import (
    AggregatedPlayer,
    NearestToPin,
    PlayoffInput,
    PlayoffSettings,
)
from golftour.scoring_core.tiebreaks import backcount_courses, compare_backcount

logger = logging.getLogger(__name__)


def rank_sort_key(player: AggregatedPlayer) -> Tuple[float, float]:
    """Sort by rank (unranked last), then by par-relative total (missing last)."""
    rank = math.inf if player.rank is None else player.rank
    plus_minus = math.inf if player.plus_minus is None else player.plus_minus
    return rank, plus_minus


def sort_by_rank(players: Sequence[AggregatedPlayer]) -> List[AggregatedPlayer]:
    return sorted(players, key=rank_sort_key)


def apply_ntp(
    players: Sequence[AggregatedPlayer], ntp: NearestToPin
) -> List[AggregatedPlayer]:
    """Overwrite the ranks of the players named in an NTP result and re-sort."""
    updated = []
    for player in players:
        forced = ntp.rankings.get(player.player_id)
        updated.append(player.with_rank(forced) if forced is not None else player)
    return sort_by_rank(updated)


def apply_leader_backcount(
    players: Sequence[AggregatedPlayer], rules: ScoringRules = STANDARD_RULES
) -> List[AggregatedPlayer]:
    """
    Separate the players sharing rank 1 by back-count.

    The cluster is ordered by par-relative total and then by grand total,
    course totals and hole scores (last-played course first). Ranks are
    reassigned from 1 within the cluster; members still tied share a rank.
    Players outside the cluster keep their ranks.

    Returns:
        The whole group, re-sorted by rank
    """
    leaders = [p for p in players if p.rank == 1]
    if len(leaders) <= 1:
        return list(players)

    courses_reversed = backcount_courses(leaders[0].assigned_courses)

    def _cmp(a: AggregatedPlayer, b: AggregatedPlayer) -> int:
        a_key, b_key = plus_minus_key(a), plus_minus_key(b)
        if a_key != b_key:
            return -1 if a_key < b_key else 1
        return compare_backcount(a, b, courses_reversed, rules)

    ordered = sorted(leaders, key=cmp_to_key(_cmp))

    reranked: Dict[str, AggregatedPlayer] = {}
    previous = None
    for index, current in enumerate(ordered):
        if previous is not None and _cmp(current, previous) == 0:
            rank = previous.rank
        else:
            rank = index + 1
        previous = current.with_rank(rank)
        reranked[current.player_id] = previous

    spliced = [reranked.get(p.player_id, p) if p.rank == 1 else p for p in players]
    return sort_by_rank(spliced)


def apply_playoffs(
    group_name: str,
    players: Sequence[AggregatedPlayer],
    settings: PlayoffSettings,
    rules: ScoringRules = STANDARD_RULES,
) -> List[AggregatedPlayer]:
    """
    Apply the NTP override and the leader back-count to one ranked group.

    Args:
        group_name: Name of the group, used to look up group-scoped inputs
        players: The group as produced by rank_group
        settings: Playoff inputs for the group's player type

    Returns:
        A new list; the input list and its players are left untouched
    """
    result = list(players)
    if not result:
        return result

    ntp = settings.ntp_for(group_name)
    if ntp is not None and ntp.rankings:
        logger.debug("Applying NTP rankings to group %s", group_name)
        result = apply_ntp(result, ntp)

    leaders = sum(1 for p in result if p.rank == 1)
    if leaders > 1 and settings.backcount_for(group_name):
        logger.debug(
            "Applying back-count to %d leaders in group %s", leaders, group_name
        )
        result = apply_leader_backcount(result, rules)

    return result


def resolve_playoffs(
    groups: Dict[str, List[AggregatedPlayer]],
    playoff: PlayoffInput,
    rules: ScoringRules = STANDARD_RULES,
) -> Dict[str, List[AggregatedPlayer]]:
    """Apply playoff inputs to every group, choosing settings by player type."""
    final = {}
    for group_name, players in groups.items():
        if not players:
            final[group_name] = []
            continue
        settings = playoff.for_type(players[0].player.player_type)
        final[group_name] = apply_playoffs(group_name, players, settings, rules)
    return final
