"""
Rank assignment within a group.

Contenders (players with at least one score who have not forfeited) are
ordered by par-relative total and the back-count comparator, then given
standard competition ranks. Everyone else is listed after them without a rank.
"""

import math
from functools import cmp_to_key
from typing import List, Sequence, Tuple

from golftour.scoring_core.cache import Comparator
from golftour.scoring_core.structure import AggregatedPlayer, Course
from golftour.scoring_core.tiebreaks import compare_players


def plus_minus_key(player: AggregatedPlayer) -> float:
    """Par-relative total for sorting; a player without one sorts last."""
    return math.inf if player.plus_minus is None else player.plus_minus


def partition_contenders(
    players: Sequence[AggregatedPlayer],
) -> Tuple[List[AggregatedPlayer], List[AggregatedPlayer]]:
    """Split players into (contenders, others), keeping their order."""
    contenders = [p for p in players if p.is_contender]
    others = [p for p in players if not p.is_contender]
    return contenders, others


def sort_contenders(
    contenders: Sequence[AggregatedPlayer],
    courses_reversed: Sequence[Course],
    compare: Comparator = compare_players,
) -> List[AggregatedPlayer]:
    """Order contenders by par-relative total, breaking ties by back-count."""

    def _cmp(a: AggregatedPlayer, b: AggregatedPlayer) -> int:
        a_key, b_key = plus_minus_key(a), plus_minus_key(b)
        if a_key != b_key:
            return -1 if a_key < b_key else 1
        return compare(a, b, courses_reversed)

    return sorted(contenders, key=cmp_to_key(_cmp))


def rank_group(
    players: Sequence[AggregatedPlayer],
    courses_reversed: Sequence[Course],
    compare: Comparator = compare_players,
) -> List[AggregatedPlayer]:
    """
    Rank the players of one group.

    Every contender sharing the best par-relative total is ranked 1 as a
    block; resolving a tie for first is left to the playoff inputs. Later
    contenders take their position (1-based) as rank, unless they are tied
    with the contender before them on par-relative total and back-count, in
    which case they share that contender's rank.

    Args:
        players: Aggregated players of the group
        courses_reversed: The group's courses, last-played first
        compare: Tiebreak comparator, usually a ComparatorCache

    Returns:
        New AggregatedPlayer objects: ranked contenders first, then the
        others with rank None in their input order
    """
    contenders, others = partition_contenders(players)
    ordered = sort_contenders(contenders, courses_reversed, compare)

    ranked: List[AggregatedPlayer] = []
    if ordered:
        best = plus_minus_key(ordered[0])
        for index, current in enumerate(ordered):
            if plus_minus_key(current) == best:
                rank = 1
            else:
                previous = ranked[index - 1]
                tied = (
                    plus_minus_key(current) == plus_minus_key(previous)
                    and compare(current, previous, courses_reversed) == 0
                )
                rank = previous.rank if tied else index + 1
            ranked.append(current.with_rank(rank))

    return ranked + [p.with_rank(None) for p in others]
