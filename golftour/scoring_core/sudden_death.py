"""
Sudden-death playoff standings.

A sudden death is played by the tied leaders on a few extra holes. Its
standings are independent of the main leaderboard: players who have
completed more playoff holes rank ahead (a player still to play cannot be
declared the loser yet), then lower totals, then names alphabetically.
"""

from typing import Dict, List, Mapping, Optional

from golftour.scoring_core.aggregation import is_valid_score
from golftour.scoring_core.structure import (
    Player,
    SuddenDeathData,
    SuddenDeathResult,
    SuddenDeathSession,
)


def _sort_key(result: SuddenDeathResult):
    return (-result.holes_played, result.total_score, result.name)


def _ranks_lower(current: SuddenDeathResult, previous: SuddenDeathResult) -> bool:
    """Whether current stands strictly behind previous."""
    if current.holes_played != previous.holes_played:
        return current.holes_played < previous.holes_played
    return current.total_score > previous.total_score


def process_session(
    session: Optional[SuddenDeathSession], players: Mapping[str, Player]
) -> List[SuddenDeathResult]:
    """
    Compute the standings of one sudden-death session.

    Args:
        session: The session; inactive sessions or sessions without holes
                 produce no standings
        players: Player catalogue for display names

    Returns:
        Ranked results, best first
    """
    if session is None or not session.is_active or not session.holes:
        return []

    results: List[SuddenDeathResult] = []
    for player_id in session.participants:
        player = players.get(player_id)
        if player is None:
            continue

        player_scores = session.scores.get(player_id) or {}
        total = 0
        holes_played = 0
        for hole in session.holes:
            score = player_scores.get(hole)
            if is_valid_score(score):
                total += score
                holes_played += 1

        results.append(
            SuddenDeathResult(
                player_id=player_id,
                name=player.display_name,
                total_score=total,
                holes_played=holes_played,
            )
        )

    results.sort(key=_sort_key)

    ranked: List[SuddenDeathResult] = []
    rank = 1
    for index, result in enumerate(results):
        if index > 0 and _ranks_lower(result, results[index - 1]):
            rank = index + 1
        ranked.append(
            SuddenDeathResult(
                player_id=result.player_id,
                name=result.name,
                total_score=result.total_score,
                holes_played=result.holes_played,
                rank=rank,
            )
        )
    return ranked


def process_sudden_death(
    data: SuddenDeathData, players: Mapping[str, Player]
) -> List[SuddenDeathResult]:
    """
    Compute sudden-death standings for a single session or a per-group map.

    Per-group sessions are processed independently, in group name order, and
    their results concatenated.
    """
    if data is None:
        return []
    if isinstance(data, SuddenDeathSession):
        return process_session(data, players)

    results: List[SuddenDeathResult] = []
    sessions: Dict[str, SuddenDeathSession] = data
    for group_name in sorted(sessions):
        results.extend(process_session(sessions[group_name], players))
    return results
