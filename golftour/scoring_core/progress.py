"""
Score entry progress per group, for monitoring how far scoring has come.
"""

from typing import Dict, List, Sequence

from golftour.scoring_core.aggregation import is_valid_score
from golftour.scoring_core.scoring import ScoringRules, STANDARD_RULES
from golftour.scoring_core.structure import AggregatedPlayer, Scores


def calculate_group_progress(
    players: Sequence[AggregatedPlayer],
    scores: Scores,
    rules: ScoringRules = STANDARD_RULES,
) -> int:
    """
    Percentage of expected hole scores entered for one group.

    Expected cells are players x assigned courses x holes, using the first
    player's courses (every player of a group plays the same courses).

    Returns:
        Rounded percentage; 0 when nothing is expected
    """
    if not players:
        return 0
    assigned_ids = [course.course_id for course in players[0].assigned_courses]
    expected = len(players) * len(assigned_ids) * rules.holes_per_course
    if expected == 0:
        return 0

    entered = 0
    for player in players:
        player_scores = scores.get(player.player_id) or {}
        for course_id in assigned_ids:
            course_scores = player_scores.get(course_id) or {}
            entered += sum(
                1
                for hole, score in course_scores.items()
                if hole in rules.holes and is_valid_score(score)
            )

    # round half up
    return int(entered * 100 / expected + 0.5)


def calculate_progress(
    groups: Dict[str, List[AggregatedPlayer]],
    scores: Scores,
    rules: ScoringRules = STANDARD_RULES,
) -> Dict[str, int]:
    """Progress percentage for every group."""
    return {
        group_name: calculate_group_progress(players, scores, rules)
        for group_name, players in groups.items()
    }
