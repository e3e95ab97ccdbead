"""
Score aggregation for a single player.

These functions turn raw hole scores into the per-course totals, grand total
and par-relative total that the ranking functions compare. They are pure: the
same inputs always produce the same AggregatedPlayer, and nothing is mutated.
"""

import math
from typing import Dict, List, Mapping, Optional, Tuple

from golftour.scoring_core.scoring import ScoringRules, STANDARD_RULES
from golftour.scoring_core.structure import (
    AggregatedPlayer,
    Course,
    CourseResult,
    ForfeitType,
    Group,
    Player,
    Scores,
)


def is_valid_score(value) -> bool:
    """Whether a score cell holds an entered stroke count."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def resolve_assigned_courses(
    group: Optional[Group], courses: Mapping[str, Course]
) -> List[Course]:
    """
    Resolve the courses a group plays, in playing order.

    Args:
        group: The player's group, or None if the group is unknown
        courses: Course catalogue keyed by course ID

    Returns:
        Courses sorted by their assignment order; courses missing from the
        catalogue are skipped
    """
    if group is None:
        return []
    return [
        courses[course_id]
        for course_id in group.assigned_course_ids()
        if course_id in courses
    ]


def calculate_par_relative(
    assigned_courses: List[Course], course_results: Mapping[str, CourseResult]
) -> Tuple[Optional[int], Optional[int]]:
    """
    Calculate the stroke total and par-relative total over holes with a par.

    Only holes that have both an entered score and a defined par count. If no
    hole qualifies, both values are None (as opposed to zero).

    Returns:
        (total_score, plus_minus)
    """
    total = 0
    par_total = 0
    played_holes = 0

    for course in assigned_courses:
        result = course_results.get(course.course_id)
        if result is None:
            continue
        for index, score in enumerate(result.hole_scores):
            par = course.par_for(index + 1)
            if score is None or par is None:
                continue
            total += score
            par_total += par
            played_holes += 1

    if played_holes == 0:
        return None, None
    return total, total - par_total


def calculate_total_par(assigned_courses: List[Course]) -> int:
    """Sum of every defined par over the assigned courses."""
    return sum(course.total_par for course in assigned_courses)


def aggregate_player(
    player: Player,
    scores: Scores,
    courses: Mapping[str, Course],
    groups: Mapping[str, Group],
    forfeit_types: Optional[Dict[str, ForfeitType]] = None,
    rules: ScoringRules = STANDARD_RULES,
) -> AggregatedPlayer:
    """
    Aggregate one player's hole scores over the courses of their group.

    Args:
        player: The player to aggregate
        scores: All score cells, keyed player -> course -> hole
        courses: Course catalogue keyed by course ID
        groups: Groups keyed by name
        forfeit_types: Known reasons for zero scores, keyed by player ID
        rules: Scoring rules (holes per course, forfeit sentinel)

    Returns:
        The AggregatedPlayer, with rank left unset
    """
    assigned_courses = resolve_assigned_courses(groups.get(player.group), courses)
    player_scores = scores.get(player.player_id) or {}

    course_results: Dict[str, CourseResult] = {}
    total = 0
    has_any_score = False
    has_forfeited = False

    for course in assigned_courses:
        course_scores = player_scores.get(course.course_id) or {}
        course_total = 0
        hole_scores: List[Optional[int]] = []

        for hole in rules.holes:
            score = course_scores.get(hole)
            if not is_valid_score(score):
                hole_scores.append(None)
                continue
            course_total += score
            total += score
            has_any_score = True
            if rules.is_forfeit(score):
                has_forfeited = True
            hole_scores.append(score)

        course_results[course.course_id] = CourseResult(
            course_id=course.course_id,
            course_name=course.name,
            total=course_total,
            hole_scores=tuple(hole_scores),
        )

    total_score, plus_minus = calculate_par_relative(assigned_courses, course_results)

    forfeit_type = None
    if has_forfeited:
        forfeit_type = (forfeit_types or {}).get(player.player_id, ForfeitType.FORFEIT)

    return AggregatedPlayer(
        player=player,
        assigned_courses=tuple(assigned_courses),
        course_results=course_results,
        total=total,
        total_score=total_score,
        plus_minus=plus_minus,
        total_par=calculate_total_par(assigned_courses),
        has_any_score=has_any_score,
        has_forfeited=has_forfeited,
        forfeit_type=forfeit_type,
    )
