"""
Tiebreak comparison functions for stroke-play standings.

These functions decide the order of two aggregated players using the
back-count rule: grand total first, then per-course totals walked from the
last-played course backward, then hole scores from hole 9 down to hole 1 on
each course in the same reversed order. Results follow the usual comparator
convention (negative when the first player ranks better).
"""

from typing import List, Sequence

from golftour.scoring_core.scoring import ScoringRules, STANDARD_RULES
from golftour.scoring_core.structure import AggregatedPlayer, Course


def backcount_courses(assigned_courses: Sequence[Course]) -> List[Course]:
    """Reverse a group's playing order so the last-played course decides first."""
    return list(reversed(assigned_courses))


def compare_backcount(
    a: AggregatedPlayer,
    b: AggregatedPlayer,
    courses_reversed: Sequence[Course],
    rules: ScoringRules = STANDARD_RULES,
) -> int:
    """
    Compare two players on strokes alone.

    The comparison stops at the first difference in:
    1. Grand total
    2. Course totals, last-played course first
    3. Hole scores, last-played course first, hole 9 down to hole 1

    Missing course totals and hole scores compare as zero.

    Args:
        a: First player
        b: Second player
        courses_reversed: The group's courses, last-played first

    Returns:
        Negative if a ranks better, positive if b ranks better, zero on a true tie
    """
    if a.total != b.total:
        return a.total - b.total

    for course in courses_reversed:
        a_course = a.course_total(course.course_id)
        b_course = b.course_total(course.course_id)
        if a_course != b_course:
            return a_course - b_course

    for course in courses_reversed:
        for hole in rules.holes_reversed:
            a_hole = a.hole_score(course.course_id, hole) or 0
            b_hole = b.hole_score(course.course_id, hole) or 0
            if a_hole != b_hole:
                return a_hole - b_hole

    return 0


def compare_players(
    a: AggregatedPlayer,
    b: AggregatedPlayer,
    courses_reversed: Sequence[Course],
    rules: ScoringRules = STANDARD_RULES,
) -> int:
    """
    Compare two players for the standings.

    Forfeited players sort after everyone else, then players without any
    entered score, and the remaining ties are broken by compare_backcount.

    Returns:
        Negative if a ranks better, positive if b ranks better, zero on a true tie
    """
    if a.has_forfeited and not b.has_forfeited:
        return 1
    if not a.has_forfeited and b.has_forfeited:
        return -1

    if not a.has_any_score and not b.has_any_score:
        return 0
    if not a.has_any_score:
        return 1
    if not b.has_any_score:
        return -1

    return compare_backcount(a, b, courses_reversed, rules)
