"""
Transform raw tournament records into the scoring_core structure.

The records arrive as plain dicts in the shape the scoring collaborators
store them (camelCase keys, ids as strings or numbers, course assignment
markers that are booleans, numbers or {"order": n} objects). Everything is
normalized here so the ranking code never has to branch on runtime shapes.

Malformed records are skipped with a warning; nothing in this module raises
for bad data.
"""

import logging
import math
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from golftour.scoring_core.scoring import HOLES_PER_COURSE
from golftour.scoring_core.structure import (
    Course,
    CourseAssignment,
    ForfeitType,
    Group,
    NearestToPin,
    Player,
    PlayerType,
    PlayoffInput,
    PlayoffSettings,
    Scores,
    SuddenDeathData,
    SuddenDeathSession,
    TournamentSnapshot,
)

logger = logging.getLogger(__name__)

GLOBAL_SCOPE = "*"
NTP_RECORD_KEYS = ("isActive", "rankings")

# Keywords a referee's comment uses to give the reason for a zero
FORFEIT_KEYWORDS = (
    (ForfeitType.ABSENT, ("불참", "absent")),
    (ForfeitType.DISQUALIFIED, ("실격", "disqualified")),
    (ForfeitType.FORFEIT, ("기권", "forfeit")),
)


def _to_int(value: Any) -> Optional[int]:
    """Convert an integral number (or numeric string) to int, else None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return None
    if isinstance(value, (int, float)) and math.isfinite(value):
        if value == int(value):
            return int(value)
    return None


def _to_number(value: Any) -> Optional[float]:
    """A finite number, kept as int when integral, else None."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value):
        return None
    return int(value) if value == int(value) else value


def normalize_score(value: Any) -> Optional[int]:
    """
    Normalize a raw score cell.

    Returns:
        The stroke count (0 being the forfeit sentinel), or None when the cell
        does not hold a number and so counts as not yet entered
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value) or value < 0 or value != int(value):
        return None
    return int(value)


def normalize_hole(value: Any) -> Optional[int]:
    hole = _to_int(value)
    if hole is None or not 1 <= hole <= HOLES_PER_COURSE:
        return None
    return hole


def normalize_pars(raw: Any) -> Tuple[Optional[int], ...]:
    """Nine par values; missing or malformed entries become None."""
    if not isinstance(raw, (list, tuple)):
        return (None,) * HOLES_PER_COURSE
    pars = []
    for index in range(HOLES_PER_COURSE):
        value = raw[index] if index < len(raw) else None
        par = normalize_score(value)
        pars.append(par if par else None)
    return tuple(pars)


def normalize_assignment(
    marker: Any, course: Optional[Course]
) -> Optional[CourseAssignment]:
    """
    Normalize a group's course assignment marker.

    A course is assigned when the marker is an object with "order" > 0, a
    number > 0, or True. For True the course's own order is used.

    Returns:
        The assignment, or None if the course is not assigned to the group
    """
    if isinstance(marker, Mapping):
        order = _to_number(marker.get("order"))
        return CourseAssignment(order) if order is not None and order > 0 else None
    if isinstance(marker, bool):
        if not marker:
            return None
        return CourseAssignment(course.order if course is not None else 0)
    order = _to_number(marker)
    if order is not None and order > 0:
        return CourseAssignment(order)
    return None


def course_from_raw(course_id: Any, raw: Mapping) -> Course:
    return Course(
        course_id=str(raw.get("id", course_id)),
        name=str(raw.get("name") or course_id),
        pars=normalize_pars(raw.get("pars")),
        order=_to_int(raw.get("order")) or 0,
        is_active=bool(raw.get("isActive", True)),
    )


def courses_from_raw(raw: Any) -> Dict[str, Course]:
    """Course catalogue from either a map of id -> course or a list of courses."""
    if isinstance(raw, Mapping):
        items: Iterable = raw.items()
    elif isinstance(raw, (list, tuple)):
        items = (
            (entry.get("id") if isinstance(entry, Mapping) else None, entry)
            for entry in raw
        )
    else:
        return {}

    courses = {}
    for course_id, entry in items:
        if not isinstance(entry, Mapping) or (course_id is None and "id" not in entry):
            logger.warning("Skipping malformed course record %r", course_id)
            continue
        course = course_from_raw(course_id, entry)
        courses[course.course_id] = course
    return courses


def group_from_raw(name: str, raw: Mapping, courses: Mapping[str, Course]) -> Group:
    assignments = {}
    markers = raw.get("courses") or {}
    if isinstance(markers, Mapping):
        for course_id, marker in markers.items():
            course_id = str(course_id)
            assignment = normalize_assignment(marker, courses.get(course_id))
            if assignment is not None:
                assignments[course_id] = assignment
    return Group(
        name=str(raw.get("name") or name),
        player_type=_player_type(raw.get("type")),
        assignments=assignments,
    )


def groups_from_raw(raw: Any, courses: Mapping[str, Course]) -> Dict[str, Group]:
    groups = {}
    if not isinstance(raw, Mapping):
        return groups
    for name, entry in raw.items():
        if not isinstance(entry, Mapping):
            logger.warning("Skipping malformed group record %r", name)
            continue
        groups[str(name)] = group_from_raw(str(name), entry, courses)
    return groups


def _player_type(raw: Any) -> PlayerType:
    return PlayerType.TEAM if raw == PlayerType.TEAM.value else PlayerType.INDIVIDUAL


def player_from_raw(player_id: Any, raw: Mapping) -> Player:
    player_type = _player_type(raw.get("type"))
    if player_type == PlayerType.TEAM:
        names = (str(raw.get("p1_name") or ""), str(raw.get("p2_name") or ""))
        affiliations = (
            str(raw.get("p1_affiliation") or ""),
            str(raw.get("p2_affiliation") or ""),
        )
    else:
        names = (str(raw.get("name") or ""),)
        affiliations = (str(raw.get("affiliation") or ""),)
    return Player(
        player_id=str(player_id),
        group=str(raw.get("group") or ""),
        jo=_to_int(raw.get("jo")) or 0,
        player_type=player_type,
        names=names,
        affiliations=affiliations,
    )


def players_from_raw(raw: Any) -> Dict[str, Player]:
    players = {}
    if not isinstance(raw, Mapping):
        return players
    for player_id, entry in raw.items():
        if not isinstance(entry, Mapping):
            logger.warning("Skipping malformed player record %r", player_id)
            continue
        players[str(player_id)] = player_from_raw(player_id, entry)
    return players


def _hole_scores_from_raw(raw: Any) -> Dict[int, int]:
    """Hole -> score from a map, or from a list indexed by hole number."""
    if isinstance(raw, (list, tuple)):
        raw = dict(enumerate(raw))
    if not isinstance(raw, Mapping):
        return {}
    cells = {}
    for hole, value in raw.items():
        hole = normalize_hole(hole)
        score = normalize_score(value)
        if hole is not None and score is not None:
            cells[hole] = score
    return cells


def scores_from_raw(raw: Any) -> Scores:
    """Score cells keyed player -> course -> hole; non-numeric cells are dropped."""
    scores: Scores = {}
    if not isinstance(raw, Mapping):
        return scores
    for player_id, by_course in raw.items():
        if not isinstance(by_course, Mapping):
            continue
        player_scores = {}
        for course_id, holes in by_course.items():
            cells = _hole_scores_from_raw(holes)
            if cells:
                player_scores[str(course_id)] = cells
        scores[str(player_id)] = player_scores
    return scores


def _ntp_record(raw: Any) -> Optional[NearestToPin]:
    if not isinstance(raw, Mapping):
        return None
    rankings = {}
    raw_rankings = raw.get("rankings")
    if not isinstance(raw_rankings, Mapping):
        raw_rankings = {}
    for player_id, rank in raw_rankings.items():
        rank = _to_int(rank)
        if rank is not None:
            rankings[str(player_id)] = rank
    return NearestToPin(rankings=rankings, is_active=bool(raw.get("isActive")))


def playoff_settings_from_raw(ntp_raw: Any, backcount_raw: Any) -> PlayoffSettings:
    """
    Playoff settings for one player type.

    Args:
        ntp_raw: A global {"isActive", "rankings"} record, a map of group name
                 to such records, or both in one mapping
        backcount_raw: True for every group, or a map of group name to flag
                       where "*" means every group
    """
    ntp = None
    ntp_by_group = {}
    if isinstance(ntp_raw, Mapping):
        if "isActive" in ntp_raw or "rankings" in ntp_raw:
            ntp = _ntp_record(ntp_raw)
        # group records may sit beside an inactive global record
        for group_name, record in ntp_raw.items():
            if group_name in NTP_RECORD_KEYS:
                continue
            record = _ntp_record(record)
            if record is not None:
                ntp_by_group[str(group_name)] = record

    backcount_all = False
    backcount_groups = set()
    if isinstance(backcount_raw, bool):
        backcount_all = backcount_raw
    elif isinstance(backcount_raw, Mapping):
        for group_name, applied in backcount_raw.items():
            if not applied:
                continue
            if group_name == GLOBAL_SCOPE:
                backcount_all = True
            else:
                backcount_groups.add(str(group_name))

    return PlayoffSettings(
        ntp=ntp,
        ntp_by_group=ntp_by_group,
        backcount_all=backcount_all,
        backcount_groups=frozenset(backcount_groups),
    )


def sudden_death_session_from_raw(raw: Mapping) -> SuddenDeathSession:
    participants = raw.get("players") or {}
    if isinstance(participants, Mapping):
        participant_ids = tuple(
            str(pid) for pid, flag in participants.items() if flag
        )
    else:
        participant_ids = tuple(str(pid) for pid in participants)

    holes = []
    for hole in raw.get("holes") or []:
        hole = _to_int(hole)
        if hole is not None:
            holes.append(hole)

    scores = {}
    raw_scores = raw.get("scores")
    if not isinstance(raw_scores, Mapping):
        raw_scores = {}
    for player_id, by_hole in raw_scores.items():
        if isinstance(by_hole, (list, tuple)):
            by_hole = dict(enumerate(by_hole))
        if not isinstance(by_hole, Mapping):
            continue
        cells = {}
        for hole, value in by_hole.items():
            hole, score = _to_int(hole), normalize_score(value)
            if hole is not None and score is not None:
                cells[hole] = score
        scores[str(player_id)] = cells

    course_id = raw.get("courseId")
    return SuddenDeathSession(
        is_active=bool(raw.get("isActive")),
        participants=participant_ids,
        course_id=str(course_id) if course_id is not None else None,
        holes=tuple(holes),
        scores=scores,
    )


def sudden_death_from_raw(raw: Any) -> SuddenDeathData:
    """A single session (has an "isActive" key) or a map of group name to session."""
    if not isinstance(raw, Mapping):
        return None
    if "isActive" in raw:
        return sudden_death_session_from_raw(raw)
    return {
        str(group_name): sudden_death_session_from_raw(record)
        for group_name, record in raw.items()
        if isinstance(record, Mapping)
    }


def forfeit_type_from_comment(comment: Optional[str]) -> Optional[ForfeitType]:
    """The reason for a zero, as written in a score change comment."""
    if not comment:
        return None
    lowered = comment.lower()
    for forfeit_type, keywords in FORFEIT_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return forfeit_type
    return None


def forfeit_types_from_logs(logs: Any) -> Dict[str, ForfeitType]:
    """
    Reasons for zero scores from score change logs.

    The most recent log that set a player's score to zero decides the reason.

    Args:
        logs: A list of log records, or a map of log id to record, each with
              "playerId", "newValue", "comment" and "modifiedAt"
    """
    if isinstance(logs, Mapping):
        logs = list(logs.values())
    if not isinstance(logs, (list, tuple)):
        return {}

    latest: Dict[str, Tuple[float, Optional[ForfeitType]]] = {}
    for log in logs:
        if not isinstance(log, Mapping) or normalize_score(log.get("newValue")) != 0:
            continue
        player_id = log.get("playerId")
        if player_id is None:
            continue
        modified_at = _to_int(log.get("modifiedAt")) or 0
        player_id = str(player_id)
        if player_id not in latest or modified_at >= latest[player_id][0]:
            latest[player_id] = (
                modified_at,
                forfeit_type_from_comment(log.get("comment")),
            )

    return {
        player_id: forfeit_type
        for player_id, (_, forfeit_type) in latest.items()
        if forfeit_type is not None
    }


def forfeit_types_from_raw(raw: Any) -> Dict[str, ForfeitType]:
    forfeit_types = {}
    if not isinstance(raw, Mapping):
        return forfeit_types
    for player_id, value in raw.items():
        try:
            forfeit_types[str(player_id)] = ForfeitType(value)
        except ValueError:
            logger.warning("Unknown forfeit type %r for player %s", value, player_id)
    return forfeit_types


def snapshot_from_raw(data: Mapping) -> TournamentSnapshot:
    """
    Build a TournamentSnapshot from raw records.

    Args:
        data: A dict with any of "players", "scores", "courses", "groups",
              "individualNTPData", "teamNTPData", "individualBackcountApplied",
              "teamBackcountApplied", "individualSuddenDeathData",
              "teamSuddenDeathData", "forfeitTypes" and "scoreLogs"

    Returns:
        The normalized snapshot
    """
    courses = courses_from_raw(data.get("courses"))

    # explicit reasons take precedence over those read from the logs
    forfeit_types = forfeit_types_from_logs(data.get("scoreLogs"))
    forfeit_types.update(forfeit_types_from_raw(data.get("forfeitTypes")))

    return TournamentSnapshot(
        players=players_from_raw(data.get("players")),
        scores=scores_from_raw(data.get("scores")),
        courses=courses,
        groups=groups_from_raw(data.get("groups"), courses),
        forfeit_types=forfeit_types,
        playoff=PlayoffInput(
            individual=playoff_settings_from_raw(
                data.get("individualNTPData"), data.get("individualBackcountApplied")
            ),
            team=playoff_settings_from_raw(
                data.get("teamNTPData"), data.get("teamBackcountApplied")
            ),
        ),
        individual_sudden_death=sudden_death_from_raw(
            data.get("individualSuddenDeathData")
        ),
        team_sudden_death=sudden_death_from_raw(data.get("teamSuddenDeathData")),
    )
