"""
Builder for creating tournament snapshots with a fluent API.

This module provides a builder class for creating scoring_core snapshots
without a scoring backend. Players are referred to by name; courses by ID.
The builder can produce either a TournamentSnapshot or the raw record dict
that snapshot_from_raw accepts.
"""

from typing import Any, Dict, Optional, Sequence, Union
from dataclasses import dataclass, field

from golftour.scoring_core.scoring import HOLES_PER_COURSE
from golftour.scoring_core.snapshot import snapshot_from_raw
from golftour.scoring_core.structure import PlayerType, TournamentSnapshot


@dataclass
class SnapshotMetadata:
    """Name bookkeeping for the builder (not part of the snapshot)."""

    players: Dict[str, str] = field(default_factory=dict)  # name -> player id
    group_types: Dict[str, str] = field(default_factory=dict)  # name -> type


class SnapshotBuilder:
    """Builder for creating tournament snapshots easily."""

    def __init__(self):
        self.metadata = SnapshotMetadata()
        self._next_player_id = 1
        self._courses: Dict[str, Dict[str, Any]] = {}
        self._groups: Dict[str, Dict[str, Any]] = {}
        self._players: Dict[str, Dict[str, Any]] = {}
        self._scores: Dict[str, Dict[str, Dict[str, int]]] = {}
        self._forfeit_types: Dict[str, str] = {}
        self._ntp: Dict[str, Any] = {"individual": None, "team": None}
        self._backcount: Dict[str, Dict[str, bool]] = {"individual": {}, "team": {}}
        self._sudden_death: Dict[str, Any] = {"individual": None, "team": None}

    # Courses and groups

    def course(
        self,
        course_id: str,
        pars: Sequence[Optional[int]] = (4,) * HOLES_PER_COURSE,
        name: Optional[str] = None,
        order: int = 0,
        is_active: bool = True,
    ) -> "SnapshotBuilder":
        """Add a course with its nine pars."""
        self._courses[course_id] = {
            "id": course_id,
            "name": name or course_id,
            "pars": list(pars),
            "order": order or len(self._courses) + 1,
            "isActive": is_active,
        }
        return self

    def group(
        self,
        name: str,
        courses: Union[Sequence[str], Dict[str, Any]] = (),
        type: str = "individual",
    ) -> "SnapshotBuilder":
        """
        Add a group.

        Args:
            name: Group name
            courses: Course IDs in playing order, or an explicit map of course
                     ID to assignment marker (order, True, or {"order": n})
            type: "individual" or "team"
        """
        if isinstance(courses, dict):
            markers = dict(courses)
        else:
            markers = {course_id: order for order, course_id in enumerate(courses, 1)}
        for course_id in markers:
            if course_id not in self._courses:
                raise ValueError(f"Course not found: {course_id}")
        self._groups[name] = {"name": name, "type": type, "courses": markers}
        self.metadata.group_types[name] = type
        return self

    # Players

    def _get_or_create_player_id(self, name: str, player_id: Optional[str]) -> str:
        if name in self.metadata.players:
            return self.metadata.players[name]
        if player_id is None:
            player_id = str(self._next_player_id)
            self._next_player_id += 1
        self.metadata.players[name] = player_id
        return player_id

    def _player_id(self, name: str) -> str:
        player_id = self.metadata.players.get(name)
        if player_id is None:
            raise ValueError(f"Player not found: {name}")
        return player_id

    def player(
        self,
        name: str,
        group: str,
        jo: int = 1,
        affiliation: str = "",
        player_id: Optional[str] = None,
    ) -> "SnapshotBuilder":
        """Add an individual player."""
        player_id = self._get_or_create_player_id(name, player_id)
        self._players[player_id] = {
            "group": group,
            "jo": jo,
            "type": PlayerType.INDIVIDUAL.value,
            "name": name,
            "affiliation": affiliation,
        }
        return self

    def team(
        self,
        first: str,
        second: str,
        group: str,
        jo: int = 1,
        affiliations: Sequence[str] = ("", ""),
        player_id: Optional[str] = None,
    ) -> "SnapshotBuilder":
        """Add a two-person team; it is referred to as "first / second"."""
        player_id = self._get_or_create_player_id(f"{first} / {second}", player_id)
        self._players[player_id] = {
            "group": group,
            "jo": jo,
            "type": PlayerType.TEAM.value,
            "p1_name": first,
            "p2_name": second,
            "p1_affiliation": affiliations[0],
            "p2_affiliation": affiliations[1],
        }
        return self

    # Scores

    def scores(
        self, name: str, course_id: str, holes: Sequence[Optional[int]]
    ) -> "SnapshotBuilder":
        """Enter a player's scores on a course, hole 1 first; None skips a hole."""
        if len(holes) > HOLES_PER_COURSE:
            raise ValueError(f"A course has {HOLES_PER_COURSE} holes, got {len(holes)}")
        for hole, score in enumerate(holes, 1):
            if score is not None:
                self.hole(name, course_id, hole, score)
        return self

    def hole(
        self, name: str, course_id: str, hole: int, score: Any
    ) -> "SnapshotBuilder":
        """Enter a single hole score."""
        player_id = self._player_id(name)
        if course_id not in self._courses:
            raise ValueError(f"Course not found: {course_id}")
        self._scores.setdefault(player_id, {}).setdefault(course_id, {})[
            str(hole)
        ] = score
        return self

    def forfeit_type(self, name: str, forfeit_type: str) -> "SnapshotBuilder":
        """Record why a player posted a zero ("absent", "disqualified", "forfeit")."""
        self._forfeit_types[self._player_id(name)] = forfeit_type
        return self

    # Playoffs

    def _scope(self, group: Optional[str], team: bool) -> str:
        if group is not None:
            if group not in self._groups:
                raise ValueError(f"Group not found: {group}")
            return self.metadata.group_types[group]
        return "team" if team else "individual"

    def ntp(
        self,
        rankings: Dict[str, int],
        group: Optional[str] = None,
        team: bool = False,
        active: bool = True,
    ) -> "SnapshotBuilder":
        """Force ranks on named players, for one group or for every group."""
        scope = self._scope(group, team)
        record = {
            "isActive": active,
            "rankings": {
                self._player_id(name): rank for name, rank in rankings.items()
            },
        }
        if group is None:
            self._ntp[scope] = record
        else:
            per_group = self._ntp[scope]
            if not isinstance(per_group, dict) or "isActive" in per_group:
                per_group = {}
            per_group[group] = record
            self._ntp[scope] = per_group
        return self

    def backcount(
        self, group: Optional[str] = None, team: bool = False
    ) -> "SnapshotBuilder":
        """Ask for the rank-1 tie to be broken by back-count."""
        scope = self._scope(group, team)
        self._backcount[scope]["*" if group is None else group] = True
        return self

    def sudden_death(
        self,
        participants: Sequence[str],
        holes: Sequence[int],
        scores: Optional[Dict[str, Sequence[Optional[int]]]] = None,
        course_id: Optional[str] = None,
        group: Optional[str] = None,
        team: bool = False,
        active: bool = True,
    ) -> "SnapshotBuilder":
        """
        Add a sudden-death session.

        Args:
            participants: Player names taking part
            holes: Extra holes played, in order
            scores: Player name -> scores per hole, aligned with holes
            group: Group the session belongs to, or None for a single session
        """
        scope = self._scope(group, team)
        session_scores = {}
        for name, hole_scores in (scores or {}).items():
            session_scores[self._player_id(name)] = {
                str(hole): score
                for hole, score in zip(holes, hole_scores)
                if score is not None
            }
        record = {
            "isActive": active,
            "players": {self._player_id(name): True for name in participants},
            "courseId": course_id,
            "holes": list(holes),
            "scores": session_scores,
        }
        if group is None:
            self._sudden_death[scope] = record
        else:
            per_group = self._sudden_death[scope]
            if not isinstance(per_group, dict) or "isActive" in per_group:
                per_group = {}
            per_group[group] = record
            self._sudden_death[scope] = per_group
        return self

    # Output

    def to_raw(self) -> Dict[str, Any]:
        """The raw record dict, in the shape the scoring backend stores."""
        return {
            "courses": {cid: dict(course) for cid, course in self._courses.items()},
            "groups": {name: dict(group) for name, group in self._groups.items()},
            "players": {pid: dict(player) for pid, player in self._players.items()},
            "scores": {
                pid: {cid: dict(holes) for cid, holes in by_course.items()}
                for pid, by_course in self._scores.items()
            },
            "forfeitTypes": dict(self._forfeit_types),
            "individualNTPData": self._ntp["individual"],
            "teamNTPData": self._ntp["team"],
            "individualBackcountApplied": dict(self._backcount["individual"]),
            "teamBackcountApplied": dict(self._backcount["team"]),
            "individualSuddenDeathData": self._sudden_death["individual"],
            "teamSuddenDeathData": self._sudden_death["team"],
        }

    def build(self) -> TournamentSnapshot:
        """Build the normalized snapshot."""
        return snapshot_from_raw(self.to_raw())
