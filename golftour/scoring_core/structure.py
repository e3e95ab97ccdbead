"""
Tournament structures for representing a stroke-play event and its standings.

This module provides a simple, clean way to represent a tournament with:
- Courses of nine holes with their pars
- Groups (divisions) that play an ordered set of courses
- Players, either individuals or two-person teams
- Aggregated per-player results that the ranking functions work on
- Playoff inputs (nearest-to-pin, back-count, sudden death)
"""

from typing import Any, Dict, FrozenSet, List, Optional, Tuple, Union
from dataclasses import dataclass, field, replace
from enum import Enum

from golftour.scoring_core.scoring import HOLES_PER_COURSE


# player id -> course id -> hole number -> strokes
Scores = Dict[str, Dict[str, Dict[int, int]]]


class PlayerType(Enum):
    """Format a group is played in."""

    INDIVIDUAL = "individual"
    TEAM = "team"


class ForfeitType(Enum):
    """Reason a player posted a zero on a hole."""

    ABSENT = "absent"
    DISQUALIFIED = "disqualified"
    FORFEIT = "forfeit"


@dataclass(frozen=True)
class Course:
    """A nine-hole course with its par values."""

    course_id: str
    name: str
    pars: Tuple[Optional[int], ...] = ()
    order: int = 0
    is_active: bool = True

    def par_for(self, hole: int) -> Optional[int]:
        """Return the par of a 1-based hole, or None if it is not defined."""
        if 1 <= hole <= len(self.pars):
            return self.pars[hole - 1]
        return None

    @property
    def total_par(self) -> int:
        return sum(par for par in self.pars if par is not None)


@dataclass(frozen=True)
class CourseAssignment:
    """A course assigned to a group, played in the given order."""

    order: float


@dataclass(frozen=True)
class Group:
    """A division of the tournament and the courses it plays."""

    name: str
    player_type: PlayerType = PlayerType.INDIVIDUAL
    assignments: Dict[str, CourseAssignment] = field(default_factory=dict)

    def assigned_course_ids(self) -> List[str]:
        """Course IDs in playing order (ties broken by course ID)."""
        return [
            course_id
            for course_id, _ in sorted(
                self.assignments.items(), key=lambda item: (item[1].order, item[0])
            )
        ]


@dataclass(frozen=True)
class Player:
    """A competitor: one individual, or a two-person team."""

    player_id: str
    group: str
    jo: int = 0
    player_type: PlayerType = PlayerType.INDIVIDUAL
    names: Tuple[str, ...] = ()
    affiliations: Tuple[str, ...] = ()

    @property
    def is_team(self) -> bool:
        return self.player_type == PlayerType.TEAM

    @property
    def display_name(self) -> str:
        """Single name for individuals, "first / second" for teams."""
        if self.is_team:
            return " / ".join(self.names)
        return self.names[0] if self.names else ""

    @property
    def display_affiliation(self) -> str:
        if self.is_team:
            return " / ".join(self.affiliations)
        return self.affiliations[0] if self.affiliations else ""


@dataclass(frozen=True)
class CourseResult:
    """One player's strokes on one course."""

    course_id: str
    course_name: str
    total: int = 0
    hole_scores: Tuple[Optional[int], ...] = (None,) * HOLES_PER_COURSE

    def hole(self, hole: int) -> Optional[int]:
        if 1 <= hole <= len(self.hole_scores):
            return self.hole_scores[hole - 1]
        return None


@dataclass(frozen=True)
class AggregatedPlayer:
    """A player's totals, rebuilt on every recomputation and never persisted."""

    player: Player
    assigned_courses: Tuple[Course, ...] = ()
    course_results: Dict[str, CourseResult] = field(default_factory=dict)
    total: int = 0
    total_score: Optional[int] = None
    plus_minus: Optional[int] = None
    total_par: int = 0
    has_any_score: bool = False
    has_forfeited: bool = False
    forfeit_type: Optional[ForfeitType] = None
    rank: Optional[int] = None

    @property
    def player_id(self) -> str:
        return self.player.player_id

    @property
    def group(self) -> str:
        return self.player.group

    @property
    def is_contender(self) -> bool:
        """Whether the player takes part in numeric ranking."""
        return self.has_any_score and not self.has_forfeited

    def course_total(self, course_id: str) -> int:
        result = self.course_results.get(course_id)
        return result.total if result else 0

    def hole_score(self, course_id: str, hole: int) -> Optional[int]:
        result = self.course_results.get(course_id)
        return result.hole(hole) if result else None

    def with_rank(self, rank: Optional[int]) -> "AggregatedPlayer":
        """Return a copy of this player carrying the given rank."""
        return replace(self, rank=rank)

    @property
    def status(self) -> str:
        if self.has_forfeited:
            return (self.forfeit_type or ForfeitType.FORFEIT).value
        if not self.has_any_score:
            return "not_played"
        return "playing"

    def to_dict(self) -> Dict[str, Any]:
        """Plain structure suitable for rendering or JSON export."""
        return {
            "id": self.player_id,
            "group": self.group,
            "jo": self.player.jo,
            "type": self.player.player_type.value,
            "name": self.player.display_name,
            "affiliation": self.player.display_affiliation,
            "rank": self.rank,
            "status": self.status,
            "total": self.total,
            "total_score": self.total_score,
            "plus_minus": self.plus_minus,
            "total_par": self.total_par,
            "has_any_score": self.has_any_score,
            "has_forfeited": self.has_forfeited,
            "forfeit_type": self.forfeit_type.value if self.forfeit_type else None,
            "courses": [
                {
                    "id": course.course_id,
                    "name": course.name,
                    "total": self.course_total(course.course_id),
                    "holes": list(
                        self.course_results[course.course_id].hole_scores
                        if course.course_id in self.course_results
                        else (None,) * HOLES_PER_COURSE
                    ),
                }
                for course in self.assigned_courses
            ],
        }


@dataclass(frozen=True)
class NearestToPin:
    """Externally judged nearest-to-pin outcome forcing ranks on named players."""

    rankings: Dict[str, int] = field(default_factory=dict)
    is_active: bool = True


@dataclass(frozen=True)
class PlayoffSettings:
    """Playoff inputs for one player type, global or scoped per group."""

    ntp: Optional[NearestToPin] = None
    ntp_by_group: Dict[str, NearestToPin] = field(default_factory=dict)
    backcount_all: bool = False
    backcount_groups: FrozenSet[str] = frozenset()

    def ntp_for(self, group_name: str) -> Optional[NearestToPin]:
        """The active NTP record for a group; a global record takes precedence."""
        if self.ntp is not None and self.ntp.is_active:
            return self.ntp
        group_ntp = self.ntp_by_group.get(group_name)
        if group_ntp is not None and group_ntp.is_active:
            return group_ntp
        return None

    def backcount_for(self, group_name: str) -> bool:
        return self.backcount_all or group_name in self.backcount_groups


NO_PLAYOFF = PlayoffSettings()


@dataclass(frozen=True)
class PlayoffInput:
    """Playoff inputs for both formats."""

    individual: PlayoffSettings = NO_PLAYOFF
    team: PlayoffSettings = NO_PLAYOFF

    def for_type(self, player_type: PlayerType) -> PlayoffSettings:
        if player_type == PlayerType.TEAM:
            return self.team
        return self.individual


@dataclass(frozen=True)
class SuddenDeathSession:
    """A hole-by-hole playoff among tied leaders on extra holes."""

    is_active: bool = False
    participants: Tuple[str, ...] = ()
    course_id: Optional[str] = None
    holes: Tuple[int, ...] = ()
    # player id -> hole number -> strokes
    scores: Dict[str, Dict[int, int]] = field(default_factory=dict)


@dataclass(frozen=True)
class SuddenDeathResult:
    """One participant's standing in a sudden-death playoff."""

    player_id: str
    name: str
    total_score: int
    holes_played: int
    rank: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.player_id,
            "name": self.name,
            "total_score": self.total_score,
            "holes_played": self.holes_played,
            "rank": self.rank,
        }


# A sudden death record applies to every group, or one record per group name
SuddenDeathData = Union[SuddenDeathSession, Dict[str, SuddenDeathSession], None]


@dataclass
class TournamentSnapshot:
    """A consistent view of every input the engine ranks from."""

    players: Dict[str, Player] = field(default_factory=dict)
    scores: Scores = field(default_factory=dict)
    courses: Dict[str, Course] = field(default_factory=dict)
    groups: Dict[str, Group] = field(default_factory=dict)
    forfeit_types: Dict[str, ForfeitType] = field(default_factory=dict)
    playoff: PlayoffInput = field(default_factory=PlayoffInput)
    individual_sudden_death: SuddenDeathData = None
    team_sudden_death: SuddenDeathData = None

    def players_in_group(self, group_name: str) -> List[Player]:
        return sorted(
            (p for p in self.players.values() if p.group == group_name),
            key=lambda p: p.player_id,
        )
