"""RLCS CLI: shared domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import Enum

__version__ = "0.4.0"


class Region(str, Enum):
    """Geographical region of a tournament. NONE covers majors and worlds."""

    NA = "NA"
    EU = "EU"
    APAC = "APAC"
    SAM = "SAM"
    OCE = "OCE"
    MENA = "MENA"
    SSA = "SSA"
    NONE = ""


class TournamentType(str, Enum):
    OPEN = "Open"
    MAJOR = "Major"
    WORLD_CHAMPIONSHIP = "WorldChampionship"
    KICKOFF = "Kickoff"


@dataclass(frozen=True)
class Tournament:
    """A tournament in a circuit."""

    id: str
    name: str
    start_date: date
    end_date: date
    circuit_id: str
    prize_pool: str
    location: str
    team_count: int | None
    region: Region
    type: TournamentType
    description: str
    is_online: bool
    is_major: bool

    def is_upcoming(self, today: date) -> bool:
        return self.start_date > today

    def is_ongoing(self, today: date) -> bool:
        return self.start_date <= today <= self.end_date

    def is_past(self, today: date) -> bool:
        return self.end_date < today

    @property
    def duration(self) -> timedelta:
        return self.end_date - self.start_date


@dataclass(frozen=True)
class MatchTeam:
    """One side of a match."""

    id: str
    name: str
    shorthand: str
    location: str
    is_eliminated: bool = False


@dataclass(frozen=True)
class MatchMap:
    """A single game within a match. Unset start/end times are None."""

    id: str
    scheduled_start: datetime
    actual_start: datetime | None
    name: str
    ended_at: datetime | None
    team_a_score: int
    team_b_score: int
    external_id: str


@dataclass(frozen=True)
class BracketDestination:
    """Where a team advances to after a bracket match."""

    tournament_id: str
    series_id: str
    bracket_position: str


@dataclass(frozen=True)
class Match:
    """A best-of-N series between two teams."""

    id: str
    type: str
    index: int
    name: str
    time_of_series: datetime
    team_a: MatchTeam
    team_b: MatchTeam
    team_a_score: int
    team_b_score: int
    maps: list[MatchMap] = field(default_factory=list)
    external_id: str | None = None
    winner_goes_to: BracketDestination | None = None
    loser_goes_to: BracketDestination | None = None
    is_live: bool = False
    is_completed: bool = False

    @property
    def status(self) -> str:
        """Status label; live wins if both flags are somehow set."""
        if self.is_live:
            return "live"
        if self.is_completed:
            return "completed"
        return "upcoming"


@dataclass(frozen=True)
class Bracket:
    """A bracket stage of a tournament with its ordered matches."""

    tournament_id: str
    tournament_name: str
    parent_tournament_name: str
    parent_tournament_format: str
    circuit_name: str
    start_date: datetime
    end_date: datetime
    index: int
    label: str
    format: str
    team_count: int | None
    matches: list[Match] = field(default_factory=list)


@dataclass(frozen=True)
class GameListing:
    """A match tagged with the tournament it belongs to."""

    tournament_id: str
    tournament_name: str
    match: Match
