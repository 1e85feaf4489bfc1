"""Filter options and predicates shared by every command."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from enum import Enum

from rlcs import Bracket, Match, Tournament
from rlcs.errors import ConfigurationError


class StatusFilter(Enum):
    ANY = "any"
    COMPLETED = "completed"
    LIVE = "live"
    UPCOMING = "upcoming"


def status_filter_from_flags(
    completed_only: bool = False,
    live_only: bool = False,
    upcoming_only: bool = False,
) -> StatusFilter:
    """Collapse the three --*-only flags into one StatusFilter.

    Raises ConfigurationError when more than one flag is set.
    """
    chosen = [
        status
        for flag, status in (
            (completed_only, StatusFilter.COMPLETED),
            (live_only, StatusFilter.LIVE),
            (upcoming_only, StatusFilter.UPCOMING),
        )
        if flag
    ]
    if len(chosen) > 1:
        raise ConfigurationError(
            "cannot use multiple status filters together "
            "(completed-only, live-only, upcoming-only are mutually exclusive)"
        )
    return chosen[0] if chosen else StatusFilter.ANY


def validate_limit(limit: int) -> None:
    if limit < 0:
        raise ConfigurationError("limit cannot be negative")


@dataclass(frozen=True)
class MatchFilter:
    """Match-level filters, AND-composed.

    team_shorthand controls whether --team also checks team shorthands;
    the bracket view only compares full names.
    """

    status: StatusFilter = StatusFilter.ANY
    team: str = ""
    match_type: str = ""
    team_shorthand: bool = True

    @property
    def is_active(self) -> bool:
        return self.status is not StatusFilter.ANY or bool(self.team) or bool(self.match_type)

    def matches(self, match: Match) -> bool:
        if not self.matches_status(match):
            return False

        if self.team and not self._matches_team(match):
            return False

        if self.match_type and match.type.lower() != self.match_type.lower():
            return False

        return True

    def matches_status(self, match: Match) -> bool:
        if self.status is StatusFilter.COMPLETED:
            return match.is_completed
        if self.status is StatusFilter.LIVE:
            return match.is_live
        if self.status is StatusFilter.UPCOMING:
            return not match.is_live and not match.is_completed
        return True

    def _matches_team(self, match: Match) -> bool:
        needle = self.team.lower()
        for team in (match.team_a, match.team_b):
            if needle in team.name.lower():
                return True
            if self.team_shorthand and needle in team.shorthand.lower():
                return True
        return False


@dataclass(frozen=True)
class TournamentFilter:
    """Tournament-level filters, AND-composed.

    online and major are None when unset; otherwise the tournament flag
    must equal them. The temporal flags compare against a caller-supplied
    "today".
    """

    region: str = ""
    online: bool | None = None
    major: bool | None = None
    grouping: str = ""
    min_teams: int = 0
    upcoming: bool = False
    ongoing: bool = False
    past: bool = False

    def validate(self) -> None:
        if self.upcoming and self.past:
            raise ConfigurationError("cannot use --upcoming and --past together (they are mutually exclusive)")
        if self.min_teams < 0:
            raise ConfigurationError("min-teams cannot be negative")

    def without_temporal(self) -> TournamentFilter:
        return replace(self, upcoming=False, ongoing=False, past=False)

    def matches(self, tournament: Tournament, today: date) -> bool:
        if self.region and tournament.region.value.lower() != self.region.lower():
            return False

        if self.online is not None and tournament.is_online != self.online:
            return False

        if self.major is not None and tournament.is_major != self.major:
            return False

        # grouping is only exposed through the tournament name
        if self.grouping and self.grouping not in tournament.name:
            return False

        if self.min_teams > 0 and (tournament.team_count is None or tournament.team_count < self.min_teams):
            return False

        if self.upcoming and self.past:
            return False
        if self.upcoming and not tournament.is_upcoming(today):
            return False
        if self.past and not tournament.is_past(today):
            return False
        if self.ongoing and not tournament.is_ongoing(today):
            return False

        return True


def filter_tournaments(tournaments: list[Tournament], tournament_filter: TournamentFilter, today: date) -> list[Tournament]:
    return [t for t in tournaments if tournament_filter.matches(t, today)]


def filter_matches(matches: list[Match], match_filter: MatchFilter) -> list[Match]:
    if not match_filter.is_active:
        return list(matches)
    return [m for m in matches if match_filter.matches(m)]


def filter_brackets(brackets: list[Bracket], match_filter: MatchFilter) -> list[Bracket]:
    """Filter matches inside each bracket, dropping brackets left empty."""
    if not match_filter.is_active:
        return list(brackets)

    result: list[Bracket] = []
    for bracket in brackets:
        kept = [m for m in bracket.matches if match_filter.matches(m)]
        if kept:
            result.append(replace(bracket, matches=kept))
    return result
