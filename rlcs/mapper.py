"""Map raw Blast API payloads onto the domain models.

The API speaks two match shapes. Bracket payloads carry explicit
``isLive``/``isCompleted`` flags and advancement pointers; the matches
endpoint does not, so status there is inferred from map timestamps.

Every function here is pure. A field that fails to parse raises
DateParseError and aborts the whole batch it belongs to. A value that is
not the expected object or array raises TransportError, like any other
malformed body.
"""

from __future__ import annotations

import re
from datetime import date, datetime, timezone
from typing import Any

from rlcs import (
    Bracket,
    BracketDestination,
    GameListing,
    Match,
    MatchMap,
    MatchTeam,
    Region,
    Tournament,
    TournamentType,
)
from rlcs.errors import DateParseError, TransportError

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"

# strptime is lenient about padding and fraction width; the wire format is not
_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")
_TIME_RE = re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z")

_REGIONS = {r.value: r for r in Region if r is not Region.NONE}

RawObject = dict[str, Any]


# --- Field parsing ---


def parse_date(value: Any, entity_id: str, field: str) -> date:
    """Parse a calendar date (YYYY-MM-DD)."""
    if not isinstance(value, str) or not _DATE_RE.fullmatch(value):
        raise DateParseError(entity_id, field, value)
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except ValueError:
        raise DateParseError(entity_id, field, value) from None


def parse_timestamp(value: Any, entity_id: str, field: str) -> datetime:
    """Parse a UTC timestamp with millisecond precision and a literal Z."""
    if not isinstance(value, str) or not _TIME_RE.fullmatch(value):
        raise DateParseError(entity_id, field, value)
    try:
        dt = datetime.strptime(value, TIME_FORMAT)
    except ValueError:
        raise DateParseError(entity_id, field, value) from None
    return dt.replace(tzinfo=timezone.utc)


def parse_optional_timestamp(value: Any, entity_id: str, field: str) -> datetime | None:
    """Like parse_timestamp, but an empty or missing value means "not set"."""
    if value is None or value == "":
        return None
    return parse_timestamp(value, entity_id, field)


def parse_region(value: Any) -> Region:
    """Case-insensitive region lookup. Unknown values map to Region.NONE."""
    if not isinstance(value, str):
        return Region.NONE
    return _REGIONS.get(value.upper(), Region.NONE)


def classify_tournament(name: str, region: str, grouping: str) -> TournamentType:
    """Derive the tournament type from its name and raw region/grouping."""
    lower_name = name.lower()

    if "world championship" in lower_name:
        return TournamentType.WORLD_CHAMPIONSHIP
    if "kick-off" in lower_name or "kickoff" in lower_name:
        return TournamentType.KICKOFF
    if not region and not grouping:
        return TournamentType.MAJOR

    return TournamentType.OPEN


def _object(value: Any, what: str) -> RawObject:
    if not isinstance(value, dict):
        raise TransportError(f"failed to parse JSON: expected an object for {what}, got {type(value).__name__}")
    return value


def _optional_object(raw: RawObject, key: str, what: str) -> RawObject | None:
    value = raw.get(key)
    if value is None:
        return None
    return _object(value, what)


def _array(raw: RawObject, key: str, what: str) -> list[Any]:
    value = raw.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise TransportError(f"failed to parse JSON: expected an array for {what}, got {type(value).__name__}")
    return value


def _str(raw: RawObject, key: str) -> str:
    value = raw.get(key)
    return value if isinstance(value, str) else ""


def _is_int(value: Any) -> bool:
    # bool is an int subclass
    return isinstance(value, int) and not isinstance(value, bool)


def _int(raw: RawObject, key: str) -> int:
    value = raw.get(key)
    return value if _is_int(value) else 0


def _optional_int(raw: RawObject, key: str) -> int | None:
    value = raw.get(key)
    return value if _is_int(value) else None


def _optional_str(raw: RawObject, key: str) -> str | None:
    value = raw.get(key)
    return value if isinstance(value, str) else None


# --- Tournaments ---


def map_tournament(raw: RawObject) -> Tournament:
    """Convert one tournament from the circuit listing."""
    tournament_id = _str(raw, "id")
    region = _str(raw, "region")
    grouping = _str(raw, "grouping")
    name = _str(raw, "name")
    location = _str(raw, "location")

    return Tournament(
        id=tournament_id,
        name=name,
        start_date=parse_date(raw.get("startDate"), tournament_id, "startDate"),
        end_date=parse_date(raw.get("endDate"), tournament_id, "endDate"),
        circuit_id=_str(raw, "circuitId"),
        prize_pool=_str(raw, "prizePool"),
        location=location,
        team_count=_optional_int(raw, "numberOfTeams"),
        region=parse_region(region),
        type=classify_tournament(name, region, grouping),
        description=_str(raw, "description"),
        is_online=location == "Online",
        is_major=not region and not grouping,
    )


def map_tournament_list(raws: list[RawObject]) -> list[Tournament]:
    """Convert a tournament listing; the first bad entry fails the batch."""
    return [map_tournament(_object(raw, "tournament")) for raw in raws]


# --- Bracket shape ---


def _map_bracket_team(raw: RawObject) -> MatchTeam:
    return MatchTeam(
        id=_str(raw, "uuid"),
        name=_str(raw, "name"),
        shorthand=_str(raw, "shorthand"),
        location=_str(raw, "location"),
        is_eliminated=bool(raw.get("isEliminated")),
    )


def _map_destination(raw: RawObject | None) -> BracketDestination | None:
    if not raw:
        return None
    return BracketDestination(
        tournament_id=_str(raw, "tournamentUUID"),
        series_id=_str(raw, "seriesUUID"),
        bracket_position=_str(raw, "bracketPosition"),
    )


def map_map(raw: RawObject) -> MatchMap:
    """Convert a bracket map; all three timestamps are required."""
    map_id = _str(raw, "uuid")
    return MatchMap(
        id=map_id,
        scheduled_start=parse_timestamp(raw.get("scheduledStartTime"), map_id, "scheduledStartTime"),
        actual_start=parse_timestamp(raw.get("actualStartTime"), map_id, "actualStartTime"),
        name=_str(raw, "name"),
        ended_at=parse_timestamp(raw.get("matchEndedTime"), map_id, "matchEndedTime"),
        team_a_score=_int(raw, "teamAScore"),
        team_b_score=_int(raw, "teamBScore"),
        external_id=_str(raw, "externalId"),
    )


def map_match(raw: RawObject) -> Match:
    """Convert a bracket match. Its live/completed flags are taken as given."""
    match_id = _str(raw, "uuid")
    time_of_series = parse_timestamp(raw.get("timeOfSeries"), match_id, "timeOfSeries")

    maps: list[MatchMap] = []
    for raw_map in _array(raw, "maps", f"maps of match {match_id}"):
        try:
            maps.append(map_map(_object(raw_map, f"map of match {match_id}")))
        except DateParseError as e:
            raise e.wrap(f"match {match_id}") from e

    return Match(
        id=match_id,
        type=_str(raw, "type"),
        index=_int(raw, "index"),
        name=_str(raw, "name"),
        time_of_series=time_of_series,
        team_a=_map_bracket_team(_optional_object(raw, "teamA", f"teamA of match {match_id}") or {}),
        team_b=_map_bracket_team(_optional_object(raw, "teamB", f"teamB of match {match_id}") or {}),
        team_a_score=_int(raw, "teamAScore"),
        team_b_score=_int(raw, "teamBScore"),
        maps=maps,
        external_id=_optional_str(raw, "externalId"),
        winner_goes_to=_map_destination(_optional_object(raw, "winnerGoesTo", f"winnerGoesTo of match {match_id}")),
        loser_goes_to=_map_destination(_optional_object(raw, "loserGoesTo", f"loserGoesTo of match {match_id}")),
        is_live=bool(raw.get("isLive")),
        is_completed=bool(raw.get("isCompleted")),
    )


def map_bracket(raw: RawObject) -> Bracket:
    """Convert a bracket stage together with all of its matches."""
    bracket_id = _str(raw, "tournamentUuid")
    start_date = parse_timestamp(raw.get("startDate"), bracket_id, "startDate")
    end_date = parse_timestamp(raw.get("endDate"), bracket_id, "endDate")

    matches: list[Match] = []
    for raw_match in _array(raw, "matches", f"matches of bracket {bracket_id}"):
        try:
            matches.append(map_match(_object(raw_match, f"match of bracket {bracket_id}")))
        except DateParseError as e:
            raise e.wrap(f"bracket {bracket_id}") from e

    return Bracket(
        tournament_id=bracket_id,
        tournament_name=_str(raw, "tournamentName"),
        parent_tournament_name=_str(raw, "parentTournamentName"),
        parent_tournament_format=_str(raw, "parentTournamentFormat"),
        circuit_name=_str(raw, "circuitName"),
        start_date=start_date,
        end_date=end_date,
        index=_int(raw, "index"),
        label=_str(raw, "label"),
        format=_str(raw, "format"),
        team_count=_optional_int(raw, "numberOfTeams"),
        matches=matches,
    )


def map_bracket_list(raws: list[RawObject]) -> list[Bracket]:
    return [map_bracket(_object(raw, "bracket")) for raw in raws]


# --- Matches-endpoint shape ---


def infer_match_status(maps: list[MatchMap]) -> tuple[bool, bool]:
    """Return (is_completed, is_live) derived from map timestamps.

    - no maps, or no map started: upcoming (False, False)
    - every map started and ended: completed (True, False)
    - otherwise: live (False, True)

    A map that has not started yet also blocks "completed", so one finished
    map followed by an unstarted one reads as live.
    """
    if not maps:
        return False, False

    has_started = False
    all_ended = True

    for m in maps:
        if m.actual_start is not None:
            has_started = True
            if m.ended_at is None:
                all_ended = False
        else:
            all_ended = False

    if not has_started:
        return False, False
    if all_ended:
        return True, False
    return False, True


def _map_listing_team(raw: RawObject) -> MatchTeam:
    return MatchTeam(
        id=_str(raw, "id"),
        name=_str(raw, "name"),
        shorthand=_str(raw, "shortName"),
        location=_str(raw, "nationality"),
    )


def map_listing_map(raw: RawObject) -> MatchMap:
    """Convert a map from the matches endpoint.

    Only the scheduled time is required; empty start/end times are "not set".
    """
    map_id = _str(raw, "id")
    return MatchMap(
        id=map_id,
        scheduled_start=parse_timestamp(raw.get("scheduledAt"), map_id, "scheduledAt"),
        actual_start=parse_optional_timestamp(raw.get("startedAt"), map_id, "startedAt"),
        name=_str(raw, "name"),
        ended_at=parse_optional_timestamp(raw.get("endedAt"), map_id, "endedAt"),
        team_a_score=_int(raw, "teamAScore"),
        team_b_score=_int(raw, "teamBScore"),
        external_id=_str(raw, "externalId"),
    )


def map_match_from_listing(raw: RawObject) -> Match:
    """Convert a match from the matches (or detailed match) endpoint."""
    match_id = _str(raw, "id")
    time_of_series = parse_timestamp(raw.get("scheduledAt"), match_id, "scheduledAt")

    maps: list[MatchMap] = []
    for raw_map in _array(raw, "maps", f"maps of match {match_id}"):
        try:
            maps.append(map_listing_map(_object(raw_map, f"map of match {match_id}")))
        except DateParseError as e:
            raise e.wrap(f"match {match_id}") from e

    is_completed, is_live = infer_match_status(maps)

    return Match(
        id=match_id,
        type=_str(raw, "type"),
        index=_int(raw, "index"),
        name=_str(raw, "name"),
        time_of_series=time_of_series,
        team_a=_map_listing_team(_optional_object(raw, "teamA", f"teamA of match {match_id}") or {}),
        team_b=_map_listing_team(_optional_object(raw, "teamB", f"teamB of match {match_id}") or {}),
        team_a_score=_int(raw, "teamAScore"),
        team_b_score=_int(raw, "teamBScore"),
        maps=maps,
        external_id=_optional_str(raw, "externalId"),
        is_live=is_live,
        is_completed=is_completed,
    )


def map_match_list(raws: list[RawObject]) -> list[Match]:
    return [map_match_from_listing(_object(raw, "match")) for raw in raws]


def to_game_listing(tournament: Tournament, match: Match) -> GameListing:
    """Tag a match with its parent tournament."""
    return GameListing(
        tournament_id=tournament.id,
        tournament_name=tournament.name,
        match=match,
    )
