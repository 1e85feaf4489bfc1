"""Rendering of domain objects as table, JSON, YAML, CSV or ICS text."""

from __future__ import annotations

import csv
import json
from dataclasses import asdict
from datetime import date, datetime
from enum import Enum
from typing import Any, Callable, TextIO

import yaml

from rlcs import Bracket, GameListing, Match, Tournament
from rlcs.calendar_gen import create_games_calendar, create_match_calendar
from rlcs.errors import ConfigurationError

TABLE = "table"
JSON = "json"
YAML = "yaml"
CSV = "csv"
ICS = "ics"

TOURNAMENT_FORMATS = (TABLE, JSON, CSV, YAML)
MATCH_FORMATS = (TABLE, JSON, YAML, ICS)
BRACKET_FORMATS = (TABLE, JSON, YAML)
GAME_FORMATS = (TABLE, JSON, YAML, ICS)

_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

_MATCH_HEADER = (
    "┌───────────────────────────────┬─────────────────────────────────────┬─────────┬─────────────┐\n"
    "│ Match                         │ Teams                               │ Score   │ Status      │\n"
    "├───────────────────────────────┼─────────────────────────────────────┼─────────┼─────────────┤"
)
_MATCH_FOOTER = "└───────────────────────────────┴─────────────────────────────────────┴─────────┴─────────────┘"


def truncate(text: str, max_len: int) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


def format_date_range(start: date, end: date) -> str:
    """Compact range, e.g. "Jan 15-17 '26" or "Jan 30-Feb 02 '26"."""
    year = f"{start.year % 100:02d}"
    start_month = _MONTHS[start.month - 1]
    if start.month == end.month:
        return f"{start_month} {start.day:02d}-{end.day:02d} '{year}"
    return f"{start_month} {start.day:02d}-{_MONTHS[end.month - 1]} {end.day:02d} '{year}"


def format_status(match: Match) -> str:
    if match.is_live:
        return "LIVE"
    if match.is_completed:
        return "Completed"
    return "Upcoming"


def _teams(match: Match) -> str:
    return f"{truncate(match.team_a.name, 15)} vs {truncate(match.team_b.name, 15)}"


def _score(match: Match) -> str:
    return f"{match.team_a_score} - {match.team_b_score}"


# --- Serialisable form ---


def _plain(value: Any) -> Any:
    """Convert dataclass dicts into JSON/YAML friendly values."""
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_plain(v) for v in value]
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"
    if isinstance(value, date):
        return value.isoformat()
    return value


def to_plain(items: list[Any]) -> list[dict[str, Any]]:
    """Dataclasses to plain dicts; matches gain a derived "status" key."""
    result = []
    for item in items:
        data = _plain(asdict(item))
        if isinstance(item, Match):
            data["status"] = item.status
        elif isinstance(item, GameListing):
            data["match"]["status"] = item.match.status
        elif isinstance(item, Bracket):
            for match_data, match in zip(data["matches"], item.matches):
                match_data["status"] = match.status
        result.append(data)
    return result


def write_json(out: TextIO, items: list[Any]) -> None:
    out.write(json.dumps(to_plain(items), indent=2, ensure_ascii=False))
    out.write("\n")


def write_yaml(out: TextIO, items: list[Any]) -> None:
    yaml.safe_dump(to_plain(items), out, sort_keys=False, allow_unicode=True, indent=2)


# --- Tables ---


def write_tournament_table(out: TextIO, tournaments: list[Tournament]) -> None:
    out.write("┌────────────────────────────┬───────────────────────────────┬──────────────────┬─────────────┬────────┬───────┬────────────────────┐\n")
    out.write("│ ID                         │ Name                          │ Dates            │ Prize Pool  │ Region │ Teams │ Type               │\n")
    out.write("├────────────────────────────┼───────────────────────────────┼──────────────────┼─────────────┼────────┼───────┼────────────────────┤\n")
    for t in tournaments:
        teams = "-" if t.team_count is None else str(t.team_count)
        out.write(
            f"│ {truncate(t.id, 26):<26} │ {truncate(t.name, 29):<29} │ "
            f"{format_date_range(t.start_date, t.end_date):<16} │ {truncate(t.prize_pool, 13):<11} │ "
            f"{t.region.value or '-':<6} │ {teams:<5} │ {t.type.value:<18} │\n"
        )
    out.write("└────────────────────────────┴───────────────────────────────┴──────────────────┴─────────────┴────────┴───────┴────────────────────┘\n")


def _write_match_rows(out: TextIO, matches: list[Match]) -> None:
    out.write(_MATCH_HEADER + "\n")
    for m in matches:
        out.write(f"│ {truncate(m.name, 29):<29} │ {_teams(m):<35} │ {_score(m):<7} │ {format_status(m):<11} │\n")
    out.write(_MATCH_FOOTER + "\n")


def write_match_table(out: TextIO, matches: list[Match]) -> None:
    if not matches:
        out.write("No matches found\n")
        return
    _write_match_rows(out, matches)


def write_bracket_table(out: TextIO, brackets: list[Bracket]) -> None:
    if not brackets:
        out.write("No brackets found\n")
        return

    for i, bracket in enumerate(brackets):
        if i > 0:
            out.write("\n" + "=" * 80 + "\n")
        out.write(f"\n{bracket.tournament_name} ({bracket.label})\n")
        if bracket.parent_tournament_name:
            out.write(f"Part of: {bracket.parent_tournament_name}\n")
        out.write("\n")
        _write_match_rows(out, bracket.matches)


def write_game_table(out: TextIO, games: list[GameListing]) -> None:
    if not games:
        out.write("No games found\n")
        return

    out.write("┌───────────────────────┬───────────────────────────────┬─────────────────────────────────────┬─────────┬─────────────┐\n")
    out.write("│ Tournament            │ Match                         │ Teams                               │ Score   │ Status      │\n")
    out.write("├───────────────────────┼───────────────────────────────┼─────────────────────────────────────┼─────────┼─────────────┤\n")
    for g in games:
        m = g.match
        out.write(
            f"│ {truncate(g.tournament_name, 21):<21} │ {truncate(m.name, 29):<29} │ "
            f"{_teams(m):<35} │ {_score(m):<7} │ {format_status(m):<11} │\n"
        )
    out.write("└───────────────────────┴───────────────────────────────┴─────────────────────────────────────┴─────────┴─────────────┘\n")


# --- CSV ---

CSV_HEADER = [
    "ID", "Name", "StartDate", "EndDate", "CircuitID", "PrizePool", "Location",
    "TeamCount", "Region", "Type", "Description", "IsOnline", "IsMajor",
]


def write_tournament_csv(out: TextIO, tournaments: list[Tournament]) -> None:
    writer = csv.writer(out, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for t in tournaments:
        writer.writerow([
            t.id,
            t.name,
            t.start_date.isoformat(),
            t.end_date.isoformat(),
            t.circuit_id,
            t.prize_pool,
            t.location,
            "" if t.team_count is None else str(t.team_count),
            t.region.value,
            t.type.value,
            t.description,
            str(t.is_online).lower(),
            str(t.is_major).lower(),
        ])


# --- Dispatch ---


def _write_match_ics(out: TextIO, matches: list[Match]) -> None:
    out.write(create_match_calendar(matches).to_ical().decode("utf-8"))


def _write_game_ics(out: TextIO, games: list[GameListing]) -> None:
    out.write(create_games_calendar(games).to_ical().decode("utf-8"))


Writer = Callable[[TextIO, list[Any]], None]

_WRITERS: dict[str, dict[str, Writer]] = {
    "tournaments": {TABLE: write_tournament_table, JSON: write_json, YAML: write_yaml, CSV: write_tournament_csv},
    "matches": {TABLE: write_match_table, JSON: write_json, YAML: write_yaml, ICS: _write_match_ics},
    "brackets": {TABLE: write_bracket_table, JSON: write_json, YAML: write_yaml},
    "games": {TABLE: write_game_table, JSON: write_json, YAML: write_yaml, ICS: _write_game_ics},
}


def get_writer(kind: str, fmt: str) -> Writer:
    """Look up the renderer for an entity kind and output format."""
    writers = _WRITERS[kind]
    if fmt not in writers:
        raise ConfigurationError(f"invalid output format {fmt!r} for {kind}, must be one of: {', '.join(writers)}")
    return writers[fmt]
