"""Command-line entry point.

Usage:
    rlcs tournaments list [--circuit 2026] [--region EU] [--upcoming] [-o json]
    rlcs tournaments matches [--live-only] [--limit 10]
    rlcs tournaments brackets <tournament-id> [--team vitality]
    rlcs matches list <tournament-id> [--completed-only] [--match-type BO7]
    rlcs matches get <match-id> [-o yaml]
"""

from __future__ import annotations

import argparse
import sys
from datetime import datetime, timezone
from typing import Callable, TextIO

from rlcs import __version__
from rlcs.client import BlastClient
from rlcs.config import load_settings
from rlcs.errors import RLCSError
from rlcs.filters import (
    MatchFilter,
    TournamentFilter,
    filter_brackets,
    filter_matches,
    filter_tournaments,
    status_filter_from_flags,
)
from rlcs.games import collect_games
from rlcs.output import BRACKET_FORMATS, GAME_FORMATS, MATCH_FORMATS, TOURNAMENT_FORMATS, TABLE, get_writer

Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="rlcs", description="RLCS tournaments, brackets and matches from the Blast.tv API.")
    parser.add_argument("--debug", action="store_true", help="Print request diagnostics to stderr")
    parser.add_argument("-v", "--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="group", required=True)

    p_tournaments = sub.add_parser("tournaments", help="Tournament-related commands")
    t_sub = p_tournaments.add_subparsers(dest="cmd", required=True)

    p_list = t_sub.add_parser("list", help="List all tournaments")
    _add_tournament_filters(p_list)
    p_list.add_argument("--upcoming", action="store_true", help="Only tournaments starting after today")
    p_list.add_argument("--ongoing", action="store_true", help="Only tournaments running today")
    p_list.add_argument("--past", action="store_true", help="Only tournaments that ended before today")
    _add_output(p_list, TOURNAMENT_FORMATS)
    p_list.set_defaults(handler=run_tournaments_list)

    p_games = t_sub.add_parser("matches", help="List matches across tournaments")
    _add_tournament_filters(p_games)
    _add_match_filters(p_games)
    p_games.add_argument("--limit", type=int, default=0, help="Maximum number of matches to return (0 = no limit)")
    _add_output(p_games, GAME_FORMATS)
    p_games.set_defaults(handler=run_tournaments_matches)

    p_brackets = t_sub.add_parser("brackets", help="Get brackets for a specific tournament")
    p_brackets.add_argument("tournament_id", help="Tournament ID")
    _add_match_filters(p_brackets)
    _add_output(p_brackets, BRACKET_FORMATS)
    p_brackets.set_defaults(handler=run_tournaments_brackets)

    p_matches = sub.add_parser("matches", help="Match-related commands")
    m_sub = p_matches.add_subparsers(dest="cmd", required=True)

    p_mlist = m_sub.add_parser("list", help="List matches for a specific tournament")
    p_mlist.add_argument("tournament_id", help="Tournament ID")
    _add_match_filters(p_mlist)
    _add_output(p_mlist, MATCH_FORMATS)
    p_mlist.set_defaults(handler=run_matches_list)

    p_get = m_sub.add_parser("get", help="Get detailed information for a specific match")
    p_get.add_argument("match_id", help="Match ID")
    _add_output(p_get, MATCH_FORMATS)
    p_get.set_defaults(handler=run_matches_get)

    return parser


def _add_tournament_filters(p: argparse.ArgumentParser) -> None:
    p.add_argument("--circuit", default="", help="Circuit/year (default: current year)")
    p.add_argument("--region", default="", help="Region (NA, EU, APAC, SAM, OCE, MENA, SSA)")
    p.add_argument("--online", action="store_true", help="Only online tournaments")
    p.add_argument("--major", action="store_true", help="Only majors (no region/grouping)")
    p.add_argument("--grouping", default="", help="Tournament grouping, e.g. 'RLCS Open 1 2026'")
    p.add_argument("--min-teams", type=int, default=0, help="Minimum number of teams")


def _add_match_filters(p: argparse.ArgumentParser) -> None:
    p.add_argument("--completed-only", action="store_true", help="Only completed matches")
    p.add_argument("--live-only", action="store_true", help="Only live matches")
    p.add_argument("--upcoming-only", action="store_true", help="Only upcoming matches")
    p.add_argument("--team", default="", help="Team name filter (case-insensitive partial match)")
    p.add_argument("--match-type", default="", help="Match type, e.g. BO5 or BO7")


def _add_output(p: argparse.ArgumentParser, formats: tuple[str, ...]) -> None:
    p.add_argument("-o", "--output", choices=formats, default=TABLE, help="Output format")


def _tournament_filter(args: argparse.Namespace) -> TournamentFilter:
    return TournamentFilter(
        region=args.region,
        online=True if args.online else None,
        major=True if args.major else None,
        grouping=args.grouping,
        min_teams=args.min_teams,
        upcoming=getattr(args, "upcoming", False),
        ongoing=getattr(args, "ongoing", False),
        past=getattr(args, "past", False),
    )


def _match_filter(args: argparse.Namespace, team_shorthand: bool) -> MatchFilter:
    return MatchFilter(
        status=status_filter_from_flags(args.completed_only, args.live_only, args.upcoming_only),
        team=args.team,
        match_type=args.match_type,
        team_shorthand=team_shorthand,
    )


def _circuit(args: argparse.Namespace, now: datetime) -> str:
    return args.circuit or str(now.year)


# --- Commands ---


def run_tournaments_list(args: argparse.Namespace, client: BlastClient, now: datetime, out: TextIO) -> None:
    tournament_filter = _tournament_filter(args)
    tournament_filter.validate()
    write = get_writer("tournaments", args.output)

    tournaments = client.get_tournaments(_circuit(args, now))
    write(out, filter_tournaments(tournaments, tournament_filter, now.date()))


def run_tournaments_matches(args: argparse.Namespace, client: BlastClient, now: datetime, out: TextIO) -> None:
    match_filter = _match_filter(args, team_shorthand=True)
    write = get_writer("games", args.output)

    games = collect_games(
        client,
        _circuit(args, now),
        _tournament_filter(args),
        match_filter,
        limit=args.limit,
        today=now.date(),
    )
    write(out, games)


def run_tournaments_brackets(args: argparse.Namespace, client: BlastClient, now: datetime, out: TextIO) -> None:
    match_filter = _match_filter(args, team_shorthand=False)
    write = get_writer("brackets", args.output)

    brackets = client.get_brackets(args.tournament_id)
    write(out, filter_brackets(brackets, match_filter))


def run_matches_list(args: argparse.Namespace, client: BlastClient, now: datetime, out: TextIO) -> None:
    match_filter = _match_filter(args, team_shorthand=True)
    write = get_writer("matches", args.output)

    matches = client.get_tournament_matches(args.tournament_id)
    write(out, filter_matches(matches, match_filter))


def run_matches_get(args: argparse.Namespace, client: BlastClient, now: datetime, out: TextIO) -> None:
    write = get_writer("matches", args.output)
    write(out, [client.get_match(args.match_id)])


def main(
    argv: list[str] | None = None,
    client: BlastClient | None = None,
    clock: Clock = _utcnow,
    out: TextIO | None = None,
) -> int:
    args = build_parser().parse_args(argv)
    out = out or sys.stdout

    try:
        if client is None:
            settings = load_settings()
            client = BlastClient(
                base_url=settings.api_url,
                timeout=settings.timeout,
                debug=args.debug or settings.debug,
            )
        args.handler(args, client, clock(), out)
    except RLCSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
