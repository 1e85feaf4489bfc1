"""Cross-tournament match listing."""

from __future__ import annotations

from datetime import date, datetime
from typing import Protocol

from rlcs import GameListing, Match, Tournament
from rlcs.filters import MatchFilter, StatusFilter, TournamentFilter, filter_tournaments, validate_limit
from rlcs.mapper import to_game_listing


class GamesSource(Protocol):
    def get_tournaments(self, circuit: str) -> list[Tournament]: ...

    def get_tournament_matches(self, tournament_id: str) -> list[Match]: ...


def status_rank(match: Match) -> int:
    """live 0, upcoming 1, completed 2. Live wins if both flags are set."""
    if match.is_live:
        return 0
    if match.is_completed:
        return 2
    return 1


def sort_key(listing: GameListing) -> tuple[int, datetime, str, str, str, str]:
    match = listing.match
    return (
        status_rank(match),
        match.time_of_series,
        listing.tournament_name,
        match.name,
        # tie-breakers so duplicates still come out in a fixed order
        listing.tournament_id,
        match.id,
    )


def sort_games(games: list[GameListing]) -> list[GameListing]:
    return sorted(games, key=sort_key)


def admits(match: Match, match_filter: MatchFilter) -> bool:
    """Match filter for the aggregated view.

    Without an explicit status filter only live and upcoming matches are
    listed; completed ones need --completed-only.
    """
    if match_filter.status is StatusFilter.ANY and match.is_completed and not match.is_live:
        return False
    return match_filter.matches(match)


def collect_games(
    source: GamesSource,
    circuit: str,
    tournament_filter: TournamentFilter,
    match_filter: MatchFilter,
    limit: int = 0,
    today: date | None = None,
) -> list[GameListing]:
    """List matches across every tournament of a circuit.

    Tournaments are fetched once, filtered (temporal filters are ignored),
    then each survivor's matches are fetched one after the other. The
    result is sorted by status, scheduled time, tournament name and match
    name, then cut to limit when limit > 0.
    """
    validate_limit(limit)
    tournament_filter = tournament_filter.without_temporal()
    tournament_filter.validate()

    # temporal filters are off here, so the reference date is never consulted
    tournaments = filter_tournaments(source.get_tournaments(circuit), tournament_filter, today or date.min)

    games: list[GameListing] = []
    for tournament in tournaments:
        for match in source.get_tournament_matches(tournament.id):
            if admits(match, match_filter):
                games.append(to_game_listing(tournament, match))

    games = sort_games(games)
    if limit > 0:
        games = games[:limit]
    return games
