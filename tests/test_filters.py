"""Tests for match and tournament filter predicates."""

from __future__ import annotations

from datetime import date
from typing import Callable

import pytest

from rlcs import Bracket, Match, MatchTeam, Region, Tournament
from rlcs.errors import ConfigurationError
from rlcs.filters import (
    MatchFilter,
    StatusFilter,
    TournamentFilter,
    filter_brackets,
    filter_matches,
    filter_tournaments,
    status_filter_from_flags,
    validate_limit,
)

TODAY = date(2026, 1, 15)

MatchFactory = Callable[..., Match]
TournamentFactory = Callable[..., Tournament]


# --- Status flags ---


class TestStatusFlags:
    def test_none_set(self) -> None:
        assert status_filter_from_flags() is StatusFilter.ANY

    @pytest.mark.parametrize(
        "flags, expected",
        [
            ((True, False, False), StatusFilter.COMPLETED),
            ((False, True, False), StatusFilter.LIVE),
            ((False, False, True), StatusFilter.UPCOMING),
        ],
    )
    def test_single_flag(self, flags: tuple[bool, bool, bool], expected: StatusFilter) -> None:
        assert status_filter_from_flags(*flags) is expected

    @pytest.mark.parametrize(
        "flags",
        [(True, True, False), (True, False, True), (False, True, True), (True, True, True)],
    )
    def test_combinations_rejected(self, flags: tuple[bool, bool, bool]) -> None:
        with pytest.raises(ConfigurationError, match="mutually exclusive"):
            status_filter_from_flags(*flags)

    def test_negative_limit(self) -> None:
        validate_limit(0)
        validate_limit(5)
        with pytest.raises(ConfigurationError):
            validate_limit(-1)


# --- Match filter ---


class TestMatchFilter:
    def test_no_filters_match_all(self, make_match: MatchFactory) -> None:
        f = MatchFilter()
        assert not f.is_active
        assert f.matches(make_match(is_completed=True))
        assert f.matches(make_match(is_live=True))
        assert f.matches(make_match())

    @pytest.mark.parametrize(
        "status, live, completed, expected",
        [
            (StatusFilter.COMPLETED, False, True, True),
            (StatusFilter.COMPLETED, True, False, False),
            (StatusFilter.LIVE, True, False, True),
            (StatusFilter.LIVE, False, True, False),
            (StatusFilter.UPCOMING, False, False, True),
            (StatusFilter.UPCOMING, False, True, False),
            (StatusFilter.UPCOMING, True, False, False),
        ],
    )
    def test_status(
        self, make_match: MatchFactory, status: StatusFilter, live: bool, completed: bool, expected: bool
    ) -> None:
        match = make_match(is_live=live, is_completed=completed)
        assert MatchFilter(status=status).matches(match) is expected

    def test_team_name_either_side(self, make_match: MatchFactory) -> None:
        match = make_match()
        assert MatchFilter(team="karmine").matches(match)
        assert MatchFilter(team="VITALITY").matches(match)
        assert MatchFilter(team="corp").matches(match)
        assert not MatchFilter(team="falcons").matches(match)

    def test_team_shorthand(self, make_match: MatchFactory) -> None:
        match = make_match(team_b=MatchTeam(id="b", name="Team Falcons", shorthand="FLCN", location="SA"))
        assert MatchFilter(team="flcn").matches(match)
        assert not MatchFilter(team="flcn", team_shorthand=False).matches(match)

    def test_match_type_is_exact(self, make_match: MatchFactory) -> None:
        match = make_match(type="BO5")
        assert MatchFilter(match_type="bo5").matches(match)
        assert not MatchFilter(match_type="BO").matches(match)
        assert not MatchFilter(match_type="BO7").matches(match)

    def test_filters_are_anded(self, make_match: MatchFactory) -> None:
        match = make_match(type="BO7", is_completed=True)
        assert MatchFilter(status=StatusFilter.COMPLETED, team="kc", match_type="bo7").matches(match)
        assert not MatchFilter(status=StatusFilter.COMPLETED, team="kc", match_type="bo5").matches(match)

    def test_idempotent(self, make_match: MatchFactory) -> None:
        f = MatchFilter(team="kc", status=StatusFilter.LIVE)
        match = make_match(is_live=True)
        assert f.matches(match) == f.matches(match)

    def test_filter_matches_returns_new_list(self, make_match: MatchFactory) -> None:
        matches = [make_match(id="1", is_live=True), make_match(id="2")]
        result = filter_matches(matches, MatchFilter())
        assert result == matches
        assert result is not matches
        assert [m.id for m in filter_matches(matches, MatchFilter(status=StatusFilter.LIVE))] == ["1"]


class TestFilterBrackets:
    def _bracket(self, bracket_id: str, matches: list[Match]) -> Bracket:
        return Bracket(
            tournament_id=bracket_id,
            tournament_name="Swiss",
            parent_tournament_name="",
            parent_tournament_format="",
            circuit_name="RLCS 2026",
            start_date=matches[0].time_of_series,
            end_date=matches[0].time_of_series,
            index=0,
            label="Swiss",
            format="swiss",
            team_count=None,
            matches=matches,
        )

    def test_inactive_keeps_everything(self, make_match: MatchFactory) -> None:
        brackets = [self._bracket("b", [make_match()])]
        assert filter_brackets(brackets, MatchFilter()) == brackets

    def test_drops_empty_brackets(self, make_match: MatchFactory) -> None:
        live = make_match(id="live", is_live=True)
        done = make_match(id="done", is_completed=True)
        brackets = [self._bracket("b1", [live, done]), self._bracket("b2", [done])]

        result = filter_brackets(brackets, MatchFilter(status=StatusFilter.LIVE))

        assert [b.tournament_id for b in result] == ["b1"]
        assert [m.id for m in result[0].matches] == ["live"]
        # originals untouched
        assert len(brackets[0].matches) == 2


# --- Tournament filter ---


class TestTournamentFilter:
    def test_empty_filter_matches(self, make_tournament: TournamentFactory) -> None:
        assert TournamentFilter().matches(make_tournament(), TODAY)

    def test_region_case_insensitive(self, make_tournament: TournamentFactory) -> None:
        t = make_tournament(region=Region.EU)
        assert TournamentFilter(region="eu").matches(t, TODAY)
        assert not TournamentFilter(region="NA").matches(t, TODAY)

    def test_online(self, make_tournament: TournamentFactory) -> None:
        online = make_tournament(is_online=True)
        lan = make_tournament(is_online=False)
        assert TournamentFilter(online=True).matches(online, TODAY)
        assert not TournamentFilter(online=True).matches(lan, TODAY)
        assert TournamentFilter(online=False).matches(lan, TODAY)

    def test_major(self, make_tournament: TournamentFactory) -> None:
        major = make_tournament(is_major=True)
        assert TournamentFilter(major=True).matches(major, TODAY)
        assert not TournamentFilter(major=True).matches(make_tournament(), TODAY)

    def test_grouping_checks_name_case_sensitively(self, make_tournament: TournamentFactory) -> None:
        t = make_tournament(name="RLCS 2026 Europe Open 1")
        assert TournamentFilter(grouping="Europe Open").matches(t, TODAY)
        assert not TournamentFilter(grouping="europe open").matches(t, TODAY)

    def test_min_teams_inclusive(self, make_tournament: TournamentFactory) -> None:
        t = make_tournament(team_count=16)
        assert TournamentFilter(min_teams=16).matches(t, TODAY)
        assert not TournamentFilter(min_teams=17).matches(t, TODAY)

    def test_min_teams_unknown_count(self, make_tournament: TournamentFactory) -> None:
        t = make_tournament(team_count=None)
        assert TournamentFilter().matches(t, TODAY)
        assert not TournamentFilter(min_teams=1).matches(t, TODAY)

    @pytest.mark.parametrize(
        "start, end, upcoming, ongoing, past",
        [
            (date(2026, 1, 20), date(2026, 1, 22), True, False, False),
            (date(2026, 1, 15), date(2026, 1, 17), False, True, False),
            (date(2026, 1, 10), date(2026, 1, 15), False, True, False),
            (date(2026, 1, 10), date(2026, 1, 14), False, False, True),
        ],
    )
    def test_temporal(
        self,
        make_tournament: TournamentFactory,
        start: date,
        end: date,
        upcoming: bool,
        ongoing: bool,
        past: bool,
    ) -> None:
        t = make_tournament(start_date=start, end_date=end)
        assert TournamentFilter(upcoming=True).matches(t, TODAY) is upcoming
        assert TournamentFilter(ongoing=True).matches(t, TODAY) is ongoing
        assert TournamentFilter(past=True).matches(t, TODAY) is past

    def test_upcoming_and_past_never_match(self, make_tournament: TournamentFactory) -> None:
        f = TournamentFilter(upcoming=True, past=True)
        for start, end in ((date(2026, 2, 1), date(2026, 2, 2)), (date(2025, 1, 1), date(2025, 1, 2))):
            assert not f.matches(make_tournament(start_date=start, end_date=end), TODAY)

    def test_validate(self) -> None:
        TournamentFilter(upcoming=True, ongoing=True).validate()
        with pytest.raises(ConfigurationError):
            TournamentFilter(upcoming=True, past=True).validate()
        with pytest.raises(ConfigurationError):
            TournamentFilter(min_teams=-1).validate()

    def test_inverted_dates_do_not_crash(self, make_tournament: TournamentFactory) -> None:
        t = make_tournament(start_date=date(2026, 2, 1), end_date=date(2026, 1, 1))
        assert not TournamentFilter(ongoing=True).matches(t, TODAY)

    def test_without_temporal(self) -> None:
        f = TournamentFilter(region="EU", upcoming=True, ongoing=True, past=True)
        stripped = f.without_temporal()
        assert stripped == TournamentFilter(region="EU")

    def test_filter_tournaments(self, make_tournament: TournamentFactory) -> None:
        ts = [make_tournament(id="eu", region=Region.EU), make_tournament(id="na", region=Region.NA)]
        assert [t.id for t in filter_tournaments(ts, TournamentFilter(region="na"), TODAY)] == ["na"]


class TestTournamentDates:
    def test_duration(self, make_tournament: TournamentFactory) -> None:
        assert make_tournament(start_date=date(2026, 1, 10), end_date=date(2026, 1, 15)).duration.days == 5
        assert make_tournament(start_date=date(2026, 1, 10), end_date=date(2026, 1, 10)).duration.days == 0
