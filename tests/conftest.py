"""Shared fixtures: recorded API payloads and domain object factories."""

from __future__ import annotations

import json
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Callable

import pytest

from rlcs import Match, MatchTeam, Region, Tournament, TournamentType

FIXTURE_DIR = Path(__file__).parent / "fixtures"


def _load(name: str) -> Any:
    return json.loads((FIXTURE_DIR / name).read_text(encoding="utf-8"))


@pytest.fixture
def raw_tournaments() -> list[dict]:
    return _load("tournaments.json")


@pytest.fixture
def raw_matches() -> list[dict]:
    return _load("matches.json")


@pytest.fixture
def raw_brackets() -> list[dict]:
    return _load("brackets.json")


@pytest.fixture
def make_match() -> Callable[..., Match]:
    def factory(**overrides: Any) -> Match:
        fields: dict[str, Any] = {
            "id": "m-1",
            "type": "BO5",
            "index": 0,
            "name": "Match",
            "time_of_series": datetime(2026, 1, 15, 16, 0, tzinfo=timezone.utc),
            "team_a": MatchTeam(id="a", name="Karmine Corp", shorthand="KC", location="FR"),
            "team_b": MatchTeam(id="b", name="Team Vitality", shorthand="VIT", location="FR"),
            "team_a_score": 0,
            "team_b_score": 0,
        }
        fields.update(overrides)
        return Match(**fields)

    return factory


@pytest.fixture
def make_tournament() -> Callable[..., Tournament]:
    def factory(**overrides: Any) -> Tournament:
        fields: dict[str, Any] = {
            "id": "t-1",
            "name": "RLCS 2026 Europe Open 1",
            "start_date": date(2026, 1, 15),
            "end_date": date(2026, 1, 17),
            "circuit_id": "2026",
            "prize_pool": "$100,000",
            "location": "Online",
            "team_count": 16,
            "region": Region.EU,
            "type": TournamentType.OPEN,
            "description": "",
            "is_online": True,
            "is_major": False,
        }
        fields.update(overrides)
        return Tournament(**fields)

    return factory
