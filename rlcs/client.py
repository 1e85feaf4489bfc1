"""HTTP client for the Blast.tv API."""

from __future__ import annotations

import sys
from typing import Any

import requests

from rlcs import Bracket, Match, Tournament
from rlcs.errors import NotFoundError, TransportError
from rlcs.mapper import map_bracket_list, map_match_from_listing, map_match_list, map_tournament_list

BASE_URL = "https://api.blast.tv/v2"
DEFAULT_TIMEOUT = 10.0
USER_AGENT = "rlcs-cli (+https://github.com/mgranderath/rlcs-cli)"
GAME = "rl"


class BlastClient:
    """Thin wrapper around requests with the API's error conventions.

    One GET per call, no retries. A 404 raises NotFoundError with the
    caller's message; anything else that is not 2xx raises TransportError.
    """

    def __init__(
        self,
        base_url: str = BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
        debug: bool = False,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.debug = debug

    def get_json(self, path: str, params: dict[str, str] | None = None, not_found: str = "resource not found") -> Any:
        url = f"{self.base_url}{path}"
        headers = {"Accept": "application/json", "User-Agent": USER_AGENT}
        self._log(f"GET {url} params={params or {}}")

        try:
            response = self.session.get(url, headers=headers, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise TransportError(f"failed to make request: {e}") from e

        self._log(f"  -> {response.status_code}")
        if response.status_code == 404:
            raise NotFoundError(not_found)
        if not 200 <= response.status_code < 300:
            raise TransportError(f"unexpected status code: {response.status_code}", status_code=response.status_code)

        try:
            return response.json()
        except ValueError as e:
            raise TransportError(f"failed to parse JSON: {e}") from e

    def get_tournaments(self, circuit: str) -> list[Tournament]:
        """Fetch every tournament of a circuit (e.g. "2026")."""
        data = self.get_json(
            f"/circuits/{circuit}/tournaments",
            params={"game": GAME},
            not_found=f"circuit not found: {circuit}",
        )
        tournaments = map_tournament_list(_expect_list(data))
        self._log(f"  mapped {len(tournaments)} tournament(s)")
        return tournaments

    def get_tournament_matches(self, tournament_id: str) -> list[Match]:
        data = self.get_json(
            f"/games/{GAME}/tournaments/{tournament_id}/matches",
            not_found=f"tournament not found: {tournament_id}",
        )
        matches = map_match_list(_expect_list(data))
        self._log(f"  mapped {len(matches)} match(es)")
        return matches

    def get_brackets(self, tournament_id: str) -> list[Bracket]:
        data = self.get_json(
            f"/games/{GAME}/tournaments/{tournament_id}/brackets",
            not_found=f"tournament not found: {tournament_id}",
        )
        brackets = map_bracket_list(_expect_list(data))
        self._log(f"  mapped {len(brackets)} bracket(s)")
        return brackets

    def get_match(self, match_id: str) -> Match:
        data = self.get_json(f"/matches/{match_id}/detailed", not_found=f"match not found: {match_id}")
        if not isinstance(data, dict):
            raise TransportError("failed to parse JSON: expected an object")
        return map_match_from_listing(data)

    def _log(self, msg: str) -> None:
        if self.debug:
            print(f"[debug] {msg}", file=sys.stderr, flush=True)


def _expect_list(data: Any) -> list[dict[str, Any]]:
    if not isinstance(data, list):
        raise TransportError("failed to parse JSON: expected an array")
    return data
