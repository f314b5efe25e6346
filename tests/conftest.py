from typing import Any, Dict, List, Optional

import httpx
import pytest

from football_guesser.badges.resolver import BadgeResolver
from football_guesser.badges.retry import RetryPolicy
from football_guesser.clients.sportsdb_client import SportsDbClient

SPORTSDB_URL = "https://sportsdb.test/api/v1/json/3"


def soccer_team(name: str, badge: Optional[str], sport: str = "Soccer") -> Dict[str, Any]:
    return {"idTeam": "1", "strTeam": name, "strBadge": badge, "strSport": sport}


class SportsDbStub:
    """Answers TheSportsDB requests from canned data and records what was asked.

    ``team_responses`` maps a search term to a list of answers used in order,
    the last one repeating. An answer is a payload dict, a bare status code,
    an ``httpx.Response`` or an exception instance to raise.
    """

    def __init__(
        self,
        team_responses: Optional[Dict[str, List[Any]]] = None,
        leagues: Optional[Dict[str, Any]] = None,
        events: Optional[Dict[str, Any]] = None,
    ):
        self.team_responses = {term: list(items) for term, items in (team_responses or {}).items()}
        self.leagues = leagues or {}
        self.events = events or {}
        self.searched: List[str] = []
        self.league_lookups: List[str] = []
        self.requests: List[httpx.Request] = []

    def _answer(self, item: Any) -> httpx.Response:
        if isinstance(item, BaseException):
            raise item
        if isinstance(item, httpx.Response):
            return item
        if isinstance(item, int):
            return httpx.Response(item, json={"error": "stub"})
        return httpx.Response(200, json=item)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        endpoint = request.url.params.get("endpoint") or request.url.path.rsplit("/", 1)[-1]

        if endpoint == "searchteams.php":
            term = request.url.params["t"]
            self.searched.append(term)
            queue = self.team_responses.get(term)
            if not queue:
                return httpx.Response(200, json={"teams": None})
            item = queue.pop(0) if len(queue) > 1 else queue[0]
            return self._answer(item)

        if endpoint == "lookupleague.php":
            league_id = request.url.params["id"]
            self.league_lookups.append(league_id)
            return self._answer(self.leagues.get(league_id, {"leagues": None}))

        if endpoint == "eventsseason.php":
            league_id = request.url.params["id"]
            return self._answer(self.events.get(league_id, {"events": None}))

        return httpx.Response(404)


class SleepRecorder:
    def __init__(self):
        self.calls: List[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


def make_sportsdb_client(stub: SportsDbStub, relay_url: Optional[str] = None) -> SportsDbClient:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(stub))
    return SportsDbClient(client=http_client, base_url=SPORTSDB_URL, relay_url=relay_url)


@pytest.fixture
def sleep_recorder() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def make_resolver(sleep_recorder):
    """Builds a resolver over a stub; no alias table unless one is given."""

    def _make(
        stub: SportsDbStub,
        alias_table: Optional[Dict[str, str]] = None,
        retry_policy: Optional[RetryPolicy] = None,
    ) -> BadgeResolver:
        return BadgeResolver(
            make_sportsdb_client(stub),
            alias_table=alias_table or {},
            retry_policy=retry_policy or RetryPolicy(
                max_attempts_per_term=2, backoff_seconds=1.0, max_backoffs_per_resolution=4
            ),
            sleep=sleep_recorder,
        )

    return _make
