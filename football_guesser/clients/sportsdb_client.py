# football_guesser/clients/sportsdb_client.py

from typing import Any, Dict, List, Optional

import httpx
from loguru import logger

from football_guesser.config.settings import settings
from football_guesser.models.lookup import (
    LeagueLookupResponse,
    TeamSearchResponse,
    decode_league_lookup,
    decode_team_search,
)
from .base_client import BaseApiClient


class SportsDbClient(BaseApiClient):
    """Client for TheSportsDB v1 JSON API.

    With ``relay_url`` set, every call goes through the CORS relay, which
    expects the PHP endpoint name in an ``endpoint`` query parameter and
    forwards the remaining parameters unchanged.
    """

    source_name = "TheSportsDB"

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        base_url: Optional[str] = None,
        relay_url: Optional[str] = None,
    ):
        super().__init__(client)
        self.base_url = (base_url or settings.sportsdb_base_url).rstrip("/")
        self.relay_url = relay_url

    def _endpoint(self, endpoint: str, params: Dict[str, Any]) -> tuple[str, Dict[str, Any]]:
        if self.relay_url:
            return self.relay_url, {"endpoint": endpoint, **params}
        return f"{self.base_url}/{endpoint}", params

    async def search_teams(self, term: str) -> TeamSearchResponse:
        """Searches teams by name (``searchteams.php?t=``).

        Raises:
            RateLimitError: when the API answers 429.
            ApiClientError: on other error statuses or a non-JSON body.
            httpx.TransportError: on network failures.
        """
        url, params = self._endpoint("searchteams.php", {"t": term})
        payload = await self._get_json(url, params=params)
        return decode_team_search(payload)

    async def lookup_league(self, league_id: str) -> LeagueLookupResponse:
        """Looks a league up by its numeric id (``lookupleague.php?id=``)."""
        url, params = self._endpoint("lookupleague.php", {"id": league_id})
        payload = await self._get_json(url, params=params)
        return decode_league_lookup(payload)

    async def season_events(self, league_id: str, season: str) -> List[Dict[str, Any]]:
        """Returns the raw events of a league season (``eventsseason.php``)."""
        url, params = self._endpoint("eventsseason.php", {"id": league_id, "s": season})
        payload = await self._get_json_with_retry(url, params=params)
        events = payload.get("events") if isinstance(payload, dict) else None
        if not isinstance(events, list):
            logger.warning(f"No events list for league {league_id} season {season}")
            return []
        return events
