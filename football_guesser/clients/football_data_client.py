# football_guesser/clients/football_data_client.py

from typing import Any, Dict, List, Optional

import httpx
from loguru import logger

from football_guesser.config.settings import settings
from .base_client import BaseApiClient, AuthenticationError


class FootballDataClient(BaseApiClient):
    """Client for football-data.org v4."""

    source_name = "Football-Data.org"

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
    ):
        token = token or settings.football_data_token
        if not token:
            logger.error("football-data.org token is not set in environment variables.")
            raise AuthenticationError("Missing football-data.org token configuration.")
        super().__init__(client)
        self.base_url = (base_url or settings.football_data_base_url).rstrip("/")

        # Set the token header for all requests made by this client instance
        self.client.headers.update({"X-Auth-Token": token})
        logger.debug("FootballDataClient initialized with X-Auth-Token header.")

    async def competition_matches(self, competition: str, season: str) -> List[Dict[str, Any]]:
        """Returns the raw matches of a competition season.

        ``season`` is the starting year ("2024"); a "2024-2025" style value is
        cut down to its first year.
        """
        season_year = season.split("-", 1)[0]
        url = f"{self.base_url}/competitions/{competition}/matches"
        payload = await self._get_json_with_retry(url, params={"season": season_year})
        matches = payload.get("matches") if isinstance(payload, dict) else None
        if not isinstance(matches, list):
            logger.warning(f"No matches list for competition {competition} season {season_year}")
            return []
        return matches
