from datetime import date
from typing import Any, Dict, List, Optional, Sequence

import httpx
from loguru import logger
from pydantic import ValidationError

from football_guesser.clients.base_client import ApiClientError
from football_guesser.clients.football_data_client import FootballDataClient
from football_guesser.clients.sportsdb_client import SportsDbClient
from football_guesser.models.enums import DataSource, League
from football_guesser.models.match import Match
from football_guesser.models.team import TeamRef
from football_guesser.normalization.names import normalize_team_name

SPORTSDB_FINISHED = "Match Finished"
FOOTBALL_DATA_FINISHED = "FINISHED"


def _parse_score(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _parse_date(value: Any) -> Optional[date]:
    if not isinstance(value, str) or not value:
        return None
    try:
        # football-data ships full UTC timestamps, TheSportsDB plain dates
        return date.fromisoformat(value[:10])
    except ValueError:
        return None


def _text(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value else None


def _mapping(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def parse_sportsdb_event(event: Dict[str, Any], league: League) -> Optional[Match]:
    """Builds a Match from a TheSportsDB event; None unless finished with both scores.

    Team names are canonicalized so badge lookups and the missing-team report
    use the same keys for every data source. Malformed events are skipped.
    """
    if event.get("strStatus") != SPORTSDB_FINISHED:
        return None
    home_score = _parse_score(event.get("intHomeScore"))
    away_score = _parse_score(event.get("intAwayScore"))
    raw_home, raw_away = event.get("strHomeTeam"), event.get("strAwayTeam")
    if not isinstance(raw_home, str) or not isinstance(raw_away, str):
        if raw_home is not None or raw_away is not None:
            logger.warning(f"Skipping event {event.get('idEvent')} with malformed team names")
        return None
    home_name = normalize_team_name(raw_home)
    away_name = normalize_team_name(raw_away)
    if home_score is None or away_score is None or not home_name or not away_name:
        return None

    try:
        return Match(
            league=league,
            home_team=TeamRef(
                name=home_name,
                team_id=_str_id(event.get("idHomeTeam")),
                badge_url=_text(event.get("strHomeTeamBadge")),
            ),
            away_team=TeamRef(
                name=away_name,
                team_id=_str_id(event.get("idAwayTeam")),
                badge_url=_text(event.get("strAwayTeamBadge")),
            ),
            home_score=home_score,
            away_score=away_score,
            match_date=_parse_date(event.get("dateEvent")),
        )
    except ValidationError as e:
        logger.warning(f"Skipping malformed event {event.get('idEvent')}: {e}")
        return None


def parse_football_data_match(raw: Dict[str, Any], league: League) -> Optional[Match]:
    """Builds a Match from a football-data.org match; team names are canonicalized.

    No badge is taken over from the payload, the badge resolver supplies them.
    """
    if raw.get("status") != FOOTBALL_DATA_FINISHED:
        return None
    full_time = _mapping(_mapping(raw.get("score")).get("fullTime"))
    home_score = _parse_score(full_time.get("home"))
    away_score = _parse_score(full_time.get("away"))
    home = _mapping(raw.get("homeTeam"))
    away = _mapping(raw.get("awayTeam"))
    home_name = normalize_team_name(home.get("name"))
    away_name = normalize_team_name(away.get("name"))
    if home_score is None or away_score is None or not home_name or not away_name:
        return None

    return Match(
        league=league,
        home_team=TeamRef(name=home_name, team_id=_str_id(home.get("id"))),
        away_team=TeamRef(name=away_name, team_id=_str_id(away.get("id"))),
        home_score=home_score,
        away_score=away_score,
        match_date=_parse_date(raw.get("utcDate")),
    )


def _str_id(value: Any) -> Optional[str]:
    return None if value is None else str(value)


class MatchLoader:
    """Loads the finished matches of a season from the configured data source."""

    def __init__(
        self,
        source: DataSource,
        season: str,
        sportsdb: Optional[SportsDbClient] = None,
        football_data: Optional[FootballDataClient] = None,
    ):
        self.source = source
        self.season = season
        self.sportsdb = sportsdb
        self.football_data = football_data
        if source == DataSource.FOOTBALL_DATA and football_data is None:
            raise ValueError("football_data client is required for the football_data source")
        if source != DataSource.FOOTBALL_DATA and sportsdb is None:
            raise ValueError(f"sportsdb client is required for the {source.value} source")

    async def load(self, leagues: Optional[Sequence[League]] = None) -> List[Match]:
        """Fetches every league one after another; a failing league is skipped."""
        leagues = list(leagues or League)
        logger.info(
            f"Loading {self.season} matches for {len(leagues)} league(s) from {self.source.value}"
        )
        all_matches: List[Match] = []
        total_raw = 0

        for league in leagues:
            try:
                raw_items, matches = await self._load_league(league)
            except (ApiClientError, httpx.HTTPError) as e:
                logger.error(f"Error loading {league.value}: {e!r}")
                continue
            total_raw += raw_items
            all_matches.extend(matches)
            logger.info(f"{league.value}: {len(matches)} matches loaded")

        logger.info(
            f"Processed {total_raw} raw fixtures, loaded {len(all_matches)} finished matches"
        )
        return all_matches

    async def _load_league(self, league: League) -> tuple[int, List[Match]]:
        if self.source == DataSource.FOOTBALL_DATA:
            raw = await self.football_data.competition_matches(league.competition_code, self.season)
            parsed = (parse_football_data_match(item, league) for item in raw if isinstance(item, dict))
        else:
            raw = await self.sportsdb.season_events(league.sportsdb_id, self.season)
            parsed = (parse_sportsdb_event(item, league) for item in raw if isinstance(item, dict))
        return len(raw), [match for match in parsed if match is not None]
