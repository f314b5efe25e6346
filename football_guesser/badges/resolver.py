# football_guesser/badges/resolver.py
import asyncio
from typing import Dict, Iterable, Mapping, Optional

import httpx
from loguru import logger

from football_guesser.clients.base_client import ApiClientError, RateLimitError
from football_guesser.clients.sportsdb_client import SportsDbClient
from football_guesser.models.enums import League
from football_guesser.models.lookup import TeamRecord
from football_guesser.models.team import TeamIdentity
from football_guesser.normalization.aliases import TEAM_SEARCH_ALIASES
from football_guesser.normalization.names import generate_search_terms, normalize_team_name
from .ledger import MissingTeamLedger
from .placeholder import synthesize_placeholder
from .retry import BackoffBudget, RetryPolicy, Sleep, rate_limit_retrying


def pick_team(teams: Iterable[TeamRecord]) -> Optional[TeamRecord]:
    """First soccer team of a search result, else the first team of any sport."""
    teams = list(teams)
    if not teams:
        return None
    for team in teams:
        if team.is_soccer:
            return team
    logger.warning(
        f"No soccer team among {len(teams)} result(s), using '{teams[0].name}' ({teams[0].sport})"
    )
    return teams[0]


class BadgeResolver:
    """Turns team and league names into badge URLs.

    Owns the resolution caches and the missing-team ledger. Every name is
    looked up at most once per resolver: hits and misses are both cached and
    never overwritten. Lookups are issued one after another; callers must not
    resolve the same uncached name concurrently.
    """

    def __init__(
        self,
        client: SportsDbClient,
        alias_table: Optional[Mapping[str, str]] = None,
        retry_policy: Optional[RetryPolicy] = None,
        ledger: Optional[MissingTeamLedger] = None,
        sleep: Sleep = asyncio.sleep,
    ):
        self.client = client
        self.alias_table = TEAM_SEARCH_ALIASES if alias_table is None else alias_table
        self.retry_policy = retry_policy or RetryPolicy.from_settings()
        self.ledger = ledger if ledger is not None else MissingTeamLedger()
        self._sleep = sleep
        self._team_cache: Dict[str, Optional[str]] = {}
        self._league_cache: Dict[League, Optional[str]] = {}

    def cached_badge(self, canonical_name: str) -> Optional[str]:
        return self._team_cache.get(canonical_name)

    def is_cached(self, canonical_name: str) -> bool:
        return canonical_name in self._team_cache

    async def resolve_badge(self, canonical_name: str) -> Optional[str]:
        """Badge URL for a canonical team name, or None when no term finds one."""
        if canonical_name in self._team_cache:
            return self._team_cache[canonical_name]

        terms = generate_search_terms(canonical_name, self.alias_table)
        budget = BackoffBudget(self.retry_policy.max_backoffs_per_resolution)
        logger.debug(f"Resolving badge for '{canonical_name}' with terms {terms}")

        for term in terms:
            badge = await self._search_badge(term, budget)
            if badge:
                logger.debug(f"Badge for '{canonical_name}' found via '{term}'")
                self._team_cache[canonical_name] = badge
                return badge

        logger.info(f"No badge found for '{canonical_name}' after {len(terms)} term(s)")
        self._team_cache[canonical_name] = None
        self.ledger.record(canonical_name)
        return None

    async def _search_badge(self, term: str, budget: BackoffBudget) -> Optional[str]:
        """Badge of the best team found for ``term``; any failure counts as no result."""
        try:
            async for attempt in rate_limit_retrying(self.retry_policy, budget, self._sleep):
                with attempt:
                    response = await self.client.search_teams(term)
        except RateLimitError:
            logger.warning(f"Still rate limited searching '{term}', moving to the next term")
            return None
        except ApiClientError as e:
            logger.warning(f"Team search for '{term}' failed: {e}")
            return None
        except httpx.HTTPError as e:
            logger.warning(f"Network error searching '{term}': {e!r}")
            return None

        team = pick_team(response.teams)
        if team is None:
            logger.debug(f"No teams found for '{term}'")
            return None
        if not team.badge_url:
            logger.debug(f"Team '{team.name}' found for '{term}' has no badge")
            return None
        return team.badge_url

    async def resolve_team(self, raw_name: str) -> TeamIdentity:
        canonical_name = normalize_team_name(raw_name)
        badge_url = await self.resolve_badge(canonical_name)
        return TeamIdentity(canonical_name=canonical_name, badge_url=badge_url)

    async def badge_or_placeholder(self, canonical_name: str) -> str:
        """Badge URL, or a placeholder data URI when the team cannot be resolved."""
        badge = await self.resolve_badge(canonical_name)
        if badge:
            return badge
        return synthesize_placeholder(canonical_name).data_uri

    async def resolve_league_badge(self, league: League) -> Optional[str]:
        """Badge URL of a league; a single fixed lookup, cached like team badges."""
        if league in self._league_cache:
            return self._league_cache[league]

        badge: Optional[str] = None
        try:
            response = await self.client.lookup_league(league.sportsdb_id)
            if response.leagues:
                badge = response.leagues[0].badge_url
        except (ApiClientError, httpx.HTTPError) as e:
            logger.error(f"Error fetching badge for {league.value}: {e!r}")

        if badge is None:
            logger.info(f"No badge available for {league.value}")
        self._league_cache[league] = badge
        return badge
