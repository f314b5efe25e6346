import asyncio
from datetime import date
from typing import Optional

from pydantic import BaseModel

from football_guesser.badges.placeholder import synthesize_placeholder
from football_guesser.badges.resolver import BadgeResolver
from football_guesser.badges.retry import Sleep
from football_guesser.config.settings import settings
from football_guesser.models.match import Match
from football_guesser.models.team import TeamRef
from football_guesser.normalization.names import normalize_team_name

MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


class TeamArt(BaseModel):
    name: str
    image: str  # badge URL or placeholder data URI
    initials: Optional[str] = None  # set for placeholders only

    @property
    def is_placeholder(self) -> bool:
        return self.initials is not None


class MatchArt(BaseModel):
    home: TeamArt
    away: TeamArt
    league_badge: Optional[str] = None


async def team_art(resolver: BadgeResolver, team: TeamRef) -> TeamArt:
    """Pre-loaded badge first, then the resolver, then a placeholder."""
    name = normalize_team_name(team.name)
    badge = team.badge_url or await resolver.resolve_badge(name)
    if badge:
        return TeamArt(name=name, image=badge)
    placeholder = synthesize_placeholder(name)
    return TeamArt(name=name, image=placeholder.data_uri, initials=placeholder.initials)


async def fetch_match_art(
    resolver: BadgeResolver,
    match: Match,
    delay: Optional[float] = None,
    sleep: Sleep = asyncio.sleep,
) -> MatchArt:
    """Badges for both teams and the league of a match.

    The two team lookups are separated by a short pause to stay under the
    lookup service's rate limit.
    """
    delay = settings.badge_fetch_delay if delay is None else delay
    home = await team_art(resolver, match.home_team)
    away_name = normalize_team_name(match.away_team.name)
    if delay and not match.away_team.badge_url and not resolver.is_cached(away_name):
        await sleep(delay)
    away = await team_art(resolver, match.away_team)
    league_badge = await resolver.resolve_league_badge(match.league)
    return MatchArt(home=home, away=away, league_badge=league_badge)


def format_match_date(value: Optional[date]) -> str:
    """'January 5, 2025' style date, or 'Unknown date'."""
    if value is None:
        return "Unknown date"
    return f"{MONTHS[value.month - 1]} {value.day}, {value.year}"
