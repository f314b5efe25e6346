"""Schemas for TheSportsDB lookup payloads.

TheSportsDB answers misses with ``{"teams": null}`` and occasionally with
partially filled records. Decoding never raises: anything that does not fit
the schema is treated as an empty result list.
"""

from typing import Any, List, Optional

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

SOCCER_SPORTS = {"soccer", "football"}


class TeamRecord(BaseModel):
    """One entry of ``searchteams.php``."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    team_id: Optional[str] = Field(None, alias="idTeam")
    name: Optional[str] = Field(None, alias="strTeam")
    badge_url: Optional[str] = Field(None, alias="strBadge")
    sport: Optional[str] = Field(None, alias="strSport")

    @field_validator("team_id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        # ids come back as strings or ints depending on the endpoint
        return str(value) if isinstance(value, int) else value

    @field_validator("badge_url", mode="before")
    @classmethod
    def _blank_badge(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def is_soccer(self) -> bool:
        return (self.sport or "").strip().lower() in SOCCER_SPORTS


class TeamSearchResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    teams: List[TeamRecord] = Field(default_factory=list)

    @field_validator("teams", mode="before")
    @classmethod
    def _null_teams(cls, value: Any) -> Any:
        return [] if value is None else value


class LeagueRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    league_id: Optional[str] = Field(None, alias="idLeague")
    name: Optional[str] = Field(None, alias="strLeague")
    badge_url: Optional[str] = Field(None, alias="strBadge")

    @field_validator("badge_url", mode="before")
    @classmethod
    def _blank_badge(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class LeagueLookupResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    leagues: List[LeagueRecord] = Field(default_factory=list)

    @field_validator("leagues", mode="before")
    @classmethod
    def _null_leagues(cls, value: Any) -> Any:
        return [] if value is None else value


def decode_team_search(payload: Any) -> TeamSearchResponse:
    """Decodes a ``searchteams.php`` body; malformed bodies yield no teams."""
    try:
        return TeamSearchResponse.model_validate(payload)
    except ValidationError as e:
        logger.debug(f"Discarding malformed team search payload: {e.error_count()} error(s)")
        return TeamSearchResponse()


def decode_league_lookup(payload: Any) -> LeagueLookupResponse:
    """Decodes a ``lookupleague.php`` body; malformed bodies yield no leagues."""
    try:
        return LeagueLookupResponse.model_validate(payload)
    except ValidationError as e:
        logger.debug(f"Discarding malformed league payload: {e.error_count()} error(s)")
        return LeagueLookupResponse()
