# football_guesser/models/team.py
from typing import Optional
from pydantic import BaseModel, ConfigDict


class TeamIdentity(BaseModel):
    """A team's canonical name and, once resolved, its badge URL."""

    canonical_name: str
    badge_url: Optional[str] = None  # None until resolved or when no badge exists


class TeamRef(BaseModel):
    """Team as referenced by a loaded match."""

    model_config = ConfigDict(frozen=True)

    name: str
    team_id: Optional[str] = None
    badge_url: Optional[str] = None  # Pre-loaded by sources that ship badges
