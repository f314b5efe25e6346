import datetime as dt
from typing import Optional

from pydantic import BaseModel, ConfigDict, computed_field

from .enums import League
from .team import TeamRef


class Match(BaseModel):
    """A finished match with its recorded full-time result."""

    model_config = ConfigDict(frozen=True)

    league: League
    home_team: TeamRef
    away_team: TeamRef
    home_score: int
    away_score: int
    match_date: Optional[dt.date] = None

    @property
    def home(self) -> str:
        return self.home_team.name

    @property
    def away(self) -> str:
        return self.away_team.name

    @property
    def flag(self) -> str:
        return self.league.flag

    @computed_field  # type: ignore[misc]
    @property
    def description(self) -> str:
        return f"{self.league.value}: {self.home} {self.home_score}-{self.away_score} {self.away}"

    def involves(self, team_name: str) -> bool:
        return team_name in (self.home, self.away)
