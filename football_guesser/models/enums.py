from enum import Enum


class DataSource(str, Enum):
    SPORTSDB = "sportsdb"
    SPORTSDB_PROXY = "sportsdb_proxy"  # TheSportsDB through the CORS relay
    FOOTBALL_DATA = "football_data"


class League(str, Enum):
    PREMIER_LEAGUE = "Premier League"
    LA_LIGA = "La Liga"
    SERIE_A = "Serie A"
    BUNDESLIGA = "Bundesliga"
    LIGUE_1 = "Ligue 1"

    @property
    def sportsdb_id(self) -> str:
        return SPORTSDB_LEAGUE_IDS[self]

    @property
    def competition_code(self) -> str:
        return FOOTBALL_DATA_COMPETITIONS[self]

    @property
    def flag(self) -> str:
        return LEAGUE_FLAGS[self]


# League IDs in TheSportsDB
SPORTSDB_LEAGUE_IDS = {
    League.PREMIER_LEAGUE: "4328",
    League.LA_LIGA: "4335",
    League.SERIE_A: "4332",
    League.BUNDESLIGA: "4331",
    League.LIGUE_1: "4334",
}

# Competition codes on football-data.org
FOOTBALL_DATA_COMPETITIONS = {
    League.PREMIER_LEAGUE: "PL",
    League.LA_LIGA: "PD",
    League.SERIE_A: "SA",
    League.BUNDESLIGA: "BL1",
    League.LIGUE_1: "FL1",
}

LEAGUE_FLAGS = {
    League.PREMIER_LEAGUE: "ENG",
    League.LA_LIGA: "🇪🇸",
    League.SERIE_A: "🇮🇹",
    League.BUNDESLIGA: "🇩🇪",
    League.LIGUE_1: "🇫🇷",
}

ALL_LEAGUES = "All Leagues"


class MatchOutcome(str, Enum):
    HOME = "HOME"
    AWAY = "AWAY"
    DRAW = "DRAW"


class QuizState(str, Enum):
    LEAGUE_SELECTION = "LEAGUE_SELECTION"
    TEAM_SELECTION = "TEAM_SELECTION"
    GUESSING = "GUESSING"
    REVEALED = "REVEALED"
    GAME_OVER = "GAME_OVER"
