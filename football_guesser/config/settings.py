import logging
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from football_guesser.models.enums import DataSource


class AppSettings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    # Upstream data source
    data_source: DataSource = Field(
        DataSource.SPORTSDB,
        description="Where season results are loaded from (sportsdb, sportsdb_proxy, football_data).",
    )
    season: str = Field(
        "2024-2025", description="Season to load, e.g. '2024-2025' (football-data uses the first year)."
    )

    # TheSportsDB
    sportsdb_base_url: str = Field(
        "https://www.thesportsdb.com/api/v1/json/3",
        description="Base URL of TheSportsDB v1 JSON API.",
    )
    sportsdb_relay_url: str = Field(
        "http://localhost:3000/api/sportsdb",
        description="CORS relay forwarding '?endpoint=' requests to TheSportsDB.",
    )

    # Football-Data.org
    football_data_base_url: str = Field(
        "https://api.football-data.org/v4", description="Base URL of football-data.org v4."
    )
    football_data_token: Optional[str] = Field(
        None, description="X-Auth-Token for football-data.org."
    )

    # HTTP behaviour
    request_timeout: float = Field(15.0, gt=0, description="HTTP timeout in seconds.")
    rate_limit_backoff_seconds: float = Field(
        1.0, ge=0, description="Fixed wait before retrying a rate limited team search."
    )
    max_attempts_per_term: int = Field(
        2, ge=1, description="Attempts per search term (2 = one retry after a 429)."
    )
    max_backoffs_per_resolution: int = Field(
        4, ge=0, description="Rate limit waits allowed for a single team resolution."
    )
    badge_fetch_delay: float = Field(
        0.25, ge=0, description="Pause between independent team badge lookups."
    )

    # Game
    total_rounds: int = Field(10, ge=1, description="Rounds per game.")
    max_match_attempts: int = Field(
        20, ge=1, description="Random draws before giving up on finding a playable match."
    )
    missing_teams_report: Path = Field(
        Path("missing_teams.txt"),
        description="Where the missing-team report is written after a game.",
    )

    # Logging Configuration
    log_level: str = Field(
        "INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)."
    )

    # Pydantic Settings Configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )


def load_settings() -> AppSettings:
    """Loads and validates application settings."""
    try:
        settings = AppSettings()
        log_level_upper = settings.log_level.upper()
        # Validate log_level even if loaded from .env
        if log_level_upper not in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
            logging.warning(
                f"Invalid LOG_LEVEL '{settings.log_level}' found in .env or default. Using INFO."
            )
            settings.log_level = "INFO"
        else:
            settings.log_level = log_level_upper
        return settings
    except Exception as e:
        logging.exception(f"Error loading application settings: {e}")
        raise SystemExit("Failed to load application settings. Exiting.")


settings: AppSettings = load_settings()
