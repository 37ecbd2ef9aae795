from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from courtside.core.enums import PartialFailurePolicyEnum, ProviderEnum


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Season
    season_year: int = 2025
    reporting_year: int | None = None
    display_timezone: str | None = None

    # HTTP
    http_timeout_s: float = 30.0
    http_connect_timeout_s: float = 10.0

    # genius sports (Super League Basketball)
    genius_sports_base_url: str = "https://hosted.dcd.shared.geniussports.com/embednf/SLB/en"

    # euroleague v1 (results, XML)
    euroleague_base_url: str = "https://api-live.euroleague.net/v1"

    # incrowd (schedule, JSON)
    incrowd_base_url: str = "https://feeds.incrowdsports.com/provider/euroleague-feeds/v2"

    # api-sports basketball
    api_sports_key: str | None = Field(default=None, repr=False)
    api_sports_base_url: str = "https://v1.basketball.api-sports.io"
    api_sports_league_id: int = 79
    api_sports_season: str = "2025-2026"

    super_league_provider: ProviderEnum = ProviderEnum.GENIUS_SPORTS

    # Aggregation policy
    partial_failure_policy: PartialFailurePolicyEnum = PartialFailurePolicyEnum.STRICT
    use_mock_fallback: bool = False

    # Logging
    log_level: str | None = None
    environment: str = "development"

    # -----------------------------
    # Derived / required-key helpers
    # -----------------------------

    def reporting_year_for_month(self, month: int) -> int:
        """Year to assume for a yearless fixture date (season runs Aug-Jul)."""
        if self.reporting_year is not None:
            return self.reporting_year
        return self.season_year if month >= 8 else self.season_year + 1

    def require_api_sports_key(self) -> str:
        if not self.api_sports_key:
            raise RuntimeError("API_SPORTS_KEY is not set. Set it in the environment or .env file.")
        return self.api_sports_key


settings = Settings()
