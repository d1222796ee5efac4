"""
Application configuration using pydantic-settings.
"""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


def find_env_file() -> str:
    """Find .env file by checking multiple locations."""
    # Try relative to this file (server/servicebook/config.py)
    current_dir = Path(__file__).parent
    candidates = [
        current_dir / ".env",  # server/servicebook/.env
        current_dir.parent / ".env",  # server/.env
        current_dir.parent.parent / ".env",  # project root/.env
    ]

    for candidate in candidates:
        if candidate.exists():
            return str(candidate)

    # Default to project root
    return str(current_dir.parent.parent / ".env")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=find_env_file(),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    APP_ENV: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str = ""  # Must be set in .env file

    # Workshop preferences
    DISTANCE_UNIT: str = "km"  # "miles" or "km"
    CURRENCY_CODE: str = "USD"

    @property
    def uses_miles(self) -> bool:
        return self.DISTANCE_UNIT.strip().lower() == "miles"

    def distance_label(self) -> str:
        """Caption for the next-oil-change field in the workshop's unit."""
        if self.uses_miles:
            return "Next Oil Change Miles"
        return "Next Oil Change Kilometers"


settings = Settings()
