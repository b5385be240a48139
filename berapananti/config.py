"""
Application configuration.
Loads BERAPANANTI_* environment variables (or a .env file at the project root).
"""
from pathlib import Path
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT = Path(__file__).parent.parent


class Settings(BaseSettings):
    """
    Application settings.
    (Note: environment variables take precedence over the .env file)
    """

    PROJECT_NAME: str = "BerapaNanti"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    # CORS (for the Vite frontend during development)
    CORS_ORIGINS: List[str] = ["http://localhost:5173", "http://127.0.0.1:5173"]

    # Rate data; None means the bundled rate book / no monthly sheet
    RATE_BOOK_PATH: Optional[str] = None
    INFLATION_SHEET_PATH: Optional[str] = None

    model_config = SettingsConfigDict(
        env_prefix="BERAPANANTI_",
        env_file=str(PROJECT_ROOT / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


def get_settings() -> Settings:
    """Build settings from the environment."""
    return Settings()
