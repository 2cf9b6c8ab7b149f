"""
Configuration settings for the hearing list extractor.

All configuration is centralized here. Override any value with an
environment variable of the same name or a `.env` file.
"""

from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Project paths
    PROJECT_ROOT: Path = Path(__file__).parent.parent
    INPUT_DIR: Path = PROJECT_ROOT / "html_files"
    CHECKED_DIR: Path = PROJECT_ROOT / "checked_files"
    UNPROCESSED_DIR: Path = PROJECT_ROOT / "unprocessed_files"
    OUTPUT_CSV: Path = PROJECT_ROOT / "output.csv"
    LOGS_DIR: Path = PROJECT_ROOT / "logs"

    # Batch behaviour
    INPUT_GLOB: str = "*.html"
    MOVE_PROCESSED_FILES: bool = True  # Route inputs to checked/unprocessed dirs
    DEDUP_SCOPE: Literal["document", "batch"] = "document"

    # Source-site heuristics
    SOURCE_SITE_MARKER: str = "CourtServe"  # Title prefix of the publishing site
    EMPTY_CELL_CLASS: str = "EmptyCellLayoutStyle"  # Spacer cells in report exports

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    def ensure_directories(self) -> None:
        """Create required directories if they don't exist."""
        self.LOGS_DIR.mkdir(parents=True, exist_ok=True)


# Global settings instance
settings = Settings()
