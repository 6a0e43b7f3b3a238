"""Application configuration loaded from environment variables.

Uses pydantic-settings for validation and type-safe loading from .env.
Every field has a default; override any of them via the environment
(e.g. TOP_K_RESULTS=10, SEED_DEMO_DATA=false).
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application metadata
    app_name: str = "Vector Search Demo"
    log_level: str = "INFO"
    log_dir: str = "logs"

    # Retrieval defaults
    top_k_results: int = Field(default=5, ge=1)
    similarity_threshold: float = 0.0

    # Bulk ingestion
    chunk_size: int = Field(default=300, ge=1)
    vectors_path: str = "./data/vectors.json"

    # Store behaviour
    enforce_dimensions: bool = True
    seed_demo_data: bool = True

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalise the level name and reject anything loguru does not know."""
        level = v.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level


settings = Settings()
