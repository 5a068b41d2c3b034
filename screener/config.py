"""Application configuration."""

from pathlib import Path

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    gemini_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("gemini_api_key", "google_ai_api_key"),
    )

    @field_validator("gemini_api_key", mode="after")
    @classmethod
    def blank_key_is_missing(cls, v: str | None) -> str | None:
        """Treat an empty or whitespace-only key as not configured."""
        if v is None or not v.strip():
            return None
        return v.strip()

    solutions_csv_path: Path = Path("selected_solutions.csv")
    upload_directory: Path = Path("uploads")

    rate_limit_max_requests: int = 5
    rate_limit_window_seconds: float = 60
    max_output_tokens: int = 4096

    host: str = "0.0.0.0"
    port: int = 5000
    log_level: str = "INFO"


settings = Settings()
