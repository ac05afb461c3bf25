"""Application configuration."""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from transtudio.utils.language import TargetLanguage


class Settings(BaseSettings):
    """Settings loaded from environment variables and an optional .env file."""

    # Storage
    upload_dir: Path = Path("uploads")
    max_upload_size_mb: int = Field(default=10, gt=0)

    # Provider credentials
    anthropic_api_key: Optional[str] = None
    google_api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices(
            "google_api_key",
            "google_generative_ai_api_key",
            "gemini_api_key",
        ),
    )

    # Translation defaults
    default_model_id: str = "gemini-2.5-flash"
    default_target_language: TargetLanguage = TargetLanguage.ENGLISH
    translation_temperature: float = Field(default=0.1, ge=0.0, le=2.0)
    max_output_tokens: int = Field(default=64000, gt=0)

    # Logging
    log_level: str = "INFO"
    json_logs: bool = False
    log_file: Optional[Path] = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_size_mb * 1024 * 1024


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
