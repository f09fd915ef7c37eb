from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import BaseModel, Field, field_validator
from typing import Optional, Literal
from loguru import logger
import sys


class SearchCredentials(BaseModel):
    """Credentials for the Google Custom Search API."""

    api_key: Optional[str] = None
    search_engine_id: Optional[str] = None

    @property
    def is_complete(self) -> bool:
        return bool(self.api_key and self.search_engine_id)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_default=True,
    )

    environment: Literal["development", "staging", "production"] = Field(
        default="development", description="Application environment"
    )

    # Google Custom Search
    google_api_key: Optional[str] = Field(default=None, description="Google API key")
    google_cse_id: Optional[str] = Field(
        default=None, description="Custom Search Engine ID (cx parameter)"
    )

    search_timeout_seconds: float = Field(
        default=5.0, gt=0, le=60, description="Timeout for each search API call"
    )
    fetch_timeout_seconds: float = Field(
        default=4.0, gt=0, le=60, description="Timeout for each contact page fetch"
    )
    enrich_concurrency: int = Field(
        default=3, ge=1, le=20, description="Number of concurrent enrichment workers"
    )
    enrich_max_pages: int = Field(
        default=4, ge=1, le=9, description="Pages fetched per lead before giving up"
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )
    log_format: str = Field(
        default="{time:YYYY-MM-DD HH:mm:ss} | {level} | {name}:{function}:{line} - {message}",
        description="Log format string",
    )
    log_rotation: str = Field(default="100 MB", description="Log file rotation size")
    log_retention: str = Field(default="10 days", description="Log retention period")
    log_file: Optional[str] = Field(default=None, description="Log file path")
    log_json: bool = Field(default=False, description="Emit JSON log lines on stdout")

    app_name: str = Field(default="Lead Finder", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")
    cors_origins: list[str] = Field(default=["*"], description="CORS allowed origins")

    @field_validator("google_api_key", "google_cse_id", mode="before")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        if isinstance(v, str) and not v.strip():
            return None
        return v.strip() if isinstance(v, str) else v

    @property
    def search_credentials(self) -> SearchCredentials:
        """Credentials passed down to the search pipeline"""
        return SearchCredentials(
            api_key=self.google_api_key,
            search_engine_id=self.google_cse_id,
        )

    def configure_logging(self) -> None:
        """Configure loguru based on settings"""
        logger.remove()

        if self.log_json:
            from leadfinder.core.logging import setup_json_logging

            setup_json_logging(level=self.log_level)
        else:
            logger.add(
                sys.stderr, format=self.log_format, level=self.log_level, colorize=True
            )

        if self.log_file:
            logger.add(
                self.log_file,
                format=self.log_format,
                level=self.log_level,
                rotation=self.log_rotation,
                retention=self.log_retention,
                compression="zip",
            )

        logger.info(f"Logging configured for {self.environment} environment")


def get_settings() -> Settings:
    """Get cached settings instance"""
    settings = Settings()
    settings.configure_logging()
    return settings


settings = get_settings()
