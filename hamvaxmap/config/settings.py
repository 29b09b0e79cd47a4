"""Configuration settings using Pydantic."""

from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Geocoding
    geocode_api_key: str = Field(..., description="Google Geocoding API key")
    geocode_endpoint: str = Field(
        default="https://maps.googleapis.com/maps/api/geocode/json",
        description="Geocoding endpoint URL",
    )

    # Source document
    source: str = Field(default="kvhh", description="Source key in sources.yaml")

    # Paths
    data_dir: Path = Field(default=Path("data/runs"), description="Data directory")

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")

    # HTTP
    timeout_seconds: int = Field(default=30, description="Request timeout in seconds")

    # Enrichment
    max_concurrent_lookups: int = Field(
        default=10,
        ge=1,
        description="Maximum geocode lookups in flight at once",
    )
    geocode_delay_seconds: float = Field(
        default=0.0,
        ge=0.0,
        description="Delay after each geocode lookup in seconds",
    )
    failure_policy: Literal["fail_fast", "isolate"] = Field(
        default="fail_fast",
        description="Abort the batch on a failed lookup, or leave that record unresolved",
    )

    # Caching (0 disables)
    cache_ttl_seconds: float = Field(
        default=0.0,
        ge=0.0,
        description="Lifetime of cached extractions and geocode results",
    )

    show_progress: bool = Field(default=True, description="Show tqdm progress bars")

    def with_overrides(self, **overrides: Any) -> "Settings":
        """Return a copy with some fields replaced, validated like the originals."""
        return type(self).model_validate({**self.model_dump(), **overrides})


def load_source_config() -> dict:
    """Load source document configuration from YAML file."""
    config_path = Path(__file__).parent / "sources.yaml"
    with open(config_path) as f:
        return yaml.safe_load(f)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
