"""
Application Configuration

Uses Pydantic Settings for type-safe configuration.
"""

from pathlib import Path
from typing import List, Optional
from pydantic_settings import BaseSettings
from pydantic import Field, field_validator, ConfigDict

# Project root: frc-data-proxy/
PROJECT_ROOT = Path(__file__).parent.parent.parent
# Content directory: frc-data-proxy/content/
CONTENT_DIR = PROJECT_ROOT / "content"


class Settings(BaseSettings):
    """Application settings with validation."""

    # === Core ===
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Logging level")

    # === CORS ===
    cors_origins: List[str] = Field(
        default_factory=lambda: ["*"],
        description="Allowed CORS origins"
    )

    # === Statbotics upstream ===
    upstream_base_url: str = Field(
        default="https://api.statbotics.io",
        description="Statbotics REST API base"
    )
    upstream_timeout_ms: int = Field(
        default=10000,
        gt=0,
        description="Per-request upstream timeout in milliseconds"
    )

    # === Benchmarks (fan-out) ===
    aggregation_concurrency: int = Field(default=10, ge=1, le=50)
    max_identifiers: int = Field(
        default=300,
        ge=1,
        description="Teams fetched per benchmark; the rest are dropped"
    )
    errors_sample_size: int = Field(default=5, ge=0)

    # === Region defaults ===
    default_district: Optional[str] = Field(
        default="pnw",
        description="District applied when no district/state/country is given"
    )

    # === Event search ===
    aliases_file: Optional[Path] = Field(
        default=None,
        description="YAML alias table (defaults to content/events/aliases.yaml)"
    )
    score_phrase: int = Field(default=200)
    score_token: int = Field(default=25)
    score_abbreviation: int = Field(default=40)
    score_region: int = Field(default=3)
    abbreviation_max_length: int = Field(default=5)
    candidate_limit: int = Field(default=5, ge=1)

    @field_validator('cors_origins', mode='before')
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS origins from comma-separated string."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(',')]
        return v

    @field_validator('upstream_base_url')
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @property
    def upstream_timeout_seconds(self) -> float:
        return self.upstream_timeout_ms / 1000

    @property
    def resolved_aliases_file(self) -> Path:
        return self.aliases_file or CONTENT_DIR / "events" / "aliases.yaml"

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Global settings instance
settings = Settings()
