# This project was developed with assistance from AI tools.
"""
Application configuration.

All settings read from environment variables with sensible local dev defaults.
Group related settings together; each group becomes a section future PRs extend.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve project root .env regardless of CWD
_PROJECT_ROOT = Path(__file__).resolve().parents[4]
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Application settings -- single source of truth for env-driven config."""

    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # -- CORS --
    ALLOWED_HOSTS: list[str] = ["http://localhost:3000"]

    # -- Auth --
    AUTH_DISABLED: bool = Field(
        default=False,
        description="Bypass JWT validation. Set True for tests and local dev without an IdP.",
    )
    OIDC_ISSUER_URL: str = "http://localhost:8080/realms/splits"
    OIDC_JWKS_URL: str | None = Field(
        default=None,
        description="JWKS endpoint. Defaults to <issuer>/.well-known/jwks.json.",
    )
    JWKS_CACHE_TTL: int = Field(
        default=300,
        description="JWKS cache lifetime in seconds (default 5 minutes).",
    )

    # -- Proposals --
    URGENCY_THRESHOLD_HOURS: float = Field(
        default=24,
        description="A deadline closer than this (and not yet passed) marks a proposal urgent.",
    )
    PROPOSAL_PAGE_SIZE_DEFAULT: int = 25
    PROPOSAL_PAGE_SIZE_MAX: int = 100
    PROPOSAL_SCAN_BATCH_SIZE: int = Field(
        default=100,
        description="Page size used when scanning a whole scope for summary counts.",
    )
    PROPOSAL_SCAN_MAX_ITEMS: int = Field(
        default=1000,
        description="Upper bound on records enriched by one summary/actionable scan.",
    )


settings = Settings()
