"""
CargoSnap Proxy — Application Configuration
=============================================

What:  Centralized configuration management using Pydantic Settings.
Why:   The upstream URL and access token live only on the server; every module
       reads them from one validated, read-only object.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at module import time; never reloaded.
"""

from typing import List
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Production deployments MUST set CARGOSNAP_URL and CARGOSNAP_API_KEY.
    Attributes are grouped by concern for readability.
    """

    # ── CargoSnap Upstream ────────────────────────────────────────────────
    # Format: https://api.cargosnap.com/api/v2 (no trailing slash needed)
    cargosnap_url: str = Field(
        default="",
        description="Base URL of the upstream CargoSnap API",
    )

    # Never returned to clients; attached to outbound calls only
    cargosnap_api_key: str = Field(
        default="",
        description="Access token injected into every upstream request",
    )

    # What: Where the token goes on outbound requests
    # Options: bearer (Authorization header), query (?token=...)
    cargosnap_auth_mode: str = Field(default="bearer")

    @field_validator("cargosnap_auth_mode")
    @classmethod
    def validate_auth_mode(cls, v: str) -> str:
        """Ensures the auth mode is one the client knows how to apply."""
        valid_modes = {"bearer", "query"}
        lower = v.lower()
        if lower not in valid_modes:
            raise ValueError(f"Invalid cargosnap_auth_mode '{v}'. Must be one of: {valid_modes}")
        return lower

    # What: Answer upstream failures with the upstream status code instead of 500
    # Transport failures have no upstream status and always map to 500.
    propagate_upstream_status: bool = Field(default=False)

    # ── Routing ───────────────────────────────────────────────────────────
    # Prefix for the CargoSnap routes, e.g. "/api". Empty mounts them at root.
    api_prefix: str = Field(default="")

    @field_validator("api_prefix")
    @classmethod
    def normalize_api_prefix(cls, v: str) -> str:
        """Strips trailing slashes and guarantees a leading one."""
        v = v.strip().rstrip("/")
        if v and not v.startswith("/"):
            v = "/" + v
        return v

    # ── Static Files ──────────────────────────────────────────────────────
    # Mounted only when the directory exists at startup
    public_dir: str = Field(default="public")
    apidoc_dir: str = Field(default="apidoc")

    # ── CORS ──────────────────────────────────────────────────────────────
    # Format: Comma-separated URLs, or "*" for any origin
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000, ge=1, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Status Endpoint ───────────────────────────────────────────────────
    # IANA name; resolved from the tzdata package where the host has no tz database
    status_timezone: str = Field(default="America/Sao_Paulo")

    @field_validator("status_timezone")
    @classmethod
    def validate_status_timezone(cls, v: str) -> str:
        """Rejects unknown zones at startup instead of failing every /status call."""
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"Invalid status_timezone '{v}'. Must be an IANA zone name")
        return v

    developed_by: str = Field(default="Josue Henrique")
    portfolio_url: str = Field(default="https://josuashenrique.site/")

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }

    def validate_required_for_production(self) -> None:
        """
        What:  Validates that the upstream connection is configured.
        When:  Called during app startup (lifespan).
        How:   Collects every missing value and raises one ValueError listing them.
        """
        errors = []
        if not self.cargosnap_url:
            errors.append("CARGOSNAP_URL is not set (e.g. https://api.cargosnap.com/api/v2)")
        if not self.cargosnap_api_key:
            errors.append("CARGOSNAP_API_KEY is not set")
        if errors:
            raise ValueError(
                "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            )


# Singleton instance, imported throughout the application
settings = Settings()
