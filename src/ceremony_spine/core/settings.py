"""
Centralized settings for ceremony-spine.

Manifesto:
    Store credentials, backend choice and aggregation knobs live in one
    validated, cached settings object.  Nothing opens a global connection:
    the store handle built from these settings is passed explicitly to
    every reader.

All fields can be set via ``CEREMONY_*`` environment variables (e.g.
``CEREMONY_STORE_BACKEND=firestore``) or a ``.env`` file.

Tags:
    ceremony-spine, configuration, settings, pydantic, caching, validation

Doc-Types:
    api-reference
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from ceremony_spine.core.enums import AvatarErrorPolicy, LogFormat, StoreBackend

# Fixed ceiling of the document store's ``in`` filter.
MEMBERSHIP_FILTER_LIMIT = 10


class CeremonySettings(BaseSettings):
    """ceremony-spine centralized configuration."""

    model_config = SettingsConfigDict(
        env_prefix="CEREMONY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Store ────────────────────────────────────────────────────
    store_backend: StoreBackend = Field(default=StoreBackend.FIRESTORE)
    firestore_project_id: str | None = Field(default=None, description="Firebase project id")
    firestore_api_key: SecretStr | None = Field(default=None, description="Web API key")
    firestore_database: str = Field(default="(default)")
    firestore_base_url: str = Field(default="https://firestore.googleapis.com/v1")
    firestore_id_token: SecretStr | None = Field(
        default=None,
        description="Optional Firebase Auth ID token sent as a bearer token",
    )
    request_timeout: float = Field(default=30.0, gt=0)
    fixture_path: Path | None = Field(
        default=None,
        description="JSON fixture that seeds the memory backend",
    )

    # ── Aggregation ──────────────────────────────────────────────
    membership_batch_size: int = Field(default=MEMBERSHIP_FILTER_LIMIT, ge=1, le=MEMBERSHIP_FILTER_LIMIT)
    avatar_error_policy: AvatarErrorPolicy = Field(default=AvatarErrorPolicy.LOG)

    # ── Logging ──────────────────────────────────────────────────
    log_level: str = Field(default="INFO")
    log_format: LogFormat = Field(default=LogFormat.AUTO)


# ── Settings factory with caching ────────────────────────────────────────

_settings_cache: dict[str, CeremonySettings] = {}


def get_settings(*, _force_reload: bool = False) -> CeremonySettings:
    """Load, validate, and cache a :class:`CeremonySettings` instance."""
    if not _force_reload and "default" in _settings_cache:
        return _settings_cache["default"]

    settings = CeremonySettings()
    _settings_cache["default"] = settings
    return settings


def clear_settings_cache() -> None:
    """Clear the settings cache (primarily for testing)."""
    _settings_cache.clear()


__all__ = [
    "MEMBERSHIP_FILTER_LIMIT",
    "CeremonySettings",
    "get_settings",
    "clear_settings_cache",
]
