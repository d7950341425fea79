"""Tests for CeremonySettings and the settings cache."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from ceremony_spine.core.enums import AvatarErrorPolicy, LogFormat, StoreBackend
from ceremony_spine.core.settings import (
    MEMBERSHIP_FILTER_LIMIT,
    CeremonySettings,
    clear_settings_cache,
    get_settings,
)


class TestDefaults:
    def test_defaults(self):
        settings = CeremonySettings()
        assert settings.store_backend == StoreBackend.FIRESTORE
        assert settings.firestore_project_id is None
        assert settings.firestore_database == "(default)"
        assert settings.membership_batch_size == MEMBERSHIP_FILTER_LIMIT == 10
        assert settings.avatar_error_policy == AvatarErrorPolicy.LOG
        assert settings.log_format == LogFormat.AUTO
        assert settings.request_timeout == 30.0


class TestEnvironment:
    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("CEREMONY_STORE_BACKEND", "memory")
        monkeypatch.setenv("CEREMONY_FIXTURE_PATH", "/tmp/demo.json")
        monkeypatch.setenv("CEREMONY_AVATAR_ERROR_POLICY", "discard")
        monkeypatch.setenv("CEREMONY_MEMBERSHIP_BATCH_SIZE", "4")

        settings = CeremonySettings()
        assert settings.store_backend == StoreBackend.MEMORY
        assert settings.fixture_path == Path("/tmp/demo.json")
        assert settings.avatar_error_policy == AvatarErrorPolicy.DISCARD
        assert settings.membership_batch_size == 4

    def test_api_key_is_secret(self, monkeypatch):
        monkeypatch.setenv("CEREMONY_FIRESTORE_API_KEY", "super-secret")
        settings = CeremonySettings()
        assert settings.firestore_api_key.get_secret_value() == "super-secret"
        assert "super-secret" not in repr(settings)

    def test_dotenv_file(self, tmp_path, monkeypatch):
        (tmp_path / ".env").write_text("CEREMONY_FIRESTORE_PROJECT_ID=from-dotenv\n")
        monkeypatch.chdir(tmp_path)
        assert CeremonySettings().firestore_project_id == "from-dotenv"


class TestValidation:
    @pytest.mark.parametrize("size", [0, 11])
    def test_batch_size_bounded_by_filter_limit(self, size):
        with pytest.raises(ValidationError):
            CeremonySettings(membership_batch_size=size)

    def test_timeout_positive(self):
        with pytest.raises(ValidationError):
            CeremonySettings(request_timeout=0)

    def test_unknown_backend(self, monkeypatch):
        monkeypatch.setenv("CEREMONY_STORE_BACKEND", "postgres")
        with pytest.raises(ValidationError):
            CeremonySettings()


class TestCache:
    def test_cached(self):
        assert get_settings() is get_settings()

    def test_force_reload(self, monkeypatch):
        first = get_settings()
        monkeypatch.setenv("CEREMONY_LOG_LEVEL", "DEBUG")
        assert get_settings() is first
        reloaded = get_settings(_force_reload=True)
        assert reloaded.log_level == "DEBUG"
        assert get_settings() is reloaded

    def test_clear(self):
        first = get_settings()
        clear_settings_cache()
        assert get_settings() is not first
