"""Tests for ``ceremony-spine config show``."""

from __future__ import annotations

import json

from typer.testing import CliRunner

from ceremony_spine.cli.app import app

runner = CliRunner()


class TestShowConfig:
    def test_json_format(self, monkeypatch):
        monkeypatch.setenv("CEREMONY_FIRESTORE_PROJECT_ID", "demo")
        result = runner.invoke(app, ["config", "show", "--format", "json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["firestore_project_id"] == "demo"
        assert data["membership_batch_size"] == 10

    def test_env_format(self, monkeypatch):
        monkeypatch.setenv("CEREMONY_STORE_BACKEND", "memory")
        result = runner.invoke(app, ["config", "show", "--format", "env"])
        assert result.exit_code == 0
        assert "CEREMONY_STORE_BACKEND=memory" in result.stdout
        assert "CEREMONY_AVATAR_ERROR_POLICY=log" in result.stdout

    def test_secrets_masked(self, monkeypatch):
        monkeypatch.setenv("CEREMONY_FIRESTORE_API_KEY", "super-secret")
        for fmt in ("json", "env", "table"):
            result = runner.invoke(app, ["config", "show", "--format", fmt])
            assert result.exit_code == 0
            assert "super-secret" not in result.stdout

    def test_table_format(self, monkeypatch):
        monkeypatch.setenv("COLUMNS", "200")
        result = runner.invoke(app, ["config", "show"])
        assert result.exit_code == 0
        assert "store_backend" in result.stdout
        assert "firestore" in result.stdout
