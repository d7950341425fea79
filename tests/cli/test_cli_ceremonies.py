"""Tests for ``ceremony-spine ceremonies`` commands against the demo fixture."""

from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from ceremony_spine.cli.app import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def _cli_env(monkeypatch):
    monkeypatch.setenv("CEREMONY_LOG_LEVEL", "WARNING")
    monkeypatch.setenv("CEREMONY_LOG_FORMAT", "json")
    monkeypatch.setenv("COLUMNS", "200")  # rich tables must not fold


def _invoke(*args: str):
    return runner.invoke(app, ["ceremonies", *args])


def _json(result) -> object:
    assert result.exit_code == 0, result.output
    return json.loads(result.stdout)


class TestVersion:
    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "ceremony-spine 0.1.0" in result.stdout


class TestList:
    def test_json(self, demo_fixture_path):
        rows = _json(_invoke("list", "--fixture", str(demo_fixture_path), "--json"))
        assert [r["id"] for r in rows] == ["A8CVrp2MMx7KO512KFdv", "rln-2023"]
        assert rows[1]["state"] == "FINALIZED"

    def test_search(self, demo_fixture_path):
        rows = _json(_invoke("list", "--search", "rln", "--fixture", str(demo_fixture_path), "--json"))
        assert [r["id"] for r in rows] == ["rln-2023"]

    def test_table(self, demo_fixture_path):
        result = _invoke("list", "--fixture", str(demo_fixture_path))
        assert result.exit_code == 0
        assert "RLN trusted setup" in result.stdout

    def test_missing_fixture_file(self, tmp_path):
        result = _invoke("list", "--fixture", str(tmp_path / "absent.json"))
        assert result.exit_code != 0


class TestShow:
    def test_json(self, demo_fixture_path):
        project = _json(_invoke(
            "show", "A8CVrp2MMx7KO512KFdv", "--avatars", "--fixture", str(demo_fixture_path), "--json",
        ))
        assert project["ceremony"]["id"] == "A8CVrp2MMx7KO512KFdv"
        assert [c["id"] for c in project["circuits"]] == ["circuit-small", "circuit-medium", "circuit-large"]
        assert len(project["contributions"]) == 3
        assert sorted(project["avatars"]) == [
            "https://avatars.example.org/alice.png",
            "https://avatars.example.org/bob.png",
        ]

    def test_no_contributions(self, demo_fixture_path):
        project = _json(_invoke(
            "show", "A8CVrp2MMx7KO512KFdv", "--no-contributions", "--fixture", str(demo_fixture_path), "--json",
        ))
        assert project["contributions"] is None
        assert project["avatars"] is None

    def test_summary(self, demo_fixture_path):
        result = _invoke("show", "A8CVrp2MMx7KO512KFdv", "--fixture", str(demo_fixture_path))
        assert result.exit_code == 0
        assert "circuits" in result.stdout
        assert "OPENED" in result.stdout

    def test_unknown_ceremony_exits_1(self, demo_fixture_path):
        result = _invoke("show", "nope", "--fixture", str(demo_fixture_path))
        assert result.exit_code == 1
        assert "Document not found" in result.stderr


class TestCircuits:
    def test_ordered(self, demo_fixture_path):
        circuits = _json(_invoke("circuits", "A8CVrp2MMx7KO512KFdv", "--fixture", str(demo_fixture_path), "--json"))
        assert [c["data"]["sequencePosition"] for c in circuits] == [0, 1, 2]
        assert circuits[0]["reference"] == "ceremonies/A8CVrp2MMx7KO512KFdv/circuits/circuit-small"

    def test_table(self, demo_fixture_path):
        result = _invoke("circuits", "A8CVrp2MMx7KO512KFdv", "--fixture", str(demo_fixture_path))
        assert result.exit_code == 0
        out = result.stdout
        assert out.index("Small") < out.index("Medium") < out.index("Large")

    def test_unknown_ceremony_is_empty(self, demo_fixture_path):
        result = _invoke("circuits", "nope", "--fixture", str(demo_fixture_path))
        assert result.exit_code == 0
        assert "No items" in result.stdout


class TestParticipantsAndContributions:
    def test_participants(self, demo_fixture_path):
        rows = _json(_invoke("participants", "A8CVrp2MMx7KO512KFdv", "--fixture", str(demo_fixture_path), "--json"))
        assert [r["id"] for r in rows] == ["alice", "bob", "carol"]

    def test_contributions(self, demo_fixture_path):
        rows = _json(_invoke(
            "contributions", "A8CVrp2MMx7KO512KFdv", "circuit-small", "--fixture", str(demo_fixture_path), "--json",
        ))
        assert [r["id"] for r in rows] == ["contrib-1", "contrib-2"]


class TestAvatars:
    def test_json(self, demo_fixture_path):
        payload = _json(_invoke("avatars", "A8CVrp2MMx7KO512KFdv", "--fixture", str(demo_fixture_path), "--json"))
        assert sorted(payload["avatars"]) == [
            "https://avatars.example.org/alice.png",
            "https://avatars.example.org/bob.png",
        ]
        assert payload["errors"] == []

    def test_plain(self, demo_fixture_path):
        result = _invoke("avatars", "A8CVrp2MMx7KO512KFdv", "--fixture", str(demo_fixture_path))
        assert result.exit_code == 0
        assert "alice.png" in result.stdout


class TestFirestoreConfig:
    def test_missing_project_id_exits_1(self):
        result = _invoke("list")
        assert result.exit_code == 1
        assert "CEREMONY_FIRESTORE_PROJECT_ID" in result.stderr
