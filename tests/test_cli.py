"""Tests for the command line interface."""

import pytest
from typer.testing import CliRunner

from autolog.cli import app
from autolog.config import get_settings
from autolog.database import reset_db_state

runner = CliRunner()


@pytest.fixture
def cli_db(tmp_path, monkeypatch):
    """Point the CLI at a fresh database file."""
    monkeypatch.setenv("AUTOLOG_DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path}/cli.db")
    get_settings.cache_clear()
    reset_db_state()
    yield tmp_path / "cli.db"
    get_settings.cache_clear()
    reset_db_state()


def test_init_db(cli_db):
    result = runner.invoke(app, ["init-db"])
    assert result.exit_code == 0
    assert cli_db.exists()


def test_create_account(cli_db):
    result = runner.invoke(app, ["create-account", "alice", "--first-name", "Alice"])
    assert result.exit_code == 0
    assert "Account Created" in result.output


def test_create_duplicate_account(cli_db):
    runner.invoke(app, ["create-account", "alice"])
    result = runner.invoke(app, ["create-account", "alice"])
    assert result.exit_code == 1
    assert "already exists" in result.output


def test_issue_token(cli_db):
    runner.invoke(app, ["create-account", "bob"])
    result = runner.invoke(app, ["issue-token", "bob"])
    assert result.exit_code == 0
    assert result.output.strip()


def test_issue_token_unknown_account(cli_db):
    result = runner.invoke(app, ["issue-token", "nobody"])
    assert result.exit_code == 1


def test_list_attachments_empty(cli_db):
    result = runner.invoke(app, ["attachments", "vehicle", "some-vehicle-id"])
    assert result.exit_code == 0
    assert "No attachments found" in result.output
