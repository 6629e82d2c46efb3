"""CLI smoke tests.

Basic tests to verify CLI wiring. Comprehensive tests are in tests/unit/cli/.
"""

from __future__ import annotations

from typer.testing import CliRunner

from flagavatar.cli.main import app

runner = CliRunner()


def test_help_shown_without_subcommand() -> None:
    result = runner.invoke(app, [], env={"NO_COLOR": "1", "TERM": "dumb"})
    assert result.exit_code == 0
    assert "compose" in result.stdout.lower()


def test_version_command_outputs_version() -> None:
    result = runner.invoke(app, ["version"], env={"NO_COLOR": "1", "TERM": "dumb"})
    assert result.exit_code == 0
    assert "flag-avatar" in result.stdout.lower()


def test_compose_help_shows_options() -> None:
    result = runner.invoke(
        app, ["compose", "--help"], env={"NO_COLOR": "1", "TERM": "dumb"}
    )
    assert result.exit_code == 0
    assert "--drag" in result.stdout


def test_edit_help_shows_options() -> None:
    result = runner.invoke(app, ["edit", "--help"], env={"NO_COLOR": "1", "TERM": "dumb"})
    assert result.exit_code == 0
    assert len(result.stdout) > 0
