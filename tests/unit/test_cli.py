"""
Unit Tests for cli.py Entry Script.

Tests individual functions with mocked dependencies.
"""

import subprocess
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from click.testing import CliRunner

import cli
from cli import main, validate_project_root


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def _quiet_logging():
    """Keep CLI invocations from reconfiguring logging or writing log files."""
    with patch("cli.setup_logging"):
        yield


class TestValidateProjectRoot:
    """Tests for validate_project_root function."""

    def test_succeeds_when_marker_exists(self, tmp_path):
        (tmp_path / ".project_root").touch()

        with patch("cli.PROJECT_ROOT", tmp_path):
            assert validate_project_root() == tmp_path

    def test_exits_when_marker_missing(self, tmp_path):
        with patch("cli.PROJECT_ROOT", tmp_path):
            with pytest.raises(SystemExit) as exc_info:
                validate_project_root()

        assert exc_info.value.code == 1


class TestInfoAndConfig:
    """Tests for the read-only services."""

    def test_info_is_default_service(self, runner):
        result = runner.invoke(main, [])

        assert result.exit_code == 0
        assert "Notekeeper Notes API" in result.output
        assert "Name: Notekeeper API" in result.output
        assert "seed" in result.output

    def test_config_prints_every_section(self, runner):
        result = runner.invoke(main, ["--service", "config"])

        assert result.exit_code == 0
        assert "Application Settings (from YAML)" in result.output
        assert "Database Settings (from YAML)" in result.output
        assert "max_body_bytes: 102400" in result.output
        assert "default_limit: 10" in result.output


class TestServerLifecycle:
    """Tests for --action handling of the server service."""

    def test_status_reports_running_server(self, runner):
        with patch("cli._find_process_on_port", return_value=[4242]):
            result = runner.invoke(main, ["--service", "server", "--action", "status", "--port", "3001"])

        assert result.exit_code == 0
        assert "Server is running on port 3001 (PID: 4242)" in result.output

    def test_stop_without_server(self, runner):
        with patch("cli._find_process_on_port", return_value=[]):
            result = runner.invoke(main, ["--service", "server", "--action", "stop", "--port", "3001"])

        assert result.exit_code == 0
        assert "No server running on port 3001." in result.output

    def test_stop_signals_each_pid(self, runner):
        with patch("cli._find_process_on_port", return_value=[11, 12]), \
             patch("cli.os.kill") as kill:
            result = runner.invoke(main, ["--service", "server", "--action", "stop", "--port", "3001"])

        assert result.exit_code == 0
        assert [c.args[0] for c in kill.call_args_list] == [11, 12]

    def test_start_runs_uvicorn_with_app_path(self, runner):
        with patch("cli.subprocess.run") as run:
            result = runner.invoke(main, ["--service", "server", "--host", "0.0.0.0", "--port", "9000", "--reload"])

        assert result.exit_code == 0
        cmd = run.call_args.args[0]
        assert cmd[1:4] == ["-m", "uvicorn", "notekeeper.backend.main:app"]
        assert cmd[-5:] == ["--host", "0.0.0.0", "--port", "9000", "--reload"]


class TestMigrations:
    """Tests for the migrate service."""

    def test_upgrade_calls_alembic_with_ini(self, runner):
        with patch("cli.subprocess.run", return_value=MagicMock(returncode=0)) as run:
            result = runner.invoke(main, ["--service", "migrate", "--migrate-action", "upgrade"])

        assert result.exit_code == 0
        cmd = run.call_args.args[0]
        assert cmd[1:5] == ["-m", "alembic", "-c", str(cli.ALEMBIC_INI)]
        assert cmd[-2:] == ["upgrade", "head"]

    def test_autogenerate_requires_message(self, runner):
        with patch("cli.subprocess.run") as run:
            result = runner.invoke(main, ["--service", "migrate", "--migrate-action", "autogenerate"])

        assert result.exit_code == 1
        run.assert_not_called()

    def test_failed_migration_exits_with_code(self, runner):
        with patch("cli.subprocess.run", return_value=MagicMock(returncode=3)):
            result = runner.invoke(main, ["--service", "migrate", "--migrate-action", "current"])

        assert result.exit_code == 3


class TestSeed:
    """Tests for the seed service."""

    def test_reports_created_count(self, runner):
        with patch("cli._seed_database", new=AsyncMock(return_value=9)):
            result = runner.invoke(main, ["--service", "seed"])

        assert result.exit_code == 0
        assert "Created 9 sample notes." in result.output

    def test_failure_exits_nonzero(self, runner):
        with patch("cli._seed_database", new=AsyncMock(side_effect=OSError("read-only"))):
            result = runner.invoke(main, ["--service", "seed"])

        assert result.exit_code == 1
        assert "seed failed: read-only" in result.output


def test_find_process_on_port_parses_lsof_output():
    completed = subprocess.CompletedProcess(args=[], returncode=0, stdout="101\n202\n")
    with patch("cli.subprocess.run", return_value=completed):
        assert cli._find_process_on_port(3000) == [101, 202]
