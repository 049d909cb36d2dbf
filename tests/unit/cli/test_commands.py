"""Unit tests for CLI commands."""

import json
from unittest.mock import patch

import httpx
import pytest
from rich.console import Console
from typer.testing import CliRunner

from notekeeper.cli.client import APIClient
from notekeeper.cli.commands import health_app, notes_app

runner = CliRunner()

NOTE = {
    "id": "123e4567-e89b-42d3-a456-426614174000",
    "title": "Groceries",
    "content": "milk, eggs",
    "category": "personal",
    "tags": ["shopping"],
    "isPinned": True,
    "isArchived": False,
    "priority": "low",
    "createdAt": "2026-01-01T10:00:00",
    "updatedAt": "2026-01-01T10:00:00",
}


@pytest.fixture(autouse=True)
def wide_console(monkeypatch):
    """Render tables wide enough that cell text is never truncated."""
    monkeypatch.setattr("notekeeper.cli.commands.notes.console", Console(width=200))
    monkeypatch.setattr("notekeeper.cli.commands.health.console", Console(width=200))


class Backend:
    """Records requests and answers from a fixed route table."""

    def __init__(self, routes: dict[tuple[str, str], httpx.Response]) -> None:
        self.routes = routes
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.routes[(request.method, request.url.path)]

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def backend():
    """Patch both command modules to use an APIClient over a mock transport."""

    def install(routes):
        mock = Backend(routes)

        def factory():
            return APIClient(base_url="http://test", transport=httpx.MockTransport(mock))

        patches = [
            patch("notekeeper.cli.commands.notes.get_api_client", side_effect=factory),
            patch("notekeeper.cli.commands.health.get_api_client", side_effect=factory),
        ]
        for p in patches:
            p.start()
        installed.extend(patches)
        return mock

    installed: list = []
    yield install
    for p in installed:
        p.stop()


class TestNotesList:
    """Tests for `notes list`."""

    def test_lists_notes_with_pagination_footer(self, backend) -> None:
        mock = backend({
            ("GET", "/api/notes"): httpx.Response(200, json={
                "success": True,
                "data": [NOTE],
                "pagination": {"currentPage": 1, "totalPages": 1, "totalItems": 1, "itemsPerPage": 10},
            }),
        })

        result = runner.invoke(notes_app, ["list"])

        assert result.exit_code == 0, result.stdout
        assert "Groceries" in result.stdout
        assert "Page 1 of 1" in result.stdout
        assert mock.last.url.params["page"] == "1"

    def test_passes_filters_as_query_parameters(self, backend) -> None:
        mock = backend({
            ("GET", "/api/notes"): httpx.Response(200, json={
                "success": True,
                "data": [],
                "pagination": {"currentPage": 2, "totalPages": 0, "totalItems": 0, "itemsPerPage": 5},
            }),
        })

        result = runner.invoke(notes_app, [
            "list", "--category", "work", "--priority", "high", "--archived",
            "--unpinned", "--sort-by", "title", "--sort-order", "ASC",
            "--page", "2", "--limit", "5",
        ])

        assert result.exit_code == 0, result.stdout
        assert "No notes found" in result.stdout
        params = mock.last.url.params
        assert params["category"] == "work"
        assert params["priority"] == "high"
        assert params["archived"] == "true"
        assert params["pinned"] == "false"
        assert params["sortBy"] == "title"
        assert params["sortOrder"] == "ASC"
        assert params["page"] == "2"
        assert params["limit"] == "5"
        assert "search" not in params


class TestNoteMutations:
    """Tests for create, update, delete and toggles."""

    def test_create_sends_camel_case_payload(self, backend) -> None:
        mock = backend({
            ("POST", "/api/notes"): httpx.Response(201, json={
                "success": True,
                "message": "Note created successfully",
                "data": NOTE,
            }),
        })

        result = runner.invoke(notes_app, [
            "create", "-t", "Groceries", "--content", "milk, eggs",
            "-c", "personal", "--tag", "shopping", "--tag", "weekly", "--pinned",
        ])

        assert result.exit_code == 0, result.stdout
        assert "Note created successfully" in result.stdout
        assert json.loads(mock.last.content) == {
            "title": "Groceries",
            "content": "milk, eggs",
            "category": "personal",
            "tags": ["shopping", "weekly"],
            "isPinned": True,
        }

    def test_update_includes_archive_flag(self, backend) -> None:
        mock = backend({
            ("PUT", f"/api/notes/{NOTE['id']}"): httpx.Response(200, json={
                "success": True,
                "message": "Note updated successfully",
                "data": NOTE,
            }),
        })

        result = runner.invoke(notes_app, [
            "update", NOTE["id"], "-t", "Groceries", "--content", "milk", "--archived",
        ])

        assert result.exit_code == 0, result.stdout
        assert json.loads(mock.last.content) == {
            "title": "Groceries",
            "content": "milk",
            "isArchived": True,
        }

    def test_delete_with_yes_skips_prompt(self, backend) -> None:
        backend({
            ("DELETE", f"/api/notes/{NOTE['id']}"): httpx.Response(200, json={
                "success": True,
                "message": "Note deleted successfully",
            }),
        })

        result = runner.invoke(notes_app, ["delete", NOTE["id"], "--yes"])

        assert result.exit_code == 0, result.stdout
        assert "Note deleted successfully" in result.stdout

    def test_delete_aborts_when_not_confirmed(self, backend) -> None:
        mock = backend({})

        result = runner.invoke(notes_app, ["delete", NOTE["id"]], input="n\n")

        assert result.exit_code == 1
        assert mock.requests == []

    @pytest.mark.parametrize(("command", "suffix", "message"), [
        ("pin", "pin", "Note pinned successfully"),
        ("archive", "archive", "Note archived successfully"),
    ])
    def test_toggle_commands(self, backend, command, suffix, message) -> None:
        backend({
            ("PATCH", f"/api/notes/{NOTE['id']}/{suffix}"): httpx.Response(200, json={
                "success": True,
                "message": message,
                "data": NOTE,
            }),
        })

        result = runner.invoke(notes_app, [command, NOTE["id"]])

        assert result.exit_code == 0, result.stdout
        assert message in result.stdout


class TestNoteQueries:
    """Tests for show, search and category commands."""

    def test_show_not_found_exits_with_error(self, backend) -> None:
        backend({
            ("GET", "/api/notes/missing"): httpx.Response(404, json={
                "success": False,
                "message": "Note not found",
                "type": "Not Found",
                "code": "RES_NOT_FOUND",
            }),
        })

        result = runner.invoke(notes_app, ["show", "missing"])

        assert result.exit_code == 1
        assert "Error (404): Note not found" in result.stdout

    def test_search_sends_query(self, backend) -> None:
        mock = backend({
            ("GET", "/api/notes/search"): httpx.Response(200, json={
                "success": True,
                "data": [NOTE],
                "count": 1,
                "query": "milk",
            }),
        })

        result = runner.invoke(notes_app, ["search", "milk"])

        assert result.exit_code == 0, result.stdout
        assert mock.last.url.params["q"] == "milk"
        assert "Groceries" in result.stdout

    def test_categories_prints_each_name(self, backend) -> None:
        backend({
            ("GET", "/api/notes/categories"): httpx.Response(200, json={
                "success": True,
                "data": ["personal", "work"],
            }),
        })

        result = runner.invoke(notes_app, ["categories"])

        assert result.exit_code == 0, result.stdout
        assert "personal" in result.stdout
        assert "work" in result.stdout

    def test_empty_category(self, backend) -> None:
        backend({
            ("GET", "/api/notes/category/travel"): httpx.Response(200, json={
                "success": True,
                "data": [],
                "count": 0,
                "category": "travel",
            }),
        })

        result = runner.invoke(notes_app, ["category", "travel"])

        assert result.exit_code == 0, result.stdout
        assert "No notes in 'travel'" in result.stdout

    def test_connection_error_reports_backend_down(self) -> None:
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        def factory():
            return APIClient(base_url="http://test", transport=httpx.MockTransport(refuse))

        with patch("notekeeper.cli.commands.notes.get_api_client", side_effect=factory):
            result = runner.invoke(notes_app, ["categories"])

        assert result.exit_code == 1
        assert "Cannot connect to backend" in result.stdout


class TestHealthCommands:
    """Tests for health check commands."""

    def test_ping_reports_uptime(self, backend) -> None:
        backend({
            ("GET", "/health"): httpx.Response(200, json={"status": "healthy", "uptime_seconds": 42}),
        })

        result = runner.invoke(health_app, ["ping"])

        assert result.exit_code == 0, result.stdout
        assert "Backend is reachable" in result.stdout
        assert "42s" in result.stdout

    def test_status_exits_nonzero_when_unhealthy(self, backend) -> None:
        backend({
            ("GET", "/health/ready"): httpx.Response(503, json={
                "status": "unhealthy",
                "checks": {"database": {"status": "unhealthy", "error": "down"}},
            }),
        })

        result = runner.invoke(health_app, ["status"])

        assert result.exit_code == 1
        assert "UNHEALTHY" in result.stdout

    def test_status_healthy(self, backend) -> None:
        backend({
            ("GET", "/health/ready"): httpx.Response(200, json={
                "status": "healthy",
                "checks": {"database": {"status": "healthy", "latency_ms": 1}},
            }),
        })

        result = runner.invoke(health_app, ["status"])

        assert result.exit_code == 0, result.stdout
        assert "HEALTHY" in result.stdout


class TestMainApp:
    """Tests for the top-level notes_cli app."""

    def test_help_lists_command_groups(self) -> None:
        from notes_cli import app

        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        assert "notes" in result.stdout
        assert "health" in result.stdout

    def test_notes_help(self) -> None:
        from notes_cli import app

        result = runner.invoke(app, ["notes", "--help"])

        assert result.exit_code == 0
        assert "categories" in result.stdout
