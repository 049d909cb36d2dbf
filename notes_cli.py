#!/usr/bin/env python3
"""
Notes CLI Client.

Command-line client for the notes API.
Built with Typer for type-safe commands and Rich for formatted output.

Usage:
    python notes_cli.py --help                              # Show help

    # Notes
    python notes_cli.py notes list                          # Active notes, pinned first
    python notes_cli.py notes list --archived               # Archived notes
    python notes_cli.py notes list -c work -p high          # Filter
    python notes_cli.py notes show <id>                     # One note
    python notes_cli.py notes create -t Title --content Body
    python notes_cli.py notes update <id> -t Title --content Body
    python notes_cli.py notes delete <id>
    python notes_cli.py notes pin <id>                      # Toggle pin
    python notes_cli.py notes archive <id>                  # Toggle archive
    python notes_cli.py notes search <text>
    python notes_cli.py notes categories
    python notes_cli.py notes category <name>

    # Health checks
    python notes_cli.py health ping                         # Ping backend
    python notes_cli.py health status                       # Readiness

Options:
    --verbose, -v     Enable verbose output
    --debug           Enable debug mode (detailed logging)
    --help            Show help message
"""

import sys
from pathlib import Path

import typer
from rich.console import Console

# Add project root to path for absolute imports
project_root = Path(__file__).resolve().parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from notekeeper.cli.commands import health_app, notes_app

# Create main app
app = typer.Typer(
    name="notes",
    help="Notekeeper CLI - manage notes through the running API.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()

# Register command groups
app.add_typer(notes_app, name="notes")
app.add_typer(health_app, name="health")


def _validate_project_root() -> None:
    """Validate that we're running from the project root."""
    if not (project_root / ".project_root").exists():
        console.print("[red]Error: .project_root not found. Run from project root.[/red]")
        raise typer.Exit(1)


@app.callback()
def main(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output (INFO level logging)",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        "-d",
        help="Enable debug mode (DEBUG level logging)",
    ),
) -> None:
    """
    Notekeeper CLI.

    Talks to the notes API configured in config/settings/application.yaml.
    """
    _validate_project_root()

    from notekeeper.backend.core.logging import setup_logging

    if debug:
        setup_logging(level="DEBUG", format_type="console")
        console.print("[dim]Debug mode enabled[/dim]")
    elif verbose:
        setup_logging(level="INFO", format_type="console")
    else:
        setup_logging(level="WARNING", format_type="console", enable_file_logging=False)


if __name__ == "__main__":
    app()
