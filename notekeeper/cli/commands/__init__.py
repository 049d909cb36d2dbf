"""
CLI Commands.

Organized by domain/feature area.
"""

from notekeeper.cli.commands.health import app as health_app
from notekeeper.cli.commands.notes import app as notes_app

__all__ = [
    "health_app",
    "notes_app",
]
