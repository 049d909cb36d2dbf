"""
CLI Client Module.

Command-line client built with Typer for working with notes through
the running API.

Architecture:
- CLI is a thin presentation layer
- All business logic lives in the backend
- CLI calls backend via HTTP (httpx)
- Sends X-Frontend-ID: cli header for log routing

Usage:
    python notes_cli.py --help
    python notes_cli.py notes list
    python notes_cli.py health ping
"""
