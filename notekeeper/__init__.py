"""
Notekeeper.

- backend/: Notes API, database, configuration, migrations
- cli/: Command-line client for the API (Typer + Rich)
"""
