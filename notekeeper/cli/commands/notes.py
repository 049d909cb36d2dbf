"""
Note Commands.

Commands for managing notes through the running API.
"""

import asyncio
from typing import Any, Awaitable, Callable, Optional

import httpx
import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from notekeeper.cli.client import NOTES_PATH, APIClient, APIError, get_api_client

app = typer.Typer(help="Note management commands")
console = Console()

PRIORITY_COLORS = {"high": "red", "medium": "yellow", "low": "green"}


def _run(action: Callable[[APIClient], Awaitable[None]]) -> None:
    """Run an async command against the API and report failures."""
    asyncio.run(_execute(action))


async def _execute(action: Callable[[APIClient], Awaitable[None]]) -> None:
    client = get_api_client()
    try:
        await action(client)
    except APIError as e:
        console.print(f"[red]Error ({e.status_code}): {e.message}[/red]")
        raise typer.Exit(1)
    except httpx.ConnectError:
        console.print("[red]Error: Cannot connect to backend[/red]")
        console.print("[dim]Is the server running? Start with: python cli.py --service server[/dim]")
        raise typer.Exit(1)
    finally:
        await client.close()


def _flags(note: dict[str, Any]) -> str:
    marks = []
    if note.get("isPinned"):
        marks.append("pinned")
    if note.get("isArchived"):
        marks.append("archived")
    return ", ".join(marks) or "-"


def _priority(value: str) -> str:
    color = PRIORITY_COLORS.get(value, "white")
    return f"[{color}]{value}[/{color}]"


def _notes_table(notes: list[dict[str, Any]], title: str) -> Table:
    table = Table(title=title, show_header=True)
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Title", style="cyan")
    table.add_column("Category")
    table.add_column("Priority")
    table.add_column("Flags")
    table.add_column("Tags")

    for note in notes:
        table.add_row(
            note["id"],
            note["title"],
            note["category"],
            _priority(note["priority"]),
            _flags(note),
            ", ".join(note.get("tags") or []) or "-",
        )
    return table


def _show_note(note: dict[str, Any]) -> None:
    console.print(Panel(
        f"{note['content']}\n\n"
        f"[dim]Category:[/dim] {note['category']}   "
        f"[dim]Priority:[/dim] {_priority(note['priority'])}   "
        f"[dim]Flags:[/dim] {_flags(note)}\n"
        f"[dim]Tags:[/dim] {', '.join(note.get('tags') or []) or '-'}\n"
        f"[dim]Created:[/dim] {note['createdAt']}   "
        f"[dim]Updated:[/dim] {note['updatedAt']}\n"
        f"[dim]ID:[/dim] {note['id']}",
        title=f"[bold]{note['title']}[/bold]",
    ))


def _note_fields(
    category: Optional[str],
    tags: Optional[list[str]],
    priority: Optional[str],
    pinned: Optional[bool],
    archived: Optional[bool],
) -> dict[str, Any]:
    """Collect optional note fields that were given on the command line."""
    fields: dict[str, Any] = {}
    if category is not None:
        fields["category"] = category
    if tags is not None:
        fields["tags"] = tags
    if priority is not None:
        fields["priority"] = priority
    if pinned is not None:
        fields["isPinned"] = pinned
    if archived is not None:
        fields["isArchived"] = archived
    return fields


@app.command("list")
def list_notes(
    search: Optional[str] = typer.Option(None, "--search", "-s", help="Text in title or content"),
    category: Optional[str] = typer.Option(None, "--category", "-c", help="Exact category"),
    archived: bool = typer.Option(False, "--archived", help="List archived notes instead"),
    pinned: Optional[bool] = typer.Option(None, "--pinned/--unpinned", help="Pin filter"),
    priority: Optional[str] = typer.Option(None, "--priority", "-p", help="low, medium or high"),
    sort_by: Optional[str] = typer.Option(None, "--sort-by", help="title, createdAt, updatedAt, category, priority"),
    sort_order: Optional[str] = typer.Option(None, "--sort-order", help="ASC or DESC"),
    page: int = typer.Option(1, "--page", min=1, help="Page number"),
    limit: Optional[int] = typer.Option(None, "--limit", "-l", min=1, help="Notes per page"),
) -> None:
    """
    List notes with filters, pinned notes first.

    Examples:
        notes_cli.py notes list
        notes_cli.py notes list --category work --priority high
        notes_cli.py notes list --archived
        notes_cli.py notes list --sort-by title --sort-order ASC --page 2
    """
    params: dict[str, Any] = {"page": page}
    if archived:
        params["archived"] = "true"
    if pinned is not None:
        params["pinned"] = "true" if pinned else "false"
    for key, value in (
        ("search", search),
        ("category", category),
        ("priority", priority),
        ("sortBy", sort_by),
        ("sortOrder", sort_order),
        ("limit", limit),
    ):
        if value is not None:
            params[key] = value

    async def action(client: APIClient) -> None:
        body = await client.call("GET", NOTES_PATH, params=params)
        pagination = body["pagination"]
        if not body["data"]:
            console.print("[yellow]No notes found[/yellow]")
            return
        console.print(_notes_table(body["data"], "Notes"))
        console.print(
            f"[dim]Page {pagination['currentPage']} of {pagination['totalPages']} "
            f"({pagination['totalItems']} notes)[/dim]"
        )

    _run(action)


@app.command()
def show(note_id: str = typer.Argument(..., help="Note ID")) -> None:
    """
    Show a single note.

    Examples:
        notes_cli.py notes show 3f2b...
    """
    async def action(client: APIClient) -> None:
        body = await client.call("GET", f"{NOTES_PATH}/{note_id}")
        _show_note(body["data"])

    _run(action)


@app.command()
def create(
    title: str = typer.Option(..., "--title", "-t", help="Note title"),
    content: str = typer.Option(..., "--content", help="Note content"),
    category: Optional[str] = typer.Option(None, "--category", "-c", help="Category"),
    tags: Optional[list[str]] = typer.Option(None, "--tag", help="Tag (repeatable)"),
    priority: Optional[str] = typer.Option(None, "--priority", "-p", help="low, medium or high"),
    pinned: Optional[bool] = typer.Option(None, "--pinned/--unpinned", help="Pin the note"),
) -> None:
    """
    Create a note.

    Examples:
        notes_cli.py notes create -t "Groceries" --content "milk, eggs" -c personal --tag shopping
    """
    payload = {"title": title, "content": content}
    payload.update(_note_fields(category, tags, priority, pinned, None))

    async def action(client: APIClient) -> None:
        body = await client.call("POST", NOTES_PATH, json=payload)
        console.print(f"[green]{body['message']}[/green]")
        _show_note(body["data"])

    _run(action)


@app.command()
def update(
    note_id: str = typer.Argument(..., help="Note ID"),
    title: str = typer.Option(..., "--title", "-t", help="Note title"),
    content: str = typer.Option(..., "--content", help="Note content"),
    category: Optional[str] = typer.Option(None, "--category", "-c", help="Category"),
    tags: Optional[list[str]] = typer.Option(None, "--tag", help="Tag (repeatable)"),
    priority: Optional[str] = typer.Option(None, "--priority", "-p", help="low, medium or high"),
    pinned: Optional[bool] = typer.Option(None, "--pinned/--unpinned", help="Pin state"),
    archived: Optional[bool] = typer.Option(None, "--archived/--active", help="Archive state"),
) -> None:
    """
    Update a note. Title and content are always required.

    Examples:
        notes_cli.py notes update 3f2b... -t "Groceries" --content "milk" --priority high
    """
    payload = {"title": title, "content": content}
    payload.update(_note_fields(category, tags, priority, pinned, archived))

    async def action(client: APIClient) -> None:
        body = await client.call("PUT", f"{NOTES_PATH}/{note_id}", json=payload)
        console.print(f"[green]{body['message']}[/green]")
        _show_note(body["data"])

    _run(action)


@app.command()
def delete(
    note_id: str = typer.Argument(..., help="Note ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """
    Delete a note permanently.

    Examples:
        notes_cli.py notes delete 3f2b... --yes
    """
    if not yes:
        typer.confirm(f"Delete note {note_id}?", abort=True)

    async def action(client: APIClient) -> None:
        body = await client.call("DELETE", f"{NOTES_PATH}/{note_id}")
        console.print(f"[green]{body['message']}[/green]")

    _run(action)


@app.command()
def pin(note_id: str = typer.Argument(..., help="Note ID")) -> None:
    """
    Toggle the pinned flag of a note.

    Examples:
        notes_cli.py notes pin 3f2b...
    """
    async def action(client: APIClient) -> None:
        body = await client.call("PATCH", f"{NOTES_PATH}/{note_id}/pin")
        console.print(f"[green]{body['message']}[/green]")

    _run(action)


@app.command()
def archive(note_id: str = typer.Argument(..., help="Note ID")) -> None:
    """
    Toggle the archived flag of a note.

    Examples:
        notes_cli.py notes archive 3f2b...
    """
    async def action(client: APIClient) -> None:
        body = await client.call("PATCH", f"{NOTES_PATH}/{note_id}/archive")
        console.print(f"[green]{body['message']}[/green]")

    _run(action)


@app.command()
def search(query: str = typer.Argument(..., help="Text to search for")) -> None:
    """
    Search non-archived notes by title and content.

    Examples:
        notes_cli.py notes search meeting
    """
    async def action(client: APIClient) -> None:
        body = await client.call("GET", f"{NOTES_PATH}/search", params={"q": query})
        if not body["data"]:
            console.print(f"[yellow]No notes match '{query}'[/yellow]")
            return
        console.print(_notes_table(body["data"], f"Search: {body['query']} ({body['count']})"))

    _run(action)


@app.command()
def categories() -> None:
    """
    List categories in use.

    Examples:
        notes_cli.py notes categories
    """
    async def action(client: APIClient) -> None:
        body = await client.call("GET", f"{NOTES_PATH}/categories")
        if not body["data"]:
            console.print("[yellow]No categories yet[/yellow]")
            return
        for name in body["data"]:
            console.print(f"  [cyan]{name}[/cyan]")

    _run(action)


@app.command()
def category(name: str = typer.Argument(..., help="Category name")) -> None:
    """
    List non-archived notes of one category.

    Examples:
        notes_cli.py notes category work
    """
    async def action(client: APIClient) -> None:
        body = await client.call("GET", f"{NOTES_PATH}/category/{name}")
        if not body["data"]:
            console.print(f"[yellow]No notes in '{name}'[/yellow]")
            return
        console.print(_notes_table(body["data"], f"Category: {body['category']} ({body['count']})"))

    _run(action)
