"""
Health Check Commands.

Commands for checking backend health and status.
"""

import asyncio

import httpx
import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from notekeeper.cli.client import get_api_client

app = typer.Typer(help="Health check commands")
console = Console()


@app.command()
def status() -> None:
    """
    Check backend readiness (requires running server).

    Examples:
        notes_cli.py health status
    """
    asyncio.run(_status())


async def _status() -> None:
    """Async implementation of status command."""
    client = get_api_client()

    try:
        response = await client.get("/health/ready")

        if response.status_code not in (200, 503):
            console.print(f"[red]Unexpected response: {response.status_code}[/red]")
            raise typer.Exit(1)

        _display_health(response.json())
        if response.status_code == 503:
            raise typer.Exit(1)

    except httpx.ConnectError:
        console.print("[red]Error: Cannot connect to backend[/red]")
        console.print("[dim]Is the server running? Start with: python cli.py --service server[/dim]")
        raise typer.Exit(1)

    finally:
        await client.close()


def _display_health(data: dict) -> None:
    """Display readiness check results."""
    status = data.get("status", "unknown")
    status_color = "green" if status == "healthy" else "red" if status == "unhealthy" else "yellow"

    console.print(Panel(
        f"[{status_color}]{status.upper()}[/{status_color}]",
        title="Backend Status",
    ))

    table = Table(show_header=True)
    table.add_column("Component", style="cyan")
    table.add_column("Status")
    table.add_column("Details")

    for component, check_data in data.get("checks", {}).items():
        check_status = check_data.get("status", "unknown")
        color = "green" if check_status == "healthy" else "red" if check_status == "unhealthy" else "yellow"

        details = []
        if "latency_ms" in check_data:
            details.append(f"latency: {check_data['latency_ms']}ms")
        if "error" in check_data:
            details.append(f"error: {check_data['error']}")

        table.add_row(
            component,
            f"[{color}]{check_status}[/{color}]",
            ", ".join(details) if details else "-",
        )

    console.print(table)


@app.command()
def ping() -> None:
    """
    Simple ping to check if backend is reachable.

    Examples:
        notes_cli.py health ping
    """
    asyncio.run(_ping())


async def _ping() -> None:
    """Async implementation of ping command."""
    client = get_api_client()

    try:
        response = await client.get("/health")

        if response.status_code == 200:
            uptime = response.json().get("uptime_seconds")
            console.print(f"[green]✓ Backend is reachable[/green] [dim](uptime {uptime}s)[/dim]")
        else:
            console.print(f"[yellow]Backend responded with status {response.status_code}[/yellow]")
            raise typer.Exit(1)

    except httpx.HTTPError as e:
        if isinstance(e, httpx.ConnectError):
            console.print("[red]✗ Backend is not reachable[/red]")
        else:
            console.print(f"[red]✗ Error: {e}[/red]")
        raise typer.Exit(1)

    finally:
        await client.close()
