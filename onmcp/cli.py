"""0nMCP console CLI - Main entry point."""

import asyncio
import json
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.table import Table

from .config import settings
from .logging_config import configure_logging

app = typer.Typer(
    name="onmcp",
    help="0nMCP console: CRM location sync and MCP server tools",
    no_args_is_help=True,
)
console = Console()


def _output_result(result: Any) -> None:
    console.print_json(json.dumps(result, default=str, indent=2))


@app.callback()
def main(
    log_level: str = typer.Option(None, "--log-level", help="Override LOG_LEVEL"),
):
    configure_logging(log_level or settings.log_level)


@app.command("serve")
def serve(
    port: int = typer.Option(8020, "--port", "-p", help="Port to run on"),
    host: str = typer.Option("127.0.0.1", "--host", help="Host to bind to"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
):
    """Launch the console API."""
    import uvicorn

    console.print(f"[bold cyan]Starting 0nMCP console at http://{host}:{port}[/bold cyan]")
    uvicorn.run("onmcp.app:app", host=host, port=port, reload=reload)


@app.command("sync")
def sync(
    json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
):
    """Pull every agency location from the CRM into the local database."""
    from .database import async_session_factory, create_tables
    from .services import crm_svc

    if not settings.crm_agency_api_key:
        console.print("[red]CRM_AGENCY_API_KEY is not set[/red]")
        raise typer.Exit(1)

    async def _sync():
        await create_tables()
        async with async_session_factory() as db:
            return await crm_svc.run_location_sync(db)

    try:
        result = asyncio.run(_sync())
    except Exception as e:
        console.print(f"[red]Sync failed:[/red] {e}")
        raise typer.Exit(1)

    if json_output:
        _output_result(result.model_dump())
        return

    console.print(
        f"[green]Synced {result.total} locations[/green] "
        f"({result.added} added, {result.updated} updated, {result.skipped} skipped) "
        f"in {result.duration_ms} ms"
    )


@app.command("locations")
def locations(
    json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
):
    """List locations from the last sync."""
    from .database import async_session_factory, create_tables
    from .schemas.crm import CRMLocationOut
    from .services import location_svc

    async def _list():
        await create_tables()
        async with async_session_factory() as db:
            rows = await location_svc.list_locations(db)
            return [CRMLocationOut.model_validate(r) for r in rows]

    rows = asyncio.run(_list())

    if json_output:
        _output_result([r.model_dump(mode="json") for r in rows])
        return

    table = Table(title=f"Locations ({len(rows)})")
    table.add_column("Location ID", style="dim", max_width=24)
    table.add_column("Name", style="cyan")
    table.add_column("City", style="white")
    table.add_column("State", style="white")
    table.add_column("Email", style="green")
    table.add_column("Last Sync", style="yellow")

    for r in rows:
        table.add_row(
            r.location_id[:24],
            r.name,
            r.city or "-",
            r.state or "-",
            r.email or "-",
            r.last_sync_at.strftime("%Y-%m-%d %H:%M") if r.last_sync_at else "-",
        )

    console.print(table)


@app.command("health")
def health(
    json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
):
    """Check live health of every MCP server."""
    from .services import mcp_svc

    results = asyncio.run(mcp_svc.check_all_health())

    if json_output:
        _output_result([r.model_dump() for r in results])
        return

    table = Table(title="MCP Servers")
    table.add_column("Server", style="cyan")
    table.add_column("Status")
    table.add_column("Version", style="white")
    table.add_column("Tools", justify="right")
    table.add_column("Latency", justify="right", style="dim")
    table.add_column("Error", style="red")

    for r in results:
        table.add_row(
            r.server_key,
            "[green]online[/green]" if r.online else "[red]offline[/red]",
            r.version or "-",
            str(r.tools or "-"),
            f"{r.latency_ms} ms",
            r.error or "",
        )

    console.print(table)


@app.command("stats")
def stats(
    badge: str = typer.Option(None, "--badge", "-b", help="Print a shields.io badge payload"),
):
    """Show catalog stats."""
    from . import catalog

    if badge:
        payload = catalog.badge(badge)
        if payload is None:
            console.print(f"[red]Unknown stat:[/red] {badge}")
            raise typer.Exit(1)
        _output_result(payload)
        return

    table = Table(title=f"0nMCP Catalog v{catalog.STATS['version']}")
    table.add_column("Stat", style="cyan")
    table.add_column("Value", justify="right")
    for key in ("services", "tools", "actions", "triggers", "categories", "total"):
        table.add_row(key, str(catalog.STATS[key]))

    console.print(table)


@app.command("compose")
def compose(
    files: list[Path] = typer.Argument(..., help=".0n files to compose", exists=True, dir_okay=False),
    name: str = typer.Option("master", "--name", "-n", help="SWITCH file name"),
    author: str = typer.Option(None, "--author", "-a", help="Author to record"),
    output: Path = typer.Option(None, "--output", "-o", help="Write to file instead of stdout"),
):
    """Compose .0n files into one master SWITCH file."""
    from .composer import ComposerError, generate_switch_file, parse_on_file

    try:
        parsed = [parse_on_file(f.name, f.read_text()) for f in files]
    except ComposerError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    doc = generate_switch_file(name, parsed, author=author)
    if output:
        output.write_text(json.dumps(doc, indent=2))
        console.print(f"[green]Wrote {output}[/green] ({len(parsed)} files)")
        return
    _output_result(doc)


if __name__ == "__main__":
    app()
