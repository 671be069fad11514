"""
Back-office CLI.

Command-line interface for common operations:
    onboarding-show   print a stored onboarding snapshot
    onboarding-clear  drop a stored onboarding snapshot
    pos-url           derive or parse a POS base URL
    health            check the back-office and its key-value store
"""

import asyncio
import sys
import time
from pathlib import Path

# Add backend to path for imports
sys.path.insert(0, str(Path(__file__).parent))

import httpx
import typer
from rich.console import Console
from rich.table import Table

from backoffice.services.onboarding import SnapshotStore
from backoffice.services.onboarding.steps import WORK_STEPS, required_steps_progress, step_status
from backoffice.services.pos_urls import derive_base_url, parse_base_url
from shared.config.constants import PosType
from shared.config.settings import settings
from shared.infrastructure.kv_store import create_kv_store

app = typer.Typer(
    name="backoffice",
    help="Restaurant back-office CLI",
    add_completion=False,
)
console = Console()

BADGES = {"completed": "[green]✓ completed[/green]", "current": "[cyan]→ current[/cyan]", "pending": "-"}


# =============================================================================
# Onboarding Commands
# =============================================================================

@app.command()
def onboarding_show(
    restaurant_id: int = typer.Argument(..., help="Restaurant ID"),
):
    """Show the stored onboarding snapshot of a restaurant."""

    async def _show():
        store = create_kv_store()
        try:
            snapshot = await SnapshotStore(store).load(restaurant_id)
        finally:
            await store.close()

        if snapshot is None:
            console.print(f"[yellow]No onboarding snapshot for restaurant {restaurant_id}[/yellow]")
            raise typer.Exit(1)

        table = Table(title=f"Onboarding - restaurant {restaurant_id}")
        table.add_column("Step", style="cyan")
        table.add_column("Status", style="green")

        for step in WORK_STEPS:
            table.add_row(f"{int(step)} {step.label}", BADGES[step_status(snapshot, step)])

        console.print(table)
        console.print(
            f"Required steps: {required_steps_progress(snapshot.completed_steps)}/3  "
            f"Personnel: {len(snapshot.personnel)}  "
            f"Saved: {snapshot.saved_at or '-'}"
        )

    asyncio.run(_show())


@app.command()
def onboarding_clear(
    restaurant_id: int = typer.Argument(..., help="Restaurant ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
):
    """Drop the stored onboarding snapshot so the wizard starts over."""
    if not yes:
        typer.confirm(f"Clear onboarding for restaurant {restaurant_id}?", abort=True)

    async def _clear():
        store = create_kv_store()
        try:
            await SnapshotStore(store).delete(restaurant_id)
        finally:
            await store.close()
        console.print(f"[green]✓ Onboarding snapshot cleared for restaurant {restaurant_id}[/green]")

    asyncio.run(_clear())


# =============================================================================
# POS Commands
# =============================================================================

@app.command()
def pos_url(
    pos_type: str = typer.Argument(..., help="mpluskassa or untill"),
    port: str = typer.Option("", help="Port"),
    ip: str = typer.Option("", help="IP address (untill)"),
    database: str = typer.Option("", help="Database name (untill)"),
    parse: str = typer.Option("", help="Parse this base URL instead of building one"),
):
    """Build a POS base URL from its fields, or recover the fields from a URL."""
    if pos_type not in PosType.ALL:
        console.print(f"[red]Unknown POS type: {pos_type}[/red]")
        raise typer.Exit(1)

    if parse:
        fields = parse_base_url(pos_type, parse)
        table = Table(title=parse)
        table.add_column("Field", style="cyan")
        table.add_column("Value", style="green")
        for name, value in fields.items():
            table.add_row(name, value or "-")
        console.print(table)
        return

    base_url = derive_base_url(pos_type, port=port, ip=ip, database=database)
    if not base_url:
        console.print("[red]✗ Missing fields for this POS type[/red]")
        raise typer.Exit(1)
    console.print(base_url)


# =============================================================================
# Health Commands
# =============================================================================

@app.command()
def health(
    url: str = typer.Option(f"http://localhost:{settings.port}", help="Back-office base URL"),
):
    """Check system health."""

    async def _health():
        table = Table(title="Service Health")
        table.add_column("Service", style="cyan")
        table.add_column("Status", style="green")
        table.add_column("Response Time", style="yellow")

        async with httpx.AsyncClient(timeout=5.0) as client:
            try:
                start = time.time()
                response = await client.get(f"{url}/api/health")
                elapsed = (time.time() - start) * 1000
                if response.status_code == 200:
                    table.add_row("Back-office", "✓ Healthy", f"{elapsed:.0f}ms")
                else:
                    table.add_row("Back-office", f"✗ Status {response.status_code}", f"{elapsed:.0f}ms")
            except httpx.HTTPError as e:
                table.add_row("Back-office", f"✗ {type(e).__name__}", "-")

        store = create_kv_store()
        try:
            start = time.time()
            await store.ping()
            elapsed = (time.time() - start) * 1000
            table.add_row(f"Key-value store ({settings.kv_backend})", "✓ Healthy", f"{elapsed:.0f}ms")
        except Exception as e:
            table.add_row(f"Key-value store ({settings.kv_backend})", f"✗ {type(e).__name__}", "-")
        finally:
            await store.close()

        console.print(table)

    asyncio.run(_health())


if __name__ == "__main__":
    app()
