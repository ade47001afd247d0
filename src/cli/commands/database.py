"""Tracker database commands: status and demo seeding."""

from datetime import datetime, timezone

import click
from rich.console import Console
from rich.table import Table

from cli.utils import get_components

console = Console()

TABLES = (
    "focus_sessions",
    "habits",
    "routines",
    "expenses",
    "attendance",
    "study_items",
    "goals",
    "weekly_reviews",
)


@click.group()
def db():
    """Tracker database commands."""
    pass


@db.command("status")
def db_status():
    """Show row counts for every tracker collection."""
    store = get_components(skip_ai=True)["store"]
    counts = store.counts()

    table = Table(show_header=True, title=str(store.db_path))
    table.add_column("Collection")
    table.add_column("Rows", justify="right")
    for name in TABLES:
        table.add_row(name, str(counts.get(name, 0)))
    console.print(table)


@db.command("seed-demo")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
def db_seed_demo(yes: bool):
    """Insert a demo week of tracker data."""
    from tracker.demo import demo_records

    store = get_components(skip_ai=True)["store"]
    if not yes and not click.confirm(f"Seed demo data into {store.db_path}?"):
        console.print("[yellow]Cancelled.[/]")
        return

    count = store.add_many(demo_records(datetime.now(timezone.utc)))
    console.print(f"[green]✓[/] Inserted {count} demo records")
