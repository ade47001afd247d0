"""Intelligence CLI commands: dashboard, core view and mentor chat."""

import asyncio
import json
import sys

import click
from rich.console import Console
from rich.table import Table

from cli.utils import get_components, score_style
from intelligence.orchestrator import AggregationFailed

console = Console()


def _aggregate(view: str, quiet: bool = False) -> dict:
    c = get_components(skip_ai=True)
    orchestrator = c["orchestrator"]
    func = orchestrator.dashboard if view == "dashboard" else orchestrator.core
    try:
        if quiet:
            return asyncio.run(func())
        with console.status("Aggregating tracker data..."):
            return asyncio.run(func())
    except AggregationFailed as e:
        console.print(f"[red]Failed to fetch {view} intelligence:[/] {e}")
        sys.exit(1)


def _metrics_table(payload: dict) -> Table:
    table = Table(show_header=True, title=f"Global score: {payload['globalScore']}")
    table.add_column("Metric")
    table.add_column("Score", justify="right")
    for name, value in payload["metrics"].items():
        table.add_row(name, f"[{score_style(value)}]{value}[/]")
    return table


@click.command()
@click.option("--json", "as_json", is_flag=True, help="Print raw JSON payload")
def dashboard(as_json: bool):
    """Show global score, metrics and the one-line insight."""
    payload = _aggregate("dashboard", quiet=as_json)
    if as_json:
        click.echo(json.dumps(payload, indent=2))
        return

    console.print(_metrics_table(payload))
    console.print(f"\n[cyan]{payload['miniInsight']}[/]")


@click.command()
@click.option("--json", "as_json", is_flag=True, help="Print raw JSON payload")
def core(as_json: bool):
    """Show the full intelligence view with rule-based recommendations."""
    payload = _aggregate("core", quiet=as_json)
    if as_json:
        click.echo(json.dumps(payload, indent=2))
        return

    console.print(_metrics_table(payload))

    status = Table(show_header=True, title="Domain status")
    status.add_column("Domain")
    status.add_column("Score", justify="right")
    status.add_column("Status")
    for row in payload["domainStatus"]:
        status.add_row(row["domain"], str(row["score"]), row["status"])
    console.print(status)

    week = Table(show_header=True, title="Last 7 days")
    week.add_column("Day")
    week.add_column("Focus", justify="right")
    week.add_column("Load", justify="right")
    week.add_column("Study", justify="right")
    week.add_column("Heat", justify="right")
    for point, heat in zip(payload["charts"]["performanceData"], payload["heatIndicator"]):
        week.add_row(
            point["date"], str(point["focus"]), str(point["load"]), str(point["study"]), str(heat)
        )
    console.print(week)

    modules = Table(show_header=True, title="Modules")
    modules.add_column("Module")
    modules.add_column("Score", justify="right")
    for module in payload["charts"]["modulePerformance"]:
        score = module["score"]
        modules.add_row(module["name"], f"[{score_style(score)}]{score}[/]")
    console.print(modules)

    ai_layer = payload["aiLayer"]
    console.print(f"\n[bold]{ai_layer['humanReadableSummary']}[/]")
    for chain in ai_layer["causeEffectChains"]:
        console.print(f"  [dim]{chain}[/]")

    recs = Table(show_header=True, title="Recommendations")
    recs.add_column("Title")
    recs.add_column("Impact", justify="right")
    recs.add_column("Risk")
    recs.add_column("Action")
    for rec in ai_layer["recommendations"]:
        recs.add_row(rec["title"], f"+{rec['impact']}", rec["risk"], rec["action"])
    console.print(recs)

    predictions = payload["predictions"]
    console.print(
        f"\nNext risk day: [bold]{predictions['nextRiskDay']}[/]  "
        f"Burnout: [bold]{predictions['burnoutProbability']}%[/]  "
        f"Financial risk: [bold]{predictions['financialRisk']}[/]"
    )


@click.command()
@click.argument("question")
def ask(question: str):
    """Ask the mentor a question about your current metrics."""
    c = get_components()
    try:
        metrics = asyncio.run(c["orchestrator"].dashboard())["metrics"]
    except AggregationFailed as e:
        console.print(f"[yellow]Could not load metrics ({e}); asking without them.[/]")
        metrics = {}

    with console.status("Thinking..."):
        reply = asyncio.run(c["bridge"].chat(question, metrics))
    console.print(f"\n{reply}")
