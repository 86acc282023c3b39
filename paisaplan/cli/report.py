"""Implementation of 'paisa report' command.

Prints spending by category and the monthly spending trend.
"""

from pathlib import Path

import typer
from rich.table import Table

from paisaplan.cli.utils import console, fail, open_tracker
from paisaplan.core.exceptions import PaisaPlanError
from paisaplan.core.formatting import format_currency, format_percentage


def report_command(
    workspace: Path = typer.Option(
        None,
        "--workspace",
        "-w",
        help="Path to workspace (default: current directory)",
    ),
) -> None:
    """Show spending by category and the last six months of spending."""
    with open_tracker(workspace) as (ws, tracker):
        try:
            breakdown = tracker.category_breakdown()
            series = tracker.monthly_series()
        except PaisaPlanError as e:
            fail(str(e))
    currency = ws.config.currency

    if not breakdown:
        console.print("[yellow]No expenses yet[/yellow]")
        console.print("Run 'paisa add' to record one")
        raise typer.Exit(0)

    total = sum(item.total for item in breakdown)

    table = Table(title="Spending by Category")
    table.add_column("Category")
    table.add_column("Amount", justify="right")
    table.add_column("Share", justify="right")
    table.add_column("Expenses", justify="right")
    for item in breakdown:
        table.add_row(
            f"{item.category.icon} {item.category.name}",
            format_currency(item.total, currency),
            format_percentage(item.total / total * 100),
            str(item.count),
        )
    console.print(table)

    trend = Table(title="Monthly Spending Trend")
    trend.add_column("Month")
    trend.add_column("Total", justify="right")
    for point in series:
        trend.add_row(point.label, format_currency(point.total, currency))
    console.print(trend)
