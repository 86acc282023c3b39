"""Implementation of 'paisa status' and 'paisa dashboard' commands.

Shows budget progress with smart tips, and the headline dashboard numbers.
"""

from pathlib import Path

import typer
from rich.panel import Panel

from paisaplan.cli.utils import TIP_STYLES, console, fail, open_tracker
from paisaplan.core.exceptions import PaisaPlanError
from paisaplan.core.formatting import format_currency, format_percentage


def status_command(
    workspace: Path = typer.Option(
        None,
        "--workspace",
        "-w",
        help="Path to workspace (default: current directory)",
    ),
) -> None:
    """Show budget status.

    Displays remaining budget, spending pace against the plan,
    and smart tips about the current period.
    """
    with open_tracker(workspace) as (ws, tracker):
        try:
            snapshot = tracker.snapshot()
            evaluation = tracker.status()
        except PaisaPlanError as e:
            fail(str(e))
    currency = ws.config.currency

    budget = snapshot.budget
    status = evaluation.status
    if budget is None or status is None:
        console.print("[yellow]No budget set[/yellow]")
        console.print("Run 'paisa budget <amount> <days>' to create one")
        raise typer.Exit(0)

    console.print()
    console.print(
        Panel(
            f"[bold]Remaining Budget: {format_currency(status.remaining, currency)}[/bold]\n"
            f"Budget used: {format_percentage(status.percent_used)}",
            style="cyan",
        )
    )
    console.print()

    console.print("[bold]Budget Analysis[/bold]")
    console.print(f"  Total Budget:      {format_currency(budget.total_amount, currency):>12}")
    if budget.credits > 0:
        console.print(f"  [dim]incl. credits:    {format_currency(budget.credits, currency):>12}[/dim]")
    console.print(f"  Total Spent:       {format_currency(snapshot.total_expenses, currency):>12}")
    console.print(f"  Expected Spending: {format_currency(status.expected_spent, currency):>12}")
    console.print(f"  Days Remaining:    {status.days_remaining:>12}")
    console.print(f"  Daily Budget:      {format_currency(status.daily_remaining, currency):>12}")
    if status.is_over_budget:
        console.print("  Status:            [red]Over Budget[/red]")
    else:
        console.print("  Status:            [green]On Track[/green]")
    console.print()

    if evaluation.tips:
        console.print("[bold]Smart Budget Tips[/bold]")
        for tip in evaluation.tips:
            style = TIP_STYLES.get(tip.kind.value, "white")
            console.print(f"  [{style}]{tip.title}[/{style}]")
            console.print(f"    {tip.message}")
        console.print()


def dashboard_command(
    workspace: Path = typer.Option(
        None,
        "--workspace",
        "-w",
        help="Path to workspace (default: current directory)",
    ),
) -> None:
    """Show current balance plus this month's and this week's spending."""
    with open_tracker(workspace) as (ws, tracker):
        try:
            stats = tracker.dashboard()
        except PaisaPlanError as e:
            fail(str(e))
    currency = ws.config.currency

    console.print()
    console.print(
        Panel(f"[bold]Current Balance: {format_currency(stats.current_balance, currency)}[/bold]", style="cyan")
    )
    console.print(
        f"  This Month: {format_currency(stats.monthly_total, currency):>12}  "
        f"[dim]({stats.monthly_count} expenses)[/dim]"
    )
    console.print(
        f"  This Week:  {format_currency(stats.weekly_total, currency):>12}  "
        f"[dim]({stats.weekly_count} expenses)[/dim]"
    )
    console.print()
