"""Implementation of 'paisa add', 'paisa credit', 'paisa budget' and
'paisa transactions' commands."""

from pathlib import Path

import typer
from pydantic import ValidationError
from rich.table import Table

from paisaplan.cli.utils import TIP_STYLES, console, fail, open_tracker, parse_amount
from paisaplan.core.exceptions import PaisaPlanError
from paisaplan.core.formatting import format_currency
from paisaplan.core.models import TransactionFilter, TransactionKind, TransactionSort
from paisaplan.engine.periods import parse_date


def add_command(
    title: str = typer.Argument(..., help="What the money was spent on"),
    amount: str = typer.Argument(..., help="Amount spent, e.g. 249.50"),
    category: str = typer.Option(
        ...,
        "--category",
        "-c",
        help="Category id or name",
    ),
    date: str = typer.Option(
        None,
        "--date",
        "-d",
        help="Date of the expense, YYYY-MM-DD (default: now)",
    ),
    description: str = typer.Option(
        None,
        "--description",
        help="Optional note",
    ),
    workspace: Path = typer.Option(
        None,
        "--workspace",
        "-w",
        help="Path to workspace (default: current directory)",
    ),
) -> None:
    """Record an expense."""
    value = parse_amount(amount)

    with open_tracker(workspace) as (ws, tracker):
        try:
            spent_at = parse_date(date) if date else None
            expense, alerts = tracker.add_expense(
                title=title,
                amount=value,
                category=category,
                date=spent_at,
                description=description,
            )
        except (PaisaPlanError, ValidationError, ValueError) as e:
            fail(str(e))

    console.print(
        f"[green]Expense Added:[/green] {expense.title} - "
        f"{format_currency(expense.amount, ws.config.currency)}"
    )
    for tip in alerts:
        style = TIP_STYLES.get(tip.kind.value, "white")
        console.print(f"[{style}]{tip.title}:[/{style}] {tip.message}")


def credit_command(
    amount: str = typer.Argument(..., help="Amount to add to the budget"),
    description: str = typer.Option(
        None,
        "--description",
        help="e.g. Salary, Gift money, Refund",
    ),
    workspace: Path = typer.Option(
        None,
        "--workspace",
        "-w",
        help="Path to workspace (default: current directory)",
    ),
) -> None:
    """Add a credit to the active budget."""
    value = parse_amount(amount)

    with open_tracker(workspace) as (ws, tracker):
        try:
            budget = tracker.add_credit(value, description)
        except (PaisaPlanError, ValidationError) as e:
            fail(str(e))

    currency = ws.config.currency
    console.print(f"[green]Credit Added:[/green] {format_currency(value, currency)} added to your budget")
    console.print(f"[dim]Budget is now {format_currency(budget.total_amount, currency)}[/dim]")


def budget_command(
    amount: str = typer.Argument(..., help="Total budget amount"),
    days: int = typer.Argument(..., help="Budget duration in days"),
    start: str = typer.Option(
        None,
        "--start",
        help="Start date, YYYY-MM-DD (default: now)",
    ),
    workspace: Path = typer.Option(
        None,
        "--workspace",
        "-w",
        help="Path to workspace (default: current directory)",
    ),
) -> None:
    """Set the budget, replacing any existing one."""
    value = parse_amount(amount)

    with open_tracker(workspace) as (ws, tracker):
        try:
            start_date = parse_date(start) if start else None
            budget = tracker.set_budget(value, days, start_date)
        except (PaisaPlanError, ValueError) as e:
            fail(str(e))

    console.print(
        f"[green]Budget set:[/green] {format_currency(budget.total_amount, ws.config.currency)} "
        f"over {budget.duration} days"
    )


def transactions_command(
    kind: TransactionFilter = typer.Option(
        TransactionFilter.ALL,
        "--filter",
        "-f",
        help="Which transactions to show",
    ),
    sort_by: TransactionSort = typer.Option(
        TransactionSort.DATE,
        "--sort",
        "-s",
        help="Sort by date (newest first) or amount (largest first)",
    ),
    limit: int = typer.Option(
        None,
        "--limit",
        "-n",
        min=1,
        help="Show at most this many rows",
    ),
    workspace: Path = typer.Option(
        None,
        "--workspace",
        "-w",
        help="Path to workspace (default: current directory)",
    ),
) -> None:
    """List expenses and credits together."""
    with open_tracker(workspace) as (ws, tracker):
        try:
            rows = tracker.transactions(kind, sort_by)
            snapshot = tracker.snapshot()
        except PaisaPlanError as e:
            fail(str(e))
    currency = ws.config.currency

    if not rows:
        console.print("[yellow]No transactions found[/yellow]")
        raise typer.Exit(0)

    table = Table(title="Transactions")
    table.add_column("Date")
    table.add_column("Title")
    table.add_column("Category")
    table.add_column("Amount", justify="right")
    for row in rows[:limit]:
        if row.kind == TransactionKind.CREDIT:
            label = "\U0001f4b0"
            amount = f"[green]+{format_currency(row.amount, currency)}[/green]"
        else:
            found = snapshot.find_category(row.category or "")
            label = f"{found.icon} {found.name}" if found else (row.category or "")
            amount = f"[red]-{format_currency(row.amount, currency)}[/red]"
        table.add_row(row.date.date().isoformat(), row.title, label, amount)
    console.print(table)
