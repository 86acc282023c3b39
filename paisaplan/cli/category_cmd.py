"""Implementation of 'paisa category' command.

List, add, rename and delete spending categories.
"""

from pathlib import Path

import typer
from pydantic import ValidationError
from rich.table import Table

from paisaplan.cli.utils import console, fail, open_tracker
from paisaplan.core.exceptions import PaisaPlanError
from paisaplan.core.formatting import format_currency
from paisaplan.engine.aggregator import calculate_category_total, expenses_for_category

# Create subcommand group
category_app = typer.Typer(help="Manage spending categories")


@category_app.command(name="list")
def category_list(
    workspace: Path = typer.Option(
        None,
        "--workspace",
        "-w",
        help="Path to workspace",
    ),
) -> None:
    """List categories with their spending totals."""
    with open_tracker(workspace) as (ws, tracker):
        try:
            snapshot = tracker.snapshot()
        except PaisaPlanError as e:
            fail(str(e))

    table = Table(title="Categories")
    table.add_column("Id", style="dim")
    table.add_column("Name")
    table.add_column("Total", justify="right")
    table.add_column("Expenses", justify="right")
    for category in snapshot.categories:
        table.add_row(
            category.id,
            f"{category.icon} {category.name}",
            format_currency(calculate_category_total(snapshot.expenses, category), ws.config.currency),
            str(len(expenses_for_category(snapshot.expenses, category))),
        )
    console.print(table)


@category_app.command(name="add")
def category_add(
    name: str = typer.Argument(..., help="Category name, e.g. 'Utilities'"),
    icon: str = typer.Option(
        None,
        "--icon",
        help="Emoji shown next to the name",
    ),
    workspace: Path = typer.Option(
        None,
        "--workspace",
        "-w",
        help="Path to workspace",
    ),
) -> None:
    """Add a category."""
    if not name.strip():
        fail("Category name cannot be empty")

    with open_tracker(workspace) as (_, tracker):
        try:
            category = tracker.add_category(name.strip(), icon)
        except (PaisaPlanError, ValidationError) as e:
            fail(str(e))

    console.print(f"[green]Added:[/green] {category.icon} {category.name} [dim]({category.id})[/dim]")


@category_app.command(name="rename")
def category_rename(
    category: str = typer.Argument(..., help="Category id or current name"),
    new_name: str = typer.Argument(..., help="New display name"),
    workspace: Path = typer.Option(
        None,
        "--workspace",
        "-w",
        help="Path to workspace",
    ),
) -> None:
    """Rename a category."""
    if not new_name.strip():
        fail("Category name cannot be empty")

    with open_tracker(workspace) as (_, tracker):
        try:
            renamed = tracker.rename_category(category, new_name.strip())
        except PaisaPlanError as e:
            fail(str(e))

    console.print(f"[green]Renamed:[/green] {renamed.id} -> {renamed.name}")


@category_app.command(name="delete")
def category_delete(
    category: str = typer.Argument(..., help="Category id or name"),
    workspace: Path = typer.Option(
        None,
        "--workspace",
        "-w",
        help="Path to workspace",
    ),
) -> None:
    """Delete a category.

    Categories that still have expenses cannot be deleted.
    """
    with open_tracker(workspace) as (_, tracker):
        try:
            deleted = tracker.delete_category(category)
        except PaisaPlanError as e:
            fail(str(e))

    console.print(f"[green]Deleted:[/green] {deleted.name}")
