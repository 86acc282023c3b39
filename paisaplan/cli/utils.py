"""Shared helpers for CLI commands."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import NoReturn

import typer
from rich.console import Console
from rich.logging import RichHandler

from paisaplan.core.exceptions import PaisaPlanError, WorkspaceNotFoundError
from paisaplan.core.workspace import Workspace, load_workspace
from paisaplan.services.tracker import ExpenseTracker

console = Console()

TIP_STYLES = {
    "warning": "yellow",
    "info": "cyan",
    "success": "green",
}


def setup_logging(verbose: bool = False) -> None:
    """Route log records through rich on stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def fail(message: str) -> NoReturn:
    """Print an error and exit with status 1."""
    console.print(f"[red]Error:[/red] {message}")
    raise typer.Exit(1)


@contextmanager
def open_tracker(workspace: Path | None) -> Iterator[tuple[Workspace, ExpenseTracker]]:
    """Load the workspace and build a tracker over its storage.

    The workspace storage is closed when the block exits.
    """
    try:
        ws = load_workspace(workspace)
        tracker = ExpenseTracker(ws.storage, ws.config)
    except WorkspaceNotFoundError:
        fail("No workspace found. Run 'paisa init <name>' or use --workspace")
    except PaisaPlanError as e:
        fail(str(e))

    with ws:
        yield ws, tracker


def parse_amount(value: str) -> Decimal:
    """Parse a positive currency amount from user input."""
    try:
        amount = Decimal(value.strip().replace(",", ""))
    except InvalidOperation:
        fail(f"Invalid amount: {value!r}")
    if not amount.is_finite() or amount <= 0:
        fail(f"Amount must be positive, got {value}")
    return amount

