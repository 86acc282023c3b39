"""paisa command-line entry point."""

from pathlib import Path

import typer

from paisaplan import __version__
from paisaplan.cli.category_cmd import category_app
from paisaplan.cli.expense import add_command, budget_command, credit_command, transactions_command
from paisaplan.cli.report import report_command
from paisaplan.cli.status import dashboard_command, status_command
from paisaplan.cli.utils import console, fail, setup_logging
from paisaplan.core.exceptions import PaisaPlanError
from paisaplan.core.models import StorageBackend
from paisaplan.core.workspace import init_workspace

app = typer.Typer(
    name="paisa",
    help="Track expenses against a budget from the terminal.",
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"paisa-plan {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    version: bool = typer.Option(
        None,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    setup_logging(verbose)


@app.command(name="init")
def init_command(
    name: str = typer.Argument(..., help="Workspace name"),
    path: Path = typer.Option(
        None,
        "--path",
        "-p",
        help="Directory to create the workspace in (default: ./<name>)",
    ),
    currency: str = typer.Option("INR", "--currency", help="ISO currency code"),
    storage: StorageBackend = typer.Option(
        StorageBackend.JSON,
        "--storage",
        help="Where to keep data",
    ),
) -> None:
    """Create a new workspace with the default categories."""
    root = path if path is not None else Path.cwd() / name
    try:
        ws = init_workspace(root, name, currency.upper(), storage)
    except (PaisaPlanError, ValueError) as e:
        fail(str(e))

    console.print(f"[green]Created workspace[/green] '{ws.name}' at {ws.root}")
    console.print("[dim]Next: paisa budget <amount> <days>[/dim]")


app.command(name="add")(add_command)
app.command(name="credit")(credit_command)
app.command(name="budget")(budget_command)
app.command(name="status")(status_command)
app.command(name="dashboard")(dashboard_command)
app.command(name="report")(report_command)
app.command(name="transactions")(transactions_command)
app.add_typer(category_app, name="category")


if __name__ == "__main__":
    app()
