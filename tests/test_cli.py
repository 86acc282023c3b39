"""Tests for the paisa command-line interface."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from paisaplan.cli.main import app
from paisaplan.core.exceptions import PaisaPlanError
from paisaplan.core.workspace import CONFIG_FILENAME, WORKSPACE_ENV

runner = CliRunner()


@pytest.fixture
def workspace(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Initialized JSON workspace, also exported via $PAISA_WORKSPACE."""
    root = tmp_path / "home"
    result = runner.invoke(app, ["init", "home", "--path", str(root)])
    assert result.exit_code == 0, result.output
    monkeypatch.setenv(WORKSPACE_ENV, str(root))
    return root


class TestInit:
    """Tests for 'paisa init'."""

    def test_creates_config_and_data(self, tmp_path: Path) -> None:
        root = tmp_path / "ws"
        result = runner.invoke(app, ["init", "ws", "--path", str(root), "--currency", "usd"])

        assert result.exit_code == 0, result.output
        config = json.loads((root / CONFIG_FILENAME).read_text(encoding="utf-8"))
        assert config["name"] == "ws"
        assert config["currency"] == "USD"
        assert (root / "paisa-data.json").exists()

    def test_sqlite_storage(self, tmp_path: Path) -> None:
        root = tmp_path / "ws"
        result = runner.invoke(app, ["init", "ws", "--path", str(root), "--storage", "sqlite"])
        assert result.exit_code == 0, result.output
        assert (root / "paisa.db").exists()

    def test_refuses_existing(self, workspace: Path) -> None:
        result = runner.invoke(app, ["init", "home", "--path", str(workspace)])
        assert result.exit_code == 1
        assert "already exists" in result.output


class TestCommands:
    """End-to-end command flows against a workspace."""

    def test_no_workspace(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["status", "--workspace", str(tmp_path / "missing")])
        assert result.exit_code == 1
        assert "No workspace found" in result.output

    def test_malformed_config(self, workspace: Path) -> None:
        """A broken paisa.json is reported, not raised."""
        (workspace / CONFIG_FILENAME).write_text("{not json", encoding="utf-8")
        result = runner.invoke(app, ["status"])
        assert result.exit_code == 1
        assert "Error:" in result.output
        assert not isinstance(result.exception, PaisaPlanError)

    def test_corrupt_database(self, tmp_path: Path) -> None:
        root = tmp_path / "ws"
        runner.invoke(app, ["init", "ws", "--path", str(root), "--storage", "sqlite"])
        (root / "paisa.db").write_bytes(b"this is not a database" * 10)

        result = runner.invoke(app, ["status", "-w", str(root)])

        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_status_without_budget(self, workspace: Path) -> None:
        result = runner.invoke(app, ["status"])
        assert result.exit_code == 0
        assert "No budget set" in result.output

    def test_budget_add_status(self, workspace: Path) -> None:
        result = runner.invoke(app, ["budget", "3000", "30"])
        assert result.exit_code == 0, result.output

        result = runner.invoke(app, ["add", "Groceries", "420", "--category", "food"])
        assert result.exit_code == 0, result.output
        assert "Expense Added" in result.output

        result = runner.invoke(app, ["status"])
        assert result.exit_code == 0, result.output
        assert "Remaining Budget" in result.output
        assert "2,580.00" in result.output
        assert "Smart Budget Tips" in result.output

    def test_invalid_budget(self, workspace: Path) -> None:
        result = runner.invoke(app, ["budget", "3000", "0"])
        assert result.exit_code == 1
        assert "duration must be positive" in result.output

    def test_invalid_amount(self, workspace: Path) -> None:
        result = runner.invoke(app, ["add", "Lunch", "abc", "-c", "food"])
        assert result.exit_code == 1
        assert "Invalid amount" in result.output

    def test_unknown_category(self, workspace: Path) -> None:
        result = runner.invoke(app, ["add", "Lunch", "10", "-c", "nope"])
        assert result.exit_code == 1
        assert "Category not found" in result.output

    def test_credit_needs_budget(self, workspace: Path) -> None:
        result = runner.invoke(app, ["credit", "100"])
        assert result.exit_code == 1

    def test_credit(self, workspace: Path) -> None:
        runner.invoke(app, ["budget", "1000", "10"])
        result = runner.invoke(app, ["credit", "250", "--description", "Refund"])
        assert result.exit_code == 0, result.output
        assert "1,250.00" in result.output

        result = runner.invoke(app, ["transactions", "--filter", "credits"])
        assert result.exit_code == 0, result.output
        assert "Refund" in result.output

    def test_report_and_dashboard(self, workspace: Path) -> None:
        runner.invoke(app, ["add", "Taxi", "15", "-c", "transport", "--date", "2024-02-10"])
        runner.invoke(app, ["add", "Lunch", "20", "-c", "food", "--date", "2024-03-05"])

        result = runner.invoke(app, ["report"])
        assert result.exit_code == 0, result.output
        assert "Spending by Category" in result.output
        assert "Feb 2024" in result.output

        result = runner.invoke(app, ["dashboard"])
        assert result.exit_code == 0, result.output
        assert "Current Balance" in result.output

    def test_bad_date(self, workspace: Path) -> None:
        result = runner.invoke(app, ["add", "Taxi", "15", "-c", "transport", "--date", "10/02/2024"])
        assert result.exit_code == 1
        assert "Invalid date" in result.output


class TestCategoryCommands:
    """Tests for 'paisa category'."""

    def test_add_and_list(self, workspace: Path) -> None:
        result = runner.invoke(app, ["category", "add", "Utilities"])
        assert result.exit_code == 0, result.output

        result = runner.invoke(app, ["category", "list"])
        assert result.exit_code == 0, result.output
        assert "Utilities" in result.output

    def test_add_blank_name(self, workspace: Path) -> None:
        result = runner.invoke(app, ["category", "add", "   "])
        assert result.exit_code == 1
        assert "cannot be empty" in result.output

    def test_rename_to_existing(self, workspace: Path) -> None:
        result = runner.invoke(app, ["category", "rename", "transport", "food"])
        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_delete_in_use(self, workspace: Path) -> None:
        runner.invoke(app, ["add", "Bus", "2", "-c", "transport"])
        result = runner.invoke(app, ["category", "delete", "transport"])
        assert result.exit_code == 1
        assert "Cannot delete" in result.output

    def test_rename(self, workspace: Path) -> None:
        result = runner.invoke(app, ["category", "rename", "transport", "Commute"])
        assert result.exit_code == 0, result.output
        assert "Commute" in result.output
