"""Relational storage backed by SQLite.

Tables: categories, expenses, budgets, credits. Amounts are stored as TEXT
so Decimal values survive the round trip unchanged.
"""

import logging
import sqlite3
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path

from pydantic import ValidationError

from paisaplan.core.exceptions import StorageError
from paisaplan.core.models import DEFAULT_CATEGORIES, Budget, Category, Credit, Expense, Snapshot

logger = logging.getLogger(__name__)


def _parse_timestamp(value: str) -> datetime:
    timestamp = datetime.fromisoformat(value)
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)
    return timestamp


class SQLiteRepository:
    """Snapshot repository backed by an SQLite database."""

    def __init__(self, db_path: Path | str = "paisa.db"):
        self.db_path = str(db_path)
        try:
            self._conn = sqlite3.connect(self.db_path)
        except sqlite3.Error as e:
            raise StorageError(f"Cannot open {self.db_path}: {e}") from e
        self._conn.row_factory = sqlite3.Row
        try:
            self._conn.execute("PRAGMA foreign_keys=ON;")
            self._init_schema()
        except sqlite3.Error as e:
            self._conn.close()
            raise StorageError(f"Cannot open {self.db_path}: {e}") from e

    def _init_schema(self) -> None:
        with self._conn:
            self._conn.executescript(
                """
                CREATE TABLE IF NOT EXISTS meta (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                );
                CREATE TABLE IF NOT EXISTS categories (
                    id TEXT PRIMARY KEY,
                    name TEXT NOT NULL,
                    color TEXT NOT NULL,
                    icon TEXT NOT NULL,
                    position INTEGER NOT NULL
                );
                CREATE TABLE IF NOT EXISTS expenses (
                    id TEXT PRIMARY KEY,
                    title TEXT NOT NULL,
                    amount TEXT NOT NULL,
                    category TEXT NOT NULL,
                    date TEXT NOT NULL,
                    description TEXT,
                    position INTEGER NOT NULL
                );
                CREATE TABLE IF NOT EXISTS budgets (
                    id INTEGER PRIMARY KEY CHECK (id = 1),
                    total_amount TEXT NOT NULL,
                    duration INTEGER NOT NULL,
                    start_date TEXT NOT NULL,
                    credits TEXT NOT NULL
                );
                CREATE TABLE IF NOT EXISTS credits (
                    id TEXT PRIMARY KEY,
                    amount TEXT NOT NULL,
                    date TEXT NOT NULL,
                    description TEXT,
                    position INTEGER NOT NULL
                );
                CREATE INDEX IF NOT EXISTS idx_expenses_date ON expenses(date);
                """
            )
            seeded = self._conn.execute("SELECT value FROM meta WHERE key = 'seeded'").fetchone()
            if seeded is None:
                self._write_categories(list(DEFAULT_CATEGORIES))
                self._conn.execute("INSERT INTO meta (key, value) VALUES ('seeded', '1')")

    def close(self) -> None:
        self._conn.close()

    def load(self) -> Snapshot:
        """Read all tables into a Snapshot.

        Raises:
            StorageError: If a row cannot be read or fails validation.
        """
        try:
            categories = [
                Category(id=row["id"], name=row["name"], color=row["color"], icon=row["icon"])
                for row in self._conn.execute("SELECT * FROM categories ORDER BY position")
            ]
            expenses = [
                Expense(
                    id=row["id"],
                    title=row["title"],
                    amount=Decimal(row["amount"]),
                    category=row["category"],
                    date=_parse_timestamp(row["date"]),
                    description=row["description"],
                )
                for row in self._conn.execute("SELECT * FROM expenses ORDER BY position")
            ]
            credits = [
                Credit(
                    id=row["id"],
                    amount=Decimal(row["amount"]),
                    date=_parse_timestamp(row["date"]),
                    description=row["description"],
                )
                for row in self._conn.execute("SELECT * FROM credits ORDER BY position")
            ]
            row = self._conn.execute("SELECT * FROM budgets WHERE id = 1").fetchone()
            budget = None
            if row:
                budget = Budget(
                    total_amount=Decimal(row["total_amount"]),
                    duration=row["duration"],
                    start_date=_parse_timestamp(row["start_date"]),
                    credits=Decimal(row["credits"]),
                )
        except (sqlite3.Error, ValidationError, ArithmeticError, ValueError) as e:
            raise StorageError(f"Cannot load data from {self.db_path}: {e}") from e

        return Snapshot(expenses=expenses, categories=categories, budget=budget, credits=credits)

    def save(self, snapshot: Snapshot) -> None:
        """Replace all table contents with the snapshot in one transaction."""
        try:
            with self._conn:
                self._conn.execute("DELETE FROM expenses")
                self._conn.execute("DELETE FROM credits")
                self._conn.execute("DELETE FROM budgets")
                self._write_categories(snapshot.categories)
                self._conn.executemany(
                    """
                    INSERT INTO expenses (id, title, amount, category, date, description, position)
                    VALUES (?, ?, ?, ?, ?, ?, ?)
                    """,
                    [
                        (
                            str(e.id),
                            e.title,
                            str(e.amount),
                            e.category,
                            e.date.isoformat(),
                            e.description,
                            i,
                        )
                        for i, e in enumerate(snapshot.expenses)
                    ],
                )
                self._conn.executemany(
                    """
                    INSERT INTO credits (id, amount, date, description, position)
                    VALUES (?, ?, ?, ?, ?)
                    """,
                    [
                        (str(c.id), str(c.amount), c.date.isoformat(), c.description, i)
                        for i, c in enumerate(snapshot.credits)
                    ],
                )
                if snapshot.budget is not None:
                    b = snapshot.budget
                    self._conn.execute(
                        """
                        INSERT INTO budgets (id, total_amount, duration, start_date, credits)
                        VALUES (1, ?, ?, ?, ?)
                        """,
                        (str(b.total_amount), b.duration, b.start_date.isoformat(), str(b.credits)),
                    )
        except sqlite3.Error as e:
            raise StorageError(f"Cannot save data to {self.db_path}: {e}") from e
        logger.debug("Saved snapshot to %s", self.db_path)

    def _write_categories(self, categories: list[Category]) -> None:
        self._conn.execute("DELETE FROM categories")
        self._conn.executemany(
            "INSERT INTO categories (id, name, color, icon, position) VALUES (?, ?, ?, ?, ?)",
            [(c.id, c.name, c.color, c.icon, i) for i, c in enumerate(categories)],
        )
