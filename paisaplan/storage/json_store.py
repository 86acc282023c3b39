"""Local key-value storage in a single JSON document.

The document has one top-level key per collection, mirroring a browser
style key-value store:

    {"expenses": [...], "categories": [...], "budget": {...} | null, "credits": [...]}
"""

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from paisaplan.core.exceptions import StorageError
from paisaplan.core.models import Snapshot

logger = logging.getLogger(__name__)

EXPENSES_KEY = "expenses"
CATEGORIES_KEY = "categories"
BUDGET_KEY = "budget"
CREDITS_KEY = "credits"


class JsonFileRepository:
    """Snapshot repository backed by a JSON file on disk."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> Snapshot:
        """Read the snapshot.

        A missing file yields an empty snapshot with the default categories.

        Raises:
            StorageError: If the file is not valid JSON or fails validation.
        """
        if not self.path.exists():
            logger.debug("No data file at %s, starting empty", self.path)
            return Snapshot.empty()

        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Cannot read {self.path}: {e}") from e

        if not isinstance(raw, dict):
            raise StorageError(f"{self.path} must contain a JSON object")

        # Missing keys fall back to their defaults; unknown keys are ignored.
        document = {
            EXPENSES_KEY: raw.get(EXPENSES_KEY) or [],
            CATEGORIES_KEY: raw.get(CATEGORIES_KEY) or [],
            BUDGET_KEY: raw.get(BUDGET_KEY),
            CREDITS_KEY: raw.get(CREDITS_KEY) or [],
        }
        try:
            return Snapshot.model_validate(document)
        except ValidationError as e:
            raise StorageError(f"Invalid data in {self.path}: {e}") from e

    def save(self, snapshot: Snapshot) -> None:
        """Write the snapshot, replacing the file atomically."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        payload = snapshot.model_dump_json(indent=2)
        try:
            tmp_path.write_text(payload, encoding="utf-8")
            tmp_path.replace(self.path)
        except OSError as e:
            raise StorageError(f"Cannot write {self.path}: {e}") from e
        logger.debug(
            "Saved %d expenses, %d categories to %s",
            len(snapshot.expenses),
            len(snapshot.categories),
            self.path,
        )

    def close(self) -> None:
        """Nothing to release; the file is only open during load and save."""
