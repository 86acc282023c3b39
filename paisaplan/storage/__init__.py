"""Storage backends for tracker data.

Every backend implements the Repository protocol: load() -> Snapshot and
save(Snapshot).
"""

from pathlib import Path

from paisaplan.core.models import StorageBackend, WorkspaceConfig
from paisaplan.storage.base import InMemoryRepository, Repository
from paisaplan.storage.json_store import JsonFileRepository
from paisaplan.storage.sqlite_store import SQLiteRepository


def create_repository(config: WorkspaceConfig, root: Path) -> Repository:
    """Build the repository configured for a workspace rooted at `root`."""
    path = root / config.resolved_data_file
    if config.storage == StorageBackend.SQLITE:
        return SQLiteRepository(path)
    return JsonFileRepository(path)


__all__ = [
    "InMemoryRepository",
    "JsonFileRepository",
    "Repository",
    "SQLiteRepository",
    "create_repository",
]
