"""Workspace discovery and configuration loading.

A workspace is a directory containing paisa.json plus the data file of its
storage backend.
"""

import json
import logging
import os
from pathlib import Path

from pydantic import ValidationError

from paisaplan.core.exceptions import PaisaPlanError, WorkspaceNotFoundError
from paisaplan.core.models import StorageBackend, WorkspaceConfig
from paisaplan.storage import Repository, create_repository

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "paisa.json"
WORKSPACE_ENV = "PAISA_WORKSPACE"


class Workspace:
    """A loaded workspace: its root directory, config and repository."""

    def __init__(self, root: Path, config: WorkspaceConfig):
        self.root = root
        self.config = config
        self._repository: Repository | None = None

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def storage(self) -> Repository:
        if self._repository is None:
            self._repository = create_repository(self.config, self.root)
        return self._repository

    def close(self) -> None:
        """Release the storage backend, if it was opened."""
        if self._repository is not None:
            self._repository.close()
            self._repository = None

    def __enter__(self) -> "Workspace":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def resolve_workspace_path(path: Path | None = None) -> Path:
    """Pick the workspace directory: explicit path, then $PAISA_WORKSPACE, then cwd."""
    if path is not None:
        return Path(path)
    env_path = os.getenv(WORKSPACE_ENV)
    if env_path:
        return Path(env_path)
    return Path.cwd()


def load_config(root: Path) -> WorkspaceConfig:
    """Read and validate paisa.json from a workspace directory.

    Raises:
        WorkspaceNotFoundError: If the config file does not exist.
        PaisaPlanError: If the config file is malformed.
    """
    config_path = root / CONFIG_FILENAME
    if not config_path.is_file():
        raise WorkspaceNotFoundError(f"No {CONFIG_FILENAME} in {root}")

    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
        return WorkspaceConfig.model_validate(raw)
    except json.JSONDecodeError as e:
        raise PaisaPlanError(f"{config_path} is not valid JSON: {e}") from e
    except ValidationError as e:
        raise PaisaPlanError(f"Invalid workspace config {config_path}: {e}") from e


def load_workspace(path: Path | None = None) -> Workspace:
    """Load the workspace at path (or the default location)."""
    root = resolve_workspace_path(path)
    config = load_config(root)
    logger.debug("Loaded workspace %r from %s", config.name, root)
    return Workspace(root, config)


def init_workspace(
    path: Path,
    name: str,
    currency: str = "INR",
    storage: StorageBackend = StorageBackend.JSON,
) -> Workspace:
    """Create a new workspace directory with a fresh paisa.json.

    Raises:
        PaisaPlanError: If a workspace already exists at path.
    """
    root = Path(path)
    config_path = root / CONFIG_FILENAME
    if config_path.exists():
        raise PaisaPlanError(f"Workspace already exists at {root}")

    config = WorkspaceConfig(name=name, currency=currency, storage=storage)
    root.mkdir(parents=True, exist_ok=True)
    config_path.write_text(config.model_dump_json(indent=2, exclude_none=True), encoding="utf-8")

    workspace = Workspace(root, config)
    # Persist the seeded default categories right away.
    with workspace:
        workspace.storage.save(workspace.storage.load())
    logger.info("Created workspace %r at %s", name, root)
    return workspace
