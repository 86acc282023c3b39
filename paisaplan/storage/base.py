"""Repository interface for persisted tracker data."""

from typing import Protocol

from paisaplan.core.models import Snapshot


class Repository(Protocol):
    """Loads and saves a whole Snapshot.

    Callers serialize writes themselves; a repository only guarantees that
    a single save is all-or-nothing where its backend allows it.
    """

    def load(self) -> Snapshot:
        ...

    def save(self, snapshot: Snapshot) -> None:
        ...

    def close(self) -> None:
        ...


class InMemoryRepository:
    """In-memory repository (tests and throwaway sessions)."""

    def __init__(self, snapshot: Snapshot | None = None):
        if snapshot is None:
            snapshot = Snapshot.empty()
        self._snapshot = snapshot.model_copy(deep=True)

    def load(self) -> Snapshot:
        return self._snapshot.model_copy(deep=True)

    def save(self, snapshot: Snapshot) -> None:
        self._snapshot = snapshot.model_copy(deep=True)

    def close(self) -> None:
        pass
