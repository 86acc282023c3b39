"""Exceptions raised by paisa-plan."""


class PaisaPlanError(Exception):
    """Base class for all paisa-plan errors."""


class WorkspaceNotFoundError(PaisaPlanError):
    """No paisa.json found at the given or current location."""


class InvalidBudgetConfiguration(PaisaPlanError, ValueError):
    """Budget amount or duration is not a positive number.

    Raised instead of producing NaN/Infinity figures.
    """


class NoBudgetError(PaisaPlanError):
    """Operation requires an active budget but none is configured."""


class CategoryNotFoundError(PaisaPlanError):
    """Referenced category does not exist."""


class CategoryInUseError(PaisaPlanError):
    """Category still has expenses and cannot be deleted."""


class StorageError(PaisaPlanError):
    """Stored data could not be read or written."""


class CategoryExistsError(PaisaPlanError):
    """A category with the same name already exists."""
