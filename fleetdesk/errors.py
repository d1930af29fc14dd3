"""Exceptions raised by the fleet repositories."""

from typing import Dict, Optional


class FleetError(Exception):
    """Base class for all fleet errors."""


class NotFoundError(FleetError):
    """An operation targeted an id that is not in the collection."""


class ConflictError(FleetError):
    """A delete was blocked by dependent records."""


class ValidationError(FleetError):
    """Caller-supplied fields failed validation. Nothing was written."""

    def __init__(self, errors: Dict[str, str], message: Optional[str] = None):
        self.errors = dict(errors)
        super().__init__(message or "Please fill in all required fields.")

    def __str__(self) -> str:
        details = "; ".join(f"{k}: {v}" for k, v in sorted(self.errors.items()))
        return f"{self.args[0]} ({details})" if details else self.args[0]


class StorageError(FleetError):
    """The underlying store rejected a read or write."""
