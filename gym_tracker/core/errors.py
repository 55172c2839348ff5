"""Domain exceptions. Routers translate these into HTTP responses."""

from __future__ import annotations


class GymTrackerError(Exception):
    """Base for all domain errors."""


class CatalogError(GymTrackerError):
    """Catalog file missing or failing validation."""


class UnknownMachineError(CatalogError, LookupError):
    def __init__(self, machine_id: str):
        super().__init__(f"Unknown machine: {machine_id}")
        self.machine_id = machine_id


class IncompleteSelectionError(GymTrackerError):
    """A variant cannot resolve until an attachment or grip is chosen."""

    def __init__(self, machine_id: str, missing: str, options: list[str] | None = None):
        super().__init__(f"Incomplete selection for {machine_id}: choose {missing}")
        self.machine_id = machine_id
        self.missing = missing  # "attachment" or "grip"
        self.options = options or []


class InvalidSelectionError(GymTrackerError):
    """Choice not offered by the machine, or transition not allowed from the current state."""


class StorageError(GymTrackerError):
    """The persistence layer failed. Distinct from 'not found', which is returned as None."""


class ConflictError(GymTrackerError):
    """A write clashes with stored data, e.g. reusing another record's child id."""
