"""Machine catalog: load, validate and look up static reference data."""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path

from pydantic import ValidationError

from gym_tracker.core.config import get_settings
from gym_tracker.core.enums import MuscleGroup, RoomLocation
from gym_tracker.core.errors import CatalogError, UnknownMachineError
from gym_tracker.schemas.catalog import CatalogData, Machine
from gym_tracker.schemas.plan import Plan

logger = logging.getLogger(__name__)


class Catalog:
    """Read-only view over validated machines, in file order."""

    def __init__(self, machines: list[Machine]):
        self._machines = list(machines)
        self._by_id = {m.id: m for m in self._machines}

    @classmethod
    def from_dict(cls, data: dict) -> "Catalog":
        try:
            parsed = CatalogData.model_validate(data)
        except ValidationError as e:
            raise CatalogError(f"Invalid machine catalog: {e}") from e
        return cls(parsed.machines)

    @property
    def machines(self) -> list[Machine]:
        return list(self._machines)

    def __len__(self) -> int:
        return len(self._machines)

    def get_machine(self, machine_id: str) -> Machine | None:
        return self._by_id.get(machine_id)

    def require_machine(self, machine_id: str) -> Machine:
        machine = self._by_id.get(machine_id)
        if machine is None:
            raise UnknownMachineError(machine_id)
        return machine

    def locations(self) -> list[RoomLocation]:
        """Unique locations in first-seen order."""
        return list(dict.fromkeys(m.location for m in self._machines))

    def muscle_groups(self) -> list[MuscleGroup]:
        return list(dict.fromkeys(muscle for m in self._machines for muscle in m.muscles))

    def machines_by_location(self, location: RoomLocation | str) -> list[Machine]:
        location = RoomLocation(location)
        return [m for m in self._machines if m.location == location]

    def machines_by_muscle(self, muscle: MuscleGroup | str) -> list[Machine]:
        muscle = MuscleGroup(muscle)
        return [m for m in self._machines if muscle in m.muscles]

    def search(self, query: str) -> list[Machine]:
        """Case-insensitive match on machine name, attachment names or muscle tags."""
        q = query.strip().lower()
        if not q:
            return self.machines
        return [
            m
            for m in self._machines
            if q in m.name.lower()
            or any(q in a.name.lower() for a in m.attachments)
            or any(q in muscle.value for muscle in m.muscles)
        ]

    def filter(
        self,
        location: RoomLocation | str | None = None,
        muscle: MuscleGroup | str | None = None,
        query: str | None = None,
    ) -> list[Machine]:
        """Machine picker listing: every given filter must match."""
        machines = self.search(query) if query else self.machines
        if location is not None:
            machines = [m for m in machines if m.location == RoomLocation(location)]
        if muscle is not None:
            machines = [m for m in machines if MuscleGroup(muscle) in m.muscles]
        return machines


def load_catalog(path: Path | str) -> Catalog:
    """Read and validate a `{"machines": [...]}` JSON file."""
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise CatalogError(f"Cannot read machine catalog {path}: {e}") from e
    catalog = Catalog.from_dict(data)
    logger.info("Loaded %d machines from %s", len(catalog), path)
    return catalog


@lru_cache
def get_catalog() -> Catalog:
    """Cached catalog from settings.catalog_path (FastAPI dependency)."""
    return load_catalog(get_settings().catalog_path)


def load_default_plans(path: Path | str) -> list[Plan]:
    """Starter plans seeded into an empty store."""
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        return [Plan.model_validate(p) for p in data["plans"]]
    except (OSError, KeyError, json.JSONDecodeError, ValidationError) as e:
        raise CatalogError(f"Cannot read default plans {path}: {e}") from e
