"""Machine catalog endpoints - listing, filters and variant resolution."""

from __future__ import annotations

from typing import Union

from fastapi import APIRouter, Depends, HTTPException

from gym_tracker.core.enums import GripType, MuscleGroup, RoomLocation
from gym_tracker.schemas.catalog import Machine, MachineDetail
from gym_tracker.services.catalog import Catalog, get_catalog
from gym_tracker.services.plan_editor import NeedsAttachment, NeedsGrip, Resolved, count_variants, resolve_variant

router = APIRouter()


@router.get("", response_model=list[Machine])
async def list_machines(
    location: RoomLocation | None = None,
    muscle: MuscleGroup | None = None,
    q: str | None = None,
    catalog: Catalog = Depends(get_catalog),
):
    """Machine picker: filter by room, muscle group and free-text search."""
    return catalog.filter(location=location, muscle=muscle, query=q)


@router.get("/locations", response_model=list[RoomLocation])
async def list_locations(catalog: Catalog = Depends(get_catalog)):
    return catalog.locations()


@router.get("/muscle-groups", response_model=list[MuscleGroup])
async def list_muscle_groups(catalog: Catalog = Depends(get_catalog)):
    return catalog.muscle_groups()


@router.get("/{machine_id}", response_model=MachineDetail)
async def get_machine(machine_id: str, catalog: Catalog = Depends(get_catalog)):
    machine = catalog.get_machine(machine_id)
    if not machine:
        raise HTTPException(status_code=404, detail="Machine not found")
    return MachineDetail(**machine.model_dump(), variant_count=count_variants(machine))


@router.get("/{machine_id}/variants", response_model=Union[Resolved, NeedsAttachment, NeedsGrip])
async def resolve_machine_variant(
    machine_id: str,
    attachment_id: str | None = None,
    grip: GripType | None = None,
    catalog: Catalog = Depends(get_catalog),
):
    """
    What the machine still needs before it can go into a plan:
    `resolved` (with label), `needs_attachment` or `needs_grip` (with options).
    """
    return resolve_variant(catalog.require_machine(machine_id), attachment_id, grip)
