"""Waterings router — watering history of a plant.

Every route first checks that the caller owns the plant.
"""

from fastapi import APIRouter, Depends, Response, status

from houseplants.api.deps import get_waterings, owned_plant, plant_decision
from houseplants.api.schemas import Envelope, WateringCreate, WateringUpdate, envelope
from houseplants.core.errors import ForbiddenError
from houseplants.core.guard import Decision
from houseplants.core.waterings import WateringLogService

router = APIRouter()


@router.post("/{plant_id}/waterings", response_model=Envelope, status_code=status.HTTP_201_CREATED)
async def add_watering(
    body: WateringCreate,
    plant_id: str = Depends(owned_plant),
    waterings: WateringLogService = Depends(get_waterings),
):
    """Record a watering for a plant."""
    watering_id = await waterings.append(plant_id, body.watered_at, body.health)
    return envelope(status.HTTP_201_CREATED, {"id": watering_id})


@router.get("/{plant_id}/waterings", response_model=Envelope)
async def list_waterings(
    plant_id: str = Depends(owned_plant),
    waterings: WateringLogService = Depends(get_waterings),
):
    """Get the watering history of a plant."""
    return envelope(status.HTTP_200_OK, await waterings.list_records(plant_id))


@router.put("/{plant_id}/waterings/{watering_id}", response_model=Envelope)
async def update_watering(
    watering_id: str,
    body: WateringUpdate,
    plant_id: str = Depends(owned_plant),
    waterings: WateringLogService = Depends(get_waterings),
):
    """Edit the time or health rating of one watering."""
    await waterings.update(plant_id, watering_id, body.to_fields())
    return envelope(status.HTTP_200_OK, {"id": watering_id})


@router.delete("/{plant_id}/waterings/{watering_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_watering(
    watering_id: str,
    plant_id: str,
    decision: Decision = Depends(plant_decision),
    waterings: WateringLogService = Depends(get_waterings),
):
    """Delete one watering. Missing plants and waterings still succeed."""
    if decision is Decision.FORBIDDEN:
        raise ForbiddenError()
    if decision is Decision.ALLOW:
        await waterings.remove(plant_id, watering_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
