"""Plants router — owner-scoped CRUD endpoints."""

from fastapi import APIRouter, Depends, Response, status

from houseplants.api.deps import get_plants, get_principal
from houseplants.api.schemas import Envelope, PlantCreate, PlantUpdate, envelope
from houseplants.core.auth import Principal
from houseplants.core.resources import PlantService

router = APIRouter()


@router.post("", response_model=Envelope, status_code=status.HTTP_201_CREATED)
async def create_plant(
    body: PlantCreate,
    principal: Principal = Depends(get_principal),
    plants: PlantService = Depends(get_plants),
):
    """Register a new plant for the caller."""
    plant_id = await plants.create(principal.uid, body.to_fields())
    return envelope(status.HTTP_201_CREATED, {"id": plant_id})


@router.get("", response_model=Envelope)
async def list_plants(
    principal: Principal = Depends(get_principal),
    plants: PlantService = Depends(get_plants),
):
    """List the caller's plants."""
    return envelope(status.HTTP_200_OK, await plants.list(principal.uid))


@router.put("/{plant_id}", response_model=Envelope)
async def update_plant(
    plant_id: str,
    body: PlantUpdate,
    principal: Principal = Depends(get_principal),
    plants: PlantService = Depends(get_plants),
):
    """Update the given fields of a plant."""
    await plants.update(principal.uid, plant_id, body.to_fields())
    return envelope(status.HTTP_200_OK, {"id": plant_id})


@router.delete("/{plant_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_plant(
    plant_id: str,
    principal: Principal = Depends(get_principal),
    plants: PlantService = Depends(get_plants),
):
    """Delete a plant. Deleting a missing plant succeeds."""
    await plants.delete(principal.uid, plant_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
