"""Rooms router — owner-scoped CRUD endpoints."""

from fastapi import APIRouter, Depends, Response, status

from houseplants.api.deps import get_principal, get_rooms
from houseplants.api.schemas import Envelope, RoomCreate, RoomUpdate, envelope
from houseplants.core.auth import Principal
from houseplants.core.resources import RoomService

router = APIRouter()


@router.post("", response_model=Envelope, status_code=status.HTTP_201_CREATED)
async def create_room(
    body: RoomCreate,
    principal: Principal = Depends(get_principal),
    rooms: RoomService = Depends(get_rooms),
):
    room_id = await rooms.create(principal.uid, body.to_fields())
    return envelope(status.HTTP_201_CREATED, {"id": room_id})


@router.get("", response_model=Envelope)
async def list_rooms(
    principal: Principal = Depends(get_principal),
    rooms: RoomService = Depends(get_rooms),
):
    return envelope(status.HTTP_200_OK, await rooms.list(principal.uid))


@router.put("/{room_id}", response_model=Envelope)
async def update_room(
    room_id: str,
    body: RoomUpdate,
    principal: Principal = Depends(get_principal),
    rooms: RoomService = Depends(get_rooms),
):
    await rooms.update(principal.uid, room_id, body.to_fields())
    return envelope(status.HTTP_200_OK, {"id": room_id})


@router.delete("/{room_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_room(
    room_id: str,
    principal: Principal = Depends(get_principal),
    rooms: RoomService = Depends(get_rooms),
):
    await rooms.delete(principal.uid, room_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
