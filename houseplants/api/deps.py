"""House Plants API — dependency injection."""

import logging

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from houseplants.core.auth import Principal
from houseplants.core.errors import UnauthorizedError
from houseplants.core.guard import Decision, OwnershipGuard
from houseplants.core.resources import PLANT_COLLECTION, PlantService, RoomService
from houseplants.core.waterings import WateringLogService

logger = logging.getLogger("houseplants.api")

bearer = HTTPBearer(auto_error=False)


async def _verify(request: Request, credentials: HTTPAuthorizationCredentials | None) -> Principal:
    if credentials is None:
        logger.error("No bearer token was passed in the Authorization header")
        raise UnauthorizedError()
    return await request.app.state.authenticator.verify(credentials.credentials)


async def authenticate(request: Request) -> Principal:
    """Verify the caller straight from the request headers."""
    return await _verify(request, await bearer(request))


async def get_principal(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer),
) -> Principal:
    """Verify the bearer token and return the calling user."""
    return await _verify(request, credentials)


def get_guard(request: Request) -> OwnershipGuard:
    return request.app.state.guard


def get_plants(request: Request) -> PlantService:
    return request.app.state.plants


def get_rooms(request: Request) -> RoomService:
    return request.app.state.rooms


def get_waterings(request: Request) -> WateringLogService:
    return request.app.state.waterings


async def plant_decision(
    plant_id: str,
    principal: Principal = Depends(get_principal),
    guard: OwnershipGuard = Depends(get_guard),
) -> Decision:
    """Ownership decision for the path-scoped plant."""
    return await guard.authorize(principal.uid, plant_id, PLANT_COLLECTION)


async def owned_plant(plant_id: str, decision: Decision = Depends(plant_decision)) -> str:
    """Path-scoped plant that the caller owns."""
    OwnershipGuard.raise_for(decision, plant_id, "Plant")
    return plant_id
