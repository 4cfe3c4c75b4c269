from __future__ import annotations

import pytest

from houseplants.core.errors import ForbiddenError, NotFoundError
from houseplants.core.guard import Decision, OwnershipGuard


async def test_owner_is_allowed(store, guard):
    plant_id = await store.create("plants", {"ownerId": "u1", "name": "Fern"})

    assert await guard.authorize("u1", plant_id, "plants") is Decision.ALLOW


async def test_other_user_is_forbidden(store, guard):
    plant_id = await store.create("plants", {"ownerId": "u1", "name": "Fern"})

    assert await guard.authorize("u2", plant_id, "plants") is Decision.FORBIDDEN


async def test_missing_resource_is_not_found(guard):
    assert await guard.authorize("u1", "missing", "plants") is Decision.NOT_FOUND


async def test_resource_in_other_collection_is_not_found(store, guard):
    room_id = await store.create("rooms", {"ownerId": "u1", "name": "Kitchen"})

    assert await guard.authorize("u1", room_id, "plants") is Decision.NOT_FOUND


async def test_require_raises_for_each_denial(store, guard):
    plant_id = await store.create("plants", {"ownerId": "u1", "name": "Fern"})

    await guard.require("u1", plant_id, "plants")
    with pytest.raises(ForbiddenError):
        await guard.require("u2", plant_id, "plants")
    with pytest.raises(NotFoundError) as excinfo:
        await guard.require("u1", "missing", "plants", "Plant")
    assert excinfo.value.message == "Plant with id missing does not exist"


def test_raise_for_maps_decisions_to_errors():
    OwnershipGuard.raise_for(Decision.ALLOW, "p1")
    with pytest.raises(ForbiddenError):
        OwnershipGuard.raise_for(Decision.FORBIDDEN, "p1", "Plant")
    with pytest.raises(NotFoundError) as excinfo:
        OwnershipGuard.raise_for(Decision.NOT_FOUND, "p1", "Room")
    assert excinfo.value.message == "Room with id p1 does not exist"
