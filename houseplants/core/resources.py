"""House Plants Resource Service — owner-scoped Plants and Rooms."""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from houseplants.core.errors import ConflictError, ForbiddenError, ValidationError
from houseplants.core.guard import OWNER_FIELD, Decision, OwnershipGuard
from houseplants.core.store import DocumentStore
from houseplants.core.waterings import WateringLogService

logger = logging.getLogger("houseplants.resources")

PLANT_COLLECTION = "plants"
ROOM_COLLECTION = "rooms"


@dataclass(frozen=True)
class ResourceKind:
    """Describes one owner-scoped collection."""

    collection: str
    label: str
    required: tuple[str, ...]
    optional: tuple[str, ...] = ()
    required_on_update: tuple[str, ...] = ()

    @property
    def fields(self) -> tuple[str, ...]:
        return self.required + self.optional


PLANT = ResourceKind(
    collection=PLANT_COLLECTION,
    label="Plant",
    required=("name", "waterAt", "roomId", "trefleId", "hasDevice"),
)

ROOM = ResourceKind(
    collection=ROOM_COLLECTION,
    label="Room",
    required=("name",),
    optional=("iconId",),
    required_on_update=("name",),
)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class ResourceService:
    """Create / list / update / delete for one resource kind.

    Names are unique per owner, but the check and the insert are separate
    store calls: two concurrent creates with the same name can both succeed.
    """

    def __init__(self, store: DocumentStore, guard: OwnershipGuard, kind: ResourceKind):
        self.store = store
        self.guard = guard
        self.kind = kind

    def _missing(self, fields: dict, names: tuple[str, ...]) -> list[str]:
        return [name for name in names if fields.get(name) is None]

    async def create(self, owner_id: str, fields: dict) -> str:
        missing = self._missing(fields, self.kind.required)
        if missing:
            logger.error(f"Cannot create {self.kind.label.lower()}, missing fields: {missing}")
            raise ValidationError()

        existing = await self.store.query(self.kind.collection, ownerId=owner_id, name=fields["name"])
        if existing:
            logger.warning(f"{self.kind.label} {fields['name']!r} already exists for user {owner_id}")
            raise ConflictError()

        document = {name: fields[name] for name in self.kind.fields if fields.get(name) is not None}
        document[OWNER_FIELD] = owner_id
        document["updatedAt"] = _now()
        resource_id = await self.store.create(self.kind.collection, document)
        logger.info(f"Created {self.kind.label.lower()} {resource_id} for user {owner_id}")
        return resource_id

    async def update(self, owner_id: str, resource_id: str, fields: dict) -> str:
        """Merge the given fields into an owned resource.

        Absent or null fields are left untouched, and ``updatedAt`` only
        moves when something is written.
        """
        missing = self._missing(fields, self.kind.required_on_update)
        if missing:
            logger.error(f"Cannot update {self.kind.label.lower()} {resource_id}, missing fields: {missing}")
            raise ValidationError()

        await self.guard.require(owner_id, resource_id, self.kind.collection, self.kind.label)

        updates = {name: fields[name] for name in self.kind.fields if fields.get(name) is not None}
        if updates:
            updates["updatedAt"] = _now()
            await self.store.update(self.kind.collection, resource_id, updates)
        logger.info(f"Updated {self.kind.label.lower()} {resource_id}")
        return resource_id

    async def delete(self, owner_id: str, resource_id: str) -> None:
        """Delete an owned resource. A resource that is already gone is not an error."""
        decision = await self.guard.authorize(owner_id, resource_id, self.kind.collection)
        if decision is Decision.NOT_FOUND:
            logger.info(f"{self.kind.label} {resource_id} no longer exists")
            return
        if decision is Decision.FORBIDDEN:
            raise ForbiddenError()
        await self.store.delete(self.kind.collection, resource_id)
        logger.info(f"Deleted {self.kind.label.lower()} {resource_id}")

    async def list(self, owner_id: str) -> list[dict]:
        """All resources of the owner as ``{"id", "data"}`` items, in store order."""
        resources = await self.store.query(self.kind.collection, ownerId=owner_id)
        logger.info(f"Fetched {len(resources)} {self.kind.collection} for user {owner_id}")
        return [{"id": resource.id, "data": resource.data} for resource in resources]


class PlantService(ResourceService):
    """Plants also get an empty watering log when they are created."""

    def __init__(self, store: DocumentStore, guard: OwnershipGuard, waterings: WateringLogService):
        super().__init__(store, guard, PLANT)
        self.waterings = waterings

    async def create(self, owner_id: str, fields: dict) -> str:
        plant_id = await super().create(owner_id, fields)
        await self.waterings.create_log(plant_id)
        return plant_id


class RoomService(ResourceService):
    def __init__(self, store: DocumentStore, guard: OwnershipGuard):
        super().__init__(store, guard, ROOM)
