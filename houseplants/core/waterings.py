"""House Plants Watering Log Service — per-plant watering history.

Each plant has one document in the ``waterings`` collection holding its
records as an embedded array::

    {"plantId": "...", "records": [{"id": ..., "wateredAt": ..., "health": ...}]}

Appends and removals use the store's atomic array operations. Editing a
single record is not expressible that way, so ``update`` copies the
array, edits the copy and writes the whole array back. Two concurrent
updates on one log race and the last write wins.

Logs are found with check-then-insert. Concurrent first accesses to the
same plant can therefore create two logs; later calls use whichever the
store returns first.
"""

import logging
import uuid
from typing import Any

from houseplants.core.errors import NotFoundError
from houseplants.core.store import DocumentStore, Snapshot

logger = logging.getLogger("houseplants.waterings")

WATERING_COLLECTION = "waterings"
RECORDS_FIELD = "records"
EDITABLE_FIELDS = ("wateredAt", "health")


class WateringLogService:
    def __init__(self, store: DocumentStore):
        self.store = store

    async def create_log(self, plant_id: str) -> Snapshot:
        data = {"plantId": plant_id, RECORDS_FIELD: []}
        log_id = await self.store.create(WATERING_COLLECTION, data)
        return Snapshot(id=log_id, data=data)

    async def get_or_create_log(self, plant_id: str) -> Snapshot:
        """Return the plant's log, creating an empty one if none exists."""
        logs = await self.store.query(WATERING_COLLECTION, plantId=plant_id)
        if not logs:
            logger.info(f"No watering history set up for plant {plant_id}, creating one")
            return await self.create_log(plant_id)
        if len(logs) > 1:
            logger.warning(f"Plant {plant_id} has {len(logs)} watering logs, using {logs[0].id}")
        return logs[0]

    async def list_records(self, plant_id: str) -> list[dict]:
        log = await self.get_or_create_log(plant_id)
        records = log.get(RECORDS_FIELD) or []
        logger.info(f"Fetched {len(records)} waterings for plant {plant_id}")
        return records

    async def append(self, plant_id: str, watered_at: Any, health: Any) -> str:
        """Add a watering record and return its generated id."""
        record = {"id": str(uuid.uuid4()), "wateredAt": watered_at, "health": health}
        log = await self.get_or_create_log(plant_id)
        await self.store.array_union(WATERING_COLLECTION, log.id, RECORDS_FIELD, record)
        logger.info(f"Added watering {record['id']} to plant {plant_id}")
        return record["id"]

    async def remove(self, plant_id: str, record_id: str) -> None:
        """Remove a record by id. Unknown ids are ignored."""
        log = await self.get_or_create_log(plant_id)
        for record in log.get(RECORDS_FIELD) or []:
            if record.get("id") == record_id:
                await self.store.array_remove(WATERING_COLLECTION, log.id, RECORDS_FIELD, record)
                logger.info(f"Deleted watering {record_id} from plant {plant_id}")
                return
        logger.info(f"Watering {record_id} not found for plant {plant_id}, nothing to delete")

    async def update(self, plant_id: str, record_id: str, fields: dict) -> str:
        """Edit ``wateredAt``/``health`` of one record in place."""
        log = await self.get_or_create_log(plant_id)
        records = [dict(record) for record in log.get(RECORDS_FIELD) or []]

        for record in records:
            if record.get("id") == record_id:
                for key in EDITABLE_FIELDS:
                    if fields.get(key) is not None:
                        record[key] = fields[key]
                break
        else:
            raise NotFoundError(f"Watering {record_id} does not exist for plant {plant_id}")

        await self.store.update(WATERING_COLLECTION, log.id, {RECORDS_FIELD: records})
        logger.info(f"Updated watering {record_id} for plant {plant_id}")
        return record_id
