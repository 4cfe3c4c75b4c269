"""House Plants Document Store — schemaless documents on SQLAlchemy."""

import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable

from sqlalchemy import select, update as sql_update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from houseplants.core.errors import NotFoundError, StoreError
from houseplants.models.document import Document

logger = logging.getLogger("houseplants.store")


@dataclass(frozen=True)
class Snapshot:
    """A document as read from the store."""

    id: str
    data: dict[str, Any] = field(default_factory=dict)

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)


class DocumentStore(ABC):
    """Document database contract used by the services.

    Only single-document operations are atomic. A merge ``update`` is
    last-write-wins per field; ``array_union`` and ``array_remove`` are
    atomic on one array field.
    """

    @abstractmethod
    async def create(self, collection: str, data: dict) -> str:
        """Insert a document and return its store-assigned id."""

    @abstractmethod
    async def get(self, collection: str, doc_id: str) -> Snapshot | None:
        """Point lookup; ``None`` when the document does not exist."""

    @abstractmethod
    async def query(self, collection: str, **equals: Any) -> list[Snapshot]:
        """Documents whose top-level fields equal every given value."""

    @abstractmethod
    async def update(self, collection: str, doc_id: str, fields: dict) -> None:
        """Merge ``fields`` into an existing document."""

    @abstractmethod
    async def delete(self, collection: str, doc_id: str) -> None:
        """Delete a document. Deleting a missing document is a no-op."""

    @abstractmethod
    async def array_union(self, collection: str, doc_id: str, key: str, *values: Any) -> None:
        """Atomically add each value not already present to an array field."""

    @abstractmethod
    async def array_remove(self, collection: str, doc_id: str, key: str, *values: Any) -> None:
        """Atomically remove every element equal to one of ``values``."""


def _field_equals(key: str, value: Any):
    column = Document.data[key]
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return column.as_boolean() == value
    if isinstance(value, int):
        return column.as_integer() == value
    if isinstance(value, float):
        return column.as_float() == value
    if value is None:
        raise ValueError(f"Cannot query {key!r} for null")
    return column.as_string() == str(value)


class SqlDocumentStore(DocumentStore):
    """Document store backed by one JSON table.

    Blocking session work runs in the thread pool so a slow query only
    suspends the request that issued it.
    """

    def __init__(self, session_factory):
        self.session_factory = session_factory

    @contextmanager
    def _session(self):
        try:
            with self.session_factory() as session:
                yield session
        except SQLAlchemyError as e:
            logger.error(f"Document store call failed: {e}", exc_info=True)
            raise StoreError() from e

    # ── Async interface ───────────────────────────────────────────────────────

    async def create(self, collection: str, data: dict) -> str:
        return await run_in_threadpool(self._create, collection, data)

    async def get(self, collection: str, doc_id: str) -> Snapshot | None:
        return await run_in_threadpool(self._get, collection, doc_id)

    async def query(self, collection: str, **equals: Any) -> list[Snapshot]:
        return await run_in_threadpool(self._query, collection, equals)

    async def update(self, collection: str, doc_id: str, fields: dict) -> None:
        await run_in_threadpool(self._update, collection, doc_id, fields)

    async def delete(self, collection: str, doc_id: str) -> None:
        await run_in_threadpool(self._delete, collection, doc_id)

    async def array_union(self, collection: str, doc_id: str, key: str, *values: Any) -> None:
        def union(current: list) -> list:
            for value in values:
                if value not in current:
                    current.append(value)
            return current

        await run_in_threadpool(self._modify_array, collection, doc_id, key, union)

    async def array_remove(self, collection: str, doc_id: str, key: str, *values: Any) -> None:
        def difference(current: list) -> list:
            return [item for item in current if item not in values]

        await run_in_threadpool(self._modify_array, collection, doc_id, key, difference)

    # ── Session work ──────────────────────────────────────────────────────────

    def _create(self, collection: str, data: dict) -> str:
        with self._session() as session:
            document = Document(collection=collection, data=dict(data))
            session.add(document)
            session.commit()
            logger.debug(f"Created document {collection}/{document.id}")
            return document.id

    def _load(self, session: Session, collection: str, doc_id: str) -> Document | None:
        document = session.get(Document, doc_id)
        if document is None or document.collection != collection:
            return None
        return document

    def _get(self, collection: str, doc_id: str) -> Snapshot | None:
        with self._session() as session:
            document = self._load(session, collection, doc_id)
            if document is None:
                return None
            return Snapshot(id=document.id, data=dict(document.data))

    def _query(self, collection: str, equals: dict) -> list[Snapshot]:
        stmt = select(Document).where(Document.collection == collection)
        for key, value in equals.items():
            stmt = stmt.where(_field_equals(key, value))
        with self._session() as session:
            return [
                Snapshot(id=document.id, data=dict(document.data))
                for document in session.scalars(stmt)
            ]

    def _lock_row(self, session: Session, collection: str, doc_id: str) -> Document:
        """Take the document's write lock, then load it in the same transaction."""
        # Touch the row first so the write lock is held before the data is read
        touched = session.execute(
            sql_update(Document)
            .where(Document.id == doc_id, Document.collection == collection)
            .values(updated_at=datetime.now(timezone.utc))
            .execution_options(synchronize_session=False)
        ).rowcount
        if not touched:
            session.rollback()
            raise NotFoundError(f"No document to update: {collection}/{doc_id}")
        return self._load(session, collection, doc_id)

    def _update(self, collection: str, doc_id: str, fields: dict) -> None:
        with self._session() as session:
            document = self._lock_row(session, collection, doc_id)
            document.data = {**document.data, **fields}
            session.commit()

    def _delete(self, collection: str, doc_id: str) -> None:
        with self._session() as session:
            document = self._load(session, collection, doc_id)
            if document is not None:
                session.delete(document)
                session.commit()

    def _modify_array(self, collection: str, doc_id: str, key: str, change: Callable[[list], list]) -> None:
        with self._session() as session:
            document = self._lock_row(session, collection, doc_id)
            current = list(document.data.get(key) or [])
            document.data = {**document.data, key: change(current)}
            session.commit()
