"""Shared fixtures for the House Plants test suite."""
from __future__ import annotations

import asyncio
from typing import Callable, Dict

import pytest
from fastapi.testclient import TestClient
from jose import jwt

from houseplants.api.main import create_app
from houseplants.core.config import Settings
from houseplants.core.guard import OwnershipGuard
from houseplants.core.resources import PlantService, RoomService
from houseplants.core.store import SqlDocumentStore
from houseplants.core.waterings import WateringLogService
from houseplants.models import Base, create_session_factory

JWT_SECRET = "test-only-secret-test-only-secret-0123"

FERN = {
    "name": "Fern",
    "waterAt": "09:00",
    "roomId": "r1",
    "trefleId": 42,
    "hasDevice": False,
}


class GatedStore(SqlDocumentStore):
    """Holds every query until ``parties`` queries have returned.

    Lets a test line up concurrent check-then-act sequences so that all of
    them finish their check before any of them acts.
    """

    def __init__(self, session_factory, parties: int):
        super().__init__(session_factory)
        self.barrier = asyncio.Barrier(parties)

    async def query(self, collection, **equals):
        result = await super().query(collection, **equals)
        await self.barrier.wait()
        return result


def make_token(uid: str, **claims) -> str:
    return jwt.encode({"sub": uid, **claims}, JWT_SECRET, algorithm="HS256")


@pytest.fixture()
def settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        database_url=f"sqlite:///{tmp_path / 'test.db'}",
        jwt_secret_key=JWT_SECRET,
        log_level="DEBUG",
    )


@pytest.fixture()
def session_factory(settings):
    engine, SessionFactory = create_session_factory(settings.database_url)
    Base.metadata.create_all(bind=engine)
    yield SessionFactory
    engine.dispose()


@pytest.fixture()
def store(session_factory) -> SqlDocumentStore:
    return SqlDocumentStore(session_factory)


@pytest.fixture()
def guard(store) -> OwnershipGuard:
    return OwnershipGuard(store)


@pytest.fixture()
def waterings(store) -> WateringLogService:
    return WateringLogService(store)


@pytest.fixture()
def plants(store, guard, waterings) -> PlantService:
    return PlantService(store, guard, waterings)


@pytest.fixture()
def rooms(store, guard) -> RoomService:
    return RoomService(store, guard)


@pytest.fixture()
def client(settings):
    with TestClient(create_app(settings)) as client:
        yield client


@pytest.fixture()
def auth_headers() -> Callable[..., Dict[str, str]]:
    def _headers(uid: str = "user-1", **claims) -> Dict[str, str]:
        return {"Authorization": f"Bearer {make_token(uid, **claims)}"}

    return _headers
