"""House Plants FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from houseplants.api.deps import authenticate
from houseplants.api.routers import plants, rooms, users, waterings
from houseplants.api.schemas import envelope
from houseplants.core import setup_logging
from houseplants.core.auth import JWTAuthenticator
from houseplants.core.config import Settings, get_settings
from houseplants.core.errors import HousePlantsError, StoreError, UnauthorizedError, ValidationError
from houseplants.core.guard import OwnershipGuard
from houseplants.core.resources import PlantService, RoomService
from houseplants.core.store import SqlDocumentStore
from houseplants.core.waterings import WateringLogService
from houseplants.models import Base, create_session_factory

logger = logging.getLogger("houseplants.api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler — startup and shutdown."""
    settings: Settings = app.state.settings
    setup_logging(settings.log_level)

    # Document store
    engine, SessionFactory = create_session_factory(
        settings.database_url, lock_timeout_seconds=settings.store_lock_timeout_seconds
    )
    app.state.engine = engine
    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Document store initialized")
    except Exception as e:
        logger.error(f"Document store init failed: {e}")

    # One store adapter shared by every service for the process lifetime
    store = SqlDocumentStore(SessionFactory)
    guard = OwnershipGuard(store)
    app.state.store = store
    app.state.guard = guard
    app.state.authenticator = JWTAuthenticator(settings)
    app.state.waterings = WateringLogService(store)
    app.state.plants = PlantService(store, guard, app.state.waterings)
    app.state.rooms = RoomService(store, guard)

    logger.info(f"House Plants API started on http://{settings.host}:{settings.port}")
    yield

    engine.dispose()
    logger.info("House Plants API shutdown complete")


async def handle_app_error(request: Request, exc: HousePlantsError):
    if isinstance(exc, StoreError):
        logger.error(f"{request.method} {request.url.path} failed: {exc.__cause__!r}")
    return envelope(exc.status_code, message=exc.message)


async def handle_validation_error(request: Request, exc: RequestValidationError):
    # The body is parsed before route dependencies run, so check the caller here too
    try:
        await authenticate(request)
    except UnauthorizedError as e:
        return envelope(e.status_code, message=e.message)
    logger.error(f"Unable to parse request body for {request.method} {request.url.path}: {exc.errors()}")
    return envelope(status.HTTP_400_BAD_REQUEST, message=ValidationError.default_message)


async def handle_unexpected_error(request: Request, exc: Exception):
    logger.error(f"Unhandled error in {request.method} {request.url.path}: {exc}", exc_info=exc)
    return envelope(status.HTTP_500_INTERNAL_SERVER_ERROR, message=StoreError.default_message)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(
        title="House Plants API",
        description="Plants, rooms and watering history for each user",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type"],
    )

    app.add_exception_handler(HousePlantsError, handle_app_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    # API routers
    prefix = settings.api_prefix
    app.include_router(users.router, prefix=f"{prefix}/users", tags=["users"])
    app.include_router(plants.router, prefix=f"{prefix}/plants", tags=["plants"])
    app.include_router(waterings.router, prefix=f"{prefix}/plants", tags=["waterings"])
    app.include_router(rooms.router, prefix=f"{prefix}/rooms", tags=["rooms"])

    # Health check
    @app.get("/health", tags=["system"])
    async def health():
        return {"status": "ok", "service": "houseplants", "version": "1.0.0"}

    return app


app = create_app()
