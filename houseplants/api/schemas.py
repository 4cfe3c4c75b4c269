"""House Plants API — Pydantic request schemas and the response envelope."""

from typing import Any

from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Request bodies use camelCase keys, matching the stored documents."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_fields(self) -> dict[str, Any]:
        """Fields the caller actually sent, keyed as stored."""
        return self.model_dump(by_alias=True, exclude_none=True)


# ── Plant schemas ─────────────────────────────────────────────────────────────

class PlantCreate(CamelModel):
    name: str = Field(..., min_length=1, description="User-given plant name, unique per user")
    water_at: str = Field(..., description="Time of day to water the plant, e.g. '09:00'")
    room_id: str = Field(..., description="Room the plant belongs to")
    trefle_id: int = Field(..., description="Species id in the Trefle API")
    has_device: bool = Field(..., description="Whether an IoT device is connected")


class PlantUpdate(CamelModel):
    name: str | None = Field(None, min_length=1)
    water_at: str | None = None
    room_id: str | None = None
    trefle_id: int | None = None
    has_device: bool | None = None


# ── Room schemas ──────────────────────────────────────────────────────────────

class RoomCreate(CamelModel):
    name: str = Field(..., min_length=1, description="User-given room name, unique per user")
    icon_id: int | None = Field(None, description="Icon shown in the frontend")


class RoomUpdate(RoomCreate):
    pass


# ── Watering schemas ──────────────────────────────────────────────────────────

class WateringCreate(CamelModel):
    watered_at: str = Field(..., description="Timestamp of the watering")
    health: int | float = Field(..., description="Subjective rating of the plant's health")


class WateringUpdate(CamelModel):
    watered_at: str | None = None
    health: int | float | None = None


# ── Envelope ──────────────────────────────────────────────────────────────────

class Envelope(BaseModel):
    status: int
    data: Any = None
    message: str | None = None


def envelope(status_code: int, data: Any = None, message: str | None = None) -> JSONResponse:
    """Wrap a payload as ``{status, data, message?}``."""
    content = Envelope(status=status_code, data=data, message=message).model_dump(exclude={"message"})
    if message is not None:
        content["message"] = message
    return JSONResponse(status_code=status_code, content=content)
