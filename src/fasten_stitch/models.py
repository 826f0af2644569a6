from __future__ import annotations

from typing import Final, Literal

from pydantic import BaseModel, ConfigDict, Field

from fasten_stitch.events import utc_now_iso

SERVICE_ID: Final[str] = "fasten-stitch-page"
SERVICE_NAME: Final[str] = "Fasten Stitch Page"

CONNECT_PATH: Final[str] = "/fasten/connect"
HEALTH_PATH: Final[str] = "/health"
ROOT_PATH: Final[str] = "/"
AVAILABLE_ENDPOINTS: Final[list[str]] = [CONNECT_PATH, HEALTH_PATH, ROOT_PATH]

KeyStatus = Literal["configured", "not configured"]


def key_status(configured: bool) -> KeyStatus:
    return "configured" if configured else "not configured"


class HealthStatus(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    status: Literal["healthy"] = "healthy"
    timestamp: str = Field(default_factory=utc_now_iso)
    service: str = SERVICE_ID
    public_key: KeyStatus = Field(alias="publicKey")


class Endpoints(BaseModel):
    connect: str = CONNECT_PATH
    health: str = HEALTH_PATH


class ServiceIndex(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    service: str = SERVICE_NAME
    endpoints: Endpoints = Field(default_factory=Endpoints)
    public_key: KeyStatus = Field(alias="publicKey")
    timestamp: str = Field(default_factory=utc_now_iso)


class NotFound(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    error: str = "Not found"
    path: str
    available_endpoints: list[str] = Field(
        default_factory=lambda: list(AVAILABLE_ENDPOINTS), alias="availableEndpoints"
    )
    timestamp: str = Field(default_factory=utc_now_iso)


class InternalError(BaseModel):
    error: str = "Internal server error"
    timestamp: str = Field(default_factory=utc_now_iso)
