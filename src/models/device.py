"""Device models -- the anonymous identity the server tracks per client."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Theme(str, Enum):  # noqa: UP042
    LIGHT = "light"
    DARK = "dark"


class Device(BaseModel):
    """Server-side record of a client device."""

    model_config = ConfigDict(frozen=True)

    id: str
    device_id: str
    device_info: dict[str, Any] | None = None
    created_at: datetime | None = None
    last_seen: datetime | None = None


class DeviceSettings(BaseModel):
    """Per-device preferences stored on the server."""

    model_config = ConfigDict(frozen=True)

    id: str = ""
    device_id: str = ""
    theme: Theme = Theme.LIGHT
    language: str = "zh-CN"
    auto_save_enabled: bool = True
    auto_save_interval: int = Field(default=30000, ge=0, description="Milliseconds.")


class UpdateDeviceSettingsRequest(BaseModel):
    """Partial update; unset fields are left untouched server-side."""

    theme: Theme | None = None
    language: str | None = None
    auto_save_enabled: bool | None = None
    auto_save_interval: int | None = Field(default=None, ge=0)
