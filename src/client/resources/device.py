"""Device info and server-side device settings."""

from __future__ import annotations

from src.client.resources.base import Resource
from src.models.device import Device, DeviceSettings, UpdateDeviceSettingsRequest


class DeviceResource(Resource):
    async def get_info(self) -> Device | None:
        return await self._http.request_model("GET", self._path("device", "info"), Device)

    async def get_settings(self) -> DeviceSettings | None:
        return await self._http.request_model("GET", self._path("device", "settings"), DeviceSettings)

    async def update_settings(self, update: UpdateDeviceSettingsRequest) -> DeviceSettings | None:
        return await self._http.request_model(
            "PUT", self._path("device", "settings"), DeviceSettings, json=update
        )
