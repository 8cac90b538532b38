"""Server liveness check (``/health`` sits outside ``/api/v1``)."""

from __future__ import annotations

from src.client.resources.base import Resource


class HealthResource(Resource):
    async def check(self) -> bool:
        body = await self._http.request_json("GET", "/health")
        return isinstance(body, dict) and body.get("status") == "ok"
