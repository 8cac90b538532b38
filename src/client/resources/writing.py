"""One-shot writing assistant endpoint (the streaming variant lives in src/streaming)."""

from __future__ import annotations

from src.client.resources.base import Resource
from src.models.writing import WritingAssistantRequest, WritingResult

ASSIST_PATH = "/api/v1/writing/assist"


class WritingResource(Resource):
    async def assist(self, request: WritingAssistantRequest) -> str:
        body = request.model_copy(update={"stream": False})
        result = await self._http.request_model("POST", ASSIST_PATH, WritingResult, json=body)
        return result.result if result else ""
