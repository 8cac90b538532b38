"""LLM model configuration endpoints."""

from __future__ import annotations

from src.client.resources.base import DEFAULT_PAGE_SIZE, Resource
from src.models.model_config import (
    CreateModelConfigRequest,
    ModelConfig,
    ModelConfigList,
    ModelProvider,
    UpdateModelConfigRequest,
    ValidateModelConfigRequest,
)


class ModelConfigsResource(Resource):
    async def list_providers(self) -> list[ModelProvider]:
        result = await self._http.request_model(
            "GET", self._path("models", "providers"), list[ModelProvider]
        )
        return result or []

    async def list(self, page: int = 1, page_size: int = DEFAULT_PAGE_SIZE) -> ModelConfigList:
        result = await self._http.request_model(
            "GET", self._path("models"), ModelConfigList, params=self._page(page, page_size)
        )
        return result or ModelConfigList()

    async def create(self, request: CreateModelConfigRequest) -> ModelConfig | None:
        return await self._http.request_model("POST", self._path("models"), ModelConfig, json=request)

    async def get(self, config_id: str) -> ModelConfig | None:
        return await self._http.request_model(
            "GET", self._path("models", self._require_id(config_id)), ModelConfig
        )

    async def update(self, config_id: str, request: UpdateModelConfigRequest) -> ModelConfig | None:
        return await self._http.request_model(
            "PUT", self._path("models", self._require_id(config_id)), ModelConfig, json=request
        )

    async def delete(self, config_id: str) -> None:
        await self._http.request("DELETE", self._path("models", self._require_id(config_id)))

    async def validate(self, request: ValidateModelConfigRequest) -> bool:
        """Return ``True`` when the server accepts the credentials.

        A rejection surfaces as :class:`~src.utils.errors.APIError`.
        """
        await self._http.request("POST", self._path("models", "validate"), json=request)
        return True
