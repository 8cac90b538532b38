"""LLM model configuration models.

A device registers one or more model configs (provider + model name +
credentials); the server picks one per generation purpose.  API keys are
write-only: they are sent on create/update/validate and never returned.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_serializer


class ModelProvider(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    display_name: str = ""
    is_active: bool = True


class ModelConfig(BaseModel):
    model_config = ConfigDict(frozen=True, protected_namespaces=())

    id: str
    provider_id: int
    model_name: str
    purpose: str = ""
    is_active: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None
    provider: ModelProvider | None = None


class ModelConfigList(BaseModel):
    model_config = ConfigDict(frozen=True)

    configs: list[ModelConfig] = Field(default_factory=list)
    total: int = 0


class CreateModelConfigRequest(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    provider_id: int
    model_name: str = Field(min_length=1)
    api_key: SecretStr
    base_url: str | None = None

    @field_serializer("api_key")
    def _reveal_key(self, value: SecretStr) -> str:
        return value.get_secret_value()


class UpdateModelConfigRequest(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    model_name: str | None = Field(default=None, min_length=1)
    api_key: SecretStr | None = None
    base_url: str | None = None
    is_active: bool | None = None

    @field_serializer("api_key")
    def _reveal_key(self, value: SecretStr | None) -> str | None:
        return value.get_secret_value() if value is not None else None


class ValidateModelConfigRequest(BaseModel):
    provider_id: int
    api_key: SecretStr
    base_url: str | None = None

    @field_serializer("api_key")
    def _reveal_key(self, value: SecretStr) -> str:
        return value.get_secret_value()
