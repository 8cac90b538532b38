"""Layered configuration: field defaults, then ``config/config.yaml``, then the environment.

The YAML file holds checked-in defaults.  Only values that were set
explicitly, through ``XNOVEL_*`` variables, ``.env`` or keyword arguments,
override it; a field left at its code default never masks a YAML value.
Nested sections merge key by key, so a YAML ``cache.max_size`` survives
an environment override of ``cache.ttl``.

``resolve_settings()`` folds the merged result back into a ``Settings``
object, which is what :func:`src.main.build_client` consumes.
"""

from pathlib import Path
from typing import Any

import pydantic
import yaml

from src.config.settings import Settings
from src.utils.errors import ConfigurationError

# Settings field -> (section, key) in the YAML document.
_FIELD_PATHS: dict[str, tuple[str, str]] = {
    "app_env": ("app", "env"),
    "api_base_url": ("api", "base_url"),
    "api_timeout": ("api", "timeout"),
    "device_id_path": ("api", "device_id_path"),
    "stream_fallback_enabled": ("streaming", "fallback_enabled"),
    "cache_max_size": ("cache", "max_size"),
    "cache_ttl": ("cache", "ttl"),
    "log_level": ("logging", "level"),
}


def load_config(path: str | None = None, settings: Settings | None = None) -> dict:
    """Return the merged configuration dictionary.

    Args:
        path: YAML file to read; ``settings.config_path`` when omitted.
        settings: Pre-built settings; a fresh ``Settings()`` when omitted.

    Raises:
        ConfigurationError: If the YAML file exists but cannot be parsed or
            is not a mapping.
    """
    settings = settings or Settings()
    config = _sections(settings, fields=_FIELD_PATHS)
    _deep_merge(config, _read_yaml(Path(path or settings.config_path)))
    explicit = [name for name in _FIELD_PATHS if name in settings.model_fields_set]
    _deep_merge(config, _sections(settings, fields=explicit))
    return config


def resolve_settings(path: str | None = None, settings: Settings | None = None) -> Settings:
    """Return *settings* with YAML values filled in under explicit overrides."""
    settings = settings or Settings()
    config = load_config(path, settings)
    values: dict[str, Any] = settings.model_dump()
    for name, (section, key) in _FIELD_PATHS.items():
        section_values = config.get(section)
        if isinstance(section_values, dict) and key in section_values:
            values[name] = section_values[key]
    try:
        return Settings(_env_file=None, **values)
    except pydantic.ValidationError as exc:
        raise ConfigurationError(message=f"invalid configuration: {exc}", provider_name="config") from exc


def _sections(settings: Settings, fields: Any) -> dict[str, dict[str, Any]]:
    result: dict[str, dict[str, Any]] = {}
    for name in fields:
        section, key = _FIELD_PATHS[name]
        result.setdefault(section, {})[key] = getattr(settings, name)
    return result


def _read_yaml(config_path: Path) -> dict:
    if not config_path.exists():
        return {}
    try:
        with open(config_path, encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
        raise ConfigurationError(
            message=f"Cannot parse {config_path}: {exc}",
            provider_name="config",
        ) from exc
    if not isinstance(loaded, dict):
        raise ConfigurationError(
            message=f"{config_path} must contain a mapping at top level",
            provider_name="config",
        )
    return loaded


def _deep_merge(base: dict, overrides: dict) -> None:
    """Recursively merge overrides into base dict, mutating base in place."""
    for key, value in overrides.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
