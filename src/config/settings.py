"""Client settings loaded from environment variables via pydantic-settings.

Sources, in priority order:

  1. **Environment variables** -- e.g. ``XNOVEL_API_BASE_URL=http://api:8080``
  2. **.env file** -- key=value lines in the working directory
  3. **config/config.yaml** -- applied by ``src.config.loader.resolve_settings``
     to every field neither of the above set

Every field maps to an ``XNOVEL_``-prefixed upper-case variable.  Code
defaults apply when no source sets a value.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_DEFAULT_DEVICE_ID_PATH = str(Path.home() / ".config" / "x-novel" / "device_id")


class Settings(BaseSettings):
    """x-novel client settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(
        env_prefix="XNOVEL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === API ===
    api_base_url: str = "http://localhost:8080"
    api_timeout: float = Field(default=60.0, gt=0)
    # Empty string keeps the device ID in memory only (nothing written to disk).
    device_id_path: str = _DEFAULT_DEVICE_ID_PATH

    # === Streaming ===
    # When False, a failed stream raises StreamError instead of retrying
    # the same operation as a one-shot request.
    stream_fallback_enabled: bool = True

    # === Server state cache ===
    cache_max_size: int = Field(default=256, ge=1)
    cache_ttl: int = Field(default=300, ge=1)

    # === App Config ===
    app_env: str = "development"
    log_level: str = "INFO"
    # YAML defaults layered under explicitly set values (see src.config.loader).
    config_path: str = "config/config.yaml"

    def has_persistent_device_id(self) -> bool:
        """Return ``True`` when the device ID is persisted to a file."""
        return bool(self.device_id_path)
