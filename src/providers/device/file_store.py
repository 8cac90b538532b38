"""File-backed device ID store.

The ID is a single line of text in a small file (by default
``~/.config/x-novel/device_id``).  Parent directories are created on first
save.  An unreadable or empty file is treated as "no ID yet" so the client
generates a fresh one rather than refusing to start.
"""

from __future__ import annotations

from pathlib import Path

import structlog

from src.interfaces.device_store import IDeviceIdStore
from src.utils.errors import ConfigurationError

logger = structlog.get_logger(logger_name=__name__)


class FileDeviceIdStore(IDeviceIdStore):
    """Persists the device ID to *path*.

    Parameters
    ----------
    path:
        File holding the ID.  ``~`` is expanded.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path).expanduser()

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> str | None:
        try:
            value = self._path.read_text(encoding="utf-8").strip()
        except FileNotFoundError:
            return None
        except OSError as exc:
            logger.warning("device_id_read_failed", path=str(self._path), error=str(exc))
            return None
        return value or None

    def save(self, device_id: str) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(device_id + "\n", encoding="utf-8")
        except OSError as exc:
            raise ConfigurationError(
                message=f"Cannot write device ID to {self._path}: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc
        logger.debug("device_id_saved", path=str(self._path))

    def get_provider_name(self) -> str:
        return "file"
