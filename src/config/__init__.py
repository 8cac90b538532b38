"""Configuration module - exports Settings, the YAML loader, and a module-level singleton."""

from src.config.loader import load_config, resolve_settings
from src.config.settings import Settings

settings = Settings()

__all__ = ["Settings", "load_config", "resolve_settings", "settings"]
