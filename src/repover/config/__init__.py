"""Configuration for repover."""

from repover.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
