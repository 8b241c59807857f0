"""Core: settings, lifespan, and exception handlers (wiring only)."""

from edition_access.core.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
