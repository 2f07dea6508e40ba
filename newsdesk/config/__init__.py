"""Configuration package."""

from newsdesk.config.logging_config import configure_logging
from newsdesk.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings", "configure_logging"]
