"""Configuration module for msghub."""

from msghub.config.logging import configure_logging, get_logger
from msghub.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings", "configure_logging", "get_logger"]
