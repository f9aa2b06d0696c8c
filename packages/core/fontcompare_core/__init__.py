"""Core app services for comparison settings and logging."""

from .config import (
    AppConfig,
    CompareConfig,
    CustomFont,
    ExportConfig,
    FontSlotConfig,
    LoggingConfig,
    add_custom_font,
    load_config,
    remove_custom_font,
    save_config,
)
from .logging_setup import configure_logging, get_logger

__all__ = [
    "AppConfig",
    "CompareConfig",
    "CustomFont",
    "ExportConfig",
    "FontSlotConfig",
    "LoggingConfig",
    "add_custom_font",
    "configure_logging",
    "get_logger",
    "load_config",
    "remove_custom_font",
    "save_config",
]
