"""FormPages package."""

from formpages.exceptions import (
    FormSpecError,
    PackageError,
    RenderError,
    SettingsError,
)
from formpages.logging import configure_logging, get_logger
from formpages.settings import Settings, get_settings

__version__ = "0.1.0"

# Initialize package logger at import time via `get_logger`.
logger = get_logger("formpages")

__all__ = [
    "FormSpecError",
    "PackageError",
    "RenderError",
    "Settings",
    "SettingsError",
    "__version__",
    "configure_logging",
    "get_logger",
    "get_settings",
    "logger",
]
