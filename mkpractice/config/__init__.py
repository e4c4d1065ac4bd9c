"""Configuration package."""

from mkpractice.config.settings import (
    DATA_DIR,
    PACKAGE_ROOT,
    PracticeSettings,
    get_settings,
    settings,
)

__all__ = [
    "DATA_DIR",
    "PACKAGE_ROOT",
    "PracticeSettings",
    "get_settings",
    "settings",
]
