"""Configuration package."""

from src.config.settings import (
    DEFAULT_LINE_ITEM_LABELS,
    AppSettings,
    LedgerSettings,
    Settings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "DEFAULT_LINE_ITEM_LABELS",
    "AppSettings",
    "LedgerSettings",
    "Settings",
    "get_settings",
    "validate_all_settings",
]
