"""
Configuration Management for the Receipt Ledger

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
The line-item template, the storage slot and the receipt numbering seed
are all settings, so a different society can reuse the ledger by changing
the environment only.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_LINE_ITEM_LABELS = [
    "Maintenance Charges",
    "Sinking Fund",
    "Water Charges",
    "Parking Charges",
    "Repair Fund",
    "Non-Occupancy Charges",
    "Other Charges",
]


class LedgerSettings(BaseSettings):
    """Receipt ledger configuration."""

    model_config = SettingsConfigDict(
        env_prefix="LEDGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Persistent slot
    data_dir: Path = Field(
        default=Path.home() / ".receipt_ledger",
        description="Directory that holds the ledger blob"
    )
    storage_key: str = Field(
        default="nilkanth_receipts_v1",
        min_length=1,
        description="Name of the storage slot (file stem of the blob)"
    )

    # Numbering
    receipt_no_seed: int = Field(
        default=101,
        ge=1,
        description="Receipt number suggested when the ledger is empty"
    )

    # Receipt form
    date_format: str = Field(
        default="%d - %m - %Y",
        description="strftime format of the receipt date field"
    )
    line_item_labels: list[str] = Field(
        default_factory=lambda: list(DEFAULT_LINE_ITEM_LABELS),
        description="Ordered charge heads printed on every receipt"
    )
    society_name: str = Field(
        default="Nilkanth Apartment Section-1",
        description="Society name shown on receipts and reports"
    )

    # Export
    export_prefix: str = Field(
        default="Nilkanth_Apartment_Report",
        description="File name prefix of CSV reports"
    )

    # Status messages
    status_dismiss_seconds: float = Field(
        default=3.0,
        gt=0,
        le=60,
        description="Seconds before a status message disappears"
    )

    @field_validator('line_item_labels')
    @classmethod
    def validate_labels(cls, v: list[str]) -> list[str]:
        """The template must have at least one non-blank, unique label."""
        labels = [label.strip() for label in v]
        if not labels or any(not label for label in labels):
            raise ValueError("line_item_labels must contain non-blank labels")
        if len(set(labels)) != len(labels):
            raise ValueError("line_item_labels must be unique")
        return labels

    @property
    def storage_path(self) -> Path:
        """Full path of the ledger blob."""
        return self.data_dir / f"{self.storage_key}.json"


class AppSettings(BaseSettings):
    """UI settings, read from APP_ENVIRONMENT / DEBUG_MODE."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    app_environment: str = Field(
        default="development",
        description="Deployment label shown in the sidebar"
    )
    debug_mode: bool = Field(
        default=False,
        description="Show this session's audit trail in the sidebar"
    )


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def ledger(self) -> LedgerSettings:
        return LedgerSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Check that every settings group can be built from the environment.

    Returns {group: is_valid}, plus "<group>_error" for each invalid group.
    Used by the app at startup so a bad variable shows up as a message
    instead of a traceback.
    """
    results = {}
    settings = get_settings()

    for group in ("ledger", "app"):
        try:
            getattr(settings, group)
            results[group] = True
        except ValidationError as e:
            results[group] = False
            results[f"{group}_error"] = str(e)

    return results
