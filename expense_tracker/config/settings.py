"""
Expense Tracker Configuration

Every setting comes from the environment (or a local .env file) through
pydantic-settings, grouped by concern:

- EXPENSE_STORAGE_*  where the ledger lives
- GOOGLE_SHEETS_*    credentials for the optional Sheets backend
- BUDGET_*           percentage thresholds for budget status
- plain names        log level, currency symbol

DESIGN DECISION: Groups are built on first access, not at import. A user on
the local file backend never needs Google credentials, so a missing
GOOGLE_SHEETS_SPREADSHEET_ID must not stop the tracker from starting.
"""

import warnings
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _env_config(prefix: str = "") -> SettingsConfigDict:
    return SettingsConfigDict(
        env_prefix=prefix,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


class StorageSettings(BaseSettings):
    """Which key-value store backs the ledger."""

    model_config = _env_config("EXPENSE_STORAGE_")

    backend: Literal["file", "sheets", "memory"] = Field(
        default="file",
        description="Storage backend: local JSON files, Google Sheets, or in-memory"
    )
    data_dir: str = Field(
        default="data",
        description="Directory holding one JSON file per storage slot"
    )

    @property
    def data_path(self) -> Path:
        return Path(self.data_dir)


class GoogleSheetsSettings(BaseSettings):
    """Service account and spreadsheet for the Sheets backend."""

    model_config = _env_config("GOOGLE_SHEETS_")

    credentials_path: str = Field(
        ...,
        description="Service account key file (JSON)"
    )
    spreadsheet_id: str = Field(
        ...,
        description="Key of the spreadsheet that holds the storage worksheet"
    )
    storage_sheet_name: str = Field(
        default="Storage",
        description="Name of the key/value worksheet"
    )

    @field_validator('credentials_path')
    @classmethod
    def check_credentials_file(cls, v: str) -> str:
        # Only a warning: the key file may be mounted after start-up
        if not Path(v).exists():
            warnings.warn(f"Service account key file {v} does not exist yet.")
        return v


class BudgetSettings(BaseSettings):
    """Thresholds (percent of ceiling) for budget status classes."""

    model_config = _env_config("BUDGET_")

    warning_threshold: float = Field(
        default=75.0,
        gt=0,
        le=100,
        description="Percentage at which a budget turns 'warning'"
    )
    danger_threshold: float = Field(
        default=90.0,
        gt=0,
        le=100,
        description="Percentage at which a budget turns 'danger' and alerts"
    )

    @model_validator(mode='after')
    def validate_order(self) -> 'BudgetSettings':
        if self.warning_threshold > self.danger_threshold:
            raise ValueError("Warning threshold cannot be above danger threshold")
        return self


class AppSettings(BaseSettings):
    """Process-wide settings without a prefix."""

    model_config = _env_config()

    log_level: str = Field(
        default="INFO",
        description="Minimum level written to the structured log"
    )
    currency_symbol: str = Field(
        default="$",
        max_length=3,
        description="Symbol used in reminders and the UI"
    )


class Settings(BaseSettings):
    """Entry point to every settings group."""

    model_config = _env_config()

    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()

    @property
    def google_sheets(self) -> GoogleSheetsSettings:
        return GoogleSheetsSettings()

    @property
    def budget(self) -> BudgetSettings:
        return BudgetSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Process-wide Settings instance.

    Tests that change the environment should call get_settings.cache_clear().
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Try to build every settings group that is in use.

    Returns {group: ok}, plus a ``<group>_error`` message for each failure.
    The Google Sheets group is only checked when it is the selected backend.
    """
    results = {}

    settings = get_settings()

    for name in ("storage", "budget", "app", "google_sheets"):
        if name == "google_sheets" and not _uses_sheets(settings):
            continue
        try:
            getattr(settings, name)
            results[name] = True
        except Exception as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results


def _uses_sheets(settings: Settings) -> bool:
    try:
        return settings.storage.backend == "sheets"
    except ValidationError:
        # An invalid storage group is already reported under "storage"
        return False
