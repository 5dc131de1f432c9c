"""Configuration loader for kanterm."""

from __future__ import annotations

import asyncio
import tomllib
from typing import TYPE_CHECKING, Literal

import tomlkit
from pydantic import BaseModel, Field, field_validator

from kanterm.atomic import atomic_write
from kanterm.constants import DEFAULT_DOUBLE_CLICK_MS
from kanterm.paths import get_config_path, get_database_path

if TYPE_CHECKING:
    from pathlib import Path


type ThemeName = Literal["kanterm", "kanterm-256", "auto"]


class DatabaseConfig(BaseModel):
    """Where the tickets database lives."""

    folder: str | None = Field(
        default=None,
        description="Folder holding kanterm.db (None = platform data directory)",
    )


class UIConfig(BaseModel):
    """UI-related user preferences."""

    double_click_ms: int = Field(
        default=DEFAULT_DOUBLE_CLICK_MS,
        ge=1,
        description="Maximum delay between two clicks that open a ticket",
    )
    theme: ThemeName = Field(
        default="auto",
        description="Theme name; 'auto' picks truecolor or 256-color from the terminal",
    )

    @field_validator("theme", mode="before")
    @classmethod
    def validate_theme(cls, value: object) -> str:
        """Gracefully coerce unknown theme names to auto-detection."""
        if isinstance(value, str) and value in ("kanterm", "kanterm-256", "auto"):
            return value
        return "auto"

    @property
    def double_click_interval(self) -> float:
        """Double-click window in seconds."""
        return self.double_click_ms / 1000


class KantermConfig(BaseModel):
    """Root configuration model."""

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    ui: UIConfig = Field(default_factory=UIConfig)

    @classmethod
    def load(cls, config_path: Path | None = None) -> KantermConfig:
        """Load configuration from TOML file or use defaults."""
        if config_path is None:
            config_path = get_config_path()

        if config_path.exists():
            with open(config_path, "rb") as f:
                data = tomllib.load(f)
            return cls.model_validate(data)

        return cls()

    @property
    def database_path(self) -> Path:
        return get_database_path(self.database.folder)

    async def save(self, path: Path) -> None:
        """Serialize current config to TOML file.

        Args:
            path: Path to write config file (created if missing)
        """
        doc = tomlkit.document()

        database_table = tomlkit.table()
        for key, value in self.database.model_dump().items():
            if value is not None:
                database_table[key] = value
        doc["database"] = database_table

        ui_table = tomlkit.table()
        for key, value in self.ui.model_dump().items():
            if value is not None:
                ui_table[key] = value
        doc["ui"] = ui_table

        content = tomlkit.dumps(doc)
        await asyncio.to_thread(atomic_write, path, content)
