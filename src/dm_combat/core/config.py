"""Configuration management for the combat assistant.

Settings are loaded with pydantic-settings from environment variables and an
optional ``.env`` file. The engine reads them once at construction time.

Example:
    >>> from dm_combat.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.monster_save_bonus
    3

Environment Variables:
    DM_COMBAT_MONSTER_SAVE_BONUS: Flat saving throw bonus applied to monsters
    DM_COMBAT_REJECT_DUPLICATE_IDS: Reject start_combat requests that repeat an id
    DM_COMBAT_DICE_SEED: Seed for the default dice roller
    DM_COMBAT_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    DM_COMBAT_JSON_LOGS: Emit JSON log lines instead of console output
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from dm_combat.core.exceptions import ConfigurationError


class CombatSettings(BaseSettings):
    """Settings for the combat engine and its ambient services.

    Attributes:
        app_name: Application name, attached to every log line.
        monster_save_bonus: Flat bonus added to monster saving throws.
        reject_duplicate_ids: If True, start_combat refuses repeated ids
            instead of letting the last definition win.
        dice_seed: Optional seed for reproducible default dice.
        log_level: Application logging level.
        json_logs: Output logs as JSON lines.
        log_file: Optional path for a persistent log file.
    """

    model_config = SettingsConfigDict(
        env_prefix="DM_COMBAT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = Field(
        default="dm-combat",
        description="Application name",
    )
    monster_save_bonus: int = Field(
        default=3,
        ge=0,
        le=30,
        description="Flat saving throw bonus for monsters",
    )
    reject_duplicate_ids: bool = Field(
        default=False,
        description="Reject start_combat requests with repeated entity ids",
    )
    dice_seed: int | None = Field(
        default=None,
        description="Seed for the default dice roller",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    json_logs: bool = Field(
        default=False,
        description="Emit JSON formatted logs",
    )
    log_file: Path | None = Field(
        default=None,
        description="Optional log file path",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: object) -> object:
        """Accept lower-case level names from the environment."""
        if isinstance(value, str):
            return value.upper()
        return value


@lru_cache(maxsize=1)
def get_settings() -> CombatSettings:
    """Get the cached settings instance.

    Returns:
        The application CombatSettings instance.

    Raises:
        ConfigurationError: If the environment holds invalid values.
    """
    try:
        return CombatSettings()
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load combat settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access.

    Mostly useful for tests that change environment variables.
    """
    get_settings.cache_clear()


__all__ = [
    "CombatSettings",
    "get_settings",
    "clear_settings_cache",
]
