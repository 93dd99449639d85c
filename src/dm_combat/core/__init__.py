"""Core module providing configuration, logging, and base exceptions.

Exports:
    Exceptions:
        DmCombatError: Base exception for all application errors.
        EntityNotFoundError: Unknown entity id.
        InvalidEncounterStateError: No encounter / empty turn order.
        ValidationError: Refused request values.

    Configuration:
        CombatSettings: Application settings class.
        get_settings: Get the cached settings.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up application logging.
        get_logger: Get a configured logger instance.
        bind_context: Add context to log entries.
        clear_context: Clear logging context.
"""

from __future__ import annotations

from dm_combat.core.config import (
    CombatSettings,
    clear_settings_cache,
    get_settings,
)
from dm_combat.core.exceptions import (
    ConfigurationError,
    DiceRollError,
    DmCombatError,
    EntityNotFoundError,
    GameEngineError,
    InvalidEncounterStateError,
    ReferenceNotFoundError,
    ValidationError,
)
from dm_combat.core.logging import (
    bind_context,
    clear_context,
    configure_logging,
    configure_logging_from_settings,
    get_logger,
)


__all__ = [
    # Exceptions
    "DmCombatError",
    "GameEngineError",
    "EntityNotFoundError",
    "InvalidEncounterStateError",
    "DiceRollError",
    "ReferenceNotFoundError",
    "ConfigurationError",
    "ValidationError",
    # Configuration
    "CombatSettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "configure_logging_from_settings",
    "get_logger",
    "bind_context",
    "clear_context",
]
