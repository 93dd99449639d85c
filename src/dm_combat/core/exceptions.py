"""Custom exception hierarchy for the combat assistant.

All exceptions inherit from DmCombatError so the tool dispatcher can turn
any engine failure into a failed tool result at one boundary, while callers
that use the engine directly can still catch the specific kind.

Error kinds:
    EntityNotFoundError: a referenced entity id is not in the encounter.
    InvalidEncounterStateError: no encounter yet, or an empty turn order.
    ValidationError: request values the engine refuses to apply.

Running out of legendary actions is *not* an error; it is reported through
the ``success`` field of the operation result.

Example:
    >>> from dm_combat.core.exceptions import EntityNotFoundError
    >>> raise EntityNotFoundError("target not found: goblin-2", entity_id="goblin-2")
"""

from __future__ import annotations

from typing import Any


class DmCombatError(Exception):
    """Base exception for all combat assistant errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details.

        Returns:
            Formatted error message including any provided details.
        """
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Combat Engine Exceptions
# =============================================================================


class GameEngineError(DmCombatError):
    """Base exception for errors raised by the combat engine."""


class EntityNotFoundError(GameEngineError):
    """Raised when an operation references an entity id that does not exist.

    Raised before any state is written, so the encounter is left untouched.
    """

    def __init__(
        self,
        message: str,
        *,
        entity_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize not-found error with the missing id.

        Args:
            message: Human-readable error description.
            entity_id: The id that could not be resolved.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if entity_id is not None:
            combined_details["entity_id"] = entity_id
        self.entity_id = entity_id
        super().__init__(message, details=combined_details)


class InvalidEncounterStateError(GameEngineError):
    """Raised when the encounter cannot serve the requested operation.

    This happens when an operation other than Start Combat runs before any
    encounter exists, or when turns are advanced on an empty turn order.
    """

    def __init__(
        self,
        message: str,
        *,
        current_state: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize invalid state error with state context.

        Args:
            message: Human-readable error description.
            current_state: Identifier of the state the engine was in.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if current_state:
            combined_details["current_state"] = current_state
        super().__init__(message, details=combined_details)


class DiceRollError(GameEngineError):
    """Raised when dice rolling operations fail."""

    def __init__(
        self,
        message: str,
        *,
        expression: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize dice roll error with expression context.

        Args:
            message: Human-readable error description.
            expression: The dice expression that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if expression:
            combined_details["expression"] = expression
        super().__init__(message, details=combined_details)


# =============================================================================
# Reference Data Exceptions
# =============================================================================


class ReferenceNotFoundError(DmCombatError):
    """Raised when a reference lookup (stat block, rule set) has no entry."""

    def __init__(
        self,
        message: str,
        *,
        key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        combined_details = details or {}
        if key is not None:
            combined_details["key"] = key
        super().__init__(message, details=combined_details)


# =============================================================================
# Configuration & Validation Exceptions
# =============================================================================


class ConfigurationError(DmCombatError):
    """Raised when application configuration is invalid."""

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with config key context.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


class ValidationError(DmCombatError):
    """Raised when a request value is refused by the engine.

    Examples are negative damage, a negative legendary action cost, a
    duplicate entity id when duplicates are rejected, or a condition name
    unknown to a strict catalog.
    """

    def __init__(
        self,
        message: str,
        *,
        field_name: str | None = None,
        invalid_value: Any | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize validation error with field context.

        Args:
            message: Human-readable error description.
            field_name: Name of the field that failed validation.
            invalid_value: The value that failed validation.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if field_name:
            combined_details["field_name"] = field_name
        if invalid_value is not None:
            combined_details["invalid_value"] = invalid_value
        super().__init__(message, details=combined_details)


__all__ = [
    "DmCombatError",
    "GameEngineError",
    "EntityNotFoundError",
    "InvalidEncounterStateError",
    "DiceRollError",
    "ReferenceNotFoundError",
    "ConfigurationError",
    "ValidationError",
]
