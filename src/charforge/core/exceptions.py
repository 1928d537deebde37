"""Exception hierarchy for the charforge character engine.

Only programmer misuse is raised. Game-state validation failures (equip
conflicts, empty resource pools, out-of-range enchantments) are reported
through result objects and never reach this module. Everything here
inherits from CharforgeError so callers can catch engine bugs at a single
boundary.

Example:
    >>> from charforge.core.exceptions import ItemNotFoundError
    >>> raise ItemNotFoundError("No such item", item_id="abc123")
"""

from __future__ import annotations

from typing import Any


class CharforgeError(Exception):
    """Base exception for all charforge errors.

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
# Configuration & Validation Exceptions
# =============================================================================


class ConfigurationError(CharforgeError):
    """Raised when configuration is missing or inconsistent."""

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that is invalid.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


class ValidationError(CharforgeError):
    """Raised when caller-supplied data fails validation."""

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


class UnknownStatError(ValidationError):
    """Raised when a stat key is not one of str, dex or int."""

    def __init__(
        self,
        message: str,
        *,
        stat: Any | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, field_name="stat", invalid_value=stat, details=details)


class SnapshotError(ValidationError):
    """Raised when a persisted character snapshot cannot be restored.

    The snapshot is validated in full before a character is rebuilt, so a
    corrupted or hand-edited payload never yields a half-loaded character.
    """


# =============================================================================
# Game Engine Exceptions
# =============================================================================


class GameEngineError(CharforgeError):
    """Base exception for all engine misuse errors."""


class InvalidGameStateError(GameEngineError):
    """Raised when a request would build an inconsistent character.

    This covers construction inputs that no legal game state corresponds
    to, such as giving the high and mid slot to the same stat.
    """

    def __init__(
        self,
        message: str,
        *,
        current_state: str | None = None,
        expected_states: list[str] | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize invalid game state error with state context.

        Args:
            message: Human-readable error description.
            current_state: The current invalid state identifier.
            expected_states: List of valid states that were expected.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if current_state:
            combined_details["current_state"] = current_state
        if expected_states:
            combined_details["expected_states"] = expected_states
        super().__init__(message, details=combined_details)


class DiceRollError(GameEngineError):
    """Raised when dice rolling operations fail.

    This typically occurs when parsing invalid dice notation or when a
    roll is requested with a negative count or a die with no faces.
    """

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


class ItemNotFoundError(GameEngineError):
    """Raised when an item id is not present in the inventory."""

    def __init__(
        self,
        message: str,
        *,
        item_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        combined_details = details or {}
        if item_id:
            combined_details["item_id"] = item_id
        super().__init__(message, details=combined_details)


__all__ = [
    # Base exception
    "CharforgeError",
    # Configuration & validation exceptions
    "ConfigurationError",
    "ValidationError",
    "UnknownStatError",
    "SnapshotError",
    # Game engine exceptions
    "GameEngineError",
    "InvalidGameStateError",
    "DiceRollError",
    "ItemNotFoundError",
]
