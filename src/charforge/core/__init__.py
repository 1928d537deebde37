"""Core module providing configuration, logging, and base exceptions.

Exports:
    Exceptions:
        CharforgeError: Base exception for all engine errors.
        ConfigurationError: Configuration-related errors.
        ValidationError: Caller-supplied data errors.

    Configuration:
        Settings: Main settings class.
        RulesSettings: Balance values.
        DiceSettings: Dice mode and seed.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up logging.
        get_logger: Get a configured logger instance.
        bind_context: Add context to log entries.
        clear_context: Clear logging context.
"""

from __future__ import annotations

from charforge.core.config import (
    DiceSettings,
    RulesSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)
from charforge.core.exceptions import (
    CharforgeError,
    ConfigurationError,
    DiceRollError,
    GameEngineError,
    InvalidGameStateError,
    ItemNotFoundError,
    SnapshotError,
    UnknownStatError,
    ValidationError,
)
from charforge.core.logging import (
    bind_context,
    clear_context,
    configure_from_settings,
    configure_logging,
    get_logger,
)


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
    # Configuration
    "Settings",
    "RulesSettings",
    "DiceSettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "configure_from_settings",
    "get_logger",
    "bind_context",
    "clear_context",
]
