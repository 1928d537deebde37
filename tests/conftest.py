"""Pytest configuration and shared fixtures.

This module provides common fixtures for the charforge test suite.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import pytest


if TYPE_CHECKING:
    from collections.abc import Generator

    from charforge.core.config import RulesSettings
    from charforge.engine.character import Character
    from charforge.engine.dice import DiceEngine
    from charforge.models.items import InventoryItem


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from charforge.core.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def mock_env_vars(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Set up mock environment variables for testing.

    Returns:
        Dictionary of environment variables that were set.
    """
    env_vars = {
        "CHARFORGE_DEBUG": "true",
        "CHARFORGE_LOG_LEVEL": "DEBUG",
        "CHARFORGE_DICE_MODE": "random",
        "CHARFORGE_DICE_SEED": "7",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


@pytest.fixture
def rules() -> RulesSettings:
    """Default balance values, independent of the environment."""
    from charforge.core.config import RulesSettings

    return RulesSettings()


# =============================================================================
# Dice Fixtures
# =============================================================================


@pytest.fixture
def average_dice() -> DiceEngine:
    """A deterministic dice engine."""
    from charforge.engine.dice import DiceEngine
    from charforge.models.enums import DiceMode

    return DiceEngine(DiceMode.AVERAGE)


@pytest.fixture
def random_dice() -> DiceEngine:
    """A seeded random dice engine."""
    from charforge.engine.dice import DiceEngine
    from charforge.models.enums import DiceMode

    return DiceEngine(DiceMode.RANDOM, seed=42)


# =============================================================================
# Character Fixtures
# =============================================================================


@pytest.fixture
def make_character(
    average_dice: DiceEngine,
    rules: RulesSettings,
) -> Callable[..., Character]:
    """Factory for characters using average dice and default rules."""
    from charforge.engine.character import Character

    def _make(high: str = "str", mid: str = "dex", **kwargs: Any) -> Character:
        kwargs.setdefault("dice", average_dice)
        kwargs.setdefault("rules", rules)
        return Character(high, mid, **kwargs)

    return _make


@pytest.fixture
def fighter(make_character: Callable[..., Character]) -> Character:
    """STR 16, DEX 10, INT 6."""
    return make_character("str", "dex", name="Brakka")


@pytest.fixture
def rogue(make_character: Callable[..., Character]) -> Character:
    """DEX 16, STR 10, INT 6."""
    return make_character("dex", "str", name="Wren")


@pytest.fixture
def mage(make_character: Callable[..., Character]) -> Character:
    """INT 16, DEX 10, STR 6."""
    return make_character("int", "dex", name="Ilsabet")


# =============================================================================
# Item Fixtures
# =============================================================================


@pytest.fixture
def make_item() -> Callable[..., InventoryItem]:
    """Factory for fresh inventory items."""
    from charforge.models.items import create_inventory_item

    def _make(name: str, item_type: str, **kwargs: Any) -> InventoryItem:
        return create_inventory_item(name=name, type=item_type, **kwargs)

    return _make


@pytest.fixture
def longsword(make_item: Callable[..., InventoryItem]) -> InventoryItem:
    return make_item("Longsword", "weapon", weapon_type="one-hand")


@pytest.fixture
def warhammer(make_item: Callable[..., InventoryItem]) -> InventoryItem:
    return make_item("Warhammer", "weapon", weapon_type="one-hand")


@pytest.fixture
def greatsword(make_item: Callable[..., InventoryItem]) -> InventoryItem:
    return make_item("Greatsword", "weapon", weapon_type="two-hand")


@pytest.fixture
def dagger(make_item: Callable[..., InventoryItem]) -> InventoryItem:
    return make_item("Dagger", "weapon", weapon_type="finesse")


@pytest.fixture
def wooden_shield(make_item: Callable[..., InventoryItem]) -> InventoryItem:
    return make_item("Wooden Shield", "shield")


@pytest.fixture
def plate(make_item: Callable[..., InventoryItem]) -> InventoryItem:
    return make_item("Plate", "armor", armor_type="heavy")


@pytest.fixture
def leather(make_item: Callable[..., InventoryItem]) -> InventoryItem:
    return make_item("Leather", "armor", armor_type="light")
