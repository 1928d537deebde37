"""charforge - character progression, resource and combat engine.

Characters are built from a high/mid stat choice and a race, level up
through a two-phase allocation, spend stat-gated maneuver points, equip
items under slot rules, and roll attacks and damage through a dice engine
that can be switched to deterministic averages.

Example:
    >>> from charforge import Character, DiceEngine, DiceMode, ItemType, WeaponType
    >>> from charforge import create_inventory_item
    >>>
    >>> hero = Character("str", "dex", race="dwarf", dice=DiceEngine(DiceMode.AVERAGE))
    >>> sword = create_inventory_item(
    ...     name="Longsword", type=ItemType.WEAPON, weapon_type=WeaponType.ONE_HAND
    ... )
    >>> hero.add_item(sword)
    True
    >>> hero.equip(sword.id).success
    True
    >>> hero.main_hand_damage_roll()
    8

Modules:
    core: Configuration, logging, constants and exceptions.
    models: Pydantic V2 schemas (items, components, snapshots).
    engine: Dice, stats, resources, inventory, progression and combat.
"""

from __future__ import annotations

# Core
from charforge.core.config import Settings, get_settings
from charforge.core.exceptions import CharforgeError
from charforge.core.logging import configure_logging, get_logger

# Engine
from charforge.engine import (
    AbilityManager,
    Character,
    CombatResolver,
    DiceEngine,
    EquipmentInventory,
    ProgressionController,
    ResourceManager,
    StatEngine,
)

# Models
from charforge.models import (
    AbilityType,
    ArmorType,
    CharacterSnapshot,
    DiceMode,
    EquipmentSlot,
    InventoryItem,
    ItemType,
    Race,
    ResourceKind,
    Stat,
    WeaponType,
    create_inventory_item,
    modifier,
)


__version__ = "0.1.0"
__all__ = [
    # Version info
    "__version__",
    # Core
    "CharforgeError",
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    # Engine
    "Character",
    "DiceEngine",
    "StatEngine",
    "ResourceManager",
    "EquipmentInventory",
    "ProgressionController",
    "CombatResolver",
    "AbilityManager",
    # Models
    "Stat",
    "Race",
    "ItemType",
    "WeaponType",
    "ArmorType",
    "EquipmentSlot",
    "ResourceKind",
    "DiceMode",
    "AbilityType",
    "InventoryItem",
    "CharacterSnapshot",
    "create_inventory_item",
    "modifier",
]
