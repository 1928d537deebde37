"""Pydantic V2 schemas for the charforge character engine.

Submodules:
    enums: Stats, races, item categories, slots and resource pools.
    stats: StatLine value type and the stat modifier.
    items: Inventory items and the base item catalog.
    abilities: Learnable abilities and their master lists.
    components: Character state components (stats, pools, progression).
    races: Racial bonuses and abilities.
    results: Outcomes of engine operations.
    snapshot: Persisted form of a character.

Example:
    >>> from charforge.models import ItemType, WeaponType, create_inventory_item
    >>> sword = create_inventory_item(
    ...     name="Longsword", type=ItemType.WEAPON, weapon_type=WeaponType.ONE_HAND
    ... )
"""

from __future__ import annotations

# =============================================================================
# Enumerations
# =============================================================================
from charforge.models.enums import (
    AbilityType,
    ArmorType,
    DiceMode,
    EquipmentSlot,
    ItemType,
    LevelUpState,
    Race,
    ResourceKind,
    Stat,
    WeaponType,
)

# =============================================================================
# Values & Items
# =============================================================================
from charforge.models.stats import StatLine, modifier
from charforge.models.items import (
    BASE_ARMOR,
    BASE_SHIELDS,
    BASE_WEAPONS,
    InventoryItem,
    ManeuverBonus,
    StatBonus,
    create_base_armor,
    create_base_shield,
    create_base_weapon,
    create_inventory_item,
    describe_armor,
    describe_shield,
    describe_weapon,
)

# =============================================================================
# Components & Persistence
# =============================================================================
from charforge.models.abilities import (
    COMBAT_MANEUVERS,
    METAMAGIC,
    SPELLWORDS,
    LearnedAbility,
    ability_id,
    master_list,
)
from charforge.models.components import (
    AbilityBook,
    Component,
    InventoryState,
    ProgressionState,
    ResourcePool,
    ResourcePools,
    StatBlock,
)
from charforge.models.races import RACES, RaceTraits, get_race_traits, resolve_racial_bonuses
from charforge.models.results import (
    ActionResult,
    AttackOutcome,
    EquipCheck,
    EquippedWeapons,
    InventorySummary,
)
from charforge.models.snapshot import SNAPSHOT_SCHEMA_VERSION, CharacterSnapshot


__all__ = [
    # Enumerations
    "Stat",
    "Race",
    "ItemType",
    "WeaponType",
    "ArmorType",
    "EquipmentSlot",
    "ResourceKind",
    "DiceMode",
    "LevelUpState",
    "AbilityType",
    # Values
    "StatLine",
    "modifier",
    # Items
    "InventoryItem",
    "StatBonus",
    "ManeuverBonus",
    "BASE_WEAPONS",
    "BASE_ARMOR",
    "BASE_SHIELDS",
    "create_inventory_item",
    "create_base_weapon",
    "create_base_armor",
    "create_base_shield",
    "describe_weapon",
    "describe_armor",
    "describe_shield",
    # Components
    "Component",
    "StatBlock",
    "ResourcePool",
    "ResourcePools",
    "ProgressionState",
    "InventoryState",
    "AbilityBook",
    # Abilities
    "LearnedAbility",
    "METAMAGIC",
    "SPELLWORDS",
    "COMBAT_MANEUVERS",
    "master_list",
    "ability_id",
    # Races
    "RACES",
    "RaceTraits",
    "get_race_traits",
    "resolve_racial_bonuses",
    # Results
    "ActionResult",
    "EquipCheck",
    "AttackOutcome",
    "EquippedWeapons",
    "InventorySummary",
    # Persistence
    "CharacterSnapshot",
    "SNAPSHOT_SCHEMA_VERSION",
]
