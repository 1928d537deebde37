"""Rules constants for the charforge character engine.

These are the default balance values. Everything a table might want to
tune is re-exposed through ``RulesSettings`` in ``charforge.core.config``;
the values here seed those defaults and cover the fixed bounds the engine
never lets configuration change.
"""

from __future__ import annotations

# =============================================================================
# Character Creation
# =============================================================================

HIGH_STAT_VALUE = 16
"""Starting score for the stat chosen as "high"."""

MID_STAT_VALUE = 10
"""Starting score for the stat chosen as "mid"."""

LOW_STAT_VALUE = 6
"""Starting score for the remaining stat."""

BASE_HP = 10
"""Flat hit points added to the level-1 roll."""

# =============================================================================
# Stat & Enchantment Bounds
# =============================================================================

STAT_FLOOR = 0
"""Lowest value an effective stat can take."""

STAT_CEILING = 30
"""Highest value an effective stat can take."""

MIN_ENCHANTMENT = -3
"""Maximum curse an item can carry."""

MAX_ENCHANTMENT = 3
"""Maximum enchantment an item can carry."""

# =============================================================================
# Progression
# =============================================================================

LEVEL_UP_POINTS = 2
"""Stat points granted by each two-phase level-up."""

LEGACY_STAT_INCREASE = 2
"""Stat increase applied by the single-call level-up."""

HIT_DICE_FROM_MOD = (4, 6, 8, 10, 12)
"""Hit die size indexed by ``str_mod - 1``."""

HIT_DIE_FALLBACK = 4
"""Hit die used when the strength modifier falls outside the table."""

# =============================================================================
# Resources
# =============================================================================

BASE_SORCERY_POINTS = 3
"""Sorcery points granted when intelligence exceeds the threshold."""

SORCERY_INT_THRESHOLD = 10
"""Intelligence must be strictly above this to have sorcery points."""

MIN_SPELLCASTING_INT = 11
"""Intelligence needed for a sorcery point on level-up."""

DOUBLE_SPELLCASTING_INT = 14
"""Intelligence above this grants a second sorcery point on level-up."""

FINESSE_DEX_THRESHOLD = 16
"""Dexterity needed for finesse points and improved hiding."""

COMBAT_STR_THRESHOLD = 16
"""Strength needed for combat maneuver points."""

# =============================================================================
# Combat
# =============================================================================

BASE_AC = 13
"""Armor class before dexterity, armor and shield."""

SHIELD_AC = 2
"""Armor class granted by an equipped shield."""

SNEAK_ATTACK_DIE = 8
"""Die size of each sneak attack die."""

D20 = 20
"""Die used for attack and hide rolls."""

ARMOR_STR_REQ: dict[str, int] = {
    "heavy": 16,
    "medium": 14,
    "light": 12,
    "none": 0,
}
"""Strength required to wear each armor weight class."""

ARMOR_MODS: dict[str, int] = {
    "heavy": 3,
    "medium": 2,
    "light": 1,
    "none": 0,
}
"""Armor class contributed by each armor weight class."""

WEAPON_DIE: dict[str, int] = {
    "two-hand": 12,
    "polearm": 10,
    "one-hand": 8,
    "finesse": 6,
    "ranged": 6,
    "staff": 4,
    "none": 0,
}
"""Damage die size for each weapon type."""

TWO_HANDED_WEAPON_TYPES = frozenset({"two-hand", "ranged"})
"""Weapon types that occupy both hands."""


__all__ = [
    # Creation
    "HIGH_STAT_VALUE",
    "MID_STAT_VALUE",
    "LOW_STAT_VALUE",
    "BASE_HP",
    # Bounds
    "STAT_FLOOR",
    "STAT_CEILING",
    "MIN_ENCHANTMENT",
    "MAX_ENCHANTMENT",
    # Progression
    "LEVEL_UP_POINTS",
    "LEGACY_STAT_INCREASE",
    "HIT_DICE_FROM_MOD",
    "HIT_DIE_FALLBACK",
    # Resources
    "BASE_SORCERY_POINTS",
    "SORCERY_INT_THRESHOLD",
    "MIN_SPELLCASTING_INT",
    "DOUBLE_SPELLCASTING_INT",
    "FINESSE_DEX_THRESHOLD",
    "COMBAT_STR_THRESHOLD",
    # Combat
    "BASE_AC",
    "SHIELD_AC",
    "SNEAK_ATTACK_DIE",
    "D20",
    "ARMOR_STR_REQ",
    "ARMOR_MODS",
    "WEAPON_DIE",
    "TWO_HANDED_WEAPON_TYPES",
]
