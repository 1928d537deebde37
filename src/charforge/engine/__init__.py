"""Character engine.

Submodules:
    dice: Random or averaged dice evaluation (d20 library)
    stats: Effective stats and override deltas
    resources: Sorcery, finesse and combat maneuver pools
    inventory: Items, equipment slots and enchantments
    progression: Two-phase and single-call level-ups
    abilities: Learning and using metamagic, spellwords and maneuvers
    combat: Attack, damage, armor class and finesse attacks
    character: The Character aggregate tying them together

Example:
    >>> from charforge.engine import Character, DiceEngine
    >>> hero = Character("dex", "str", dice=DiceEngine("average"))
    >>> hero.finesse_points
    1
"""

from __future__ import annotations

from charforge.engine.abilities import AbilityManager
from charforge.engine.character import Character, Listener, starting_stats
from charforge.engine.combat import (
    NO_FINESSE_POINTS,
    NO_MAIN_HAND_WEAPON,
    NO_OFF_HAND_WEAPON,
    CombatResolver,
)
from charforge.engine.dice import DiceEngine, DiceNotation, DiceRoll, parse_notation
from charforge.engine.inventory import EquipmentInventory
from charforge.engine.progression import ProgressionController, hit_die_for
from charforge.engine.resources import ResourceManager, combat_max_for, max_values_for
from charforge.engine.stats import StatEngine, clamp_stat, effective_stats


__all__ = [
    # Dice
    "DiceEngine",
    "DiceNotation",
    "DiceRoll",
    "parse_notation",
    # Stats
    "StatEngine",
    "clamp_stat",
    "effective_stats",
    # Resources
    "ResourceManager",
    "max_values_for",
    "combat_max_for",
    # Inventory
    "EquipmentInventory",
    # Progression
    "ProgressionController",
    "hit_die_for",
    # Combat
    "CombatResolver",
    "NO_FINESSE_POINTS",
    "NO_MAIN_HAND_WEAPON",
    "NO_OFF_HAND_WEAPON",
    # Abilities
    "AbilityManager",
    # Character
    "Character",
    "Listener",
    "starting_stats",
]
