"""Enumeration types for the charforge character engine.

Stats, item categories, equipment slots and resource pools are all closed
sets. Using StrEnum keeps them type-safe in the engine while serializing
to the plain strings stored in snapshots.
"""

from __future__ import annotations

from enum import StrEnum

from charforge.core.exceptions import UnknownStatError


class Stat(StrEnum):
    """The three character stats."""

    STR = "str"
    DEX = "dex"
    INT = "int"

    @property
    def full_name(self) -> str:
        """Get the full name of the stat.

        Returns:
            Full stat name (e.g., 'Strength' for STR).
        """
        match self:
            case Stat.STR:
                return "Strength"
            case Stat.DEX:
                return "Dexterity"
            case Stat.INT:
                return "Intelligence"

    @property
    def field_name(self) -> str:
        """Attribute name of this stat on stat-holding models."""
        return self.full_name.lower()

    @classmethod
    def parse(cls, value: str | Stat) -> Stat:
        """Resolve a stat key, accepting the short or full name.

        Args:
            value: A Stat, or a string such as "str" or "strength".

        Returns:
            The matching Stat.

        Raises:
            UnknownStatError: If the key names no stat.
        """
        if isinstance(value, Stat):
            return value
        key = str(value).strip().lower()
        for stat in cls:
            if key in (stat.value, stat.field_name):
                return stat
        raise UnknownStatError(f"Unknown stat: {value!r}", stat=value)


class Race(StrEnum):
    """Playable races."""

    ELF = "elf"
    DWARF = "dwarf"
    HUMAN = "human"
    GNOME = "gnome"
    DRAGONBORN = "dragonborn"
    HALFLING = "halfling"


class ItemType(StrEnum):
    """Inventory item categories."""

    WEAPON = "weapon"
    ARMOR = "armor"
    SHIELD = "shield"
    ACCESSORY = "accessory"


class WeaponType(StrEnum):
    """Weapon categories, which set the damage die and governing stat."""

    TWO_HAND = "two-hand"
    POLEARM = "polearm"
    ONE_HAND = "one-hand"
    FINESSE = "finesse"
    RANGED = "ranged"
    STAFF = "staff"
    NONE = "none"

    @property
    def is_two_handed(self) -> bool:
        """Whether the weapon occupies both hands."""
        return self in (WeaponType.TWO_HAND, WeaponType.RANGED)

    @property
    def governing_stat(self) -> Stat:
        """The stat that drives attack and damage rolls."""
        match self:
            case WeaponType.FINESSE | WeaponType.RANGED:
                return Stat.DEX
            case WeaponType.STAFF:
                return Stat.INT
            case _:
                return Stat.STR


class ArmorType(StrEnum):
    """Armor weight classes."""

    HEAVY = "heavy"
    MEDIUM = "medium"
    LIGHT = "light"
    NONE = "none"


class EquipmentSlot(StrEnum):
    """Tracked equipment slots. Accessories use NONE."""

    MAIN_HAND = "main-hand"
    OFF_HAND = "off-hand"
    ARMOR = "armor"
    SHIELD = "shield"
    NONE = "none"


class ResourceKind(StrEnum):
    """The three maneuver resource pools."""

    SORCERY = "sorcery"
    FINESSE = "finesse"
    COMBAT = "combat"


class AbilityType(StrEnum):
    """Learnable ability families, each paid for from one pool."""

    METAMAGIC = "metamagic"
    SPELLWORD = "spellword"
    COMBAT_MANEUVER = "combat_maneuver"

    @property
    def resource(self) -> ResourceKind:
        """Pool whose points fuel abilities of this type."""
        match self:
            case AbilityType.METAMAGIC | AbilityType.SPELLWORD:
                return ResourceKind.SORCERY
            case AbilityType.COMBAT_MANEUVER:
                return ResourceKind.COMBAT


class DiceMode(StrEnum):
    """How dice are evaluated."""

    AVERAGE = "average"
    RANDOM = "random"


class LevelUpState(StrEnum):
    """States of the two-phase level-up."""

    IDLE = "idle"
    LEVELING_UP = "leveling_up"


__all__ = [
    "Stat",
    "Race",
    "ItemType",
    "WeaponType",
    "ArmorType",
    "EquipmentSlot",
    "ResourceKind",
    "AbilityType",
    "DiceMode",
    "LevelUpState",
]
