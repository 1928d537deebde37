"""Inventory items and the base item catalog.

Items are plain pydantic models. Every rule about which items can be worn
together lives in ``charforge.engine.inventory``; the model only guards its
own fields, most importantly the [-3, +3] enchantment bound.
"""

from __future__ import annotations

from typing import Any
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, model_validator

from charforge.core.constants import MAX_ENCHANTMENT, MIN_ENCHANTMENT, WEAPON_DIE
from charforge.models.enums import (
    ArmorType,
    EquipmentSlot,
    ItemType,
    ResourceKind,
    Stat,
    WeaponType,
)


class StatBonus(BaseModel):
    """A flat bonus an equipped item grants to one stat."""

    model_config = ConfigDict(frozen=True)

    stat: Stat
    bonus: int


class ManeuverBonus(BaseModel):
    """A flat bonus an equipped item grants to one resource pool."""

    model_config = ConfigDict(frozen=True)

    type: ResourceKind
    bonus: int


class InventoryItem(BaseModel):
    """An item a character carries.

    Attributes:
        id: Unique identifier within an inventory.
        name: Display name.
        type: Item category.
        weapon_type: Weapon category, meaningful for weapons only.
        armor_type: Armor weight class, meaningful for armor only.
        equipped: Whether the item is worn or wielded.
        equipment_slot: Slot the item occupies, NONE for accessories and
            unequipped items.
        enchantment_level: Bonus (positive) or curse (negative).
        description: Free text.
        abilities: Special abilities granted by the item.
        stat_bonuses: Stat bonuses applied while equipped.
        maneuver_bonuses: Resource pool bonuses applied while equipped.
    """

    model_config = ConfigDict(
        frozen=False,
        validate_assignment=True,
        extra="ignore",
    )

    id: str = Field(default_factory=lambda: str(uuid4()))
    name: str = Field(min_length=1)
    type: ItemType
    weapon_type: WeaponType = Field(default=WeaponType.NONE)
    armor_type: ArmorType = Field(default=ArmorType.NONE)
    equipped: bool = Field(default=False)
    equipment_slot: EquipmentSlot = Field(default=EquipmentSlot.NONE)
    enchantment_level: int = Field(default=0, ge=MIN_ENCHANTMENT, le=MAX_ENCHANTMENT)
    description: str = Field(default="")
    abilities: list[str] = Field(default_factory=list)
    stat_bonuses: list[StatBonus] = Field(default_factory=list)
    maneuver_bonuses: list[ManeuverBonus] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_slot_consistency(self) -> "InventoryItem":
        """An unequipped item never holds a slot."""
        if not self.equipped and self.equipment_slot != EquipmentSlot.NONE:
            raise ValueError(
                f"Unequipped item {self.name!r} cannot occupy slot {self.equipment_slot}"
            )
        return self

    @property
    def is_two_handed(self) -> bool:
        """Whether this is a weapon that occupies both hands."""
        return self.type == ItemType.WEAPON and self.weapon_type.is_two_handed

    def equip_to(self, slot: EquipmentSlot) -> None:
        """Mark the item equipped in a slot."""
        self.equipped = True
        self.equipment_slot = slot

    def clear_equipment(self) -> None:
        """Mark the item unequipped."""
        # Slot first, so the model is never unequipped while holding a slot.
        self.equipment_slot = EquipmentSlot.NONE
        self.equipped = False


# =============================================================================
# Base Catalog
# =============================================================================

BASE_WEAPONS: dict[str, WeaponType] = {
    "Greatsword": WeaponType.TWO_HAND,
    "Longsword": WeaponType.ONE_HAND,
    "Rapier": WeaponType.FINESSE,
    "Longbow": WeaponType.RANGED,
    "Staff": WeaponType.STAFF,
    "Dagger": WeaponType.FINESSE,
    "Warhammer": WeaponType.ONE_HAND,
    "Crossbow": WeaponType.RANGED,
}

BASE_ARMOR: dict[str, ArmorType] = {
    "Plate": ArmorType.HEAVY,
    "Chain Mail": ArmorType.MEDIUM,
    "Leather": ArmorType.LIGHT,
    "Studded Leather": ArmorType.LIGHT,
    "Scale Mail": ArmorType.MEDIUM,
    "Splint": ArmorType.HEAVY,
}

BASE_SHIELDS: tuple[str, ...] = ("Wooden Shield", "Metal Shield", "Tower Shield")

_WEAPON_LABELS: dict[WeaponType, str] = {
    WeaponType.TWO_HAND: "Two-handed weapon",
    WeaponType.POLEARM: "Polearm",
    WeaponType.ONE_HAND: "One-handed weapon",
    WeaponType.FINESSE: "Finesse weapon",
    WeaponType.RANGED: "Ranged weapon",
    WeaponType.STAFF: "Magical staff",
    WeaponType.NONE: "Improvised weapon",
}


def describe_weapon(weapon_type: WeaponType) -> str:
    """Build the default description for a weapon.

    Example:
        >>> describe_weapon(WeaponType.TWO_HAND)
        'Two-handed weapon (d12 damage)'
    """
    die = WEAPON_DIE.get(weapon_type.value, 0)
    label = _WEAPON_LABELS[weapon_type]
    if die == 0:
        return label
    return f"{label} (d{die} damage)"


def describe_armor(armor_type: ArmorType) -> str:
    """Build the default description for a suit of armor."""
    if armor_type == ArmorType.NONE:
        return "Ordinary clothing"
    return f"{armor_type.value.capitalize()} armor"


def describe_shield(name: str) -> str:
    """Build the default description for a shield."""
    return f"{name}, held in the off hand"


def create_inventory_item(**fields: Any) -> InventoryItem:
    """Create a fresh, unequipped item with a new id.

    Any ``id``, ``equipped`` or ``equipment_slot`` passed in is discarded.

    Args:
        **fields: InventoryItem fields such as name, type and weapon_type.

    Returns:
        The new item.
    """
    fields.pop("id", None)
    fields.pop("equipped", None)
    fields.pop("equipment_slot", None)
    return InventoryItem(**fields)


def create_base_weapon(name: str, *, enchantment_level: int = 0) -> InventoryItem:
    """Create one of the catalog weapons by name.

    Raises:
        KeyError: If the name is not in the weapon catalog.
    """
    weapon_type = BASE_WEAPONS[name]
    return create_inventory_item(
        name=name,
        type=ItemType.WEAPON,
        weapon_type=weapon_type,
        enchantment_level=enchantment_level,
        description=describe_weapon(weapon_type),
    )


def create_base_armor(name: str, *, enchantment_level: int = 0) -> InventoryItem:
    """Create one of the catalog armors by name.

    Raises:
        KeyError: If the name is not in the armor catalog.
    """
    armor_type = BASE_ARMOR[name]
    return create_inventory_item(
        name=name,
        type=ItemType.ARMOR,
        armor_type=armor_type,
        enchantment_level=enchantment_level,
        description=describe_armor(armor_type),
    )


def create_base_shield(name: str, *, enchantment_level: int = 0) -> InventoryItem:
    """Create one of the catalog shields by name.

    Raises:
        KeyError: If the name is not in the shield catalog.
    """
    if name not in BASE_SHIELDS:
        raise KeyError(name)
    return create_inventory_item(
        name=name,
        type=ItemType.SHIELD,
        enchantment_level=enchantment_level,
        description=describe_shield(name),
    )


__all__ = [
    "StatBonus",
    "ManeuverBonus",
    "InventoryItem",
    "BASE_WEAPONS",
    "BASE_ARMOR",
    "BASE_SHIELDS",
    "describe_weapon",
    "describe_armor",
    "describe_shield",
    "create_inventory_item",
    "create_base_weapon",
    "create_base_armor",
    "create_base_shield",
]
