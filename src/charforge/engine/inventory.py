"""Inventory and equipment slots.

Weapons fill the two hand slots, armor and shields have one slot each, and
accessories are worn without a slot. Two-handed weapons (``two-hand`` and
``ranged``) take the main hand and clear the off hand, and can never share
the character with a shield.

Every mutating call validates first and only then writes, so a rejected
request leaves the inventory exactly as it was.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from charforge.core.config import RulesSettings, get_settings
from charforge.core.constants import MAX_ENCHANTMENT, MIN_ENCHANTMENT
from charforge.core.exceptions import ItemNotFoundError
from charforge.core.logging import get_logger
from charforge.models.components import InventoryState
from charforge.models.enums import EquipmentSlot, ItemType, ResourceKind
from charforge.models.results import ActionResult, EquipCheck, EquippedWeapons, InventorySummary
from charforge.models.stats import StatLine


if TYPE_CHECKING:
    from charforge.models.items import InventoryItem


logger = get_logger(__name__)

StatsProvider = Callable[[], StatLine]


class EquipmentInventory:
    """Owns a character's items and what they have equipped.

    Args:
        state: The item list to manage.
        stats_provider: Returns the owner's current effective stats. Read on
            every check, never cached.
        rules: Balance values.
    """

    def __init__(
        self,
        state: InventoryState | None = None,
        *,
        stats_provider: StatsProvider | None = None,
        rules: RulesSettings | None = None,
    ) -> None:
        self._state = state if state is not None else InventoryState()
        self._stats_provider = stats_provider
        self._rules = rules or get_settings().rules

    @property
    def state(self) -> InventoryState:
        return self._state

    @property
    def max_items(self) -> int | None:
        return self._state.max_items

    # =========================================================================
    # Lookup
    # =========================================================================

    def items(self) -> list[InventoryItem]:
        return list(self._state.items)

    def get_item(self, item_id: str) -> InventoryItem:
        """Find an item by id.

        Raises:
            ItemNotFoundError: If no item has that id.
        """
        for item in self._state.items:
            if item.id == item_id:
                return item
        raise ItemNotFoundError("Item not found in inventory", item_id=item_id)

    def has_item(self, item_id: str) -> bool:
        return any(item.id == item_id for item in self._state.items)

    def items_by_type(self, item_type: ItemType | str) -> list[InventoryItem]:
        return [item for item in self._state.items if item.type == ItemType(item_type)]

    def equipped_items(self) -> list[InventoryItem]:
        return [item for item in self._state.items if item.equipped]

    def item_in_slot(self, slot: EquipmentSlot | str) -> InventoryItem | None:
        slot = EquipmentSlot(slot)
        if slot == EquipmentSlot.NONE:
            return None
        for item in self._state.items:
            if item.equipped and item.equipment_slot == slot:
                return item
        return None

    def get_equipped_weapons(self) -> EquippedWeapons:
        return EquippedWeapons(
            main_hand=self.item_in_slot(EquipmentSlot.MAIN_HAND),
            off_hand=self.item_in_slot(EquipmentSlot.OFF_HAND),
        )

    def equipped_armor(self) -> InventoryItem | None:
        return self.item_in_slot(EquipmentSlot.ARMOR)

    def equipped_shield(self) -> InventoryItem | None:
        return self.item_in_slot(EquipmentSlot.SHIELD)

    # =========================================================================
    # Adding & removing
    # =========================================================================

    def add_item(self, item: InventoryItem) -> bool:
        """Add an item. Fails when the inventory is full or the id is taken.

        The inventory keeps its own unequipped copy; equipping goes through
        ``equip`` so the slot rules always apply. Look the stored item up
        with ``get_item``.
        """
        if self._state.max_items is not None and len(self._state.items) >= self._state.max_items:
            logger.info(
                "Cannot add item: inventory full",
                item_name=item.name,
                max_items=self._state.max_items,
            )
            return False
        if self.has_item(item.id):
            logger.info("Cannot add item: duplicate id", item_id=item.id, item_name=item.name)
            return False

        stored = item.model_copy(deep=True)
        if stored.equipped:
            stored.clear_equipment()
            logger.debug("Incoming item unequipped", item_name=item.name, slot=item.equipment_slot)
        self._state.items.append(stored)
        logger.info(
            "Item added",
            item_name=item.name,
            item_type=item.type,
            total_items=len(self._state.items),
        )
        return True

    def remove_item(self, item_id: str) -> bool:
        """Remove an item, equipped or not. Returns False if it isn't carried."""
        for index, item in enumerate(self._state.items):
            if item.id == item_id:
                del self._state.items[index]
                logger.info("Item removed", item_name=item.name, was_equipped=item.equipped)
                return True
        logger.info("Cannot remove item: not found", item_id=item_id)
        return False

    # =========================================================================
    # Equipping
    # =========================================================================

    def can_equip(self, item: InventoryItem) -> EquipCheck:
        """Check strength requirements and two-handed conflicts."""
        if item.type == ItemType.ARMOR:
            required = self._rules.armor_str_requirements.get(item.armor_type.value, 0)
            strength = self._current_stats().strength
            if strength < required:
                return EquipCheck(
                    ok=False,
                    reason=f"Requires {required} STR (you have {strength})",
                )

        if item.is_two_handed and self.equipped_shield() is not None:
            return EquipCheck(
                ok=False,
                reason="Cannot equip two-handed weapon while using a shield. "
                "Unequip the shield first.",
            )

        if item.type == ItemType.SHIELD:
            weapons = self.get_equipped_weapons()
            if any(w is not None and w.is_two_handed for w in (weapons.main_hand, weapons.off_hand)):
                return EquipCheck(
                    ok=False,
                    reason="Cannot equip shield while wielding a two-handed weapon. "
                    "Unequip the weapon first.",
                )

        return EquipCheck(ok=True)

    def equip(self, item_id: str) -> ActionResult:
        """Equip an item, evicting whatever holds its slot.

        Raises:
            ItemNotFoundError: If no item has that id.
        """
        item = self.get_item(item_id)
        if item.equipped:
            return ActionResult.unchanged()

        check = self.can_equip(item)
        if not check.ok:
            logger.info("Cannot equip item", item_name=item.name, reason=check.reason)
            return ActionResult.fail(check.reason or "Cannot equip item")

        match item.type:
            case ItemType.WEAPON:
                slot = self._claim_hand(item)
            case ItemType.ARMOR:
                slot = EquipmentSlot.ARMOR
                self._evict(slot)
            case ItemType.SHIELD:
                slot = EquipmentSlot.SHIELD
                self._evict(slot)
            case _:
                slot = EquipmentSlot.NONE

        item.equip_to(slot)
        logger.info(
            "Item equipped",
            item_name=item.name,
            item_type=item.type,
            slot=slot,
            enchantment_level=item.enchantment_level,
        )
        return ActionResult.ok()

    def unequip(self, item_id: str) -> bool:
        """Take an item off. Returns False if it wasn't equipped.

        Raises:
            ItemNotFoundError: If no item has that id.
        """
        item = self.get_item(item_id)
        if not item.equipped:
            return False
        item.clear_equipment()
        logger.info("Item unequipped", item_name=item.name, item_type=item.type)
        return True

    def _claim_hand(self, item: InventoryItem) -> EquipmentSlot:
        weapons = self.get_equipped_weapons()
        if item.is_two_handed:
            self._evict(EquipmentSlot.MAIN_HAND)
            self._evict(EquipmentSlot.OFF_HAND)
            return EquipmentSlot.MAIN_HAND
        if weapons.main_hand is not None and weapons.main_hand.is_two_handed:
            # A two-hander fills both hands, so it gives way entirely.
            self._evict(EquipmentSlot.MAIN_HAND)
            return EquipmentSlot.MAIN_HAND
        if weapons.main_hand is None:
            return EquipmentSlot.MAIN_HAND
        if weapons.off_hand is None:
            return EquipmentSlot.OFF_HAND
        self._evict(EquipmentSlot.MAIN_HAND)
        return EquipmentSlot.MAIN_HAND

    def _evict(self, slot: EquipmentSlot) -> None:
        occupant = self.item_in_slot(slot)
        if occupant is not None:
            occupant.clear_equipment()
            logger.info("Item evicted", item_name=occupant.name, slot=slot)

    # =========================================================================
    # Enchantment
    # =========================================================================

    def modify_enchantment(self, item_id: str, delta: int) -> ActionResult:
        """Shift an item's enchantment, refusing to leave [-3, +3].

        Raises:
            ItemNotFoundError: If no item has that id.
        """
        item = self.get_item(item_id)
        new_level = item.enchantment_level + delta
        if new_level < MIN_ENCHANTMENT:
            return ActionResult.fail("Cannot enchant below -3 (maximum curse)")
        if new_level > MAX_ENCHANTMENT:
            return ActionResult.fail("Cannot enchant above +3 (maximum enchantment)")
        return self._apply_enchantment(item, new_level)

    def set_enchantment(self, item_id: str, level: int) -> ActionResult:
        """Set an item's enchantment, refusing values outside [-3, +3].

        Raises:
            ItemNotFoundError: If no item has that id.
        """
        item = self.get_item(item_id)
        if not MIN_ENCHANTMENT <= level <= MAX_ENCHANTMENT:
            return ActionResult.fail("Enchantment level must be between -3 and +3")
        return self._apply_enchantment(item, level)

    def _apply_enchantment(self, item: InventoryItem, level: int) -> ActionResult:
        old_level = item.enchantment_level
        if level == old_level:
            return ActionResult.unchanged()
        item.enchantment_level = level
        logger.info(
            "Enchantment changed",
            item_name=item.name,
            old_level=old_level,
            new_level=level,
            is_equipped=item.equipped,
        )
        return ActionResult.ok()

    # =========================================================================
    # Aggregates
    # =========================================================================

    def equipped_enchantment_ac_bonus(self) -> int:
        """Sum of enchantments on equipped armor and shields."""
        return sum(
            item.enchantment_level
            for item in self.equipped_items()
            if item.type in (ItemType.ARMOR, ItemType.SHIELD)
        )

    def equipped_stat_bonuses(self) -> StatLine:
        totals = StatLine()
        for item in self.equipped_items():
            for bonus in item.stat_bonuses:
                totals = totals.replace(bonus.stat, totals.get(bonus.stat) + bonus.bonus)
        return totals

    def equipped_maneuver_bonuses(self) -> dict[ResourceKind, int]:
        totals = {kind: 0 for kind in ResourceKind}
        for item in self.equipped_items():
            for bonus in item.maneuver_bonuses:
                totals[bonus.type] += bonus.bonus
        return totals

    def summary(self) -> InventorySummary:
        by_type = {item_type: 0 for item_type in ItemType}
        for item in self._state.items:
            by_type[item.type] += 1
        return InventorySummary(
            total=len(self._state.items),
            equipped=len(self.equipped_items()),
            by_type=by_type,
        )

    def _current_stats(self) -> StatLine:
        if self._stats_provider is None:
            # Detached inventory: no owner, so no strength requirement can fail.
            return StatLine(strength=self._rules.stat_ceiling)
        return self._stats_provider()


__all__ = [
    "StatsProvider",
    "EquipmentInventory",
]
