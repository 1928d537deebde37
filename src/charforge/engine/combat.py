"""Combat queries.

Attack rolls, damage rolls and armor class are computed on demand from
the character's current stats, equipment and level. Nothing is cached, so
in average dice mode repeated calls return the same value and in random
mode every call is a fresh roll.

Finesse attacks come in three variants with different costs and dice:

* sneak attack (main hand) spends a point, then adds one sneak die per
  point still left;
* sneak attack (off hand) adds one sneak die per point held, then spends
  a point;
* assassination (either hand) is free, doubles the weapon die and adds two
  sneak dice per point held.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from charforge.core.config import RulesSettings, get_settings
from charforge.core.constants import D20
from charforge.core.logging import get_logger
from charforge.engine.dice import DiceEngine
from charforge.engine.inventory import EquipmentInventory
from charforge.engine.resources import ResourceManager
from charforge.engine.stats import StatEngine
from charforge.models.enums import ArmorType, EquipmentSlot, ResourceKind, Stat
from charforge.models.results import AttackOutcome
from charforge.models.stats import modifier


if TYPE_CHECKING:
    from collections.abc import Callable

    from charforge.models.items import InventoryItem


logger = get_logger(__name__)

NO_FINESSE_POINTS = "No finesse points available"
NO_MAIN_HAND_WEAPON = "No main-hand weapon equipped"
NO_OFF_HAND_WEAPON = "No off-hand weapon equipped"


class CombatResolver:
    """Answers combat questions for one character.

    Args:
        stats: Engine over the character's stat block.
        inventory: The character's equipment.
        resources: The character's resource pools.
        dice: Dice for every roll.
        level_provider: Returns the character's current level.
        rules: Balance values.
    """

    def __init__(
        self,
        *,
        stats: StatEngine,
        inventory: EquipmentInventory,
        resources: ResourceManager,
        dice: DiceEngine,
        level_provider: Callable[[], int],
        rules: RulesSettings | None = None,
    ) -> None:
        self._stats = stats
        self._inventory = inventory
        self._resources = resources
        self._dice = dice
        self._level = level_provider
        self._rules = rules or get_settings().rules

    # =========================================================================
    # Weapon helpers
    # =========================================================================

    def weapon_die(self, weapon: InventoryItem) -> int:
        return self._rules.weapon_dice.get(weapon.weapon_type.value, 0)

    def weapon_stat_modifier(self, weapon: InventoryItem) -> int:
        """Modifier of the stat that governs a weapon."""
        return self._stats.modifier(weapon.weapon_type.governing_stat)

    def _weapon_dice(self, weapon: InventoryItem, multiplier: int, bonus: int) -> int | float:
        die = self.weapon_die(weapon)
        if die <= 0:
            return bonus
        return self._dice.roll_or_average(multiplier, die, bonus)

    def _hand(self, slot: EquipmentSlot) -> InventoryItem | None:
        return self._inventory.item_in_slot(slot)

    # =========================================================================
    # Attack & damage
    # =========================================================================

    def main_hand_attack_roll(self) -> int | float:
        """d20 + stat modifier + level + enchantment, or 0 without a weapon."""
        weapon = self._hand(EquipmentSlot.MAIN_HAND)
        if weapon is None:
            return 0
        stat_mod = self.weapon_stat_modifier(weapon)
        level = self._level()
        total = self._dice.roll_or_average(1, D20, stat_mod + level + weapon.enchantment_level)
        logger.debug(
            "Main-hand attack roll",
            weapon=weapon.name,
            stat_mod=stat_mod,
            level=level,
            enchantment=weapon.enchantment_level,
            total=total,
        )
        return total

    def off_hand_attack_roll(self) -> int | float:
        """d20 + stat modifier + enchantment, or 0 without a weapon."""
        weapon = self._hand(EquipmentSlot.OFF_HAND)
        if weapon is None:
            return 0
        stat_mod = self.weapon_stat_modifier(weapon)
        total = self._dice.roll_or_average(1, D20, stat_mod + weapon.enchantment_level)
        logger.debug(
            "Off-hand attack roll",
            weapon=weapon.name,
            stat_mod=stat_mod,
            enchantment=weapon.enchantment_level,
            total=total,
        )
        return total

    def main_hand_damage_roll(self) -> int | float:
        """Weapon die + stat modifier + enchantment, or 0 without a weapon."""
        weapon = self._hand(EquipmentSlot.MAIN_HAND)
        if weapon is None:
            return 0
        stat_mod = self.weapon_stat_modifier(weapon)
        total = self._weapon_dice(weapon, 1, stat_mod + weapon.enchantment_level)
        logger.debug(
            "Main-hand damage roll",
            weapon=weapon.name,
            die=self.weapon_die(weapon),
            stat_mod=stat_mod,
            enchantment=weapon.enchantment_level,
            total=total,
        )
        return total

    def off_hand_damage_roll(self) -> int | float:
        """Weapon die + enchantment, or 0 without a weapon."""
        weapon = self._hand(EquipmentSlot.OFF_HAND)
        if weapon is None:
            return 0
        total = self._weapon_dice(weapon, 1, weapon.enchantment_level)
        logger.debug(
            "Off-hand damage roll",
            weapon=weapon.name,
            die=self.weapon_die(weapon),
            enchantment=weapon.enchantment_level,
            total=total,
        )
        return total

    # =========================================================================
    # Defense
    # =========================================================================

    def ac(self) -> int:
        """Armor class from dexterity, armor, shield and their enchantments."""
        rules = self._rules
        equipment = self._inventory.equipped_stat_bonuses()
        dex = self._stats.effective(equipment).dexterity
        dex_mod = modifier(dex)

        armor = self._inventory.equipped_armor()
        armor_type = armor.armor_type if armor is not None else ArmorType.NONE
        armor_mod = rules.armor_modifiers.get(armor_type.value, 0)
        shield_bonus = rules.shield_ac if self._inventory.equipped_shield() is not None else 0
        enchantment_bonus = self._inventory.equipped_enchantment_ac_bonus()

        total = rules.base_ac + dex_mod + armor_mod + shield_bonus + enchantment_bonus
        logger.debug(
            "Calculating AC",
            base_ac=rules.base_ac,
            dex=dex,
            dex_equipment_bonus=equipment.dexterity,
            dex_mod=dex_mod,
            armor=armor_type,
            armor_mod=armor_mod,
            shield_bonus=shield_bonus,
            enchantment_bonus=enchantment_bonus,
            total_ac=total,
        )
        return total

    def hide_roll(self) -> int | float:
        """d20 + dexterity modifier + level, doubled level when nimble and unarmored."""
        dex = self._stats.effective_stat(Stat.DEX)
        armor = self._inventory.equipped_armor()
        heavy = armor is not None and armor.armor_type == ArmorType.HEAVY
        factor = 2 if dex >= self._rules.finesse_dex_threshold and not heavy else 1
        level = self._level()
        total = self._dice.roll_or_average(1, D20, modifier(dex) + level * factor)
        logger.debug("Hide roll", dex=dex, level=level, factor=factor, total=total)
        return total

    # =========================================================================
    # Finesse attacks
    # =========================================================================

    def sneak_attack_main_hand(self) -> AttackOutcome:
        """Main-hand damage plus one sneak die per finesse point left after paying one."""
        weapon = self._hand(EquipmentSlot.MAIN_HAND)
        failure = self._finesse_precheck(weapon, NO_MAIN_HAND_WEAPON)
        if failure is not None:
            return failure

        self._resources.spend(ResourceKind.FINESSE)
        sneak_dice = self._resources.current(ResourceKind.FINESSE)
        return self._finesse_outcome(
            weapon,
            sneak_dice=sneak_dice,
            include_stat=True,
            critical=False,
            finesse_spent=1,
        )

    def sneak_attack_off_hand(self) -> AttackOutcome:
        """Off-hand damage plus one sneak die per finesse point held, then pays one."""
        weapon = self._hand(EquipmentSlot.OFF_HAND)
        failure = self._finesse_precheck(weapon, NO_OFF_HAND_WEAPON)
        if failure is not None:
            return failure

        sneak_dice = self._resources.current(ResourceKind.FINESSE)
        outcome = self._finesse_outcome(
            weapon,
            sneak_dice=sneak_dice,
            include_stat=False,
            critical=False,
            finesse_spent=1,
        )
        self._resources.spend(ResourceKind.FINESSE)
        return outcome

    def assassination_main_hand(self) -> AttackOutcome:
        """Critical main-hand hit with doubled sneak dice. Costs nothing."""
        weapon = self._hand(EquipmentSlot.MAIN_HAND)
        failure = self._finesse_precheck(weapon, NO_MAIN_HAND_WEAPON)
        if failure is not None:
            return failure
        return self._finesse_outcome(
            weapon,
            sneak_dice=2 * self._resources.current(ResourceKind.FINESSE),
            include_stat=True,
            critical=True,
            finesse_spent=0,
        )

    def assassination_off_hand(self) -> AttackOutcome:
        """Critical off-hand hit with doubled sneak dice. Costs nothing."""
        weapon = self._hand(EquipmentSlot.OFF_HAND)
        failure = self._finesse_precheck(weapon, NO_OFF_HAND_WEAPON)
        if failure is not None:
            return failure
        return self._finesse_outcome(
            weapon,
            sneak_dice=2 * self._resources.current(ResourceKind.FINESSE),
            include_stat=False,
            critical=True,
            finesse_spent=0,
        )

    def _finesse_precheck(
        self,
        weapon: InventoryItem | None,
        missing_weapon_reason: str,
    ) -> AttackOutcome | None:
        if self._resources.current(ResourceKind.FINESSE) <= 0:
            logger.info("Finesse attack rejected", reason=NO_FINESSE_POINTS)
            return AttackOutcome(success=False, breakdown=NO_FINESSE_POINTS)
        if weapon is None:
            logger.info("Finesse attack rejected", reason=missing_weapon_reason)
            return AttackOutcome(success=False, breakdown=missing_weapon_reason)
        return None

    def _finesse_outcome(
        self,
        weapon: InventoryItem,
        *,
        sneak_dice: int,
        include_stat: bool,
        critical: bool,
        finesse_spent: int,
    ) -> AttackOutcome:
        die = self.weapon_die(weapon)
        weapon_count = 2 if critical else 1
        stat = weapon.weapon_type.governing_stat
        stat_mod = self.weapon_stat_modifier(weapon) if include_stat else 0
        enchantment = weapon.enchantment_level

        weapon_total = self._weapon_dice(weapon, weapon_count, stat_mod + enchantment)
        parts = [f"{weapon_count}d{die}{' critical' if critical else ''}"]
        if include_stat:
            parts.append(f"{stat_mod} ({stat.value.upper()} modifier)")
        if enchantment:
            parts.append(f"{enchantment} (enchantment)")

        sneak_total: int | float = 0
        if sneak_dice > 0:
            sneak_total = self._dice.roll_or_average(sneak_dice, self._rules.sneak_attack_die)
            label = "critical sneak attack" if critical else "sneak attack"
            parts.append(f"{sneak_dice}d{self._rules.sneak_attack_die} {label}")
        else:
            parts.append("0 sneak attack dice")

        total = weapon_total + sneak_total
        breakdown = " + ".join(parts)
        logger.info(
            "Finesse attack",
            weapon=weapon.name,
            critical=critical,
            sneak_dice=sneak_dice,
            finesse_spent=finesse_spent,
            total=total,
        )
        return AttackOutcome(
            success=True,
            total=total,
            breakdown=breakdown,
            finesse_spent=finesse_spent,
            sneak_dice=sneak_dice,
        )


__all__ = [
    "NO_FINESSE_POINTS",
    "NO_MAIN_HAND_WEAPON",
    "NO_OFF_HAND_WEAPON",
    "CombatResolver",
]
