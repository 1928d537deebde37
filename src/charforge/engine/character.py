"""The character aggregate.

A Character owns its stat block, progression state, resource pools,
inventory and learned abilities, and wires the engines over them. Callers
act on the character only; each public mutator either applies fully or is
rejected with the character unchanged, and every applied mutation is
announced once to the character's own listeners.

Example:
    >>> from charforge import Character, DiceEngine, DiceMode
    >>> hero = Character("str", "dex", name="Brakka", dice=DiceEngine(DiceMode.AVERAGE))
    >>> hero.strength, hero.dexterity, hero.intelligence
    (16, 10, 6)
    >>> hero.ac()
    13
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, TypeVar

from pydantic import ValidationError as PydanticValidationError

from charforge.core.config import RulesSettings, get_settings
from charforge.core.constants import HIGH_STAT_VALUE, LOW_STAT_VALUE, MID_STAT_VALUE
from charforge.core.exceptions import InvalidGameStateError, SnapshotError
from charforge.core.logging import get_logger
from charforge.engine.abilities import AbilityManager
from charforge.engine.combat import CombatResolver
from charforge.engine.dice import DiceEngine
from charforge.engine.inventory import EquipmentInventory
from charforge.engine.progression import ProgressionController
from charforge.engine.resources import ResourceManager
from charforge.engine.stats import StatEngine
from charforge.models.components import AbilityBook, InventoryState, ProgressionState, StatBlock
from charforge.models.enums import AbilityType, Race, ResourceKind, Stat
from charforge.models.races import get_race_traits, resolve_racial_bonuses
from charforge.models.results import ActionResult, AttackOutcome, EquipCheck, EquippedWeapons
from charforge.models.snapshot import CharacterSnapshot


if TYPE_CHECKING:
    from charforge.models.components import ResourcePools
    from charforge.models.items import InventoryItem
    from charforge.models.stats import StatLine


logger = get_logger(__name__)

Listener = Callable[["Character"], None]

_R = TypeVar("_R")


def starting_stats(high: Stat | str, mid: Stat | str) -> StatBlock:
    """Build the creation stat block: 16 for high, 10 for mid, 6 for the rest.

    Raises:
        InvalidGameStateError: If high and mid name the same stat.
        UnknownStatError: If either key is not a stat.
    """
    high_stat, mid_stat = Stat.parse(high), Stat.parse(mid)
    if high_stat == mid_stat:
        raise InvalidGameStateError(
            "High and mid stats must differ",
            details={"high": high_stat.value, "mid": mid_stat.value},
        )
    block = StatBlock(
        strength=LOW_STAT_VALUE,
        dexterity=LOW_STAT_VALUE,
        intelligence=LOW_STAT_VALUE,
    )
    block.set_base(high_stat, HIGH_STAT_VALUE)
    block.set_base(mid_stat, MID_STAT_VALUE)
    return block


class Character:
    """A player character.

    Args:
        high: Stat that starts at 16.
        mid: Stat that starts at 10. The third stat starts at 6.
        name: Display name.
        race: Optional race, whose bonuses are folded into the base stats.
        racial_bonuses: Stats receiving the race's free +1 bonuses, in order.
        dice: Dice engine for every roll; built from settings if omitted.
        rules: Balance values; loaded from settings if omitted.
        max_items: Optional inventory capacity.

    Raises:
        InvalidGameStateError: If high equals mid or the race is unknown.
        UnknownStatError: If a stat key is not a stat.
    """

    def __init__(
        self,
        high: Stat | str,
        mid: Stat | str,
        *,
        name: str = "",
        race: Race | str | None = None,
        racial_bonuses: list[Stat | str] | None = None,
        dice: DiceEngine | None = None,
        rules: RulesSettings | None = None,
        max_items: int | None = None,
    ) -> None:
        rules = rules or get_settings().rules
        stats = starting_stats(high, mid)
        abilities: list[str] = []

        race_value: Race | None = None
        if race is not None:
            try:
                race_value = Race(race)
            except ValueError as exc:
                raise InvalidGameStateError(
                    f"Unknown race: {race!r}",
                    expected_states=[r.value for r in Race],
                ) from exc
            for stat, bonus in resolve_racial_bonuses(race_value, racial_bonuses):
                stats.set_base(stat, stats.get_base(stat) + bonus)
            abilities.append(get_race_traits(race_value).ability)

        effective = StatEngine(stats, rules=rules).effective()
        resources = ResourceManager.baseline(effective, 1, rules=rules).pools

        self._wire(
            name=name,
            race=race_value,
            abilities=abilities,
            stats=stats,
            progression=ProgressionState(),
            resources=resources,
            inventory=InventoryState(max_items=max_items),
            learned=AbilityBook(),
            dice=dice,
            rules=rules,
        )
        self._progression.roll_initial_hp()
        logger.info(
            "Character created",
            name=name,
            race=race_value,
            **stats.base().as_dict(),
            hp=self.hp,
        )

    def _wire(
        self,
        *,
        name: str,
        race: Race | None,
        abilities: list[str],
        stats: StatBlock,
        progression: ProgressionState,
        resources: ResourcePools,
        inventory: InventoryState,
        learned: AbilityBook,
        dice: DiceEngine | None,
        rules: RulesSettings,
    ) -> None:
        self.name = name
        self._race = race
        self._abilities = abilities
        self._rules = rules
        self._dice = dice or DiceEngine.from_settings()
        self._listeners: list[Listener] = []

        self._stats = StatEngine(stats, rules=rules)
        self._resources = ResourceManager(resources, rules=rules)
        self._inventory = EquipmentInventory(
            inventory,
            stats_provider=self._stats.effective,
            rules=rules,
        )
        self._progression = ProgressionController(
            progression,
            stats=self._stats,
            resources=self._resources,
            dice=self._dice,
            rules=rules,
        )
        self._combat = CombatResolver(
            stats=self._stats,
            inventory=self._inventory,
            resources=self._resources,
            dice=self._dice,
            level_provider=lambda: self._progression.level,
            rules=rules,
        )
        self._learned = AbilityManager(learned, self._resources)

    def __repr__(self) -> str:
        return (
            f"Character(name={self.name!r}, level={self.level}, "
            f"stats={self._stats.base().as_dict()!r})"
        )

    # =========================================================================
    # Components
    # =========================================================================

    @property
    def dice(self) -> DiceEngine:
        return self._dice

    @property
    def rules(self) -> RulesSettings:
        return self._rules

    @property
    def stats(self) -> StatEngine:
        return self._stats

    @property
    def inventory(self) -> EquipmentInventory:
        return self._inventory

    @property
    def resources(self) -> ResourceManager:
        return self._resources

    @property
    def progression(self) -> ProgressionController:
        return self._progression

    @property
    def combat(self) -> CombatResolver:
        return self._combat

    @property
    def ability_manager(self) -> AbilityManager:
        return self._learned

    # =========================================================================
    # Identity & progression fields
    # =========================================================================

    @property
    def race(self) -> Race | None:
        return self._race

    @property
    def abilities(self) -> list[str]:
        return list(self._abilities)

    @property
    def strength(self) -> int:
        return self._stats.block.strength

    @property
    def dexterity(self) -> int:
        return self._stats.block.dexterity

    @property
    def intelligence(self) -> int:
        return self._stats.block.intelligence

    @property
    def level(self) -> int:
        return self._progression.state.level

    @property
    def hp(self) -> int | float:
        return self._progression.state.hp

    @property
    def hp_rolls(self) -> list[int | float]:
        return list(self._progression.state.hp_rolls)

    @property
    def level_up_choices(self) -> list[Stat]:
        return list(self._progression.state.level_up_choices)

    @property
    def pending_level_up_points(self) -> int:
        return self._progression.state.pending_level_up_points

    @property
    def is_leveling_up(self) -> bool:
        return self._progression.is_leveling_up

    @property
    def proficiency(self) -> int:
        return self._progression.proficiency

    # =========================================================================
    # Stats
    # =========================================================================

    @property
    def use_stat_overrides(self) -> bool:
        return self._stats.use_overrides

    @property
    def stat_modifiers(self) -> dict[Stat, int]:
        return dict(self._stats.block.stat_modifiers)

    def effective_stats(self) -> StatLine:
        return self._stats.effective()

    def modifier(self, stat: Stat | str) -> int:
        return self._stats.modifier(stat)

    def equipped_stat_bonuses(self) -> StatLine:
        return self._inventory.equipped_stat_bonuses()

    def equipped_maneuver_bonuses(self) -> dict[ResourceKind, int]:
        return self._inventory.equipped_maneuver_bonuses()

    def set_stat_modifier(self, stat: Stat | str, requested: int) -> int | None:
        actual = self._stats.set_stat_modifier(stat, requested)
        if actual is not None:
            self._notify()
        return actual

    def set_use_stat_overrides(self, enabled: bool) -> None:
        self._stats.set_use_overrides(enabled)
        self._notify()

    def toggle_stat_overrides(self) -> bool:
        enabled = self._stats.toggle_overrides()
        self._notify()
        return enabled

    def reset_stat_modifiers(self) -> None:
        self._stats.reset_stat_modifiers()
        self._notify()

    # =========================================================================
    # Leveling
    # =========================================================================

    def start_level_up(self) -> bool:
        return self._notify_if(self._progression.start_level_up())

    def allocate_point(self, stat: Stat | str) -> bool:
        return self._notify_if(self._progression.allocate_point(stat))

    def level_up(self, stat: Stat | str) -> bool:
        return self._notify_if(self._progression.level_up(stat))

    # =========================================================================
    # Resources
    # =========================================================================

    @property
    def sorcery_points(self) -> int:
        return self._resources.current(ResourceKind.SORCERY)

    @property
    def max_sorcery_points(self) -> int:
        return self._resources.maximum(ResourceKind.SORCERY)

    @property
    def finesse_points(self) -> int:
        return self._resources.current(ResourceKind.FINESSE)

    @property
    def max_finesse_points(self) -> int:
        return self._resources.maximum(ResourceKind.FINESSE)

    @property
    def combat_maneuver_points(self) -> int:
        return self._resources.current(ResourceKind.COMBAT)

    @property
    def max_combat_maneuver_points(self) -> int:
        return self._resources.maximum(ResourceKind.COMBAT)

    def spend(self, kind: ResourceKind | str) -> bool:
        return self._notify_if(self._resources.spend(kind))

    def spend_sorcery_point(self) -> bool:
        return self.spend(ResourceKind.SORCERY)

    def spend_finesse_point(self) -> bool:
        return self.spend(ResourceKind.FINESSE)

    def spend_combat_maneuver_point(self) -> bool:
        return self.spend(ResourceKind.COMBAT)

    def short_rest(self) -> None:
        self._resources.short_rest()
        self._notify()

    def long_rest(self) -> None:
        self._resources.long_rest()
        self._notify()

    def rest(self) -> None:
        self.long_rest()

    def maneuvers(self, stat: Stat | str) -> int:
        return self._resources.maneuvers(stat, self._stats.effective(), self.level)

    def can_perform_finesse_attacks(self) -> bool:
        return self._resources.can_perform_finesse_attacks(self._stats.effective())

    # =========================================================================
    # Inventory
    # =========================================================================

    def add_item(self, item: InventoryItem) -> bool:
        return self._notify_if(self._inventory.add_item(item))

    def remove_item(self, item_id: str) -> bool:
        return self._notify_if(self._inventory.remove_item(item_id))

    def can_equip(self, item: InventoryItem) -> EquipCheck:
        return self._inventory.can_equip(item)

    def equip(self, item_id: str) -> ActionResult:
        return self._notify_if(self._inventory.equip(item_id))

    def unequip(self, item_id: str) -> bool:
        return self._notify_if(self._inventory.unequip(item_id))

    def modify_enchantment(self, item_id: str, delta: int) -> ActionResult:
        return self._notify_if(self._inventory.modify_enchantment(item_id, delta))

    def set_enchantment(self, item_id: str, level: int) -> ActionResult:
        return self._notify_if(self._inventory.set_enchantment(item_id, level))

    def get_equipped_weapons(self) -> EquippedWeapons:
        return self._inventory.get_equipped_weapons()

    # =========================================================================
    # Combat
    # =========================================================================

    def main_hand_attack_roll(self) -> int | float:
        return self._combat.main_hand_attack_roll()

    def off_hand_attack_roll(self) -> int | float:
        return self._combat.off_hand_attack_roll()

    def main_hand_damage_roll(self) -> int | float:
        return self._combat.main_hand_damage_roll()

    def off_hand_damage_roll(self) -> int | float:
        return self._combat.off_hand_damage_roll()

    def ac(self) -> int:
        return self._combat.ac()

    def hide_roll(self) -> int | float:
        return self._combat.hide_roll()

    def sneak_attack_main_hand(self) -> AttackOutcome:
        return self._notify_if(self._combat.sneak_attack_main_hand())

    def sneak_attack_off_hand(self) -> AttackOutcome:
        return self._notify_if(self._combat.sneak_attack_off_hand())

    def assassination_main_hand(self) -> AttackOutcome:
        return self._combat.assassination_main_hand()

    def assassination_off_hand(self) -> AttackOutcome:
        return self._combat.assassination_off_hand()

    # =========================================================================
    # Learned abilities
    # =========================================================================

    def learn_ability(self, name: str, ability_type: AbilityType | str) -> bool:
        """Learn a master-list ability, recording the current level."""
        return self._notify_if(self._learned.learn_ability(name, ability_type, self.level))

    def forget_ability(self, name: str, ability_type: AbilityType | str) -> bool:
        return self._notify_if(self._learned.forget_ability(name, ability_type))

    def clear_learned_abilities(self) -> None:
        if self._learned.clear_abilities():
            self._notify()

    def has_ability(self, name: str, ability_type: AbilityType | str) -> bool:
        return self._learned.has_ability(name, ability_type)

    def use_ability(self, name: str, ability_type: AbilityType | str) -> ActionResult:
        """Use a learned ability, paying one point from its pool."""
        return self._notify_if(self._learned.use_ability(name, ability_type))

    # =========================================================================
    # Observers
    # =========================================================================

    def subscribe(self, listener: Listener) -> None:
        """Call ``listener(character)`` after every applied mutation."""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.exception("Character listener failed", name=self.name)

    def _notify_if(self, result: _R) -> _R:
        succeeded = getattr(result, "success", result)
        if succeeded and getattr(result, "changed", True):
            self._notify()
        return result

    # =========================================================================
    # Persistence
    # =========================================================================

    def serialize(self) -> CharacterSnapshot:
        """Capture the full character state.

        The snapshot is a deep copy, so later mutations don't leak into it.

        Raises:
            SnapshotError: If the live state fails snapshot validation.
        """
        try:
            return CharacterSnapshot(
                name=self.name,
                race=self._race,
                abilities=list(self._abilities),
                stats=self._stats.block.model_copy(deep=True),
                progression=self._progression.state.model_copy(deep=True),
                resources=self._resources.pools.model_copy(deep=True),
                inventory=self._inventory.state.model_copy(deep=True),
                learned_abilities=self._learned.book.model_copy(deep=True),
            )
        except PydanticValidationError as exc:
            raise SnapshotError(
                "Character state cannot be captured",
                details={"name": self.name, "errors": exc.error_count()},
            ) from exc

    @classmethod
    def deserialize(
        cls,
        snapshot: CharacterSnapshot | dict,
        *,
        dice: DiceEngine | None = None,
        rules: RulesSettings | None = None,
    ) -> Character:
        """Rebuild a character from a snapshot or its dumped dict.

        Raises:
            SnapshotError: If the payload is invalid.
        """
        try:
            # Round-trip through a dump so the character never shares
            # mutable state with the caller's snapshot.
            payload = snapshot.model_dump() if isinstance(snapshot, CharacterSnapshot) else snapshot
            restored = CharacterSnapshot.model_validate(payload)
        except PydanticValidationError as exc:
            raise SnapshotError(
                "Invalid character snapshot",
                details={"errors": exc.error_count()},
            ) from exc

        character = cls.__new__(cls)
        character._wire(
            name=restored.name,
            race=restored.race,
            abilities=list(restored.abilities),
            stats=restored.stats,
            progression=restored.progression,
            resources=restored.resources,
            inventory=restored.inventory,
            learned=restored.learned_abilities,
            dice=dice,
            rules=rules or get_settings().rules,
        )
        logger.info("Character restored", name=restored.name, level=restored.progression.level)
        return character


__all__ = [
    "Listener",
    "starting_stats",
    "Character",
]
