"""Learned abilities.

Characters learn metamagic, spellwords and combat maneuvers from fixed
master lists. Learning only records the ability; using one costs a point
from the pool its type draws on (sorcery for metamagic and spellwords,
combat maneuver points for maneuvers).
"""

from __future__ import annotations

from charforge.core.logging import get_logger
from charforge.engine.resources import ResourceManager
from charforge.models.abilities import LearnedAbility, ability_id, is_known_ability, master_list
from charforge.models.components import AbilityBook
from charforge.models.enums import AbilityType
from charforge.models.results import ActionResult


logger = get_logger(__name__)


class AbilityManager:
    """Learns, forgets and uses a character's abilities.

    Args:
        book: The learned abilities to manage.
        resources: Pools that pay for ability use.

    Example:
        >>> manager = AbilityManager(AbilityBook(), resources)
        >>> manager.learn_ability("Cleave", AbilityType.COMBAT_MANEUVER)
        True
        >>> manager.has_ability("Cleave", "combat_maneuver")
        True
    """

    def __init__(self, book: AbilityBook, resources: ResourceManager) -> None:
        self._book = book
        self._resources = resources

    @property
    def book(self) -> AbilityBook:
        return self._book

    # =========================================================================
    # Learning
    # =========================================================================

    def learn_ability(
        self,
        name: str,
        ability_type: AbilityType | str,
        level: int | None = None,
    ) -> bool:
        """Learn an ability from its master list.

        Returns:
            False if the name is not on the list or is already learned.
        """
        kind = AbilityType(ability_type)
        if not is_known_ability(name, kind):
            logger.info("Cannot learn unknown ability", name=name, type=kind)
            return False
        if self.has_ability(name, kind):
            logger.info("Ability already learned", name=name, type=kind)
            return False

        ability = LearnedAbility.learn(name, kind, level)
        self._book.learned = [*self._book.learned, ability]
        logger.info(
            "Ability learned",
            ability_id=ability.id,
            level=level,
            total_abilities=len(self._book.learned),
        )
        return True

    def forget_ability(self, name: str, ability_type: AbilityType | str) -> bool:
        """Forget a learned ability. Returns False if it wasn't learned."""
        key = ability_id(name, ability_type)
        remaining = [ability for ability in self._book.learned if ability.id != key]
        if len(remaining) == len(self._book.learned):
            logger.info("Cannot forget ability: not learned", ability_id=key)
            return False

        self._book.learned = remaining
        logger.info("Ability forgotten", ability_id=key, remaining_abilities=len(remaining))
        return True

    def clear_abilities(self) -> int:
        """Forget everything. Returns how many abilities were dropped."""
        dropped = len(self._book.learned)
        self._book.learned = []
        logger.info("Abilities cleared", dropped=dropped)
        return dropped

    # =========================================================================
    # Queries
    # =========================================================================

    def has_ability(self, name: str, ability_type: AbilityType | str) -> bool:
        key = ability_id(name, ability_type)
        return any(ability.id == key for ability in self._book.learned)

    def abilities_by_type(self, ability_type: AbilityType | str) -> list[LearnedAbility]:
        """Learned abilities of one type, sorted by name."""
        kind = AbilityType(ability_type)
        return sorted(
            (ability for ability in self._book.learned if ability.type == kind),
            key=lambda ability: ability.name,
        )

    def all_abilities(self) -> list[LearnedAbility]:
        """Every learned ability, sorted by type and then name."""
        return sorted(self._book.learned, key=lambda ability: (ability.type.value, ability.name))

    def ability_count(self, ability_type: AbilityType | str | None = None) -> int:
        if ability_type is None:
            return len(self._book.learned)
        return len(self.abilities_by_type(ability_type))

    def available_abilities(self, ability_type: AbilityType | str) -> list[str]:
        """Master-list names of a type not learned yet, in list order."""
        learned = {ability.name for ability in self.abilities_by_type(ability_type)}
        return [name for name in master_list(ability_type) if name not in learned]

    # =========================================================================
    # Use
    # =========================================================================

    def use_ability(self, name: str, ability_type: AbilityType | str) -> ActionResult:
        """Use a learned ability, spending one point from its pool."""
        kind = AbilityType(ability_type)
        if not self.has_ability(name, kind):
            return ActionResult.fail(f"{name} has not been learned")
        if not self._resources.spend(kind.resource):
            return ActionResult.fail(f"No {kind.resource.value} points remaining")

        logger.info(
            "Ability used",
            ability_id=ability_id(name, kind),
            pool=kind.resource,
            remaining=self._resources.current(kind.resource),
        )
        return ActionResult.ok()


__all__ = [
    "AbilityManager",
]
