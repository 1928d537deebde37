"""State components owned by a character.

Components are pure data containers with a few invariant-preserving
mutators. The engine classes in ``charforge.engine`` hold the rules and
drive these components; a snapshot is nothing more than the components
dumped side by side.
"""

from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict, Field, model_validator

from charforge.models.abilities import LearnedAbility
from charforge.models.enums import ResourceKind, Stat
from charforge.models.items import InventoryItem
from charforge.models.stats import StatLine


class Component(BaseModel):
    """Base class for character state components."""

    model_config = ConfigDict(
        frozen=False,
        validate_assignment=True,
        extra="ignore",
    )


# =============================================================================
# Stats
# =============================================================================


def _zero_modifiers() -> dict[Stat, int]:
    return {stat: 0 for stat in Stat}


class StatBlock(Component):
    """Base stats plus the optional override deltas.

    Base stats already include racial bonuses and level-up allocations.
    Override deltas only apply while ``use_stat_overrides`` is on.
    """

    strength: int = Field(default=10, ge=0, description="Base strength")
    dexterity: int = Field(default=10, ge=0, description="Base dexterity")
    intelligence: int = Field(default=10, ge=0, description="Base intelligence")
    use_stat_overrides: bool = Field(default=False)
    stat_modifiers: dict[Stat, int] = Field(default_factory=_zero_modifiers)

    @model_validator(mode="after")
    def fill_missing_modifiers(self) -> "StatBlock":
        for stat in Stat:
            self.stat_modifiers.setdefault(stat, 0)
        return self

    def base(self) -> StatLine:
        return StatLine(self.strength, self.dexterity, self.intelligence)

    def overrides(self) -> StatLine:
        return StatLine(
            self.stat_modifiers[Stat.STR],
            self.stat_modifiers[Stat.DEX],
            self.stat_modifiers[Stat.INT],
        )

    def get_base(self, stat: Stat | str) -> int:
        return self.base().get(stat)

    def set_base(self, stat: Stat | str, value: int) -> None:
        match Stat.parse(stat):
            case Stat.STR:
                self.strength = value
            case Stat.DEX:
                self.dexterity = value
            case Stat.INT:
                self.intelligence = value


# =============================================================================
# Resources
# =============================================================================


class ResourcePool(Component):
    """A maneuver pool with a current and a maximum value.

    ``current <= max`` is validated on construction and on every field
    assignment, so the mutators below order their writes to keep it true.
    """

    current: int = Field(default=0, ge=0)
    max: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def check_current_within_max(self) -> "ResourcePool":
        if self.current > self.max:
            raise ValueError(f"current ({self.current}) exceeds max ({self.max})")
        return self

    @classmethod
    def full(cls, maximum: int) -> ResourcePool:
        """Create a pool filled to its maximum."""
        return cls(current=maximum, max=maximum)

    @property
    def is_empty(self) -> bool:
        return self.current == 0

    def spend(self, amount: int = 1) -> bool:
        """Spend points if enough are available. Returns success."""
        if amount <= 0 or self.current < amount:
            return False
        self.current -= amount
        return True

    def restore(self, amount: int) -> int:
        """Restore up to ``amount`` points, capped at max. Returns points restored."""
        restored = max(0, min(amount, self.max - self.current))
        self.current += restored
        return restored

    def refill(self) -> None:
        self.current = self.max

    def half_max(self) -> int:
        """Points regained on a short rest."""
        return math.ceil(self.max / 2)

    def grant(self, amount: int) -> None:
        """Raise both max and current by ``amount``."""
        if amount <= 0:
            return
        self.max += amount
        self.current += amount

    def rescale(self, new_max: int) -> int:
        """Move to a new maximum.

        A raised maximum raises current by the same delta. A lowered maximum
        clamps current down without restoring spent points.

        Returns:
            The change applied to the maximum.
        """
        new_max = max(0, new_max)
        delta = new_max - self.max
        if delta > 0:
            self.max = new_max
            self.current += delta
        elif delta < 0:
            self.current = min(self.current, new_max)
            self.max = new_max
        return delta

    def raise_to(self, minimum: int) -> int:
        """Raise the maximum to at least ``minimum``, never lowering it.

        Returns:
            The change applied to the maximum.
        """
        if minimum <= self.max:
            return 0
        return self.rescale(minimum)


class ResourcePools(Component):
    """The three maneuver pools."""

    sorcery: ResourcePool = Field(default_factory=ResourcePool)
    finesse: ResourcePool = Field(default_factory=ResourcePool)
    combat: ResourcePool = Field(default_factory=ResourcePool)

    def get(self, kind: ResourceKind | str) -> ResourcePool:
        match ResourceKind(kind):
            case ResourceKind.SORCERY:
                return self.sorcery
            case ResourceKind.FINESSE:
                return self.finesse
            case ResourceKind.COMBAT:
                return self.combat

    def all(self) -> tuple[ResourcePool, ResourcePool, ResourcePool]:
        return (self.sorcery, self.finesse, self.combat)


# =============================================================================
# Progression & Inventory
# =============================================================================


class ProgressionState(Component):
    """Level, hit points and level-up bookkeeping."""

    level: int = Field(default=1, ge=1)
    hp: int | float = Field(default=0)
    hp_rolls: list[int | float] = Field(default_factory=list)
    level_up_choices: list[Stat] = Field(default_factory=list)
    pending_level_up_points: int = Field(default=0, ge=0)


class InventoryState(Component):
    """Carried items. ``max_items`` of None means unlimited."""

    items: list[InventoryItem] = Field(default_factory=list)
    max_items: int | None = Field(default=None, ge=1)


class AbilityBook(Component):
    """Learned metamagic, spellwords and combat maneuvers, in learning order."""

    learned: list[LearnedAbility] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_unique(self) -> "AbilityBook":
        ids = [ability.id for ability in self.learned]
        if len(ids) != len(set(ids)):
            raise ValueError("Ability learned twice")
        return self


__all__ = [
    "Component",
    "StatBlock",
    "ResourcePool",
    "ResourcePools",
    "ProgressionState",
    "InventoryState",
    "AbilityBook",
]
