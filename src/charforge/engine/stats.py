"""Effective stat computation.

Base stats already carry racial bonuses and level-up allocations. On top
of them sit the optional override deltas (a table-side correction tool,
applied only while enabled) and, for the queries that ask for it, the
bonuses of equipped items. Every effective value is clamped to the stat
bounds, whatever the inputs.
"""

from __future__ import annotations

from charforge.core.config import RulesSettings, get_settings
from charforge.core.logging import get_logger
from charforge.models.components import StatBlock
from charforge.models.enums import Stat
from charforge.models.stats import StatLine, modifier


logger = get_logger(__name__)


def clamp_stat(value: int, floor: int = 0, ceiling: int = 30) -> int:
    """Clamp a stat value into [floor, ceiling]."""
    return max(floor, min(ceiling, value))


def effective_stats(
    base: StatLine,
    overrides: StatLine,
    equipment_bonuses: StatLine | None = None,
    use_overrides: bool = False,
    *,
    floor: int = 0,
    ceiling: int = 30,
) -> StatLine:
    """Combine base stats, override deltas and equipment bonuses.

    Args:
        base: Base stats, racial bonuses included.
        overrides: Override deltas, ignored unless ``use_overrides``.
        equipment_bonuses: Bonuses from equipped items, if they apply.
        use_overrides: Whether override deltas are active.
        floor: Lowest allowed stat.
        ceiling: Highest allowed stat.

    Returns:
        The clamped effective stats.
    """
    combined = base
    if use_overrides:
        combined = combined.plus(overrides)
    if equipment_bonuses is not None:
        combined = combined.plus(equipment_bonuses)
    return combined.clamped(floor, ceiling)


class StatEngine:
    """Reads and adjusts a character's stat block.

    The engine keeps no state of its own; every query reads the block.
    """

    def __init__(self, block: StatBlock, *, rules: RulesSettings | None = None) -> None:
        self._block = block
        self._rules = rules or get_settings().rules

    @property
    def block(self) -> StatBlock:
        return self._block

    @property
    def use_overrides(self) -> bool:
        return self._block.use_stat_overrides

    def clamp(self, value: int) -> int:
        return clamp_stat(value, self._rules.stat_floor, self._rules.stat_ceiling)

    def base(self) -> StatLine:
        return self._block.base()

    def effective(self, equipment_bonuses: StatLine | None = None) -> StatLine:
        """Effective stats, optionally including equipment bonuses."""
        return effective_stats(
            self._block.base(),
            self._block.overrides(),
            equipment_bonuses,
            self._block.use_stat_overrides,
            floor=self._rules.stat_floor,
            ceiling=self._rules.stat_ceiling,
        )

    def effective_stat(self, stat: Stat | str) -> int:
        return self.effective().get(stat)

    def modifier(self, stat: Stat | str) -> int:
        """Modifier of one effective stat."""
        return modifier(self.effective_stat(stat))

    def get_stat_modifier(self, stat: Stat | str) -> int:
        """Stored override delta for one stat."""
        return self._block.stat_modifiers[Stat.parse(stat)]

    def set_stat_modifier(self, stat: Stat | str, requested: int) -> int | None:
        """Store an override delta, saturating at the stat bounds.

        The stored delta is ``clamp(base + requested) - base``, so a request
        beyond the bounds is reduced rather than rejected. Nothing is stored
        while overrides are disabled.

        Args:
            stat: Stat to adjust.
            requested: Desired delta.

        Returns:
            The delta actually stored, or None if overrides are disabled.

        Raises:
            UnknownStatError: If ``stat`` is not a stat key.
        """
        key = Stat.parse(stat)
        if not self._block.use_stat_overrides:
            logger.info("Stat override ignored: overrides disabled", stat=key, requested=requested)
            return None
        base = self._block.get_base(key)
        actual = self.clamp(base + requested) - base
        modifiers = dict(self._block.stat_modifiers)
        modifiers[key] = actual
        self._block.stat_modifiers = modifiers
        logger.info("Stat override set", stat=key, requested=requested, actual=actual)
        return actual

    def set_use_overrides(self, enabled: bool) -> None:
        self._block.use_stat_overrides = enabled
        logger.info("Stat overrides toggled", enabled=enabled)

    def toggle_overrides(self) -> bool:
        """Flip the override switch. Returns the new state."""
        self.set_use_overrides(not self._block.use_stat_overrides)
        return self._block.use_stat_overrides

    def reset_stat_modifiers(self) -> None:
        self._block.stat_modifiers = {stat: 0 for stat in Stat}
        logger.info("Stat overrides cleared")

    def increase_base(self, stat: Stat | str, amount: int) -> int:
        """Raise a base stat. Returns the new base value."""
        key = Stat.parse(stat)
        new_value = self._block.get_base(key) + amount
        self._block.set_base(key, new_value)
        return new_value


__all__ = [
    "clamp_stat",
    "effective_stats",
    "StatEngine",
]
