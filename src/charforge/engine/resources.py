"""Maneuver resource pools.

Sorcery, finesse and combat maneuver points are three independent pools,
each gated by one stat. The manager spends and restores points; maxima only
grow through leveling, which calls back into ``grant`` or
``update_max_values``.
"""

from __future__ import annotations

from charforge.core.config import RulesSettings, get_settings
from charforge.core.logging import get_logger
from charforge.models.components import ResourcePool, ResourcePools
from charforge.models.enums import ResourceKind, Stat
from charforge.models.stats import StatLine


logger = get_logger(__name__)


def max_values_for(stats: StatLine, level: int, rules: RulesSettings) -> dict[ResourceKind, int]:
    """Pool maxima a character with these stats and level starts from.

    Args:
        stats: Effective stats.
        level: Character level.
        rules: Balance values.

    Returns:
        Maximum for every pool.
    """
    sorcery = rules.base_sorcery_points if stats.intelligence > rules.sorcery_int_threshold else 0
    finesse = 1 if stats.dexterity >= rules.finesse_dex_threshold else 0
    return {
        ResourceKind.SORCERY: sorcery,
        ResourceKind.FINESSE: finesse,
        ResourceKind.COMBAT: combat_max_for(stats, level, rules),
    }


def combat_max_for(stats: StatLine, level: int, rules: RulesSettings) -> int:
    """Combat maneuver maximum: one per level once strength qualifies."""
    return level if stats.strength >= rules.combat_str_threshold else 0


class ResourceManager:
    """Spends and restores the three maneuver pools.

    Example:
        >>> manager = ResourceManager.baseline(StatLine(16, 10, 6), level=1)
        >>> manager.spend(ResourceKind.COMBAT)
        True
        >>> manager.spend(ResourceKind.COMBAT)
        False
    """

    def __init__(self, pools: ResourcePools, *, rules: RulesSettings | None = None) -> None:
        self._pools = pools
        self._rules = rules or get_settings().rules

    @classmethod
    def baseline(
        cls,
        stats: StatLine,
        level: int = 1,
        *,
        rules: RulesSettings | None = None,
    ) -> ResourceManager:
        """Create full pools sized from the given effective stats."""
        rules = rules or get_settings().rules
        maxima = max_values_for(stats, level, rules)
        pools = ResourcePools(
            sorcery=ResourcePool.full(maxima[ResourceKind.SORCERY]),
            finesse=ResourcePool.full(maxima[ResourceKind.FINESSE]),
            combat=ResourcePool.full(maxima[ResourceKind.COMBAT]),
        )
        logger.debug("Resource baseline", **{kind.value: value for kind, value in maxima.items()})
        return cls(pools, rules=rules)

    @property
    def pools(self) -> ResourcePools:
        return self._pools

    def pool(self, kind: ResourceKind | str) -> ResourcePool:
        return self._pools.get(kind)

    def current(self, kind: ResourceKind | str) -> int:
        return self.pool(kind).current

    def maximum(self, kind: ResourceKind | str) -> int:
        return self.pool(kind).max

    # -------------------------------------------------------------------------
    # Spending & resting
    # -------------------------------------------------------------------------

    def spend(self, kind: ResourceKind | str) -> bool:
        """Spend one point from a pool.

        Returns:
            True if a point was spent, False if the pool was empty.
        """
        pool = self.pool(kind)
        if not pool.spend():
            logger.info("Spend rejected: pool empty", pool=ResourceKind(kind))
            return False
        logger.info("Point spent", pool=ResourceKind(kind), remaining=pool.current)
        return True

    def short_rest(self) -> None:
        """Restore half of each pool's maximum, rounded up."""
        for kind in ResourceKind:
            pool = self.pool(kind)
            pool.restore(pool.half_max())
        logger.info("Short rest", **self._currents())

    def long_rest(self) -> None:
        """Refill every pool."""
        for pool in self._pools.all():
            pool.refill()
        logger.info("Long rest", **self._currents())

    def rest(self) -> None:
        self.long_rest()

    # -------------------------------------------------------------------------
    # Growth
    # -------------------------------------------------------------------------

    def grant(self, kind: ResourceKind | str, amount: int = 1) -> None:
        """Raise a pool's maximum and current by ``amount``."""
        self.pool(kind).grant(amount)
        logger.info("Pool maximum granted", pool=ResourceKind(kind), amount=amount)

    def recompute_combat(self, stats: StatLine, level: int) -> int:
        """Resize the combat pool from strength and level. Returns the delta."""
        return self._pools.combat.rescale(combat_max_for(stats, level, self._rules))

    def update_max_values(self, stats: StatLine, level: int) -> dict[ResourceKind, int]:
        """Recompute every maximum from stats and level.

        A raised maximum raises current by the same amount; a lowered one
        clamps current down.

        Returns:
            The change applied to each maximum.
        """
        deltas = {
            kind: self.pool(kind).rescale(new_max)
            for kind, new_max in max_values_for(stats, level, self._rules).items()
        }
        logger.debug("Resource maxima recomputed", **{k.value: v for k, v in deltas.items()})
        return deltas

    def ensure_baseline(self, stats: StatLine, level: int) -> dict[ResourceKind, int]:
        """Lift every maximum to at least its stat baseline.

        Unlike ``update_max_values`` this never lowers a maximum, so points
        granted by earlier level-ups survive.

        Returns:
            The change applied to each maximum.
        """
        deltas = {
            kind: self.pool(kind).raise_to(minimum)
            for kind, minimum in max_values_for(stats, level, self._rules).items()
        }
        if any(deltas.values()):
            logger.info("Pool baseline reached", **{k.value: v for k, v in deltas.items()})
        return deltas

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def maneuvers(self, stat: Stat | str, stats: StatLine, level: int) -> int:
        """Maneuvers available through one stat."""
        match Stat.parse(stat):
            case Stat.INT:
                return self._pools.sorcery.current
            case Stat.DEX:
                return self._pools.finesse.current
            case Stat.STR:
                return combat_max_for(stats, level, self._rules)

    def can_perform_finesse_attacks(self, stats: StatLine) -> bool:
        return (
            stats.dexterity >= self._rules.finesse_dex_threshold
            and self._pools.finesse.current > 0
        )

    def _currents(self) -> dict[str, int]:
        return {kind.value: self.pool(kind).current for kind in ResourceKind}


__all__ = [
    "max_values_for",
    "combat_max_for",
    "ResourceManager",
]
