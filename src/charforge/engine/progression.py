"""Leveling.

A level-up is two-phase. ``start_level_up`` raises the level, rolls hit
points and hands out stat points; ``allocate_point`` spends them one at a
time and, with the last one, grants the level's resource bonuses. A point
that lifts a stat over a pool's threshold first brings that pool up to its
starting size; earlier grants are never taken back. While
points are pending the character is in the LEVELING_UP state and a second
level-up cannot start.

``level_up`` is the older single-call path: +2 to one stat, then every
resource maximum is recomputed from scratch instead of granted
incrementally. Both paths are kept; they can disagree on resource maxima
for the same history.
"""

from __future__ import annotations

from charforge.core.config import RulesSettings, get_settings
from charforge.core.logging import get_logger
from charforge.engine.dice import DiceEngine
from charforge.engine.resources import ResourceManager
from charforge.engine.stats import StatEngine
from charforge.models.components import ProgressionState
from charforge.models.enums import LevelUpState, ResourceKind, Stat
from charforge.models.stats import modifier


logger = get_logger(__name__)


def hit_die_for(str_mod: int, rules: RulesSettings) -> int:
    """Hit die for a (non-negative) strength modifier.

    The table is indexed by ``str_mod - 1``; a modifier of 0 or one past the
    end of the table falls back to the configured die.
    """
    table = rules.hit_dice_from_mod
    if 1 <= str_mod <= len(table):
        return table[str_mod - 1]
    return rules.hit_die_fallback


class ProgressionController:
    """Drives level-ups for one character.

    Args:
        state: Level, hit points and level-up bookkeeping.
        stats: Engine over the character's stat block.
        resources: The character's resource pools.
        dice: Dice used for hit point rolls.
        rules: Balance values.
    """

    def __init__(
        self,
        state: ProgressionState,
        *,
        stats: StatEngine,
        resources: ResourceManager,
        dice: DiceEngine,
        rules: RulesSettings | None = None,
    ) -> None:
        self._state = state
        self._stats = stats
        self._resources = resources
        self._dice = dice
        self._rules = rules or get_settings().rules

    @property
    def state(self) -> ProgressionState:
        return self._state

    @property
    def level(self) -> int:
        return self._state.level

    @property
    def phase(self) -> LevelUpState:
        if self._state.pending_level_up_points > 0:
            return LevelUpState.LEVELING_UP
        return LevelUpState.IDLE

    @property
    def is_leveling_up(self) -> bool:
        return self.phase == LevelUpState.LEVELING_UP

    @property
    def proficiency(self) -> int:
        return self._state.level

    # =========================================================================
    # Hit points
    # =========================================================================

    def roll_hp(self) -> int | float:
        """Roll hit points for one level and record them.

        Returns:
            The recorded roll, at least 1.
        """
        str_mod = max(modifier(self._stats.effective_stat(Stat.STR)), 0)
        hit_die = hit_die_for(str_mod, self._rules)
        roll = self._dice.roll_or_average(1, hit_die, str_mod)
        recorded = roll if roll > 0 else 1
        self._record_hp(recorded)
        logger.debug("HP rolled", str_mod=str_mod, hit_die=hit_die, roll=roll, recorded=recorded)
        return recorded

    def roll_initial_hp(self) -> int | float:
        """Record the level-1 entry: base hit points plus one roll."""
        str_mod = max(modifier(self._stats.effective_stat(Stat.STR)), 0)
        hit_die = hit_die_for(str_mod, self._rules)
        roll = self._dice.roll_or_average(1, hit_die, str_mod)
        recorded = self._rules.base_hp + (roll if roll > 0 else 1)
        self._record_hp(recorded)
        logger.debug("Initial HP rolled", hit_die=hit_die, roll=roll, recorded=recorded)
        return recorded

    def _record_hp(self, value: int | float) -> None:
        self._state.hp_rolls = [*self._state.hp_rolls, value]
        self._state.hp = self._state.hp + value

    # =========================================================================
    # Two-phase level-up
    # =========================================================================

    def start_level_up(self) -> bool:
        """Begin a level-up. Returns False if one is already in progress."""
        if self.is_leveling_up:
            logger.info(
                "Level-up rejected: already in progress",
                pending=self._state.pending_level_up_points,
            )
            return False

        self._state.level += 1
        self.roll_hp()
        self._state.pending_level_up_points = self._rules.level_up_points
        logger.info(
            "Level-up started",
            level=self._state.level,
            points=self._state.pending_level_up_points,
        )
        return True

    def allocate_point(self, stat: Stat | str) -> bool:
        """Put one pending point into a stat.

        Returns:
            False if no level-up is in progress.

        Raises:
            UnknownStatError: If ``stat`` is not a stat key.
        """
        key = Stat.parse(stat)
        if not self.is_leveling_up:
            logger.info("Allocation rejected: no level-up in progress", stat=key)
            return False

        self._stats.increase_base(key, 1)
        self._state.level_up_choices = [*self._state.level_up_choices, key]
        self._state.pending_level_up_points -= 1
        logger.info(
            "Stat point allocated",
            stat=key,
            remaining=self._state.pending_level_up_points,
        )

        effective = self._stats.effective()
        self._resources.ensure_baseline(effective, self._state.level)
        if self._state.pending_level_up_points == 0:
            self._finalize_level_up()
        else:
            self._resources.recompute_combat(effective, self._state.level)
        return True

    def _finalize_level_up(self) -> None:
        # Level bonuses read base stats; overrides never buy resources.
        base = self._stats.base()
        rules = self._rules

        sorcery = 0
        if base.intelligence >= rules.min_spellcasting_int:
            sorcery += 1
        if base.intelligence > rules.double_spellcasting_int:
            sorcery += 1
        finesse = 1 if (
            base.dexterity >= rules.finesse_dex_threshold and self._state.level % 2 == 1
        ) else 0

        if sorcery:
            self._resources.grant(ResourceKind.SORCERY, sorcery)
        if finesse:
            self._resources.grant(ResourceKind.FINESSE, finesse)
        self._resources.recompute_combat(self._stats.effective(), self._state.level)
        logger.info(
            "Level-up finalized",
            level=self._state.level,
            sorcery_granted=sorcery,
            finesse_granted=finesse,
        )

    # =========================================================================
    # Single-call level-up
    # =========================================================================

    def level_up(self, stat: Stat | str) -> bool:
        """Level up in one call, putting the whole increase into one stat.

        Returns:
            False if a two-phase level-up is in progress.

        Raises:
            UnknownStatError: If ``stat`` is not a stat key.
        """
        key = Stat.parse(stat)
        if self.is_leveling_up:
            logger.info("Level-up rejected: allocation pending", stat=key)
            return False

        self._stats.increase_base(key, self._rules.legacy_stat_increase)
        self._state.level += 1
        self._state.level_up_choices = [*self._state.level_up_choices, key]
        self.roll_hp()
        self._resources.update_max_values(self._stats.effective(), self._state.level)
        logger.info("Leveled up", level=self._state.level, stat=key)
        return True


__all__ = [
    "hit_die_for",
    "ProgressionController",
]
