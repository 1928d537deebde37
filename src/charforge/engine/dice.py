"""Dice evaluation for the character engine.

Every roll in the engine goes through a DiceEngine. In ``random`` mode the
d20 library rolls real dice; in ``average`` mode each die is replaced by
half its size (not rounded), which makes every calculation deterministic
and is the default for tests and for tables that prefer fixed values.

The mode belongs to the engine instance, not to the process, so two
characters can use different modes side by side.
"""

from __future__ import annotations

import random
import re
from dataclasses import dataclass

import d20

from charforge.core.config import DiceSettings, get_settings
from charforge.core.exceptions import DiceRollError
from charforge.core.logging import get_logger
from charforge.models.enums import DiceMode


logger = get_logger(__name__)

_NOTATION_RE = re.compile(r"^(\d+)d(\d+)([+-]\d+)?$")


def _normalize(value: float) -> int | float:
    """Return whole numbers as int so d8 averages to 4 rather than 4.0."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


@dataclass(frozen=True)
class DiceNotation:
    """A parsed ``NdM+K`` expression.

    Attributes:
        count: Number of dice.
        die_size: Faces per die.
        modifier: Flat bonus, possibly negative.
    """

    count: int
    die_size: int
    modifier: int = 0

    def __str__(self) -> str:
        if self.modifier:
            return f"{self.count}d{self.die_size}{self.modifier:+d}"
        return f"{self.count}d{self.die_size}"


@dataclass(frozen=True)
class DiceRoll:
    """The outcome of one roll.

    Attributes:
        count: Number of dice rolled.
        die_size: Faces per die.
        rolls: Value of each die. In average mode, half the die size each.
        modifier: Flat bonus added to the dice.
        total: Sum of dice and modifier.
        mode: Mode the roll was made in.
    """

    count: int
    die_size: int
    rolls: tuple[int | float, ...]
    modifier: int | float
    total: int | float
    mode: DiceMode


def parse_notation(expression: str) -> DiceNotation:
    """Parse a dice expression such as ``2d6+3``.

    Args:
        expression: Expression of the form ``NdM``, ``NdM+K`` or ``NdM-K``.

    Returns:
        The parsed notation.

    Raises:
        DiceRollError: If the expression is malformed.
    """
    match = _NOTATION_RE.match(expression.strip().lower()) if expression else None
    if match is None:
        raise DiceRollError("Invalid dice notation", expression=expression)
    count, die_size, modifier = match.groups()
    if int(die_size) < 1:
        raise DiceRollError("Dice need at least one face", expression=expression)
    return DiceNotation(int(count), int(die_size), int(modifier or 0))


class DiceEngine:
    """Rolls dice, or substitutes their average.

    Example:
        >>> dice = DiceEngine(DiceMode.AVERAGE)
        >>> dice.roll_or_average(1, 8, 3)
        7
    """

    def __init__(self, mode: DiceMode | str = DiceMode.AVERAGE, *, seed: int | None = None) -> None:
        """Initialize the dice engine.

        Args:
            mode: ``average`` or ``random``.
            seed: Optional seed for reproducible random rolls.
        """
        self._mode = DiceMode(mode)
        self._seed = seed
        if seed is not None:
            random.seed(seed)
        logger.debug("DiceEngine initialized", mode=self._mode, seed=seed)

    @classmethod
    def from_settings(cls, settings: DiceSettings | None = None) -> DiceEngine:
        """Create an engine from dice settings, defaulting to the loaded settings."""
        settings = settings or get_settings().dice
        return cls(settings.mode, seed=settings.seed)

    @property
    def mode(self) -> DiceMode:
        return self._mode

    @property
    def is_deterministic(self) -> bool:
        return self._mode == DiceMode.AVERAGE

    def set_mode(self, mode: DiceMode | str) -> None:
        """Switch between average and random evaluation."""
        self._mode = DiceMode(mode)
        logger.info("Dice mode changed", mode=self._mode)

    def roll_or_average(self, count: int, die_size: int, flat_bonus: int | float = 0) -> int | float:
        """Evaluate ``count`` dice of ``die_size`` plus a flat bonus.

        Args:
            count: Number of dice, 0 or more.
            die_size: Faces per die.
            flat_bonus: Added once to the sum.

        Returns:
            The total.

        Raises:
            DiceRollError: If count is negative or the die has no faces.
        """
        return self.roll(count, die_size, flat_bonus).total

    def roll(self, count: int, die_size: int, flat_bonus: int | float = 0) -> DiceRoll:
        """Evaluate dice and keep the individual results.

        Raises:
            DiceRollError: If count is negative or the die has no faces.
        """
        expression = f"{count}d{die_size}"
        if count < 0:
            raise DiceRollError("Dice count cannot be negative", expression=expression)
        if die_size < 1:
            raise DiceRollError("Dice need at least one face", expression=expression)

        if count == 0:
            rolls: tuple[int | float, ...] = ()
        elif self._mode == DiceMode.AVERAGE:
            rolls = (_normalize(die_size / 2),) * count
        else:
            rolls = self._roll_random(count, die_size)

        total = _normalize(sum(rolls) + flat_bonus)
        logger.debug(
            "Dice evaluated",
            expression=expression,
            bonus=flat_bonus,
            mode=self._mode,
            total=total,
        )
        return DiceRoll(
            count=count,
            die_size=die_size,
            rolls=rolls,
            modifier=flat_bonus,
            total=total,
            mode=self._mode,
        )

    def roll_notation(self, expression: str) -> DiceRoll:
        """Evaluate a dice expression such as ``3d8-1``.

        Raises:
            DiceRollError: If the expression is malformed.
        """
        notation = parse_notation(expression)
        return self.roll(notation.count, notation.die_size, notation.modifier)

    def _roll_random(self, count: int, die_size: int) -> tuple[int, ...]:
        """Roll each die separately through d20 so every face is reported."""
        expression = f"1d{die_size}"
        try:
            return tuple(d20.roll(expression).total for _ in range(count))
        except Exception as exc:
            raise DiceRollError(f"Invalid dice expression: {exc}", expression=expression) from exc


__all__ = [
    "DiceNotation",
    "DiceRoll",
    "DiceEngine",
    "parse_notation",
]
