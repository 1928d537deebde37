"""Stat values and the stat modifier."""

from __future__ import annotations

from dataclasses import dataclass

from charforge.models.enums import Stat


def modifier(score: int) -> int:
    """Calculate the modifier for a stat score.

    Example:
        >>> modifier(16), modifier(10), modifier(6)
        (3, 0, -2)
    """
    return (score - 10) // 2


@dataclass(frozen=True)
class StatLine:
    """One value per stat.

    Used for effective stats, equipment bonuses and override deltas alike.

    Attributes:
        strength: Strength value.
        dexterity: Dexterity value.
        intelligence: Intelligence value.
    """

    strength: int = 0
    dexterity: int = 0
    intelligence: int = 0

    def get(self, stat: Stat | str) -> int:
        """Read one stat."""
        match Stat.parse(stat):
            case Stat.STR:
                return self.strength
            case Stat.DEX:
                return self.dexterity
            case Stat.INT:
                return self.intelligence

    def replace(self, stat: Stat | str, value: int) -> StatLine:
        """Return a copy with one stat changed."""
        match Stat.parse(stat):
            case Stat.STR:
                return StatLine(value, self.dexterity, self.intelligence)
            case Stat.DEX:
                return StatLine(self.strength, value, self.intelligence)
            case Stat.INT:
                return StatLine(self.strength, self.dexterity, value)

    def plus(self, other: StatLine) -> StatLine:
        """Component-wise sum."""
        return StatLine(
            self.strength + other.strength,
            self.dexterity + other.dexterity,
            self.intelligence + other.intelligence,
        )

    def clamped(self, floor: int, ceiling: int) -> StatLine:
        """Clamp every component into [floor, ceiling]."""
        return StatLine(
            max(floor, min(ceiling, self.strength)),
            max(floor, min(ceiling, self.dexterity)),
            max(floor, min(ceiling, self.intelligence)),
        )

    def as_dict(self) -> dict[str, int]:
        """Map short stat keys to values."""
        return {
            Stat.STR.value: self.strength,
            Stat.DEX.value: self.dexterity,
            Stat.INT.value: self.intelligence,
        }

    @property
    def modifiers(self) -> StatLine:
        """The modifier of every component."""
        return StatLine(
            modifier(self.strength),
            modifier(self.dexterity),
            modifier(self.intelligence),
        )


__all__ = [
    "modifier",
    "StatLine",
]
