"""Racial traits.

Each race grants fixed stat bonuses, a number of +1 bonuses the player
places freely, and one descriptive ability.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from charforge.models.enums import Race, Stat


@dataclass(frozen=True)
class RaceTraits:
    """Bonuses and ability granted by a race.

    Attributes:
        race: The race these traits belong to.
        fixed_bonuses: Bonuses always applied, in order.
        any_bonus_count: Number of +1 bonuses the player assigns.
        ability: Ability text added to the character sheet.
    """

    race: Race
    fixed_bonuses: tuple[tuple[Stat, int], ...] = field(default_factory=tuple)
    any_bonus_count: int = 0
    ability: str = ""


RACES: dict[Race, RaceTraits] = {
    Race.ELF: RaceTraits(
        race=Race.ELF,
        fixed_bonuses=((Stat.DEX, 2),),
        any_bonus_count=1,
        ability="Dark Vision: See in darkness up to 60 feet",
    ),
    Race.DWARF: RaceTraits(
        race=Race.DWARF,
        fixed_bonuses=((Stat.STR, 2),),
        ability="Darkvision: See in darkness up to 60 feet",
    ),
    Race.HUMAN: RaceTraits(
        race=Race.HUMAN,
        any_bonus_count=2,
        ability="Versatile: Extra skill proficiency",
    ),
    Race.GNOME: RaceTraits(
        race=Race.GNOME,
        fixed_bonuses=((Stat.INT, 2),),
        any_bonus_count=1,
        ability="Tinker: Proficiency with tinker tools",
    ),
    Race.DRAGONBORN: RaceTraits(
        race=Race.DRAGONBORN,
        fixed_bonuses=((Stat.STR, 2),),
        ability="Breath Weapon: 15-foot cone, 2d6 damage",
    ),
    Race.HALFLING: RaceTraits(
        race=Race.HALFLING,
        fixed_bonuses=((Stat.DEX, 2),),
        ability="Lucky: Reroll 1s on d20 rolls",
    ),
}


def get_race_traits(race: Race | str) -> RaceTraits:
    """Look up the traits of a race.

    Raises:
        ValueError: If the race is unknown.
    """
    return RACES[Race(race)]


def resolve_racial_bonuses(
    race: Race | str,
    choices: list[Stat | str] | None = None,
) -> list[tuple[Stat, int]]:
    """List the bonuses a race applies, in application order.

    Fixed bonuses come first, then one +1 for each free bonus, taken from
    ``choices`` in order. Missing choices are skipped and extra choices are
    ignored.

    Example:
        >>> resolve_racial_bonuses(Race.ELF, ["int"])
        [(<Stat.DEX: 'dex'>, 2), (<Stat.INT: 'int'>, 1)]
    """
    traits = get_race_traits(race)
    bonuses = list(traits.fixed_bonuses)
    for choice in (choices or [])[: traits.any_bonus_count]:
        bonuses.append((Stat.parse(choice), 1))
    return bonuses


__all__ = [
    "RaceTraits",
    "RACES",
    "get_race_traits",
    "resolve_racial_bonuses",
]
