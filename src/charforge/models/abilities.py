"""Learnable abilities and their master lists.

Metamagic and spellwords are fuelled by sorcery points, combat maneuvers by
combat maneuver points. Only names on the master list of their type can be
learned.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, computed_field

from charforge.models.enums import AbilityType


# =============================================================================
# Master Lists
# =============================================================================

METAMAGIC: dict[str, str] = {
    "Aura": "Area of effect is centered on you",
    "Cascade": "The spell overwhelms with rapid, repeated impacts",
    "Cloak": "Wreathe yourself in the spell's effects",
    "Distant": "Increase the range of the spell",
    "Empowered": "Increase spell damage or effect potency",
    "Glyph": "Inscribe a textual representation of the spell's effects",
    "Grasp": "Envelop, smother or secure the spell's powers",
    "Heighten": "Cast spell as if from a higher level",
    "Hypnotic": "Add a charm or mesmerizing effect to a spell",
    "Orb": "Shape spell into a floating orb that follows commands",
    "Orbit": "Create multiple smaller versions that circle the target",
    "Precise": "Spell automatically hits or has enhanced accuracy",
    "Quick": "Cast spell as a bonus action instead of full action",
    "Sculpt": "Shape or paint the area of effect precisely",
    "Subtle": "Cast without verbal or somatic components",
    "Twin": "Double, mirror or repeat",
    "Wall": "A barrier, a ledge or a fortress",
}
"""Metamagic techniques by name."""

SPELLWORDS: dict[str, str] = {
    "Chill": "Freeze or slow targets, create ice effects",
    "Confound": "Confuse enemies, scramble thoughts or senses",
    "Counterspell": "Cancel or redirect enemy magic",
    "Deafen": "Remove hearing, create zones of silence",
    "Flametongue": "Create and control fire effects",
    "Growth": "Increase size of objects or creatures",
    "Heat": "Create warmth, melt ice, cause fever",
    "Illusion": "Create false images or sounds",
    "Light": "Illuminate areas, create blinding flashes",
    "Mend": "Repair objects, heal minor wounds",
    "Push/Pull": "Move objects or creatures with force",
    "Rain": "Control weather, create water effects",
    "Reflect": "Bounce attacks or spells back at attackers",
    "Shadow": "Manipulate darkness and shadows",
    "Shield": "Create protective barriers",
    "Soothe": "Calm emotions, reduce pain or fear",
    "Spark": "Create electricity, power devices",
    "Thread": "Bind or connect objects and creatures",
    "Vision": "See distant places, reveal hidden things",
}
"""Words of power by name."""

COMBAT_MANEUVERS: dict[str, str] = {
    "Blinding": "Strike to temporarily blind opponent",
    "Cleave": "Hit multiple adjacent enemies with one attack",
    "Command": "Force enemy to follow a simple command",
    "Daring": "Gain advantage through risky maneuvers",
    "Disarming": "Remove weapon from enemy's grasp",
    "Enraged": "Enter fury state for increased damage",
    "Goading": "Force enemy to attack you instead of allies",
    "Grappling": "Grab and restrain an opponent",
    "Leaping": "Jump attack for extra damage and mobility",
    "Menace": "Intimidate enemies to reduce their effectiveness",
    "Precision": "Target weak points for extra damage",
    "Preparation": "Set up advantageous position for next attack",
    "Reckless": "All-out attack with increased risk and reward",
    "Riposte": "Counter-attack after successful defense",
    "Stampede": "Charge through multiple enemies",
    "Throw": "Hurl objects or enemies as weapons",
    "Trip": "Knock opponent prone",
}
"""Combat maneuvers by name."""


def master_list(ability_type: AbilityType | str) -> dict[str, str]:
    """Every learnable ability of a type, with descriptions."""
    match AbilityType(ability_type):
        case AbilityType.METAMAGIC:
            return METAMAGIC
        case AbilityType.SPELLWORD:
            return SPELLWORDS
        case AbilityType.COMBAT_MANEUVER:
            return COMBAT_MANEUVERS


def is_known_ability(name: str, ability_type: AbilityType | str) -> bool:
    return name in master_list(ability_type)


def ability_id(name: str, ability_type: AbilityType | str) -> str:
    """Stable key of an ability: ``<type>_<name>``."""
    return f"{AbilityType(ability_type).value}_{name}"


# =============================================================================
# Learned Abilities
# =============================================================================


class LearnedAbility(BaseModel):
    """An ability a character has learned.

    Attributes:
        id: ``<type>_<name>``, unique per character.
        name: Name on the master list.
        type: Ability family.
        description: Rules text from the master list.
        learned_at: Character level when learned, if recorded.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str = Field(min_length=1)
    type: AbilityType
    description: str = Field(default="")
    learned_at: int | None = Field(default=None, ge=1)

    @computed_field(description="Unique key within a character")
    @property
    def id(self) -> str:
        return ability_id(self.name, self.type)

    @classmethod
    def learn(
        cls,
        name: str,
        ability_type: AbilityType | str,
        level: int | None = None,
    ) -> LearnedAbility:
        """Build an entry for a master-list ability.

        Raises:
            ValueError: If the name is not on the type's master list.
        """
        catalog = master_list(ability_type)
        if name not in catalog:
            raise ValueError(f"Unknown {AbilityType(ability_type).value} ability: {name}")
        return cls(name=name, type=ability_type, description=catalog[name], learned_at=level)


__all__ = [
    "METAMAGIC",
    "SPELLWORDS",
    "COMBAT_MANEUVERS",
    "master_list",
    "is_known_ability",
    "ability_id",
    "LearnedAbility",
]
