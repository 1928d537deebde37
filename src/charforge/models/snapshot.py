"""Persisted form of a character.

A snapshot is the character's components side by side plus identity
fields. ``model_dump(mode="json")`` gives a JSON-ready dict and
``CharacterSnapshot.model_validate`` reads it back; where the payload is
stored is up to the caller.

Version 2 added learned abilities. Version 1 payloads load with an empty
ability book.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from charforge.models.components import (
    AbilityBook,
    InventoryState,
    ProgressionState,
    ResourcePools,
    StatBlock,
)
from charforge.models.enums import EquipmentSlot, Race


SNAPSHOT_SCHEMA_VERSION = 2


class CharacterSnapshot(BaseModel):
    """Everything needed to rebuild a character exactly."""

    model_config = ConfigDict(extra="ignore")

    schema_version: int = Field(default=SNAPSHOT_SCHEMA_VERSION)
    name: str = Field(default="")
    race: Race | None = None
    abilities: list[str] = Field(default_factory=list)
    stats: StatBlock
    progression: ProgressionState
    resources: ResourcePools
    inventory: InventoryState
    learned_abilities: AbilityBook = Field(default_factory=AbilityBook)

    @model_validator(mode="after")
    def check_consistency(self) -> "CharacterSnapshot":
        """Reject payloads no sequence of engine calls could produce."""
        if self.schema_version > SNAPSHOT_SCHEMA_VERSION:
            raise ValueError(f"Unsupported snapshot schema version {self.schema_version}")

        ids = [item.id for item in self.inventory.items]
        if len(ids) != len(set(ids)):
            raise ValueError("Inventory contains duplicate item ids")

        occupied: set[EquipmentSlot] = set()
        two_handed = False
        for item in self.inventory.items:
            if not item.equipped or item.equipment_slot == EquipmentSlot.NONE:
                continue
            if item.equipment_slot in occupied:
                raise ValueError(f"Slot {item.equipment_slot} is occupied twice")
            occupied.add(item.equipment_slot)
            two_handed = two_handed or item.is_two_handed

        if two_handed and (
            EquipmentSlot.SHIELD in occupied or EquipmentSlot.OFF_HAND in occupied
        ):
            raise ValueError("Two-handed weapon equipped alongside a shield or off-hand weapon")

        if len(self.progression.hp_rolls) > self.progression.level:
            raise ValueError("More hit point rolls than levels")
        return self


__all__ = [
    "SNAPSHOT_SCHEMA_VERSION",
    "CharacterSnapshot",
]
