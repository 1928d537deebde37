"""Result types returned by engine operations.

A rejected game action is not an error: it comes back as a result with
``success=False`` and a human-readable reason, and the character is left
untouched.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from charforge.models.enums import ItemType
from charforge.models.items import InventoryItem


class ActionResult(BaseModel):
    """Outcome of a mutating action such as equip or enchant.

    ``changed`` is False when the action succeeded without touching any
    state, e.g. equipping an item that is already equipped.
    """

    model_config = ConfigDict(frozen=True)

    success: bool
    reason: str | None = None
    changed: bool = True

    @classmethod
    def ok(cls) -> ActionResult:
        return cls(success=True)

    @classmethod
    def unchanged(cls) -> ActionResult:
        return cls(success=True, changed=False)

    @classmethod
    def fail(cls, reason: str) -> ActionResult:
        return cls(success=False, reason=reason, changed=False)

    def __bool__(self) -> bool:
        return self.success


class EquipCheck(BaseModel):
    """Whether an item may be equipped right now."""

    model_config = ConfigDict(frozen=True)

    ok: bool
    reason: str | None = None


class AttackOutcome(BaseModel):
    """Damage dealt by a finesse attack.

    Attributes:
        success: False when the attack could not be made.
        total: Damage dealt, 0 on failure.
        breakdown: Readable formula, or the failure reason.
        finesse_spent: Finesse points consumed.
        sneak_dice: Number of sneak attack dice rolled.
    """

    model_config = ConfigDict(frozen=True)

    success: bool
    total: int | float = 0
    breakdown: str = ""
    finesse_spent: int = 0
    sneak_dice: int = 0


class EquippedWeapons(BaseModel):
    """Items in the two hand slots."""

    model_config = ConfigDict(frozen=True)

    main_hand: InventoryItem | None = None
    off_hand: InventoryItem | None = None


class InventorySummary(BaseModel):
    """Item counts for display and logging."""

    model_config = ConfigDict(frozen=True)

    total: int
    equipped: int
    by_type: dict[ItemType, int] = Field(default_factory=dict)


__all__ = [
    "ActionResult",
    "EquipCheck",
    "AttackOutcome",
    "EquippedWeapons",
    "InventorySummary",
]
