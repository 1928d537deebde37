"""Configuration management for the charforge character engine.

Balance values (dice sizes, stat thresholds, armor class bonuses) and the
dice mode are configuration, not engine behavior. They are loaded with
pydantic-settings from environment variables and .env files, and can be
overridden per engine by passing a ``RulesSettings`` or ``DiceSettings``
instance explicitly.

Example:
    >>> from charforge.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.rules.base_ac
    13

Environment Variables:
    CHARFORGE_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    CHARFORGE_LOG_JSON: Emit JSON log lines instead of console output
    CHARFORGE_DICE_MODE: Dice mode ("average" or "random")
    CHARFORGE_DICE_SEED: Optional seed for random rolls
    CHARFORGE_RULES_BASE_AC: Armor class before modifiers
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from charforge.core import constants
from charforge.core.exceptions import ConfigurationError


class RulesSettings(BaseSettings):
    """Balance values used by the character engine.

    Attributes:
        base_ac: Armor class before dexterity, armor and shield.
        shield_ac: Armor class granted by an equipped shield.
        base_hp: Flat hit points added to the level-1 roll.
        level_up_points: Stat points granted by a two-phase level-up.
        legacy_stat_increase: Stat increase applied by the single-call level-up.
        hit_dice_from_mod: Hit die size indexed by ``str_mod - 1``.
        hit_die_fallback: Hit die used outside the table range.
        sneak_attack_die: Die size of each sneak attack die.
        base_sorcery_points: Sorcery points for a gifted intellect.
        sorcery_int_threshold: Intelligence must exceed this for sorcery.
        min_spellcasting_int: Intelligence needed for a level-up sorcery point.
        double_spellcasting_int: Intelligence above this grants a second point.
        finesse_dex_threshold: Dexterity needed for finesse points.
        combat_str_threshold: Strength needed for combat maneuver points.
        stat_floor: Lowest effective stat.
        stat_ceiling: Highest effective stat.
        armor_str_requirements: Strength required per armor weight class.
        armor_modifiers: Armor class per armor weight class.
        weapon_dice: Damage die per weapon type.
    """

    model_config = SettingsConfigDict(
        env_prefix="CHARFORGE_RULES_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    base_ac: int = Field(
        default=constants.BASE_AC,
        ge=0,
        description="Armor class before modifiers",
    )
    shield_ac: int = Field(
        default=constants.SHIELD_AC,
        ge=0,
        description="Armor class from a shield",
    )
    base_hp: int = Field(
        default=constants.BASE_HP,
        ge=0,
        description="Flat hit points at level 1",
    )
    level_up_points: int = Field(
        default=constants.LEVEL_UP_POINTS,
        ge=1,
        le=10,
        description="Stat points per two-phase level-up",
    )
    legacy_stat_increase: int = Field(
        default=constants.LEGACY_STAT_INCREASE,
        ge=1,
        le=10,
        description="Stat increase per single-call level-up",
    )
    hit_dice_from_mod: list[int] = Field(
        default_factory=lambda: list(constants.HIT_DICE_FROM_MOD),
        description="Hit die size indexed by strength modifier - 1",
    )
    hit_die_fallback: int = Field(
        default=constants.HIT_DIE_FALLBACK,
        gt=0,
        description="Hit die outside the table range",
    )
    sneak_attack_die: int = Field(
        default=constants.SNEAK_ATTACK_DIE,
        gt=0,
        description="Sneak attack die size",
    )
    base_sorcery_points: int = Field(
        default=constants.BASE_SORCERY_POINTS,
        ge=0,
        description="Sorcery points above the intelligence threshold",
    )
    sorcery_int_threshold: int = Field(
        default=constants.SORCERY_INT_THRESHOLD,
        description="Intelligence must exceed this for sorcery points",
    )
    min_spellcasting_int: int = Field(
        default=constants.MIN_SPELLCASTING_INT,
        description="Intelligence for a level-up sorcery point",
    )
    double_spellcasting_int: int = Field(
        default=constants.DOUBLE_SPELLCASTING_INT,
        description="Intelligence above this grants a second sorcery point",
    )
    finesse_dex_threshold: int = Field(
        default=constants.FINESSE_DEX_THRESHOLD,
        description="Dexterity for finesse points",
    )
    combat_str_threshold: int = Field(
        default=constants.COMBAT_STR_THRESHOLD,
        description="Strength for combat maneuver points",
    )
    stat_floor: int = Field(
        default=constants.STAT_FLOOR,
        description="Lowest effective stat",
    )
    stat_ceiling: int = Field(
        default=constants.STAT_CEILING,
        description="Highest effective stat",
    )
    armor_str_requirements: dict[str, int] = Field(
        default_factory=lambda: dict(constants.ARMOR_STR_REQ),
        description="Strength required per armor weight class",
    )
    armor_modifiers: dict[str, int] = Field(
        default_factory=lambda: dict(constants.ARMOR_MODS),
        description="Armor class per armor weight class",
    )
    weapon_dice: dict[str, int] = Field(
        default_factory=lambda: dict(constants.WEAPON_DIE),
        description="Damage die per weapon type",
    )

    @model_validator(mode="after")
    def validate_tables(self) -> "RulesSettings":
        """Ensure stat bounds and dice tables are usable.

        Returns:
            Self if validation passes.

        Raises:
            ConfigurationError: If the stat bounds are inverted or a dice
                table is empty or holds a non-positive die.
        """
        if self.stat_floor >= self.stat_ceiling:
            raise ConfigurationError(
                f"stat_floor ({self.stat_floor}) must be less than "
                f"stat_ceiling ({self.stat_ceiling})",
                config_key="stat_floor",
            )
        if not self.hit_dice_from_mod:
            raise ConfigurationError(
                "hit_dice_from_mod must contain at least one die",
                config_key="hit_dice_from_mod",
            )
        if any(die <= 0 for die in self.hit_dice_from_mod):
            raise ConfigurationError(
                "hit_dice_from_mod must only contain positive dice",
                config_key="hit_dice_from_mod",
            )
        if any(die < 0 for die in self.weapon_dice.values()):
            raise ConfigurationError(
                "weapon_dice must not contain negative dice",
                config_key="weapon_dice",
            )
        return self


class DiceSettings(BaseSettings):
    """Configuration for dice evaluation.

    Attributes:
        mode: "average" substitutes half the die size for every die, making
            the whole engine deterministic. "random" rolls real dice.
        seed: Optional seed for reproducible random rolls.
    """

    model_config = SettingsConfigDict(
        env_prefix="CHARFORGE_DICE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    mode: Literal["average", "random"] = Field(
        default="average",
        description="Dice evaluation mode",
    )
    seed: int | None = Field(
        default=None,
        description="Seed for random rolls",
    )


class Settings(BaseSettings):
    """Main settings aggregating all configuration domains.

    Attributes:
        app_name: Application name.
        app_version: Application version string.
        debug: Enable debug mode.
        log_level: Logging level.
        log_json: Emit JSON log lines.
        rules: Balance values.
        dice: Dice evaluation settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="CHARFORGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(
        default="charforge",
        description="Application name",
    )
    app_version: str = Field(
        default="0.1.0",
        description="Application version",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    log_json: bool = Field(
        default=False,
        description="Emit JSON log lines",
    )

    rules: RulesSettings = Field(default_factory=RulesSettings)
    dice: DiceSettings = Field(default_factory=DiceSettings)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the settings singleton.

    Returns:
        The cached Settings instance.

    Raises:
        ConfigurationError: If configuration is missing or invalid.

    Example:
        >>> get_settings().dice.mode
        'average'
    """
    try:
        return Settings()
    except ConfigurationError:
        raise
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access."""
    get_settings.cache_clear()


__all__ = [
    "RulesSettings",
    "DiceSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
