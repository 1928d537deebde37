"""Tests for racial traits."""

from __future__ import annotations

import pytest

from charforge.core.exceptions import UnknownStatError
from charforge.models.enums import Race, Stat
from charforge.models.races import RACES, get_race_traits, resolve_racial_bonuses


class TestRaceTable:
    """Tests for the race table."""

    def test_every_race_listed(self) -> None:
        """Test all races have traits."""
        assert set(RACES) == set(Race)

    def test_every_race_has_ability(self) -> None:
        """Test all races grant an ability."""
        assert all(traits.ability for traits in RACES.values())

    def test_lookup_by_name(self) -> None:
        """Test traits can be looked up by string."""
        assert get_race_traits("halfling").fixed_bonuses == ((Stat.DEX, 2),)

    def test_unknown_race(self) -> None:
        """Test unknown races raise ValueError."""
        with pytest.raises(ValueError):
            get_race_traits("orc")


class TestResolveBonuses:
    """Tests for resolve_racial_bonuses."""

    def test_fixed_only(self) -> None:
        """Test races without free bonuses ignore choices."""
        assert resolve_racial_bonuses(Race.DWARF, ["int"]) == [(Stat.STR, 2)]

    def test_fixed_then_free(self) -> None:
        """Test fixed bonuses come before free ones."""
        assert resolve_racial_bonuses("gnome", ["dex"]) == [(Stat.INT, 2), (Stat.DEX, 1)]

    def test_extra_choices_ignored(self) -> None:
        """Test choices beyond the free count are dropped."""
        bonuses = resolve_racial_bonuses(Race.HUMAN, ["str", "dex", "int"])

        assert bonuses == [(Stat.STR, 1), (Stat.DEX, 1)]

    def test_missing_choices_skipped(self) -> None:
        """Test missing choices grant nothing."""
        assert resolve_racial_bonuses(Race.HUMAN) == []

    def test_unknown_choice(self) -> None:
        """Test unknown stats raise."""
        with pytest.raises(UnknownStatError):
            resolve_racial_bonuses(Race.ELF, ["cha"])
