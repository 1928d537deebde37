"""Tests for dice evaluation."""

from __future__ import annotations

import pytest

from charforge.core.config import DiceSettings
from charforge.core.exceptions import DiceRollError
from charforge.engine.dice import DiceEngine, DiceNotation, DiceRoll, parse_notation
from charforge.models.enums import DiceMode


class TestAverageMode:
    """Tests for deterministic average evaluation."""

    def test_single_die_with_bonus(self, average_dice: DiceEngine) -> None:
        """Test d8 + 3 averages to 7."""
        assert average_dice.roll_or_average(1, 8, 3) == 7

    def test_whole_averages_are_int(self, average_dice: DiceEngine) -> None:
        """Test even dice give int totals rather than floats."""
        total = average_dice.roll_or_average(2, 6)

        assert total == 6
        assert isinstance(total, int)

    def test_odd_die_keeps_fraction(self, average_dice: DiceEngine) -> None:
        """Test an odd die averages to a half."""
        assert average_dice.roll_or_average(1, 5) == 2.5

    def test_d20(self, average_dice: DiceEngine) -> None:
        """Test d20 averages to 10."""
        assert average_dice.roll_or_average(1, 20, 5) == 15

    def test_zero_dice_is_bonus(self, average_dice: DiceEngine) -> None:
        """Test zero dice contribute nothing."""
        assert average_dice.roll_or_average(0, 8, 4) == 4

    def test_repeatable(self, average_dice: DiceEngine) -> None:
        """Test average mode always returns the same value."""
        results = {average_dice.roll_or_average(3, 8, 1) for _ in range(10)}

        assert results == {13}

    def test_roll_keeps_each_die(self, average_dice: DiceEngine) -> None:
        """Test roll reports individual dice."""
        result = average_dice.roll(3, 4, 2)

        assert isinstance(result, DiceRoll)
        assert result.rolls == (2, 2, 2)
        assert result.modifier == 2
        assert result.total == 8
        assert result.mode == DiceMode.AVERAGE


class TestRandomMode:
    """Tests for random evaluation through d20."""

    def test_single_die_in_range(self, random_dice: DiceEngine) -> None:
        """Test a d20 roll stays within its faces."""
        for _ in range(50):
            assert 1 <= random_dice.roll_or_average(1, 20) <= 20

    def test_multiple_dice_in_range(self, random_dice: DiceEngine) -> None:
        """Test 3d6 + 2 stays within bounds."""
        for _ in range(50):
            assert 5 <= random_dice.roll_or_average(3, 6, 2) <= 20

    def test_roll_reports_each_die(self, random_dice: DiceEngine) -> None:
        """Test each die is recorded and sums to the total."""
        result = random_dice.roll(4, 8, -1)

        assert len(result.rolls) == 4
        assert all(1 <= value <= 8 for value in result.rolls)
        assert result.total == sum(result.rolls) - 1
        assert result.mode == DiceMode.RANDOM

    def test_not_deterministic(self, random_dice: DiceEngine) -> None:
        """Test the random engine reports itself as such."""
        assert random_dice.is_deterministic is False


class TestModeSwitching:
    """Tests for per-engine mode state."""

    def test_default_mode_is_average(self) -> None:
        """Test the engine defaults to average mode."""
        assert DiceEngine().mode == DiceMode.AVERAGE

    def test_accepts_string_mode(self) -> None:
        """Test string modes are accepted."""
        assert DiceEngine("random").mode == DiceMode.RANDOM

    def test_set_mode(self, average_dice: DiceEngine) -> None:
        """Test switching an engine to random and back."""
        average_dice.set_mode("random")
        assert average_dice.is_deterministic is False

        average_dice.set_mode(DiceMode.AVERAGE)
        assert average_dice.roll_or_average(1, 8) == 4

    def test_engines_are_independent(self) -> None:
        """Test one engine's mode does not affect another."""
        first = DiceEngine(DiceMode.AVERAGE)
        second = DiceEngine(DiceMode.AVERAGE)

        second.set_mode(DiceMode.RANDOM)

        assert first.mode == DiceMode.AVERAGE

    def test_invalid_mode(self) -> None:
        """Test unknown modes are rejected."""
        with pytest.raises(ValueError):
            DiceEngine("loaded")

    def test_from_settings(self) -> None:
        """Test engines can be built from dice settings."""
        engine = DiceEngine.from_settings(DiceSettings(mode="random", seed=3))

        assert engine.mode == DiceMode.RANDOM


class TestInvalidRolls:
    """Tests for rejected roll requests."""

    def test_negative_count(self, average_dice: DiceEngine) -> None:
        """Test negative dice counts raise."""
        with pytest.raises(DiceRollError):
            average_dice.roll_or_average(-1, 6)

    def test_faceless_die(self, average_dice: DiceEngine) -> None:
        """Test dice need at least one face."""
        with pytest.raises(DiceRollError) as exc_info:
            average_dice.roll_or_average(1, 0)

        assert exc_info.value.details["expression"] == "1d0"


class TestNotation:
    """Tests for dice notation parsing."""

    @pytest.mark.parametrize(
        ("expression", "expected"),
        [
            ("1d20", DiceNotation(1, 20, 0)),
            ("2d6+3", DiceNotation(2, 6, 3)),
            ("3d8-1", DiceNotation(3, 8, -1)),
            (" 4D4 ", DiceNotation(4, 4, 0)),
        ],
    )
    def test_parse(self, expression: str, expected: DiceNotation) -> None:
        """Test valid notation parses."""
        assert parse_notation(expression) == expected

    @pytest.mark.parametrize("expression", ["", "d20", "2d", "1d20+", "abc", "1d0"])
    def test_invalid(self, expression: str) -> None:
        """Test malformed notation raises DiceRollError."""
        with pytest.raises(DiceRollError):
            parse_notation(expression)

    def test_str(self) -> None:
        """Test notation renders back to text."""
        assert str(DiceNotation(2, 6, 3)) == "2d6+3"
        assert str(DiceNotation(3, 8, -1)) == "3d8-1"
        assert str(DiceNotation(1, 20)) == "1d20"

    def test_roll_notation(self, average_dice: DiceEngine) -> None:
        """Test evaluating notation directly."""
        assert average_dice.roll_notation("2d6+3").total == 9
