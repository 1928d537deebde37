"""Tests for leveling."""

from __future__ import annotations

import pytest

from charforge.core.config import RulesSettings
from charforge.core.exceptions import UnknownStatError
from charforge.engine.dice import DiceEngine
from charforge.engine.progression import ProgressionController, hit_die_for
from charforge.engine.resources import ResourceManager
from charforge.engine.stats import StatEngine
from charforge.models.components import ProgressionState, StatBlock
from charforge.models.enums import LevelUpState, ResourceKind, Stat


def _controller(
    block: StatBlock,
    dice: DiceEngine,
    rules: RulesSettings,
) -> tuple[ProgressionController, ResourceManager]:
    stats = StatEngine(block, rules=rules)
    resources = ResourceManager.baseline(stats.effective(), 1, rules=rules)
    controller = ProgressionController(
        ProgressionState(),
        stats=stats,
        resources=resources,
        dice=dice,
        rules=rules,
    )
    controller.roll_initial_hp()
    return controller, resources


@pytest.fixture
def fighter_progression(
    average_dice: DiceEngine,
    rules: RulesSettings,
) -> tuple[ProgressionController, ResourceManager]:
    return _controller(StatBlock(strength=16, dexterity=10, intelligence=6), average_dice, rules)


@pytest.fixture
def mage_progression(
    average_dice: DiceEngine,
    rules: RulesSettings,
) -> tuple[ProgressionController, ResourceManager]:
    return _controller(StatBlock(strength=6, dexterity=10, intelligence=16), average_dice, rules)


class TestHitDice:
    """Tests for the strength-driven hit die table."""

    @pytest.mark.parametrize(
        ("str_mod", "expected"),
        [(0, 4), (1, 4), (2, 6), (3, 8), (4, 10), (5, 12), (6, 4)],
    )
    def test_hit_die_for(self, rules: RulesSettings, str_mod: int, expected: int) -> None:
        """Test table lookup and fallback."""
        assert hit_die_for(str_mod, rules) == expected

    def test_initial_hp_strong(
        self,
        fighter_progression: tuple[ProgressionController, ResourceManager],
    ) -> None:
        """Test STR 16 starts at 10 + d8 average + 3."""
        controller, _ = fighter_progression

        assert controller.state.hp == 17
        assert controller.state.hp_rolls == [17]

    def test_initial_hp_weak(
        self,
        mage_progression: tuple[ProgressionController, ResourceManager],
    ) -> None:
        """Test a negative modifier counts as 0 and uses the fallback die."""
        controller, _ = mage_progression

        assert controller.state.hp == 12

    def test_roll_hp_records(
        self,
        fighter_progression: tuple[ProgressionController, ResourceManager],
    ) -> None:
        """Test each roll is appended and added."""
        controller, _ = fighter_progression

        assert controller.roll_hp() == 7
        assert controller.state.hp == 24
        assert controller.state.hp_rolls == [17, 7]


class TestTwoPhaseLevelUp:
    """Tests for start_level_up and allocate_point."""

    def test_start_level_up(
        self,
        fighter_progression: tuple[ProgressionController, ResourceManager],
    ) -> None:
        """Test starting raises level, rolls HP and hands out points."""
        controller, _ = fighter_progression

        assert controller.start_level_up() is True

        assert controller.level == 2
        assert controller.state.hp == 24
        assert controller.state.pending_level_up_points == 2
        assert controller.phase == LevelUpState.LEVELING_UP

    def test_cannot_start_twice(
        self,
        fighter_progression: tuple[ProgressionController, ResourceManager],
    ) -> None:
        """Test a second start is rejected while points are pending."""
        controller, _ = fighter_progression
        controller.start_level_up()

        assert controller.start_level_up() is False
        assert controller.level == 2

    def test_allocate_without_level_up(
        self,
        fighter_progression: tuple[ProgressionController, ResourceManager],
    ) -> None:
        """Test allocation is rejected when idle."""
        controller, _ = fighter_progression

        assert controller.allocate_point("str") is False
        assert controller.state.level_up_choices == []

    def test_allocate_unknown_stat(
        self,
        fighter_progression: tuple[ProgressionController, ResourceManager],
    ) -> None:
        """Test unknown stats raise."""
        controller, _ = fighter_progression
        controller.start_level_up()

        with pytest.raises(UnknownStatError):
            controller.allocate_point("cha")

    def test_allocation_completes(
        self,
        fighter_progression: tuple[ProgressionController, ResourceManager],
    ) -> None:
        """Test points are spent one at a time and the phase ends."""
        controller, resources = fighter_progression
        controller.start_level_up()

        assert controller.allocate_point(Stat.STR) is True
        assert controller.state.pending_level_up_points == 1
        assert controller.is_leveling_up is True

        assert controller.allocate_point("dex") is True
        assert controller.is_leveling_up is False
        assert controller.state.level_up_choices == [Stat.STR, Stat.DEX]
        assert resources.maximum(ResourceKind.COMBAT) == 2
        assert resources.current(ResourceKind.COMBAT) == 2

    def test_sorcery_granted_on_finalize(
        self,
        mage_progression: tuple[ProgressionController, ResourceManager],
    ) -> None:
        """Test INT above 14 grants two sorcery points."""
        controller, resources = mage_progression
        controller.start_level_up()
        controller.allocate_point("int")

        assert resources.maximum(ResourceKind.SORCERY) == 3

        controller.allocate_point("int")

        assert resources.maximum(ResourceKind.SORCERY) == 5
        assert resources.current(ResourceKind.SORCERY) == 5

    def test_single_sorcery_point_band(
        self,
        average_dice: DiceEngine,
        rules: RulesSettings,
    ) -> None:
        """Test INT 11 to 14 grants one sorcery point."""
        controller, resources = _controller(
            StatBlock(strength=6, dexterity=10, intelligence=12),
            average_dice,
            rules,
        )
        controller.start_level_up()
        controller.allocate_point("int")
        controller.allocate_point("dex")

        assert resources.maximum(ResourceKind.SORCERY) == 4

    def test_crossing_sorcery_threshold_grants_baseline(
        self,
        average_dice: DiceEngine,
        rules: RulesSettings,
    ) -> None:
        """Test reaching INT 11 mid level-up opens the starting sorcery pool."""
        controller, resources = _controller(
            StatBlock(strength=16, dexterity=6, intelligence=10),
            average_dice,
            rules,
        )
        assert resources.maximum(ResourceKind.SORCERY) == 0

        controller.start_level_up()
        controller.allocate_point("int")
        assert resources.maximum(ResourceKind.SORCERY) == 3
        assert resources.current(ResourceKind.SORCERY) == 3

        controller.allocate_point("str")
        assert resources.maximum(ResourceKind.SORCERY) == 4

    def test_crossing_threshold_on_last_point(
        self,
        average_dice: DiceEngine,
        rules: RulesSettings,
    ) -> None:
        """Test the baseline is granted before the level bonus on the final point."""
        controller, resources = _controller(
            StatBlock(strength=16, dexterity=15, intelligence=6),
            average_dice,
            rules,
        )
        controller.start_level_up()
        controller.allocate_point("str")
        controller.allocate_point("dex")

        assert controller.level == 2
        assert resources.maximum(ResourceKind.FINESSE) == 1

    def test_baseline_never_lowers_grants(
        self,
        mage_progression: tuple[ProgressionController, ResourceManager],
    ) -> None:
        """Test earlier level bonuses survive later allocations."""
        controller, resources = mage_progression
        controller.start_level_up()
        controller.allocate_point("int")
        controller.allocate_point("int")
        assert resources.maximum(ResourceKind.SORCERY) == 5

        controller.start_level_up()
        controller.allocate_point("str")

        assert resources.maximum(ResourceKind.SORCERY) == 5

    def test_level_bonus_reads_base_stats(
        self,
        average_dice: DiceEngine,
        rules: RulesSettings,
    ) -> None:
        """Test override deltas don't count toward level bonuses."""
        block = StatBlock(strength=16, dexterity=6, intelligence=6)
        stats = StatEngine(block, rules=rules)
        resources = ResourceManager.baseline(stats.effective(), 1, rules=rules)
        controller = ProgressionController(
            ProgressionState(),
            stats=stats,
            resources=resources,
            dice=average_dice,
            rules=rules,
        )
        controller.roll_initial_hp()
        stats.set_use_overrides(True)
        stats.set_stat_modifier(Stat.INT, 10)

        controller.start_level_up()
        controller.allocate_point("str")
        controller.allocate_point("str")

        assert stats.effective_stat(Stat.INT) == 16
        assert resources.maximum(ResourceKind.SORCERY) == 3

    def test_finesse_on_odd_levels(
        self,
        average_dice: DiceEngine,
        rules: RulesSettings,
    ) -> None:
        """Test DEX 16 grants a finesse point on odd levels only."""
        controller, resources = _controller(
            StatBlock(strength=10, dexterity=16, intelligence=6),
            average_dice,
            rules,
        )
        assert resources.maximum(ResourceKind.FINESSE) == 1

        controller.start_level_up()
        controller.allocate_point("str")
        controller.allocate_point("str")
        assert resources.maximum(ResourceKind.FINESSE) == 1

        controller.start_level_up()
        controller.allocate_point("int")
        controller.allocate_point("int")
        assert controller.level == 3
        assert resources.maximum(ResourceKind.FINESSE) == 2


class TestSingleCallLevelUp:
    """Tests for the legacy level_up path."""

    def test_level_up(
        self,
        fighter_progression: tuple[ProgressionController, ResourceManager],
    ) -> None:
        """Test +2 to one stat, a level and an HP roll."""
        controller, resources = fighter_progression

        assert controller.level_up("str") is True

        assert controller.level == 2
        assert controller.state.level_up_choices == [Stat.STR]
        assert controller.state.hp_rolls == [17, 7]
        assert resources.maximum(ResourceKind.COMBAT) == 2

    def test_recomputes_rather_than_grants(
        self,
        mage_progression: tuple[ProgressionController, ResourceManager],
    ) -> None:
        """Test sorcery is recomputed from the base formula."""
        controller, resources = mage_progression

        controller.level_up(Stat.INT)

        assert resources.maximum(ResourceKind.SORCERY) == 3

    def test_rejected_while_allocating(
        self,
        fighter_progression: tuple[ProgressionController, ResourceManager],
    ) -> None:
        """Test the single-call path waits for pending points."""
        controller, _ = fighter_progression
        controller.start_level_up()

        assert controller.level_up("str") is False
        assert controller.level == 2
