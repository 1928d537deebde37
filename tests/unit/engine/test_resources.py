"""Tests for maneuver resource pools."""

from __future__ import annotations

import pytest

from charforge.core.config import RulesSettings
from charforge.engine.resources import ResourceManager, combat_max_for, max_values_for
from charforge.models.components import ResourcePool, ResourcePools
from charforge.models.enums import ResourceKind, Stat
from charforge.models.stats import StatLine


@pytest.fixture
def manager(rules: RulesSettings) -> ResourceManager:
    pools = ResourcePools(
        sorcery=ResourcePool.full(5),
        finesse=ResourcePool.full(3),
        combat=ResourcePool.full(2),
    )
    return ResourceManager(pools, rules=rules)


class TestMaxValues:
    """Tests for pool maxima derived from stats."""

    def test_strong_character(self, rules: RulesSettings) -> None:
        """Test STR 16 grants combat points only."""
        maxima = max_values_for(StatLine(16, 10, 6), 1, rules)

        assert maxima == {
            ResourceKind.SORCERY: 0,
            ResourceKind.FINESSE: 0,
            ResourceKind.COMBAT: 1,
        }

    def test_clever_character(self, rules: RulesSettings) -> None:
        """Test INT above 10 grants base sorcery points."""
        maxima = max_values_for(StatLine(6, 10, 16), 1, rules)

        assert maxima[ResourceKind.SORCERY] == 3

    def test_sorcery_threshold_is_strict(self, rules: RulesSettings) -> None:
        """Test INT exactly 10 grants no sorcery."""
        assert max_values_for(StatLine(10, 10, 10), 1, rules)[ResourceKind.SORCERY] == 0
        assert max_values_for(StatLine(10, 10, 11), 1, rules)[ResourceKind.SORCERY] == 3

    def test_finesse_threshold(self, rules: RulesSettings) -> None:
        """Test DEX 16 grants a finesse point."""
        assert max_values_for(StatLine(10, 16, 6), 1, rules)[ResourceKind.FINESSE] == 1
        assert max_values_for(StatLine(10, 15, 6), 1, rules)[ResourceKind.FINESSE] == 0

    def test_combat_scales_with_level(self, rules: RulesSettings) -> None:
        """Test combat points equal level once strength qualifies."""
        assert combat_max_for(StatLine(16, 10, 6), 4, rules) == 4
        assert combat_max_for(StatLine(15, 10, 6), 4, rules) == 0


class TestSpending:
    """Tests for spending and resting."""

    def test_spend(self, manager: ResourceManager) -> None:
        """Test spending one point."""
        assert manager.spend(ResourceKind.SORCERY) is True
        assert manager.current(ResourceKind.SORCERY) == 4

    def test_spend_by_name(self, manager: ResourceManager) -> None:
        """Test pools can be named by string."""
        assert manager.spend("finesse") is True
        assert manager.current("finesse") == 2

    def test_spend_empty(self, rules: RulesSettings) -> None:
        """Test spending from an empty pool fails without change."""
        manager = ResourceManager(ResourcePools(), rules=rules)

        assert manager.spend(ResourceKind.COMBAT) is False
        assert manager.current(ResourceKind.COMBAT) == 0

    def test_short_rest_restores_half_rounded_up(self, manager: ResourceManager) -> None:
        """Test short rest restores ceil(max / 2)."""
        for _ in range(5):
            manager.spend(ResourceKind.SORCERY)
        for _ in range(3):
            manager.spend(ResourceKind.FINESSE)

        manager.short_rest()

        assert manager.current(ResourceKind.SORCERY) == 3
        assert manager.current(ResourceKind.FINESSE) == 2

    def test_short_rest_capped_at_max(self, manager: ResourceManager) -> None:
        """Test short rest never exceeds the maximum."""
        manager.spend(ResourceKind.SORCERY)

        manager.short_rest()

        assert manager.current(ResourceKind.SORCERY) == 5

    def test_long_rest_refills(self, manager: ResourceManager) -> None:
        """Test long rest refills every pool."""
        for kind in ResourceKind:
            manager.spend(kind)

        manager.long_rest()

        for kind in ResourceKind:
            assert manager.current(kind) == manager.maximum(kind)

    def test_rest_is_long_rest(self, manager: ResourceManager) -> None:
        """Test rest refills like a long rest."""
        manager.spend(ResourceKind.COMBAT)
        manager.spend(ResourceKind.COMBAT)

        manager.rest()

        assert manager.current(ResourceKind.COMBAT) == 2


class TestGrowth:
    """Tests for raising and recomputing maxima."""

    def test_grant(self, manager: ResourceManager) -> None:
        """Test grant raises max and current together."""
        manager.spend(ResourceKind.SORCERY)

        manager.grant(ResourceKind.SORCERY, 2)

        assert manager.maximum(ResourceKind.SORCERY) == 7
        assert manager.current(ResourceKind.SORCERY) == 6

    def test_update_max_values_raises(self, rules: RulesSettings) -> None:
        """Test a raised maximum raises current by the same amount."""
        manager = ResourceManager.baseline(StatLine(16, 10, 6), 1, rules=rules)
        manager.spend(ResourceKind.COMBAT)

        deltas = manager.update_max_values(StatLine(16, 10, 6), 3)

        assert deltas[ResourceKind.COMBAT] == 2
        assert manager.maximum(ResourceKind.COMBAT) == 3
        assert manager.current(ResourceKind.COMBAT) == 2

    def test_update_max_values_lowers(self, rules: RulesSettings) -> None:
        """Test a lowered maximum clamps current."""
        manager = ResourceManager.baseline(StatLine(6, 10, 16), 1, rules=rules)

        manager.update_max_values(StatLine(6, 10, 10), 1)

        assert manager.maximum(ResourceKind.SORCERY) == 0
        assert manager.current(ResourceKind.SORCERY) == 0

    def test_ensure_baseline_raises(self, rules: RulesSettings) -> None:
        """Test a newly qualifying stat opens its pool."""
        manager = ResourceManager.baseline(StatLine(16, 10, 10), 1, rules=rules)

        deltas = manager.ensure_baseline(StatLine(16, 10, 11), 1)

        assert deltas[ResourceKind.SORCERY] == 3
        assert manager.current(ResourceKind.SORCERY) == 3

    def test_ensure_baseline_keeps_higher_max(self, manager: ResourceManager) -> None:
        """Test maxima above the baseline are left alone."""
        manager.spend(ResourceKind.SORCERY)

        deltas = manager.ensure_baseline(StatLine(6, 16, 16), 1)

        assert set(deltas.values()) == {0}
        assert manager.maximum(ResourceKind.SORCERY) == 5
        assert manager.current(ResourceKind.SORCERY) == 4

    def test_recompute_combat(self, rules: RulesSettings) -> None:
        """Test combat pool follows level once strength qualifies."""
        manager = ResourceManager.baseline(StatLine(15, 10, 6), 2, rules=rules)
        assert manager.maximum(ResourceKind.COMBAT) == 0

        delta = manager.recompute_combat(StatLine(16, 10, 6), 2)

        assert delta == 2
        assert manager.current(ResourceKind.COMBAT) == 2


class TestQueries:
    """Tests for maneuver queries."""

    def test_maneuvers(self, manager: ResourceManager) -> None:
        """Test each stat maps to its pool."""
        stats = StatLine(16, 10, 6)

        assert manager.maneuvers(Stat.INT, stats, 3) == 5
        assert manager.maneuvers("dex", stats, 3) == 3
        assert manager.maneuvers("str", stats, 3) == 3

    def test_can_perform_finesse_attacks(self, manager: ResourceManager) -> None:
        """Test finesse attacks need the dexterity and a point."""
        assert manager.can_perform_finesse_attacks(StatLine(10, 16, 10)) is True
        assert manager.can_perform_finesse_attacks(StatLine(10, 15, 10)) is False

        for _ in range(3):
            manager.spend(ResourceKind.FINESSE)
        assert manager.can_perform_finesse_attacks(StatLine(10, 16, 10)) is False
