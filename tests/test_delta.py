"""Performance delta tests — percentages and change sentences."""

from __future__ import annotations

from gem_optimizer.engine.analyzer import analyze_configuration
from gem_optimizer.engine.delta import (
    MINIMAL_CHANGES,
    calculate_performance_deltas,
    describe_performance_changes,
)


class TestDeltas:

    def test_identical_vectors_are_zero(self, factory, default_ctx):
        d = calculate_performance_deltas(factory, factory, default_ctx)
        assert (d.speed, d.acceleration, d.hill_climbing, d.range, d.motor_protection, d.regen) == (0, 0, 0, 0, 0, 0)

    def test_motor_protection_vector(self, factory, default_ctx):
        optimized = {**factory, 3: 16, 7: 89, 24: 65, 26: 4, 9: 243}
        d = calculate_performance_deltas(optimized, factory, default_ctx)
        assert d.speed == -34          # 59/89 - 1
        assert d.acceleration == 25    # 20/16 - 1
        assert d.hill_climbing == 17   # 0.5 × (4/3 - 1)
        assert d.range == -10          # 0.5 × (16/20 - 1)
        assert d.motor_protection == 102
        assert d.regen == 5

    def test_lithium_range_bonus(self, factory, lithium_input):
        d = calculate_performance_deltas(factory, factory, analyze_configuration(lithium_input))
        assert d.range == 15

    def test_lower_current_limit_extends_range(self, factory, default_ctx):
        d = calculate_performance_deltas({**factory, 4: 170}, factory, default_ctx)
        assert d.range == 15           # 0.3 × (255/170 - 1)
        assert d.hill_climbing < 0

    def test_tire_ratio_counts_toward_speed(self, factory, big_tire_input):
        d = calculate_performance_deltas(factory, factory, analyze_configuration(big_tire_input))
        assert d.speed == 18

    def test_zero_factory_value_does_not_divide(self, factory, default_ctx):
        zeroed = {**factory, 26: 0}
        d = calculate_performance_deltas(zeroed, zeroed, default_ctx)
        assert d.hill_climbing == 0


class TestSentences:

    def test_minimal_changes(self, factory, default_ctx):
        assert describe_performance_changes(factory, factory, default_ctx) == [MINIMAL_CHANGES]

    def test_protective_tune(self, factory, default_ctx):
        optimized = {**factory, 3: 16, 7: 89, 24: 65, 26: 4}
        changes = describe_performance_changes(optimized, factory, default_ctx)
        assert "Top speed reduced by approximately 34% for motor protection" in changes
        assert "Acceleration improved by approximately 25%" in changes
        assert "Hill climbing ability improved by approximately 17%" in changes
        assert "Range slightly reduced in favor of performance" in changes
        assert any(c.startswith("Motor protection significantly improved") for c in changes)

    def test_regen_sentence(self, factory, default_ctx):
        optimized = {**factory, 9: 254, 10: 216}
        changes = describe_performance_changes(optimized, factory, default_ctx)
        assert "Regenerative braking strength increased by approximately 17%" in changes

    def test_extended_function_sentences(self, factory, default_ctx):
        optimized = {**factory, 2: 5, 5: 200, 19: 18, 21: 60, 23: 5}
        changes = describe_performance_changes(optimized, factory, default_ctx)
        assert any(c.startswith("Creep speed raised to 5") for c in changes)
        assert "Plug braking current reduced by approximately 22%" in changes
        assert any(c.startswith("Field ramp rate slowed") for c in changes)
        assert any(c.startswith("Armature current ramp lengthened") for c in changes)
        assert any(c.startswith("Error compensation adjusted from 10 to 5") for c in changes)

    def test_small_extended_changes_are_silent(self, factory, default_ctx):
        optimized = {**factory, 2: 1, 19: 14, 21: 45, 23: 11}
        assert describe_performance_changes(optimized, factory, default_ctx) == [MINIMAL_CHANGES]
