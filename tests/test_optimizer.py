"""End-to-end optimizer tests — scenarios, guarantees and degraded paths."""

from __future__ import annotations

import math

import pytest

from gem_optimizer.config import (
    BatteryProfile,
    EnvironmentProfile,
    OptimizationInput,
    VehicleProfile,
    WheelProfile,
)
from gem_optimizer.engine import analyzer, orchestrator, safety
from gem_optimizer.engine.catalog import FUNCTION_COUNT, REGISTER_MAX, REGISTER_MIN, SAFETY_CONSTRAINTS
from gem_optimizer.engine.orchestrator import FALLBACK_PERFORMANCE_CHANGES, optimize
from gem_optimizer.engine.pipeline import run_pipeline
from gem_optimizer.engine.rules import RULE_STAGES


def _assert_complete_and_bounded(settings):
    assert sorted(settings) == list(range(1, FUNCTION_COUNT + 1))
    for key, value in settings.items():
        assert REGISTER_MIN <= value <= REGISTER_MAX
        bound = SAFETY_CONSTRAINTS.get(key)
        if bound is not None:
            assert bound.min <= value <= bound.max, key


# ═══════════════════════════════════════════════════════════════════════════
# Scenarios
# ═══════════════════════════════════════════════════════════════════════════

class TestScenarios:

    def test_sparking_motor_on_steep_terrain(self, sparking_steep_input, factory):
        result = optimize(sparking_steep_input)
        s = result.optimized_settings
        assert result.success is True
        assert s[7] > factory[7]
        assert s[7] == 89
        assert s[20] < 40
        assert s[20] == 27
        assert s[2] == 5
        assert s[19] == 18
        assert s[21] == 60
        assert s[23] == 5

    def test_oversized_tires_raise_field_current(self, big_tire_input):
        s = optimize(big_tire_input).optimized_settings
        assert s[7] == 71   # round(59 × 1.2)
        assert s[1] == 26

    def test_oversized_tires_with_sparking_motor_stay_bounded(self):
        request = OptimizationInput(
            vehicle=VehicleProfile(motor_condition="sparking"),
            wheel=WheelProfile(tire_diameter=30),
        )
        s = optimize(request).optimized_settings
        assert s[7] <= SAFETY_CONSTRAINTS[7].max

    def test_defaults_stay_close_to_factory(self, default_input, factory):
        result = optimize(default_input)
        changed = result.changed_functions()
        assert set(changed) == {5}          # plug current trimmed for lead-acid
        assert changed[5] == (255, 242)


# ═══════════════════════════════════════════════════════════════════════════
# Output guarantees
# ═══════════════════════════════════════════════════════════════════════════

class TestOutputGuarantees:

    @pytest.mark.parametrize("request_", [
        OptimizationInput(),
        OptimizationInput(vehicle=VehicleProfile(model="e6", motor_condition="fair")),
        OptimizationInput(battery=BatteryProfile(chemistry="lithium", voltage=96, capacity_ah=300)),
        OptimizationInput(battery=BatteryProfile(voltage=30, capacity_ah=20)),
        OptimizationInput(wheel=WheelProfile(tire_diameter=40, gear_ratio=4)),
        OptimizationInput(
            environment=EnvironmentProfile(terrain="steep", vehicle_load="max", temperature_range="extreme"),
            priorities={"range": 10, "speed": 10, "acceleration": 10, "hill_climbing": 10, "regen": 10},
        ),
    ])
    def test_complete_and_bounded(self, request_):
        _assert_complete_and_bounded(optimize(request_).optimized_settings)

    def test_deterministic(self, sparking_steep_input):
        first = optimize(sparking_steep_input)
        second = optimize(sparking_steep_input)
        assert first.optimized_settings == second.optimized_settings
        assert first.performance_changes == second.performance_changes

    def test_motor_protection_is_monotonic(self):
        values = [
            optimize(OptimizationInput(
                vehicle=VehicleProfile(motor_condition=condition),
                environment=EnvironmentProfile(terrain="moderate"),
            )).optimized_settings[7]
            for condition in ("good", "fair", "sparking")
        ]
        assert values == sorted(values)
        assert values[0] < values[2]

    @pytest.mark.parametrize("voltage, lead, lithium", [
        (72, 63, 63), (96, 84, 84), (48, 42, 42), (60, 53, 52), (36, 32, 31),
    ])
    def test_low_voltage_cutoff_by_chemistry(self, voltage, lead, lithium):
        lead_result = optimize(OptimizationInput(battery=BatteryProfile(chemistry="lead", voltage=voltage)))
        li_result = optimize(OptimizationInput(battery=BatteryProfile(chemistry="lithium", voltage=voltage)))
        assert lead_result.optimized_settings[16] == lead
        assert li_result.optimized_settings[16] == lithium
        assert lead_result.optimized_settings[15] == li_result.optimized_settings[15] == voltage


# ═══════════════════════════════════════════════════════════════════════════
# Baseline, warnings and degraded paths
# ═══════════════════════════════════════════════════════════════════════════

class TestBaseline:

    def test_baseline_seeds_vector(self):
        result = optimize(OptimizationInput(), baseline={"3": 18, 200: 5, 7: 9999})
        assert result.is_using_imported_baseline is True
        assert result.baseline_settings[3] == 18
        assert result.optimized_settings[3] == 18
        assert 200 not in result.baseline_settings

    def test_unusable_baseline_is_ignored(self):
        result = optimize(OptimizationInput(), baseline={7: 9999})
        assert result.is_using_imported_baseline is False

    def test_infinite_value_is_dropped(self):
        result = optimize(OptimizationInput(), baseline={3: math.inf})
        assert result.success is True
        assert result.is_using_imported_baseline is False
        assert result.optimized_settings[3] == 20

    def test_non_mapping_baseline_is_ignored(self):
        result = optimize(OptimizationInput(), baseline=[(3, 18)])
        assert result.success is True
        assert result.is_using_imported_baseline is False
        assert result.baseline_settings[3] == 20

    def test_factory_settings_reported(self, factory):
        assert optimize().factory_settings == factory


class TestWarnings:

    def test_validation_warnings_copied(self):
        result = optimize(OptimizationInput(battery=BatteryProfile(voltage=30)))
        assert any("Battery voltage seems unusual" in w for w in result.warnings)
        assert result.optimized_settings[15] == SAFETY_CONSTRAINTS[15].min

    def test_analyzer_failure_uses_default_context(self, monkeypatch):
        def boom(_load):
            raise KeyError("load")

        monkeypatch.setattr(analyzer, "calculate_load_factor", boom)
        result = optimize(OptimizationInput(vehicle=VehicleProfile(motor_condition="sparking")))
        assert result.success is True
        assert result.analysis_data.is_default is True
        assert result.optimized_settings[7] == 59
        assert any("default vehicle assumptions" in w for w in result.warnings)

    def test_stage_failure_becomes_warning(self, monkeypatch, sparking_steep_input):
        def broken(settings, ctx):
            raise ArithmeticError("terrain table")

        stages = tuple((name, broken if name == "terrain" else fn) for name, fn in RULE_STAGES)
        monkeypatch.setattr(orchestrator, "run_pipeline", lambda settings, ctx: run_pipeline(settings, ctx, stages))

        result = optimize(sparking_steep_input)
        assert result.success is True
        assert result.optimized_settings[3] == 20       # terrain never softened launch
        assert result.optimized_settings[7] == 89       # motor protection still applied
        assert any("terrain" in w for w in result.warnings)
        assert [o.ok for o in result.stage_outcomes].count(False) == 1


class TestFallbacks:

    def test_enforcer_failure_applies_emergency_settings(self, monkeypatch):
        def broken(_settings):
            raise RuntimeError("enforcer down")

        monkeypatch.setattr(safety, "_clamp", broken)
        result = optimize(OptimizationInput())
        assert result.success is True
        assert result.emergency_fallback is True
        s = result.optimized_settings
        assert s[1] <= 20
        assert s[4] <= 200
        assert s[6] <= 40
        assert len(s) == FUNCTION_COUNT

    def test_whole_call_failure(self, monkeypatch, factory):
        def broken(settings, ctx):
            raise RuntimeError("pipeline exploded")

        monkeypatch.setattr(orchestrator, "run_pipeline", broken)
        result = optimize(OptimizationInput(), baseline={3: 18})
        assert result.success is False
        assert result.emergency_fallback is True
        assert result.optimized_settings == {**factory, 3: 18}
        assert result.performance_changes == FALLBACK_PERFORMANCE_CHANGES
        assert result.error_message
        assert "RuntimeError" in result.error_message
