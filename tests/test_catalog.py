"""Function catalog tests — defaults, bounds, cutoffs, baseline sanitizing."""

from __future__ import annotations

import math

import pytest

from gem_optimizer.engine.catalog import (
    EMERGENCY_SAFE_SETTINGS,
    FACTORY_DEFAULTS,
    FUNCTION_COUNT,
    SAFETY_CONSTRAINTS,
    get_factory_defaults,
    get_function_descriptions,
    is_acceptable_value,
    low_voltage_cutoff,
    resolve_vehicle,
    round_half_up,
    sanitize_baseline,
    seed_settings,
)


class TestFactoryDefaults:

    def test_has_all_128_functions(self):
        defaults = get_factory_defaults()
        assert sorted(defaults) == list(range(1, FUNCTION_COUNT + 1))

    def test_documented_values(self):
        d = get_factory_defaults()
        assert d[1] == 22
        assert d[4] == 255
        assert d[7] == 59
        assert d[20] == 40
        assert d[24] == 43

    def test_undocumented_slots_are_zero(self):
        d = get_factory_defaults()
        assert all(d[key] == 0 for key in range(27, FUNCTION_COUNT + 1))

    def test_returns_fresh_copy(self):
        d = get_factory_defaults()
        d[1] = 999
        assert FACTORY_DEFAULTS[1] == 22
        assert get_factory_defaults()[1] == 22

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            FACTORY_DEFAULTS[1] = 30  # type: ignore[index]

    def test_factory_defaults_within_bounds(self):
        for key, bound in SAFETY_CONSTRAINTS.items():
            assert bound.min <= FACTORY_DEFAULTS[key] <= bound.max, key


class TestDescriptions:

    def test_core_descriptions(self):
        desc = get_function_descriptions()
        assert desc[1] == "MPH Scaling"
        assert desc[7] == "Minimum Field Current"
        assert desc[26] == "Ratio of Field to Arm"

    def test_every_bounded_function_is_described(self):
        desc = get_function_descriptions()
        assert set(SAFETY_CONSTRAINTS) <= set(desc)


class TestBounds:

    def test_nineteen_bounded_functions(self):
        assert len(SAFETY_CONSTRAINTS) == 19
        assert not {2, 16, 21, 25} & set(SAFETY_CONSTRAINTS)

    def test_battery_volts_bound_covers_plausible_packs(self):
        assert SAFETY_CONSTRAINTS[15] == (36, 120)

    def test_bounds_are_ordered(self):
        for bound in SAFETY_CONSTRAINTS.values():
            assert bound.min <= bound.max

    def test_emergency_subset_is_conservative(self):
        assert EMERGENCY_SAFE_SETTINGS[1] <= 20
        assert EMERGENCY_SAFE_SETTINGS[4] <= 200
        assert EMERGENCY_SAFE_SETTINGS[6] <= 40

    def test_acceptable_value(self):
        assert is_acceptable_value(7, 59)
        assert not is_acceptable_value(7, 200)
        assert is_acceptable_value(60, 500)
        assert not is_acceptable_value(60, 1000)
        assert not is_acceptable_value(60, -1)


class TestLowVoltageCutoff:

    @pytest.mark.parametrize("voltage, expected", [(72, 63), (96, 84), (48, 42)])
    def test_chemistries_agree(self, voltage, expected):
        assert low_voltage_cutoff(voltage, is_lithium=True) == expected
        assert low_voltage_cutoff(voltage, is_lithium=False) == expected

    def test_divergence_at_60_volts(self):
        assert low_voltage_cutoff(60, is_lithium=False) == 53   # 52.5 rounds up
        assert low_voltage_cutoff(60, is_lithium=True) == 52

    def test_divergence_at_36_volts(self):
        assert low_voltage_cutoff(36, is_lithium=False) == 32   # 31.5 rounds up
        assert low_voltage_cutoff(36, is_lithium=True) == 31

    def test_lithium_82_volts(self):
        assert low_voltage_cutoff(82, is_lithium=True) == 72

    def test_lithium_unknown_voltage_uses_nearest_entry(self):
        assert low_voltage_cutoff(80, is_lithium=True) == 72   # nearest: 82
        assert low_voltage_cutoff(50, is_lithium=True) == 42   # nearest: 48

    def test_round_half_up(self):
        assert round_half_up(52.5) == 53
        assert round_half_up(88.5) == 89
        assert round_half_up(2.4) == 2


class TestVehicles:

    def test_known_model(self):
        assert resolve_vehicle("e6").passengers == 6

    def test_unknown_model_falls_back_to_e4(self):
        assert resolve_vehicle("zz9") == resolve_vehicle("e4")


class TestBaseline:

    def test_drops_out_of_range_keys(self):
        assert sanitize_baseline({0: 10, 129: 10, 3: 18}) == {3: 18}

    def test_drops_out_of_bound_values(self):
        assert sanitize_baseline({7: 500, 4: 240}) == {4: 240}

    def test_accepts_string_keys_and_integral_floats(self):
        assert sanitize_baseline({"3": 18, "4": 240.0}) == {3: 18, 4: 240}

    def test_drops_garbage(self):
        assert sanitize_baseline({"x": 1, 3: "abc", 6: 45.5, 9: None}) == {}

    def test_seed_overlays_baseline(self):
        seeded = seed_settings({3: 18})
        assert seeded[3] == 18
        assert seeded[4] == 255
        assert len(seeded) == FUNCTION_COUNT

    def test_drops_values_too_large_for_an_integer(self):
        assert sanitize_baseline({3: math.inf, 6: -math.inf, 4: 240}) == {4: 240}
        assert sanitize_baseline({3: math.nan}) == {}

    def test_non_mapping_is_ignored(self, caplog):
        assert sanitize_baseline([(3, 18)]) == {}
        assert "expected a mapping" in caplog.text
