"""End-to-end trip optimization tests."""

from __future__ import annotations

from gem_optimizer.config import TripData
from gem_optimizer.models.results import OptimizationResult
from gem_optimizer.trip import orchestrator
from gem_optimizer.trip.adjustments import ABSOLUTE_LIMITS, TRIP_FALLBACK_SETTINGS
from gem_optimizer.trip.orchestrator import optimize_for_trip


class TestRainyTrip:

    def test_rain_keeps_gentle_launch_and_low_turf_speed(self, rainy_trip, factory):
        result = optimize_for_trip(rainy_trip)
        s = result.optimized_settings
        assert result.success is True
        assert result.fallback_mode is False
        assert 20 <= s[3] <= 25
        assert s[3] == 23
        assert s[11] <= 15
        assert s[11] < factory[11]
        assert s[12] == 15

    def test_report_and_confidence(self, rainy_trip):
        result = optimize_for_trip(rainy_trip)
        assert result.confidence == 90
        assert [w.type for w in result.report.warnings] == ["weather"]
        assert [k.function for k in result.report.key_optimizations] == [1, 3, 5, 11, 12, 22]
        assert result.report.expected_performance.acceleration == 3
        assert result.priorities.safety == 9


class TestMountainTrip:

    def test_final_vector(self, mountain_trip):
        result = optimize_for_trip(mountain_trip)
        s = result.optimized_settings
        assert result.success is True
        assert s[4] == 240          # hot trims to 227, heavy load floors at 240
        assert s[7] == 70
        assert s[8] == 255
        assert s[24] == 53
        assert s[3] == 21

    def test_absolute_limits_hold(self, mountain_trip):
        s = optimize_for_trip(mountain_trip).optimized_settings
        for key, bound in ABSOLUTE_LIMITS.items():
            assert bound.min <= s[key] <= bound.max, key

    def test_expected_performance(self, mountain_trip):
        perf = optimize_for_trip(mountain_trip).report.expected_performance
        assert perf.estimated_range == 15
        assert perf.efficiency_rating == 48
        assert perf.hill_climbing_ability == 72


class TestFallback:

    def test_default_trip_succeeds(self):
        result = optimize_for_trip()
        assert result.success is True
        assert result.confidence == 65
        assert result.base_result is not None

    def test_exception_gives_conservative_settings(self, monkeypatch, factory):
        def broken(_request):
            raise RuntimeError("engine offline")

        monkeypatch.setattr(orchestrator, "optimize", broken)
        result = optimize_for_trip(TripData())

        assert result.success is False
        assert result.fallback_mode is True
        assert result.message.startswith("Using conservative settings due to optimization error")
        assert result.report is None
        for key, value in TRIP_FALLBACK_SETTINGS.items():
            assert result.optimized_settings[key] == value
        assert result.optimized_settings[1] == factory[1]

    def test_failed_base_result_triggers_fallback(self, monkeypatch, factory):
        def failed(_request):
            return OptimizationResult(
                success=False,
                error_message="base engine failed",
                optimized_settings=factory,
                factory_settings=factory,
                baseline_settings=factory,
            )

        monkeypatch.setattr(orchestrator, "optimize", failed)
        result = optimize_for_trip(TripData())
        assert result.fallback_mode is True
        assert "base engine failed" in result.message
