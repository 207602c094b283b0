"""Export envelope and result serialization tests.

Exported files are read back by later releases, so the envelope keys and
the version check are part of the public contract.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from gem_optimizer.config import OptimizationInput, VehicleProfile
from gem_optimizer.engine.orchestrator import optimize
from gem_optimizer.errors import IncompatibleVersionError, OptimizerError, format_user_error
from gem_optimizer.export import EXPORT_VERSION, export_configuration, import_configuration
from gem_optimizer.models.results import OptimizationResult
from gem_optimizer.models.trip import TripOptimizationResult
from gem_optimizer.trip.orchestrator import optimize_for_trip

STAMP = datetime(2026, 5, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def sparking_result(sparking_steep_input) -> OptimizationResult:
    return optimize(sparking_steep_input)


# ═══════════════════════════════════════════════════════════════════════════
# Envelope
# ═══════════════════════════════════════════════════════════════════════════

class TestExport:

    def test_wire_keys(self, sparking_result):
        raw = json.loads(export_configuration(sparking_result, STAMP))
        assert set(raw) == {"version", "timestamp", "inputData", "optimizedSettings", "performanceChanges"}
        assert raw["version"] == EXPORT_VERSION
        assert raw["timestamp"].startswith("2026-05-01T12:00:00")
        assert raw["optimizedSettings"]["7"] == 89
        assert len(raw["optimizedSettings"]) == 128

    def test_round_trip(self, sparking_result):
        envelope = import_configuration(export_configuration(sparking_result, STAMP))
        assert envelope.optimized_settings == sparking_result.optimized_settings
        assert envelope.input_data == sparking_result.input_data
        assert envelope.performance_changes == sparking_result.performance_changes
        assert envelope.timestamp == STAMP

    def test_imported_settings_seed_new_run(self, sparking_result):
        envelope = import_configuration(export_configuration(sparking_result))
        rerun = optimize(envelope.input_data, envelope.optimized_settings)
        assert rerun.is_using_imported_baseline is True
        assert rerun.baseline_settings == sparking_result.optimized_settings


class TestImportRejections:

    def _envelope(self, sparking_result) -> dict:
        return json.loads(export_configuration(sparking_result, STAMP))

    @pytest.mark.parametrize("version", ["2.0", "0.9", None])
    def test_version_mismatch(self, sparking_result, version):
        raw = self._envelope(sparking_result)
        raw["version"] = version
        with pytest.raises(IncompatibleVersionError) as info:
            import_configuration(json.dumps(raw))
        assert info.value.found == version
        assert info.value.expected == EXPORT_VERSION

    def test_missing_version(self, sparking_result):
        raw = self._envelope(sparking_result)
        del raw["version"]
        with pytest.raises(IncompatibleVersionError):
            import_configuration(json.dumps(raw))

    def test_version_checked_before_fields(self):
        with pytest.raises(IncompatibleVersionError):
            import_configuration(json.dumps({"version": "9.9", "optimizedSettings": "garbage"}))

    def test_not_json(self):
        with pytest.raises(OptimizerError, match="not valid JSON"):
            import_configuration("{not json")

    def test_not_an_object(self):
        with pytest.raises(OptimizerError, match="JSON object"):
            import_configuration("[1, 2, 3]")

    def test_malformed_fields(self, sparking_result):
        raw = self._envelope(sparking_result)
        raw["optimizedSettings"] = {"1": "fast"}
        with pytest.raises(ValidationError):
            import_configuration(json.dumps(raw))


# ═══════════════════════════════════════════════════════════════════════════
# Result models
# ═══════════════════════════════════════════════════════════════════════════

class TestResultRoundTrip:

    def test_optimization_result(self, sparking_result):
        restored = OptimizationResult.model_validate_json(sparking_result.model_dump_json())
        assert restored.optimized_settings == sparking_result.optimized_settings
        assert restored.analysis_data == sparking_result.analysis_data
        assert restored.stage_outcomes == sparking_result.stage_outcomes

    def test_trip_result(self, mountain_trip):
        result = optimize_for_trip(mountain_trip)
        restored = TripOptimizationResult.model_validate_json(result.model_dump_json())
        assert restored == result


# ═══════════════════════════════════════════════════════════════════════════
# User-facing error text
# ═══════════════════════════════════════════════════════════════════════════

class TestFormatUserError:

    def test_version(self):
        text = format_user_error(IncompatibleVersionError("2.0", "1.0"))
        assert text == "This configuration file was saved by version 2.0 and cannot be loaded by version 1.0."

    def test_validation_error_names_field(self):
        with pytest.raises(ValidationError) as info:
            OptimizationInput(vehicle=VehicleProfile(motor_condition="smoking"))
        assert format_user_error(info.value).startswith("Invalid value for motor_condition")

    def test_optimizer_error_passes_message(self):
        assert format_user_error(OptimizerError("pack too small")) == "pack too small"

    def test_unexpected_error_hides_details(self):
        text = format_user_error(ZeroDivisionError("division by zero"))
        assert "ZeroDivisionError" in text
        assert "division by zero" not in text
