"""Safety enforcer tests — clamping and the emergency fallback."""

from __future__ import annotations

from gem_optimizer.engine import safety
from gem_optimizer.engine.catalog import SAFETY_CONSTRAINTS
from gem_optimizer.engine.safety import enforce_safety_constraints


class TestClamping:

    def test_factory_passes_unchanged(self, factory):
        result = enforce_safety_constraints(factory)
        assert result.settings == factory
        assert result.warnings == []
        assert result.emergency_applied is False

    def test_bounded_keys_clamped(self, factory):
        wild = {**factory, 1: 5, 7: 300, 20: 0}
        out = enforce_safety_constraints(wild).settings
        assert out[1] == SAFETY_CONSTRAINTS[1].min
        assert out[7] == SAFETY_CONSTRAINTS[7].max
        assert out[20] == SAFETY_CONSTRAINTS[20].min

    def test_unbounded_keys_clamped_to_register_range(self, factory):
        wild = {**factory, 60: 5000, 61: -3}
        out = enforce_safety_constraints(wild).settings
        assert out[60] == 999
        assert out[61] == 0

    def test_input_not_mutated(self, factory):
        wild = {**factory, 7: 300}
        enforce_safety_constraints(wild)
        assert wild[7] == 300


class TestEmergency:

    def test_emergency_subset_applied_when_clamp_fails(self, factory, monkeypatch, caplog):
        def broken(_settings):
            raise RuntimeError("clamp failure")

        monkeypatch.setattr(safety, "_clamp", broken)
        result = enforce_safety_constraints({**factory, 6: 90})

        assert result.emergency_applied is True
        assert result.settings[1] <= 20
        assert result.settings[4] <= 200
        assert result.settings[6] <= 40
        assert result.settings[24] == 60
        assert result.settings[3] == factory[3]
        assert len(result.warnings) == 1
        assert "clamp failure" in caplog.text
