"""Safety constraint enforcer — the last word on every value leaving the engine."""

from __future__ import annotations

import logging
from typing import NamedTuple

from gem_optimizer.engine.catalog import (
    EMERGENCY_SAFE_SETTINGS,
    REGISTER_MAX,
    REGISTER_MIN,
    SAFETY_CONSTRAINTS,
)
from gem_optimizer.models.results import SettingsVector

_logger = logging.getLogger(__name__)


class EnforcementResult(NamedTuple):
    settings: SettingsVector
    warnings: list[str]
    emergency_applied: bool


def _clamp(settings: SettingsVector) -> SettingsVector:
    out: SettingsVector = {}
    for key, value in settings.items():
        value = max(REGISTER_MIN, min(REGISTER_MAX, int(value)))
        bound = SAFETY_CONSTRAINTS.get(key)
        if bound is not None:
            value = max(bound.min, min(bound.max, value))
        out[key] = value
    return out


def enforce_safety_constraints(settings: SettingsVector) -> EnforcementResult:
    """Clamp every bounded function into its range and every function into 0–999.

    If clamping itself fails, the emergency-safe subset is written over the
    incoming vector instead and ``emergency_applied`` is set.
    """
    try:
        return EnforcementResult(_clamp(settings), [], False)
    except Exception as exc:
        _logger.warning("Safety enforcement failed, applying emergency settings: %s", exc)
        fallback = dict(settings)
        fallback.update(EMERGENCY_SAFE_SETTINGS)
        warning = (
            "Safety constraint enforcement failed; conservative emergency settings "
            f"applied to functions {', '.join(str(k) for k in EMERGENCY_SAFE_SETTINGS)}"
        )
        return EnforcementResult(fallback, [warning], True)
