"""Trip adjustments and revalidation.

Trip overrides are applied on top of the base optimizer's vector, then the
result is revalidated against condition-specific bands and finally the
trip layer's own absolute limits.

``ABSOLUTE_LIMITS`` is separate from the catalog's
``SAFETY_CONSTRAINTS``: the two tables disagree on several functions and
only this one is applied after the trip overrides.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from gem_optimizer.engine.catalog import (
    F_ARMATURE_ACCEL_RATE,
    F_CONTROLLED_ACCEL,
    F_FIELD_WEAKENING_START,
    F_MAX_ARMATURE_CURRENT,
    F_MAX_FIELD_CURRENT,
    F_MIN_FIELD_CURRENT,
    F_REGEN_ARMATURE_CURRENT,
    F_REVERSE_SPEED_LIMIT,
    F_TURF_SPEED_LIMIT,
    SafetyBound,
)
from gem_optimizer.models.results import SettingsVector
from gem_optimizer.models.trip import TripAnalysis

ABSOLUTE_LIMITS: Mapping[int, SafetyBound] = MappingProxyType({
    1: SafetyBound(50, 150),
    3: SafetyBound(5, 25),
    4: SafetyBound(200, 300),
    5: SafetyBound(1, 20),
    6: SafetyBound(30, 100),
    7: SafetyBound(50, 70),
    8: SafetyBound(200, 300),
    9: SafetyBound(150, 275),
    10: SafetyBound(50, 250),
    11: SafetyBound(5, 25),
    12: SafetyBound(5, 25),
    14: SafetyBound(0, 15),
    15: SafetyBound(48, 100),
    19: SafetyBound(1, 20),
    20: SafetyBound(1, 50),
    22: SafetyBound(15, 30),
    23: SafetyBound(0, 10),
    24: SafetyBound(40, 80),
    26: SafetyBound(1, 5),
})

RAIN_SAFETY_BANDS: Mapping[int, SafetyBound] = MappingProxyType({
    F_CONTROLLED_ACCEL: SafetyBound(20, 25),
    F_TURF_SPEED_LIMIT: SafetyBound(5, 15),
    F_REVERSE_SPEED_LIMIT: SafetyBound(5, 15),
})

# Heavy loads need at least this much current and field.
HEAVY_LOAD_MINIMUMS: Mapping[int, int] = MappingProxyType({
    F_MAX_ARMATURE_CURRENT: 240,
    F_MIN_FIELD_CURRENT: 65,
})

# Written over factory defaults when the trip flow cannot complete.
TRIP_FALLBACK_SETTINGS: Mapping[int, int] = MappingProxyType({
    3: 20,
    4: 235,
    6: 60,
    7: 65,
    9: 225,
    10: 200,
    11: 15,
    12: 10,
    24: 60,
})

EXTREME_GRADE_PCT = 15


def _clamp_to(settings: SettingsVector, limits: Mapping[int, SafetyBound]) -> None:
    for key, bound in limits.items():
        if key in settings:
            settings[key] = max(bound.min, min(bound.max, settings[key]))


# ═══════════════════════════════════════════════════════════════════════════
# Overrides
# ═══════════════════════════════════════════════════════════════════════════

def apply_trip_adjustments(settings: SettingsVector, analysis: TripAnalysis) -> SettingsVector:
    """Condition-driven overrides on a copy of ``settings``."""
    s = dict(settings)
    weather = analysis.weather

    if weather.temperature == "hot":
        s[F_MAX_ARMATURE_CURRENT] = max(200, s[F_MAX_ARMATURE_CURRENT] - 15)
        s[F_CONTROLLED_ACCEL] = min(25, s[F_CONTROLLED_ACCEL] + 2)
    elif weather.temperature == "cold":
        s[F_MAX_ARMATURE_CURRENT] = max(200, s[F_MAX_ARMATURE_CURRENT] - 10)

    if weather.conditions == "rain":
        s[F_CONTROLLED_ACCEL] = min(25, s[F_CONTROLLED_ACCEL] + 3)
        s[F_TURF_SPEED_LIMIT] = max(5, s[F_TURF_SPEED_LIMIT] - 3)

    if analysis.terrain.max_grade > EXTREME_GRADE_PCT:
        s[F_MIN_FIELD_CURRENT] = 70
        s[F_MAX_FIELD_CURRENT] = 255
        s[F_FIELD_WEAKENING_START] = min(80, s[F_FIELD_WEAKENING_START] + 10)

    for requirement in analysis.special:
        if requirement.type == "parade_mode":
            s[F_CONTROLLED_ACCEL] = 25
            s[F_ARMATURE_ACCEL_RATE] = 80
            s[F_TURF_SPEED_LIMIT] = 8
        elif requirement.type == "comfort_priority":
            s[F_ARMATURE_ACCEL_RATE] = min(100, s[F_ARMATURE_ACCEL_RATE] + 10)
            s[F_REGEN_ARMATURE_CURRENT] = max(150, s[F_REGEN_ARMATURE_CURRENT] - 10)
        elif requirement.type == "motion_comfort":
            s[F_CONTROLLED_ACCEL] = min(25, s[F_CONTROLLED_ACCEL] + 3)
            s[F_ARMATURE_ACCEL_RATE] = min(100, s[F_ARMATURE_ACCEL_RATE] + 15)

    return s


# ═══════════════════════════════════════════════════════════════════════════
# Revalidation
# ═══════════════════════════════════════════════════════════════════════════

def revalidate_settings(settings: SettingsVector, analysis: TripAnalysis) -> SettingsVector:
    """Rain bands, heavy-load minimums, then ``ABSOLUTE_LIMITS``, on a copy."""
    s = dict(settings)

    if analysis.weather.conditions == "rain" or analysis.weather.severity != "normal":
        _clamp_to(s, RAIN_SAFETY_BANDS)

    if analysis.load.total_weight == "heavy":
        for key, minimum in HEAVY_LOAD_MINIMUMS.items():
            s[key] = max(minimum, s[key])

    _clamp_to(s, ABSOLUTE_LIMITS)
    return s


def trip_fallback_settings(factory: SettingsVector) -> SettingsVector:
    fallback = dict(factory)
    fallback.update(TRIP_FALLBACK_SETTINGS)
    return fallback
