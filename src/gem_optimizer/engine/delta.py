"""Performance delta calculator — optimized vs factory, in driver terms.

All deltas are whole percentages.  They are heuristic estimates driven by
the handful of functions that dominate each dimension, not a vehicle model.
"""

from __future__ import annotations

from gem_optimizer.engine.catalog import (
    F_ARMATURE_CURRENT_RAMP,
    F_CONTROLLED_ACCEL,
    F_CREEP_SPEED,
    F_ERROR_COMPENSATION,
    F_FIELD_RAMP_RATE,
    F_FIELD_TO_ARMATURE_RATIO,
    F_FIELD_WEAKENING_START,
    F_MAX_ARMATURE_CURRENT,
    F_MIN_FIELD_CURRENT,
    F_PLUG_CURRENT,
    F_REGEN_ARMATURE_CURRENT,
    F_REGEN_MAX_FIELD_CURRENT,
    round_half_up,
)
from gem_optimizer.models.results import AnalysisContext, PerformanceDeltas, SettingsVector

LITHIUM_RANGE_BONUS = 0.15

MINIMAL_CHANGES = "Minimal changes from factory settings; performance should be similar to stock"


def _ratio(numerator: int, denominator: int) -> float:
    """``numerator / denominator - 1``, treating a zero denominator as no change."""
    if denominator == 0:
        return 0.0
    return numerator / denominator - 1


def _pct(fraction: float) -> int:
    value = fraction * 100
    return round_half_up(value) if value >= 0 else -round_half_up(-value)


def calculate_performance_deltas(
    optimized: SettingsVector,
    factory: SettingsVector,
    ctx: AnalysisContext,
) -> PerformanceDeltas:
    o, f = optimized, factory

    # Less minimum field lets the motor spin faster; bigger tires cover more ground per turn.
    speed = _ratio(f[F_MIN_FIELD_CURRENT], o[F_MIN_FIELD_CURRENT]) + (ctx.tire_size_ratio - 1)
    # F3 is a delay: a lower value launches harder.
    acceleration = _ratio(f[F_CONTROLLED_ACCEL], o[F_CONTROLLED_ACCEL])
    hill = (
        _ratio(o[F_MAX_ARMATURE_CURRENT], f[F_MAX_ARMATURE_CURRENT])
        + 0.5 * _ratio(o[F_FIELD_TO_ARMATURE_RATIO], f[F_FIELD_TO_ARMATURE_RATIO])
    )
    # Longer launch delay and a lower current limit both stretch the pack.
    range_ = (
        0.5 * _ratio(o[F_CONTROLLED_ACCEL], f[F_CONTROLLED_ACCEL])
        + 0.3 * _ratio(f[F_MAX_ARMATURE_CURRENT], o[F_MAX_ARMATURE_CURRENT])
        + (LITHIUM_RANGE_BONUS if ctx.is_lithium else 0.0)
    )
    protection = (
        _ratio(o[F_MIN_FIELD_CURRENT], f[F_MIN_FIELD_CURRENT])
        + _ratio(o[F_FIELD_WEAKENING_START], f[F_FIELD_WEAKENING_START])
    )
    regen = 0.5 * (
        _ratio(o[F_REGEN_ARMATURE_CURRENT], f[F_REGEN_ARMATURE_CURRENT])
        + _ratio(o[F_REGEN_MAX_FIELD_CURRENT], f[F_REGEN_MAX_FIELD_CURRENT])
    )

    return PerformanceDeltas(
        speed=_pct(speed),
        acceleration=_pct(acceleration),
        hill_climbing=_pct(hill),
        range=_pct(range_),
        motor_protection=_pct(protection),
        regen=_pct(regen),
    )


def _extended_function_changes(optimized: SettingsVector, factory: SettingsVector) -> list[str]:
    changes: list[str] = []

    creep_delta = optimized[F_CREEP_SPEED] - factory[F_CREEP_SPEED]
    if abs(creep_delta) >= 2:
        if creep_delta > 0:
            changes.append(f"Creep speed raised to {optimized[F_CREEP_SPEED]} for smoother low-speed starts")
        else:
            changes.append("Creep speed reduced to save energy while stopped")

    plug_pct = _pct(_ratio(optimized[F_PLUG_CURRENT], factory[F_PLUG_CURRENT]))
    if abs(plug_pct) >= 5:
        direction = "increased" if plug_pct > 0 else "reduced"
        changes.append(f"Plug braking current {direction} by approximately {abs(plug_pct)}%")

    ramp_delta = optimized[F_FIELD_RAMP_RATE] - factory[F_FIELD_RAMP_RATE]
    if abs(ramp_delta) >= 3:
        if ramp_delta > 0:
            changes.append("Field ramp rate slowed for gentler regen and plug transitions")
        else:
            changes.append("Field ramp rate quickened for more responsive braking transitions")

    arm_delta = optimized[F_ARMATURE_CURRENT_RAMP] - factory[F_ARMATURE_CURRENT_RAMP]
    if abs(arm_delta) >= 10:
        if arm_delta > 0:
            changes.append("Armature current ramp lengthened to reduce current spikes under load")
        else:
            changes.append("Armature current ramp shortened for quicker throttle response")

    comp_delta = optimized[F_ERROR_COMPENSATION] - factory[F_ERROR_COMPENSATION]
    if abs(comp_delta) >= 2:
        changes.append(
            f"Error compensation adjusted from {factory[F_ERROR_COMPENSATION]} "
            f"to {optimized[F_ERROR_COMPENSATION]} for steadier speed control"
        )

    return changes


def describe_performance_changes(
    optimized: SettingsVector,
    factory: SettingsVector,
    ctx: AnalysisContext,
    deltas: PerformanceDeltas | None = None,
) -> list[str]:
    """Human sentences for every delta that crosses its reporting threshold."""
    if deltas is None:
        deltas = calculate_performance_deltas(optimized, factory, ctx)
    changes: list[str] = []

    if deltas.speed > 5:
        changes.append(f"Top speed increased by approximately {deltas.speed}%")
    elif deltas.speed < -5:
        changes.append(f"Top speed reduced by approximately {abs(deltas.speed)}% for motor protection")

    if deltas.acceleration > 10:
        changes.append(f"Acceleration improved by approximately {deltas.acceleration}%")
    elif deltas.acceleration < -10:
        changes.append(
            f"Acceleration smoothed by approximately {abs(deltas.acceleration)}% for better control"
        )

    if deltas.hill_climbing > 5:
        changes.append(f"Hill climbing ability improved by approximately {deltas.hill_climbing}%")

    if deltas.range > 5:
        changes.append(f"Range improved by approximately {deltas.range}%")
    elif deltas.range < -5:
        changes.append("Range slightly reduced in favor of performance")

    if deltas.motor_protection > 20:
        changes.append("Motor protection significantly improved, reducing risk of brush wear and sparking")
    elif deltas.motor_protection > 5:
        changes.append("Motor protection improved, may extend motor life")

    if deltas.regen > 10:
        changes.append(f"Regenerative braking strength increased by approximately {deltas.regen}%")

    changes.extend(_extended_function_changes(optimized, factory))

    return changes or [MINIMAL_CHANGES]
