"""Rule stages — ten pure functions over the settings vector.

Each stage has the signature ``(settings, ctx) -> settings`` and returns a
new dict; the input vector is never mutated.  Stages run in the order of
``RULE_STAGES`` and later stages override earlier ones where they touch
the same function.

Every value a stage writes is rounded half-up and clamped into the
function's catalog bound, so "capped" and "floored" below both mean
"kept inside ``SAFETY_CONSTRAINTS``".
"""

from __future__ import annotations

from collections.abc import Callable

from gem_optimizer.engine.catalog import (
    FACTORY_DEFAULTS,
    F_ARMATURE_ACCEL_RATE,
    F_ARMATURE_CURRENT_RAMP,
    F_BATTERY_VOLTS,
    F_CONTROLLED_ACCEL,
    F_CREEP_SPEED,
    F_ERROR_COMPENSATION,
    F_FIELD_RAMP_RATE,
    F_FIELD_TO_ARMATURE_RATIO,
    F_FIELD_WEAKENING_START,
    F_IR_COMPENSATION,
    F_LOW_BATTERY_VOLTS,
    F_MAX_ARMATURE_CURRENT,
    F_MIN_FIELD_CURRENT,
    F_MPH_OVERSPEED,
    F_MPH_SCALING,
    F_ODOMETER_CALIBRATION,
    F_PLUG_CURRENT,
    F_REGEN_ARMATURE_CURRENT,
    F_REGEN_MAX_FIELD_CURRENT,
    F_TURF_SPEED_LIMIT,
    HEAVY_DUTY_MODELS,
    REFERENCE_CAPACITY_AH,
    SAFETY_CONSTRAINTS,
    low_voltage_cutoff,
    round_half_up,
)
from gem_optimizer.models.results import AnalysisContext, SettingsVector

Rule = Callable[[SettingsVector, AnalysisContext], SettingsVector]

# Normalized priority weight above which a preference is acted on.
PRIORITY_THRESHOLD = 0.7


def _bounded(key: int, value: float) -> int:
    """Round ``value`` and clamp it into the catalog bound for ``key``."""
    result = round_half_up(value)
    bound = SAFETY_CONSTRAINTS.get(key)
    if bound is not None:
        result = max(bound.min, min(bound.max, result))
    return result


def _scale(settings: SettingsVector, key: int, factor: float) -> None:
    settings[key] = _bounded(key, settings[key] * factor)


# ═══════════════════════════════════════════════════════════════════════════
# Stages 1–5: core adjustments
# ═══════════════════════════════════════════════════════════════════════════

def apply_tire_gear(settings: SettingsVector, ctx: AnalysisContext) -> SettingsVector:
    """Rescale speed and odometer calibration for non-stock tires or gearing."""
    out = dict(settings)
    combined = ctx.tire_size_ratio * ctx.gear_ratio_factor

    out[F_MPH_SCALING] = _bounded(F_MPH_SCALING, FACTORY_DEFAULTS[F_MPH_SCALING] * combined)
    out[F_ODOMETER_CALIBRATION] = _bounded(
        F_ODOMETER_CALIBRATION, FACTORY_DEFAULTS[F_ODOMETER_CALIBRATION] * combined
    )

    # Taller effective drive needs more field to hold torque.
    if combined > 1.1:
        _scale(out, F_MIN_FIELD_CURRENT, 1.2)

    # Numerically higher gearing: later field weakening, gentler launch.
    if ctx.gear_ratio_factor < 0.9:
        _scale(out, F_FIELD_WEAKENING_START, 1.1)
        _scale(out, F_CONTROLLED_ACCEL, 0.95)

    return out


def apply_battery(settings: SettingsVector, ctx: AnalysisContext) -> SettingsVector:
    out = dict(settings)
    out[F_BATTERY_VOLTS] = _bounded(F_BATTERY_VOLTS, ctx.battery_voltage)
    out[F_LOW_BATTERY_VOLTS] = _bounded(
        F_LOW_BATTERY_VOLTS, low_voltage_cutoff(ctx.battery_voltage, ctx.is_lithium)
    )

    if ctx.is_lithium:
        out[F_IR_COMPENSATION] = _bounded(F_IR_COMPENSATION, 7)
        _scale(out, F_REGEN_ARMATURE_CURRENT, 1.1)
        _scale(out, F_REGEN_MAX_FIELD_CURRENT, 1.15)
    else:
        ir = out[F_IR_COMPENSATION]
        if ctx.battery_capacity_ah < REFERENCE_CAPACITY_AH:
            ir += 1
        if ctx.battery_age == "old":
            ir += 2
        out[F_IR_COMPENSATION] = _bounded(F_IR_COMPENSATION, ir)

    _scale(out, F_PLUG_CURRENT, ctx.capacity_ratio)
    return out


def apply_motor_protection(settings: SettingsVector, ctx: AnalysisContext) -> SettingsVector:
    """Strengthen the field and lower overspeed in proportion to motor risk."""
    out = dict(settings)
    if ctx.motor_risk <= 0:
        return out

    factor = 1 + 0.5 * ctx.motor_risk
    _scale(out, F_MIN_FIELD_CURRENT, factor)
    _scale(out, F_FIELD_WEAKENING_START, factor)
    _scale(out, F_MPH_OVERSPEED, 1 / factor)
    _scale(out, F_ERROR_COMPENSATION, 0.5)
    return out


def apply_terrain(settings: SettingsVector, ctx: AnalysisContext) -> SettingsVector:
    out = dict(settings)
    d = ctx.terrain_difficulty
    if d <= 0.5 and ctx.load_factor <= 1.4:
        return out

    _scale(out, F_CONTROLLED_ACCEL, 1 - 0.2 * d)
    out[F_MAX_ARMATURE_CURRENT] = FACTORY_DEFAULTS[F_MAX_ARMATURE_CURRENT]
    _scale(out, F_REGEN_ARMATURE_CURRENT, 1 + 0.1 * d)
    out[F_FIELD_TO_ARMATURE_RATIO] = _bounded(
        F_FIELD_TO_ARMATURE_RATIO, out[F_FIELD_TO_ARMATURE_RATIO] + round_half_up(d)
    )
    return out


def apply_performance_priorities(settings: SettingsVector, ctx: AnalysisContext) -> SettingsVector:
    out = dict(settings)
    weights = ctx.priority_weights

    if weights.speed > PRIORITY_THRESHOLD:
        _scale(out, F_MIN_FIELD_CURRENT, 0.9)
        _scale(out, F_TURF_SPEED_LIMIT, 1.1)

    if weights.acceleration > PRIORITY_THRESHOLD:
        _scale(out, F_CONTROLLED_ACCEL, 0.8)
        _scale(out, F_ARMATURE_ACCEL_RATE, 0.85)

    if weights.range > PRIORITY_THRESHOLD:
        _scale(out, F_CONTROLLED_ACCEL, 1.2)
        _scale(out, F_MAX_ARMATURE_CURRENT, 0.95)

    if weights.regen > PRIORITY_THRESHOLD:
        _scale(out, F_REGEN_ARMATURE_CURRENT, 1.15)
        _scale(out, F_REGEN_MAX_FIELD_CURRENT, 1.2)
        _scale(out, F_FIELD_RAMP_RATE, 0.7)

    return out


# ═══════════════════════════════════════════════════════════════════════════
# Stages 6–10: extended functions
# ═══════════════════════════════════════════════════════════════════════════

def apply_creep_speed(settings: SettingsVector, ctx: AnalysisContext) -> SettingsVector:
    out = dict(settings)
    d, load = ctx.terrain_difficulty, ctx.load_factor
    weights = ctx.priority_weights

    if d >= 0.6 or load >= 1.75:
        creep = 5
    elif d >= 0.4 or load >= 1.4:
        creep = 3
    elif weights.range > PRIORITY_THRESHOLD:
        creep = 0
    elif weights.acceleration > PRIORITY_THRESHOLD:
        creep = 2
    else:
        creep = 0

    out[F_CREEP_SPEED] = _bounded(F_CREEP_SPEED, creep)
    return out


def apply_plug_current(settings: SettingsVector, ctx: AnalysisContext) -> SettingsVector:
    """Plug-braking current sized to what the pack can absorb."""
    out = dict(settings)
    plug = FACTORY_DEFAULTS[F_PLUG_CURRENT] * min(1.0, ctx.capacity_ratio)
    if not ctx.is_lithium:
        plug *= 0.95
    if ctx.terrain_difficulty >= 1.0:
        plug *= 1.1
    out[F_PLUG_CURRENT] = _bounded(F_PLUG_CURRENT, plug)
    return out


def apply_field_ramp_rate(settings: SettingsVector, ctx: AnalysisContext) -> SettingsVector:
    out = dict(settings)
    weights = ctx.priority_weights

    if ctx.motor_risk >= 1.0:
        out[F_FIELD_RAMP_RATE] = _bounded(F_FIELD_RAMP_RATE, 18)
    elif ctx.motor_risk >= 0.5 or ctx.temperature_factor >= 0.8:
        out[F_FIELD_RAMP_RATE] = _bounded(F_FIELD_RAMP_RATE, 15)
    elif weights.acceleration > PRIORITY_THRESHOLD:
        out[F_FIELD_RAMP_RATE] = _bounded(F_FIELD_RAMP_RATE, 8)
    elif weights.range > PRIORITY_THRESHOLD:
        out[F_FIELD_RAMP_RATE] = _bounded(F_FIELD_RAMP_RATE, 10)
    return out


def apply_armature_current_ramp(settings: SettingsVector, ctx: AnalysisContext) -> SettingsVector:
    out = dict(settings)
    risk, load = ctx.motor_risk, ctx.load_factor

    if risk >= 1.0 or load >= 1.75:
        ramp = 60
    elif risk >= 0.5 or load >= 1.4:
        ramp = 50
    elif ctx.priority_weights.acceleration > PRIORITY_THRESHOLD:
        ramp = 30
    else:
        ramp = 40

    out[F_ARMATURE_CURRENT_RAMP] = _bounded(F_ARMATURE_CURRENT_RAMP, ramp)
    return out


def apply_error_compensation(settings: SettingsVector, ctx: AnalysisContext) -> SettingsVector:
    out = dict(settings)

    if ctx.motor_risk >= 1.0:
        comp = 5
    elif ctx.motor_risk >= 0.5:
        comp = 7
    elif ctx.battery_voltage >= 82:
        comp = 12
    elif ctx.vehicle_model in HEAVY_DUTY_MODELS:
        comp = 8
    else:
        comp = 10

    out[F_ERROR_COMPENSATION] = _bounded(F_ERROR_COMPENSATION, comp)
    return out


RULE_STAGES: tuple[tuple[str, Rule], ...] = (
    ("tire_gear", apply_tire_gear),
    ("battery", apply_battery),
    ("motor_protection", apply_motor_protection),
    ("terrain", apply_terrain),
    ("performance_priorities", apply_performance_priorities),
    ("creep_speed", apply_creep_speed),
    ("plug_current", apply_plug_current),
    ("field_ramp_rate", apply_field_ramp_rate),
    ("armature_current_ramp", apply_armature_current_ramp),
    ("error_compensation", apply_error_compensation),
)
