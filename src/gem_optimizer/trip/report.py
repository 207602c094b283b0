"""Trip report — summary, key changes, warnings, advice, expected performance.

The performance figures are rough planning estimates derived from a few
dominant functions; they are not a vehicle simulation.
"""

from __future__ import annotations

from gem_optimizer.config.trip import TripData
from gem_optimizer.engine.catalog import (
    FUNCTION_DESCRIPTIONS,
    F_ARMATURE_ACCEL_RATE,
    F_CONTROLLED_ACCEL,
    F_FIELD_WEAKENING_START,
    F_MAX_ARMATURE_CURRENT,
    F_MIN_FIELD_CURRENT,
    F_REGEN_ARMATURE_CURRENT,
    round_half_up,
)
from gem_optimizer.models.results import SettingsVector
from gem_optimizer.models.trip import (
    ExpectedPerformance,
    KeyOptimization,
    RecommendationGroup,
    TripAnalysis,
    TripReport,
    TripWarning,
)

SIGNIFICANT_CHANGE = 0.10

BASE_RANGE_MILES = 25
NOMINAL_MAX_CURRENT = 245
NOMINAL_TOP_SPEED = 25

CHANGE_REASONS: dict[int, tuple[str, str]] = {
    F_CONTROLLED_ACCEL: (
        "Increased for smoother, safer acceleration",
        "Decreased for quicker response",
    ),
    F_MAX_ARMATURE_CURRENT: (
        "Increased for more power",
        "Decreased to prevent overheating",
    ),
    F_MIN_FIELD_CURRENT: (
        "Increased for better torque",
        "Decreased for higher top speed",
    ),
    F_REGEN_ARMATURE_CURRENT: (
        "Increased for better energy recovery",
        "Decreased for smoother coasting",
    ),
}

MINIMUM_CONFIDENCE = 50


# ═══════════════════════════════════════════════════════════════════════════
# Sections
# ═══════════════════════════════════════════════════════════════════════════

def _summary(analysis: TripAnalysis, trip: TripData) -> str:
    parts = [
        f"Optimization for {trip.schedule.event_type or 'general'} trip",
        f"to {trip.distance_details.destination or 'destination'}",
    ]
    if analysis.distance.estimated_miles:
        parts.append(f"({analysis.distance.estimated_miles:g} miles)")
    if analysis.weather.temperature:
        parts.append(f"in {analysis.weather.temperature} weather")
    if analysis.terrain.difficulty != "easy":
        parts.append(f"with {analysis.terrain.difficulty} terrain")
    return " ".join(parts)


def explain_change(function: int, delta: int, analysis: TripAnalysis) -> str:
    reasons = CHANGE_REASONS.get(function)
    if reasons is None:
        return f"Adjusted for {analysis.terrain.difficulty} terrain"
    return reasons[0] if delta > 0 else reasons[1]


def _key_optimizations(
    settings: SettingsVector,
    factory: SettingsVector,
    analysis: TripAnalysis,
) -> list[KeyOptimization]:
    """Functions whose final value differs from factory by more than 10%."""
    found: list[KeyOptimization] = []
    for key in sorted(settings):
        old, new = factory.get(key, 0), settings[key]
        if old == new:
            continue
        if old != 0 and abs(new - old) / old <= SIGNIFICANT_CHANGE:
            continue
        delta = new - old
        found.append(KeyOptimization(
            function=key,
            description=FUNCTION_DESCRIPTIONS.get(key, f"Function {key}"),
            factory_value=old,
            optimized_value=new,
            adjustment=f"{'+' if delta > 0 else ''}{delta}",
            reason=explain_change(key, delta, analysis),
        ))
    return found


def _warnings(analysis: TripAnalysis) -> list[TripWarning]:
    warnings: list[TripWarning] = []
    if analysis.weather.conditions == "rain":
        warnings.append(TripWarning(
            type="weather", message="Wet conditions detected - drive with extra caution", severity="moderate",
        ))
    if analysis.terrain.max_grade > 20:
        warnings.append(TripWarning(
            type="terrain", message="Extreme grades detected - monitor motor temperature", severity="high",
        ))
    if analysis.distance.charging_needed:
        warnings.append(TripWarning(
            type="range", message="Trip distance may exceed single charge range", severity="moderate",
        ))
    if analysis.load.total_weight == "heavy" and analysis.terrain.difficulty != "easy":
        warnings.append(TripWarning(
            type="performance",
            message="Heavy load on difficult terrain - expect reduced performance",
            severity="moderate",
        ))
    return warnings


def _recommendations(analysis: TripAnalysis) -> list[RecommendationGroup]:
    groups = [RecommendationGroup(category="pre-trip", items=[
        "Save current controller settings before applying changes",
        "Perform visual inspection of vehicle",
        "Check tire pressure (add 2-3 PSI for heavy loads)",
    ])]

    if analysis.weather.temperature == "hot":
        groups.append(RecommendationGroup(category="hot-weather", items=[
            "Start trip early to avoid peak heat",
            "Monitor motor temperature frequently",
            "Take breaks every 30 minutes in extreme heat",
        ]))
    elif analysis.weather.temperature == "cold":
        groups.append(RecommendationGroup(category="cold-weather", items=[
            "Charge fully shortly before departure",
            "Expect reduced range until the pack warms up",
            "Drive gently for the first few minutes",
        ]))

    if analysis.weather.conditions == "rain":
        groups.append(RecommendationGroup(category="wet-weather", items=[
            "Check wiper and light operation",
            "Brake earlier and more gently than usual",
            "Avoid standing water near the controller and motor",
        ]))

    if analysis.terrain.difficulty == "extreme":
        groups.append(RecommendationGroup(category="steep-terrain", items=[
            "Use low gear mode if available",
            "Avoid sudden speed changes on grades",
            "Allow extra cooling time after climbs",
        ]))

    if analysis.load.total_weight == "heavy":
        groups.append(RecommendationGroup(category="heavy-load", items=[
            "Distribute weight evenly",
            "Secure all cargo properly",
            "Allow extra distance for braking",
        ]))

    if analysis.distance.category == "long" or analysis.distance.charging_needed:
        groups.append(RecommendationGroup(category="long-distance", items=[
            "Identify charging stops along the route",
            "Carry the onboard charger and an extension cord",
            "Keep speeds moderate to preserve range",
        ]))

    return groups


def _safety_notes(analysis: TripAnalysis) -> list[str]:
    notes = [
        "Always test new settings at low speed first",
        "Keep original settings saved for quick restoration",
    ]
    if analysis.weather.conditions == "rain":
        notes += ["Reduce speed by 25% in wet conditions", "Increase following distance"]
    if analysis.terrain.difficulty != "easy":
        notes += ["Use engine braking on descents", "Monitor brake temperature on long descents"]
    return notes


# ═══════════════════════════════════════════════════════════════════════════
# Expected performance
# ═══════════════════════════════════════════════════════════════════════════

def _range_modifier(analysis: TripAnalysis) -> float:
    modifier = 1.0
    if analysis.weather.temperature == "hot":
        modifier *= 0.9
    if analysis.weather.temperature == "cold":
        modifier *= 0.85
    if analysis.weather.wind_speed == "high":
        modifier *= 0.9

    difficulty = analysis.terrain.difficulty
    if difficulty == "extreme":
        modifier *= 0.7
    elif difficulty == "hard":
        modifier *= 0.8
    elif difficulty == "moderate":
        modifier *= 0.9

    if analysis.load.total_weight == "heavy":
        modifier *= 0.85
    elif analysis.load.total_weight == "moderate":
        modifier *= 0.92
    return modifier


def estimate_performance(settings: SettingsVector, analysis: TripAnalysis) -> ExpectedPerformance:
    max_current = settings.get(F_MAX_ARMATURE_CURRENT) or NOMINAL_MAX_CURRENT
    regen = settings.get(F_REGEN_ARMATURE_CURRENT) or 225
    base_range = round_half_up(BASE_RANGE_MILES * (NOMINAL_MAX_CURRENT / max_current) * (1 + (regen - 200) / 200))

    weakening = settings.get(F_FIELD_WEAKENING_START) or 55
    top_speed = round_half_up(NOMINAL_TOP_SPEED * (1 + (100 - weakening) / 100 * 0.2))

    controlled = settings.get(F_CONTROLLED_ACCEL) or 15
    arm_rate = settings.get(F_ARMATURE_ACCEL_RATE) or 60
    accel = 10 - (controlled - 5) / 20 * 5 - (arm_rate - 30) / 70 * 5
    acceleration = round_half_up(max(1.0, min(10.0, accel)))

    min_field = settings.get(F_MIN_FIELD_CURRENT) or 70
    hill = min_field / 70 * 50 + max_current / 300 * 50
    if analysis.load.total_weight == "heavy":
        hill *= 0.8

    modifier = _range_modifier(analysis)
    return ExpectedPerformance(
        estimated_range=round_half_up(base_range * modifier),
        top_speed=top_speed,
        acceleration=acceleration,
        hill_climbing_ability=round_half_up(hill),
        efficiency_rating=round_half_up(modifier * 100),
    )


# ═══════════════════════════════════════════════════════════════════════════
# Public entry points
# ═══════════════════════════════════════════════════════════════════════════

def generate_report(
    settings: SettingsVector,
    factory: SettingsVector,
    analysis: TripAnalysis,
    trip: TripData,
) -> TripReport:
    return TripReport(
        summary=_summary(analysis, trip),
        key_optimizations=_key_optimizations(settings, factory, analysis),
        warnings=_warnings(analysis),
        recommendations=_recommendations(analysis),
        expected_performance=estimate_performance(settings, analysis),
        safety_notes=_safety_notes(analysis),
    )


def calculate_confidence(analysis: TripAnalysis) -> int:
    """100 minus penalties for missing data and harsh conditions, floored at 50."""
    confidence = 100
    if analysis.weather.temperature is None:
        confidence -= 10
    if not analysis.terrain.data_available:
        confidence -= 15
    if not analysis.distance.estimated_miles:
        confidence -= 10
    if analysis.weather.severity != "normal":
        confidence -= 10
    if analysis.terrain.difficulty == "extreme":
        confidence -= 10
    return max(MINIMUM_CONFIDENCE, confidence)
