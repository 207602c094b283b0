"""Narrative generator — plain-English explanation of optimization results.

Turns an ``OptimizationResult`` or ``TripOptimizationResult`` into a
sectioned text block an owner can read before reprogramming the controller.
"""

from __future__ import annotations

from gem_optimizer.engine.catalog import FUNCTION_DESCRIPTIONS
from gem_optimizer.models.results import OptimizationResult
from gem_optimizer.models.trip import TripOptimizationResult


def _header(sections: list[str], title: str) -> None:
    if sections:
        sections.append("")
    sections.append("=" * 60)
    sections.append(title)
    sections.append("=" * 60)


def _settings_table(sections: list[str], changed: dict[int, tuple[int, int]]) -> None:
    if not changed:
        sections.append("No functions differ from factory defaults.")
        return
    for key, (factory, optimized) in changed.items():
        name = FUNCTION_DESCRIPTIONS.get(key, f"Function {key}")
        sections.append(f"  F{key:<3d} {name:32s}  {factory:4d} → {optimized:4d}  ({optimized - factory:+d})")


def generate_narrative(result: OptimizationResult) -> str:
    """Sections: status, vehicle summary, changed functions, expected effects, warnings."""
    sections: list[str] = []
    inp = result.input_data

    _header(sections, "OPTIMIZATION STATUS")
    if not result.success:
        sections.append(
            "Optimization FAILED. The settings below are your starting values, unchanged.\n"
            f"Reason: {result.error_message}"
        )
    elif result.emergency_fallback:
        sections.append(
            "Optimization completed with EMERGENCY SAFE SETTINGS applied. "
            "Review every value before programming the controller."
        )
    else:
        sections.append("Optimization completed successfully.")
    if result.is_using_imported_baseline:
        sections.append("Starting point: settings imported from your controller.")
    else:
        sections.append("Starting point: factory defaults.")

    _header(sections, "VEHICLE")
    sections.append(
        f"Model: {inp.vehicle.model}  (motor condition: {inp.vehicle.motor_condition.value})\n"
        f"Battery: {inp.battery.voltage} V {inp.battery.chemistry.value}, "
        f"{inp.battery.capacity_ah:g} Ah ({inp.battery.age.value})\n"
        f"Tires: {inp.wheel.tire_diameter:g} in, gear ratio {inp.wheel.gear_ratio:g}:1\n"
        f"Terrain: {inp.environment.terrain.value}, load: {inp.environment.vehicle_load.value}, "
        f"temperature: {inp.environment.temperature_range.value}"
    )

    _header(sections, "CHANGED FUNCTIONS (factory → optimized)")
    _settings_table(sections, result.changed_functions())

    _header(sections, "EXPECTED EFFECTS")
    for change in result.performance_changes:
        sections.append(f"  • {change}")

    if result.warnings:
        _header(sections, "WARNINGS")
        for warning in result.warnings:
            sections.append(f"  ⚠ {warning}")

    return "\n".join(sections)


def generate_trip_narrative(result: TripOptimizationResult) -> str:
    sections: list[str] = []

    if not result.success or result.report is None:
        _header(sections, "TRIP OPTIMIZATION FALLBACK")
        sections.append(result.message or "Trip optimization did not complete.")
        sections.append("Conservative trip settings have been applied over factory defaults.")
        return "\n".join(sections)

    report = result.report
    perf = report.expected_performance

    _header(sections, "TRIP SUMMARY")
    sections.append(f"{report.summary}\nConfidence: {result.confidence}%")

    _header(sections, "EXPECTED PERFORMANCE")
    sections.append(
        f"Estimated range: {perf.estimated_range} miles\n"
        f"Top speed: {perf.top_speed} MPH\n"
        f"Acceleration: {perf.acceleration}/10\n"
        f"Hill climbing: {perf.hill_climbing_ability}\n"
        f"Efficiency rating: {perf.efficiency_rating}%"
    )

    _header(sections, "KEY CHANGES")
    if not report.key_optimizations:
        sections.append("No function changed by more than 10% from factory.")
    for opt in report.key_optimizations:
        sections.append(f"  F{opt.function} {opt.description}: {opt.adjustment} ({opt.reason})")

    if report.warnings:
        _header(sections, "WARNINGS")
        for warning in report.warnings:
            sections.append(f"  [{warning.severity.upper()}] {warning.message}")

    _header(sections, "RECOMMENDATIONS")
    for group in report.recommendations:
        sections.append(f"{group.category}:")
        sections.extend(f"  - {item}" for item in group.items)

    _header(sections, "SAFETY NOTES")
    sections.extend(f"  • {note}" for note in report.safety_notes)

    return "\n".join(sections)
