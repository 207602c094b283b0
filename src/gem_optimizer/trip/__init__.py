"""Trip layer — trip analysis, priority derivation, trip overrides and reporting."""

from gem_optimizer.trip.analyzer import analyze_trip, build_optimizer_input, calculate_trip_priorities
from gem_optimizer.trip.adjustments import (
    ABSOLUTE_LIMITS,
    RAIN_SAFETY_BANDS,
    TRIP_FALLBACK_SETTINGS,
    apply_trip_adjustments,
    revalidate_settings,
)
from gem_optimizer.trip.report import calculate_confidence, generate_report
from gem_optimizer.trip.orchestrator import optimize_for_trip

__all__ = [
    "analyze_trip",
    "build_optimizer_input",
    "calculate_trip_priorities",
    "ABSOLUTE_LIMITS",
    "RAIN_SAFETY_BANDS",
    "TRIP_FALLBACK_SETTINGS",
    "apply_trip_adjustments",
    "revalidate_settings",
    "calculate_confidence",
    "generate_report",
    "optimize_for_trip",
]
