"""Trip orchestrator — one trip in, one conservative-by-construction vector out.

Sequence:
  analyze_trip → calculate_trip_priorities → build_optimizer_input
  → optimize (base engine) → apply_trip_adjustments → revalidate_settings
  → generate_report + calculate_confidence

Any failure along the way produces ``fallback_mode=True`` with the trip
fallback subset written over factory defaults.
"""

from __future__ import annotations

import logging

from gem_optimizer.config.trip import TripData
from gem_optimizer.engine.catalog import get_factory_defaults
from gem_optimizer.engine.orchestrator import optimize
from gem_optimizer.errors import OptimizerError, format_user_error
from gem_optimizer.models.trip import TripOptimizationResult
from gem_optimizer.trip.adjustments import apply_trip_adjustments, revalidate_settings, trip_fallback_settings
from gem_optimizer.trip.analyzer import analyze_trip, build_optimizer_input, calculate_trip_priorities
from gem_optimizer.trip.report import calculate_confidence, generate_report

_logger = logging.getLogger(__name__)

FALLBACK_MESSAGE = "Using conservative settings due to optimization error"


def optimize_for_trip(trip: TripData | None = None) -> TripOptimizationResult:
    trip = trip if trip is not None else TripData()
    factory = get_factory_defaults()

    try:
        analysis = analyze_trip(trip)
        priorities = calculate_trip_priorities(analysis)
        request = build_optimizer_input(trip, analysis, priorities)

        base = optimize(request)
        if not base.success:
            raise OptimizerError(base.error_message or "base optimization failed")

        adjusted = apply_trip_adjustments(base.optimized_settings, analysis)
        final = revalidate_settings(adjusted, analysis)

        return TripOptimizationResult(
            success=True,
            factory_settings=factory,
            optimized_settings=final,
            base_result=base,
            analysis=analysis,
            priorities=priorities,
            report=generate_report(final, factory, analysis, trip),
            confidence=calculate_confidence(analysis),
            warnings=list(base.warnings),
        )
    except Exception as exc:
        _logger.error("Trip optimization failed, using fallback settings", exc_info=True)
        return TripOptimizationResult(
            success=False,
            fallback_mode=True,
            message=f"{FALLBACK_MESSAGE}: {format_user_error(exc)}",
            factory_settings=factory,
            optimized_settings=trip_fallback_settings(factory),
            warnings=[f"Trip optimization failed: {exc}"],
        )
