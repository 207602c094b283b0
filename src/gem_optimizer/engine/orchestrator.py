"""Optimization orchestrator — one call from raw input to a safe settings vector.

Sequence per call:
  seed (factory ⊕ sanitized baseline) → validate → analyze
  → ten rule stages → safety enforcement → performance deltas

Entry point: ``optimize(request, baseline=None)``.  It never raises for
engine failures; every degraded path still returns a complete 128-function
vector inside an ``OptimizationResult``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from gem_optimizer.config.request import OptimizationInput
from gem_optimizer.config.validation import validate_configuration
from gem_optimizer.engine.analyzer import analyze_configuration
from gem_optimizer.engine.catalog import get_factory_defaults, sanitize_baseline, seed_settings
from gem_optimizer.engine.delta import calculate_performance_deltas, describe_performance_changes
from gem_optimizer.engine.pipeline import run_pipeline
from gem_optimizer.engine.safety import enforce_safety_constraints
from gem_optimizer.errors import format_user_error
from gem_optimizer.models.results import OptimizationResult

_logger = logging.getLogger(__name__)

FALLBACK_PERFORMANCE_CHANGES = [
    "Optimization could not be completed; settings shown are your starting values",
]


# ═══════════════════════════════════════════════════════════════════════════
# Public entry point
# ═══════════════════════════════════════════════════════════════════════════

def optimize(
    request: OptimizationInput | None = None,
    baseline: Mapping[int | str, object] | None = None,
) -> OptimizationResult:
    """Produce an optimized settings vector for ``request``.

    ``baseline`` is an optional sparse mapping of function → value read off
    the owner's controller.  Untrustworthy entries are dropped; the rest
    replace the factory value as the starting point.
    """
    request = request if request is not None else OptimizationInput()
    factory = get_factory_defaults()
    use_baseline = False

    try:
        use_baseline = bool(baseline) and bool(sanitize_baseline(baseline))
        return _run_optimization(request, factory, baseline if use_baseline else None)
    except Exception as exc:
        _logger.error("Optimization failed, returning starting vector", exc_info=True)
        try:
            seed = seed_settings(baseline)
        except Exception:
            seed = dict(factory)
        return OptimizationResult(
            success=False,
            emergency_fallback=True,
            factory_settings=factory,
            baseline_settings=seed,
            is_using_imported_baseline=use_baseline,
            optimized_settings=dict(seed),
            performance_changes=list(FALLBACK_PERFORMANCE_CHANGES),
            warnings=[f"Optimization failed: {exc}"],
            input_data=request,
            error_message=format_user_error(exc),
        )


# ═══════════════════════════════════════════════════════════════════════════
# Single pass
# ═══════════════════════════════════════════════════════════════════════════

def _run_optimization(
    request: OptimizationInput,
    factory: dict[int, int],
    baseline: Mapping[int | str, object] | None,
) -> OptimizationResult:
    seed = seed_settings(baseline)
    warnings: list[str] = []

    # ── 1. Plausibility checks (never block) ──
    report = validate_configuration(request)
    warnings.extend(issue.message for issue in report.errors)
    warnings.extend(issue.message for issue in report.warnings)

    # ── 2. Analysis ──
    ctx = analyze_configuration(request)
    if ctx.is_default:
        warnings.append("Configuration analysis failed; default vehicle assumptions were used")

    # ── 3. Rule stages ──
    tuned, outcomes = run_pipeline(seed, ctx)
    for outcome in outcomes:
        if not outcome.ok:
            warnings.append(f"Stage '{outcome.name}' skipped: {outcome.error}")

    # ── 4. Safety ──
    enforced = enforce_safety_constraints(tuned)
    warnings.extend(enforced.warnings)

    # ── 5. Deltas ──
    deltas = calculate_performance_deltas(enforced.settings, factory, ctx)
    changes = describe_performance_changes(enforced.settings, factory, ctx, deltas)

    return OptimizationResult(
        success=True,
        emergency_fallback=enforced.emergency_applied,
        factory_settings=factory,
        baseline_settings=seed,
        is_using_imported_baseline=baseline is not None,
        optimized_settings=enforced.settings,
        performance_changes=changes,
        performance_deltas=deltas,
        warnings=warnings,
        analysis_data=ctx,
        stage_outcomes=outcomes,
        input_data=request,
    )
