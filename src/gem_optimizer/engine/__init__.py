"""Optimization engine — catalog, analyzer, rule pipeline, safety and deltas."""

from gem_optimizer.engine.catalog import (
    FACTORY_DEFAULTS,
    FUNCTION_DESCRIPTIONS,
    SAFETY_CONSTRAINTS,
    get_factory_defaults,
    get_function_descriptions,
    sanitize_baseline,
)
from gem_optimizer.engine.analyzer import DEFAULT_ANALYSIS_CONTEXT, analyze_configuration
from gem_optimizer.engine.pipeline import run_pipeline
from gem_optimizer.engine.rules import RULE_STAGES
from gem_optimizer.engine.safety import enforce_safety_constraints
from gem_optimizer.engine.delta import calculate_performance_deltas, describe_performance_changes
from gem_optimizer.engine.orchestrator import optimize

__all__ = [
    "FACTORY_DEFAULTS",
    "FUNCTION_DESCRIPTIONS",
    "SAFETY_CONSTRAINTS",
    "get_factory_defaults",
    "get_function_descriptions",
    "sanitize_baseline",
    "DEFAULT_ANALYSIS_CONTEXT",
    "analyze_configuration",
    "run_pipeline",
    "RULE_STAGES",
    "enforce_safety_constraints",
    "calculate_performance_deltas",
    "describe_performance_changes",
    "optimize",
]
