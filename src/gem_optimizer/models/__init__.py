"""Result models — optimizer and trip output contracts."""

from gem_optimizer.models.results import (
    AnalysisContext,
    NormalizedPriorities,
    OptimizationResult,
    PerformanceDeltas,
    SettingsVector,
    StageOutcome,
)
from gem_optimizer.models.trip import (
    ExpectedPerformance,
    KeyOptimization,
    RecommendationGroup,
    TripAnalysis,
    TripOptimizationResult,
    TripPriorities,
    TripReport,
    TripWarning,
)

__all__ = [
    "AnalysisContext",
    "NormalizedPriorities",
    "OptimizationResult",
    "PerformanceDeltas",
    "SettingsVector",
    "StageOutcome",
    "ExpectedPerformance",
    "KeyOptimization",
    "RecommendationGroup",
    "TripAnalysis",
    "TripOptimizationResult",
    "TripPriorities",
    "TripReport",
    "TripWarning",
]
