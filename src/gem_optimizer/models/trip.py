"""Trip-flow result types — analysis, priorities, report and final result."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from gem_optimizer.models.results import OptimizationResult, SettingsVector


# ═══════════════════════════════════════════════════════════════════════════
# Trip analysis (categorical judgments)
# ═══════════════════════════════════════════════════════════════════════════

class WeatherAnalysis(BaseModel):
    temperature: Literal["hot", "cold", "optimal"] | None = None
    """None when no forecast was supplied."""
    conditions: Literal["rain", "wind", "clear"] | None = None
    severity: Literal["normal", "moderate"] = "normal"
    wind_speed: Literal["normal", "high"] = "normal"
    impacts: list[str] = Field(default_factory=list)


class TerrainAnalysis(BaseModel):
    max_grade: float = 0.0
    avg_grade: float = 0.0
    elevation_gain: float = 0.0
    difficulty: Literal["easy", "moderate", "hard", "extreme"] = "easy"
    surface: str = "paved"
    features: list[str] = Field(default_factory=list)
    challenges: list[str] = Field(default_factory=list)
    data_available: bool = False


class LoadAnalysis(BaseModel):
    passenger_load: Literal["light", "moderate", "full"] = "light"
    cargo_load: Literal["light", "moderate", "heavy"] = "light"
    total_weight: Literal["normal", "moderate", "heavy"] = "normal"
    impacts: list[str] = Field(default_factory=list)


class DistanceAnalysis(BaseModel):
    category: Literal["short", "medium", "long"] = "short"
    estimated_miles: float = 0.0
    total_distance: float = 0.0
    range_requirement: Literal["normal", "good", "maximum"] = "normal"
    charging_needed: bool = False


class ScheduleAnalysis(BaseModel):
    duration: Literal["day", "multi-day"] = "day"
    time_of_day: Literal["daytime", "twilight", "night"] = "daytime"
    flexibility: Literal["flexible", "strict"] = "flexible"


class SpecialRequirement(BaseModel):
    type: Literal["parade_mode", "camping_mode", "comfort_priority", "motion_comfort"]
    settings: dict[str, str] = Field(default_factory=dict)


class TripAnalysis(BaseModel):
    weather: WeatherAnalysis = Field(default_factory=WeatherAnalysis)
    terrain: TerrainAnalysis = Field(default_factory=TerrainAnalysis)
    load: LoadAnalysis = Field(default_factory=LoadAnalysis)
    distance: DistanceAnalysis = Field(default_factory=DistanceAnalysis)
    schedule: ScheduleAnalysis = Field(default_factory=ScheduleAnalysis)
    special: list[SpecialRequirement] = Field(default_factory=list)

    def has_requirement(self, kind: str) -> bool:
        return any(req.type == kind for req in self.special)


class TripPriorities(BaseModel):
    """Eight trip priorities on a 0–10 scale, seeded at 5."""

    range: float = Field(default=5, ge=0, le=10)
    speed: float = Field(default=5, ge=0, le=10)
    acceleration: float = Field(default=5, ge=0, le=10)
    hill_climbing: float = Field(default=5, ge=0, le=10)
    regen: float = Field(default=5, ge=0, le=10)
    safety: float = Field(default=5, ge=0, le=10)
    comfort: float = Field(default=5, ge=0, le=10)
    efficiency: float = Field(default=5, ge=0, le=10)


# ═══════════════════════════════════════════════════════════════════════════
# Report
# ═══════════════════════════════════════════════════════════════════════════

class KeyOptimization(BaseModel):
    function: int
    description: str
    factory_value: int
    optimized_value: int
    adjustment: str
    """Signed change, e.g. ``"+11"``."""
    reason: str


class TripWarning(BaseModel):
    type: Literal["weather", "terrain", "range", "performance"]
    message: str
    severity: Literal["moderate", "high"]


class RecommendationGroup(BaseModel):
    category: str
    items: list[str]


class ExpectedPerformance(BaseModel):
    estimated_range: int
    """Miles, after weather / terrain / load modifiers."""
    top_speed: int
    """MPH."""
    acceleration: int
    """1 (sluggish) – 10 (brisk)."""
    hill_climbing_ability: int
    efficiency_rating: int
    """Percent of nominal range retained under trip conditions."""


class TripReport(BaseModel):
    summary: str
    key_optimizations: list[KeyOptimization] = Field(default_factory=list)
    warnings: list[TripWarning] = Field(default_factory=list)
    recommendations: list[RecommendationGroup] = Field(default_factory=list)
    expected_performance: ExpectedPerformance
    safety_notes: list[str] = Field(default_factory=list)


# ═══════════════════════════════════════════════════════════════════════════
# optimize_for_trip() result
# ═══════════════════════════════════════════════════════════════════════════

class TripOptimizationResult(BaseModel):
    """Everything ``optimize_for_trip()`` returns.

    On failure ``fallback_mode`` is set, ``optimized_settings`` holds factory
    defaults with the conservative trip fallback subset applied, and
    ``message`` explains why.
    """

    success: bool = True
    fallback_mode: bool = False
    message: str | None = None
    factory_settings: SettingsVector
    optimized_settings: SettingsVector
    base_result: OptimizationResult | None = None
    analysis: TripAnalysis | None = None
    priorities: TripPriorities | None = None
    report: TripReport | None = None
    confidence: int = 0
    warnings: list[str] = Field(default_factory=list)
