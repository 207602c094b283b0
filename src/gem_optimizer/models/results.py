"""Result types — the contract between engine, trip layer, API and export.

``SettingsVector`` is a plain ``dict[int, int]`` holding all 128 function
values.  Pydantic serializes its keys as strings and coerces them back to
``int`` on validation, so every model here survives a JSON round-trip.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from gem_optimizer.config.request import OptimizationInput

SettingsVector = dict[int, int]


# ═══════════════════════════════════════════════════════════════════════════
# Analysis context (derived once per call)
# ═══════════════════════════════════════════════════════════════════════════

class NormalizedPriorities(BaseModel):
    """Priority sliders scaled to 0–1 (0.5 = balanced)."""

    model_config = ConfigDict(frozen=True)

    range: float = 0.5
    speed: float = 0.5
    acceleration: float = 0.5
    hill_climbing: float = 0.5
    regen: float = 0.5


class AnalysisContext(BaseModel):
    """Scalars every rule stage reads.  Immutable; never persisted."""

    model_config = ConfigDict(frozen=True)

    vehicle_model: str
    vehicle_weight: int
    passenger_capacity: int
    gear_ratio: float
    tire_size_ratio: float
    """tire diameter / 22" reference."""
    gear_ratio_factor: float
    """8.91 / gear ratio — above 1 means a taller (faster) final drive."""
    battery_voltage: int
    battery_capacity_ah: float
    capacity_ratio: float
    """capacity / 105 Ah reference."""
    is_lithium: bool
    battery_age: str
    motor_risk: float = Field(ge=0, le=1)
    terrain_difficulty: float = Field(ge=0, le=1)
    load_factor: float = Field(ge=1, le=2)
    temperature_factor: float = Field(ge=0, le=1)
    priority_weights: NormalizedPriorities
    is_default: bool = False
    """True when analysis failed and the documented default context was substituted."""


# ═══════════════════════════════════════════════════════════════════════════
# Pipeline bookkeeping
# ═══════════════════════════════════════════════════════════════════════════

class StageOutcome(BaseModel):
    """What one rule stage did to the working vector."""

    name: str
    ok: bool
    error: str | None = None
    changes: dict[int, int] = Field(default_factory=dict)
    """Function → new value, only for functions this stage changed."""


class PerformanceDeltas(BaseModel):
    """Estimated percentage change per performance dimension (optimized vs factory)."""

    speed: int
    acceleration: int
    hill_climbing: int
    range: int
    motor_protection: int
    regen: int


# ═══════════════════════════════════════════════════════════════════════════
# optimize() result
# ═══════════════════════════════════════════════════════════════════════════

class OptimizationResult(BaseModel):
    """Everything ``optimize()`` returns.

    ``optimized_settings`` always holds all 128 functions, including on the
    degraded paths (``emergency_fallback`` or stage warnings).
    """

    success: bool = True
    emergency_fallback: bool = False
    factory_settings: SettingsVector
    baseline_settings: SettingsVector
    is_using_imported_baseline: bool = False
    optimized_settings: SettingsVector
    performance_changes: list[str] = Field(default_factory=list)
    performance_deltas: PerformanceDeltas | None = None
    warnings: list[str] = Field(default_factory=list)
    analysis_data: AnalysisContext | None = None
    stage_outcomes: list[StageOutcome] = Field(default_factory=list)
    input_data: OptimizationInput = Field(default_factory=OptimizationInput)
    error_message: str | None = None

    def changed_functions(self) -> dict[int, tuple[int, int]]:
        """Function → (factory, optimized) for every function that differs from factory."""
        return {
            key: (self.factory_settings[key], value)
            for key, value in sorted(self.optimized_settings.items())
            if self.factory_settings.get(key) != value
        }
