"""Configuration analyzer — raw input groups → AnalysisContext.

Pure arithmetic over lookup tables.  ``analyze_configuration`` never
raises: if any derivation fails it logs a warning and returns
``DEFAULT_ANALYSIS_CONTEXT`` so the pipeline can still run.
"""

from __future__ import annotations

import logging

from gem_optimizer.config.battery import Chemistry
from gem_optimizer.config.environment import EnvironmentProfile, TemperatureRange, Terrain, VehicleLoad
from gem_optimizer.config.priorities import PriorityWeights
from gem_optimizer.config.request import OptimizationInput
from gem_optimizer.config.vehicle import MotorCondition
from gem_optimizer.engine.catalog import (
    DEFAULT_VEHICLE_MODEL,
    REFERENCE_CAPACITY_AH,
    REFERENCE_GEAR_RATIO,
    REFERENCE_TIRE_DIAMETER,
    VEHICLE_PARAMETERS,
    resolve_vehicle,
)
from gem_optimizer.models.results import AnalysisContext, NormalizedPriorities

_logger = logging.getLogger(__name__)

MOTOR_RISK = {
    MotorCondition.GOOD: 0.0,
    MotorCondition.FAIR: 0.5,
    MotorCondition.SPARKING: 1.0,
}

TERRAIN_DIFFICULTY = {
    Terrain.FLAT: 0.1,
    Terrain.MIXED: 0.4,
    Terrain.MODERATE: 0.6,
    Terrain.STEEP: 1.0,
}

LOAD_FACTOR = {
    VehicleLoad.LIGHT: 1.0,
    VehicleLoad.MEDIUM: 1.4,
    VehicleLoad.HEAVY: 1.75,
    VehicleLoad.MAX: 2.0,
}

TEMPERATURE_FACTOR = {
    TemperatureRange.MILD: 0.3,
    TemperatureRange.COLD: 0.7,
    TemperatureRange.HOT: 0.8,
    TemperatureRange.EXTREME: 1.0,
}

# Grade (%) at which a route counts as fully steep.
STEEP_GRADE_PCT = 15.0

_default_vehicle = VEHICLE_PARAMETERS[DEFAULT_VEHICLE_MODEL]

DEFAULT_ANALYSIS_CONTEXT = AnalysisContext(
    vehicle_model=DEFAULT_VEHICLE_MODEL,
    vehicle_weight=_default_vehicle.weight,
    passenger_capacity=_default_vehicle.passengers,
    gear_ratio=REFERENCE_GEAR_RATIO,
    tire_size_ratio=1.0,
    gear_ratio_factor=1.0,
    battery_voltage=72,
    battery_capacity_ah=REFERENCE_CAPACITY_AH,
    capacity_ratio=1.0,
    is_lithium=False,
    battery_age="good",
    motor_risk=0.0,
    terrain_difficulty=TERRAIN_DIFFICULTY[Terrain.FLAT],
    load_factor=1.0,
    temperature_factor=TEMPERATURE_FACTOR[TemperatureRange.MILD],
    priority_weights=NormalizedPriorities(),
    is_default=True,
)


def assess_motor_risk(condition: MotorCondition) -> float:
    return MOTOR_RISK[condition]


def assess_terrain_difficulty(environment: EnvironmentProfile) -> float:
    """Category difficulty, raised (never lowered) by a supplied hill grade."""
    difficulty = TERRAIN_DIFFICULTY[environment.terrain]
    if environment.hill_grade:
        difficulty = max(difficulty, min(1.0, environment.hill_grade / STEEP_GRADE_PCT))
    return difficulty


def calculate_load_factor(load: VehicleLoad) -> float:
    return LOAD_FACTOR[load]


def calculate_temperature_factor(temperature: TemperatureRange) -> float:
    return TEMPERATURE_FACTOR[temperature]


def normalize_priorities(priorities: PriorityWeights | None) -> NormalizedPriorities:
    """Scale 0–10 sliders to 0–1; unset sliders become 0.5."""
    if priorities is None:
        return NormalizedPriorities()

    def _norm(raw: float | None) -> float:
        return 0.5 if raw is None else raw / 10.0

    return NormalizedPriorities(
        range=_norm(priorities.range),
        speed=_norm(priorities.speed),
        acceleration=_norm(priorities.acceleration),
        hill_climbing=_norm(priorities.hill_climbing),
        regen=_norm(priorities.regen),
    )


def derive_context(request: OptimizationInput) -> AnalysisContext:
    """Compute the context; raises on any inconsistent input."""
    params = resolve_vehicle(request.vehicle.model)
    gear_ratio = request.wheel.gear_ratio or params.gear_ratio

    return AnalysisContext(
        vehicle_model=request.vehicle.model,
        vehicle_weight=params.weight,
        passenger_capacity=params.passengers,
        gear_ratio=gear_ratio,
        tire_size_ratio=request.wheel.tire_diameter / REFERENCE_TIRE_DIAMETER,
        gear_ratio_factor=REFERENCE_GEAR_RATIO / gear_ratio,
        battery_voltage=request.battery.voltage,
        battery_capacity_ah=request.battery.capacity_ah,
        capacity_ratio=request.battery.capacity_ah / REFERENCE_CAPACITY_AH,
        is_lithium=request.battery.chemistry is Chemistry.LITHIUM,
        battery_age=request.battery.age.value,
        motor_risk=assess_motor_risk(request.vehicle.motor_condition),
        terrain_difficulty=assess_terrain_difficulty(request.environment),
        load_factor=calculate_load_factor(request.environment.vehicle_load),
        temperature_factor=calculate_temperature_factor(request.environment.temperature_range),
        priority_weights=normalize_priorities(request.priorities),
    )


def analyze_configuration(request: OptimizationInput) -> AnalysisContext:
    """Derive the ``AnalysisContext``, substituting the default context on failure."""
    try:
        return derive_context(request)
    except Exception as exc:
        _logger.warning("Configuration analysis failed, using default context: %s", exc)
        return DEFAULT_ANALYSIS_CONTEXT
