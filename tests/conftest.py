"""Shared test fixtures — sample inputs matching scenarios/*.yaml."""

from __future__ import annotations

from pathlib import Path

import pytest

from gem_optimizer.config import (
    BatteryProfile,
    DistanceDetails,
    EnvironmentProfile,
    OptimizationInput,
    PassengerInfo,
    TerrainProfile,
    TripData,
    VehicleProfile,
    WeatherConditions,
    WheelProfile,
)
from gem_optimizer.engine.analyzer import analyze_configuration
from gem_optimizer.engine.catalog import get_factory_defaults
from gem_optimizer.models.results import AnalysisContext

SCENARIOS_DIR = Path(__file__).resolve().parent.parent / "scenarios"


@pytest.fixture
def scenarios_dir() -> Path:
    return SCENARIOS_DIR


@pytest.fixture
def factory() -> dict[int, int]:
    return get_factory_defaults()


@pytest.fixture
def default_input() -> OptimizationInput:
    return OptimizationInput()


@pytest.fixture
def default_ctx(default_input: OptimizationInput) -> AnalysisContext:
    return analyze_configuration(default_input)


@pytest.fixture
def sparking_steep_input() -> OptimizationInput:
    """e4, sparking motor, steep terrain, 72 V lead."""
    return OptimizationInput(
        vehicle=VehicleProfile(model="e4", motor_condition="sparking"),
        battery=BatteryProfile(chemistry="lead", voltage=72),
        environment=EnvironmentProfile(terrain="steep"),
    )


@pytest.fixture
def big_tire_input() -> OptimizationInput:
    """26-inch tires on the stock 8.91:1 gear (tire ratio ≈ 1.18)."""
    return OptimizationInput(wheel=WheelProfile(tire_diameter=26, gear_ratio=8.91))


@pytest.fixture
def lithium_input() -> OptimizationInput:
    return OptimizationInput(
        battery=BatteryProfile(chemistry="lithium", voltage=72, capacity_ah=150, age="new"),
    )


@pytest.fixture
def rainy_trip() -> TripData:
    return TripData(
        weather=WeatherConditions(temperature_f=62, conditions="Light rain"),
        terrain=TerrainProfile(max_grade=4, avg_grade=1),
        distance_details=DistanceDetails(estimated_miles=8),
    )


@pytest.fixture
def mountain_trip() -> TripData:
    """Hot, windy, extreme grades, heavy cargo, long distance."""
    return TripData(
        vehicle=VehicleProfile(model="e6"),
        weather=WeatherConditions(temperature_f=92, conditions="clear", wind={"speed_mph": 20}),
        terrain=TerrainProfile(max_grade=22, avg_grade=7, surface="gravel", features=["switchbacks"]),
        passengers=PassengerInfo(count=3, cargo_load="heavy"),
        distance_details=DistanceDetails(estimated_miles=24),
        schedule={"duration_days": 2, "event_type": "camping"},
    )
