"""Configuration models — all optimizer and trip input types."""

from gem_optimizer.config.vehicle import MotorCondition, VehicleProfile
from gem_optimizer.config.battery import BatteryAge, BatteryProfile, Chemistry
from gem_optimizer.config.wheel import WheelProfile, parse_gear_ratio
from gem_optimizer.config.environment import (
    EnvironmentProfile,
    TemperatureRange,
    Terrain,
    VehicleLoad,
)
from gem_optimizer.config.priorities import PriorityWeights
from gem_optimizer.config.request import OptimizationInput
from gem_optimizer.config.trip import (
    DistanceDetails,
    PassengerInfo,
    TerrainProfile,
    TripData,
    TripSchedule,
    WeatherConditions,
    WindInfo,
)

__all__ = [
    "MotorCondition",
    "VehicleProfile",
    "BatteryAge",
    "BatteryProfile",
    "Chemistry",
    "WheelProfile",
    "parse_gear_ratio",
    "EnvironmentProfile",
    "TemperatureRange",
    "Terrain",
    "VehicleLoad",
    "PriorityWeights",
    "OptimizationInput",
    "DistanceDetails",
    "PassengerInfo",
    "TerrainProfile",
    "TripData",
    "TripSchedule",
    "WeatherConditions",
    "WindInfo",
]
