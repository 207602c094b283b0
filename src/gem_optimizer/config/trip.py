"""Trip context — weather, terrain, passengers, distance and schedule.

These groups are filled in by external collaborators (weather / elevation
services, the trip-planner form).  Every group is optional: a missing group
simply lowers the confidence score of the trip report.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from gem_optimizer.config.battery import BatteryProfile
from gem_optimizer.config.environment import EnvironmentProfile
from gem_optimizer.config.vehicle import VehicleProfile
from gem_optimizer.config.wheel import WheelProfile


class WindInfo(BaseModel):
    speed_mph: float = Field(default=0.0, ge=0, description="Sustained wind speed (MPH)")
    direction: str | None = Field(default=None, description="Compass direction, informational only")


class WeatherConditions(BaseModel):
    """Forecast for the trip window."""

    temperature_f: float = Field(description="Forecast temperature (°F)")
    conditions: str = Field(default="clear", description="Free-text conditions, e.g. 'light rain'")
    wind: WindInfo | None = Field(default=None)


class TerrainProfile(BaseModel):
    """Route elevation summary."""

    max_grade: float = Field(default=0.0, ge=0, description="Steepest grade on the route (%)")
    avg_grade: float = Field(default=0.0, ge=0, description="Average grade (%)")
    total_elevation_gain: float = Field(default=0.0, ge=0, description="Cumulative climb (ft)")
    surface: str = Field(default="paved", description="paved / gravel / dirt")
    features: list[str] = Field(default_factory=list, description="Notable features, e.g. 'switchbacks'")


class PassengerInfo(BaseModel):
    count: int = Field(default=1, ge=0, description="People on board, driver included")
    cargo_load: Literal["light", "moderate", "heavy"] = Field(default="light")
    special_requirements: list[str] = Field(
        default_factory=list,
        description="Free-form tags such as 'elderly' or 'motion_sensitive'",
    )


class DistanceDetails(BaseModel):
    estimated_miles: float = Field(default=0.0, ge=0, description="One-way distance (miles)")
    round_trip: bool = Field(default=False)
    destination: str | None = Field(default=None)


class TripSchedule(BaseModel):
    departure_time: datetime | None = Field(default=None)
    duration_days: float = Field(default=1.0, gt=0)
    event_type: str | None = Field(
        default=None, description="general / parade / camping / scheduled / ...",
    )


class TripData(BaseModel):
    """Complete input bundle for one trip optimization."""

    vehicle: VehicleProfile = Field(default_factory=VehicleProfile)
    battery: BatteryProfile = Field(default_factory=BatteryProfile)
    wheel: WheelProfile = Field(default_factory=WheelProfile)
    environment: EnvironmentProfile = Field(default_factory=EnvironmentProfile)
    weather: WeatherConditions | None = None
    terrain: TerrainProfile | None = None
    passengers: PassengerInfo | None = None
    distance_details: DistanceDetails = Field(default_factory=DistanceDetails)
    schedule: TripSchedule = Field(default_factory=TripSchedule)
