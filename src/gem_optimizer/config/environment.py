"""Operating environment — terrain, load, temperature, hill grade."""

from enum import Enum

from pydantic import BaseModel, Field


class Terrain(str, Enum):
    FLAT = "flat"
    MIXED = "mixed"
    MODERATE = "moderate"
    STEEP = "steep"


class VehicleLoad(str, Enum):
    LIGHT = "light"
    MEDIUM = "medium"
    HEAVY = "heavy"
    MAX = "max"


class TemperatureRange(str, Enum):
    MILD = "mild"
    COLD = "cold"
    HOT = "hot"
    EXTREME = "extreme"


class EnvironmentProfile(BaseModel):
    """Where and how the vehicle is usually driven."""

    terrain: Terrain = Field(default=Terrain.FLAT, description="Typical terrain category")
    vehicle_load: VehicleLoad = Field(default=VehicleLoad.LIGHT, description="Typical load category")
    temperature_range: TemperatureRange = Field(
        default=TemperatureRange.MILD, description="Typical ambient temperature bucket",
    )
    hill_grade: float | None = Field(
        default=None, ge=0,
        description="Steepest regular grade (%). Optional; raises terrain difficulty when steep.",
    )
