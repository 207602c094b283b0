"""Top-level optimization request — bundles the five input groups."""

from pydantic import BaseModel, Field

from gem_optimizer.config.vehicle import VehicleProfile
from gem_optimizer.config.battery import BatteryProfile
from gem_optimizer.config.wheel import WheelProfile
from gem_optimizer.config.environment import EnvironmentProfile
from gem_optimizer.config.priorities import PriorityWeights


class OptimizationInput(BaseModel):
    """Complete input bundle for one ``optimize()`` call."""

    vehicle: VehicleProfile = Field(default_factory=VehicleProfile)
    battery: BatteryProfile = Field(default_factory=BatteryProfile)
    wheel: WheelProfile = Field(default_factory=WheelProfile)
    environment: EnvironmentProfile = Field(default_factory=EnvironmentProfile)
    priorities: PriorityWeights = Field(default_factory=PriorityWeights)
