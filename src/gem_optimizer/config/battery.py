"""Battery profile — chemistry, voltage, capacity, age."""

from enum import Enum

from pydantic import BaseModel, Field


class Chemistry(str, Enum):
    LEAD = "lead"
    AGM = "agm"
    LITHIUM = "lithium"


class BatteryAge(str, Enum):
    NEW = "new"
    GOOD = "good"
    OLD = "old"


class BatteryProfile(BaseModel):
    """The traction pack installed in the vehicle."""

    chemistry: Chemistry = Field(
        default=Chemistry.LEAD,
        description="Cell chemistry. AGM is treated as lead-acid by the cutoff formula.",
    )
    voltage: int = Field(default=72, gt=0, description="Nominal pack voltage (V)")
    capacity_ah: float = Field(default=105.0, gt=0, description="Rated capacity (Ah)")
    age: BatteryAge = Field(default=BatteryAge.GOOD, description="Rough pack age bucket")
