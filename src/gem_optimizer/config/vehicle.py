"""Vehicle profile — model, top speed, motor condition."""

from enum import Enum

from pydantic import BaseModel, Field


class MotorCondition(str, Enum):
    """Owner-reported motor brush / commutator condition."""

    GOOD = "good"
    FAIR = "fair"
    SPARKING = "sparking"


class VehicleProfile(BaseModel):
    """One vehicle, fixed per optimization call."""

    model: str = Field(
        default="e4",
        description="GEM model id (e2, e4, eS, eL, e6, elXD). "
                    "Unknown ids fall back to the e4 parameter set.",
    )
    top_speed: float = Field(default=25.0, gt=0, description="Current top speed (MPH)")
    motor_condition: MotorCondition = Field(
        default=MotorCondition.GOOD,
        description="good / fair / sparking (worn brushes). Drives the motor-risk scalar.",
    )
