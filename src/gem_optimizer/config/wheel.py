"""Wheel / drivetrain profile — tire diameter and gear ratio."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


def parse_gear_ratio(value: object) -> float:
    """Parse ``"10.3:1"``, ``"8.91"`` or a number into a float ratio."""
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        text = value.strip()
        if ":" in text:
            numerator, _, denominator = text.partition(":")
            denom = float(denominator) if denominator.strip() else 1.0
            if denom == 0:
                raise ValueError(f"invalid gear ratio {value!r}")
            return float(numerator) / denom
        return float(text)
    raise ValueError(f"invalid gear ratio {value!r}")


class WheelProfile(BaseModel):
    """Tire size and final-drive ratio."""

    tire_diameter: float = Field(default=22.0, gt=0, description="Overall tire diameter (inches)")
    gear_ratio: float = Field(
        default=8.91, gt=0,
        description="Final-drive ratio, accepted as 'N:1' or a number. Stock GEM is 8.91:1.",
    )

    @field_validator("gear_ratio", mode="before")
    @classmethod
    def _parse_ratio(cls, value: object) -> float:
        return parse_gear_ratio(value)
