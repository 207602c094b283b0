"""Owner priority sliders — five 0–10 weights."""

from pydantic import BaseModel, Field


class PriorityWeights(BaseModel):
    """Raw slider values. ``None`` means "not set" and normalizes to balanced (0.5)."""

    range: float | None = Field(default=None, ge=0, le=10, description="Range priority (0–10)")
    speed: float | None = Field(default=None, ge=0, le=10, description="Top-speed priority (0–10)")
    acceleration: float | None = Field(default=None, ge=0, le=10, description="Acceleration priority (0–10)")
    hill_climbing: float | None = Field(default=None, ge=0, le=10, description="Hill-climbing priority (0–10)")
    regen: float | None = Field(default=None, ge=0, le=10, description="Regenerative braking priority (0–10)")
