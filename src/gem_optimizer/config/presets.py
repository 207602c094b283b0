"""Named starting points for common owner goals.

A preset carries two things: partial input overrides (mostly priority
sliders) and a hand-tuned settings subset that is used as the optimization
baseline.  The rule pipeline and safety enforcer still run on top of it.
"""

from __future__ import annotations

from copy import deepcopy
from typing import Any

from pydantic import BaseModel, Field

from gem_optimizer.config.loader import build_optimization_input, deep_merge
from gem_optimizer.config.request import OptimizationInput


class Preset(BaseModel):
    key: str
    name: str
    description: str
    features: list[str] = Field(default_factory=list)
    settings: dict[int, int]
    overrides: dict[str, Any] = Field(default_factory=dict)


def _priorities(range_: int, speed: int, acceleration: int, hill: int, regen: int) -> dict[str, Any]:
    return {"priorities": {
        "range": range_, "speed": speed, "acceleration": acceleration,
        "hill_climbing": hill, "regen": regen,
    }}


PRESETS: dict[str, Preset] = {p.key: p for p in (
    Preset(
        key="performance",
        name="Performance",
        description="Maximum speed and acceleration for sport driving",
        features=["Top speed: +15-20%", "Acceleration: +25%", "Best for: Flat terrain"],
        settings={3: 16, 6: 45, 7: 54, 11: 135, 20: 45, 24: 38},
        overrides=_priorities(3, 9, 9, 3, 5),
    ),
    Preset(
        key="max-performance",
        name="Max Performance",
        description="Absolute maximum speed and acceleration - use with caution",
        features=["Top speed: +25-30%", "Acceleration: +35%", "Best for: Experienced users only"],
        settings={3: 12, 6: 40, 7: 51, 11: 150, 20: 50, 24: 30},
        overrides=_priorities(2, 10, 10, 2, 4),
    ),
    Preset(
        key="daily-commute",
        name="Daily Commute",
        description="Balanced efficiency and reliability for daily use",
        features=["Range: +10-15%", "Smooth operation", "Best for: Regular commuting"],
        settings={3: 20, 4: 240, 6: 60, 7: 68, 9: 230, 10: 205, 19: 10, 24: 55, 26: 4},
        overrides=_priorities(8, 5, 4, 5, 7),
    ),
    Preset(
        key="hill-climber",
        name="Hill Climber",
        description="Optimized for steep terrain and heavy loads",
        features=["Hill grade: +30%", "Torque: Maximum", "Best for: Hilly areas"],
        settings={3: 16, 4: 255, 6: 50, 7: 70, 8: 255, 9: 245, 10: 240, 19: 8, 24: 70, 26: 5},
        overrides=deep_merge({"environment": {"terrain": "steep"}}, _priorities(4, 4, 7, 10, 8)),
    ),
    Preset(
        key="range-extender",
        name="Range Extender",
        description="Maximum efficiency and battery life",
        features=["Range: +15-20%", "Gentle acceleration", "Best for: Long routes"],
        settings={3: 25, 4: 235, 6: 70, 7: 65, 9: 240, 10: 210, 19: 10, 24: 55},
        overrides=_priorities(10, 3, 2, 5, 8),
    ),
    Preset(
        key="lithium-optimized",
        name="Lithium Optimized",
        description="Tuned for lithium battery upgrades",
        features=["Voltage: 82V capable", "Enhanced regen", "Best for: Li upgrades"],
        settings={7: 75, 9: 245, 10: 225, 14: 7, 15: 82, 19: 8, 24: 60},
        overrides=deep_merge(
            {"battery": {"chemistry": "lithium", "voltage": 82}}, _priorities(7, 7, 6, 6, 8),
        ),
    ),
    Preset(
        key="motor-protection",
        name="Motor Protection",
        description="Conservative settings for aging motors",
        features=["Reduced sparking", "Lower heat buildup", "Best for: Old motors"],
        settings={3: 24, 4: 240, 6: 65, 7: 85, 20: 35, 23: 5, 24: 75, 26: 4},
        overrides=deep_merge({"vehicle": {"motor_condition": "sparking"}}, _priorities(5, 3, 3, 5, 5)),
    ),
    Preset(
        key="balanced",
        name="Balanced",
        description="Well-rounded for general use",
        features=["Moderate improvements", "Safe & reliable", "Best for: Most users"],
        settings={3: 18, 4: 245, 6: 55, 7: 65, 9: 235, 10: 200, 19: 10, 24: 55, 26: 4},
        overrides=_priorities(5, 5, 5, 5, 5),
    ),
    Preset(
        key="weekend-outing",
        name="Weekend Outing",
        description="Group outings and jamborees; pair with the trip optimizer",
        features=["Trip planning", "Weather integration", "Terrain analysis", "Group optimization"],
        settings={3: 20, 4: 240, 6: 60, 7: 68, 9: 240, 10: 215, 19: 9, 24: 58, 26: 4},
        overrides=_priorities(8, 6, 5, 6, 7),
    ),
)}


def get_preset(key: str) -> Preset:
    """Look up a preset by key; raises ``KeyError`` for unknown keys."""
    return PRESETS[key]


def preset_request(
    key: str,
    base: dict[str, Any] | None = None,
) -> tuple[OptimizationInput, dict[int, int]]:
    """Return ``(request, baseline)`` for a preset.

    ``base`` is a partial request the owner already filled in; the preset's
    overrides win over it.
    """
    preset = get_preset(key)
    merged = deep_merge(deepcopy(base or {}), preset.model_dump()["overrides"])
    return build_optimization_input(merged), dict(preset.settings)
