"""Build requests from partial dicts and YAML scenario files."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from gem_optimizer.config.request import OptimizationInput
from gem_optimizer.config.trip import TripData


def deep_merge(base: dict, overrides: dict) -> dict:
    """Recursively merge overrides into base dict."""
    for key, val in overrides.items():
        if key in base and isinstance(base[key], dict) and isinstance(val, dict):
            deep_merge(base[key], val)
        else:
            base[key] = val
    return base


def build_optimization_input(overrides: dict[str, Any] | None = None) -> OptimizationInput:
    """Partial request JSON merged onto the default ``OptimizationInput``."""
    defaults = OptimizationInput().model_dump(mode="json")
    deep_merge(defaults, overrides or {})
    return OptimizationInput.model_validate(defaults)


def build_trip_data(overrides: dict[str, Any] | None = None) -> TripData:
    """Partial trip JSON merged onto the default ``TripData``."""
    defaults = TripData().model_dump(mode="json")
    deep_merge(defaults, overrides or {})
    return TripData.model_validate(defaults)


def _read_yaml(path: str | Path) -> dict[str, Any]:
    with open(path) as f:
        data = yaml.safe_load(f)
    return data or {}


def load_optimization_input(path: str | Path) -> OptimizationInput:
    """Load a vehicle scenario YAML (missing sections use defaults)."""
    return build_optimization_input(_read_yaml(path))


def load_trip_data(path: str | Path) -> TripData:
    """Load a trip YAML file into ``TripData``."""
    return build_trip_data(_read_yaml(path))
