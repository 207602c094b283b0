"""Function catalog — the 128 controller function slots.

Static, process-wide tables: factory defaults, human descriptions for the
documented functions, catalog safety bounds, and the per-model vehicle
parameters used by the analyzer.  Everything here is read-only; callers
that need a mutable vector get a fresh ``dict`` from ``get_factory_defaults``.

Only 19 of the documented functions carry a ``{min, max}`` bound.  Slots
27–128 are manufacturer-specific, default to 0 and are never touched by the
rule pipeline, so they are left unbounded.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from types import MappingProxyType
from typing import NamedTuple

import numpy as np

_logger = logging.getLogger(__name__)

FUNCTION_COUNT = 128
REGISTER_MIN = 0
REGISTER_MAX = 999

REFERENCE_TIRE_DIAMETER = 22.0   # inches, stock GEM tire
REFERENCE_GEAR_RATIO = 8.91      # stock final drive, 8.91:1
REFERENCE_CAPACITY_AH = 105.0    # stock flooded lead-acid pack
LEAD_CUTOFF_FRACTION = 0.875


class SafetyBound(NamedTuple):
    min: int
    max: int


class VehicleParameters(NamedTuple):
    weight: int
    passengers: int
    gear_ratio: float


# ═══════════════════════════════════════════════════════════════════════════
# Function numbers used by the engine
# ═══════════════════════════════════════════════════════════════════════════

F_MPH_SCALING = 1
F_CREEP_SPEED = 2
F_CONTROLLED_ACCEL = 3
F_MAX_ARMATURE_CURRENT = 4
F_PLUG_CURRENT = 5
F_ARMATURE_ACCEL_RATE = 6
F_MIN_FIELD_CURRENT = 7
F_MAX_FIELD_CURRENT = 8
F_REGEN_ARMATURE_CURRENT = 9
F_REGEN_MAX_FIELD_CURRENT = 10
F_TURF_SPEED_LIMIT = 11
F_REVERSE_SPEED_LIMIT = 12
F_IR_COMPENSATION = 14
F_BATTERY_VOLTS = 15
F_LOW_BATTERY_VOLTS = 16
F_FIELD_RAMP_RATE = 19
F_MPH_OVERSPEED = 20
F_ARMATURE_CURRENT_RAMP = 21
F_ODOMETER_CALIBRATION = 22
F_ERROR_COMPENSATION = 23
F_FIELD_WEAKENING_START = 24
F_PEDAL_ENABLE = 25
F_FIELD_TO_ARMATURE_RATIO = 26


_DOCUMENTED_DEFAULTS = {
    1: 22, 2: 0, 3: 20, 4: 255, 5: 255, 6: 60, 7: 59, 8: 241, 9: 221,
    10: 180, 11: 122, 12: 149, 13: 0, 14: 3, 15: 72, 16: 63, 17: 0, 18: 0,
    19: 12, 20: 40, 21: 40, 22: 122, 23: 10, 24: 43, 25: 1, 26: 3,
}

FACTORY_DEFAULTS: Mapping[int, int] = MappingProxyType({
    key: _DOCUMENTED_DEFAULTS.get(key, 0) for key in range(1, FUNCTION_COUNT + 1)
})

FUNCTION_DESCRIPTIONS: Mapping[int, str] = MappingProxyType({
    1: "MPH Scaling",
    2: "Creep Speed",
    3: "Controlled Acceleration",
    4: "Max Armature Current Limit",
    5: "Plug Current",
    6: "Armature Acceleration Rate",
    7: "Minimum Field Current",
    8: "Maximum Field Current",
    9: "Regen Armature Current",
    10: "Regen Maximum Field Current",
    11: "Turf Speed Limit",
    12: "Reverse Speed Limit",
    13: "Reserved",
    14: "IR Compensation",
    15: "Battery Volts",
    16: "Low Battery Volts",
    17: "Pack Over Temp",
    18: "Reserved",
    19: "Field Ramp Rate Plug/Regen",
    20: "MPH Overspeed",
    21: "Armature Current Ramp",
    22: "Odometer Calibration",
    23: "Error Compensation",
    24: "Field Weakening Start",
    25: "Pedal Enable",
    26: "Ratio of Field to Arm",
})

SAFETY_CONSTRAINTS: Mapping[int, SafetyBound] = MappingProxyType({
    1: SafetyBound(15, 35),
    3: SafetyBound(8, 40),
    4: SafetyBound(180, 255),
    5: SafetyBound(180, 255),
    6: SafetyBound(30, 100),
    7: SafetyBound(51, 120),
    8: SafetyBound(200, 255),
    9: SafetyBound(150, 255),
    10: SafetyBound(51, 255),
    11: SafetyBound(100, 170),
    12: SafetyBound(120, 170),
    14: SafetyBound(2, 15),
    15: SafetyBound(36, 120),
    19: SafetyBound(5, 25),
    20: SafetyBound(25, 50),
    22: SafetyBound(80, 180),
    23: SafetyBound(3, 15),
    24: SafetyBound(25, 85),
    26: SafetyBound(1, 8),
})

# Applied over the working vector when constraint enforcement itself fails.
EMERGENCY_SAFE_SETTINGS: Mapping[int, int] = MappingProxyType({
    F_MPH_SCALING: 20,
    F_MAX_ARMATURE_CURRENT: 200,
    F_ARMATURE_ACCEL_RATE: 40,
    F_FIELD_WEAKENING_START: 60,
})

DEFAULT_VEHICLE_MODEL = "e4"

VEHICLE_PARAMETERS: Mapping[str, VehicleParameters] = MappingProxyType({
    "e2": VehicleParameters(weight=1200, passengers=2, gear_ratio=8.91),
    "e4": VehicleParameters(weight=1350, passengers=4, gear_ratio=8.91),
    "eS": VehicleParameters(weight=1250, passengers=2, gear_ratio=8.91),
    "eL": VehicleParameters(weight=1400, passengers=2, gear_ratio=8.91),
    "e6": VehicleParameters(weight=1500, passengers=6, gear_ratio=8.91),
    "elXD": VehicleParameters(weight=1600, passengers=2, gear_ratio=8.91),
})

HEAVY_DUTY_MODELS = frozenset({"e6", "eL", "elXD"})

# Lithium low-voltage cutoff by nominal pack voltage (~3.5 V per cell).
LITHIUM_CUTOFF_TABLE: Mapping[int, int] = MappingProxyType({
    36: 31,
    48: 42,
    60: 52,
    72: 63,
    82: 72,
    96: 84,
})


# ═══════════════════════════════════════════════════════════════════════════
# Helpers
# ═══════════════════════════════════════════════════════════════════════════

def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values (controller counts are never negative)."""
    return int(math.floor(value + 0.5))


def resolve_vehicle(model: str) -> VehicleParameters:
    return VEHICLE_PARAMETERS.get(model, VEHICLE_PARAMETERS[DEFAULT_VEHICLE_MODEL])


def low_voltage_cutoff(voltage: int, is_lithium: bool) -> int:
    """Low-battery cutoff (F16) for a nominal pack voltage.

    Lithium packs use ``LITHIUM_CUTOFF_TABLE``; voltages missing from the
    table take the entry for the nearest tabulated voltage.  Lead-acid and
    AGM packs cut off at 87.5% of nominal.
    """
    if not is_lithium:
        return round_half_up(voltage * LEAD_CUTOFF_FRACTION)
    if voltage in LITHIUM_CUTOFF_TABLE:
        return LITHIUM_CUTOFF_TABLE[voltage]
    voltages = np.array(sorted(LITHIUM_CUTOFF_TABLE))
    nearest = int(voltages[int(np.argmin(np.abs(voltages - voltage)))])
    return LITHIUM_CUTOFF_TABLE[nearest]


def get_factory_defaults() -> dict[int, int]:
    """Fresh, fully populated copy of the factory vector."""
    return dict(FACTORY_DEFAULTS)


def get_function_descriptions() -> dict[int, str]:
    return dict(FUNCTION_DESCRIPTIONS)


def is_acceptable_value(key: int, value: int) -> bool:
    """True when ``value`` may be stored in function ``key``."""
    if not REGISTER_MIN <= value <= REGISTER_MAX:
        return False
    bound = SAFETY_CONSTRAINTS.get(key)
    return bound is None or bound.min <= value <= bound.max


def sanitize_baseline(raw: Mapping[int | str, object]) -> dict[int, int]:
    """Keep only baseline entries that name a real function and hold a safe integer.

    Extracted baselines arrive sparse and sometimes noisy (keys as strings,
    values as floats or text).  Anything that cannot be trusted is dropped
    rather than repaired.
    """
    clean: dict[int, int] = {}
    if not isinstance(raw, Mapping):
        _logger.warning("Ignoring baseline of type %s; expected a mapping", type(raw).__name__)
        return clean
    for raw_key, raw_value in raw.items():
        try:
            key = int(raw_key)
            value = int(raw_value)  # type: ignore[call-overload]
        except (TypeError, ValueError, OverflowError):
            continue
        if isinstance(raw_value, float) and not raw_value.is_integer():
            continue
        if 1 <= key <= FUNCTION_COUNT and is_acceptable_value(key, value):
            clean[key] = value
    return clean


def seed_settings(baseline: Mapping[int | str, object] | None = None) -> dict[int, int]:
    """Starting vector for one call: factory defaults overlaid with a sanitized baseline."""
    settings = get_factory_defaults()
    if baseline:
        settings.update(sanitize_baseline(baseline))
    return settings
