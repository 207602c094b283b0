"""Plausibility checks on a structurally valid request.

Pydantic already rejects malformed values (negative voltages, unknown
categories).  This module flags values that parse fine but look unusual,
plus cross-field combinations that deserve a warning before tuning.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from gem_optimizer.config.battery import BatteryAge, Chemistry
from gem_optimizer.config.environment import Terrain
from gem_optimizer.config.request import OptimizationInput
from gem_optimizer.config.vehicle import MotorCondition

KNOWN_MODELS = ("e2", "e4", "eS", "eL", "e6", "elXD")


class ValidationIssue(BaseModel):
    field: str | None = None
    message: str
    level: Literal["low", "medium", "high"] = "low"
    suggestion: str | None = None


class ValidationReport(BaseModel):
    errors: list[ValidationIssue] = Field(default_factory=list)
    warnings: list[ValidationIssue] = Field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


def validate_configuration(request: OptimizationInput) -> ValidationReport:
    """Run range and cross-field checks on ``request``."""
    report = ValidationReport()
    v, b, w, env = request.vehicle, request.battery, request.wheel, request.environment

    if v.model not in KNOWN_MODELS:
        report.errors.append(ValidationIssue(
            field="vehicle.model",
            message=f"Unknown vehicle model '{v.model}' (e4 parameters will be used)",
            level="medium",
        ))
    if not 15 <= v.top_speed <= 40:
        report.warnings.append(ValidationIssue(
            field="vehicle.top_speed", message="Top speed seems unusual (expected 15-40 MPH)",
        ))

    if not 36 <= b.voltage <= 120:
        report.warnings.append(ValidationIssue(
            field="battery.voltage", message="Battery voltage seems unusual (expected 36-120V)",
        ))
    if not 50 <= b.capacity_ah <= 500:
        report.warnings.append(ValidationIssue(
            field="battery.capacity_ah", message="Battery capacity seems unusual (expected 50-500 Ah)",
        ))
    if b.chemistry is Chemistry.LITHIUM and b.voltage < 80:
        report.warnings.append(ValidationIssue(
            field="battery.voltage", message="Lithium batteries typically have higher voltage (80-100V)",
        ))
    if b.chemistry is Chemistry.AGM and b.voltage > 96:
        report.warnings.append(ValidationIssue(
            field="battery.voltage", message="AGM batteries typically use standard voltage systems (48-96V)",
        ))

    if not 18 <= w.tire_diameter <= 28:
        report.warnings.append(ValidationIssue(
            field="wheel.tire_diameter", message="Tire diameter seems unusual (expected 18-28 inches)",
        ))
    if not 4 <= w.gear_ratio <= 20:
        report.warnings.append(ValidationIssue(
            field="wheel.gear_ratio", message="Gear ratio seems unusual (expected 4-20)",
        ))

    if env.hill_grade is not None and env.hill_grade > 30:
        report.warnings.append(ValidationIssue(
            field="environment.hill_grade", message="Hill grade seems unusual (expected 0-30%)",
        ))

    # --- Cross-field ---
    if b.chemistry is Chemistry.LITHIUM and v.motor_condition is MotorCondition.SPARKING:
        report.warnings.append(ValidationIssue(
            message="Lithium battery with sparking motor requires careful current limiting",
            level="high",
            suggestion="Consider motor service before lithium upgrade",
        ))
    if w.tire_diameter > 24:
        report.warnings.append(ValidationIssue(
            message="Large tire diameter may reduce acceleration and hill climbing",
            level="medium",
            suggestion='Consider gear ratio modification for tires over 24"',
        ))
    if env.terrain is Terrain.STEEP and b.age is BatteryAge.OLD:
        report.warnings.append(ValidationIssue(
            message="Old batteries may struggle with steep terrain",
            level="high",
            suggestion="Battery replacement recommended for optimal hill performance",
        ))

    return report
