"""Configuration export / import — the versioned JSON envelope.

Wire format (camelCase keys, as written by earlier tool versions):

    {
      "version": "1.0",
      "timestamp": "2026-05-01T12:00:00Z",
      "inputData": {...},
      "optimizedSettings": {"1": 22, ...},
      "performanceChanges": ["..."]
    }

``import_configuration`` checks ``version`` before validating anything
else, so a file from an incompatible release is rejected without any of
its data being applied.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field

from gem_optimizer.config.request import OptimizationInput
from gem_optimizer.errors import IncompatibleVersionError, OptimizerError
from gem_optimizer.models.results import OptimizationResult, SettingsVector

EXPORT_VERSION = "1.0"


class ConfigurationEnvelope(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    version: str = EXPORT_VERSION
    timestamp: datetime
    input_data: OptimizationInput = Field(alias="inputData")
    optimized_settings: SettingsVector = Field(alias="optimizedSettings")
    performance_changes: list[str] = Field(default_factory=list, alias="performanceChanges")


def build_envelope(result: OptimizationResult, timestamp: datetime | None = None) -> ConfigurationEnvelope:
    return ConfigurationEnvelope(
        timestamp=timestamp or datetime.now(timezone.utc),
        input_data=result.input_data,
        optimized_settings=dict(result.optimized_settings),
        performance_changes=list(result.performance_changes),
    )


def export_configuration(result: OptimizationResult, timestamp: datetime | None = None) -> str:
    """Serialize ``result`` to the JSON envelope text."""
    return build_envelope(result, timestamp).model_dump_json(by_alias=True, indent=2)


def import_configuration(text: str) -> ConfigurationEnvelope:
    """Parse envelope text.

    Raises:
        IncompatibleVersionError: ``version`` is missing or not ``EXPORT_VERSION``.
        OptimizerError: the text is not a JSON object.
        pydantic.ValidationError: the envelope fields are malformed.
    """
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        raise OptimizerError(f"Configuration file is not valid JSON: {exc.msg}") from exc
    if not isinstance(raw, dict):
        raise OptimizerError("Configuration file must contain a JSON object")

    found = raw.get("version")
    if found != EXPORT_VERSION:
        raise IncompatibleVersionError(found, EXPORT_VERSION)

    return ConfigurationEnvelope.model_validate(raw)
