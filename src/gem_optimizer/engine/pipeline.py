"""Rule pipeline — runs each stage behind its own error boundary."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from gem_optimizer.engine.rules import RULE_STAGES, Rule
from gem_optimizer.models.results import AnalysisContext, SettingsVector, StageOutcome

_logger = logging.getLogger(__name__)


def _diff(before: SettingsVector, after: SettingsVector) -> dict[int, int]:
    return {key: value for key, value in after.items() if before.get(key) != value}


def run_pipeline(
    settings: SettingsVector,
    ctx: AnalysisContext,
    stages: Sequence[tuple[str, Rule]] = RULE_STAGES,
) -> tuple[SettingsVector, list[StageOutcome]]:
    """Apply ``stages`` in order.

    A stage that raises is recorded as a failed ``StageOutcome`` and
    contributes nothing; the vector carries on unchanged into the next
    stage.

    Returns:
        (final vector, one outcome per stage in run order)
    """
    current = dict(settings)
    outcomes: list[StageOutcome] = []

    for name, stage in stages:
        try:
            updated = stage(current, ctx)
        except Exception as exc:
            _logger.warning("Rule stage %s failed: %s", name, exc)
            outcomes.append(StageOutcome(name=name, ok=False, error=str(exc)))
            continue
        outcomes.append(StageOutcome(name=name, ok=True, changes=_diff(current, updated)))
        current = updated

    return current, outcomes
