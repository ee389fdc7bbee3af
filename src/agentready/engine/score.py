"""Overall score."""

from __future__ import annotations

from collections.abc import Sequence

from agentready.core.result import CheckResult
from agentready.core.types import percent


def calculate_overall_score(results: Sequence[CheckResult]) -> int:
    """Flat pass rate over every result, 0-100.

    Ignores levels, pillars and gating. 0 for an empty list.
    """
    passed = sum(1 for r in results if r.passed)
    return percent(passed, len(results))


__all__ = ["calculate_overall_score"]
