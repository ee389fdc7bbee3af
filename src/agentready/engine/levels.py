"""Level summaries and the sequential level gate.

A repository reaches level N only after reaching every level below
it. The walk runs L1 → L5 and stops at the first level that fails
its bar; a level is never achieved out of order.

The overall gate uses the current-level rule: level N is achieved
when every required check at N passes and at least 80% of the checks
at N pass. Pillars use the previous-level rule instead, see
``agentready.engine.pillars``.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from agentready.core.result import CheckResult, LevelSummary
from agentready.core.types import LEVELS, PASSING_THRESHOLD, Level, next_level, percent


def summarize_levels(
    results: Iterable[CheckResult],
) -> dict[Level, LevelSummary]:
    """Aggregate check results per level.

    Every level gets a summary, empty ones included. An empty level
    scores 0 and its local ``achieved`` flag is vacuously true.

    Args:
        results: Check results from one scan

    Returns:
        Mapping of level to summary, in level order
    """
    buckets: dict[Level, list[CheckResult]] = {level: [] for level in LEVELS}
    for result in results:
        buckets[result.level].append(result)

    summaries = {}
    for level, level_results in buckets.items():
        total = len(level_results)
        passed = sum(1 for r in level_results if r.passed)
        required = [r for r in level_results if r.required]
        required_passed = sum(1 for r in required if r.passed)

        all_required_pass = required_passed == len(required)
        meets_threshold = total == 0 or passed / total >= PASSING_THRESHOLD

        summaries[level] = LevelSummary(
            level=level,
            achieved=all_required_pass and meets_threshold,
            score=percent(passed, total),
            checks_passed=passed,
            checks_total=total,
            required_passed=required_passed,
            required_total=len(required),
        )

    return summaries


def _summary_for(
    summaries: Mapping[Level, LevelSummary], level: Level
) -> LevelSummary:
    try:
        return summaries[level]
    except KeyError:
        raise ValueError(f"No summary for level {level.value}") from None


def determine_achieved_level(
    summaries: Mapping[Level, LevelSummary],
) -> Level | None:
    """Return the highest level reached under the sequential gate.

    Empty levels pass through: they are achieved when the level
    before them was achieved, or when they are L1.

    Args:
        summaries: One summary per level, as from summarize_levels()

    Returns:
        Highest achieved level, or None if L1 was not reached

    Raises:
        ValueError: If a level has no summary
    """
    highest: Level | None = None

    for level in LEVELS:
        summary = _summary_for(summaries, level)

        if summary.checks_total == 0:
            if highest is not None or level == LEVELS[0]:
                highest = level
                continue
            break

        all_required_pass = summary.required_passed == summary.required_total
        meets_threshold = (
            summary.checks_passed / summary.checks_total >= PASSING_THRESHOLD
        )

        if all_required_pass and meets_threshold:
            highest = level
        else:
            break

    return highest


def calculate_progress_to_next(
    current: Level | None,
    summaries: Mapping[Level, LevelSummary],
) -> float:
    """Fraction of checks passing at the level after ``current``.

    Returns 1.0 at L5 and when the next level has no checks.
    """
    target = next_level(current)
    if target is None:
        return 1.0

    summary = _summary_for(summaries, target)
    if summary.checks_total == 0:
        return 1.0

    return summary.checks_passed / summary.checks_total


__all__ = [
    "summarize_levels",
    "determine_achieved_level",
    "calculate_progress_to_next",
]
