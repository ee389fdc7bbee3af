"""Per-pillar summaries.

A pillar cuts across levels, so its achieved level answers a
different question than the repository gate: has this pillar on its
own progressed through level N. It uses the previous-level rule:

- L1 is achieved when every required L1 check in the pillar passes
- L(N) is achieved when every required L(N) check passes and at
  least 80% of the pillar's L(N-1) checks passed

The walk is sequential and empty levels pass through exactly as in
the repository gate. A pillar with no checks scores 100.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from agentready.core.result import CheckResult, PillarSummary
from agentready.core.types import (
    LEVELS,
    PASSING_THRESHOLD,
    PILLAR_NAMES,
    PILLARS,
    Level,
    Pillar,
    percent,
)


def determine_pillar_level(results: Sequence[CheckResult]) -> Level | None:
    """Return the highest level one pillar has reached.

    Args:
        results: Check results belonging to a single pillar

    Returns:
        Highest achieved level, or None
    """
    by_level: dict[Level, list[CheckResult]] = {level: [] for level in LEVELS}
    for result in results:
        by_level[result.level].append(result)

    highest: Level | None = None
    previous: list[CheckResult] = []

    for level in LEVELS:
        current = by_level[level]

        if not current:
            if highest is not None or level == LEVELS[0]:
                highest = level
                previous = current
                continue
            break

        required = [r for r in current if r.required]
        all_required_pass = all(r.passed for r in required)

        # An empty previous level never blocks
        previous_gate = True
        if previous:
            previous_passed = sum(1 for r in previous if r.passed)
            previous_gate = previous_passed / len(previous) >= PASSING_THRESHOLD

        if all_required_pass and previous_gate:
            highest = level
            previous = current
        else:
            break

    return highest


def summarize_pillars(
    results: Iterable[CheckResult],
) -> dict[Pillar, PillarSummary]:
    """Aggregate check results per pillar.

    ``failed_checks`` keeps input order.

    Args:
        results: Check results from one scan

    Returns:
        Mapping of pillar to summary, in pillar order
    """
    buckets: dict[Pillar, list[CheckResult]] = {p: [] for p in PILLARS}
    for result in results:
        buckets[result.pillar].append(result)

    summaries = {}
    for pillar, pillar_results in buckets.items():
        total = len(pillar_results)
        passed = sum(1 for r in pillar_results if r.passed)

        summaries[pillar] = PillarSummary(
            pillar=pillar,
            name=PILLAR_NAMES[pillar],
            level_achieved=determine_pillar_level(pillar_results),
            score=percent(passed, total, empty=100),
            checks_passed=passed,
            checks_total=total,
            failed_checks=[r.check_id for r in pillar_results if not r.passed],
        )

    return summaries


__all__ = ["summarize_pillars", "determine_pillar_level"]
