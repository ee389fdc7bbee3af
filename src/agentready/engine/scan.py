"""Assemble a ScanResult from check results."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import UTC, datetime

from agentready.core.result import CheckResult, ScanResult
from agentready.engine.actions import rank_action_items
from agentready.engine.levels import (
    calculate_progress_to_next,
    determine_achieved_level,
    summarize_levels,
)
from agentready.engine.pillars import summarize_pillars
from agentready.engine.score import calculate_overall_score


def build_scan_result(
    results: Iterable[CheckResult],
    repo: str = "",
    commit: str = "",
    profile: str = "",
    profile_version: str = "",
    templates: Mapping[str, str] | None = None,
    timestamp: str | None = None,
) -> ScanResult:
    """Run every scoring step over one scan's check results.

    Args:
        results: Check results from one scan
        repo: Repository name
        commit: Commit the scan ran against
        profile: Profile name the checks came from
        profile_version: Profile version
        templates: Optional check_id → template file mapping
        timestamp: ISO timestamp; now (UTC) if not given

    Returns:
        ScanResult with every summary filled in
    """
    results = list(results)

    levels = summarize_levels(results)
    achieved = determine_achieved_level(levels)
    failed = [r for r in results if not r.passed]

    if timestamp is None:
        timestamp = datetime.now(UTC).replace(microsecond=0).isoformat()

    return ScanResult(
        repo=repo,
        commit=commit,
        timestamp=timestamp,
        profile=profile,
        profile_version=profile_version,
        level=achieved,
        progress_to_next=calculate_progress_to_next(achieved, levels),
        overall_score=calculate_overall_score(results),
        pillars=summarize_pillars(results),
        levels=levels,
        check_results=results,
        failed_checks=failed,
        action_items=rank_action_items(failed, achieved, templates),
    )


__all__ = ["build_scan_result"]
