"""Action item ranking.

Priority depends only on where a failed check sits relative to the
achieved level:

- critical: required check at or below the blocking level (the first
  level not yet achieved)
- high: optional check at the blocking level
- medium: optional check at or below the achieved level
- low: any check beyond the blocking level

Items sort critical → low, then by level, then by check id.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

from agentready.core.result import ActionItem, CheckResult
from agentready.core.types import (
    LEVELS,
    PRIORITY_ORDER,
    ActionPriority,
    Level,
)


def assign_priority(result: CheckResult, achieved: Level | None) -> ActionPriority:
    """Priority of one failed check given the achieved level."""
    achieved_index = LEVELS.index(achieved) if achieved is not None else -1
    blocking_index = achieved_index + 1
    index = LEVELS.index(result.level)

    if result.required and index <= blocking_index:
        return ActionPriority.CRITICAL
    if index == blocking_index:
        return ActionPriority.HIGH
    if index <= achieved_index:
        return ActionPriority.MEDIUM
    return ActionPriority.LOW


def _action_text(result: CheckResult) -> str:
    if result.suggestions:
        return result.suggestions[0]
    return f"Fix {result.check_name or result.check_id}"


def _sort_key(item: ActionItem) -> tuple[int, int, str]:
    return (
        PRIORITY_ORDER.index(item.priority),
        LEVELS.index(item.level),
        item.check_id,
    )


def rank_action_items(
    failed: Iterable[CheckResult],
    achieved: Level | None,
    templates: Mapping[str, str] | None = None,
) -> list[ActionItem]:
    """Build action items for failed checks, most urgent first.

    Passing results in ``failed`` are skipped.

    Args:
        failed: Failed check results
        achieved: Level the repository has achieved, or None
        templates: Optional check_id → template file mapping

    Returns:
        Sorted action items
    """
    templates = templates or {}
    items = [
        ActionItem(
            priority=assign_priority(result, achieved),
            check_id=result.check_id,
            pillar=result.pillar,
            level=result.level,
            action=_action_text(result),
            details=result.message or None,
            template=templates.get(result.check_id),
        )
        for result in failed
        if not result.passed
    ]
    return sorted(items, key=_sort_key)


def filter_action_items(
    items: Sequence[ActionItem],
    priority: ActionPriority | None = None,
    limit: int | None = None,
) -> list[ActionItem]:
    """Keep items of one priority, then cut to ``limit``."""
    selected = [i for i in items if priority is None or i.priority == priority]
    if limit is not None:
        if limit < 0:
            raise ValueError(f"limit must be non-negative, got {limit}")
        selected = selected[:limit]
    return selected


__all__ = ["assign_priority", "rank_action_items", "filter_action_items"]
