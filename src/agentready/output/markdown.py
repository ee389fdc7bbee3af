"""Plain markdown report of a scan result."""

from __future__ import annotations

from agentready.core.result import ScanResult
from agentready.core.types import LEVEL_NAMES, LEVELS, next_level

# Items shown when not verbose
ACTION_PREVIEW = 5

_BAR_WIDTH = 20


def _progress_bar(percent: int) -> str:
    filled = round(percent / 100 * _BAR_WIDTH)
    return "█" * filled + "░" * (_BAR_WIDTH - filled)


def render_markdown(result: ScanResult, verbose: bool = False) -> str:
    """Render ``result`` as a markdown document.

    Args:
        result: Scan to render
        verbose: Add the level breakdown and list every action item

    Returns:
        Markdown text ending in a newline
    """
    lines = ["# Agent Readiness Report", ""]

    for label, value in (
        ("Repository", result.repo),
        ("Commit", result.commit),
        ("Profile", " v".join(v for v in (result.profile, result.profile_version) if v)),
        ("Time", result.timestamp),
    ):
        if value:
            lines.append(f"- **{label}:** {value}")
    lines.append("")

    if result.level is None:
        lines.append("**Level:** Not Achieved")
    else:
        lines.append(
            f"**Level:** {result.level.value} ({LEVEL_NAMES[result.level]})"
        )
    lines.append(f"**Score:** {result.overall_score}%")
    lines.append("")

    target = next_level(result.level)
    if target is not None and result.progress_to_next < 1:
        progress = round(result.progress_to_next * 100)
        lines.append(
            f"Progress to {target.value}: `{_progress_bar(progress)}` {progress}%"
        )
        lines.append("")

    lines += ["## Pillar Summary", "", "| Pillar | Level | Score | Checks |",
              "|---|---|---|---|"]
    for summary in result.pillars.values():
        if summary.checks_total == 0:
            continue
        level = summary.level_achieved.value if summary.level_achieved else "-"
        lines.append(
            f"| {summary.name} | {level} | {summary.score}% "
            f"| {summary.checks_passed}/{summary.checks_total} |"
        )
    lines.append("")

    if verbose:
        lines += ["## Level Breakdown", ""]
        for level in LEVELS:
            summary = result.levels[level]
            if summary.checks_total == 0:
                continue
            mark = "✓" if summary.achieved else "✗"
            lines.append(
                f"- {mark} {level.value} - {summary.score}% "
                f"({summary.checks_passed}/{summary.checks_total} checks, "
                f"{summary.required_passed}/{summary.required_total} required)"
            )
        lines.append("")

    if result.action_items:
        lines += ["## Action Items", ""]
        shown = result.action_items if verbose else result.action_items[:ACTION_PREVIEW]
        for item in shown:
            lines.append(
                f"- **[{item.priority.value.upper()}]** {item.level.value} {item.action}"
            )
        hidden = len(result.action_items) - len(shown)
        if hidden > 0:
            lines.append(
                f"- ... and {hidden} more "
                "(set --config.report.verbose to see all)"
            )
        lines.append("")

    return "\n".join(lines)


__all__ = ["render_markdown"]
