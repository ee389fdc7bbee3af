"""Scoring engine: level and pillar summaries, gating, action items."""

from agentready.engine.actions import (
    assign_priority,
    filter_action_items,
    rank_action_items,
)
from agentready.engine.levels import (
    calculate_progress_to_next,
    determine_achieved_level,
    summarize_levels,
)
from agentready.engine.pillars import determine_pillar_level, summarize_pillars
from agentready.engine.scan import build_scan_result
from agentready.engine.score import calculate_overall_score

__all__ = [
    "summarize_levels",
    "determine_achieved_level",
    "calculate_progress_to_next",
    "summarize_pillars",
    "determine_pillar_level",
    "calculate_overall_score",
    "assign_priority",
    "rank_action_items",
    "filter_action_items",
    "build_scan_result",
]
