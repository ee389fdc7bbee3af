"""Workflow nodes for graph state machine."""

from agentready.workflow.nodes.load_results import LoadResults
from agentready.workflow.nodes.report import Report
from agentready.workflow.nodes.score import Score

__all__ = [
    "LoadResults",
    "Score",
    "Report",
]
