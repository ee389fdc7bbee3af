"""CLI command modules for agentready."""

from agentready.command.actions import ActionsCommand
from agentready.command.score import ScoreCommand

__all__ = ["ScoreCommand", "ActionsCommand"]
