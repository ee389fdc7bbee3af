"""Score command - score check results and write reports."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from agentready.core.log import logger

if TYPE_CHECKING:
    from agentready.core.config import State


class ScoreCommand(BaseModel):
    """Score a scan's check results and report the achieved level.

    Reads the check results written by the check execution layer,
    computes level and pillar summaries, gates the achieved level and
    ranks action items. Output follows config.report: readiness.json,
    a markdown report on stdout, or both.

    Exits 0 when at least L1 was achieved, 1 otherwise.
    """

    input: Path = Field(
        description="JSON or YAML file of check results",
    )

    async def run_workflow(self, state: State) -> int:
        """Run the score workflow.

        Args:
            state: State instance

        Returns:
            Exit code
        """
        from agentready.workflow.graph import run_workflow

        state.runtime.score.input_path = self.input
        result = await run_workflow(state, report=True)

        if result.level is None:
            logger.warn("No level achieved")
            return 1
        return 0
