"""LoadResults node - read check results from the input file."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic_graph import BaseNode, GraphRunContext

from agentready.core.config import State
from agentready.core.loader import load_check_results
from agentready.core.log import logger


@dataclass
class LoadResults(BaseNode[State]):
    """Load and validate the scan's check results."""

    report: bool = True

    async def run(self, ctx: GraphRunContext[State]) -> "Score":
        """Load results into runtime state.

        Returns:
            Score: Always
        """
        runtime = ctx.state.runtime.score
        if runtime.input_path is None:
            raise ValueError("No input file given for check results")

        with logger.span("Loading check results", file=str(runtime.input_path)):
            runtime.check_results = load_check_results(runtime.input_path)

        runtime.status = "loaded"
        logger.info(
            f"Loaded {len(runtime.check_results)} check results",
            file=str(runtime.input_path),
        )

        from agentready.workflow.nodes.score import Score
        return Score(report=self.report)
