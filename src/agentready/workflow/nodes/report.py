"""Report node - write the configured outputs."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic_graph import BaseNode, End, GraphRunContext

from agentready.core.config import State
from agentready.core.log import logger
from agentready.core.result import ScanResult
from agentready.output import render_markdown, write_json


@dataclass
class Report(BaseNode[State, None, ScanResult]):
    """Write JSON and/or print the markdown report."""

    async def run(self, ctx: GraphRunContext[State]) -> End[ScanResult]:
        """Write reports for the scored result.

        Returns:
            End[ScanResult]: The scored result
        """
        config = ctx.state.config.report
        runtime = ctx.state.runtime.score
        result = runtime.scan_result
        if result is None:
            raise ValueError("No scan result to report")

        if config.format in ("json", "both"):
            path = write_json(result, config.output_file)
            logger.info(f"JSON output: {path}")

        if config.format in ("markdown", "both"):
            print(render_markdown(result, verbose=config.verbose))

        runtime.status = "complete"
        return End(result)
