"""Score node - run the scoring engine over loaded results."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic_graph import BaseNode, End, GraphRunContext

from agentready.core.config import State
from agentready.core.log import logger
from agentready.core.result import ScanResult
from agentready.engine import build_scan_result


@dataclass
class Score(BaseNode[State, None, ScanResult]):
    """Compute summaries, achieved level and action items."""

    report: bool = True

    async def run(
        self, ctx: GraphRunContext[State]
    ) -> "Report | End[ScanResult]":
        """Score the loaded results.

        Returns:
            Report: If reports should be written
            End[ScanResult]: Otherwise
        """
        scan = ctx.state.config.scan
        runtime = ctx.state.runtime.score

        with logger.span("Scoring", checks=len(runtime.check_results)):
            result = build_scan_result(
                runtime.check_results,
                repo=scan.repo,
                commit=scan.commit,
                profile=scan.profile,
                profile_version=scan.profile_version,
                templates=ctx.state.config.actions.templates,
            )

        for summary in result.levels.values():
            logger.spew(
                f"{summary.level.value}: {summary.checks_passed}/"
                f"{summary.checks_total} passed, {summary.required_passed}/"
                f"{summary.required_total} required"
            )

        runtime.scan_result = result
        runtime.status = "scored"

        level = result.level.value if result.level else "none"
        logger.info(
            f"Achieved level {level}, score {result.overall_score}%",
            action_items=len(result.action_items),
        )

        if self.report:
            from agentready.workflow.nodes.report import Report
            return Report()
        runtime.status = "complete"
        return End(result)
