"""Graph workflow definition."""

from pydantic_graph import Graph

from agentready.core.config import State
from agentready.core.log import logger


def create_workflow():
    """Create the scoring workflow graph.

    LoadResults → Score → [Report →] End

    Returns:
        Graph workflow with State as state_type
    """
    logger.debug("Building workflow graph")

    from agentready.workflow.nodes.load_results import LoadResults
    from agentready.workflow.nodes.report import Report
    from agentready.workflow.nodes.score import Score

    return Graph(
        nodes=(LoadResults, Score, Report),
        state_type=State,
    )


async def run_workflow(state: State, report: bool = True):
    """Run the scoring workflow to completion.

    Args:
        state: Loaded State; runtime.score.input_path must be set
        report: Write the configured reports after scoring

    Returns:
        The ScanResult produced
    """
    from agentready.workflow.nodes.load_results import LoadResults

    workflow = create_workflow()
    result = await workflow.run(LoadResults(report=report), state=state)
    return result.output
