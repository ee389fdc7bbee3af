"""Actions command - list prioritized remediation items."""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from agentready.core.types import ActionPriority, next_level
from agentready.engine import filter_action_items

if TYPE_CHECKING:
    from agentready.core.config import State


class ActionsCommand(BaseModel):
    """Print prioritized action items for a scan as JSON.

    Items are ordered critical, high, medium, low. Use --priority to
    keep one priority and --limit to cap the count.
    """

    input: Path = Field(
        description="JSON or YAML file of check results",
    )
    priority: ActionPriority | None = Field(
        default=None,
        description="Only show items of this priority",
    )
    limit: int | None = Field(
        default=None,
        ge=0,
        description="Maximum items to show (default: config.actions.limit)",
    )

    async def run_workflow(self, state: State) -> int:
        """Score without writing reports, then print action items.

        Args:
            state: State instance

        Returns:
            Exit code (0=success)
        """
        from agentready.workflow.graph import run_workflow

        state.runtime.score.input_path = self.input
        result = await run_workflow(state, report=False)

        limit = self.limit if self.limit is not None else state.config.actions.limit
        items = filter_action_items(result.action_items, self.priority, limit)
        target = next_level(result.level)

        response = {
            "total_items": len(result.action_items),
            "filtered_count": len(items),
            "current_level": result.level.value if result.level else None,
            "target_level": target.value if target else None,
            "items": [
                {
                    "priority": item.priority.value,
                    "level": item.level.value,
                    "pillar": item.pillar.value,
                    "action": item.action,
                    "details": item.details,
                    "has_template": item.template is not None,
                }
                for item in items
            ],
        }
        print(json.dumps(response, indent=2))
        return 0
