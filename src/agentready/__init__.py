"""agentready - repository maturity scoring for AI-agent collaboration."""

from agentready.core.result import (
    ActionItem,
    CheckResult,
    LevelSummary,
    PillarSummary,
    ScanResult,
)
from agentready.core.types import (
    LEVEL_NAMES,
    LEVELS,
    PASSING_THRESHOLD,
    PILLAR_NAMES,
    PILLARS,
    ActionPriority,
    Level,
    Pillar,
)
from agentready.engine import build_scan_result

__all__ = [
    "Level",
    "Pillar",
    "ActionPriority",
    "LEVELS",
    "LEVEL_NAMES",
    "PILLARS",
    "PILLAR_NAMES",
    "PASSING_THRESHOLD",
    "CheckResult",
    "LevelSummary",
    "PillarSummary",
    "ActionItem",
    "ScanResult",
    "build_scan_result",
]
