"""Result types for check outcomes and scan aggregates."""

from __future__ import annotations

from typing import Any

from pydantic import Field, model_validator

from agentready.core.base import BaseRecord
from agentready.core.types import ActionPriority, Level, Pillar


class CheckResult(BaseRecord):
    """Outcome of one atomic check.

    Only pillar, level, passed and required feed the engine. The
    remaining fields are descriptive and passed through untouched.
    """

    check_id: str = Field(description="Stable id, '<pillar>.<name>'")
    check_name: str = Field(default="", description="Display name")
    pillar: Pillar
    level: Level
    passed: bool
    required: bool = False
    message: str = ""
    details: dict[str, Any] | None = None
    matched_files: list[str] | None = None
    suggestions: list[str] | None = None

    @model_validator(mode="before")
    @classmethod
    def _default_check_name(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("check_name"):
            data = {**data, "check_name": data.get("check_id", "")}
        return data


class LevelSummary(BaseRecord):
    """Aggregate for one level across all pillars.

    ``achieved`` is the level's own pass criterion. The repository's
    achieved level comes from the sequential gate, not from this flag.
    """

    level: Level
    achieved: bool
    score: int = Field(ge=0, le=100)
    checks_passed: int = Field(ge=0)
    checks_total: int = Field(ge=0)
    required_passed: int = Field(ge=0)
    required_total: int = Field(ge=0)

    @model_validator(mode="after")
    def _check_counts(self) -> "LevelSummary":
        if self.checks_passed > self.checks_total:
            raise ValueError("checks_passed exceeds checks_total")
        if self.required_passed > self.required_total:
            raise ValueError("required_passed exceeds required_total")
        if self.required_total > self.checks_total:
            raise ValueError("required_total exceeds checks_total")
        return self


class PillarSummary(BaseRecord):
    """Aggregate for one pillar across all levels."""

    pillar: Pillar
    name: str
    level_achieved: Level | None
    score: int = Field(ge=0, le=100)
    checks_passed: int = Field(ge=0)
    checks_total: int = Field(ge=0)
    failed_checks: list[str] = Field(default_factory=list)


class ActionItem(BaseRecord):
    """Remediation suggestion derived from a failed check."""

    priority: ActionPriority
    check_id: str
    pillar: Pillar
    level: Level
    action: str
    details: str | None = None
    template: str | None = None


class ScanResult(BaseRecord):
    """Everything one scan produced, ready for a presentation layer."""

    repo: str = ""
    commit: str = ""
    timestamp: str = ""
    profile: str = ""
    profile_version: str = ""
    level: Level | None = None
    progress_to_next: float = Field(ge=0.0, le=1.0)
    overall_score: int = Field(ge=0, le=100)
    pillars: dict[Pillar, PillarSummary]
    levels: dict[Level, LevelSummary]
    check_results: list[CheckResult] = Field(default_factory=list)
    failed_checks: list[CheckResult] = Field(default_factory=list)
    action_items: list[ActionItem] = Field(default_factory=list)


__all__ = [
    "CheckResult",
    "LevelSummary",
    "PillarSummary",
    "ActionItem",
    "ScanResult",
]
