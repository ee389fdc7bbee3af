"""Pytest configuration and fixtures for agentready tests."""

import sys
import tempfile
from pathlib import Path

import pytest

from agentready.core.log import ConsoleSink, setup_logger
from agentready.core.result import CheckResult, LevelSummary
from agentready.core.types import LEVELS


@pytest.fixture(autouse=True, scope="session")
def configure_logging():
    """Console-only logging for the whole test session.

    Nothing is sent to logfire.dev.
    """
    test_log_root = Path(tempfile.gettempdir()) / "agentready-tests"
    setup_logger(
        log_root=test_log_root,
        scan_name="test",
        console=ConsoleSink(level="debug"),
    )


@pytest.fixture
def make_result():
    """Factory for CheckResult records.

    Usage: make_result("docs.readme", "L1", passed=True, required=True)
    """
    def _make(check_id, level, passed, required=False, pillar=None, **extra):
        return CheckResult(
            check_id=check_id,
            pillar=pillar or check_id.split(".")[0],
            level=level,
            passed=passed,
            required=required,
            message="Passed" if passed else "Failed",
            **extra,
        )
    return _make


@pytest.fixture
def make_summaries():
    """Factory for a full level → LevelSummary mapping.

    Takes ``{"L1": (passed, total, required_passed, required_total)}``;
    levels not given are empty. The local ``achieved`` flag is not
    consulted by the gate, so it is left False.
    """
    def _make(counts):
        summaries = {}
        for level in LEVELS:
            passed, total, req_passed, req_total = counts.get(
                level.value, (0, 0, 0, 0)
            )
            summaries[level] = LevelSummary(
                level=level,
                achieved=False,
                score=round(passed / total * 100) if total else 0,
                checks_passed=passed,
                checks_total=total,
                required_passed=req_passed,
                required_total=req_total,
            )
        return summaries
    return _make


@pytest.fixture
def test_state():
    """Load State without CLI parsing conflicts.

    Replaces sys.argv so pydantic-settings does not read pytest's
    arguments.
    """
    from agentready.core.config import State

    old_argv = sys.argv
    sys.argv = ['agentready']
    try:
        yield State()
    finally:
        sys.argv = old_argv
