"""Tests for per-level summaries."""

from agentready.core.types import LEVELS, Level
from agentready.engine.levels import summarize_levels


def test_counts_per_level(make_result):
    """Totals, passes and required counts are split by level."""
    results = [
        make_result("docs.c1", "L1", True, required=True),
        make_result("docs.c2", "L1", True),
        make_result("docs.c3", "L2", True, required=True),
        make_result("docs.c4", "L2", False),
    ]

    summaries = summarize_levels(results)

    assert summaries[Level.L1].checks_passed == 2
    assert summaries[Level.L1].checks_total == 2
    assert summaries[Level.L1].score == 100
    assert summaries[Level.L1].achieved is True

    # 1/2 = 50%, below the 80% bar
    assert summaries[Level.L2].checks_passed == 1
    assert summaries[Level.L2].checks_total == 2
    assert summaries[Level.L2].score == 50
    assert summaries[Level.L2].achieved is False


def test_every_level_present(make_result):
    """Summaries exist for all five levels, in order."""
    summaries = summarize_levels([make_result("docs.c1", "L3", True)])
    assert list(summaries) == list(LEVELS)


def test_all_pass_with_required(make_result):
    """Five passing L1 checks, two of them required."""
    results = [
        make_result(f"docs.c{i}", "L1", True, required=i < 2)
        for i in range(5)
    ]

    l1 = summarize_levels(results)[Level.L1]

    assert l1.achieved is True
    assert l1.score == 100
    assert (l1.required_passed, l1.required_total) == (2, 2)


def test_required_failure_blocks_local_flag(make_result):
    """80% passing is not enough when the failure is required."""
    results = [make_result("docs.c1", "L1", False, required=True)] + [
        make_result(f"docs.c{i}", "L1", True) for i in range(2, 6)
    ]

    l1 = summarize_levels(results)[Level.L1]

    assert l1.score == 80
    assert l1.achieved is False


def test_empty_level_scores_zero_but_is_achieved():
    """No checks: score 0, local flag vacuously true."""
    summaries = summarize_levels([])

    for summary in summaries.values():
        assert summary.score == 0
        assert summary.checks_total == 0
        assert summary.achieved is True


def test_score_rounds_half_up(make_result):
    """1/8 = 12.5% rounds to 13."""
    results = [make_result("docs.c0", "L1", True)] + [
        make_result(f"docs.c{i}", "L1", False) for i in range(1, 8)
    ]
    assert summarize_levels(results)[Level.L1].score == 13


def test_count_invariants(make_result):
    """passed <= total, required_passed <= required_total <= total."""
    results = [
        make_result("docs.a", "L2", False, required=True),
        make_result("docs.b", "L2", True, required=True),
        make_result("docs.c", "L2", True),
    ]

    for s in summarize_levels(results).values():
        assert s.checks_passed <= s.checks_total
        assert s.required_passed <= s.required_total <= s.checks_total
