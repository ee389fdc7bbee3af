"""Tests for the markdown report."""

from agentready.engine.scan import build_scan_result
from agentready.output import render_markdown


def _scan(make_result, failures=0):
    results = [
        make_result("docs.readme", "L1", True, required=True),
        make_result("style.lint", "L1", True),
    ]
    results += [make_result(f"test.c{i}", "L2", False) for i in range(failures)]
    results += [make_result("test.ok", "L2", True)]
    return build_scan_result(
        results,
        repo="example",
        commit="abc123",
        profile="factory_compat",
        profile_version="1.0.0",
        timestamp="2026-01-01T00:00:00+00:00",
    )


def test_header_and_level(make_result):
    text = render_markdown(_scan(make_result, failures=1))

    assert text.startswith("# Agent Readiness Report")
    assert "- **Repository:** example" in text
    assert "- **Profile:** factory_compat v1.0.0" in text
    assert "**Level:** L1 (Functional)" in text
    assert "**Score:** 75%" in text
    assert "Progress to L2:" in text and "50%" in text


def test_pillars_without_checks_hidden(make_result):
    text = render_markdown(_scan(make_result))

    assert "| Documentation | L5 | 100% | 1/1 |" in text
    assert "Product & Experimentation" not in text


def test_action_items_truncated(make_result):
    text = render_markdown(_scan(make_result, failures=7))

    assert text.count("**[HIGH]**") == 5
    assert "... and 2 more (set --config.report.verbose to see all)" in text
    assert "## Level Breakdown" not in text


def test_verbose(make_result):
    text = render_markdown(_scan(make_result, failures=7), verbose=True)

    assert text.count("**[HIGH]**") == 7
    assert "... and" not in text
    assert "## Level Breakdown" in text
    assert "- ✓ L1 - 100% (2/2 checks, 1/1 required)" in text


def test_not_achieved(make_result):
    scan = build_scan_result(
        [make_result("docs.readme", "L1", False, required=True)],
        timestamp="2026-01-01T00:00:00+00:00",
    )
    text = render_markdown(scan)

    assert "**Level:** Not Achieved" in text
    assert "Progress to L1:" in text
    assert "**[CRITICAL]**" in text
