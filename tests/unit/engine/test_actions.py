"""Tests for action item priorities and ordering."""

import pytest

from agentready.core.types import PRIORITY_ORDER, ActionPriority, Level
from agentready.engine.actions import (
    assign_priority,
    filter_action_items,
    rank_action_items,
)


@pytest.mark.parametrize(
    "level, required, achieved, expected",
    [
        # Blocking level is the one after the achieved level
        ("L2", True, "L1", ActionPriority.CRITICAL),
        ("L1", True, None, ActionPriority.CRITICAL),
        ("L2", False, "L1", ActionPriority.HIGH),
        ("L1", False, None, ActionPriority.HIGH),
        ("L1", False, "L2", ActionPriority.MEDIUM),
        ("L2", False, "L2", ActionPriority.MEDIUM),
        ("L4", False, "L1", ActionPriority.LOW),
        ("L4", True, "L1", ActionPriority.LOW),
        ("L5", False, "L5", ActionPriority.MEDIUM),
    ],
)
def test_assign_priority(make_result, level, required, achieved, expected):
    result = make_result("docs.x", level, False, required)
    achieved = Level(achieved) if achieved else None
    assert assign_priority(result, achieved) == expected


def test_sorted_by_priority_level_id(make_result):
    failed = [
        make_result("docs.z", "L5", False),
        make_result("test.b", "L2", False),
        make_result("build.a", "L2", False, required=True),
        make_result("style.a", "L1", False),
        make_result("env.b", "L3", False),
        make_result("env.a", "L3", False),
        make_result("test.a", "L2", False),
    ]

    items = rank_action_items(failed, Level.L1)

    assert [i.check_id for i in items] == [
        "build.a",              # critical
        "test.a", "test.b",     # high, by id
        "style.a",              # medium
        "env.a", "env.b",       # low, L3 before L5
        "docs.z",
    ]
    ranks = [PRIORITY_ORDER.index(i.priority) for i in items]
    assert ranks == sorted(ranks)


def test_required_blocking_checks_are_critical(make_result):
    failed = [
        make_result("docs.agents_md", "L1", False, required=True),
        make_result("docs.readme", "L1", False, required=True),
        make_result("docs.extra", "L1", False),
    ]

    items = rank_action_items(failed, None)

    critical = {i.check_id for i in items if i.priority == ActionPriority.CRITICAL}
    assert critical == {"docs.agents_md", "docs.readme"}
    assert items[0].priority == ActionPriority.CRITICAL


def test_action_text_and_template(make_result):
    failed = [
        make_result(
            "docs.agents_md", "L1", False,
            check_name="AGENTS.md present",
            suggestions=["Add an AGENTS.md describing build and test"],
        ),
        make_result("docs.contributing", "L1", False, check_name="CONTRIBUTING"),
    ]

    items = rank_action_items(
        failed, None, templates={"docs.agents_md": "AGENTS.md"}
    )
    by_id = {i.check_id: i for i in items}

    assert by_id["docs.agents_md"].action == "Add an AGENTS.md describing build and test"
    assert by_id["docs.agents_md"].template == "AGENTS.md"
    assert by_id["docs.agents_md"].details == "Failed"
    assert by_id["docs.contributing"].action == "Fix CONTRIBUTING"
    assert by_id["docs.contributing"].template is None


def test_passing_results_skipped(make_result):
    items = rank_action_items(
        [make_result("docs.a", "L1", True), make_result("docs.b", "L1", False)],
        None,
    )
    assert [i.check_id for i in items] == ["docs.b"]


def test_empty_input():
    assert rank_action_items([], Level.L3) == []


def test_deterministic(make_result):
    failed = [make_result(f"style.c{i}", f"L{i % 5 + 1}", False, i % 3 == 0)
              for i in range(15)]
    assert rank_action_items(failed, Level.L2) == rank_action_items(
        list(reversed(failed)), Level.L2
    )


class TestFilter:

    @pytest.fixture
    def items(self, make_result):
        failed = [
            make_result("docs.a", "L1", False, required=True),
            make_result("docs.b", "L1", False),
            make_result("docs.c", "L3", False),
            make_result("docs.d", "L4", False),
        ]
        return rank_action_items(failed, None)

    def test_no_filter(self, items):
        assert filter_action_items(items) == items

    def test_priority(self, items):
        low = filter_action_items(items, priority=ActionPriority.LOW)
        assert [i.check_id for i in low] == ["docs.c", "docs.d"]

    def test_limit(self, items):
        assert len(filter_action_items(items, limit=2)) == 2
        assert filter_action_items(items, limit=0) == []

    def test_negative_limit(self, items):
        with pytest.raises(ValueError):
            filter_action_items(items, limit=-1)
