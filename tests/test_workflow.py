"""End-to-end tests for the scoring workflow and commands."""

import asyncio
import json
import sys

import pytest

from agentready.command import ActionsCommand, ScoreCommand
from agentready.core.config import State
from agentready.core.types import Level
from agentready.workflow.graph import create_workflow, run_workflow

CHECKS = [
    {"check_id": "docs.readme", "pillar": "docs", "level": "L1",
     "passed": True, "required": True, "message": "README found"},
    {"check_id": "style.linter", "pillar": "style", "level": "L1",
     "passed": True, "message": "Linter configured"},
    {"check_id": "docs.agents_md", "pillar": "docs", "level": "L2",
     "passed": False, "required": True, "message": "No AGENTS.md",
     "suggestions": ["Add an AGENTS.md describing the build"]},
    {"check_id": "build.lockfile", "pillar": "build", "level": "L2",
     "passed": True, "message": "Lockfile present"},
]


@pytest.fixture
def scan_input(tmp_path):
    path = tmp_path / "checks.json"
    path.write_text(json.dumps(CHECKS))
    return path


@pytest.fixture
def load_state(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(sys, "argv", ["agentready"])

    def _load(report_format="json"):
        return State(config={
            "scan": {"repo": "demo"},
            "report": {
                "format": report_format,
                "output_file": str(tmp_path / "out" / "readiness.json"),
            },
        })
    return _load


def test_create_workflow():
    graph = create_workflow()
    assert graph is not None


def test_workflow_writes_json(load_state, scan_input, tmp_path):
    state = load_state()
    state.runtime.score.input_path = scan_input

    result = asyncio.run(run_workflow(state))

    assert result.level is Level.L1
    assert result.repo == "demo"
    assert state.runtime.score.status == "complete"

    written = json.loads((tmp_path / "out" / "readiness.json").read_text())
    assert written["level"] == "L1"
    assert written["overall_score"] == result.overall_score
    assert [a["check_id"] for a in written["action_items"]] == ["docs.agents_md"]
    assert written["action_items"][0]["priority"] == "critical"
    assert written["action_items"][0]["template"] == "AGENTS.md"


def test_workflow_without_report(load_state, scan_input, tmp_path):
    state = load_state()
    state.runtime.score.input_path = scan_input

    result = asyncio.run(run_workflow(state, report=False))

    assert result.level is Level.L1
    assert state.runtime.score.scan_result == result
    assert not (tmp_path / "out" / "readiness.json").exists()


def test_workflow_prints_markdown(load_state, scan_input, capsys):
    state = load_state(report_format="markdown")
    state.runtime.score.input_path = scan_input

    asyncio.run(run_workflow(state))

    out = capsys.readouterr().out
    assert "# Agent Readiness Report" in out
    assert "**Level:** L1 (Functional)" in out


def test_workflow_requires_input(load_state):
    state = load_state()

    with pytest.raises(ValueError, match="No input file"):
        asyncio.run(run_workflow(state))


def test_workflow_rejects_malformed_yaml(load_state, tmp_path):
    bad = tmp_path / "checks.yaml"
    bad.write_text("- check_id: docs.readme\n  pillar: [docs\n")
    state = load_state()
    state.runtime.score.input_path = bad

    with pytest.raises(ValueError, match="invalid YAML"):
        asyncio.run(run_workflow(state))


def test_score_command_exit_codes(load_state, scan_input, tmp_path):
    assert asyncio.run(ScoreCommand(input=scan_input).run_workflow(load_state())) == 0

    failing = tmp_path / "failing.json"
    failing.write_text(json.dumps([
        {"check_id": "docs.readme", "pillar": "docs", "level": "L1",
         "passed": False, "required": True},
    ]))
    assert asyncio.run(ScoreCommand(input=failing).run_workflow(load_state())) == 1


def test_actions_command_output(load_state, scan_input, capsys):
    command = ActionsCommand(input=scan_input)

    assert asyncio.run(command.run_workflow(load_state())) == 0

    response = json.loads(capsys.readouterr().out)
    assert response["total_items"] == 1
    assert response["filtered_count"] == 1
    assert response["current_level"] == "L1"
    assert response["target_level"] == "L2"
    assert response["items"][0] == {
        "priority": "critical",
        "level": "L2",
        "pillar": "docs",
        "action": "Add an AGENTS.md describing the build",
        "details": "No AGENTS.md",
        "has_template": True,
    }


def test_actions_command_priority_filter(load_state, scan_input, capsys):
    command = ActionsCommand(input=scan_input, priority="low", limit=5)

    asyncio.run(command.run_workflow(load_state()))

    response = json.loads(capsys.readouterr().out)
    assert response["total_items"] == 1
    assert response["filtered_count"] == 0
    assert response["items"] == []
