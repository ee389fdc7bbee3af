"""Renderers for scan results."""

from agentready.output.json_report import format_json, write_json
from agentready.output.markdown import render_markdown

__all__ = ["format_json", "write_json", "render_markdown"]
