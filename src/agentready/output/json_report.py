"""JSON output."""

from __future__ import annotations

import json
from pathlib import Path

from agentready.core.result import ScanResult


def format_json(result: ScanResult) -> str:
    """Serialize a scan result with the documented field names."""
    return json.dumps(result.model_dump(mode="json"), indent=2)


def write_json(result: ScanResult, path: Path | str) -> Path:
    """Write ``result`` to ``path``, creating parent directories.

    Returns:
        The path written
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(format_json(result) + "\n", encoding="utf-8")
    return path
