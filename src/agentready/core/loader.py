"""Load check results produced by the check execution layer."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from agentready.core.result import CheckResult


def _read_document(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() in (".yaml", ".yml"):
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ValueError(f"{path}: invalid YAML: {e}") from e
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"{path}: invalid JSON: {e}") from e


def parse_check_results(data: Any, source: str = "<data>") -> list[CheckResult]:
    """Validate raw records into CheckResult objects.

    Accepts a list of records or a mapping with a ``check_results``
    key, which is the shape of a written readiness.json.

    Args:
        data: Decoded document
        source: Name used in error messages

    Returns:
        CheckResult records in document order

    Raises:
        ValueError: If the document shape, a record, or a duplicate
            check_id is invalid
    """
    if isinstance(data, dict):
        if "check_results" not in data:
            raise ValueError(f"{source}: mapping has no 'check_results' key")
        data = data["check_results"]
    if not isinstance(data, list):
        raise ValueError(
            f"{source}: expected a list of check results, "
            f"got {type(data).__name__}"
        )

    results = []
    seen: set[str] = set()
    for index, record in enumerate(data):
        try:
            result = CheckResult.model_validate(record)
        except ValidationError as e:
            raise ValueError(f"{source}: record {index}: {e}") from e
        if result.check_id in seen:
            raise ValueError(
                f"{source}: record {index}: duplicate check_id "
                f"'{result.check_id}'"
            )
        seen.add(result.check_id)
        results.append(result)
    return results


def load_check_results(path: Path | str) -> list[CheckResult]:
    """Read check results from a JSON or YAML file.

    Raises:
        FileNotFoundError: If ``path`` does not exist
        ValueError: If the file content is invalid
    """
    path = Path(path)
    return parse_check_results(_read_document(path), source=str(path))


__all__ = ["load_check_results", "parse_check_results"]
