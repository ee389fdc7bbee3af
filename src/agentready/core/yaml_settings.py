"""YAML configuration loading with include directive support."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import yaml
from platformdirs import user_config_dir
from pydantic_settings import BaseSettings, YamlConfigSettingsSource

from agentready.core.log import logger

DEFAULTS_FILE = Path(__file__).parent.parent / "defaults" / "default.yaml"
PROJECT_FILE = "agentready.yaml"


def user_config_file() -> Path:
    """Per-user config file in the platform config directory."""
    return Path(user_config_dir("agentready", appauthor=False)) / PROJECT_FILE


def deep_merge(base: dict, override: dict) -> dict:
    """Merge ``override`` into a copy of ``base``; nested dicts merge."""
    result = base.copy()
    for key, value in override.items():
        if (
            key in result
            and isinstance(result[key], dict)
            and isinstance(value, dict)
        ):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _cli_includes(argv: list[str]) -> list[str]:
    """Values of every ``--include FILE`` pair in argv."""
    includes = []
    i = 1
    while i < len(argv):
        if argv[i] == "--include" and i + 1 < len(argv):
            includes.append(argv[i + 1])
            i += 1
        i += 1
    return includes


class YamlWithIncludesSettingsSource(YamlConfigSettingsSource):
    """YAML settings source layering several config files.

    Deep merges, lowest priority first:
        package defaults < user config < ./agentready.yaml
        < --include files

    Each file may carry an ``include:`` key (string or list) naming
    further files, resolved relative to the including file. Included
    data is overridden by the including file.
    """

    def __init__(self, settings_cls: type[BaseSettings], yaml_file=None):
        includes = _cli_includes(sys.argv)

        base = yaml_file or settings_cls.model_config.get("yaml_file")
        if base and includes:
            yaml_file = ([base] if isinstance(base, (str, os.PathLike)) else list(base)) + includes
        elif includes:
            yaml_file = includes
        else:
            yaml_file = base

        super().__init__(settings_cls, yaml_file)

    def _read_files(self, files):
        files_to_load = [DEFAULTS_FILE, user_config_file(), Path(PROJECT_FILE)]
        if files:
            if isinstance(files, (str, os.PathLike)):
                files = [files]
            files_to_load.extend(Path(f).expanduser() for f in files)

        result: dict = {}
        for file_path in files_to_load:
            if not file_path.is_file():
                logger.debug(
                    "Configuration file not found (skipping)",
                    file=str(file_path),
                )
                continue
            logger.debug("Loading configuration", file=str(file_path))
            result = deep_merge(result, self._load_file_recursive(file_path, set()))
        return result

    def _load_file_recursive(self, filepath: Path, visited: set[Path]) -> dict:
        """Load one file, resolving include: directives.

        Raises:
            ValueError: On a circular include or a non-mapping document
        """
        filepath = filepath.resolve()
        if filepath in visited:
            raise ValueError(f"Circular include: {filepath}")
        visited.add(filepath)

        with open(filepath, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"{filepath}: top level must be a mapping")

        includes = data.pop("include", None) or []
        if isinstance(includes, str):
            includes = [includes]

        merged: dict = {}
        for inc in includes:
            inc_path = self._resolve_path(inc, filepath)
            merged = deep_merge(
                merged, self._load_file_recursive(inc_path, visited.copy())
            )
        return deep_merge(merged, data)

    @staticmethod
    def _resolve_path(include_path: str, relative_to: Path) -> Path:
        path = Path(include_path).expanduser()
        if path.is_absolute():
            return path
        return (relative_to.parent / path).resolve()


__all__ = [
    "YamlWithIncludesSettingsSource",
    "deep_merge",
    "user_config_file",
    "DEFAULTS_FILE",
    "PROJECT_FILE",
]
