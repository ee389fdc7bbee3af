"""Application state and configuration."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any, Literal

import platformdirs
from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from agentready.core.base import BaseConfig, BaseState
from agentready.core.log import Logger
from agentready.core.result import CheckResult, ScanResult
from agentready.core.yaml_settings import YamlWithIncludesSettingsSource

# Modules available to {module.attr} templates in YAML values,
# e.g. {platformdirs.user_log_dir} or {os.getcwd}
TEMPLATE_NAMESPACE = {
    'os': os,
    'platformdirs': platformdirs,
    'Path': Path,
}

# ============================================================
# CONFIG MODELS (loaded from YAML/env/CLI)
# ============================================================

class ScanConfig(BaseConfig):
    """Metadata recorded on every scan result."""

    repo: str = Field(default="", description="Repository name")
    commit: str = Field(default="", description="Commit that was scanned")
    profile: str = Field(
        default="factory_compat",
        description="Profile the check results came from",
    )
    profile_version: str = Field(default="", description="Profile version")


class ReportConfig(BaseConfig):
    """Where and how scan results are written."""

    format: Literal["json", "markdown", "both"] = Field(
        default="both",
        description="json writes output_file, markdown prints a report",
    )
    output_file: Path = Field(
        default=Path("readiness.json"),
        description="JSON output path (supports {config.*} templates)",
    )
    verbose: bool = Field(
        default=False,
        description="Include level breakdown and every action item",
    )


class ActionsConfig(BaseConfig):
    """Action item settings."""

    templates: dict[str, str] = Field(
        default_factory=dict,
        description="check_id → template file that fixes the check",
    )
    limit: int = Field(
        default=10,
        ge=0,
        description="Default number of items the actions command prints",
    )


class Config(BaseConfig):
    """Application configuration loaded from YAML/env/CLI."""

    logger: Logger = Field(
        default=None,
        description="Logger configuration and runtime instance",
    )
    scan: ScanConfig = Field(
        default_factory=ScanConfig,
        description="Scan metadata",
    )
    report: ReportConfig = Field(
        default_factory=ReportConfig,
        description="Report output settings",
    )
    actions: ActionsConfig = Field(
        default_factory=ActionsConfig,
        description="Action item settings",
    )
    log_level: str = Field(
        default="info",
        alias="log-level",
        description=(
            "Console log level: 'spew', 'trace', 'debug', 'info', "
            "'warn', 'error', 'fatal'"
        ),
    )
    log_root: Path = Field(
        default_factory=(
            lambda: Path(platformdirs.user_state_dir()) / "agentready"
        ),
        description="Root directory for log files",
    )

    model_config = ConfigDict(populate_by_name=True)

    @model_validator(mode='after')
    def _setup_logger(self) -> 'Config':
        """Install the global logger from the loaded configuration."""
        from agentready.core.log import setup_logger

        if self.logger is None:
            self.logger = Logger(level=self.log_level)

        setup_logger(
            log_root=self.log_root,
            scan_name=self.scan.repo or "scan",
            console=self.logger.console,
            otlp=self.logger.otlp,
            file=self.logger.file,
            logfire=self.logger.logfire,
            level=self.logger.level,
        )
        return self

    def close(self):
        """Close the global logger, then every closeable section."""
        from agentready.core.log import logger
        logger.close()
        super().close()


# ============================================================
# RUNTIME STATE MODELS (mutable during workflow execution)
# ============================================================

class ScoreState(BaseState):
    """Score workflow runtime state."""

    input_path: Path | None = Field(
        default=None,
        description="File the check results were loaded from",
    )
    check_results: list[CheckResult] = Field(
        default_factory=list,
        description="CheckResult records for this scan",
    )
    scan_result: ScanResult | None = Field(
        default=None,
        description="ScanResult once scoring has run",
    )
    status: str = Field(
        default="pending",
        description="Workflow status: pending, loaded, scored, complete",
    )


class Runtime(BaseModel):
    """All runtime state organized by workflow."""

    score: ScoreState = Field(
        default_factory=ScoreState,
        description="Score workflow runtime state",
    )


# ============================================================
# STATE (config + runtime combined)
# ============================================================

class State(BaseSettings):
    """Configuration and runtime state for one invocation.

    - config: loaded from YAML/env/CLI, read-only once loaded
    - runtime: mutated by workflow nodes

    Engine functions never see State; nodes pass them the plain
    values they need.
    """

    config: Config = Field(
        default_factory=Config,
        description="Application configuration (from YAML/env/CLI)",
    )
    runtime: Runtime = Field(
        default_factory=Runtime,
        description="Runtime state (mutates during workflow execution)",
    )
    include: list[str] | None = Field(
        default=None,
        description=(
            "Additional YAML files to merge. Use --include on the "
            "CLI or include: in YAML files."
        ),
    )

    model_config = SettingsConfigDict(
        yaml_file="agentready.yaml",
        env_file=".env",
        env_prefix="AGENTREADY_",
        env_nested_delimiter="__",
        cli_parse_args=True,
        cli_implicit_flags=True,
        cli_use_class_docs_for_groups=True,
        arbitrary_types_allowed=True,
        extra='ignore'
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Source priority, highest first: init/CLI, YAML, .env,
        environment, file secrets."""
        return (
            init_settings,
            YamlWithIncludesSettingsSource(settings_cls),
            dotenv_settings,
            env_settings,
            file_secret_settings,
        )

    @model_validator(mode="after")
    def substitute_templates(self) -> "State":
        """Replace {config.x.y} and {module.attr} templates in every
        string and Path value."""
        self._substitute_recursive(self)
        return self

    def _substitute_recursive(self, obj: Any) -> None:
        if isinstance(obj, BaseModel):
            for field_name in obj.__class__.model_fields:
                value = getattr(obj, field_name)
                new_value = self._substitute_value(value)
                if new_value is not value:
                    setattr(obj, field_name, new_value)
        elif isinstance(obj, dict):
            for key in obj:
                obj[key] = self._substitute_value(obj[key])
        elif isinstance(obj, list):
            for i in range(len(obj)):
                obj[i] = self._substitute_value(obj[i])

    def _substitute_value(self, value: Any) -> Any:
        if isinstance(value, str):
            return self._substitute_string(value)
        if isinstance(value, Path):
            return Path(self._substitute_string(str(value)))
        if isinstance(value, (BaseModel, dict, list)):
            self._substitute_recursive(value)
        return value

    def _substitute_string(self, value: str) -> str:
        """Replace {dotted.path} references; unknown ones stay as is.

        Examples:
            "{config.scan.repo}.json" → "myrepo.json"
            "{platformdirs.user_log_dir}" → "~/.local/state/agentready/log"
        """
        def replace_template(match):
            parts = match.group(1).split(".")

            if parts[0] in TEMPLATE_NAMESPACE:
                obj = TEMPLATE_NAMESPACE[parts[0]]
                parts = parts[1:]
            else:
                obj = self

            try:
                for part in parts:
                    obj = getattr(obj, part)
                if callable(obj):
                    obj = (
                        obj('agentready', appauthor=False)
                        if getattr(obj, '__module__', '').startswith('platformdirs')
                        else obj()
                    )
                return str(obj)
            except (AttributeError, TypeError):
                return match.group(0)

        return re.sub(r'\{([a-z._]+)\}', replace_template, value)


__all__ = [
    "State",
    "Config",
    "ScanConfig",
    "ReportConfig",
    "ActionsConfig",
    "Runtime",
    "ScoreState",
]
