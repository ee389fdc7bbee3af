"""Logger with composable output sinks, backed by logfire."""

from __future__ import annotations

import contextlib
import os
from abc import abstractmethod
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from opentelemetry.proto.logs.v1 import logs_pb2
from opentelemetry.sdk.trace import ReadableSpan
from opentelemetry.sdk.trace.export import SpanExporter, SpanExportResult
from pydantic import Field, PrivateAttr, model_validator

from agentready.core.base import BaseConfig

_current_logger: Logger | None = None


class _LoggerProxy:
    """Forwards attribute access to the configured Logger.

    Before setup_logger() runs, every method is a no-op so modules
    can log at import time without caring whether logging is up.
    """

    def __getattr__(self, name):
        if _current_logger is None:
            def _noop(*args, **kwargs):  # noqa: ARG001
                pass
            return _noop
        return getattr(_current_logger, name)

    def __enter__(self):
        if _current_logger is None:
            return self
        return _current_logger.__enter__()

    def __exit__(self, *args):
        if _current_logger is None:
            return False
        return _current_logger.__exit__(*args)


# Imported everywhere as `from agentready.core.log import logger`
logger = _LoggerProxy()

# Span attributes that are instrumentation internals, not user data
_INTERNAL_KEYS = frozenset({
    "code.filepath", "code.lineno", "code.function",
    "logfire.msg", "logfire.level_num", "logfire.span_type",
    "logfire.msg_template", "logfire.json_schema",
})
_INTERNAL_PREFIXES = ("otel.", "telemetry.", "service.", "process.")


class LevelFilteringExporter(SpanExporter):
    """Span exporter that drops spans below a minimum level."""

    # Level name → OpenTelemetry severity number
    _level_thresholds = {
        'spew': logs_pb2.SEVERITY_NUMBER_TRACE,
        'trace': logs_pb2.SEVERITY_NUMBER_TRACE3,
        'debug': logs_pb2.SEVERITY_NUMBER_DEBUG,
        'info': logs_pb2.SEVERITY_NUMBER_INFO,
        'warn': logs_pb2.SEVERITY_NUMBER_WARN,
        'error': logs_pb2.SEVERITY_NUMBER_ERROR,
        'fatal': logs_pb2.SEVERITY_NUMBER_FATAL,
    }

    def __init__(self, exporter: SpanExporter, min_level: str | None):
        self._exporter = exporter
        self._min_severity = self._level_thresholds.get(
            (min_level or 'info').lower(), logs_pb2.SEVERITY_NUMBER_INFO
        )

    @classmethod
    def level_name(cls, level_num: int) -> str:
        """Map a severity number back to the closest level name."""
        for name in ('fatal', 'error', 'warn', 'info', 'debug', 'trace', 'spew'):
            if level_num >= cls._level_thresholds[name]:
                return name
        return 'unknown'

    def export(self, spans: list[ReadableSpan]) -> SpanExportResult:
        kept = [
            span for span in spans
            if (span.attributes or {}).get(
                'logfire.level_num', logs_pb2.SEVERITY_NUMBER_INFO
            ) >= self._min_severity
        ]
        if kept:
            return self._exporter.export(kept)
        return SpanExportResult.SUCCESS

    def shutdown(self) -> None:
        self._exporter.shutdown()

    def force_flush(self, timeout_millis: int = 30000) -> bool:
        return self._exporter.force_flush(timeout_millis)


class Sink(BaseConfig):
    """One log output destination.

    Sinks are closed through the BaseCloseable cascade when the
    owning Logger closes.
    """

    enabled: bool = Field(default=True, description="Enable this sink")
    level: str | None = Field(
        default=None,
        description=(
            "Minimum level for this sink; inherits Logger.level when "
            "unset. Valid: spew, trace, debug, info, warn, error, fatal"
        ),
    )
    escape_special_characters: bool = Field(
        default=False,
        description="Escape newlines/tabs so each record is one line",
    )
    format_template: str | None = Field(
        default=None,
        description=(
            "Text template, e.g. '{timestamp} [{level}] {message}'. "
            "None writes OpenTelemetry JSON"
        ),
    )

    _processor: Any = PrivateAttr(default=None)

    @staticmethod
    def _escape(text: str) -> str:
        return (text
            .replace('\\', '\\\\')
            .replace('\n', '\\n')
            .replace('\r', '\\r')
            .replace('\t', '\\t')
        )

    @staticmethod
    def _span_fields(span) -> dict:
        """Template fields available to format_template."""
        attrs = span.attributes or {}
        filepath = attrs.get("code.filepath", "")
        lineno = attrs.get("code.lineno", "")
        return {
            'timestamp': datetime.fromtimestamp(span.start_time / 1e9, tz=UTC),
            'level': LevelFilteringExporter.level_name(
                attrs.get("logfire.level_num", logs_pb2.SEVERITY_NUMBER_INFO)
            ),
            'message': attrs.get("logfire.msg", span.name),
            'filepath': filepath,
            'lineno': lineno,
            'location': f"{filepath}:{lineno}" if filepath else "",
            'function': attrs.get("code.function", ""),
        }

    def _format_span(self, span) -> str:
        if not self.format_template:
            return span.to_json() + os.linesep

        fields = self._span_fields(span)
        if self.escape_special_characters:
            fields['message'] = self._escape(fields['message'])

        try:
            line = self.format_template.format(**fields)
        except KeyError as e:
            return f"ERROR: Invalid template field {e}\n"

        extras = {
            key: value
            for key, value in (span.attributes or {}).items()
            if key not in _INTERNAL_KEYS
            and not key.startswith(_INTERNAL_PREFIXES)
        }
        if extras:
            rendered = ' '.join(
                f"{k}={v!r}" for k, v in sorted(extras.items())
            )
            line = f"{line} │ {rendered}"

        return line + '\n'

    @abstractmethod
    def create_processor(self, log_root: Path, scan_name: str):
        """Create the span processor for this sink, or None.

        Args:
            log_root: Root directory for log files
            scan_name: Name of the current scan
        """

    def close(self):
        if self._processor:
            with contextlib.suppress(Exception):
                self._processor.shutdown()


class ConsoleSink(Sink):
    """Console output, configured through logfire.configure()."""

    verbose: bool = Field(default=False, description="Show span details")
    colors: str = Field(
        default="auto", description="Color mode: auto, always, never"
    )

    def create_processor(self, log_root: Path, scan_name: str):
        return None


class OTLPSink(Sink):
    """OTLP export to a collector (SigNoz, Jaeger, ...)."""

    enabled: bool = Field(default=False, description="Enable OTLP export")
    endpoint: str = Field(
        default="http://localhost:4317", description="OTLP gRPC endpoint"
    )
    insecure: bool = Field(default=True, description="Skip TLS")
    headers: dict[str, str] = Field(
        default_factory=dict, description="Authentication headers"
    )

    def create_processor(self, log_root: Path, scan_name: str):
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import (
            OTLPSpanExporter,
        )
        from opentelemetry.sdk.trace.export import BatchSpanProcessor

        exporter = OTLPSpanExporter(
            endpoint=self.endpoint,
            insecure=self.insecure,
            headers=self.headers or None,
        )
        if self.level:
            exporter = LevelFilteringExporter(exporter, self.level)
        return BatchSpanProcessor(exporter)


class FileSink(Sink):
    """Append log records to a file."""

    enabled: bool = Field(default=False, description="Enable file logging")
    path: str = Field(
        default="{log_root}/{scan_name}/agentready.log",
        description="Log file path; {log_root} and {scan_name} expand",
    )

    _file: Any = PrivateAttr(default=None)

    def create_processor(self, log_root: Path, scan_name: str):
        from opentelemetry.sdk.trace.export import (
            BatchSpanProcessor,
            ConsoleSpanExporter,
        )

        log_path = Path(self.path.format(log_root=log_root, scan_name=scan_name))
        log_path.parent.mkdir(parents=True, exist_ok=True)

        # Line buffered; stays open until close()
        self._file = open(log_path, "a", buffering=1, encoding="utf-8")  # noqa: SIM115

        exporter = ConsoleSpanExporter(out=self._file, formatter=self._format_span)
        return BatchSpanProcessor(LevelFilteringExporter(exporter, self.level))

    def close(self):
        # Processor first so pending spans reach the file
        super().close()
        if self._file and not self._file.closed:
            with contextlib.suppress(OSError):
                self._file.flush()
                self._file.close()


class LogfireSink(Sink):
    """logfire.dev cloud export."""

    enabled: bool = Field(
        default=False, description="Send telemetry to logfire.dev"
    )
    token: str | None = Field(
        default=None, description="API token (or LOGFIRE_TOKEN)"
    )

    def create_processor(self, log_root: Path, scan_name: str):
        return None


class Logger(BaseConfig):
    """Logger with composable sinks.

    Closing the logger closes every sink through the BaseCloseable
    cascade.
    """

    level: str = Field(
        default="info",
        description=(
            "Default level for sinks that set none. "
            "Valid: spew, trace, debug, info, warn, error, fatal"
        ),
    )
    console: ConsoleSink = Field(default_factory=ConsoleSink)
    otlp: OTLPSink = Field(default_factory=OTLPSink)
    file: FileSink = Field(default_factory=FileSink)
    logfire: LogfireSink = Field(default_factory=LogfireSink)

    @model_validator(mode='after')
    def _cascade_level_to_sinks(self) -> 'Logger':
        for sink in (self.console, self.file):
            if sink.level is None:
                sink.level = self.level
        return self

    def setup(self, log_root: Path, scan_name: str):
        """Create processors for enabled sinks and configure logfire.

        Args:
            log_root: Root directory for log files
            scan_name: Name of the current scan
        """
        import logfire
        from logfire import ConsoleOptions

        for sink in (self.console, self.otlp, self.file, self.logfire):
            if sink.enabled:
                sink._processor = sink.create_processor(log_root, scan_name)

        processors = [
            sink._processor
            for sink in (self.otlp, self.file)
            if sink.enabled and sink._processor
        ]

        console = (
            ConsoleOptions(
                min_log_level=self.console.level,
                verbose=self.console.verbose,
                colors=self.console.colors,
                include_timestamps=True,
            )
            if self.console.enabled
            else False
        )

        logfire.configure(
            service_name=f"agentready-{scan_name}",
            send_to_logfire=self.logfire.enabled,
            token=self.logfire.token if self.logfire.enabled else None,
            console=console,
            additional_span_processors=processors or None,
        )

    def _log_at(self, level: str, msg: str, kwargs: dict):
        import logfire
        logfire.log(
            level=LevelFilteringExporter._level_thresholds[level],
            msg_template=msg,
            attributes=kwargs or None,
        )

    def spew(self, msg: str, **kwargs):
        """Below trace; per-check detail during scoring."""
        self._log_at('spew', msg, kwargs)

    def trace(self, msg: str, **kwargs):
        self._log_at('trace', msg, kwargs)

    def debug(self, msg: str, **kwargs):
        import logfire
        logfire.debug(msg, **kwargs)

    def info(self, msg: str, **kwargs):
        import logfire
        logfire.info(msg, **kwargs)

    def warn(self, msg: str, **kwargs):
        import logfire
        logfire.warn(msg, **kwargs)

    warning = warn

    def error(self, msg: str, **kwargs):
        import logfire
        logfire.error(msg, **kwargs)

    def span(self, msg: str, **kwargs):
        """Span context manager: ``with logger.span("scoring"): ...``"""
        import logfire
        return logfire.span(msg, **kwargs)

    def __getattr__(self, name):
        import logfire
        return getattr(logfire, name)


def setup_logger(
    log_root: Path,
    scan_name: str,
    console: ConsoleSink | None = None,
    otlp: OTLPSink | None = None,
    file: FileSink | None = None,
    logfire: LogfireSink | None = None,
    level: str = "info",
) -> Logger:
    """Create and install the global logger.

    Called by Config after it loads; tests call it directly.

    Returns:
        The installed Logger
    """
    global _current_logger

    _current_logger = Logger(
        level=level,
        console=console or ConsoleSink(),
        otlp=otlp or OTLPSink(),
        file=file or FileSink(),
        logfire=logfire or LogfireSink(),
    )
    _current_logger.setup(log_root, scan_name)
    return _current_logger


__all__ = [
    "logger",
    "Logger",
    "Sink",
    "ConsoleSink",
    "FileSink",
    "OTLPSink",
    "LogfireSink",
    "LevelFilteringExporter",
    "setup_logger",
]
