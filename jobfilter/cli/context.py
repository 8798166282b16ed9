from __future__ import annotations

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, get_args

from jobfilter.config import ParserConfig, default_config_path, load_config
from jobfilter.exceptions import ConfigError, FilterParseError, JobFilterError
from jobfilter.parser import FilterParser

from .errors import CLIError
from .results import CommandMeta, CommandResult, ErrorInfo

OutputFormat = Literal["table", "json"]
OUTPUT_FORMATS: tuple[str, ...] = get_args(OutputFormat)


@dataclass
class CLIContext:
    output: OutputFormat
    quiet: bool
    verbosity: int
    config_path: Path | None
    log_file: Path | None

    _config: ParserConfig | None = field(default=None, repr=False)
    _parser: FilterParser | None = field(default=None, repr=False)

    def effective_config_path(self) -> Path | None:
        return self.config_path or default_config_path()

    def load_config(self) -> ParserConfig:
        if self._config is None:
            self._config = load_config(self.effective_config_path())
        return self._config

    def get_parser(self) -> FilterParser:
        if self._parser is None:
            self._parser = FilterParser(self.load_config())
        return self._parser


def exit_code_for_exception(exc: Exception) -> int:
    if isinstance(exc, CLIError):
        return exc.exit_code
    if isinstance(exc, (FilterParseError, ConfigError)):
        return 2
    return 1


def error_info_for_exception(exc: Exception) -> ErrorInfo:
    if isinstance(exc, CLIError):
        return ErrorInfo(type=exc.error_type, message=exc.message, hint=exc.hint, details=exc.details)
    if isinstance(exc, FilterParseError):
        return ErrorInfo(
            type="parse_error",
            message=str(exc),
            hint="Clauses look like field=value, field>=value or field in (a,b).",
            details={"clause": exc.clause, "cause": exc.__class__.__name__},
        )
    if isinstance(exc, ConfigError):
        return ErrorInfo(type="config_error", message=str(exc))
    if isinstance(exc, JobFilterError):
        return ErrorInfo(type=exc.__class__.__name__, message=str(exc))
    return ErrorInfo(type="internal_error", message=str(exc) or exc.__class__.__name__)


def build_result(
    *,
    ok: bool,
    command: str,
    started_at: float,
    data: Any | None,
    warnings: list[str],
    config_path: Path | None,
    columns: list[str] | None = None,
    error: ErrorInfo | None = None,
) -> CommandResult:
    duration_ms = int(max(0.0, (time.time() - started_at) * 1000))
    meta = CommandMeta(
        duration_ms=duration_ms,
        config_path=str(config_path) if config_path is not None else None,
        columns=columns,
    )
    return CommandResult(
        ok=ok,
        command=command,
        data=data,
        warnings=warnings,
        meta=meta,
        error=error,
    )
