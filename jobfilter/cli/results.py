from __future__ import annotations

from typing import Any

from pydantic import Field

from jobfilter.schema import JobFilterModel


class ErrorInfo(JobFilterModel):
    type: str
    message: str
    hint: str | None = None
    details: dict[str, Any] | None = None


class CommandMeta(JobFilterModel):
    duration_ms: int = Field(..., alias="durationMs")
    config_path: str | None = Field(None, alias="configPath")
    columns: list[str] | None = None


class CommandResult(JobFilterModel):
    ok: bool
    command: str
    data: Any | None = None
    warnings: list[str] = Field(default_factory=list)
    meta: CommandMeta
    error: ErrorInfo | None = None
