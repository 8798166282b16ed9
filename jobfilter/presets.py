"""
Named filter presets.

Presets are plain filter strings with a name and the view they apply to
(``jobs``, ``nodes`` or ``all``). Storing user presets is left to the
application; this module provides the built-in catalogue and a reader for
JSON preset files.
"""

from __future__ import annotations

import json
import os
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import TypeAdapter, ValidationError, field_validator, model_validator

from .exceptions import ConfigError
from .parser import FilterParser
from .schema import JobFilterModel

if TYPE_CHECKING:
    from .models import Filter

GLOBAL_VIEW = "all"


class FilterPreset(JobFilterModel):
    name: str
    description: str = ""
    view_type: str = GLOBAL_VIEW
    filter_str: str
    is_global: bool = False

    @field_validator("name")
    @classmethod
    def _require_name(cls, value: str) -> str:
        if not value:
            raise ValueError("preset name is required")
        return value

    @model_validator(mode="before")
    @classmethod
    def _default_view(cls, data: Any) -> Any:
        # A preset without a view applies everywhere.
        if isinstance(data, dict) and not data.get("view_type"):
            return {**data, "view_type": GLOBAL_VIEW, "is_global": True}
        return data

    def to_filter(self, parser: FilterParser | None = None, *, expand_env: bool = True) -> Filter:
        """
        Parse the preset into a named ``Filter``.

        ``$USER``-style references are expanded from the environment unless
        ``expand_env`` is false.
        """
        text = os.path.expandvars(self.filter_str) if expand_env else self.filter_str
        return (parser or FilterParser()).parse(
            text, name=self.name, description=self.description or None
        )


_JOB_PRESETS = (
    ("My Jobs", "Show only my jobs", "user=$USER"),
    ("Running Jobs", "Show only running jobs", "state=RUNNING"),
    ("Pending Jobs", "Show only pending jobs", "state=PENDING"),
    ("Failed Jobs", "Show failed and timeout jobs", "state in (FAILED,TIMEOUT)"),
    ("GPU Jobs", "Show jobs on GPU partition", "partition=gpu"),
    ("High Priority", "Show high priority jobs", "priority>1000"),
    ("Large Memory Jobs", "Jobs requiring more than 32GB RAM", "memory>32G"),
    ("Long Running Jobs", "Jobs running longer than 4 hours", "time>4:00:00"),
)

_NODE_PRESETS = (
    ("Available Nodes", "Show idle and mixed nodes", "state in (IDLE,MIXED)"),
    ("Down Nodes", "Show down and drain nodes", "state in (DOWN,DRAIN,DRAINING)"),
    ("GPU Nodes", "Show nodes with GPU resources", "features~gpu"),
    ("High Memory", "Show nodes with >256GB memory", "memory>256000"),
    ("Compute Partition", "Show nodes in compute partition", "partition=compute"),
    ("Super High Memory", "Nodes with more than 512GB RAM", "memory>512G"),
    (
        "Specific Node Pattern",
        "Nodes matching compute node naming pattern",
        "name=~^compute[0-9]{3}$",
    ),
)

_GLOBAL_PRESETS = (
    ("Production", "Filter for production resources", "partition=production"),
    ("Development", "Filter for development resources", "partition in (dev,debug)"),
)


def _build(rows: Iterable[tuple[str, str, str]], view_type: str) -> list[FilterPreset]:
    return [
        FilterPreset(
            name=name,
            description=description,
            view_type=view_type,
            filter_str=filter_str,
            is_global=view_type == GLOBAL_VIEW,
        )
        for name, description, filter_str in rows
    ]


DEFAULT_PRESETS: tuple[FilterPreset, ...] = (
    *_build(_JOB_PRESETS, "jobs"),
    *_build(_NODE_PRESETS, "nodes"),
    *_build(_GLOBAL_PRESETS, GLOBAL_VIEW),
)


def presets_for(
    view_type: str, presets: Sequence[FilterPreset] = DEFAULT_PRESETS
) -> list[FilterPreset]:
    """Presets for one view, followed by the global ones."""
    own = [p for p in presets if p.view_type == view_type and not p.is_global]
    shared = [p for p in presets if p.is_global]
    if view_type == GLOBAL_VIEW:
        return shared
    return own + shared


def find_preset(
    name: str, view_type: str = GLOBAL_VIEW, presets: Sequence[FilterPreset] = DEFAULT_PRESETS
) -> FilterPreset | None:
    """Look up a preset by case-insensitive name among those visible in ``view_type``."""
    wanted = name.lower()
    candidates = presets if view_type == GLOBAL_VIEW else presets_for(view_type, presets)
    for preset in candidates:
        if preset.name.lower() == wanted:
            return preset
    return None


_PRESET_LIST = TypeAdapter(list[FilterPreset])


def load_presets(path: Path) -> list[FilterPreset]:
    """
    Read presets from a JSON array file.

    Raises:
        ConfigError: If the file cannot be read or does not hold valid presets.
    """
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"Cannot read preset file {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in preset file {path}: {exc}") from exc

    try:
        return _PRESET_LIST.validate_python(raw)
    except ValidationError as exc:
        raise ConfigError(f"Invalid presets in {path}: {exc}") from exc
