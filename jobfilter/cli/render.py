from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Any

from rich.console import Console, Group
from rich.table import Table
from rich.text import Text

from .results import CommandResult


@dataclass(frozen=True, slots=True)
class RenderSettings:
    quiet: bool
    verbosity: int


def _error_title(error_type: str) -> str:
    mapping = {
        "usage_error": "Usage error",
        "parse_error": "Invalid filter",
        "config_error": "Configuration error",
        "io_error": "I/O error",
        "internal_error": "Internal error",
    }
    return mapping.get((error_type or "").strip(), "Error")


def _humanize_title(value: str) -> str:
    return value.replace("_", " ").strip().capitalize()


def _format_cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, list):
        if all(isinstance(v, (str, int, float)) for v in value):
            return ", ".join(str(v) for v in value)
        return f"list ({len(value):,} items)"
    if isinstance(value, dict):
        return f"object ({len(value):,} keys)"
    return str(value)


def _table_from_rows(rows: list[dict[str, Any]], columns: list[str] | None = None) -> Table:
    if columns is None:
        columns = []
        for row in rows:
            for key in row:
                if key not in columns:
                    columns.append(key)
    table = Table(show_header=True, header_style="bold")
    for column in columns:
        table.add_column(column)
    for row in rows:
        table.add_row(*(Text(_format_cell(row.get(column))) for column in columns))
    return table


def _kv_table(obj: dict[str, Any]) -> Table:
    table = Table(show_header=True, header_style="bold")
    table.add_column("field")
    table.add_column("value")
    for k, v in obj.items():
        table.add_row(Text(str(k)), Text(_format_cell(v)))
    return table


def _render_filter(data: dict[str, Any]) -> Any:
    expressions = data.get("expressions") or []
    name = data.get("name")
    heading = f"{name} ({data.get('logic')})" if name else f"logic: {data.get('logic')}"
    if not expressions:
        return Text(f"{heading}: empty filter, matches everything")
    return Group(Text(heading, style="bold"), _table_from_rows(expressions))


def _render_human_data(*, command: str, data: Any, columns: list[str] | None) -> Any:
    if command == "parse" and isinstance(data, dict) and isinstance(data.get("filter"), dict):
        return _render_filter(data["filter"])

    if command == "match" and isinstance(data, dict):
        records = data.get("records") or []
        summary = Text(f"{data.get('count', 0):,} of {data.get('total', 0):,} record(s) matched")
        if not records:
            return summary
        return Group(_table_from_rows(records, columns), summary)

    if isinstance(data, list):
        dict_rows = [row for row in data if isinstance(row, dict)]
        return _table_from_rows(dict_rows, columns)

    if isinstance(data, dict):
        sections: list[Any] = []
        scalars = {k: v for k, v in data.items() if not _is_row_list(v)}
        if scalars:
            sections.append(_kv_table(scalars))
        for key, value in data.items():
            if _is_row_list(value):
                sections.append(Text(_humanize_title(key), style="bold"))
                sections.append(_table_from_rows(value, columns))
        return Group(*sections) if len(sections) > 1 else (sections[0] if sections else None)

    if data is None:
        return None
    return Text(str(data))


def _is_row_list(value: Any) -> bool:
    return isinstance(value, list) and bool(value) and all(isinstance(v, dict) for v in value)


def render_result(result: CommandResult, *, settings: RenderSettings) -> int:
    stdout = Console(file=sys.stdout, force_terminal=False)
    stderr = Console(file=sys.stderr, force_terminal=False)

    if not result.ok:
        if result.error is not None:
            stderr.print(
                f"{_error_title(result.error.type)}: {result.error.message}", markup=False
            )
            if result.error.hint and not settings.quiet:
                stderr.print(f"Hint: {result.error.hint}", markup=False)
        else:
            stderr.print("Error")
        return 0

    renderable = _render_human_data(
        command=result.command, data=result.data, columns=result.meta.columns
    )
    if renderable is not None:
        stdout.print(renderable)
    if settings.verbosity >= 1 and not settings.quiet:
        stderr.print(f"({result.meta.duration_ms} ms)")
    return 0
