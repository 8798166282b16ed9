from __future__ import annotations

import math
from typing import Any

import click
import rich_click

from jobfilter.values import ValueKind, coerce_value, to_display

from ..context import CLIContext
from ..options import output_options
from ..runner import CommandOutput, run_command


def _json_value(kind: ValueKind, value: Any) -> Any:
    if kind in (ValueKind.INTEGER, ValueKind.MEMORY):
        return int(value)
    if kind is ValueKind.FLOAT and not math.isfinite(value):
        # no JSON literal for inf or nan; "display" still shows it
        return None
    if kind in (ValueKind.FLOAT, ValueKind.BOOLEAN, ValueKind.STRING):
        return value
    # durations
    return value.total_seconds()


@click.command(name="coerce", cls=rich_click.RichCommand)
@click.argument("value")
@output_options
@click.pass_obj
def coerce_cmd(ctx: CLIContext, value: str) -> None:
    """Show how VALUE is typed when used on the right of a clause.

    Durations are reported in seconds.
    """

    def fn(_ctx: CLIContext, _warnings: list[str]) -> CommandOutput:
        coercion = coerce_value(value)
        return CommandOutput(
            data={
                "raw": coercion.raw,
                "kind": coercion.kind.value,
                "value": _json_value(coercion.kind, coercion.value),
                "display": to_display(coercion.value),
            }
        )

    run_command(ctx, command="coerce", fn=fn)
