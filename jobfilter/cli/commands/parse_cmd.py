from __future__ import annotations

import click
import rich_click

from jobfilter.fields import is_date_field, is_duration_field, is_memory_field
from jobfilter.models import FilterExpression
from jobfilter.values import ValueKind

from ..context import CLIContext
from ..options import output_options
from ..runner import CommandOutput, run_command

_ORDERED_OPERATORS = frozenset([">", "<", ">=", "<="])
_MEMORY_KINDS = frozenset([ValueKind.INTEGER, ValueKind.MEMORY])
_DURATION_KINDS = frozenset([ValueKind.CLUSTER_DURATION, ValueKind.DURATION])


def _kind_warning(expr: FilterExpression) -> str | None:
    """Flag ordered comparisons whose value will fall back to text ordering."""
    if expr.operator.value not in _ORDERED_OPERATORS:
        return None
    if is_memory_field(expr.field) and expr.kind not in _MEMORY_KINDS:
        return f"'{expr}' compares {expr.field} as text; use a size such as 4G."
    if is_duration_field(expr.field) and expr.kind not in _DURATION_KINDS:
        return (
            f"'{expr}' compares {expr.field} as text; "
            "use a duration such as 2:00:00 or 1h30m."
        )
    if is_date_field(expr.field):
        return f"'{expr}' compares dates as text; 'match --since' understands date ranges."
    return None


@click.command(name="parse", cls=rich_click.RichCommand)
@click.argument("filter_string", metavar="FILTER")
@click.option("--or", "use_or", is_flag=True, help="Combine clauses with OR instead of AND.")
@output_options
@click.pass_obj
def parse_cmd(ctx: CLIContext, filter_string: str, use_or: bool) -> None:
    """Parse FILTER and show its clauses.

    Example: jobfilter parse "state in (running,pending) memory>4G"
    """

    def fn(ctx: CLIContext, warnings: list[str]) -> CommandOutput:
        parser = ctx.get_parser()
        flt = parser.parse(filter_string, logic="OR" if use_or else "AND")
        known = set(parser.aliases.values())
        for expr in flt.expressions:
            if expr.field not in known:
                warnings.append(
                    f"Field '{expr.field}' is not a known alias; records need that exact key."
                )
            hint = _kind_warning(expr)
            if hint is not None:
                warnings.append(hint)
        return CommandOutput(data={"filter": flt.to_dict()}, warnings=warnings)

    run_command(ctx, command="parse", fn=fn)
