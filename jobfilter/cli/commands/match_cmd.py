from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any

import click
import rich_click

from jobfilter.dates import parse_date_range
from jobfilter.evaluator import select
from jobfilter.exceptions import DateRangeError
from jobfilter.fields import is_date_field
from jobfilter.presets import find_preset

from ..context import CLIContext
from ..errors import CLIError
from ..options import output_options
from ..runner import CommandOutput, run_command

logger = logging.getLogger(__name__)


def read_records(source: str) -> list[dict[str, Any]]:
    """Read records from a JSON array or JSON-lines file ('-' for stdin)."""
    try:
        text = sys.stdin.read() if source == "-" else Path(source).read_text(encoding="utf-8")
    except OSError as exc:
        raise CLIError(f"Cannot read {source}: {exc}", exit_code=2, error_type="io_error") from exc

    text = text.strip()
    if not text:
        return []

    try:
        if text.startswith("["):
            data = json.loads(text)
        else:
            data = [json.loads(line) for line in text.splitlines() if line.strip()]
    except json.JSONDecodeError as exc:
        raise CLIError.usage(
            f"Invalid JSON in {source}: {exc}",
            hint="Pass a JSON array of objects or one JSON object per line.",
        ) from exc

    if not isinstance(data, list) or not all(isinstance(row, dict) for row in data):
        raise CLIError.usage(f"Records in {source} must be JSON objects.")
    return data


@click.command(name="match", cls=rich_click.RichCommand)
@click.argument("filter_string", metavar="[FILTER]", required=False)
@click.option(
    "--file",
    "source",
    default="-",
    show_default=True,
    help="JSON array or JSON-lines file with records ('-' for stdin).",
)
@click.option("--preset", "preset_name", default=None, help="Use a built-in preset by name.")
@click.option("--or", "use_or", is_flag=True, help="Combine clauses with OR instead of AND.")
@click.option("--check", is_flag=True, help="Exit with code 1 when no record matches.")
@click.option(
    "--since",
    "since",
    default=None,
    help="Date range such as 'last 7 days' or 2024-01-01..2024-01-31.",
)
@click.option(
    "--date-field",
    default="SubmitTime",
    show_default=True,
    help="Record key that --since is checked against.",
)
@output_options
@click.pass_obj
def match_cmd(
    ctx: CLIContext,
    filter_string: str | None,
    source: str,
    preset_name: str | None,
    use_or: bool,
    check: bool,
    since: str | None,
    date_field: str,
) -> None:
    """Print the records that match FILTER.

    With --since, records must also have a DATE_FIELD inside that range, and
    FILTER may be left out.

    Example: jobfilter match "state=running cpus>=8" --file jobs.json
    """

    def fn(ctx: CLIContext, warnings: list[str]) -> CommandOutput:
        if filter_string is not None and preset_name is not None:
            raise CLIError.usage("Give either a FILTER argument or --preset NAME, not both.")
        if filter_string is None and preset_name is None and since is None:
            raise CLIError.usage("Give a FILTER argument, --preset NAME or --since RANGE.")

        date_range = None
        if since is not None:
            try:
                date_range = parse_date_range(since, field=date_field)
            except DateRangeError as exc:
                raise CLIError.usage(
                    f"Invalid --since value: {exc}",
                    hint="Try 'today', 'last 24h', 'last 7 days' or 2024-01-01..2024-01-31.",
                ) from exc
            if not is_date_field(date_field):
                warnings.append(f"Field '{date_field}' does not look like a timestamp field.")

        parser = ctx.get_parser()
        if preset_name is not None:
            preset = find_preset(preset_name)
            if preset is None:
                raise CLIError.usage(
                    f"Unknown preset '{preset_name}'.",
                    hint="Run 'jobfilter presets' to list them.",
                )
            flt = preset.to_filter(parser)
        else:
            flt = parser.parse(filter_string or "")
        if use_or:
            flt = flt.with_logic("OR")

        records = read_records(source)
        matched = select(records, flt)
        if date_range is not None:
            matched = [record for record in matched if date_range.matches(record)]
        logger.info(f"{len(matched)} of {len(records)} record(s) matched {flt.to_string()!r}")
        if flt.is_empty and date_range is None:
            warnings.append("Empty filter: every record matches.")

        return CommandOutput(
            data={"count": len(matched), "total": len(records), "records": matched},
            warnings=warnings,
            exit_code=1 if check and not matched else 0,
        )

    run_command(ctx, command="match", fn=fn)
