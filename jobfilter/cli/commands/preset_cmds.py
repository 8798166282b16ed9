from __future__ import annotations

from pathlib import Path

import click
import rich_click

from jobfilter.exceptions import FilterParseError
from jobfilter.presets import DEFAULT_PRESETS, GLOBAL_VIEW, load_presets, presets_for

from ..context import CLIContext
from ..options import output_options
from ..runner import CommandOutput, run_command


@click.command(name="presets", cls=rich_click.RichCommand)
@click.option(
    "--view",
    type=click.Choice(["jobs", "nodes", GLOBAL_VIEW]),
    default=None,
    help="Only presets usable in this view (global presets are always included).",
)
@click.option(
    "--file",
    "preset_file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Read presets from a JSON file instead of the built-in list.",
)
@output_options
@click.pass_obj
def presets_cmd(ctx: CLIContext, view: str | None, preset_file: Path | None) -> None:
    """List filter presets and check that each one parses."""

    def fn(ctx: CLIContext, warnings: list[str]) -> CommandOutput:
        presets = load_presets(preset_file) if preset_file is not None else list(DEFAULT_PRESETS)
        if view is not None:
            presets = presets_for(view, presets)

        parser = ctx.get_parser()
        rows = []
        for preset in presets:
            try:
                clauses = len(preset.to_filter(parser, expand_env=False).expressions)
            except FilterParseError as exc:
                warnings.append(f"Preset '{preset.name}' does not parse: {exc}")
                clauses = None
            rows.append(
                {
                    "name": preset.name,
                    "view": preset.view_type,
                    "filter": preset.filter_str,
                    "clauses": clauses,
                    "description": preset.description,
                }
            )
        return CommandOutput(
            data=rows,
            warnings=warnings,
            columns=["name", "view", "filter", "clauses", "description"],
        )

    run_command(ctx, command="presets", fn=fn)
