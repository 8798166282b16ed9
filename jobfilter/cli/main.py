from __future__ import annotations

from pathlib import Path

import click
import rich_click

import jobfilter

from .context import OUTPUT_FORMATS, CLIContext
from .logging import configure_logging, restore_logging


@click.group(
    name="jobfilter",
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"]},
    cls=rich_click.RichGroup,
)
@click.option(
    "--output",
    type=click.Choice(OUTPUT_FORMATS),
    default="table",
)
@click.option("--json", "json_flag", is_flag=True, help="Alias for --output json.")
@click.option("-q", "--quiet", is_flag=True, help="Suppress non-essential stderr output.")
@click.option("-v", "verbose", count=True, help="Increase verbosity (-v, -vv).")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Parser config file (TOML). Defaults to $JOBFILTER_CONFIG.",
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Also write debug logs to this file.",
)
@click.version_option(version=jobfilter.__version__, prog_name="jobfilter")
@click.pass_context
def cli(
    click_ctx: click.Context,
    *,
    output: str,
    json_flag: bool,
    quiet: bool,
    verbose: int,
    config_path: Path | None,
    log_file: Path | None,
) -> None:
    """Parse and evaluate job / node filter expressions."""
    if click_ctx.invoked_subcommand is None:
        click.echo(click_ctx.get_help())
        raise click.exceptions.Exit(0)

    click_ctx.obj = CLIContext(
        output="json" if json_flag else output,  # type: ignore[arg-type]
        quiet=quiet,
        verbosity=verbose,
        config_path=config_path,
        log_file=log_file,
    )

    previous_logging = configure_logging(verbosity=verbose, log_file=log_file)
    click_ctx.call_on_close(lambda: restore_logging(previous_logging))


# Register commands
from .commands.coerce_cmd import coerce_cmd as _coerce_cmd  # noqa: E402
from .commands.match_cmd import match_cmd as _match_cmd  # noqa: E402
from .commands.parse_cmd import parse_cmd as _parse_cmd  # noqa: E402
from .commands.preset_cmds import presets_cmd as _presets_cmd  # noqa: E402

cli.add_command(_parse_cmd)
cli.add_command(_match_cmd)
cli.add_command(_coerce_cmd)
cli.add_command(_presets_cmd)
