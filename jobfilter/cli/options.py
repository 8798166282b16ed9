from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

import click

from .context import OUTPUT_FORMATS, CLIContext

F = TypeVar("F", bound=Callable[..., object])


def _override(attr: str, convert: Callable[[Any], Any]) -> Callable[..., Any]:
    """Build a callback that copies a set option onto the shared CLIContext."""

    def callback(ctx: click.Context, _param: click.Parameter, value: Any) -> Any:
        # None / False mean "not given here": keep the group-level setting.
        if value is None or value is False:
            return value
        obj = ctx.find_object(CLIContext)
        if obj is not None:
            setattr(obj, attr, convert(value))
        return value

    return callback


_SUBCOMMAND_OPTIONS = (
    click.option(
        "--output",
        type=click.Choice(OUTPUT_FORMATS),
        default=None,
        help="Output format for this command only.",
        callback=_override("output", str),
        expose_value=False,
    ),
    click.option(
        "--json",
        is_flag=True,
        help="Same as --output json.",
        callback=_override("output", lambda _flag: "json"),
        expose_value=False,
    ),
    click.option(
        "-q",
        "--quiet",
        is_flag=True,
        help="Suppress warnings on stderr for this command.",
        callback=_override("quiet", bool),
        expose_value=False,
    ),
)


def output_options(fn: F) -> F:
    """Accept the group's output switches after the subcommand name too."""
    for option in reversed(_SUBCOMMAND_OPTIONS):
        fn = option(fn)
    return fn
