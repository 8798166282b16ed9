"""
Parser configuration.

The alias table is handed to ``FilterParser`` as an explicit value. It can be
extended from a TOML file::

    # ~/.config/jobfilter/config.toml
    replace_aliases = false      # true drops the built-in aliases

    [aliases]
    submit = "SubmitTime"
    gpus = "GRES"
"""

from __future__ import annotations

import logging
import os
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import Field, ValidationError, field_validator

from .exceptions import ConfigError
from .fields import DEFAULT_FIELD_ALIASES
from .schema import JobFilterModel

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "JOBFILTER_CONFIG"


class ParserConfig(JobFilterModel):
    """Settings consumed by ``FilterParser``."""

    field_aliases: dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_FIELD_ALIASES), alias="fieldAliases"
    )

    @field_validator("field_aliases")
    @classmethod
    def _lowercase_aliases(cls, value: dict[str, str]) -> dict[str, str]:
        return {alias.lower(): canonical for alias, canonical in value.items()}

    def with_aliases(self, aliases: Mapping[str, str], *, replace: bool = False) -> ParserConfig:
        """Return a copy with ``aliases`` merged over (or replacing) the current table."""
        merged = {} if replace else dict(self.field_aliases)
        merged.update(aliases)
        return ParserConfig(field_aliases=merged)


def default_config_path() -> Path | None:
    raw = os.getenv(CONFIG_ENV_VAR, "").strip()
    return Path(raw).expanduser() if raw else None


def load_config(path: Path | None = None) -> ParserConfig:
    """
    Load a ``ParserConfig`` from a TOML file.

    Falls back to ``$JOBFILTER_CONFIG`` when no path is given, and to the
    built-in defaults when neither exists.

    Raises:
        ConfigError: If the file is not valid TOML or has the wrong shape.
    """
    if path is None:
        path = default_config_path()
    if path is None:
        return ParserConfig()
    if not path.exists():
        logger.debug(f"Config file {path} not found; using defaults")
        return ParserConfig()

    try:
        with path.open("rb") as f:
            data: dict[str, Any] = tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc

    aliases = data.get("aliases", {})
    replace = data.get("replace_aliases", False)
    if not isinstance(replace, bool):
        raise ConfigError(f"'replace_aliases' must be true or false in {path}")

    try:
        extra = ParserConfig(field_aliases=aliases)
    except ValidationError as exc:
        raise ConfigError(f"Invalid [aliases] table in {path}: {exc}") from exc

    config = ParserConfig().with_aliases(extra.field_aliases, replace=replace)
    logger.debug(f"Loaded {len(extra.field_aliases)} field alias(es) from {path}")
    return config
