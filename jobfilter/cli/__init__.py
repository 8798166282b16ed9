from __future__ import annotations

from .main import cli


def main() -> None:
    cli()


__all__ = ["cli", "main"]
