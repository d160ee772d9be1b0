"""Redo log inspector - dump an ib_logfile as text."""
from __future__ import annotations

from pathlib import Path

import click

from .logic import dump_path
from .streams import DumpError


@click.command()
@click.argument("logfile", envvar="REDO_LOGFILE", type=click.Path(path_type=Path))
@click.option("--strict", is_flag=True, help="Fail instead of printing zeroed fields for a truncated header or checkpoint")
def main(logfile: Path, strict: bool) -> None:
    """Print the header, checkpoints and log blocks of LOGFILE."""
    try:
        dump_path(logfile, click.echo, strict=strict)
    except DumpError as e:
        # Fail closed with a single-line reason, no stack trace.
        click.echo(f"FATAL: {e}", err=True)
        raise SystemExit(1)


if __name__ == "__main__":
    main()
