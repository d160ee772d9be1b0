from __future__ import annotations

from pathlib import Path
from typing import BinaryIO, Callable
from warnings import warn

from redo_core.protocol import RESERVED_GAP_LEN
from redo_core.records import Checkpoint, FileHeader
from .render import render_checkpoint, render_header, render_log_block
from .streams import (
    OpenFailure,
    ShortRead,
    TruncatedRecordWarning,
    iter_log_blocks,
    read_record,
    skip,
)

Echo = Callable[[str], None]


def _emit(echo: Echo, lines: list[str]) -> None:
    for line in lines:
        echo(line)


def _read_or_zero(f: BinaryIO, record_type, what: str, strict: bool, summary: dict):
    try:
        return read_record(f, record_type)
    except ShortRead as e:
        if strict:
            raise
        # Best effort: bytes past the short read decode as zeroes and the dump goes on.
        warn(f"Truncated {what}: {e}; missing bytes rendered as zero", TruncatedRecordWarning)
        summary["zeroed_records"] += 1
        return record_type.from_bytes(e.data.ljust(record_type.SIZE, b"\0"))


def dump_stream(f: BinaryIO, echo: Echo, strict: bool = False) -> dict:
    """Decode and render header, both checkpoints and every log block of f.

    f must be positioned at the start of the log file. With strict=True a
    truncated header or checkpoint raises ShortRead instead of rendering an
    all-zero record. StreamError is never caught here.
    """
    summary = {"blocks": 0, "zeroed_records": 0}

    header = _read_or_zero(f, FileHeader, "file header", strict, summary)
    _emit(echo, render_header(header))

    for title in ("first", "second"):
        cp = _read_or_zero(f, Checkpoint, f"{title} checkpoint", strict, summary)
        _emit(echo, render_checkpoint(cp, title))
    echo("")
    echo("")

    # 512 + 512 + 512 = 1536 read so far; log blocks start at 2048
    pos = skip(f, RESERVED_GAP_LEN)
    echo(f"Current position: {pos}")

    for i, (offset, block) in enumerate(iter_log_blocks(f)):
        _emit(echo, render_log_block(i, offset, block))
        summary["blocks"] += 1

    return summary


def dump_path(path: str | Path, echo: Echo, strict: bool = False) -> dict:
    """Open the log file at path and dump it. Raises OpenFailure before any output."""
    path = Path(path)
    try:
        f = open(path, "rb")
    except OSError as e:
        raise OpenFailure(f"{path}: {e.strerror or e}") from e

    with f:
        echo(f"{path} opened")
        return dump_stream(f, echo, strict=strict)
