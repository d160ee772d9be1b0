from __future__ import annotations

import os
from typing import BinaryIO, Iterator, TypeVar
from warnings import warn

from redo_core.records import LogBlock
from .const import ERRORS

R = TypeVar("R")


class TruncatedRecordWarning(UserWarning):
    """A record was cut short by end of file."""


class DumpError(Exception):
    code = ""

    def __init__(self, detail: str = ""):
        self.detail = detail
        msg = ERRORS[self.code]
        super().__init__(f"{msg}: {detail}" if detail else msg)


class OpenFailure(DumpError):
    code = "E_OPEN"


class ShortRead(DumpError):
    code = "E_SHORT_READ"

    def __init__(self, expected: int, got: int, offset: int | None = None, data: bytes = b""):
        self.expected = expected
        self.got = got
        self.data = data
        self.offset = offset
        where = f" at offset {offset}" if offset is not None else ""
        super().__init__(f"expected {expected} bytes{where}, got {got}")

    @property
    def clean_eof(self) -> bool:
        return self.got == 0


class StreamError(DumpError):
    code = "E_STREAM"


def _tell(f: BinaryIO) -> int | None:
    try:
        return f.tell()
    except OSError:
        return None


def read_exact(f: BinaryIO, n: int) -> bytes:
    """Read exactly n bytes from f.

    Raises ShortRead if fewer than n bytes are available (zero included) and
    StreamError for any other I/O failure.
    """
    start = _tell(f)
    try:
        data = f.read(n)
    except OSError as e:
        raise StreamError(str(e)) from e
    if len(data) != n:
        raise ShortRead(n, len(data), start, data)
    return data


def read_record(f: BinaryIO, record_type: type[R]) -> R:
    return record_type.from_bytes(read_exact(f, record_type.SIZE))


def skip(f: BinaryIO, n: int) -> int:
    """Advance the stream by n bytes and return the new position."""
    try:
        return f.seek(n, os.SEEK_CUR)
    except OSError as e:
        raise StreamError(str(e)) from e


def iter_log_blocks(f: BinaryIO) -> Iterator[tuple[int, LogBlock]]:
    """Yield (offset, block) for every whole log block left in the stream.

    Clean EOF ends the scan. A torn trailing block is not yielded.
    """
    while True:
        try:
            start = _tell(f)
            block = read_record(f, LogBlock)
        except ShortRead as e:
            if not e.clean_eof:
                warn(f"Truncated log block at offset {e.offset}: {e.got} of {e.expected} bytes", TruncatedRecordWarning)
            return
        yield start, block
