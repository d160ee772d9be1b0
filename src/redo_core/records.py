"""Fixed-layout redo log records.

Each record declares a LAYOUT table of (field, offset, struct code) entries.
Fields are pulled out one by one at their documented byte offsets, so the
Python object layout never has to match the disk layout. Padding entries
use ``None`` as the field name; their bytes are skipped on decode and
zero-filled on encode.
"""
from __future__ import annotations

import struct
from dataclasses import dataclass, fields
from typing import ClassVar

from .protocol import (
    ARCHIVED_LSN_DISABLED,
    CHECKPOINT_LEN,
    FILE_HEADER_LEN,
    FIRST_BLOCK_MASK,
    FSP_MAGIC_N_VAL,
    LOG_BLOCK_DATA_LEN,
    LOG_BLOCK_LEN,
)

BYTE_ORDER = ">"

Layout = tuple[tuple[str | None, int, str], ...]


def layout_size(layout: Layout) -> int:
    """Return the byte span covered by a layout, checking fields are contiguous."""
    pos = 0
    for name, offset, code in layout:
        if offset != pos:
            raise ValueError(f"Layout gap or overlap at {name or 'padding'}: offset {offset}, expected {pos}")
        pos += struct.calcsize(BYTE_ORDER + code)
    return pos


def _decode(layout: Layout, buf: bytes, size: int) -> dict:
    if len(buf) != size:
        raise ValueError(f"Expected {size} bytes, got {len(buf)}")
    values = {}
    for name, offset, code in layout:
        if name is None:
            continue
        (values[name],) = struct.unpack_from(BYTE_ORDER + code, buf, offset)
    return values


def _encode(layout: Layout, record, size: int) -> bytes:
    buf = bytearray(size)
    for name, offset, code in layout:
        if name is None:
            continue
        struct.pack_into(BYTE_ORDER + code, buf, offset, getattr(record, name))
    return bytes(buf)


class _Record:
    SIZE: ClassVar[int]
    LAYOUT: ClassVar[Layout]

    @classmethod
    def from_bytes(cls, buf: bytes):
        return cls(**_decode(cls.LAYOUT, buf, cls.SIZE))

    @classmethod
    def empty(cls):
        """All-zero record, as produced by decoding a zero-filled block."""
        return cls.from_bytes(bytes(cls.SIZE))

    def to_bytes(self) -> bytes:
        return _encode(self.LAYOUT, self, self.SIZE)

    def as_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class FileHeader(_Record):
    """Log file header, written once when the log file is created."""

    SIZE: ClassVar[int] = FILE_HEADER_LEN
    LAYOUT: ClassVar[Layout] = (
        ("group_number", 0x00, "I"),
        ("first_lsn", 0x04, "Q"),
        ("archived_log_file_number", 0x0C, "I"),
        (None, 0x10, "32x"),  # ibbackup label and creation time
        (None, 0x30, "464x"),
    )

    group_number: int = 0
    first_lsn: int = 0
    archived_log_file_number: int = 0


@dataclass(frozen=True)
class Checkpoint(_Record):
    """One of the two alternating checkpoint records.

    checksum_1 covers bytes 0x00-0x11F; checksum_2 covers 0x08-0x123, i.e.
    everything but the checkpoint number and including checksum_1.
    """

    SIZE: ClassVar[int] = CHECKPOINT_LEN
    LAYOUT: ClassVar[Layout] = (
        ("number", 0x00, "Q"),
        ("lsn", 0x08, "Q"),
        ("offset", 0x10, "I"),
        ("buffer_size", 0x14, "I"),
        ("archived_lsn", 0x18, "Q"),
        (None, 0x20, "256x"),
        ("checksum_1", 0x120, "I"),
        ("checksum_2", 0x124, "I"),
        ("fsp_free_limit", 0x128, "I"),  # MiB, tablespace 0
        ("fsp_magic", 0x12C, "I"),
        (None, 0x130, "208x"),
    )

    number: int = 0
    lsn: int = 0
    offset: int = 0
    buffer_size: int = 0
    archived_lsn: int = 0
    checksum_1: int = 0
    checksum_2: int = 0
    fsp_free_limit: int = 0
    fsp_magic: int = 0

    @property
    def archiving_enabled(self) -> bool:
        return self.archived_lsn != ARCHIVED_LSN_DISABLED

    @property
    def has_fsp_free_limit(self) -> bool:
        return self.fsp_magic == FSP_MAGIC_N_VAL


@dataclass(frozen=True)
class LogBlock(_Record):
    """A 512-byte log block: 14-byte header, payload, 4-byte checksum trailer."""

    SIZE: ClassVar[int] = LOG_BLOCK_LEN
    LAYOUT: ClassVar[Layout] = (
        ("header_number", 0x00, "I"),
        ("data_len", 0x04, "H"),
        ("first_rec_group", 0x06, "H"),
        ("checkpoint_number", 0x08, "I"),
        ("hdr_size", 0x0C, "H"),
        ("data", 0x0E, f"{LOG_BLOCK_DATA_LEN}s"),
        ("checksum", 0x1FC, "I"),
    )

    header_number: int = 0
    data_len: int = 0
    first_rec_group: int = 0
    checkpoint_number: int = 0
    hdr_size: int = 0
    data: bytes = bytes(LOG_BLOCK_DATA_LEN)
    checksum: int = 0

    def __post_init__(self):
        if len(self.data) != LOG_BLOCK_DATA_LEN:
            raise ValueError(f"Log block data must be {LOG_BLOCK_DATA_LEN} bytes, got {len(self.data)}")

    @property
    def is_first_block(self) -> bool:
        return self.header_number & FIRST_BLOCK_MASK == FIRST_BLOCK_MASK

    @property
    def block_number(self) -> int:
        return self.header_number & (FIRST_BLOCK_MASK - 1)
