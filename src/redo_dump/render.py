"""Text rendering of decoded redo log records.

Every function is pure and returns a list of lines. Sizes and counts are
printed in decimal; LSNs, checkpoint numbers, checksums and magic values
in hex.
"""
from __future__ import annotations

from redo_core.records import Checkpoint, FileHeader, LogBlock

RULE = "=" * 80

HEXDUMP_WIDTH = 16


def _rows(pairs: list[tuple[str, str]]) -> list[str]:
    width = max(len(label) for label, _ in pairs)
    return [f"{label.ljust(width)}: {value}" for label, value in pairs]


def hexdump(data: bytes, width: int = HEXDUMP_WIDTH) -> list[str]:
    return [
        f"{i:04X}  " + " ".join(f"{b:02X}" for b in data[i:i + width])
        for i in range(0, len(data), width)
    ]


def render_header(h: FileHeader) -> list[str]:
    return [RULE, "Parsed header data:"] + _rows([
        ("Group Number", f"{h.group_number}"),
        ("First LSN", f"0x{h.first_lsn:X}"),
        ("Archived Log File Number", f"{h.archived_log_file_number}"),
    ])


def render_checkpoint(cp: Checkpoint, title: str) -> list[str]:
    archived = f"0x{cp.archived_lsn:X}"
    if not cp.archiving_enabled:
        archived += " (archiving disabled)"
    magic = f"0x{cp.fsp_magic:X}"
    if cp.has_fsp_free_limit:
        magic += " (fsp limit present)"
    return [RULE, f"Parsed {title} checkpoint data:"] + _rows([
        ("Number", f"0x{cp.number:X}"),
        ("LSN", f"0x{cp.lsn:X}"),
        ("Offset", f"0x{cp.offset:X}"),
        ("BufferSize", f"{cp.buffer_size}"),
        ("ArchivedLSN", archived),
        ("Checksum1", f"0x{cp.checksum_1:X}"),
        ("Checksum2", f"0x{cp.checksum_2:X}"),
        ("FSP free limit", f"{cp.fsp_free_limit} MiB"),
        ("Magic", magic),
    ])


def render_log_block(index: int, offset: int | None, block: LogBlock) -> list[str]:
    where = f" at offset {offset}" if offset is not None else ""
    lines = [f"Log block #{index}{where}"]
    lines += _rows([
        ("Header number", f"0x{block.header_number:X}"),
        ("Is first block", f"{block.is_first_block}"),
        ("Size", f"{block.data_len}"),
        ("Offset", f"{block.first_rec_group}"),
        ("Current checkpoint", f"0x{block.checkpoint_number:X}"),
        ("Hdr-size", f"{block.hdr_size}"),
        ("Checksum", f"0x{block.checksum:X}"),
    ])
    lines.append("Data:")
    lines += hexdump(block.data)
    lines.append("")
    return lines
