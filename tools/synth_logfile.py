import os
from pathlib import Path

from redo_core.protocol import (
    ARCHIVED_LSN_DISABLED,
    FIRST_BLOCK_MASK,
    FSP_MAGIC_N_VAL,
    LOG_BLOCK_DATA_LEN,
    LOG_BLOCK_HDR_LEN,
    LOG_BLOCKS_START,
    LOG_BUFFER_SIZE_DEFAULT,
    RESERVED_GAP_LEN,
)
from redo_core.records import Checkpoint, FileHeader, LogBlock

# --- CONFIGURATION ---
FIRST_LSN = 0x2000
CHECKPOINT_NO = 7


def make_checkpoint(number: int) -> Checkpoint:
    return Checkpoint(
        number=number,
        lsn=FIRST_LSN + number * 0x200,
        offset=LOG_BLOCKS_START,
        buffer_size=LOG_BUFFER_SIZE_DEFAULT,
        archived_lsn=ARCHIVED_LSN_DISABLED,
        checksum_1=0x1A2B3C4D + number,
        checksum_2=0x5E6F7A8B + number,
        fsp_free_limit=12,
        fsp_magic=FSP_MAGIC_N_VAL,
    )


def make_block(i: int) -> LogBlock:
    # First block of the only write segment carries the flag bit.
    hdr_no = (i + 1) | (FIRST_BLOCK_MASK if i == 0 else 0)
    return LogBlock(
        header_number=hdr_no,
        data_len=LOG_BLOCK_HDR_LEN + 100,
        first_rec_group=LOG_BLOCK_HDR_LEN,
        checkpoint_number=CHECKPOINT_NO,
        hdr_size=LOG_BLOCK_HDR_LEN,
        data=os.urandom(LOG_BLOCK_DATA_LEN),
        checksum=0xC0FFEE00 + i,
    )


def generate_logfile(out_path, blocks: int = 4, tail: int = 0) -> Path:
    out = Path(out_path)
    out.parent.mkdir(parents=True, exist_ok=True)

    with open(out, "wb") as f:
        f.write(FileHeader(group_number=0, first_lsn=FIRST_LSN, archived_log_file_number=0).to_bytes())
        f.write(make_checkpoint(CHECKPOINT_NO - 1).to_bytes())
        f.write(make_checkpoint(CHECKPOINT_NO).to_bytes())
        f.write(bytes(RESERVED_GAP_LEN))
        for i in range(blocks):
            f.write(make_block(i).to_bytes())
        # Torn write: a partial block at the end
        if tail:
            f.write(make_block(blocks).to_bytes()[:tail])

    print(f"GENERATED: {out} ({blocks} blocks, tail={tail})")
    return out


if __name__ == "__main__":
    import sys

    # Usage:
    #   python tools/synth_logfile.py OUT [--blocks N] [--tail BYTES]

    args = [a for a in sys.argv[1:] if a]

    def pop_value(arg_list: list[str], flag: str, default: int) -> tuple[int, list[str]]:
        """Remove an integer option from an argv-style list."""
        if flag not in arg_list:
            return default, arg_list
        i = arg_list.index(flag)
        if i + 1 >= len(arg_list):
            raise SystemExit(f"{flag} requires a value")
        return int(arg_list[i + 1]), arg_list[:i] + arg_list[i + 2:]

    blocks, args = pop_value(args, "--blocks", 4)
    tail, args = pop_value(args, "--tail", 0)

    out = args[0] if args else "ib_logfile0"
    generate_logfile(out, blocks=blocks, tail=tail)
