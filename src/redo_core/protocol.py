"""Redo log on-disk layout constants.

Single source of truth for record sizes, file offsets and magic values.
All multi-byte integers in the log file are big-endian.
"""

# Every record in the file occupies one disk block.
BLOCK_SIZE = 512

FILE_HEADER_LEN = BLOCK_SIZE
CHECKPOINT_LEN = BLOCK_SIZE
LOG_BLOCK_LEN = BLOCK_SIZE

# File layout: [Header | Checkpoint 1 | Checkpoint 2 | Reserved | Log blocks...]
FILE_HEADER_OFFSET = 0
CHECKPOINT_1_OFFSET = FILE_HEADER_OFFSET + FILE_HEADER_LEN
CHECKPOINT_2_OFFSET = CHECKPOINT_1_OFFSET + CHECKPOINT_LEN
RESERVED_GAP_OFFSET = CHECKPOINT_2_OFFSET + CHECKPOINT_LEN
RESERVED_GAP_LEN = BLOCK_SIZE
LOG_BLOCKS_START = RESERVED_GAP_OFFSET + RESERVED_GAP_LEN  # 2048

# Log block header number: MSB set on the first block of a flush write segment
FIRST_BLOCK_MASK = 0x80000000

# Checkpoint archived LSN when log archiving is not compiled in
ARCHIVED_LSN_DISABLED = 0xFFFFFFFFFFFFFFFF

# Checkpoint magic that tells the fsp free limit field is present (3.23.50+)
FSP_MAGIC_N_VAL = 1441231243

# Checkpoint buffer size field is a fixed value in practice
LOG_BUFFER_SIZE_DEFAULT = 2 * 1024 * 1024  # 2 MiB

# Log block: [HdrNo(4) | DataLen(2) | FirstRecGroup(2) | CkptNo(4) | HdrSize(2) | Data(494) | Checksum(4)]
LOG_BLOCK_HDR_LEN = 14
LOG_BLOCK_TRAILER_LEN = 4
LOG_BLOCK_DATA_LEN = LOG_BLOCK_LEN - LOG_BLOCK_HDR_LEN - LOG_BLOCK_TRAILER_LEN
