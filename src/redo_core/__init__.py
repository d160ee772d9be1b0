"""Redo log core - on-disk layout and record types."""
from .records import Checkpoint, FileHeader, LogBlock, layout_size

__all__ = ["Checkpoint", "FileHeader", "LogBlock", "layout_size"]
