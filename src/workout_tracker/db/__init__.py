"""Persistence: byte stores and the snapshot codec."""

from .snapshot import SnapshotEntry, decode_snapshot, encode_snapshot
from .storage import FileStorage, KeyValueStorage, MemoryStorage, SQLiteStorage

__all__ = [
    "SnapshotEntry",
    "decode_snapshot",
    "encode_snapshot",
    "FileStorage",
    "KeyValueStorage",
    "MemoryStorage",
    "SQLiteStorage",
]
