"""Labeled example dataset: storage, persistence and record capture."""

from .codec import PersistenceCodec, Snapshot, SnapshotMeta, classify_payload, decode_payload
from .storage import JsonFileStorage, MemoryStorage, SnapshotStorage
from .store import AddOutcome, ExampleStore, UndoOutcome, monotonic_ms
from .record import RecordCapture

__all__ = [
    "PersistenceCodec",
    "Snapshot",
    "SnapshotMeta",
    "classify_payload",
    "decode_payload",
    "JsonFileStorage",
    "MemoryStorage",
    "SnapshotStorage",
    "AddOutcome",
    "ExampleStore",
    "UndoOutcome",
    "monotonic_ms",
    "RecordCapture",
]
