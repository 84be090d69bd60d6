"""Live-trainable hand sign recognition package."""

from .hand_gestures import (
    Label,
    Landmark,
    TrackSide,
    extract_features,
    HandSelector,
    KNNClassifier,
    ClassificationResult,
    Smoother,
    SmoothedResult,
)

from .dataset import (
    ExampleStore,
    PersistenceCodec,
    RecordCapture,
    Snapshot,
    AddOutcome,
    UndoOutcome,
    JsonFileStorage,
    MemoryStorage,
)

from .exceptions import HandSignError, MalformedPayload, StorageError
from .service import SignRecognizer

__all__ = [
    # Recognition
    "Label",
    "Landmark",
    "TrackSide",
    "extract_features",
    "HandSelector",
    "KNNClassifier",
    "ClassificationResult",
    "Smoother",
    "SmoothedResult",
    # Dataset
    "ExampleStore",
    "PersistenceCodec",
    "RecordCapture",
    "Snapshot",
    "AddOutcome",
    "UndoOutcome",
    "JsonFileStorage",
    "MemoryStorage",
    # Errors
    "HandSignError",
    "MalformedPayload",
    "StorageError",
    # Service
    "SignRecognizer",
]
