"""Owner of the labeled example dataset and its add/undo history."""

import logging
import time
from enum import Enum
from typing import Callable

from ..exceptions import MalformedPayload, StorageError
from ..hand_gestures.config import ADD_DEBOUNCE_MS, FEATURE_DIMS
from ..hand_gestures.features import FeatureVector
from ..hand_gestures.labels import ALL_LABELS, Label
from ..hand_gestures.math_utils import all_finite
from .codec import PersistenceCodec, Snapshot
from .storage import MemoryStorage, SnapshotStorage

logger = logging.getLogger(__name__)

Clock = Callable[[], float]
FeatureSource = Callable[[], FeatureVector | None] | FeatureVector | None


def monotonic_ms() -> float:
    """Monotonic clock in milliseconds."""
    return time.monotonic() * 1000.0


class AddOutcome(Enum):
    ADDED = "added"
    RATE_LIMITED = "rate_limited"
    FEATURE_UNAVAILABLE = "feature_unavailable"


class UndoOutcome(Enum):
    UNDONE = "undone"
    NOTHING_TO_UNDO = "nothing_to_undo"
    HISTORY_INCONSISTENT = "history_inconsistent"


def empty_dataset() -> dict[Label, list[FeatureVector]]:
    return {label: [] for label in ALL_LABELS}


class ExampleStore:
    """
    Labeled examples plus the chronological add history.

    Every successful mutation is written through to ``storage`` before the
    call returns. The history is a stack of labels, one per add, so undo can
    remove exactly the most recent example.
    """

    def __init__(
        self,
        storage: SnapshotStorage | None = None,
        codec: PersistenceCodec | None = None,
        clock: Clock = monotonic_ms,
        debounce_ms: float = ADD_DEBOUNCE_MS,
    ):
        self.storage = storage if storage is not None else MemoryStorage()
        self.codec = codec or PersistenceCodec()
        self.debounce_ms = debounce_ms
        self._clock = clock
        self._examples = empty_dataset()
        self._history: list[Label] = []
        self._last_add_at: float | None = None

    # -------------------------------------------------------------------------
    # Read access
    # -------------------------------------------------------------------------

    def dataset(self) -> dict[Label, tuple[FeatureVector, ...]]:
        """Read-only copy of every label's examples, in canonical label order."""
        return {label: tuple(self._examples[label]) for label in ALL_LABELS}

    def history(self) -> tuple[Label, ...]:
        return tuple(self._history)

    def count(self, label: Label) -> int:
        return len(self._examples[label])

    def total_count(self) -> int:
        return sum(len(v) for v in self._examples.values())

    @property
    def is_empty(self) -> bool:
        return self.total_count() == 0

    def to_snapshot(self) -> Snapshot:
        return self.codec.serialize(self._examples, self._history)

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def try_add(self, label: Label, features: FeatureSource, silent: bool = False) -> AddOutcome:
        """
        Append one example for ``label``.

        Args:
            label: Target label
            features: A feature vector, or a callable producing one (None if no hand)
            silent: Skip the debounce window; the caller paces its own adds

        Returns:
            ADDED, RATE_LIMITED, or FEATURE_UNAVAILABLE
        """
        if not silent:
            now = self._clock()
            if self._last_add_at is not None and now - self._last_add_at < self.debounce_ms:
                return AddOutcome.RATE_LIMITED
            self._last_add_at = now

        vec = features() if callable(features) else features
        if vec is None:
            return AddOutcome.FEATURE_UNAVAILABLE
        vec = tuple(float(v) for v in vec)
        if len(vec) != FEATURE_DIMS or not all_finite(vec):
            logger.warning("Rejected malformed feature vector for %s", label.value)
            return AddOutcome.FEATURE_UNAVAILABLE

        self._examples[label].append(vec)
        self._history.append(label)
        self._persist()
        logger.debug("Added %s (%d)", label.value, len(self._examples[label]))
        return AddOutcome.ADDED

    def add_example(self, label: Label, features: FeatureSource, silent: bool = False) -> bool:
        return self.try_add(label, features, silent=silent) is AddOutcome.ADDED

    def undo_last(self) -> UndoOutcome:
        """Remove the most recently added example."""
        if not self._history:
            return UndoOutcome.NOTHING_TO_UNDO

        label = self._history.pop()
        bucket = self._examples[label]
        if bucket:
            bucket.pop()
            outcome = UndoOutcome.UNDONE
        else:
            outcome = UndoOutcome.HISTORY_INCONSISTENT
            logger.warning("Undo: history names %s but it has no examples", label.value)

        # Persist even on a no-op so the stored history matches memory.
        self._persist()
        return outcome

    def clear(self) -> None:
        """Drop every example and the history, and erase the persisted snapshot."""
        self._examples = empty_dataset()
        self._history = []
        try:
            self.storage.erase()
        except StorageError as e:
            logger.warning("Clear: %s", e)
        logger.info("Cleared dataset")

    def replace(self, snapshot: Snapshot) -> None:
        """Swap in a decoded snapshot wholesale, then persist it."""
        examples = {label: list(snapshot.examples.get(label, ())) for label in ALL_LABELS}
        history = list(snapshot.history)
        self._examples, self._history = examples, history
        self._persist()
        logger.info("Replaced dataset (%d examples)", self.total_count())

    def restore(self) -> bool:
        """
        Load the persisted snapshot, if any.

        Returns:
            True if a snapshot was loaded; state is untouched otherwise
        """
        try:
            text = self.storage.load()
            if text is None:
                return False
            snapshot = self.codec.deserialize(text)
        except (StorageError, MalformedPayload) as e:
            logger.warning("Could not restore dataset: %s", e)
            return False

        self._examples = {label: list(snapshot.examples.get(label, ())) for label in ALL_LABELS}
        self._history = list(snapshot.history)
        logger.info("Restored dataset (%d examples)", self.total_count())
        return True

    def _persist(self) -> None:
        try:
            self.storage.save(self.codec.dumps(self.to_snapshot()))
        except StorageError as e:
            logger.warning("Persist failed: %s", e)
