"""
Recognizer service: the command surface used by the UI.

One tick per camera frame runs hand selection, feature extraction, the
record-mode capture loop and (when prediction is on) classification plus
smoothing. All dataset mutations go through the single ExampleStore.
"""

import logging
from dataclasses import dataclass
from typing import Sequence

from .exceptions import MalformedPayload
from .dataset.codec import PersistenceCodec
from .dataset.record import RecordCapture
from .dataset.storage import SnapshotStorage
from .dataset.store import AddOutcome, Clock, ExampleStore, UndoOutcome, monotonic_ms
from .hand_gestures.classifier import ClassificationResult, KNNClassifier
from .hand_gestures.config import ADD_DEBOUNCE_MS, RECORD_EVERY_MS, TRACK_HAND, TrackSide
from .hand_gestures.features import FeatureVector, RawHand, extract_features
from .hand_gestures.labels import Label
from .hand_gestures.selection import HandSelector
from .hand_gestures.smoothing import SmoothedResult, Smoother

logger = logging.getLogger(__name__)


def _display_name(label: Label) -> str:
    return "NONE" if label.is_reject else label.value


@dataclass
class FrameResult:
    """Everything the UI needs to draw one frame."""
    hand: RawHand | None
    features: FeatureVector | None
    classification: ClassificationResult | None
    smoothed: SmoothedResult | None
    captured: AddOutcome | None = None


class SignRecognizer:
    """
    Live-trainable hand sign recognizer.

    Handles:
    - Overwriting the current hands from the pose provider callback
    - Label/undo/clear/import/export commands with user-facing status text
    - Record mode capture and per-frame classification
    """

    def __init__(
        self,
        storage: SnapshotStorage | None = None,
        track_side: TrackSide = TRACK_HAND,
        classifier: KNNClassifier | None = None,
        smoother: Smoother | None = None,
        clock: Clock = monotonic_ms,
        debounce_ms: float = ADD_DEBOUNCE_MS,
        record_every_ms: float = RECORD_EVERY_MS,
    ):
        self.classifier = classifier or KNNClassifier()
        codec = PersistenceCodec(k=self.classifier.k, track_side=track_side)
        self.store = ExampleStore(storage=storage, codec=codec, clock=clock, debounce_ms=debounce_ms)
        self.selector = HandSelector(track_side)
        self.smoother = smoother or Smoother()
        self.record = RecordCapture(interval_ms=record_every_ms)
        self.predicting = True
        self.status = ""
        self.last_result: ClassificationResult | None = None
        self._clock = clock
        self._hands: Sequence[RawHand] = ()

    # -------------------------------------------------------------------------
    # Pose provider
    # -------------------------------------------------------------------------

    def on_hands(self, hands: Sequence[RawHand] | None) -> None:
        """Provider callback; a new delivery replaces the previous one."""
        self._hands = hands or ()

    def tracked_hand(self) -> RawHand | None:
        return self.selector.select(self._hands)

    def current_features(self) -> FeatureVector | None:
        return extract_features(self.tracked_hand())

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def load(self) -> bool:
        """Restore the persisted dataset at startup."""
        loaded = self.store.restore()
        self._reset_session()
        if loaded:
            self.status = f"Loaded ({self.store.total_count()} ex)"
        else:
            self.status = "Train NONE, then letters A-Z"
        return loaded

    def _reset_session(self) -> None:
        self.smoother.reset()
        self.record.reset()
        self.last_result = None

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------

    def total_count(self) -> int:
        return self.store.total_count()

    def add_example(self, label: Label) -> bool:
        """User-triggered add of the current pose (debounced)."""
        outcome = self.store.try_add(label, self.current_features)
        if outcome is AddOutcome.FEATURE_UNAVAILABLE:
            self.status = "No hand detected"
        elif outcome is AddOutcome.ADDED:
            self.status = f"Added {_display_name(label)} ({self.store.count(label)})"
            logger.info("Added %s (%d)", _display_name(label), self.store.count(label))
        return outcome is AddOutcome.ADDED

    def undo(self) -> UndoOutcome:
        history = self.store.history()
        outcome = self.store.undo_last()
        if outcome is UndoOutcome.NOTHING_TO_UNDO:
            self.status = "Nothing to undo"
        elif outcome is UndoOutcome.UNDONE:
            self.status = f"Undo: {_display_name(history[-1])}"
        else:
            self.status = "Undo did nothing"
        return outcome

    def clear(self) -> None:
        self.store.clear()
        self._reset_session()
        self.status = "Cleared dataset"

    def export_snapshot(self, indent: int | None = None) -> str:
        text = self.store.codec.dumps(self.store.to_snapshot(), indent=indent)
        self.status = "Exported JSON"
        return text

    def import_snapshot(self, payload) -> bool:
        """
        Replace the dataset from an exported snapshot.

        The current dataset is left untouched unless the whole payload decodes.
        """
        try:
            snapshot = self.store.codec.deserialize(payload)
        except MalformedPayload as e:
            self.status = f"Import failed - {e}"
            logger.warning("Import failed: %s", e)
            return False

        self.store.replace(snapshot)
        self._reset_session()
        self.status = f"Imported ({self.store.total_count()} ex)"
        return True

    def set_record_mode(self, on: bool) -> None:
        self.record.set_enabled(on)
        self.status = "Record mode ON - hold A-Z or NONE" if on else "Record mode OFF"

    def set_held_label(self, label: Label | None) -> None:
        """Select (or with None, release) the label captured in record mode."""
        if not self.record.enabled:
            return
        if label is None:
            if self.record.release():
                self.status = "REC paused"
            return
        self.record.hold(label)
        self.status = f"REC {_display_name(label)}"

    def toggle_predicting(self) -> bool:
        self.predicting = not self.predicting
        self.status = "Prediction ON" if self.predicting else "Prediction OFF"
        return self.predicting

    # -------------------------------------------------------------------------
    # Per-frame
    # -------------------------------------------------------------------------

    def classify(self) -> SmoothedResult | None:
        """
        Classify the current pose and feed the smoother.

        Returns:
            Smoothed label, or None if the dataset is empty or no hand is visible
        """
        return self._classify(self.current_features())

    def _classify(self, features: FeatureVector | None) -> SmoothedResult | None:
        if features is None or self.store.is_empty:
            return None
        result = self.classifier.classify(self.store.dataset(), features)
        if result is None:
            return None
        self.last_result = result
        self.smoother.push(result.label, result.confidence)
        return self.smoother.smoothed()

    def tick(self, now: float | None = None) -> FrameResult:
        """Run one frame: record capture first, then prediction."""
        now = self._clock() if now is None else now
        hand = self.tracked_hand()
        features = extract_features(hand)

        captured = self.record.update(self.store, features, now)
        if captured is AddOutcome.ADDED:
            self.status = f"REC {_display_name(self.record.held_label)} (+1)"
        elif captured is AddOutcome.FEATURE_UNAVAILABLE:
            self.status = "REC No hand detected"

        classification = None
        smoothed = None
        if self.predicting and not self.store.is_empty:
            smoothed = self._classify(features)
            if smoothed is not None:
                classification = self.last_result
            else:
                # No hand this frame: keep showing the last smoothed label.
                smoothed = self.smoother.smoothed()

        return FrameResult(
            hand=hand,
            features=features,
            classification=classification,
            smoothed=smoothed,
            captured=captured,
        )
