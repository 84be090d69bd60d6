"""Timer-gated repeated adds for fast bulk labeling."""

import logging
from dataclasses import dataclass

from ..hand_gestures.config import RECORD_EVERY_MS
from ..hand_gestures.labels import Label
from .store import AddOutcome, ExampleStore, FeatureSource

logger = logging.getLogger(__name__)


@dataclass
class RecordCapture:
    """
    OFF/ON record mode with a held label.

    While ON and a label is held, ``update`` adds one silent example every
    ``interval_ms``. Releasing the label pauses capture; only turning the
    mode OFF leaves record mode.
    """
    interval_ms: float = RECORD_EVERY_MS
    enabled: bool = False
    held_label: Label | None = None
    last_capture_at: float | None = None

    @property
    def capturing(self) -> bool:
        return self.enabled and self.held_label is not None

    def set_enabled(self, on: bool) -> None:
        self.enabled = on
        if not on:
            self.held_label = None
        logger.info("Record mode %s", "ON" if on else "OFF")

    def toggle(self) -> bool:
        self.set_enabled(not self.enabled)
        return self.enabled

    def hold(self, label: Label | None) -> None:
        """
        Start capturing ``label``; the next update captures immediately.

        Holding the label that is already held keeps the current pacing.
        """
        if label is self.held_label:
            return
        self.held_label = label
        self.last_capture_at = None

    def release(self, label: Label | None = None) -> bool:
        """Stop capturing; with ``label`` given, only if it is the one held."""
        if self.held_label is None or (label is not None and label is not self.held_label):
            return False
        self.held_label = None
        return True

    def reset(self) -> None:
        self.enabled = False
        self.held_label = None
        self.last_capture_at = None

    def update(self, store: ExampleStore, features: FeatureSource, now: float) -> AddOutcome | None:
        """
        Run one tick of the capture loop.

        Returns:
            The add outcome when a capture was due, else None
        """
        if not self.capturing:
            return None
        if self.last_capture_at is not None and now - self.last_capture_at < self.interval_ms:
            return None

        outcome = store.try_add(self.held_label, features, silent=True)
        self.last_capture_at = now
        return outcome
