"""Temporal majority-vote smoothing of per-frame labels."""

from collections import Counter, deque
from dataclasses import dataclass

from .config import MIN_CONF, SMOOTH_N, STABLE_MIN
from .labels import Label


@dataclass(frozen=True)
class SmoothedResult:
    """Debounced label; confidence is the latest single-frame value."""
    label: Label
    confidence: float
    stable: bool


class Smoother:
    """Fixed-size FIFO of gated labels with a mode-based stability check."""

    def __init__(self, window: int = SMOOTH_N, stable_min: int = STABLE_MIN, min_conf: float = MIN_CONF):
        self.stable_min = stable_min
        self.min_conf = min_conf
        self._window: deque[Label] = deque(maxlen=window)
        self._last_label: Label | None = None
        self._last_confidence = 0.0

    def __len__(self) -> int:
        return len(self._window)

    @property
    def last_confidence(self) -> float:
        return self._last_confidence

    def push(self, label: Label, confidence: float) -> None:
        """Record one frame's gated label; the oldest drops off when full."""
        self._window.append(label)
        self._last_label = label
        self._last_confidence = confidence

    def smoothed(self) -> SmoothedResult | None:
        """Mode of the window, or None before the first push."""
        if self._last_label is None or not self._window:
            return None

        counts = Counter(self._window)
        # max() keeps the first maximal key, and Counter keeps first-seen order.
        mode = max(counts, key=counts.__getitem__)
        stable = counts[mode] >= self.stable_min and self._last_confidence >= self.min_conf
        return SmoothedResult(label=mode, confidence=self._last_confidence, stable=stable)

    def reset(self) -> None:
        self._window.clear()
        self._last_label = None
        self._last_confidence = 0.0
