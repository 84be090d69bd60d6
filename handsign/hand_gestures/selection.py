"""Deterministic single-hand selection from the detector's candidates."""

from typing import Iterable, Sequence

from .config import NUM_LANDMARKS, TRACK_HAND, TrackSide
from .features import LM, Landmark, RawHand


def _is_valid(hand) -> bool:
    try:
        return hand is not None and len(hand) == NUM_LANDMARKS
    except TypeError:
        return False


def _wrist_x(hand: RawHand) -> float:
    return hand[LM.WRIST].x


def sort_hands_left_to_right(hands: Iterable[RawHand] | None) -> list[RawHand]:
    """Valid hands only, ordered by wrist x ascending (stable on ties)."""
    valid = [h for h in (hands or ()) if _is_valid(h)]
    return sorted(valid, key=_wrist_x)


class HandSelector:
    """Picks exactly one hand to track per frame using a fixed side policy."""

    def __init__(self, side: TrackSide = TRACK_HAND):
        self.side = side

    def select(self, hands: Iterable[RawHand] | None) -> RawHand | None:
        """
        Choose the tracked hand.

        Hands with the wrong landmark count are dropped silently. With two or
        more candidates the leftmost or rightmost wrist wins, per ``side``.
        """
        ordered = sort_hands_left_to_right(hands)
        if not ordered:
            return None
        if len(ordered) == 1:
            return ordered[0]
        return ordered[-1] if self.side is TrackSide.RIGHTMOST else ordered[0]


def raw_hand_from_landmarks(landmarks: Sequence, width: int, height: int) -> list[Landmark]:
    """Convert normalized detector landmarks (0..1) into pixel-space landmarks."""
    return [
        Landmark(float(lm.x) * width, float(lm.y) * height, float(getattr(lm, "z", 0.0) or 0.0))
        for lm in landmarks
    ]
