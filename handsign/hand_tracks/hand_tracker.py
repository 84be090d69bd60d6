"""MediaPipe hand tracking wrapper."""

import cv2
import mediapipe as mp
import numpy as np
from numpy.typing import NDArray

from ..hand_gestures.config import MAX_NUM_HANDS
from ..hand_gestures.features import Landmark
from ..hand_gestures.selection import raw_hand_from_landmarks


class HandTracker:
    """Wrapper for MediaPipe hand tracking that yields pixel-space raw hands."""

    def __init__(
        self,
        max_num_hands: int = MAX_NUM_HANDS,
        min_detection_confidence: float = 0.7,
        min_tracking_confidence: float = 0.7,
    ):
        self._mp_hands = mp.solutions.hands
        self._hands = self._mp_hands.Hands(
            static_image_mode=False,
            max_num_hands=max_num_hands,
            min_detection_confidence=min_detection_confidence,
            min_tracking_confidence=min_tracking_confidence,
        )

    def process(self, frame: NDArray[np.uint8]) -> list[list[Landmark]]:
        """Detect hands in a BGR frame; returns zero or more 21-point hands."""
        rgb = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        rgb.flags.writeable = False
        results = self._hands.process(rgb)

        if not results or not results.multi_hand_landmarks:
            return []

        h, w = frame.shape[:2]
        return [
            raw_hand_from_landmarks(hand.landmark, w, h)
            for hand in results.multi_hand_landmarks
        ]

    def close(self) -> None:
        """Release resources."""
        self._hands.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
