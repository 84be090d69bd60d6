"""Visualization utilities for the live sign trainer."""

import cv2
import numpy as np
from numpy.typing import NDArray

from ..hand_gestures.features import RawHand
from ..hand_gestures.smoothing import SmoothedResult

COLOR_WHITE = (255, 255, 255)
COLOR_GREEN = (0, 255, 0)
COLOR_GRAY = (200, 200, 200)
COLOR_CARD = (24, 20, 20)
FONT = cv2.FONT_HERSHEY_SIMPLEX
LINE_THICKNESS = 2

BADGE_SIZE = 92
BADGE_PAD = 14
HUD_PAD = 12
HUD_H = 34


def _blend_rect(frame: NDArray[np.uint8], p0: tuple[int, int], p1: tuple[int, int],
                color: tuple[int, int, int], alpha: float) -> None:
    """Alpha-blend a filled rectangle onto the frame in place."""
    overlay = frame.copy()
    cv2.rectangle(overlay, p0, p1, color, -1)
    cv2.addWeighted(overlay, alpha, frame, 1.0 - alpha, 0, dst=frame)


def draw_vignette(frame: NDArray[np.uint8]) -> None:
    """Darken the frame edges so the overlays stay readable."""
    h, w = frame.shape[:2]
    _blend_rect(frame, (0, 0), (w, 40), (0, 0, 0), 0.45)
    _blend_rect(frame, (0, h - 50), (w, h), (0, 0, 0), 0.35)


def draw_hand_keypoints(frame: NDArray[np.uint8], hand: RawHand | None) -> None:
    """Draw the tracked hand's 21 keypoints."""
    if hand is None:
        return
    for lm in hand:
        cv2.circle(frame, (int(lm.x), int(lm.y)), 3, COLOR_GRAY, -1)


def draw_hud(frame: NDArray[np.uint8], parts: list[str], status: str) -> None:
    """Top-left status pill plus the transient status line."""
    text = "  |  ".join(parts)
    (tw, _), _ = cv2.getTextSize(text, FONT, 0.5, 1)
    _blend_rect(frame, (HUD_PAD, HUD_PAD), (HUD_PAD + tw + 18, HUD_PAD + HUD_H), (0, 0, 0), 0.6)
    cv2.putText(frame, text, (HUD_PAD + 9, HUD_PAD + HUD_H // 2 + 5), FONT, 0.5, COLOR_WHITE, 1, cv2.LINE_AA)
    if status:
        cv2.putText(frame, status, (HUD_PAD + 9, HUD_PAD + HUD_H + 18), FONT, 0.45, COLOR_GRAY, 1, cv2.LINE_AA)


def draw_prediction_badge(frame: NDArray[np.uint8], smoothed: SmoothedResult | None) -> None:
    """Top-right card with the smoothed letter; hidden for the reject class."""
    if smoothed is None or smoothed.label.is_reject:
        return

    w = frame.shape[1]
    x, y = w - BADGE_PAD - BADGE_SIZE, BADGE_PAD
    _blend_rect(frame, (x + 3, y + 4), (x + 3 + BADGE_SIZE, y + 4 + BADGE_SIZE), (0, 0, 0), 0.55)
    _blend_rect(frame, (x, y), (x + BADGE_SIZE, y + BADGE_SIZE), COLOR_CARD, 0.82)

    letter = smoothed.label.value
    (lw, lh), _ = cv2.getTextSize(letter, FONT, 1.8, 3)
    cv2.putText(frame, letter, (x + (BADGE_SIZE - lw) // 2, y + (BADGE_SIZE + lh) // 2 - 4),
                FONT, 1.8, COLOR_WHITE, 3, cv2.LINE_AA)

    tag = f"{smoothed.confidence:.2f} {'stable' if smoothed.stable else '...'}"
    (cw, _), _ = cv2.getTextSize(tag, FONT, 0.4, 1)
    color = COLOR_GREEN if smoothed.stable else COLOR_GRAY
    cv2.putText(frame, tag, (x + (BADGE_SIZE - cw) // 2, y + BADGE_SIZE - 10), FONT, 0.4, color, 1, cv2.LINE_AA)


class TrackerDisplay:
    """Manages OpenCV window and visualization."""

    def __init__(self, window_name: str = "Hand Sign Trainer"):
        self.window_name = window_name
        cv2.namedWindow(window_name, cv2.WINDOW_NORMAL)

    def render(
        self,
        frame: NDArray[np.uint8],
        hand: RawHand | None,
        smoothed: SmoothedResult | None,
        hud: list[str],
        status: str,
    ) -> None:
        """Draw all visualizations on frame."""
        draw_vignette(frame)
        draw_hand_keypoints(frame, hand)
        draw_prediction_badge(frame, smoothed)
        draw_hud(frame, hud, status)

    def show(self, frame: NDArray[np.uint8]) -> int:
        """Display frame and return key press (-1 if none)."""
        cv2.imshow(self.window_name, frame)
        return cv2.waitKey(1)

    def close(self) -> None:
        """Close display window."""
        cv2.destroyWindow(self.window_name)

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
