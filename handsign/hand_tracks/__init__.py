"""Hand tracking and display module."""

from .hand_tracker import HandTracker
from .visualization import TrackerDisplay, draw_hand_keypoints, draw_prediction_badge

__all__ = [
    "HandTracker",
    "TrackerDisplay",
    "draw_hand_keypoints",
    "draw_prediction_badge",
]
