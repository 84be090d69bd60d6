"""Hand feature extraction from 21-point hand landmarks."""

import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from .config import NUM_LANDMARKS
from .math_utils import all_finite, heading_rad, rotation_matrix2


# MediaPipe landmark indices
class LM:
    WRIST = 0
    THUMB_CMC, THUMB_MCP, THUMB_IP, THUMB_TIP = 1, 2, 3, 4
    INDEX_MCP, INDEX_PIP, INDEX_DIP, INDEX_TIP = 5, 6, 7, 8
    MIDDLE_MCP, MIDDLE_PIP, MIDDLE_DIP, MIDDLE_TIP = 9, 10, 11, 12
    RING_MCP, RING_PIP, RING_DIP, RING_TIP = 13, 14, 15, 16
    PINKY_MCP, PINKY_PIP, PINKY_DIP, PINKY_TIP = 17, 18, 19, 20


@dataclass(frozen=True)
class Landmark:
    """A single tracked joint position (pixel or normalized space)."""
    x: float
    y: float
    z: float = 0.0


RawHand = Sequence[Landmark]
FeatureVector = tuple[float, ...]


def hand_from_points(points: Sequence[Sequence[float]]) -> list[Landmark]:
    """Build a hand from (x, y) or (x, y, z) tuples."""
    return [Landmark(*(float(c) for c in p[:3])) for p in points]


def extract_features(hand: RawHand | None) -> FeatureVector | None:
    """
    Convert one hand pose into a translation/scale/rotation normalized vector.

    The wrist is moved to the origin, the wrist->middle-MCP length becomes 1
    and that vector is rotated to point straight up (-y). Depth is dropped.

    Args:
        hand: 21 landmarks in anatomical order

    Returns:
        42 floats (x, y per landmark), or None when the hand is unusable
    """
    if hand is None or len(hand) != NUM_LANDMARKS:
        return None

    pts = np.array([(lm.x, lm.y) for lm in hand], dtype=np.float64)
    wrist = pts[LM.WRIST]
    ref = pts[LM.MIDDLE_MCP]

    scale = math.hypot(ref[0] - wrist[0], ref[1] - wrist[1]) or 1.0
    rotation = -math.pi / 2 - heading_rad(wrist, ref)

    normalized = ((pts - wrist) / scale) @ rotation_matrix2(rotation).T
    if not all_finite(normalized):
        return None
    return tuple(float(v) for v in normalized.ravel())
