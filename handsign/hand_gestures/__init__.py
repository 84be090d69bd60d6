"""Hand sign recognition module."""

from .config import TrackSide, ViewMode, VIEW_MODE, MAX_NUM_HANDS, TRACK_HAND
from .labels import Label, ALL_LABELS, LETTER_LABELS
from .features import LM, Landmark, RawHand, FeatureVector, extract_features, hand_from_points
from .selection import HandSelector, raw_hand_from_landmarks, sort_hands_left_to_right
from .classifier import ClassificationResult, KNNClassifier
from .smoothing import SmoothedResult, Smoother

__all__ = [
    "TrackSide",
    "ViewMode",
    "VIEW_MODE",
    "MAX_NUM_HANDS",
    "TRACK_HAND",
    "Label",
    "ALL_LABELS",
    "LETTER_LABELS",
    "LM",
    "Landmark",
    "RawHand",
    "FeatureVector",
    "extract_features",
    "hand_from_points",
    "HandSelector",
    "raw_hand_from_landmarks",
    "sort_hands_left_to_right",
    "ClassificationResult",
    "KNNClassifier",
    "SmoothedResult",
    "Smoother",
]
