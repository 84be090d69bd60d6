"""Configuration constants for hand sign recognition."""

from enum import Enum
from pathlib import Path


class ViewMode(Enum):
    FPV_BEHIND_HANDS = "FPV_BEHIND_HANDS"
    SELFIE_WEBCAM = "SELFIE_WEBCAM"


class TrackSide(Enum):
    """Which hand to keep when more than one is visible."""
    LEFTMOST = "LEFT"
    RIGHTMOST = "RIGHT"


# =============================================================================
# CAMERA / VIEW SETTINGS
# =============================================================================
VIEW_MODE = ViewMode.SELFIE_WEBCAM
MAX_NUM_HANDS = 2
CAMERA_WIDTH = 640
CAMERA_HEIGHT = 480

# Mirror frames before processing (selfie webcam)
PROCESS_FLIP = VIEW_MODE == ViewMode.SELFIE_WEBCAM


# =============================================================================
# HAND SELECTION / FEATURES
# =============================================================================
TRACK_HAND = TrackSide.RIGHTMOST
NUM_LANDMARKS = 21
FEATURE_DIMS = 2 * NUM_LANDMARKS
FEATURE_SCHEMA_ID = "xy_rot_norm_singlehand"


# =============================================================================
# KNN + GATING
# =============================================================================
K = 7
EPS = 1e-6
MIN_CONF = 0.62
MIN_MARGIN = 0.12


# =============================================================================
# SMOOTHING
# =============================================================================
SMOOTH_N = 12
STABLE_MIN = 9


# =============================================================================
# TIMING (milliseconds)
# =============================================================================
ADD_DEBOUNCE_MS = 180
RECORD_EVERY_MS = 140


# =============================================================================
# PERSISTENCE
# =============================================================================
SNAPSHOT_VERSION = 5
DEFAULT_DATASET_PATH = Path("asl_handpose_examples.json")
DEFAULT_EXPORT_PATH = Path("asl_handpose_dataset_singlehand.json")
