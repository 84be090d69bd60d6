"""
Snapshot encoding and decoding for the labeled example dataset.

Export always produces plain JSON text. Import accepts the payload in any of
four encodings, each with its own decoder:

    StructuredPayload  an already-parsed mapping
    JsonText           raw JSON text
    Base64DataUrl      data:application/json;base64,<...>
    PercentDataUrl     data:application/json,<percent-encoded JSON>

Decoding is strict about the overall shape (a mapping with an ``examples``
mapping) and lenient per field: a malformed label array or history becomes
empty instead of failing the whole import.
"""

import base64
import binascii
import json
import logging
import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Mapping, Sequence
from urllib.parse import unquote

from ..exceptions import MalformedPayload
from ..hand_gestures.config import (
    FEATURE_DIMS, FEATURE_SCHEMA_ID, K, SNAPSHOT_VERSION, TRACK_HAND, TrackSide,
)
from ..hand_gestures.features import FeatureVector
from ..hand_gestures.labels import ALL_LABELS, Label

logger = logging.getLogger(__name__)

DATA_URL_PREFIX = "data:"


# =============================================================================
# SNAPSHOT MODEL
# =============================================================================

@dataclass(frozen=True)
class SnapshotMeta:
    """Fixed description of the feature space a snapshot was recorded in."""
    feature: str = FEATURE_SCHEMA_ID
    k: int = K
    dims: int = FEATURE_DIMS
    track_hand: str = TRACK_HAND.value


@dataclass(frozen=True)
class Snapshot:
    """Versioned, self-contained copy of the dataset and its add history."""
    version: int
    saved_at: str
    examples: dict[Label, tuple[FeatureVector, ...]]
    history: tuple[Label, ...] = ()
    meta: SnapshotMeta = field(default_factory=SnapshotMeta)

    def total_count(self) -> int:
        return sum(len(v) for v in self.examples.values())

    def to_dict(self) -> dict:
        """JSON-friendly dict in the on-disk schema."""
        return {
            "version": self.version,
            "savedAt": self.saved_at,
            "examples": {
                label.value: [list(vec) for vec in self.examples.get(label, ())]
                for label in ALL_LABELS
            },
            "addHistory": [label.value for label in self.history],
            "meta": {
                "feature": self.meta.feature,
                "trackHand": self.meta.track_hand,
                "dims": self.meta.dims,
                "k": self.meta.k,
            },
        }


# =============================================================================
# INPUT ENCODINGS
# =============================================================================

@dataclass(frozen=True)
class StructuredPayload:
    value: Mapping


@dataclass(frozen=True)
class JsonText:
    text: str


@dataclass(frozen=True)
class Base64DataUrl:
    body: str


@dataclass(frozen=True)
class PercentDataUrl:
    body: str


EncodedPayload = StructuredPayload | JsonText | Base64DataUrl | PercentDataUrl


def classify_payload(raw) -> EncodedPayload:
    """Tag an incoming import payload with its encoding."""
    if isinstance(raw, Mapping):
        return StructuredPayload(raw)

    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = bytes(raw).decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedPayload("File is not UTF-8 text") from e

    if isinstance(raw, str):
        s = raw.strip()
        if not s:
            raise MalformedPayload("File data was empty or unreadable")
        if s.startswith(DATA_URL_PREFIX):
            header, sep, body = s.partition(",")
            if not sep:
                raise MalformedPayload("Malformed data URL")
            if ";base64" in header:
                return Base64DataUrl(body)
            return PercentDataUrl(body)
        return JsonText(s)

    raise MalformedPayload("File data was empty or unreadable")


def _parse_json(text: str):
    try:
        return json.loads(text)
    except ValueError as e:
        raise MalformedPayload(f"Invalid JSON: {e}") from e
    except RecursionError as e:
        raise MalformedPayload("JSON nested too deeply") from e


def _decode_structured(payload: StructuredPayload):
    return payload.value


def _decode_json_text(payload: JsonText):
    return _parse_json(payload.text)


def _decode_base64(payload: Base64DataUrl):
    try:
        text = base64.b64decode("".join(payload.body.split()), validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as e:
        raise MalformedPayload("Invalid base64 data URL") from e
    return _parse_json(text)


def _decode_percent(payload: PercentDataUrl):
    try:
        text = unquote(payload.body, errors="strict")
    except UnicodeDecodeError as e:
        raise MalformedPayload("Invalid percent-encoded data URL") from e
    return _parse_json(text)


_DECODERS: dict[type, Callable] = {
    StructuredPayload: _decode_structured,
    JsonText: _decode_json_text,
    Base64DataUrl: _decode_base64,
    PercentDataUrl: _decode_percent,
}


def decode_payload(raw):
    """Turn any accepted import encoding into a parsed JSON value."""
    payload = classify_payload(raw)
    return _DECODERS[type(payload)](payload)


# =============================================================================
# FIELD VALIDATION
# =============================================================================

def _decode_vector(value) -> FeatureVector | None:
    if not isinstance(value, (list, tuple)) or len(value) != FEATURE_DIMS:
        return None
    out = []
    for v in value:
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            return None
        f = float(v)
        if not math.isfinite(f):
            return None
        out.append(f)
    return tuple(out)


def _decode_vectors(value) -> tuple[FeatureVector, ...]:
    """A label's example list, or empty when any entry is malformed."""
    if not isinstance(value, (list, tuple)):
        return ()
    vectors = []
    for item in value:
        vec = _decode_vector(item)
        if vec is None:
            return ()
        vectors.append(vec)
    return tuple(vectors)


def _decode_history(value) -> tuple[Label, ...]:
    if not isinstance(value, (list, tuple)):
        return ()
    labels = [Label.from_name(v) for v in value]
    if any(label is None for label in labels):
        return ()
    return tuple(labels)


def _decode_meta(value) -> SnapshotMeta:
    if not isinstance(value, Mapping):
        return SnapshotMeta()
    default = SnapshotMeta()

    def pick(key, kind, fallback):
        v = value.get(key)
        return v if isinstance(v, kind) and not isinstance(v, bool) else fallback

    return SnapshotMeta(
        feature=pick("feature", str, default.feature),
        k=pick("k", int, default.k),
        dims=pick("dims", int, default.dims),
        track_hand=pick("trackHand", str, default.track_hand),
    )


def snapshot_from_mapping(obj) -> Snapshot:
    """Validate a parsed payload and build a Snapshot from it."""
    if not isinstance(obj, Mapping):
        raise MalformedPayload("Snapshot must be a JSON object")

    raw_examples = obj.get("examples")
    if not isinstance(raw_examples, Mapping):
        raise MalformedPayload("Missing 'examples'")

    examples = {label: _decode_vectors(raw_examples.get(label.value)) for label in ALL_LABELS}
    history = _decode_history(obj.get("addHistory"))
    meta = _decode_meta(obj.get("meta"))
    if meta.feature != FEATURE_SCHEMA_ID:
        logger.warning("Snapshot feature schema %r differs from %r", meta.feature, FEATURE_SCHEMA_ID)

    version = obj.get("version")
    if not isinstance(version, int) or isinstance(version, bool):
        version = SNAPSHOT_VERSION
    saved_at = obj.get("savedAt")
    if not isinstance(saved_at, str):
        saved_at = ""

    return Snapshot(version=version, saved_at=saved_at, examples=examples, history=history, meta=meta)


# =============================================================================
# CODEC
# =============================================================================

def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class PersistenceCodec:
    """Serializes the store's state to snapshots and parses them back."""

    def __init__(
        self,
        k: int = K,
        track_side: TrackSide = TRACK_HAND,
        version: int = SNAPSHOT_VERSION,
        now: Callable[[], datetime] = _utc_now,
    ):
        self.meta = SnapshotMeta(k=k, track_hand=track_side.value)
        self.version = version
        self._now = now

    def serialize(
        self,
        examples: Mapping[Label, Sequence[FeatureVector]],
        history: Sequence[Label],
    ) -> Snapshot:
        """Copy the dataset and history into a timestamped Snapshot."""
        saved_at = self._now().isoformat(timespec="milliseconds").replace("+00:00", "Z")
        return Snapshot(
            version=self.version,
            saved_at=saved_at,
            examples={label: tuple(tuple(v) for v in examples.get(label, ())) for label in ALL_LABELS},
            history=tuple(history),
            meta=self.meta,
        )

    def dumps(self, snapshot: Snapshot, indent: int | None = None) -> str:
        """Plain JSON text for storage and export."""
        return json.dumps(snapshot.to_dict(), indent=indent)

    def deserialize(self, raw) -> Snapshot:
        """
        Parse an import payload.

        Raises:
            MalformedPayload: on any parse or structural failure
        """
        return snapshot_from_mapping(decode_payload(raw))
