"""Distance-weighted kNN classification with confidence/margin gating."""

import logging
from dataclasses import dataclass, field
from typing import Mapping, Sequence

import numpy as np

from .config import EPS, K, MIN_CONF, MIN_MARGIN
from .features import FeatureVector
from .labels import ALL_LABELS, Label
from .math_utils import l2_distances

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClassificationResult:
    """Outcome of one kNN query, with pre-gating details kept for display."""
    label: Label
    confidence: float
    margin: float
    raw_best: Label
    raw_second: Label | None = None
    scores: dict[Label, float] = field(default_factory=dict)

    @property
    def accepted(self) -> bool:
        return not self.label.is_reject


class KNNClassifier:
    """
    Brute-force distance-weighted k-nearest-neighbor classifier.

    Each of the k nearest stored examples votes for its label with weight
    1 / (distance + eps). The top label is gated: it is replaced by the
    reject class when its share of the vote or its lead over the runner-up
    is too small.
    """

    def __init__(
        self,
        k: int = K,
        min_conf: float = MIN_CONF,
        min_margin: float = MIN_MARGIN,
        eps: float = EPS,
    ):
        if k < 1:
            raise ValueError("k must be >= 1")
        self.k = k
        self.min_conf = min_conf
        self.min_margin = min_margin
        self.eps = eps

    def _neighbors(
        self, dataset: Mapping[Label, Sequence[FeatureVector]], query: FeatureVector
    ) -> list[tuple[Label, float]]:
        labels: list[Label] = []
        vectors: list[FeatureVector] = []
        for label in ALL_LABELS:
            for vec in dataset.get(label, ()):
                labels.append(label)
                vectors.append(vec)
        if not vectors:
            return []

        dists = l2_distances(np.asarray(vectors, dtype=np.float64), np.asarray(query, dtype=np.float64))
        # Stable sort: equal distances keep canonical label order.
        order = np.argsort(dists, kind="stable")[: min(self.k, len(vectors))]
        return [(labels[i], float(dists[i])) for i in order]

    def classify(
        self, dataset: Mapping[Label, Sequence[FeatureVector]], query: FeatureVector
    ) -> ClassificationResult | None:
        """
        Classify a feature vector against every stored example.

        Returns:
            ClassificationResult, or None when the dataset holds no examples
        """
        neighbors = self._neighbors(dataset, query)
        if not neighbors:
            return None

        totals: dict[Label, float] = {}
        for label, d in neighbors:
            totals[label] = totals.get(label, 0.0) + 1.0 / (d + self.eps)

        # Canonical order first, then a stable sort on score: ties go to A..Z, NONE.
        ranked = sorted(
            ((label, totals[label]) for label in ALL_LABELS if label in totals),
            key=lambda kv: kv[1],
            reverse=True,
        )
        best_label, best_score = ranked[0]
        second_label, second_score = ranked[1] if len(ranked) > 1 else (None, 0.0)

        total = sum(totals.values())
        confidence = best_score / total if total > 0 else 0.0
        second_conf = second_score / total if total > 0 else 0.0
        margin = confidence - second_conf

        label = best_label
        if not best_label.is_reject and (confidence < self.min_conf or margin < self.min_margin):
            label = Label.NONE

        logger.debug(
            "knn best=%s second=%s conf=%.3f margin=%.3f -> %s",
            best_label.value, second_label.value if second_label else "-",
            confidence, margin, label.value,
        )
        return ClassificationResult(
            label=label,
            confidence=confidence,
            margin=margin,
            raw_best=best_label,
            raw_second=second_label,
            scores=dict(ranked),
        )
