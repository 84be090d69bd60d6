"""
Test suite for the distance-weighted kNN classifier
"""

import unittest

from handsign.hand_gestures.classifier import KNNClassifier
from handsign.hand_gestures.labels import ALL_LABELS, Label

DIMS = 42


def const(v: float) -> tuple[float, ...]:
    return tuple([float(v)] * DIMS)


def offset(v: float, index: int = 0) -> tuple[float, ...]:
    """Zero vector with a single non-zero component."""
    vec = [0.0] * DIMS
    vec[index] = float(v)
    return tuple(vec)


def dataset(**labels) -> dict:
    data = {label: [] for label in ALL_LABELS}
    for name, vectors in labels.items():
        data[Label(name)] = list(vectors)
    return data


class TestKNNClassifier(unittest.TestCase):
    """Test cases for KNNClassifier."""

    def setUp(self):
        self.clf = KNNClassifier()

    # ============================================================
    # Scenarios
    # ============================================================

    def test_empty_dataset(self):
        """No examples means no result."""
        self.assertIsNone(self.clf.classify(dataset(), const(0)))

    def test_clean_separation(self):
        """Seven A at vA and seven NONE far away: querying vA is a certain A."""
        vA, vN = const(0.0), const(5.0)
        data = dataset(A=[vA] * 7, NONE=[vN] * 7)

        result = self.clf.classify(data, vA)
        self.assertIs(result.label, Label.A)
        self.assertAlmostEqual(result.confidence, 1.0)
        self.assertAlmostEqual(result.margin, 1.0)
        self.assertIs(result.raw_best, Label.A)
        self.assertIsNone(result.raw_second)
        self.assertTrue(result.accepted)

    def test_reject_class_wins(self):
        """When NONE scores highest the result is NONE."""
        data = dataset(A=[const(0.0)] * 7, NONE=[const(5.0)] * 7)
        result = self.clf.classify(data, const(5.0))
        self.assertIs(result.label, Label.NONE)
        self.assertIs(result.raw_best, Label.NONE)
        self.assertFalse(result.accepted)

    def test_low_confidence_rejected(self):
        """A 4-3 split at equal distance falls below MIN_CONF."""
        data = dataset(A=[offset(1.0)] * 4, B=[offset(-1.0)] * 3)
        result = self.clf.classify(data, const(0.0))
        self.assertAlmostEqual(result.confidence, 4 / 7)
        self.assertIs(result.label, Label.NONE)
        self.assertIs(result.raw_best, Label.A)
        self.assertIs(result.raw_second, Label.B)

    def test_low_margin_rejected(self):
        """With a permissive MIN_CONF the margin gate still abstains on a near tie."""
        clf = KNNClassifier(min_conf=0.3, min_margin=0.12)
        data = dataset(A=[offset(1.0)] * 3, B=[offset(-1.0)] * 3, C=[offset(1.0, 5)])
        result = clf.classify(data, const(0.0))
        self.assertAlmostEqual(result.margin, 0.0)
        self.assertIs(result.label, Label.NONE)

    def test_fewer_examples_than_k(self):
        """All examples vote when fewer than k exist."""
        data = dataset(A=[offset(1.0)], B=[offset(3.0)])
        result = self.clf.classify(data, const(0.0))
        self.assertEqual(set(result.scores), {Label.A, Label.B})
        self.assertAlmostEqual(result.confidence, (1 / 1.000001) / (1 / 1.000001 + 1 / 3.000001))

    def test_only_k_nearest_vote(self):
        """Examples beyond the k nearest do not score."""
        data = dataset(A=[offset(1.0)] * 7, B=[offset(2.0)] * 20)
        result = self.clf.classify(data, const(0.0))
        self.assertEqual(set(result.scores), {Label.A})

    # ============================================================
    # Policies
    # ============================================================

    def test_tie_break_canonical_order(self):
        """Equal scores go to the label earlier in A..Z, NONE order."""
        data = {label: [] for label in reversed(ALL_LABELS)}
        data[Label.Q] = [offset(1.0)]
        data[Label.C] = [offset(-1.0)]
        clf = KNNClassifier(min_conf=0.0, min_margin=0.0)
        result = clf.classify(data, const(0.0))
        self.assertIs(result.raw_best, Label.C)
        self.assertIs(result.raw_second, Label.Q)
        self.assertIs(result.label, Label.C)

    def test_letter_before_reject_on_tie(self):
        """A letter tied with NONE wins the raw vote."""
        data = dataset(Z=[offset(1.0)], NONE=[offset(-1.0)])
        result = KNNClassifier(min_conf=0.0, min_margin=0.0).classify(data, const(0.0))
        self.assertIs(result.raw_best, Label.Z)

    def test_deterministic(self):
        """Same dataset and query give identical results."""
        data = dataset(A=[offset(1.0), offset(0.5, 3)], B=[offset(-0.7), offset(2.0, 7)], NONE=[const(1.0)])
        query = offset(0.2, 3)
        self.assertEqual(self.clf.classify(data, query), self.clf.classify(data, query))

    def test_gating_monotonic(self):
        """Raising MIN_CONF or MIN_MARGIN never turns a reject into a letter."""
        data = dataset(A=[offset(1.0)] * 5, B=[offset(-1.2)] * 2, NONE=[const(3.0)] * 3)
        query = offset(0.1)
        thresholds = [0.0, 0.2, 0.4, 0.6, 0.7, 0.8, 0.9, 1.0]

        for fixed_margin in (0.0, 0.12):
            rejected = False
            for conf in thresholds:
                label = KNNClassifier(min_conf=conf, min_margin=fixed_margin).classify(data, query).label
                if rejected:
                    self.assertIs(label, Label.NONE)
                rejected = label is Label.NONE

        for fixed_conf in (0.0, 0.62):
            rejected = False
            for margin in thresholds:
                label = KNNClassifier(min_conf=fixed_conf, min_margin=margin).classify(data, query).label
                if rejected:
                    self.assertIs(label, Label.NONE)
                rejected = label is Label.NONE

    def test_invalid_k(self):
        """k must be positive."""
        with self.assertRaises(ValueError):
            KNNClassifier(k=0)


if __name__ == "__main__":
    unittest.main(verbosity=2)
