"""
Test suite for temporal label smoothing
"""

import unittest

from handsign.hand_gestures.labels import Label
from handsign.hand_gestures.smoothing import Smoother


class TestSmoother(unittest.TestCase):
    """Test cases for Smoother."""

    def setUp(self):
        self.smoother = Smoother(window=12, stable_min=9, min_conf=0.62)

    def _push(self, labels, confidence=0.9):
        for label in labels:
            self.smoother.push(label, confidence)

    def test_empty(self):
        """Nothing pushed yet means no smoothed label."""
        self.assertIsNone(self.smoother.smoothed())

    def test_stable_at_threshold(self):
        """Nine of the last twelve frames agreeing is stable."""
        self._push([Label.B, Label.C, Label.NONE] + [Label.A] * 9)
        result = self.smoother.smoothed()
        self.assertIs(result.label, Label.A)
        self.assertTrue(result.stable)

    def test_not_stable_below_threshold(self):
        """Eight agreeing frames are not enough."""
        self._push([Label.B, Label.C, Label.NONE, Label.D] + [Label.A] * 8)
        result = self.smoother.smoothed()
        self.assertIs(result.label, Label.A)
        self.assertFalse(result.stable)

    def test_low_latest_confidence_not_stable(self):
        """A full window still needs a confident latest frame."""
        self._push([Label.A] * 11)
        self.smoother.push(Label.A, 0.5)
        result = self.smoother.smoothed()
        self.assertFalse(result.stable)
        self.assertEqual(result.confidence, 0.5)

    def test_confidence_is_latest_frame(self):
        """Reported confidence is not averaged."""
        self.smoother.push(Label.A, 0.99)
        self.smoother.push(Label.A, 0.7)
        self.assertEqual(self.smoother.smoothed().confidence, 0.7)

    def test_window_evicts_oldest(self):
        """Only the last twelve labels count."""
        self._push([Label.A] * 12 + [Label.B] * 12)
        self.assertEqual(len(self.smoother), 12)
        result = self.smoother.smoothed()
        self.assertIs(result.label, Label.B)
        self.assertTrue(result.stable)

    def test_reject_counts_as_value(self):
        """NONE frames compete in the vote like any label."""
        self._push([Label.NONE] * 7 + [Label.A] * 5)
        self.assertIs(self.smoother.smoothed().label, Label.NONE)

    def test_tie_goes_to_first_seen(self):
        """Equal counts pick the label seen first in the window."""
        self._push([Label.C, Label.B, Label.B, Label.C])
        self.assertIs(self.smoother.smoothed().label, Label.C)

    def test_reset(self):
        """Reset empties the window."""
        self._push([Label.A] * 3)
        self.smoother.reset()
        self.assertIsNone(self.smoother.smoothed())
        self.assertEqual(self.smoother.last_confidence, 0.0)


if __name__ == "__main__":
    unittest.main(verbosity=2)
