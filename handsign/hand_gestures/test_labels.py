"""
Test suite for the label set
"""

import unittest

from handsign.hand_gestures.labels import ALL_LABELS, LETTER_LABELS, Label


class TestLabel(unittest.TestCase):
    """Test cases for Label."""

    def test_canonical_order(self):
        """Letters A..Z come first, the reject class last."""
        self.assertEqual(len(ALL_LABELS), 27)
        self.assertEqual("".join(l.value for l in LETTER_LABELS), "ABCDEFGHIJKLMNOPQRSTUVWXYZ")
        self.assertIs(ALL_LABELS[-1], Label.NONE)

    def test_reject_alias(self):
        self.assertIs(Label.REJECT, Label.NONE)
        self.assertTrue(Label.NONE.is_reject)
        self.assertFalse(Label.N.is_reject)

    def test_from_name(self):
        self.assertIs(Label.from_name("b"), Label.B)
        self.assertIs(Label.from_name(" NONE "), Label.NONE)
        for bad in ("AA", "", "?", None, 3):
            self.assertIsNone(Label.from_name(bad))


if __name__ == "__main__":
    unittest.main(verbosity=2)
