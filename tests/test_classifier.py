"""
Test cases for the rule-based landmark classifier.
"""
import unittest
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from gesture_phrases.classifier import RuleBasedClassifier
from gesture_phrases.config import ClassifierConfig
from gesture_phrases.types import GESTURE_LABELS
from tests.poses import make_hand


class TestRuleBasedClassifier(unittest.TestCase):
    """Test template matching on synthetic hands."""

    def setUp(self):
        self.classifier = RuleBasedClassifier(ClassifierConfig(confidence_threshold=0.65))

    def test_templates(self):
        cases = {
            "OPEN_PALM": make_hand(True, True, True, True, True),
            "CLOSED_FIST": make_hand(False, False, False, False, False),
            "THUMBS_UP": make_hand(True, False, False, False, False),
            "POINTING_UP": make_hand(False, True, False, False, False),
            "PEACE_SIGN": make_hand(False, True, True, False, False),
        }
        for expected, hand in cases.items():
            with self.subTest(gesture=expected):
                result = self.classifier.classify(hand)
                self.assertEqual(result.label, expected)
                self.assertEqual(result.confidence, 1.0)

    def test_full_distribution_exposed(self):
        result = self.classifier.classify(make_hand(True, False, False, False, False))
        self.assertEqual(set(result.scores), set(GESTURE_LABELS))
        self.assertAlmostEqual(result.scores["CLOSED_FIST"], 0.8)
        self.assertAlmostEqual(result.scores["OPEN_PALM"], 0.2)

    def test_low_confidence_is_none(self):
        result = self.classifier.classify(make_hand(True, True, False, True, False))
        self.assertEqual(result.label, "NONE")
        self.assertAlmostEqual(result.confidence, 0.6)

    def test_no_hand(self):
        result = self.classifier.classify(None)
        self.assertEqual(result.label, "NONE")
        self.assertEqual(result.confidence, 0.0)
        self.assertIsNone(result.scores)

    def test_threshold_is_configurable(self):
        classifier = RuleBasedClassifier(ClassifierConfig(confidence_threshold=0.5))
        result = classifier.classify(make_hand(True, True, False, True, False))
        self.assertEqual(result.label, "OPEN_PALM")


if __name__ == '__main__':
    unittest.main()
