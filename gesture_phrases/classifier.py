"""
Rule-based gesture classifier working directly on hand landmarks.
"""
from typing import Dict, Optional, Sequence

from .config import ClassifierConfig
from .hand_pose import as_hand_pose, finger_states, FINGER_NAMES
from .types import (
    Classification,
    CLOSED_FIST,
    GESTURE_LABELS,
    NO_GESTURE,
    OPEN_PALM,
    PEACE_SIGN,
    POINTING_UP,
    THUMBS_UP,
)


# Expected extension state of (thumb, index, middle, ring, pinky) per gesture
GESTURE_TEMPLATES: Dict[str, tuple] = {
    OPEN_PALM: (True, True, True, True, True),
    CLOSED_FIST: (False, False, False, False, False),
    THUMBS_UP: (True, False, False, False, False),
    POINTING_UP: (False, True, False, False, False),
    PEACE_SIGN: (False, True, True, False, False),
}


class RuleBasedClassifier:
    """
    Classifies a hand pose by matching finger states against gesture templates.

    Each class score is the fraction of the five finger states that match its
    template, so the full per-class distribution is always available.
    """

    def __init__(self, cfg: Optional[ClassifierConfig] = None):
        self.cfg = cfg if cfg is not None else ClassifierConfig()

    def score(self, landmarks: Sequence[Sequence[float]]) -> Dict[str, float]:
        """Per-class confidence for a hand pose."""
        pose = as_hand_pose(landmarks)
        states = finger_states(pose)
        observed = tuple(states[name] for name in FINGER_NAMES)

        scores = {}
        for label in GESTURE_LABELS:
            template = GESTURE_TEMPLATES[label]
            matches = sum(expected == actual for expected, actual in zip(template, observed))
            scores[label] = matches / len(template)
        return scores

    def classify(self, landmarks: Optional[Sequence[Sequence[float]]]) -> Classification:
        """
        Classify a single frame.

        Args:
            landmarks: 21 (x, y, z) points, or None if no hand is visible

        Returns:
            Classification with the best label, or NONE below the confidence threshold
        """
        if landmarks is None:
            return Classification(label=NO_GESTURE, confidence=0.0)

        scores = self.score(landmarks)
        # First label in vocabulary order wins an exact tie
        best_label = max(GESTURE_LABELS, key=lambda label: scores[label])
        best_conf = scores[best_label]

        if best_conf < self.cfg.confidence_threshold:
            return Classification(label=NO_GESTURE, confidence=best_conf, scores=scores)

        return Classification(label=best_label, confidence=best_conf, scores=scores)
