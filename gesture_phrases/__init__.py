"""
Gesture Phrases

Maps hand gestures to a fixed set of phrases. Noisy per-frame classifier
output goes through a deterministic decision engine (thumb geometry gate,
confidence tie-break, stability voting, intent lock) that emits a small
number of stable gesture acceptances.
"""

__version__ = "0.1.0"

from .types import (
    AcceptedGesture,
    Classification,
    DebugState,
    GestureDisplay,
    PhraseConsumerProto,
    GESTURE_LABELS,
    NO_GESTURE,
)
from .config import load_config, Cfg, EngineConfig, ClassifierConfig
from .hand_pose import InvalidHandPoseError, as_hand_pose
from .decision import (
    GestureDecisionEngine,
    ConservativeTieBreaker,
    StabilityBuffer,
    IntentLock,
    apply_geometric_gate,
    break_tie,
    thumb_dominates,
)
from .classifier import RuleBasedClassifier
from .consumer_mock import MockConsumer
from .phrases import describe

__all__ = [
    "AcceptedGesture",
    "Classification",
    "DebugState",
    "GestureDisplay",
    "PhraseConsumerProto",
    "GESTURE_LABELS",
    "NO_GESTURE",
    "load_config",
    "Cfg",
    "EngineConfig",
    "ClassifierConfig",
    "InvalidHandPoseError",
    "as_hand_pose",
    "GestureDecisionEngine",
    "ConservativeTieBreaker",
    "StabilityBuffer",
    "IntentLock",
    "apply_geometric_gate",
    "break_tie",
    "thumb_dominates",
    "RuleBasedClassifier",
    "MockConsumer",
    "describe",
]
