"""
Type definitions for the gesture phrase system.
"""
from dataclasses import dataclass
from typing import Dict, Literal, Optional, Protocol, runtime_checkable


GestureLabel = Literal["OPEN_PALM", "CLOSED_FIST", "THUMBS_UP", "POINTING_UP", "PEACE_SIGN"]

OPEN_PALM = "OPEN_PALM"
CLOSED_FIST = "CLOSED_FIST"
THUMBS_UP = "THUMBS_UP"
POINTING_UP = "POINTING_UP"
PEACE_SIGN = "PEACE_SIGN"

# Sentinel emitted by the classifier for low-confidence frames
NO_GESTURE = "NONE"

# Order matches the classifier output indices
GESTURE_LABELS = (OPEN_PALM, CLOSED_FIST, THUMBS_UP, POINTING_UP, PEACE_SIGN)

# Most conservative first
CONSERVATIVENESS_RANKING = (OPEN_PALM, POINTING_UP, PEACE_SIGN, CLOSED_FIST, THUMBS_UP)


def is_gesture_label(label: Optional[str]) -> bool:
    """Return True if the label belongs to the fixed gesture vocabulary."""
    return label in GESTURE_LABELS


@dataclass
class Classification:
    """Raw classifier output for a single frame."""
    label: str
    confidence: float
    scores: Optional[Dict[str, float]] = None  # full per-class confidence, when available

    def __post_init__(self):
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"Confidence must be within [0, 1], got {self.confidence}")


@dataclass
class AcceptedGesture:
    """A gesture the decision engine has accepted as intentional."""
    label: GestureLabel
    reason_tag: str


@dataclass
class DebugState:
    """Read-only snapshot of the decision engine."""
    accepted_label: Optional[str]
    is_locked: bool
    buffer_size: int
    cooldown_remaining_ms: float


@dataclass
class GestureDisplay:
    """Display metadata the consumer attaches to an accepted gesture."""
    gesture_type: Optional[str]
    phrase: str


@runtime_checkable
class PhraseConsumerProto(Protocol):
    """Abstract protocol for consumers that react to accepted gestures."""

    async def announce(self, gesture: AcceptedGesture) -> None:
        """React to an accepted gesture (render it, speak its phrase)."""
        ...

    async def clear(self) -> None:
        """Return to the idle display after the hand is lost."""
        ...
