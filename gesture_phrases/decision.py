"""
Gesture decision engine that turns noisy per-frame classifier output into
stable, intentional gesture acceptances.
"""
import logging
import math
import time
from collections import deque
from dataclasses import dataclass
from typing import Callable, List, Mapping, Optional, Protocol, Sequence, Tuple

import numpy as np

from .config import EngineConfig
from .hand_pose import FINGER_TIPS, THUMB_TIP, as_hand_pose, wrist_distances
from .types import (
    AcceptedGesture,
    Classification,
    CLOSED_FIST,
    CONSERVATIVENESS_RANKING,
    DebugState,
    NO_GESTURE,
    THUMBS_UP,
    is_gesture_label,
)

logger = logging.getLogger(__name__)

# Confidence differences this close to the tie margin count as equal to it
MARGIN_TOLERANCE = 1e-9


# =============================================================================
# GEOMETRIC CORRECTION GATE
# =============================================================================

def thumb_dominates(pose: np.ndarray, factor: float = 1.3) -> bool:
    """
    Check whether the thumb is significantly more extended than the other fingers.

    Args:
        pose: Validated (21, 3) hand pose
        factor: Thumb-to-wrist distance must exceed this multiple of the
            largest non-thumb fingertip distance

    Returns:
        True if the thumb dominates (strictly greater, not equal)
    """
    thumb_distance = wrist_distances(pose, [THUMB_TIP])[0]
    max_other = wrist_distances(pose, FINGER_TIPS).max()
    return bool(thumb_distance > factor * max_other)


def apply_geometric_gate(label: str, pose: np.ndarray, factor: float = 1.3) -> str:
    """
    Relabel THUMBS_UP as CLOSED_FIST unless the thumb geometry backs it up.

    Every other label passes through unchanged.
    """
    if label != THUMBS_UP:
        return label
    if thumb_dominates(pose, factor):
        return label
    return CLOSED_FIST


# =============================================================================
# CONFIDENCE TIE-BREAK
# =============================================================================

class TieBreakerProto(Protocol):
    """Strategy that may replace a label given the full per-class confidence."""

    def resolve(self, label: str, scores: Mapping[str, float]) -> str:
        ...


def _ranked_candidates(scores: Mapping[str, float],
                       ranking: Sequence[str]) -> List[Tuple[str, float]]:
    """Known labels from the score mapping, highest confidence first."""
    candidates = [(label, conf) for label, conf in scores.items() if label in ranking]
    return sorted(candidates, key=lambda item: item[1], reverse=True)


def break_tie(scores: Mapping[str, float], margin: float = 0.1,
              ranking: Sequence[str] = CONSERVATIVENESS_RANKING) -> Optional[str]:
    """
    Pick a label from a full confidence distribution.

    If the top two candidates differ by less than ``margin``, the one ranked
    more conservative wins; otherwise the top candidate is returned. A
    difference equal to ``margin`` within ``MARGIN_TOLERANCE`` is not a tie,
    so 0.6 vs 0.5 behaves like 0.8 vs 0.7 despite float rounding.

    Args:
        scores: Per-class confidence
        margin: Confidence difference below which two candidates are tied
        ranking: Labels ordered from most to least conservative

    Returns:
        The chosen label, or None if no known label is present
    """
    candidates = _ranked_candidates(scores, ranking)
    if not candidates:
        return None
    if len(candidates) == 1:
        return candidates[0][0]

    (top, top_conf), (runner_up, runner_up_conf) = candidates[:2]
    diff = top_conf - runner_up_conf
    if diff < margin and not math.isclose(diff, margin, abs_tol=MARGIN_TOLERANCE):
        return min(top, runner_up, key=ranking.index)
    return top


class ConservativeTieBreaker:
    """
    Prefers the behaviorally safer gesture when the classifier is torn.

    A label that is not the distribution's top candidate has already been
    overridden upstream (by the geometric gate) and is kept as-is.
    """

    def __init__(self, margin: float = 0.1,
                 ranking: Sequence[str] = CONSERVATIVENESS_RANKING):
        self.margin = margin
        self.ranking = tuple(ranking)

    def resolve(self, label: str, scores: Mapping[str, float]) -> str:
        candidates = _ranked_candidates(scores, self.ranking)
        if not candidates or candidates[0][0] != label:
            return label
        return break_tie(scores, self.margin, self.ranking)


# =============================================================================
# STABILITY VOTING
# =============================================================================

@dataclass
class StabilitySample:
    """Classifier vote recorded at a specific time."""
    label: str
    confidence: float
    timestamp: float


class StabilityBuffer:
    """
    Rolling window of votes that reports a label once every vote agrees.

    Features:
    - Fixed capacity, oldest vote evicted first
    - Stable only when the window is full and unanimous
    """

    def __init__(self, window: int):
        self.window = window
        self.samples: deque[StabilitySample] = deque(maxlen=window)

    def observe(self, label: str, confidence: float, timestamp: float) -> Optional[str]:
        """
        Record a vote.

        Returns:
            The label if the last ``window`` votes all agree, None otherwise
        """
        self.samples.append(StabilitySample(label=label, confidence=confidence, timestamp=timestamp))

        if len(self.samples) < self.window:
            return None
        if all(sample.label == label for sample in self.samples):
            return label
        return None

    def clear(self) -> None:
        self.samples.clear()

    def __len__(self) -> int:
        return len(self.samples)


# =============================================================================
# INTENT LOCK
# =============================================================================

class IntentLock:
    """Time-boxed lock engaged when a gesture is accepted."""

    def __init__(self, cooldown_ms: float):
        self.cooldown_s = cooldown_ms / 1000.0
        self.engaged_at: Optional[float] = None

    def engage(self, t_now: float) -> None:
        self.engaged_at = t_now

    def release(self) -> None:
        self.engaged_at = None

    def is_locked(self, t_now: float) -> bool:
        if self.engaged_at is None:
            return False
        return (t_now - self.engaged_at) < self.cooldown_s

    def remaining_s(self, t_now: float) -> float:
        """Seconds left on the lock, 0.0 when idle."""
        if not self.is_locked(t_now):
            return 0.0
        return min(self.cooldown_s, self.cooldown_s - (t_now - self.engaged_at))


# =============================================================================
# DECISION ENGINE
# =============================================================================

class GestureDecisionEngine:
    """
    Deterministic frame-by-frame decision engine for one tracking session.

    Pipeline per frame:
    1. Drop NONE and unknown labels (buffer untouched)
    2. Ignore everything while the intent lock is engaged
    3. Geometric gate (THUMBS_UP needs a dominant thumb)
    4. Confidence tie-break, when a full distribution is available
    5. Stability voting
    6. Accept a stable label that differs from the last accepted one

    Each tracked hand needs its own engine; instances share no state.
    """

    def __init__(self, config: Optional[EngineConfig] = None,
                 tie_breaker: Optional[TieBreakerProto] = None,
                 clock: Callable[[], float] = time.monotonic):
        """
        Initialize the engine.

        Args:
            config: Engine settings, defaults to EngineConfig()
            tie_breaker: Strategy applied when per-class scores are present,
                defaults to a ConservativeTieBreaker using the configured margin
            clock: Monotonic time source in seconds
        """
        self.config = config if config is not None else EngineConfig()
        self.tie_breaker = (tie_breaker if tie_breaker is not None
                            else ConservativeTieBreaker(self.config.tie_break_margin))
        self.clock = clock

        self.stability_buffer = StabilityBuffer(self.config.stability_frames)
        self.intent_lock = IntentLock(self.config.cooldown_ms)
        self.accepted_gesture: Optional[str] = None

    @property
    def accepted_at(self) -> Optional[float]:
        """Timestamp of the last acceptance, None when idle since reset."""
        return self.intent_lock.engaged_at

    def is_locked(self, t_now: Optional[float] = None) -> bool:
        if t_now is None:
            t_now = self.clock()
        return self.intent_lock.is_locked(t_now)

    def process_frame(self, classification: Classification,
                      hand_pose: Optional[Sequence[Sequence[float]]],
                      t_now: Optional[float] = None) -> Optional[AcceptedGesture]:
        """
        Process one classified frame.

        Args:
            classification: Classifier output for the frame
            hand_pose: 21 (x, y, z) landmarks for the same frame
            t_now: Current time in seconds; the clock is read once if omitted

        Returns:
            AcceptedGesture when a new gesture is accepted, None otherwise

        Raises:
            InvalidHandPoseError: if a gesture label comes with a malformed pose
        """
        if t_now is None:
            t_now = self.clock()

        label = classification.label
        if label == NO_GESTURE:
            # Low-confidence frame: keep stabilization progress
            return None
        if not is_gesture_label(label):
            logger.debug(f"Ignoring unknown label {label!r}")
            return None

        pose = as_hand_pose(hand_pose)

        if self.intent_lock.is_locked(t_now):
            return None

        final_label = apply_geometric_gate(label, pose, self.config.thumb_dominance_threshold)
        if final_label != label:
            logger.debug(f"Thumb gate: {label} -> {final_label}")

        if classification.scores is not None:
            resolved = self.tie_breaker.resolve(final_label, classification.scores)
            if resolved != final_label:
                logger.debug(f"Tie-break: {final_label} -> {resolved}")
            final_label = resolved
            if not is_gesture_label(final_label):
                logger.debug(f"Tie-break produced unknown label {final_label!r}")
                return None

        stable_label = self.stability_buffer.observe(final_label, classification.confidence, t_now)
        if stable_label is None:
            return None

        if stable_label == self.accepted_gesture:
            # Held gesture re-confirmed after cooldown: start a clean cycle
            self.stability_buffer.clear()
            return None

        self.accepted_gesture = stable_label
        self.intent_lock.engage(t_now)
        self.stability_buffer.clear()

        logger.info(f"✅ Accepted gesture {stable_label}")
        return AcceptedGesture(
            label=stable_label,
            reason_tag=f"stable ({self.config.stability_frames} frames)"
        )

    def on_hand_lost(self) -> None:
        """Losing the hand ends intent: clear everything, including the lock."""
        if self.accepted_gesture is not None or len(self.stability_buffer):
            logger.debug("Hand lost, resetting decision engine")
        self.reset()

    def reset(self) -> None:
        """Clear the stability buffer, accepted gesture and cooldown."""
        self.stability_buffer.clear()
        self.accepted_gesture = None
        self.intent_lock.release()

    def get_debug_state(self, t_now: Optional[float] = None) -> DebugState:
        """Snapshot of the engine state without side effects."""
        if t_now is None:
            t_now = self.clock()
        return DebugState(
            accepted_label=self.accepted_gesture,
            is_locked=self.intent_lock.is_locked(t_now),
            buffer_size=len(self.stability_buffer),
            cooldown_remaining_ms=self.intent_lock.remaining_s(t_now) * 1000.0
        )
