"""
Hand pose validation and finger geometry on 21-point hand landmarks.
"""
import numpy as np
from typing import Dict, Optional, Sequence

NUM_LANDMARKS = 21

WRIST = 0
THUMB_MCP = 2
THUMB_TIP = 4
INDEX_MCP = 5
INDEX_PIP = 6
INDEX_TIP = 8
MIDDLE_PIP = 10
MIDDLE_TIP = 12
RING_PIP = 14
RING_TIP = 16
PINKY_PIP = 18
PINKY_TIP = 20

# Tip and PIP joint for the four non-thumb fingers
FINGER_TIPS = (INDEX_TIP, MIDDLE_TIP, RING_TIP, PINKY_TIP)
FINGER_PIPS = (INDEX_PIP, MIDDLE_PIP, RING_PIP, PINKY_PIP)

FINGER_NAMES = ("thumb", "index", "middle", "ring", "pinky")


class InvalidHandPoseError(ValueError):
    """Raised when a hand pose does not have the 21-point layout."""


def as_hand_pose(landmarks: Optional[Sequence[Sequence[float]]]) -> np.ndarray:
    """
    Validate landmarks and return them as a (21, 3) float array.

    Args:
        landmarks: 21 (x, y, z) points, or an array of that shape

    Returns:
        A new float array; the caller's landmarks are never retained

    Raises:
        InvalidHandPoseError: if the pose is missing or malformed
    """
    if landmarks is None:
        raise InvalidHandPoseError("Hand pose is missing")

    try:
        pose = np.array(landmarks, dtype=float)
    except (TypeError, ValueError) as e:
        raise InvalidHandPoseError(f"Hand pose is not numeric: {e}") from e

    if pose.shape != (NUM_LANDMARKS, 3):
        raise InvalidHandPoseError(
            f"Hand pose must have shape ({NUM_LANDMARKS}, 3), got {pose.shape}"
        )
    if not np.all(np.isfinite(pose[WRIST])):
        raise InvalidHandPoseError("Hand pose is missing the wrist point")
    if not np.all(np.isfinite(pose)):
        raise InvalidHandPoseError("Hand pose contains non-finite coordinates")

    return pose


def wrist_distances(pose: np.ndarray, indices: Sequence[int]) -> np.ndarray:
    """Euclidean distance from the wrist to each of the given landmarks."""
    return np.linalg.norm(pose[list(indices)] - pose[WRIST], axis=1)


def is_thumb_extended(pose: np.ndarray) -> bool:
    """
    Check if the thumb is extended.

    The thumb is extended when its tip sits well away from the palm
    horizontally, or clearly above its MCP joint.
    """
    thumb_tip = pose[THUMB_TIP]
    palm_center_x = (pose[WRIST][0] + pose[INDEX_MCP][0]) / 2
    away_from_palm = abs(thumb_tip[0] - palm_center_x) > 0.1
    pointing_up = thumb_tip[1] < pose[THUMB_MCP][1] - 0.05  # inverted y-axis
    return bool(away_from_palm or pointing_up)


def is_finger_extended(pose: np.ndarray, tip_idx: int, pip_idx: int) -> bool:
    """A finger is extended when its tip is above its PIP joint (inverted y-axis)."""
    return bool(pose[tip_idx][1] < pose[pip_idx][1])


def finger_states(pose: np.ndarray) -> Dict[str, bool]:
    """
    Extension state of every finger.

    Returns:
        Mapping of finger name (thumb, index, middle, ring, pinky) to True if extended
    """
    states = {"thumb": is_thumb_extended(pose)}
    for name, tip_idx, pip_idx in zip(FINGER_NAMES[1:], FINGER_TIPS, FINGER_PIPS):
        states[name] = is_finger_extended(pose, tip_idx, pip_idx)
    return states


def fingers_extended(pose: np.ndarray) -> int:
    """Count the number of extended fingers (0-5)."""
    return sum(finger_states(pose).values())
