"""
Consumer-owned display metadata for accepted gestures.
"""
from .types import GestureDisplay

WAITING_PHRASE = "Waiting for input…"

LABEL_TO_PHRASE = {
    'OPEN_PALM': "Let's put a pin in that for now.",
    'CLOSED_FIST': "We need to circle back to the core deliverables.",
    'THUMBS_UP': "I am fully aligned with this initiative.",
    'POINTING_UP': "Let's take this offline.",
    'PEACE_SIGN': "We have verified the cross-functional synergy.",
}

LABEL_TO_GESTURE_TYPE = {
    'OPEN_PALM': 'open-palm',
    'CLOSED_FIST': 'fist',
    'THUMBS_UP': 'thumbs-up',
    'POINTING_UP': 'pointing',
    'PEACE_SIGN': 'peace',
}


def describe(label: str) -> GestureDisplay:
    """Map a gesture label to its UI gesture type and phrase."""
    return GestureDisplay(
        gesture_type=LABEL_TO_GESTURE_TYPE.get(label),
        phrase=LABEL_TO_PHRASE.get(label, WAITING_PHRASE)
    )
