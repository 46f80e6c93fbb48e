"""
Mock consumer implementation for testing accepted gestures.
"""
import logging
from typing import List

from .phrases import describe, WAITING_PHRASE
from .types import AcceptedGesture

logger = logging.getLogger(__name__)


class MockConsumer:
    """Mock consumer that logs phrases instead of rendering or speaking them."""

    def __init__(self):
        """Initialize the mock consumer."""
        self.announced: List[AcceptedGesture] = []
        self.current_phrase = WAITING_PHRASE

    async def announce(self, gesture: AcceptedGesture) -> None:
        """Log the phrase for an accepted gesture."""
        self.announced.append(gesture)
        display = describe(gesture.label)
        self.current_phrase = display.phrase
        logger.info(f"[MockConsumer] {display.gesture_type}: {display.phrase} "
                    f"({gesture.reason_tag}, call #{len(self.announced)})")

    async def clear(self) -> None:
        """Return to the waiting phrase."""
        self.current_phrase = WAITING_PHRASE
