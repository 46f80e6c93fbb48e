"""
Main application for the gesture phrase demo.
"""
import asyncio
import logging
import os
import time
from typing import Optional

import cv2
from dotenv import load_dotenv

from .classifier import RuleBasedClassifier
from .config import load_config
from .consumer_mock import MockConsumer
from .decision import GestureDecisionEngine
from .hand_pose import as_hand_pose, fingers_extended
from .landmarks import HandsTracker
from .phrases import describe
from .types import PhraseConsumerProto

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


class GestureRecognitionApp:
    """Main application class for the gesture phrase demo."""

    def __init__(self, config_path: Optional[str] = None,
                 consumer: Optional[PhraseConsumerProto] = None):
        """Initialize the application with configuration."""
        self.config = load_config(config_path)
        self.tracker = HandsTracker(
            model_asset_path=self.config.mediapipe.model_asset_path,
            max_num_hands=self.config.mediapipe.max_num_hands,
            min_detection_conf=self.config.mediapipe.min_detection_confidence,
            min_tracking_conf=self.config.mediapipe.min_tracking_confidence
        )
        self.classifier = RuleBasedClassifier(self.config.classifier)
        self.engine = GestureDecisionEngine(self.config.engine)
        self.consumer = consumer if consumer is not None else MockConsumer()
        self.current_label: Optional[str] = None

        # Initialize camera
        self.cap = cv2.VideoCapture(self.config.camera.index)
        self.cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.config.camera.width)
        self.cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.config.camera.height)
        self.cap.set(cv2.CAP_PROP_FPS, self.config.camera.fps)

        if not self.cap.isOpened():
            self.tracker.close()
            raise RuntimeError(f"Failed to open camera {self.config.camera.index}")

    async def run(self):
        """Run the main application loop. Resources are released however the loop ends."""
        logger.info(f"Starting {self.config.display.window_name}")
        logger.info("🎯 Show a gesture and hold it steady. Press 'q' to quit")

        hand_visible = False

        try:
            while True:
                ret, frame = self.cap.read()
                if not ret:
                    logger.error("Failed to read frame from camera")
                    break

                t_now = time.monotonic()
                landmarks = self.tracker.process(frame, int(t_now * 1000))

                status_text = "No hand detected"

                if landmarks is None:
                    if hand_visible:
                        self.engine.on_hand_lost()
                        self.current_label = None
                        await self.consumer.clear()
                    hand_visible = False
                else:
                    hand_visible = True
                    classification = self.classifier.classify(landmarks)
                    accepted = self.engine.process_frame(classification, landmarks, t_now=t_now)

                    if accepted is not None:
                        self.current_label = accepted.label
                        await self.consumer.announce(accepted)

                    if self.config.display.show_landmarks:
                        frame = self.tracker.draw_landmarks(frame, landmarks)

                    fingers_count = fingers_extended(as_hand_pose(landmarks))
                    status_text = (f"Hand: {fingers_count} fingers | "
                                   f"{classification.label} ({classification.confidence:.2f})")

                self._draw_overlay(frame, status_text, t_now)

                cv2.imshow(self.config.display.window_name, frame)

                # Check for quit key
                if cv2.waitKey(1) & 0xFF == ord('q'):
                    break
        finally:
            self.close()

    def _draw_overlay(self, frame, status_text: str, t_now: float) -> None:
        """Draw status, phrase and engine state on the frame."""
        phrase = describe(self.current_label or "").phrase

        cv2.putText(frame, status_text, (10, 30), cv2.FONT_HERSHEY_SIMPLEX, 0.6, (255, 255, 255), 2)
        cv2.putText(frame, phrase, (10, frame.shape[0] - 50), cv2.FONT_HERSHEY_SIMPLEX, 0.6, (0, 255, 0), 2)

        if self.config.display.show_debug_state:
            state = self.engine.get_debug_state(t_now)
            debug_text = (f"accepted={state.accepted_label} locked={state.is_locked} "
                          f"buffer={state.buffer_size} cooldown={state.cooldown_remaining_ms:.0f}ms")
            cv2.putText(frame, debug_text, (10, 60), cv2.FONT_HERSHEY_SIMPLEX, 0.5, (0, 255, 255), 1)

        cv2.putText(frame, "Press 'q' to quit", (10, frame.shape[0] - 20), cv2.FONT_HERSHEY_SIMPLEX, 0.5, (255, 255, 255), 1)

    def close(self):
        """Release camera, tracker and windows."""
        self.cap.release()
        self.tracker.close()
        cv2.destroyAllWindows()


async def main():
    """Entry point for the application."""
    logging.basicConfig(level=logging.INFO)

    try:
        app = GestureRecognitionApp(config_path=os.getenv("GESTURE_CONFIG"))
        await app.run()
    except KeyboardInterrupt:
        logger.info("Application interrupted by user")


def run():
    asyncio.run(main())


if __name__ == "__main__":
    run()
