"""
Hand landmark detection using the MediaPipe Tasks HandLandmarker.
"""
import logging
from pathlib import Path
from typing import List, Optional, Tuple

import cv2
import mediapipe as mp
import numpy as np
from mediapipe.tasks import python as mp_python
from mediapipe.tasks.python import vision as mp_vision

logger = logging.getLogger(__name__)

# Bone connections between the 21 landmarks
HAND_CONNECTIONS = [
    (0, 1), (1, 2), (2, 3), (3, 4),
    (0, 5), (5, 6), (6, 7), (7, 8),
    (5, 9), (9, 10), (10, 11), (11, 12),
    (9, 13), (13, 14), (14, 15), (15, 16),
    (13, 17), (17, 18), (18, 19), (19, 20),
    (0, 17),
]


class HandsTracker:
    """Hand landmark tracker using the MediaPipe HandLandmarker task."""

    def __init__(self, model_asset_path: str, max_num_hands: int = 1,
                 min_detection_conf: float = 0.6, min_tracking_conf: float = 0.6):
        """
        Initialize the hands tracker.

        Args:
            model_asset_path: Path to the hand_landmarker.task model bundle
            max_num_hands: Maximum number of hands to detect
            min_detection_conf: Minimum confidence for hand detection
            min_tracking_conf: Minimum confidence for hand tracking
        """
        if not Path(model_asset_path).exists():
            raise FileNotFoundError(f"Hand landmarker model not found: {model_asset_path}")

        options = mp_vision.HandLandmarkerOptions(
            base_options=mp_python.BaseOptions(model_asset_path=str(model_asset_path)),
            running_mode=mp_vision.RunningMode.VIDEO,
            num_hands=max_num_hands,
            min_hand_detection_confidence=min_detection_conf,
            min_hand_presence_confidence=min_detection_conf,
            min_tracking_confidence=min_tracking_conf
        )
        self.landmarker = mp_vision.HandLandmarker.create_from_options(options)
        self.last_timestamp_ms = -1
        logger.info("MediaPipe HandLandmarker initialized (VIDEO mode)")

    def process(self, frame_bgr: np.ndarray,
                timestamp_ms: int) -> Optional[List[Tuple[float, float, float]]]:
        """
        Process a frame and return hand landmarks.

        Args:
            frame_bgr: Input frame in BGR format
            timestamp_ms: Frame timestamp, must increase between calls

        Returns:
            List of 21 (x, y, z) coordinates, or None if no hand detected
        """
        # VIDEO mode rejects non-increasing timestamps
        timestamp_ms = max(timestamp_ms, self.last_timestamp_ms + 1)
        self.last_timestamp_ms = timestamp_ms

        # Convert BGR to RGB for MediaPipe
        frame_rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)
        mp_image = mp.Image(image_format=mp.ImageFormat.SRGB, data=frame_rgb)

        result = self.landmarker.detect_for_video(mp_image, timestamp_ms)

        if not result.hand_landmarks:
            return None

        # Return landmarks for the first detected hand
        return [(lm.x, lm.y, lm.z) for lm in result.hand_landmarks[0]]

    def draw_landmarks(self, frame: np.ndarray,
                       landmarks: List[Tuple[float, float, float]]) -> np.ndarray:
        """
        Draw hand landmarks on the frame.

        Args:
            frame: Input frame
            landmarks: List of (x, y, z) coordinates with x, y in [0..1] range

        Returns:
            Frame with landmarks drawn
        """
        height, width = frame.shape[:2]
        points = [(int(x * width), int(y * height)) for x, y, _ in landmarks]

        for start, end in HAND_CONNECTIONS:
            cv2.line(frame, points[start], points[end], (255, 255, 255), 1)

        for i, (px, py) in enumerate(points):
            cv2.circle(frame, (px, py), 3, (0, 255, 0), -1)
            cv2.putText(frame, str(i), (px + 5, py - 5), cv2.FONT_HERSHEY_SIMPLEX, 0.3, (255, 255, 255), 1)

        return frame

    def close(self) -> None:
        self.landmarker.close()
