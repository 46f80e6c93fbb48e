"""
Test cases for hand pose validation and finger geometry.
"""
import unittest
import sys
from pathlib import Path

import numpy as np

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from gesture_phrases.hand_pose import (
    InvalidHandPoseError,
    as_hand_pose,
    finger_states,
    fingers_extended,
    wrist_distances,
)
from tests.poses import make_hand


class TestAsHandPose(unittest.TestCase):
    """Test pose validation."""

    def test_accepts_tuples(self):
        pose = as_hand_pose(make_hand(True, True, True, True, True))
        self.assertEqual(pose.shape, (21, 3))
        self.assertEqual(pose.dtype, np.float64)

    def test_returns_copy(self):
        source = np.zeros((21, 3))
        pose = as_hand_pose(source)
        pose[0, 0] = 1.0
        self.assertEqual(source[0, 0], 0.0)

    def test_rejects_missing_pose(self):
        with self.assertRaises(InvalidHandPoseError):
            as_hand_pose(None)

    def test_rejects_wrong_point_count(self):
        with self.assertRaises(InvalidHandPoseError):
            as_hand_pose([(0.0, 0.0, 0.0)] * 20)

    def test_rejects_2d_points(self):
        with self.assertRaises(InvalidHandPoseError):
            as_hand_pose([(0.0, 0.0)] * 21)

    def test_rejects_ragged_points(self):
        points = [(0.0, 0.0, 0.0)] * 21
        points[7] = (0.0, 0.0)
        with self.assertRaises(InvalidHandPoseError):
            as_hand_pose(points)

    def test_rejects_missing_wrist(self):
        points = [(0.0, 0.0, 0.0)] * 21
        points[0] = (float("nan"), 0.0, 0.0)
        with self.assertRaisesRegex(InvalidHandPoseError, "wrist"):
            as_hand_pose(points)

    def test_error_is_value_error(self):
        self.assertTrue(issubclass(InvalidHandPoseError, ValueError))


class TestFingerGeometry(unittest.TestCase):
    """Test finger extension helpers."""

    def test_open_hand(self):
        pose = as_hand_pose(make_hand(True, True, True, True, True))
        self.assertEqual(fingers_extended(pose), 5)

    def test_fist(self):
        pose = as_hand_pose(make_hand(False, False, False, False, False))
        self.assertEqual(fingers_extended(pose), 0)

    def test_peace(self):
        states = finger_states(as_hand_pose(make_hand(False, True, True, False, False)))
        self.assertEqual(states, {"thumb": False, "index": True, "middle": True,
                                  "ring": False, "pinky": False})

    def test_wrist_distances(self):
        pose = np.zeros((21, 3))
        pose[4] = (3.0, 4.0, 0.0)
        pose[8] = (0.0, 0.0, 2.0)
        np.testing.assert_allclose(wrist_distances(pose, [4, 8]), [5.0, 2.0])


if __name__ == '__main__':
    unittest.main()
