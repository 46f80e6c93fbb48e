"""
Test cases for YAML configuration loading.
"""
import os
import tempfile
import unittest
import sys
from pathlib import Path

import yaml

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from gesture_phrases.config import DEFAULT_CONFIG_NAME, EngineConfig, load_config


BASE_CONFIG = {
    "camera": {"index": 1, "width": 320, "height": 240, "fps": 15},
    "mediapipe": {
        "model_asset_path": "hand_landmarker.task",
        "max_num_hands": 1,
        "min_detection_confidence": 0.5,
        "min_tracking_confidence": 0.5,
    },
    "display": {"show_landmarks": False, "show_debug_state": False, "window_name": "Test"},
}


class TestLoadConfig(unittest.TestCase):
    """Test configuration loading."""

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.tmpdir.cleanup()

    def write_config(self, data) -> str:
        path = Path(self.tmpdir.name) / "config.yaml"
        with open(path, "w") as f:
            yaml.safe_dump(data, f)
        return str(path)

    def test_default_config(self):
        cfg = load_config()
        self.assertEqual(cfg.engine.stability_frames, 8)
        self.assertEqual(cfg.engine.cooldown_ms, 2500)
        self.assertEqual(cfg.engine.thumb_dominance_threshold, 1.3)
        self.assertEqual(cfg.engine.tie_break_margin, 0.1)
        self.assertEqual(cfg.classifier.confidence_threshold, 0.65)
        self.assertEqual(cfg.mediapipe.max_num_hands, 1)

    def test_default_config_ships_with_package(self):
        """The default file lives inside the package, so installs can find it."""
        import gesture_phrases
        package_dir = Path(gesture_phrases.__file__).parent
        self.assertTrue((package_dir / DEFAULT_CONFIG_NAME).is_file())

        cwd = os.getcwd()
        os.chdir(self.tmpdir.name)
        try:
            cfg = load_config()
        finally:
            os.chdir(cwd)
        self.assertEqual(cfg.display.window_name, "Gesture Phrases")

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            load_config(str(Path(self.tmpdir.name) / "missing.yaml"))

    def test_engine_section_optional(self):
        cfg = load_config(self.write_config(BASE_CONFIG))
        self.assertEqual(cfg.engine, EngineConfig())
        self.assertEqual(cfg.camera.width, 320)
        self.assertEqual(cfg.display.window_name, "Test")

    def test_engine_overrides(self):
        data = dict(BASE_CONFIG, engine={"stability_frames": 5, "cooldown_ms": 1000})
        cfg = load_config(self.write_config(data))
        self.assertEqual(cfg.engine.stability_frames, 5)
        self.assertEqual(cfg.engine.cooldown_ms, 1000)
        self.assertEqual(cfg.engine.tie_break_margin, 0.1)

    def test_invalid_engine_values(self):
        with self.assertRaises(ValueError):
            load_config(self.write_config(dict(BASE_CONFIG, engine={"stability_frames": 0})))
        with self.assertRaises(ValueError):
            EngineConfig(cooldown_ms=-1)
        with self.assertRaises(ValueError):
            EngineConfig(thumb_dominance_threshold=0.0)
        with self.assertRaises(ValueError):
            EngineConfig(tie_break_margin=-0.1)


if __name__ == '__main__':
    unittest.main()
