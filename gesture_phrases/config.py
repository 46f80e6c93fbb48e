"""
Configuration management for the gesture phrase system.
"""
import yaml
from importlib import resources
from pathlib import Path
from typing import Optional, Dict, Any
from dataclasses import dataclass

DEFAULT_CONFIG_NAME = "config.default.yaml"


@dataclass
class CameraConfig:
    """Camera configuration settings."""
    index: int
    width: int
    height: int
    fps: int


@dataclass
class MediaPipeConfig:
    """MediaPipe HandLandmarker configuration settings."""
    model_asset_path: str
    max_num_hands: int
    min_detection_confidence: float
    min_tracking_confidence: float


@dataclass
class EngineConfig:
    """Decision engine configuration."""
    stability_frames: int = 8
    cooldown_ms: int = 2500
    thumb_dominance_threshold: float = 1.3
    tie_break_margin: float = 0.1

    def __post_init__(self):
        if self.stability_frames < 1:
            raise ValueError(f"stability_frames must be >= 1, got {self.stability_frames}")
        if self.cooldown_ms < 0:
            raise ValueError(f"cooldown_ms must be >= 0, got {self.cooldown_ms}")
        if self.thumb_dominance_threshold <= 0:
            raise ValueError(
                f"thumb_dominance_threshold must be > 0, got {self.thumb_dominance_threshold}"
            )
        if self.tie_break_margin < 0:
            raise ValueError(f"tie_break_margin must be >= 0, got {self.tie_break_margin}")


@dataclass
class ClassifierConfig:
    """Rule-based classifier configuration."""
    confidence_threshold: float = 0.65


@dataclass
class DisplayConfig:
    """Display configuration settings."""
    show_landmarks: bool
    show_debug_state: bool
    window_name: str


@dataclass
class Cfg:
    """Main configuration class."""
    camera: CameraConfig
    mediapipe: MediaPipeConfig
    engine: EngineConfig
    classifier: ClassifierConfig
    display: DisplayConfig


def load_config(path: Optional[str] = None) -> Cfg:
    """
    Load configuration from YAML file.

    Args:
        path: Path to config file. If None, uses the config.default.yaml
            shipped inside the package

    Returns:
        Configuration object with all settings
    """
    if path is None:
        default_config = resources.files(__package__).joinpath(DEFAULT_CONFIG_NAME)
        with resources.as_file(default_config) as default_path:
            return load_config(str(default_path))

    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r') as f:
        data = yaml.safe_load(f)

    return _dict_to_config(data)


def _dict_to_config(data: Dict[str, Any]) -> Cfg:
    """Convert dictionary to configuration object."""
    camera_data = data['camera']
    camera = CameraConfig(
        index=camera_data['index'],
        width=camera_data['width'],
        height=camera_data['height'],
        fps=camera_data['fps']
    )

    mp_data = data['mediapipe']
    mediapipe = MediaPipeConfig(
        model_asset_path=mp_data['model_asset_path'],
        max_num_hands=mp_data['max_num_hands'],
        min_detection_confidence=mp_data['min_detection_confidence'],
        min_tracking_confidence=mp_data['min_tracking_confidence']
    )

    # Engine and classifier sections fall back to built-in defaults
    engine = EngineConfig(**data.get('engine', {}))
    classifier = ClassifierConfig(**data.get('classifier', {}))

    display_data = data['display']
    display = DisplayConfig(
        show_landmarks=display_data['show_landmarks'],
        show_debug_state=display_data['show_debug_state'],
        window_name=display_data['window_name']
    )

    return Cfg(
        camera=camera,
        mediapipe=mediapipe,
        engine=engine,
        classifier=classifier,
        display=display
    )
