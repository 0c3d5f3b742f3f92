"""
Config loader for HandMorph.
Loads YAML configuration with dataclass validation.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import yaml


@dataclass
class CameraConfig:
    device_id: int = 0
    width: int = 640
    height: int = 480
    fps: int = 30


@dataclass
class MediaPipeConfig:
    max_num_hands: int = 1
    min_detection_confidence: float = 0.7
    min_tracking_confidence: float = 0.7


@dataclass
class GestureConfig:
    pinch_gain: float = 5.0        # pinch = 1 - gain * thumb/index distance
    openness_gain: float = 1.2     # openness = gain * (index + middle reach)
    depth_gain: float = 2.0        # depth = -gain * wrist.z
    decay: float = 0.9             # Per-frame retention while no hand is visible
    orientation_dwell_ms: float = 1200.0  # Min time between template switches


@dataclass
class MorphConfig:
    count: int = 6000
    progress_rate: float = 0.04    # Morph progress added per frame
    approach_rate: float = 0.15    # Fraction of remaining distance covered per frame
    initial_template: str = "sphere"


@dataclass
class RenderConfig:
    base_scale: float = 0.6
    scale_gain: float = 1.6
    scale_rate: float = 0.08
    color_start: str = "#66ccff"
    color_end: str = "#ff66cc"
    point_size_base: float = 0.015
    point_size_gain: float = 0.04
    initial_point_size: float = 0.025
    rotation_speed: float = 0.002  # Radians per frame around Y
    fov: float = 60.0
    near: float = 0.1
    far: float = 100.0
    camera_distance: float = 4.0
    fps: int = 60


@dataclass
class UIConfig:
    width: int = 1280
    height: int = 720
    preview_width: int = 220
    preview_height: int = 160
    show_preview: bool = True
    debug_overlay: bool = False


@dataclass
class Config:
    camera: CameraConfig = field(default_factory=CameraConfig)
    mediapipe: MediaPipeConfig = field(default_factory=MediaPipeConfig)
    gestures: GestureConfig = field(default_factory=GestureConfig)
    morph: MorphConfig = field(default_factory=MorphConfig)
    render: RenderConfig = field(default_factory=RenderConfig)
    ui: UIConfig = field(default_factory=UIConfig)


def _dict_to_dataclass(cls, data: dict):
    """Convert a dict to a dataclass, ignoring unknown keys."""
    if data is None:
        return cls()
    field_names = {f.name for f in cls.__dataclass_fields__.values()}
    filtered = {k: v for k, v in data.items() if k in field_names}
    return cls(**filtered)


def load_config(config_path: Optional[Path] = None) -> Config:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to config file. If None, uses default config.yaml
                    in project root.

    Returns:
        Config dataclass with all settings.
    """
    if config_path is None:
        config_path = Path(__file__).parent.parent.parent / "config.yaml"

    config_path = Path(config_path)

    if not config_path.exists():
        return Config()

    with open(config_path, 'r') as f:
        data = yaml.safe_load(f) or {}

    config = Config(
        camera=_dict_to_dataclass(CameraConfig, data.get('camera')),
        mediapipe=_dict_to_dataclass(MediaPipeConfig, data.get('mediapipe')),
        gestures=_dict_to_dataclass(GestureConfig, data.get('gestures')),
        morph=_dict_to_dataclass(MorphConfig, data.get('morph')),
        render=_dict_to_dataclass(RenderConfig, data.get('render')),
        ui=_dict_to_dataclass(UIConfig, data.get('ui')),
    )

    if config.morph.count <= 0:
        raise ValueError(f"morph.count must be positive, got {config.morph.count}")

    return config
