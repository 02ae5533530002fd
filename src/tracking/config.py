"""
Config loader for Air Postcard.
Loads YAML configuration with dataclass validation.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Sequence, Tuple, Union
import yaml


Color = Union[str, Sequence[int]]


class ConfigError(ValueError):
    """Raised when a configuration value is out of range."""


def parse_color(color: Color) -> Tuple[int, int, int]:
    """
    Normalize a brush color to an (r, g, b) tuple.

    Accepts '#rgb', '#rrggbb' or a sequence of three ints in 0-255.
    """
    if isinstance(color, str):
        value = color.strip().lstrip('#')
        if len(value) == 3:
            value = ''.join(c * 2 for c in value)
        if len(value) != 6:
            raise ConfigError(f"Invalid hex color: {color!r}")
        try:
            return (int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16))
        except ValueError:
            raise ConfigError(f"Invalid hex color: {color!r}") from None

    try:
        r, g, b = (int(c) for c in color)
    except (TypeError, ValueError):
        raise ConfigError(f"Invalid RGB color: {color!r}") from None
    if not all(0 <= c <= 255 for c in (r, g, b)):
        raise ConfigError(f"RGB components must be in 0-255: {color!r}")
    return (r, g, b)


@dataclass
class CameraConfig:
    device_id: int = 0
    width: int = 1280
    height: int = 720
    fps: int = 30
    mirror: bool = True   # Flip horizontally so drawing follows the hand


@dataclass
class MediaPipeConfig:
    max_num_hands: int = 1
    min_detection_confidence: float = 0.7
    min_tracking_confidence: float = 0.7
    model_path: Optional[str] = None


@dataclass
class FilterConfig:
    process_noise: float = 0.01      # q: lower = smoother but laggier
    measurement_noise: float = 0.15  # r: higher = more aggressive smoothing

    def __post_init__(self):
        if self.process_noise < 0:
            raise ConfigError("filter.process_noise must be >= 0")
        if self.measurement_noise <= 0:
            raise ConfigError("filter.measurement_noise must be > 0")


@dataclass
class BrushConfig:
    color: Color = "#3c3c3c"
    base_size: float = 6.0
    eraser_multiplier: float = 2.5
    
    # Velocity-based width
    min_width_factor: float = 0.4
    max_width_factor: float = 1.2
    velocity_scale: float = 80.0   # Canvas units per frame at which width hits min
    width_smoothing: float = 0.6   # Weight of the previous segment's width
    min_width: float = 1.0

    def __post_init__(self):
        parse_color(self.color)
        if self.base_size <= 0:
            raise ConfigError("brush.base_size must be > 0")
        if self.eraser_multiplier <= 0:
            raise ConfigError("brush.eraser_multiplier must be > 0")
        if not 0 < self.min_width_factor <= self.max_width_factor:
            raise ConfigError("brush width factors must satisfy 0 < min <= max")
        if self.velocity_scale <= 0:
            raise ConfigError("brush.velocity_scale must be > 0")
        if not 0 <= self.width_smoothing < 1:
            raise ConfigError("brush.width_smoothing must be in [0, 1)")
        if self.min_width <= 0:
            raise ConfigError("brush.min_width must be > 0")


@dataclass
class StrokeConfig:
    tension: float = 0.5
    segments_per_span: int = 6
    simplify: bool = True
    simplify_tolerance: float = 1.0

    def __post_init__(self):
        if self.segments_per_span < 1:
            raise ConfigError("stroke.segments_per_span must be >= 1")
        if self.simplify_tolerance < 0:
            raise ConfigError("stroke.simplify_tolerance must be >= 0")


@dataclass
class HistoryConfig:
    capacity: int = 50

    def __post_init__(self):
        if self.capacity < 1:
            raise ConfigError("history.capacity must be >= 1")


@dataclass
class CanvasConfig:
    width: int = 1024
    height: int = 768
    pixel_ratio: float = 1.0   # Raster pixels per canvas unit (high-DPI)

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ConfigError("canvas dimensions must be > 0")
        if self.pixel_ratio <= 0:
            raise ConfigError("canvas.pixel_ratio must be > 0")


@dataclass
class Config:
    camera: CameraConfig = field(default_factory=CameraConfig)
    mediapipe: MediaPipeConfig = field(default_factory=MediaPipeConfig)
    filter: FilterConfig = field(default_factory=FilterConfig)
    brush: BrushConfig = field(default_factory=BrushConfig)
    stroke: StrokeConfig = field(default_factory=StrokeConfig)
    history: HistoryConfig = field(default_factory=HistoryConfig)
    canvas: CanvasConfig = field(default_factory=CanvasConfig)


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

    Raises:
        ConfigError: If a value fails validation.
    """
    if config_path is None:
        # Default to config.yaml in project root
        config_path = Path(__file__).parent.parent.parent / "config.yaml"
    
    config_path = Path(config_path)
    
    if not config_path.exists():
        # Return defaults if no config file
        return Config()
    
    with open(config_path, 'r') as f:
        data = yaml.safe_load(f) or {}
    
    return Config(
        camera=_dict_to_dataclass(CameraConfig, data.get('camera')),
        mediapipe=_dict_to_dataclass(MediaPipeConfig, data.get('mediapipe')),
        filter=_dict_to_dataclass(FilterConfig, data.get('filter')),
        brush=_dict_to_dataclass(BrushConfig, data.get('brush')),
        stroke=_dict_to_dataclass(StrokeConfig, data.get('stroke')),
        history=_dict_to_dataclass(HistoryConfig, data.get('history')),
        canvas=_dict_to_dataclass(CanvasConfig, data.get('canvas')),
    )
