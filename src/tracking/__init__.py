"""
Air Postcard Tracking Module

Hand landmark input, gesture classification and coordinate filtering.
The MediaPipe wrapper lives in tracking.hand_tracker and is imported on
demand so the rest of the package works without a camera stack.
"""
from .config import Config, ConfigError, load_config, parse_color
from .landmarks import LandmarkSet
from .gesture_classifier import Mode, classify, is_extended
from .coordinate_filter import CoordinateFilter, ScalarKalmanFilter

__all__ = [
    'Config',
    'ConfigError',
    'load_config',
    'parse_color',
    'LandmarkSet',
    'Mode',
    'classify',
    'is_extended',
    'CoordinateFilter',
    'ScalarKalmanFilter',
]
