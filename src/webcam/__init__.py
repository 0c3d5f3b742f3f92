"""
HandMorph Webcam Module

Hand landmarks, gesture signals and orientation debouncing.
The MediaPipe tracker and the Qt worker live in webcam.hand_tracker and
webcam.worker and are imported explicitly by the application.
"""
from .config import Config, load_config
from .landmarks import HandLandmarks, HAND_CONNECTIONS
from .gesture_extractor import GestureExtractor, GestureState, Orientation
from .debouncer import OrientationDebouncer
from .channel import LandmarkChannel

__all__ = [
    'Config',
    'load_config',
    'HandLandmarks',
    'HAND_CONNECTIONS',
    'GestureExtractor',
    'GestureState',
    'Orientation',
    'OrientationDebouncer',
    'LandmarkChannel',
]
