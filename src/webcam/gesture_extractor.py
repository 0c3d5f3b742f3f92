"""
Continuous gesture signals from hand landmarks.
Extracts pinch, openness, depth and palm orientation, decaying on hand loss.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional
import math

from .config import GestureConfig
from .landmarks import HandLandmarks, Point, coord, z_of


class Orientation(Enum):
    """Which side of the hand faces the camera."""
    PALM = "palm"
    BACK = "back"


@dataclass
class GestureState:
    """
    Latest gesture signals, each clamped to [0, 1].

    Written only by GestureExtractor; read by the render loop.
    """
    pinch: float = 0.0
    openness: float = 0.0
    depth: float = 0.0
    orientation: Orientation = Orientation.PALM


def clamp01(value: float) -> float:
    """Clamp to [0, 1]; NaN maps to 0."""
    if math.isnan(value):
        return 0.0
    return max(0.0, min(1.0, value))


def distance(a: Optional[Point], b: Optional[Point]) -> float:
    """Euclidean distance in 3D; missing fields count as 0, missing point gives 0."""
    if a is None or b is None:
        return 0.0
    dx = coord(a, 0) - coord(b, 0)
    dy = coord(a, 1) - coord(b, 1)
    dz = z_of(a) - z_of(b)
    return math.sqrt(dx*dx + dy*dy + dz*dz)


class GestureExtractor:
    """
    Converts one hand's landmarks per frame into GestureState.

    Signals:
    - pinch: thumb tip close to index tip
    - openness: index and middle tips reaching away from the wrist
    - depth: wrist closer to the camera (more negative z)
    - orientation: palm when fingertips are nearer the camera than the wrist
    """

    def __init__(self, config: GestureConfig, state: Optional[GestureState] = None):
        self._config = config
        self._state = state if state is not None else GestureState()
        self._frame_count = 0

    @property
    def state(self) -> GestureState:
        return self._state

    @property
    def frame_count(self) -> int:
        return self._frame_count

    def update(self, landmarks: Optional[HandLandmarks]) -> GestureState:
        """
        Update signals from one detector result.

        Args:
            landmarks: The detected hand, or None when no hand is visible.

        Returns:
            The (shared) updated GestureState.
        """
        self._frame_count += 1
        state = self._state

        if landmarks is None:
            # Fade out instead of snapping to zero; orientation is kept
            decay = self._config.decay
            state.pinch *= decay
            state.openness *= decay
            state.depth *= decay
            return state

        wrist = landmarks.get(HandLandmarks.WRIST)
        thumb = landmarks.get(HandLandmarks.THUMB_TIP)
        index = landmarks.get(HandLandmarks.INDEX_TIP)
        middle = landmarks.get(HandLandmarks.MIDDLE_TIP)

        state.pinch = clamp01(1.0 - distance(thumb, index) * self._config.pinch_gain)
        state.openness = clamp01(
            (distance(index, wrist) + distance(middle, wrist)) * self._config.openness_gain
        )
        state.depth = clamp01(-z_of(wrist) * self._config.depth_gain)
        state.orientation = self._classify_orientation(wrist, index, middle)

        return state

    @staticmethod
    def _classify_orientation(
        wrist: Optional[Point], index: Optional[Point], middle: Optional[Point]
    ) -> Orientation:
        avg_finger_z = (z_of(index) + z_of(middle)) / 2
        return Orientation.PALM if avg_finger_z < z_of(wrist) else Orientation.BACK

    def reset(self) -> None:
        """Reset all signals to zero."""
        self._state.pinch = 0.0
        self._state.openness = 0.0
        self._state.depth = 0.0
        self._state.orientation = Orientation.PALM
