"""
Hand landmark record shared by the tracker and the gesture pipeline.
Kept free of MediaPipe so the gesture math imports without it.
"""
from dataclasses import dataclass
from typing import Optional, List, Sequence
import math

# A landmark is (x, y) or (x, y, z); missing fields read as 0.
Point = Sequence[float]


@dataclass
class HandLandmarks:
    """
    Normalized hand landmarks from MediaPipe.

    Attributes:
        landmarks: List of 21 (x, y, z) tuples, normalized 0-1
        handedness: 'Left' or 'Right'
        confidence: Detection confidence 0-1
    """
    landmarks: List[Optional[Point]]
    handedness: str = "Unknown"
    confidence: float = 1.0

    # MediaPipe landmark indices for convenience
    WRIST = 0
    THUMB_CMC = 1
    THUMB_MCP = 2
    THUMB_IP = 3
    THUMB_TIP = 4
    INDEX_MCP = 5
    INDEX_PIP = 6
    INDEX_DIP = 7
    INDEX_TIP = 8
    MIDDLE_MCP = 9
    MIDDLE_PIP = 10
    MIDDLE_DIP = 11
    MIDDLE_TIP = 12
    RING_MCP = 13
    RING_PIP = 14
    RING_DIP = 15
    RING_TIP = 16
    PINKY_MCP = 17
    PINKY_PIP = 18
    PINKY_DIP = 19
    PINKY_TIP = 20

    def get(self, index: int) -> Optional[Point]:
        """Get landmark by index, or None if the detector did not report it."""
        if 0 <= index < len(self.landmarks):
            return self.landmarks[index]
        return None


def coord(point: Optional[Point], axis: int) -> float:
    """One coordinate of a landmark; 0 when the point or the field is missing or not finite."""
    if point is None:
        return 0.0
    try:
        value = float(point[axis])
    except (IndexError, TypeError, ValueError):
        return 0.0
    return value if math.isfinite(value) else 0.0


def z_of(point: Optional[Point]) -> float:
    """Depth coordinate of a landmark, 0 when missing."""
    return coord(point, 2)


# Hand connections for drawing (same as MediaPipe's HAND_CONNECTIONS)
HAND_CONNECTIONS = [
    (0, 1), (1, 2), (2, 3), (3, 4),      # Thumb
    (0, 5), (5, 6), (6, 7), (7, 8),      # Index
    (0, 9), (9, 10), (10, 11), (11, 12), # Middle
    (0, 13), (13, 14), (14, 15), (15, 16), # Ring
    (0, 17), (17, 18), (18, 19), (19, 20), # Pinky
    (5, 9), (9, 13), (13, 17),           # Palm
]
