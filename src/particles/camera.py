"""
Perspective projection of the particle cloud onto screen pixels.
"""
from dataclasses import dataclass
import math

import numpy as np


@dataclass
class Projection:
    """Projected particles: pixel positions and point sizes of visible points."""
    xy: np.ndarray      # (n, 2) float pixel coordinates
    sizes: np.ndarray   # (n,) float pixel sizes
    visible: int


class PerspectiveCamera:
    """
    Pinhole camera on the +Z axis looking at the origin.

    Args:
        fov: Vertical field of view in degrees.
        near/far: Clip distances along the view direction.
        distance: Camera distance from the origin.
    """

    def __init__(self, fov: float = 60.0, near: float = 0.1, far: float = 100.0,
                 distance: float = 4.0):
        self.fov = fov
        self.near = near
        self.far = far
        self.distance = distance

    def focal_length(self, height: int) -> float:
        """Pixels per world unit at depth 1 for a viewport of the given height."""
        return (height / 2) / math.tan(math.radians(self.fov) / 2)

    def project(
        self,
        positions: np.ndarray,
        width: int,
        height: int,
        scale: float = 1.0,
        rotation_y: float = 0.0,
        point_size: float = 0.025,
    ) -> Projection:
        """
        Project flat x, y, z positions after uniform scale and Y rotation.

        Points outside the near/far range are culled. Point sizes shrink with
        depth the same way positions do.
        """
        pts = np.asarray(positions, dtype=np.float32).reshape(-1, 3) * scale

        c, s = math.cos(rotation_y), math.sin(rotation_y)
        x = pts[:, 0] * c + pts[:, 2] * s
        y = pts[:, 1]
        z = -pts[:, 0] * s + pts[:, 2] * c

        depth = self.distance - z
        keep = (depth > self.near) & (depth < self.far)
        x, y, depth = x[keep], y[keep], depth[keep]

        focal = self.focal_length(height)
        px = width / 2 + x * focal / depth
        py = height / 2 - y * focal / depth
        sizes = point_size * focal / depth

        return Projection(
            xy=np.column_stack((px, py)),
            sizes=sizes,
            visible=int(keep.sum()),
        )
