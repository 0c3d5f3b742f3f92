"""
Particle morph engine.
Owns the current and target position buffers and eases one toward the other.
"""
from typing import Optional

import numpy as np

from .templates import Template

DEFAULT_COUNT = 6000


class MorphEngine:
    """
    Fixed-size particle buffer morphing between template point clouds.

    Buffers are flat float32 arrays of length 3 * count laid out as
    x0, y0, z0, x1, ... so they can be handed to a renderer unchanged.
    """

    def __init__(
        self,
        initial: Template,
        count: int = DEFAULT_COUNT,
        progress_rate: float = 0.04,
        approach_rate: float = 0.15,
        rng: Optional[np.random.Generator] = None,
    ):
        """
        Args:
            initial: Template shown settled on the first frame.
            count: Number of particles.
            progress_rate: Morph progress added per step.
            approach_rate: Fraction of the remaining distance covered per step.
            rng: Random source for stochastic templates.
        """
        if count <= 0:
            raise ValueError(f"Particle count must be positive, got {count}")

        self._count = count
        self._progress_rate = progress_rate
        self._approach_rate = approach_rate
        self._rng = rng if rng is not None else np.random.default_rng()

        self._target = initial.points(count, self._rng).reshape(-1)
        self._current = self._target.copy()
        self._progress = 1.0
        self._template = initial
        self._dirty = True  # First upload to the renderer

    @property
    def count(self) -> int:
        return self._count

    @property
    def current(self) -> np.ndarray:
        return self._current

    @property
    def target(self) -> np.ndarray:
        return self._target

    @property
    def progress(self) -> float:
        return self._progress

    @property
    def template(self) -> Template:
        return self._template

    @property
    def is_morphing(self) -> bool:
        return self._progress < 1.0

    def apply_template(self, template: Template) -> None:
        """Retarget every particle to template and restart the morph."""
        self._target[:] = template.points(self._count, self._rng).reshape(-1)
        self._template = template
        self._progress = 0.0

    def step(self) -> bool:
        """
        Advance the morph by one frame.

        Returns:
            True if positions changed, False if already settled.
        """
        if self._progress >= 1.0:
            return False

        self._progress += self._progress_rate
        self._current += (self._target - self._current) * self._approach_rate
        self._dirty = True
        return True

    def residual(self) -> float:
        """Largest per-coordinate distance left to the target."""
        return float(np.max(np.abs(self._target - self._current)))

    def consume_dirty(self) -> bool:
        """Return whether positions changed since the last call, and clear the flag."""
        dirty = self._dirty
        self._dirty = False
        return dirty
