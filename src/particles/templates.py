"""
Particle target shapes.

Each deterministic shape is a pure function (index, total) -> (x, y, z) written
with numpy ufuncs, so it accepts a scalar index or a whole index array.
The firework shape is stochastic and ignores index/total.
"""
from typing import Callable, Dict, List, Optional, Sequence, Tuple
import math

import numpy as np

GOLDEN_TURN = math.pi * (1 + math.sqrt(5))
RING_RADIUS = 1.4
FIREWORK_SIZE = 3.0


def sphere_point(i, total):
    """Fibonacci distribution on the unit sphere."""
    phi = np.arccos(1 - 2 * (i / total))
    theta = GOLDEN_TURN * i
    return (
        np.cos(theta) * np.sin(phi),
        np.sin(theta) * np.sin(phi),
        np.cos(phi),
    )


def heart_point(i, total):
    t = (i / total) * 2 * math.pi
    return (
        0.8 * np.sin(t) ** 3,
        0.6 * (np.cos(t) - 0.5 * np.cos(2 * t) - 0.2 * np.cos(3 * t)),
        np.zeros_like(t),
    )


def flower_point(i, total):
    """Five-petal polar rose."""
    t = (i / total) * 2 * math.pi
    r = np.sin(5 * t) * 0.7
    return (np.cos(t) * r, np.sin(t) * r, np.zeros_like(t))


def saturn_point(i, total):
    """Even indices on a flat ring in the XZ plane, odd ones on the sphere."""
    angle = (i / total) * 2 * math.pi
    sx, sy, sz = sphere_point(i, total)
    on_ring = np.asarray(i) % 2 == 0
    return (
        np.where(on_ring, np.cos(angle) * RING_RADIUS, sx),
        np.where(on_ring, 0.0, sy),
        np.where(on_ring, np.sin(angle) * RING_RADIUS, sz),
    )


def firework_point(rng: Optional[np.random.Generator] = None, size=None):
    """Uniform random point(s) in a cube of side 3 centred on the origin."""
    rng = rng if rng is not None else np.random.default_rng()
    x, y, z = (rng.random((3,) if size is None else (3, size)) - 0.5) * FIREWORK_SIZE
    return x, y, z


class Template:
    """A named particle shape. Subclasses decide how points are generated."""

    stochastic = False

    def __init__(self, name: str, generator: Callable):
        self.name = name
        self._generator = generator

    def point(self, index: int, total: int, rng=None) -> Tuple[float, float, float]:
        """Target point for one particle."""
        raise NotImplementedError

    def points(self, count: int, rng=None) -> np.ndarray:
        """Target points for count particles as a (count, 3) float32 array."""
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class IndexedTemplate(Template):
    """Deterministic shape: the i-th point depends only on (i, total)."""

    def point(self, index: int, total: int, rng=None) -> Tuple[float, float, float]:
        x, y, z = self._generator(index, total)
        return float(x), float(y), float(z)

    def points(self, count: int, rng=None) -> np.ndarray:
        idx = np.arange(count, dtype=np.float64)
        return np.column_stack(self._generator(idx, count)).astype(np.float32)


class RandomTemplate(Template):
    """Stochastic shape: every call draws a fresh independent point."""

    stochastic = True

    def point(self, index: int = 0, total: int = 1, rng=None) -> Tuple[float, float, float]:
        x, y, z = self._generator(rng)
        return float(x), float(y), float(z)

    def points(self, count: int, rng=None) -> np.ndarray:
        return np.column_stack(self._generator(rng, count)).astype(np.float32)


SPHERE = IndexedTemplate("sphere", sphere_point)
HEART = IndexedTemplate("heart", heart_point)
FLOWER = IndexedTemplate("flower", flower_point)
SATURN = IndexedTemplate("saturn", saturn_point)
FIREWORK = RandomTemplate("firework", firework_point)

DEFAULT_TEMPLATES: List[Template] = [SPHERE, HEART, FLOWER, SATURN, FIREWORK]

TEMPLATES: Dict[str, Template] = {t.name: t for t in DEFAULT_TEMPLATES}


def get_template(name: str) -> Template:
    """Get template by name."""
    try:
        return TEMPLATES[name.lower()]
    except KeyError:
        raise KeyError(
            f"Unknown template {name!r}, choose from: {', '.join(TEMPLATES)}"
        ) from None


class TemplateCatalog:
    """Fixed ordered list of templates with a circular cursor."""

    def __init__(self, templates: Sequence[Template] = DEFAULT_TEMPLATES, start: int = 0):
        if not templates:
            raise ValueError("TemplateCatalog needs at least one template")
        self._templates = list(templates)
        self._index = start % len(self._templates)

    def __len__(self) -> int:
        return len(self._templates)

    @property
    def index(self) -> int:
        return self._index

    @property
    def current(self) -> Template:
        return self._templates[self._index]

    @property
    def names(self) -> List[str]:
        return [t.name for t in self._templates]

    def jump_to(self, name: str) -> Template:
        """Point the cursor at a template by name."""
        template = get_template(name)
        if template not in self._templates:
            raise KeyError(f"Template {name!r} is not in this catalog")
        self._index = self._templates.index(template)
        return template

    def advance(self) -> Template:
        """Move to the next template, wrapping around, and return it."""
        self._index = (self._index + 1) % len(self._templates)
        return self.current
