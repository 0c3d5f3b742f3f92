"""
Per-frame render loop logic, independent of any GUI toolkit.

Each tick reads the latest gesture signals, eases scale, switches templates
on debounced orientation flips, steps the morph, derives color and point
size, spins the cloud and hands the frame to a renderer.
"""
from dataclasses import dataclass
from typing import Callable, Optional, Tuple
import time

import numpy as np

from webcam.channel import LandmarkChannel
from webcam.config import Config
from webcam.debouncer import OrientationDebouncer
from webcam.gesture_extractor import GestureExtractor, GestureState

from .morph import MorphEngine
from .templates import DEFAULT_TEMPLATES, TemplateCatalog

Color = Tuple[float, float, float]


def parse_color(value: str) -> Color:
    """Parse '#rrggbb' into RGB floats in [0, 1]."""
    text = value.strip().lstrip('#')
    if len(text) != 6:
        raise ValueError(f"Expected a #rrggbb color, got {value!r}")
    try:
        r, g, b = (int(text[i:i + 2], 16) for i in (0, 2, 4))
    except ValueError:
        raise ValueError(f"Expected a #rrggbb color, got {value!r}") from None
    return r / 255.0, g / 255.0, b / 255.0


def lerp_color(start: Color, end: Color, t: float) -> Color:
    return tuple(a + (b - a) * t for a, b in zip(start, end))


@dataclass
class Frame:
    """Everything a renderer needs to draw one frame."""
    positions: np.ndarray
    positions_dirty: bool
    scale: float
    color: Color
    point_size: float
    rotation_y: float
    template_name: str
    switched: bool = False


class ParticleScene:
    """
    Render loop state machine.

    The scene is the single writer of scale, color, point size, rotation and
    (through MorphEngine) the particle buffers. GestureState is only read here,
    except for the landmark results it pulls from the channel and feeds to the
    extractor at the start of a tick.
    """

    def __init__(
        self,
        config: Config,
        extractor: GestureExtractor,
        morph: MorphEngine,
        catalog: TemplateCatalog,
        debouncer: OrientationDebouncer,
        channel: Optional[LandmarkChannel] = None,
        clock: Callable[[], float] = time.perf_counter,
    ):
        self._render = config.render
        self._extractor = extractor
        self._morph = morph
        self._catalog = catalog
        self._debouncer = debouncer
        self._channel = channel
        self._clock = clock

        self._color_start = parse_color(self._render.color_start)
        self._color_end = parse_color(self._render.color_end)

        self.scale = 1.0
        self.color: Color = self._color_start
        self.point_size = self._render.initial_point_size
        self.rotation_y = 0.0
        self.frame_count = 0

    @classmethod
    def from_config(
        cls,
        config: Config,
        channel: Optional[LandmarkChannel] = None,
        clock: Callable[[], float] = time.perf_counter,
        rng: Optional[np.random.Generator] = None,
    ) -> "ParticleScene":
        """Build the scene and its collaborators from configuration."""
        catalog = TemplateCatalog(DEFAULT_TEMPLATES)
        catalog.jump_to(config.morph.initial_template)
        morph = MorphEngine(
            catalog.current,
            count=config.morph.count,
            progress_rate=config.morph.progress_rate,
            approach_rate=config.morph.approach_rate,
            rng=rng,
        )
        extractor = GestureExtractor(config.gestures)
        debouncer = OrientationDebouncer(
            config.gestures.orientation_dwell_ms, clock=clock
        )
        return cls(config, extractor, morph, catalog, debouncer, channel, clock)

    @property
    def state(self) -> GestureState:
        return self._extractor.state

    @property
    def morph(self) -> MorphEngine:
        return self._morph

    @property
    def catalog(self) -> TemplateCatalog:
        return self._catalog

    @property
    def extractor(self) -> GestureExtractor:
        return self._extractor

    def tick(self, now: Optional[float] = None, renderer=None) -> Frame:
        """
        Run one frame.

        Args:
            now: Monotonic time in seconds; read from the clock if omitted.
            renderer: Optional object with a render(frame) method.

        Returns:
            The frame parameters that were (or would be) submitted.
        """
        if self._channel is not None:
            self._channel.deliver(self._extractor.update)

        state = self._extractor.state
        cfg = self._render

        target_scale = cfg.base_scale + state.openness * cfg.scale_gain
        self.scale += (target_scale - self.scale) * cfg.scale_rate

        if now is None:
            now = self._clock()
        switched = False
        if self._debouncer.update(state.orientation, now):
            self._morph.apply_template(self._catalog.advance())
            switched = True

        if self._morph.is_morphing:
            self._morph.step()

        self.color = lerp_color(self._color_start, self._color_end, state.pinch)
        self.point_size = cfg.point_size_base + state.depth * cfg.point_size_gain
        self.rotation_y += cfg.rotation_speed
        self.frame_count += 1

        frame = Frame(
            positions=self._morph.current,
            positions_dirty=self._morph.consume_dirty(),
            scale=self.scale,
            color=self.color,
            point_size=self.point_size,
            rotation_y=self.rotation_y,
            template_name=self._catalog.current.name,
            switched=switched,
        )
        if renderer is not None:
            renderer.render(frame)
        return frame
