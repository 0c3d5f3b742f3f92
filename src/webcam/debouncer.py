"""
Rate-limited edge detection for hand orientation flips.
"""
from typing import Callable, Optional
import time

from .gesture_extractor import Orientation


class OrientationDebouncer:
    """
    Emits an "advance" event when the orientation changes, at most once per dwell.

    The last seen orientation is updated every frame, so flicker inside the
    dwell window is dropped rather than queued.
    """

    def __init__(
        self,
        dwell_ms: float = 1200.0,
        initial: Orientation = Orientation.PALM,
        clock: Callable[[], float] = time.perf_counter,
        start_time: Optional[float] = None,
    ):
        """
        Args:
            dwell_ms: Minimum time between two advance events.
            initial: Orientation assumed before the first frame.
            clock: Monotonic clock in seconds.
            start_time: Timestamp of the virtual last switch. Defaults to now,
                so no event fires within the first dwell after startup.
        """
        self._dwell_s = dwell_ms / 1000.0
        self._clock = clock
        self._last_orientation = initial
        self._last_switch_time = clock() if start_time is None else start_time

    @property
    def last_orientation(self) -> Orientation:
        return self._last_orientation

    @property
    def last_switch_time(self) -> float:
        return self._last_switch_time

    def update(self, orientation: Orientation, now: Optional[float] = None) -> bool:
        """
        Feed this frame's orientation.

        Returns:
            True if an advance event fires on this frame.
        """
        if now is None:
            now = self._clock()

        fired = False
        if orientation != self._last_orientation and now - self._last_switch_time > self._dwell_s:
            self._last_switch_time = now
            fired = True

        self._last_orientation = orientation
        return fired
