"""
Landmark event channel between the capture thread and the render tick.
"""
from queue import Queue, Empty, Full
from typing import Callable, List, Optional

from .landmarks import HandLandmarks


class LandmarkChannel:
    """
    Bounded FIFO of detector results (HandLandmarks, or None for "no hand").

    The capture thread publishes without blocking; when the queue is full
    the oldest result is dropped. The render tick drains everything pending
    in arrival order.
    """

    def __init__(self, maxsize: int = 4):
        self._queue: Queue = Queue(maxsize=maxsize)
        self._dropped = 0

    @property
    def dropped(self) -> int:
        """Number of results discarded because the consumer fell behind."""
        return self._dropped

    def publish(self, landmarks: Optional[HandLandmarks]) -> None:
        while True:
            try:
                self._queue.put_nowait(landmarks)
                return
            except Full:
                try:
                    self._queue.get_nowait()
                    self._dropped += 1
                except Empty:
                    pass

    def drain(self) -> List[Optional[HandLandmarks]]:
        """Remove and return all pending results, oldest first."""
        items = []
        while True:
            try:
                items.append(self._queue.get_nowait())
            except Empty:
                return items

    def deliver(self, consumer: Callable[[Optional[HandLandmarks]], object]) -> int:
        """
        Feed every pending result to consumer in order.

        Returns:
            Number of results delivered.
        """
        items = self.drain()
        for landmarks in items:
            consumer(landmarks)
        return len(items)
