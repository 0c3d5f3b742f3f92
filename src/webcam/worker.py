"""
Background worker for MediaPipe hand tracking.
Runs in a separate QThread and publishes detector results to a LandmarkChannel.
"""
import time
from typing import Optional
import cv2
from PyQt5.QtCore import QObject, pyqtSignal

from .channel import LandmarkChannel
from .config import Config
from .hand_tracker import HandTracker


class WebcamWorker(QObject):
    """
    Worker class that handles the capture/detection loop.

    Landmarks go through the channel so the render tick consumes them in
    order on its own thread; the preview frame goes out as a Qt signal.
    """
    # Signals
    frame_ready = pyqtSignal(object)  # Emits numpy array (BGR skeleton preview) or None
    error = pyqtSignal(str)

    PREVIEW_FPS = 15
    READ_RETRY_DELAY = 0.05  # Seconds to wait after a failed camera read

    def __init__(self, config: Config, channel: LandmarkChannel, parent=None):
        super().__init__(parent)
        self._config = config
        self._channel = channel
        self._tracker: Optional[HandTracker] = None
        self._is_running = False

    def start_process(self):
        """Main capture loop. Runs in the worker thread until stopped."""
        self._tracker = HandTracker(self._config)

        if not self._tracker.start():
            self.error.emit("Could not start hand tracking (camera or model missing)")
            return

        self._is_running = True
        show_preview = self._config.ui.show_preview
        preview_size = (self._config.ui.preview_width, self._config.ui.preview_height)
        frame_interval = 1.0 / self.PREVIEW_FPS
        last_frame_time = 0.0

        try:
            while self._is_running:
                try:
                    landmarks = self._tracker.get_landmarks()
                except Exception as e:
                    print(f"Capture error: {e}")
                    time.sleep(0.1)  # Cool down on error
                    continue

                if landmarks is None and not self._tracker.read_ok:
                    # Camera gave no frame: not the same as "no hand"
                    time.sleep(self.READ_RETRY_DELAY)
                    continue

                self._channel.publish(landmarks)

                now = time.perf_counter()
                if show_preview and now - last_frame_time >= frame_interval:
                    # Preview is cleared while no hand is visible
                    frame = None
                    if landmarks is not None:
                        frame = self._tracker.get_frame_with_landmarks(
                            landmarks, black_background=True
                        )
                    if frame is not None:
                        frame = cv2.resize(frame, preview_size, interpolation=cv2.INTER_AREA)
                    self.frame_ready.emit(frame)
                    last_frame_time = now

        except Exception as e:
            self.error.emit(f"Worker Exception: {str(e)}")
        finally:
            self._is_running = False
            if self._tracker:
                self._tracker.stop()

    def stop_process(self):
        """Signal the loop to stop; resources are released in the worker thread."""
        self._is_running = False
