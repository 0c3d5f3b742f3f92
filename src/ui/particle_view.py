"""
Particle view - paints the morphing cloud and the hand preview.
"""
from typing import Optional
from PyQt5.QtWidgets import QWidget
from PyQt5.QtCore import Qt, QPointF, QTimer
from PyQt5.QtGui import QPainter, QPen, QColor, QImage, QPolygonF
import numpy as np

from particles.camera import PerspectiveCamera
from particles.scene import Frame, ParticleScene
from webcam.config import Config


class ParticleView(QWidget):
    """
    Widget driven by a frame timer.

    Each timeout runs one scene tick; the scene submits the frame back through
    render(), which schedules a repaint.
    """

    def __init__(self, scene: ParticleScene, config: Config, parent=None):
        super().__init__(parent)
        self.setAttribute(Qt.WA_OpaquePaintEvent)
        self._scene = scene
        self._config = config
        self._camera = PerspectiveCamera(
            fov=config.render.fov,
            near=config.render.near,
            far=config.render.far,
            distance=config.render.camera_distance,
        )
        self._frame: Optional[Frame] = None
        self._preview: Optional[QImage] = None
        self._debug = config.ui.debug_overlay

        self._timer = QTimer(self)
        self._timer.setTimerType(Qt.PreciseTimer)
        self._timer.timeout.connect(self._on_tick)

    def start(self):
        """Start ticking at the configured frame rate."""
        self._timer.start(max(1, int(1000 / self._config.render.fps)))

    def stop(self):
        self._timer.stop()

    def _on_tick(self):
        self._scene.tick(renderer=self)

    def render(self, frame: Frame):
        """Accept a frame from the scene and schedule a repaint."""
        if frame.switched:
            print(f"Template -> {frame.template_name}")
        self._frame = frame
        self.update()

    def set_webcam_frame(self, frame: Optional[np.ndarray]):
        """
        Update the hand preview.

        Args:
            frame: BGR numpy array with the skeleton drawn, or None to clear.
        """
        if frame is None:
            self._preview = None
            return

        rgb = np.ascontiguousarray(frame[:, :, ::-1])
        h, w, ch = rgb.shape
        # copy() detaches the image from the numpy buffer
        self._preview = QImage(rgb.data, w, h, ch * w, QImage.Format_RGB888).copy()

    def paintEvent(self, event):
        """Draw the particles, then the preview in the top-left corner."""
        painter = QPainter(self)
        painter.fillRect(self.rect(), QColor(0, 0, 0))

        frame = self._frame
        if frame is not None:
            self._paint_particles(painter, frame)
            if self._debug:
                self._paint_debug(painter, frame)

        if self._preview is not None:
            painter.drawImage(10, 10, self._preview)
            painter.setPen(QPen(QColor(0, 242, 255, 120), 1))
            painter.drawRect(10, 10, self._preview.width(), self._preview.height())

    def _paint_particles(self, painter: QPainter, frame: Frame):
        projection = self._camera.project(
            frame.positions,
            self.width(),
            self.height(),
            scale=frame.scale,
            rotation_y=frame.rotation_y,
            point_size=frame.point_size,
        )
        if projection.visible == 0:
            return

        r, g, b = (int(round(c * 255)) for c in frame.color)
        color = QColor(r, g, b)

        # Batch points by rounded pixel size so each batch is one drawPoints call
        buckets = np.maximum(1, np.rint(projection.sizes)).astype(int)
        for size in np.unique(buckets):
            pen = QPen(color)
            pen.setWidth(int(size))
            pen.setCapStyle(Qt.SquareCap)
            painter.setPen(pen)
            pts = projection.xy[buckets == size].tolist()
            painter.drawPoints(QPolygonF([QPointF(x, y) for x, y in pts]))

    def _paint_debug(self, painter: QPainter, frame: Frame):
        state = self._scene.state
        lines = [
            f"Template: {frame.template_name}",
            f"Pinch: {state.pinch:.2f}  Open: {state.openness:.2f}  Depth: {state.depth:.2f}",
            f"Facing: {state.orientation.value}  Morph: {self._scene.morph.progress:.2f}",
        ]
        painter.setPen(QColor(255, 255, 255))
        y = self.height() - 20 * len(lines)
        for line in lines:
            painter.drawText(10, y, line)
            y += 20
