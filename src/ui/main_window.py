"""
Main window hosting the particle view.
"""
from PyQt5.QtWidgets import QMainWindow
from PyQt5.QtCore import Qt

from particles.scene import ParticleScene
from webcam.config import Config

from .particle_view import ParticleView


class MainWindow(QMainWindow):
    """Top-level window; Escape or Q closes it."""

    def __init__(self, scene: ParticleScene, config: Config, parent=None):
        super().__init__(parent)
        self.setWindowTitle("HandMorph")
        self.setObjectName("MainWindow")
        self.resize(config.ui.width, config.ui.height)

        self.view = ParticleView(scene, config, self)
        self.setCentralWidget(self.view)

    def showEvent(self, event):
        super().showEvent(event)
        self.view.start()

    def closeEvent(self, event):
        self.view.stop()
        super().closeEvent(event)

    def keyPressEvent(self, event):
        if event.key() in (Qt.Key_Escape, Qt.Key_Q):
            self.close()
            return
        super().keyPressEvent(event)
