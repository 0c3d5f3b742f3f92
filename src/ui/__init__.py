"""
HandMorph UI Module

PyQt5 window and particle view.
"""
from .particle_view import ParticleView
from .main_window import MainWindow

__all__ = [
    'ParticleView',
    'MainWindow',
]
