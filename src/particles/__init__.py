"""
HandMorph Particles Module

Template shapes, the morph engine and the per-frame scene logic.
"""
from .templates import (
    Template,
    IndexedTemplate,
    RandomTemplate,
    TemplateCatalog,
    DEFAULT_TEMPLATES,
    get_template,
)
from .morph import MorphEngine
from .scene import ParticleScene, Frame

__all__ = [
    'Template',
    'IndexedTemplate',
    'RandomTemplate',
    'TemplateCatalog',
    'DEFAULT_TEMPLATES',
    'get_template',
    'MorphEngine',
    'ParticleScene',
    'Frame',
]
