"""
Rendering module for the electrostatics scene.

Turns field computations into draw commands:
- Potential heat map (pixel buffer)
- Field lines with arrowheads
- Scene composition in fixed drawing order
"""

from .primitives import (
    Clear,
    PixelBuffer,
    LineSegment,
    Arrowhead,
    FilledCircle,
    DrawingSurface,
    RecordingSurface
)
from .potential_map import PotentialMap, PotentialMapRenderer, render_potential_map
from .field_lines import FieldLineRenderer, arrowhead_points, render_field_lines, seed_points
from .scene import SceneComposer

__all__ = [
    'Clear',
    'PixelBuffer',
    'LineSegment',
    'Arrowhead',
    'FilledCircle',
    'DrawingSurface',
    'RecordingSurface',
    'PotentialMap',
    'PotentialMapRenderer',
    'render_potential_map',
    'FieldLineRenderer',
    'arrowhead_points',
    'render_field_lines',
    'seed_points',
    'SceneComposer'
]
