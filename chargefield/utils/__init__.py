"""
Utilities module for the electrostatics visualiser.

Provides the matplotlib drawing surface and logging setup.
"""

from .logging_utils import setup_logging
from .plotting import BasePlotter, MatplotlibSurface, PlotConfig

__all__ = [
    'setup_logging',
    'BasePlotter',
    'MatplotlibSurface',
    'PlotConfig'
]
