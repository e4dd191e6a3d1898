"""
Matplotlib drawing surface for the electrostatics scene.

Executes draw commands on a matplotlib Axes laid out in viewport pixel
coordinates (origin top-left, y growing downwards).
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

import matplotlib.pyplot as plt
from matplotlib.collections import LineCollection
from matplotlib.patches import Circle
import numpy as np

from ..rendering.primitives import Color, DrawCommand, DrawingSurface, Point


@dataclass
class PlotConfig:
    """Configuration for figure styling and output."""
    dpi: int = 100
    save_format: str = 'png'
    transparent: bool = False
    background: str = 'white'
    show_axes: bool = False


class BasePlotter:
    """Base class for matplotlib output helpers."""

    def __init__(self, config: Optional[PlotConfig] = None):
        self.config = config or PlotConfig()
        self._setup_matplotlib()

    def _setup_matplotlib(self):
        """Configure matplotlib settings."""
        plt.rcParams.update({
            'figure.dpi': self.config.dpi,
            'savefig.dpi': self.config.dpi,
            'savefig.transparent': self.config.transparent
        })

    def save_figure(self, fig: plt.Figure, filename: str, directory: str = "plots") -> Path:
        """Save figure with consistent formatting."""
        save_dir = Path(directory)
        save_dir.mkdir(parents=True, exist_ok=True)

        filepath = save_dir / f"{filename}.{self.config.save_format}"
        fig.savefig(filepath, format=self.config.save_format,
                    transparent=self.config.transparent)
        return filepath


class MatplotlibSurface(BasePlotter, DrawingSurface):
    """
    Drawing surface backed by a matplotlib Axes.

    Strokes are batched into one LineCollection per colour and width and
    flushed before any command that could occlude them.
    """

    def __init__(self,
                 width: int,
                 height: int,
                 ax: Optional[plt.Axes] = None,
                 config: Optional[PlotConfig] = None):
        """
        Initialise surface.

        Args:
            width: Viewport width in pixels
            height: Viewport height in pixels
            ax: Existing axes to draw on; a new figure sized to the
                viewport is created if None
            config: Figure styling
        """
        super().__init__(config)
        self.width = width
        self.height = height

        if ax is None:
            dpi = self.config.dpi
            fig = plt.figure(figsize=(width / dpi, height / dpi), dpi=dpi)
            ax = fig.add_axes([0, 0, 1, 1])
        self.ax = ax
        self.figure = ax.figure
        self._pending: Dict[Tuple[Color, float], List[Tuple[Point, Point]]] = {}
        self._reset_axes()

    def _reset_axes(self):
        self.ax.set_xlim(0, self.width)
        self.ax.set_ylim(self.height, 0)
        self.ax.set_aspect('equal')
        self.ax.set_facecolor(self.config.background)
        if not self.config.show_axes:
            self.ax.set_axis_off()

    def execute(self, commands: Iterable[DrawCommand]) -> None:
        super().execute(commands)
        self.flush()

    def flush(self) -> None:
        """Draw all pending strokes."""
        for (color, width), segments in self._pending.items():
            self.ax.add_collection(LineCollection(segments, colors=[color], linewidths=width))
        self._pending = {}

    def clear(self, width: int, height: int) -> None:
        self._pending = {}
        self.ax.cla()
        self.width = width
        self.height = height
        self._reset_axes()

    def put_pixels(self, rgba: np.ndarray) -> None:
        self.flush()
        self.ax.imshow(rgba, extent=(0, self.width, self.height, 0),
                       origin='upper', interpolation='nearest')
        # imshow resets the limits
        self._reset_axes()

    def stroke_line(self, start: Point, end: Point, color: Color, width: float) -> None:
        self._pending.setdefault((color, width), []).append((start, end))

    def stroke_arrowhead(self, tip: Point, left: Point, right: Point,
                         color: Color, width: float) -> None:
        strokes = self._pending.setdefault((color, width), [])
        strokes.append((tip, left))
        strokes.append((tip, right))

    def fill_circle(self, center: Point, radius: float, fill: Color, outline: Color) -> None:
        self.flush()
        self.ax.add_patch(Circle(center, radius, facecolor=fill, edgecolor=outline))

    def redraw(self) -> None:
        """Request a canvas repaint for interactive backends."""
        self.figure.canvas.draw_idle()

    def save(self, filename: str, directory: str = "plots") -> Path:
        return self.save_figure(self.figure, filename, directory)
