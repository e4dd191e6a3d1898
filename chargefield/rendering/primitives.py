"""
Drawing commands and drawing surfaces.

Renderers produce lists of immutable draw commands; a surface supplied by
the UI layer executes them in order. Later commands occlude earlier ones.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Iterable, List, Tuple, Union

import numpy as np


Point = Tuple[float, float]
Color = Union[str, Tuple[float, float, float, float]]


@dataclass(frozen=True)
class Clear:
    """Erase the whole viewport."""
    width: int
    height: int

    def apply(self, surface: 'DrawingSurface') -> None:
        surface.clear(self.width, self.height)


@dataclass(frozen=True, eq=False)
class PixelBuffer:
    """Full-viewport RGBA buffer of shape (height, width, 4), dtype uint8."""
    rgba: np.ndarray

    def apply(self, surface: 'DrawingSurface') -> None:
        surface.put_pixels(self.rgba)


@dataclass(frozen=True)
class LineSegment:
    """Stroked straight segment."""
    start: Point
    end: Point
    color: Color = (0.0, 0.0, 0.0, 0.3)
    width: float = 1.0

    def apply(self, surface: 'DrawingSurface') -> None:
        surface.stroke_line(self.start, self.end, self.color, self.width)


@dataclass(frozen=True)
class Arrowhead:
    """Two strokes from ``tip`` back to ``left`` and ``right``."""
    tip: Point
    left: Point
    right: Point
    color: Color = (0.0, 0.0, 0.0, 0.3)
    width: float = 1.0

    def apply(self, surface: 'DrawingSurface') -> None:
        surface.stroke_arrowhead(self.tip, self.left, self.right, self.color, self.width)


@dataclass(frozen=True)
class FilledCircle:
    """Filled disc with an outline."""
    center: Point
    radius: float
    fill: Color = 'red'
    outline: Color = 'black'

    def apply(self, surface: 'DrawingSurface') -> None:
        surface.fill_circle(self.center, self.radius, self.fill, self.outline)


DrawCommand = Union[Clear, PixelBuffer, LineSegment, Arrowhead, FilledCircle]


class DrawingSurface(ABC):
    """Sink for draw commands, implemented by the UI layer."""

    def execute(self, commands: Iterable[DrawCommand]) -> None:
        """Execute commands in order."""
        for command in commands:
            command.apply(self)

    @abstractmethod
    def clear(self, width: int, height: int) -> None:
        pass

    @abstractmethod
    def put_pixels(self, rgba: np.ndarray) -> None:
        pass

    @abstractmethod
    def stroke_line(self, start: Point, end: Point, color: Color, width: float) -> None:
        pass

    @abstractmethod
    def stroke_arrowhead(self, tip: Point, left: Point, right: Point,
                         color: Color, width: float) -> None:
        pass

    @abstractmethod
    def fill_circle(self, center: Point, radius: float, fill: Color, outline: Color) -> None:
        pass


@dataclass
class RecordingSurface(DrawingSurface):
    """Headless surface that keeps every executed command."""
    commands: List[DrawCommand] = field(default_factory=list)

    def execute(self, commands: Iterable[DrawCommand]) -> None:
        for command in commands:
            self.commands.append(command)
            command.apply(self)

    def clear(self, width: int, height: int) -> None:
        self.commands = [c for c in self.commands if isinstance(c, Clear)][-1:]

    def put_pixels(self, rgba: np.ndarray) -> None:
        pass

    def stroke_line(self, start: Point, end: Point, color: Color, width: float) -> None:
        pass

    def stroke_arrowhead(self, tip: Point, left: Point, right: Point,
                         color: Color, width: float) -> None:
        pass

    def fill_circle(self, center: Point, radius: float, fill: Color, outline: Color) -> None:
        pass

    def of_type(self, command_type: type) -> List[DrawCommand]:
        return [c for c in self.commands if isinstance(c, command_type)]
