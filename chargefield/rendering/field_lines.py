"""
Field-line rendering.

Seeds a fixed number of lines on a circle just outside every charge,
traces each one and turns the resulting polylines into line segments with
an arrowhead every ``arrow_stride`` segments.
"""

import math
from typing import List, Optional, Sequence, Tuple

from ..parameters import PhysicsConstants, RenderSettings, TracerSettings, Viewport
from ..physics.charges import Charge
from ..physics.field_line_tracer import FieldLine, FieldLineTracer
from .primitives import Arrowhead, DrawCommand, LineSegment


Point = Tuple[float, float]


def seed_points(charge: Charge, count: int, radius: float) -> List[Point]:
    """
    Evenly spaced seeds on a circle around a charge.

    Args:
        charge: Source charge
        count: Number of seeds
        radius: Circle radius, just outside the exclusion radius

    Returns:
        Seeds at angles 2*pi*i/count, i = 0..count-1
    """
    seeds = []
    for i in range(count):
        angle = i / count * 2 * math.pi
        seeds.append((charge.x + math.cos(angle) * radius,
                      charge.y + math.sin(angle) * radius))
    return seeds


def arrowhead_points(start: Point, end: Point,
                     length: float, half_angle: float) -> Tuple[Point, Point]:
    """
    Barb end points of an arrowhead drawn at ``end``.

    Args:
        start: Segment start
        end: Segment end, the arrow tip
        length: Barb length
        half_angle: Angle between each barb and the segment (radians)

    Returns:
        (left, right) barb end points
    """
    angle = math.atan2(end[1] - start[1], end[0] - start[0])
    left = (end[0] - length * math.cos(angle - half_angle),
            end[1] - length * math.sin(angle - half_angle))
    right = (end[0] - length * math.cos(angle + half_angle),
             end[1] - length * math.sin(angle + half_angle))
    return left, right


class FieldLineRenderer:
    """Traces and draws field lines for every charge in insertion order."""

    def __init__(self,
                 viewport: Optional[Viewport] = None,
                 constants: Optional[PhysicsConstants] = None,
                 tracer_settings: Optional[TracerSettings] = None,
                 settings: Optional[RenderSettings] = None):
        self.constants = constants or PhysicsConstants()
        self.settings = settings or RenderSettings()
        self.tracer = FieldLineTracer(viewport, self.constants, tracer_settings)

    def trace_all(self, charges: Sequence[Charge]) -> List[FieldLine]:
        """Trace ``lines_per_charge`` lines for each charge."""
        radius = self.constants.charge_radius + self.settings.seed_offset
        lines = []
        for charge in charges:
            for seed in seed_points(charge, self.settings.lines_per_charge, radius):
                lines.append(self.tracer.trace(seed, charge.is_positive, charges))
        return lines

    def line_commands(self, line: FieldLine) -> List[DrawCommand]:
        """Segments of one traced line, with arrowheads every ``arrow_stride`` segments."""
        settings = self.settings
        commands: List[DrawCommand] = []

        for j, (start, end) in enumerate(line.segments()):
            commands.append(LineSegment(start, end, settings.line_color, settings.line_width))
            if j % settings.arrow_stride == 0:
                left, right = arrowhead_points(start, end, settings.arrowhead_length,
                                               settings.arrowhead_angle)
                commands.append(Arrowhead(end, left, right, settings.line_color, settings.line_width))

        return commands

    def render(self, charges: Sequence[Charge]) -> List[DrawCommand]:
        """
        Drawing commands for all field lines.

        Args:
            charges: Charges in the viewport

        Returns:
            LineSegment and Arrowhead commands in drawing order
        """
        commands: List[DrawCommand] = []
        for line in self.trace_all(charges):
            commands.extend(self.line_commands(line))
        return commands


def render_field_lines(charges: Sequence[Charge],
                       viewport: Optional[Viewport] = None,
                       constants: Optional[PhysicsConstants] = None,
                       tracer_settings: Optional[TracerSettings] = None,
                       settings: Optional[RenderSettings] = None) -> List[DrawCommand]:
    """Field-line drawing commands; see :meth:`FieldLineRenderer.render`."""
    return FieldLineRenderer(viewport, constants, tracer_settings, settings).render(charges)
