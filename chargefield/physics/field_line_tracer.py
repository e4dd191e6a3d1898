"""
Field-line integration.

A field line is traced with a fixed-step Euler walk along the unit field
direction: forward for lines leaving a positive charge, backward for lines
leaving a negative one, so that lines flow from positive to negative
sources. The walk is bounded by a step limit and stops at the first
termination condition.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from ..parameters import PhysicsConstants, TracerSettings, Viewport
from .charges import Charge
from .field_evaluator import FieldEvaluator


Point = Tuple[float, float]


class TerminationReason(Enum):
    """Why a field line stopped."""
    STEP_LIMIT = "step_limit"
    ZERO_FIELD = "zero_field"
    OUT_OF_BOUNDS = "out_of_bounds"
    ENTERED_CHARGE = "entered_charge"


@dataclass
class FieldLine:
    """
    Traced field line.

    Attributes:
        points: Ordered points, starting at the seed
        is_positive: Polarity of the source charge
        termination: Condition satisfied by the last point
    """
    points: List[Point] = field(default_factory=list)
    is_positive: bool = True
    termination: TerminationReason = TerminationReason.STEP_LIMIT

    def __len__(self) -> int:
        return len(self.points)

    def segments(self) -> List[Tuple[Point, Point]]:
        """Consecutive point pairs along the line."""
        return list(zip(self.points[:-1], self.points[1:]))


class FieldLineTracer:
    """
    Bounded fixed-step tracer.

    Termination conditions, checked at every point in this order:
        (a) step limit exhausted
        (b) zero field magnitude
        (c) point outside the viewport
        (d) point strictly inside a charge's exclusion radius
    """

    def __init__(self,
                 viewport: Optional[Viewport] = None,
                 constants: Optional[PhysicsConstants] = None,
                 settings: Optional[TracerSettings] = None):
        self.viewport = viewport or Viewport()
        self.constants = constants or PhysicsConstants()
        self.settings = settings or TracerSettings()
        self.evaluator = FieldEvaluator(self.constants)

    def trace(self, seed: Point, is_positive: bool, charges: Sequence[Charge]) -> FieldLine:
        """
        Trace a field line from a seed point.

        Args:
            seed: Starting point (x, y)
            is_positive: Polarity of the source; True follows the field,
                False follows its reverse
            charges: Charges in the viewport

        Returns:
            FieldLine with at most ``settings.max_steps`` points whose last
            point satisfies ``termination``
        """
        x, y = float(seed[0]), float(seed[1])
        line = FieldLine(points=[(x, y)], is_positive=is_positive)

        stop = self._boundary_stop(x, y, charges)
        if stop is not None:
            line.termination = stop
            return line

        direction = 1.0 if is_positive else -1.0
        step_size = self.settings.step_size

        while len(line.points) < self.settings.max_steps:
            ex, ey = self.evaluator.field((x, y), charges)
            magnitude = math.sqrt(ex * ex + ey * ey)
            if magnitude == 0:
                line.termination = TerminationReason.ZERO_FIELD
                return line

            x += ex / magnitude * step_size * direction
            y += ey / magnitude * step_size * direction
            line.points.append((x, y))

            stop = self._boundary_stop(x, y, charges)
            if stop is not None:
                line.termination = stop
                return line

        line.termination = TerminationReason.STEP_LIMIT
        return line

    def _boundary_stop(self, x: float, y: float,
                       charges: Sequence[Charge]) -> Optional[TerminationReason]:
        """Geometric termination checks (c) and (d) for a single point."""
        if not self.viewport.contains(x, y):
            return TerminationReason.OUT_OF_BOUNDS
        if self.inside_charge(x, y, charges):
            return TerminationReason.ENTERED_CHARGE
        return None

    def inside_charge(self, x: float, y: float, charges: Sequence[Charge]) -> bool:
        """True if the point lies strictly within any charge's exclusion radius."""
        radius = self.constants.charge_radius
        return any(charge.distance_to(x, y) < radius for charge in charges)


def trace_line(seed: Point,
               is_positive: bool,
               charges: Sequence[Charge],
               viewport: Optional[Viewport] = None,
               constants: Optional[PhysicsConstants] = None,
               settings: Optional[TracerSettings] = None) -> FieldLine:
    """Trace one field line; see :meth:`FieldLineTracer.trace`."""
    return FieldLineTracer(viewport, constants, settings).trace(seed, is_positive, charges)
