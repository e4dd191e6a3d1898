"""
Electric field and potential of a set of point charges.

Implements Coulomb's law with superposition:

    E(p) = Σ s_i k q (p - c_i) / |p - c_i|³
    V(p) = Σ s_i k q / |p - c_i|

where s_i = ±1 is the polarity of charge i. A charge whose distance to the
query point does not exceed its exclusion radius contributes nothing, which
keeps the sums finite at and around the charge bodies.
"""

import math
from typing import Optional, Sequence, Tuple

import torch

from ..parameters import PhysicsConstants
from .charges import Charge


Point = Tuple[float, float]
Vector = Tuple[float, float]


class FieldEvaluator:
    """
    Superposition of Coulomb fields over a charge set.

    The evaluator is stateless apart from its constants: every query takes
    the charges explicitly and results are never cached.
    """

    def __init__(self, constants: Optional[PhysicsConstants] = None):
        """
        Initialise evaluator.

        Args:
            constants: Coulomb constant, shared charge magnitude and
                exclusion radius
        """
        self.constants = constants or PhysicsConstants()
        self.kq = self.constants.kq
        self.exclusion_radius = self.constants.charge_radius

    def field(self, point: Point, charges: Sequence[Charge]) -> Vector:
        """
        Electric field vector at a point.

        Args:
            point: Query point (x, y)
            charges: Charges in the viewport

        Returns:
            Field components (Ex, Ey); (0, 0) if no charge contributes
        """
        x, y = point
        ex = 0.0
        ey = 0.0

        for charge in charges:
            dx = x - charge.x
            dy = y - charge.y
            r = math.sqrt(dx * dx + dy * dy)
            if r > self.exclusion_radius:
                magnitude = self.kq / (r * r) * charge.sign
                ex += magnitude * dx / r
                ey += magnitude * dy / r

        return ex, ey

    def potential(self, point: Point, charges: Sequence[Charge]) -> float:
        """
        Electric potential at a point.

        Contributions are summed algebraically, so opposite charges cancel.

        Args:
            point: Query point (x, y)
            charges: Charges in the viewport

        Returns:
            Potential V; 0.0 if no charge contributes
        """
        x, y = point
        total = 0.0

        for charge in charges:
            dx = x - charge.x
            dy = y - charge.y
            r = math.sqrt(dx * dx + dy * dy)
            if r > self.exclusion_radius:
                total += self.kq / r * charge.sign

        return total

    def potential_grid(self,
                       charges: Sequence[Charge],
                       width: int,
                       height: int,
                       device: str = 'cpu') -> torch.Tensor:
        """
        Potential at every integer pixel of a viewport.

        Vectorised form of :meth:`potential` over the grid
        ``x in [0, width)``, ``y in [0, height)``.

        Args:
            charges: Charges in the viewport
            width: Number of pixel columns
            height: Number of pixel rows
            device: Torch device for the sweep

        Returns:
            Tensor of shape (height, width), dtype float64, indexed [y, x]
        """
        xs = torch.arange(width, dtype=torch.float64, device=device)
        ys = torch.arange(height, dtype=torch.float64, device=device)
        grid_y, grid_x = torch.meshgrid(ys, xs, indexing='ij')

        total = torch.zeros((height, width), dtype=torch.float64, device=device)

        for charge in charges:
            dx = grid_x - charge.x
            dy = grid_y - charge.y
            r = torch.sqrt(dx * dx + dy * dy)
            outside = r > self.exclusion_radius
            # Division only where the charge contributes
            safe_r = torch.where(outside, r, torch.ones_like(r))
            contribution = torch.where(outside, (self.kq * charge.sign) / safe_r, torch.zeros_like(r))
            total += contribution

        return total


_default_evaluator = FieldEvaluator()


def field(point: Point, charges: Sequence[Charge],
          constants: Optional[PhysicsConstants] = None) -> Vector:
    """Electric field (Ex, Ey) at ``point``; see :meth:`FieldEvaluator.field`."""
    evaluator = _default_evaluator if constants is None else FieldEvaluator(constants)
    return evaluator.field(point, charges)


def potential(point: Point, charges: Sequence[Charge],
              constants: Optional[PhysicsConstants] = None) -> float:
    """Electric potential V at ``point``; see :meth:`FieldEvaluator.potential`."""
    evaluator = _default_evaluator if constants is None else FieldEvaluator(constants)
    return evaluator.potential(point, charges)
