"""
Per-frame scene composition.

Every render is a fresh pass over the current charges: clear, potential
map, field lines, charge markers. Nothing is kept between passes.
"""

import logging
import time
from typing import Iterable, List, Optional

from ..parameters import SimulationParameters
from ..physics.charges import Charge, validate_charges
from .field_lines import FieldLineRenderer
from .potential_map import PotentialMapRenderer
from .primitives import Clear, DrawCommand, DrawingSurface, FilledCircle


logger = logging.getLogger(__name__)


class SceneComposer:
    """Builds the full command list for one frame."""

    def __init__(self, params: Optional[SimulationParameters] = None):
        self.params = params or SimulationParameters()
        viewport = self.params.viewport
        self.potential_renderer = PotentialMapRenderer(
            self.params.physics, self.params.rendering, self.params.device
        )
        self.field_line_renderer = FieldLineRenderer(
            viewport, self.params.physics, self.params.tracer, self.params.rendering
        )

    def charge_markers(self, charges: Iterable[Charge]) -> List[DrawCommand]:
        settings = self.params.rendering
        radius = self.params.physics.charge_radius
        return [
            FilledCircle(
                charge.position,
                radius,
                settings.positive_color if charge.is_positive else settings.negative_color,
                settings.outline_color
            )
            for charge in charges
        ]

    def render(self, charges: Iterable[Charge]) -> List[DrawCommand]:
        """
        Compose one frame.

        Args:
            charges: Current charges, read once for this pass

        Returns:
            Commands in drawing order

        Raises:
            InvalidChargeError: If any element is not a valid Charge
        """
        charges = validate_charges(charges)
        viewport = self.params.viewport
        start = time.perf_counter()

        commands: List[DrawCommand] = [Clear(viewport.width, viewport.height)]
        potential_map = self.potential_renderer.render(charges, viewport.width, viewport.height)
        commands.append(potential_map.to_command())

        line_commands = self.field_line_renderer.render(charges)
        commands.extend(line_commands)
        commands.extend(self.charge_markers(charges))

        logger.debug(
            "Rendered %d charges: %d field-line commands, max |V| %.3e, %.1f ms",
            len(charges), len(line_commands), potential_map.max_magnitude,
            (time.perf_counter() - start) * 1e3
        )
        return commands

    def draw(self, charges: Iterable[Charge], surface: DrawingSurface) -> List[DrawCommand]:
        """Compose a frame and execute it on a surface."""
        commands = self.render(charges)
        surface.execute(commands)
        return commands
