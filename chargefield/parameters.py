"""
Typed simulation parameters.

Groups the numeric constants used by the field evaluator, the field-line
tracer and the renderers, and builds them from the YAML configuration
sections loaded by ``config.ConfigManager``.
"""

import math
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class Viewport:
    """
    Bounded 2D drawing area in pixel coordinates.

    Attributes:
        width: Viewport width in pixels
        height: Viewport height in pixels
    """
    width: int = 600
    height: int = 400

    def __post_init__(self):
        for name in ('width', 'height'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ValueError(f"Viewport {name} must be a positive integer, got {value!r}")

    def contains(self, x: float, y: float) -> bool:
        """Check whether a point lies inside the closed viewport rectangle."""
        return 0 <= x <= self.width and 0 <= y <= self.height


@dataclass(frozen=True)
class PhysicsConstants:
    """
    Constants of the Coulomb model.

    All charges share one magnitude; only relative field strengths matter
    for the visualisation.

    Attributes:
        coulomb_constant: Coulomb's constant k (N m^2 / C^2)
        charge_magnitude: Magnitude q shared by every charge (C)
        charge_radius: Visual radius of a charge, also its exclusion radius (px)
    """
    coulomb_constant: float = 8.99e9
    charge_magnitude: float = 1e-9
    charge_radius: float = 10.0

    def __post_init__(self):
        if not self.coulomb_constant > 0:
            raise ValueError("Coulomb constant must be positive")
        if not self.charge_magnitude > 0:
            raise ValueError("Charge magnitude must be positive")
        if not self.charge_radius >= 0:
            raise ValueError("Charge radius must be non-negative")

    @property
    def kq(self) -> float:
        """Product k*q shared by every charge contribution."""
        return self.coulomb_constant * self.charge_magnitude


@dataclass(frozen=True)
class TracerSettings:
    """
    Field-line integration settings.

    Attributes:
        step_size: Fixed Euler step length (px)
        max_steps: Maximum number of points in a traced line
    """
    step_size: float = 2.0
    max_steps: int = 500

    def __post_init__(self):
        if not self.step_size > 0:
            raise ValueError("Tracer step size must be positive")
        if isinstance(self.max_steps, bool) or not isinstance(self.max_steps, int) or self.max_steps < 1:
            raise ValueError("Tracer max_steps must be a positive integer")


@dataclass(frozen=True)
class RenderSettings:
    """Styling and seeding parameters for the scene renderers."""
    lines_per_charge: int = 8
    seed_offset: float = 1.0
    arrow_stride: int = 10
    arrowhead_length: float = 10.0
    arrowhead_angle_deg: float = 30.0
    potential_alpha: int = 64
    line_color: Tuple[float, float, float, float] = (0.0, 0.0, 0.0, 0.3)
    line_width: float = 1.0
    positive_color: str = 'red'
    negative_color: str = 'blue'
    outline_color: str = 'black'

    def __post_init__(self):
        for name in ('lines_per_charge', 'arrow_stride'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise ValueError(f"{name} must be a positive integer, got {value!r}")
        if not self.seed_offset >= 0:
            raise ValueError("seed_offset must be non-negative")
        if not 0 <= self.potential_alpha <= 255:
            raise ValueError("potential_alpha must lie in [0, 255]")

    @property
    def arrowhead_angle(self) -> float:
        """Arrowhead half-angle in radians."""
        return math.radians(self.arrowhead_angle_deg)


@dataclass(frozen=True)
class SimulationParameters:
    """Bundle of every parameter group used by a render pass."""
    viewport: Viewport = field(default_factory=Viewport)
    physics: PhysicsConstants = field(default_factory=PhysicsConstants)
    tracer: TracerSettings = field(default_factory=TracerSettings)
    rendering: RenderSettings = field(default_factory=RenderSettings)
    device: str = 'cpu'

    @classmethod
    def from_config(cls, config: Optional[Dict[str, Any]] = None) -> 'SimulationParameters':
        """
        Build parameters from a loaded configuration dictionary.

        Missing sections or keys fall back to the dataclass defaults;
        unknown keys are ignored.

        Args:
            config: Configuration as returned by ``config.load_config``

        Returns:
            SimulationParameters instance

        Raises:
            ValueError: If any value fails validation
        """
        config = config or {}

        rendering = _section(RenderSettings, config.get('rendering'))
        if 'line_color' in rendering:
            rendering['line_color'] = tuple(rendering['line_color'])
        _integral_to_int(rendering, 'lines_per_charge', 'arrow_stride', 'potential_alpha')

        viewport = _section(Viewport, config.get('viewport'))
        _integral_to_int(viewport, 'width', 'height')

        tracer = _section(TracerSettings, config.get('tracer'))
        _integral_to_int(tracer, 'max_steps')

        return cls(
            viewport=Viewport(**viewport),
            physics=PhysicsConstants(**_section(PhysicsConstants, config.get('physics'))),
            tracer=TracerSettings(**tracer),
            rendering=RenderSettings(**rendering),
            device=str(config.get('device', 'cpu'))
        )


def _section(dataclass_type, values: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Keep only the keys of a config section that the dataclass declares."""
    if not values:
        return {}
    names = {f.name for f in fields(dataclass_type)}
    return {k: v for k, v in values.items() if k in names}


def _integral_to_int(section: Dict[str, Any], *keys: str) -> None:
    """Turn integral floats such as 8.0 into ints, in place."""
    for key in keys:
        value = section.get(key)
        if isinstance(value, float) and value.is_integer():
            section[key] = int(value)


__all__ = [
    'Viewport',
    'PhysicsConstants',
    'TracerSettings',
    'RenderSettings',
    'SimulationParameters'
]
