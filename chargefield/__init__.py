"""
chargefield: interactive 2D electrostatics visualisation.

Point charges placed on a canvas are rendered as a potential heat map with
field lines traced by Coulomb's law and superposition.
"""

from .parameters import (
    PhysicsConstants,
    TracerSettings,
    RenderSettings,
    Viewport,
    SimulationParameters
)
from .physics import Charge, ChargeSet, InvalidChargeError, field, potential, trace_line
from .rendering import SceneComposer

__all__ = [
    'PhysicsConstants',
    'TracerSettings',
    'RenderSettings',
    'Viewport',
    'SimulationParameters',
    'Charge',
    'ChargeSet',
    'InvalidChargeError',
    'field',
    'potential',
    'trace_line',
    'SceneComposer'
]

__version__ = '0.1.0'
