"""
Potential heat map.

Samples |V| at every pixel, normalises against the largest sample and maps
the resulting intensity onto a red/blue diverging scale with constant
partial transparency, so the map underlays field lines and charge markers.
"""

from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np
import torch

from ..parameters import PhysicsConstants, RenderSettings
from ..physics.charges import Charge
from ..physics.field_evaluator import FieldEvaluator
from .primitives import PixelBuffer


@dataclass(eq=False)
class PotentialMap:
    """
    One frame of the potential map.

    Attributes:
        magnitude: |V| per pixel, float64 array of shape (height, width)
        intensity: Normalised intensity per pixel, uint8 in [0, 255]
        rgba: Colour buffer of shape (height, width, 4), uint8
        max_magnitude: Largest |V| observed in the sweep
    """
    magnitude: np.ndarray
    intensity: np.ndarray
    rgba: np.ndarray
    max_magnitude: float

    @property
    def width(self) -> int:
        return self.intensity.shape[1]

    @property
    def height(self) -> int:
        return self.intensity.shape[0]

    def to_command(self) -> PixelBuffer:
        return PixelBuffer(self.rgba)


class PotentialMapRenderer:
    """Two-pass (max, then normalise) potential sampler."""

    def __init__(self,
                 constants: Optional[PhysicsConstants] = None,
                 settings: Optional[RenderSettings] = None,
                 device: str = 'cpu'):
        self.evaluator = FieldEvaluator(constants)
        self.settings = settings or RenderSettings()
        self.device = device

    def render(self, charges: Sequence[Charge], width: int, height: int) -> PotentialMap:
        """
        Compute the potential map for a viewport.

        Args:
            charges: Charges in the viewport
            width: Viewport width in pixels
            height: Viewport height in pixels

        Returns:
            PotentialMap; all intensities are 0 when every potential is 0
        """
        # Pass 1: magnitudes and their maximum
        magnitude = torch.abs(self.evaluator.potential_grid(charges, width, height, self.device))
        max_magnitude = float(magnitude.max()) if magnitude.numel() else 0.0

        # Pass 2: linear normalisation
        if max_magnitude > 0:
            intensity = torch.floor(magnitude / max_magnitude * 255).clamp(0, 255).to(torch.uint8)
        else:
            intensity = torch.zeros_like(magnitude, dtype=torch.uint8)

        magnitude_np = magnitude.cpu().numpy()
        intensity_np = intensity.cpu().numpy()

        return PotentialMap(
            magnitude=magnitude_np,
            intensity=intensity_np,
            rgba=self.colorize(intensity_np),
            max_magnitude=max_magnitude
        )

    def colorize(self, intensity: np.ndarray) -> np.ndarray:
        """Map intensities onto (intensity, 0, 255 - intensity, alpha)."""
        rgba = np.zeros(intensity.shape + (4,), dtype=np.uint8)
        rgba[..., 0] = intensity
        rgba[..., 2] = 255 - intensity
        rgba[..., 3] = self.settings.potential_alpha
        return rgba


def render_potential_map(charges: Sequence[Charge], width: int, height: int,
                         constants: Optional[PhysicsConstants] = None,
                         settings: Optional[RenderSettings] = None,
                         device: str = 'cpu') -> PotentialMap:
    """Potential map for one frame; see :meth:`PotentialMapRenderer.render`."""
    return PotentialMapRenderer(constants, settings, device).render(charges, width, height)
