"""
Dipole Validation

Checks the field evaluator against the analytic potential and field of a
dipole on the axis joining its charges.
"""

import sys
import logging
from pathlib import Path
from typing import Dict

import numpy as np

sys.path.insert(0, str(Path(__file__).parent.parent))

from chargefield import Charge, PhysicsConstants, field, potential

# Physical constants
K = 8.99e9  # Coulomb's constant (N m^2 / C^2)
Q = 1e-9  # Shared charge magnitude (C)
KQ = K * Q

# Dipole geometry (px)
POSITIVE = (100.0, 100.0)
NEGATIVE = (300.0, 100.0)
SAMPLE_XS = np.linspace(120.0, 280.0, 17)

logger = logging.getLogger(__name__)


def dipole():
    return [Charge(*POSITIVE, True), Charge(*NEGATIVE, False)]


def analytic_potential(x: float) -> float:
    """Potential on the dipole axis between the charges."""
    return KQ / (x - POSITIVE[0]) - KQ / (NEGATIVE[0] - x)


def analytic_field_x(x: float) -> float:
    """Axial field between the charges; both terms point towards the negative charge."""
    return KQ / (x - POSITIVE[0]) ** 2 + KQ / (NEGATIVE[0] - x) ** 2


def validate(rtol: float = 1e-9) -> Dict[str, float]:
    """
    Compare evaluator output to the analytic expressions along the axis.

    Returns:
        Largest relative errors for potential and field
    """
    constants = PhysicsConstants(coulomb_constant=K, charge_magnitude=Q)
    charges = dipole()
    errors = {'potential': 0.0, 'field': 0.0}

    for x in SAMPLE_XS:
        v = potential((x, POSITIVE[1]), charges, constants)
        ex, ey = field((x, POSITIVE[1]), charges, constants)
        expected_v = analytic_potential(x)
        expected_ex = analytic_field_x(x)

        scale = max(abs(expected_v), KQ / 1e3)
        errors['potential'] = max(errors['potential'], abs(v - expected_v) / scale)
        errors['field'] = max(errors['field'], abs(ex - expected_ex) / abs(expected_ex), abs(ey))

    for name, error in errors.items():
        status = "OK" if error <= rtol else "FAILED"
        logger.info(f"{name}: max relative error {error:.2e} [{status}]")

    return errors


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format='%(levelname)s - %(message)s')
    worst = validate()
    sys.exit(0 if max(worst.values()) <= 1e-9 else 1)
