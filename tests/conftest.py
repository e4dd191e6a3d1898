"""Shared fixtures for chargefield tests."""

import matplotlib
matplotlib.use('Agg')

import pytest

from chargefield import Charge, PhysicsConstants, SimulationParameters, TracerSettings, Viewport


@pytest.fixture
def constants():
    """Default Coulomb constants (k = 8.99e9, q = 1 nC, radius 10 px)."""
    return PhysicsConstants()


@pytest.fixture
def kq(constants):
    return constants.coulomb_constant * constants.charge_magnitude


@pytest.fixture
def dipole():
    """Positive charge at (100, 100), negative charge at (300, 100)."""
    return [Charge(100.0, 100.0, True), Charge(300.0, 100.0, False)]


@pytest.fixture
def small_params():
    """Small viewport so full render passes stay fast."""
    return SimulationParameters(
        viewport=Viewport(120, 80),
        tracer=TracerSettings(step_size=2.0, max_steps=100)
    )
