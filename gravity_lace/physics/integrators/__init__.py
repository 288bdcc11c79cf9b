"""Numerical integrators for gravity simulations."""

from gravity_lace.physics.integrators.base import Integrator
from gravity_lace.physics.integrators.symplectic_euler import KERNELS, SymplecticEulerIntegrator

__all__ = ["Integrator", "SymplecticEulerIntegrator", "KERNELS"]
