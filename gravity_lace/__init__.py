"""
gravity-lace - Newtonian gravity simulation for point masses.

Features:
- Double-precision Vector2d/Vector3d and Mathd scalar helpers
- Index-stable body registry with create/tick/destroy entry points
- Substepped symplectic Euler integration with pairwise forces
- Render-space/simulation-space scale conversion and a fixed-step driver
- Diagnostics, preset scenarios and a CLI
"""

__version__ = "0.1.0"

from gravity_lace.numerics import Mathd, Vector2d, Vector3d
from gravity_lace.physics.body import Body
from gravity_lace.physics.integrators import SymplecticEulerIntegrator
from gravity_lace.physics.registry import BodyHandle
from gravity_lace.physics.simulation import Simulation
from gravity_lace.physics.space import Space

__all__ = [
    "Body",
    "BodyHandle",
    "Mathd",
    "Simulation",
    "Space",
    "SymplecticEulerIntegrator",
    "Vector2d",
    "Vector3d",
]
