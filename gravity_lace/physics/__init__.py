"""Physics engine for gravity simulations."""

from gravity_lace.physics.body import Body
from gravity_lace.physics.diagnostics import Diagnostics
from gravity_lace.physics.driver import FixedStepDriver
from gravity_lace.physics.registry import BodyHandle, BodyRegistry
from gravity_lace.physics.simulation import Simulation
from gravity_lace.physics.space import Space

__all__ = [
    "Body",
    "BodyHandle",
    "BodyRegistry",
    "Diagnostics",
    "FixedStepDriver",
    "Simulation",
    "Space",
]
