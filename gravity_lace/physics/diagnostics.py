"""Conserved quantities and orbital helpers for monitoring a simulation.

Energies use the same pair policy as the integrator: bodies below the mass
epsilon exert no gravity and coincident pairs contribute nothing.
"""

import math
from typing import Dict, Sequence, Tuple

import numpy as np

from gravity_lace.constants import G_SI, MASS_EPSILON
from gravity_lace.numerics.vector3d import Vector3d
from gravity_lace.physics.body import Body


def circular_orbit_speed(gravitational_constant: float, central_mass: float, radius: float) -> float:
    """Speed of a test particle on a circular orbit: v = sqrt(G M / r)."""
    return math.sqrt(gravitational_constant * central_mass / radius)


def orbital_period(gravitational_constant: float, mass_1: float, mass_2: float, semi_major_axis: float) -> float:
    """Two-body orbital period from Kepler's third law: T = 2 pi sqrt(a^3 / (G (m1 + m2)))."""
    return 2.0 * math.pi * math.sqrt(semi_major_axis ** 3 / (gravitational_constant * (mass_1 + mass_2)))


class Diagnostics:
    """Consistent diagnostics over a set of bodies."""

    def __init__(self, gravitational_constant: float = G_SI, mass_epsilon: float = MASS_EPSILON):
        self.G = gravitational_constant
        self.mass_epsilon = mass_epsilon

    @staticmethod
    def _arrays(bodies: Sequence[Body]) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        positions = np.array([b.position.to_tuple() for b in bodies], dtype=np.float64).reshape(-1, 3)
        velocities = np.array([b.velocity.to_tuple() for b in bodies], dtype=np.float64).reshape(-1, 3)
        masses = np.array([b.mass for b in bodies], dtype=np.float64)
        return positions, velocities, masses

    def total_mass(self, bodies: Sequence[Body]) -> float:
        return float(sum(b.mass for b in bodies))

    def center_of_mass(self, bodies: Sequence[Body]) -> Vector3d:
        """Mass-weighted mean position (zero vector for a massless set)."""
        positions, _, masses = self._arrays(bodies)
        total = np.sum(masses)
        if total <= 0.0:
            return Vector3d.zero()
        return Vector3d(*(np.sum(masses[:, np.newaxis] * positions, axis=0) / total))

    def center_of_mass_velocity(self, bodies: Sequence[Body]) -> Vector3d:
        _, velocities, masses = self._arrays(bodies)
        total = np.sum(masses)
        if total <= 0.0:
            return Vector3d.zero()
        return Vector3d(*(np.sum(masses[:, np.newaxis] * velocities, axis=0) / total))

    def total_momentum(self, bodies: Sequence[Body]) -> Vector3d:
        """Sum of m_i * v_i."""
        _, velocities, masses = self._arrays(bodies)
        return Vector3d(*np.sum(masses[:, np.newaxis] * velocities, axis=0))

    def angular_momentum(self, bodies: Sequence[Body]) -> Vector3d:
        """Sum of m_i * (r_i x v_i) about the origin."""
        positions, velocities, masses = self._arrays(bodies)
        if len(masses) == 0:
            return Vector3d.zero()
        L = np.sum(masses[:, np.newaxis] * np.cross(positions, velocities), axis=0)
        return Vector3d(*L)

    def kinetic_energy(self, bodies: Sequence[Body]) -> float:
        """0.5 * sum(m_i * v_i^2)."""
        _, velocities, masses = self._arrays(bodies)
        return float(0.5 * np.sum(masses * np.sum(velocities ** 2, axis=1)))

    def potential_energy(self, bodies: Sequence[Body]) -> float:
        """-G * sum over unordered pairs of m_i m_j / r_ij.

        A pair counts only when both bodies are attractors and they are not
        coincident.
        """
        positions, _, masses = self._arrays(bodies)
        n = len(masses)
        if n < 2:
            return 0.0
        r = positions[:, np.newaxis, :] - positions[np.newaxis, :, :]
        distances = np.sqrt(np.sum(r ** 2, axis=2))
        attracting = masses >= self.mass_epsilon
        upper = np.triu(np.ones((n, n), dtype=bool), k=1)
        valid = upper & (distances > Vector3d.K_EPSILON) & attracting[:, np.newaxis] & attracting[np.newaxis, :]
        pair_masses = masses[:, np.newaxis] * masses[np.newaxis, :]
        terms = np.zeros((n, n), dtype=np.float64)
        np.divide(pair_masses, distances, out=terms, where=valid)
        return float(-self.G * np.sum(terms))

    def compute_energies(self, bodies: Sequence[Body]) -> Tuple[float, float, float]:
        """Return (kinetic, potential, total) energy."""
        K = self.kinetic_energy(bodies)
        U = self.potential_energy(bodies)
        return K, U, K + U

    def snapshot(self, bodies: Sequence[Body]) -> Dict[str, float]:
        """Scalar summary suitable for logging or tabulating."""
        K, U, E = self.compute_energies(bodies)
        return {
            "n_bodies": len(bodies),
            "kinetic": K,
            "potential": U,
            "energy": E,
            "momentum": self.total_momentum(bodies).magnitude,
            "angular_momentum": self.angular_momentum(bodies).magnitude,
        }
