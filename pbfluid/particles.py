"""Particle containers and the manager that owns them."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np

from .parameters import Parameters

_DYNAMIC_AMPLITUDE = 0.05
_DYNAMIC_FREQUENCY = 50.0


def _vectors(size: int = 0) -> np.ndarray:
    return np.zeros((size, 3))


def _scalars(size: int = 0) -> np.ndarray:
    return np.zeros(size)


@dataclass(eq=False)
class Particles:
    """Positions, rest positions, velocities and colours of a particle group."""

    is_dynamic: bool = False
    is_fluid: bool = False
    render: bool = True

    position: np.ndarray = field(default_factory=_vectors)
    position0: np.ndarray = field(default_factory=_vectors)
    velocity: np.ndarray = field(default_factory=_vectors)
    color: np.ndarray = field(default_factory=_vectors)

    def __len__(self) -> int:
        return len(self.position)


@dataclass(eq=False)
class Boundary(Particles):
    """Boundary particles with their volume contribution ``boundary_psi``."""

    boundary_psi: np.ndarray = field(default_factory=_scalars)

    @classmethod
    def allocate(cls, size: int) -> "Boundary":
        return cls(
            is_fluid=False,
            render=True,
            position=_vectors(size),
            position0=_vectors(size),
            velocity=_vectors(size),
            color=_vectors(size),
            boundary_psi=_scalars(size),
        )


@dataclass(eq=False)
class Fluid(Particles):
    """Fluid particles with the per-particle state of the pressure solver."""

    density: np.ndarray = field(default_factory=_scalars)
    lambdas: np.ndarray = field(default_factory=_scalars)
    acceleration: np.ndarray = field(default_factory=_vectors)
    delta_x: np.ndarray = field(default_factory=_vectors)
    old_pos: np.ndarray = field(default_factory=_vectors)
    last_pos: np.ndarray = field(default_factory=_vectors)

    @classmethod
    def allocate(cls, size: int) -> "Fluid":
        return cls(
            is_fluid=True,
            render=True,
            position=_vectors(size),
            position0=_vectors(size),
            velocity=_vectors(size),
            color=_vectors(size),
            density=_scalars(size),
            lambdas=_scalars(size),
            acceleration=_vectors(size),
            delta_x=_vectors(size),
            old_pos=_vectors(size),
            last_pos=_vectors(size),
        )


class ParticleManager:
    """Holds every particle group and the single-precision render buffers."""

    def __init__(self, params: Parameters | None = None):
        self.params = params if params is not None else Parameters()
        self.objects: list[Particles] = []
        self.fluid_indices: list[int] = []
        self.position_output: list[np.ndarray] = []
        self.color_output: list[np.ndarray] = []

    def add_particles(self, particles: Particles) -> int:
        """Append a group and return its index."""
        index = len(self.objects)
        self.objects.append(particles)
        size = len(particles.position)
        self.position_output.append(np.zeros((size, 3), dtype=np.float32))
        self.color_output.append(np.zeros((size, 3), dtype=np.float32))
        return index

    def cast_positions(self, index: int) -> None:
        """Copy positions and colours of a group into its render buffers."""
        group = self.objects[index]
        self.position_output[index][:] = group.position
        self.color_output[index][:] = group.color

    def update_dynamic_boundary(self, time: float) -> None:
        """Oscillate every group from index 2 on along the x axis."""
        offset = -_DYNAMIC_AMPLITUDE * (1.0 - math.cos(time * _DYNAMIC_FREQUENCY))
        delta = np.array([offset, 0.0, 0.0])
        for group in self.objects[2:]:
            group.position[:] = group.position0 + delta

    def is_fluid(self, index: int) -> bool:
        return index in self.fluid_indices