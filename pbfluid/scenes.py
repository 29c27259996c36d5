"""Predefined simulation scenes."""

from __future__ import annotations

import numpy as np

from .factory import ParticleFactory
from .particles import ParticleManager


class Scenes(ParticleFactory):
    """Creates the particle setups the simulation can start from."""

    def create_setup(self, index: int, h: float) -> ParticleManager:
        """Build setup ``index``; unknown setups give an empty manager."""
        manager = ParticleManager(self.params)
        fluid_size = 0.25
        if index == 1:
            fluid_density = self.params.particles_per_axis
            fluid = self.create_fluid_translate((0.25, 0.25, 0.25), fluid_size, fluid_density)
            manager.fluid_indices.append(manager.add_particles(fluid))
            self.params.particle_radius = fluid_size / fluid_density
            self.add_bounding_box(manager, (-0.05, -0.1, -0.05), (1.25, 0.8, 0.55), h / 2)
        elif index == 2:
            fluid_density = self.params.particles_per_axis
            for centre in ((-0.5, 0.0, 0.0), (0.5, 0.0, 0.0), (0.5, 0.7, 0.0)):
                fluid = self.create_fluid_translate(centre, fluid_size, fluid_density)
                manager.fluid_indices.append(manager.add_particles(fluid))
            self.add_bounding_box(manager, (-0.85, -0.6, -0.3), (0.85, 1.5, 0.3), h / 2)
        return manager

    def add_bounding_box(self, manager: ParticleManager, start, end, h: float) -> None:
        """Add the six walls of a box as separate groups; the front is hidden."""
        start = np.asarray(start, dtype=float)
        end = np.asarray(end, dtype=float)
        dx = np.array([end[0] - start[0], 0.0, 0.0])
        dy = np.array([0.0, end[1] - start[1], 0.0])
        dz = np.array([0.0, 0.0, end[2] - start[2]])

        walls = [
            (start, dx, dz),  # bottom
            (np.array([start[0], end[1], start[2]]), dx, dz),  # top
            (start, dy, dz),  # left
            (np.array([end[0], start[1], start[2]]), dy, dz),  # right
            (start, dy, dx),  # back
            (np.array([start[0], start[1], end[2]]), dy, dx),  # front
        ]
        for n, (corner, u, v) in enumerate(walls):
            wall = self.create_bounding_wall(corner, u, v, h)
            if n == len(walls) - 1:
                wall.render = False
            manager.add_particles(wall)