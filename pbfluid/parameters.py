"""Simulation parameters and per-step statistics."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np


def _default_gravity() -> np.ndarray:
    # Scaled by ten to speed the simulation up.
    return np.array([0.0, -98.1, 0.0])


@dataclass
class Parameters:
    """Tunable settings and constants of the fluid simulation."""

    h: float = 0.1  # kernel smoothing length

    particle_radius: float = 0.025  # set by the scene
    particle_mass: float = 1.0  # derived from radius and rest density
    particle_mass_scaling: float = 2.0

    rest_density: float = 150.0
    viscosity: float = 0.05  # viscosity epsilon

    particles_per_axis: int = 10

    # Position based dynamics
    pb_epsilon: float = 1.0e-6
    pb_max_iter: int = 1

    # Friction
    viscosity_coefficient: float = 0.1

    # Weakly compressible SPH
    stiffness_fluid: float = 1.0
    stiffness_bb: float = 0.7
    particle_mass_bb: float = 1.0

    # Switches
    use_gravity: bool = True
    use_friction: bool = True
    show_displacement: bool = True
    export_frames: bool = False
    enable_adaptive_time_step: bool = True
    add: bool = False

    # Constants
    cs: float = 2.0  # speed of sound in the medium
    velo_update_method: int = 0
    kernel_function_id: int = 4  # precached cubic spline
    gravitational_force: np.ndarray = field(default_factory=_default_gravity)

    # Step size
    step_size: float = 0.0001
    default_step_size: float = 0.0001
    cfl_factor: float = 0.5
    cfl_max_time_step: float = 0.0005
    cfl_min_time_step: float = 0.0001

    # Debugging
    observe_particle: int = -1

    def update_particle_mass(self) -> float:
        """Derive the particle mass from radius, scaling and rest density."""
        diameter = 2.0 * self.particle_radius
        self.particle_mass = self.particle_mass_scaling * diameter**3 * self.rest_density
        return self.particle_mass


@dataclass
class Statistics:
    """Summary values gathered after each simulation step."""

    avg_density: float = 0.0
    max_density: float = 0.0

    min_velo: float = 0.0
    avg_velo: float = 0.0
    max_velo: float = 0.0

    avg_fluid_neighbors: float = 0.0
    avg_neighbors: float = 0.0

    time_per_frame: float = 0.0