"""Shared state and helpers of the smoothed particle hydrodynamics solvers."""

from __future__ import annotations

import math
from collections.abc import Iterator

import numpy as np

from .kernel import Kernel
from .neighbors import NeighborhoodSearch
from .parameters import Parameters, Statistics
from .particles import Fluid, ParticleManager

_INITIAL_MIN_VELO = 1000.0
_MIN_CFL_VELOCITY = 0.1
_CFL_SCALE = 0.4
_BASE_COLOR = np.array([0.0, 0.0, 1.0])
_LOW_DENSITY_COLOR = np.array([1.0, 1.0, 0.0])


class SPH:
    """Owns the kernel, the neighbourhood search and the statistics of a run."""

    def __init__(self, manager: ParticleManager, params: Parameters | None = None):
        self.manager = manager
        self.params = params if params is not None else manager.params
        self.statistics = Statistics()
        self.kernel = Kernel(self.params.kernel_function_id, self.params.h)
        self.search = NeighborhoodSearch(2.0 * self.params.h)
        for index in range(len(manager.objects)):
            self.add_particle_set(index)

    def _fluids(self) -> Iterator[tuple[int, Fluid]]:
        for index in self.manager.fluid_indices:
            yield index, self.manager.objects[index]

    def add_particle_set(self, index: int) -> int:
        """Register group ``index`` with the neighbourhood search."""
        group = self.manager.objects[index]
        if self.manager.is_fluid(index):
            return self.search.add_point_set(group.position, True, True)
        return self.search.add_point_set(group.position, group.is_dynamic, False)

    def nh_search(self) -> None:
        """Recompute all neighbour lists."""
        self.search.find_neighbors()

    def compute_semi_implicit_euler(self, fluid_index: int, i: int, timestep: float) -> None:
        """Advance velocity by the acceleration, then position by the new velocity."""
        fluid = self.manager.objects[fluid_index]
        fluid.velocity[i] += fluid.acceleration[i] * timestep
        fluid.position[i] += fluid.velocity[i] * timestep

    def compute_color(self, fluid_index: int, i: int) -> None:
        """Blue for rest density, fading to white as the density drops."""
        fluid = self.manager.objects[fluid_index]
        ratio = fluid.density[i] / self.params.rest_density
        low = max(1.0 - ratio, 0.0)
        fluid.color[i] = _BASE_COLOR + low * _LOW_DENSITY_COLOR

    def init_particles(self) -> None:
        """Derive the particle mass and move every fluid back to its start."""
        self.params.update_particle_mass()
        for _, fluid in self._fluids():
            fluid.position[:] = fluid.position0
            fluid.velocity[:] = 0.0
            fluid.color[:] = 0.0

    def update_time_step_cfl(self) -> float:
        """Choose the step size from the fastest predicted particle speed."""
        step = self.params.step_size
        max_velo = _MIN_CFL_VELOCITY
        for _, fluid in self._fluids():
            if len(fluid):
                predicted = fluid.velocity + fluid.acceleration * step
                max_velo = max(max_velo, float(np.max(np.sum(predicted**2, axis=1))))
        diameter = 2.0 * self.params.particle_radius
        step = self.params.cfl_factor * _CFL_SCALE * (diameter / math.sqrt(max_velo))
        step = min(step, self.params.cfl_max_time_step)
        step = max(step, self.params.cfl_min_time_step)
        self.params.step_size = step
        return step

    def compute_stats(self) -> Statistics:
        """Gather density, speed and neighbour summaries over all fluids."""
        densities: list[float] = []
        speeds: list[float] = []
        fluid_neighbors = 0
        neighbors = 0
        for index, fluid in self._fluids():
            ps = self.search.point_set(index)
            densities.extend(fluid.density.tolist())
            speeds.extend(np.linalg.norm(fluid.velocity, axis=1).tolist())
            for i in range(len(fluid)):
                found = ps.neighbors(i)
                neighbors += len(found)
                fluid_neighbors += sum(1 for nid in found if nid.point_set_id == 0)

        count = len(densities)

        def mean(total: float) -> float:
            return total / count if count else math.nan

        stats = self.statistics
        stats.avg_density = mean(sum(densities))
        stats.max_density = max([0.0, *densities])
        stats.min_velo = min([_INITIAL_MIN_VELO, *speeds])
        stats.avg_velo = mean(sum(speeds))
        stats.max_velo = max([0.0, *speeds])
        stats.avg_neighbors = mean(neighbors)
        stats.avg_fluid_neighbors = mean(fluid_neighbors)
        return stats

    def debug_particle(self, i: int) -> bool:
        """Whether ``i`` is the particle chosen for observation."""
        return i == self.params.observe_particle