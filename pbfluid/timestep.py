"""Time stepping of the position based fluid solver."""

from __future__ import annotations

import logging
import time

import numpy as np

from .parameters import Parameters, Statistics
from .particles import Fluid, ParticleManager
from .pbsph import PBSPH

logger = logging.getLogger(__name__)


def _milliseconds() -> int:
    return time.monotonic_ns() // 1_000_000


class TimeStepPBSPH(PBSPH):
    """Advances all fluids one step at a time with a position based pressure solve.

    The first particle group must be a fluid; its positions and displacements
    are mirrored into ``vector_output`` for display.
    """

    visualize_amount = 1

    def __init__(self, manager: ParticleManager, params: Parameters | None = None):
        if not manager.objects or not isinstance(manager.objects[0], Fluid):
            raise ValueError("the first particle group must be a fluid")
        super().__init__(manager, params)
        size = 2 * len(manager.objects[0])
        self.vector_output = [
            np.zeros((size, 3), dtype=np.float32) for _ in range(self.visualize_amount)
        ]
        self.init()

    def _each_particle(self):
        for index, fluid in self._fluids():
            for i in range(len(fluid)):
                yield index, i

    def init(self) -> None:
        """Reset every fluid to its start and recompute boundary volumes."""
        logger.info("Reset particles")
        self.init_particles()
        self.boundary_psi.calc_boundary_psi()

        for _, fluid in self._fluids():
            fluid.last_pos[:] = fluid.position
            fluid.old_pos[:] = fluid.position
            fluid.delta_x[:] = 0.0
        for output in self.vector_output:
            output[:] = 0.0

        for index, i in self._each_particle():
            self.compute_density(index, i)

        self.compute_stats()

    def step(self, delta_time: float) -> Statistics:
        """Advance the simulation by ``delta_time`` and return the statistics."""
        started = _milliseconds()

        self._helper_step()

        for index, i in self._each_particle():
            self.compute_prev_position_update(index, i)
            self.compute_external_forces(index, i)
            self.compute_semi_implicit_euler(index, i, delta_time)

        self.nh_search()
        self._solve_pressure()

        for index, i in self._each_particle():
            self.compute_velocity(index, i, delta_time)
        for index, i in self._each_particle():
            self.compute_viscosity(index, i)
        for index, i in self._each_particle():
            self.compute_color(index, i)

        self.compute_stats()
        self._update_delta_x_output()

        self.statistics.time_per_frame = float(_milliseconds() - started)
        return self.statistics

    def _solve_pressure(self) -> None:
        for _ in range(int(self.params.pb_max_iter)):
            for index, i in self._each_particle():
                self.compute_density(index, i)
                self.compute_lambda(index, i)
            for index, i in self._each_particle():
                self.compute_delta_x(index, i)
            for index, i in self._each_particle():
                self.compute_position_update(index, i)

    def _update_delta_x_output(self) -> None:
        fluid = self.manager.objects[0]
        for j, output in enumerate(self.vector_output):
            output[0::2] = fluid.position
            if j == 0:
                output[1::2] = fluid.position + fluid.delta_x

    def _helper_step(self) -> None:
        if self.params.enable_adaptive_time_step:
            self.update_time_step_cfl()
        else:
            self.params.step_size = self.params.default_step_size
        self.params.update_particle_mass()