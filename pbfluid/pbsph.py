"""Position based pressure solving on top of the SPH state."""

from __future__ import annotations

import numpy as np

from .boundary import BoundaryPsi
from .parameters import Parameters
from .particles import ParticleManager
from .sph import SPH

_ADD_FORCE = np.array([10.0, 0.0, 0.0])


class PBSPH(SPH):
    """Per-particle steps of the position based fluid solver."""

    def __init__(self, manager: ParticleManager, params: Parameters | None = None):
        super().__init__(manager, params)
        self.boundary_psi = BoundaryPsi(self.search, self.manager, self.params, self.kernel)

    def compute_position_update(self, fluid_index: int, i: int) -> None:
        """Apply and clear the accumulated position correction."""
        fluid = self.manager.objects[fluid_index]
        fluid.position[i] += fluid.delta_x[i]
        fluid.delta_x[i] = 0.0

    def compute_prev_position_update(self, fluid_index: int, i: int) -> None:
        """Shift the position history by one step."""
        fluid = self.manager.objects[fluid_index]
        fluid.last_pos[i] = fluid.old_pos[i]
        fluid.old_pos[i] = fluid.position[i]

    def compute_velocity(self, fluid_index: int, i: int, time_step: float) -> None:
        """Velocity from the positions of this and earlier steps."""
        fluid = self.manager.objects[fluid_index]
        if self.params.velo_update_method == 1:
            moved = 1.5 * fluid.position[i] - 2.0 * fluid.old_pos[i] + 0.5 * fluid.last_pos[i]
        else:
            moved = fluid.position[i] - fluid.old_pos[i]
        fluid.velocity[i] = (1.0 / time_step) * moved

    def _offsets(self, fluid_index: int, i: int):
        objects = self.manager.objects
        x_i = objects[fluid_index].position[i]
        for nid in self.search.point_set(fluid_index).neighbors(i):
            other = objects[nid.point_set_id]
            yield nid, other, x_i - other.position[nid.point_id]

    def compute_density(self, fluid_index: int, i: int) -> None:
        """Kernel sum over fluid masses and boundary volumes."""
        h = self.params.h
        total = 0.0
        for nid, other, q in self._offsets(fluid_index, i):
            if self.manager.is_fluid(nid.point_set_id):
                weight = self.params.particle_mass
            else:
                weight = other.boundary_psi[nid.point_id]
            total += self.kernel.w(q, h) * weight
        self.manager.objects[fluid_index].density[i] = total

    def compute_external_forces(self, fluid_index: int, i: int) -> None:
        """Reset the acceleration to gravity, push and friction."""
        fluid = self.manager.objects[fluid_index]
        fluid.acceleration[i] = 0.0
        if self.params.use_gravity:
            fluid.acceleration[i] += self.params.gravitational_force
        if self.params.add:
            fluid.acceleration[i] += _ADD_FORCE
        if self.params.use_friction:
            self.compute_friction(fluid_index, i)

    def compute_friction(self, fluid_index: int, i: int) -> None:
        """Add the boundary friction acceleration."""
        p = self.params
        fluid = self.manager.objects[fluid_index]
        # The velocity is read from the first group, as the solver always has.
        v = self.manager.objects[0].velocity[i]
        force = np.zeros(3)
        for nid, other, x in self._offsets(fluid_index, i):
            if self.manager.is_fluid(nid.point_set_id):
                continue
            density = fluid.density[i]
            if density <= 0.0:
                continue
            fac1 = min(float(np.dot(v, x)), 0.0)
            fac2 = float(np.dot(x, x)) + 0.01 * p.h * p.h
            pi = -p.viscosity_coefficient * p.h / (2 * density) * fac1 / fac2
            psi = other.boundary_psi[nid.point_id]
            force += -p.particle_mass * psi * p.rest_density * pi * self.kernel.gradient_w(x, p.h)
        fluid.acceleration[i] += force

    def _grad_c(self, nid, other, q) -> np.ndarray:
        p = self.params
        if self.manager.is_fluid(nid.point_set_id):
            weight = p.particle_mass
        else:
            weight = other.boundary_psi[nid.point_id]
        return -1.0 * weight * self.kernel.gradient_w(q, p.h) / p.rest_density

    def compute_lambda(self, fluid_index: int, i: int) -> None:
        """Scaling factor of the density constraint; zero when not compressed."""
        fluid = self.manager.objects[fluid_index]
        constraint = max(fluid.density[i] / self.params.rest_density - 1.0, 0.0)
        if constraint == 0.0:
            fluid.lambdas[i] = 0.0
            return
        grad_sum = 0.0
        grad_i = np.zeros(3)
        for nid, other, q in self._offsets(fluid_index, i):
            grad_j = self._grad_c(nid, other, q)
            grad_sum += float(np.dot(grad_j, grad_j))
            grad_i -= grad_j
        grad_sum += float(np.dot(grad_i, grad_i))
        fluid.lambdas[i] = -constraint / (grad_sum + self.params.pb_epsilon)

    def compute_delta_x(self, fluid_index: int, i: int) -> None:
        """Accumulate the position correction of particle ``i``."""
        fluid = self.manager.objects[fluid_index]
        delta = np.zeros(3)
        for nid, other, q in self._offsets(fluid_index, i):
            grad_j = self._grad_c(nid, other, q)
            if self.manager.is_fluid(nid.point_set_id):
                factor = fluid.lambdas[i] + other.lambdas[nid.point_id]
            else:
                factor = 2.0 * fluid.lambdas[i]
            delta -= factor * grad_j
        fluid.delta_x[i] += delta

    def compute_viscosity(self, fluid_index: int, i: int) -> None:
        """Blend the velocity of ``i`` towards its fluid neighbours."""
        p = self.params
        fluid = self.manager.objects[fluid_index]
        for nid, other, q in self._offsets(fluid_index, i):
            if not self.manager.is_fluid(nid.point_set_id):
                continue
            neighbor_density = other.density[nid.point_id]
            if neighbor_density <= 0.0:
                continue
            a = p.particle_mass * self.kernel.w(q, p.h) * p.viscosity / neighbor_density
            fluid.velocity[i] += a * (other.velocity[nid.point_id] - fluid.velocity[i])