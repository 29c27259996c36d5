"""Kernel density estimates on a regular particle field."""

from __future__ import annotations

import logging
import math

import numpy as np

from .kernel import Kernel, KernelFunction
from .neighbors import NeighborhoodSearch

logger = logging.getLogger(__name__)


class KernelDensity:
    """Density and scalar field estimates over a set of sample positions."""

    def __init__(self, particle_mass: float = 1.0, compact_constant: float = 1.0):
        self.particle_mass = float(particle_mass)
        self.compact_constant = float(compact_constant)
        self.kernel = Kernel(KernelFunction.CUBIC_SPLINE, 0.1)
        self.positions: list[tuple[float, float, float]] = []
        self.sample_line: list[int] = []
        self._search: NeighborhoodSearch | None = None
        self._array: np.ndarray | None = None
        self._point_set_id = 0

    def init_particle_field(self, start, end, particle_count: float) -> None:
        """Add a cubic grid of ``particle_count`` points per axis."""
        count = math.ceil(particle_count)
        sx, sy, sz = (float(c) for c in start)
        ex, ey, ez = (float(c) for c in end)
        step = particle_count - 1
        dx, dy, dz = (ex - sx) / step, (ey - sy) / step, (ez - sz) / step
        for ix in range(count):
            x = sx + dx * ix
            for iy in range(count):
                y = sy + dy * iy
                for iz in range(count):
                    self.positions.append((x, y, sz + dz * iz))

    def add_sample_line(self, sample_points: int) -> None:
        """Add evenly spaced points on the x axis from -2 to 2."""
        step = 4.0 / (sample_points - 1)
        for i in range(sample_points):
            self.positions.append((-2 + step * i, 0.0, 0.0))
            self.sample_line.append(len(self.positions) - 1)

    def neighborhood_search(self, radius: float) -> None:
        """Find the neighbours of every position within ``radius``."""
        self._array = np.array(self.positions, dtype=float).reshape(-1, 3)
        self._search = NeighborhoodSearch(radius)
        self._point_set_id = self._search.add_point_set(self._array)
        self._search.find_neighbors()

    def _point_set(self):
        if self._search is None:
            raise RuntimeError("neighborhood_search must run first")
        return self._search.point_set(self._point_set_id)

    def scalar_quantity(self, i: int, h: float) -> float:
        """SPH estimate of the neighbour count field at point ``i``."""
        ps = self._point_set()
        r = self._array[i]
        result = 0.0
        for j, nid in enumerate(ps.neighbors(i)):
            delta = r - self._array[nid.point_id]
            w = self.kernel.w(delta, h)
            if float(np.linalg.norm(delta)) <= self.compact_constant * h:
                rho = self.density(j, h)
                ratio = self.particle_mass / rho if rho else math.inf
                result += ratio * len(ps.neighbors(nid.point_id)) * w
        return result

    def density(self, i: int, h: float) -> float:
        """Kernel sum of the masses of the neighbours of point ``i``."""
        ps = self._point_set()
        r = self._array[i]
        return sum(
            self.particle_mass * self.kernel.w(r - self._array[nid.point_id], h)
            for nid in ps.neighbors(i)
        )

    def density_coefficient(self, x, h: float) -> float:
        """Piecewise density coefficient divided by the distance."""
        value = self.kernel.density_coefficient(x, h)
        logger.debug("density coefficient %s", value)
        return value