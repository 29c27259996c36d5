"""Volume contribution of boundary particles."""

from __future__ import annotations

from .kernel import Kernel
from .neighbors import NeighborhoodSearch
from .parameters import Parameters
from .particles import ParticleManager, Particles


def _is_static(group: Particles) -> bool:
    return not (group.is_dynamic or group.is_fluid)


class BoundaryPsi:
    """Computes ``boundary_psi`` of every boundary group from its own neighbours."""

    def __init__(
        self,
        search: NeighborhoodSearch,
        manager: ParticleManager,
        params: Parameters,
        kernel: Kernel,
    ):
        self.search = search
        self.manager = manager
        self.params = params
        self.kernel = kernel

    def _enable(self, predicate) -> None:
        for index, group in enumerate(self.manager.objects):
            self.search.point_set(index).enable_neighborsearch(predicate(index, group))

    def calc_boundary_psi(self) -> None:
        """Fill ``boundary_psi`` of all boundaries, then search fluids only."""
        objects = self.manager.objects

        self._enable(lambda _, group: _is_static(group))
        self.search.find_neighbors()
        for index, group in enumerate(objects):
            if _is_static(group):
                self._calc_group(index)

        for index, group in enumerate(objects):
            if group.is_dynamic and not group.is_fluid:
                self._enable(lambda j, _, target=index: j == target)
                self.search.find_neighbors()
                self._calc_group(index)

        self._enable(lambda _, group: group.is_fluid)

    def _calc_group(self, index: int) -> None:
        objects = self.manager.objects
        ps = self.search.point_set(index)
        group = objects[index]
        h = self.params.h
        for i, x_i in enumerate(group.position):
            delta = sum(
                self.kernel.w(x_i - objects[nid.point_set_id].position[nid.point_id], h)
                for nid in ps.neighbors(i)
                if not self.manager.is_fluid(nid.point_set_id)
            )
            volume = 1.0 / delta if delta > 0 else 0.0
            group.boundary_psi[i] = self.params.rest_density * volume