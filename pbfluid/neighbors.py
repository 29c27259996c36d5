"""Fixed-radius neighbourhood search over several point sets."""

from __future__ import annotations

from typing import NamedTuple

import numpy as np

_BLOCK_ELEMENTS = 1 << 20


class NeighborId(NamedTuple):
    """Identifies a point by its point set and its index in that set."""

    point_set_id: int
    point_id: int


class PointSet:
    """A set of points whose positions are shared with their owner."""

    def __init__(self, positions: np.ndarray, dynamic: bool = True, search_neighbors: bool = True):
        self.positions = positions
        self.dynamic = dynamic
        self.search_neighbors = search_neighbors
        self._neighbors: list[list[NeighborId]] = [[] for _ in range(len(positions))]

    def __len__(self) -> int:
        return len(self.positions)

    def neighbors(self, i: int) -> list[NeighborId]:
        """Neighbours of point ``i`` found by the last search."""
        return self._neighbors[i]

    def enable_neighborsearch(self, enabled: bool) -> None:
        """Choose whether the neighbours of this set's points are searched."""
        self.search_neighbors = bool(enabled)


class NeighborhoodSearch:
    """Finds, for every searched point, all points closer than ``radius``.

    Candidates come from every registered point set; a point is never its
    own neighbour. Positions are read at search time, so arrays updated in
    place are always seen as they are.
    """

    def __init__(self, radius: float):
        if radius <= 0:
            raise ValueError("search radius must be positive")
        self.radius = float(radius)
        self._sets: list[PointSet] = []

    def __len__(self) -> int:
        return len(self._sets)

    def add_point_set(self, positions, dynamic: bool = True, search_neighbors: bool = True) -> int:
        """Register an (n, 3) position array and return its set index."""
        if not isinstance(positions, np.ndarray):
            positions = np.asarray(positions, dtype=float)
        if positions.ndim != 2 or positions.shape[1] != 3:
            raise ValueError("positions must have shape (n, 3)")
        self._sets.append(PointSet(positions, dynamic, search_neighbors))
        return len(self._sets) - 1

    def point_set(self, index: int) -> PointSet:
        return self._sets[index]

    def find_neighbors(self) -> None:
        """Recompute the neighbour lists of all enabled point sets."""
        r2 = self.radius * self.radius
        for query_id, query in enumerate(self._sets):
            count = len(query)
            result: list[list[NeighborId]] = [[] for _ in range(count)]
            if query.search_neighbors and count:
                for cand_id, cand in enumerate(self._sets):
                    if len(cand):
                        self._collect(result, query, query_id, cand, cand_id, r2)
            query._neighbors = result

    @staticmethod
    def _collect(result, query, query_id, cand, cand_id, r2) -> None:
        cand_pos = np.asarray(cand.positions, dtype=float)
        block = max(1, _BLOCK_ELEMENTS // len(cand_pos))
        query_pos = np.asarray(query.positions, dtype=float)
        for start in range(0, len(query_pos), block):
            chunk = query_pos[start:start + block]
            diff = chunk[:, None, :] - cand_pos[None, :, :]
            hits = np.einsum("ijk,ijk->ij", diff, diff) < r2
            if cand_id == query_id:
                rows = np.arange(len(chunk))
                hits[rows, start + rows] = False
            rows, cols = np.nonzero(hits)
            for row, col in zip(rows.tolist(), cols.tolist()):
                result[start + row].append(NeighborId(cand_id, col))