"""Construction of fluid blocks and boundary particle sets."""

from __future__ import annotations

import logging
import math

import numpy as np

from .parameters import Parameters
from .particles import Boundary, Fluid

logger = logging.getLogger(__name__)

_PI = 3.14159265
_BALL_STEP = 360 // 16
_BALL_RADIUS = 0.1
_BOUNDARY_COLOR = (0.0, 0.0, 0.0)
_BALL_COLOR = (1.0, 0.5, 0.5)


def _vec(value) -> np.ndarray:
    arr = np.asarray(value, dtype=float).reshape(3)
    return arr.copy()


def _axis(start: float, end: float, count: int) -> np.ndarray:
    """Evenly spaced samples from start to end; the midpoint for one sample."""
    if count == 1:
        return np.array([start + (end - start) / 2.0])
    return start + np.arange(count) * (end - start) / (count - 1)


class ParticleFactory:
    """Builds particle groups for the scenes of a simulation."""

    def __init__(self, params: Parameters | None = None):
        self.params = params if params is not None else Parameters()

    def create_fluid_particles(self, start, end, density) -> Fluid:
        """Fill the box from ``start`` to ``end`` with a regular grid of fluid.

        ``density`` gives the number of particles along each axis.
        """
        start, end = _vec(start), _vec(end)
        counts = [int(c) for c in np.asarray(density, dtype=float).reshape(3)]
        if any(c < 0 for c in counts):
            raise ValueError("particle counts must not be negative")
        total = counts[0] * counts[1] * counts[2]
        fluid = Fluid.allocate(total)
        if total:
            axes = [_axis(s, e, c) for s, e, c in zip(start, end, counts)]
            grid = np.stack(np.meshgrid(*axes, indexing="ij"), axis=-1).reshape(-1, 3)
            fluid.position[:] = grid
            fluid.position0[:] = grid
        logger.debug("Created %d particles.", total)
        return fluid

    def create_bounding_box(self, start, end, h: float, is_dynamic: bool = False) -> Boundary:
        """Sample the six faces of the box from ``start`` to ``end`` at spacing ``h``.

        With ``is_dynamic`` the inner particles of the face at ``end`` in x
        are left out.
        """
        if h <= 0:
            raise ValueError("spacing must be positive")
        start, end = _vec(start), _vec(end)
        diff = end - start
        d0, d1, d2 = (int(v / h) for v in diff)
        if min(d0, d1, d2) < 1:
            raise ValueError("box must be at least one spacing wide on every axis")

        total = 2 * d0 * (d1 + 1) + 2 * (d1 + 1) * d2 + 2 * (d0 - 1) * (d2 - 1)
        if is_dynamic:
            total -= (d1 + 1) * d2 - 2 * d2 - d1 + 1

        box = Boundary.allocate(total)
        box.is_dynamic = False
        pos = box.position
        box.color[:] = _BOUNDARY_COLOR

        # Faces normal to z.
        for i in range(d1 + 1):
            y = start[1] + i * diff[1] / d1
            for j in range(d0):
                x = start[0] + j * diff[0] / d0
                pos[i * d0 + j] = (x, y, start[2])
                x += diff[0] / d0
                pos[d0 * (d1 + 1) + i * d0 + j] = (x, y, end[2])

        # Faces normal to x, written interleaved.
        offset = 2 * d0 * (d1 + 1)
        addr = offset
        skipped = 0
        for i in range(d1 + 1):
            y = start[1] + i * diff[1] / d1
            for j in range(d2):
                z = start[2] + j * diff[2] / d2
                if is_dynamic and not (i == 0 or i == d1 or j == 0):
                    skipped += 1
                else:
                    pos[addr] = (end[0], y, z)
                    addr += 1
                z += diff[2] / d2
                pos[addr] = (start[0], y, z)
                addr += 1

        # Faces normal to y, interior only.
        offset += 2 * (d1 + 1) * d2 - skipped
        inner = (d0 - 1) * (d2 - 1)
        for i in range(d0 - 1):
            x = start[0] + (i + 1) * diff[0] / d0
            for j in range(d2 - 1):
                z = start[2] + (j + 1) * diff[2] / d2
                pos[offset + i * (d2 - 1) + j] = (x, start[1], z)
                pos[offset + inner + i * (d2 - 1) + j] = (x, end[1], z)

        logger.debug("Created %d bounding particles.", total)
        return box

    def create_bounding_wall(self, p, u, v, h: float) -> Boundary:
        """Sample the parallelogram spanned by ``u`` and ``v`` from corner ``p``."""
        if h <= 0:
            raise ValueError("spacing must be positive")
        p, u, v = _vec(p), _vec(u), _vec(v)
        x_size = int(float(np.linalg.norm(u)) / h)
        y_size = int(float(np.linalg.norm(v)) / h)
        wall = Boundary.allocate(x_size * y_size)
        if x_size and y_size:
            ii, jj = np.meshgrid(np.arange(x_size), np.arange(y_size), indexing="ij")
            fu = (1.0 * ii / x_size).reshape(-1, 1)
            fv = (1.0 * jj / y_size).reshape(-1, 1)
            points = p + fu * u + fv * v
            wall.position[:] = points
            wall.position0[:] = points
        wall.color[:] = _BOUNDARY_COLOR
        return wall

    def create_bounding_ball(self, start, h: float) -> Boundary:
        """A dynamic sphere of rest positions around the origin."""
        total = _BALL_STEP * _BALL_STEP
        ball = Boundary.allocate(total)
        ball.is_dynamic = True
        angles = range(0, 361, _BALL_STEP)
        addr = 0
        for alpha in angles:
            a = alpha * _PI / 180.0
            for beta in angles:
                b = beta * _PI / 180.0
                ball.position0[addr] = (
                    math.cos(a) * math.sin(b) * _BALL_RADIUS,
                    math.sin(a) * math.sin(b) * _BALL_RADIUS,
                    math.cos(b) * _BALL_RADIUS,
                )
                ball.color[addr] = _BALL_COLOR
                addr += 1
        return ball

    def create_fluid_translate(self, vec, size: float, density: float) -> Fluid:
        """A cube of fluid of half-width ``size`` centred on ``vec``."""
        centre = _vec(vec)
        half = np.full(3, float(size))
        return self.create_fluid_particles(centre - half, centre + half, (density,) * 3)