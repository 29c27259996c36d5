"""SPH smoothing kernels and their gradients."""

from __future__ import annotations

import math
from enum import IntEnum

import numpy as np

PRECACHE_RESOLUTION = 0.0001


class KernelFunction(IntEnum):
    POLY6 = 1
    SPIKY = 2
    CUBIC_SPLINE = 3
    PRECACHED_CUBIC_SPLINE = 4


def _norm(r_vec) -> tuple[float, float, float, float]:
    x, y, z = (float(c) for c in r_vec)
    return x, y, z, math.hypot(x, y, z)


class Kernel:
    """Smoothing kernel selected by :class:`KernelFunction`.

    The precached cubic spline uses tables sampled at the support radius
    given to the constructor.
    """

    def __init__(self, kernel_function=KernelFunction.CUBIC_SPLINE, h: float = 0.1):
        self.kernel_function = KernelFunction(kernel_function)
        self.h = float(h)
        self.resolution = PRECACHE_RESOLUTION
        self._size = math.ceil(self.h / self.resolution)
        samples = [i * self.resolution for i in range(self._size)]
        self._w_table = [self.w_cubic_spline(r, self.h) for r in samples]
        self._grad_table = [self.gradient_w_cubic_spline(r, self.h) for r in samples]

    def w_cubic_spline(self, r: float, h: float) -> float:
        q = r / h
        alpha = 8.0 / (math.pi * h**3)
        if q <= 0.5:
            return alpha * (6.0 * q**3 - 6.0 * q**2 + 1.0)
        if q <= 1.0:
            return alpha * 2.0 * (1.0 - q) ** 3
        return 0.0

    def gradient_w_cubic_spline(self, r: float, h: float) -> float:
        """Radial derivative divided by ``r``; multiply by the offset vector."""
        q = r / h
        if q > 1.0 or r <= 1.0e-6:
            return 0.0
        alpha = (1.0 / (r * h)) * (48.0 / (math.pi * h**3))
        if q <= 0.5:
            return alpha * q * (3.0 * q - 2.0)
        return alpha * -((1.0 - q) ** 2)

    @staticmethod
    def _w_poly6(r2: float, h: float) -> float:
        if 0 <= r2 <= h * h:
            return 315.0 / (64 * math.pi * h**9) * (h * h - r2) ** 3
        return 0.0

    @staticmethod
    def _gradient_w_poly6(r: float, h: float) -> float:
        if 0 <= r <= h:
            return 315.0 / (64 * 3.14 * h**9) * -6.0 * (h * h - r * r) ** 2
        return 0.0

    @staticmethod
    def _w_spiky(r: float, h: float) -> float:
        if 0 <= r <= h:
            return 15.0 / (math.pi * h**6) * (h - r) ** 3
        return 0.0

    @staticmethod
    def _gradient_w_spiky(r: float, h: float) -> float:
        if 0 <= r <= h:
            return 15.0 / (math.pi * h**6) * -((h - r) ** 2)
        return 0.0

    def _lookup(self, table: list[float], r: float) -> float:
        i = math.floor(r / self.resolution)
        if i < self._size - 1:
            return (table[i] + table[i + 1]) / 2.0
        return 0.0

    def w(self, r_vec, h: float) -> float:
        """Kernel value for the offset vector ``r_vec``."""
        x, y, z, r = _norm(r_vec)
        kind = self.kernel_function
        if kind is KernelFunction.POLY6:
            return self._w_poly6(x * x + y * y + z * z, h)
        if kind is KernelFunction.SPIKY:
            return self._w_spiky(r, h)
        if kind is KernelFunction.CUBIC_SPLINE:
            return self.w_cubic_spline(r, h)
        return self._lookup(self._w_table, r)

    def gradient_w(self, r_vec, h: float) -> np.ndarray:
        """Kernel gradient for the offset vector ``r_vec``."""
        x, y, z, r = _norm(r_vec)
        kind = self.kernel_function
        if kind is KernelFunction.POLY6:
            return np.array([self._gradient_w_poly6(abs(c), h) for c in (x, y, z)])
        if kind is KernelFunction.SPIKY:
            return np.array([self._gradient_w_spiky(abs(c), h) for c in (x, y, z)])
        if kind is KernelFunction.CUBIC_SPLINE:
            factor = self.gradient_w_cubic_spline(r, h)
        else:
            factor = self._lookup(self._grad_table, r)
        return factor * np.array([x, y, z])

    def density_coefficient(self, x, h: float) -> float:
        """Piecewise density coefficient divided by the distance; NaN at zero."""
        norm = _norm(x)[3]
        q = norm / h
        if 0 < q < 2.0 / 3.0:
            q = 2.0 / 3.0
        elif q < 1.0:
            q = 2.0 * q - 1.5 * q**2
        elif q < 2.0:
            q = 0.5 * (2.0 - q) ** 2
        else:
            q = 0.0
        if norm == 0:
            return math.nan
        return q / norm