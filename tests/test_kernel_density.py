import math

import numpy as np
import pytest

from pbfluid.kernel_density import KernelDensity


def test_particle_field_spans_start_to_end():
    kd = KernelDensity()
    kd.init_particle_field((0, 0, 0), (1, 2, 3), 3)
    assert len(kd.positions) == 27
    assert kd.positions[0] == (0.0, 0.0, 0.0)
    assert np.allclose(kd.positions[-1], (1, 2, 3))
    assert np.allclose(kd.positions[1], (0, 0, 1.5))


def test_sample_line_indices_and_range():
    kd = KernelDensity()
    kd.init_particle_field((0, 0, 0), (1, 1, 1), 2)
    kd.add_sample_line(5)
    assert kd.sample_line == list(range(8, 13))
    xs = [kd.positions[i][0] for i in kd.sample_line]
    assert xs[0] == pytest.approx(-2.0)
    assert xs[-1] == pytest.approx(2.0)
    assert all(kd.positions[i][1] == 0 and kd.positions[i][2] == 0 for i in kd.sample_line)


def test_density_of_pair_matches_kernel():
    kd = KernelDensity(particle_mass=2.0)
    kd.positions = [(0.0, 0.0, 0.0), (0.05, 0.0, 0.0)]
    kd.neighborhood_search(0.2)
    expected = 2.0 * kd.kernel.w(np.array([-0.05, 0.0, 0.0]), 0.1)
    assert kd.density(0, 0.1) == pytest.approx(expected)
    assert kd.density(1, 0.1) == pytest.approx(expected)
    assert expected > 0


def test_isolated_point_has_zero_density():
    kd = KernelDensity()
    kd.positions = [(0.0, 0.0, 0.0), (5.0, 0.0, 0.0)]
    kd.neighborhood_search(0.2)
    assert kd.density(0, 0.1) == 0


def test_scalar_quantity_of_pair_is_one():
    kd = KernelDensity(particle_mass=3.0)
    kd.positions = [(0.0, 0.0, 0.0), (0.05, 0.0, 0.0)]
    kd.neighborhood_search(0.2)
    assert kd.scalar_quantity(0, 0.1) == pytest.approx(1.0)


def test_scalar_quantity_respects_compact_support():
    kd = KernelDensity(compact_constant=0.1)
    kd.positions = [(0.0, 0.0, 0.0), (0.05, 0.0, 0.0)]
    kd.neighborhood_search(0.2)
    assert kd.scalar_quantity(0, 0.1) == 0


def test_queries_need_search_first():
    kd = KernelDensity()
    kd.positions = [(0.0, 0.0, 0.0)]
    with pytest.raises(RuntimeError):
        kd.density(0, 0.1)
    with pytest.raises(RuntimeError):
        kd.scalar_quantity(0, 0.1)


def test_density_coefficient_agrees_with_kernel():
    kd = KernelDensity()
    x = np.array([0.03, 0.04, 0.0])
    assert kd.density_coefficient(x, 0.1) == pytest.approx(kd.kernel.density_coefficient(x, 0.1))
    assert kd.density_coefficient(np.array([1.0, 0.0, 0.0]), 0.1) == 0
    assert math.isnan(kd.density_coefficient(np.zeros(3), 0.1))