import math

import numpy as np
import pytest

from pbfluid.parameters import Parameters
from pbfluid.particles import Boundary, Fluid, ParticleManager


def test_fluid_allocate_shapes_and_flags():
    fluid = Fluid.allocate(5)
    assert fluid.is_fluid and fluid.render and not fluid.is_dynamic
    assert len(fluid) == 5
    assert fluid.position.shape == (5, 3)
    assert fluid.delta_x.shape == (5, 3)
    assert fluid.density.shape == (5,)
    assert fluid.lambdas.shape == (5,)


def test_boundary_allocate_shapes_and_flags():
    boundary = Boundary.allocate(4)
    assert not boundary.is_fluid and boundary.render and not boundary.is_dynamic
    assert boundary.boundary_psi.shape == (4,)
    assert boundary.velocity.shape == (4, 3)


def test_add_particles_returns_sequential_indices_and_buffers():
    manager = ParticleManager(Parameters())
    assert manager.add_particles(Fluid.allocate(3)) == 0
    assert manager.add_particles(Boundary.allocate(7)) == 1
    assert manager.position_output[1].shape == (7, 3)
    assert manager.color_output[0].dtype == np.float32


def test_cast_positions_copies_into_float32_buffers():
    manager = ParticleManager()
    fluid = Fluid.allocate(2)
    fluid.position[:] = [[0.5, 1.5, -2.0], [3.0, 0.25, 1.0]]
    fluid.color[:] = [[0.0, 0.0, 1.0], [1.0, 1.0, 1.0]]
    index = manager.add_particles(fluid)
    manager.cast_positions(index)
    assert np.allclose(manager.position_output[index], fluid.position)
    assert np.allclose(manager.color_output[index], fluid.color)


def test_is_fluid_follows_fluid_indices():
    manager = ParticleManager()
    index = manager.add_particles(Fluid.allocate(1))
    manager.add_particles(Boundary.allocate(1))
    manager.fluid_indices.append(index)
    assert manager.is_fluid(0)
    assert not manager.is_fluid(1)


def _manager_with_groups(count):
    manager = ParticleManager()
    for _ in range(count):
        group = Boundary.allocate(2)
        group.position0[:] = [[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]]
        group.position[:] = group.position0
        manager.add_particles(group)
    return manager


def test_dynamic_boundary_moves_only_later_groups_in_place():
    manager = _manager_with_groups(3)
    moved = manager.objects[2].position
    manager.update_dynamic_boundary(math.pi / 50)
    assert manager.objects[2].position is moved
    expected = manager.objects[2].position0 + np.array([-2 * 0.05, 0.0, 0.0])
    assert np.allclose(manager.objects[2].position, expected)
    assert np.array_equal(manager.objects[0].position, manager.objects[0].position0)
    assert np.array_equal(manager.objects[1].position, manager.objects[1].position0)


def test_dynamic_boundary_at_time_zero_is_rest_position():
    manager = _manager_with_groups(4)
    manager.update_dynamic_boundary(0.0)
    for group in manager.objects:
        assert np.allclose(group.position, group.position0)


def test_cast_positions_unknown_index_raises():
    manager = ParticleManager()
    with pytest.raises(IndexError):
        manager.cast_positions(0)