import numpy as np
import pytest

from pbfluid.parameters import Parameters, Statistics


def test_defaults_match_source_constants():
    params = Parameters()
    assert params.h == 0.1
    assert params.rest_density == 150
    assert params.kernel_function_id == 4
    assert params.cfl_max_time_step == 0.0005
    assert params.cfl_min_time_step == 0.0001
    assert np.allclose(params.gravitational_force, [0.0, -98.1, 0.0])


def test_gravity_is_not_shared_between_instances():
    first = Parameters()
    second = Parameters()
    first.gravitational_force[1] = 0.0
    assert second.gravitational_force[1] == pytest.approx(-98.1)


def test_update_particle_mass_scales_with_rest_density():
    params = Parameters()
    base = params.update_particle_mass()
    params.rest_density *= 2
    doubled = params.update_particle_mass()
    assert doubled == pytest.approx(2 * base)
    assert params.particle_mass == doubled


def test_update_particle_mass_scales_with_cube_of_radius():
    params = Parameters()
    base = params.update_particle_mass()
    params.particle_radius *= 2
    assert params.update_particle_mass() == pytest.approx(8 * base)


def test_unit_diameter_mass_is_scaling_times_density():
    params = Parameters(particle_radius=0.5)
    assert params.update_particle_mass() == pytest.approx(
        params.particle_mass_scaling * params.rest_density
    )


def test_statistics_start_at_zero():
    stats = Statistics()
    assert stats.avg_density == 0
    assert stats.max_velo == 0
    assert stats.time_per_frame == 0