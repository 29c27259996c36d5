import numpy as np
import pytest

from pbfluid.cli import create_simulation, main


def test_create_simulation_builds_scene_one():
    simulation = create_simulation(1, 2)
    manager = simulation.manager
    assert len(manager.objects) == 7
    assert manager.fluid_indices == [0]
    assert simulation.params.particles_per_axis == 2
    assert simulation.params.particle_radius == pytest.approx(0.25 / 2)
    assert simulation.params.observe_particle == -1
    fluid = manager.objects[0]
    np.testing.assert_allclose(fluid.position, fluid.position0)


def test_create_simulation_rejects_empty_scene():
    with pytest.raises(ValueError):
        create_simulation(3, 2)


def test_main_reports_empty_scene(capsys):
    assert main(["3"]) == 1
    assert "scene 3" in capsys.readouterr().err


def test_main_rejects_negative_steps():
    assert main(["1", "2", "--steps", "-1"]) == 2


def test_main_runs_and_exports(tmp_path, capsys):
    out_dir = tmp_path / "export"
    assert main(["1", "2", "--steps", "1", "--export", str(out_dir)]) == 0
    files = sorted(p.name for p in out_dir.iterdir())
    assert files == ["particlesframe0000"]
    data = (out_dir / "particlesframe0000").read_bytes()
    assert len(data) == 8 * 3 * 4
    positions = np.frombuffer(data, dtype="<f4").reshape(-1, 3)
    assert np.all(np.isfinite(positions))
    assert "Avg. Density" in capsys.readouterr().out


def test_main_fixed_step_reports_default(capsys):
    assert main(["1", "2", "--steps", "1", "--fixed-step", "--no-gravity"]) == 0
    assert "Stepsize: 0.000100" in capsys.readouterr().out