# pbfluid

A position based fluid solver built on smoothed particle hydrodynamics
(SPH). Fluid blocks are sampled as regular grids of particles and placed
inside walls of boundary particles. Each time step the solver:

- picks the step size from a CFL condition (or a fixed default),
- applies gravity and boundary friction,
- advances the particles with a semi-implicit Euler step,
- solves the density constraint in position based fashion,
- derives velocities from the corrected positions,
- blends velocities towards fluid neighbours (viscosity),
- colours particles by density and gathers statistics.

## Installation

```
pip install .
```

With the test dependencies:

```
pip install .[test]
```

## Command line

```
pbfluid [SETUP] [PARTICLES_PER_AXIS] [--steps N] [--export DIR] [--no-gravity] [--fixed-step]
```

- `SETUP` selects a scene:
  - `1`: a single fluid block in a box.
  - `2`: three fluid blocks in a tall box.

  Any other number gives a scene with no particles, which the solver
  refuses; the command then reports an error and exits with status 1. The
  default is `3`, so pass `1` or `2` explicitly.
- `PARTICLES_PER_AXIS` sets how many particles each fluid block has along
  each axis (default 10).
- `--steps N` runs `N` steps (default 100).
- `--export DIR` writes the positions of the first fluid block to `DIR`
  at 30 frames per simulated second, as files named
  `particlesframe0000`, `particlesframe0001`, and so on.
- `--no-gravity` turns gravity off.
- `--fixed-step` turns the adaptive step size off.

When the run ends the command prints the simulated time, the step size and
the statistics of the last step: average and maximum density, minimum,
average and maximum speed, and the average number of fluid and of all
neighbours per particle.

Example:

```
pbfluid 2 8 --steps 50
```

## Library use

```python
from pbfluid.cli import create_simulation

sim = create_simulation(2, 8)
for _ in range(10):
    sim.step(sim.params.step_size)

print(sim.statistics.avg_density, sim.statistics.max_velo)
```

`TimeStepPBSPH.step` returns the `Statistics` of the step;
`TimeStepPBSPH.init` puts every fluid back at its start.

The pieces can also be used on their own:

- `pbfluid.parameters`: `Parameters` (settings and constants) and
  `Statistics` (per-step figures).
- `pbfluid.kernel`: `Kernel` with the poly6, spiky, cubic spline and
  precached cubic spline kernels, chosen by `KernelFunction`.
- `pbfluid.kernel_density`: `KernelDensity`, density and scalar field
  estimates over a grid of sample points.
- `pbfluid.neighbors`: `NeighborhoodSearch`, a fixed-radius search over
  several point sets.
- `pbfluid.particles`: the `Fluid` and `Boundary` particle groups and the
  `ParticleManager` that collects them.
- `pbfluid.factory`: `ParticleFactory`, which builds fluid blocks,
  bounding boxes, walls and a ball of boundary particles.
- `pbfluid.scenes`: `Scenes`, the predefined setups.
- `pbfluid.sph`, `pbfluid.boundary`, `pbfluid.pbsph`: the solver state,
  boundary volumes and per-particle solver steps.
- `pbfluid.timestep`: `TimeStepPBSPH`, which runs whole steps.
- `pbfluid.exporter`: `export_particles`, which writes positions as raw
  little-endian 32-bit float triples.

## What it does not do

The package has no display. It does not render the particles or the
displacement vectors, has no interactive controls, and does not export
images of frames. The command runs a fixed number of steps and prints
figures; the only files it writes are the raw position exports.