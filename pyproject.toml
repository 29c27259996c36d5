[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pbfluid"
version = "0.1.0"
description = "Position based smoothed particle hydrodynamics fluid simulation"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["sph", "pbf", "fluid", "simulation", "particles", "physics"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Physics",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
pbfluid = "pbfluid.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["pbfluid"]

[tool.pytest.ini_options]
addopts = "-ra"
