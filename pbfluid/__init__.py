"""Position based SPH fluid simulation: kernels, particle scenes and a time-stepping solver."""

__version__ = "0.1.0"