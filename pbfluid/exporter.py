"""Binary export of particle positions."""

from __future__ import annotations

import os

import numpy as np


def export_particles(path: str | os.PathLike, positions, count: int | None = None) -> None:
    """Write the first ``count`` positions as little-endian float32 triples."""
    data = np.asarray(positions, dtype=float).reshape(-1, 3)
    if count is None:
        count = len(data)
    if count < 0 or count > len(data):
        raise ValueError(f"count {count} out of range for {len(data)} positions")
    with open(path, "wb") as out:
        out.write(data[:count].astype("<f4").tobytes())