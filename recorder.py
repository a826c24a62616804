"""
Cannon-Wall: Trajectory Recorder
================================
Writes trajectories as plain text, one "<x> <y>" line per sample.
"""

import os
from typing import List

import numpy as np

from config import Trajectory, TrajectoryWriteError


def write_trajectory(trajectory: Trajectory, path: str) -> str:
    """Overwrite `path` with the trajectory's coordinates. Returns the path."""
    try:
        np.savetxt(path, trajectory.coordinates, fmt='%.17g', delimiter=' ')
    except OSError as e:
        raise TrajectoryWriteError(f"Could not write trajectory to {path}: {e}") from e
    return path


class TrajectoryRecorder:
    """
    Persists the trajectory of each new best shot.

    Files are named ``<prefix>_gen<generation>.dat`` inside ``output_dir``.
    """

    def __init__(self, output_dir: str = ".", prefix: str = "best"):
        self.output_dir = output_dir
        self.prefix = prefix
        self.paths: List[str] = []

    def path_for(self, generation: int) -> str:
        return os.path.join(self.output_dir, f"{self.prefix}_gen{generation:04d}.dat")

    def record(self, trajectory: Trajectory, generation: int) -> str:
        path = write_trajectory(trajectory, self.path_for(generation))
        self.paths.append(path)
        return path
