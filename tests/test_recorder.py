import math
import os

import numpy as np
import pytest

from cannon_model import simulate
from config import EnvironmentParameters, FiringPlan, Trajectory, TrajectoryWriteError
from recorder import TrajectoryRecorder, write_trajectory


def test_writes_one_xy_pair_per_line(tmp_path):
    traj = Trajectory(times=[0.1, 0.2], coordinates=[[1.5, 2.0], [7.25, -0.25]])
    path = write_trajectory(traj, str(tmp_path / "traj.dat"))

    with open(path) as f:
        lines = f.read().splitlines()
    assert lines == ["1.5 2", "7.25 -0.25"]


def test_overwrites_existing_file(tmp_path):
    path = str(tmp_path / "traj.dat")
    with open(path, "w") as f:
        f.write("stale\n" * 10)

    traj = simulate(FiringPlan.new(10.0, math.pi / 4), EnvironmentParameters())
    write_trajectory(traj, path)

    saved = np.loadtxt(path, ndmin=2)
    assert saved.shape == (len(traj), 2)
    assert np.array_equal(saved, traj.coordinates)


def test_write_failure_is_fatal(tmp_path):
    traj = Trajectory(times=[0.1], coordinates=[[1.0, 1.0]])
    with pytest.raises(TrajectoryWriteError):
        write_trajectory(traj, str(tmp_path / "missing" / "traj.dat"))


def test_recorder_names_files_by_generation(tmp_path):
    recorder = TrajectoryRecorder(str(tmp_path), prefix="shot")
    traj = Trajectory(times=[0.1], coordinates=[[1.0, 1.0]])

    path = recorder.record(traj, 3)

    assert os.path.basename(path) == "shot_gen0003.dat"
    assert os.path.exists(path)
    assert recorder.paths == [path]
