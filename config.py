"""
Cannon-Wall: Configuration and Constants
========================================
Dataclasses for the launch environment, firing plans and simulated
trajectories, plus physical constants and search settings.
"""

from dataclasses import dataclass, field
from typing import Tuple
import math
import numpy as np

from units import MetresPerSecond, Radians, Seconds, Metres


# Physical constants
GRAVITY = 9.81  # m/s^2

# Search settings
ELITE_COUNT = 2               # Top plans copied unchanged into the next generation
MUTATION_SPAN = 1.0           # Perturbation drawn from [-0.5, 0.5)
MIN_SPEED = 0.1               # Floor for mutated speed [m/s]
MIN_ANGLE = 0.1               # Lower clamp for mutated angle [rad]
MAX_ANGLE = math.pi / 2       # Upper clamp for mutated angle [rad]

# Random initial plans: speed in [1, 2), angle in [0, pi)
INITIAL_SPEED_BASE = 1.0


class InvalidFiringPlanError(ValueError):
    """Raised when a firing plan has speed <= 0 or angle outside (0, pi)."""


class DegenerateEnvironmentError(ValueError):
    """Raised when the environment or a plan makes the wall timing undefined."""


class TrajectoryWriteError(RuntimeError):
    """Raised when a trajectory cannot be written to disk."""


@dataclass
class EnvironmentParameters:
    """Parameters of the wall, the time stepping and the search."""

    # Obstacle
    wall_height: float = 25.0     # Height of the wall [m]
    wall_distance: float = 10.0   # Horizontal offset of the wall from the cannon [m]

    # Sampling
    dt: float = 0.01              # Simulation step size [s]

    # Search
    seed: int = 1
    population_size: int = 20
    generations: int = 100

    def validate(self) -> 'EnvironmentParameters':
        """Check the parameter bundle; raise DegenerateEnvironmentError if unusable."""
        if not self.wall_distance > 0:
            raise DegenerateEnvironmentError(
                f"wall_distance must be > 0, got {self.wall_distance}")
        if not self.wall_height >= 0:
            raise DegenerateEnvironmentError(
                f"wall_height must be >= 0, got {self.wall_height}")
        if not self.dt > 0:
            raise DegenerateEnvironmentError(f"dt must be > 0, got {self.dt}")
        if self.population_size <= 0:
            raise DegenerateEnvironmentError(
                f"population_size must be > 0, got {self.population_size}")
        if self.generations < 0:
            raise DegenerateEnvironmentError(
                f"generations must be >= 0, got {self.generations}")
        return self


@dataclass(frozen=True)
class FiringPlan:
    """
    Launch speed and elevation of one shot.

    Build through FiringPlan.new() or FiringPlan.random(); both enforce
    speed > 0 and 0 < angle < pi.
    """
    speed: MetresPerSecond
    angle: Radians

    @classmethod
    def new(cls, speed: float, angle: float) -> 'FiringPlan':
        speed = MetresPerSecond(speed)
        angle = Radians(angle)
        # So we actually move
        if not speed > MetresPerSecond(0.0):
            raise InvalidFiringPlanError(f"speed must be > 0, got {speed.value}")
        # So we fire up, not into the ground
        if not Radians(0.0) < angle < Radians(math.pi):
            raise InvalidFiringPlanError(
                f"angle must be in (0, pi), got {angle.value}")
        return cls(speed, angle)

    @classmethod
    def random(cls, rng: np.random.Generator) -> 'FiringPlan':
        """Draw a plan with speed in [1, 2) and angle in [0, pi)."""
        speed = INITIAL_SPEED_BASE + rng.random()
        angle = rng.random() * math.pi  # NB: pi radians is half a circle
        return cls.new(speed, angle)

    def as_tuple(self) -> Tuple[float, float]:
        return self.speed.value, self.angle.value


def _frozen(values) -> np.ndarray:
    arr = np.array(values, dtype=float)
    arr.flags.writeable = False
    return arr


@dataclass(frozen=True)
class Trajectory:
    """Sampled flight path of one shot."""

    times: np.ndarray = field(default_factory=lambda: _frozen([]))
    coordinates: np.ndarray = field(default_factory=lambda: _frozen(np.empty((0, 2))))
    hit_wall: bool = False
    time_to_wall: float = math.inf

    def __post_init__(self):
        object.__setattr__(self, 'times', _frozen(self.times))
        coords = _frozen(self.coordinates)
        if coords.size == 0:
            coords = _frozen(np.empty((0, 2)))
        object.__setattr__(self, 'coordinates', coords)

    def __len__(self) -> int:
        return len(self.times)

    @property
    def x(self) -> np.ndarray:
        return self.coordinates[:, 0]

    @property
    def y(self) -> np.ndarray:
        return self.coordinates[:, 1]

    @property
    def duration(self) -> Seconds:
        if len(self.times) == 0:
            return Seconds(0.0)
        return Seconds(self.times[-1])

    @property
    def distance(self) -> Metres:
        """Horizontal coordinate of the last sample (0 if empty)."""
        if len(self.coordinates) == 0:
            return Metres(0.0)
        return Metres(self.coordinates[-1, 0])
