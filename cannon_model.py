"""
Cannon-Wall: Simulation Model
=============================
Closed-form ballistic flight of a cannon ball fired from the origin
towards a vertical wall:

    x(t) = v*cos(a)*t
    y(t) = v*sin(a)*t - g*t^2/2

Time stepping only samples the exact solution, there is no integration
error. The wall is cleared when the ball's height at the wall satisfies
0 <= y < wall_height.
"""

import math
from typing import Tuple

import numpy as np

from config import (
    EnvironmentParameters, FiringPlan, Trajectory,
    DegenerateEnvironmentError, GRAVITY,
)
from units import Fitness, Seconds, Metres


class CannonSimulator:
    """
    Simulates shots in a fixed environment.

    Parameters
    ----------
    env : EnvironmentParameters
        Wall geometry and step size
    g : float
        Gravitational acceleration [m/s^2]
    """

    def __init__(self, env: EnvironmentParameters, g: float = GRAVITY):
        self.env = env
        self.g = g

    def position(self, plan: FiringPlan, t: float) -> Tuple[float, float]:
        """Ball position (x, y) at time t."""
        v, a = plan.as_tuple()
        x = v * math.cos(a) * t
        y = v * math.sin(a) * t - 0.5 * self.g * t**2
        return x, y

    def time_to_wall(self, plan: FiringPlan) -> Seconds:
        """Time at which the ball's horizontal position equals the wall offset."""
        if not self.env.wall_distance > 0:
            raise DegenerateEnvironmentError(
                f"wall_distance must be > 0, got {self.env.wall_distance}")
        v, a = plan.as_tuple()
        vx = v * math.cos(a)
        if vx == 0.0:
            raise DegenerateEnvironmentError(
                f"no horizontal velocity at angle {a}, the wall is never reached")
        return Seconds(self.env.wall_distance / vx)

    def height_at_wall(self, plan: FiringPlan) -> Metres:
        _, y = self.position(plan, self.time_to_wall(plan).value)
        return Metres(y)

    def hits_wall(self, plan: FiringPlan) -> bool:
        """True unless 0 <= y(t_wall) < wall_height."""
        y_wall = self.height_at_wall(plan).value
        return not (0.0 <= y_wall < self.env.wall_height)

    def simulate(self, plan: FiringPlan) -> Trajectory:
        """
        Sample the flight every dt, starting at t = dt.

        A shot that clears the wall is sampled up to the wall (t <= t_wall).
        A shot that hits the wall is sampled along its full arc until the
        first sample at or below ground. At least one sample is produced.
        """
        dt = self.env.dt
        if not dt > 0:
            raise DegenerateEnvironmentError(f"dt must be > 0, got {dt}")

        t_wall = self.time_to_wall(plan).value
        hit_wall = self.hits_wall(plan)

        times = []
        coords = []
        step = 1
        while True:
            t = step * dt
            if coords:
                if hit_wall and coords[-1][1] <= 0.0:
                    break
                if not hit_wall and t > t_wall:
                    break
            times.append(t)
            coords.append(self.position(plan, t))
            step += 1

        return Trajectory(
            times=np.array(times),
            coordinates=np.array(coords),
            hit_wall=hit_wall,
            time_to_wall=t_wall,
        )

    def compute_fitness(self, trajectory: Trajectory) -> Fitness:
        """Fitness = horizontal distance of the last sample."""
        return Fitness(trajectory.distance.value)

    def evaluate(self, plan: FiringPlan) -> Fitness:
        return self.compute_fitness(self.simulate(plan))


def simulate(plan: FiringPlan, env: EnvironmentParameters, g: float = GRAVITY) -> Trajectory:
    return CannonSimulator(env, g).simulate(plan)


def evaluate(plan: FiringPlan, env: EnvironmentParameters, g: float = GRAVITY) -> Fitness:
    return CannonSimulator(env, g).evaluate(plan)
