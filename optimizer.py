"""
Cannon-Wall: Genetic Algorithm Optimizer
========================================
Population search for the firing plan that sends the ball furthest.

Each generation:
1. Evaluate every plan with the simulator
2. Rank by fitness (best first), copy the elites unchanged
3. Fill the remaining slots by mutating the plan that held the same rank

All random numbers come from one seeded generator and are drawn on the
main process, so a run is reproducible even with parallel evaluation.
"""

import numpy as np
from typing import Callable, List, Optional
import math
import time
import warnings
from dataclasses import dataclass, field
from multiprocessing import Pool

from config import (
    EnvironmentParameters, FiringPlan, Trajectory,
    GRAVITY, ELITE_COUNT, MUTATION_SPAN, MIN_SPEED, MIN_ANGLE, MAX_ANGLE,
)
from cannon_model import CannonSimulator
from recorder import TrajectoryRecorder
from units import Fitness


@dataclass(frozen=True)
class Individual:
    """A firing plan paired with its fitness for one generation."""
    plan: FiringPlan
    fitness: Fitness


@dataclass(frozen=True)
class BestEvent:
    """Emitted whenever the best fitness to date improves."""
    generation: int
    fitness: Fitness
    plan: FiringPlan


@dataclass
class OptimizationResult:
    """Results from optimization run."""
    best_plan: Optional[FiringPlan]
    best_fitness: Fitness
    best_trajectory: Optional[Trajectory]
    events: List[BestEvent]
    convergence_history: List[float]
    final_population: List[FiringPlan]
    last_ranked: List[Individual] = field(default_factory=list)
    n_generations: int = 0
    n_evaluations: int = 0
    optimization_time: float = 0.0


def mutate(plan: FiringPlan, u_speed: float, u_angle: float) -> FiringPlan:
    """
    Perturb a plan by draws u_speed, u_angle in [0, 1).

    Speed moves by up to +-0.5 and is floored at MIN_SPEED. Angle moves by
    up to +-0.5 and is clamped to [MIN_ANGLE, MAX_ANGLE].
    """
    speed, angle = plan.as_tuple()
    half = MUTATION_SPAN / 2
    new_speed = max(speed + u_speed - half, MIN_SPEED)
    new_angle = min(max(angle + u_angle - half, MIN_ANGLE), MAX_ANGLE)
    return FiringPlan.new(new_speed, new_angle)


class CannonOptimizer:
    """
    Genetic algorithm optimizer for cannon firing plans.

    Truncation selection with elitism: the top `elite_count` plans survive
    unchanged, every other rank position is replaced by a mutation of the
    plan that held it.
    """

    def __init__(
        self,
        env: EnvironmentParameters = None,
        g: float = GRAVITY,
        elite_count: int = ELITE_COUNT,
        recorder: TrajectoryRecorder = None,
        on_new_best: Callable[[int, Fitness], None] = None,
        workers: int = 1,
        verbose: bool = True
    ):
        """
        Initialize optimizer.

        Parameters
        ----------
        env : EnvironmentParameters, optional
            Wall, step size and search settings
        g : float
            Gravitational acceleration passed to the simulator
        elite_count : int
            Number of top plans carried over unchanged
        recorder : TrajectoryRecorder, optional
            Receives the trajectory of every new best plan
        on_new_best : callable, optional
            Called as on_new_best(generation, fitness) on every improvement
        workers : int
            Processes used to evaluate a generation (-1 for all CPUs)
        verbose : bool
            Print progress during optimization
        """
        if elite_count < 0:
            raise ValueError(f"elite_count must be >= 0, got {elite_count}")
        if workers == 0 or workers < -1:
            raise ValueError(f"workers must be -1 or >= 1, got {workers}")

        self.env = (env if env is not None else EnvironmentParameters()).validate()
        self.simulator = CannonSimulator(self.env, g)
        self.elite_count = elite_count
        self.recorder = recorder
        self.on_new_best = on_new_best
        self.workers = workers
        self.verbose = verbose

        self.rng = np.random.default_rng(self.env.seed)

        # Tracking
        self.n_evaluations = 0
        self.convergence_history = []
        self.events = []
        self.best_fitness = Fitness(0.0)
        self.best_plan = None
        self.best_trajectory = None

    def random_population(self) -> List[FiringPlan]:
        """Generation 0: independent random plans."""
        return [FiringPlan.random(self.rng) for _ in range(self.env.population_size)]

    def evaluate_population(self, population: List[FiringPlan], pool: Pool = None) -> List[Individual]:
        """Score every plan; results keep population order."""
        if pool is not None:
            scores = pool.map(self.simulator.evaluate, population)
        else:
            scores = [self.simulator.evaluate(plan) for plan in population]
        self.n_evaluations += len(population)
        return [Individual(plan, fitness) for plan, fitness in zip(population, scores)]

    @staticmethod
    def rank(individuals: List[Individual]) -> List[Individual]:
        """Sort best first. Ties keep their evaluation order."""
        return sorted(individuals, key=lambda ind: ind.fitness, reverse=True)

    def next_generation(self, ranked: List[Individual]) -> List[FiringPlan]:
        """Elites copied as-is, every other rank position mutated in place."""
        population = []
        for i, individual in enumerate(ranked):
            if i < self.elite_count:
                population.append(individual.plan)
            else:
                u_speed = self.rng.random()
                u_angle = self.rng.random()
                population.append(mutate(individual.plan, u_speed, u_angle))
        return population

    def _check_best(self, ranked: List[Individual], generation: int):
        """Record, report and persist a new best plan."""
        top = ranked[0]
        if not top.fitness > self.best_fitness:
            return

        self.best_fitness = top.fitness
        self.best_plan = top.plan
        self.best_trajectory = self.simulator.simulate(top.plan)
        self.events.append(BestEvent(generation, top.fitness, top.plan))

        if self.recorder is not None:
            self.recorder.record(self.best_trajectory, generation)
        if self.on_new_best is not None:
            self.on_new_best(generation, top.fitness)
        if self.verbose:
            speed, angle = top.plan.as_tuple()
            print(f"  Generation {generation}: new best = {top.fitness.value:.4f} m "
                  f"(v = {speed:.4f} m/s, angle = {math.degrees(angle):.2f} deg)")

    def optimize(self) -> OptimizationResult:
        """
        Run the configured number of generations.

        Returns
        -------
        OptimizationResult
        """
        # Reset tracking
        self.rng = np.random.default_rng(self.env.seed)
        self.n_evaluations = 0
        self.convergence_history = []
        self.events = []
        self.best_fitness = Fitness(0.0)
        self.best_plan = None
        self.best_trajectory = None

        env = self.env
        if env.generations == 0:
            warnings.warn("generations is 0, returning the initial population unevaluated",
                          RuntimeWarning)

        if self.verbose:
            print("=" * 60)
            print("Cannon Optimization")
            print("=" * 60)
            print(f"Wall: {env.wall_height} m high at {env.wall_distance} m")
            print(f"Population: {env.population_size}")
            print(f"Generations: {env.generations}")
            print(f"Seed: {env.seed}")
            print(f"Workers: {self.workers}")
            print()

        start_time = time.time()

        population = self.random_population()
        ranked = []

        pool = None
        if self.workers != 1:
            pool = Pool(None if self.workers == -1 else self.workers)
        try:
            for generation in range(env.generations):
                individuals = self.evaluate_population(population, pool)
                ranked = self.rank(individuals)
                self._check_best(ranked, generation)
                self.convergence_history.append(self.best_fitness.value)
                population = self.next_generation(ranked)
        finally:
            if pool is not None:
                pool.close()
                pool.join()

        elapsed = time.time() - start_time

        if self.verbose:
            print("\n" + "=" * 60)
            print("Optimization Complete")
            print("=" * 60)
            print(f"Time: {elapsed:.1f} s")
            print(f"Evaluations: {self.n_evaluations}")
            print(f"Best fitness: {self.best_fitness.value:.4f} m")
            if self.best_plan is not None:
                speed, angle = self.best_plan.as_tuple()
                print(f"\nBest plan:")
                print(f"  speed: {speed:.4f} m/s")
                print(f"  angle: {angle:.4f} rad ({math.degrees(angle):.2f} deg)")
                print(f"  hit wall: {self.best_trajectory.hit_wall}")

        return OptimizationResult(
            best_plan=self.best_plan,
            best_fitness=self.best_fitness,
            best_trajectory=self.best_trajectory,
            events=list(self.events),
            convergence_history=list(self.convergence_history),
            final_population=population,
            last_ranked=ranked,
            n_generations=env.generations,
            n_evaluations=self.n_evaluations,
            optimization_time=elapsed,
        )


def quick_test():
    """Quick test with few generations."""
    print("Quick optimization test (10 generations)...")

    env = EnvironmentParameters(population_size=10, generations=10)
    optimizer = CannonOptimizer(env, verbose=True)
    return optimizer.optimize()


def full_optimization(output_dir: str = "."):
    """Full optimization run, writing every new best trajectory to output_dir."""
    print("Full optimization run...")

    env = EnvironmentParameters()
    optimizer = CannonOptimizer(
        env,
        recorder=TrajectoryRecorder(output_dir),
        verbose=True,
    )
    return optimizer.optimize()


if __name__ == "__main__":
    import sys

    if len(sys.argv) > 1 and sys.argv[1] == '--test':
        quick_test()
    elif len(sys.argv) > 1 and sys.argv[1] == '--plot':
        from visualize import show_result
        show_result(full_optimization(), EnvironmentParameters())
    else:
        full_optimization()
