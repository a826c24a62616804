"""
Cannon-Wall: Visualization
==========================
Plots of the best flight path against the wall and of the search
progress across generations.
"""

import matplotlib.pyplot as plt

from config import EnvironmentParameters, Trajectory


def plot_trajectory(trajectory: Trajectory, env: EnvironmentParameters, ax=None):
    """Plot the sampled flight path, the ground and the wall."""
    if ax is None:
        _, ax = plt.subplots(figsize=(12, 6))

    ax.set_title('Projectile Trajectory')
    ax.set_xlabel('X [m]')
    ax.set_ylabel('Y [m]')
    ax.grid(True, alpha=0.3)

    # Ground
    ax.axhline(y=0, color='brown', linewidth=2)

    # Wall
    ax.plot([env.wall_distance, env.wall_distance], [0, env.wall_height],
            color='gray', linewidth=4, label='Wall')

    if len(trajectory) > 0:
        ax.plot(trajectory.x, trajectory.y, 'b-', linewidth=2, label='Flight')
        ax.plot(trajectory.x[-1], trajectory.y[-1], 'rx', markersize=12,
                markeredgewidth=3, label=f'End: {trajectory.distance.value:.2f} m')

    ax.legend()
    return ax


def plot_convergence(result, ax=None):
    """Plot the best fitness to date after every generation."""
    if ax is None:
        _, ax = plt.subplots(figsize=(10, 5))

    ax.set_title('Convergence')
    ax.set_xlabel('Generation')
    ax.set_ylabel('Best distance [m]')
    ax.grid(True, alpha=0.3)
    ax.plot(range(len(result.convergence_history)), result.convergence_history, 'g-', linewidth=2)

    for event in result.events:
        ax.plot(event.generation, event.fitness.value, 'ko', markersize=4)

    return ax


def show_result(result, env: EnvironmentParameters):
    """Show trajectory and convergence side by side."""
    fig, (ax_traj, ax_conv) = plt.subplots(1, 2, figsize=(16, 6))
    if result.best_trajectory is not None:
        plot_trajectory(result.best_trajectory, env, ax_traj)
    plot_convergence(result, ax_conv)
    plt.tight_layout()
    plt.show()
    return fig
