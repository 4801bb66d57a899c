"""
Standard Plotting Functions

Provides visualization of recorded flight histories: trajectory, state
histories, control inputs, and body-frame forces and torques.
World frame is Y-up, units are metres.
"""

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.figure import Figure
from typing import Dict, Optional, Tuple

from ..simulation.runner import FlightHistory


def plot_trajectory_3d(
    positions: np.ndarray,
    title: str = "3D Flight Trajectory",
    show_markers: bool = True,
    marker_interval: int = 60,
    figsize: Tuple[float, float] = (10, 8),
    save_path: Optional[str] = None
) -> Figure:
    """
    Plot 3D flight trajectory.

    Parameters
    ----------
    positions : np.ndarray
        World positions of shape (N, 3), Y-up
    title : str, optional
        Plot title
    show_markers : bool, optional
        Whether to show position markers along trajectory
    marker_interval : int, optional
        Interval between markers (if show_markers=True)
    figsize : Tuple[float, float], optional
        Figure size in inches
    save_path : Optional[str], optional
        Path to save figure (if None, figure is not saved)

    Returns
    -------
    Figure
        Matplotlib figure object
    """
    fig = plt.figure(figsize=figsize)
    ax = fig.add_subplot(111, projection='3d')

    # Plot horizontal plane on x/y axes and altitude on z
    x = positions[:, 0]
    y = -positions[:, 2]  # -Z is forward at zero heading
    z = positions[:, 1]

    ax.plot(x, y, z, 'b-', linewidth=2, label='Trajectory')

    if show_markers and len(positions) > marker_interval:
        marker_indices = np.arange(0, len(positions), marker_interval)
        ax.scatter(x[marker_indices], y[marker_indices], z[marker_indices],
                   c='r', marker='o', s=30, label='Waypoints')

    ax.scatter(x[0], y[0], z[0], c='g', marker='o', s=100, label='Start', edgecolors='k')
    ax.scatter(x[-1], y[-1], z[-1], c='r', marker='s', s=100, label='End', edgecolors='k')

    ax.set_xlabel('X (m)', fontsize=11)
    ax.set_ylabel('-Z (m)', fontsize=11)
    ax.set_zlabel('Altitude (m)', fontsize=11)
    ax.set_title(title, fontsize=13, fontweight='bold')
    ax.legend(loc='best')
    ax.grid(True, alpha=0.3)

    # Equal aspect ratio
    max_range = max(np.ptp(x), np.ptp(y), np.ptp(z), 1.0) / 2.0
    mid_x = (x.max() + x.min()) * 0.5
    mid_y = (y.max() + y.min()) * 0.5
    mid_z = (z.max() + z.min()) * 0.5
    ax.set_xlim(mid_x - max_range, mid_x + max_range)
    ax.set_ylim(mid_y - max_range, mid_y + max_range)
    ax.set_zlim(mid_z - max_range, mid_z + max_range)

    plt.tight_layout()

    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches='tight')

    return fig


def plot_states_vs_time(
    time: np.ndarray,
    states: Dict[str, np.ndarray],
    title: str = "State Variables vs Time",
    figsize: Tuple[float, float] = (12, 10),
    save_path: Optional[str] = None
) -> Figure:
    """
    Plot state variables vs time.

    Parameters
    ----------
    time : np.ndarray
        Time array (N,)
    states : Dict[str, np.ndarray]
        Dictionary containing state arrays:
        - 'position': (N, 3) - world [x, y, z]
        - 'velocity': (N, 3) - body frame velocity
        - 'euler_angles': (N, 3) - [pitch, yaw, roll] in radians
        - 'angular_rates': (N, 3) - [pitch_rate, yaw_rate, roll_rate]
    title : str, optional
        Main plot title
    figsize : Tuple[float, float], optional
        Figure size in inches
    save_path : Optional[str], optional
        Path to save figure

    Returns
    -------
    Figure
        Matplotlib figure object
    """
    fig, axes = plt.subplots(4, 1, figsize=figsize, sharex=True)

    if 'position' in states:
        pos = states['position']
        axes[0].plot(time, pos[:, 0], 'r-', label='X', linewidth=1.5)
        axes[0].plot(time, pos[:, 1], 'g-', label='Y (Altitude)', linewidth=1.5)
        axes[0].plot(time, pos[:, 2], 'b-', label='Z', linewidth=1.5)
        axes[0].set_ylabel('Position (m)', fontsize=11)
        axes[0].legend(loc='best', ncol=3)
        axes[0].grid(True, alpha=0.3)
        axes[0].set_title('Position', fontsize=11, fontweight='bold')

    if 'velocity' in states:
        vel = states['velocity']
        axes[1].plot(time, vel[:, 0], 'r-', label='vx (Right)', linewidth=1.5)
        axes[1].plot(time, vel[:, 1], 'g-', label='vy (Up)', linewidth=1.5)
        axes[1].plot(time, vel[:, 2], 'b-', label='vz (Aft)', linewidth=1.5)
        axes[1].set_ylabel('Velocity (m/s)', fontsize=11)
        axes[1].legend(loc='best', ncol=3)
        axes[1].grid(True, alpha=0.3)
        axes[1].set_title('Body Frame Velocity', fontsize=11, fontweight='bold')

    if 'euler_angles' in states:
        angles = states['euler_angles']
        axes[2].plot(time, np.degrees(angles[:, 0]), 'g-', label='Pitch', linewidth=1.5)
        axes[2].plot(time, np.degrees(angles[:, 1]), 'b-', label='Yaw', linewidth=1.5)
        axes[2].plot(time, np.degrees(angles[:, 2]), 'r-', label='Roll', linewidth=1.5)
        axes[2].set_ylabel('Angle (deg)', fontsize=11)
        axes[2].legend(loc='best', ncol=3)
        axes[2].grid(True, alpha=0.3)
        axes[2].set_title('Euler Angles', fontsize=11, fontweight='bold')

    if 'angular_rates' in states:
        rates = states['angular_rates']
        axes[3].plot(time, np.degrees(rates[:, 0]), 'g-', label='Pitch rate', linewidth=1.5)
        axes[3].plot(time, np.degrees(rates[:, 1]), 'b-', label='Yaw rate', linewidth=1.5)
        axes[3].plot(time, np.degrees(rates[:, 2]), 'r-', label='Roll rate', linewidth=1.5)
        axes[3].set_ylabel('Rate (deg/s)', fontsize=11)
        axes[3].legend(loc='best', ncol=3)
        axes[3].grid(True, alpha=0.3)
        axes[3].set_title('Angular Rates', fontsize=11, fontweight='bold')

    axes[3].set_xlabel('Time (s)', fontsize=11)
    fig.suptitle(title, fontsize=13, fontweight='bold')
    plt.tight_layout()

    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches='tight')

    return fig


def plot_controls_vs_time(
    time: np.ndarray,
    controls: Dict[str, np.ndarray],
    title: str = "Control Inputs vs Time",
    figsize: Tuple[float, float] = (12, 8),
    save_path: Optional[str] = None
) -> Figure:
    """
    Plot normalized control inputs and throttle vs time.

    Parameters
    ----------
    time : np.ndarray
        Time array (N,)
    controls : Dict[str, np.ndarray]
        Any of 'elevator', 'aileron', 'rudder' (N,) in [-1, 1]
        and 'throttle' (N,) in [0, 1]
    title : str, optional
        Main plot title
    figsize : Tuple[float, float], optional
        Figure size in inches
    save_path : Optional[str], optional
        Path to save figure

    Returns
    -------
    Figure
        Matplotlib figure object
    """
    styles = [
        ('elevator', 'Elevator', 'b-', (-1.1, 1.1)),
        ('aileron', 'Aileron', 'g-', (-1.1, 1.1)),
        ('rudder', 'Rudder', 'r-', (-1.1, 1.1)),
        ('throttle', 'Throttle', 'k-', (0.0, 1.1)),
    ]
    present = [s for s in styles if s[0] in controls]
    if not present:
        raise ValueError("No known control channels to plot")

    fig, axes = plt.subplots(len(present), 1, figsize=figsize, sharex=True)
    if len(present) == 1:
        axes = [axes]

    for ax, (key, label, style, ylim) in zip(axes, present):
        ax.plot(time, controls[key], style, linewidth=2)
        ax.set_ylabel(label, fontsize=11)
        ax.set_ylim(ylim)
        ax.grid(True, alpha=0.3)
        ax.set_title(label, fontsize=11, fontweight='bold')

    axes[-1].set_xlabel('Time (s)', fontsize=11)
    fig.suptitle(title, fontsize=13, fontweight='bold')
    plt.tight_layout()

    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches='tight')

    return fig


def plot_forces_moments(
    time: np.ndarray,
    forces: np.ndarray,
    moments: np.ndarray,
    title: str = "Forces and Torques vs Time",
    figsize: Tuple[float, float] = (12, 8),
    save_path: Optional[str] = None
) -> Figure:
    """
    Plot body-frame force and torque time histories.

    Parameters
    ----------
    time : np.ndarray
        Time array (N,)
    forces : np.ndarray
        Force array of shape (N, 3) in body frame (N)
    moments : np.ndarray
        Torque array of shape (N, 3) as (pitch, yaw, roll) (N*m)
    title : str, optional
        Main plot title
    figsize : Tuple[float, float], optional
        Figure size in inches
    save_path : Optional[str], optional
        Path to save figure

    Returns
    -------
    Figure
        Matplotlib figure object
    """
    fig, axes = plt.subplots(2, 1, figsize=figsize, sharex=True)

    axes[0].plot(time, forces[:, 0], 'r-', label='Fx (Right)', linewidth=1.5)
    axes[0].plot(time, forces[:, 1], 'g-', label='Fy (Up)', linewidth=1.5)
    axes[0].plot(time, forces[:, 2], 'b-', label='Fz (Aft)', linewidth=1.5)
    axes[0].set_ylabel('Force (N)', fontsize=11)
    axes[0].legend(loc='best', ncol=3)
    axes[0].grid(True, alpha=0.3)
    axes[0].set_title('Body Frame Forces', fontsize=11, fontweight='bold')

    axes[1].plot(time, moments[:, 0], 'g-', label='Pitch', linewidth=1.5)
    axes[1].plot(time, moments[:, 1], 'b-', label='Yaw', linewidth=1.5)
    axes[1].plot(time, moments[:, 2], 'r-', label='Roll', linewidth=1.5)
    axes[1].set_ylabel('Torque (N*m)', fontsize=11)
    axes[1].set_xlabel('Time (s)', fontsize=11)
    axes[1].legend(loc='best', ncol=3)
    axes[1].grid(True, alpha=0.3)
    axes[1].set_title('Body Frame Torques', fontsize=11, fontweight='bold')

    fig.suptitle(title, fontsize=13, fontweight='bold')
    plt.tight_layout()

    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches='tight')

    return fig


def plot_history(history: FlightHistory, save_prefix: Optional[str] = None) -> Dict[str, Figure]:
    """
    Plot trajectory, states, controls and forces of a recorded run.

    Parameters
    ----------
    history : FlightHistory
        Recorded simulation
    save_prefix : Optional[str], optional
        If given, figures are saved as '<prefix>_<name>.png'

    Returns
    -------
    Dict[str, Figure]
        Figures keyed by 'trajectory', 'states', 'controls', 'forces'
    """
    def path(name):
        return f"{save_prefix}_{name}.png" if save_prefix else None

    states = {
        'position': history.position,
        'velocity': history.velocity,
        'euler_angles': history.euler_angles,
        'angular_rates': history.angular_rates,
    }

    return {
        'trajectory': plot_trajectory_3d(history.position, save_path=path('trajectory')),
        'states': plot_states_vs_time(history.time, states, save_path=path('states')),
        'controls': plot_controls_vs_time(history.time, history.controls_dict(),
                                          save_path=path('controls')),
        'forces': plot_forces_moments(history.time, history.forces, history.torques,
                                      save_path=path('forces')),
    }


FLIGHT_STYLE = {
    'figure.facecolor': 'white',
    'figure.figsize': (12, 8),
    'axes.grid': True,
    'axes.titleweight': 'bold',
    'grid.alpha': 0.3,
    'grid.linestyle': '--',
    'legend.framealpha': 0.8,
    'lines.linewidth': 1.5,
    'savefig.dpi': 150,
    'savefig.bbox': 'tight',
}


def setup_plotting_style(overrides: Optional[Dict] = None):
    """Apply FLIGHT_STYLE (plus any overrides) to matplotlib rcParams."""
    style = dict(FLIGHT_STYLE)
    if overrides:
        style.update(overrides)
    plt.rcParams.update(style)
