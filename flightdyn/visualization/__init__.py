"""
Visualization Module

Provides plotting of recorded flight histories.
"""

from .plotting import (
    plot_trajectory_3d,
    plot_states_vs_time,
    plot_controls_vs_time,
    plot_forces_moments,
    plot_history,
    setup_plotting_style,
    FLIGHT_STYLE
)

__all__ = [
    'plot_trajectory_3d',
    'plot_states_vs_time',
    'plot_controls_vs_time',
    'plot_forces_moments',
    'plot_history',
    'setup_plotting_style',
    'FLIGHT_STYLE'
]
