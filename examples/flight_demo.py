"""
Flight Dynamics Demo

Loads the L-39 configuration, flies a short scripted sequence
(cruise, left roll, rudder kick, pull-up) and plots the result.
"""

import logging
import os
import sys

import numpy as np
import matplotlib
matplotlib.use('Agg')  # Use non-interactive backend
import matplotlib.pyplot as plt

# Add repository root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from flightdyn.io.config import load_aircraft_config
from flightdyn.simulation.runner import simulate, step_input
from flightdyn.visualization.plotting import plot_history, setup_plotting_style


def scripted_inputs():
    roll_left = step_input(2.0, 3.0, aileron=0.5)
    level_out = step_input(3.0, 4.0, aileron=-0.5)
    rudder_kick = step_input(6.0, 6.5, rudder=0.5)
    pull_up = step_input(8.0, 9.0, elevator=0.5)

    def schedule(t, controls):
        controls.elevator = 0.0
        controls.aileron = 0.0
        controls.rudder = 0.0
        for segment in (roll_left, level_out, rudder_kick, pull_up):
            segment(t, controls)

    return schedule


def main():
    logging.basicConfig(level=logging.INFO, format='%(levelname)s %(name)s: %(message)s')

    config_path = os.path.join(os.path.dirname(__file__), 'aircraft', 'l39_albatros.yaml')
    config = load_aircraft_config(config_path)
    print(config.create_params())
    print()

    engine = config.create_engine()
    history = simulate(engine, duration=12.0, dt=1.0 / 60.0, control_schedule=scripted_inputs())

    print(history)
    print(engine.state)
    print()
    engine.log_debug_info()

    output_dir = os.path.join(os.path.dirname(__file__), '..', 'output')
    os.makedirs(output_dir, exist_ok=True)
    setup_plotting_style()
    figures = plot_history(history, save_prefix=os.path.join(output_dir, 'flight_demo'))
    for fig in figures.values():
        plt.close(fig)

    print(f"Plots saved to {os.path.abspath(output_dir)}")
    print(f"Final model matrix:\n{np.round(engine.get_transform_matrix(), 3)}")


if __name__ == "__main__":
    main()
