"""
Fixed-step batch runner for the flight dynamics engine.

Drives an engine for a given duration and records the state, controls and
body-frame forces at every sample, for analysis and plotting.
"""

import logging
import numpy as np
from typing import Callable, Dict, Optional

from ..core.controls import ControlInputs
from ..core.dynamics import FlightDynamicsEngine
from ..core.state import STATE_SIZE

logger = logging.getLogger(__name__)

ControlSchedule = Callable[[float, ControlInputs], None]


class FlightHistory:
    """
    Recorded time history of a simulation run.

    Attributes
    ----------
    time : np.ndarray, shape (N,)
        Sample times (s)
    states : np.ndarray, shape (N, 13)
        AircraftState.to_array() at each sample
    controls : np.ndarray, shape (N, 4)
        [elevator, aileron, rudder, throttle] at each sample
    forces : np.ndarray, shape (N, 3)
        Body-frame net force used by the step that produced each sample (N)
    torques : np.ndarray, shape (N, 3)
        (pitch, yaw, roll) torque used by that step (N*m)
    """

    def __init__(self, time: np.ndarray, states: np.ndarray, controls: np.ndarray,
                 forces: np.ndarray, torques: np.ndarray):
        self.time = time
        self.states = states
        self.controls = controls
        self.forces = forces
        self.torques = torques

    def __len__(self) -> int:
        return len(self.time)

    @property
    def position(self) -> np.ndarray:
        """World position (N, 3) in m."""
        return self.states[:, 0:3]

    @property
    def euler_angles(self) -> np.ndarray:
        """(pitch, yaw, roll) (N, 3) in rad."""
        return self.states[:, 3:6]

    @property
    def velocity(self) -> np.ndarray:
        """Body-frame velocity (N, 3) in m/s."""
        return self.states[:, 6:9]

    @property
    def speed(self) -> np.ndarray:
        """Speed (N,) in m/s."""
        return self.states[:, 9]

    @property
    def angular_rates(self) -> np.ndarray:
        """(pitch_rate, yaw_rate, roll_rate) (N, 3) in rad/s."""
        return self.states[:, 10:13]

    def controls_dict(self) -> Dict[str, np.ndarray]:
        """Controls keyed by name, as used by plot_controls_vs_time."""
        return {
            'elevator': self.controls[:, 0],
            'aileron': self.controls[:, 1],
            'rudder': self.controls[:, 2],
            'throttle': self.controls[:, 3],
        }

    def __repr__(self) -> str:
        duration = self.time[-1] - self.time[0] if len(self.time) else 0.0
        return f"FlightHistory(samples={len(self)}, duration={duration:.2f}s)"


def step_input(start: float, end: float, **values: float) -> ControlSchedule:
    """
    Schedule that holds control values between start and end (s).

    Outside the window the controls are left untouched.

    Examples
    --------
    >>> schedule = step_input(1.0, 2.0, aileron=0.5)
    """
    for name in values:
        if name not in ('elevator', 'aileron', 'rudder', 'throttle'):
            raise ValueError(f"Unknown control: {name}")

    def schedule(t: float, controls: ControlInputs):
        if start <= t < end:
            for name, value in values.items():
                setattr(controls, name, value)

    return schedule


def simulate(engine: FlightDynamicsEngine, duration: float, dt: float = 1.0 / 60.0,
             control_schedule: Optional[ControlSchedule] = None) -> FlightHistory:
    """
    Run the engine for a fixed duration.

    Parameters
    ----------
    engine : FlightDynamicsEngine
        Engine to drive (its state is advanced in place)
    duration : float
        Simulated time (s)
    dt : float, optional
        Fixed time step (s)
    control_schedule : callable, optional
        schedule(t, controls) called before each step; may mutate controls

    Returns
    -------
    FlightHistory
        N = round(duration / dt) + 1 samples including the initial state
    """
    n_steps = int(round(duration / dt))
    n_samples = n_steps + 1

    time = np.arange(n_samples) * dt
    states = np.zeros((n_samples, STATE_SIZE))
    controls = np.zeros((n_samples, 4))
    forces = np.zeros((n_samples, 3))
    torques = np.zeros((n_samples, 3))

    states[0] = engine.state.to_array()
    controls[0] = engine.controls.to_array()
    forces[0] = engine.last_force
    torques[0] = engine.last_torque

    for i in range(1, n_samples):
        t = time[i - 1]
        if control_schedule is not None:
            control_schedule(t, engine.controls)

        engine.update(dt)

        states[i] = engine.state.to_array()
        controls[i] = engine.controls.to_array()
        forces[i] = engine.last_force
        torques[i] = engine.last_torque

    logger.debug("Simulated %d steps of %.4f s", n_steps, dt)

    return FlightHistory(time, states, controls, forces, torques)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)

    engine = FlightDynamicsEngine()
    engine.initialize(np.array([0.0, 100.0, 0.0]), heading=0.0)

    history = simulate(engine, duration=10.0, control_schedule=step_input(2.0, 3.0, aileron=0.5))
    print(history)
    print(engine.state)
