"""
Semi-implicit Euler integrator for the flight dynamics engine.

One step:
1. Angular accelerations from torque / inertia, rates integrated and clamped
2. Euler angles integrated and wrapped to (-pi, pi]
3. Body force rotated to world frame, velocity integrated in world frame
4. Position integrated with the new world velocity
5. Speed recomputed and held at or above the minimum flying speed

Velocity is stored in body frame; it is rotated to world frame with the
updated attitude, so a change in attitude turns the velocity with it.
"""

import numpy as np
from typing import NamedTuple

from .state import AircraftState
from .params import AircraftParams
from .frames import body_to_world, world_to_body, wrap_angle, safe_normalize


class Inertia(NamedTuple):
    """Principal moments of inertia (kg*m^2)."""
    roll: float
    pitch: float
    yaw: float


def moments_of_inertia(params: AircraftParams) -> Inertia:
    """
    Approximate moments of inertia from aircraft geometry.

    Ixx (roll) = m * b^2 * k_roll
    Iyy (pitch) = m * L^2 * k_pitch
    Izz (yaw) = m * b^2 * k_yaw
    """
    tuning = params.tuning
    span_sq = params.wingspan * params.wingspan
    return Inertia(
        roll=params.mass * span_sq * tuning.inertia_scale_roll,
        pitch=params.mass * tuning.fuselage_length_sq * tuning.inertia_scale_pitch,
        yaw=params.mass * span_sq * tuning.inertia_scale_yaw,
    )


class FlightIntegrator:
    """
    Fixed-structure stepper for AircraftState.

    Holds the aircraft parameters (for mass, inertia and tuning) and
    mutates the state it is given in place.
    """

    def __init__(self, params: AircraftParams):
        """
        Parameters:
        -----------
        params : AircraftParams
            Aircraft description and tuning
        """
        self.params = params
        self.inertia = moments_of_inertia(params)

    def step(self, state: AircraftState, force: np.ndarray, torque: np.ndarray,
             dt: float) -> AircraftState:
        """
        Advance state by dt.

        Parameters:
        -----------
        state : AircraftState
            State to advance (modified in place)
        force : np.ndarray, shape (3,)
            Body-frame net force (N)
        torque : np.ndarray, shape (3,)
            (pitch, yaw, roll) torque (N*m)
        dt : float
            Time step (s), assumed already validated by the caller

        Returns:
        --------
        state : AircraftState
            The same object, advanced
        """
        params = self.params
        tuning = params.tuning

        # === Rotational ===
        pitch_accel = torque[0] / self.inertia.pitch
        yaw_accel = torque[1] / self.inertia.yaw
        roll_accel = torque[2] / self.inertia.roll

        state.pitch_rate = float(np.clip(state.pitch_rate + pitch_accel * dt,
                                         -tuning.max_pitch_rate, tuning.max_pitch_rate))
        state.yaw_rate = float(np.clip(state.yaw_rate + yaw_accel * dt,
                                       -tuning.max_yaw_rate, tuning.max_yaw_rate))
        state.roll_rate = float(np.clip(state.roll_rate + roll_accel * dt,
                                        -tuning.max_roll_rate, tuning.max_roll_rate))

        state.pitch = wrap_angle(state.pitch + state.pitch_rate * dt)
        state.yaw = wrap_angle(state.yaw + state.yaw_rate * dt)
        state.roll = wrap_angle(state.roll + state.roll_rate * dt)

        # === Translational (world frame) ===
        attitude = (state.pitch, state.yaw, state.roll)
        accel_world = body_to_world(force, *attitude) / params.mass

        velocity_world = body_to_world(state.velocity, *attitude)
        velocity_world = velocity_world + accel_world * dt
        state.velocity = world_to_body(velocity_world, *attitude)

        state.position = state.position + velocity_world * dt

        # === Speed floor ===
        state.speed = float(np.linalg.norm(velocity_world))
        if state.speed < tuning.min_speed:
            direction = safe_normalize(velocity_world, tuning.degenerate_epsilon)
            state.speed = tuning.min_speed
            if direction is not None:
                velocity_world = direction * tuning.min_speed
                state.velocity = world_to_body(velocity_world, *attitude)

        return state
