"""
Force and torque model for the flight dynamics engine.

Computes the body-frame net force and the torque about the three body
axes from (state, controls, params). All terms are evaluated once per step
and returned together so translation and rotation see the same forces.

Model summary:
- Thrust   = throttle * max_thrust along the nose, offset from the CG by
             params.thrust_offset
- Gravity  = (0, -m g, 0) in world frame, rotated into body frame
- q        = 0.5 * rho * V^2, rho and g from the atmosphere (sea level by default)
- alpha    ~ pitch + elevator * gain
- CL       = clamp(CL0 * (1 + 3 alpha), -0.5, 1.5), lift along body +Y
- CD       = CD0 * (1 + 5 alpha^2), drag opposite body velocity
- Control torque scales with clamp(q * 0.03, 5, 150)
- Rate damping = rate * stability * q * 0.001

Lift acts along the body up axis rather than perpendicular to the
velocity vector. The damping and clamp values are tuned against this.

Torque vectors are ordered (pitch, yaw, roll), i.e. about body (X, Y, Z).
"""

import numpy as np
from typing import NamedTuple, Optional

from .state import AircraftState
from .controls import ControlInputs
from .params import AircraftParams, FlightTuning
from .frames import UP, world_to_body
from .propulsion import JetThrustModel
from ..environment.atmosphere import SeaLevelAtmosphere


class ForceTorque(NamedTuple):
    """Body-frame net force (N) and torque (N*m) for one step."""
    force: np.ndarray
    torque: np.ndarray


def angle_of_attack(state: AircraftState, controls: ControlInputs,
                    tuning: FlightTuning) -> float:
    """
    Approximate angle of attack (rad) from pitch attitude and elevator.

    This is not the true angle between the nose and the velocity vector.
    """
    return state.pitch + controls.elevator * tuning.aoa_elevator_gain


def lift_coefficient(alpha: float, params: AircraftParams) -> float:
    """Effective lift coefficient, clamped to the tuning range."""
    tuning = params.tuning
    cl = params.lift_coeff * (1.0 + alpha * tuning.lift_slope_factor)
    return float(np.clip(cl, tuning.lift_coeff_min, tuning.lift_coeff_max))


def drag_coefficient(alpha: float, params: AircraftParams) -> float:
    """Effective drag coefficient including an alpha^2 induced term."""
    return params.drag_coeff * (1.0 + alpha * alpha * params.tuning.induced_drag_factor)


def control_power(q_bar: float, tuning: FlightTuning) -> float:
    """Control authority as a function of dynamic pressure."""
    return float(np.clip(q_bar * tuning.control_power_scale,
                         tuning.control_power_min,
                         tuning.control_power_max))


def compute_forces_moments(state: AircraftState,
                           controls: ControlInputs,
                           params: AircraftParams,
                           thrust_model: Optional[JetThrustModel] = None,
                           atmosphere: Optional[SeaLevelAtmosphere] = None) -> ForceTorque:
    """
    Compute net body-frame force and torque.

    Parameters:
    -----------
    state : AircraftState
        Current aircraft state (not modified)
    controls : ControlInputs
        Current control inputs
    params : AircraftParams
        Aircraft description and tuning
    thrust_model : JetThrustModel, optional
        Engine model; defaults to one built from params
    atmosphere : SeaLevelAtmosphere, optional
        Air density and gravity; defaults to sea level

    Returns:
    --------
    ForceTorque
        force : np.ndarray (3,) - body frame (N)
        torque : np.ndarray (3,) - (pitch, yaw, roll) about body axes (N*m)
    """
    tuning = params.tuning
    if thrust_model is None:
        thrust_model = JetThrustModel(params.max_thrust, params.thrust_offset)
    if atmosphere is None:
        atmosphere = SeaLevelAtmosphere()

    # Thrust
    thrust_force, thrust_moment = thrust_model.compute_thrust(controls.throttle)

    # Gravity (world frame -> body frame)
    gravity_world = np.array([0.0, -params.mass * atmosphere.gravity, 0.0])
    gravity_body = world_to_body(gravity_world, state.pitch, state.yaw, state.roll)

    # Dynamic pressure
    q_bar = atmosphere.get_dynamic_pressure(state.speed)
    qS = q_bar * params.wing_area

    alpha = angle_of_attack(state, controls, tuning)

    # Lift along body up axis
    lift_force = UP * (qS * lift_coefficient(alpha, params))

    # Drag opposite body velocity
    drag_force = np.zeros(3)
    velocity_norm = np.linalg.norm(state.velocity)
    if velocity_norm >= tuning.drag_min_speed:
        drag = qS * drag_coefficient(alpha, params)
        drag_force = -state.velocity / velocity_norm * drag

    force = thrust_force + gravity_body + lift_force + drag_force

    # Control torques
    authority = control_power(q_bar, tuning)
    pitch_torque = controls.elevator * params.elevator_power * authority
    yaw_torque = controls.rudder * params.rudder_power * authority
    roll_torque = controls.aileron * params.aileron_power * authority

    # Aerodynamic rate damping
    damping = q_bar * tuning.damping_scale
    pitch_torque -= state.pitch_rate * params.pitch_stability * damping
    yaw_torque -= state.yaw_rate * params.yaw_stability * damping
    roll_torque -= state.roll_rate * params.roll_stability * damping

    torque = np.array([pitch_torque, yaw_torque, roll_torque]) + thrust_moment

    return ForceTorque(force, torque)
