"""
Flight dynamics engine.

Owns one AircraftState, one AircraftParams and one ControlInputs and
advances them one frame at a time:

    engine = FlightDynamicsEngine()
    engine.initialize(np.array([0.0, 100.0, 0.0]), heading=0.0)
    engine.controls.throttle = 0.8
    engine.update(1.0 / 60.0)
    model_matrix = engine.get_transform_matrix()

Per frame: forces and torques are computed once, integrated once, then the
ground floor is applied. Invalid timesteps (dt <= 0 or dt > max_timestep)
are skipped.
"""

import logging
import numpy as np

from .state import AircraftState
from .controls import ControlInputs
from .params import AircraftParams
from .frames import FORWARD, heading_vector, transform_matrix, world_to_body
from .aerodynamics import compute_forces_moments
from .integrator import FlightIntegrator
from .propulsion import JetThrustModel
from ..environment.atmosphere import SeaLevelAtmosphere

logger = logging.getLogger(__name__)

DEFAULT_POSITION = (0.0, 100.0, 0.0)


class FlightDynamicsEngine:
    """
    Real-time flight dynamics for a single aircraft.

    Single-threaded and synchronous. Each instance is independent; there is
    no shared or global state between engines.
    """

    def __init__(self, params: AircraftParams = None, atmosphere: SeaLevelAtmosphere = None):
        """
        Parameters:
        -----------
        params : AircraftParams, optional
            Aircraft description (defaults to the jet trainer)
        atmosphere : SeaLevelAtmosphere, optional
            Air density and gravity (defaults to ISA sea level)
        """
        self._params = params if params is not None else AircraftParams()
        self._integrator = FlightIntegrator(self._params)
        self._thrust_model = JetThrustModel(self._params.max_thrust, self._params.thrust_offset)
        self.atmosphere = atmosphere if atmosphere is not None else SeaLevelAtmosphere()

        self._state = AircraftState()
        self._controls = ControlInputs()

        self.initial_position = np.array(DEFAULT_POSITION)
        self.initial_heading = 0.0

        self.last_force = np.zeros(3)
        self.last_torque = np.zeros(3)
        self.frame_count = 0

        self._dt_warned = False
        self._on_ground = False

        self.reset()

    # ==================== Lifecycle ====================

    def initialize(self, position: np.ndarray, heading: float):
        """
        Place the aircraft at a spawn point in cruise flight.

        Resets to the canonical state, then re-derives the velocity from the
        requested heading at cruise speed and sets cruise throttle.

        Parameters:
        -----------
        position : np.ndarray, shape (3,)
            World position (m)
        heading : float
            Yaw angle (rad); 0 faces -Z
        """
        self.initial_position = np.array(position, dtype=float)
        self.initial_heading = float(heading)
        self.reset()

        tuning = self._params.tuning
        state = self._state
        velocity_world = heading_vector(self.initial_heading, tuning.cruise_speed)
        state.velocity = world_to_body(velocity_world, state.pitch, state.yaw, state.roll)
        state.speed = tuning.cruise_speed

        self._controls.throttle = tuning.cruise_throttle

        logger.debug("Flight initialized at (%.1f, %.1f, %.1f), heading %.1f deg, "
                     "velocity (%.1f, %.1f, %.1f)",
                     *self.initial_position, np.degrees(self.initial_heading),
                     *velocity_world)

    def reset(self):
        """
        Restore the last initialized position and heading at cruise speed.

        The state object is reset in place, so references obtained from
        get_state() stay live.
        """
        tuning = self._params.tuning

        spawn = AircraftState()
        spawn.position = self.initial_position.copy()
        spawn.yaw = self.initial_heading
        spawn.velocity = FORWARD * tuning.cruise_speed
        spawn.speed = tuning.cruise_speed
        self._state.from_array(spawn.to_array())

        self._controls.reset()

        self.last_force = np.zeros(3)
        self.last_torque = np.zeros(3)
        self.frame_count = 0
        self._on_ground = False

        logger.debug("Flight dynamics reset: pos(%.1f, %.1f, %.1f) heading=%.2f",
                     *self._state.position, self._state.yaw)

    # ==================== Simulation ====================

    def update(self, dt: float):
        """
        Advance the simulation by one frame.

        Parameters:
        -----------
        dt : float
            Frame time (s). Steps with dt <= 0 or dt > max_timestep are skipped.
        """
        tuning = self._params.tuning
        if not (0.0 < dt <= tuning.max_timestep):
            if not self._dt_warned:
                logger.warning("Skipping flight update with invalid timestep dt=%r", dt)
                self._dt_warned = True
            else:
                logger.debug("Skipping flight update with invalid timestep dt=%r", dt)
            return

        force, torque = compute_forces_moments(self._state, self._controls, self._params,
                                               self._thrust_model, self.atmosphere)
        self._integrator.step(self._state, force, torque, dt)

        self.last_force = force
        self.last_torque = torque
        self.frame_count += 1

        self._apply_ground_clamp()

    def _apply_ground_clamp(self):
        """
        Keep the aircraft on or above the ground floor.

        Below ground_level the height is set to the floor. A negative
        vertical velocity is zeroed and friction applied to the other two
        components, all in the body frame. With the nose pitched down the
        world-frame vertical velocity therefore stays negative; the next
        clamp catches it again.

        speed is left at the integrator's value, so after friction it can
        exceed |velocity| until the next step recomputes it.
        """
        tuning = self._params.tuning
        state = self._state

        if state.position[1] < tuning.ground_level:
            state.position[1] = tuning.ground_level
            if state.velocity[1] < 0.0:
                state.velocity[1] = 0.0
                state.velocity[0] *= tuning.ground_friction
                state.velocity[2] *= tuning.ground_friction
                # speed not recomputed: keeps the minimum-speed floor on the ground

            if not self._on_ground:
                logger.info("Ground contact at (%.1f, %.1f), speed %.1f m/s",
                            state.position[0], state.position[2], state.speed)
                self._on_ground = True
        elif self._on_ground and state.position[1] > tuning.ground_level:
            self._on_ground = False

    # ==================== Accessors ====================

    @property
    def state(self) -> AircraftState:
        """Live aircraft state (mutable)."""
        return self._state

    @state.setter
    def state(self, state: AircraftState):
        self._state = state

    def get_state(self) -> AircraftState:
        return self._state

    @property
    def controls(self) -> ControlInputs:
        """Live control inputs; controllers write into this object each frame."""
        return self._controls

    def set_control_inputs(self, inputs: ControlInputs):
        """Copy control values from another ControlInputs."""
        self._controls.copy_from(inputs)

    @property
    def params(self) -> AircraftParams:
        """Aircraft parameters (read-only; use set_parameters to swap)."""
        return self._params

    def set_parameters(self, params: AircraftParams):
        """Swap the aircraft description wholesale."""
        self._params = params
        self._integrator = FlightIntegrator(params)
        self._thrust_model = JetThrustModel(params.max_thrust, params.thrust_offset)
        logger.info("Aircraft parameters set: mass=%.1f kg, max thrust=%.0f N",
                    params.mass, params.max_thrust)

    @property
    def on_ground(self) -> bool:
        """True while the aircraft is held at the ground floor."""
        return self._on_ground

    # ==================== Rendering ====================

    def get_transform_matrix(self) -> np.ndarray:
        """
        Model-to-world matrix T @ Ry(yaw) @ Rx(pitch) @ Rz(roll).

        Returns:
        --------
        M : np.ndarray, shape (4, 4)
        """
        s = self._state
        return transform_matrix(s.position, s.pitch, s.yaw, s.roll)

    # ==================== Debug ====================

    def debug_info(self) -> dict:
        """Snapshot of state and controls for overlays and logs."""
        s = self._state
        c = self._controls
        return {
            'position': s.position.copy(),
            'pitch': s.pitch,
            'yaw': s.yaw,
            'roll': s.roll,
            'speed': s.speed,
            'speed_kmh': s.speed * 3.6,
            'velocity': s.velocity.copy(),
            'elevator': c.elevator,
            'aileron': c.aileron,
            'rudder': c.rudder,
            'throttle': c.throttle,
            'frame_count': self.frame_count,
        }

    def log_debug_info(self):
        """Log the current flight state at INFO level."""
        s = self._state
        logger.info("=== Flight State ===")
        logger.info("Position: (%.1f, %.1f, %.1f)", *s.position)
        logger.info("Orientation: pitch=%.2f yaw=%.2f roll=%.2f", s.pitch, s.yaw, s.roll)
        logger.info("Speed: %.1f m/s (%.1f km/h)", s.speed, s.speed * 3.6)
        logger.info("Velocity: (%.1f, %.1f, %.1f)", *s.velocity)
        logger.info("Controls: %s", self._controls)
