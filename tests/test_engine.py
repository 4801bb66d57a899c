"""
Flight Dynamics Engine Tests

Tests for the engine lifecycle, per-frame update, ground floor, control
conventions and accessors.
"""

import logging
import math

import pytest
import numpy as np
import os
import sys

# Add repository root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from flightdyn.core import (
    AircraftParams,
    ControlInputs,
    FlightDynamicsEngine,
    body_to_world,
    compute_forces_moments,
    rotation_matrix
)
from flightdyn.core.frames import FORWARD, RIGHT
from flightdyn.environment import SeaLevelAtmosphere

DT = 0.016


@pytest.fixture
def engine():
    """Engine initialized at 1000 m heading -Z."""
    eng = FlightDynamicsEngine()
    eng.initialize(np.array([0.0, 1000.0, 0.0]), heading=0.0)
    return eng


class TestLifecycle:
    """Test construction, initialize and reset."""

    def test_default_construction(self):
        """Fresh engine is in cruise at the default spawn."""
        eng = FlightDynamicsEngine()
        state = eng.state

        assert np.allclose(state.position, [0.0, 100.0, 0.0])
        assert np.allclose(state.velocity, [0.0, 0.0, -50.0])
        assert state.speed == pytest.approx(50.0)
        assert state.euler_angles == (0.0, 0.0, 0.0)
        assert eng.controls.throttle == pytest.approx(0.5)
        assert eng.params.mass == pytest.approx(4700.0)

    def test_initialize(self):
        """Initialize sets position, heading and cruise throttle."""
        eng = FlightDynamicsEngine()
        eng.initialize(np.array([10.0, 250.0, -30.0]), heading=0.0)

        assert np.allclose(eng.state.position, [10.0, 250.0, -30.0])
        assert eng.state.yaw == pytest.approx(0.0)
        assert np.allclose(eng.state.velocity, [0.0, 0.0, -50.0])
        assert eng.controls.throttle == pytest.approx(0.7)
        assert eng.frame_count == 0

    def test_initialize_with_heading(self):
        """Body velocity is along the nose for any heading."""
        eng = FlightDynamicsEngine()
        eng.initialize(np.array([0.0, 100.0, 0.0]), heading=np.pi / 2)

        state = eng.state
        assert state.yaw == pytest.approx(np.pi / 2)
        assert np.allclose(state.velocity, [0.0, 0.0, -50.0], atol=1e-9)

        v_world = body_to_world(state.velocity, state.pitch, state.yaw, state.roll)
        assert np.allclose(v_world, [-50.0, 0.0, 0.0], atol=1e-9)

    def test_reset_restores_spawn(self, engine):
        """Reset returns to the initialized position and heading."""
        engine.controls.elevator = 0.8
        engine.controls.throttle = 1.0
        for _ in range(100):
            engine.update(DT)

        engine.reset()

        assert np.allclose(engine.state.position, [0.0, 1000.0, 0.0])
        assert engine.state.euler_angles == (0.0, 0.0, 0.0)
        assert np.allclose(engine.state.angular_rates, np.zeros(3))
        assert np.allclose(engine.state.velocity, [0.0, 0.0, -50.0])
        assert engine.state.speed == pytest.approx(50.0)
        assert engine.controls.elevator == 0.0
        assert engine.controls.throttle == pytest.approx(0.5)
        assert engine.frame_count == 0

    def test_reset_keeps_heading(self):
        """Reset after a nonzero-heading initialize keeps that heading."""
        eng = FlightDynamicsEngine()
        eng.initialize(np.array([0.0, 500.0, 0.0]), heading=1.0)
        eng.update(DT)
        eng.reset()

        assert eng.state.yaw == pytest.approx(1.0)

    def test_held_state_survives_initialize_and_reset(self):
        """A state reference taken early tracks initialize, update and reset."""
        eng = FlightDynamicsEngine()
        held = eng.get_state()

        eng.initialize(np.array([0.0, 500.0, 0.0]), 1.0)
        eng.update(DT)
        assert held is eng.state
        assert held.position[1] == pytest.approx(500.0, abs=1.0)
        assert held.yaw == pytest.approx(1.0, abs=0.01)

        eng.reset()
        assert held is eng.get_state()
        assert np.allclose(held.position, [0.0, 500.0, 0.0])
        assert held.speed == pytest.approx(50.0)

    def test_engines_independent(self):
        """Two engines share no state."""
        a = FlightDynamicsEngine()
        b = FlightDynamicsEngine()
        a.controls.aileron = 1.0
        for _ in range(10):
            a.update(DT)

        assert b.controls.aileron == 0.0
        assert np.allclose(b.state.position, [0.0, 100.0, 0.0])
        assert b.frame_count == 0


class TestUpdate:
    """Test per-frame stepping."""

    @pytest.mark.parametrize("dt", [0.0, -0.016, 1.5, float('nan'), float('inf')])
    def test_invalid_timestep_skipped(self, engine, dt):
        """Invalid dt leaves the state untouched."""
        before = engine.state.to_array()

        engine.update(dt)

        assert np.array_equal(engine.state.to_array(), before)
        assert engine.frame_count == 0

    def test_max_timestep_accepted(self, engine):
        """dt equal to the limit is still integrated."""
        engine.update(1.0)
        assert engine.frame_count == 1

    def test_invalid_timestep_warns_once(self, engine, caplog):
        """First skipped step logs a warning, later ones do not."""
        with caplog.at_level(logging.WARNING, logger='flightdyn.core.dynamics'):
            engine.update(-1.0)
            engine.update(-1.0)
            engine.update(5.0)

        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert "invalid timestep" in warnings[0].getMessage()

    def test_forces_computed_from_pre_step_state(self, engine):
        """last_force equals the force at the start of the frame."""
        expected = compute_forces_moments(engine.state.copy(), engine.controls, engine.params)

        engine.update(DT)

        assert np.allclose(engine.last_force, expected.force)
        assert np.allclose(engine.last_torque, expected.torque)
        assert engine.frame_count == 1

    def test_deterministic(self):
        """Identical inputs give identical trajectories."""
        rng = np.random.default_rng(7)
        inputs = rng.uniform(-1.0, 1.0, size=(300, 3))
        throttles = rng.uniform(0.0, 1.0, size=300)

        results = []
        for _ in range(2):
            eng = FlightDynamicsEngine()
            eng.initialize(np.array([0.0, 500.0, 0.0]), heading=0.3)
            for (e, a, r), t in zip(inputs, throttles):
                eng.controls.elevator = e
                eng.controls.aileron = a
                eng.controls.rudder = r
                eng.controls.throttle = t
                eng.update(DT)
            results.append(eng.state.to_array())

        assert np.array_equal(results[0], results[1])

    def test_angles_stay_wrapped(self, engine):
        """Sustained rotation keeps every angle in (-pi, pi]."""
        engine.controls.aileron = 1.0
        engine.controls.rudder = 1.0
        engine.controls.elevator = 1.0

        for _ in range(600):
            engine.update(DT)
            for angle in engine.state.euler_angles:
                assert -math.pi < angle <= math.pi
            assert np.all(np.isfinite(engine.state.to_array()))

    def test_rates_bounded(self, engine):
        """Full deflection never exceeds the rate limits."""
        engine.controls.aileron = -1.0
        engine.controls.rudder = 1.0
        engine.controls.elevator = -1.0

        for _ in range(600):
            engine.update(DT)
            s = engine.state
            assert abs(s.pitch_rate) <= 4.0
            assert abs(s.yaw_rate) <= 3.0
            assert abs(s.roll_rate) <= 6.0

    def test_rate_damping_decays(self, engine):
        """With centred controls an initial roll rate decays monotonically."""
        engine.state.roll_rate = 2.0
        previous = abs(engine.state.roll_rate)

        for _ in range(300):
            engine.update(DT)
            current = abs(engine.state.roll_rate)
            assert current <= previous
            previous = current

        assert previous < 2.0


class TestSpeedAndGround:
    """Test speed floor and ground clamp through the engine."""

    def test_minimum_speed_held(self):
        """No lift, no thrust: speed never drops below 20 m/s."""
        eng = FlightDynamicsEngine(AircraftParams(lift_coeff=0.0))
        eng.initialize(np.array([0.0, 300.0, 0.0]), heading=0.0)
        eng.controls.throttle = 0.0

        for _ in range(1000):
            eng.update(DT)
            assert eng.state.speed >= 20.0
            assert np.all(np.isfinite(eng.state.to_array()))

    def test_ground_floor(self):
        """Descending aircraft is held at 2 m with no sink rate."""
        eng = FlightDynamicsEngine()
        eng.initialize(np.array([0.0, 10.0, 0.0]), heading=0.0)
        eng.state.velocity = np.array([0.0, -30.0, -50.0])
        eng.state.speed = float(np.linalg.norm(eng.state.velocity))

        touched = False
        for _ in range(200):
            eng.update(DT)
            assert eng.state.position[1] >= 2.0
            if eng.on_ground and not touched:
                touched = True
                assert eng.state.position[1] == 2.0
                assert eng.state.velocity[1] == 0.0

        assert touched

    def test_ground_clamp_friction(self):
        """Touchdown zeroes sink rate and applies friction to the rest."""
        eng = FlightDynamicsEngine()
        eng.state.position = np.array([0.0, 1.0, 0.0])
        eng.state.velocity = np.array([10.0, -5.0, -40.0])

        eng._apply_ground_clamp()

        assert eng.state.position[1] == 2.0
        assert np.allclose(eng.state.velocity, [9.5, 0.0, -38.0])
        assert eng.on_ground

    def test_ground_clamp_climbing(self):
        """Below the floor but climbing: velocity left alone."""
        eng = FlightDynamicsEngine()
        eng.state.position = np.array([0.0, 1.0, 0.0])
        eng.state.velocity = np.array([0.0, 5.0, -40.0])

        eng._apply_ground_clamp()

        assert eng.state.position[1] == 2.0
        assert np.allclose(eng.state.velocity, [0.0, 5.0, -40.0])

    def test_ground_clamp_keeps_speed(self):
        """Friction shrinks the velocity but leaves speed at its prior value."""
        eng = FlightDynamicsEngine()
        eng.state.position = np.array([0.0, 1.0, 0.0])
        eng.state.velocity = np.array([10.0, -5.0, -40.0])
        eng.state.speed = 50.0

        eng._apply_ground_clamp()

        assert eng.state.speed == 50.0
        assert np.linalg.norm(eng.state.velocity) < np.linalg.norm([10.0, -5.0, -40.0])

    def test_ground_clamp_nose_down(self):
        """Nose down: body vy is zeroed but the world velocity still points down."""
        eng = FlightDynamicsEngine()
        eng.state.position = np.array([0.0, 1.0, 0.0])
        eng.state.pitch = -0.3
        eng.state.velocity = np.array([0.0, -5.0, -40.0])

        eng._apply_ground_clamp()

        state = eng.state
        assert state.velocity[1] == 0.0
        v_world = body_to_world(state.velocity, state.pitch, state.yaw, state.roll)
        assert v_world[1] < 0.0

        eng.update(DT)
        assert eng.state.position[1] >= 2.0

    def test_ground_contact_logged(self, caplog):
        """Touchdown logs once at INFO."""
        eng = FlightDynamicsEngine()
        eng.state.position = np.array([0.0, 1.0, 0.0])
        eng.state.velocity = np.array([0.0, -5.0, -40.0])

        with caplog.at_level(logging.INFO, logger='flightdyn.core.dynamics'):
            eng._apply_ground_clamp()
            eng.state.position[1] = 1.5
            eng._apply_ground_clamp()

        contacts = [r for r in caplog.records if "Ground contact" in r.getMessage()]
        assert len(contacts) == 1


class TestControlConventions:
    """Test control sign conventions end to end."""

    def _fly(self, engine, steps=30, **controls):
        for name, value in controls.items():
            setattr(engine.controls, name, value)
        for _ in range(steps):
            engine.update(DT)
        return engine.state

    def test_elevator_pitches_up(self, engine):
        """Positive elevator raises the nose."""
        state = self._fly(engine, elevator=0.5)
        assert state.pitch > 0
        assert state.pitch_rate > 0

    def test_aileron_rolls_left(self, engine):
        """Positive aileron raises the right wing."""
        state = self._fly(engine, aileron=0.5)
        right_wing = body_to_world(RIGHT, state.pitch, state.yaw, state.roll)
        assert state.roll > 0
        assert right_wing[1] > 0

    def test_rudder_yaws_left(self, engine):
        """Positive rudder swings the nose toward -X."""
        state = self._fly(engine, rudder=0.5)
        nose = body_to_world(FORWARD, state.pitch, state.yaw, state.roll)
        assert state.yaw > 0
        assert nose[0] < 0

    def test_no_input_no_rotation(self, engine):
        """Centred controls from level flight produce no rotation."""
        state = self._fly(engine, steps=600)
        assert state.euler_angles == (0.0, 0.0, 0.0)
        assert np.allclose(state.angular_rates, np.zeros(3))


class TestCruiseScenario:
    """Test a ten-second hands-off flight from the default spawn."""

    def test_hands_off_cruise(self):
        """Heading holds and altitude stays between the floor and the spawn band."""
        eng = FlightDynamicsEngine()
        eng.initialize(np.array([0.0, 100.0, 0.0]), heading=0.0)

        for _ in range(600):
            eng.update(DT)
            s = eng.state
            assert np.all(np.isfinite(s.to_array()))
            assert 2.0 <= s.position[1] <= 200.0
            assert abs(s.yaw) < np.radians(3.0)
            assert abs(s.position[0]) < 1e-6

        # Forward progress along -Z
        assert eng.state.position[2] < -250.0
        assert eng.frame_count == 600


class TestEnvironment:
    """Test thrust offset and atmosphere wiring through the engine."""

    def test_thrust_offset_pitches(self):
        """A thrust line below the CG pitches the nose up with no elevator."""
        eng = FlightDynamicsEngine(AircraftParams(thrust_offset=(0.0, -0.5, 0.0)))
        eng.initialize(np.array([0.0, 1000.0, 0.0]), heading=0.0)
        eng.update(DT)

        assert eng.last_torque[0] > 0.0
        assert eng.state.pitch_rate > 0.0

    def test_custom_atmosphere(self):
        """The engine evaluates forces with its atmosphere."""
        thin = SeaLevelAtmosphere(density=0.6125, gravity=9.0)
        eng = FlightDynamicsEngine(atmosphere=thin)
        eng.initialize(np.array([0.0, 1000.0, 0.0]), heading=0.0)
        before = eng.state.copy()
        controls = ControlInputs()
        controls.copy_from(eng.controls)

        eng.update(DT)

        expected = compute_forces_moments(before, controls, eng.params, atmosphere=thin)
        assert eng.atmosphere is thin
        assert np.allclose(eng.last_force, expected.force)
        assert np.allclose(eng.last_torque, expected.torque)

    def test_default_atmosphere(self):
        """Default engine flies at sea level."""
        eng = FlightDynamicsEngine()
        assert eng.atmosphere.density == pytest.approx(1.225)
        assert eng.atmosphere.gravity == pytest.approx(9.81)


class TestAccessors:
    """Test accessors and parameter swaps."""

    def test_get_state_is_live(self, engine):
        """get_state returns the live state object."""
        assert engine.get_state() is engine.state

    def test_state_setter(self, engine):
        """Replacing the state object is allowed."""
        new_state = engine.state.copy()
        new_state.position = np.array([5.0, 600.0, 5.0])
        engine.state = new_state
        assert engine.get_state().altitude == pytest.approx(600.0)

    def test_set_control_inputs_copies(self, engine):
        """set_control_inputs copies values, not the object."""
        inputs = ControlInputs(elevator=0.2, aileron=-0.1, rudder=0.3, throttle=0.9)
        engine.set_control_inputs(inputs)
        inputs.elevator = 0.9

        assert engine.controls is not inputs
        assert engine.controls.elevator == pytest.approx(0.2)
        assert engine.controls.throttle == pytest.approx(0.9)

    def test_controls_written_in_place(self, engine):
        """Writes to engine.controls take effect on the next update."""
        engine.controls.aileron = 1.0
        engine.update(DT)
        assert engine.state.roll_rate > 0

    def test_set_parameters(self, engine):
        """Swapping params changes the integrator and thrust model."""
        heavy = AircraftParams(mass=9400.0, max_thrust=0.0)
        engine.set_parameters(heavy)

        assert engine.params is heavy
        engine.update(DT)
        assert engine.last_force[2] >= 0.0   # no thrust, drag only

    def test_params_read_only(self, engine):
        """params has no setter."""
        with pytest.raises(AttributeError):
            engine.params = AircraftParams()

    def test_transform_matrix(self, engine):
        """Render matrix is position plus attitude."""
        engine.controls.aileron = 0.5
        engine.controls.elevator = 0.3
        for _ in range(20):
            engine.update(DT)

        s = engine.state
        M = engine.get_transform_matrix()

        assert M.shape == (4, 4)
        assert np.allclose(M[:3, 3], s.position)
        assert np.allclose(M[:3, :3], rotation_matrix(s.pitch, s.yaw, s.roll))
        assert np.allclose(M[3], [0.0, 0.0, 0.0, 1.0])

    def test_debug_info(self, engine):
        """Debug snapshot has state and control entries."""
        info = engine.debug_info()

        assert info['speed'] == pytest.approx(50.0)
        assert info['speed_kmh'] == pytest.approx(180.0)
        assert info['throttle'] == pytest.approx(0.7)
        assert np.allclose(info['position'], [0.0, 1000.0, 0.0])

    def test_log_debug_info(self, engine, caplog):
        """Debug dump goes to the module logger."""
        with caplog.at_level(logging.INFO, logger='flightdyn.core.dynamics'):
            engine.log_debug_info()

        assert "Flight State" in caplog.text
        assert "thr=0.70" in caplog.text
