"""
Aircraft Configuration System

Provides YAML-based configuration loading for aircraft parameters,
tuning constants and spawn placement.
"""

import dataclasses
import logging
import yaml
import numpy as np
from typing import Dict, Any

from ..core.params import AircraftParams, FlightTuning
from ..core.dynamics import FlightDynamicsEngine
from ..environment.atmosphere import AIR_DENSITY, GRAVITY, SeaLevelAtmosphere

logger = logging.getLogger(__name__)

_TUNING_FIELDS = {f.name for f in dataclasses.fields(FlightTuning)}


class AircraftConfig:
    """
    Aircraft configuration loaded from YAML file.

    Attributes
    ----------
    name : str
        Aircraft name
    mass : float
        Aircraft mass (kg)
    wing_area : float
        Reference wing area (m^2)
    wingspan : float
        Wingspan (m)
    aerodynamics : dict
        lift_coeff, drag_coeff, side_force_coeff
    controls : dict
        elevator_power, aileron_power, rudder_power
    propulsion : dict
        max_thrust (N)
    stability : dict
        pitch, roll, yaw rate damping
    tuning : dict
        Overrides for FlightTuning fields
    initial_state : dict
        position [x, y, z] (m) and heading (rad)
    """

    def __init__(self, config_dict: Dict[str, Any]):
        """
        Initialize aircraft configuration from dictionary.

        Parameters
        ----------
        config_dict : dict
            Configuration dictionary (typically from YAML)

        Raises
        ------
        ValueError
            If a physical parameter is out of range or a key is unknown.
        """
        self.raw_config = config_dict
        self._parse_config()

    def _parse_config(self):
        """Parse and validate configuration dictionary."""
        defaults = AircraftParams()
        aircraft = self.raw_config.get('aircraft', {}) or {}

        self.name = aircraft.get('name', 'Unnamed Aircraft')

        # Mass properties
        self.mass = float(aircraft.get('mass', defaults.mass))
        self.wing_area = float(aircraft.get('wing_area', defaults.wing_area))
        self.wingspan = float(aircraft.get('wingspan', defaults.wingspan))

        for key in ('mass', 'wing_area', 'wingspan'):
            if getattr(self, key) <= 0.0:
                raise ValueError(f"aircraft.{key} must be positive, got {getattr(self, key)}")

        self.aerodynamics = aircraft.get('aerodynamics', {}) or {}
        self.controls = aircraft.get('controls', {}) or {}
        self.propulsion = aircraft.get('propulsion', {}) or {}
        self.stability = aircraft.get('stability', {}) or {}

        max_thrust = float(self.propulsion.get('max_thrust', defaults.max_thrust))
        if max_thrust < 0.0:
            raise ValueError(f"aircraft.propulsion.max_thrust must be non-negative, got {max_thrust}")

        thrust_offset = np.asarray(self.propulsion.get('thrust_offset', [0.0, 0.0, 0.0]), dtype=float)
        if thrust_offset.shape != (3,):
            raise ValueError(f"aircraft.propulsion.thrust_offset must have 3 components, got {thrust_offset.tolist()}")
        self.thrust_offset = tuple(float(v) for v in thrust_offset)

        self.tuning = aircraft.get('tuning', {}) or {}
        unknown = set(self.tuning) - _TUNING_FIELDS
        if unknown:
            raise ValueError(f"Unknown tuning parameter(s): {', '.join(sorted(unknown))}")

        # Initial state
        self.initial_state = aircraft.get('initial_state', {}) or {}
        position = np.asarray(self.initial_state.get('position', [0.0, 100.0, 0.0]), dtype=float)
        if position.shape != (3,):
            raise ValueError(f"aircraft.initial_state.position must have 3 components, got {position.tolist()}")
        self.initial_position = position
        self.initial_heading = float(self.initial_state.get('heading', 0.0))

        # Environment (top level, beside 'aircraft')
        self.environment = self.raw_config.get('environment', {}) or {}
        self.density = float(self.environment.get('density', AIR_DENSITY))
        self.gravity = float(self.environment.get('gravity', GRAVITY))
        for key in ('density', 'gravity'):
            if getattr(self, key) <= 0.0:
                raise ValueError(f"environment.{key} must be positive, got {getattr(self, key)}")

    def create_tuning(self) -> FlightTuning:
        """
        Create FlightTuning with configured overrides.

        Returns
        -------
        FlightTuning
        """
        return FlightTuning(**{key: float(value) for key, value in self.tuning.items()})

    def create_params(self) -> AircraftParams:
        """
        Create AircraftParams from configuration.

        Returns
        -------
        AircraftParams
            Configured aircraft parameters
        """
        defaults = AircraftParams()
        aero = self.aerodynamics
        ctrl = self.controls
        stab = self.stability

        return AircraftParams(
            mass=self.mass,
            wing_area=self.wing_area,
            wingspan=self.wingspan,
            lift_coeff=float(aero.get('lift_coeff', defaults.lift_coeff)),
            drag_coeff=float(aero.get('drag_coeff', defaults.drag_coeff)),
            side_force_coeff=float(aero.get('side_force_coeff', defaults.side_force_coeff)),
            elevator_power=float(ctrl.get('elevator_power', defaults.elevator_power)),
            aileron_power=float(ctrl.get('aileron_power', defaults.aileron_power)),
            rudder_power=float(ctrl.get('rudder_power', defaults.rudder_power)),
            max_thrust=float(self.propulsion.get('max_thrust', defaults.max_thrust)),
            thrust_offset=self.thrust_offset,
            pitch_stability=float(stab.get('pitch', defaults.pitch_stability)),
            roll_stability=float(stab.get('roll', defaults.roll_stability)),
            yaw_stability=float(stab.get('yaw', defaults.yaw_stability)),
            tuning=self.create_tuning(),
        )

    def create_atmosphere(self) -> SeaLevelAtmosphere:
        """Create the atmosphere from the environment section."""
        return SeaLevelAtmosphere(density=self.density, gravity=self.gravity)

    def create_engine(self) -> FlightDynamicsEngine:
        """
        Create a FlightDynamicsEngine initialized at the configured spawn.

        Returns
        -------
        FlightDynamicsEngine
        """
        engine = FlightDynamicsEngine(self.create_params(), self.create_atmosphere())
        engine.initialize(self.initial_position, self.initial_heading)
        return engine

    def __repr__(self):
        """String representation."""
        return (f"AircraftConfig(name='{self.name}', "
                f"mass={self.mass}, "
                f"wing_area={self.wing_area})")


def load_aircraft_config(yaml_file: str) -> AircraftConfig:
    """
    Load aircraft configuration from YAML file.

    Parameters
    ----------
    yaml_file : str
        Path to YAML configuration file

    Returns
    -------
    AircraftConfig
        Loaded aircraft configuration

    Examples
    --------
    >>> config = load_aircraft_config('examples/aircraft/l39_albatros.yaml')
    >>> engine = config.create_engine()
    """
    with open(yaml_file, 'r') as f:
        config_dict = yaml.safe_load(f)

    if not isinstance(config_dict, dict):
        raise ValueError(f"Aircraft configuration must be a mapping: {yaml_file}")

    config = AircraftConfig(config_dict)
    logger.info("Loaded aircraft configuration '%s' from %s", config.name, yaml_file)
    return config


def save_aircraft_config(config: AircraftConfig, yaml_file: str):
    """
    Save aircraft configuration to YAML file.

    Parameters
    ----------
    config : AircraftConfig
        Aircraft configuration to save
    yaml_file : str
        Output YAML file path
    """
    with open(yaml_file, 'w') as f:
        yaml.dump(config.raw_config, f, default_flow_style=False, sort_keys=False)

    logger.info("Configuration saved to: %s", yaml_file)


def create_example_config() -> Dict[str, Any]:
    """
    Create example aircraft configuration dictionary.

    Returns
    -------
    dict
        Example configuration (L-39 Albatros jet trainer)
    """
    config = {
        'aircraft': {
            'name': 'L-39 Albatros',
            'mass': 4700.0,      # kg
            'wing_area': 18.8,   # m^2
            'wingspan': 9.46,    # m
            'aerodynamics': {
                'lift_coeff': 0.5,
                'drag_coeff': 0.025,
                'side_force_coeff': 0.0
            },
            'controls': {
                'elevator_power': 2.0,
                'aileron_power': 3.0,
                'rudder_power': 1.5
            },
            'propulsion': {
                'max_thrust': 16870.0,  # N (1720 kgf)
                'thrust_offset': [0.0, 0.0, 0.0]  # m, body frame
            },
            'stability': {
                'pitch': 0.8,
                'roll': 0.9,
                'yaw': 0.7
            },
            'tuning': {
                'min_speed': 20.0,
                'cruise_speed': 50.0,
                'cruise_throttle': 0.7
            },
            'initial_state': {
                'position': [0.0, 100.0, 0.0],  # m
                'heading': 0.0                  # rad
            }
        },
        'environment': {
            'density': 1.225,  # kg/m^3
            'gravity': 9.81    # m/s^2
        }
    }

    return config
