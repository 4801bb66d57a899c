"""
Core flight dynamics components.

This module provides the state, parameters, force model, integrator and
engine shell for real-time aircraft flight simulation.
"""

from .state import AircraftState
from .controls import ControlInputs
from .params import AircraftParams, FlightTuning
from .frames import (
    body_to_world,
    world_to_body,
    rotation_matrix,
    transform_matrix,
    wrap_angle
)
from .aerodynamics import ForceTorque, compute_forces_moments
from .propulsion import JetThrustModel
from .integrator import FlightIntegrator, moments_of_inertia
from .dynamics import FlightDynamicsEngine

__all__ = [
    'AircraftState',
    'ControlInputs',
    'AircraftParams',
    'FlightTuning',
    'body_to_world',
    'world_to_body',
    'rotation_matrix',
    'transform_matrix',
    'wrap_angle',
    'ForceTorque',
    'compute_forces_moments',
    'JetThrustModel',
    'FlightIntegrator',
    'moments_of_inertia',
    'FlightDynamicsEngine'
]
