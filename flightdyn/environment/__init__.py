"""
Environment models for flight simulation.

This module provides the sea-level atmosphere used by the flight engine.
"""

from .atmosphere import SeaLevelAtmosphere, dynamic_pressure, AIR_DENSITY, GRAVITY

__all__ = ['SeaLevelAtmosphere', 'dynamic_pressure', 'AIR_DENSITY', 'GRAVITY']
