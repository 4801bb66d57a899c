"""
Configuration input/output.
"""

from .config import (
    AircraftConfig,
    load_aircraft_config,
    save_aircraft_config,
    create_example_config
)

__all__ = [
    'AircraftConfig',
    'load_aircraft_config',
    'save_aircraft_config',
    'create_example_config'
]
