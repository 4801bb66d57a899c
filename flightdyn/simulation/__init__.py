"""
Batch simulation utilities.
"""

from .runner import FlightHistory, simulate, step_input

__all__ = ['FlightHistory', 'simulate', 'step_input']
