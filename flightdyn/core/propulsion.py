"""
Propulsion model for the flight dynamics engine.

Thrust acts along the body forward axis (-Z) with magnitude
throttle * max_thrust.
"""

import numpy as np
from typing import Tuple

from .frames import FORWARD


class JetThrustModel:
    """
    Throttle-proportional jet thrust.

    Thrust is aligned with the body forward axis. An optional offset of the
    thrust line from the CG produces a moment.
    """

    def __init__(self, max_thrust: float, thrust_offset: np.ndarray = None):
        """
        Parameters:
        -----------
        max_thrust : float
            Thrust at full throttle (N)
        thrust_offset : np.ndarray, shape (3,), optional
            Thrust line offset from CG in body frame (m)
        """
        self.max_thrust = max_thrust
        if thrust_offset is None:
            self.thrust_offset = np.zeros(3)
        else:
            self.thrust_offset = np.asarray(thrust_offset, dtype=float)

    def compute_thrust(self, throttle: float) -> Tuple[np.ndarray, np.ndarray]:
        """
        Compute thrust force and moment in body frame.

        Returns:
        --------
        forces : np.ndarray, shape (3,)
            Thrust force (N)
        moments : np.ndarray, shape (3,)
            Moment about the CG as (pitch, yaw, roll) torque (N*m)
        """
        forces = FORWARD * (throttle * self.max_thrust)
        moments = np.cross(self.thrust_offset, forces)
        return forces, moments
