"""
Aircraft state for the flight dynamics engine.

State includes:
- Position (x, y, z) in the Y-up world frame
- Euler angles (pitch, yaw, roll), each wrapped to (-pi, pi]
- Velocity in body frame (+X right, +Y up, -Z forward)
- Speed, the magnitude of the world-frame velocity
- Angular rates (pitch, yaw, roll) in body frame
"""

import numpy as np
from typing import Tuple

from archimedes import struct, field

STATE_SIZE = 13


@struct(frozen=False)
class AircraftState:
    """
    Aircraft pose, rates and velocity.

    State variables (13 total):
    - Position: x, y, z (world frame, m)
    - Attitude: pitch, yaw, roll (rad)
    - Velocity: vx, vy, vz (body frame, m/s)
    - Speed: |velocity| (m/s), recomputed by the integrator
    - Angular rates: pitch_rate, yaw_rate, roll_rate (body frame, rad/s)
    """

    # Position in world frame (m)
    position: np.ndarray = field(default_factory=lambda: np.zeros(3))

    # Orientation (rad)
    pitch: float = 0.0  # about X, nose up/down
    yaw: float = 0.0    # about Y, nose left/right
    roll: float = 0.0   # about Z, wings left/right

    # Velocity in body frame (m/s)
    velocity: np.ndarray = field(default_factory=lambda: np.zeros(3))
    speed: float = 0.0

    # Angular rates in body frame (rad/s)
    pitch_rate: float = 0.0
    yaw_rate: float = 0.0
    roll_rate: float = 0.0

    @property
    def altitude(self) -> float:
        """Height above the world origin (m)."""
        return float(self.position[1])

    @property
    def euler_angles(self) -> Tuple[float, float, float]:
        """Euler angles as (pitch, yaw, roll) in radians."""
        return self.pitch, self.yaw, self.roll

    @property
    def angular_rates(self) -> np.ndarray:
        """Angular rate vector [pitch_rate, yaw_rate, roll_rate] (rad/s)."""
        return np.array([self.pitch_rate, self.yaw_rate, self.roll_rate])

    @angular_rates.setter
    def angular_rates(self, omega: np.ndarray):
        self.pitch_rate, self.yaw_rate, self.roll_rate = (float(w) for w in omega)

    def to_array(self) -> np.ndarray:
        """
        Convert state to numpy array.

        Returns:
        --------
        x : np.ndarray, shape (13,)
            [x, y, z, pitch, yaw, roll, vx, vy, vz, speed,
             pitch_rate, yaw_rate, roll_rate]
        """
        return np.hstack([
            self.position,
            self.pitch, self.yaw, self.roll,
            self.velocity,
            self.speed,
            self.pitch_rate, self.yaw_rate, self.roll_rate,
        ])

    def from_array(self, x: np.ndarray):
        """
        Load state from numpy array produced by to_array().

        Parameters:
        -----------
        x : np.ndarray, shape (13,)
        """
        x = np.asarray(x, dtype=float)
        self.position = x[0:3].copy()
        self.pitch, self.yaw, self.roll = (float(v) for v in x[3:6])
        self.velocity = x[6:9].copy()
        self.speed = float(x[9])
        self.pitch_rate, self.yaw_rate, self.roll_rate = (float(v) for v in x[10:13])

    def copy(self) -> 'AircraftState':
        """Create a deep copy of the state."""
        new_state = AircraftState()
        new_state.from_array(self.to_array())
        return new_state

    def __repr__(self) -> str:
        return (f"AircraftState(pos={self.position}, vel={self.velocity}, "
                f"omega={self.angular_rates})")

    def __str__(self) -> str:
        return (
            f"Aircraft State:\n"
            f"  Position:         [{self.position[0]:8.1f}, {self.position[1]:8.1f}, {self.position[2]:8.1f}] m\n"
            f"  Velocity (body):  [{self.velocity[0]:7.2f}, {self.velocity[1]:7.2f}, {self.velocity[2]:7.2f}] m/s\n"
            f"  Speed:            {self.speed:7.2f} m/s ({self.speed * 3.6:.1f} km/h)\n"
            f"  Euler angles:     [{np.degrees(self.pitch):6.2f}, {np.degrees(self.yaw):6.2f}, {np.degrees(self.roll):6.2f}] deg\n"
            f"  Angular rates:    [{self.pitch_rate:7.4f}, {self.yaw_rate:7.4f}, {self.roll_rate:7.4f}] rad/s"
        )
