"""
Pilot control inputs.

Sign convention (used by the force model and every caller):
- elevator > 0 : nose up
- aileron  > 0 : roll left (right wing up)
- rudder   > 0 : yaw left (nose toward -X)
- throttle     : 0 (idle) to 1 (full)

Values are not clamped here. Input layers are expected to clamp; the force
model tolerates out-of-range values through its own clamps.
"""

import numpy as np

from archimedes import struct

DEFAULT_THROTTLE = 0.5


@struct(frozen=False)
class ControlInputs:
    """Normalized control-surface deflections and throttle."""

    elevator: float = 0.0
    aileron: float = 0.0
    rudder: float = 0.0
    throttle: float = DEFAULT_THROTTLE

    def reset(self):
        """Centre the stick and rudder and return throttle to its default."""
        self.elevator = 0.0
        self.aileron = 0.0
        self.rudder = 0.0
        self.throttle = DEFAULT_THROTTLE

    def copy_from(self, other: 'ControlInputs'):
        """Copy all four values from another ControlInputs in place."""
        self.elevator = other.elevator
        self.aileron = other.aileron
        self.rudder = other.rudder
        self.throttle = other.throttle

    def to_array(self) -> np.ndarray:
        """Controls as [elevator, aileron, rudder, throttle]."""
        return np.array([self.elevator, self.aileron, self.rudder, self.throttle])

    def __str__(self) -> str:
        return (f"elev={self.elevator:.2f} ail={self.aileron:.2f} "
                f"rud={self.rudder:.2f} thr={self.throttle:.2f}")
