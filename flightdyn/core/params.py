"""
Aircraft parameters and aircraft-class tuning constants.

AircraftParams holds the physical and aerodynamic description of one
aircraft type. FlightTuning holds the empirically chosen "feel" constants
(inertia scale factors, control-authority multipliers, damping scalars,
rate limits) that the force model and integrator were balanced against.
Both are immutable; swap them wholesale with dataclasses.replace().

Defaults model an L-39 Albatros jet trainer.
"""

from typing import Tuple

from archimedes import struct, field

from ..environment.atmosphere import GRAVITY


@struct(frozen=True)
class FlightTuning:
    """
    Aircraft-class tuning constants.

    These are not derived from first-principles aerodynamics. They were
    chosen so that a light jet trainer flies plausibly at 60 Hz.
    """

    # Moments of inertia: I = mass * length^2 * k
    inertia_scale_roll: float = 0.0008
    inertia_scale_pitch: float = 0.0010
    inertia_scale_yaw: float = 0.0009
    fuselage_length_sq: float = 144.0  # m^2, placeholder for a 12 m fuselage

    # Control authority: clamp(q * scale, min, max)
    control_power_scale: float = 0.03
    control_power_min: float = 5.0
    control_power_max: float = 150.0

    # Aerodynamic rate damping: rate * stability * (q * scale)
    damping_scale: float = 0.001

    # Lift / drag shaping
    aoa_elevator_gain: float = 0.3    # rad of AoA per unit elevator
    lift_slope_factor: float = 3.0
    lift_coeff_min: float = -0.5
    lift_coeff_max: float = 1.5
    induced_drag_factor: float = 5.0
    drag_min_speed: float = 0.1       # m/s, below this drag is zero

    # Angular rate limits (rad/s)
    max_pitch_rate: float = 4.0
    max_yaw_rate: float = 3.0
    max_roll_rate: float = 6.0

    # Flight envelope
    min_speed: float = 20.0           # m/s, minimum flying speed
    degenerate_epsilon: float = 0.1   # m/s, below this a direction is undefined
    ground_level: float = 2.0         # m
    ground_friction: float = 0.95     # horizontal velocity multiplier on touchdown
    max_timestep: float = 1.0         # s, larger steps are skipped

    # Spawn
    cruise_speed: float = 50.0        # m/s
    cruise_throttle: float = 0.7


@struct(frozen=True)
class AircraftParams:
    """
    Mass, geometry, aerodynamic and engine description of one aircraft type.

    Units are SI: kg, m, m^2, N.
    """

    # Mass properties
    mass: float = 4700.0          # kg
    wing_area: float = 18.8       # m^2
    wingspan: float = 9.46        # m

    # Aerodynamic coefficients
    lift_coeff: float = 0.5       # CL
    drag_coeff: float = 0.025     # CD
    side_force_coeff: float = 0.0  # CY

    # Control effectiveness
    elevator_power: float = 2.0
    aileron_power: float = 3.0
    rudder_power: float = 1.5

    # Engine
    max_thrust: float = 16870.0   # N (1720 kgf)
    thrust_offset: Tuple[float, float, float] = (0.0, 0.0, 0.0)  # m, thrust line from CG (body)

    # Stability derivatives (simplified rate damping)
    pitch_stability: float = 0.8
    roll_stability: float = 0.9
    yaw_stability: float = 0.7

    tuning: FlightTuning = field(default_factory=FlightTuning)

    @property
    def weight(self) -> float:
        """Weight at standard gravity (N)."""
        return self.mass * GRAVITY

    @property
    def aspect_ratio(self) -> float:
        """Wing aspect ratio b^2 / S."""
        return self.wingspan ** 2 / self.wing_area

    def __str__(self) -> str:
        return (
            f"Aircraft Parameters:\n"
            f"  Mass:        {self.mass:9.1f} kg\n"
            f"  Wing area:   {self.wing_area:9.2f} m^2\n"
            f"  Wingspan:    {self.wingspan:9.2f} m\n"
            f"  CL, CD, CY:  [{self.lift_coeff:.3f}, {self.drag_coeff:.3f}, {self.side_force_coeff:.3f}]\n"
            f"  Max thrust:  {self.max_thrust:9.0f} N\n"
            f"  Controls:    elev={self.elevator_power:.2f} ail={self.aileron_power:.2f} rud={self.rudder_power:.2f}\n"
            f"  Stability:   pitch={self.pitch_stability:.2f} roll={self.roll_stability:.2f} yaw={self.yaw_stability:.2f}"
        )
