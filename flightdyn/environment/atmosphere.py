"""
Sea-level atmosphere model.

The flight engine runs at constant conditions (sea level unless configured);
there is no altitude dependence. Units: SI (m, kg, s, Pa).
"""

GRAVITY = 9.81          # m/s^2
AIR_DENSITY = 1.225     # kg/m^3 at sea level


def dynamic_pressure(speed: float, density: float = AIR_DENSITY) -> float:
    """
    Dynamic pressure q = 0.5 * rho * V^2 (Pa).

    Parameters
    ----------
    speed : float
        Airspeed (m/s)
    density : float, optional
        Air density (kg/m^3)
    """
    return 0.5 * density * speed * speed


class SeaLevelAtmosphere:
    """
    Constant-density atmosphere, ISA sea level by default.

    The engine holds one instance; the force model reads density and gravity
    from it every step.

    Attributes
    ----------
    density : float
        Air density (kg/m^3)
    gravity : float
        Gravitational acceleration (m/s^2)
    """

    def __init__(self, density: float = AIR_DENSITY, gravity: float = GRAVITY):
        self.density = density
        self.gravity = gravity

    def get_dynamic_pressure(self, velocity: float) -> float:
        """Dynamic pressure at the given airspeed (Pa)."""
        return dynamic_pressure(velocity, self.density)

    def __repr__(self) -> str:
        return f"SeaLevelAtmosphere(density={self.density}, gravity={self.gravity})"
