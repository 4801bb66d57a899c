"""
Body/world frame transforms for Euler-angle attitude.

Conventions (right-handed, Y-up, renderer frame):
- Body axes: +X right wing, +Y up, -Z forward (nose)
- pitch rotates about X, yaw about Y, roll about Z
- body -> world: R = Ry(yaw) @ Rx(pitch) @ Rz(roll)
  (roll applied first, then pitch, then yaw)
- world -> body: R.T = Rz(-roll) @ Rx(-pitch) @ Ry(-yaw)

Positive pitch raises the nose, positive yaw turns the nose toward -X
(left) and positive roll raises the right wing.

4x4 matrices are row-major numpy arrays acting on column vectors
(M @ [x, y, z, 1]); use to_column_major() for GPU upload.
"""

import math
import numpy as np
from typing import Optional

TWO_PI = 2.0 * math.pi

FORWARD = np.array([0.0, 0.0, -1.0])
UP = np.array([0.0, 1.0, 0.0])
RIGHT = np.array([1.0, 0.0, 0.0])


def rotation_x(angle: float) -> np.ndarray:
    """Rotation about the X axis (pitch)."""
    c, s = math.cos(angle), math.sin(angle)
    return np.array([
        [1.0, 0.0, 0.0],
        [0.0,   c,  -s],
        [0.0,   s,   c]
    ])


def rotation_y(angle: float) -> np.ndarray:
    """Rotation about the Y axis (yaw)."""
    c, s = math.cos(angle), math.sin(angle)
    return np.array([
        [  c, 0.0,   s],
        [0.0, 1.0, 0.0],
        [ -s, 0.0,   c]
    ])


def rotation_z(angle: float) -> np.ndarray:
    """Rotation about the Z axis (roll)."""
    c, s = math.cos(angle), math.sin(angle)
    return np.array([
        [  c,  -s, 0.0],
        [  s,   c, 0.0],
        [0.0, 0.0, 1.0]
    ])


def rotation_matrix(pitch: float, yaw: float, roll: float) -> np.ndarray:
    """
    Body-to-world direction cosine matrix.

    Parameters
    ----------
    pitch, yaw, roll : float
        Euler angles (rad)

    Returns
    -------
    R : np.ndarray, shape (3, 3)
        Maps body-frame vectors to world frame
    """
    return rotation_y(yaw) @ rotation_x(pitch) @ rotation_z(roll)


def body_to_world(v: np.ndarray, pitch: float, yaw: float, roll: float) -> np.ndarray:
    """
    Rotate a body-frame vector into the world frame.

    Roll is applied first, then pitch, then yaw.
    """
    v = np.asarray(v, dtype=float)
    return rotation_y(yaw) @ (rotation_x(pitch) @ (rotation_z(roll) @ v))


def world_to_body(v: np.ndarray, pitch: float, yaw: float, roll: float) -> np.ndarray:
    """
    Rotate a world-frame vector into the body frame.

    Exact reverse of body_to_world: yaw, then pitch, then roll, each negated.
    """
    v = np.asarray(v, dtype=float)
    return rotation_z(-roll) @ (rotation_x(-pitch) @ (rotation_y(-yaw) @ v))


def wrap_angle(angle: float) -> float:
    """
    Wrap an angle into (-pi, pi].

    Works for angles any number of turns outside the range.
    """
    if not math.isfinite(angle):
        return angle
    wrapped = math.fmod(angle, TWO_PI)
    while wrapped > math.pi:
        wrapped -= TWO_PI
    while wrapped <= -math.pi:
        wrapped += TWO_PI
    return wrapped


def safe_normalize(v: np.ndarray, epsilon: float = 1e-9) -> Optional[np.ndarray]:
    """
    Unit vector along v, or None if |v| < epsilon.

    Callers skip the operation on None rather than divide by ~0.
    """
    norm = np.linalg.norm(v)
    if norm < epsilon:
        return None
    return np.asarray(v, dtype=float) / norm


def heading_vector(heading: float, magnitude: float = 1.0) -> np.ndarray:
    """
    Level world-frame vector pointing along a heading.

    heading = 0 points along -Z; positive heading turns toward -X.
    """
    return np.array([
        -magnitude * math.sin(heading),
        0.0,
        -magnitude * math.cos(heading)
    ])


# ==================== 4x4 matrices ====================

def mat4_translate(x: float, y: float, z: float) -> np.ndarray:
    m = np.eye(4)
    m[0:3, 3] = [x, y, z]
    return m


def mat4_from_rotation(R: np.ndarray) -> np.ndarray:
    m = np.eye(4)
    m[0:3, 0:3] = R
    return m


def mat4_rotate_x(angle: float) -> np.ndarray:
    return mat4_from_rotation(rotation_x(angle))


def mat4_rotate_y(angle: float) -> np.ndarray:
    return mat4_from_rotation(rotation_y(angle))


def mat4_rotate_z(angle: float) -> np.ndarray:
    return mat4_from_rotation(rotation_z(angle))


def transform_matrix(position: np.ndarray, pitch: float, yaw: float, roll: float) -> np.ndarray:
    """
    Model-to-world matrix: T(position) @ Ry(yaw) @ Rx(pitch) @ Rz(roll).

    Parameters
    ----------
    position : np.ndarray, shape (3,)
        World position (m)
    pitch, yaw, roll : float
        Euler angles (rad)

    Returns
    -------
    M : np.ndarray, shape (4, 4)
    """
    x, y, z = position
    return (mat4_translate(x, y, z)
            @ mat4_rotate_y(yaw)
            @ mat4_rotate_x(pitch)
            @ mat4_rotate_z(roll))


def to_column_major(m: np.ndarray) -> np.ndarray:
    """Flatten a 4x4 matrix in column-major order (OpenGL layout)."""
    return np.asarray(m, dtype=np.float32).flatten(order='F')


if __name__ == "__main__":
    print("=== Frame Transform Tests ===\n")

    pitch, yaw, roll = np.radians([10, 45, -20])
    v = np.array([1.0, 2.0, 3.0])

    v_world = body_to_world(v, pitch, yaw, roll)
    v_back = world_to_body(v_world, pitch, yaw, roll)
    print(f"1. Round trip {v} -> {v_world} -> {v_back}")

    print(f"2. Nose direction at 45 deg yaw: {body_to_world(FORWARD, 0.0, np.radians(45), 0.0)}")

    print(f"3. wrap_angle(7*pi) = {wrap_angle(7 * math.pi):.6f}")

    print("4. Transform matrix:")
    print(transform_matrix(np.array([0.0, 100.0, 0.0]), pitch, yaw, roll))
