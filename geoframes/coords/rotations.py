"""Rotation matrices for rigid frame-to-frame maps.

Orientations of sensors and vehicles are given as ZYX (yaw-pitch-roll)
Euler angles or unit quaternions and turned into 3x3 matrices that map
vectors from the child frame into the parent frame:

    v_parent = R @ v_child,   R = Rz(yaw) Ry(pitch) Rx(roll)

Conventions:
- Angles in radians
- Quaternions [qw, qx, qy, qz], scalar first
"""

import numpy as np
from numpy.typing import NDArray
from scipy.linalg import polar


def rot_x(angle: float) -> NDArray[np.float64]:
    """Rotation by ``angle`` about the x-axis."""
    c, s = np.cos(angle), np.sin(angle)
    return np.array([[1.0, 0.0, 0.0], [0.0, c, -s], [0.0, s, c]], dtype=np.float64)


def rot_y(angle: float) -> NDArray[np.float64]:
    """Rotation by ``angle`` about the y-axis."""
    c, s = np.cos(angle), np.sin(angle)
    return np.array([[c, 0.0, s], [0.0, 1.0, 0.0], [-s, 0.0, c]], dtype=np.float64)


def rot_z(angle: float) -> NDArray[np.float64]:
    """Rotation by ``angle`` about the z-axis."""
    c, s = np.cos(angle), np.sin(angle)
    return np.array([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]], dtype=np.float64)


def rot_zyx(yaw: float, pitch: float, roll: float) -> NDArray[np.float64]:
    """Rotation matrix from ZYX Euler angles.

    Args:
        yaw: Rotation about z, applied last.
        pitch: Rotation about y.
        roll: Rotation about x, applied first.

    Returns:
        R = Rz(yaw) @ Ry(pitch) @ Rx(roll).

    Example:
        >>> R = rot_zyx(np.pi / 3, np.pi / 5, -np.pi / 4)
        >>> np.allclose(R @ R.T, np.eye(3))
        True
    """
    cy, sy = np.cos(yaw), np.sin(yaw)
    cp, sp = np.cos(pitch), np.sin(pitch)
    cr, sr = np.cos(roll), np.sin(roll)

    return np.array(
        [
            [cy * cp, cy * sp * sr - sy * cr, cy * sp * cr + sy * sr],
            [sy * cp, sy * sp * sr + cy * cr, sy * sp * cr - cy * sr],
            [-sp, cp * sr, cp * cr],
        ],
        dtype=np.float64,
    )


def rotation_matrix_to_zyx(R: NDArray[np.float64]) -> NDArray[np.float64]:
    """ZYX Euler angles [yaw, pitch, roll] of a rotation matrix.

    At gimbal lock (pitch = ±90°) only yaw - roll (or yaw + roll) is
    observable; roll is reported as 0.

    Raises:
        ValueError: If R is not 3x3.
    """
    if R.shape != (3, 3):
        raise ValueError(f"Expected 3x3 matrix, got shape {R.shape}")

    sin_pitch = -R[2, 0]
    if abs(sin_pitch) >= 1.0:
        pitch = np.copysign(np.pi / 2.0, sin_pitch)
        yaw = np.arctan2(-R[0, 1], R[1, 1])
        roll = 0.0
    else:
        pitch = np.arcsin(sin_pitch)
        roll = np.arctan2(R[2, 1], R[2, 2])
        yaw = np.arctan2(R[1, 0], R[0, 0])

    return np.array([yaw, pitch, roll], dtype=np.float64)


def quat_to_rotation_matrix(q: NDArray[np.float64]) -> NDArray[np.float64]:
    """Rotation matrix of a unit quaternion [qw, qx, qy, qz].

    Raises:
        ValueError: If q does not have 4 elements.
    """
    q = np.asarray(q, dtype=np.float64)
    if q.shape != (4,):
        raise ValueError(f"Expected 4-element quaternion, got shape {q.shape}")

    qw, qx, qy, qz = q
    return np.array(
        [
            [1.0 - 2.0 * (qy * qy + qz * qz), 2.0 * (qx * qy - qw * qz), 2.0 * (qx * qz + qw * qy)],
            [2.0 * (qx * qy + qw * qz), 1.0 - 2.0 * (qx * qx + qz * qz), 2.0 * (qy * qz - qw * qx)],
            [2.0 * (qx * qz - qw * qy), 2.0 * (qy * qz + qw * qx), 1.0 - 2.0 * (qx * qx + qy * qy)],
        ],
        dtype=np.float64,
    )


def rotation_matrix_to_quat(R: NDArray[np.float64]) -> NDArray[np.float64]:
    """Unit quaternion [qw, qx, qy, qz] of a rotation matrix (Shepperd's method).

    The sign is fixed so that qw >= 0.

    Raises:
        ValueError: If R is not 3x3.
    """
    if R.shape != (3, 3):
        raise ValueError(f"Expected 3x3 matrix, got shape {R.shape}")

    trace = np.trace(R)
    if trace > 0:
        s = 0.5 / np.sqrt(trace + 1.0)
        q = [0.25 / s, (R[2, 1] - R[1, 2]) * s, (R[0, 2] - R[2, 0]) * s, (R[1, 0] - R[0, 1]) * s]
    elif R[0, 0] > R[1, 1] and R[0, 0] > R[2, 2]:
        s = 2.0 * np.sqrt(1.0 + R[0, 0] - R[1, 1] - R[2, 2])
        q = [(R[2, 1] - R[1, 2]) / s, 0.25 * s, (R[0, 1] + R[1, 0]) / s, (R[0, 2] + R[2, 0]) / s]
    elif R[1, 1] > R[2, 2]:
        s = 2.0 * np.sqrt(1.0 + R[1, 1] - R[0, 0] - R[2, 2])
        q = [(R[0, 2] - R[2, 0]) / s, (R[0, 1] + R[1, 0]) / s, 0.25 * s, (R[1, 2] + R[2, 1]) / s]
    else:
        s = 2.0 * np.sqrt(1.0 + R[2, 2] - R[0, 0] - R[1, 1])
        q = [(R[1, 0] - R[0, 1]) / s, (R[0, 2] + R[2, 0]) / s, (R[1, 2] + R[2, 1]) / s, 0.25 * s]

    q = np.array(q, dtype=np.float64)
    q /= np.linalg.norm(q)
    return -q if q[0] < 0 else q


def is_rotation_matrix(R: NDArray[np.float64], atol: float = 1e-9) -> bool:
    """Whether R is a proper rotation (orthonormal with determinant +1)."""
    R = np.asarray(R, dtype=np.float64)
    if R.shape != (3, 3):
        return False
    return bool(
        np.allclose(R @ R.T, np.eye(3), atol=atol)
        and np.isclose(np.linalg.det(R), 1.0, atol=atol)
    )


def nearest_rotation_matrix(M: NDArray[np.float64]) -> NDArray[np.float64]:
    """Closest proper rotation to M in the Frobenius norm.

    Uses the polar decomposition M = U P; U is the orthogonal factor.
    Useful to clean up accumulated round-off in chained rotations.

    Raises:
        ValueError: If M is not 3x3 or its orthogonal factor is a
            reflection.
    """
    M = np.asarray(M, dtype=np.float64)
    if M.shape != (3, 3):
        raise ValueError(f"Expected 3x3 matrix, got shape {M.shape}")
    U, _ = polar(M)
    if np.linalg.det(U) < 0:
        raise ValueError("Matrix is closer to a reflection than to a rotation")
    return U
