"""
Reference Frame Graph - Rotation Primitives

Quaternion and rotation-matrix helpers used by the kinematic transforms.

Quaternion Convention: [w, x, y, z] where w is the scalar component.
A rotation matrix R maps vector components: v' = R @ v.
"""

import numpy as np

from . import constants as C


def quaternion_normalize(q: np.ndarray) -> np.ndarray:
    """
    Normalize a quaternion to unit length.

    Raises ValueError for a degenerate (near-zero) quaternion.
    """
    q = np.asarray(q, dtype=np.float64)
    norm = np.linalg.norm(q)
    if norm < C.ZERO_TOLERANCE:
        raise ValueError("Cannot normalize a zero quaternion")
    return q / norm


def quaternion_multiply(q1: np.ndarray, q2: np.ndarray) -> np.ndarray:
    """Hamilton product q1 * q2 (apply q2 first, then q1)."""
    w1, x1, y1, z1 = q1
    w2, x2, y2, z2 = q2

    return np.array([
        w1*w2 - x1*x2 - y1*y2 - z1*z2,
        w1*x2 + x1*w2 + y1*z2 - z1*y2,
        w1*y2 - x1*z2 + y1*w2 + z1*x2,
        w1*z2 + x1*y2 - y1*x2 + z1*w2
    ])


def quaternion_canonical(q: np.ndarray) -> np.ndarray:
    """Pick the representative with w >= 0 (q and -q are the same rotation)."""
    if q[0] < 0:
        return -q
    return q


def rotation_matrix_to_quaternion(R: np.ndarray) -> np.ndarray:
    """
    Convert a rotation matrix to a quaternion with w >= 0.

    Uses Shepperd's method: branch on the largest of trace and diagonal
    so the square root argument stays well away from zero.
    """
    trace = np.trace(R)

    if trace > 0:
        s = 0.5 / np.sqrt(trace + 1.0)
        q = np.array([
            0.25 / s,
            (R[2, 1] - R[1, 2]) * s,
            (R[0, 2] - R[2, 0]) * s,
            (R[1, 0] - R[0, 1]) * s,
        ])
    elif R[0, 0] > R[1, 1] and R[0, 0] > R[2, 2]:
        s = 2.0 * np.sqrt(1.0 + R[0, 0] - R[1, 1] - R[2, 2])
        q = np.array([
            (R[2, 1] - R[1, 2]) / s,
            0.25 * s,
            (R[0, 1] + R[1, 0]) / s,
            (R[0, 2] + R[2, 0]) / s,
        ])
    elif R[1, 1] > R[2, 2]:
        s = 2.0 * np.sqrt(1.0 + R[1, 1] - R[0, 0] - R[2, 2])
        q = np.array([
            (R[0, 2] - R[2, 0]) / s,
            (R[0, 1] + R[1, 0]) / s,
            0.25 * s,
            (R[1, 2] + R[2, 1]) / s,
        ])
    else:
        s = 2.0 * np.sqrt(1.0 + R[2, 2] - R[0, 0] - R[1, 1])
        q = np.array([
            (R[1, 0] - R[0, 1]) / s,
            (R[0, 2] + R[2, 0]) / s,
            (R[1, 2] + R[2, 1]) / s,
            0.25 * s,
        ])

    return quaternion_canonical(quaternion_normalize(q))


def axis_angle_to_rotation_matrix(axis: np.ndarray, angle: float) -> np.ndarray:
    """
    Active rotation by `angle` (rad) about `axis` (Rodrigues' formula).

    A zero axis gives the identity.
    """
    axis = np.asarray(axis, dtype=np.float64)
    norm = np.linalg.norm(axis)
    if norm < C.ZERO_TOLERANCE or angle == 0.0:
        return np.eye(3)
    k = axis / norm
    K = skew(k)
    return np.eye(3) + np.sin(angle) * K + (1.0 - np.cos(angle)) * (K @ K)


def rotation_vector_to_matrix(rvec: np.ndarray) -> np.ndarray:
    """Active rotation by |rvec| about rvec / |rvec|."""
    rvec = np.asarray(rvec, dtype=np.float64)
    return axis_angle_to_rotation_matrix(rvec, float(np.linalg.norm(rvec)))


def skew(v: np.ndarray) -> np.ndarray:
    """Cross-product matrix: skew(a) @ b == a × b."""
    x, y, z = v
    return np.array([
        [0.0,  -z,   y],
        [  z, 0.0,  -x],
        [ -y,   x, 0.0],
    ])
