"""
Reference Frame Graph - Errors and Contract Checks

This module defines the typed errors raised by the frame graph and the
checks that enforce the contracts of its inputs:
- 3-vector shape
- Quaternion norm
- Rotation matrix orthonormality
- Non-negative, finite path cost

Every failure is raised to the caller; nothing is substituted or retried.
"""

import math

import numpy as np

from . import constants as C


class FrameGraphError(Exception):
    """Base class for all frame graph errors."""
    pass


class NoPathError(FrameGraphError):
    """Raised when no chain of transforms connects two frames."""
    pass


class InvalidEpochError(FrameGraphError):
    """Raised when an epoch lies outside a factory's domain of validity."""
    pass


class InconsistentRegistrationError(FrameGraphError):
    """Raised when a frame or edge would be registered twice or inconsistently."""
    pass


class GraphFrozenError(InconsistentRegistrationError):
    """Raised when a frozen graph is mutated."""
    pass


class FrameMismatchError(FrameGraphError, ValueError):
    """Raised when two transforms or factories do not chain frame-to-frame."""
    pass


class InvalidCostError(FrameGraphError):
    """Raised when a factory reports a cost the path search cannot use."""
    pass


def check_vector3(v, name: str = "vector") -> np.ndarray:
    """
    Coerce a value to a float64 3-vector.

    Args:
        v: Array-like with three components
        name: Name used in the error message

    Returns:
        The vector as a new (3,) float64 array, raises ValueError otherwise
    """
    arr = np.array(v, dtype=np.float64)
    if arr.shape != (3,):
        raise ValueError(f"{name} must have shape (3,), got {arr.shape}")
    return arr


def check_quaternion_norm(q: np.ndarray, tolerance: float = None) -> bool:
    """
    Verify quaternion is unit-normalized.

    Args:
        q: Quaternion [w, x, y, z]
        tolerance: Allowable deviation from 1.0

    Returns:
        True if valid, raises ValueError otherwise
    """
    if tolerance is None:
        tolerance = C.QUATERNION_NORM_TOL

    q = np.asarray(q, dtype=np.float64)
    if q.shape != (4,):
        raise ValueError(f"Quaternion must have shape (4,), got {q.shape}")
    norm = np.linalg.norm(q)
    if abs(norm - 1.0) > tolerance:
        raise ValueError(
            f"Quaternion norm violation: |q| = {norm:.10f}, "
            f"deviation = {abs(norm - 1.0):.2e}, tolerance = {tolerance:.2e}"
        )
    return True


def check_rotation_matrix(R: np.ndarray, tolerance: float = None) -> bool:
    """
    Verify R is a proper rotation (orthonormal, det = +1).

    Returns:
        True if valid, raises ValueError otherwise
    """
    if tolerance is None:
        tolerance = C.ROTATION_MATRIX_TOL

    R = np.asarray(R, dtype=np.float64)
    if R.shape != (3, 3):
        raise ValueError(f"Rotation matrix must have shape (3, 3), got {R.shape}")
    orth_error = np.max(np.abs(R @ R.T - np.eye(3)))
    det = np.linalg.det(R)
    if orth_error > tolerance or abs(det - 1.0) > tolerance:
        raise ValueError(
            f"Not a proper rotation matrix: max|R Rᵀ - I| = {orth_error:.2e}, "
            f"det = {det:.10f}, tolerance = {tolerance:.2e}"
        )
    return True


def check_cost(cost: float, factory=None) -> float:
    """
    Verify a path cost is finite and non-negative.

    Args:
        cost: Cost reported by a factory
        factory: Factory that reported it (for the message)

    Returns:
        The cost as a float, raises InvalidCostError otherwise
    """
    cost = float(cost)
    if math.isnan(cost) or math.isinf(cost) or cost < 0.0:
        raise InvalidCostError(
            f"Transform factory {factory} reported cost {cost}; "
            f"costs must be finite and non-negative"
        )
    return cost
