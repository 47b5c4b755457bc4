"""
Reference Frame Graph - Kinematic State

This module defines the composite quantity that Transform.transform_state
converts between frames. Each attribute is expressed in `frame`.
"""

from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from .frames import Frame


@dataclass
class FrameState:
    """
    Kinematic state of a body expressed in one reference frame.

    Attributes:
        r: Position (m) [3]
        v: Velocity (m/s) [3]
        a: Acceleration (m/s²) [3]
        q: Orientation quaternion [w, x, y, z], body axes -> frame axes
        omega: Body angular velocity relative to the frame, frame axes (rad/s) [3]
        frame: Frame the quantities are expressed in (None if unspecified)
    """

    r: np.ndarray = field(default_factory=lambda: np.zeros(3))
    v: np.ndarray = field(default_factory=lambda: np.zeros(3))
    a: np.ndarray = field(default_factory=lambda: np.zeros(3))
    q: np.ndarray = field(default_factory=lambda: np.array([1.0, 0.0, 0.0, 0.0]))
    omega: np.ndarray = field(default_factory=lambda: np.zeros(3))
    frame: Optional[Frame] = None

    def __post_init__(self):
        """Ensure arrays are numpy arrays with correct dtype."""
        for attr in ['r', 'v', 'a', 'q', 'omega']:
            setattr(self, attr, np.asarray(getattr(self, attr), dtype=np.float64))

    def copy(self) -> 'FrameState':
        """Create a deep copy of the state."""
        return FrameState(
            r=self.r.copy(),
            v=self.v.copy(),
            a=self.a.copy(),
            q=self.q.copy(),
            omega=self.omega.copy(),
            frame=self.frame,
        )

    def to_vector(self) -> np.ndarray:
        """Flat array [r, v, a, q, omega]."""
        return np.concatenate([self.r, self.v, self.a, self.q, self.omega])

    def __repr__(self) -> str:
        return (
            f"FrameState(frame={self.frame}, "
            f"r=[{self.r[0]:.3f}, {self.r[1]:.3f}, {self.r[2]:.3f}] m, "
            f"v=[{self.v[0]:.3f}, {self.v[1]:.3f}, {self.v[2]:.3f}] m/s, "
            f"|q|={np.linalg.norm(self.q):.6f})"
        )
