"""
Reference Frame Graph - Transforms

A Transform is an immutable mapping of kinematic quantities from its source
frame to its target frame, bound to the (factory, epoch) pair that built it.

Quantities:
    position            p                -> p'
    velocity            (p, v)           -> v'
    acceleration        (p, v, a)        -> a'
    orientation         q (body -> frame)-> q'
    orientation rate    ω (frame axes)   -> ω'
    state               FrameState       -> FrameState

Velocity and acceleration need the position (and velocity) they belong to,
since rotating frames add transport terms.

Orientation outputs are always the w >= 0 representative of the rotation.
"""

from abc import ABC, abstractmethod
from typing import Tuple

import numpy as np

from .rotations import quaternion_canonical
from .state import FrameState
from .validation import FrameMismatchError, InvalidEpochError


class Transform(ABC):
    """
    Base class of all epoch-bound frame transforms.

    Subclasses implement the position, pos/vel, pos/vel/acc, orientation and
    orientation-rate methods; the remaining quantity methods dispatch to them.
    """

    def __init__(self, factory, epoch):
        self._factory = factory
        self._epoch = epoch

    @property
    def factory(self):
        """Factory that produced this transform."""
        return self._factory

    @property
    def epoch(self):
        return self._epoch

    @property
    def source(self):
        return self._factory.source

    @property
    def target(self):
        return self._factory.target

    # ── Quantity methods ────────────────────────────────────────────────

    @abstractmethod
    def transform_position(self, position: np.ndarray) -> np.ndarray:
        ...

    @abstractmethod
    def transform_pos_vel(self, position: np.ndarray,
                          velocity: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        ...

    @abstractmethod
    def transform_pos_vel_acc(self, position: np.ndarray, velocity: np.ndarray,
                              acceleration: np.ndarray
                              ) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        ...

    @abstractmethod
    def transform_orientation(self, orientation: np.ndarray) -> np.ndarray:
        ...

    @abstractmethod
    def transform_orientation_rate(self, orientation_rate: np.ndarray) -> np.ndarray:
        ...

    def transform_velocity(self, position: np.ndarray, velocity: np.ndarray) -> np.ndarray:
        return self.transform_pos_vel(position, velocity)[1]

    def transform_acceleration(self, position: np.ndarray, velocity: np.ndarray,
                               acceleration: np.ndarray) -> np.ndarray:
        return self.transform_pos_vel_acc(position, velocity, acceleration)[2]

    def transform_state(self, state: FrameState) -> FrameState:
        """
        Transform every quantity of a FrameState.

        Args:
            state: State expressed in the source frame (or with frame=None)

        Returns:
            New FrameState expressed in the target frame
        """
        if state.frame is not None and state.frame != self.source:
            raise FrameMismatchError(
                f"State is expressed in {state.frame}, transform expects {self.source}"
            )
        r, v, a = self.transform_pos_vel_acc(state.r, state.v, state.a)
        return FrameState(
            r=r,
            v=v,
            a=a,
            q=self.transform_orientation(state.q),
            omega=self.transform_orientation_rate(state.omega),
            frame=self.target,
        )

    # ── Algebra ─────────────────────────────────────────────────────────

    def add(self, other: 'Transform') -> 'CompositeTransform':
        """
        Chain `other` after this transform: source -> self.target -> other.target.

        Both transforms must be bound to the same epoch.
        """
        from .factory import CompositeFactory

        if other.source != self.target:
            raise FrameMismatchError(
                f"Cannot chain {self.source}->{self.target} with "
                f"{other.source}->{other.target}"
            )
        if other.epoch != self.epoch:
            raise InvalidEpochError(
                f"Cannot chain transforms bound to different epochs: "
                f"{self.epoch} and {other.epoch}"
            )
        factory = CompositeFactory(self.factory, other.factory)
        return CompositeTransform(factory, self.epoch, self, other)

    def inverse(self) -> 'Transform':
        """
        Reverse transform at the same epoch, built by the inverse factory.

        Round trips agree within floating tolerance, not bit for bit.
        """
        return self.factory.inverse().get_transform(self.epoch)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.source} -> {self.target} @ {self.epoch})"


class CompositeTransform(Transform):
    """Applies `transform0` (F0 -> F1) and then `transform1` (F1 -> F2)."""

    def __init__(self, factory, epoch, transform0: Transform, transform1: Transform):
        super().__init__(factory, epoch)
        self.transform0 = transform0
        self.transform1 = transform1

    def transform_position(self, position):
        position_f1 = self.transform0.transform_position(position)
        return self.transform1.transform_position(position_f1)

    def transform_pos_vel(self, position, velocity):
        position_f1, velocity_f1 = self.transform0.transform_pos_vel(position, velocity)
        return self.transform1.transform_pos_vel(position_f1, velocity_f1)

    def transform_pos_vel_acc(self, position, velocity, acceleration):
        pva_f1 = self.transform0.transform_pos_vel_acc(position, velocity, acceleration)
        return self.transform1.transform_pos_vel_acc(*pva_f1)

    def transform_orientation(self, orientation):
        orientation_f1 = self.transform0.transform_orientation(orientation)
        return self.transform1.transform_orientation(orientation_f1)

    def transform_orientation_rate(self, orientation_rate):
        rate_f1 = self.transform0.transform_orientation_rate(orientation_rate)
        return self.transform1.transform_orientation_rate(rate_f1)


class IdentityTransform(Transform):
    """No-op transform from a frame to itself; returns copies of its inputs
    (orientations as their w >= 0 representative)."""

    def transform_position(self, position):
        return np.array(position, dtype=np.float64)

    def transform_pos_vel(self, position, velocity):
        return (np.array(position, dtype=np.float64),
                np.array(velocity, dtype=np.float64))

    def transform_pos_vel_acc(self, position, velocity, acceleration):
        return (np.array(position, dtype=np.float64),
                np.array(velocity, dtype=np.float64),
                np.array(acceleration, dtype=np.float64))

    def transform_orientation(self, orientation):
        return quaternion_canonical(np.array(orientation, dtype=np.float64))

    def transform_orientation_rate(self, orientation_rate):
        return np.array(orientation_rate, dtype=np.float64)
