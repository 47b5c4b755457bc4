"""
Reference Frame Graph - Kinematic Transforms

Transforms between frames that translate, rotate and scale relative to one
another. For a point with position p, velocity v and acceleration a in the
source frame::

    r  = p + T                  (shifted position)
    ṙ  = v + V                  (shifted velocity)
    p' = k R r
    v' = k R (ṙ + ω × r)
    a' = k R (a + A + α × r + 2 ω × ṙ + ω × (ω × r))

where R maps source components to target components, k is the scale factor,
and ω / α are the source-frame angular velocity / acceleration of the source
axes seen from the target axes (minus the spin of the target frame).
The terms of a' are the observed, Euler, Coriolis and centripetal
accelerations.

Orientations q (body -> frame) map as q' = q_R ⊗ q, and body rates relative
to the frame as ω_b' = R (ω_b + ω).

Concrete factories:
    StaticTransformFactory   constant rotation/translation
    RotatingFrameFactory     uniform spin about a fixed axis
    EarthRotationFactory     spin by the IERS Earth rotation angle
    HelmertTransformFactory  14-parameter similarity transform (ITRF)
"""

from abc import abstractmethod
from dataclasses import dataclass

import numpy as np

from . import constants as C
from .epoch import Epoch
from .factory import TransformFactory
from .rotations import (
    axis_angle_to_rotation_matrix,
    quaternion_canonical,
    quaternion_multiply,
    quaternion_normalize,
    rotation_matrix_to_quaternion,
    rotation_vector_to_matrix,
)
from .transform import Transform
from .validation import (
    InvalidEpochError,
    check_cost,
    check_quaternion_norm,
    check_rotation_matrix,
    check_vector3,
)


@dataclass(frozen=True, eq=False)
class KinematicParameters:
    """
    Parameters of one kinematic transform at one epoch.

    Attributes:
        translation: T, added to source positions (m) [3]
        velocity: V, added to source velocities (m/s) [3]
        acceleration: A, added to source accelerations (m/s²) [3]
        rotation: R, source -> target component rotation [3x3]
        rotation_rate: ω (rad/s) [3], source axes
        rotation_acceleration: α (rad/s²) [3], source axes
        scale: k, dimensionless scale factor
    """

    translation: np.ndarray
    velocity: np.ndarray
    acceleration: np.ndarray
    rotation: np.ndarray
    rotation_rate: np.ndarray
    rotation_acceleration: np.ndarray
    scale: float = 1.0

    def __post_init__(self):
        for attr in ['translation', 'velocity', 'acceleration',
                     'rotation_rate', 'rotation_acceleration']:
            object.__setattr__(self, attr, check_vector3(getattr(self, attr), attr))
        rotation = np.array(self.rotation, dtype=np.float64)
        check_rotation_matrix(rotation)
        object.__setattr__(self, 'rotation', rotation)
        if not self.scale > 0.0:
            raise ValueError(f"scale must be positive, got {self.scale}")
        object.__setattr__(self, 'scale', float(self.scale))

    @classmethod
    def create(cls, rotation=None, translation=None, velocity=None,
               acceleration=None, rotation_rate=None,
               rotation_acceleration=None, scale: float = 1.0) -> 'KinematicParameters':
        """Build parameters, defaulting every omitted term to zero/identity."""
        zero = np.zeros(3)
        return cls(
            translation=zero if translation is None else translation,
            velocity=zero if velocity is None else velocity,
            acceleration=zero if acceleration is None else acceleration,
            rotation=np.eye(3) if rotation is None else rotation,
            rotation_rate=zero if rotation_rate is None else rotation_rate,
            rotation_acceleration=zero if rotation_acceleration is None else rotation_acceleration,
            scale=scale,
        )

    def inverted(self) -> 'KinematicParameters':
        """
        Parameters of the exact reverse transform (target -> source).

            k' = 1/k          R' = Rᵀ
            T' = -k R T       ω' = -R ω       α' = -R α
            V' = -k R (V + ω × T)
            A' = -k R (A + α × T + 2 ω × V + ω × (ω × T))
        """
        R, k = self.rotation, self.scale
        T, V, A = self.translation, self.velocity, self.acceleration
        w, alpha = self.rotation_rate, self.rotation_acceleration

        origin_acc = A + np.cross(alpha, T) + 2.0 * np.cross(w, V) + np.cross(w, np.cross(w, T))
        return KinematicParameters(
            translation=-k * (R @ T),
            velocity=-k * (R @ (V + np.cross(w, T))),
            acceleration=-k * (R @ origin_acc),
            rotation=R.T,
            rotation_rate=-(R @ w),
            rotation_acceleration=-(R @ alpha),
            scale=1.0 / k,
        )


class KinematicTransform(Transform):
    """Transform applying one set of KinematicParameters."""

    def __init__(self, factory, epoch, parameters: KinematicParameters):
        super().__init__(factory, epoch)
        self.parameters = parameters
        self._rotation_quaternion = rotation_matrix_to_quaternion(parameters.rotation)

    def transform_position(self, position):
        prm = self.parameters
        r = check_vector3(position, "position") + prm.translation
        return prm.scale * (prm.rotation @ r)

    def transform_pos_vel(self, position, velocity):
        prm = self.parameters
        r = check_vector3(position, "position") + prm.translation
        r_dot = check_vector3(velocity, "velocity") + prm.velocity

        p_f1 = prm.scale * (prm.rotation @ r)
        v_f1 = prm.scale * (prm.rotation @ (r_dot + np.cross(prm.rotation_rate, r)))
        return p_f1, v_f1

    def transform_pos_vel_acc(self, position, velocity, acceleration):
        prm = self.parameters
        w = prm.rotation_rate
        r = check_vector3(position, "position") + prm.translation
        r_dot = check_vector3(velocity, "velocity") + prm.velocity

        p_f1 = prm.scale * (prm.rotation @ r)
        v_f1 = prm.scale * (prm.rotation @ (r_dot + np.cross(w, r)))

        observed = check_vector3(acceleration, "acceleration") + prm.acceleration
        euler = np.cross(prm.rotation_acceleration, r)
        coriolis = 2.0 * np.cross(w, r_dot)
        centripetal = np.cross(w, np.cross(w, r))
        a_f1 = prm.scale * (prm.rotation @ (observed + euler + coriolis + centripetal))
        return p_f1, v_f1, a_f1

    def transform_orientation(self, orientation):
        check_quaternion_norm(orientation)
        q = quaternion_multiply(self._rotation_quaternion, np.asarray(orientation, dtype=np.float64))
        return quaternion_canonical(quaternion_normalize(q))

    def transform_orientation_rate(self, orientation_rate):
        prm = self.parameters
        rate = check_vector3(orientation_rate, "orientation_rate")
        return prm.rotation @ (rate + prm.rotation_rate)


class KinematicTransformFactory(TransformFactory):
    """
    Factory whose transforms are fully described by KinematicParameters.

    Subclasses implement calculate_parameters(epoch) and get_cost(epoch).
    """

    @abstractmethod
    def calculate_parameters(self, epoch) -> KinematicParameters:
        ...

    def get_transform(self, epoch) -> KinematicTransform:
        return KinematicTransform(self, epoch, self.calculate_parameters(epoch))

    def inverse(self) -> 'KinematicInverseFactory':
        return KinematicInverseFactory(self)


class KinematicInverseFactory(KinematicTransformFactory):
    """
    Reverse of a kinematic factory, using the closed-form inverted parameters.

    The inversion itself is charged on top of the forward cost.
    """

    def __init__(self, forward: KinematicTransformFactory,
                 cost_overhead: float = C.INVERSE_COST_OVERHEAD):
        super().__init__(forward.target, forward.source)
        self.forward = forward
        self.cost_overhead = check_cost(cost_overhead, self)

    def get_cost(self, epoch) -> float:
        return self.forward.get_cost(epoch) + self.cost_overhead

    def calculate_parameters(self, epoch) -> KinematicParameters:
        return self.forward.calculate_parameters(epoch).inverted()

    def inverse(self) -> KinematicTransformFactory:
        return self.forward


class StaticTransformFactory(KinematicTransformFactory):
    """Constant rotation/translation/scale between two frames."""

    def __init__(self, source, target, rotation=None, translation=None,
                 scale: float = 1.0, cost: float = C.STATIC_TRANSFORM_COST):
        super().__init__(source, target)
        self.parameters = KinematicParameters.create(
            rotation=rotation, translation=translation, scale=scale)
        self.cost = check_cost(cost, self)

    def get_cost(self, epoch) -> float:
        return self.cost

    def calculate_parameters(self, epoch) -> KinematicParameters:
        return self.parameters


class RotatingFrameFactory(KinematicTransformFactory):
    """
    Target frame spinning about `axis` at a uniform `rate` relative to the source.

    The target axes are the source axes turned by
    angle(epoch) = angle_at_reference + rate * (epoch - reference_epoch).
    """

    def __init__(self, source, target, rate: float, axis=(0.0, 0.0, 1.0),
                 reference_epoch: Epoch = None, angle_at_reference: float = 0.0,
                 cost: float = C.ROTATING_FRAME_COST):
        super().__init__(source, target)
        axis = check_vector3(axis, "axis")
        norm = np.linalg.norm(axis)
        if norm < C.ZERO_TOLERANCE:
            raise ValueError("Rotation axis must be non-zero")
        self.axis = axis / norm
        self.rate = float(rate)
        self.reference_epoch = Epoch.j2000() if reference_epoch is None else reference_epoch
        self.angle_at_reference = float(angle_at_reference)
        self.cost = check_cost(cost, self)

    def get_cost(self, epoch) -> float:
        return self.cost

    def rotation_angle(self, epoch: Epoch) -> float:
        """Angle (rad) of the target axes relative to the source axes."""
        return self.angle_at_reference + self.rate * epoch.relative_to(self.reference_epoch)

    def calculate_parameters(self, epoch) -> KinematicParameters:
        angle = self.rotation_angle(epoch)
        return KinematicParameters.create(
            rotation=axis_angle_to_rotation_matrix(self.axis, angle).T,
            rotation_rate=-self.rate * self.axis,
        )


class EarthRotationFactory(RotatingFrameFactory):
    """
    Celestial -> terrestrial rotation by the Earth rotation angle (ERA).

    Precession, nutation and polar motion are not modelled; the epoch is
    used as UT1.
    """

    def __init__(self, source, target, cost: float = C.ROTATING_FRAME_COST):
        super().__init__(source, target, rate=C.OMEGA_EARTH, cost=cost)

    def rotation_angle(self, epoch: Epoch) -> float:
        return earth_rotation_angle(epoch)


def earth_rotation_angle(epoch: Epoch) -> float:
    """Earth rotation angle (rad) in [0, 2π), IERS Conventions eq. 5.15."""
    turns = C.ERA_0 + C.ERA_RATE * (epoch.jd - C.JD_J2000)
    return 2.0 * np.pi * (turns % 1.0)


class HelmertTransformFactory(KinematicTransformFactory):
    """
    14-parameter Helmert transformation, e.g. between ITRF realizations.

        X_target = T(t) + (1 + s(t)) Rot(R(t)) X_source
        T(t) = T0 + dT (t - t0),  s(t) = s0 + ds (t - t0),  R(t) = R0 + dR (t - t0)

    All parameters are in SI units (m, -, rad and per second); use
    from_iers_units() for the published mm / ppb / mas per year values.
    Epochs outside [valid_from, valid_until] raise InvalidEpochError.
    """

    def __init__(self, source, target, reference_epoch: Epoch,
                 translation, scale: float, rotation,
                 translation_rate, scale_rate: float, rotation_rate,
                 valid_from: Epoch = None, valid_until: Epoch = None,
                 cost: float = C.HELMERT_COST):
        super().__init__(source, target)
        self.reference_epoch = reference_epoch
        self.T0 = check_vector3(translation, "translation")
        self.s0 = float(scale)
        self.R0 = check_vector3(rotation, "rotation")
        self.dT = check_vector3(translation_rate, "translation_rate")
        self.ds = float(scale_rate)
        self.dR = check_vector3(rotation_rate, "rotation_rate")
        if valid_from is not None and valid_until is not None and valid_until < valid_from:
            raise ValueError(f"Empty validity window: {valid_from} .. {valid_until}")
        self.valid_from = valid_from
        self.valid_until = valid_until
        self.cost = check_cost(cost, self)

    @classmethod
    def from_iers_units(cls, source, target, reference_epoch: Epoch,
                        Tx, Ty, Tz, D, Rx, Ry, Rz,
                        dTx, dTy, dTz, dD, dRx, dRy, dRz,
                        **kwargs) -> 'HelmertTransformFactory':
        """Build from IERS table units: mm, ppb, mas and their yearly rates."""
        per_year = 1.0 / C.SECONDS_PER_JULIAN_YEAR
        return cls(
            source, target, reference_epoch,
            translation=np.array([Tx, Ty, Tz]) * C.MM_TO_M,
            scale=D * C.PPB,
            rotation=np.array([Rx, Ry, Rz]) * C.MAS_TO_RAD,
            translation_rate=np.array([dTx, dTy, dTz]) * C.MM_TO_M * per_year,
            scale_rate=dD * C.PPB * per_year,
            rotation_rate=np.array([dRx, dRy, dRz]) * C.MAS_TO_RAD * per_year,
            **kwargs,
        )

    def get_cost(self, epoch) -> float:
        return self.cost

    def check_epoch(self, epoch: Epoch) -> None:
        if self.valid_from is not None and epoch < self.valid_from:
            raise InvalidEpochError(
                f"{self} is not defined before {self.valid_from}, got {epoch}"
            )
        if self.valid_until is not None and epoch > self.valid_until:
            raise InvalidEpochError(
                f"{self} is not defined after {self.valid_until}, got {epoch}"
            )

    def calculate_parameters(self, epoch) -> KinematicParameters:
        self.check_epoch(epoch)
        dt = epoch.relative_to(self.reference_epoch)
        T = self.T0 + self.dT * dt
        s = self.s0 + self.ds * dt
        rvec = self.R0 + self.dR * dt

        k = 1.0 + s
        rot = rotation_vector_to_matrix(rvec)
        # X_target = T + k Rot X  ==  k Rot (X + Rotᵀ T / k)
        return KinematicParameters.create(
            rotation=rot,
            translation=rot.T @ T / k,
            velocity=rot.T @ self.dT / k,
            rotation_rate=rot.T @ self.dR,
            scale=k,
        )
