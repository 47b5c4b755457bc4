"""
Reference Frame Graph Package

Converts kinematic state (position, velocity, acceleration, orientation)
between reference frames at a given epoch. Frames are vertices of a graph
whose edges are epoch-parameterized transform factories; a query picks the
cheapest chain of edges and composes it into a single transform.

Modules:
    - constants: Tolerances, default costs, Earth rotation, IERS tables
    - config: GraphConfig dataclass
    - validation: Error types and contract checks
    - rotations: Quaternion and rotation matrix operations
    - epoch: Epoch time value
    - frames: Frame identities (ICRF, GCRF, ITRF, NamedFrame)
    - state: FrameState composite quantity
    - transform: Transform, CompositeTransform, IdentityTransform
    - factory: TransformFactory, CompositeFactory, IdentityFactory
    - kinematic: Rotating/translating/Helmert transforms
    - graph: FrameGraph shortest-path queries
    - registration: Self-registering frames and ITRF realizations
"""

from .config import GraphConfig, create_default_config, create_test_config
from .epoch import Epoch
from .factory import CompositeFactory, IdentityFactory, TransformFactory
from .frames import GCRF, ICRF, ITRF, Frame, NamedFrame, exact_frame, is_itrf
from .graph import FrameGraph
from .kinematic import (
    EarthRotationFactory,
    HelmertTransformFactory,
    KinematicParameters,
    KinematicTransform,
    KinematicTransformFactory,
    RotatingFrameFactory,
    StaticTransformFactory,
)
from .registration import (
    EarthFixedFrame,
    OffsetFrame,
    SelfRegisteringFrame,
    attach_frame,
    register_itrf_realizations,
)
from .state import FrameState
from .transform import CompositeTransform, IdentityTransform, Transform
from .validation import (
    FrameGraphError,
    FrameMismatchError,
    GraphFrozenError,
    InconsistentRegistrationError,
    InvalidCostError,
    InvalidEpochError,
    NoPathError,
)

__version__ = "1.0.0"

__all__ = [
    'FrameGraph',
    'GraphConfig',
    'create_default_config',
    'create_test_config',
    'Epoch',
    'Frame',
    'ICRF',
    'GCRF',
    'ITRF',
    'NamedFrame',
    'exact_frame',
    'is_itrf',
    'FrameState',
    'Transform',
    'CompositeTransform',
    'IdentityTransform',
    'TransformFactory',
    'CompositeFactory',
    'IdentityFactory',
    'KinematicParameters',
    'KinematicTransform',
    'KinematicTransformFactory',
    'StaticTransformFactory',
    'RotatingFrameFactory',
    'EarthRotationFactory',
    'HelmertTransformFactory',
    'SelfRegisteringFrame',
    'EarthFixedFrame',
    'OffsetFrame',
    'attach_frame',
    'register_itrf_realizations',
    'FrameGraphError',
    'NoPathError',
    'InvalidEpochError',
    'InconsistentRegistrationError',
    'GraphFrozenError',
    'FrameMismatchError',
    'InvalidCostError',
]
