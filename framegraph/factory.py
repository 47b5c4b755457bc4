"""
Reference Frame Graph - Transform Factories

A TransformFactory is a reusable generator of Transforms for a fixed
(source, target) frame pair. The frame graph stores factories as its edges
and weighs them with get_cost(epoch).
"""

from abc import ABC, abstractmethod
from typing import List

from . import constants as C
from .transform import CompositeTransform, IdentityTransform, Transform
from .validation import FrameMismatchError


class TransformFactory(ABC):
    """
    Base class of all transform factories.

    Contract:
        get_cost(epoch)      cheap, deterministic, side-effect free, >= 0
        get_transform(epoch) may raise InvalidEpochError
        inverse()            factory for target -> source;
                             f.inverse().inverse() behaves as f
    """

    def __init__(self, source, target):
        self._source = source
        self._target = target

    @property
    def source(self):
        return self._source

    @property
    def target(self):
        return self._target

    @abstractmethod
    def get_cost(self, epoch) -> float:
        ...

    @abstractmethod
    def get_transform(self, epoch) -> Transform:
        ...

    @abstractmethod
    def inverse(self) -> 'TransformFactory':
        ...

    def add(self, other: 'TransformFactory') -> 'CompositeFactory':
        """Chain `other` after this factory."""
        return CompositeFactory(self, other)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.source} -> {self.target})"


class CompositeFactory(TransformFactory):
    """
    Factory for `stage0` (F0 -> F1) followed by `stage1` (F1 -> F2).

    cost(epoch) = cost0(epoch) + cost1(epoch)
    inverse()   = stage1.inverse() + stage0.inverse()
    """

    def __init__(self, stage0: TransformFactory, stage1: TransformFactory):
        if stage1.source != stage0.target:
            raise FrameMismatchError(
                f"Cannot chain {stage0.source}->{stage0.target} with "
                f"{stage1.source}->{stage1.target}"
            )
        super().__init__(stage0.source, stage1.target)
        self.stage0 = stage0
        self.stage1 = stage1

    @property
    def stages(self) -> List[TransformFactory]:
        """Non-composite factories in application order."""
        stages = []
        for stage in (self.stage0, self.stage1):
            if isinstance(stage, CompositeFactory):
                stages.extend(stage.stages)
            else:
                stages.append(stage)
        return stages

    def get_cost(self, epoch) -> float:
        return self.stage0.get_cost(epoch) + self.stage1.get_cost(epoch)

    def get_transform(self, epoch) -> CompositeTransform:
        transform0 = self.stage0.get_transform(epoch)
        transform1 = self.stage1.get_transform(epoch)
        return CompositeTransform(self, epoch, transform0, transform1)

    def inverse(self) -> 'CompositeFactory':
        return self.stage1.inverse().add(self.stage0.inverse())

    def __repr__(self) -> str:
        chain = " -> ".join(str(f.source) for f in self.stages)
        return f"CompositeFactory({chain} -> {self.target})"


class IdentityFactory(TransformFactory):
    """Zero-cost, self-inverse factory from a frame to itself."""

    def __init__(self, frame):
        super().__init__(frame, frame)

    def get_cost(self, epoch) -> float:
        return C.IDENTITY_COST

    def get_transform(self, epoch) -> IdentityTransform:
        return IdentityTransform(self, epoch)

    def inverse(self) -> 'IdentityFactory':
        return self
