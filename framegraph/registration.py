"""
Reference Frame Graph - Frame Registration

Frames enter a FrameGraph in two explicit phases: the frame value is built
first (pure, no side effects), then attached to the graph together with the
edge from its parent and the reverse edge:

    itrs = EarthFixedFrame()
    itrs.attach(graph, GCRF())

Attaching goes through FrameGraph.register, which validates everything
before mutating, so a failed attach leaves the graph untouched.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Iterable, Optional

import numpy as np

from . import constants as C
from .epoch import Epoch
from .factory import TransformFactory
from .frames import ITRF, Frame
from .graph import FrameGraph
from .kinematic import EarthRotationFactory, HelmertTransformFactory, StaticTransformFactory

logger = logging.getLogger(__name__)


def attach_frame(graph: FrameGraph, frame: Frame, parent: Optional[Frame] = None,
                 parent_to_child: Optional[TransformFactory] = None,
                 child_to_parent: Optional[TransformFactory] = None) -> Frame:
    """
    Attach `frame` to `graph` below `parent`.

    Without a parent the frame becomes a root. The child->parent edge
    defaults to parent_to_child.inverse().
    """
    if parent is None:
        return graph.add_frame(frame)
    if parent_to_child is None:
        raise ValueError(f"A parent -> {frame} factory is required when a parent is given")
    return graph.register(parent, frame, parent_to_child, child_to_parent)


class SelfRegisteringFrame(Frame, ABC):
    """
    Frame that knows how it relates to its parent.

    Subclasses implement transform_from_parent(); transform_to_parent()
    defaults to its inverse.
    """

    @abstractmethod
    def transform_from_parent(self, parent: Frame) -> TransformFactory:
        ...

    def transform_to_parent(self, parent: Frame) -> Optional[TransformFactory]:
        """Explicit child -> parent factory, or None to derive it."""
        return None

    def attach(self, graph: FrameGraph, parent: Optional[Frame] = None) -> 'SelfRegisteringFrame':
        """Register this frame (and both parent edges) in `graph`."""
        if parent is None:
            graph.add_frame(self)
            return self
        graph.register(parent, self,
                       self.transform_from_parent(parent),
                       self.transform_to_parent(parent))
        return self


@dataclass(frozen=True)
class EarthFixedFrame(SelfRegisteringFrame):
    """Terrestrial frame rotating with the Earth below a celestial parent."""

    name: str = "ITRS"

    @property
    def label(self) -> str:
        return self.name

    def transform_from_parent(self, parent: Frame) -> TransformFactory:
        return EarthRotationFactory(parent, self)


@dataclass(frozen=True)
class OffsetFrame(SelfRegisteringFrame):
    """
    Frame with a fixed rotation/translation relative to its parent.

    Identity is the name only; the offsets are model data.

    Attributes:
        name: Frame name
        rotation: Parent -> frame component rotation [3x3] (identity if None)
        translation: Added to parent positions before rotating (m) [3]
        cost: Path cost of the parent -> frame edge
    """

    name: str
    rotation: Optional[np.ndarray] = field(default=None, compare=False, repr=False)
    translation: Optional[np.ndarray] = field(default=None, compare=False, repr=False)
    cost: float = field(default=C.STATIC_TRANSFORM_COST, compare=False, repr=False)

    @property
    def label(self) -> str:
        return self.name

    def transform_from_parent(self, parent: Frame) -> TransformFactory:
        return StaticTransformFactory(parent, self, rotation=self.rotation,
                                      translation=self.translation, cost=self.cost)


def itrf_helmert_factory(from_year: int, to_year: int, **kwargs) -> HelmertTransformFactory:
    """Helmert factory ITRF(from_year) -> ITRF(to_year) from the published IERS table."""
    key = (from_year, to_year)
    if key not in C.ITRF_HELMERT_PARAMETERS:
        raise ValueError(f"No published Helmert parameters for ITRF{from_year} -> ITRF{to_year}")
    entry = C.ITRF_HELMERT_PARAMETERS[key]
    return HelmertTransformFactory.from_iers_units(
        ITRF(from_year), ITRF(to_year),
        Epoch.from_julian_year(entry["reference_year"]),
        *entry["values"],
        **kwargs,
    )


def register_itrf_realizations(graph: FrameGraph, years: Optional[Iterable[int]] = None,
                               valid_from: Epoch = None,
                               valid_until: Epoch = None) -> list:
    """
    Attach ITRF realizations linked by the published Helmert parameters.

    At least one ITRF realization must already be in `graph`; the others
    are attached outward from it along the IERS table.

    Args:
        graph: Graph to extend
        years: Realization years to attach (default: every year in the table)
        valid_from, valid_until: Validity window given to every Helmert factory

    Returns:
        The ITRF frames that were added, in registration order
    """
    table_years = {y for pair in C.ITRF_HELMERT_PARAMETERS for y in pair}
    wanted = table_years if years is None else set(years)
    unknown = wanted - table_years
    if unknown:
        raise ValueError(f"No published ITRF parameters for years {sorted(unknown)}")
    if not any(ITRF(year) in graph for year in table_years):
        raise ValueError("Register at least one ITRF realization before extending the chain")

    window = dict(valid_from=valid_from, valid_until=valid_until)
    added = []
    progress = True
    while progress:
        progress = False
        for from_year, to_year in C.ITRF_HELMERT_PARAMETERS:
            source, target = ITRF(from_year), ITRF(to_year)
            if source in graph and target not in graph and to_year in wanted:
                graph.register(source, target, itrf_helmert_factory(from_year, to_year, **window))
                added.append(target)
                progress = True
            elif target in graph and source not in graph and from_year in wanted:
                forward = itrf_helmert_factory(from_year, to_year, **window)
                graph.register(target, source, forward.inverse(), forward)
                added.append(source)
                progress = True

    logger.debug(f"Attached ITRF realizations: {', '.join(str(f) for f in added) or 'none'}")
    return added
