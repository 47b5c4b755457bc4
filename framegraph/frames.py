"""
Reference Frame Graph - Frame Identities

Frames are pure identity values used as vertices of the frame graph. Two
frames are equal when they are of the same concrete class and carry the same
realization parameters; they hold no mutable state.

Frame Definitions
-----------------

**ICRF** - International Celestial Reference Frame (barycentric, inertial).

**GCRF** - Geocentric Celestial Reference Frame (ICRF axes, Earth origin).

**ITRF(year)** - International Terrestrial Reference Frame realization for
a given year (Earth-fixed).

**NamedFrame(name)** - any other frame, identified by name only.
"""

from dataclasses import dataclass
from typing import Callable

from .epoch import Epoch


class Frame:
    """Base class of all reference frame identities."""

    @property
    def label(self) -> str:
        return type(self).__name__

    def __str__(self) -> str:
        return self.label


@dataclass(frozen=True)
class ICRF(Frame):
    """International Celestial Reference Frame."""


@dataclass(frozen=True)
class GCRF(Frame):
    """Geocentric Celestial Reference Frame."""


@dataclass(frozen=True)
class ITRF(Frame):
    """
    International Terrestrial Reference Frame realized for `year`.

    Attributes:
        year: Realization year, e.g. 2008 for ITRF2008
    """

    year: int

    def __post_init__(self):
        if not isinstance(self.year, int) or isinstance(self.year, bool):
            raise TypeError(f"ITRF year must be an int, got {self.year!r}")

    @property
    def label(self) -> str:
        return f"ITRF{self.year}"

    @property
    def epoch(self) -> Epoch:
        """Reference epoch of the realization: 1 January `year`, 12:00 TT."""
        return Epoch.from_calendar(self.year, 1, 1, 12.0)


@dataclass(frozen=True)
class NamedFrame(Frame):
    """A frame identified only by its name."""

    name: str

    @property
    def label(self) -> str:
        return self.name


def is_itrf(year: int) -> Callable[[Frame], bool]:
    """Predicate matching the ITRF realization of `year`."""
    def predicate(frame: Frame) -> bool:
        return isinstance(frame, ITRF) and frame.year == year
    return predicate


def exact_frame(frame: Frame) -> Callable[[Frame], bool]:
    """Predicate matching frames equal to `frame`."""
    def predicate(candidate: Frame) -> bool:
        return candidate == frame
    return predicate
