"""
Reference Frame Graph - Epoch

A minimal time value: an ordered, hashable Julian date on a single (TT)
time scale. Time-scale conversions are out of scope; factories only need
ordering and elapsed seconds.
"""

from dataclasses import dataclass

from . import constants as C


def julian_date(year: int, month: int, day: int,
                hour: float = 0.0, minute: float = 0.0,
                second: float = 0.0) -> float:
    """Compute Julian Date from a Gregorian calendar date."""
    if month <= 2:
        year -= 1
        month += 12
    A = int(year / 100)
    B = 2 - A + int(A / 4)
    JD = (int(365.25 * (year + 4716))
          + int(30.6001 * (month + 1))
          + day + B - 1524.5)
    JD += (hour + minute / 60.0 + second / 3600.0) / 24.0
    return JD


@dataclass(frozen=True, order=True)
class Epoch:
    """
    Point in time, stored as a Julian date.

    Attributes:
        jd: Julian date (TT)
    """

    jd: float

    def __post_init__(self):
        object.__setattr__(self, "jd", float(self.jd))

    @classmethod
    def from_calendar(cls, year: int, month: int = 1, day: int = 1,
                      hour: float = 12.0, minute: float = 0.0,
                      second: float = 0.0) -> 'Epoch':
        """Epoch from a calendar date (defaults to noon of 1 January)."""
        return cls(julian_date(year, month, day, hour, minute, second))

    @classmethod
    def from_julian_year(cls, year: float) -> 'Epoch':
        """Epoch from a Julian epoch year, e.g. 2000.0 for J2000."""
        return cls(C.JD_J2000 + (year - 2000.0) * C.DAYS_PER_JULIAN_YEAR)

    @classmethod
    def j2000(cls) -> 'Epoch':
        return cls(C.JD_J2000)

    def relative_to(self, other: 'Epoch') -> float:
        """Seconds elapsed from `other` to this epoch."""
        return (self.jd - other.jd) * C.SECONDS_PER_DAY

    def add_seconds(self, seconds: float) -> 'Epoch':
        return Epoch(self.jd + seconds / C.SECONDS_PER_DAY)

    def __str__(self) -> str:
        return f"JD {self.jd:.6f} TT"
