"""Tests for the Epoch time value."""

import pytest

from framegraph import constants as C
from framegraph.epoch import Epoch, julian_date


def test_julian_date_j2000():
    assert julian_date(2000, 1, 1, 12.0) == pytest.approx(C.JD_J2000)

def test_julian_date_january_february():
    """Months 1-2 are counted as months 13-14 of the previous year."""
    assert julian_date(2024, 3, 1) - julian_date(2024, 2, 28) == pytest.approx(2.0)

def test_from_calendar_defaults_to_noon():
    assert Epoch.from_calendar(2000) == Epoch.j2000()

def test_from_julian_year():
    assert Epoch.from_julian_year(2000.0) == Epoch.j2000()
    assert Epoch.from_julian_year(2001.0).jd == pytest.approx(C.JD_J2000 + 365.25)

def test_relative_to_in_seconds():
    later = Epoch(C.JD_J2000 + 1.5)
    assert later.relative_to(Epoch.j2000()) == pytest.approx(1.5 * C.SECONDS_PER_DAY)
    assert Epoch.j2000().relative_to(later) == pytest.approx(-1.5 * C.SECONDS_PER_DAY)

def test_add_seconds():
    epoch = Epoch.j2000().add_seconds(C.SECONDS_PER_DAY)
    assert epoch.jd == pytest.approx(C.JD_J2000 + 1.0)

def test_ordering():
    early = Epoch.from_calendar(2010)
    late = Epoch.from_calendar(2020)
    assert early < late
    assert max(late, early) is late

def test_hashable():
    assert {Epoch(2451545): 1}[Epoch(2451545.0)] == 1

def test_str():
    assert str(Epoch.j2000()) == "JD 2451545.000000 TT"
