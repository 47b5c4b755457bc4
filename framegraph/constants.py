"""
Reference Frame Graph - Constants and Model Parameters

This module defines the numerical tolerances, default path costs, Earth
rotation parameters, unit conversion factors and the published IERS
Helmert parameters used throughout the package.

VALUES FROM: IERS Conventions (2010), ITRF2008/2014/2020 transformation tables
"""

import numpy as np

# =============================================================================
# TIME
# =============================================================================

# Julian date of the J2000.0 epoch (2000-01-01 12:00 TT)
JD_J2000 = 2451545.0

SECONDS_PER_DAY = 86400.0
DAYS_PER_JULIAN_YEAR = 365.25
SECONDS_PER_JULIAN_YEAR = DAYS_PER_JULIAN_YEAR * SECONDS_PER_DAY

# =============================================================================
# EARTH ROTATION (IERS Conventions 2010, eq. 5.15)
# =============================================================================

# Nominal mean angular velocity of the Earth (rad/s)
OMEGA_EARTH = 7.292115e-5

# Earth rotation angle: ERA = 2π (ERA_0 + ERA_RATE * (JD_UT1 - 2451545.0))
ERA_0 = 0.7790572732640
ERA_RATE = 1.00273781191135448

# =============================================================================
# UNIT CONVERSIONS (IERS publication units -> SI)
# =============================================================================

MM_TO_M = 1e-3
PPB = 1e-9
MAS_TO_RAD = np.radians(1e-3 / 3600.0)  # milliarcsecond

# =============================================================================
# PATH COSTS
# Rough operation counts used as Dijkstra weights; only their relative size
# matters.
# =============================================================================

IDENTITY_COST = 0.0
STATIC_TRANSFORM_COST = 30.0
ROTATING_FRAME_COST = 40.0
HELMERT_COST = 45.0               # 4*3 vector ops (3 each) + 3 scalar + 2 vector
INVERSE_COST_OVERHEAD = 198.0     # 3 * 22 vector operations

# =============================================================================
# NUMERICAL TOLERANCES
# =============================================================================

QUATERNION_NORM_TOL = 1e-6   # Allowable deviation from unit norm
ROTATION_MATRIX_TOL = 1e-9   # Allowable |R Rᵀ - I| entry / |det R - 1|
ZERO_TOLERANCE = 1e-15       # Near-zero check for divisions/normalizations

# =============================================================================
# ITRF REALIZATIONS
# 14-parameter transformations published by the IERS, keyed by
# (from_year, to_year). Units: T [mm], D [ppb], R [mas], rates per year.
# Order: Tx, Ty, Tz, D, Rx, Ry, Rz, dTx, dTy, dTz, dD, dRx, dRy, dRz
# =============================================================================

ITRF_HELMERT_PARAMETERS = {
    (2020, 2014): {
        "reference_year": 2015.0,
        "values": (-1.4, -0.9, 1.4, -0.42, 0.0, 0.0, 0.0,
                   0.0, -0.1, 0.2, 0.0, 0.0, 0.0, 0.0),
    },
    (2014, 2008): {
        "reference_year": 2010.0,
        "values": (1.6, 1.9, 2.4, -0.02, 0.0, 0.0, 0.0,
                   0.0, 0.0, -0.1, 0.03, 0.0, 0.0, 0.0),
    },
    (2008, 2005): {
        "reference_year": 2000.0,
        "values": (-2.0, -0.9, -4.7, 0.94, 0.0, 0.0, 0.0,
                   0.3, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0),
    },
}
