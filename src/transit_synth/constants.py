"""Unit-conversion constants used to bring every length to stellar radii.

Values are the IAU nominal constants (IAU 2012 B2, IAU 2015 B3), in meters.
"""

from __future__ import annotations

import math

AU_M = 1.495978707e11  # Astronomical unit
R_SUN_M = 6.957e8  # Nominal solar radius
R_JUP_M = 7.1492e7  # Nominal equatorial Jupiter radius

AU_TO_RSUN = AU_M / R_SUN_M  # ~215.03
R_JUP_TO_RSUN = R_JUP_M / R_SUN_M  # ~0.10276

DEG_TO_RAD = math.pi / 180.0

# Radius ratio above which the small-planet approximation is only approximate
SMALL_PLANET_LIMIT = 0.1

__all__ = [
    "AU_M",
    "R_SUN_M",
    "R_JUP_M",
    "AU_TO_RSUN",
    "R_JUP_TO_RSUN",
    "DEG_TO_RAD",
    "SMALL_PLANET_LIMIT",
]
