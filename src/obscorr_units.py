"""
Angle and Unit Conversion Module

This module provides the scale constants and angle conversions shared by
the time-scale converter and the topocentric observable computer:
- Degrees, hours and arcseconds to and from radians
- Astronomical unit and speed of light (SI, from astropy)
- Seconds per day and the MJD zero point
"""

import math

from astropy import constants as const


# ============================================================================
# Constants
# ============================================================================

DEG_TO_RAD = math.pi / 180.0
RAD_TO_DEG = 180.0 / math.pi
HOURS_TO_RAD = math.pi / 12.0
RAD_TO_HOURS = 12.0 / math.pi
ARCSEC_TO_RAD = DEG_TO_RAD / 3600.0
TWOPI = 2.0 * math.pi

AU = float(const.au.value)  # metres
C = float(const.c.value)  # metres/second
DAY = 86400.0  # seconds
MJD_ZERO = 2400000.5  # JD of MJD 0.0


# ============================================================================
# Conversion Functions
# ============================================================================

def deg_to_rad(degrees: float) -> float:
    return degrees * DEG_TO_RAD


def rad_to_deg(radians: float) -> float:
    return radians * RAD_TO_DEG


def hours_to_rad(hours: float) -> float:
    """Convert an angle in hours (e.g. right ascension) to radians."""
    return hours * HOURS_TO_RAD


def rad_to_hours(radians: float) -> float:
    """Convert radians to hours, i.e. scale by 24/2pi."""
    return radians * RAD_TO_HOURS


def arcsec_to_rad(arcsec: float) -> float:
    """
    Convert arcseconds to radians.

    Used for proper motions, which are given in arcsec/year of coordinate
    angle for both RA and Dec (not seconds of time for RA).
    """
    return arcsec * ARCSEC_TO_RAD
