"""
Data Model Module

This module defines the inputs, outputs, configuration and errors shared by
the time-scale converter and the topocentric observable computer:
- Config: defaults, fixed observing environment and validation bounds
- GeodeticPosition, CelestialTarget, ObservingConditions: validated inputs
- TimeConversionResult, ObservableResult: named fixed-order outputs
- ObsCorrError hierarchy
"""

from dataclasses import dataclass, field
from typing import NamedTuple, Optional


# ============================================================================
# Constants and Configuration
# ============================================================================

class Config:
    """Configuration constants for obscorr"""

    # Target kinematics defaults
    PM_RA = 0.0  # arcsec/year (coordinate angle, not seconds of RA)
    PM_DEC = 0.0  # arcsec/year
    EPOCH = 2000.0  # Julian year
    PARALLAX = 0.0  # arcsec
    RV = 0.0  # km/s

    # Observing environment
    WAVELENGTH = 0.55  # microns
    TEMPERATURE = 285.0  # K
    PRESSURE = 1013.25  # mbar
    HUMIDITY = 0.2  # relative, 0-1
    LAPSE_RATE = 0.0065  # K/metre

    # Small corrections assumed zero for ease of use
    DUT1 = 0.0  # UT1-UTC, seconds
    POLAR_X = 0.0  # radians
    POLAR_Y = 0.0  # radians

    # Validation bounds (inclusive)
    MIN_LONGITUDE = -360.0
    MAX_LONGITUDE = 360.0
    MIN_LATITUDE = -90.0
    MAX_LATITUDE = 90.0
    MIN_RA = 0.0
    MAX_RA = 24.0
    MIN_DEC = -90.0
    MAX_DEC = 90.0

    # Wavelength bounds (exclusive)
    MIN_WAVELENGTH = 0.0
    MAX_WAVELENGTH = 1000000.0

    LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


# ============================================================================
# Errors
# ============================================================================

class ObsCorrError(Exception):
    """Base class for all obscorr errors."""


class InputRangeError(ObsCorrError, ValueError):
    """An input lies outside its documented domain."""

    def __init__(self, field: str, value: float, lower: float, upper: float,
                 op: Optional[str] = None, exclusive: bool = False):
        self.field = field
        self.value = value
        self.lower = lower
        self.upper = upper
        self.op = op
        bounds = "exclusive" if exclusive else "inclusive"
        message = f"{field} = {value} out of range {lower:g} to {upper:g} ({bounds})"
        if op:
            message = f"{op}: {message}"
        super().__init__(message)


class CalendarError(ObsCorrError, ValueError):
    """Invalid Gregorian calendar date."""

    kind = "date"

    def __init__(self, value: int, op: Optional[str] = None):
        self.value = value
        message = f"bad {self.kind} = {value}"
        if op:
            message = f"{op}: {message}"
        super().__init__(message)


class BadYearError(CalendarError):
    kind = "year"


class BadMonthError(CalendarError):
    kind = "month"


class BadDayError(CalendarError):
    kind = "day"


class PrimitiveFailure(ObsCorrError):
    """An astronomy primitive could not produce a result for its arguments."""

    def __init__(self, routine: str, message: str):
        self.routine = routine
        super().__init__(f"{routine}: {message}")


def _check_range(op: str, name: str, value: float, lower: float, upper: float):
    if not lower <= value <= upper:
        raise InputRangeError(name, value, lower, upper, op=op)


# ============================================================================
# Inputs
# ============================================================================

@dataclass(frozen=True)
class GeodeticPosition:
    """Observatory position on the reference ellipsoid."""

    longitude: float  # degrees, east positive
    latitude: float  # degrees
    height: float = 0.0  # metres above the ellipsoid

    def validate(self, op: str = "obscorr"):
        _check_range(op, "longitude", self.longitude,
                     Config.MIN_LONGITUDE, Config.MAX_LONGITUDE)
        _check_range(op, "latitude", self.latitude,
                     Config.MIN_LATITUDE, Config.MAX_LATITUDE)


@dataclass(frozen=True)
class CelestialTarget:
    """
    Catalogue position of a target with optional space motion.

    Proper motions are in arcsec/year of coordinate angle for both
    components; the RA rate is *not* in seconds of time.
    """

    ra: float  # hours
    dec: float  # degrees
    pm_ra: float = Config.PM_RA  # arcsec/year
    pm_dec: float = Config.PM_DEC  # arcsec/year
    epoch: float = Config.EPOCH  # Julian year of the catalogue position
    parallax: float = Config.PARALLAX  # arcsec, 0 means infinitely distant
    rv: float = Config.RV  # km/s, positive receding

    def validate(self, op: str = "obscorr"):
        _check_range(op, "ra", self.ra, Config.MIN_RA, Config.MAX_RA)
        _check_range(op, "dec", self.dec, Config.MIN_DEC, Config.MAX_DEC)


@dataclass(frozen=True)
class ObservingConditions:
    """Wavelength of observation plus the fixed atmospheric environment."""

    wavelength: float = Config.WAVELENGTH  # microns
    temperature: float = field(default=Config.TEMPERATURE, init=False)
    pressure: float = field(default=Config.PRESSURE, init=False)
    humidity: float = field(default=Config.HUMIDITY, init=False)
    lapse_rate: float = field(default=Config.LAPSE_RATE, init=False)
    dut1: float = field(default=Config.DUT1, init=False)
    polar_x: float = field(default=Config.POLAR_X, init=False)
    polar_y: float = field(default=Config.POLAR_Y, init=False)

    def validate(self, op: str = "obscorr"):
        if not Config.MIN_WAVELENGTH < self.wavelength < Config.MAX_WAVELENGTH:
            raise InputRangeError("wavelength", self.wavelength,
                                  Config.MIN_WAVELENGTH, Config.MAX_WAVELENGTH,
                                  op=op, exclusive=True)


# ============================================================================
# Results
# ============================================================================

class TimeConversionResult(NamedTuple):
    """Output of utc2tdb. All times are MJD, velocities km/s."""

    tt: float  # terrestrial time
    tdb: float  # barycentric dynamical time
    btdb: float  # TDB corrected for light travel to the barycentre
    hutc: float  # UTC corrected for light travel to the heliocentre
    htdb: float  # TDB corrected for light travel to the heliocentre
    vhel: float  # radial velocity from Earth's motion relative to the Sun
    vbar: float  # radial velocity from Earth's motion relative to the barycentre


class ObservableResult(NamedTuple):
    """Output of amass."""

    airmass: float
    altitude: float  # degrees, observed
    azimuth: float  # degrees, N=0, E=90
    hour_angle: float  # hours, observed
    parallactic_angle: float  # degrees, [0, 360)
    refraction: float  # degrees
