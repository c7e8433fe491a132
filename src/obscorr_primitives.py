"""
Astronomy Primitives Module

The core orchestration in obscorr_timescale and obscorr_observe never calls
an astronomy library directly. It goes through an AstronomyPrimitives
object whose methods follow the mathematical contracts of the SLALIB
routines named in each docstring (units, frames, sign conventions).

ErfaPrimitives binds those contracts to ERFA (the SOFA derived library
that astropy is built on). Any other source, e.g. a different ephemeris,
can be substituted by passing another object with the same methods.
"""

import logging
import math
import warnings
from typing import Protocol, Sequence, Tuple

import erfa
import numpy as np

from obscorr_models import PrimitiveFailure
from obscorr_units import AU, MJD_ZERO

logger = logging.getLogger(__name__)


# IAU 1976 reference ellipsoid, as used by slaGeoc
IAU1976_A = 6378140.0  # equatorial radius, metres
IAU1976_F = 1.0 / 298.257  # flattening

# slaCldj rejects years before this
MIN_CALENDAR_YEAR = -4699

# Before 1961 January 1 slaDat uses the first UTC drift segment
UTC_DRIFT_END_MJD = 37300.0
UTC_DRIFT_OFFSET = 1.4178180  # seconds
UTC_DRIFT_RATE = 0.001296  # seconds/day

# Hardie (1962) airmass is only evaluated up to this zenith distance
AIRMASS_MAX_ZD = 1.52  # radians

Vec = Sequence[float]


class AstronomyPrimitives(Protocol):
    """Capability interface used by the computation core."""

    def tt_minus_utc(self, utc: float) -> float:
        """slaDtt: TT-UTC in seconds for a UTC MJD."""

    def calendar_to_mjd(self, year: int, month: int, day: int) -> Tuple[float, int]:
        """slaCldj: (mjd, status); status 0 ok, 1 bad year, 2 bad month, 3 bad day."""

    def mjd_to_calendar(self, mjd: float) -> Tuple[int, int, int, float]:
        """slaDjcl: (year, month, day, fraction of day)."""

    def geocentric_distances(self, latitude: float, height: float) -> Tuple[float, float]:
        """slaGeoc: distance from spin axis and from equator, both AU."""

    def tdb_minus_tt(self, tdb: float, ut: float, west_longitude: float,
                     u: float, v: float) -> float:
        """slaRcc: TDB-TT in seconds; ut is the UT fraction of day, u and v in km."""

    def earth_pv(self, tdb: float) -> Tuple[Vec, Vec, Vec, Vec]:
        """slaEpv: heliocentric pos, vel and barycentric pos, vel of Earth (AU, AU/day)."""

    def gmst(self, ut1: float) -> float:
        """slaGmst: Greenwich mean sidereal time, radians."""

    def equation_of_equinoxes(self, tdb: float) -> float:
        """slaEqeqx: equation of the equinoxes, radians."""

    def observer_pv(self, latitude: float, height: float,
                    sidereal_time: float) -> Tuple[Vec, Vec]:
        """slaPvobs: observer position and velocity (AU, AU/s) of date."""

    def precession_nutation_matrix(self, tdb: float) -> np.ndarray:
        """slaPneqx: 3x3 matrix rotating BCRS/GCRS to true equator and equinox of date."""

    def julian_epoch(self, mjd: float) -> float:
        """slaEpj: Julian epoch for an MJD."""

    def space_motion(self, ra: float, dec: float, pm_ra: float, pm_dec: float,
                     parallax: float, rv: float, epoch0: float,
                     epoch1: float) -> Tuple[float, float]:
        """slaPm: apply proper motion (rad/yr), parallax (arcsec), rv (km/s) between epochs."""

    def observed_place(self, ra: float, dec: float, utc: float, dut1: float,
                       longitude: float, latitude: float, height: float,
                       polar_x: float, polar_y: float, temperature: float,
                       pressure: float, humidity: float, wavelength: float,
                       lapse_rate: float) -> Tuple[float, float, float, float, float]:
        """slaI2o: observed (azimuth, zenith distance, hour angle, dec, ra), radians."""

    def refraction_coefficients(self, temperature: float, pressure: float,
                                humidity: float, wavelength: float) -> Tuple[float, float]:
        """slaRefcoq: (refa, refb) of dZ = A tan Z + B tan^3 Z, radians."""

    def airmass(self, zenith_distance: float) -> float:
        """slaAirmas: airmass for an observed zenith distance in radians."""

    def parallactic_angle(self, hour_angle: float, dec: float, latitude: float) -> float:
        """slaPa: parallactic angle, radians."""


def _erfa_call(routine: str, func, *args):
    """
    Call an ERFA function, re-raising its errors as PrimitiveFailure.

    ERFA warnings (dubious year, distance overridden) are advisory and are
    logged at debug level.
    """
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter('always', erfa.ErfaWarning)
        try:
            result = func(*args)
        except erfa.ErfaError as err:
            raise PrimitiveFailure(routine, str(err)) from err
    for warning in caught:
        if issubclass(warning.category, erfa.ErfaWarning):
            logger.debug(f"{routine}: {warning.message}")
        else:
            warnings.warn_explicit(warning.message, warning.category,
                                   warning.filename, warning.lineno)
    return result


class ErfaPrimitives:
    """
    AstronomyPrimitives implemented with ERFA.

    The object holds no state of its own. Capturing ERFA warnings goes
    through the process-wide warnings filters, which are not thread-safe.
    Dates are passed to ERFA as the two-part JD (2400000.5, mjd).
    """

    def tt_minus_utc(self, utc: float) -> float:
        if utc < UTC_DRIFT_END_MJD:
            # ERFA gives 0 before 1960; extrapolate the first segment as slaDat does
            tai_utc = UTC_DRIFT_OFFSET + (utc - UTC_DRIFT_END_MJD) * UTC_DRIFT_RATE
        else:
            iy, im, iday, fd = _erfa_call("dtt", erfa.jd2cal, MJD_ZERO, utc)
            tai_utc = _erfa_call("dtt", erfa.dat, iy, im, iday, fd)
        # TT = TAI + 32.184s
        return 32.184 + float(tai_utc)

    def calendar_to_mjd(self, year: int, month: int, day: int) -> Tuple[float, int]:
        if year < MIN_CALENDAR_YEAR:
            return 0.0, 1
        # The raw ufunc hands back ERFA's status (-1, -2, -3) instead of raising
        _, mjd, status = erfa.ufunc.cal2jd(year, month, day)
        return float(mjd), -int(status)

    def mjd_to_calendar(self, mjd: float) -> Tuple[int, int, int, float]:
        iy, im, iday, fd = _erfa_call("djcl", erfa.jd2cal, MJD_ZERO, mjd)
        return int(iy), int(im), int(iday), float(fd)

    def geocentric_distances(self, latitude: float, height: float) -> Tuple[float, float]:
        # At zero longitude x is the distance from the spin axis and z from the equator
        xyz = _erfa_call("geoc", erfa.gd2gce, IAU1976_A, IAU1976_F, 0.0, latitude, height)
        return float(xyz[0]) / AU, float(xyz[2]) / AU

    def tdb_minus_tt(self, tdb: float, ut: float, west_longitude: float,
                     u: float, v: float) -> float:
        return float(erfa.dtdb(MJD_ZERO, tdb, ut, -west_longitude, u, v))

    def earth_pv(self, tdb: float):
        pvh, pvb = _erfa_call("epv", erfa.epv00, MJD_ZERO, tdb)
        return pvh['p'], pvh['v'], pvb['p'], pvb['v']

    def gmst(self, ut1: float) -> float:
        return float(erfa.gmst82(MJD_ZERO, ut1))

    def equation_of_equinoxes(self, tdb: float) -> float:
        return float(erfa.eqeq94(MJD_ZERO, tdb))

    def observer_pv(self, latitude: float, height: float, sidereal_time: float):
        # Zero longitude with theta = local sidereal time gives the pv of date
        pv = _erfa_call("pvobs", erfa.pvtob, 0.0, latitude, height, 0.0, 0.0, 0.0,
                        sidereal_time)
        return pv['p'] / AU, pv['v'] / AU

    def precession_nutation_matrix(self, tdb: float) -> np.ndarray:
        return erfa.pnm06a(MJD_ZERO, tdb)

    def julian_epoch(self, mjd: float) -> float:
        return float(erfa.epj(MJD_ZERO, mjd))

    def space_motion(self, ra: float, dec: float, pm_ra: float, pm_dec: float,
                     parallax: float, rv: float, epoch0: float,
                     epoch1: float) -> Tuple[float, float]:
        ep0a, ep0b = erfa.epj2jd(epoch0)
        ep1a, ep1b = erfa.epj2jd(epoch1)
        ra1, dec1, _, _, _, _ = _erfa_call("pm", erfa.pmsafe, ra, dec, pm_ra, pm_dec,
                                           parallax, rv, ep0a, ep0b, ep1a, ep1b)
        return float(ra1), float(dec1)

    def observed_place(self, ra: float, dec: float, utc: float, dut1: float,
                       longitude: float, latitude: float, height: float,
                       polar_x: float, polar_y: float, temperature: float,
                       pressure: float, humidity: float, wavelength: float,
                       lapse_rate: float) -> Tuple[float, float, float, float, float]:
        # Space motion has already been applied, hence zero pm/parallax/rv.
        # ERFA fixes the lapse rate at 0.0065 K/m, so lapse_rate is not passed on.
        if lapse_rate != 0.0065:
            logger.debug(f"ERFA ignores lapse rate {lapse_rate} K/m")
        aob, zob, hob, dob, rob, _ = _erfa_call(
            "i2o", erfa.atco13, ra, dec, 0.0, 0.0, 0.0, 0.0,
            MJD_ZERO, utc, dut1, longitude, latitude, height,
            polar_x, polar_y, pressure, temperature - 273.15, humidity, wavelength)
        return float(aob), float(zob), float(hob), float(dob), float(rob)

    def refraction_coefficients(self, temperature: float, pressure: float,
                                humidity: float, wavelength: float) -> Tuple[float, float]:
        refa, refb = erfa.refco(pressure, temperature - 273.15, humidity, wavelength)
        return float(refa), float(refb)

    def airmass(self, zenith_distance: float) -> float:
        # Hardie (1962) model, as slaAirmas
        seczm1 = 1.0 / math.cos(min(AIRMASS_MAX_ZD, abs(zenith_distance))) - 1.0
        return 1.0 + seczm1 * (0.9981833 - seczm1 * (0.002875 + 0.0008083 * seczm1))

    def parallactic_angle(self, hour_angle: float, dec: float, latitude: float) -> float:
        return float(erfa.hd2pa(hour_angle, dec, latitude))


_DEFAULT_PRIMITIVES = ErfaPrimitives()


def default_primitives() -> ErfaPrimitives:
    """Shared ERFA-backed primitives used when callers do not supply their own."""
    return _DEFAULT_PRIMITIVES
