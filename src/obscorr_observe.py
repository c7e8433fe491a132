"""
Topocentric Observables Module

Observed airmass, altitude, azimuth, hour angle, parallactic angle and
angle of refraction of a target for a ground-based observatory.
"""

import logging
import math
from typing import Optional

from obscorr_models import (
    CelestialTarget, GeodeticPosition, ObservableResult, ObservingConditions
)
from obscorr_primitives import AstronomyPrimitives, default_primitives
from obscorr_units import (
    arcsec_to_rad, deg_to_rad, hours_to_rad, rad_to_deg, rad_to_hours
)

logger = logging.getLogger(__name__)


def amass(utc: float, site: GeodeticPosition, target: CelestialTarget,
          conditions: Optional[ObservingConditions] = None,
          primitives: Optional[AstronomyPrimitives] = None) -> ObservableResult:
    """
    Compute observational parameters of a target.

    Args:
        utc: UTC as an MJD
        site: Observatory position
        target: Catalogue position and space motion of the target
        conditions: Wavelength of observation; the rest of the
            environment is fixed (285 K, 1013.25 mbar, 20% humidity)
        primitives: Astronomy primitives, ERFA if omitted

    Returns:
        ObservableResult of (airmass, altitude, azimuth, hour_angle,
        parallactic_angle, refraction). Altitude, azimuth (N=0, E=90),
        parallactic angle and refraction are in degrees, the hour angle
        in hours.

    Raises:
        InputRangeError: Site, target or wavelength outside the valid domain
        PrimitiveFailure: A primitive rejected its arguments
    """
    conditions = conditions or ObservingConditions()
    site.validate("amass")
    target.validate("amass")
    conditions.validate("amass")
    prim = primitives or default_primitives()

    latr = deg_to_rad(site.latitude)
    longr = deg_to_rad(site.longitude)
    rar = hours_to_rad(target.ra)
    decr = deg_to_rad(target.dec)
    pmrar = arcsec_to_rad(target.pm_ra)
    pmdecr = arcsec_to_rad(target.pm_dec)

    # correct for space motion
    nepoch = prim.julian_epoch(utc)
    rar, decr = prim.space_motion(rar, decr, pmrar, pmdecr, target.parallax,
                                  target.rv, target.epoch, nepoch)

    azob, zdob, haob, decob, raob = prim.observed_place(
        rar, decr, utc, conditions.dut1, longr, latr, site.height,
        conditions.polar_x, conditions.polar_y, conditions.temperature,
        conditions.pressure, conditions.humidity, conditions.wavelength,
        conditions.lapse_rate)
    logger.debug(f"observed: az = {azob}, zd = {zdob}, ha = {haob}, "
                 f"dec = {decob}, ra = {raob} (radians)")

    # refraction
    refa, refb = prim.refraction_coefficients(conditions.temperature,
                                              conditions.pressure,
                                              conditions.humidity,
                                              conditions.wavelength)
    tanz = math.tan(zdob)
    delz = rad_to_deg(tanz * (refa + refb * tanz * tanz))

    altob = 90.0 - rad_to_deg(zdob)
    airmass = prim.airmass(zdob)

    # parallactic angle, normalised into [0, 360)
    paob = rad_to_deg(prim.parallactic_angle(haob, decr, latr))
    if paob < 0.0:
        paob += 360.0
    if paob >= 360.0:
        paob -= 360.0

    return ObservableResult(airmass, altob, rad_to_deg(azob), rad_to_hours(haob),
                            paob, delz)
