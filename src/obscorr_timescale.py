"""
Time-Scale Conversion Module

Converts a UTC MJD into TT and TDB, corrects TDB and UTC for the light
travel time between the observatory and the helio- and barycentres in the
direction of a target, and computes the apparent radial velocity of the
target owing to the observatory's motion.

The observatory's position and velocity are built from the Earth's
ephemeris plus the diurnal term of the site, rotated from the equator and
equinox of date into the BCRS, in metres and metres/second.
"""

import logging
import math
from typing import Optional

import numpy as np

from obscorr_models import CelestialTarget, GeodeticPosition, TimeConversionResult
from obscorr_primitives import AstronomyPrimitives, default_primitives
from obscorr_units import AU, C, DAY, arcsec_to_rad, deg_to_rad, hours_to_rad
from obscorr_vec3 import Vector3, dot

logger = logging.getLogger(__name__)


def utc2tdb(utc: float, site: GeodeticPosition, target: CelestialTarget,
            primitives: Optional[AstronomyPrimitives] = None) -> TimeConversionResult:
    """
    Compute TT, TDB and light-travel corrected times for a target.

    Args:
        utc: UTC as an MJD
        site: Observatory position
        target: Catalogue position and space motion of the target
        primitives: Astronomy primitives, ERFA if omitted

    Returns:
        TimeConversionResult of (tt, tdb, btdb, hutc, htdb, vhel, vbar);
        times are MJD, velocities km/s (positive receding)

    Raises:
        InputRangeError: Site or target outside the valid domain. Raised
            before any primitive is called.
        PrimitiveFailure: A primitive rejected its arguments
    """
    site.validate("utc2tdb")
    target.validate("utc2tdb")
    prim = primitives or default_primitives()

    # convert angles to radians
    latr = deg_to_rad(site.latitude)
    longr = deg_to_rad(site.longitude)
    rar = hours_to_rad(target.ra)
    decr = deg_to_rad(target.dec)
    pmrar = arcsec_to_rad(target.pm_ra)
    pmdecr = arcsec_to_rad(target.pm_dec)

    # distances from spin axis and equator, AU -> km
    u, v = prim.geocentric_distances(latr, site.height)
    u *= AU / 1000.0
    v *= AU / 1000.0

    tt = utc + prim.tt_minus_utc(utc) / DAY
    tdb = tt + prim.tdb_minus_tt(tt, utc - math.floor(utc), -longr, u, v) / DAY
    logger.debug(f"utc = {utc}, tt = {tt}, tdb = {tdb}")

    # Earth relative to the centre of the Sun and the barycentre
    ph, vh, pb, vb = prim.earth_pv(tdb)
    hpos, hvel = Vector3.from_array(ph), Vector3.from_array(vh)
    bpos, bvel = Vector3.from_array(pb), Vector3.from_array(vb)

    # Centre of Earth to observatory, true equator and equinox of date
    last = prim.gmst(tdb) + longr + prim.equation_of_equinoxes(tdb)
    pos, vel = prim.observer_pv(latr, site.height, last)

    # Rotate position and velocity separately into the ephemeris frame
    rnpb = np.asarray(prim.precession_nutation_matrix(tdb))
    padd = Vector3.from_array(np.dot(rnpb.T, np.asarray(pos, dtype=float)))
    vadd = Vector3.from_array(np.dot(rnpb.T, np.asarray(vel, dtype=float)))
    vadd *= DAY  # AU/s -> AU/day

    # heliocentric, metres and metres/second
    hpos += padd
    hvel += vadd
    hpos *= AU
    hvel *= AU / DAY

    # barycentric
    bpos += padd
    bvel += vadd
    bpos *= AU
    bvel *= AU / DAY

    # target position corrected for space motion to the epoch of observation
    nepoch = prim.julian_epoch(utc)
    rar, decr = prim.space_motion(rar, decr, pmrar, pmdecr, target.parallax,
                                  target.rv, target.epoch, nepoch)
    targ = Vector3.from_spherical(rar, decr)

    hcorr = dot(targ, hpos) / C / DAY
    bcorr = dot(targ, bpos) / C / DAY
    logger.debug(f"light travel corrections: helio = {hcorr * DAY:.6f} s, "
                 f"bary = {bcorr * DAY:.6f} s")

    btdb = tdb + bcorr
    htdb = tdb + hcorr
    hutc = utc + hcorr

    vhel = -dot(targ, hvel) / 1000.0
    vbar = -dot(targ, bvel) / 1000.0

    return TimeConversionResult(tt, tdb, btdb, hutc, htdb, vhel, vbar)
