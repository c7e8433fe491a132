"""
Observation Time and Position Corrections

This module is the public surface of obscorr. It provides positional
argument wrappers over the core modules:
- dtt: TT-UTC offset
- cldj: Gregorian calendar date to MJD
- utc2tdb: TT, TDB, light-travel corrected times and radial velocities
- amass: airmass, altitude, azimuth, hour angle, parallactic angle, refraction

and a command line interface to the same four operations.

All times are in MJD. Longitude and latitude are in degrees, east positive;
ra and dec are in hours and degrees; proper motions are in arcsec/year (not
seconds of RA); parallax is in arcsec and the radial velocity is in km/s.
"""

import argparse
import logging
import sys
from typing import List, Optional

from obscorr_calendar import cldj as _cldj, djcl, dtt as _dtt
from obscorr_models import (
    CelestialTarget, Config, GeodeticPosition, InputRangeError, ObservableResult,
    ObservingConditions, ObsCorrError, TimeConversionResult
)
from obscorr_observe import amass as _amass
from obscorr_primitives import AstronomyPrimitives, ErfaPrimitives
from obscorr_timescale import utc2tdb as _utc2tdb

logger = logging.getLogger(__name__)

__all__ = [
    "AstronomyPrimitives",
    "CelestialTarget",
    "Config",
    "ErfaPrimitives",
    "GeodeticPosition",
    "InputRangeError",
    "ObsCorrError",
    "ObservableResult",
    "ObservingConditions",
    "TimeConversionResult",
    "amass",
    "cldj",
    "djcl",
    "dtt",
    "main",
    "utc2tdb",
]


def dtt(utc: float, primitives: Optional[AstronomyPrimitives] = None) -> float:
    """d = dtt(utc) returns TT-UTC in seconds. UTC in MJD = JD-2400000.5."""
    return _dtt(utc, primitives)


def cldj(year: int, month: int, day: int,
         primitives: Optional[AstronomyPrimitives] = None) -> float:
    """mjd = cldj(year, month, day) returns the MJD of the Gregorian calendar date."""
    return _cldj(year, month, day, primitives)


def utc2tdb(utc: float, longitude: float, latitude: float, height: float,
            ra: float, dec: float, pmra: float = Config.PM_RA,
            pmdec: float = Config.PM_DEC, epoch: float = Config.EPOCH,
            parallax: float = Config.PARALLAX, rv: float = Config.RV,
            primitives: Optional[AstronomyPrimitives] = None) -> TimeConversionResult:
    """
    (tt, tdb, btdb, hutc, htdb, vhel, vbar) = utc2tdb(utc, longitude, latitude, height, ra, dec, ...)

    tt is terrestrial time; tdb is barycentric dynamical time; btdb is tdb
    corrected for light travel time, i.e. as observed at the barycentre of
    the Solar system; hutc is utc corrected for light travel to the
    heliocentre (usual form); htdb is tdb corrected for light travel to the
    heliocentre (unusual). vhel and vbar are the apparent radial velocities
    of the target in km/s owing to Earth's motion relative to the helio-
    and barycentres.
    """
    site = GeodeticPosition(longitude, latitude, height)
    target = CelestialTarget(ra, dec, pmra, pmdec, epoch, parallax, rv)
    return _utc2tdb(utc, site, target, primitives)


def amass(utc: float, longitude: float, latitude: float, height: float,
          ra: float, dec: float, wave: float = Config.WAVELENGTH,
          pmra: float = Config.PM_RA, pmdec: float = Config.PM_DEC,
          epoch: float = Config.EPOCH, parallax: float = Config.PARALLAX,
          rv: float = Config.RV,
          primitives: Optional[AstronomyPrimitives] = None) -> ObservableResult:
    """
    (airmass, alt, az, ha, pa, delz) = amass(utc, longitude, latitude, height, ra, dec, wave=0.55, ...)

    The wavelength of observation wave is in microns. alt and az are the
    observed altitude and azimuth in degrees with azimuth measured North
    through East; ha is the observed hour angle in hours; pa is the position
    angle of a parallactic slit in degrees; delz is the angle of refraction
    in degrees.
    """
    site = GeodeticPosition(longitude, latitude, height)
    target = CelestialTarget(ra, dec, pmra, pmdec, epoch, parallax, rv)
    return _amass(utc, site, target, ObservingConditions(wave), primitives)


# ============================================================================
# Command Line Interface
# ============================================================================

def _add_target_arguments(parser: argparse.ArgumentParser):
    parser.add_argument('utc', type=float, help='UTC (MJD)')
    parser.add_argument('longitude', type=float, help='Longitude (degrees, east positive)')
    parser.add_argument('latitude', type=float, help='Latitude (degrees)')
    parser.add_argument('height', type=float, help='Height above ellipsoid (metres)')
    parser.add_argument('ra', type=float, help='Right ascension (hours)')
    parser.add_argument('dec', type=float, help='Declination (degrees)')
    parser.add_argument('--pmra', type=float, default=Config.PM_RA,
                        help='RA proper motion (arcsec/year)')
    parser.add_argument('--pmdec', type=float, default=Config.PM_DEC,
                        help='Dec proper motion (arcsec/year)')
    parser.add_argument('--epoch', type=float, default=Config.EPOCH,
                        help='Epoch of position (Julian year)')
    parser.add_argument('--parallax', type=float, default=Config.PARALLAX,
                        help='Parallax (arcsec)')
    parser.add_argument('--rv', type=float, default=Config.RV,
                        help='Radial velocity (km/s)')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='obscorr',
        description='Time-scale corrections and observational parameters')
    parser.add_argument('-v', '--verbose', action='store_true', help='Debug logging')
    commands = parser.add_subparsers(dest='command', required=True)

    p = commands.add_parser('dtt', help='TT-UTC in seconds')
    p.add_argument('utc', type=float, help='UTC (MJD)')

    p = commands.add_parser('cldj', help='MJD of a Gregorian calendar date')
    p.add_argument('year', type=int)
    p.add_argument('month', type=int)
    p.add_argument('day', type=int)

    p = commands.add_parser('utc2tdb', help='TT, TDB and light travel corrections')
    _add_target_arguments(p)

    p = commands.add_parser('amass', help='Airmass, altitude, azimuth, etc')
    _add_target_arguments(p)
    p.add_argument('--wave', type=float, default=Config.WAVELENGTH,
                   help='Wavelength (microns)')

    return parser


def _print_fields(result):
    for name, value in result._asdict().items():
        print(f"{name:18s} {value:.10f}")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format=Config.LOG_FORMAT)

    try:
        if args.command == 'dtt':
            print(f"{dtt(args.utc):.6f}")
        elif args.command == 'cldj':
            print(f"{cldj(args.year, args.month, args.day):.1f}")
        elif args.command == 'utc2tdb':
            _print_fields(utc2tdb(args.utc, args.longitude, args.latitude, args.height,
                                  args.ra, args.dec, args.pmra, args.pmdec,
                                  args.epoch, args.parallax, args.rv))
        else:
            _print_fields(amass(args.utc, args.longitude, args.latitude, args.height,
                                args.ra, args.dec, args.wave, args.pmra, args.pmdec,
                                args.epoch, args.parallax, args.rv))
    except ObsCorrError as e:
        logger.error(f"{e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
