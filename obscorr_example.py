"""
Example Usage of obscorr

This file demonstrates how to:
1. Convert a calendar date and clock time to a UTC MJD
2. Compute TT, TDB and light-travel corrected times for a target
3. Compute airmass, altitude, azimuth and parallactic angle through a night
4. Handle out-of-range input
"""

import sys
import logging
from datetime import datetime, timedelta

from astropy.time import Time

# Add src to path if running from project root
sys.path.insert(0, 'src')

from obscorr import Config, InputRangeError, amass, cldj, djcl, dtt, utc2tdb

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format=Config.LOG_FORMAT
)
logger = logging.getLogger(__name__)


# La Silla Observatory (east positive)
LA_SILLA_LONGITUDE = -70.7377  # degrees
LA_SILLA_LATITUDE = -29.2567  # degrees
LA_SILLA_HEIGHT = 2400.0  # metres

# Barnard's star, ICRS J2000 with large proper motion
BARNARD_RA = 17.0 + 57.0 / 60.0 + 48.49803 / 3600.0  # hours
BARNARD_DEC = 4.0 + 41.0 / 60.0 + 36.2072 / 3600.0  # degrees
BARNARD_PMRA = -0.79858 / 0.99667  # arcsec/year of RA, i.e. mu_alpha* / cos(dec)
BARNARD_PMDEC = 10.32812  # arcsec/year
BARNARD_PARALLAX = 0.54831  # arcsec
BARNARD_RV = -110.6  # km/s


def demonstrate_calendar(date: datetime) -> float:
    """Demonstrate calendar conversions"""

    print("\n" + "="*60)
    print("CALENDAR AND TIME SCALES")
    print("="*60)

    mjd = cldj(date.year, date.month, date.day)
    year, month, day, frac = djcl(mjd + 0.25)
    print(f"MJD of {date:%Y-%m-%d}: {mjd:.1f}")
    print(f"MJD {mjd + 0.25} -> {year:04d}-{month:02d}-{day:02d} + {frac:.2f} day")
    print(f"TT-UTC: {dtt(mjd):.3f} s")

    # astropy agrees with the calendar conversion
    print(f"astropy MJD: {Time(date, scale='utc').mjd:.1f}")
    return mjd


def demonstrate_timing(utc: float):
    """Demonstrate barycentric timing for Barnard's star"""

    print("\n" + "="*60)
    print("BARYCENTRIC TIMING")
    print("="*60)

    result = utc2tdb(utc, LA_SILLA_LONGITUDE, LA_SILLA_LATITUDE, LA_SILLA_HEIGHT,
                     BARNARD_RA, BARNARD_DEC, BARNARD_PMRA, BARNARD_PMDEC,
                     2000.0, BARNARD_PARALLAX, BARNARD_RV)

    print(f"UTC  : {utc:.8f}")
    print(f"TT   : {result.tt:.8f}")
    print(f"TDB  : {result.tdb:.8f}")
    print(f"BTDB : {result.btdb:.8f} ({(result.btdb - result.tdb) * 86400:+.3f} s)")
    print(f"HUTC : {result.hutc:.8f} ({(result.hutc - utc) * 86400:+.3f} s)")
    print(f"VHEL : {result.vhel:+.3f} km/s")
    print(f"VBAR : {result.vbar:+.3f} km/s")


def demonstrate_night(date: datetime):
    """Demonstrate observational parameters through a night"""

    print("\n" + "="*60)
    print("OBSERVING BARNARD'S STAR FROM LA SILLA")
    print("="*60)
    print(f"{'UT':>5s} {'airmass':>8s} {'alt':>7s} {'az':>7s} {'ha':>7s} {'pa':>7s} {'refr':>8s}")

    for hour in range(0, 12):
        t = date + timedelta(hours=hour)
        utc = Time(t, scale='utc').mjd
        obs = amass(utc, LA_SILLA_LONGITUDE, LA_SILLA_LATITUDE, LA_SILLA_HEIGHT,
                    BARNARD_RA, BARNARD_DEC, 0.55, BARNARD_PMRA, BARNARD_PMDEC,
                    2000.0, BARNARD_PARALLAX, BARNARD_RV)
        if obs.altitude <= 0:
            continue
        print(f"{t:%H:%M} {obs.airmass:8.3f} {obs.altitude:7.2f} {obs.azimuth:7.2f} "
              f"{obs.hour_angle:7.3f} {obs.parallactic_angle:7.2f} "
              f"{obs.refraction * 3600:7.2f}\"")


def demonstrate_validation():
    """Demonstrate range checking"""

    print("\n" + "="*60)
    print("INPUT VALIDATION")
    print("="*60)

    try:
        utc2tdb(51544.0, 0.0, 51.5, 0.0, 25.0, 0.0)
    except InputRangeError as e:
        print(f"Rejected field '{e.field}': {e}")


def main():
    """Main demonstration function"""

    date = datetime(2024, 6, 15)
    utc = demonstrate_calendar(date) + 0.125
    demonstrate_timing(utc)
    demonstrate_night(date)
    demonstrate_validation()


if __name__ == "__main__":
    main()
