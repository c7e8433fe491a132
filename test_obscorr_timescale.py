#!/usr/bin/env python3
"""
Tests for obscorr_timescale.py: UTC -> TT -> TDB with light travel corrections
"""

import logging
import math
import os
import sys
import warnings

import pytest

# Add src directory to path to import obscorr modules
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))

from obscorr import utc2tdb as utc2tdb_positional
from obscorr_models import (
    CelestialTarget, GeodeticPosition, InputRangeError, PrimitiveFailure
)
from obscorr_primitives import ErfaPrimitives
from obscorr_timescale import utc2tdb
from obscorr_units import AU, C, DAY


J2000_MJD = 51544.0
GREENWICH = GeodeticPosition(0.0, 51.5, 0.0)


def test_orchestration_with_fake_primitives(fake_primitives):
    utc = 51544.25
    site = GeodeticPosition(30.0, 45.0, 100.0)
    target = CelestialTarget(3.0, 0.0)

    result = utc2tdb(utc, site, target, fake_primitives)

    tt = utc + 64.184 / DAY
    tdb = tt + 0.001 / DAY
    assert result.tt == pytest.approx(tt, abs=1e-10)
    assert result.tdb == pytest.approx(tdb, abs=1e-10)

    # TDB-TT gets TT, UTC day fraction, west longitude and u, v in km
    (rcc_args,) = fake_primitives.called("tdb_minus_tt")
    assert rcc_args[0] == pytest.approx(tt, abs=1e-10)
    assert rcc_args[1] == pytest.approx(0.25)
    assert rcc_args[2] == pytest.approx(-math.radians(30.0))
    assert rcc_args[3] == pytest.approx(4.0e-5 * AU / 1000.0)
    assert rcc_args[4] == pytest.approx(3.0e-5 * AU / 1000.0)

    # local apparent sidereal time = gmst + east longitude + eqeqx
    (pvobs_args,) = fake_primitives.called("observer_pv")
    assert pvobs_args[2] == pytest.approx(1.0 + math.radians(30.0))

    # target at RA 45 deg on the equator
    half = math.sqrt(0.5)
    diurnal_vel = 2.0e-11 * DAY  # AU/s -> AU/day
    hcorr = half * (1.0 + 1.0e-5) * AU / C / DAY
    bcorr = half * (0.99 + 1.0e-5) * AU / C / DAY
    assert result.htdb == pytest.approx(tdb + hcorr, abs=1e-10)
    assert result.btdb == pytest.approx(tdb + bcorr, abs=1e-10)
    assert result.hutc == pytest.approx(utc + hcorr, abs=1e-10)
    assert result.vhel == pytest.approx(-half * (0.0172 + diurnal_vel) * AU / DAY / 1000.0)
    assert result.vbar == pytest.approx(-half * (0.0170 + diurnal_vel) * AU / DAY / 1000.0)


def test_tdb_minus_tt_is_clock_correction(fake_primitives):
    result = utc2tdb(J2000_MJD, GREENWICH, CelestialTarget(12.0, 0.0), fake_primitives)
    # one ulp at MJD 51544 is about 0.6 microseconds
    assert (result.tdb - result.tt) * DAY == pytest.approx(0.001, abs=1e-6)


def test_space_motion_uses_epoch_of_observation(fake_primitives):
    target = CelestialTarget(6.0, 30.0, pm_ra=1.5, pm_dec=-3.6, epoch=1991.25,
                             parallax=0.2, rv=-20.0)
    utc2tdb(J2000_MJD + 365.25, GREENWICH, target, fake_primitives)

    (args,) = fake_primitives.called("space_motion")
    ra, dec, pm_ra, pm_dec, parallax, rv, epoch0, epoch1 = args
    assert ra == pytest.approx(math.pi / 2.0)
    assert dec == pytest.approx(math.radians(30.0))
    assert pm_ra == pytest.approx(math.radians(1.5 / 3600.0))
    assert pm_dec == pytest.approx(math.radians(-3.6 / 3600.0))
    assert (parallax, rv, epoch0) == (0.2, -20.0, 1991.25)
    assert epoch1 == pytest.approx(2000.0 + 364.75 / 365.25)


def test_result_keeps_positional_order(fake_primitives):
    result = utc2tdb(J2000_MJD, GREENWICH, CelestialTarget(12.0, 0.0), fake_primitives)
    tt, tdb, btdb, hutc, htdb, vhel, vbar = result
    assert (tt, tdb, vbar) == (result.tt, result.tdb, result.vbar)
    assert result._fields == ("tt", "tdb", "btdb", "hutc", "htdb", "vhel", "vbar")


def test_primitive_failure_propagates(fake_primitives):
    failure = PrimitiveFailure("epv", "date out of range")

    def earth_pv(tdb):
        raise failure

    fake_primitives.earth_pv = earth_pv
    with pytest.raises(PrimitiveFailure) as excinfo:
        utc2tdb(J2000_MJD, GREENWICH, CelestialTarget(12.0, 0.0), fake_primitives)
    assert excinfo.value is failure


# ============================================================================
# Validation
# ============================================================================

@pytest.mark.parametrize("site,target", [
    (GeodeticPosition(-360.0, -90.0, 0.0), CelestialTarget(0.0, -90.0)),
    (GeodeticPosition(360.0, 90.0, 0.0), CelestialTarget(24.0, 90.0)),
    (GeodeticPosition(-70.7, -29.3, 2400.0), CelestialTarget(23.999, 12.5)),
])
def test_validation_accepts_bounds(fake_primitives, site, target):
    utc2tdb(J2000_MJD, site, target, fake_primitives)


@pytest.mark.parametrize("site,target,field", [
    (GeodeticPosition(-360.5, 0.0), CelestialTarget(12.0, 0.0), "longitude"),
    (GeodeticPosition(360.5, 0.0), CelestialTarget(12.0, 0.0), "longitude"),
    (GeodeticPosition(0.0, -90.1), CelestialTarget(12.0, 0.0), "latitude"),
    (GeodeticPosition(0.0, 90.1), CelestialTarget(12.0, 0.0), "latitude"),
    (GeodeticPosition(0.0, 0.0), CelestialTarget(-0.01, 0.0), "ra"),
    (GeodeticPosition(0.0, 0.0), CelestialTarget(25.0, 0.0), "ra"),
    (GeodeticPosition(0.0, 0.0), CelestialTarget(12.0, -91.0), "dec"),
    (GeodeticPosition(0.0, 0.0), CelestialTarget(12.0, 90.5), "dec"),
    (GeodeticPosition(math.nan, 0.0), CelestialTarget(12.0, 0.0), "longitude"),
    (GeodeticPosition(0.0, math.nan), CelestialTarget(12.0, 0.0), "latitude"),
    (GeodeticPosition(0.0, 0.0), CelestialTarget(math.nan, 0.0), "ra"),
    (GeodeticPosition(0.0, 0.0), CelestialTarget(12.0, math.nan), "dec"),
])
def test_validation_rejects_out_of_range(fake_primitives, site, target, field):
    with pytest.raises(InputRangeError) as excinfo:
        utc2tdb(J2000_MJD, site, target, fake_primitives)
    assert excinfo.value.field == field
    assert "utc2tdb" in str(excinfo.value)
    assert fake_primitives.calls == []


def test_ra_out_of_range_is_a_value_error():
    with pytest.raises(ValueError, match="ra = 25.0"):
        utc2tdb_positional(J2000_MJD, 0.0, 51.5, 0.0, 25.0, 0.0)


# ============================================================================
# ERFA backed
# ============================================================================

def test_j2000_greenwich():
    result = utc2tdb_positional(J2000_MJD, 0.0, 51.5, 0.0, 12.0, 0.0)

    assert all(math.isfinite(value) for value in result)
    # TAI-UTC was 32 s at the start of 2000
    assert result.tt == pytest.approx(J2000_MJD + 64.184 / DAY, abs=1e-10)
    assert abs(result.tdb - result.tt) * DAY < 0.002
    # light travel across 1 AU is about 499 s
    assert abs(result.btdb - result.tdb) * DAY < 510.0
    assert abs(result.htdb - result.tdb) * DAY < 510.0
    assert result.hutc - J2000_MJD == pytest.approx(result.htdb - result.tdb, abs=1e-10)
    assert abs(result.vhel) < 35.0
    assert abs(result.vbar) < 35.0
    assert result.vhel != result.vbar

    assert utc2tdb_positional(J2000_MJD, 0.0, 51.5, 0.0, 12.0, 0.0) == result


def test_radial_velocity_follows_earth_orbit():
    # In early January the Earth moves towards RA ~ 12.6h, Dec ~ -4 at ~30 km/s
    towards = utc2tdb_positional(J2000_MJD, 0.0, 0.0, 0.0, 12.6, -4.0)
    away = utc2tdb_positional(J2000_MJD, 0.0, 0.0, 0.0, 0.6, 4.0)
    assert towards.vbar < -25.0
    assert away.vbar > 25.0


def test_space_motion_identity_without_motion():
    prim = ErfaPrimitives()
    ra, dec = prim.space_motion(1.2, -0.4, 0.0, 0.0, 0.0, 0.0, 2000.0,
                                prim.julian_epoch(51544.5))
    assert ra == pytest.approx(1.2, abs=1e-10)
    assert dec == pytest.approx(-0.4, abs=1e-10)


def test_proper_motion_shifts_times():
    still = utc2tdb_positional(58849.0, 0.0, 51.5, 0.0, 17.963, 4.694)
    moving = utc2tdb_positional(58849.0, 0.0, 51.5, 0.0, 17.963, 4.694,
                                pmra=-0.8, pmdec=10.3, parallax=0.548, rv=-110.6)
    assert moving.tt == still.tt
    assert moving.btdb != still.btdb


def test_erfa_warnings_are_logged_not_raised(caplog):
    prim = ErfaPrimitives()
    caplog.set_level(logging.DEBUG, logger="obscorr_primitives")
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        # zero parallax makes ERFA override the distance
        ra, dec = prim.space_motion(1.2, -0.4, 1e-8, 1e-8, 0.0, 0.0, 2000.0, 2010.0)
    assert math.isfinite(ra) and math.isfinite(dec)
    assert any(record.message.startswith("pm: ") for record in caplog.records)
