"""Shared pytest fixtures for the obscorr tests."""

import os
import sys

import numpy as np
import pytest

# Add src directory to path so the tests run without installing
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))


class FakePrimitives:
    """
    Deterministic primitives recording every call.

    Values are chosen so results can be worked out by hand: identity
    precession, Earth on the x axis moving along y, observer 1e-5 AU along x.
    """

    def __init__(self):
        self.calls = []
        self.zenith_distance = 0.3
        self.hour_angle = 0.2
        self.pa = -0.5
        self.calendar_status = 0

    def _record(self, name, *args):
        self.calls.append((name, args))

    def tt_minus_utc(self, utc):
        self._record("tt_minus_utc", utc)
        return 64.184

    def calendar_to_mjd(self, year, month, day):
        self._record("calendar_to_mjd", year, month, day)
        return 51544.0, self.calendar_status

    def mjd_to_calendar(self, mjd):
        self._record("mjd_to_calendar", mjd)
        return 2000, 1, 1, mjd - 51544.0

    def geocentric_distances(self, latitude, height):
        self._record("geocentric_distances", latitude, height)
        return 4.0e-5, 3.0e-5

    def tdb_minus_tt(self, tdb, ut, west_longitude, u, v):
        self._record("tdb_minus_tt", tdb, ut, west_longitude, u, v)
        return 0.001

    def earth_pv(self, tdb):
        self._record("earth_pv", tdb)
        return ((1.0, 0.0, 0.0), (0.0, 0.0172, 0.0),
                (0.99, 0.0, 0.0), (0.0, 0.0170, 0.0))

    def gmst(self, ut1):
        self._record("gmst", ut1)
        return 1.0

    def equation_of_equinoxes(self, tdb):
        self._record("equation_of_equinoxes", tdb)
        return 0.0

    def observer_pv(self, latitude, height, sidereal_time):
        self._record("observer_pv", latitude, height, sidereal_time)
        return (1.0e-5, 0.0, 0.0), (0.0, 2.0e-11, 0.0)

    def precession_nutation_matrix(self, tdb):
        self._record("precession_nutation_matrix", tdb)
        return np.identity(3)

    def julian_epoch(self, mjd):
        self._record("julian_epoch", mjd)
        return 2000.0 + (mjd - 51544.5) / 365.25

    def space_motion(self, ra, dec, pm_ra, pm_dec, parallax, rv, epoch0, epoch1):
        self._record("space_motion", ra, dec, pm_ra, pm_dec, parallax, rv, epoch0, epoch1)
        return ra, dec

    def observed_place(self, ra, dec, utc, dut1, longitude, latitude, height,
                       polar_x, polar_y, temperature, pressure, humidity,
                       wavelength, lapse_rate):
        self._record("observed_place", ra, dec, utc, dut1, longitude, latitude,
                     height, polar_x, polar_y, temperature, pressure, humidity,
                     wavelength, lapse_rate)
        return 1.0, self.zenith_distance, self.hour_angle, dec, ra

    def refraction_coefficients(self, temperature, pressure, humidity, wavelength):
        self._record("refraction_coefficients", temperature, pressure, humidity,
                     wavelength)
        return 2.8e-4, -3.0e-7

    def airmass(self, zenith_distance):
        self._record("airmass", zenith_distance)
        return 1.0 / np.cos(zenith_distance)

    def parallactic_angle(self, hour_angle, dec, latitude):
        self._record("parallactic_angle", hour_angle, dec, latitude)
        return self.pa

    def called(self, name):
        return [args for call, args in self.calls if call == name]


@pytest.fixture
def fake_primitives():
    return FakePrimitives()
