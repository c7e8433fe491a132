"""
Calendar and TT-UTC Module

Gregorian calendar date to and from Modified Julian Date (MJD = JD - 2400000.5)
and the TT-UTC offset, which covers leap seconds and the historical
offset tables.
"""

import logging
from typing import Optional, Tuple

from obscorr_models import BadDayError, BadMonthError, BadYearError
from obscorr_primitives import AstronomyPrimitives, default_primitives

logger = logging.getLogger(__name__)

_CALENDAR_ERRORS = {
    1: (BadYearError, 0),
    2: (BadMonthError, 1),
    3: (BadDayError, 2),
}


def cldj(year: int, month: int, day: int,
         primitives: Optional[AstronomyPrimitives] = None) -> float:
    """
    Modified Julian Date of a Gregorian calendar date.

    Args:
        year: Year
        month: Month (1-12)
        day: Day of month
        primitives: Astronomy primitives, ERFA if omitted

    Returns:
        MJD at 0h on that date

    Raises:
        BadYearError, BadMonthError, BadDayError: Invalid date; only the
            first failing component is reported
    """
    prim = primitives or default_primitives()
    mjd, status = prim.calendar_to_mjd(year, month, day)
    if status in _CALENDAR_ERRORS:
        error, index = _CALENDAR_ERRORS[status]
        raise error((year, month, day)[index], op="cldj")
    return mjd


def djcl(mjd: float,
         primitives: Optional[AstronomyPrimitives] = None) -> Tuple[int, int, int, float]:
    """
    Gregorian calendar date of an MJD.

    Returns:
        Tuple of (year, month, day, fraction of day)
    """
    prim = primitives or default_primitives()
    return prim.mjd_to_calendar(mjd)


def dtt(utc: float, primitives: Optional[AstronomyPrimitives] = None) -> float:
    """TT-UTC in seconds. UTC in MJD = JD-2400000.5."""
    prim = primitives or default_primitives()
    offset = prim.tt_minus_utc(utc)
    logger.debug(f"TT-UTC at MJD {utc}: {offset} s")
    return offset
