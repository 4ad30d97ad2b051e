# waktusolat/errors.py
"""
Exception types raised by the zone and schedule services.

Routes decide how each of these is surfaced. The legacy v1 surface
flattens all of them to an opaque "Server Error", while the v2 and PDF
surfaces map a missing schedule to a structured 404.
"""


class WaktuSolatError(Exception):
    """Base class for every resolution failure raised by the services."""

    @property
    def message(self):
        return str(self)


class CoordinateRangeError(WaktuSolatError):
    """A latitude or longitude lies outside its valid range."""

    def __init__(self, axis, value, bound):
        self.axis = axis
        self.value = value
        self.bound = bound
        super().__init__(
            f"{axis} {value:.6f} is out of range in function st_geomfromtext. It must be within {bound}."
        )


class ZoneNotFoundError(WaktuSolatError):
    """Valid coordinates that no zone boundary contains."""

    def __init__(self, message="No zone found for the given coordinates."):
        super().__init__(message)


class ScheduleNotFoundError(WaktuSolatError):
    """The store holds no records for the zone and period."""

    def __init__(self, zone_code, year, month_abbr):
        self.zone_code = zone_code
        self.year = year
        self.month_abbr = month_abbr
        super().__init__(f"No data found for zone: {zone_code} for {month_abbr}/{year}")


class ScheduleIntegrityError(WaktuSolatError):
    """The store returned a month that is not one contiguous record per day."""


class UpstreamFetchError(WaktuSolatError):
    """The upstream prayer time source could not supply a month."""
