# waktusolat/services/spatial_resolver.py
from collections import namedtuple

from flask import current_app
from shapely.geometry import Point

from ..errors import CoordinateRangeError, ZoneNotFoundError
from ..metrics import ZONE_LOOKUPS_TOTAL

ZoneLocation = namedtuple('ZoneLocation', ['zone', 'state', 'district'])

LONGITUDE_BOUND = "(-180.000000, 180.000000]"
LATITUDE_BOUND = "[-90.000000, 90.000000]"


def validate_coordinate(axis, value):
    """
    Checks one axis of a geographic point.

    The error text matches the spatial engine's own validation message
    word for word, since clients match on it.

    Raises:
        CoordinateRangeError: if the value is outside the axis range.
    """
    if axis == 'Longitude':
        if not -180.0 < value <= 180.0:
            raise CoordinateRangeError(axis, value, LONGITUDE_BOUND)
    elif axis == 'Latitude':
        if not -90.0 <= value <= 90.0:
            raise CoordinateRangeError(axis, value, LATITUDE_BOUND)
    else:
        raise ValueError(f"Unknown axis: {axis}")


def resolve_zone(gazetteer, latitude, longitude):
    """
    Finds the zone whose boundary contains the given point.

    Longitude is validated before latitude. Zones are tested in gazetteer
    order and the first district boundary covering the point wins.

    Returns:
        ZoneLocation: the zone plus the state code and district name of the
        matched boundary.

    Raises:
        CoordinateRangeError: for out-of-range coordinates.
        ZoneNotFoundError: if no boundary contains the point.
    """
    try:
        validate_coordinate('Longitude', longitude)
        validate_coordinate('Latitude', latitude)
    except CoordinateRangeError:
        ZONE_LOOKUPS_TOTAL.labels(status='out_of_range').inc()
        raise

    point = Point(longitude, latitude)
    for zone in gazetteer:
        for boundary in zone.boundaries:
            if boundary.prepared.covers(point):
                current_app.logger.info(f"Resolved ({latitude}, {longitude}) to zone '{zone.code}' ({boundary.district}).")
                ZONE_LOOKUPS_TOTAL.labels(status='found').inc()
                return ZoneLocation(zone=zone, state=boundary.state, district=boundary.district)

    current_app.logger.warning(f"No zone found for coordinates ({latitude}, {longitude}).")
    ZONE_LOOKUPS_TOTAL.labels(status='not_found').inc()
    raise ZoneNotFoundError()
