"""Pure geometry helpers for fixed-point coordinates."""
from __future__ import annotations

import math

from .entity import Point, Rectangle


EARTH_RADIUS_M = 6_371_000


def normalize(rect: Rectangle) -> Rectangle:
    """Return a rectangle whose ``lo`` holds the minimum of each coordinate."""
    lo = Point(
        latitude=min(rect.lo.latitude, rect.hi.latitude),
        longitude=min(rect.lo.longitude, rect.hi.longitude),
    )
    hi = Point(
        latitude=max(rect.lo.latitude, rect.hi.latitude),
        longitude=max(rect.lo.longitude, rect.hi.longitude),
    )
    return Rectangle(lo=lo, hi=hi)


def contains(rect: Rectangle, point: Point) -> bool:
    """Inclusive bounds check. ``rect`` must already be normalized."""
    return (
        rect.lo.longitude <= point.longitude <= rect.hi.longitude
        and rect.lo.latitude <= point.latitude <= rect.hi.latitude
    )


def distance(start: Point, end: Point) -> float:
    """Great-circle distance in metres using the haversine formula.

    Formula is based on http://www.movable-type.co.uk/scripts/latlong.html
    """
    lat_1 = start.latitude_degrees
    lat_2 = end.latitude_degrees
    lon_1 = start.longitude_degrees
    lon_2 = end.longitude_degrees
    lat_rad_1 = math.radians(lat_1)
    lat_rad_2 = math.radians(lat_2)
    delta_lat_rad = math.radians(lat_2 - lat_1)
    delta_lon_rad = math.radians(lon_2 - lon_1)

    a = (pow(math.sin(delta_lat_rad / 2), 2) +
         (math.cos(lat_rad_1) * math.cos(lat_rad_2) *
          pow(math.sin(delta_lon_rad / 2), 2)))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_M * c


__all__ = ["EARTH_RADIUS_M", "normalize", "contains", "distance"]
