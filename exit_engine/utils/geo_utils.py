"""Conversions between geodetic positions and a local East-North frame.

Uses the equirectangular approximation, which is accurate for offsets up to
tens of kilometers around the frame origin.
"""
import math
from typing import Iterable, List, Tuple

import numpy as np

from exit_engine.config import EARTH_RADIUS_M
from exit_engine.exceptions import InvalidCoordinateError
from exit_engine.models.geo import LatLon

METERS_PER_DEGREE_LAT = EARTH_RADIUS_M * math.pi / 180.0


def _wrap_longitude(lon: float) -> float:
    """Wrap a longitude (or longitude difference) to [-180, 180)."""
    return (lon + 180.0) % 360.0 - 180.0


def _meters_per_degree_lon(origin: LatLon) -> float:
    if abs(origin.lat) == 90.0:
        raise InvalidCoordinateError(
            f"Local frame is undefined at a pole (origin latitude {origin.lat})"
        )
    return METERS_PER_DEGREE_LAT * math.cos(math.radians(origin.lat))


def to_local(origin: LatLon, point: LatLon) -> Tuple[float, float]:
    """
    Offset of a point from the frame origin.

    Args:
        origin: Frame origin
        point: Position to convert

    Returns:
        Tuple of (east, north) in meters
    """
    north = (point.lat - origin.lat) * METERS_PER_DEGREE_LAT
    east = _wrap_longitude(point.lon - origin.lon) * _meters_per_degree_lon(origin)
    return east, north


def to_geodetic(origin: LatLon, east: float, north: float) -> LatLon:
    """
    Position at an (east, north) offset in meters from the frame origin.

    Raises InvalidCoordinateError when the offset leaves the valid latitude
    range.
    """
    lon_scale = _meters_per_degree_lon(origin)
    lat = origin.lat + north / METERS_PER_DEGREE_LAT
    lon = origin.lon + east / lon_scale
    if not -180.0 <= lon <= 180.0:
        lon = _wrap_longitude(lon)
    return LatLon(lat=lat, lon=lon)


def move_point(origin: LatLon, vector) -> LatLon:
    """Apply an (east, north) displacement to a position."""
    return to_geodetic(origin, float(vector[0]), float(vector[1]))


def distance_m(a: LatLon, b: LatLon) -> float:
    """Distance in meters between two nearby points."""
    east, north = to_local(a, b)
    return math.hypot(east, north)


def bearing_deg(a: LatLon, b: LatLon) -> float:
    """Compass bearing from a to b in degrees [0, 360)."""
    east, north = to_local(a, b)
    return math.degrees(math.atan2(east, north)) % 360.0


def path_to_geodetic(origin: LatLon, offsets: Iterable) -> List[LatLon]:
    """Convert a polyline of (east, north) offsets to positions."""
    return [to_geodetic(origin, float(e), float(n)) for e, n in np.asarray(offsets)]
