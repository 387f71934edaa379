"""Locations — parsing of "<lon>,<lat>" parameters and great-circle distance.

Invariants:
    - parse_location_param returns None for anything that is not exactly two
      finite numbers within WGS84 bounds (never raises)
    - distance ordering uses the haversine formula on a spherical earth

Design Decisions:
    - None over exceptions for rejection: the resolver decides which error to raise
"""

import math
import re

from directory_api.core.domain_types import GeoPoint

EARTH_RADIUS_METERS = 6_371_008.8

# ASCII decimal or exponent notation only (no "1_000", "inf", "nan")
_DECIMAL_RE = re.compile(
    r"[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?", re.ASCII,
)


def is_valid_coords(longitude: float, latitude: float) -> bool:
    """True when both values are finite and within WGS84 bounds."""
    if not (math.isfinite(longitude) and math.isfinite(latitude)):
        return False
    return -180.0 <= longitude <= 180.0 and -90.0 <= latitude <= 90.0


def parse_location_param(value: str) -> GeoPoint | None:
    """Parse "<lon>,<lat>" into a GeoPoint, or None if malformed/out of range."""
    parts = [p.strip() for p in value.split(",")]
    if len(parts) != 2 or not all(_DECIMAL_RE.fullmatch(p) for p in parts):
        return None
    longitude, latitude = float(parts[0]), float(parts[1])
    if not is_valid_coords(longitude, latitude):
        return None
    return GeoPoint(longitude, latitude)


def haversine_distance(a: GeoPoint, b: GeoPoint) -> float:
    """Great-circle distance between two points, in meters."""
    lon1, lat1 = math.radians(a.longitude), math.radians(a.latitude)
    lon2, lat2 = math.radians(b.longitude), math.radians(b.latitude)
    dlat = lat2 - lat1
    dlon = lon2 - lon1
    h = (
        math.sin(dlat / 2) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    )
    return 2 * EARTH_RADIUS_METERS * math.asin(min(1.0, math.sqrt(h)))


def nearest_distance(origin: GeoPoint, locations: list) -> float | None:
    """Distance from origin to the closest of a document's [lon, lat] pairs.

    Returns None when the document has no usable location.
    """
    best = None
    for loc in locations or []:
        if not isinstance(loc, (list, tuple)) or len(loc) != 2:
            continue
        d = haversine_distance(origin, GeoPoint(float(loc[0]), float(loc[1])))
        if best is None or d < best:
            best = d
    return best


def rank_by_distance(
    origin: GeoPoint, candidates: list[tuple[object, list]],
) -> list[tuple[object, float]]:
    """Order (key, locations) pairs by ascending nearest distance to origin.

    Candidates without locations are dropped. Ties keep input order.
    """
    ranked = []
    for key, locations in candidates:
        d = nearest_distance(origin, locations)
        if d is not None:
            ranked.append((key, d))
    ranked.sort(key=lambda pair: pair[1])
    return ranked
