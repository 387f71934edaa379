"""Location parsing and distance — pure tests for core/locations.

Tests cover:
    - Valid "<lon>,<lat>" strings within bounds are accepted (including edges)
    - Extra tokens, non-numeric, non-finite, out-of-range values rejected
    - Haversine distance against a known city pair
    - rank_by_distance ordering and exclusion of location-less candidates
"""

import pytest

from directory_api.core.domain_types import GeoPoint
from directory_api.core.locations import (
    haversine_distance, nearest_distance, parse_location_param, rank_by_distance,
)


@pytest.mark.parametrize("value, expected", [
    ("-122.4,37.8", GeoPoint(-122.4, 37.8)),
    ("180,90", GeoPoint(180.0, 90.0)),
    ("-180,-90", GeoPoint(-180.0, -90.0)),
    ("0,0", GeoPoint(0.0, 0.0)),
    (" 12.5 , -3 ", GeoPoint(12.5, -3.0)),
])
def test_accepts_valid_points(value, expected):
    assert parse_location_param(value) == expected


@pytest.mark.parametrize("value", [
    "", "12", "1,2,3", "a,b", "1,", ",1",
    "180.0001,0", "-181,0", "0,90.5", "0,-91",
    "inf,0", "0,nan", "1_2_0,3_7", "0x10,1", "1e,2",
])
def test_rejects_malformed_points(value):
    assert parse_location_param(value) is None


def test_haversine_san_francisco_to_los_angeles():
    sf = GeoPoint(-122.4194, 37.7749)
    la = GeoPoint(-118.2437, 34.0522)
    assert haversine_distance(sf, la) == pytest.approx(559_000, rel=0.01)


def test_haversine_is_zero_for_same_point():
    p = GeoPoint(10.0, 10.0)
    assert haversine_distance(p, p) == 0.0


def test_nearest_distance_uses_closest_location():
    origin = GeoPoint(0.0, 0.0)
    far_then_near = [[50.0, 50.0], [0.0, 1.0]]
    assert nearest_distance(origin, far_then_near) == pytest.approx(
        haversine_distance(origin, GeoPoint(0.0, 1.0)),
    )
    assert nearest_distance(origin, []) is None


def test_rank_by_distance_orders_and_drops_missing():
    origin = GeoPoint(-122.4, 37.8)
    ranked = rank_by_distance(origin, [
        ("nyc", [[-73.98, 40.75]]),
        ("none", []),
        ("oakland", [[-122.27, 37.80]]),
        ("sf", [[-122.41, 37.77]]),
    ])
    assert [key for key, _ in ranked] == ["sf", "oakland", "nyc"]
