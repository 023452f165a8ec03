import math

import pytest

from src.venue_tour.services.geospatial import EARTH_RADIUS_KM, centroid, haversine_km, is_valid_coordinate


def test_haversine_identical_points_is_zero():
    assert haversine_km(51.5194, -0.1270, 51.5194, -0.1270) == 0.0


def test_haversine_antipodal_points_is_half_circumference():
    distance = haversine_km(0.0, 0.0, 0.0, 180.0)

    assert distance == pytest.approx(math.pi * EARTH_RADIUS_KM)
    assert distance == pytest.approx(20015.09, abs=0.01)


def test_haversine_one_degree_along_equator():
    assert haversine_km(0.0, 0.0, 0.0, 1.0) == pytest.approx(111.1949, rel=1e-5)


def test_haversine_is_symmetric():
    forward = haversine_km(51.5081, -0.0759, 51.4967, -0.1764)
    backward = haversine_km(51.4967, -0.1764, 51.5081, -0.0759)

    assert forward == pytest.approx(backward)


@pytest.mark.parametrize(
    "lat, lon, expected",
    [
        (0.0, 0.0, True),
        (90.0, 180.0, True),
        (-90.0, -180.0, True),
        (90.5, 0.0, False),
        (0.0, -180.1, False),
        (float("nan"), 0.0, False),
        (0.0, float("inf"), False),
    ],
)
def test_is_valid_coordinate(lat, lon, expected):
    assert is_valid_coordinate(lat, lon) is expected


def test_centroid_averages_points():
    assert centroid([(0.0, 0.0), (2.0, 4.0)]) == (1.0, 2.0)

    with pytest.raises(ValueError):
        centroid([])
