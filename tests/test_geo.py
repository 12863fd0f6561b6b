"""Unit tests for the Haversine distance."""

import math

import pytest

from modules.geo import EARTH_RADIUS_KM, haversine_km


class TestHaversine:
    """Distance properties."""

    def test_identical_points_are_zero(self):
        assert haversine_km(12.9716, 77.5946, 12.9716, 77.5946) == 0.0

    @pytest.mark.parametrize("a, b", [
        ((12.9716, 77.5946), (12.9766, 77.5993)),
        ((51.5074, -0.1278), (48.8566, 2.3522)),
        ((-33.8688, 151.2093), (40.7128, -74.0060)),
    ])
    def test_symmetric(self, a, b):
        assert haversine_km(*a, *b) == pytest.approx(haversine_km(*b, *a))

    def test_one_degree_of_latitude(self):
        expected = EARTH_RADIUS_KM * math.pi / 180
        assert haversine_km(0.0, 0.0, 1.0, 0.0) == pytest.approx(expected)

    def test_london_paris(self):
        assert haversine_km(51.5074, -0.1278, 48.8566, 2.3522) == pytest.approx(343.5, abs=1.0)

    def test_antipodal_points_are_half_circumference(self):
        assert haversine_km(0.0, 0.0, 0.0, 180.0) == pytest.approx(math.pi * EARTH_RADIUS_KM)

    def test_never_negative(self):
        assert haversine_km(-10.0, -20.0, 10.0, 20.0) > 0
