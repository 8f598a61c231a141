"""Tests for geo radius restrictions."""

import math
import sys
import unittest
from decimal import Decimal
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from SearchSpec.core.errors import InvalidRestriction
from SearchSpec.core.spec import GeoRestriction
from SearchSpec.query.geo import build_geo_restriction


class TestBuildGeoRestriction(unittest.TestCase):
    def test_valid_restriction(self) -> None:
        geo = build_geo_restriction((40.0, -75.0), 5)
        self.assertEqual(geo, GeoRestriction(latitude=40.0, longitude=-75.0, radius_miles=5.0))

    def test_list_coordinates_and_int_values(self) -> None:
        geo = build_geo_restriction([40, -75], 2.5)
        self.assertEqual((geo.latitude, geo.longitude, geo.radius_miles), (40.0, -75.0, 2.5))

    def test_decimal_values(self) -> None:
        geo = build_geo_restriction((Decimal("40.5"), Decimal("-75")), Decimal("2.5"))
        self.assertEqual(geo, GeoRestriction(latitude=40.5, longitude=-75.0, radius_miles=2.5))

    def test_non_finite_decimal(self) -> None:
        for value in (Decimal("NaN"), Decimal("sNaN"), Decimal("-Infinity")):
            with self.subTest(value=value):
                with self.assertRaises(InvalidRestriction):
                    build_geo_restriction((40.0, -75.0), value)

    def test_non_positive_radius(self) -> None:
        for radius in (-5, 0, 0.0):
            with self.subTest(radius=radius):
                with self.assertRaises(InvalidRestriction):
                    build_geo_restriction((40.0, -75.0), radius)

    def test_non_numeric_values(self) -> None:
        cases = [
            (("40", -75.0), 5),
            ((40.0, None), 5),
            ((True, -75.0), 5),
            ((40.0, -75.0), "5"),
            ((40.0, math.nan), 5),
            ((40.0, -75.0), math.inf),
        ]
        for coordinates, radius in cases:
            with self.subTest(coordinates=coordinates, radius=radius):
                with self.assertRaises(InvalidRestriction):
                    build_geo_restriction(coordinates, radius)

    def test_partial_coordinates(self) -> None:
        for coordinates in ((40.0,), (40.0, -75.0, 1.0), "40,-75", None):
            with self.subTest(coordinates=coordinates):
                with self.assertRaises(InvalidRestriction):
                    build_geo_restriction(coordinates, 5)

    def test_coordinate_ranges_are_not_checked(self) -> None:
        geo = build_geo_restriction((123.0, 400.0), 1)
        self.assertEqual(geo.latitude, 123.0)


if __name__ == "__main__":
    unittest.main()
