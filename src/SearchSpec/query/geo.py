"""Geospatial radius restriction."""

from __future__ import annotations

import math
from decimal import Decimal
from numbers import Real
from typing import Any, Sequence

from SearchSpec.core.errors import InvalidRestriction
from SearchSpec.core.spec import GeoRestriction


def build_geo_restriction(coordinates: Sequence[Any], radius_miles: Any) -> GeoRestriction:
    """Validate a ``(latitude, longitude)`` pair and radius.

    Coordinate ranges are left to the engine; only numeric well-formedness is
    checked here.

    Raises:
        InvalidRestriction: If coordinates are not a numeric pair or the
            radius is not a positive number.
    """
    if isinstance(coordinates, (str, bytes)) or not isinstance(coordinates, Sequence):
        raise InvalidRestriction(f"near requires a (latitude, longitude) pair, got {coordinates!r}")
    if len(coordinates) != 2:
        raise InvalidRestriction(f"near requires exactly two coordinates, got {len(coordinates)}")

    latitude = _expect_number(coordinates[0], "latitude")
    longitude = _expect_number(coordinates[1], "longitude")
    radius = _expect_number(radius_miles, "radius")
    if radius <= 0:
        raise InvalidRestriction(f"near radius must be positive, got {radius_miles!r}")
    return GeoRestriction(latitude=latitude, longitude=longitude, radius_miles=radius)


def _expect_number(value: Any, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (Real, Decimal)):
        raise InvalidRestriction(f"near {name} must be a number, got {value!r}")
    if isinstance(value, Decimal) and not value.is_finite():
        raise InvalidRestriction(f"near {name} must be finite, got {value!r}")
    number = float(value)
    if not math.isfinite(number):
        raise InvalidRestriction(f"near {name} must be finite, got {value!r}")
    return number
