# SPDX-License-Identifier: Apache-2.0
"""Geographic to Cartesian projection onto the globe surface."""

from __future__ import annotations

import math
from dataclasses import dataclass

Vector3 = tuple[float, float, float]

LAT_MIN, LAT_MAX = -90.0, 90.0
LON_MIN, LON_MAX = -180.0, 180.0


class InvalidCoordinate(ValueError):
    """Raised when a latitude/longitude pair is outside the valid range."""


@dataclass(frozen=True, slots=True)
class GeoCoordinate:
    """Latitude/longitude pair in degrees."""

    latitude: float
    longitude: float

    def validate(self) -> GeoCoordinate:
        """Return ``self`` or raise :class:`InvalidCoordinate`."""

        lat, lon = self.latitude, self.longitude
        if not (math.isfinite(lat) and math.isfinite(lon)):
            raise InvalidCoordinate(f"non-finite coordinate: ({lat}, {lon})")
        if not LAT_MIN <= lat <= LAT_MAX:
            raise InvalidCoordinate(f"latitude out of range [-90, 90]: {lat}")
        if not LON_MIN <= lon <= LON_MAX:
            raise InvalidCoordinate(f"longitude out of range [-180, 180]: {lon}")
        return self


def project(coord: GeoCoordinate, radius: float, offset: float = 0.0) -> Vector3:
    """Place ``coord`` on a sphere of ``radius`` lifted by ``offset``.

    Latitude becomes the polar angle measured from +Y (colatitude) and
    longitude the azimuth measured from +X towards +Z, so the north pole sits
    at the top of the globe and ``(0, 0)`` lands on +X.

    Raises
    ------
    InvalidCoordinate
        When latitude or longitude is outside its range.
    ValueError
        When ``radius`` is not positive or ``offset`` is negative.
    """

    coord.validate()
    if not radius > 0:
        raise ValueError(f"radius must be positive: {radius}")
    if not offset >= 0:
        raise ValueError(f"offset must be non-negative: {offset}")

    r = float(radius) + float(offset)
    colatitude = math.radians(90.0 - coord.latitude)
    azimuth = math.radians(coord.longitude)
    sin_colat = math.sin(colatitude)
    return (
        r * sin_colat * math.cos(azimuth),
        r * math.cos(colatitude),
        r * sin_colat * math.sin(azimuth),
    )


def unproject(position: Vector3) -> GeoCoordinate:
    """Recover the latitude/longitude of a point on (or above) the globe."""

    x, y, z = position
    r = math.sqrt(x * x + y * y + z * z)
    if r == 0:
        raise ValueError("cannot unproject the globe centre")
    lat = 90.0 - math.degrees(math.acos(max(-1.0, min(1.0, y / r))))
    lon = math.degrees(math.atan2(z, x)) if (x or z) else 0.0
    return GeoCoordinate(lat, lon)


__all__ = [
    "GeoCoordinate",
    "InvalidCoordinate",
    "Vector3",
    "project",
    "unproject",
]
