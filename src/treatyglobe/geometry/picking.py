# SPDX-License-Identifier: Apache-2.0
"""Ray picking against spherical marker hit volumes."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Sequence

import numpy as np

from .projection import Vector3

_EPS = 1e-12


@dataclass(frozen=True, slots=True)
class Marker:
    """A positioned record on the globe with a spherical hit volume."""

    position: Vector3
    hit_radius: float
    record: Any = None

    def __post_init__(self) -> None:
        if not self.hit_radius > 0:
            raise ValueError(f"hit_radius must be positive: {self.hit_radius}")
        object.__setattr__(
            self, "position", tuple(float(v) for v in self.position)
        )


@dataclass(frozen=True, slots=True)
class Ray:
    """Half-line from ``origin`` along ``direction``.

    The direction is normalized on construction. A zero-length direction is
    kept as ``(0, 0, 0)`` and never intersects anything.
    """

    origin: Vector3
    direction: Vector3

    def __post_init__(self) -> None:
        origin = tuple(float(v) for v in self.origin)
        dx, dy, dz = (float(v) for v in self.direction)
        norm = math.sqrt(dx * dx + dy * dy + dz * dz)
        if norm > _EPS:
            direction = (dx / norm, dy / norm, dz / norm)
        else:
            direction = (0.0, 0.0, 0.0)
        object.__setattr__(self, "origin", origin)
        object.__setattr__(self, "direction", direction)

    @property
    def degenerate(self) -> bool:
        return self.direction == (0.0, 0.0, 0.0)

    def at(self, distance: float) -> Vector3:
        """Return the point ``distance`` units along the ray."""

        ox, oy, oz = self.origin
        dx, dy, dz = self.direction
        return (ox + dx * distance, oy + dy * distance, oz + dz * distance)

    def rotated_y(self, angle: float) -> Ray:
        """Return this ray rotated by ``angle`` radians about the +Y axis."""

        c, s = math.cos(angle), math.sin(angle)

        def _rot(v: Vector3) -> Vector3:
            x, y, z = v
            return (c * x + s * z, y, -s * x + c * z)

        return Ray(_rot(self.origin), _rot(self.direction))


@dataclass(frozen=True, slots=True)
class PickResult:
    marker: Marker
    distance_along_ray: float
    point: Vector3


def pick(ray: Ray, markers: Sequence[Marker]) -> PickResult | None:
    """Return the marker whose hit sphere the ray enters first, or ``None``.

    Markers behind the ray origin are ignored. Among intersected markers the
    one with the smallest entry distance wins; equal distances resolve to the
    marker that appears first in ``markers``.
    """

    if not markers or ray.degenerate:
        return None

    origin = np.asarray(ray.origin, dtype=float)
    direction = np.asarray(ray.direction, dtype=float)
    positions = np.asarray([m.position for m in markers], dtype=float)
    radii = np.asarray([m.hit_radius for m in markers], dtype=float)

    to_marker = positions - origin
    along = to_marker @ direction
    perp_sq = np.maximum(np.einsum("ij,ij->i", to_marker, to_marker) - along**2, 0.0)
    radii_sq = radii**2

    hit = (along >= 0.0) & (perp_sq <= radii_sq)
    if not hit.any():
        return None

    half_chord = np.sqrt(np.where(hit, radii_sq - perp_sq, 0.0))
    entry = np.maximum(along - half_chord, 0.0)
    entry = np.where(hit, entry, np.inf)

    idx = int(np.argmin(entry))
    distance = float(entry[idx])
    return PickResult(
        marker=markers[idx],
        distance_along_ray=distance,
        point=ray.at(distance),
    )


__all__ = ["Marker", "PickResult", "Ray", "pick"]
