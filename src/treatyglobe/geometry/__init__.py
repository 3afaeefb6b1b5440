# SPDX-License-Identifier: Apache-2.0
"""Globe geometry: projection, camera rays and marker picking."""

from __future__ import annotations

from .camera import Camera, look_at, perspective
from .picking import Marker, PickResult, Ray, pick
from .projection import GeoCoordinate, InvalidCoordinate, Vector3, project, unproject

__all__ = [
    "Camera",
    "GeoCoordinate",
    "InvalidCoordinate",
    "Marker",
    "PickResult",
    "Ray",
    "Vector3",
    "look_at",
    "perspective",
    "pick",
    "project",
    "unproject",
]
