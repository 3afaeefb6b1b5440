# SPDX-License-Identifier: Apache-2.0
"""Perspective camera and screen-to-ray unprojection."""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from .picking import Ray
from .projection import Vector3


def perspective(fovy: float, aspect: float, z_near: float, z_far: float) -> np.ndarray:
    """OpenGL-style projection matrix; ``fovy`` in radians."""

    f = 1.0 / math.tan(fovy / 2.0)
    return np.asarray(
        [
            [f / aspect, 0.0, 0.0, 0.0],
            [0.0, f, 0.0, 0.0],
            [
                0.0,
                0.0,
                (z_far + z_near) / (z_near - z_far),
                (2.0 * z_far * z_near) / (z_near - z_far),
            ],
            [0.0, 0.0, -1.0, 0.0],
        ],
        dtype=float,
    )


def look_at(eye: np.ndarray, target: np.ndarray, up: np.ndarray) -> np.ndarray:
    forward = target - eye
    forward = forward / np.linalg.norm(forward)
    right = np.cross(forward, up)
    right = right / np.linalg.norm(right)
    true_up = np.cross(right, forward)

    view = np.identity(4, dtype=float)
    view[0, :3] = right
    view[1, :3] = true_up
    view[2, :3] = -forward
    view[0, 3] = -np.dot(right, eye)
    view[1, 3] = -np.dot(true_up, eye)
    view[2, 3] = np.dot(forward, eye)
    return view


@dataclass
class Camera:
    """Perspective camera looking at ``target`` from ``position``.

    ``fov`` is the vertical field of view in degrees.
    """

    fov: float = 75.0
    aspect: float = 16 / 9
    near: float = 0.1
    far: float = 1000.0
    position: Vector3 = (0.0, 0.0, 10.0)
    target: Vector3 = (0.0, 0.0, 0.0)
    up: Vector3 = (0.0, 1.0, 0.0)

    def projection_matrix(self) -> np.ndarray:
        return perspective(math.radians(self.fov), self.aspect, self.near, self.far)

    def view_matrix(self) -> np.ndarray:
        return look_at(
            np.asarray(self.position, dtype=float),
            np.asarray(self.target, dtype=float),
            np.asarray(self.up, dtype=float),
        )

    @staticmethod
    def ndc(
        screen_x: float, screen_y: float, width: float, height: float
    ) -> tuple[float, float]:
        """Convert pixel coordinates (origin top-left) to normalized device coordinates."""

        if width <= 0 or height <= 0:
            raise ValueError(f"viewport must be non-empty: {width}x{height}")
        return (screen_x / width) * 2 - 1, -(screen_y / height) * 2 + 1

    def ray_from_screen(
        self, screen_x: float, screen_y: float, width: float, height: float
    ) -> Ray:
        """Build the world-space pointer ray through pixel ``(screen_x, screen_y)``."""

        ndc_x, ndc_y = self.ndc(screen_x, screen_y, width, height)
        inv_vp = np.linalg.inv(self.projection_matrix() @ self.view_matrix())

        near_world = inv_vp @ np.array([ndc_x, ndc_y, -1.0, 1.0])
        far_world = inv_vp @ np.array([ndc_x, ndc_y, 1.0, 1.0])
        near_world = near_world[:3] / near_world[3]
        far_world = far_world[:3] / far_world[3]

        # Rays start at the eye, not the near plane, so distances are eye-relative.
        origin = tuple(float(v) for v in self.position)
        direction = tuple(float(v) for v in far_world - near_world)
        return Ray(origin, direction)


__all__ = ["Camera", "look_at", "perspective"]
