# SPDX-License-Identifier: Apache-2.0
"""Globe session state: marker building and pointer hover handling.

A :class:`GlobeSession` holds everything the event handlers need (config,
camera, viewport, markers and the globe's spin) so handlers receive it
explicitly instead of reaching for module globals.
"""

from __future__ import annotations

import html
import logging
from dataclasses import dataclass, field
from typing import Any, Iterable

from treatyglobe.config import GlobeConfig
from treatyglobe.connectors.countries import CoordinateLookup
from treatyglobe.geometry import (
    Camera,
    InvalidCoordinate,
    Marker,
    PickResult,
    pick,
    project,
    unproject,
)
from treatyglobe.transform.treaties import TreatyRecord
from treatyglobe.utils.serialize import to_obj

LOGGER = logging.getLogger(__name__)

TOOLTIP_OFFSET = (10, -10)


@dataclass(frozen=True)
class Tooltip:
    visible: bool
    left: float = 0.0
    top: float = 0.0
    lines: tuple[str, ...] = ()
    record: Any = None

    @classmethod
    def hidden(cls) -> Tooltip:
        return cls(visible=False)

    def to_dict(self) -> dict[str, Any]:
        if not self.visible:
            return {"visible": False}
        return {
            "visible": True,
            "left": self.left,
            "top": self.top,
            "lines": list(self.lines),
            "record": to_obj(self.record),
        }


def format_tooltip(record: Any) -> tuple[str, ...]:
    """Return the tooltip lines for a treaty record.

    The first line is the counterparty country; the rest are labelled
    ``field: value`` pairs. Records that are not :class:`TreatyRecord` are
    rendered with ``str()``.
    """

    if not isinstance(record, TreatyRecord):
        return (str(record),)
    return (
        record.country,
        f"분야: {record.field}",
        f"조약명: {record.title}",
        f"서명/교환일: {record.signed}",
        f"발효일: {record.effective}",
    )


def tooltip_html(lines: Iterable[str]) -> str:
    """Render tooltip lines as escaped HTML with a bold heading."""

    items = [html.escape(line) for line in lines]
    if not items:
        return ""
    return "<br>".join([f"<b>{items[0]}</b>", *items[1:]])


def build_markers(
    records: Iterable[TreatyRecord],
    lookup: CoordinateLookup,
    config: GlobeConfig,
) -> list[Marker]:
    """Resolve, project and wrap each record as a :class:`Marker`.

    Records whose country has no coordinate, or whose coordinate is out of
    range, are skipped with a warning. Record order is preserved and each
    distinct country name is looked up once.
    """

    resolved: dict[str, Any] = {}
    markers: list[Marker] = []
    skipped = 0
    for record in records:
        name = record.country
        if name not in resolved:
            resolved[name] = lookup.lookup(name)
        coord = resolved[name]
        if coord is None:
            skipped += 1
            continue
        try:
            position = project(coord, config.globe_radius, config.marker_offset)
        except InvalidCoordinate as exc:
            LOGGER.warning("Skipping %s: %s", name, exc)
            skipped += 1
            continue
        markers.append(Marker(position, config.hit_radius, record))
    LOGGER.info("Placed %d markers (%d records skipped)", len(markers), skipped)
    return markers


def marker_payload(marker: Marker) -> dict[str, Any]:
    """JSON-ready description of a marker for the browser bundle."""

    coord = unproject(marker.position)
    lines = format_tooltip(marker.record)
    return {
        "position": list(marker.position),
        "lat": round(coord.latitude, 6),
        "lon": round(coord.longitude, 6),
        "hit_radius": marker.hit_radius,
        "lines": list(lines),
        "html": tooltip_html(lines),
        "record": to_obj(marker.record),
    }


@dataclass
class GlobeSession:
    """Mutable application context shared by render and pointer handlers.

    Markers are appended between events only; :meth:`on_pointer_move` reads
    them without copying.
    """

    config: GlobeConfig = field(default_factory=GlobeConfig)
    markers: list[Marker] = field(default_factory=list)
    width: int = 0
    height: int = 0
    spin: float = 0.0
    camera: Camera = field(init=False)

    def __post_init__(self) -> None:
        self.width = self.width or self.config.width
        self.height = self.height or self.config.height
        self.camera = Camera(
            fov=self.config.fov,
            aspect=self.width / self.height,
            near=self.config.near,
            far=self.config.far,
            position=(0.0, 0.0, self.config.camera_distance),
        )

    def add_marker(self, marker: Marker) -> None:
        self.markers.append(marker)

    def extend(self, markers: Iterable[Marker]) -> None:
        self.markers.extend(markers)

    def resize(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"viewport must be non-empty: {width}x{height}")
        self.width, self.height = width, height
        self.camera.aspect = width / height

    def advance(self, frames: int = 1) -> float:
        """Spin the globe by ``frames`` animation steps; returns the new angle."""

        self.spin += self.config.rotation_speed * frames
        return self.spin

    def pick_at(self, screen_x: float, screen_y: float) -> PickResult | None:
        ray = self.camera.ray_from_screen(screen_x, screen_y, self.width, self.height)
        # Markers are stored in the globe's frame; undo the spin on the ray.
        return pick(ray.rotated_y(-self.spin), self.markers)

    def on_pointer_move(self, screen_x: float, screen_y: float) -> Tooltip:
        hit = self.pick_at(screen_x, screen_y)
        if hit is None:
            return Tooltip.hidden()
        record = hit.marker.record
        LOGGER.debug(
            "Pointer (%s, %s) hit %r at %.3f",
            screen_x,
            screen_y,
            getattr(record, "country", record),
            hit.distance_along_ray,
        )
        dx, dy = TOOLTIP_OFFSET
        return Tooltip(
            visible=True,
            left=screen_x + dx,
            top=screen_y + dy,
            lines=format_tooltip(record),
            record=record,
        )


__all__ = [
    "GlobeSession",
    "Tooltip",
    "build_markers",
    "format_tooltip",
    "marker_payload",
    "tooltip_html",
]
