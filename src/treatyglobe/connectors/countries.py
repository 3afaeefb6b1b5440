# SPDX-License-Identifier: Apache-2.0
"""Country name to coordinate lookups.

:class:`CountryLookup` queries the REST Countries API and reads the
``latlng`` pair of the first match. :class:`StaticLookup` serves the same
contract from an in-memory mapping or a JSON file for offline runs.

Both return ``None`` when a coordinate is not available; a missing country
is never an error.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Mapping, Protocol
from urllib.parse import quote

import requests

from treatyglobe.config import DEFAULT_API_BASE
from treatyglobe.geometry.projection import GeoCoordinate

from .backends import api as api_backend

LOGGER = logging.getLogger(__name__)


class CoordinateLookup(Protocol):
    def lookup(self, name: str) -> GeoCoordinate | None: ...


def _coerce_latlng(value: Any) -> GeoCoordinate | None:
    if not isinstance(value, (list, tuple)) or len(value) < 2:
        return None
    try:
        coord = GeoCoordinate(float(value[0]), float(value[1]))
        return coord.validate()
    except (TypeError, ValueError):
        # InvalidCoordinate subclasses ValueError
        return None


class CountryLookup:
    """Resolve country names through the REST Countries ``/name`` endpoint."""

    def __init__(
        self,
        base_url: str = DEFAULT_API_BASE,
        *,
        timeout: float = 10.0,
        max_retries: int = 2,
    ) -> None:
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self.timeout = timeout
        self.max_retries = max_retries
        self._cache: dict[str, GeoCoordinate | None] = {}

    def lookup(self, name: str) -> GeoCoordinate | None:
        key = (name or "").strip()
        if not key:
            return None
        if key in self._cache:
            return self._cache[key]
        coord = self._fetch(key)
        self._cache[key] = coord
        return coord

    def _fetch(self, name: str) -> GeoCoordinate | None:
        url = self.base_url + quote(name, safe="")
        try:
            status, _headers, content = api_backend.request_with_retries(
                "GET", url, timeout=self.timeout, max_retries=self.max_retries
            )
        except requests.RequestException as exc:
            LOGGER.warning("Coordinate lookup failed for %s: %s", name, exc)
            return None
        if status == 404:
            LOGGER.warning("No coordinates found for %s", name)
            return None
        if status >= 400:
            LOGGER.warning("Coordinate lookup for %s returned HTTP %s", name, status)
            return None
        body = api_backend.json_loads(content)
        if not isinstance(body, list) or not body:
            LOGGER.warning("No coordinates found for %s", name)
            return None
        first = body[0]
        coord = _coerce_latlng(first.get("latlng") if isinstance(first, dict) else None)
        if coord is None:
            LOGGER.warning("Malformed coordinates for %s: %r", name, first)
        return coord


class StaticLookup:
    """Lookup backed by a ``{name: [lat, lon]}`` mapping."""

    def __init__(self, mapping: Mapping[str, Any]) -> None:
        self._coords: dict[str, GeoCoordinate | None] = {}
        for name, value in mapping.items():
            coord = _coerce_latlng(value)
            if coord is None:
                LOGGER.warning("Ignoring invalid coordinates for %s: %r", name, value)
            self._coords[str(name).strip()] = coord

    @classmethod
    def from_file(cls, path: str | Path) -> StaticLookup:
        p = Path(path).expanduser()
        if not p.is_file():
            raise FileNotFoundError(f"Coordinates file not found: {p}")
        data = json.loads(p.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"Coordinates file must contain an object: {p}")
        return cls(data)

    def lookup(self, name: str) -> GeoCoordinate | None:
        coord = self._coords.get((name or "").strip())
        if coord is None:
            LOGGER.warning("No coordinates found for %s", name)
        return coord


__all__ = ["CoordinateLookup", "CountryLookup", "StaticLookup"]
