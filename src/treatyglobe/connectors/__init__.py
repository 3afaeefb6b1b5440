# SPDX-License-Identifier: Apache-2.0
"""Coordinate lookup connectors."""

from __future__ import annotations

from .countries import CoordinateLookup, CountryLookup, StaticLookup

__all__ = ["CoordinateLookup", "CountryLookup", "StaticLookup"]
