# SPDX-License-Identifier: Apache-2.0
"""Argument helpers shared by the treatyglobe subcommands."""

from __future__ import annotations

import argparse
import logging
from typing import Any

from treatyglobe.config import GlobeConfig, load_config
from treatyglobe.connectors import CountryLookup, StaticLookup
from treatyglobe.connectors.countries import CoordinateLookup
from treatyglobe.geometry import Marker
from treatyglobe.scene import build_markers
from treatyglobe.transform.treaties import TreatyRecord, read_treaties
from treatyglobe.utils.cli_helpers import add_verbosity_options


def add_output_option(parser: argparse.ArgumentParser, *, default: str = "-") -> None:
    parser.add_argument(
        "-o",
        "--output",
        default=default,
        help="Output path (use '-' for stdout)",
    )


def add_input_options(parser: argparse.ArgumentParser) -> None:
    """Options for loading the treaty table and resolving coordinates."""

    parser.add_argument(
        "-i", "--input", required=True, help="Treaty table (CSV or tab-separated)"
    )
    parser.add_argument(
        "--delimiter", help="Column delimiter (sniffed from the file when omitted)"
    )
    parser.add_argument(
        "--coords",
        help="JSON file mapping country names to [lat, lon]; skips the online lookup",
    )
    parser.add_argument("--config", help="YAML config file (default ~/.treatyglobe.yaml)")
    parser.add_argument("--api-base", dest="api_base", help="Country lookup base URL")
    parser.add_argument("--timeout", type=float, help="Lookup request timeout (seconds)")
    parser.add_argument("--radius", dest="globe_radius", type=float, help="Globe radius")
    parser.add_argument(
        "--marker-offset", dest="marker_offset", type=float, help="Marker height above the globe"
    )
    parser.add_argument(
        "--hit-radius", dest="hit_radius", type=float, help="Pointer hit tolerance around markers"
    )
    add_verbosity_options(parser)


def config_from_namespace(ns: argparse.Namespace, **extra: Any) -> GlobeConfig:
    overrides = {
        "api_base": getattr(ns, "api_base", None),
        "timeout": getattr(ns, "timeout", None),
        "globe_radius": getattr(ns, "globe_radius", None),
        "marker_offset": getattr(ns, "marker_offset", None),
        "hit_radius": getattr(ns, "hit_radius", None),
    }
    overrides.update(extra)
    return load_config(getattr(ns, "config", None), **overrides)


def lookup_from_namespace(ns: argparse.Namespace, config: GlobeConfig) -> CoordinateLookup:
    if getattr(ns, "coords", None):
        return StaticLookup.from_file(ns.coords)
    return CountryLookup(
        config.api_base, timeout=config.timeout, max_retries=config.max_retries
    )


def load_markers(
    ns: argparse.Namespace, config: GlobeConfig
) -> tuple[list[TreatyRecord], list[Marker]]:
    """Read the treaty table named by ``ns`` and place its markers."""

    records = read_treaties(ns.input, delimiter=getattr(ns, "delimiter", None))
    lookup = lookup_from_namespace(ns, config)
    markers = build_markers(records, lookup, config)
    logging.debug("Loaded %d records, %d markers", len(records), len(markers))
    return records, markers
