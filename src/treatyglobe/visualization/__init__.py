# SPDX-License-Identifier: Apache-2.0
from typing import Any

from .cli_globe import handle_globe
from .renderers import InteractiveBundle, InteractiveRenderer, available, create

__all__ = [
    "InteractiveBundle",
    "InteractiveRenderer",
    "available",
    "create",
    "handle_globe",
    "register_cli",
]


def register_cli(subparsers: Any) -> None:
    """Register the ``globe`` subcommand under a provided subparsers object."""

    from treatyglobe.cli_common import add_input_options

    p = subparsers.add_parser(
        "globe",
        help="Build an interactive treaty globe bundle",
        description=(
            "Read a treaty table, place one marker per resolved counterparty "
            "country and write a standalone Three.js bundle with hover tooltips."
        ),
    )
    add_input_options(p)
    p.add_argument("-o", "--output", required=True, help="Bundle output directory")
    p.add_argument(
        "--target",
        default="webgl-treaty-globe",
        help="Renderer slug (default: webgl-treaty-globe)",
    )
    p.add_argument("--texture", help="Earth texture image path or URL")
    p.add_argument("--title", help="Page title")
    p.add_argument("--width", type=int, help="Fixed canvas width in pixels")
    p.add_argument("--height", type=int, help="Fixed canvas height in pixels")
    p.add_argument("--marker-color", dest="marker_color", help="Marker CSS color")
    p.add_argument(
        "--no-rotate",
        dest="no_rotate",
        action="store_true",
        help="Disable the globe's idle rotation",
    )
    p.set_defaults(func=handle_globe)
