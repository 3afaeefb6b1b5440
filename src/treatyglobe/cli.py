# SPDX-License-Identifier: Apache-2.0
"""Command-line entry point: ``treatyglobe {markers,globe,pick}``."""

from __future__ import annotations

import argparse
import json
import sys

from treatyglobe.cli_common import (
    add_input_options,
    add_output_option,
    config_from_namespace,
    load_markers,
)
from treatyglobe.config import ConfigError
from treatyglobe.scene import GlobeSession, marker_payload
from treatyglobe.transform.treaties import TreatyTableError
from treatyglobe.utils.cli_helpers import apply_verbosity
from treatyglobe.utils.io_utils import open_output


def _write_json(path: str, payload: object) -> None:
    data = (json.dumps(payload, indent=2, ensure_ascii=False) + "\n").encode("utf-8")
    with open_output(path) as f:
        f.write(data)


def _cmd_markers(ns: argparse.Namespace) -> int:
    """CLI: resolve and project every treaty record, writing marker JSON."""
    apply_verbosity(ns)
    config = config_from_namespace(ns)
    _records, markers = load_markers(ns, config)
    _write_json(ns.output, [marker_payload(m) for m in markers])
    return 0


def _cmd_pick(ns: argparse.Namespace) -> int:
    """CLI: report which marker (if any) sits under a pointer position."""
    apply_verbosity(ns)
    config = config_from_namespace(ns, width=ns.width, height=ns.height)
    _records, markers = load_markers(ns, config)
    session = GlobeSession(config=config, markers=markers)
    if ns.frames:
        session.advance(ns.frames)
    tooltip = session.on_pointer_move(ns.x, ns.y)
    _write_json(ns.output, tooltip.to_dict())
    return 0


def _build_parser() -> argparse.ArgumentParser:
    from treatyglobe.visualization import register_cli as register_visualization

    parser = argparse.ArgumentParser(
        prog="treatyglobe",
        description="Place bilateral treaty records on an interactive 3D globe.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_markers = sub.add_parser(
        "markers",
        help="Write projected marker positions as JSON",
        description="Resolve each record's counterparty country and emit globe positions.",
    )
    add_input_options(p_markers)
    add_output_option(p_markers)
    p_markers.set_defaults(func=_cmd_markers)

    p_pick = sub.add_parser(
        "pick",
        help="Resolve a pointer position to the treaty under it",
        description=(
            "Cast a ray from the default camera through pixel (x, y) and print "
            "the tooltip for the nearest marker hit, or {\"visible\": false}."
        ),
    )
    add_input_options(p_pick)
    add_output_option(p_pick)
    p_pick.add_argument("--x", type=float, required=True, help="Pointer x in pixels")
    p_pick.add_argument("--y", type=float, required=True, help="Pointer y in pixels")
    p_pick.add_argument("--width", type=int, help="Viewport width in pixels")
    p_pick.add_argument("--height", type=int, help="Viewport height in pixels")
    p_pick.add_argument(
        "--frames",
        type=int,
        default=0,
        help="Animation frames elapsed (globe spin) before the pointer event",
    )
    p_pick.set_defaults(func=_cmd_pick)

    register_visualization(sub)
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    ns = parser.parse_args(argv)
    try:
        return int(ns.func(ns) or 0)
    except (ConfigError, TreatyTableError, FileNotFoundError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":  # pragma: no cover - exercised via console script
    raise SystemExit(main())
