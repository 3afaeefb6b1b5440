# SPDX-License-Identifier: Apache-2.0
"""CLI handler for the interactive globe bundle."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from treatyglobe.cli_common import config_from_namespace, load_markers
from treatyglobe.utils.cli_helpers import apply_verbosity, trace
from treatyglobe.visualization.renderers import available, create


def _renderer_options(ns: Any) -> dict[str, Any]:
    """Translate argparse namespace into renderer keyword options."""

    options: dict[str, Any] = {"auto_rotate": not ns.no_rotate}
    if ns.width is not None:
        options["width"] = ns.width
    if ns.height is not None:
        options["height"] = ns.height
    if ns.texture:
        options["texture"] = ns.texture
    if ns.title:
        options["title"] = ns.title
    if ns.marker_color:
        options["marker_color"] = ns.marker_color
    return options


def handle_globe(ns: Any) -> int:
    """Handle the ``globe`` subcommand."""

    apply_verbosity(ns)

    renderer_slugs = sorted(r.slug for r in available())
    if ns.target not in renderer_slugs:
        raise SystemExit(
            f"Unknown globe renderer '{ns.target}'. Available: {', '.join(renderer_slugs)}"
        )

    config = config_from_namespace(ns)
    _records, markers = load_markers(ns, config)
    renderer = create(
        ns.target, config=config, markers=markers, **_renderer_options(ns)
    )
    trace(f"build {ns.target} -> {ns.output}")
    bundle = renderer.build(output_dir=Path(ns.output))

    logging.info(
        "Generated globe bundle with %d markers at %s",
        bundle.marker_count,
        bundle.index_html,
    )
    if bundle.assets:
        logging.debug(
            "Bundle assets: %s",
            ", ".join(
                str(path.relative_to(bundle.output_dir)) for path in bundle.assets
            ),
        )
    return 0
