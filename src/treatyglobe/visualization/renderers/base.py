# SPDX-License-Identifier: Apache-2.0
"""Base interfaces for globe bundle renderers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Sequence

from treatyglobe.config import GlobeConfig
from treatyglobe.geometry import Marker


@dataclass(slots=True)
class InteractiveBundle:
    """Files written by a renderer into ``output_dir``."""

    output_dir: Path
    index_html: Path
    marker_count: int = 0
    assets: Sequence[Path] = field(default_factory=tuple)


class InteractiveRenderer(ABC):
    """Turns placed markers into a self-contained browser bundle."""

    slug: str = "interactive"
    description: str = ""

    def __init__(
        self,
        *,
        config: GlobeConfig | None = None,
        markers: Sequence[Marker] = (),
        **options: Any,
    ) -> None:
        self.config = config or GlobeConfig()
        self.markers: list[Marker] = list(markers)
        self._options: dict[str, Any] = dict(options)

    @abstractmethod
    def build(self, *, output_dir: Path) -> InteractiveBundle:
        """Generate the bundle inside ``output_dir``."""
