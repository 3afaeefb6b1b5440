# SPDX-License-Identifier: Apache-2.0
"""Slug-keyed registry of globe renderers."""

from __future__ import annotations

from typing import Any, Iterable, TypeVar

from .base import InteractiveRenderer

_RendererT = TypeVar("_RendererT", bound=InteractiveRenderer)

_REGISTRY: dict[str, type[InteractiveRenderer]] = {}


def register(renderer_cls: type[_RendererT]) -> type[_RendererT]:
    """Class decorator registering ``renderer_cls`` under its ``slug``."""

    if not issubclass(renderer_cls, InteractiveRenderer):
        raise TypeError("renderer must inherit InteractiveRenderer")
    slug = renderer_cls.slug
    if not slug:
        raise ValueError("renderer slug must be non-empty")
    if _REGISTRY.get(slug, renderer_cls) is not renderer_cls:
        raise ValueError(f"renderer slug already registered: {slug}")
    _REGISTRY[slug] = renderer_cls
    return renderer_cls


def get(slug: str) -> type[InteractiveRenderer]:
    try:
        return _REGISTRY[slug]
    except KeyError as exc:
        known = ", ".join(sorted(_REGISTRY)) or "none"
        raise KeyError(f"unknown renderer slug: {slug} (available: {known})") from exc


def create(slug: str, **options: Any) -> InteractiveRenderer:
    """Instantiate the renderer registered under ``slug``."""

    return get(slug)(**options)


def available() -> Iterable[type[InteractiveRenderer]]:
    return tuple(_REGISTRY.values())
