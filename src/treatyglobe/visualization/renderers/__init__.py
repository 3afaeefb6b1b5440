# SPDX-License-Identifier: Apache-2.0
"""Globe bundle renderers."""

from __future__ import annotations

from . import webgl_globe as _webgl_globe  # noqa: F401
from .base import InteractiveBundle, InteractiveRenderer
from .registry import available, create, get, register

__all__ = [
    "InteractiveBundle",
    "InteractiveRenderer",
    "available",
    "create",
    "get",
    "register",
]
