# SPDX-License-Identifier: Apache-2.0
"""Lightweight serializers for marker payloads (dataclasses, tuples, mappings)."""

from __future__ import annotations

from dataclasses import asdict, is_dataclass
from typing import Any


def to_obj(x: Any) -> Any:
    """Convert a value to a JSON-serializable object when possible.

    - Dataclass instances → asdict
    - Tuples → lists (positions stay arrays in JSON)
    - Mappings and primitives are returned as-is
    """
    if is_dataclass(x) and not isinstance(x, type):
        return asdict(x)
    if isinstance(x, tuple):
        return [to_obj(v) for v in x]
    return x

