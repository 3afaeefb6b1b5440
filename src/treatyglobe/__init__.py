# SPDX-License-Identifier: Apache-2.0
"""Interactive 3D globe of bilateral treaty records."""

from __future__ import annotations

__version__ = "0.1.0"
