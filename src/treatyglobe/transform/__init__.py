# SPDX-License-Identifier: Apache-2.0
"""Treaty table ingestion."""

from __future__ import annotations

from .treaties import TreatyRecord, TreatyTableError, read_treaties

__all__ = ["TreatyRecord", "TreatyTableError", "read_treaties"]
