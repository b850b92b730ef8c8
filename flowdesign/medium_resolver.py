"""Resolve free-text medium names against the reference table."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .reference_table import ReferenceTable, default_reference_table

logger = logging.getLogger(__name__)

DEFAULT_VELOCITY = 1.5
UNKNOWN_CATEGORY = "未知"
UNKNOWN_RECOMMENDATION = "请根据实际情况确定流速"

MATCH_EXACT = "exact"
MATCH_FUZZY = "fuzzy"
MATCH_DEFAULT = "default"


@dataclass(frozen=True)
class Resolution:
    velocity: float
    category: str
    recommendation: str
    matched_name: Optional[str] = None
    match_kind: str = MATCH_DEFAULT


class MediumResolver:
    """Look up the recommended velocity for a medium.

    Exact key match wins. Otherwise the first reference name (in table
    order) that contains the text, or is contained in it, is used. Unknown
    media fall back to 1.5 m/s with the "未知" category.
    """

    def __init__(self, table: ReferenceTable | None = None):
        self.table = table if table is not None else default_reference_table()

    def resolve(self, medium_text: str) -> Resolution:
        medium = (medium_text or "").strip()

        entry = self.table.lookup(medium)
        if entry is not None:
            return Resolution(
                entry.midpoint, entry.category, entry.recommendation, medium, MATCH_EXACT
            )

        # An empty string is a substring of every key; treat it as unknown.
        if medium:
            for name, candidate in self.table.items():
                if name in medium or medium in name:
                    logger.debug("Fuzzy matched medium %r to %r", medium, name)
                    return Resolution(
                        candidate.midpoint,
                        candidate.category,
                        candidate.recommendation,
                        name,
                        MATCH_FUZZY,
                    )

        return Resolution(DEFAULT_VELOCITY, UNKNOWN_CATEGORY, UNKNOWN_RECOMMENDATION)
