"""Query matching and ranking for searchable lists."""

from __future__ import annotations

from .ranking import (
    RankedItem,
    RankResult,
    fuzzy_match,
    highlight_spans,
    rank_items,
    standard_match,
    substring_match,
)

__all__ = [
    "RankResult",
    "RankedItem",
    "fuzzy_match",
    "highlight_spans",
    "rank_items",
    "standard_match",
    "substring_match",
]
