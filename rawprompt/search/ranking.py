"""Fuzzy and substring ranking for searchable prompts.

Matching is case-insensitive and character-by-character, so returned indices
always point into the original text even when casing differs.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")

MATCH_HIGHLIGHT = "\033[1;38;5;229m"
RESET = "\033[0m"

WORD_BOUNDARY_CHARS = frozenset(" -_/.")

SPAN_BASE_SCORE = 100_000
SPAN_PENALTY = 300
CONTIGUOUS_BONUS = 1200
EARLY_START_BONUS = 8000
EARLY_START_PENALTY = 200
WORD_BOUNDARY_BONUS = 2500
EXACT_CASE_BONUS = 150
SUBSTRING_POSITION_PENALTY = 100


@dataclass(frozen=True)
class RankResult:
    score: int
    indices: tuple[int, ...] = ()


@dataclass(frozen=True)
class RankedItem(Generic[T]):
    item: T
    score: int
    indices: tuple[int, ...] = ()


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))


def fuzzy_match(text: str, pattern: str) -> RankResult | None:
    """Score ``pattern`` as an in-order subsequence of ``text``.

    Each pattern char takes the earliest unmatched occurrence after the
    previous one. Tight spans, adjacent hits, early starts, a start on a word
    boundary, and exact-case hits all raise the score.
    """
    if not pattern:
        return RankResult(0, ())

    matched: list[int] = []
    pos = 0
    for needle in pattern.lower():
        while pos < len(text) and text[pos].lower() != needle:
            pos += 1
        if pos >= len(text):
            return None
        matched.append(pos)
        pos += 1

    first = matched[0]
    span = matched[-1] - first + 1
    score = _clamp(SPAN_BASE_SCORE - span * SPAN_PENALTY, 0, SPAN_BASE_SCORE)
    score += CONTIGUOUS_BONUS * sum(1 for prev, cur in zip(matched, matched[1:]) if cur == prev + 1)
    score += _clamp(EARLY_START_BONUS - first * EARLY_START_PENALTY, 0, EARLY_START_BONUS)
    before = text[first - 1] if first > 0 else " "
    if before in WORD_BOUNDARY_CHARS:
        score += WORD_BOUNDARY_BONUS
    score += EXACT_CASE_BONUS * sum(1 for i, idx in enumerate(matched) if text[idx] == pattern[i])
    return RankResult(score, tuple(matched))


def substring_match(text: str, pattern: str) -> RankResult | None:
    """Score a contiguous case-insensitive hit; earlier hits score higher."""
    if not pattern:
        return RankResult(0, ())
    lowered = pattern.lower()
    width = len(pattern)
    for idx in range(len(text) - width + 1):
        if text[idx : idx + width].lower() == lowered:
            return RankResult(SPAN_BASE_SCORE - idx * SUBSTRING_POSITION_PENALTY, tuple(range(idx, idx + width)))
    return None


def standard_match(text: str, pattern: str, use_fuzzy: bool = True) -> RankResult | None:
    return fuzzy_match(text, pattern) if use_fuzzy else substring_match(text, pattern)


def rank_items(
    items: Iterable[T],
    query: str,
    label: Callable[[T], str],
    use_fuzzy: bool = True,
    rank: Callable[[T, str, bool], RankResult | None] | None = None,
) -> list[RankedItem[T]]:
    """Filter and order ``items`` against ``query``.

    An empty query keeps every item, in input order, with score 0. Otherwise
    non-matching items are dropped and the rest sorted by score descending,
    ties broken by case-insensitive label. ``rank`` overrides the default
    matcher applied to ``label(item)``.
    """
    if not query:
        return [RankedItem(item, 0, ()) for item in items]

    ranked: list[RankedItem[T]] = []
    for item in items:
        if rank is not None:
            result = rank(item, query, use_fuzzy)
        else:
            result = standard_match(label(item), query, use_fuzzy)
        if result is not None:
            ranked.append(RankedItem(item, result.score, result.indices))
    ranked.sort(key=lambda entry: (-entry.score, label(entry.item).lower()))
    return ranked


def highlight_spans(
    text: str,
    indices: Sequence[int],
    start: str = MATCH_HIGHLIGHT,
    end: str = RESET,
) -> str:
    """Wrap each run of matched characters in ``start``/``end`` codes."""
    if not indices:
        return text
    hits = set(indices)
    out: list[str] = []
    in_span = False
    for i, ch in enumerate(text):
        is_hit = i in hits
        if is_hit and not in_span:
            out.append(start)
            in_span = True
        elif not is_hit and in_span:
            out.append(end)
            in_span = False
        out.append(ch)
    if in_span:
        out.append(end)
    return "".join(out)
