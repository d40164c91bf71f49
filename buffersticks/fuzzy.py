"""Subsequence fuzzy matching with tight-span scoring.

A candidate matches when the query letters appear in it in order. Among all
placements the one with the narrowest span wins; candidates are then ordered
by ``cutoff * span_width + min(first, cutoff)`` so tight clusters that start
early come first. Matching is case-insensitive for all-lowercase queries.
"""

from __future__ import annotations

from collections.abc import Sequence

DEFAULT_CUTOFF = 100


def is_smart_case_insensitive(query: str) -> bool:
    return query == query.lower()


def find_best_positions(query: str, candidate: str, cutoff: int = DEFAULT_CUTOFF) -> list[int] | None:
    """Return 0-based match positions of the tightest placement, or ``None``.

    Comparison is exact; callers fold case beforehand. The empty query matches
    with no positions.
    """
    n_letters = len(query)
    if n_letters == 0:
        return []
    if len(candidate) < n_letters:
        return None

    # Left-most placement; its last position is the first possible last-letter match.
    pos_last = -1
    for letter in query:
        pos_last = candidate.find(letter, pos_last + 1)
        if pos_last < 0:
            return None

    if n_letters == 1:
        return [pos_last]

    best_last = pos_last
    best_width: int | None = None
    last_letter = query[-1]
    while pos_last >= 0:
        first = pos_last
        for letter in reversed(query[:-1]):
            first = candidate.rfind(letter, 0, first)
            if first < 0:
                break
        if first >= 0:
            width = min(pos_last - first + 1, cutoff)
            if best_width is None or width < best_width:
                best_last, best_width = pos_last, width
        pos_last = candidate.find(last_letter, pos_last + 1)

    positions = [best_last]
    pos = best_last
    for letter in reversed(query[:-1]):
        pos = candidate.rfind(letter, 0, pos)
        positions.append(pos)
    positions.reverse()
    return positions


def score_positions(positions: Sequence[int], cutoff: int = DEFAULT_CUTOFF) -> int:
    """Lower is better. The empty placement scores ``-1``."""
    if not positions:
        return -1
    first, last = positions[0], positions[-1]
    return cutoff * min(last - first + 1, cutoff) + min(first, cutoff)


def fuzzy_score(query: str, candidate: str, cutoff: int = DEFAULT_CUTOFF) -> int | None:
    """Smart-case score of ``candidate`` against ``query``; ``None`` when unmatched."""
    if is_smart_case_insensitive(query):
        candidate = candidate.lower()
    positions = find_best_positions(query, candidate, cutoff)
    if positions is None:
        return None
    return score_positions(positions, cutoff)


def fuzzy_filter_sort(
    query: str,
    candidates: Sequence[str],
    cutoff: int = DEFAULT_CUTOFF,
) -> list[tuple[str, int]]:
    """Rank ``candidates`` against ``query``.

    Returns ``(candidate, original_index)`` pairs for matching candidates,
    best first; equal scores keep input order.
    """
    fold = is_smart_case_insensitive(query)
    scored: list[tuple[int, int]] = []
    for idx, candidate in enumerate(candidates):
        haystack = candidate.lower() if fold else candidate
        positions = find_best_positions(query, haystack, cutoff)
        if positions is None:
            continue
        scored.append((score_positions(positions, cutoff), idx))
    scored.sort()
    return [(candidates[idx], idx) for _score, idx in scored]


def fuzzy_match_indices(query: str, candidates: Sequence[str], cutoff: int = DEFAULT_CUTOFF) -> list[int]:
    return [idx for _candidate, idx in fuzzy_filter_sort(query, candidates, cutoff)]


__all__ = [
    "DEFAULT_CUTOFF",
    "find_best_positions",
    "fuzzy_filter_sort",
    "fuzzy_match_indices",
    "fuzzy_score",
    "score_positions",
]
