"""Candidate deduplication and ordering."""

from __future__ import annotations

from collections.abc import Iterable

from nlaction.core.types import ActionCandidate


def rank_candidates(candidates: Iterable[ActionCandidate]) -> list[ActionCandidate]:
    """Collapse duplicates and sort by score, highest first.

    Candidates sharing type, collection and filter are duplicates; the one
    with the higher score survives. Equal scores keep first-emitted order.
    """
    best: dict[str, ActionCandidate] = {}
    for candidate in candidates:
        key = candidate.dedup_key()
        current = best.get(key)
        if current is None or current.score < candidate.score:
            best[key] = candidate
    return sorted(best.values(), key=lambda c: -c.score)
