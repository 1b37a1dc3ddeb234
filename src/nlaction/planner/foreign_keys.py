"""Foreign key inference between collections.

Nothing in a dataset declares relations, so the proposer asks a
``ForeignKeyMatcher`` how likely a field of the target collection is to
reference records of another collection. Swap the matcher to use declared
schemas or a learned model instead of the naming heuristic.
"""

from __future__ import annotations

import re
from typing import Protocol, runtime_checkable

FK_FIELD_PATTERN = re.compile(r"_?id$", re.IGNORECASE)
RELATIONAL_WORDS = re.compile(r"holder|owner|user|person")

PREFERRED_SCORE = 1.0
GENERIC_SCORE = 0.5


@runtime_checkable
class ForeignKeyMatcher(Protocol):
    """Strategy scoring a field as a reference to a source collection."""

    def score(self, field_name: str, source_collection: str) -> float:
        """Return match confidence; 0 means the field is not a candidate."""
        ...


class HeuristicForeignKeyMatcher:
    """Naming heuristic: ``*id`` fields, preferring ones named after the source.

    A field is preferred when it contains the source collection name, its
    singular form, or a common relational word (holder, owner, user, person).
    """

    def score(self, field_name: str, source_collection: str) -> float:
        if not FK_FIELD_PATTERN.search(field_name):
            return 0.0
        norm = field_name.lower()
        source = source_collection.lower()
        singular = source[:-1] if source.endswith("s") else source
        if source in norm or singular in norm or RELATIONAL_WORDS.search(norm):
            return PREFERRED_SCORE
        return GENERIC_SCORE


class DeclaredForeignKeyMatcher:
    """Matcher for relations known up front.

    Args:
        relations: target field name -> source collection it references
        fallback: matcher used for fields not listed (None disables it)
    """

    def __init__(
        self,
        relations: dict[str, str],
        fallback: ForeignKeyMatcher | None = None,
    ) -> None:
        self._relations = relations
        self._fallback = fallback

    def score(self, field_name: str, source_collection: str) -> float:
        declared = self._relations.get(field_name)
        if declared is not None:
            return PREFERRED_SCORE if declared == source_collection else 0.0
        if self._fallback is not None:
            return self._fallback.score(field_name, source_collection)
        return 0.0


def rank_foreign_keys(
    matcher: ForeignKeyMatcher,
    field_names: list[str] | tuple[str, ...],
    source_collection: str,
) -> list[str]:
    """Candidate foreign key fields, preferred ones in front.

    Fields scoring above the generic score come first (best first), followed
    by every candidate field in field order. Preferred fields therefore
    appear twice; callers slice the head of the list.
    """
    scored = [(name, matcher.score(name, source_collection)) for name in field_names]
    candidates = [name for name, score in scored if score > 0]
    preferred = [(name, score) for name, score in scored if score > GENERIC_SCORE]
    preferred.sort(key=lambda item: -item[1])
    return [name for name, _ in preferred] + candidates
