"""Turn a natural-language query into ranked CRUD action candidates.

Two signals are scored independently against the index snapshot:

- intent: the query against synthetic example phrases, which says what kind
  of operation on which collection;
- value: the query against every indexed field value, which says which
  record(s) the query is about.

They are combined per intent match into a base candidate, direct filter
candidates (value lives in the target collection) and foreign key candidates
(value lives in another collection and is bridged through an ``*_id`` field).
"""

from __future__ import annotations

import logging

from nlaction.core.config import ScoringConfig
from nlaction.core.similarity import cosine_similarity
from nlaction.core.types import (
    ActionCandidate,
    ExampleEntry,
    ResolvedFrom,
    ValueMatch,
)
from nlaction.embeddings.provider import EmbeddingProvider
from nlaction.index.keys import find_identifier_field
from nlaction.index.snapshot import IndexSnapshot
from nlaction.planner.foreign_keys import (
    ForeignKeyMatcher,
    HeuristicForeignKeyMatcher,
    rank_foreign_keys,
)
from nlaction.planner.ranking import rank_candidates

logger = logging.getLogger(__name__)


class ActionProposer:
    """Scores queries against an index snapshot and emits candidates."""

    def __init__(
        self,
        provider: EmbeddingProvider,
        scoring: ScoringConfig | None = None,
        fk_matcher: ForeignKeyMatcher | None = None,
    ) -> None:
        self._provider = provider
        self._scoring = scoring or ScoringConfig()
        self._fk_matcher = fk_matcher or HeuristicForeignKeyMatcher()

    @property
    def scoring(self) -> ScoringConfig:
        return self._scoring

    async def propose(
        self,
        snapshot: IndexSnapshot,
        query: str,
        top_k: int = 6,
    ) -> list[ActionCandidate]:
        """Propose ranked candidates for a query.

        Args:
            snapshot: Index snapshot to score against
            query: Free-text user query
            top_k: Number of intent matches to expand

        Returns:
            Deduplicated candidates sorted by score (empty if nothing matches)
        """
        if not query.strip() or not snapshot.examples or top_k <= 0:
            return []

        (query_embedding,) = await self._provider.aembed_batch([query])

        intent_matches = self.score_examples(snapshot, query_embedding, top_k)
        value_matches = self.score_values(snapshot, query, query_embedding)
        logger.debug(
            f"Query {query!r}: {len(intent_matches)} intent matches, "
            f"{len(value_matches)} value matches"
        )

        candidates: list[ActionCandidate] = []
        for example, intent_score in intent_matches:
            candidates.extend(
                self._candidates_for_intent(snapshot, example, intent_score, value_matches)
            )
        return rank_candidates(candidates)

    def score_examples(
        self,
        snapshot: IndexSnapshot,
        query_embedding: list[float],
        top_k: int,
    ) -> list[tuple[ExampleEntry, float]]:
        """Top ``top_k`` examples across all collections."""
        scored = [
            (example, cosine_similarity(query_embedding, example.embedding))
            for example in snapshot.examples
        ]
        scored.sort(key=lambda item: -item[1])
        return scored[:top_k]

    def score_values(
        self,
        snapshot: IndexSnapshot,
        query: str,
        query_embedding: list[float],
    ) -> list[ValueMatch]:
        """Top value matches, ordered by raw similarity.

        Values appearing verbatim (case-insensitive) in the query get the
        exact-match bonus in ``adjusted_score``.
        """
        scored = [
            (entry, cosine_similarity(query_embedding, entry.embedding))
            for entry in snapshot.values
        ]
        scored.sort(key=lambda item: -item[1])

        lowered = query.lower()
        matches = []
        for entry, score in scored[: self._scoring.value_top_k]:
            exact = entry.value_text.lower() in lowered
            bonus = self._scoring.exact_match_bonus if exact else 0.0
            matches.append(
                ValueMatch(entry=entry, score=score, adjusted_score=score + bonus, exact=exact)
            )
        return matches

    def _candidates_for_intent(
        self,
        snapshot: IndexSnapshot,
        example: ExampleEntry,
        intent_score: float,
        value_matches: list[ValueMatch],
    ) -> list[ActionCandidate]:
        intent = example.intent
        collection = example.collection
        label = str(intent).upper()

        # "show me all X" style intents need no filter
        candidates = [
            ActionCandidate(
                type=intent,
                collection=collection,
                score=intent_score,
                human_readable=f"{label} {collection}",
            )
        ]

        same = [m for m in value_matches if m.entry.collection == collection]
        cross = [m for m in value_matches if m.entry.collection != collection]

        for match in same[: self._scoring.max_direct_filters]:
            entry = match.entry
            candidates.append(
                ActionCandidate(
                    type=intent,
                    collection=collection,
                    filter={entry.field: entry.value_text},
                    score=self._scoring.combine(intent_score, match.adjusted_score),
                    human_readable=f"{label} {collection} where {entry.field} = {entry.value_text}",
                    resolved_from=ResolvedFrom(
                        collection=collection, field=entry.field, value=entry.value_text
                    ),
                )
            )

        candidates.extend(
            self._foreign_key_candidates(snapshot, example, intent_score, cross)
        )
        return candidates

    def _foreign_key_candidates(
        self,
        snapshot: IndexSnapshot,
        example: ExampleEntry,
        intent_score: float,
        cross: list[ValueMatch],
    ) -> list[ActionCandidate]:
        """Bridge values found in other collections through ``*_id`` fields."""
        intent = example.intent
        collection = example.collection
        label = str(intent).upper()
        field_names = snapshot.field_names(collection)

        candidates: list[ActionCandidate] = []
        for match in cross[: self._scoring.max_cross_matches]:
            entry = match.entry
            fk_fields = rank_foreign_keys(self._fk_matcher, field_names, entry.collection)
            if not fk_fields:
                continue

            record = snapshot.resolve(entry.collection, entry.record_key)
            if record is None:
                logger.warning(
                    f"Value index points at missing record {entry.collection}/{entry.record_key}"
                )
                continue
            id_field = find_identifier_field(entry.collection, record)
            if id_field is None:
                continue
            id_value = record[id_field]

            # a preferred field repeated in the head is emitted once
            for fk in dict.fromkeys(fk_fields[: self._scoring.max_fk_fields]):
                candidates.append(
                    ActionCandidate(
                        type=intent,
                        collection=collection,
                        filter={fk: id_value},
                        score=self._scoring.combine(intent_score, match.adjusted_score),
                        human_readable=(
                            f"{label} {collection} where {fk} = {id_value} "
                            f"(resolved from {entry.collection}.{entry.field}={entry.value_text})"
                        ),
                        resolved_from=ResolvedFrom(
                            collection=entry.collection, field=entry.field, value=entry.value_text
                        ),
                    )
                )
        return candidates
