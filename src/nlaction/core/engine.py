"""Main engine for nlaction.

Holds the live dataset and the current index snapshot, and exposes the
load / propose / execute / retrain cycle.
"""

from __future__ import annotations

import logging
from typing import Any

from nlaction.core.config import EngineConfig
from nlaction.core.executor import ActionExecutor
from nlaction.core.types import ActionCandidate, ActionType, Dataset, IndexStatus
from nlaction.embeddings import EmbeddingProvider, get_provider
from nlaction.exceptions import DatasetError, IndexNotReadyError, UnsupportedActionError
from nlaction.index.keys import RecordKeyFunc, default_record_key
from nlaction.index.snapshot import IndexSnapshot, build_snapshot
from nlaction.planner.foreign_keys import ForeignKeyMatcher
from nlaction.planner.proposer import ActionProposer

logger = logging.getLogger(__name__)


def validate_dataset(dataset: Any) -> Dataset:
    """Check that a dataset maps collection names to lists of objects.

    Raises:
        DatasetError: If the shape is wrong
    """
    if not isinstance(dataset, dict):
        raise DatasetError(
            f"Dataset must be an object of collection -> records, got {type(dataset).__name__}."
        )
    for name, records in dataset.items():
        if not isinstance(name, str):
            raise DatasetError(f"Collection names must be strings, got {name!r}.")
        if not isinstance(records, list):
            raise DatasetError(
                f"Collection '{name}' must be a list of records, got {type(records).__name__}.",
                {"collection": name},
            )
        for position, record in enumerate(records):
            if not isinstance(record, dict):
                raise DatasetError(
                    f"Record {position} of '{name}' must be an object, "
                    f"got {type(record).__name__}.",
                    {"collection": name, "position": position},
                )
    return dataset


class NLActionEngine:
    """Natural-language to CRUD action engine.

    Example:
        engine = NLActionEngine("fastembed")
        await engine.load_schema({"holders": [...], "accounts": [...]})

        candidates = await engine.propose_actions("show accounts for Swapnil")
        records = engine.execute_action(candidates[0])

        # indices are snapshots: rebuild after mutating
        await engine.retrain()

    The engine mutates the dataset it was given; persist ``current_schema``
    after executing actions.
    """

    def __init__(
        self,
        embedding_provider: str | EmbeddingProvider = "fastembed",
        config: EngineConfig | None = None,
        fk_matcher: ForeignKeyMatcher | None = None,
        key_func: RecordKeyFunc = default_record_key,
        **provider_kwargs: Any,
    ) -> None:
        """Initialize the engine.

        Args:
            embedding_provider: Provider name ("fastembed", "openai") or instance
            config: Engine configuration (defaults to ``EngineConfig()``)
            fk_matcher: Foreign key strategy (defaults to the naming heuristic)
            key_func: Stable record key function for the value index
            **provider_kwargs: Passed to the provider constructor when given by name
        """
        self._provider = get_provider(embedding_provider, **provider_kwargs)
        self._config = config or EngineConfig()
        self._key_func = key_func
        self._proposer = ActionProposer(self._provider, self._config.scoring, fk_matcher)
        self._executor = ActionExecutor()
        self._dataset: Dataset = {}
        self._snapshot: IndexSnapshot | None = None
        self._generation = 0
        self._mutations = 0
        self._stale = False

    @property
    def provider(self) -> EmbeddingProvider:
        return self._provider

    @property
    def config(self) -> EngineConfig:
        return self._config

    @property
    def current_schema(self) -> Dataset:
        """The live dataset (same reference the executor mutates)."""
        return self._dataset

    @property
    def snapshot(self) -> IndexSnapshot | None:
        return self._snapshot

    @property
    def is_stale(self) -> bool:
        """Whether a mutation happened since the last index build."""
        return self._stale

    async def load_schema(self, dataset: Dataset) -> None:
        """Store a dataset and build its indices.

        Raises:
            DatasetError: If the dataset shape is wrong
            EmbeddingProviderError: If the embedding backend cannot load
        """
        self._dataset = validate_dataset(dataset)
        await self.retrain()

    async def retrain(self) -> IndexSnapshot:
        """Rebuild both indices from the current dataset.

        The new snapshot is published only once complete, and only if no
        newer build finished first.
        """
        self._generation += 1
        generation = self._generation
        mutations = self._mutations
        snapshot = await build_snapshot(
            self._dataset,
            self._provider,
            generation,
            config=self._config,
            key_func=self._key_func,
        )
        if self._snapshot is None or snapshot.generation > self._snapshot.generation:
            self._snapshot = snapshot
            self._stale = self._mutations != mutations
        else:
            logger.debug(f"Discarding index generation {generation}, a newer one is live")
        return self._snapshot

    async def propose_actions(self, query: str, top_k: int = 6) -> list[ActionCandidate]:
        """Propose ranked action candidates for a query.

        Args:
            query: Free-text query (e.g. "show accounts for Swapnil")
            top_k: Number of intent matches to expand into candidates

        Returns:
            Candidates sorted by score; empty when nothing matches

        Raises:
            IndexNotReadyError: If no dataset has been loaded
        """
        if self._snapshot is None:
            raise IndexNotReadyError()
        if self._stale:
            if self._config.auto_retrain:
                await self.retrain()
            else:
                logger.warning("Index is stale since the last executed action; call retrain()")

        snapshot = self._snapshot
        candidates = await self._proposer.propose(snapshot, query, top_k)
        logger.debug(f"Proposed {len(candidates)} candidates for {query!r}")
        return candidates

    def execute_action(self, action: ActionCandidate | dict[str, Any]) -> Any:
        """Apply an action to the live dataset.

        Args:
            action: Candidate, or a dict with the candidate fields

        Returns:
            read: matching records; create: new record; update: updated
            records; delete: ``{"deleted": count}``

        Raises:
            UnknownCollectionError: If the collection does not exist
            MissingFilterError: If update/delete has no filter
            UnsupportedActionError: If the type is not create/read/update/delete
        """
        candidate = self._coerce(action)
        result = self._executor.execute(self._dataset, candidate)
        if candidate.type != ActionType.READ:
            self._mutations += 1
            self._stale = True
        return result

    def index_status(self) -> IndexStatus:
        """Counts of the current snapshot per collection."""
        if self._snapshot is None:
            return IndexStatus(generation=0, stale=self._stale)
        return IndexStatus(
            generation=self._snapshot.generation,
            stale=self._stale,
            collections=self._snapshot.collection_status(),
        )

    def _coerce(self, action: ActionCandidate | dict[str, Any]) -> ActionCandidate:
        if isinstance(action, ActionCandidate):
            return action
        action_type = str(action.get("type", ""))
        if action_type not in ActionType.values():
            raise UnsupportedActionError(action_type)
        return ActionCandidate.model_validate(action)
