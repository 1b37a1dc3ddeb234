"""Core engine, executor, configuration and types."""

from nlaction.core.config import EngineConfig, ScoringConfig
from nlaction.core.engine import NLActionEngine, validate_dataset
from nlaction.core.executor import ActionExecutor, record_matches
from nlaction.core.similarity import cosine_similarity
from nlaction.core.types import (
    ActionCandidate,
    ActionType,
    Dataset,
    ExampleEntry,
    IndexStatus,
    Record,
    ResolvedFrom,
    ValueIndexEntry,
)

__all__ = [
    "ActionCandidate",
    "ActionExecutor",
    "ActionType",
    "Dataset",
    "EngineConfig",
    "ExampleEntry",
    "IndexStatus",
    "NLActionEngine",
    "Record",
    "ResolvedFrom",
    "ScoringConfig",
    "ValueIndexEntry",
    "cosine_similarity",
    "record_matches",
    "validate_dataset",
]
