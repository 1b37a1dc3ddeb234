"""nlaction - Natural-language CRUD actions over in-memory datasets.

Turns free-text queries into ranked create/read/update/delete candidates by
matching them against synthetic intent examples and every short field value
of the dataset, inferring cross-collection foreign keys along the way.

Example:
    import asyncio

    from nlaction import NLActionEngine

    engine = NLActionEngine("fastembed")
    asyncio.run(engine.load_schema({
        "holders": [{"id": 1, "name": "Swapnil"}],
        "accounts": [{"id": 10, "holders_id": 1, "bank": "HDFC"}],
    }))

    candidates = asyncio.run(engine.propose_actions("Show accounts for Swapnil"))
    for c in candidates:
        print(f"{c.score:.2f} {c.describe()}")

    records = engine.execute_action(candidates[0])
"""

from nlaction.core.config import EngineConfig, ScoringConfig
from nlaction.core.engine import NLActionEngine
from nlaction.core.executor import ActionExecutor
from nlaction.core.similarity import cosine_similarity
from nlaction.core.types import (
    ActionCandidate,
    ActionType,
    Dataset,
    ExampleEntry,
    IndexStatus,
    ResolvedFrom,
    ValueIndexEntry,
)
from nlaction.exceptions import (
    DatasetError,
    EmbeddingProviderError,
    IndexNotReadyError,
    MissingFilterError,
    NLActionError,
    UnknownCollectionError,
    UnsupportedActionError,
)
from nlaction.planner import (
    ActionProposer,
    DeclaredForeignKeyMatcher,
    ForeignKeyMatcher,
    HeuristicForeignKeyMatcher,
)

__version__ = "0.1.0"

__all__ = [
    # Main classes
    "NLActionEngine",
    "ActionProposer",
    "ActionExecutor",
    # Types
    "ActionCandidate",
    "ActionType",
    "Dataset",
    "ExampleEntry",
    "IndexStatus",
    "ResolvedFrom",
    "ValueIndexEntry",
    # Configuration
    "EngineConfig",
    "ScoringConfig",
    # Foreign key strategies
    "ForeignKeyMatcher",
    "HeuristicForeignKeyMatcher",
    "DeclaredForeignKeyMatcher",
    # Similarity
    "cosine_similarity",
    # Exceptions
    "NLActionError",
    "EmbeddingProviderError",
    "IndexNotReadyError",
    "UnknownCollectionError",
    "MissingFilterError",
    "UnsupportedActionError",
    "DatasetError",
]
