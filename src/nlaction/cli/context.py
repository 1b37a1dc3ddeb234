"""CLI context management for the dataset, engine and shared state."""

import asyncio
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from nlaction import NLActionEngine
from nlaction.core.config import EngineConfig
from nlaction.core.executor import ActionExecutor
from nlaction.core.types import ActionCandidate, Dataset
from nlaction.data import dump_json_dataset, load_dataset
from nlaction.embeddings import get_provider


def get_dataset_source(source: str | None) -> str:
    """Resolve dataset source from CLI arg, environment variable, or default.

    Priority:
    1. Explicit path or database URL argument
    2. NLACTION_DATASET environment variable
    3. Default: ./dataset.json
    """
    if source:
        return source
    if env_source := os.getenv("NLACTION_DATASET"):
        return env_source
    return "./dataset.json"


def get_provider_name(name: str | None) -> str:
    """Resolve embedding provider name (default: fastembed)."""
    if name:
        return name
    return os.getenv("NLACTION_PROVIDER", "fastembed")


@dataclass
class CLIContext:
    """Shared context for CLI commands.

    Loads the dataset and builds the engine lazily, so commands that only
    read the dataset never load an embedding model.
    """

    dataset_source: str
    provider_name: str
    json_output: bool
    _dataset: Dataset | None = field(default=None, init=False, repr=False)
    _engine: NLActionEngine | None = field(default=None, init=False, repr=False)

    @property
    def is_json_file(self) -> bool:
        return "://" not in self.dataset_source

    def get_dataset(self) -> Dataset:
        """Get or load the dataset."""
        if self._engine is not None:
            return self._engine.current_schema
        if self._dataset is None:
            self._dataset = load_dataset(self.dataset_source)
        return self._dataset

    def get_engine(self) -> NLActionEngine:
        """Get or create the engine with the dataset indexed.

        Returns:
            NLActionEngine instance
        """
        if self._engine is None:
            engine = NLActionEngine(
                get_provider(self.provider_name), config=EngineConfig.from_env()
            )
            asyncio.run(engine.load_schema(self.get_dataset()))
            self._engine = engine
        return self._engine

    def execute(self, candidate: ActionCandidate) -> Any:
        """Execute through the engine when built, else directly on the dataset."""
        if self._engine is not None:
            return self._engine.execute_action(candidate)
        return ActionExecutor().execute(self.get_dataset(), candidate)

    def save(self) -> Path:
        """Write the (possibly mutated) dataset back to its JSON file.

        Raises:
            ValueError: If the dataset came from a database URL
        """
        if not self.is_json_file:
            raise ValueError(
                f"Cannot save to {self.dataset_source}: only JSON file datasets can be saved"
            )
        path = Path(self.dataset_source)
        dump_json_dataset(self.get_dataset(), path)
        return path
