"""Shared test fixtures for nlaction."""

import re
import zlib
from typing import Any

import pytest

from nlaction import NLActionEngine
from nlaction.embeddings import EmbeddingProvider

TOKEN_PATTERN = re.compile(r"[a-z0-9]+")


class HashingEmbeddingProvider(EmbeddingProvider):
    """Deterministic bag-of-words embeddings for tests.

    Each token increments one hashed dimension, so texts sharing words have
    positive cosine similarity and unrelated texts have ~0.
    """

    def __init__(self, dimensions: int = 512) -> None:
        self._dimensions = dimensions
        self.load_calls = 0
        self.batch_calls: list[list[str]] = []

    def _load(self) -> None:
        self.load_calls += 1

    def embed(self, text: str) -> list[float]:
        vector = [0.0] * self._dimensions
        for token in TOKEN_PATTERN.findall(text.lower()):
            vector[zlib.crc32(token.encode()) % self._dimensions] += 1.0
        return vector

    def embed_batch(self, texts: list[str]) -> list[list[float]]:
        self.batch_calls.append(list(texts))
        return [self.embed(t) for t in texts]

    @property
    def dimensions(self) -> int:
        return self._dimensions

    @property
    def model_name(self) -> str:
        return "test-hashing"


@pytest.fixture
def provider() -> HashingEmbeddingProvider:
    """Fresh deterministic embedding provider."""
    return HashingEmbeddingProvider()


@pytest.fixture
def finance_dataset() -> dict[str, list[dict[str, Any]]]:
    """Small personal-finance dataset with an implicit holders -> accounts relation."""
    return {
        "holders": [
            {"id": 1, "name": "Swapnil"},
            {"id": 2, "name": "Priya"},
        ],
        "accounts": [
            {"id": 10, "holders_id": 1, "bank": "HDFC"},
            {"id": 11, "holders_id": 2, "bank": "ICICI"},
            {"id": 12, "holders_id": 1, "bank": "SBI"},
        ],
        "goals": [
            {"id": 1, "name": "Car", "amount": 500000},
            {"id": 2, "name": "House", "amount": 7500000, "notes": None},
        ],
    }


@pytest.fixture
def engine(provider: HashingEmbeddingProvider) -> NLActionEngine:
    """Engine with the deterministic provider and no dataset loaded."""
    return NLActionEngine(provider)


# Re-export for use in test files
__all__ = ["HashingEmbeddingProvider"]
