"""FastEmbed provider for local embeddings (no API key required)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from nlaction.embeddings.provider import EmbeddingProvider
from nlaction.exceptions import EmbeddingProviderError

if TYPE_CHECKING:
    from fastembed import TextEmbedding

logger = logging.getLogger(__name__)


class FastEmbedProvider(EmbeddingProvider):
    """Local embedding provider using fastembed (ONNX).

    Uses BAAI/bge-small-en-v1.5 by default (384 dimensions).
    The model is downloaded and loaded on first use, not at construction.

    Example:
        >>> provider = FastEmbedProvider()
        >>> provider.load()
        >>> len(provider.embed("HDFC"))
        384
    """

    # Default model - small, fast, good quality
    DEFAULT_MODEL = "BAAI/bge-small-en-v1.5"

    # Model dimensions mapping
    MODEL_DIMENSIONS = {
        "BAAI/bge-small-en-v1.5": 384,
        "BAAI/bge-base-en-v1.5": 768,
        "sentence-transformers/all-MiniLM-L6-v2": 384,
    }

    def __init__(self, model: str = DEFAULT_MODEL, cache_dir: str | None = None) -> None:
        """Initialize FastEmbed provider.

        Args:
            model: Model name. Defaults to BAAI/bge-small-en-v1.5.
            cache_dir: Where fastembed stores downloaded models.
        """
        self._model_name = model
        self._cache_dir = cache_dir
        self._model: TextEmbedding | None = None
        self._dimensions = self.MODEL_DIMENSIONS.get(model, 384)

    def _load(self) -> None:
        try:
            from fastembed import TextEmbedding
        except ImportError as e:
            raise EmbeddingProviderError(
                "fastembed",
                "fastembed is required for local embeddings. "
                "Install it with: pip install nlaction[embeddings]",
            ) from e

        logger.info(f"Loading fastembed model {self._model_name}")
        try:
            self._model = TextEmbedding(model_name=self._model_name, cache_dir=self._cache_dir)
        except Exception as e:
            raise EmbeddingProviderError("fastembed", str(e)) from e

    def _require_model(self) -> TextEmbedding:
        self.load()
        assert self._model is not None
        return self._model

    def embed(self, text: str) -> list[float]:
        """Embed a single text.

        Args:
            text: Text to embed.

        Returns:
            Vector embedding as list of floats.
        """
        # fastembed returns a generator, take first result
        embeddings = list(self._require_model().embed([text]))
        return embeddings[0].tolist()

    def embed_batch(self, texts: list[str]) -> list[list[float]]:
        """Embed multiple texts efficiently.

        Args:
            texts: List of texts to embed.

        Returns:
            List of vector embeddings.
        """
        if not texts:
            return []
        embeddings = list(self._require_model().embed(texts))
        return [emb.tolist() for emb in embeddings]

    @property
    def dimensions(self) -> int:
        """Vector dimensions."""
        return self._dimensions

    @property
    def model_name(self) -> str:
        """Model identifier."""
        return self._model_name
