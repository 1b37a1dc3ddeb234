"""Embedding provider interface."""

from __future__ import annotations

import asyncio
import threading
from abc import ABC, abstractmethod

_LOAD_LOCK = threading.Lock()


class EmbeddingProvider(ABC):
    """Interface for embedding providers.

    All providers must implement this interface to be injected into the
    engine. The engine knows nothing about backends, hardware or fallbacks;
    it only needs ``embed_batch`` (one order-preserving vector per text) and
    a memoized ``load`` step.
    """

    _loaded: bool = False

    def load(self) -> None:
        """Initialize the backend once.

        Subsequent calls are no-ops. Failures propagate to the caller and are
        not cached, so a later call retries the load.
        """
        if self._loaded:
            return
        with _LOAD_LOCK:
            if not self._loaded:
                self._load()
                self._loaded = True

    def _load(self) -> None:
        """Backend specific initialization. Default: nothing to load."""

    @property
    def is_loaded(self) -> bool:
        """Whether ``load`` has completed."""
        return self._loaded

    @abstractmethod
    def embed(self, text: str) -> list[float]:
        """Embed a single text.

        Args:
            text: Text to embed.

        Returns:
            Vector embedding as list of floats.
        """
        ...

    @abstractmethod
    def embed_batch(self, texts: list[str]) -> list[list[float]]:
        """Embed multiple texts efficiently.

        Args:
            texts: List of texts to embed.

        Returns:
            List of vector embeddings.
        """
        ...

    async def aembed_batch(self, texts: list[str]) -> list[list[float]]:
        """Embed texts without blocking the event loop.

        The blocking ``embed_batch`` call runs in a worker thread; the calling
        coroutine is suspended until vectors come back.
        """
        if not texts:
            return []
        if not self.is_loaded:
            await asyncio.to_thread(self.load)
        return await asyncio.to_thread(self.embed_batch, texts)

    @property
    @abstractmethod
    def dimensions(self) -> int:
        """Vector dimensions."""
        ...

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Model identifier."""
        ...
