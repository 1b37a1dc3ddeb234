"""Embedding providers for intent and value matching.

By default, uses FastEmbed (local, no API key required). Any object
implementing ``EmbeddingProvider`` can be injected into the engine instead.

Example:
    >>> from nlaction.embeddings import get_provider
    >>>
    >>> # Local embeddings (default)
    >>> provider = get_provider("fastembed")
    >>>
    >>> # OpenAI embeddings
    >>> provider = get_provider("openai", api_key="sk-...")
"""

from nlaction.embeddings.provider import EmbeddingProvider

__all__ = [
    "EmbeddingProvider",
    "get_provider",
]


def get_provider(
    provider: str | EmbeddingProvider = "fastembed",
    **kwargs: object,
) -> EmbeddingProvider:
    """Get an embedding provider by name or return the provider if already instantiated.

    Providers are constructed without loading their backend; the backend is
    loaded on first use.

    Args:
        provider: Provider name ("fastembed", "openai") or EmbeddingProvider instance.
        **kwargs: Additional arguments passed to the provider constructor.

    Returns:
        EmbeddingProvider instance.

    Raises:
        ValueError: If provider name is unknown.

    Example:
        >>> provider = get_provider("fastembed")
        >>> provider = get_provider("openai", api_key="sk-...")
        >>> provider = get_provider(MyCustomProvider())
    """
    if isinstance(provider, EmbeddingProvider):
        return provider

    if provider == "fastembed":
        from nlaction.embeddings.fastembed import FastEmbedProvider

        return FastEmbedProvider(**kwargs)  # type: ignore[arg-type]
    elif provider == "openai":
        from nlaction.embeddings.openai import OpenAIProvider

        return OpenAIProvider(**kwargs)  # type: ignore[arg-type]
    else:
        raise ValueError(
            f"Unknown embedding provider: {provider}. Available: 'fastembed', 'openai'"
        )
