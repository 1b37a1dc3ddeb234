"""Custom exceptions for nlaction.

All exceptions are designed with agent-first principles:
- Actionable error messages that tell what went wrong AND how to fix it
- Include context about available options when relevant
"""

from __future__ import annotations

from typing import Any


class NLActionError(Exception):
    """Base exception for all nlaction errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def to_dict(self) -> dict[str, Any]:
        """Return error as JSON-serializable dict for agent consumption."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "context": self.context,
        }


class EmbeddingProviderError(NLActionError):
    """Embedding backend could not be loaded or failed to embed."""

    def __init__(self, provider: str, reason: str) -> None:
        message = f"Embedding provider '{provider}' is unavailable: {reason}"
        super().__init__(message, {"provider": provider, "reason": reason})
        self.provider = provider
        self.reason = reason


class IndexNotReadyError(NLActionError):
    """Proposals were requested before a dataset was loaded."""

    def __init__(self) -> None:
        super().__init__("No dataset indexed yet. Call load_schema() before proposing actions.")


class UnknownCollectionError(NLActionError):
    """Collection does not exist in the dataset."""

    def __init__(self, collection: str, available_collections: list[str] | None = None) -> None:
        available = available_collections or []
        if available:
            message = (
                f"Unknown collection: '{collection}'. "
                f"Available collections: {', '.join(available)}"
            )
        else:
            message = f"Unknown collection: '{collection}'. The dataset is empty."

        super().__init__(
            message, {"collection": collection, "available_collections": available}
        )
        self.collection = collection
        self.available_collections = available


class MissingFilterError(NLActionError):
    """Update or delete requested without a filter."""

    def __init__(self, action_type: str, collection: str) -> None:
        message = (
            f"{action_type.capitalize()} on '{collection}' needs a filter. "
            f"Pass filter={{field: value}} to select the records to {action_type}."
        )
        super().__init__(message, {"type": action_type, "collection": collection})
        self.action_type = action_type
        self.collection = collection


class UnsupportedActionError(NLActionError):
    """Action type is not one of create, read, update, delete."""

    VALID_TYPES = ["create", "read", "update", "delete"]

    def __init__(self, action_type: str) -> None:
        message = (
            f"Unsupported action type '{action_type}'. Valid types: {', '.join(self.VALID_TYPES)}"
        )
        super().__init__(message, {"type": action_type, "valid_types": self.VALID_TYPES})
        self.action_type = action_type


class DatasetError(NLActionError):
    """Dataset could not be read or has the wrong shape."""

    pass
