"""Exception hierarchy for PageMind.

Every failure raised by the ingestion and retrieval layers is a
:class:`PageMindError`.  Adapters around third-party clients translate
library exceptions into one of the subclasses below so that callers only
need to know this module.
"""

from __future__ import annotations

from typing import Any


class PageMindError(Exception):
    """Base exception carrying a message and optional debugging context."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class InvalidArgument(PageMindError, ValueError):
    """Raised when a caller passes an out-of-range argument (e.g. chunk count)."""


class FetchFailed(PageMindError):
    """Raised when a page cannot be downloaded."""

    def __init__(self, url: str, reason: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["url"] = url
        super().__init__(f"Failed to fetch {url}: {reason}", details)
        self.url = url


class EmptyBody(PageMindError):
    """Signals that a fetched page has no body content.

    Ingestion treats this as an early exit, not a failure.
    """

    def __init__(self, url: str) -> None:
        super().__init__(f"Body content is empty for {url}", {"url": url})
        self.url = url


class EmbeddingFailed(PageMindError):
    """Raised when the embedding service cannot embed a text."""


class StoreFailed(PageMindError):
    """Raised when a vector-store get / add / delete / query fails."""


class RetrievalFailed(PageMindError):
    """Raised when context for a question cannot be retrieved."""


class GenerationFailed(PageMindError):
    """Raised when the generative model does not produce a completion."""
