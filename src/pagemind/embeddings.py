"""Embedding service adapter: single place to swap embedding providers.

Supports two providers:

1. **openai** (default) — ``OpenAIEmbeddings`` with ``text-embedding-3-small``.
2. **huggingface** — a local sentence-transformer via ``HuggingFaceEmbeddings``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from pagemind.errors import EmbeddingFailed, InvalidArgument

if TYPE_CHECKING:
    from langchain_core.embeddings import Embeddings


class TextEmbedder(Protocol):
    """Anything that maps text to a fixed-length vector."""

    def embed(self, text: str) -> list[float]: ...


def get_embedding_model(provider: str, model_name: str, api_key: str = "") -> Embeddings:
    """Return the configured LangChain embedding model."""
    if provider == "openai":
        from langchain_openai import OpenAIEmbeddings

        return OpenAIEmbeddings(model=model_name, api_key=api_key or None)
    if provider == "huggingface":
        from langchain_huggingface import HuggingFaceEmbeddings

        return HuggingFaceEmbeddings(model_name=model_name)
    raise InvalidArgument(f"Unsupported embedding provider: {provider!r}", {"provider": provider})


class Embedder:
    """Maps text to a fixed-length vector, raising :class:`EmbeddingFailed` on error."""

    def __init__(self, model: Embeddings) -> None:
        self._model = model

    def embed(self, text: str) -> list[float]:
        try:
            return list(self._model.embed_query(text))
        except Exception as exc:
            raise EmbeddingFailed("Embedding request failed", {"chars": len(text)}) from exc
