"""Abstract base class for vector-store backends.

The ingestion and retrieval orchestrators only talk to this interface, so
adding a new backend only requires subclassing :class:`VectorStoreBase`
and implementing the abstract methods.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, Field


class StoredRecords(BaseModel):
    """Result of :meth:`VectorStoreBase.get`, as parallel id / metadata lists."""

    ids: list[str] = Field(default_factory=list)
    metadatas: list[dict[str, Any]] = Field(default_factory=list)


class VectorStoreBase(ABC):
    """Backend-agnostic vector-store interface.

    Parameters
    ----------
    collection_name:
        Logical name of the collection / index / namespace.
    """

    def __init__(self, collection_name: str) -> None:
        self.collection_name = collection_name

    # -- required overrides ---------------------------------------------------

    @abstractmethod
    def get(self, ids: Sequence[str] | None = None) -> StoredRecords:
        """Return the records with the given *ids*, or every record when ``None``.

        Unknown ids are silently absent from the result.
        """
        ...

    @abstractmethod
    def add(
        self,
        ids: Sequence[str],
        embeddings: Sequence[Sequence[float]],
        metadatas: Sequence[dict[str, Any]],
    ) -> None:
        """Insert new records.  Behaviour on a duplicate id is backend-defined."""
        ...

    @abstractmethod
    def delete(self, ids: Sequence[str]) -> None:
        """Delete records by id."""
        ...

    @abstractmethod
    def query(self, query_embedding: Sequence[float], *, n_results: int) -> list[dict[str, Any]]:
        """Return up to *n_results* nearest records, closest first.

        Each hit dict contains:

        * ``"id"`` – record identifier
        * ``"metadata"`` – the stored metadata dict
        * ``"distance"`` – backend distance (lower = more similar), may be ``None``
        """
        ...

    @abstractmethod
    def health_check(self) -> bool:
        """Return ``True`` when the backend is reachable and ready."""
        ...

    # -- optional overrides ---------------------------------------------------

    def close(self) -> None:
        """Release client resources.  No-op by default."""
