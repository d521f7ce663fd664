"""Chroma implementation of the vector-store abstraction."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

import chromadb

from pagemind.errors import StoreFailed
from pagemind.retrieval.base import StoredRecords, VectorStoreBase

logger = logging.getLogger(__name__)


def _flatten_metadata(meta: dict[str, Any]) -> dict[str, Any]:
    """Chroma metadata values must be flat str/int/float/bool."""
    flat: dict[str, Any] = {}
    for k, v in meta.items():
        if v is None:
            flat[k] = ""
        elif isinstance(v, (str, int, float, bool)):
            flat[k] = v
        else:
            flat[k] = str(v)
    return flat


class ChromaVectorStore(VectorStoreBase):
    """Chroma-backed vector store.

    The collection handle is resolved once via ``get_or_create_collection``
    and reused for the lifetime of the store.

    Parameters
    ----------
    collection_name:
        Name of the Chroma collection.
    host / port:
        Chroma server address, used when *client* is not given.
    client:
        Pre-built Chroma client (e.g. ``chromadb.EphemeralClient()``).
    """

    def __init__(
        self,
        collection_name: str,
        *,
        host: str = "localhost",
        port: int = 8000,
        client: Any | None = None,
    ) -> None:
        super().__init__(collection_name)
        try:
            self._client = client if client is not None else chromadb.HttpClient(host=host, port=port)
            self._collection = self._client.get_or_create_collection(name=collection_name)
        except Exception as exc:
            raise StoreFailed(
                f"Cannot open Chroma collection {collection_name!r}",
                {"host": host, "port": port},
            ) from exc

    # -- VectorStoreBase overrides --------------------------------------------

    def get(self, ids: Sequence[str] | None = None) -> StoredRecords:
        kwargs: dict[str, Any] = {"include": ["metadatas"]}
        if ids is not None:
            kwargs["ids"] = list(ids)
        try:
            result = self._collection.get(**kwargs)
        except Exception as exc:
            raise StoreFailed("Chroma get failed", {"ids": kwargs.get("ids")}) from exc

        return StoredRecords(
            ids=list(result.get("ids") or []),
            metadatas=[m or {} for m in (result.get("metadatas") or [])],
        )

    def add(
        self,
        ids: Sequence[str],
        embeddings: Sequence[Sequence[float]],
        metadatas: Sequence[dict[str, Any]],
    ) -> None:
        try:
            self._collection.add(
                ids=list(ids),
                embeddings=[list(e) for e in embeddings],
                metadatas=[_flatten_metadata(m) for m in metadatas],
            )
        except Exception as exc:
            raise StoreFailed("Chroma add failed", {"ids": list(ids)}) from exc

    def delete(self, ids: Sequence[str]) -> None:
        if not ids:
            return
        try:
            self._collection.delete(ids=list(ids))
        except Exception as exc:
            raise StoreFailed("Chroma delete failed", {"count": len(ids)}) from exc

    def query(self, query_embedding: Sequence[float], *, n_results: int) -> list[dict[str, Any]]:
        try:
            results = self._collection.query(
                query_embeddings=[list(query_embedding)],
                n_results=n_results,
                include=["metadatas", "distances"],
            )
        except Exception as exc:
            raise StoreFailed("Chroma query failed", {"n_results": n_results}) from exc

        ids = (results.get("ids") or [[]])[0]
        metas = (results.get("metadatas") or [[]])[0]
        distances = (results.get("distances") or [[]])[0] or [None] * len(ids)

        return [
            {"id": doc_id, "metadata": meta or {}, "distance": dist}
            for doc_id, meta, dist in zip(ids, metas, distances)
        ]

    def health_check(self) -> bool:
        try:
            self._client.heartbeat()
            return True
        except Exception:
            logger.warning("Chroma health-check failed", exc_info=True)
            return False
