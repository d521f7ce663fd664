"""Dedup-guarded writes of chunk vectors into the vector store."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from pagemind.ingestion.identity import chunk_id, ids_for_source, parse_chunk_id
from pagemind.ingestion.models import Chunk, UpsertResult
from pagemind.retrieval.base import VectorStoreBase

logger = logging.getLogger(__name__)


class ChunkIndexer:
    """Reads and writes the indexed records of each source URL.

    The existence check in :meth:`upsert` is not atomic with the insert;
    callers serialize work per URL (see :class:`~pagemind.ingestion.locks.KeyedLock`).
    """

    def __init__(self, store: VectorStoreBase) -> None:
        self._store = store

    def upsert(self, chunk: Chunk, embedding: Sequence[float]) -> UpsertResult:
        """Insert *chunk* unless a record with its identifier already exists."""
        record_id = chunk_id(chunk.source_url, chunk.index)

        existing = self._store.get(ids=[record_id])
        if existing.ids:
            logger.info("Embedding already exists for ID: %s, skipping", record_id)
            return UpsertResult(id=record_id, inserted=False)

        self._store.add(
            ids=[record_id],
            embeddings=[embedding],
            metadatas=[
                {
                    "url": chunk.source_url,
                    "body": chunk.text,
                    "head": chunk.head,
                    "chunkIndex": chunk.index,
                }
            ],
        )
        logger.debug("Added embedding for ID: %s", record_id)
        return UpsertResult(id=record_id, inserted=True)

    def record_ids(self, url: str) -> list[str]:
        """Identifiers of every stored chunk of *url*."""
        return ids_for_source(self._store.get().ids, url)

    def purge(self, url: str) -> int:
        """Delete every record of *url*; return how many were removed."""
        ids = self.record_ids(url)
        if ids:
            self._store.delete(ids)
            logger.info("Deleted %d embeddings for %s", len(ids), url)
        return len(ids)

    def is_ingested(self, url: str) -> bool:
        return bool(self.record_ids(url))

    def list_sources(self) -> list[str]:
        """Distinct source URLs present in the store, sorted."""
        sources = set()
        for record_id in self._store.get().ids:
            parsed = parse_chunk_id(record_id)
            if parsed is not None:
                sources.add(parsed[0])
        return sorted(sources)
