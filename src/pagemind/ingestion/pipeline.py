"""Ingestion orchestrator: URL to deduplicated, embedded chunks.

For each URL the pipeline runs, under a per-URL lock:

1. **Purge** every stored record of the URL (re-ingestion is a replace).
2. **Fetch** the page; an empty body ends ingestion with no writes.
3. **Chunk** the body into ``chunk_count`` pieces.
4. **Embed + upsert** each chunk in index order, skipping existing ids.

Failures are caught at the URL boundary and reported in an
:class:`~pagemind.ingestion.models.IngestionReport`; chunks committed
before a failure are kept.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from typing import Protocol

from pagemind.embeddings import TextEmbedder
from pagemind.errors import EmptyBody, InvalidArgument, PageMindError
from pagemind.ingestion.chunker import build_chunks
from pagemind.ingestion.indexer import ChunkIndexer
from pagemind.ingestion.locks import KeyedLock
from pagemind.ingestion.models import IngestionReport, PageContent

logger = logging.getLogger(__name__)


class PageFetcher(Protocol):
    def fetch(self, url: str) -> PageContent: ...


class IngestionPipeline:
    """Ingest web pages into the vector store.

    Parameters
    ----------
    fetcher:
        Web fetcher returning :class:`PageContent`.
    embedder:
        Embedding service adapter.
    indexer:
        Dedup-guarded store writer.
    chunk_count:
        Number of chunks each page body is divided into.
    locks:
        Per-URL lock table; share one between pipelines writing the same store.
    """

    def __init__(
        self,
        fetcher: PageFetcher,
        embedder: TextEmbedder,
        indexer: ChunkIndexer,
        *,
        chunk_count: int = 100,
        locks: KeyedLock | None = None,
    ) -> None:
        if chunk_count <= 0:
            raise InvalidArgument("chunk_count must be greater than zero", {"chunk_count": chunk_count})
        self._fetcher = fetcher
        self._embedder = embedder
        self._indexer = indexer
        self.chunk_count = chunk_count
        self._locks = locks or KeyedLock()

    # -- public API -----------------------------------------------------------

    def ingest(self, url: str) -> IngestionReport:
        """Ingest one URL.  Never raises; the report carries the outcome."""
        logger.info("Ingesting url = %s", url)
        with self._locks.hold(url):
            report = self._ingest_locked(url)

        if report.status == "succeeded":
            logger.info(
                "Ingesting successful = %s (%d added, %d skipped)",
                url, report.chunks_inserted, report.chunks_skipped,
            )
        return report

    def ingest_many(self, urls: Sequence[str], *, max_workers: int = 4) -> list[IngestionReport]:
        """Ingest several URLs concurrently; reports come back in input order."""
        if not urls:
            return []
        with ThreadPoolExecutor(max_workers=max(1, min(max_workers, len(urls)))) as pool:
            return list(pool.map(self.ingest, urls))

    def delete_source(self, url: str) -> int:
        """Remove every record of *url*; returns the number deleted."""
        with self._locks.hold(url):
            return self._indexer.purge(url)

    # -- internals ------------------------------------------------------------

    def _ingest_locked(self, url: str) -> IngestionReport:
        report = IngestionReport(url=url, status="failed")
        current_chunk: int | None = None
        try:
            report.purged = self._indexer.purge(url)

            page = self._fetcher.fetch(url)
            if not page.body:
                raise EmptyBody(url)
            report.internal_links = len(page.internal_links)
            report.external_links = len(page.external_links)

            chunks = build_chunks(url, page.body, page.metadata, self.chunk_count)
            report.chunks_total = len(chunks)
            logger.info("Split body into %d chunks", len(chunks))

            for chunk in chunks:
                current_chunk = chunk.index
                embedding = self._embedder.embed(chunk.text)
                if self._indexer.upsert(chunk, embedding).inserted:
                    report.chunks_inserted += 1
                else:
                    report.chunks_skipped += 1
        except EmptyBody as exc:
            logger.error("%s", exc)
            report.status = "empty_body"
            return report
        except PageMindError as exc:
            where = f" at chunk {current_chunk}" if current_chunk is not None else ""
            logger.error("Error ingesting %s%s: %s", url, where, exc)
            report.error = str(exc)
            return report
        except Exception as exc:
            logger.exception("Unexpected error ingesting %s", url)
            report.error = f"{type(exc).__name__}: {exc}"
            return report

        report.status = "succeeded"
        return report
