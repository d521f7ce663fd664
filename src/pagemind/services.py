"""Collaborator wiring with an explicit open / close lifecycle.

Entry points build every long-lived handle (vector-store client, HTTP
session, embedding and chat clients) once, hand them to the orchestrators,
and close them on exit::

    with open_services(settings) as services:
        services.pipeline.ingest("https://example.com")
        print(services.answerer.answer("What is this page about?").text)
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from pagemind.config import Settings
from pagemind.embeddings import Embedder, get_embedding_model
from pagemind.generation.llm import Generator, get_llm
from pagemind.ingestion.fetcher import WebFetcher
from pagemind.ingestion.indexer import ChunkIndexer
from pagemind.ingestion.pipeline import IngestionPipeline
from pagemind.retrieval.answerer import Answerer
from pagemind.retrieval.base import VectorStoreBase

logger = logging.getLogger(__name__)


@dataclass
class Services:
    """Every collaborator a process needs, built once."""

    store: VectorStoreBase
    indexer: ChunkIndexer
    fetcher: WebFetcher
    embedder: Embedder
    generator: Generator
    pipeline: IngestionPipeline
    answerer: Answerer
    ingest_max_workers: int = 4

    def close(self) -> None:
        try:
            self.fetcher.close()
        finally:
            self.store.close()


def build_services(settings: Settings, *, store: VectorStoreBase | None = None) -> Services:
    """Construct all collaborators from *settings*.

    *store* overrides the Chroma backend (tests, alternative backends).
    The returned :class:`Services` owns the store; if construction fails
    part-way, every handle opened so far is closed before the error
    propagates.
    """
    if store is None:
        from pagemind.retrieval.chroma_store import ChromaVectorStore

        store = ChromaVectorStore(
            settings.chroma_collection,
            host=settings.chroma_host,
            port=settings.chroma_port,
        )

    fetcher: WebFetcher | None = None
    try:
        fetcher = WebFetcher(
            timeout=settings.request_timeout,
            max_retries=settings.fetch_max_retries,
        )
        embedder = Embedder(
            get_embedding_model(
                settings.embedding_provider,
                settings.embedding_model,
                api_key=settings.openai_api_key,
            )
        )
        generator = Generator(
            get_llm(
                settings.llm_model_name,
                api_key=settings.openai_api_key,
                base_url=settings.llm_base_url,
                temperature=settings.llm_temperature,
            )
        )
    except Exception:
        logger.error("Service construction failed, closing opened handles")
        try:
            if fetcher is not None:
                fetcher.close()
        finally:
            store.close()
        raise

    indexer = ChunkIndexer(store)
    return Services(
        store=store,
        indexer=indexer,
        fetcher=fetcher,
        embedder=embedder,
        generator=generator,
        pipeline=IngestionPipeline(
            fetcher,
            embedder,
            indexer,
            chunk_count=settings.chunk_count,
        ),
        answerer=Answerer(embedder, store, generator, k=settings.retrieval_k),
        ingest_max_workers=settings.ingest_max_workers,
    )


@contextmanager
def open_services(settings: Settings, *, store: VectorStoreBase | None = None) -> Iterator[Services]:
    """Build services for the duration of a ``with`` block."""
    services = build_services(settings, store=store)
    if not services.store.health_check():
        logger.warning("Vector store %r is not reachable yet", services.store.collection_name)
    try:
        yield services
    finally:
        services.close()
