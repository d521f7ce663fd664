"""Shared pytest configuration and fixtures.

The fakes below stand in for the four external collaborators (vector
store, web fetcher, embedding service, generative service) so the
orchestrators can be exercised without network access.
"""

from __future__ import annotations

import math
import threading
from collections.abc import Sequence
from typing import Any

import pytest

from pagemind.errors import EmbeddingFailed, FetchFailed, StoreFailed
from pagemind.ingestion.indexer import ChunkIndexer
from pagemind.ingestion.models import PageContent
from pagemind.ingestion.pipeline import IngestionPipeline
from pagemind.retrieval.answerer import Answerer
from pagemind.retrieval.base import StoredRecords, VectorStoreBase


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests requiring external services")


# ── Fakes ───────────────────────────────────────────────────────────────


class InMemoryVectorStore(VectorStoreBase):
    """Dict-backed store with L2 nearest-neighbour search."""

    def __init__(self) -> None:
        super().__init__("test-collection")
        self.records: dict[str, tuple[list[float], dict[str, Any]]] = {}
        self.add_calls = 0
        self.fail_on: set[str] = set()
        self.closed = False
        self.healthy = True
        self._lock = threading.Lock()

    def get(self, ids: Sequence[str] | None = None) -> StoredRecords:
        if "get" in self.fail_on:
            raise StoreFailed("get failed")
        with self._lock:
            wanted = list(self.records) if ids is None else [i for i in ids if i in self.records]
            return StoredRecords(ids=wanted, metadatas=[dict(self.records[i][1]) for i in wanted])

    def add(
        self,
        ids: Sequence[str],
        embeddings: Sequence[Sequence[float]],
        metadatas: Sequence[dict[str, Any]],
    ) -> None:
        if "add" in self.fail_on:
            raise StoreFailed("add failed")
        with self._lock:
            self.add_calls += 1
            for record_id, emb, meta in zip(ids, embeddings, metadatas):
                self.records[record_id] = (list(emb), dict(meta))

    def delete(self, ids: Sequence[str]) -> None:
        with self._lock:
            for record_id in ids:
                self.records.pop(record_id, None)

    def query(self, query_embedding: Sequence[float], *, n_results: int) -> list[dict[str, Any]]:
        if "query" in self.fail_on:
            raise StoreFailed("query failed")
        with self._lock:
            scored = [
                (math.dist(query_embedding, emb), record_id, meta)
                for record_id, (emb, meta) in self.records.items()
            ]
        scored.sort(key=lambda item: item[0])
        return [
            {"id": record_id, "metadata": dict(meta), "distance": dist}
            for dist, record_id, meta in scored[:n_results]
        ]

    def health_check(self) -> bool:
        return self.healthy

    def close(self) -> None:
        self.closed = True


class FakeFetcher:
    """Serves canned pages; a stored exception is raised instead."""

    def __init__(self, pages: dict[str, PageContent | Exception] | None = None) -> None:
        self.pages: dict[str, PageContent | Exception] = pages or {}
        self.calls: list[str] = []

    def fetch(self, url: str) -> PageContent:
        self.calls.append(url)
        page = self.pages.get(url)
        if page is None:
            raise FetchFailed(url, "404 Not Found")
        if isinstance(page, Exception):
            raise page
        return page

    def close(self) -> None:
        pass


class FakeEmbedder:
    """Deterministic 3-d embeddings; explicit vectors override the default."""

    def __init__(self, vectors: dict[str, list[float]] | None = None) -> None:
        self.vectors = vectors or {}
        self.fail_after: int | None = None
        self.calls: list[str] = []

    def embed(self, text: str) -> list[float]:
        if self.fail_after is not None and len(self.calls) >= self.fail_after:
            raise EmbeddingFailed("embedding quota exceeded")
        self.calls.append(text)
        if text in self.vectors:
            return list(self.vectors[text])
        return [float(len(text)), float(sum(map(ord, text)) % 97), 1.0]


class FakeGenerator:
    """Records every prompt and returns a canned completion."""

    def __init__(self, reply: str = "Here is what I found.", error: Exception | None = None) -> None:
        self.reply = reply
        self.error = error
        self.calls: list[list[Any]] = []

    def generate(self, messages: Any) -> str:
        self.calls.append(list(messages))
        if self.error is not None:
            raise self.error
        return self.reply


def make_page(url: str, body: str, head: str = "<title>Test</title>", links: Sequence[str] = ()) -> PageContent:
    internal = sorted({h for h in links if not h.startswith("http") and h != "/"})
    external = sorted({h for h in links if h.startswith("http")})
    return PageContent(url=url, metadata=head, body=body, internal_links=internal, external_links=external)


# ── Fixtures ────────────────────────────────────────────────────────────


@pytest.fixture()
def store() -> InMemoryVectorStore:
    return InMemoryVectorStore()


@pytest.fixture()
def fetcher() -> FakeFetcher:
    return FakeFetcher()


@pytest.fixture()
def embedder() -> FakeEmbedder:
    return FakeEmbedder()


@pytest.fixture()
def generator() -> FakeGenerator:
    return FakeGenerator()


@pytest.fixture()
def indexer(store: InMemoryVectorStore) -> ChunkIndexer:
    return ChunkIndexer(store)


@pytest.fixture()
def pipeline(fetcher: FakeFetcher, embedder: FakeEmbedder, indexer: ChunkIndexer) -> IngestionPipeline:
    return IngestionPipeline(fetcher, embedder, indexer, chunk_count=4)


@pytest.fixture()
def answerer(embedder: FakeEmbedder, store: InMemoryVectorStore, generator: FakeGenerator) -> Answerer:
    return Answerer(embedder, store, generator, k=3)

