"""Unit tests for the dedup-guarded chunk indexer."""

from __future__ import annotations

from conftest import InMemoryVectorStore

from pagemind.ingestion.indexer import ChunkIndexer
from pagemind.ingestion.models import Chunk


def _chunk(url: str = "http://a/page1", index: int = 0, text: str = "Project A") -> Chunk:
    return Chunk(source_url=url, index=index, text=text, head="<title>A</title>")


class TestUpsert:
    def test_inserts_new_record(self, store: InMemoryVectorStore, indexer: ChunkIndexer) -> None:
        result = indexer.upsert(_chunk(), [0.1, 0.2, 0.3])

        assert result.inserted is True
        assert result.id == "http://a/page1_chunk_0"
        embedding, meta = store.records["http://a/page1_chunk_0"]
        assert embedding == [0.1, 0.2, 0.3]
        assert meta == {
            "url": "http://a/page1",
            "body": "Project A",
            "head": "<title>A</title>",
            "chunkIndex": 0,
        }

    def test_existing_record_is_left_untouched(
        self, store: InMemoryVectorStore, indexer: ChunkIndexer
    ) -> None:
        indexer.upsert(_chunk(), [0.1, 0.2, 0.3])
        before = store.records["http://a/page1_chunk_0"]

        result = indexer.upsert(_chunk(text="changed"), [9.0, 9.0, 9.0])

        assert result.inserted is False
        assert store.records["http://a/page1_chunk_0"] == before
        assert store.add_calls == 1
        assert len(store.records) == 1


class TestPurge:
    def test_purge_removes_only_own_records(
        self, store: InMemoryVectorStore, indexer: ChunkIndexer
    ) -> None:
        for i in range(3):
            indexer.upsert(_chunk("http://a/page1", i), [float(i)])
        indexer.upsert(_chunk("http://a/page1-extra", 0), [5.0])

        assert indexer.purge("http://a/page1") == 3
        assert list(store.records) == ["http://a/page1-extra_chunk_0"]

    def test_purge_unknown_url(self, indexer: ChunkIndexer) -> None:
        assert indexer.purge("http://nothing") == 0

    def test_is_ingested_and_list_sources(self, indexer: ChunkIndexer) -> None:
        indexer.upsert(_chunk("http://b", 0), [1.0])
        indexer.upsert(_chunk("http://a", 0), [1.0])
        indexer.upsert(_chunk("http://a", 1), [1.0])

        assert indexer.is_ingested("http://a")
        assert not indexer.is_ingested("http://c")
        assert indexer.list_sources() == ["http://a", "http://b"]
