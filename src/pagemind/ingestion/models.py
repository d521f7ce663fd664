"""Domain models flowing through the ingestion pipeline."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class PageContent(BaseModel):
    """What the web fetcher extracts from one page.

    Attributes
    ----------
    url:
        The page that was fetched.
    metadata:
        Inner HTML of the page ``<head>``.
    body:
        Inner HTML of the page ``<body>`` (empty when the page has none).
    internal_links / external_links:
        Unique hrefs found in anchors, classified by
        :func:`pagemind.ingestion.fetcher.classify_links`.
    """

    url: str
    metadata: str = ""
    body: str = ""
    internal_links: list[str] = Field(default_factory=list)
    external_links: list[str] = Field(default_factory=list)


class Chunk(BaseModel):
    """A contiguous slice of a source's body text."""

    source_url: str
    index: int = Field(ge=0)
    text: str
    head: str = ""


class UpsertResult(BaseModel):
    """Outcome of a single dedup-guarded insert."""

    id: str
    inserted: bool


IngestionStatus = Literal["succeeded", "empty_body", "failed"]


class IngestionReport(BaseModel):
    """Summary of one ``ingest(url)`` call."""

    url: str
    status: IngestionStatus
    purged: int = 0
    chunks_total: int = 0
    chunks_inserted: int = 0
    chunks_skipped: int = 0
    internal_links: int = 0
    external_links: int = 0
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status != "failed"
