"""Domain models for retrieval results and answers."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class Citation(BaseModel):
    """Provenance record linking a retrieved chunk back to its source page.

    Attributes
    ----------
    document_id:
        The vector-store ID of the chunk (``None`` when unknown).
    url:
        Source page URL (empty when the record carried none).
    chunk_index:
        Ordinal position of the chunk within the page body.
    distance:
        Distance reported by the vector store (lower = closer).
    metadata:
        The full stored metadata of the record.
    """

    document_id: str | None = None
    url: str = ""
    chunk_index: int | None = None
    distance: float | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)

    def short_ref(self) -> str:
        """Return a compact ``[url§chunk]`` reference string."""
        chunk = self.chunk_index if self.chunk_index is not None else "?"
        return f"[{self.url or 'unknown'}§{chunk}]"


class RetrievalResult(BaseModel):
    """A single retrieved passage together with its citation."""

    content: str
    citation: Citation

    def __str__(self) -> str:  # noqa: D105
        return f"{self.citation.short_ref()} {self.content[:120]}…"


class Answer(BaseModel):
    """Generated answer plus the context it was grounded in."""

    text: str
    primary_url: str | None = None
    sources: list[RetrievalResult] = Field(default_factory=list)
