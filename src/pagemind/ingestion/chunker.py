"""Fixed-count text chunking."""

from __future__ import annotations

import math

from pagemind.errors import InvalidArgument
from pagemind.ingestion.models import Chunk


def split_into_chunks(text: str, count: int) -> list[str]:
    """Split *text* into roughly *count* contiguous, non-overlapping pieces.

    Every piece is ``ceil(len(text) / count)`` characters long except
    possibly the last one, so the number of pieces actually produced is
    ``ceil(len(text) / size)`` and can be smaller than *count* (a 5-char
    text asked for 100 chunks yields five 1-char chunks).  Joining the
    result always reconstructs *text*.

    Raises
    ------
    InvalidArgument
        When *count* is not a positive integer.
    """
    if count <= 0:
        raise InvalidArgument(
            "Number of chunks must be greater than zero", {"count": count}
        )
    if not text:
        return []

    size = math.ceil(len(text) / count)
    return [text[start : start + size] for start in range(0, len(text), size)]


def build_chunks(url: str, body: str, head: str, count: int) -> list[Chunk]:
    """Chunk a page body into :class:`Chunk` models, in index order."""
    return [
        Chunk(source_url=url, index=i, text=piece, head=head)
        for i, piece in enumerate(split_into_chunks(body, count))
    ]
