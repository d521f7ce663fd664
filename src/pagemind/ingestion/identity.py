"""Record identifiers for indexed chunks.

An identifier is ``"<url>_chunk_<index>"``.  The URL is a literal prefix
of every identifier belonging to that source, which lets the store be
scanned for "all chunks of a URL" without a secondary index.

A raw ``startswith(url)`` test is ambiguous when one URL is a literal
prefix of another (``http://a/page1`` vs ``http://a/page1-extra``), so
ownership is decided by :func:`parse_chunk_id` instead: the id is split on
its *last* ``_chunk_`` marker and the suffix must be all digits.  Since the
index never contains the marker, that split recovers the exact URL.
"""

from __future__ import annotations

from collections.abc import Iterable

from pagemind.errors import InvalidArgument

CHUNK_MARKER = "_chunk_"


def chunk_id(url: str, index: int) -> str:
    """Return the identifier of chunk *index* of *url*."""
    if index < 0:
        raise InvalidArgument("Chunk index must be non-negative", {"index": index})
    return f"{url}{CHUNK_MARKER}{index}"


def parse_chunk_id(record_id: str) -> tuple[str, int] | None:
    """Invert :func:`chunk_id`; ``None`` for ids not produced by it."""
    url, marker, suffix = record_id.rpartition(CHUNK_MARKER)
    if not marker or not (suffix.isascii() and suffix.isdigit()):
        return None
    return url, int(suffix)


def belongs_to(record_id: str, url: str) -> bool:
    """True when *record_id* is a chunk of exactly *url*."""
    if not record_id.startswith(url):
        return False
    parsed = parse_chunk_id(record_id)
    return parsed is not None and parsed[0] == url


def ids_for_source(ids: Iterable[str], url: str) -> list[str]:
    """Filter *ids* down to those owned by *url*, preserving order."""
    return [record_id for record_id in ids if belongs_to(record_id, url)]
