"""Unit tests for the chunker module."""

import pytest

from pagemind.errors import InvalidArgument
from pagemind.ingestion.chunker import build_chunks, split_into_chunks


@pytest.mark.parametrize(
    ("text", "count"),
    [
        ("Hello", 100),
        ("abcdefghij", 3),
        ("abcdefghij", 10),
        ("abcdefghij", 1),
        ("<body><p>Project A</p></body>", 7),
        ("x" * 1001, 100),
    ],
)
def test_chunks_reconstruct_text(text: str, count: int) -> None:
    """Joining the chunks gives back the original text, no loss or overlap."""
    assert "".join(split_into_chunks(text, count)) == text


@pytest.mark.parametrize("count", [0, -1, -100])
def test_non_positive_count_raises(count: int) -> None:
    with pytest.raises(InvalidArgument):
        split_into_chunks("some text", count)


def test_invalid_argument_is_a_value_error() -> None:
    with pytest.raises(ValueError, match="greater than zero"):
        split_into_chunks("some text", 0)


def test_empty_text_yields_no_chunks() -> None:
    assert split_into_chunks("", 100) == []


def test_short_text_yields_one_char_chunks() -> None:
    """len 5, count 100 -> size 1 -> five 1-char chunks."""
    assert split_into_chunks("Hello", 100) == ["H", "e", "l", "l", "o"]


def test_uneven_division_last_chunk_shorter() -> None:
    """len 10, count 3 -> size 4 -> 4 + 4 + 2."""
    assert split_into_chunks("abcdefghij", 3) == ["abcd", "efgh", "ij"]


def test_produced_count_may_differ_from_requested() -> None:
    """len 9, count 4 -> size 3 -> only 3 chunks."""
    chunks = split_into_chunks("abcdefghi", 4)
    assert chunks == ["abc", "def", "ghi"]
    assert len(chunks) != 4


def test_even_division() -> None:
    chunks = split_into_chunks("x" * 1000, 100)
    assert len(chunks) == 100
    assert all(len(c) == 10 for c in chunks)


def test_build_chunks_indexes_and_head() -> None:
    chunks = build_chunks("http://a/page", "abcdefghij", "<title>A</title>", 3)
    assert [c.index for c in chunks] == [0, 1, 2]
    assert [c.text for c in chunks] == ["abcd", "efgh", "ij"]
    assert all(c.source_url == "http://a/page" for c in chunks)
    assert all(c.head == "<title>A</title>" for c in chunks)
