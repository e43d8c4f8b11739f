import pytest

from chief_summarizer.chunking import Chunk, ChunkConfig, Chunker, chunk_text
from chief_summarizer.chunking.chunker import normalize_chunk_params


def _assert_well_formed(text: str, chunks: list[Chunk], size: int, overlap: int) -> None:
    assert chunks, "non-empty text must yield at least one chunk"
    assert chunks[0].start == 0
    assert chunks[-1].end == len(text)

    for position, chunk in enumerate(chunks):
        assert chunk.index == position
        assert chunk.text == text[chunk.start:chunk.end]
        assert 0 < chunk.length <= size

    for prev, nxt in zip(chunks, chunks[1:]):
        assert nxt.start > prev.start
        # contiguous coverage, exact overlap
        assert nxt.start == prev.end - overlap


@pytest.mark.parametrize(
    "length,size,overlap",
    [
        (1, 10, 2),
        (10, 10, 2),
        (11, 10, 2),
        (95, 10, 3),
        (4000, 4000, 400),
        (9001, 4000, 400),
    ],
)
def test_chunks_cover_text_with_exact_overlap(length: int, size: int, overlap: int) -> None:
    text = "".join(chr(ord("a") + i % 26) for i in range(length))
    _assert_well_formed(text, chunk_text(text, size, overlap), size, overlap)


def test_empty_text_has_no_chunks() -> None:
    assert chunk_text("", 10, 2) == []


def test_short_text_is_single_chunk() -> None:
    chunks = chunk_text("hello", 4000, 400)
    assert len(chunks) == 1
    assert chunks[0].text == "hello"


def test_offsets_follow_window_and_overlap() -> None:
    chunks = chunk_text("x" * 25, 10, 2)
    assert [(c.start, c.end) for c in chunks] == [(0, 10), (8, 18), (16, 25)]


def test_non_positive_size_falls_back_to_default() -> None:
    assert normalize_chunk_params(0, 0) == (1000, 0)
    assert normalize_chunk_params(-5, 100) == (1000, 100)
    chunks = chunk_text("y" * 2500, 0, 0)
    assert [c.length for c in chunks] == [1000, 1000, 500]


def test_negative_overlap_is_clamped_to_zero() -> None:
    chunks = chunk_text("z" * 25, 10, -5)
    assert [c.start for c in chunks] == [0, 10, 20]


def test_overlap_not_smaller_than_size_uses_quarter_size() -> None:
    assert normalize_chunk_params(10, 10) == (10, 2)
    assert normalize_chunk_params(10, 50) == (10, 2)
    chunks = chunk_text("w" * 25, 10, 10)
    assert [c.start for c in chunks] == [0, 8, 16]


def test_lengths_count_code_points() -> None:
    text = "ä" * 15
    chunks = chunk_text(text, 10, 0)
    assert [c.length for c in chunks] == [10, 5]
    assert chunks[0].text == "ä" * 10


def test_chunking_is_deterministic() -> None:
    text = "Die Sitzung begann um 9 Uhr. " * 300
    first = chunk_text(text, 500, 50)
    second = chunk_text(text, 500, 50)
    assert first == second


def test_chunker_uses_normalized_config() -> None:
    chunker = Chunker(ChunkConfig(chunk_size=10, chunk_overlap=20))
    assert (chunker.size, chunker.overlap) == (10, 2)
    assert [c.start for c in chunker.chunk("v" * 25)] == [0, 8, 16]


def test_default_config_values() -> None:
    config = ChunkConfig()
    assert config.chunk_size == 4000
    assert config.chunk_overlap == 400
