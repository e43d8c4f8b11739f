import asyncio

import pytest
from conftest import FakeOracle

from chief_summarizer.chunking import ChunkConfig
from chief_summarizer.errors import (
    ChunkSummarizationError,
    EmptyDocumentError,
    MergeError,
    ProtocolError,
)
from chief_summarizer.summarization import (
    DocumentSummarizer,
    LengthCategory,
    PostProcessor,
    summarize_document,
)


def _summarizer(oracle: FakeOracle, size: int = 10, overlap: int = 2, **kwargs) -> DocumentSummarizer:
    return DocumentSummarizer(
        client=oracle,
        model="qwen3:14b",
        chunk_config=ChunkConfig(chunk_size=size, chunk_overlap=overlap),
        post_processor=PostProcessor.from_entries(["think"]),
        **kwargs,
    )


def test_empty_document_makes_no_oracle_calls(fake_oracle: FakeOracle) -> None:
    with pytest.raises(EmptyDocumentError, match="file is empty"):
        asyncio.run(_summarizer(fake_oracle).summarize(" \n\t \n"))
    assert fake_oracle.calls == []


def test_short_document_is_one_chunk_plus_merge(fake_oracle: FakeOracle) -> None:
    result = asyncio.run(_summarizer(fake_oracle, size=4000, overlap=400).summarize("  Kurzer Text.  "))

    assert fake_oracle.tasks == ["chunk_1_of_1", "merge"]
    assert fake_oracle.calls[0][1].count("Kurzer Text.") == 1
    assert result.summary == "## Ultra-Kurzfassung\nThema.\nErgebnis."
    assert result.total_chunks == 1
    assert result.total_chars == len("Kurzer Text.")
    assert result.length_category is LengthCategory.SHORT


def test_chunks_are_summarized_in_order_then_merged(fake_oracle: FakeOracle) -> None:
    text = "abcdefghij" * 3  # 30 code points -> windows at 0, 8, 16, 24
    result = asyncio.run(_summarizer(fake_oracle).summarize(text))

    assert fake_oracle.tasks == [
        "chunk_1_of_4", "chunk_2_of_4", "chunk_3_of_4", "chunk_4_of_4", "merge"
    ]
    assert all(model == "qwen3:14b" for model, _, _ in fake_oracle.calls)

    merge_prompt = fake_oracle.calls[-1][1]
    positions = [merge_prompt.index(f"Chunk {i}:\nsummary of chunk_{i}_of_4") for i in range(1, 5)]
    assert positions == sorted(positions)
    assert "<think>" not in merge_prompt
    assert result.total_chunks == 4


def test_chunk_failure_aborts_with_one_based_index() -> None:
    oracle = FakeOracle(fail_on={2})
    with pytest.raises(ChunkSummarizationError) as excinfo:
        asyncio.run(_summarizer(oracle).summarize("abcdefghij" * 3))

    assert excinfo.value.index == 2
    assert "chunk 2 summarization failed" in str(excinfo.value)
    assert "merge" not in oracle.tasks
    assert len(oracle.calls) == 2


def test_merge_failure_is_distinct_from_chunk_failure() -> None:
    oracle = FakeOracle(fail_on={2})
    with pytest.raises(MergeError, match="final summary failed"):
        asyncio.run(_summarizer(oracle, size=4000).summarize("Ein Absatz."))
    assert oracle.tasks == ["chunk_1_of_1", "merge"]


@pytest.mark.parametrize(
    "words,expected",
    [
        (100, LengthCategory.SHORT),
        (10000, LengthCategory.MEDIUM),
        (30000, LengthCategory.LONG),
    ],
)
def test_merge_prompt_carries_length_category(words: int, expected: LengthCategory) -> None:
    oracle = FakeOracle()
    result = asyncio.run(_summarizer(oracle, size=20000, overlap=0).summarize("a " * words))

    assert result.length_category is expected
    assert f"Original document length category: {expected.value}." in oracle.calls[-1][1]


def test_progress_callbacks() -> None:
    oracle = FakeOracle()
    chunk_events = []
    merge_events = []
    summarizer = _summarizer(
        oracle,
        on_chunk=lambda index, total: chunk_events.append((index, total)),
        on_merge=merge_events.append,
    )
    asyncio.run(summarizer.summarize("abcdefghij" * 3))

    assert chunk_events == [(1, 4), (2, 4), (3, 4), (4, 4)]
    assert merge_events == [4]


def test_parallel_chunks_keep_document_order() -> None:
    # later chunks finish first
    delays = {f"chunk_{i}_of_4": 0.05 * (5 - i) for i in range(1, 5)}
    oracle = FakeOracle(delays=delays)
    asyncio.run(_summarizer(oracle, chunk_concurrency=4).summarize("abcdefghij" * 3))

    merge_prompt = oracle.calls[-1][1]
    positions = [merge_prompt.index(f"Chunk {i}:\nsummary of chunk_{i}_of_4") for i in range(1, 5)]
    assert positions == sorted(positions)
    assert oracle.tasks[-1] == "merge"


def test_parallel_chunks_respect_concurrency_cap() -> None:
    delays = {f"chunk_{i}_of_4": 0.02 for i in range(1, 5)}
    oracle = FakeOracle(delays=delays)
    asyncio.run(_summarizer(oracle, chunk_concurrency=2).summarize("abcdefghij" * 3))
    assert oracle.max_in_flight == 2


def test_parallel_failure_reports_lowest_index() -> None:
    class FailingOracle(FakeOracle):
        async def generate(self, model, prompt, task=None):
            if task in ("chunk_2_of_4", "chunk_4_of_4"):
                self.calls.append((model, prompt, task))
                raise ProtocolError(f"{task} failed")
            return await super().generate(model, prompt, task)

    oracle = FailingOracle(delays={"chunk_1_of_4": 0.02, "chunk_3_of_4": 0.02})
    with pytest.raises(ChunkSummarizationError) as excinfo:
        asyncio.run(_summarizer(oracle, chunk_concurrency=4).summarize("abcdefghij" * 3))
    assert excinfo.value.index == 2
    assert "merge" not in oracle.tasks


def test_sequential_mode_never_overlaps_calls() -> None:
    delays = {f"chunk_{i}_of_4": 0.01 for i in range(1, 5)}
    oracle = FakeOracle(delays=delays)
    asyncio.run(_summarizer(oracle).summarize("abcdefghij" * 3))
    assert oracle.max_in_flight == 1


def test_summarize_document_returns_text(fake_oracle: FakeOracle) -> None:
    summary = asyncio.run(
        summarize_document("Ein Absatz.", fake_oracle, "llama3", chunk_size=4000, chunk_overlap=400)
    )
    assert summary.startswith("## Ultra-Kurzfassung")
    assert fake_oracle.calls[0][0] == "llama3"
