import pytest

from chief_summarizer.summarization import LengthCategory, get_chunk_prompt, get_merge_prompt
from chief_summarizer.summarization.schemas import ChunkSummary, classify_length


def test_chunk_prompt_embeds_excerpt_between_fences() -> None:
    prompt = get_chunk_prompt("Der Vertrag wurde am 3. Mai unterzeichnet.")
    assert "---\nDer Vertrag wurde am 3. Mai unterzeichnet.\n---" in prompt
    assert "Maximum ~120 words." in prompt
    assert "SAME LANGUAGE" in prompt
    assert "Thinking" in prompt


def test_chunk_prompt_word_limit_is_configurable() -> None:
    assert "Maximum ~60 words." in get_chunk_prompt("text", max_words=60)


def test_merge_prompt_lists_summaries_in_order() -> None:
    prompt = get_merge_prompt(["erster Teil", "zweiter Teil", "dritter Teil"], LengthCategory.SHORT)
    first = prompt.index("Chunk 1:\nerster Teil")
    second = prompt.index("Chunk 2:\nzweiter Teil")
    third = prompt.index("Chunk 3:\ndritter Teil")
    assert first < second < third
    assert "Chunk 1:\nerster Teil\n\nChunk 2:" in prompt


def test_merge_prompt_accepts_chunk_summaries() -> None:
    summaries = [ChunkSummary(index=0, text="alpha"), ChunkSummary(index=1, text="beta")]
    assert get_merge_prompt(summaries, "MEDIUM") == get_merge_prompt(["alpha", "beta"], "MEDIUM")


def test_merge_prompt_requires_both_headings() -> None:
    prompt = get_merge_prompt(["x"], LengthCategory.MEDIUM)
    assert "## Ultra-Kurzfassung" in prompt
    assert "## Ausführliche Zusammenfassung" in prompt
    assert prompt.rstrip().endswith("Do not add any intro text or explanations around it.")


@pytest.mark.parametrize(
    "category,expected",
    [
        (LengthCategory.SHORT, "2–4 short paragraphs"),
        (LengthCategory.MEDIUM, "3–6 paragraphs"),
        (LengthCategory.LONG, "### level-3"),
    ],
)
def test_merge_prompt_names_category_and_its_structure(category: LengthCategory, expected: str) -> None:
    prompt = get_merge_prompt(["x"], category)
    assert f"Original document length category: {category.value}." in prompt
    directive = prompt.split("For this document:", 1)[1].splitlines()[0]
    assert expected in directive


def test_prompts_are_deterministic() -> None:
    assert get_merge_prompt(["a", "b"], LengthCategory.LONG) == get_merge_prompt(["a", "b"], LengthCategory.LONG)
    assert get_chunk_prompt("a") == get_chunk_prompt("a")


@pytest.mark.parametrize(
    "length,expected",
    [
        (0, LengthCategory.SHORT),
        (7999, LengthCategory.SHORT),
        (8000, LengthCategory.MEDIUM),
        (24999, LengthCategory.MEDIUM),
        (25000, LengthCategory.LONG),
    ],
)
def test_length_category_thresholds(length: int, expected: LengthCategory) -> None:
    assert LengthCategory.from_length(length) is expected


def test_classification_by_word_count() -> None:
    # single-letter words: two code points per word
    assert classify_length(("a " * 100).strip()) is LengthCategory.SHORT
    assert classify_length(("a " * 10000).strip()) is LengthCategory.MEDIUM
    assert classify_length(("a " * 30000).strip()) is LengthCategory.LONG
