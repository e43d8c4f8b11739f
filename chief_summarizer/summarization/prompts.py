"""
Prompt templates for chunk-level summaries and the final merge.
"""

from typing import List, Sequence, Union

from .config import SUMMARIZATION_CHUNK_MAX_WORDS
from .schemas import ChunkSummary, LengthCategory

# =========================
# Chunk summarization prompt
# =========================
CHUNK_SUMMARY_PROMPT = """You are "Chief Summarizer", an assistant that creates concise summaries in the original language of the text.

Task:
- Read the following markdown excerpt.
- Write a short summary of this excerpt.
- Use the SAME LANGUAGE as the text (usually German).
- Keep names, dates and key facts accurate.
- Do NOT add your own interpretations or new ideas.
- Do NOT write an overall document summary, only summarize THIS excerpt.
- Do NOT include any sections labelled 'Thinking' or hidden reasoning notes.

Output format:
- 1 short paragraph in plain text (no headings).
- Maximum ~{max_words} words.

Excerpt:
---
{content}
---
"""


# ==================================
# Length category instructions
# ==================================
LENGTH_CATEGORY_INSTRUCTIONS = {
    LengthCategory.SHORT: "write 2–4 short paragraphs OR 3–6 bullet points.",
    LengthCategory.MEDIUM: "write 3–6 paragraphs and optionally 3–8 bullet points.",
    LengthCategory.LONG: "use clear markdown headings (### level-3) and bullet lists for structure.",
}


# =========================
# Final merge prompt
# =========================
MERGE_SUMMARY_PROMPT = """You are "Chief Summarizer", an assistant that creates structured summaries in the original language of the source text.

Task:
- You receive several partial summaries of different excerpts of ONE long markdown document.
- Combine them into ONE cohesive summary.
- Remove repetition and contradictions.
- Maintain the SAME LANGUAGE as the original text (usually German).
- Keep important names, dates and numbers.
- Be neutral and factual.
- Do NOT include any "Thinking" sections or hidden reasoning notes in the response.

Output format (proper Markdown with headings):

1. Start with a level-2 heading: ## Ultra-Kurzfassung
2. Below it, write two short sentences:
   - Line 1: one short sentence describing the main topic.
   - Line 2: one short sentence describing the main outcome or conclusion.

3. Then add a blank line.

4. Then add another level-2 heading: ## Ausführliche Zusammenfassung
5. Below it, write the detailed summary:
   - If the original document was short (~< 1.500 Wörter):
     - {short_instruction}
   - If the original document was medium (1.500–5.000 Wörter):
     - {medium_instruction}
   - If the original document was long (> 5.000 Wörter):
     - {long_instruction}
   - Always stay focused on the key points, decisions, arguments, and results.

IMPORTANT: Use proper markdown headings (## and ###) throughout. The output must be valid markdown.

Original document length category: {category}.
For this document: {category_instruction}

Input:
The following are partial summaries of the document, in order:

---
{combined_content}
---

Now produce ONLY the markdown summary as specified above.
Do not add any intro text or explanations around it.
"""


def get_chunk_prompt(content: str, max_words: int = SUMMARIZATION_CHUNK_MAX_WORDS) -> str:
    """Generate prompt for summarizing a single excerpt."""
    return CHUNK_SUMMARY_PROMPT.format(content=content, max_words=max_words)


def _format_chunk_summaries(summaries: Sequence[Union[str, ChunkSummary]]) -> str:
    """Label summaries by 1-based position, in the order given."""
    texts: List[str] = [
        s.text if isinstance(s, ChunkSummary) else s
        for s in summaries
    ]
    return "\n\n".join(
        f"Chunk {i + 1}:\n{text}"
        for i, text in enumerate(texts)
    ) + "\n"


def get_merge_prompt(
    summaries: Sequence[Union[str, ChunkSummary]],
    length_category: LengthCategory
) -> str:
    """
    Generate prompt for combining ordered chunk summaries.

    Args:
        summaries: Partial summaries in document order
        length_category: Drives the expected structure of the detailed section
    """
    category = LengthCategory(length_category)
    return MERGE_SUMMARY_PROMPT.format(
        short_instruction=LENGTH_CATEGORY_INSTRUCTIONS[LengthCategory.SHORT],
        medium_instruction=LENGTH_CATEGORY_INSTRUCTIONS[LengthCategory.MEDIUM],
        long_instruction=LENGTH_CATEGORY_INSTRUCTIONS[LengthCategory.LONG],
        category=category.value,
        category_instruction=LENGTH_CATEGORY_INSTRUCTIONS[category],
        combined_content=_format_chunk_summaries(summaries),
    )
