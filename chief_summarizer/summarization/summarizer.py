"""
Hierarchical summarization for a single document.

Map-reduce over fixed-size chunks:
1. Trim the document and split it into overlapping chunks
2. Summarize each chunk (MAP phase), in chunk order
3. Merge the ordered chunk summaries into the final summary (REDUCE phase),
   with a structure chosen by the document's length category

Oracle calls are never retried here; a failed chunk aborts the document
with ChunkSummarizationError, a failed merge with MergeError.
"""
import time
import asyncio
import logging
from typing import Callable, List, Optional

from ..chunking import Chunk, Chunker, ChunkConfig
from ..core.llm_client_base import OracleClient
from ..core.validators import validate_document_text
from ..errors import ChunkSummarizationError, MergeError, OracleError
from .config import SUMMARIZATION_CHUNK_CONCURRENCY
from .post_processor import PostProcessor
from .prompts import get_chunk_prompt, get_merge_prompt
from .schemas import ChunkSummary, DocumentSummary, classify_length

logger = logging.getLogger(__name__)

ChunkProgress = Callable[[int, int], None]
MergeProgress = Callable[[int], None]


class DocumentSummarizer:
    """
    Drives chunk summaries and the merge call for one document at a time.

    Example:
        summarizer = DocumentSummarizer(client, model="qwen3:14b")
        result = await summarizer.summarize(text)
        print(result.summary)
    """

    def __init__(
        self,
        client: OracleClient,
        model: str,
        chunk_config: Optional[ChunkConfig] = None,
        post_processor: Optional[PostProcessor] = None,
        chunk_concurrency: int = SUMMARIZATION_CHUNK_CONCURRENCY,
        on_chunk: Optional[ChunkProgress] = None,
        on_merge: Optional[MergeProgress] = None,
    ):
        """
        Args:
            client: Oracle used for every generate call
            model: Model identifier passed to the oracle
            chunk_config: Chunk size/overlap (defaults from chunking config)
            post_processor: Cleans each oracle response
            chunk_concurrency: Max in-flight chunk calls; 1 means sequential
            on_chunk: Called with (1-based index, total) before each chunk call
            on_merge: Called with the number of summaries before the merge call
        """
        self.client = client
        self.model = model
        self.chunker = Chunker(chunk_config)
        self.post_processor = post_processor or PostProcessor()
        self.chunk_concurrency = max(1, chunk_concurrency)
        self.on_chunk = on_chunk
        self.on_merge = on_merge

    def prepare_chunks(self, trimmed: str) -> List[Chunk]:
        chunks = self.chunker.chunk(trimmed)
        if not chunks:
            chunks = [Chunk(index=0, start=0, end=len(trimmed), text=trimmed)]
        return chunks

    async def summarize(self, text: str, source: Optional[str] = None) -> DocumentSummary:
        """
        Summarize one document.

        Raises:
            EmptyDocumentError: Document is empty after trimming
            ChunkSummarizationError: A chunk call failed (1-based index)
            MergeError: The merge call failed
        """
        start_time = time.time()
        trimmed = validate_document_text(text)

        chunks = self.prepare_chunks(trimmed)
        logger.info(
            f"[SUMMARIZE] START | source={source} | chars={len(trimmed)} | "
            f"chunks={len(chunks)} | model={self.model}"
        )

        # MAP PHASE
        if self.chunk_concurrency > 1 and len(chunks) > 1:
            summaries = await self._summarize_chunks_parallel(chunks)
        else:
            summaries = await self._summarize_chunks_sequential(chunks)

        # REDUCE PHASE
        category = classify_length(trimmed)
        final_summary = await self._merge(summaries, category)

        elapsed = time.time() - start_time
        logger.info(
            f"[SUMMARIZE] END | source={source} | category={category.value} | "
            f"elapsed={elapsed:.2f}s"
        )

        return DocumentSummary(
            summary=final_summary,
            model=self.model,
            total_chunks=len(chunks),
            total_chars=len(trimmed),
            length_category=category,
            elapsed_seconds=elapsed,
            source=source,
        )

    async def _summarize_chunk(self, chunk: Chunk, total: int) -> ChunkSummary:
        if self.on_chunk:
            self.on_chunk(chunk.index + 1, total)

        prompt = get_chunk_prompt(chunk.text)
        try:
            response = await self.client.generate(
                self.model, prompt, task=f"chunk_{chunk.index + 1}_of_{total}"
            )
        except OracleError as e:
            logger.error(f"[SUMMARIZE] chunk {chunk.index + 1}/{total} failed | error={e}")
            raise ChunkSummarizationError(chunk.index + 1, e) from e

        return ChunkSummary(index=chunk.index, text=self.post_processor.clean(response))

    async def _summarize_chunks_sequential(self, chunks: List[Chunk]) -> List[ChunkSummary]:
        total = len(chunks)
        summaries = []
        for chunk in chunks:
            summaries.append(await self._summarize_chunk(chunk, total))
        return summaries

    async def _summarize_chunks_parallel(self, chunks: List[Chunk]) -> List[ChunkSummary]:
        """
        Summarize chunks with bounded concurrency.

        Results are stored by chunk index, so merge input keeps document order
        regardless of completion order. If several chunks fail, the lowest
        index is reported.
        """
        total = len(chunks)
        semaphore = asyncio.Semaphore(self.chunk_concurrency)
        logger.info(f"[ASYNC_MAP] START | chunks={total} | max_concurrent={self.chunk_concurrency}")

        async def process_single_chunk(chunk: Chunk) -> ChunkSummary:
            async with semaphore:
                return await self._summarize_chunk(chunk, total)

        results = await asyncio.gather(
            *(process_single_chunk(chunk) for chunk in chunks),
            return_exceptions=True
        )

        summaries: List[Optional[ChunkSummary]] = [None] * total
        failures = []
        for result in results:
            if isinstance(result, ChunkSummarizationError):
                failures.append(result)
            elif isinstance(result, BaseException):
                raise result
            else:
                summaries[result.index] = result

        if failures:
            raise min(failures, key=lambda e: e.index)

        logger.info(f"[ASYNC_MAP] END | all {total} chunks completed")
        return summaries

    async def _merge(self, summaries: List[ChunkSummary], category) -> str:
        if self.on_merge:
            self.on_merge(len(summaries))

        prompt = get_merge_prompt(summaries, category)
        try:
            response = await self.client.generate(self.model, prompt, task="merge")
        except OracleError as e:
            logger.error(f"[SUMMARIZE] merge failed | error={e}")
            raise MergeError(e) from e

        return self.post_processor.clean(response)


async def summarize_document(
    text: str,
    client: OracleClient,
    model: str,
    chunk_size: int,
    chunk_overlap: int,
    post_processor: Optional[PostProcessor] = None,
) -> str:
    """
    Convenience function returning only the final summary text.
    """
    summarizer = DocumentSummarizer(
        client=client,
        model=model,
        chunk_config=ChunkConfig(chunk_size=chunk_size, chunk_overlap=chunk_overlap),
        post_processor=post_processor,
    )
    result = await summarizer.summarize(text)
    return result.summary
