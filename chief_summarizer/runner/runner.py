"""
Run loop

Selects a model once, discovers documents under the root, and summarizes
them one at a time. Per-document failures are reported and the loop moves
on; the report's error flag decides the process exit status.

Status lines (stdout, suppressed by --quiet):
    SKIP <path> (summary exists)
    DRY  <path> (would create <summary>, model=<m>, chunk=<size>/<overlap>)
    CHNK <path> (<i>/<n>)
    MERGE <path> (<n> chunks)
    OK   <path> -> <summary>
Errors (stderr, always shown):
    ERR  <path> (<reason>)
"""
import time
import random
import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

import typer

from ..chunking import ChunkConfig
from ..core.llm_client_base import LLMConfig, OllamaClient, OracleClient
from ..errors import DocumentError
from ..logs.logging_config import RequestContext
from ..selection import resolve_model
from ..settings import Settings
from ..summarization import DocumentSummarizer, PostProcessor
from .files import (
    discover_documents,
    display_path,
    read_document,
    summary_path_for,
    write_summary,
)

logger = logging.getLogger(__name__)


@dataclass
class RunReport:
    """Counters for one run."""
    model: str = ""
    discovered: int = 0
    processed: int = 0
    succeeded: int = 0
    skipped: int = 0
    failed: int = 0
    had_error: bool = False

    @property
    def exit_code(self) -> int:
        return 1 if self.had_error else 0


class SummarizationRunner:
    """
    Summarizes every eligible document under ``settings.root_dir``.

    Example:
        report = asyncio.run(SummarizationRunner(settings).run())
    """

    def __init__(
        self,
        settings: Settings,
        client: Optional[OracleClient] = None,
        rng: Optional[random.Random] = None,
    ):
        self.settings = settings
        self.client = client
        self.rng = rng or random.Random(time.time_ns())
        self.report = RunReport()

    # =========================
    # Output
    # =========================

    def status(self, message: str) -> None:
        if not self.settings.quiet:
            typer.echo(message)

    def error(self, message: str) -> None:
        typer.echo(message, err=True)

    def _display(self, path: Path) -> str:
        return display_path(path, self.settings.root_dir)

    # =========================
    # Run
    # =========================

    async def run(self) -> RunReport:
        """
        Raises:
            ModelSelectionError: No model could be resolved; nothing was processed
        """
        if self.client is not None:
            return await self._run_with(self.client)

        config = LLMConfig(host=self.settings.host, timeout=self.settings.request_timeout)
        async with OllamaClient(config) as client:
            return await self._run_with(client)

    async def _run_with(self, client: OracleClient) -> RunReport:
        settings = self.settings

        selection = await resolve_model(
            client,
            settings.model,
            settings.preferred_models,
            verbose=settings.verbose,
        )
        self.report.model = selection.model

        plans = self._discover()
        self.report.discovered = len(plans)
        self.rng.shuffle(plans)

        summarizer = DocumentSummarizer(
            client=client,
            model=selection.model,
            chunk_config=ChunkConfig(
                chunk_size=settings.chunk_size,
                chunk_overlap=settings.chunk_overlap,
            ),
            post_processor=PostProcessor.from_entries(settings.strip_patterns),
            chunk_concurrency=settings.chunk_concurrency,
        )

        for path in plans:
            if settings.max_files > 0 and self.report.processed >= settings.max_files:
                break
            await self._process_plan(summarizer, path)

        logger.info(
            f"[RUN] END | model={self.report.model} | processed={self.report.processed} | "
            f"ok={self.report.succeeded} | skipped={self.report.skipped} | "
            f"failed={self.report.failed}"
        )
        return self.report

    def _discover(self) -> List[Path]:
        settings = self.settings

        def on_skip(path: Path, is_dir: bool) -> None:
            if is_dir:
                if settings.verbose:
                    self.status(f"SKIP {self._display(path)} (directory excluded)")
            else:
                self.status(f"SKIP {self._display(path)} (excluded by pattern)")

        def on_error(exc: OSError) -> None:
            self.error(f"ERR  {exc.filename} (walk error: {exc})")
            self.report.had_error = True

        return discover_documents(
            settings.root_dir,
            settings.compiled_excludes(),
            on_skip=on_skip,
            on_error=on_error,
        )

    async def _process_plan(self, summarizer: DocumentSummarizer, path: Path) -> None:
        settings = self.settings
        display = self._display(path)
        summary_path = summary_path_for(path)
        summary_display = self._display(summary_path)

        if not settings.force and summary_path.exists():
            self.status(f"SKIP {display} (summary exists)")
            self.report.skipped += 1
            return

        if settings.dry_run:
            self.status(
                f"DRY  {display} (would create {summary_display}, model={summarizer.model}, "
                f"chunk={settings.chunk_size}/{settings.chunk_overlap})"
            )
            self.report.processed += 1
            return

        try:
            with RequestContext():
                await self.process_file(summarizer, path, summary_path)
        except DocumentError as e:
            self.error(f"ERR  {display} ({e})")
            self.report.failed += 1
            self.report.had_error = True
        else:
            self.status(f"OK   {display} -> {summary_display}")
            self.report.succeeded += 1
        self.report.processed += 1

    async def process_file(
        self,
        summarizer: DocumentSummarizer,
        path: Path,
        summary_path: Path
    ) -> None:
        """
        Read, summarize and write one document.

        Raises:
            DocumentError: Any document-scoped failure
        """
        display = self._display(path)
        summarizer.on_chunk = lambda index, total: self.status(f"CHNK {display} ({index}/{total})")
        summarizer.on_merge = lambda total: self.status(f"MERGE {display} ({total} chunks)")

        text = read_document(path)
        result = await summarizer.summarize(text, source=display)
        write_summary(summary_path, result.summary)


def run_summarization(settings: Settings, client: Optional[OracleClient] = None) -> RunReport:
    """Synchronous entry point for the CLI."""
    return asyncio.run(SummarizationRunner(settings, client=client).run())
