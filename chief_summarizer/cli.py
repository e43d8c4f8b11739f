"""Chief Summarizer CLI - summarize every Markdown file under a directory"""

from typing import List, Optional

import typer

from . import __version__
from .config import parse_duration
from .errors import ConfigError, LockError, ModelSelectionError
from .logs import setup_logging
from .runner import ProcessLock, run_summarization
from .settings import build_settings

app = typer.Typer(
    name="chief-summarizer",
    help="Write a *_summary.md next to every Markdown file, using a local Ollama model",
    add_completion=False
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"chief-summarizer v{__version__}")
        raise typer.Exit()


def _parse_timeout(value: Optional[str]) -> Optional[float]:
    if value is None:
        return None
    try:
        return parse_duration(value)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--request-timeout")


@app.command()
def main(
    root_path: Optional[str] = typer.Argument(
        None,
        help="Directory to scan (defaults to processing.root_path from the config file)"
    ),
    host: Optional[str] = typer.Option(None, "--host", help="Ollama host URL"),
    model: Optional[str] = typer.Option(None, "--model", help="Model name (optional)"),
    chunk_size: Optional[int] = typer.Option(
        None, "--chunk-size", help="Chunk size in characters [default: 4000]"
    ),
    chunk_overlap: Optional[int] = typer.Option(
        None, "--chunk-overlap", help="Chunk overlap in characters [default: 400]"
    ),
    force: bool = typer.Option(False, "--force", help="Overwrite existing *_summary.md files"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Dry run (no LLM calls, no writes)"),
    max_files: Optional[int] = typer.Option(
        None, "--max-files", help="Max files to process (0 = unlimited)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress progress/status output (errors still reported)"
    ),
    request_timeout: Optional[str] = typer.Option(
        None, "--request-timeout", help="HTTP request timeout (e.g. 600s, 10m) [default: 10m]"
    ),
    exclude: Optional[List[str]] = typer.Option(
        None, "--exclude", help="Regular expression for paths to skip (repeatable)"
    ),
    chunk_concurrency: Optional[int] = typer.Option(
        None, "--chunk-concurrency", help="Max parallel chunk requests per file [default: 1]"
    ),
    config: Optional[str] = typer.Option(
        None, "--config", help="Config file [default: ~/.config/chiefsummarizer.yaml]"
    ),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True,
        help="Print version and exit"
    ),
):
    """Summarize Markdown documents in ROOT_PATH."""
    setup_logging(verbose=verbose)

    try:
        settings = build_settings(
            root_path=root_path,
            host=host,
            model=model,
            chunk_size=chunk_size,
            chunk_overlap=chunk_overlap,
            request_timeout=_parse_timeout(request_timeout),
            max_files=max_files,
            chunk_concurrency=chunk_concurrency,
            force=force,
            dry_run=dry_run,
            verbose=verbose,
            quiet=quiet,
            exclude_patterns=exclude,
            config_path=config,
        )
    except ConfigError as e:
        typer.echo(f"ERR  {e}", err=True)
        raise typer.Exit(e.exit_code)

    if settings.verbose and not verbose:
        setup_logging(verbose=True)

    try:
        with ProcessLock():
            report = run_summarization(settings)
    except LockError as e:
        typer.echo(f"ERR  {e}", err=True)
        raise typer.Exit(1)
    except ModelSelectionError as e:
        typer.echo(f"ERR  model selection failed: {e}", err=True)
        raise typer.Exit(1)

    if report.had_error:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
