"""
Run Settings

Layers the YAML config file and command-line options over the defaults in
chief_summarizer.config. Precedence: command line > config file > defaults.

Config file (default ~/.config/chiefsummarizer.yaml):

    ollama:
      host: http://localhost:11434
      preferred_models: [qwen3:14b, deepseek-r1:14b, llama3]
    processing:
      root_path: ~/notes
      chunk_size: 4000
      chunk_overlap: 400
      request_timeout: 10m
      max_files: 0
      chunk_concurrency: 1
      strip_patterns: [think]
    output:
      force_overwrite: false
      verbose: false
      quiet: false
    filters:
      exclude_patterns: ['/archive/']
"""
import logging
from pathlib import Path
from typing import List, Optional, Pattern

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .config import (
    OLLAMA_URL,
    DEFAULT_PREFERRED_MODELS,
    DEFAULT_CHUNK_SIZE,
    DEFAULT_CHUNK_OVERLAP,
    DEFAULT_REQUEST_TIMEOUT,
    CONFIG_FILE_PATH,
    parse_duration,
)
from .core.validators import validate_exclude_patterns, validate_positive
from .errors import ConfigError
from .summarization.config import SUMMARIZATION_CHUNK_CONCURRENCY, SUMMARIZATION_STRIP_PATTERNS
from .summarization.post_processor import compile_strip_patterns

logger = logging.getLogger(__name__)


# =========================
# Config file sections
# =========================

class _Section(BaseModel):
    model_config = ConfigDict(extra="ignore")


class OllamaSection(_Section):
    host: str = ""
    preferred_models: List[str] = Field(default_factory=list)


class ProcessingSection(_Section):
    root_path: str = ""
    chunk_size: int = 0
    chunk_overlap: int = 0
    request_timeout: str = ""
    max_files: int = 0
    chunk_concurrency: int = 0
    strip_patterns: List[str] = Field(default_factory=list)


class OutputSection(_Section):
    force_overwrite: bool = False
    verbose: bool = False
    quiet: bool = False


class FiltersSection(_Section):
    exclude_patterns: List[str] = Field(default_factory=list)


class ConfigFile(_Section):
    """YAML config file; unknown sections (e.g. 'updates') are ignored."""
    ollama: OllamaSection = Field(default_factory=OllamaSection)
    processing: ProcessingSection = Field(default_factory=ProcessingSection)
    output: OutputSection = Field(default_factory=OutputSection)
    filters: FiltersSection = Field(default_factory=FiltersSection)


def load_config_file(path: Path) -> ConfigFile:
    """
    Load and validate the YAML config file.

    A missing file yields an empty ConfigFile.

    Raises:
        ConfigError: If the file cannot be read, parsed or validated
    """
    if not path.exists():
        logger.debug(f"[CONFIG] no config file at {path}")
        return ConfigFile()

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"failed to load config file: {e}") from e

    try:
        return ConfigFile.model_validate(data or {})
    except ValidationError as e:
        raise ConfigError(f"failed to load config file {path}: {e}") from e


# =========================
# Settings
# =========================

class Settings(BaseModel):
    """Resolved options for one run."""
    root_dir: Path
    host: str = OLLAMA_URL
    model: str = ""
    preferred_models: List[str] = Field(default_factory=lambda: list(DEFAULT_PREFERRED_MODELS))
    chunk_size: int = DEFAULT_CHUNK_SIZE
    chunk_overlap: int = DEFAULT_CHUNK_OVERLAP
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    max_files: int = 0
    chunk_concurrency: int = SUMMARIZATION_CHUNK_CONCURRENCY
    force: bool = False
    dry_run: bool = False
    verbose: bool = False
    quiet: bool = False
    exclude_patterns: List[str] = Field(default_factory=list)
    strip_patterns: List[str] = Field(default_factory=lambda: list(SUMMARIZATION_STRIP_PATTERNS))
    config_path: Optional[Path] = None

    def compiled_excludes(self) -> List[Pattern]:
        return validate_exclude_patterns(self.exclude_patterns)


def _expand_home(path: str) -> Path:
    if path.startswith("~/"):
        return Path.home() / path[2:]
    return Path(path)


def _first_set(*values):
    """First value that is not None."""
    for value in values:
        if value is not None:
            return value
    return None


def build_settings(
    root_path: Optional[str] = None,
    host: Optional[str] = None,
    model: Optional[str] = None,
    chunk_size: Optional[int] = None,
    chunk_overlap: Optional[int] = None,
    request_timeout: Optional[float] = None,
    max_files: Optional[int] = None,
    chunk_concurrency: Optional[int] = None,
    force: bool = False,
    dry_run: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    exclude_patterns: Optional[List[str]] = None,
    config_path: Optional[str] = None,
) -> Settings:
    """
    Build run settings. ``None`` means "not given on the command line".

    Boolean flags can only switch an option on; the config file can switch
    it on as well.

    Raises:
        ConfigError: Unreadable config file, missing/invalid root path,
            invalid exclude or strip pattern
    """
    path = Path(config_path) if config_path else Path(CONFIG_FILE_PATH)
    file_cfg = load_config_file(path)
    processing = file_cfg.processing

    # Root directory (CLI arg or config file)
    if root_path:
        root_dir = Path(root_path)
    elif processing.root_path:
        root_dir = _expand_home(processing.root_path)
    else:
        raise ConfigError(
            "root path must be specified via command line argument or config file "
            "(processing.root_path)",
            exit_code=2
        )
    if not root_dir.exists():
        raise ConfigError(f"invalid root path {str(root_dir)!r}: no such file or directory")

    # Request timeout; an unparsable value in the file keeps the default
    file_timeout = None
    if processing.request_timeout:
        try:
            file_timeout = parse_duration(processing.request_timeout)
        except ValueError:
            logger.warning(
                f"[CONFIG] ignoring invalid processing.request_timeout "
                f"{processing.request_timeout!r}"
            )
    timeout = _first_set(request_timeout, file_timeout, DEFAULT_REQUEST_TIMEOUT)
    if timeout <= 0:
        timeout = DEFAULT_REQUEST_TIMEOUT

    concurrency = _first_set(
        chunk_concurrency,
        processing.chunk_concurrency if processing.chunk_concurrency > 0 else None,
        SUMMARIZATION_CHUNK_CONCURRENCY,
    )
    validate_positive(concurrency, "chunk_concurrency")

    settings = Settings(
        root_dir=root_dir,
        host=_first_set(host, file_cfg.ollama.host or None, OLLAMA_URL),
        model=model or "",
        preferred_models=file_cfg.ollama.preferred_models or list(DEFAULT_PREFERRED_MODELS),
        chunk_size=_first_set(
            chunk_size,
            processing.chunk_size if processing.chunk_size > 0 else None,
            DEFAULT_CHUNK_SIZE,
        ),
        chunk_overlap=_first_set(
            chunk_overlap,
            processing.chunk_overlap if processing.chunk_overlap > 0 else None,
            DEFAULT_CHUNK_OVERLAP,
        ),
        request_timeout=timeout,
        max_files=_first_set(
            max_files,
            processing.max_files if processing.max_files > 0 else None,
            0,
        ),
        chunk_concurrency=concurrency,
        force=force or file_cfg.output.force_overwrite,
        dry_run=dry_run,
        verbose=verbose or file_cfg.output.verbose,
        quiet=quiet or file_cfg.output.quiet,
        exclude_patterns=exclude_patterns or file_cfg.filters.exclude_patterns,
        strip_patterns=processing.strip_patterns or list(SUMMARIZATION_STRIP_PATTERNS),
        config_path=path,
    )

    # Fail early on bad patterns
    settings.compiled_excludes()
    compile_strip_patterns(settings.strip_patterns)

    logger.debug(
        f"[CONFIG] root={settings.root_dir} | host={settings.host} | "
        f"chunk={settings.chunk_size}/{settings.chunk_overlap} | "
        f"timeout={settings.request_timeout}s | config={path}"
    )
    return settings
