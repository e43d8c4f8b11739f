"""
File collaborator

Directory traversal, exclude matching, summary path derivation and
document read/write.
"""
import os
import logging
from pathlib import Path
from typing import Callable, List, Optional, Pattern, Sequence, Union

from ..config import SUMMARY_SUFFIX, MARKDOWN_EXTENSION
from ..errors import DocumentReadError, WriteError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def is_markdown(path: PathLike) -> bool:
    return Path(path).suffix == MARKDOWN_EXTENSION


def is_summary_file(path: PathLike) -> bool:
    name = Path(path).name
    marker = SUMMARY_SUFFIX + MARKDOWN_EXTENSION
    return len(name) > len(marker) and name.endswith(marker)


def summary_path_for(path: PathLike) -> Path:
    """``notes/report.md`` -> ``notes/report_summary.md``"""
    path = Path(path)
    return path.with_name(f"{path.stem}{SUMMARY_SUFFIX}{path.suffix}")


def display_path(path: PathLike, root: PathLike) -> str:
    """Path relative to the root when possible, otherwise as given."""
    try:
        rel = os.path.relpath(path, root)
    except ValueError:
        return str(path)
    if rel == ".":
        return str(path)
    return rel


def matches_exclude(path: PathLike, root: PathLike, patterns: Sequence[Pattern]) -> bool:
    """
    True if any pattern matches the full path or the root-relative path.

    Patterns use search semantics, so they may match anywhere in the path.
    """
    if not patterns:
        return False
    candidates = [str(path)]
    try:
        rel = os.path.relpath(path, root)
    except ValueError:
        rel = None
    if rel is not None:
        if rel == ".":
            rel = Path(path).name
        candidates.append(rel)
    return any(p.search(c) for c in candidates for p in patterns)


def discover_documents(
    root: PathLike,
    excludes: Sequence[Pattern] = (),
    on_skip: Optional[Callable[[Path, bool], None]] = None,
    on_error: Optional[Callable[[OSError], None]] = None,
) -> List[Path]:
    """
    Walk the root and collect Markdown documents that are not summaries.

    Excluded directories are pruned.

    Args:
        root: Directory (or single file) to scan
        excludes: Compiled exclude patterns
        on_skip: Called with (path, is_dir) for each excluded entry
        on_error: Called with the OSError for each unreadable directory

    Returns:
        Candidate documents in walk order
    """
    root = Path(root)

    def wanted(path: Path) -> bool:
        return is_markdown(path) and not is_summary_file(path)

    if matches_exclude(root, root, excludes):
        if on_skip:
            on_skip(root, root.is_dir())
        return []

    if root.is_file():
        return [root] if wanted(root) else []

    documents: List[Path] = []
    for dirpath, dirnames, filenames in os.walk(root, onerror=on_error):
        current = Path(dirpath)

        kept = []
        for name in sorted(dirnames):
            sub = current / name
            if matches_exclude(sub, root, excludes):
                if on_skip:
                    on_skip(sub, True)
                continue
            kept.append(name)
        dirnames[:] = kept

        for name in sorted(filenames):
            path = current / name
            if matches_exclude(path, root, excludes):
                if on_skip:
                    on_skip(path, False)
                continue
            if wanted(path):
                documents.append(path)

    logger.debug(f"[DISCOVER] root={root} | documents={len(documents)}")
    return documents


def read_document(path: PathLike) -> str:
    """
    Read a document as UTF-8, keeping line endings as they are on disk.

    Raises:
        DocumentReadError: If the file cannot be read or decoded
    """
    try:
        with open(path, encoding="utf-8", newline="") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise DocumentReadError(f"read file: {e}") from e


def write_summary(path: PathLike, summary: str) -> None:
    """
    Write the summary followed by a single newline.

    Raises:
        WriteError: If the file cannot be written
    """
    try:
        Path(path).write_text(summary + "\n", encoding="utf-8")
    except OSError as e:
        raise WriteError(f"write summary: {e}") from e
