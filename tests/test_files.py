import re
from pathlib import Path

import pytest

from chief_summarizer.errors import DocumentReadError, WriteError
from chief_summarizer.runner.files import (
    discover_documents,
    display_path,
    is_summary_file,
    matches_exclude,
    read_document,
    summary_path_for,
    write_summary,
)


def _touch(path: Path, text: str = "# Titel\n") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def test_summary_path_sits_next_to_document() -> None:
    assert summary_path_for(Path("notes/report.md")) == Path("notes/report_summary.md")
    assert summary_path_for("meeting.notes.md") == Path("meeting.notes_summary.md")


def test_summary_file_detection() -> None:
    assert is_summary_file("report_summary.md")
    assert not is_summary_file("report.md")
    assert not is_summary_file("_summary.md")
    assert not is_summary_file("report_summary.txt")


def test_display_path_is_root_relative(tmp_path: Path) -> None:
    assert display_path(tmp_path / "a" / "b.md", tmp_path) == str(Path("a") / "b.md")
    assert display_path(tmp_path, tmp_path) == str(tmp_path)


def test_exclude_matches_relative_or_full_path(tmp_path: Path) -> None:
    path = tmp_path / "archive" / "old.md"
    assert matches_exclude(path, tmp_path, [re.compile(r"^archive/")])
    assert matches_exclude(path, tmp_path, [re.compile(re.escape(str(tmp_path)))])
    assert not matches_exclude(path, tmp_path, [re.compile(r"^old")])
    assert not matches_exclude(path, tmp_path, [])


def test_discovery_skips_summaries_and_other_files(tmp_path: Path) -> None:
    _touch(tmp_path / "b.md")
    _touch(tmp_path / "a.md")
    _touch(tmp_path / "a_summary.md")
    _touch(tmp_path / "notes.txt")
    _touch(tmp_path / "sub" / "c.md")

    found = discover_documents(tmp_path)
    assert found == [tmp_path / "a.md", tmp_path / "b.md", tmp_path / "sub" / "c.md"]


def test_discovery_prunes_excluded_directories(tmp_path: Path) -> None:
    _touch(tmp_path / "keep.md")
    _touch(tmp_path / "archive" / "old.md")
    _touch(tmp_path / "archive" / "deep" / "older.md")
    _touch(tmp_path / "draft-1.md")

    skipped = []
    found = discover_documents(
        tmp_path,
        [re.compile(r"^archive$"), re.compile(r"draft-\d")],
        on_skip=lambda path, is_dir: skipped.append((path.name, is_dir)),
    )

    assert found == [tmp_path / "keep.md"]
    assert ("archive", True) in skipped
    assert ("draft-1.md", False) in skipped
    assert all(name not in ("old.md", "older.md") for name, _ in skipped)


def test_discovery_of_single_file_root(tmp_path: Path) -> None:
    doc = _touch(tmp_path / "only.md")
    assert discover_documents(doc) == [doc]
    assert discover_documents(_touch(tmp_path / "only_summary.md")) == []


def test_read_document_failure(tmp_path: Path) -> None:
    with pytest.raises(DocumentReadError, match="read file"):
        read_document(tmp_path / "missing.md")

    bad = tmp_path / "latin1.md"
    bad.write_bytes("Grüße".encode("latin-1"))
    with pytest.raises(DocumentReadError):
        read_document(bad)


def test_write_summary_adds_single_trailing_newline(tmp_path: Path) -> None:
    target = tmp_path / "doc_summary.md"
    write_summary(target, "## Ultra-Kurzfassung\nText")
    assert target.read_text(encoding="utf-8") == "## Ultra-Kurzfassung\nText\n"


def test_write_summary_failure(tmp_path: Path) -> None:
    with pytest.raises(WriteError, match="write summary"):
        write_summary(tmp_path / "missing-dir" / "doc_summary.md", "text")


def test_read_document_keeps_crlf_line_endings(tmp_path: Path) -> None:
    doc = tmp_path / "windows.md"
    doc.write_bytes(b"# Titel\r\nZeile eins\r\nZeile zwei\r\n")
    text = read_document(doc)
    assert text == "# Titel\r\nZeile eins\r\nZeile zwei\r\n"
    assert len(text) == 33
