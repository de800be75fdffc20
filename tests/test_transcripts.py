"""Tests for transcript readers."""

from __future__ import annotations

import io
from pathlib import Path

import pytest
from odfdo import Document, Paragraph

from conversation_analysis.config import ConfigError
from conversation_analysis.transcripts import segment
from conversation_analysis.transcripts.registry import get_transcript_reader, read_transcript
from conversation_analysis.transcripts.odt_parser import OdtTranscriptReader
from conversation_analysis.transcripts.text_parser import TextTranscriptReader


def test_registry_selects_reader_by_suffix() -> None:
    """Readers are chosen by file extension."""
    assert isinstance(get_transcript_reader(Path("chat.md")), TextTranscriptReader)
    assert isinstance(get_transcript_reader(Path("chat.TXT")), TextTranscriptReader)
    assert isinstance(get_transcript_reader(Path("chat.odt")), OdtTranscriptReader)


def test_registry_rejects_unsupported_format(tmp_path: Path) -> None:
    """Unknown file types are reported as ConfigError."""
    path = tmp_path / "chat.pdf"
    path.write_bytes(b"%PDF")

    with pytest.raises(ConfigError, match="Unsupported transcript format"):
        read_transcript(str(path))


def test_read_transcript_missing_file(tmp_path: Path) -> None:
    """A missing transcript file is reported as ConfigError."""
    with pytest.raises(ConfigError, match="not found"):
        read_transcript(str(tmp_path / "missing.md"))


def test_read_markdown_normalizes_line_endings(tmp_path: Path) -> None:
    """Markdown transcripts keep their markup but use LF line endings."""
    path = tmp_path / "chat.md"
    path.write_bytes(b"**User:** hi\r\n**Assistant:** hello\r\nthere\r\n")

    text = read_transcript(str(path))

    assert text == "**User:** hi\n**Assistant:** hello\nthere\n"


def test_read_invalid_utf8_is_config_error(tmp_path: Path) -> None:
    """Binary garbage in a text transcript is reported as ConfigError."""
    path = tmp_path / "chat.txt"
    path.write_bytes(b"\xff\xfe\xfa")

    with pytest.raises(ConfigError, match="UTF-8"):
        read_transcript(str(path))


def test_read_transcript_from_stdin(monkeypatch: pytest.MonkeyPatch) -> None:
    """`-` reads the transcript from stdin."""
    monkeypatch.setattr("sys.stdin", io.StringIO("Assistant: hi\r\nUser: bye"))

    assert read_transcript("-") == "Assistant: hi\nUser: bye"


def test_read_odt_paragraphs_as_lines(tmp_path: Path) -> None:
    """ODT paragraphs become transcript lines."""
    path = tmp_path / "chat.odt"
    document = Document("text")
    for line in ["User: Can you help?", "Assistant: Perhaps I can.", "Let me look.", "User: Thanks"]:
        document.body.append(Paragraph(line))
    document.save(path)

    text = read_transcript(str(path))

    assert "Assistant: Perhaps I can." in text.splitlines()
    assert [s.text for s in segment(text, "Assistant")] == ["Perhaps I can. Let me look."]


def test_read_broken_odt_is_config_error(tmp_path: Path) -> None:
    """A file that is not a valid ODT document is reported as ConfigError."""
    path = tmp_path / "chat.odt"
    path.write_text("not a zip", encoding="utf-8")

    with pytest.raises(ConfigError, match="Failed to parse ODT"):
        read_transcript(str(path))
