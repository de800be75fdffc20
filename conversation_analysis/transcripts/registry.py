# Conversation Analysis
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""Transcript reader registry."""

import sys
from pathlib import Path

from conversation_analysis.config import ConfigError
from conversation_analysis.transcripts.base import ParserError, TranscriptReader, normalize_newlines
from conversation_analysis.transcripts.odt_parser import OdtTranscriptReader
from conversation_analysis.transcripts.text_parser import TextTranscriptReader


STDIN_PATH = "-"

_READERS: list[TranscriptReader] = [
    OdtTranscriptReader(),
    TextTranscriptReader(),
]


def get_transcript_reader(path: Path) -> TranscriptReader:
    """Select a transcript reader based on the file.

    Args:
        path:
            Transcript file path.

    Returns:
        A reader instance.

    Raises:
        ConfigError:
            If no reader supports the file.
    """

    for reader in _READERS:
        if reader.can_read(path):
            return reader

    supported = ", ".join(sorted({".odt", ".txt", ".md", ".markdown"}))
    raise ConfigError(f"Unsupported transcript format: {path} (supported: {supported})")


def read_transcript(source: str) -> str:
    """Read a transcript file, or stdin for `-`, and normalize errors to ConfigError."""

    if source == STDIN_PATH:
        return normalize_newlines(sys.stdin.read())

    path = Path(source)
    if not path.is_file():
        raise ConfigError(f"Transcript file not found: {path}")

    reader = get_transcript_reader(path)
    try:
        return reader.read_text(path)
    except ParserError as exc:
        raise ConfigError(str(exc)) from exc
