# Conversation Analysis
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""TXT/Markdown transcript reader.

Conversation exports are usually Markdown (`**User:** ...`) or plain text
(`User: ...`). The file content is returned as-is apart from line endings;
lines keep their markup because turn detection relies on it.
"""

from pathlib import Path

from conversation_analysis.transcripts.base import ParserError, normalize_newlines


class TextTranscriptReader:
    """Read .txt and .md transcripts."""

    def can_read(self, path: Path) -> bool:
        return path.suffix.lower() in {".txt", ".md", ".markdown"}

    def read_text(self, path: Path) -> str:
        try:
            raw = path.read_text(encoding="utf-8-sig")
        except UnicodeDecodeError as exc:
            raise ParserError("File is not valid UTF-8 text", path=path) from exc
        except OSError as exc:
            raise ParserError(f"Failed to read text file: {exc}", path=path) from exc

        return normalize_newlines(raw)
