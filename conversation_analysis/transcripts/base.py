# Conversation Analysis
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""Transcript reader interface."""

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol


class TranscriptReader(Protocol):
    """Interface for loading transcript files.

    Implementations must only perform raw text extraction and line ending
    normalization. Speaker turn detection happens in `turns.segment()`.
    """

    def can_read(self, path: Path) -> bool:
        """Return True if this reader supports the given file."""

        raise NotImplementedError

    def read_text(self, path: Path) -> str:
        """Return the transcript as text with `\\n` line endings."""

        raise NotImplementedError


@dataclass(frozen=True)
class ParserError(RuntimeError):
    """Raised for transcript reading errors."""

    message: str
    path: Path | None = None
    excerpt: str | None = None

    def __str__(self) -> str:  # pragma: no cover
        parts: list[str] = []

        if self.path is not None:
            parts.append(f"{self.path}: {self.message}")
        else:
            parts.append(self.message)

        if isinstance(self.excerpt, str) and self.excerpt.strip():
            excerpt = self.excerpt.strip().replace("\n", " ")
            if len(excerpt) > 160:
                excerpt = excerpt[:157] + "..."
            parts.append(f"> {excerpt}")

        return "\n".join(parts)


def normalize_newlines(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")
