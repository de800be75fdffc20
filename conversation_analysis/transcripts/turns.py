# Conversation Analysis
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""Speaker turn segmentation.

Conversation exports (chat logs pasted as Markdown, plain-text transcripts)
mark speaking turns with a label line such as `**Assistant:**` or `User:`.
This module scans such text line by line and returns the statements of one
speaker:

- A line that contains the speaker label and either emphasis markup (`*`,
  `**`) or a `Name:` prefix opens a turn of the target speaker. Text after the
  label on the same line belongs to the new statement.
- A `**Name:**` or `Name:` line that does not name the speaker opens a turn of
  somebody else.
- All other non-blank lines continue the current turn. Blank lines are skipped
  but do not end a turn.

Detection is case-sensitive and heuristic. A speaker label that appears inside
another speaker's line (quoted speech, a substring of a longer word) can
over- or under-segment the transcript.
"""

import enum
import re
from dataclasses import dataclass


_CAPITALIZED_LABEL_RE = re.compile(r"^[A-Z][a-z]+:")
_BOLD_LABEL_RE = re.compile(r"^\*\*.*:\*\*")

# Label headers, used to find where the statement text starts on a boundary
# line: `**Name:** text`, `**Name**: text`, `_Name_ text` or `Name: text`.
_EMPHASIZED_HEADER_RE = re.compile(
    r"^\s*(?P<delim>\*{1,2}|_{1,2})(?P<label>[^*_]{1,80}?)(?P=delim)\s*:?\s*(?P<rest>.*)$"
)
_COLON_HEADER_RE = re.compile(r"^\s*(?P<label>[^:\n]{1,80}?)\s*:\s*(?P<rest>.*)$")


class BoundaryKind(enum.Enum):
    """Classification of a single transcript line."""

    TARGET = "target"
    OTHER = "other"
    CONTINUATION = "continuation"


@dataclass(frozen=True)
class LineClass:
    """
    Result of classifying one transcript line.

    Attributes:
        kind:
            Whether the line opens a target turn, opens another speaker's
            turn, or continues the current turn.
        text:
            Statement text carried by the line: the text after the label for
            target boundaries, the stripped line for continuations, and an
            empty string for other speakers' boundaries.
    """

    kind: BoundaryKind
    text: str = ""


@dataclass(frozen=True)
class Statement:
    """
    One contiguous block of target-speaker text.

    Attributes:
        index:
            1-based position among the extracted statements.
        text:
            Lines of the turn joined with single spaces.
    """

    index: int
    text: str


def is_target_boundary(line: str, speaker_label: str) -> bool:
    if not speaker_label or speaker_label not in line:
        return False
    return "*" in line or _CAPITALIZED_LABEL_RE.match(line) is not None


def is_speaker_boundary(line: str) -> bool:
    return _BOLD_LABEL_RE.match(line) is not None or _CAPITALIZED_LABEL_RE.match(line) is not None


def _text_after_label(line: str, speaker_label: str) -> str:
    """Return the statement text following the speaker label on a boundary line.

    Returns an empty string if the line is a bare header, or if the label part
    of the line does not name the speaker (e.g. the label occurs in the middle
    of a sentence).
    """

    for pattern in (_EMPHASIZED_HEADER_RE, _COLON_HEADER_RE):
        match = pattern.match(line)
        if match and speaker_label in match.group("label"):
            return match.group("rest").strip()

    return ""


def classify_line(line: str, speaker_label: str) -> LineClass:
    """Classify one transcript line relative to the target speaker."""

    if is_target_boundary(line, speaker_label):
        return LineClass(BoundaryKind.TARGET, _text_after_label(line, speaker_label))

    if is_speaker_boundary(line):
        return LineClass(BoundaryKind.OTHER)

    return LineClass(BoundaryKind.CONTINUATION, line.strip())


def segment(transcript: str, speaker_label: str) -> list[Statement]:
    """Extract the statements of one speaker from a transcript.

    Args:
        transcript:
            Raw multi-line transcript text.
        speaker_label:
            Speaker name used as a case-sensitive substring cue.

    Returns:
        Statements in transcript order, numbered from 1. The list is empty if
        the speaker label is blank or never opens a turn.
    """

    statements: list[Statement] = []
    if not speaker_label:
        return statements

    pending: list[str] = []
    in_target_turn = False

    def _flush() -> None:
        text = " ".join(pending).strip()
        pending.clear()
        if text:
            statements.append(Statement(index=len(statements) + 1, text=text))

    for line in (transcript or "").splitlines():
        line_class = classify_line(line, speaker_label)

        if line_class.kind is BoundaryKind.TARGET:
            _flush()
            in_target_turn = True
            if line_class.text:
                pending.append(line_class.text)
        elif line_class.kind is BoundaryKind.OTHER:
            _flush()
            in_target_turn = False
        elif in_target_turn and line_class.text:
            pending.append(line_class.text)

    _flush()
    return statements
