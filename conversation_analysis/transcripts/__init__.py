"""Transcript loading and speaker turn segmentation.

Readers convert source files (TXT/MD/ODT) into plain transcript text; they
live in `registry` and are imported from there, so the segmenter does not
pull in the file format libraries. The `turns` module splits transcript text
into the statements of one speaker:

- `index`: 1-based statement number
- `text`: the statement text, lines joined with single spaces
"""

from conversation_analysis.transcripts.base import TranscriptReader
from conversation_analysis.transcripts.turns import BoundaryKind, LineClass, Statement, classify_line, segment

__all__ = [
    "BoundaryKind",
    "LineClass",
    "Statement",
    "TranscriptReader",
    "classify_line",
    "segment",
]
