"""Tests for speaker turn segmentation."""

from __future__ import annotations

from conversation_analysis.transcripts.turns import (
    BoundaryKind,
    LineClass,
    Statement,
    classify_line,
    segment,
)


def test_segment_bold_label_with_inline_text() -> None:
    """Text after a bold speaker label opens the statement."""
    transcript = "**Assistant:** I think that might work.\n**User:** ok"

    assert segment(transcript, "Assistant") == [Statement(1, "I think that might work.")]


def test_segment_returns_empty_list_when_speaker_is_absent() -> None:
    """A speaker label that never appears yields no statements."""
    transcript = "**User:** hello\n**Bot:** hi there\nsome more text"

    assert segment(transcript, "Assistant") == []


def test_segment_returns_empty_list_for_blank_speaker() -> None:
    """A blank speaker label never matches."""
    assert segment("**Assistant:** hello", "") == []


def test_segment_joins_lines_and_skips_blank_lines() -> None:
    """Consecutive lines form one statement; blank lines do not end a turn."""
    transcript = "\n".join(
        [
            "**User:** Hi there",
            "**Assistant:**",
            "First line.",
            "",
            "   Second line.  ",
            "**User:** Thanks",
            "**Assistant:** Welcome back",
            "again.",
        ]
    )

    assert segment(transcript, "Assistant") == [
        Statement(1, "First line. Second line."),
        Statement(2, "Welcome back again."),
    ]


def test_segment_plain_colon_labels() -> None:
    """`Name:` labels at line start mark turns without any markup."""
    transcript = "User: hello\nAssistant: sure thing\nmore detail\nUser: bye\nignored"

    assert segment(transcript, "Assistant") == [Statement(1, "sure thing more detail")]


def test_segment_consecutive_target_boundaries_split_statements() -> None:
    """Each target label starts a new statement."""
    transcript = "**Assistant:** one\n**Assistant:** two"

    assert segment(transcript, "Assistant") == [Statement(1, "one"), Statement(2, "two")]


def test_segment_ignores_text_before_first_turn() -> None:
    """Header lines before any label are not attributed to the speaker."""
    transcript = "# Chat export\nExported yesterday\n\n**Assistant:** Hello"

    assert segment(transcript, "Assistant") == [Statement(1, "Hello")]


def test_segment_is_case_sensitive() -> None:
    """Speaker labels are matched case-sensitively."""
    transcript = "**assistant:** lower case label\n**User:** ok"

    assert segment(transcript, "Assistant") == []


def test_segment_handles_crlf_line_endings() -> None:
    """Windows line endings are treated like plain newlines."""
    transcript = "**Assistant:** first\r\nsecond\r\n**User:** ok\r\n"

    assert segment(transcript, "Assistant") == [Statement(1, "first second")]


def test_segment_label_inside_other_speaker_line_is_heuristic() -> None:
    """A label in another speaker's line opens a turn but keeps their text out."""
    transcript = "User: ask the *Assistant* now\nok then"

    assert segment(transcript, "Assistant") == [Statement(1, "ok then")]


def test_classify_line_returns_tagged_results() -> None:
    """Line classification distinguishes target, other and continuation lines."""
    assert classify_line("**Assistant:** hi", "Assistant") == LineClass(BoundaryKind.TARGET, "hi")
    assert classify_line("**Assistant**: hi", "Assistant") == LineClass(BoundaryKind.TARGET, "hi")
    assert classify_line("Assistant: hi", "Assistant") == LineClass(BoundaryKind.TARGET, "hi")
    assert classify_line("**Assistant:**", "Assistant") == LineClass(BoundaryKind.TARGET, "")
    assert classify_line("Bob: hey", "Assistant") == LineClass(BoundaryKind.OTHER, "")
    assert classify_line("**Dr. Who:** hey", "Assistant") == LineClass(BoundaryKind.OTHER, "")
    assert classify_line("  just text  ", "Assistant") == LineClass(BoundaryKind.CONTINUATION, "just text")
    assert classify_line("", "Assistant") == LineClass(BoundaryKind.CONTINUATION, "")


def test_classify_line_label_without_markup_is_continuation() -> None:
    """Mentioning the speaker in running text is not a boundary."""
    line = "and then the Assistant said something"

    assert classify_line(line, "Assistant").kind is BoundaryKind.CONTINUATION
