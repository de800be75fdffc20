# Conversation Analysis
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""
Keyword marker scoring.

For every category of the active keyword sets, this module counts whole-word
occurrences of each phrase in each statement and keeps one evidence record per
(statement, phrase) pair that matched.

Matching rules:
- Case-insensitive, phrases are matched literally (no regex syntax).
- A match must not be preceded or followed by a word character, so
  `I think` does not match inside `Ithinking`. Whitespace, punctuation and
  the statement boundaries all count as word boundaries.
- Occurrences are counted non-overlapping, left to right.
- The context excerpt is taken around the first whole-word match, not the
  first raw substring hit, so `your` never points into `yourself`.
"""

import re
from dataclasses import dataclass, field
from typing import Iterable

from conversation_analysis.config import DEFAULT_CONTEXT_CHARS
from conversation_analysis.transcripts.turns import Statement


ELLIPSIS = "..."


@dataclass(frozen=True)
class MatchRecord:
    """
    Evidence for one phrase matching within one statement.

    Attributes:
        statement_index:
            1-based index of the statement.
        keyword:
            The phrase as written in the keyword set.
        context:
            Excerpt around the first occurrence.
        occurrences:
            Number of non-overlapping matches within the statement.
    """

    statement_index: int
    keyword: str
    context: str
    occurrences: int


@dataclass(frozen=True)
class CategoryResult:
    """Matches of one keyword category. The total is derived from the matches."""

    category: str
    matches: tuple[MatchRecord, ...] = ()

    @property
    def total_count(self) -> int:
        return sum(m.occurrences for m in self.matches)


@dataclass(frozen=True)
class AnalysisResult:
    """
    Scoring output for one analysis run.

    Attributes:
        categories:
            Category name -> result, in keyword set order. Every active
            category is present, including categories without matches.
        statement_count:
            Number of statements that were scored.
    """

    categories: dict[str, CategoryResult] = field(default_factory=dict)
    statement_count: int = 0

    def summary(self) -> dict[str, int]:
        """Return category -> total number of occurrences."""

        return {name: cat.total_count for name, cat in self.categories.items()}

    def details(self) -> dict[str, list[MatchRecord]]:
        """Return category -> match records (same keys as `summary()`)."""

        return {name: list(cat.matches) for name, cat in self.categories.items()}


def phrase_pattern(phrase: str) -> re.Pattern[str]:
    """Compile the whole-word, case-insensitive matcher for one phrase."""

    return re.compile(rf"(?<!\w){re.escape(phrase)}(?!\w)", re.IGNORECASE)


def context_excerpt(text: str, start: int, end: int, *, context_chars: int = DEFAULT_CONTEXT_CHARS) -> str:
    """Return the excerpt around `text[start:end]`.

    The window spans up to `context_chars` characters on each side of the
    match, clamped to the statement. Statements that fit into the full window
    are returned whole. An ellipsis marks each side where text was cut off.
    """

    width = (end - start) + 2 * context_chars
    if len(text) <= width:
        return text

    window_start = max(0, start - context_chars)
    window_end = min(len(text), end + context_chars)

    excerpt = text[window_start:window_end]
    if window_start > 0:
        excerpt = ELLIPSIS + excerpt
    if window_end < len(text):
        excerpt = excerpt + ELLIPSIS
    return excerpt


def score_statement(
    statement: Statement,
    phrase: str,
    *,
    context_chars: int = DEFAULT_CONTEXT_CHARS,
) -> MatchRecord | None:
    """Score one phrase against one statement; None if it does not occur."""

    matches = list(phrase_pattern(phrase).finditer(statement.text))
    if not matches:
        return None

    first = matches[0]
    return MatchRecord(
        statement_index=statement.index,
        keyword=phrase,
        context=context_excerpt(statement.text, first.start(), first.end(), context_chars=context_chars),
        occurrences=len(matches),
    )


def score(
    statements: Iterable[Statement],
    active_sets: dict[str, list[str]],
    *,
    context_chars: int = DEFAULT_CONTEXT_CHARS,
) -> AnalysisResult:
    """Score statements against keyword sets.

    Args:
        statements:
            Statements in index order.
        active_sets:
            Category name -> phrases. Category order is preserved in the result.
        context_chars:
            Excerpt width on each side of a match.

    Returns:
        An AnalysisResult with one entry per category. Match records are
        ordered by statement, then by phrase order within the category.
    """

    statement_list = list(statements)
    categories: dict[str, CategoryResult] = {}

    for category, phrases in active_sets.items():
        records: list[MatchRecord] = []
        for statement in statement_list:
            for phrase in phrases:
                if not phrase:
                    continue
                record = score_statement(statement, phrase, context_chars=context_chars)
                if record is not None:
                    records.append(record)

        categories[category] = CategoryResult(category=category, matches=tuple(records))

    return AnalysisResult(categories=categories, statement_count=len(statement_list))
