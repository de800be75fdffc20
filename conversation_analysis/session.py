# Conversation Analysis
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""Analysis session.

The session owns everything that survives between user actions: the keyword
catalog, the speaker label, the free-text `Custom` phrases and the result of
the last successful analysis. Segmentation and scoring themselves are pure
functions; the session only wires them together and keeps the state.
"""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from conversation_analysis.catalog import KeywordCatalog
from conversation_analysis.config import DEFAULT_CONTEXT_CHARS, FALLBACK_SPEAKER, AnalysisConfig
from conversation_analysis.export import write_exports
from conversation_analysis.scoring import AnalysisResult, score
from conversation_analysis.transcripts.turns import Statement, segment


class EmptySegmentationError(RuntimeError):
    """Raised when no statements of the speaker were found in a transcript."""

    def __init__(self, speaker: str) -> None:
        super().__init__(
            f"No responses found for speaker '{speaker}'. Check the speaker name format."
        )
        self.speaker = speaker


@dataclass(frozen=True)
class AnalysisReport:
    """
    Outcome of one successful analysis run.

    Attributes:
        speaker:
            Speaker label the statements were extracted for.
        statements:
            Extracted statements.
        result:
            Scoring result.
    """

    speaker: str
    statements: tuple[Statement, ...]
    result: AnalysisResult


@dataclass
class AnalysisSession:
    """Mutable state of one interactive analysis session."""

    catalog: KeywordCatalog = field(default_factory=KeywordCatalog.builtin)
    speaker: str = FALLBACK_SPEAKER
    custom_keywords: str = ""
    context_chars: int = DEFAULT_CONTEXT_CHARS
    last_report: AnalysisReport | None = None

    @classmethod
    def from_config(cls, config: AnalysisConfig) -> AnalysisSession:
        return cls(
            catalog=KeywordCatalog.from_config(config),
            speaker=config.speaker,
            custom_keywords="\n".join(config.custom_keywords),
            context_chars=config.context_chars,
        )

    def analyze(self, transcript: str) -> AnalysisReport:
        """
        Segment and score a transcript with the current session settings.

        Args:
            transcript:
                Raw transcript text.

        Returns:
            The new report, which also becomes `last_report`.

        Raises:
            EmptySegmentationError:
                If no statement of the speaker was found. `last_report` is
                left unchanged in that case.
        """

        statements = segment(transcript, self.speaker)
        if not statements:
            raise EmptySegmentationError(self.speaker)

        active_sets = self.catalog.active_sets(self.custom_keywords)
        result = score(statements, active_sets, context_chars=self.context_chars)

        self.last_report = AnalysisReport(
            speaker=self.speaker,
            statements=tuple(statements),
            result=result,
        )
        return self.last_report

    def export(
        self,
        outdir: Path,
        *,
        timestamp: datetime | None = None,
        force: bool = False,
    ) -> tuple[Path, Path] | None:
        """Export the last report as CSV and JSON.

        Returns:
            The written paths, or None if nothing has been analyzed yet.
        """

        if self.last_report is None:
            return None

        return write_exports(
            self.last_report.result,
            self.last_report.speaker,
            outdir,
            timestamp=timestamp,
            force=force,
        )
