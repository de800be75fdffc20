"""Tests for the analysis session."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

import pytest

from conversation_analysis.catalog import CUSTOM_SET_NAME, KeywordCatalog
from conversation_analysis.config import AnalysisConfig
from conversation_analysis.session import AnalysisSession, EmptySegmentationError
from conversation_analysis.transcripts.turns import Statement


TRANSCRIPT = "\n".join(
    [
        "**User:** Could you check the plan?",
        "**Assistant:** I think it works. Maybe add tests.",
        "**User:** ok",
        "**Assistant:** Let me clarify: actually, it needs one more step.",
    ]
)


def test_analyze_segments_and_scores() -> None:
    """A session run produces statements and per-category counts."""
    session = AnalysisSession(catalog=KeywordCatalog({"Hesitation": ["I think", "maybe"], "Repair": ["actually"]}))

    report = session.analyze(TRANSCRIPT)

    assert report.speaker == "Assistant"
    assert report.statements == (
        Statement(1, "I think it works. Maybe add tests."),
        Statement(2, "Let me clarify: actually, it needs one more step."),
    )
    assert report.result.summary() == {"Hesitation": 2, "Repair": 1}
    assert session.last_report is report


def test_analyze_without_speaker_turns_keeps_previous_result() -> None:
    """An unknown speaker blocks the analysis and keeps the last report."""
    session = AnalysisSession()
    previous = session.analyze(TRANSCRIPT)

    session.speaker = "Claude"
    with pytest.raises(EmptySegmentationError, match="No responses found for speaker 'Claude'"):
        session.analyze(TRANSCRIPT)

    assert session.last_report is previous


def test_analyze_scores_custom_keywords_without_storing_them() -> None:
    """Custom phrases appear in the result but not in the catalog."""
    session = AnalysisSession(catalog=KeywordCatalog({"A": ["zebra"]}), custom_keywords="more step\n")

    report = session.analyze(TRANSCRIPT)

    assert list(report.result.summary()) == ["A", CUSTOM_SET_NAME]
    assert report.result.summary()[CUSTOM_SET_NAME] == 1
    assert CUSTOM_SET_NAME not in session.catalog


def test_catalog_edits_apply_to_next_run() -> None:
    """Adding and removing sets changes the categories of the next run."""
    session = AnalysisSession()
    session.catalog.remove_set("Hesitation Tokens")
    assert session.catalog.add_set("Planning", "plan\nstep")

    summary = session.analyze(TRANSCRIPT).result.summary()

    assert "Hesitation Tokens" not in summary
    assert summary["Planning"] == 1


def test_export_without_analysis_is_noop(tmp_path: Path) -> None:
    """Export before the first analysis writes nothing."""
    session = AnalysisSession()

    assert session.export(tmp_path) is None
    assert list(tmp_path.iterdir()) == []


def test_export_writes_last_report(tmp_path: Path) -> None:
    """Export writes the CSV and JSON of the last report."""
    session = AnalysisSession()
    session.analyze(TRANSCRIPT)

    paths = session.export(tmp_path, timestamp=datetime(2026, 1, 2, tzinfo=timezone.utc))

    assert paths == (tmp_path / "analysis_2026-01-02.csv", tmp_path / "analysis_2026-01-02.json")
    assert all(p.exists() for p in paths)


def test_from_config(tmp_path: Path) -> None:
    """Session settings come from the config."""
    config = AnalysisConfig(
        config_path=None,
        base_dir=tmp_path,
        speaker="Bot",
        include_builtin_sets=False,
        keyword_sets={"A": ["x"]},
        custom_keywords=["y", "z"],
        context_chars=10,
    )

    session = AnalysisSession.from_config(config)

    assert session.speaker == "Bot"
    assert session.catalog.as_dict() == {"A": ["x"]}
    assert session.custom_keywords == "y\nz"
    assert session.context_chars == 10
