"""Tests for CSV/JSON report export."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

import pytest

from conversation_analysis.config import ConfigError
from conversation_analysis.export import (
    detail_document,
    detail_json,
    export_filenames,
    summary_csv,
    write_exports,
)
from conversation_analysis.scoring import AnalysisResult, score
from conversation_analysis.transcripts.turns import Statement


EXPORT_TIME = datetime(2026, 10, 19, 8, 30, tzinfo=timezone.utc)


@pytest.fixture
def result() -> AnalysisResult:
    statements = [
        Statement(1, "I think maybe that works, maybe not."),
        Statement(2, "You said earlier you wanted it."),
    ]
    return score(
        statements,
        {
            "Hesitation": ["I think", "maybe"],
            "Mirroring": ["you said"],
            "Repair": ["actually"],
        },
    )


def test_summary_csv(result: AnalysisResult) -> None:
    """One row per category with total occurrences and number of records."""
    assert summary_csv(result) == "\n".join(
        [
            "Category,Count,Matches",
            "Hesitation,3,2",
            "Mirroring,1,1",
            "Repair,0,0",
        ]
    )


def test_summary_csv_does_not_escape_commas() -> None:
    """Commas in category names are written as-is (known limitation)."""
    result = score([Statement(1, "well")], {"Fillers, misc": ["well"]})

    assert summary_csv(result).splitlines()[1] == "Fillers, misc,1,1"


def test_detail_document(result: AnalysisResult) -> None:
    """The detail report holds speaker, summary and all match records."""
    document = detail_document(result, "Assistant", EXPORT_TIME)

    assert document["timestamp"] == "2026-10-19T08:30:00+00:00"
    assert document["speaker"] == "Assistant"
    assert document["summary"] == {"Hesitation": 3, "Mirroring": 1, "Repair": 0}
    assert set(document["detailed"]) == set(document["summary"])
    assert document["detailed"]["Hesitation"][1] == {
        "statement_index": 1,
        "keyword": "maybe",
        "context": "I think maybe that works, maybe not.",
        "occurrences": 2,
    }
    assert document["detailed"]["Repair"] == []


def test_detail_json_is_pretty_printed(result: AnalysisResult) -> None:
    """JSON output uses two-space indentation and parses back."""
    text = detail_json(result, "Assistant", EXPORT_TIME)

    assert text.startswith('{\n  "timestamp"')
    assert json.loads(text) == detail_document(result, "Assistant", EXPORT_TIME)


def test_export_filenames_use_iso_date() -> None:
    """Files are named after the export date."""
    assert export_filenames(EXPORT_TIME) == ("analysis_2026-10-19.csv", "analysis_2026-10-19.json")


def test_write_exports(tmp_path: Path, result: AnalysisResult) -> None:
    """Both files are written from the same result."""
    outdir = tmp_path / "reports"

    csv_path, json_path = write_exports(result, "Assistant", outdir, timestamp=EXPORT_TIME)

    assert csv_path == outdir / "analysis_2026-10-19.csv"
    assert json_path == outdir / "analysis_2026-10-19.json"
    assert csv_path.read_text(encoding="utf-8") == summary_csv(result)
    assert json.loads(json_path.read_text(encoding="utf-8"))["summary"] == result.summary()


def test_write_exports_refuses_to_overwrite(tmp_path: Path, result: AnalysisResult) -> None:
    """Existing report files are only replaced with force."""
    write_exports(result, "Assistant", tmp_path, timestamp=EXPORT_TIME)
    (tmp_path / "analysis_2026-10-19.csv").write_text("old", encoding="utf-8")

    with pytest.raises(ConfigError, match="Refusing to overwrite"):
        write_exports(result, "Assistant", tmp_path, timestamp=EXPORT_TIME)
    assert (tmp_path / "analysis_2026-10-19.csv").read_text(encoding="utf-8") == "old"

    write_exports(result, "Assistant", tmp_path, timestamp=EXPORT_TIME, force=True)
    assert (tmp_path / "analysis_2026-10-19.csv").read_text(encoding="utf-8") == summary_csv(result)
