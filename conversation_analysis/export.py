# Conversation Analysis
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""
Report export.

An analysis result is exported as two files named after the export date:

- `analysis_<YYYY-MM-DD>.csv`: one summary row per category
  (`Category,Count,Matches`).
- `analysis_<YYYY-MM-DD>.json`: timestamp, speaker label, summary counts and
  all match records.

CSV values are joined with commas without quoting. Category names that contain
a comma therefore produce a malformed row; this is a known limitation.
"""

import json
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from conversation_analysis.config import ConfigError
from conversation_analysis.scoring import AnalysisResult


CSV_HEADER = ("Category", "Count", "Matches")


def summary_csv(result: AnalysisResult) -> str:
    """Render the per-category summary table as CSV text."""

    rows = [",".join(CSV_HEADER)]
    for name, category in result.categories.items():
        rows.append(",".join([name, str(category.total_count), str(len(category.matches))]))
    return "\n".join(rows)


def detail_document(result: AnalysisResult, speaker: str, timestamp: datetime) -> dict[str, Any]:
    """Build the structured detail report."""

    return {
        "timestamp": timestamp.isoformat(),
        "speaker": speaker,
        "summary": result.summary(),
        "detailed": {
            name: [asdict(record) for record in records]
            for name, records in result.details().items()
        },
    }


def detail_json(result: AnalysisResult, speaker: str, timestamp: datetime) -> str:
    """Render the structured detail report as pretty-printed JSON."""

    return json.dumps(detail_document(result, speaker, timestamp), ensure_ascii=False, indent=2)


def export_filenames(timestamp: datetime) -> tuple[str, str]:
    """Return the CSV and JSON file names for an export at `timestamp`."""

    stem = f"analysis_{timestamp.date().isoformat()}"
    return f"{stem}.csv", f"{stem}.json"


def write_exports(
    result: AnalysisResult,
    speaker: str,
    outdir: Path,
    *,
    timestamp: datetime | None = None,
    force: bool = False,
) -> tuple[Path, Path]:
    """
    Write the CSV summary and JSON detail report.

    Both files are rendered from the same result before anything is written.

    Args:
        result:
            Analysis result to export.
        speaker:
            Speaker label used for the analysis.
        outdir:
            Target directory (created if missing).
        timestamp:
            Export time. Defaults to the current UTC time.
        force:
            If True, overwrite existing files.

    Returns:
        Paths of the CSV and JSON files.

    Raises:
        ConfigError:
            If a target file exists and `force` is False.
        OSError:
            If the files cannot be written.
    """

    when = timestamp or datetime.now(timezone.utc)
    csv_name, json_name = export_filenames(when)
    csv_path = outdir / csv_name
    json_path = outdir / json_name

    if not force:
        for path in (csv_path, json_path):
            if path.exists():
                raise ConfigError(f"Refusing to overwrite existing file: {path} (use --force)")

    csv_text = summary_csv(result)
    json_text = detail_json(result, speaker, when)

    outdir.mkdir(parents=True, exist_ok=True)
    csv_path.write_text(csv_text, encoding="utf-8")
    json_path.write_text(json_text, encoding="utf-8")

    return csv_path, json_path
