# Conversation Analysis
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""Smoke-test helpers.

Run via:

    poetry run python -m conversation_analysis.smoke

This is intentionally lightweight: it loads the config and analyzes a small
built-in conversation (no files are written).
"""

import argparse
import json
from dataclasses import asdict

from conversation_analysis.config import ConfigError, find_config_path, load_config
from conversation_analysis.session import AnalysisSession, EmptySegmentationError


SAMPLE_CONVERSATION = "\n".join(
    [
        "**User:** Can you help me plan the migration?",
        "",
        "**{speaker}:** I think we can. Let me clarify one thing first:",
        "would you like to keep the old schema for a while?",
        "",
        "**User:** Maybe, I'm not sure yet.",
        "",
        "**{speaker}:** Earlier you mentioned downtime. For example, a short",
        "maintenance window could be enough.",
    ]
)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Conversation Analysis smoke test")
    parser.add_argument(
        "--config",
        default=None,
        help="Path to analysis.yaml (default: ./analysis.yaml if present)",
    )
    parser.add_argument(
        "--print-details",
        action="store_true",
        help="Print all match records as JSON",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    config_path, explicit = find_config_path(args.config)

    try:
        cfg = load_config(config_path, explicit=explicit)
    except ConfigError as exc:
        print(f"CONFIG ERROR: {exc}")
        return 2

    session = AnalysisSession.from_config(cfg)
    transcript = SAMPLE_CONVERSATION.format(speaker=session.speaker)

    try:
        report = session.analyze(transcript)
    except EmptySegmentationError as exc:
        print(f"SEGMENTATION ERROR: {exc}")
        return 3

    summary = report.result.summary()

    print(f"Config: {cfg.config_path or '(defaults)'}")
    print(f"Speaker: {report.speaker}")
    print(f"Statements: {len(report.statements)}")
    print(f"Categories: {len(summary)}")
    print(f"Total occurrences: {sum(summary.values())}")

    # Small sanity check: summary and details must describe the same categories.
    details = report.result.details()
    if list(details) != list(summary):
        print("INTERNAL ERROR: summary and details disagree on categories")
        return 3

    if bool(args.print_details):
        printable = {
            name: [asdict(m) for m in records] for name, records in details.items()
        }
        print(json.dumps(printable, ensure_ascii=False, indent=2))

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
