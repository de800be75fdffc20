# Conversation Analysis
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""
Analysis action.

This action extracts the statements of one speaker from a transcript, counts
keyword markers per category and prints the results. With `--export`, the
results are additionally written as `analysis_<date>.csv` and
`analysis_<date>.json`.
"""

import argparse
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from conversation_analysis.actions.keywords import add_catalog_arguments, apply_catalog_arguments
from conversation_analysis.cli_io import is_interactive_tty, prompt_overwrite
from conversation_analysis.config import AnalysisConfig, ConfigError
from conversation_analysis.export import export_filenames
from conversation_analysis.session import AnalysisReport, AnalysisSession
from conversation_analysis.transcripts.registry import read_transcript
from conversation_analysis.yaml_io import read_text_file


@dataclass(frozen=True)
class AnalyzeAction:
    """
    `analyze` subcommand.

    Runs segmentation and keyword scoring for one transcript.
    """

    name: str = "analyze"
    help: str = "Count keyword markers in the statements of one speaker"
    requires_config: bool = True

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        """
        Register CLI arguments for the `analyze` subcommand.

        Args:
            parser:
                Subparser for this command.

        Returns:
            None
        """

        parser.add_argument(
            "transcript",
            help="Transcript file (.txt, .md, .odt) or '-' to read from stdin",
        )
        parser.add_argument(
            "-s",
            "--speaker",
            help="Speaker label whose statements are analyzed (overrides the config)",
        )
        parser.add_argument(
            "--custom-keywords",
            metavar="FILE",
            help="File with additional phrases (one per line) scored as category 'Custom'",
        )
        add_catalog_arguments(parser)
        parser.add_argument(
            "--details",
            type=int,
            default=5,
            metavar="N",
            help="Number of evidence excerpts shown per category (default: 5, 0 disables)",
        )
        parser.add_argument(
            "--export",
            nargs="?",
            const="",
            metavar="DIR",
            help="Write CSV and JSON reports into DIR (default: configured outdir)",
        )
        parser.add_argument(
            "-f",
            "--force",
            action="store_true",
            help="Allow overwriting existing report files",
        )

    def run(self, args: argparse.Namespace, config: AnalysisConfig | None) -> None:
        """
        Execute the analysis.

        Args:
            args:
                Parsed args for the subcommand.
            config:
                Loaded configuration.

        Returns:
            None

        Raises:
            ConfigError:
                If an input file cannot be read or report files would be
                overwritten without confirmation.
            EmptySegmentationError:
                If the transcript contains no statements of the speaker.
        """

        if config is None:
            raise RuntimeError("AnalyzeAction requires a config, but none was provided")

        session = AnalysisSession.from_config(config)
        if isinstance(args.speaker, str) and args.speaker.strip():
            session.speaker = args.speaker.strip()

        apply_catalog_arguments(session.catalog, args)

        if args.custom_keywords:
            session.custom_keywords = read_text_file(Path(args.custom_keywords))

        transcript = read_transcript(args.transcript)
        report = session.analyze(transcript)
        self._print_report(report, details=max(0, int(args.details)))

        if args.export is None:
            return

        outdir = Path(args.export) if args.export else config.outdir
        self._export(session, outdir, force=bool(args.force))

    def _export(self, session: AnalysisSession, outdir: Path, *, force: bool) -> None:
        """
        Write the report files, asking before overwriting in interactive mode.

        Raises:
            ConfigError:
                If files exist, `force` is not set and no prompt is possible.
        """

        now = datetime.now(timezone.utc)
        existing = [outdir / name for name in export_filenames(now) if (outdir / name).exists()]

        if existing and not force:
            if not is_interactive_tty():
                raise ConfigError(
                    f"Output file(s) already exist in {outdir}. Refusing to overwrite in "
                    "non-interactive mode. Use --force to overwrite."
                )
            if not prompt_overwrite(existing):
                print("Keeping existing report files.")
                return
            force = True

        paths = session.export(outdir, timestamp=now, force=force)
        if paths is None:
            print("Nothing to export.")
            return

        csv_path, json_path = paths
        print(f"Wrote CSV summary: {csv_path}")
        print(f"Wrote JSON details: {json_path}")

    def _print_report(self, report: AnalysisReport, *, details: int) -> None:
        print(f"Speaker: {report.speaker} ({len(report.statements)} statement(s))")
        print()

        for name, category in report.result.categories.items():
            print(f"{name}: {category.total_count} occurrence(s) in {len(category.matches)} match(es)")
            if not details:
                continue

            for match in category.matches[:details]:
                print(f'  - "{match.context}"')
                print(f"    keyword: {match.keyword} (statement #{match.statement_index}, {match.occurrences}x)")

            remaining = len(category.matches) - details
            if remaining > 0:
                print(f"  ... and {remaining} more")
