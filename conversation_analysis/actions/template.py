# Conversation Analysis
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""
Template configuration generator.

This action writes a ready-to-edit `analysis.yaml` file into the current
directory (or a user-specified path).
"""

import argparse
from dataclasses import dataclass
from pathlib import Path

from conversation_analysis.config import CONFIG_FILENAME, AnalysisConfig, ConfigError


@dataclass(frozen=True)
class TemplateAction:
    """
    `template` subcommand.

    This action does not require a YAML config because it produces one.
    """

    name: str = "template"
    help: str = "Write a template analysis.yaml config"
    requires_config: bool = False

    _TEMPLATE_YAML: str = "\n".join(
        [
            "# Speaker whose statements are analyzed. The label is matched",
            "# case-sensitively against turn headers like '**Assistant:**' or 'Assistant:'.",
            "speaker: Assistant",
            "",
            "# Directory for exported reports (analysis_<date>.csv / .json)",
            "outdir: ./exports",
            "",
            "# Start from the built-in marker categories (hesitation, mirroring,",
            "# conditional framing, pause requests, repair language, specificity,",
            "# vulnerability, temporal markers).",
            "include_builtin_sets: true",
            "",
            "# Characters of context shown on each side of a match (optional; default shown)",
            "# context_chars: 50",
            "",
            "# Additional keyword sets. A set with the name of a built-in set replaces it.",
            "#",
            "# Supported formats:",
            "#   1) Mapping:  Set name: [phrase, phrase]",
            "#   2) List:     - name: Set name",
            "#                  phrases: [phrase, phrase]",
            "keyword_sets:",
            "  Emotional Language:",
            "    - I feel",
            "    - that hurts",
            "    - I'm glad",
            "",
            "# Phrases scored as the transient 'Custom' category (optional)",
            "# custom_keywords:",
            "#   - to be honest",
            "",
        ]
    )

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        """
        Register CLI arguments for the `template` subcommand.

        Args:
            parser:
                Subparser for this command.

        Returns:
            None
        """

        parser.add_argument(
            "path",
            nargs="?",
            default=CONFIG_FILENAME,
            help=f"Destination path for the template (default: ./{CONFIG_FILENAME})",
        )
        parser.add_argument(
            "-f",
            "--force",
            action="store_true",
            help="Allow overwriting an existing file",
        )

    def run(self, args: argparse.Namespace, config: AnalysisConfig | None) -> None:
        """
        Execute the template writer.

        Args:
            args:
                Parsed args for the subcommand.
            config:
                Unused for this action.

        Returns:
            None

        Raises:
            ConfigError:
                If the destination exists and `--force` is not set.
        """

        _ = config
        dest = Path(args.path)
        self._write_template(dest, force=bool(args.force))
        print(f"Wrote template config to: {dest}")

    def _write_template(self, dest: Path, *, force: bool) -> None:
        """
        Write a template YAML configuration file.

        Args:
            dest:
                Destination path for the template.
            force:
                If True, overwrite an existing file.

        Returns:
            None

        Raises:
            ConfigError:
                If the destination exists and `force` is False.
            OSError:
                If the file cannot be written.
        """

        if dest.exists() and not force:
            raise ConfigError(f"Refusing to overwrite existing file: {dest} (use --force)")

        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_text(self._TEMPLATE_YAML, encoding="utf-8")
