# Conversation Analysis
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""
Keyword catalog action.

The `keywords` subcommand prints the keyword sets that an analysis would use.
Sets can be added or removed for the current invocation only; nothing is
written back to the config file.
"""

import argparse
from dataclasses import dataclass
from pathlib import Path

from conversation_analysis.catalog import KeywordCatalog, read_keyword_sets_file
from conversation_analysis.config import AnalysisConfig
from conversation_analysis.yaml_io import read_text_file


def add_catalog_arguments(parser: argparse.ArgumentParser) -> None:
    """Register the catalog editing options shared by actions."""

    parser.add_argument(
        "--keyword-file",
        action="append",
        default=[],
        metavar="FILE",
        help="Add keyword sets from a YAML file mapping set names to phrase lists. Repeatable.",
    )
    parser.add_argument(
        "--add-set",
        nargs=2,
        action="append",
        default=[],
        metavar=("NAME", "FILE"),
        help="Add (or replace) a keyword set read from FILE, one phrase per line. Repeatable.",
    )
    parser.add_argument(
        "--remove-set",
        action="append",
        default=[],
        metavar="NAME",
        help="Remove a keyword set by name. Unknown names are ignored. Repeatable.",
    )


def apply_catalog_arguments(catalog: KeywordCatalog, args: argparse.Namespace) -> None:
    """
    Apply `--keyword-file`, `--add-set` and then `--remove-set` options to a
    catalog.

    Args:
        catalog:
            Catalog to edit in place.
        args:
            Parsed arguments.

    Returns:
        None

    Raises:
        ConfigError:
            If a keyword or phrase file cannot be read.
    """

    for file_name in getattr(args, "keyword_file", None) or []:
        for name, phrases in read_keyword_sets_file(Path(file_name)).items():
            catalog.add_set(name, "\n".join(phrases))

    for name, file_name in getattr(args, "add_set", None) or []:
        phrases_text = read_text_file(Path(file_name))
        if not catalog.add_set(name, phrases_text):
            print(f"Ignoring keyword set '{name}': a name and at least one phrase are required")

    for name in getattr(args, "remove_set", None) or []:
        catalog.remove_set(name)


@dataclass(frozen=True)
class KeywordsAction:
    """
    `keywords` subcommand.

    Lists all keyword sets with their phrases.
    """

    name: str = "keywords"
    help: str = "List the keyword sets used for analysis"
    requires_config: bool = True

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        """
        Register CLI arguments for the `keywords` subcommand.

        Args:
            parser:
                Subparser for this command.

        Returns:
            None
        """

        add_catalog_arguments(parser)

    def run(self, args: argparse.Namespace, config: AnalysisConfig | None) -> None:
        """
        Print the keyword catalog.

        Args:
            args:
                Parsed args for the subcommand.
            config:
                Loaded configuration.

        Returns:
            None
        """

        if config is None:
            raise RuntimeError("KeywordsAction requires a config, but none was provided")

        catalog = KeywordCatalog.from_config(config)
        apply_catalog_arguments(catalog, args)

        if len(catalog) == 0:
            print("No keyword sets defined.")
            return

        for name in catalog:
            phrases = catalog.phrases(name)
            print(f"{name} ({len(phrases)}): {', '.join(phrases)}")

        if config.custom_keywords:
            print(f"Custom ({len(config.custom_keywords)}): {', '.join(config.custom_keywords)}")
