# Conversation Analysis
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""
Configuration loading and validation.

This module handles reading the optional `analysis.yaml`, validating its keys,
and normalizing paths so that actions can rely on a typed config object.
Without a config file every setting falls back to its default.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml


CONFIG_FILENAME = "analysis.yaml"
CONFIG_ENV_VAR = "CONVERSATION_ANALYSIS_CONFIG"
SPEAKER_ENV_VAR = "CONVERSATION_ANALYSIS_SPEAKER"

FALLBACK_SPEAKER = "Assistant"
DEFAULT_CONTEXT_CHARS = 50


def default_speaker() -> str:
    """Return the speaker label used when neither config nor CLI sets one."""

    value = os.environ.get(SPEAKER_ENV_VAR, "")
    return value.strip() or FALLBACK_SPEAKER


@dataclass(frozen=True)
class AnalysisConfig:
    """
    Parsed configuration for an analysis run.

    Attributes:
        config_path:
            Path to the YAML config file used for this run, or None when the
            defaults are used.
        base_dir:
            Directory that relative paths are resolved against.
        speaker:
            Speaker label whose statements are extracted.
        outdir:
            Default directory for exported reports.
        include_builtin_sets:
            If True, the built-in keyword sets seed the catalog.
        keyword_sets:
            Additional keyword sets (name -> phrases), in file order.
        custom_keywords:
            Phrases for the transient `Custom` set, one per entry.
        context_chars:
            Number of characters shown on each side of a match in excerpts.
    """

    config_path: Path | None
    base_dir: Path
    speaker: str = FALLBACK_SPEAKER
    outdir: Path = Path(".")
    include_builtin_sets: bool = True
    keyword_sets: dict[str, list[str]] = field(default_factory=dict)
    custom_keywords: list[str] = field(default_factory=list)
    context_chars: int = DEFAULT_CONTEXT_CHARS


class ConfigError(RuntimeError):
    """
    Raised when the YAML configuration is invalid or cannot be parsed, or when
    an input file cannot be used.
    """

    pass


def find_config_path(cli_path: str | None) -> tuple[Path, bool]:
    """
    Determine which YAML config file to use.

    Args:
        cli_path:
            Optional config path provided on the command line.

    Returns:
        The Path object (not necessarily existing) and whether it was chosen
        explicitly (command line or environment) rather than by default.
    """

    if cli_path:
        return Path(cli_path), True

    env_path = os.environ.get(CONFIG_ENV_VAR, "").strip()
    if env_path:
        return Path(env_path), True

    return Path.cwd() / CONFIG_FILENAME, False


def default_config() -> AnalysisConfig:
    """Return the configuration used when no config file exists."""

    base_dir = Path.cwd().resolve()
    return AnalysisConfig(
        config_path=None,
        base_dir=base_dir,
        speaker=default_speaker(),
        outdir=base_dir,
    )


def parse_phrase_list(value: Any, *, context: str) -> list[str]:
    """
    Parse a list of keyword phrases.

    Accepts either a YAML list of strings or a single multi-line string with
    one phrase per line. Blank entries are dropped.

    Raises:
        ConfigError:
            If the value has the wrong type.
    """

    if isinstance(value, str):
        return [line.strip() for line in value.splitlines() if line.strip()]

    if not isinstance(value, list):
        raise ConfigError(f"{context} must be a list of strings or a multi-line string")

    phrases: list[str] = []
    for idx, item in enumerate(value, start=1):
        if not isinstance(item, str):
            raise ConfigError(f"{context}[{idx}] must be a string")
        if item.strip():
            phrases.append(item.strip())

    return phrases


def _parse_keyword_sets(value: Any) -> dict[str, list[str]]:
    """
    Parse and validate the optional `keyword_sets` section.

    Supported formats:

    1) Mapping:
        keyword_sets:
          Set name: [phrase, phrase]

    2) List of expanded entries:
        keyword_sets:
          - name: Set name
            phrases: [phrase, phrase]

    Args:
        value:
            Raw YAML value.

    Returns:
        Ordered mapping from set name to phrases.

    Raises:
        ConfigError:
            If the structure does not match the expected schema.
    """

    if value is None:
        return {}

    sets: dict[str, list[str]] = {}

    if isinstance(value, dict):
        for name, phrases in value.items():
            if not isinstance(name, str) or not name.strip():
                raise ConfigError("Keyword set names must be non-empty strings")
            parsed = parse_phrase_list(phrases, context=f"keyword_sets.{name}")
            if not parsed:
                raise ConfigError(f"Keyword set '{name}' must contain at least one phrase")
            sets[name.strip()] = parsed
        return sets

    if not isinstance(value, list):
        raise ConfigError("'keyword_sets' must be a mapping or a list if provided")

    for idx, item in enumerate(value, start=1):
        if not isinstance(item, dict):
            raise ConfigError(f"Each item in 'keyword_sets' must be a mapping (problem at index {idx})")

        name = item.get("name")
        if not isinstance(name, str) or not name.strip():
            raise ConfigError(
                f"Keyword set entry must have a non-empty 'name' field (problem at index {idx})"
            )

        parsed = parse_phrase_list(item.get("phrases"), context=f"keyword_sets[{idx}].phrases")
        if not parsed:
            raise ConfigError(f"Keyword set '{name}' must contain at least one phrase")
        sets[name.strip()] = parsed

    return sets


def load_config(path: Path, *, explicit: bool = True) -> AnalysisConfig:
    """
    Load and validate an `analysis.yaml` configuration file.

    Args:
        path:
            Path to the YAML config file.
        explicit:
            Whether the user asked for this file. A missing implicit config
            file is not an error; the defaults are used instead.

    Returns:
        A validated AnalysisConfig instance.

    Raises:
        ConfigError:
            If the file is missing (explicit only), unreadable, cannot be
            parsed as YAML, or contains invalid values.
    """

    if not path.exists():
        if not explicit:
            return default_config()
        raise ConfigError(
            f"Config file not found: {path}. "
            "Use the 'template' command to create one or omit --config."
        )
    if not path.is_file():
        raise ConfigError(f"Config path is not a file: {path}")

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except Exception as exc:  # noqa: BLE001
        raise ConfigError(f"Failed to read YAML config: {path}: {exc}") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError("Config YAML must contain a mapping at the top level")

    speaker = raw.get("speaker")
    if speaker is None:
        speaker = default_speaker()
    if not isinstance(speaker, str) or not speaker.strip():
        raise ConfigError("'speaker' must be a non-empty string")

    outdir = raw.get("outdir", ".")
    if not isinstance(outdir, str) or not outdir.strip():
        raise ConfigError("'outdir' must be a non-empty string")

    include_builtin_sets = raw.get("include_builtin_sets", True)
    if not isinstance(include_builtin_sets, bool):
        raise ConfigError("'include_builtin_sets' must be a boolean")

    context_chars = raw.get("context_chars", DEFAULT_CONTEXT_CHARS)
    if not isinstance(context_chars, int) or isinstance(context_chars, bool):
        raise ConfigError("'context_chars' must be an integer")
    if context_chars < 0:
        raise ConfigError("'context_chars' must be >= 0")

    keyword_sets = _parse_keyword_sets(raw.get("keyword_sets"))

    custom_value = raw.get("custom_keywords")
    custom_keywords = (
        parse_phrase_list(custom_value, context="custom_keywords") if custom_value is not None else []
    )

    if not include_builtin_sets and not keyword_sets and not custom_keywords:
        raise ConfigError(
            "No keyword sets configured: enable 'include_builtin_sets' or define 'keyword_sets'"
        )

    # Interpret outdir relative to config file location.
    base_dir = path.parent.resolve()

    return AnalysisConfig(
        config_path=path.resolve(),
        base_dir=base_dir,
        speaker=speaker.strip(),
        outdir=(base_dir / outdir).resolve(),
        include_builtin_sets=include_builtin_sets,
        keyword_sets=keyword_sets,
        custom_keywords=custom_keywords,
        context_chars=context_chars,
    )
