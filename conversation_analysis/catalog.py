# Conversation Analysis
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""Keyword catalog.

The catalog maps category names to ordered phrase lists. It starts from the
built-in marker sets (optionally extended by the YAML config) and can be edited
during a session. The transient `Custom` set is never stored in the catalog;
it is assembled from free text for each analysis run by `active_sets()`.
"""

from pathlib import Path
from typing import Iterator

from conversation_analysis.config import AnalysisConfig, ConfigError, parse_phrase_list
from conversation_analysis.yaml_io import read_yaml_mapping


CUSTOM_SET_NAME = "Custom"

BUILTIN_KEYWORD_SETS: dict[str, list[str]] = {
    "Hesitation Tokens": [
        "I think",
        "maybe",
        "let me consider",
        "I'm not sure",
        "perhaps",
        "could be",
        "seems like",
        "pause",
        "hold on",
        "uncertain",
    ],
    "Echo-Mirroring": [
        "you said",
        "you mentioned",
        "as you",
        "like you",
        "your",
        "reflecting your",
    ],
    "Conditional Framing": [
        "If you",
        "if it",
        "if we",
        "would you",
        "could you",
        "I'd like to",
    ],
    "Pause-Requests": [
        "let me pause",
        "I'd like to pause",
        "hold on",
        "let's pause",
        "give me a moment",
    ],
    "Repair Language": [
        "wait that",
        "let me re-anchor",
        "I misspoke",
        "that's not what I meant",
        "let me clarify",
        "actually",
    ],
    "Specificity Markers": [
        "like when",
        "for example",
        "specifically",
        "in your case",
        "you mentioned that",
    ],
    "Vulnerability": [
        "I don't know",
        "I'm lost",
        "I don't have",
        "uncertain about",
        "struggling with",
    ],
    "Temporal Markers": [
        "earlier you",
        "in this conversation",
        "earlier in",
        "before you said",
        "previously",
    ],
}


def parse_phrases(text: str) -> list[str]:
    """Split newline-separated phrases, trimming entries and dropping blanks."""

    return [line.strip() for line in (text or "").splitlines() if line.strip()]


class KeywordCatalog:
    """Ordered, editable mapping from category name to phrases.

    The catalog is owned by a single session; mutations happen in place.
    Iteration order is insertion order, which is also the order categories
    appear in analysis results and reports.
    """

    def __init__(self, sets: dict[str, list[str]] | None = None) -> None:
        self._sets: dict[str, list[str]] = {}
        for name, phrases in (sets or {}).items():
            self._sets[name] = list(phrases)

    @classmethod
    def builtin(cls) -> KeywordCatalog:
        """Return a catalog seeded with the built-in marker sets."""

        return cls(BUILTIN_KEYWORD_SETS)

    @classmethod
    def from_config(cls, config: AnalysisConfig) -> KeywordCatalog:
        """Build the catalog described by a loaded configuration.

        Built-in sets come first (if enabled); configured sets follow and
        replace built-ins with the same name in place.
        """

        catalog = cls.builtin() if config.include_builtin_sets else cls()
        for name, phrases in config.keyword_sets.items():
            catalog._sets[name] = list(phrases)
        return catalog

    def __contains__(self, name: object) -> bool:
        return name in self._sets

    def __iter__(self) -> Iterator[str]:
        return iter(self._sets)

    def __len__(self) -> int:
        return len(self._sets)

    def names(self) -> list[str]:
        return list(self._sets)

    def phrases(self, name: str) -> list[str]:
        """Return a copy of the phrases of one set.

        Raises:
            KeyError:
                If the set does not exist.
        """

        return list(self._sets[name])

    def as_dict(self) -> dict[str, list[str]]:
        return {name: list(phrases) for name, phrases in self._sets.items()}

    def add_set(self, name: str, phrases_text: str) -> bool:
        """Add or replace a keyword set.

        Args:
            name:
                Set name. Surrounding whitespace is ignored.
            phrases_text:
                Newline-separated phrases.

        Returns:
            False (and the catalog is unchanged) if the name is blank or no
            phrase remains after trimming; True otherwise.
        """

        key = (name or "").strip()
        phrases = parse_phrases(phrases_text)
        if not key or not phrases:
            return False

        self._sets[key] = phrases
        return True

    def remove_set(self, name: str) -> None:
        """Delete a set by name. Unknown names are ignored."""

        self._sets.pop(name, None)

    def active_sets(self, custom_text: str = "") -> dict[str, list[str]]:
        """Return the sets to score for one analysis run.

        The result is a snapshot of the catalog plus a `Custom` set built from
        `custom_text` when it contains at least one phrase. The catalog itself
        is not modified.
        """

        active = self.as_dict()
        custom = parse_phrases(custom_text)
        if custom:
            active[CUSTOM_SET_NAME] = custom
        return active


def read_keyword_sets_file(path: Path) -> dict[str, list[str]]:
    """Read keyword sets from a YAML mapping file (name -> phrases).

    Raises:
        ConfigError:
            If the file cannot be read or an entry is malformed.
    """

    raw = read_yaml_mapping(path)
    sets: dict[str, list[str]] = {}
    for name, value in raw.items():
        if not isinstance(name, str) or not name.strip():
            raise ConfigError(f"Keyword set names must be non-empty strings: {path}")
        phrases = parse_phrase_list(value, context=f"{path}: {name}")
        if phrases:
            sets[name.strip()] = phrases
    return sets
