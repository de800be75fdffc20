# Conversation Analysis
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""ODT transcript reader."""

from pathlib import Path

from odfdo import Document

from conversation_analysis.transcripts.base import ParserError, normalize_newlines


def _node_text(node: object) -> str:
    # odfdo Paragraph objects often expose richer text via
    # `inner_text`/`text_recursive` than via `.text`.
    for attr in ("inner_text", "text_recursive", "text"):
        value = getattr(node, attr, None)
        if callable(value):
            value = value()
        if value is not None:
            return str(value)
    return str(node)


class OdtTranscriptReader:
    """Read ODT documents, one transcript line per paragraph or heading.

    Character formatting (bold speaker names) is not part of the extracted
    text, so ODT transcripts are usually segmented by their `Name:` labels.
    """

    def can_read(self, path: Path) -> bool:
        return path.suffix.lower() == ".odt"

    def read_text(self, path: Path) -> str:
        try:
            doc = Document(path)
            body = doc.body

            # Using XPath is more robust than `get_paragraphs()` for documents
            # converted from DOCX or containing lists, tables or frames.
            nodes = list(body.xpath(".//text:p | .//text:h"))
            if not nodes:
                nodes = list(body.get_paragraphs())

            lines = [normalize_newlines(_node_text(n)) for n in nodes]
        except Exception as exc:  # noqa: BLE001
            raise ParserError(f"Failed to parse ODT file: {exc}", path=path) from exc

        return "\n".join(lines)
