"""
Conversation analysis CLI package.

This package contains a small CLI tool that:
- extracts the statements of one speaker from a conversation transcript,
- counts linguistic marker phrases per keyword category,
- shows evidence excerpts for every match,
- exports the results as CSV summary and JSON detail report.
"""

from __future__ import annotations
