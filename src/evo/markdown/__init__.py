"""Markdown parsing helpers."""

from __future__ import annotations

from evo.markdown.document import Document, LinkInfo, MarkupWalker, plain_text

__all__ = ["Document", "LinkInfo", "MarkupWalker", "plain_text"]
