"""Proposal summary: the paragraph opening the Introduction section."""

from __future__ import annotations

import re

from evo.core.issues import ExtractionResult
from evo.markdown.document import Document, plain_text

_SUMMARY_HEADING = re.compile(r"Introduction|Summary of changes?")


def extract_summary(document: Document) -> ExtractionResult[str]:
    """Return the summary, or an empty string when there is none.

    Only a paragraph that directly follows the matching heading counts;
    anything else in between (a blockquote, an HTML block) means no summary.
    """
    children = document.children
    for index, child in enumerate(children):
        if child.type != "heading" or not _SUMMARY_HEADING.search(plain_text(child)):
            continue
        following = children[index + 1] if index + 1 < len(children) else None
        if following is not None and following.type == "paragraph":
            return ExtractionResult(value=" ".join(plain_text(following).split()))
        break
    return ExtractionResult(value="")
