"""Proposal title: the document's leading heading."""

from __future__ import annotations

from evo.core import issues
from evo.core.issues import ExtractionResult
from evo.markdown.document import Document, plain_text


def extract_title(document: Document) -> ExtractionResult[str]:
    heading = document.first_heading()
    if heading is None:
        return ExtractionResult(errors=[issues.PROPOSAL_CONTAINS_NO_CONTENT])
    # Backticks and '#' never appear in published titles
    title = plain_text(heading).replace("`", "").replace("#", "")
    return ExtractionResult(value=title.strip())
