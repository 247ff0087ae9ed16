"""Previous Proposal field: ids of proposals this one revises."""

from __future__ import annotations

import re

from markdown_it.tree import SyntaxTreeNode

from evo.core import issues
from evo.core.issues import ExtractionResult
from evo.extractors.base import FieldContext
from evo.markdown.document import MarkupWalker


class _PreviousProposalWalker(MarkupWalker):
    def __init__(self, id_pattern: re.Pattern[str]) -> None:
        self.id_pattern = id_pattern
        self.ids: list[str] = []

    def visit_text(self, node: SyntaxTreeNode) -> None:
        self.ids.extend(self.id_pattern.findall(node.content))


def extract_previous_proposals(context: FieldContext) -> ExtractionResult[list[str]]:
    reporter = context.reporter()
    item = context.field_item("previous_proposals")
    if item is None:
        return reporter.result(None)
    walker = _PreviousProposalWalker(context.project.id_search_pattern)
    walker.visit(item)
    if not walker.ids:
        reporter.report(issues.PREVIOUS_PROPOSAL_IDS_EXTRACTION_FAILURE)
    return reporter.result(walker.ids or None)
