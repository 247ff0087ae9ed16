"""Bug field: tracking issues."""

from __future__ import annotations

from markdown_it.tree import SyntaxTreeNode

from evo.core.issues import ExtractionResult
from evo.core.schema import TrackingBug
from evo.extractors.base import FieldContext
from evo.markdown.document import LinkInfo, MarkupWalker


class _TrackingBugWalker(MarkupWalker):
    def __init__(self) -> None:
        self.bugs: list[TrackingBug] = []

    def visit_link(self, node: SyntaxTreeNode) -> None:
        info = LinkInfo.from_node(node)
        if info is not None:
            self.bugs.append(TrackingBug(id=info.text, link=info.destination))


def extract_tracking_bugs(context: FieldContext) -> ExtractionResult[list[TrackingBug]]:
    # Optional field; no issue when absent
    walker = _TrackingBugWalker()
    item = context.field_item("tracking_bugs")
    if item is not None:
        walker.visit(item)
    return ExtractionResult(value=walker.bugs or None)
