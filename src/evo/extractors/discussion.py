"""Review field: links to forum threads."""

from __future__ import annotations

from markdown_it.tree import SyntaxTreeNode

from evo.core import issues
from evo.core.issues import ExtractionResult, IssueReporter
from evo.core.project import Project
from evo.core.schema import Discussion
from evo.extractors.base import FieldContext
from evo.markdown.document import LinkInfo, MarkupWalker


class _DiscussionWalker(MarkupWalker):
    def __init__(self, project: Project, reporter: IssueReporter) -> None:
        self.project = project
        self.reporter = reporter
        self.discussions: list[Discussion] = []

    def visit_link(self, node: SyntaxTreeNode) -> None:
        info = LinkInfo.from_node(node)
        if info is None:
            return
        if self.project.is_discussion_link(info.destination):
            self.discussions.append(Discussion(name=info.text, link=info.destination))
        else:
            self.reporter.report(issues.INVALID_DISCUSSION_LINK)


def extract_discussions(context: FieldContext) -> ExtractionResult[list[Discussion]]:
    """Discussions of the Review field.

    The field is required: a missing field and a field without any forum
    link are both errors, unless the proposal is exempted.
    """
    reporter = context.reporter()
    walker = _DiscussionWalker(context.project, reporter)
    item = context.field_item("discussions")
    if item is None:
        reporter.report(issues.MISSING_REVIEW_FIELD)
    else:
        walker.visit(item)
        if not walker.discussions:
            reporter.report(issues.DISCUSSION_EXTRACTION_FAILURE)
    return reporter.result(walker.discussions)
