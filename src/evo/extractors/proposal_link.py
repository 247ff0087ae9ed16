"""The Proposal field: the document's own id and relative link."""

from __future__ import annotations

from markdown_it.tree import SyntaxTreeNode

from evo.core import issues
from evo.core.issues import ExtractionResult, IssueReporter
from evo.extractors.base import FieldContext
from evo.markdown.document import LinkInfo, MarkupWalker


class _ProposalLinkWalker(MarkupWalker):
    def __init__(self, reporter: IssueReporter) -> None:
        self.reporter = reporter
        self.link: LinkInfo | None = None

    def visit_link(self, node: SyntaxTreeNode) -> None:
        info = LinkInfo.from_node(node)
        if info is None:
            self.reporter.report(issues.MISSING_PROPOSAL_ID_LINK)
            return
        # Last link wins
        self.link = info


def extract_proposal_link(context: FieldContext) -> ExtractionResult[LinkInfo]:
    reporter = context.reporter()
    project = context.project

    item = context.field_item("proposal")
    walker = _ProposalLinkWalker(reporter)
    if item is None:
        reporter.report(issues.MISSING_PROPOSAL_ID_LINK)
    else:
        walker.visit(item)

    link = walker.link
    if link is None:
        if item is not None:
            reporter.report(issues.MISSING_PROPOSAL_ID_LINK)
        return reporter.result(None)

    if not link.contains_text_element:
        reporter.report(issues.PROPOSAL_ID_HAS_EXTRA_MARKUP)

    proposal_id = link.text.strip()
    if proposal_id == project.reserved_id:
        reporter.report(issues.RESERVED_PROPOSAL_ID)
    elif not project.is_valid_id(proposal_id):
        reporter.report(issues.PROPOSAL_ID_WRONG_DIGIT_COUNT)

    destination = link.destination
    for prefix in project.legacy_link_prefixes:
        if destination.startswith(prefix):
            destination = destination[len(prefix):]
            break

    return reporter.result(
        LinkInfo(text=proposal_id, destination=destination, contains_text_element=link.contains_text_element)
    )
