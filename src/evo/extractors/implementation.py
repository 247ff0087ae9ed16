"""Implementation field: pull requests and commits."""

from __future__ import annotations

from urllib.parse import urlsplit

from markdown_it.tree import SyntaxTreeNode

from evo.core import issues
from evo.core.issues import ExtractionResult, IssueReporter
from evo.core.project import Project
from evo.core.schema import Implementation
from evo.extractors.base import FieldContext
from evo.markdown.document import LinkInfo, MarkupWalker

_IMPLEMENTATION_TYPES = ("pull", "commit")


def implementation_for_link(destination: str) -> Implementation | None:
    """Parse ``https://github.com/<account>/<repo>/<pull|commit>/<id>``.

    Returns None for any other shape.
    """
    try:
        path = urlsplit(destination).path
    except ValueError:
        return None
    segments = [s for s in path.split("/") if s]
    if len(segments) < 4:
        return None
    account, repository, kind, implementation_id = segments[:4]
    if kind not in _IMPLEMENTATION_TYPES:
        return None
    return Implementation(account=account, repository=repository, type=kind, id=implementation_id)


class _ImplementationWalker(MarkupWalker):
    def __init__(self, project: Project, reporter: IssueReporter) -> None:
        self.project = project
        self.reporter = reporter
        self.implementations: list[Implementation] = []

    def visit_link(self, node: SyntaxTreeNode) -> None:
        info = LinkInfo.from_node(node)
        if info is None:
            return
        implementation = implementation_for_link(info.destination)
        if implementation is None:
            return
        if implementation.account.lower() not in self.project.implementation_accounts:
            self.reporter.report(issues.INVALID_IMPLEMENTATION_LINK)
        self.implementations.append(implementation)


def extract_implementation(context: FieldContext) -> ExtractionResult[list[Implementation]]:
    reporter = context.reporter()
    walker = _ImplementationWalker(context.project, reporter)
    item = context.field_item("implementation")
    if item is not None:
        walker.visit(item)
    return reporter.result(walker.implementations or None)
