"""Authors and review managers."""

from __future__ import annotations

import re
from enum import Enum

from markdown_it.tree import SyntaxTreeNode

from evo.core import issues
from evo.core.issues import ExtractionResult, IssueReporter
from evo.core.project import Project
from evo.core.schema import Person
from evo.extractors.base import FieldContext
from evo.markdown.document import LinkInfo, MarkupWalker

# Plain name after the label ("Author: Jane Doe") or after a ", " separator
_PLAIN_NAME = re.compile(r"(.*: |, )([^,]*),?")


class Role(str, Enum):
    author = "authors"
    review_manager = "review_managers"


_INVALID_LINK = {
    Role.author: issues.INVALID_AUTHOR_LINK,
    Role.review_manager: issues.INVALID_REVIEW_MANAGER_LINK,
}


class _PersonWalker(MarkupWalker):
    def __init__(self, role: Role, project: Project, reporter: IssueReporter) -> None:
        self.role = role
        self.project = project
        self.reporter = reporter
        self.linked: list[Person] = []
        self.plain: list[Person] = []

    @property
    def persons(self) -> list[Person]:
        return self.linked + self.plain

    def visit_link(self, node: SyntaxTreeNode) -> None:
        info = LinkInfo.from_node(node)
        if info is None:
            return
        if self.role is Role.author and not info.contains_text_element:
            self.reporter.report(issues.AUTHORS_HAVE_EXTRA_MARKUP)

        destination = info.destination
        if not self.project.is_profile_link(destination):
            self.reporter.report(_INVALID_LINK[self.role])
            destination = ""
        self.linked.append(Person(name=info.text, link=destination))

    def visit_text(self, node: SyntaxTreeNode) -> None:
        match = _PLAIN_NAME.search(node.content)
        if match and match.group(2):
            self.plain.append(Person(name=match.group(2)))


def extract_persons(context: FieldContext, role: Role) -> ExtractionResult[list[Person]]:
    """Every person listed under the role's field (empty list when absent)."""
    reporter = context.reporter()
    walker = _PersonWalker(role, context.project, reporter)
    item = context.field_item(role.value)
    if item is not None:
        walker.visit(item)
    return reporter.result(walker.persons)


def extract_authors(context: FieldContext) -> ExtractionResult[list[Person]]:
    return extract_persons(context, Role.author)


def extract_review_managers(context: FieldContext) -> ExtractionResult[list[Person]]:
    return extract_persons(context, Role.review_manager)
