"""Shared input for header-field extractors."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone

from markdown_it.tree import SyntaxTreeNode

from evo.core.issues import IssueReporter
from evo.core.project import DEFAULT_PROJECT, Project
from evo.extractors.header import HeaderFields


@dataclass(frozen=True)
class FieldContext:
    """Header index plus the per-document facts extractors may need.

    ``proposal_id`` is the id the document was listed under, not the id
    written in the document, so exemptions apply even when the document's
    own Proposal field is broken.
    """

    fields: HeaderFields
    project: Project = DEFAULT_PROJECT
    proposal_id: str = ""
    processing_date: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def number(self) -> int | None:
        match = re.search(r"(\d+)$", self.proposal_id)
        return int(match.group(1)) if match else None

    def reporter(self) -> IssueReporter:
        return IssueReporter(self.project, self.number)

    def field_item(self, field_name: str) -> SyntaxTreeNode | None:
        """List item for a field, looked up under the project's label aliases."""
        found = self.fields.lookup(self.project.labels(field_name))
        return found[1] if found else None
