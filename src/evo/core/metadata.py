"""Metadata extraction for a single proposal document."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TypeVar

from evo.core import issues
from evo.core.issues import ExtractionResult, IssueReporter
from evo.core.project import DEFAULT_PROJECT, Project
from evo.core.schema import Proposal, Status, StatusState
from evo.extractors import (
    FieldContext,
    extract_authors,
    extract_discussions,
    extract_header_fields,
    extract_implementation,
    extract_previous_proposals,
    extract_proposal_link,
    extract_review_managers,
    extract_status,
    extract_summary,
    extract_title,
    extract_tracking_bugs,
    extract_upcoming_feature_flag,
)
from evo.extractors.status import VERSION_NONE
from evo.markdown.document import Document
from evo.sources.base import ProposalSpec

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _take(reporter: IssueReporter, result: ExtractionResult[T]) -> T | None:
    reporter.merge(result)
    return result.value


def normalize_implemented_version(
    status: Status, proposal_id: str, project: Project, reporter: IssueReporter
) -> Status:
    """Rewrite ``implemented("none")`` to ``implemented("")``.

    Ids in ``project.missing_version_ids`` are known to carry no version and
    are rewritten silently. Everything else follows the project's
    ``missing_version_policy``: ``"blank"`` rewrites silently, ``"warn"``
    rewrites and reports the missing version.
    """
    if status.state is not StatusState.implemented or status.version != VERSION_NONE:
        return status
    if proposal_id not in project.missing_version_ids and project.missing_version_policy == "warn":
        reporter.report(issues.MISSING_IMPLEMENTED_VERSION)
    return Status(state=StatusState.implemented, version="")


def _finish(proposal: Proposal, reporter: IssueReporter) -> Proposal:
    proposal.warnings = reporter.warnings or None
    proposal.errors = reporter.errors or None
    return proposal


def extract_proposal_metadata(
    markdown: str,
    spec: ProposalSpec,
    extraction_date: datetime,
    project: Project = DEFAULT_PROJECT,
) -> Proposal:
    """Extract one proposal.

    Never raises for malformed content: every problem becomes an issue on
    the returned record. An empty document and a document without a header
    field list stop extraction early, leaving the remaining fields at their
    defaults.
    """
    proposal = Proposal(sha=spec.sha)
    reporter = IssueReporter(project, spec.number)

    document = Document.parse(markdown)
    if document.is_empty:
        reporter.report(issues.EMPTY_MARKDOWN_FILE)
        return _finish(proposal, reporter)

    proposal.title = _take(reporter, extract_title(document)) or ""
    proposal.summary = _take(reporter, extract_summary(document)) or ""

    header_fields = _take(reporter, extract_header_fields(document))
    if header_fields is None:
        reporter.report(issues.MISSING_METADATA_FIELDS)
        return _finish(proposal, reporter)

    context = FieldContext(
        fields=header_fields,
        project=project,
        proposal_id=spec.id,
        processing_date=extraction_date,
    )

    link = _take(reporter, extract_proposal_link(context))
    if link is not None:
        proposal.id = link.text
        proposal.link = link.destination

    authors = _take(reporter, extract_authors(context))
    if authors:
        proposal.authors = authors
    else:
        reporter.report(issues.MISSING_AUTHORS)

    review_managers = _take(reporter, extract_review_managers(context))
    if review_managers:
        proposal.review_managers = review_managers
    else:
        reporter.report(issues.MISSING_REVIEW_MANAGERS)

    status = _take(reporter, extract_status(context))
    if status is None:
        proposal.status = Status.extraction_failed()
    else:
        proposal.status = normalize_implemented_version(status, spec.id, project, reporter)

    proposal.tracking_bugs = _take(reporter, extract_tracking_bugs(context))
    proposal.implementation = _take(reporter, extract_implementation(context))
    proposal.discussions = _take(reporter, extract_discussions(context)) or []
    proposal.upcoming_feature_flag = _take(reporter, extract_upcoming_feature_flag(context))
    proposal.previous_proposal_ids = _take(reporter, extract_previous_proposals(context))

    if reporter.errors:
        logger.debug("%s: %d error(s)", spec.id, len(reporter.errors))
    return _finish(proposal, reporter)
