"""Issue taxonomy and the exemption-aware issue reporter.

Every problem found while extracting a proposal is one of the constants
below: a fixed (kind, code, message) triple. Codes are stable across
releases; errors use 1-99 and warnings 101 and up.

Issues are reported through an ``IssueReporter``, which drops any issue
whose code is exempted for the proposal number in the project's exemption
table. Exemptions only ever suppress an issue, they never change its kind.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Generic, TypeVar

from evo.core.schema import Issue, IssueKind

if TYPE_CHECKING:
    from evo.core.project import Project

T = TypeVar("T")


def _error(code: int, message: str) -> Issue:
    return Issue(kind=IssueKind.error, code=code, message=message)


def _warning(code: int, message: str) -> Issue:
    return Issue(kind=IssueKind.warning, code=code, message=message)


# -- Errors --

EMPTY_MARKDOWN_FILE = _error(1, "Proposal Markdown file is empty.")
PROPOSAL_CONTAINS_NO_CONTENT = _error(2, "Proposal contains no content.")
MISSING_METADATA_FIELDS = _error(3, "Missing list of metadata fields.")
MISSING_OR_INVALID_STATUS = _error(4, "Missing or invalid proposal status.")
MISSING_PROPOSAL_ID_LINK = _error(5, "Missing proposal ID link (PREFIX-NNNN)[NNNN-filename.md].")
PROPOSAL_ID_WRONG_DIGIT_COUNT = _error(6, "Proposal ID must include four decimal digits.")
MISSING_AUTHORS = _error(7, "Missing author(s).")
AUTHORS_HAVE_EXTRA_MARKUP = _error(
    8, "Author name contains extra markup; expected a link with plaintext contents."
)
UPCOMING_FEATURE_FLAG_EXTRACTION_FAILURE = _error(9, "Failed to extract upcoming feature flag.")
PREVIOUS_PROPOSAL_IDS_EXTRACTION_FAILURE = _error(10, "Failed to extract previous proposal IDs.")
MISSING_REVIEW_FIELD = _error(11, "Missing Review field.")
DISCUSSION_EXTRACTION_FAILURE = _error(12, "Failed to extract discussions from Review field.")
INVALID_PROPOSAL_ID_LINK = _error(
    13, "Proposal ID link must be a relative link (PREFIX-NNNN)[NNNN-filename.md]."
)
RESERVED_PROPOSAL_ID = _error(14, "Missing valid proposal ID; PREFIX-0000 is reserved.")
MALFORMED_UPCOMING_FEATURE_FLAG = _error(15, "Upcoming feature flag should not contain whitespace.")

# -- Warnings --

MISSING_STATUS = _warning(101, "Status not found in the proposal's details list.")
MISSING_IMPLEMENTED_VERSION = _warning(102, "Missing version number for an implemented proposal.")
MISSING_OR_INVALID_REVIEW_DATES = _warning(103, "Missing or invalid dates for a review period.")
PROPOSAL_ID_HAS_EXTRA_MARKUP = _warning(
    104, "Proposal ID contains extra markup; expected a link with plaintext contents."
)
MISSING_REVIEW_MANAGERS = _warning(105, "Missing review manager(s).")
MULTIPLE_REVIEW_MANAGERS = _warning(106, "Multiple review managers listed without profile links.")
REVIEW_MANAGER_MISSING_PROFILE_LINK = _warning(107, "Review manager missing profile link.")
AUTHOR_MISSING_PROFILE_LINK = _warning(108, "Author missing link.")
INVALID_AUTHOR_LINK = _warning(109, "Author's link doesn't refer to a GitHub profile. Link removed.")
INVALID_REVIEW_MANAGER_LINK = _warning(
    110, "Review manager's link doesn't refer to a GitHub profile. Link removed."
)
INVALID_IMPLEMENTATION_LINK = _warning(111, "Implementation links to a non-project repository.")
INVALID_DISCUSSION_LINK = _warning(
    112, "Discussion link doesn't refer to a forum thread. Discussion removed."
)

ALL_ISSUES: tuple[Issue, ...] = tuple(
    value for name, value in sorted(globals().items()) if isinstance(value, Issue)
)


def issue_for_code(code: int) -> Issue | None:
    """Look up an issue constant by its numeric code."""
    for issue in ALL_ISSUES:
        if issue.code == code:
            return issue
    return None


@dataclass
class ExtractionResult(Generic[T]):
    """A value plus the warnings and errors found while extracting it.

    A ``None`` value is not an error by itself; callers decide whether a
    missing value matters for their field.
    """

    value: T | None = None
    warnings: list[Issue] = field(default_factory=list)
    errors: list[Issue] = field(default_factory=list)


class IssueReporter:
    """Collects issues for one proposal, applying the project's exemptions."""

    def __init__(self, project: Project | None = None, number: int | None = None) -> None:
        self.project = project
        self.number = number
        self.warnings: list[Issue] = []
        self.errors: list[Issue] = []

    def is_exempt(self, issue: Issue) -> bool:
        if self.project is None or self.number is None:
            return False
        return self.project.is_exempt(issue.code, self.number)

    def report(self, issue: Issue) -> None:
        if self.is_exempt(issue):
            return
        if issue.kind is IssueKind.error:
            self.errors.append(issue)
        else:
            self.warnings.append(issue)

    def merge(self, result: ExtractionResult) -> None:
        """Take over the issues of a field result, filtering them again."""
        for issue in [*result.warnings, *result.errors]:
            self.report(issue)

    def result(self, value: T | None) -> ExtractionResult[T]:
        return ExtractionResult(value=value, warnings=list(self.warnings), errors=list(self.errors))
