"""Status field and its review-date / version sub-parsers.

The status is the bold span of the Status field, optionally followed by
a parenthetical detail::

    **Implemented (Swift 5.9)**
    **Active Review (March 2...6, 2024)**

Review ranges usually carry no year, so the year of the processing date is
assumed and ranges that cross New Year roll the end date forward.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone

from markdown_it.tree import SyntaxTreeNode

from evo.core import issues
from evo.core.issues import ExtractionResult, IssueReporter
from evo.core.schema import Status, StatusState
from evo.extractors.base import FieldContext
from evo.markdown.document import MarkupWalker

VERSION_NONE = "none"

_STATUS_PATTERN = re.compile(r"(?P<status>.*?)(?:$|\s\((?P<details>.*?)\))")
# Details written after the bold span: **Implemented** (Swift 5.9)
_TRAILING_DETAILS = re.compile(r"\s*\((?P<details>[^)]*)\)")
_IMPLEMENTED = re.compile(r"Implemented", re.IGNORECASE)
_IN_REVIEW = re.compile(r"(Scheduled for|Active) Review", re.IGNORECASE)

_MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
_MONTH_PATTERN = re.compile("|".join(_MONTH_NAMES), re.IGNORECASE)
_MONTH_NUMBERS = {name.lower(): number for number, name in enumerate(_MONTH_NAMES, start=1)}
_INTEGER = re.compile(r"\d+")

_ISO_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

# Lowercased status names, including the non-standard spellings found in
# older proposals.
_STATE_NAMES: dict[str, StatusState] = {
    "awaiting review": StatusState.awaiting_review,
    "scheduled for review": StatusState.scheduled_for_review,
    "active review": StatusState.active_review,
    "accepted": StatusState.accepted,
    "accepted with revisions": StatusState.accepted_with_revisions,
    "previewing": StatusState.previewing,
    "implemented": StatusState.implemented,
    "returned for revision": StatusState.returned_for_revision,
    "rejected": StatusState.rejected,
    "withdrawn": StatusState.withdrawn,
    "accepted with modifications": StatusState.accepted,
    "partially implemented": StatusState.implemented,
    "implemented with modifications": StatusState.implemented,
}


def status_for_name(name: str, version: str = "", start: str = "", end: str = "") -> Status | None:
    """Build a Status from a status name; None for names outside the vocabulary."""
    state = _STATE_NAMES.get(name.strip().lower())
    if state is None:
        return None
    return Status(state=state, version=version, start=start, end=end)


def version_for_string(text: str) -> str:
    """``"Swift 5.9"`` -> ``"5.9"``. Empty input gives the ``"none"`` sentinel."""
    if not text:
        return VERSION_NONE
    _, found, rest = text.partition("Swift ")
    stripped = rest if found else text
    tokens = [t for t in stripped.split(" ") if t]
    return tokens[0] if tokens else ""


def dates_for_string(text: str, processing_date: datetime) -> tuple[str, str] | None:
    """Parse a review range like ``"March 2...6, 2024"`` into ISO instants.

    Needs one or two month names and exactly two numbers of at most two
    digits (a four-digit year is ignored). The year is taken from
    ``processing_date``. Returns None when the text does not have that shape
    or names an impossible date.
    """
    months = _MONTH_PATTERN.findall(text)
    if not 1 <= len(months) <= 2:
        return None
    start_month = _MONTH_NUMBERS[months[0].lower()]
    end_month = _MONTH_NUMBERS[months[-1].lower()]

    days = [m for m in _INTEGER.findall(text) if len(m) <= 2]
    if len(days) != 2:
        return None
    start_day, end_day = int(days[0]), int(days[1])

    if processing_date.tzinfo is not None:
        processing_date = processing_date.astimezone(timezone.utc)
    year = processing_date.year

    try:
        start = datetime(year, start_month, start_day, tzinfo=timezone.utc)
        end = datetime(year, end_month, end_day, tzinfo=timezone.utc)
        if end < start:
            end = end.replace(year=year + 1)
    except ValueError:
        return None
    return start.strftime(_ISO_FORMAT), end.strftime(_ISO_FORMAT)


def _trailing_details(node: SyntaxTreeNode) -> str:
    sibling = node.next_sibling
    if sibling is None or sibling.type != "text":
        return ""
    match = _TRAILING_DETAILS.match(sibling.content)
    return match.group("details") if match else ""


class _StatusWalker(MarkupWalker):
    def __init__(self, reporter: IssueReporter, processing_date: datetime) -> None:
        self.reporter = reporter
        self.processing_date = processing_date
        self.status: Status | None = None

    def visit_strong(self, node: SyntaxTreeNode) -> None:
        if not node.children or node.children[0].type != "text":
            return
        match = _STATUS_PATTERN.match(node.children[0].content)
        if match is None:
            return
        name = match.group("status")
        details = match.group("details") or _trailing_details(node)

        version = start = end = ""
        if _IMPLEMENTED.search(name):
            version = version_for_string(details)
        elif _IN_REVIEW.search(name):
            dates = dates_for_string(details, self.processing_date)
            if dates is None:
                self.reporter.report(issues.MISSING_OR_INVALID_REVIEW_DATES)
            else:
                start, end = dates

        status = status_for_name(name, version=version, start=start, end=end)
        if status is None:
            self.reporter.report(issues.MISSING_OR_INVALID_STATUS)
            status = Status.extraction_failed()
        # The last bold span wins
        self.status = status


def extract_status(context: FieldContext) -> ExtractionResult[Status]:
    reporter = context.reporter()
    walker = _StatusWalker(reporter, context.processing_date)
    item = context.field_item("status")
    if item is not None:
        walker.visit(item)
    if walker.status is None:
        reporter.report(issues.MISSING_STATUS)
    return reporter.result(walker.status)
