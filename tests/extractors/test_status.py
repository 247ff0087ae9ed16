"""Tests for the status field and its date/version parsing."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from evo.core import issues
from evo.core.schema import Status, StatusState
from evo.extractors.status import (
    dates_for_string,
    extract_status,
    status_for_name,
    version_for_string,
)

DATE_2024 = datetime(2024, 6, 1, tzinfo=timezone.utc)


class TestDatesForString:
    def test_single_month_range(self):
        assert dates_for_string("March 2–6, 2024", DATE_2024) == (
            "2024-03-02T00:00:00Z",
            "2024-03-06T00:00:00Z",
        )

    def test_two_month_range(self):
        assert dates_for_string("April 29...May 3", DATE_2024) == (
            "2024-04-29T00:00:00Z",
            "2024-05-03T00:00:00Z",
        )

    def test_month_names_are_case_insensitive(self):
        assert dates_for_string("march 2 - 6", DATE_2024) is not None

    def test_year_comes_from_processing_date(self):
        start, _ = dates_for_string("March 2 - 6, 2019", DATE_2024)
        assert start.startswith("2024-")

    def test_year_wrap(self):
        start, end = dates_for_string("December 30 – January 3", DATE_2024)
        assert start == "2024-12-30T00:00:00Z"
        assert end == "2025-01-03T00:00:00Z"

    def test_start_not_after_end(self):
        start, end = dates_for_string("June 10 - 24", DATE_2024)
        assert start <= end

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "2 - 6",
            "March, April and May 2 - 6",
            "March 2",
            "March 2, 4 and 6",
            "February 30 - March 2",
        ],
    )
    def test_bad_input(self, text):
        assert dates_for_string(text, DATE_2024) is None


class TestVersionForString:
    def test_strips_swift_prefix(self):
        assert version_for_string("Swift 5.9") == "5.9"

    def test_first_token_only(self):
        assert version_for_string("Swift 4.2 with a long comment") == "4.2"

    def test_without_swift(self):
        assert version_for_string("3.0") == "3.0"

    def test_empty_is_none_sentinel(self):
        assert version_for_string("") == "none"


class TestStatusForName:
    @pytest.mark.parametrize(
        "name,state",
        [
            ("Awaiting Review", StatusState.awaiting_review),
            ("accepted", StatusState.accepted),
            ("Accepted with revisions", StatusState.accepted_with_revisions),
            ("Previewing", StatusState.previewing),
            ("Returned for Revision", StatusState.returned_for_revision),
            ("Rejected", StatusState.rejected),
            ("Withdrawn", StatusState.withdrawn),
            ("Accepted with modifications", StatusState.accepted),
            ("Partially implemented", StatusState.implemented),
            ("Implemented with Modifications", StatusState.implemented),
        ],
    )
    def test_vocabulary(self, name, state):
        assert status_for_name(name).state is state

    @pytest.mark.parametrize("name", ["Pending", "Error", "error"])
    def test_unknown(self, name):
        assert status_for_name(name) is None


class TestExtractStatus:
    def test_implemented_with_version(self, header_markdown, make_context):
        ctx = make_context(header_markdown("Status: **Implemented (Swift 5.9)**"))
        result = extract_status(ctx)
        assert result.value == Status(state=StatusState.implemented, version="5.9")
        assert not result.errors and not result.warnings

    def test_details_after_bold_span(self, header_markdown, make_context):
        ctx = make_context(header_markdown("Status: **Implemented** (Swift 5.9)"))
        assert extract_status(ctx).value == Status(state=StatusState.implemented, version="5.9")

    def test_implemented_without_version(self, header_markdown, make_context):
        ctx = make_context(header_markdown("Status: **Implemented**"))
        assert extract_status(ctx).value == Status(state=StatusState.implemented, version="none")

    def test_active_review_dates(self, header_markdown, make_context):
        ctx = make_context(header_markdown("Status: **Active Review (March 2...6, 2024)**"))
        status = extract_status(ctx).value
        assert status.state is StatusState.active_review
        assert status.start == "2024-03-02T00:00:00Z"
        assert status.end == "2024-03-06T00:00:00Z"

    def test_review_with_bad_dates_is_a_warning(self, header_markdown, make_context):
        ctx = make_context(header_markdown("Status: **Scheduled for Review (soon)**"))
        result = extract_status(ctx)
        assert result.value.state is StatusState.scheduled_for_review
        assert result.value.start == ""
        assert result.warnings == [issues.MISSING_OR_INVALID_REVIEW_DATES]
        assert not result.errors

    def test_unknown_status(self, header_markdown, make_context):
        ctx = make_context(header_markdown("Status: **Pending**"))
        result = extract_status(ctx)
        assert result.value == Status.extraction_failed()
        assert result.errors == [issues.MISSING_OR_INVALID_STATUS]

    def test_error_is_not_a_status_name(self, header_markdown, make_context):
        ctx = make_context(header_markdown("Status: **Error**"))
        result = extract_status(ctx)
        assert result.value == Status.extraction_failed()
        assert result.errors == [issues.MISSING_OR_INVALID_STATUS]

    def test_last_bold_span_wins(self, header_markdown, make_context):
        ctx = make_context(header_markdown("Status: **Accepted** then **Rejected**"))
        assert extract_status(ctx).value.state is StatusState.rejected

    def test_missing_field(self, header_markdown, make_context):
        ctx = make_context(header_markdown("Author: Jane"))
        result = extract_status(ctx)
        assert result.value is None
        assert result.warnings == [issues.MISSING_STATUS]

    def test_field_without_bold_status(self, header_markdown, make_context):
        ctx = make_context(header_markdown("Status: Accepted"))
        result = extract_status(ctx)
        assert result.value is None
        assert result.warnings == [issues.MISSING_STATUS]
