"""Tests for built-in project configuration."""

from __future__ import annotations

from dataclasses import replace

import pytest

from evo.core import issues
from evo.core.project import (
    FOUNDATION,
    SWIFT,
    SWIFT_TESTING,
    UnknownProjectError,
    get_project,
    list_projects,
    numbers,
)


class TestLookup:
    def test_get_project(self):
        assert get_project("swift") is SWIFT
        assert get_project("Foundation") is FOUNDATION

    def test_unknown(self):
        with pytest.raises(UnknownProjectError, match="Available: swift, testing, foundation"):
            get_project("rust")

    def test_list(self):
        assert list_projects() == ["swift", "testing", "foundation"]


class TestProject:
    def test_ids(self):
        assert SWIFT.reserved_id == "SE-0000"
        assert SWIFT.is_valid_id("SE-0123")
        assert not SWIFT.is_valid_id("SE-123")
        assert not SWIFT.is_valid_id("ST-0123")
        assert SWIFT_TESTING.is_valid_id("ST-0001")

    def test_repo(self):
        assert FOUNDATION.repo == "swiftlang/swift-foundation"

    def test_label_aliases(self):
        assert "Review manager" in SWIFT.labels("review_managers")
        assert SWIFT.labels("discussions")[0] == "Review"

    def test_custom_labels_fall_back_to_defaults(self):
        project = replace(SWIFT, field_labels={"status": ("State",)})
        assert project.labels("status") == ("State",)
        assert project.labels("authors") == ("Author", "Authors")

    def test_exemptions(self):
        assert SWIFT.is_exempt(issues.MISSING_REVIEW_FIELD.code, 1)
        assert not SWIFT.is_exempt(issues.MISSING_REVIEW_FIELD.code, 400)
        assert not FOUNDATION.is_exempt(issues.MISSING_REVIEW_FIELD.code, 1)

    def test_links(self):
        assert SWIFT.is_profile_link("https://github.com/jane")
        assert not SWIFT.is_profile_link("https://twitter.com/jane")
        assert SWIFT.is_discussion_link("https://forums.swift.org/t/x/1")
        assert not SWIFT.is_discussion_link("https://github.com/x")

    def test_bad_missing_version_policy(self):
        with pytest.raises(ValueError):
            replace(SWIFT, missing_version_policy="loud")


def test_numbers():
    assert numbers(1, range(3, 5), 9) == frozenset({1, 3, 4, 9})
