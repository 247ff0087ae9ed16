"""Per-corpus configuration: id format, header labels, link rules, exemptions."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import cached_property
from typing import Iterable, Mapping

from evo.core import issues

DEFAULT_FIELD_LABELS: Mapping[str, tuple[str, ...]] = {
    "proposal": ("Proposal",),
    "authors": ("Author", "Authors"),
    "review_managers": ("Review Manager", "Review manager", "Review Managers", "Review managers"),
    "status": ("Status",),
    "discussions": ("Review", "Reviews", "Decision Notes", "Decision notes"),
    "tracking_bugs": ("Bug", "Bugs"),
    "implementation": ("Implementation", "Implementations"),
    "upcoming_feature_flag": ("Upcoming Feature Flag",),
    "previous_proposals": ("Previous Proposal", "Previous Proposals"),
}

MISSING_VERSION_POLICIES = ("blank", "warn")


class UnknownProjectError(LookupError):
    """Raised when a project name is not one of the built-in projects."""


def numbers(*items: int | range) -> frozenset[int]:
    """Build a set of proposal numbers from ints and ranges."""
    result: set[int] = set()
    for item in items:
        if isinstance(item, range):
            result.update(item)
        else:
            result.add(item)
    return frozenset(result)


@dataclass(frozen=True)
class Project:
    """A repository with its own series of proposals."""

    key: str  # CLI name, e.g. "swift"
    name: str
    organization: str
    repository: str
    path: str  # proposals directory inside the repository
    proposal_prefix: str
    previous_results_url: str = ""
    default_output_filename: str = "evolution.json"
    validation_exemptions: Mapping[int, frozenset[int]] = field(default_factory=dict)
    field_labels: Mapping[str, tuple[str, ...]] = field(
        default_factory=lambda: dict(DEFAULT_FIELD_LABELS)
    )
    profile_link_pattern: str = r"^(https?:)?//github\.com"
    discussion_link_pattern: str = r"^https?://(forums|lists)\.swift\.org"
    implementation_accounts: frozenset[str] = frozenset({"apple", "swiftlang"})
    legacy_link_prefixes: tuple[str, ...] = ()
    missing_version_ids: frozenset[str] = frozenset()
    missing_version_policy: str = "blank"

    def __post_init__(self) -> None:
        if self.missing_version_policy not in MISSING_VERSION_POLICIES:
            raise ValueError(f"Unknown missing version policy: {self.missing_version_policy}")

    @property
    def repo(self) -> str:
        return f"{self.organization}/{self.repository}"

    @property
    def reserved_id(self) -> str:
        return f"{self.proposal_prefix}-0000"

    @cached_property
    def id_pattern(self) -> re.Pattern[str]:
        return re.compile(rf"^{re.escape(self.proposal_prefix)}-\d{{4}}$")

    @cached_property
    def id_search_pattern(self) -> re.Pattern[str]:
        return re.compile(rf"{re.escape(self.proposal_prefix)}-\d{{4}}")

    def is_valid_id(self, proposal_id: str) -> bool:
        return bool(self.id_pattern.search(proposal_id))

    def labels(self, field_name: str) -> tuple[str, ...]:
        return tuple(self.field_labels.get(field_name, DEFAULT_FIELD_LABELS[field_name]))

    def is_exempt(self, code: int, number: int) -> bool:
        return number in self.validation_exemptions.get(code, frozenset())

    def is_profile_link(self, destination: str) -> bool:
        return re.search(self.profile_link_pattern, destination) is not None

    def is_discussion_link(self, destination: str) -> bool:
        return re.search(self.discussion_link_pattern, destination) is not None


# Older Swift proposals predate the Review field or never linked their
# review threads. New proposals with the same defects are still reported.
_SWIFT_EXEMPTIONS: Mapping[int, frozenset[int]] = {
    issues.MISSING_REVIEW_FIELD.code: numbers(
        1, 2, 4, 20, 51, 79, 100, 176, 177, 188, 193, 194, 196, 198, 201, 203, 205,
        208, 209, 210, 212, 213, 219, 243, 245, 247, 248, 249, 250, 252, 259, 263,
        268, 269, 273, 278, 284, 289, 295, 300, 303, 304, 312, 313, 317, 318, 337,
        338, 341, 343, 344, 348, 350, 356, 365, 385,
    ),
    issues.DISCUSSION_EXTRACTION_FAILURE.code: numbers(99, 363, 378, 391, 392),
}

SWIFT = Project(
    key="swift",
    name="Swift",
    organization="swiftlang",
    repository="swift-evolution",
    path="proposals",
    proposal_prefix="SE",
    previous_results_url="https://download.swift.org/swift-evolution/v1/evolution.json",
    default_output_filename="evolution.json",
    validation_exemptions=_SWIFT_EXEMPTIONS,
    legacy_link_prefixes=(
        "https://github.com/apple/swift-evolution/blob/main/proposals/",
        "https://github.com/swiftlang/swift-evolution/blob/main/proposals/",
    ),
    missing_version_ids=frozenset({"SE-0110", "SE-0264"}),
)

SWIFT_TESTING = Project(
    key="testing",
    name="Swift Testing",
    organization="swiftlang",
    repository="swift-evolution",
    path="proposals/testing",
    proposal_prefix="ST",
    previous_results_url="https://download.swift.org/swift-evolution/v1/testing-evolution.json",
    default_output_filename="testing-evolution.json",
)

FOUNDATION = Project(
    key="foundation",
    name="Foundation",
    organization="swiftlang",
    repository="swift-foundation",
    path="Proposals",
    proposal_prefix="SF",
    previous_results_url="https://download.swift.org/swift-evolution/v1/foundation-evolution.json",
    default_output_filename="foundation-evolution.json",
)

_PROJECTS: dict[str, Project] = {p.key: p for p in (SWIFT, SWIFT_TESTING, FOUNDATION)}

DEFAULT_PROJECT = SWIFT


def get_project(key: str) -> Project:
    """Return a built-in project by key."""
    try:
        return _PROJECTS[key.lower()]
    except KeyError:
        raise UnknownProjectError(
            f"Unknown project '{key}'. Available: {', '.join(list_projects())}"
        ) from None


def list_projects() -> list[str]:
    return list(_PROJECTS.keys())


def all_projects() -> Iterable[Project]:
    return _PROJECTS.values()
