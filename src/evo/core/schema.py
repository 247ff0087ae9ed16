"""Pydantic v2 models for extracted proposal metadata."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_serializer, model_validator

SCHEMA_VERSION = "1.0.0"

STATUS_NOT_ATTEMPTED = "Status extraction not attempted"
STATUS_EXTRACTION_FAILED = "Status extraction failed"


# -- Status --


class StatusState(str, Enum):
    awaiting_review = "awaitingReview"
    scheduled_for_review = "scheduledForReview"
    active_review = "activeReview"
    accepted = "accepted"
    accepted_with_revisions = "acceptedWithRevisions"
    previewing = "previewing"
    implemented = "implemented"
    returned_for_revision = "returnedForRevision"
    rejected = "rejected"
    withdrawn = "withdrawn"
    error = "error"


REVIEW_STATES = frozenset({StatusState.scheduled_for_review, StatusState.active_review})

_DISPLAY_NAMES: dict[StatusState, str] = {
    StatusState.awaiting_review: "Awaiting Review",
    StatusState.scheduled_for_review: "Scheduled for Review",
    StatusState.active_review: "Active Review",
    StatusState.accepted: "Accepted",
    StatusState.accepted_with_revisions: "Accepted with Revisions",
    StatusState.previewing: "Previewing",
    StatusState.implemented: "Implemented",
    StatusState.returned_for_revision: "Returned for Revision",
    StatusState.rejected: "Rejected",
    StatusState.withdrawn: "Withdrawn",
    StatusState.error: "Error",
}


class Status(BaseModel):
    """Proposal status: a closed tagged union keyed by ``state``.

    Only review states carry ``start``/``end``, only ``implemented`` carries
    ``version`` and only ``error`` carries ``reason``. Any other payload is
    discarded on construction, so two statuses compare equal exactly when
    their state and payload match.

    JSON form is ``{"state": ".implemented", "version": "5.9"}``. Unknown
    states never fail decoding; they become ``error`` with the unknown
    literal as the reason.
    """

    model_config = ConfigDict(frozen=True)

    state: StatusState
    start: str | None = None
    end: str | None = None
    version: str | None = None
    reason: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _normalize(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        raw = data.get("state")
        if isinstance(raw, StatusState):
            state = raw
        else:
            literal = str(raw or "").strip().lstrip(".")
            try:
                state = StatusState(literal)
            except ValueError:
                return {"state": StatusState.error, "reason": str(raw or "")}

        clean: dict[str, Any] = {"state": state}
        if state in REVIEW_STATES:
            clean["start"] = data.get("start") or ""
            clean["end"] = data.get("end") or ""
        elif state is StatusState.implemented:
            clean["version"] = data.get("version") or ""
        elif state is StatusState.error:
            clean["reason"] = data.get("reason") or ""
        return clean

    @model_serializer
    def _serialize(self) -> dict[str, str]:
        data = {"state": f".{self.state.value}"}
        if self.state in REVIEW_STATES:
            data["start"] = self.start or ""
            data["end"] = self.end or ""
        elif self.state is StatusState.implemented:
            data["version"] = self.version or ""
        elif self.state is StatusState.error and self.reason:
            data["reason"] = self.reason
        return data

    @classmethod
    def not_attempted(cls) -> Status:
        return cls(state=StatusState.error, reason=STATUS_NOT_ATTEMPTED)

    @classmethod
    def extraction_failed(cls) -> Status:
        return cls(state=StatusState.error, reason=STATUS_EXTRACTION_FAILED)

    @property
    def name(self) -> str:
        return _DISPLAY_NAMES[self.state]

    @property
    def is_review(self) -> bool:
        return self.state in REVIEW_STATES


# -- Issues --


class IssueKind(str, Enum):
    warning = "warning"
    error = "error"


class Issue(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: IssueKind
    code: int
    message: str
    suggestion: str = ""


# -- Field values --


class Person(BaseModel):
    name: str = ""
    link: str = ""


class Discussion(BaseModel):
    name: str = ""
    link: str = ""


class TrackingBug(BaseModel):
    id: str
    link: str
    # Legacy keys kept for consumers of the original format. Always empty.
    assignee: str = ""
    radar: str = ""
    resolution: str = ""
    status: str = ""
    title: str = ""
    updated: str = ""


class Implementation(BaseModel):
    account: str
    repository: str
    type: str  # "pull" or "commit"
    id: str


class UpcomingFeatureFlag(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    flag: str
    available: str | None = None
    enabled_in_language_version: str | None = Field(None, alias="enabledInLanguageVersion")


# -- Proposal --


class Proposal(BaseModel):
    """Metadata extracted from one proposal document.

    Every field has a default so a record can be filled in field by field,
    and still be emitted when extraction stops early.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = ""
    title: str = ""
    summary: str = ""
    link: str = ""
    sha: str = ""
    authors: list[Person] = Field(default_factory=list)
    review_managers: list[Person] = Field(default_factory=list, alias="reviewManagers")
    status: Status = Field(default_factory=Status.not_attempted)
    upcoming_feature_flag: UpcomingFeatureFlag | None = Field(None, alias="upcomingFeatureFlag")
    previous_proposal_ids: list[str] | None = Field(None, alias="previousProposalIDs")
    tracking_bugs: list[TrackingBug] | None = Field(None, alias="trackingBugs")
    implementation: list[Implementation] | None = None
    discussions: list[Discussion] = Field(default_factory=list)
    warnings: list[Issue] | None = None
    errors: list[Issue] | None = None

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)

    @property
    def has_issues(self) -> bool:
        return self.has_errors or self.has_warnings

    def to_json_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# -- Aggregate --


class EvolutionMetadata(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    creation_date: str = Field("", alias="creationDate")
    implementation_versions: list[str] = Field(default_factory=list, alias="implementationVersions")
    proposals: list[Proposal] = Field(default_factory=list)
    commit: str = ""
    schema_version: str = Field(SCHEMA_VERSION, alias="schemaVersion")
    tool_version: str = Field("", alias="toolVersion")

    @property
    def has_errors(self) -> bool:
        return any(p.has_errors for p in self.proposals)

    def to_json_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
