"""Base data structures for proposal sources."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import PurePosixPath


class SourceError(Exception):
    """Raised when a listing, document or previous result cannot be fetched."""


@dataclass(frozen=True)
class ProposalSpec:
    """One proposal document to extract.

    Created once per run from a listing and never mutated.
    """

    id: str  # e.g. "SE-0001"
    url: str  # https URL or filesystem path
    sha: str  # git blob sha of the content
    sort_index: int  # position in the listing

    @classmethod
    def for_file(cls, prefix: str, filename: str, url: str, sha: str, sort_index: int) -> ProposalSpec:
        """``0001-keywords-as-argument-labels.md`` -> id ``SE-0001``."""
        return cls(id=f"{prefix}-{filename[:4]}", url=url, sha=sha, sort_index=sort_index)

    @property
    def filename(self) -> str:
        return PurePosixPath(self.url.split("?", 1)[0]).name

    @property
    def number(self) -> int | None:
        match = re.search(r"-(\d+)$", self.id)
        return int(match.group(1)) if match else None


def is_proposal_filename(name: str) -> bool:
    return name.endswith(".md")
