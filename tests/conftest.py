"""Shared fixtures: proposal documents, specs, header field contexts."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

import pytest

from evo.core.project import SWIFT
from evo.extractors.base import FieldContext
from evo.extractors.header import extract_header_fields
from evo.markdown.document import Document
from evo.sources.base import ProposalSpec

PROCESSING_DATE = datetime(2024, 6, 1, tzinfo=timezone.utc)

PROPOSAL_MARKDOWN = """\
# Feature `Title`

* Proposal: [SE-0400](0400-feature-title.md)
* Authors: [Jane Doe](https://github.com/janedoe)
* Review Manager: [John Roe](https://github.com/johnroe)
* Status: **Implemented (Swift 5.9)**
* Review: ([pitch](https://forums.swift.org/t/pitch-feature/1)) ([review](https://forums.swift.org/t/se-0400-feature/2))

## Introduction

This proposal introduces
a feature.

## Motivation

Some motivation.
"""


@pytest.fixture
def processing_date() -> datetime:
    return PROCESSING_DATE


@pytest.fixture
def proposal_markdown() -> str:
    return PROPOSAL_MARKDOWN


@pytest.fixture
def header_markdown():
    """Build a minimal proposal whose header list holds the given items."""

    def _build(*items: str) -> str:
        lines = ["# Title", ""]
        lines.extend(f"* {item}" for item in items)
        lines.append("")
        return "\n".join(lines)

    return _build


@pytest.fixture
def make_context():
    """Build a FieldContext from a Markdown document."""

    def _build(markdown: str, proposal_id: str = "SE-0400", project=SWIFT, processing_date=None) -> FieldContext:
        fields = extract_header_fields(Document.parse(markdown)).value
        assert fields is not None
        return FieldContext(
            fields=fields,
            project=project,
            proposal_id=proposal_id,
            processing_date=processing_date or PROCESSING_DATE,
        )

    return _build


@pytest.fixture
def make_spec():
    def _build(number: int, sha: str = "sha", sort_index: int = 0, prefix: str = "SE") -> ProposalSpec:
        filename = f"{number:04d}-proposal.md"
        return ProposalSpec.for_file(
            prefix, filename, url=f"proposals/{filename}", sha=sha, sort_index=sort_index,
        )

    return _build


@pytest.fixture
def proposals_dir(tmp_path: Path) -> Path:
    """A directory with two proposal files and one unrelated file."""
    directory = tmp_path / "proposals"
    directory.mkdir()
    (directory / "0400-feature-title.md").write_text(PROPOSAL_MARKDOWN)
    second = PROPOSAL_MARKDOWN.replace("SE-0400", "SE-0401").replace("0400-feature-title", "0401-other")
    (directory / "0401-other.md").write_text(second)
    (directory / "notes.txt").write_text("not a proposal")
    return directory
