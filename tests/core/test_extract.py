"""Tests for corpus extraction."""

from __future__ import annotations

from evo import __version__
from evo.core import issues
from evo.core.extract import (
    extract_all,
    extract_evolution_metadata,
    format_creation_date,
    implementation_versions,
    natural_sort_key,
)
from evo.core.schema import Proposal, Status, StatusState


def _implemented(version: str) -> Proposal:
    return Proposal(status=Status(state=StatusState.implemented, version=version))


def _documents(proposal_markdown: str, count: int) -> dict[str, str]:
    docs = {}
    for n in range(1, count + 1):
        docs[f"proposals/{n:04d}-proposal.md"] = proposal_markdown.replace("SE-0400", f"SE-{n:04d}")
    return docs


class TestHelpers:
    def test_natural_sort(self):
        assert sorted(["5.10", "5.9", "4.2"], key=natural_sort_key) == ["4.2", "5.9", "5.10"]

    def test_implementation_versions(self):
        proposals = [
            _implemented("5.10"), _implemented("5.9"), _implemented("5.9"), _implemented(""),
            Proposal(status=Status(state=StatusState.accepted)),
        ]
        assert implementation_versions(proposals) == ["5.9", "5.10"]

    def test_format_creation_date(self, processing_date):
        assert format_creation_date(processing_date) == "2024-06-01T00:00:00Z"


class TestExtractAll:
    def test_failure_becomes_error_record(self, make_spec, processing_date):
        def fetch(url):
            raise OSError("boom")

        [record] = extract_all([make_spec(7, sha="abc", sort_index=3)], fetch, processing_date)
        assert record.sort_index == 3
        assert record.proposal.sha == "abc"
        assert record.proposal.errors == [issues.PROPOSAL_CONTAINS_NO_CONTENT]

    def test_archive_dir(self, make_spec, processing_date, proposal_markdown, tmp_path):
        extract_all([make_spec(400)], lambda url: proposal_markdown, processing_date, archive_dir=tmp_path)
        assert (tmp_path / "0400-proposal.md").read_text() == proposal_markdown

    def test_empty(self, processing_date):
        assert extract_all([], lambda url: "", processing_date) == []


class TestExtractEvolutionMetadata:
    def test_order_follows_listing(self, make_spec, processing_date, proposal_markdown):
        docs = _documents(proposal_markdown, 6)
        specs = [make_spec(n, sort_index=n - 1) for n in range(1, 7)]
        metadata = extract_evolution_metadata(
            specs, processing_date=processing_date, fetch=docs.__getitem__, max_workers=4,
        )
        assert [p.id for p in metadata.proposals] == [f"SE-{n:04d}" for n in range(1, 7)]
        assert metadata.creation_date == "2024-06-01T00:00:00Z"
        assert metadata.implementation_versions == ["5.9"]
        assert metadata.tool_version == __version__

    def test_reuses_previous_results(self, make_spec, processing_date, proposal_markdown):
        docs = _documents(proposal_markdown, 2)
        specs = [make_spec(n, sha=f"sha{n}", sort_index=n - 1) for n in (1, 2)]
        previous = [Proposal(id="SE-0001", sha="sha1", title="Kept")]
        fetched = []

        def fetch(url):
            fetched.append(url)
            return docs[url]

        metadata = extract_evolution_metadata(specs, previous, processing_date=processing_date, fetch=fetch)
        assert fetched == ["proposals/0002-proposal.md"]
        assert [p.title for p in metadata.proposals] == ["Kept", "Feature Title"]

    def test_commit_is_recorded(self, make_spec, processing_date, proposal_markdown):
        metadata = extract_evolution_metadata(
            [make_spec(400)], processing_date=processing_date,
            fetch=lambda url: proposal_markdown, commit="deadbeef",
        )
        assert metadata.commit == "deadbeef"
