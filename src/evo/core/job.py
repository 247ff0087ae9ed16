"""Extraction jobs: everything one run needs, gathered from a source."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Sequence

from evo.core.extract import DEFAULT_MAX_WORKERS, Fetcher, extract_evolution_metadata
from evo.core.project import Project
from evo.core.schema import EvolutionMetadata, Proposal
from evo.core.snapshot import load_snapshot
from evo.sources.base import ProposalSpec
from evo.sources.fetch import load_previous_results
from evo.sources.github import BranchInfo, GitHubSource
from evo.sources.local import head_commit, local_proposal_specs

logger = logging.getLogger(__name__)

FORCE_ALL = "all"


class JobError(Exception):
    """Raised for job arguments that cannot be run."""


def parse_force_directives(values: Sequence[str], project: Project) -> tuple[list[str], bool]:
    """Split ``--force-extract`` values into (ids, force_all).

    Each value is ``all`` or a proposal id such as ``SE-0001``.
    """
    ids: list[str] = []
    force_all = False
    for value in values:
        if value.lower() == FORCE_ALL:
            force_all = True
        elif project.is_valid_id(value):
            ids.append(value)
        else:
            raise JobError(
                f"Invalid --force-extract value '{value}'. "
                f"Use '{FORCE_ALL}' or a proposal id like {project.proposal_prefix}-0001."
            )
    if force_all and ids:
        logger.warning("'%s' given together with proposal ids; extracting all proposals", FORCE_ALL)
        ids = []
    return ids, force_all


def _parse_creation_date(value: str) -> datetime | None:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        logger.warning("Ignoring unparsable creation date '%s'", value)
        return None


@dataclass
class ExtractionJob:
    project: Project
    specs: list[ProposalSpec]
    previous: list[Proposal] | None = None
    forced_ids: list[str] = field(default_factory=list)
    force_all: bool = False
    processing_date: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    branch: BranchInfo | None = None
    listing: list[dict] | None = None
    expected: EvolutionMetadata | None = None
    max_workers: int = DEFAULT_MAX_WORKERS
    fetch: Fetcher | None = None
    commit_override: str = ""

    @property
    def commit(self) -> str:
        if self.commit_override:
            return self.commit_override
        return self.branch.commit_sha if self.branch else ""

    def run(self, archive_dir: Path | None = None) -> EvolutionMetadata:
        results = extract_evolution_metadata(
            self.specs,
            self.previous,
            project=self.project,
            processing_date=self.processing_date,
            forced_ids=self.forced_ids,
            force_all=self.force_all,
            commit=self.commit,
            max_workers=self.max_workers,
            fetch=self.fetch,
            archive_dir=archive_dir,
        )
        self.compare_to_expected(results)
        return results

    def compare_to_expected(self, results: EvolutionMetadata) -> tuple[int, int] | None:
        """Count (passing, failing) proposals against expected results, if any."""
        if self.expected is None:
            return None
        expected = self.expected.proposals
        if len(results.proposals) != len(expected):
            logger.warning(
                "Extracted proposal count %d does not match expected count %d",
                len(results.proposals), len(expected),
            )
        passing = failing = 0
        for actual, wanted in zip(results.proposals, expected):
            if actual == wanted:
                passing += 1
            else:
                failing += 1
                logger.debug("%s differs from expected results", wanted.id or actual.id)
        logger.info("Compared to expected results: %d passing, %d failing", passing, failing)
        return passing, failing

    # -- Constructors per source --

    @classmethod
    def from_network(
        cls,
        project: Project,
        previous_results: str | None = None,
        ignore_previous: bool = False,
        **options,
    ) -> ExtractionJob:
        """Listing of the main branch; previous results from the project's URL."""
        source = GitHubSource(project)
        branch = source.fetch_branch()
        listing = source.fetch_listing(branch.commit_sha)
        previous = None
        if not ignore_previous:
            location = previous_results or project.previous_results_url
            if location:
                previous = load_previous_results(location)
        return cls(
            project=project,
            specs=source.listing_specs(listing),
            previous=previous,
            branch=branch,
            listing=listing,
            **options,
        )

    @classmethod
    def from_snapshot(
        cls,
        path: Path,
        project: Project,
        ignore_previous: bool = False,
        **options,
    ) -> ExtractionJob:
        """Snapshot inputs; its expected results set the processing date."""
        snapshot = load_snapshot(path, project, ignore_previous=ignore_previous)
        if snapshot.expected is not None and "processing_date" not in options:
            date = _parse_creation_date(snapshot.expected.creation_date)
            if date is not None:
                options["processing_date"] = date
        return cls(
            project=project,
            specs=snapshot.specs,
            previous=snapshot.previous,
            branch=snapshot.branch,
            listing=snapshot.listing,
            expected=snapshot.expected,
            **options,
        )

    @classmethod
    def from_files(
        cls,
        project: Project,
        paths: Sequence[Path],
        previous_results: str | None = None,
        **options,
    ) -> ExtractionJob:
        if not paths:
            raise JobError("No proposal files given")
        previous = load_previous_results(previous_results) if previous_results else None
        return cls(
            project=project,
            specs=local_proposal_specs(project, list(paths)),
            previous=previous,
            commit_override=head_commit(Path(paths[0])),
            **options,
        )

    @classmethod
    def from_pull_request(cls, project: Project, number: int, **options) -> ExtractionJob:
        """Proposal files changed by a pull request."""
        source = GitHubSource(project)
        files = source.fetch_pull_request_files(number)
        if not files:
            raise JobError(f"Pull request #{number} changes no proposal files")
        return cls(project=project, specs=source.pull_request_specs(files), **options)
