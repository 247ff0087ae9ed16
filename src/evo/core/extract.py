"""Corpus extraction: reuse what can be reused, extract the rest in parallel."""

from __future__ import annotations

import logging
import re
from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Iterable, Sequence

from evo import __version__
from evo.core import issues
from evo.core.metadata import extract_proposal_metadata
from evo.core.project import DEFAULT_PROJECT, Project
from evo.core.reuse import SortableProposal, filter_proposal_specs
from evo.core.schema import EvolutionMetadata, Proposal, StatusState
from evo.sources.base import ProposalSpec
from evo.sources.fetch import fetch_text, make_client

logger = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = 8

Fetcher = Callable[[str], str]


def natural_sort_key(version: str) -> list:
    """Sort key comparing digit runs numerically: 5.10 sorts after 5.9."""
    return [int(part) if part.isdigit() else part for part in re.split(r"(\d+)", version)]


def implementation_versions(proposals: Iterable[Proposal]) -> list[str]:
    """Distinct non-empty versions of implemented proposals, in version order."""
    versions = {
        p.status.version
        for p in proposals
        if p.status.state is StatusState.implemented and p.status.version
    }
    return sorted(versions, key=natural_sort_key)


def format_creation_date(date: datetime) -> str:
    if date.tzinfo is not None:
        date = date.astimezone(timezone.utc)
    return date.strftime("%Y-%m-%dT%H:%M:%SZ")


def _extract_one(
    spec: ProposalSpec,
    fetch: Fetcher,
    processing_date: datetime,
    project: Project,
    archive_dir: Path | None,
) -> SortableProposal:
    try:
        markdown = fetch(spec.url)
        if archive_dir is not None:
            (archive_dir / spec.filename).write_text(markdown, encoding="utf-8")
        proposal = extract_proposal_metadata(markdown, spec, processing_date, project)
    except Exception as e:
        logger.error("%s: extraction failed: %s", spec.id, e)
        proposal = Proposal(sha=spec.sha, errors=[issues.PROPOSAL_CONTAINS_NO_CONTENT])
    return SortableProposal(proposal=proposal, sort_index=spec.sort_index)


def extract_all(
    specs: Sequence[ProposalSpec],
    fetch: Fetcher,
    processing_date: datetime,
    project: Project = DEFAULT_PROJECT,
    max_workers: int = DEFAULT_MAX_WORKERS,
    archive_dir: Path | None = None,
) -> list[SortableProposal]:
    """Extract every spec on a thread pool. Results come back in completion order.

    When ``archive_dir`` is given each fetched document is also written
    there under its file name.
    """
    if not specs:
        return []
    results: list[SortableProposal] = []
    with ThreadPoolExecutor(max_workers=max(1, max_workers)) as pool:
        futures = [
            pool.submit(_extract_one, spec, fetch, processing_date, project, archive_dir)
            for spec in specs
        ]
        for future in as_completed(futures):
            results.append(future.result())
    return results


def extract_evolution_metadata(
    specs: Sequence[ProposalSpec],
    previous: Sequence[Proposal] | None = None,
    *,
    project: Project = DEFAULT_PROJECT,
    processing_date: datetime | None = None,
    forced_ids: Iterable[str] = (),
    force_all: bool = False,
    commit: str = "",
    max_workers: int = DEFAULT_MAX_WORKERS,
    fetch: Fetcher | None = None,
    archive_dir: Path | None = None,
) -> EvolutionMetadata:
    """Build the aggregate metadata for a listing.

    Without ``fetch``, documents are read with a shared httpx client (or
    from disk for path locators).
    """
    processing_date = processing_date or datetime.now(timezone.utc)
    partition = filter_proposal_specs(specs, previous, forced_ids, force_all)
    if partition.deleted_ids:
        logger.info("Deleted proposals: %s", ", ".join(partition.deleted_ids))

    if fetch is None:
        with make_client() as client:
            extracted = extract_all(
                partition.needs_parsing,
                lambda locator: fetch_text(locator, client),
                processing_date, project, max_workers, archive_dir,
            )
    else:
        extracted = extract_all(
            partition.needs_parsing, fetch, processing_date, project, max_workers, archive_dir,
        )

    logger.info("Reused proposal count: %d", len(partition.reused))
    logger.info("Processed proposal count: %d", len(extracted))

    records = sorted(partition.reused + extracted, key=lambda r: r.sort_index)
    proposals = [r.proposal for r in records]
    versions = implementation_versions(proposals)
    logger.debug("Implementation versions: %s", versions)

    return EvolutionMetadata(
        creation_date=format_creation_date(processing_date),
        implementation_versions=versions,
        proposals=proposals,
        commit=commit,
        tool_version=__version__,
    )
