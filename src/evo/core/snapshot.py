"""Snapshots: extraction inputs and expected results captured on disk.

Layout of a ``<name>.evosnapshot`` directory::

    proposals/NNNN-name.md     proposal documents
    proposal-listing.json      GitHub listing with blob shas (optional)
    source-info.json           branch name and commit sha (optional)
    previous-results.json      previous proposals, reused when unchanged (optional)
    expected-results.json      results to compare against (optional)
"""

from __future__ import annotations

import json
import logging
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from evo.core.project import Project
from evo.core.schema import EvolutionMetadata, Proposal
from evo.sources.base import ProposalSpec, SourceError, is_proposal_filename
from evo.sources.fetch import parse_previous_results
from evo.sources.github import BranchInfo

logger = logging.getLogger(__name__)

SNAPSHOT_SUFFIX = ".evosnapshot"
PROPOSALS_DIR = "proposals"
LISTING_FILE = "proposal-listing.json"
SOURCE_INFO_FILE = "source-info.json"
PREVIOUS_RESULTS_FILE = "previous-results.json"
EXPECTED_RESULTS_FILE = "expected-results.json"


class SnapshotError(Exception):
    """Raised when a snapshot directory is missing or malformed."""


@dataclass
class Snapshot:
    path: Path
    specs: list[ProposalSpec]
    listing: list[dict] | None = None
    branch: BranchInfo | None = None
    previous: list[Proposal] | None = None
    expected: EvolutionMetadata | None = None


def _read_json(path: Path) -> Any | None:
    if not path.exists():
        return None
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise SnapshotError(f"Cannot read {path.name}: {e}") from e


def load_snapshot(path: Path, project: Project, ignore_previous: bool = False) -> Snapshot:
    """Load a snapshot directory.

    With a listing, specs follow the listing order and carry its shas.
    Without one, specs are the Markdown files of ``proposals/`` sorted by
    name, with empty shas.
    """
    path = Path(path)
    if path.suffix != SNAPSHOT_SUFFIX or not path.is_dir():
        raise SnapshotError(f"Snapshot must be a directory with a '{SNAPSHOT_SUFFIX}' extension: {path}")
    proposals_dir = path / PROPOSALS_DIR
    if not proposals_dir.is_dir():
        raise SnapshotError(f"Snapshot has no '{PROPOSALS_DIR}' directory: {path}")

    files = sorted(p for p in proposals_dir.iterdir() if p.is_file() and is_proposal_filename(p.name))
    prefix = project.proposal_prefix

    listing = _read_json(path / LISTING_FILE)
    if listing is not None:
        specs = [
            ProposalSpec.for_file(
                prefix, item["name"], url=str(proposals_dir / item["name"]),
                sha=item.get("sha", ""), sort_index=index,
            )
            for index, item in enumerate(listing)
        ]
        if len(specs) != len(files):
            logger.warning(
                "Number of proposals in '%s' (%d) does not match '%s' (%d)",
                PROPOSALS_DIR, len(files), LISTING_FILE, len(specs),
            )
    else:
        specs = [
            ProposalSpec.for_file(prefix, f.name, url=str(f), sha="", sort_index=index)
            for index, f in enumerate(files)
        ]

    source_info = _read_json(path / SOURCE_INFO_FILE)
    branch = BranchInfo.from_json_dict(source_info) if source_info else None

    previous = None
    previous_path = path / PREVIOUS_RESULTS_FILE
    if not ignore_previous and previous_path.exists():
        try:
            previous = parse_previous_results(previous_path.read_text(encoding="utf-8"))
        except SourceError as e:
            raise SnapshotError(str(e)) from e

    expected = None
    expected_data = _read_json(path / EXPECTED_RESULTS_FILE)
    if expected_data is not None:
        try:
            expected = EvolutionMetadata.model_validate(expected_data)
        except ValidationError as e:
            raise SnapshotError(f"Invalid {EXPECTED_RESULTS_FILE}: {e}") from e

    logger.info(
        "Snapshot %s: %d proposals, listing %s, previous results %s",
        path.name, len(specs),
        "found" if listing is not None else "not found",
        "found" if previous is not None else "not used",
    )
    return Snapshot(path=path, specs=specs, listing=listing, branch=branch, previous=previous, expected=expected)


def _write_json(path: Path, data: Any) -> None:
    path.write_text(json.dumps(data, indent=2, sort_keys=True) + "\n", encoding="utf-8")


def snapshot_path(destination: Path) -> Path:
    destination = Path(destination)
    if destination.suffix != SNAPSHOT_SUFFIX:
        destination = destination.with_name(destination.name + SNAPSHOT_SUFFIX)
    return destination


def write_snapshot(
    destination: Path,
    proposals_dir: Path,
    results: EvolutionMetadata,
    listing: list[dict] | None = None,
    branch: BranchInfo | None = None,
    previous: list[Proposal] | None = None,
) -> Path:
    """Write a new snapshot; refuses to overwrite an existing one."""
    destination = snapshot_path(destination)
    if destination.exists():
        raise SnapshotError(f"Snapshot already exists: {destination}")

    destination.mkdir(parents=True)
    shutil.copytree(proposals_dir, destination / PROPOSALS_DIR)
    if branch is not None:
        _write_json(destination / SOURCE_INFO_FILE, branch.to_json_dict())
    if listing:
        _write_json(destination / LISTING_FILE, listing)
    if previous:
        _write_json(destination / PREVIOUS_RESULTS_FILE, [p.to_json_dict() for p in previous])
    _write_json(destination / EXPECTED_RESULTS_FILE, results.to_json_dict())
    logger.info("Wrote snapshot %s", destination)
    return destination
