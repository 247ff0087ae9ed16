"""snapshot: capture proposals and their extraction results for testing."""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import List, Optional

import typer

from evo.cli._shared import PROJECT_OPTION, VERBOSE_OPTION, resolve_project, resolve_workers
from evo.core.job import ExtractionJob, JobError
from evo.core.snapshot import SnapshotError, write_snapshot
from evo.sources.base import SourceError
from evo.utils.output import error, setup_logging, success


def snapshot_command(
    files: Optional[List[Path]] = typer.Argument(None, help="Proposal files or directories"),
    output_path: Optional[Path] = typer.Option(
        None, "--output-path", "-o", help="Snapshot directory to create"
    ),
    snapshot_path: Optional[Path] = typer.Option(
        None, "--snapshot-path", help="Build from an existing .evosnapshot directory"
    ),
    pull: Optional[int] = typer.Option(None, "--pull", help="Snapshot proposals changed by a pull request"),
    project_name: Optional[str] = PROJECT_OPTION,
    workers: Optional[int] = typer.Option(None, "--workers", "-j", help="Parallel extractions"),
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Write a .evosnapshot directory: inputs plus results as expected results."""
    setup_logging(verbose)
    project = resolve_project(project_name)
    destination = output_path or Path.cwd() / project.key

    # Every document is fetched so the snapshot holds all of them
    options = {"force_all": True, "max_workers": resolve_workers(workers)}
    try:
        if files:
            job = ExtractionJob.from_files(project, files, **options)
        elif snapshot_path is not None:
            job = ExtractionJob.from_snapshot(snapshot_path, project, **options)
        elif pull is not None:
            job = ExtractionJob.from_pull_request(project, pull, **options)
        else:
            job = ExtractionJob.from_network(project, **options)

        with tempfile.TemporaryDirectory() as tmp:
            proposals_dir = Path(tmp)
            results = job.run(archive_dir=proposals_dir)
            written = write_snapshot(
                destination,
                proposals_dir,
                results,
                listing=job.listing,
                branch=job.branch,
                previous=job.previous,
            )
    except (JobError, SourceError, SnapshotError) as e:
        error(str(e))
        raise typer.Exit(1)

    success(f"Wrote snapshot of {len(results.proposals)} proposals to {written}")
